import pytest

from pteprep.core.aggregate import (
    aggregate,
    empty_result,
    fallback_result,
    generative_result,
    limit_result,
    objective_result,
)
from pteprep.core.parsing import ParsedJudgement
from pteprep.core.question_types import QuestionType, is_generative, max_score_for, required_traits

GENERATIVE = [qt for qt in QuestionType if is_generative(qt)]


def test_weighted_blend_for_read_aloud():
    # 0.4*90 + 0.3*60 + 0.3*60 = 72 -> 72 * 15 / 90 = 12
    assert aggregate({"content": 90, "fluency": 60, "pronunciation": 60}, QuestionType.READ_ALOUD) == 12


def test_essay_weights_are_normalized():
    traits = {"content": 90, "form": 90, "grammar": 90, "vocabulary": 90, "structure": 90}
    assert aggregate(traits, QuestionType.WRITE_ESSAY) == 26
    traits["content"] = 0
    # content carries 3 of 11 parts
    assert aggregate(traits, QuestionType.WRITE_ESSAY) == round(90 * 8 / 11 * 26 / 90)


@pytest.mark.parametrize("qt", GENERATIVE)
@pytest.mark.parametrize("level", [0, 45, 90])
def test_totals_stay_within_bounds(qt, level):
    traits = {name: level for name in required_traits(qt)}
    result = generative_result(ParsedJudgement(traits=traits, confidence=0.9), qt)
    assert 0 <= result.total_score <= max_score_for(qt)
    assert result.percentage == round(result.total_score / result.max_score * 100)
    if level == 90:
        assert result.total_score == max_score_for(qt)
    if level == 0:
        assert result.total_score == 0


def test_low_confidence_flags_review_only_for_reviewed_types():
    essay = generative_result(
        ParsedJudgement(traits={"content": 60, "form": 60, "grammar": 60, "vocabulary": 60, "structure": 60},
                        confidence=0.5),
        QuestionType.WRITE_ESSAY,
    )
    assert essay.needs_review
    dictation = generative_result(
        ParsedJudgement(traits={"content": 60, "grammar": 60, "vocabulary": 60}, confidence=0.5),
        QuestionType.WRITE_FROM_DICTATION,
    )
    assert not dictation.needs_review


def test_fallback_is_labelled_and_not_ai():
    r = fallback_result(QuestionType.DESCRIBE_IMAGE)
    assert r.source == "fallback"
    assert r.ai_available is False
    assert r.confidence == 0.0
    assert set(r.traits.values()) == {45}
    assert r.overall_feedback.startswith("AI analysis unavailable")


def test_empty_limit_and_objective_results():
    assert empty_result(QuestionType.WRITE_ESSAY).total_score == 0
    assert empty_result(QuestionType.WRITE_ESSAY).source == "validation"
    assert limit_result(QuestionType.READ_ALOUD, "limit").source == "limit"
    perfect = objective_result(2, QuestionType.MC_MULTIPLE)
    assert perfect.percentage == 100
    assert perfect.strengths == ["Perfect answer!"]
    assert objective_result(9, QuestionType.MC_SINGLE).total_score == 1
