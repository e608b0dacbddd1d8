import pytest

from pteprep.core.errors import ParseFailure
from pteprep.core.parsing import extract_json_object, parse_model_output
from pteprep.core.question_types import QuestionType


def test_json_inside_prose_and_fences():
    text = 'Here is my evaluation:\n```json\n{"traitScores": {"content": 70}}\n```\nThanks!'
    assert extract_json_object(text) == {"traitScores": {"content": 70}}


def test_braces_before_the_object_are_skipped():
    text = 'Scores {not json} follow: {"content": 60, "fluency": 50, "pronunciation": 40}'
    data = extract_json_object(text)
    assert data["content"] == 60


@pytest.mark.parametrize("text", [None, "", "no json here", "[1, 2, 3]", "{broken"])
def test_no_object_is_a_parse_failure(text):
    with pytest.raises(ParseFailure):
        extract_json_object(text)


def test_traits_are_clamped_to_scale():
    j = parse_model_output(
        '{"traitScores": {"content": 120, "fluency": -5, "pronunciation": "77"}}',
        QuestionType.READ_ALOUD,
    )
    assert j.traits == {"content": 90, "fluency": 0, "pronunciation": 77}
    assert j.defaulted == []


def test_missing_trait_defaults_to_midpoint():
    j = parse_model_output('{"content": {"score": 80}, "fluencyScore": 60}', QuestionType.RETELL_LECTURE)
    assert j.traits == {"content": 80, "fluency": 60, "pronunciation": 45}
    assert j.defaulted == ["pronunciation"]


def test_no_required_trait_at_all_is_a_parse_failure():
    with pytest.raises(ParseFailure) as exc:
        parse_model_output('{"overallFeedback": "nice"}', QuestionType.WRITE_ESSAY)
    assert exc.value.raw == '{"overallFeedback": "nice"}'


def test_feedback_defaults_and_nested_analysis():
    j = parse_model_output(
        '{"traitScores": {"content": 50, "grammar": 50, "vocabulary": 50},'
        ' "detailedAnalysis": {"strengths": "Good spelling"}, "confidence": 3}',
        QuestionType.WRITE_FROM_DICTATION,
    )
    assert j.strengths == ["Good spelling"]
    assert j.improvements == ["Continue practicing"]
    assert j.tips == ["Practice regularly"]
    assert j.confidence == 1.0


def test_confidence_defaults_when_absent():
    j = parse_model_output('{"content": 10, "form": 10, "grammar": 10, "vocabulary": 10}',
                           QuestionType.SUMMARIZE_WRITTEN_TEXT)
    assert j.confidence == 0.85


@pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity", "1e400", "1" + "0" * 400])
def test_non_finite_numbers_default_to_midpoint(literal):
    j = parse_model_output(
        '{"content": %s, "fluency": 60, "pronunciation": 60}' % literal,
        QuestionType.READ_ALOUD,
    )
    assert j.traits == {"content": 45, "fluency": 60, "pronunciation": 60}
    assert j.defaulted == ["content"]


def test_non_finite_confidence_uses_default():
    j = parse_model_output('{"content": 70, "fluency": 70, "pronunciation": 70, "confidence": NaN}',
                           QuestionType.READ_ALOUD)
    assert j.confidence == 0.85


def test_only_non_finite_traits_is_a_parse_failure():
    with pytest.raises(ParseFailure):
        parse_model_output('{"content": NaN, "fluency": Infinity, "pronunciation": 1e400}',
                           QuestionType.READ_ALOUD)
