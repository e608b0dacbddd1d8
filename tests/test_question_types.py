import pytest

from pteprep.core.question_types import (
    QUESTION_TYPES,
    QuestionType,
    Section,
    Strategy,
    max_score_for,
    normalized_weights,
    required_traits,
    spec_for,
)
from pteprep.core.prompts import USER_TEMPLATES
from pteprep.data.questions import all_questions, get_question, questions_by_section


def test_every_type_has_an_entry():
    assert set(QUESTION_TYPES) == set(QuestionType)
    assert len(QuestionType) == 22


@pytest.mark.parametrize("qt", list(QuestionType))
def test_weights_exist_exactly_for_generative_types(qt):
    spec = spec_for(qt)
    if spec.strategy is Strategy.OBJECTIVE:
        assert normalized_weights(qt) == {}
        assert qt not in USER_TEMPLATES
    else:
        assert abs(sum(normalized_weights(qt).values()) - 1.0) < 1e-9
        assert qt in USER_TEMPLATES


def test_known_max_scores():
    assert max_score_for("read-aloud") == 15
    assert max_score_for("write-essay") == 26
    assert max_score_for("mc-multiple") == 2
    assert max_score_for("reorder-paragraphs") == 4
    assert max_score_for("write-from-dictation") == 12


def test_listening_writing_tasks_use_the_writing_strategy():
    assert spec_for(QuestionType.SUMMARIZE_SPOKEN_TEXT).section is Section.LISTENING
    assert spec_for(QuestionType.SUMMARIZE_SPOKEN_TEXT).strategy is Strategy.GENERATIVE_WRITING
    assert required_traits("write-from-dictation") == ("content", "grammar", "vocabulary")


def test_unknown_type_is_rejected():
    with pytest.raises(ValueError):
        spec_for("sing-a-song")


def test_catalog_covers_every_type():
    seen = {q.type for q in all_questions()}
    assert seen == set(QuestionType)


def test_catalog_lookup_and_grouping():
    essay = get_question("we-1")
    assert essay.min_words == 200 and essay.max_words == 300
    assert get_question("nope") is None
    grouped = questions_by_section()
    assert set(grouped) == {s.value for s in Section}
    assert all(q.section.value == name for name, qs in grouped.items() for q in qs)


def test_public_view_hides_answer_key():
    q = get_question("mcm-1")
    hidden = q.public_view()
    assert "correctAnswers" not in hidden
    assert hidden["maxScore"] == 2
    shown = q.public_view(include_correct=True)
    assert shown["correctAnswers"] == ["a", "c"]

    blanks = get_question("fbg-1").public_view()["blanks"]
    assert all("correctAnswer" not in b for b in blanks)
