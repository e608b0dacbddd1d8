import pytest

from pteprep.core.errors import ValidationFailure
from pteprep.core.prompts import build_request, output_schema, word_count
from pteprep.core.question_types import QuestionType, Strategy, required_traits
from pteprep.data.questions import all_questions, get_question
from pteprep.models.schemas import AnswerIn


def _answer_for(q, text="This is a reasonably complete response for testing purposes."):
    if q.strategy is Strategy.GENERATIVE_SPEECH:
        return AnswerIn(spoken_text=text)
    return AnswerIn(written_text=text)


@pytest.mark.parametrize("q", [q for q in all_questions() if q.strategy is not Strategy.OBJECTIVE],
                         ids=lambda q: q.id)
def test_every_generative_question_builds_a_request(q):
    req = build_request(q, _answer_for(q))
    assert req.question_type is q.type
    assert "RETURN ONLY this JSON" in req.user_prompt
    for trait in required_traits(q.type):
        assert f"\"{trait}\"" in req.output_schema
    assert "Weights used for the overall score" in req.user_prompt


def test_short_essay_still_builds_with_word_count_context():
    essay = get_question("we-1")
    text = "Qualifications matter, but character matters more in most workplaces today."
    req = build_request(essay, AnswerIn(written_text=text))
    assert req.word_count == word_count(text) == 10
    assert "Essay (10 words, required 200-300 words)" in req.user_prompt
    assert '"form"' in req.output_schema


def test_reference_material_reaches_the_prompt():
    q = get_question("sgd-1")
    req = build_request(q, AnswerIn(spoken_text="Anna likes remote work, Ben does not, Chloe wants hybrid."))
    assert "- Anna:" in req.user_prompt and "- Chloe:" in req.user_prompt
    asq = build_request(get_question("asq-1"), AnswerIn(spoken_text="a thermometer"))
    assert "thermometer" in asq.user_prompt
    assert asq.word_count is None


def test_blank_answer_is_rejected():
    with pytest.raises(ValidationFailure):
        build_request(get_question("we-1"), AnswerIn(written_text="   "))


def test_objective_types_have_no_request():
    with pytest.raises(ValueError):
        build_request(get_question("mcs-1"), AnswerIn(selected_options=["b"]))


def test_schema_lists_only_required_traits():
    schema = output_schema(QuestionType.WRITE_FROM_DICTATION)
    assert '"content"' in schema and '"grammar"' in schema
    assert '"fluency"' not in schema
