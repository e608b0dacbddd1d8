from pteprep.core.objective import (
    FILL_BLANKS,
    raw_points,
    rescale,
    score_multiple_choice,
    score_reorder,
    score_single_choice,
)
from pteprep.core.pipeline import score_objective
from pteprep.core.question_types import QuestionType
from pteprep.data.questions import get_question
from pteprep.models.schemas import AnswerIn


def test_multi_select_wrong_choice_cancels_right_one():
    # correct {a, c}, selected {a, b}: 1 - 1 = 0
    q = get_question("mcm-1")
    out = score_objective(q, AnswerIn(selected_options=["a", "b"]))
    assert out.result.total_score == 0
    assert out.result.max_score == 2
    assert out.result.percentage == 0


def test_multi_select_full_and_floor():
    assert score_multiple_choice(["a", "c"], ["a", "c"]) == (2, 2)
    assert score_multiple_choice(["b", "d"], ["a", "c"]) == (0, 2)
    assert score_multiple_choice(["a", "a"], ["a", "c"]) == (1, 2)


def test_reorder_counts_adjacent_pairs_present_in_key():
    # pairs submitted: p1-p2 ok, p2-p4 no, p4-p3 no, p3-p5 no.
    # The worked example that quotes 2/4 for this order is not followed on purpose:
    # under the adjacent-pair rule only p1-p2 counts, so 1/4 is the expected result.
    assert score_reorder(["p1", "p2", "p4", "p3", "p5"], ["p1", "p2", "p3", "p4", "p5"]) == (1, 4)
    q = get_question("rop-1")
    out = score_objective(q, AnswerIn(ordered_items=["p1", "p2", "p4", "p3", "p5"]))
    assert out.result.total_score == 1
    assert out.result.max_score == 4
    assert out.result.percentage == 25


def test_reorder_perfect_and_reversed():
    key = ["p1", "p2", "p3", "p4", "p5"]
    assert score_reorder(key, key) == (4, 4)
    assert score_reorder(list(reversed(key)), key) == (0, 4)


def test_single_choice_uses_first_selection():
    assert score_single_choice(["b"], ["b"]) == (1, 1)
    assert score_single_choice(["a", "b"], ["b"]) == (0, 1)
    assert score_single_choice([], ["b"]) == (0, 1)


def test_blanks_are_case_and_space_insensitive():
    q = get_question("fbl-1")
    answer = AnswerIn(blank_answers={
        "b1": " Acidification ",
        "b2": "reactions",
        "b3": "carbon",
        "b4": "VULNERABLE",
    })
    assert raw_points(q, answer) == (3, 5)
    assert score_objective(q, answer).result.total_score == 3


def test_blanks_as_ordered_list():
    q = get_question("fbg-1")
    answer = AnswerIn(selected_options=["models", "data", "never", "collaboration", "simple"])
    assert raw_points(q, answer) == (3, 5)


def test_rescale_onto_type_maximum():
    assert rescale(3, 3, 4) == 4
    assert rescale(1, 3, 4) == 1
    assert rescale(0, 3, 4) == 0
    assert rescale(2, 0, 4) == 0


def test_objective_scoring_is_repeatable():
    q = get_question("hiw-1")
    answer = AnswerIn(selected_options=["w5", "w8", "w2"])
    first = score_objective(q, answer)
    second = score_objective(q, answer)
    assert first == second
    # 3 correct words: 2 hits - 1 miss = 1 of 3, rescaled to max 4
    assert first.result.total_score == 1


def test_fill_blank_emptiness_follows_the_type_table():
    for qt in FILL_BLANKS:
        assert AnswerIn(blank_answers={"b1": "  "}).is_empty(qt)
        assert not AnswerIn(blank_answers={"b1": "models"}).is_empty(qt)
        assert not AnswerIn(selected_options=["models"]).is_empty(qt)
    # a multiple-choice type is judged on its selections, not on blanks
    assert AnswerIn(blank_answers={"b1": "models"}).is_empty(QuestionType.MC_MULTIPLE)
