# pteprep/core/objective.py
"""Deterministic scoring against a known correct answer. No model call."""
from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from pteprep.core.question_types import FILL_BLANK_TYPES, QuestionType
from pteprep.models.schemas import AnswerIn, Blank, Question

QT = QuestionType

SINGLE_CHOICE = {QT.MC_SINGLE, QT.MC_SINGLE_LISTENING, QT.HIGHLIGHT_CORRECT_SUMMARY, QT.SELECT_MISSING_WORD}
MULTIPLE_CHOICE = {QT.MC_MULTIPLE, QT.MC_MULTIPLE_LISTENING, QT.HIGHLIGHT_INCORRECT_WORDS}
FILL_BLANKS = FILL_BLANK_TYPES


def score_single_choice(selected: Sequence[str], correct: Sequence[str]) -> Tuple[int, int]:
    if not correct:
        return 0, 1
    return (1 if selected and selected[0] == correct[0] else 0), 1


def score_multiple_choice(selected: Sequence[str], correct: Sequence[str]) -> Tuple[int, int]:
    """One point per correct selection, minus one per wrong selection, floored at 0."""
    correct_set = set(correct)
    chosen = list(dict.fromkeys(selected))
    hits = sum(1 for s in chosen if s in correct_set)
    misses = len(chosen) - hits
    return max(0, hits - misses), len(correct_set)


def score_reorder(submitted: Sequence[str], correct_order: Sequence[str]) -> Tuple[int, int]:
    """Count adjacent pairs of the submission that are also adjacent, in order, in the answer key."""
    correct_pairs = set(zip(correct_order, correct_order[1:]))
    pairs = sum(1 for pair in zip(submitted, submitted[1:]) if pair in correct_pairs)
    return pairs, max(0, len(correct_order) - 1)


def _norm(s: str | None) -> str:
    return (s or "").strip().lower()


def score_blanks(blank_answers: Dict[str, str], blanks: Sequence[Blank]) -> Tuple[int, int]:
    hits = sum(1 for b in blanks if _norm(blank_answers.get(b.id)) == _norm(b.correct_answer))
    return hits, len(blanks)


def score_positional(selected: Sequence[str], correct: Sequence[str]) -> Tuple[int, int]:
    """Fill-blank answers given as an ordered list instead of a map."""
    hits = sum(1 for s, c in zip(selected, correct) if _norm(s) == _norm(c))
    return hits, len(correct)


def raw_points(question: Question, answer: AnswerIn) -> Tuple[int, int]:
    """Return (points, possible points) for the item itself."""
    qt = question.type
    if qt in SINGLE_CHOICE:
        return score_single_choice(answer.selected_options, question.correct_answers)
    if qt in MULTIPLE_CHOICE:
        return score_multiple_choice(answer.selected_options, question.correct_answers)
    if qt is QT.REORDER_PARAGRAPHS:
        return score_reorder(answer.ordered_items, question.correct_order)
    if qt in FILL_BLANKS:
        if question.blanks and answer.blank_answers:
            return score_blanks(answer.blank_answers, question.blanks)
        key: List[str] = [b.correct_answer for b in question.blanks] or list(question.correct_answers)
        return score_positional(answer.selected_options, key)
    raise ValueError(f"{qt.value} is not an objective question type")


def rescale(points: int, possible: int, max_score: int) -> int:
    """Map item points onto the type's fixed maximum."""
    if possible <= 0 or points <= 0:
        return 0
    if possible == max_score:
        total = points
    else:
        total = round(points / possible * max_score)
    return max(0, min(max_score, total))
