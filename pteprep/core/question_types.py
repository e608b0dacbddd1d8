# pteprep/core/question_types.py
"""Question types and their scoring tables.

``QUESTION_TYPES`` is the only place that says, for a question type, which
section it belongs to, how it is scored, its maximum score, its trait
weights, its word-count bounds and which skills it feeds.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple

TRAIT_MIN = 0
TRAIT_MAX = 90
TRAIT_MIDPOINT = 45

TRAITS = ("content", "fluency", "pronunciation", "grammar", "vocabulary", "form", "structure")


class Section(str, Enum):
    SPEAKING = "speaking"
    WRITING = "writing"
    READING = "reading"
    LISTENING = "listening"


class Strategy(str, Enum):
    OBJECTIVE = "objective"
    GENERATIVE_SPEECH = "generative_speech"
    GENERATIVE_WRITING = "generative_writing"


class QuestionType(str, Enum):
    # speaking
    READ_ALOUD = "read-aloud"
    REPEAT_SENTENCE = "repeat-sentence"
    DESCRIBE_IMAGE = "describe-image"
    RETELL_LECTURE = "retell-lecture"
    ANSWER_SHORT_QUESTION = "answer-short-question"
    SUMMARISE_GROUP_DISCUSSION = "summarise-group-discussion"
    RESPOND_TO_SITUATION = "respond-to-situation"
    # writing
    SUMMARIZE_WRITTEN_TEXT = "summarize-written-text"
    WRITE_ESSAY = "write-essay"
    # reading
    MC_SINGLE = "mc-single"
    MC_MULTIPLE = "mc-multiple"
    REORDER_PARAGRAPHS = "reorder-paragraphs"
    FILL_BLANKS_DROPDOWN = "fill-blanks-dropdown"
    FILL_BLANKS_DRAG = "fill-blanks-drag"
    # listening
    SUMMARIZE_SPOKEN_TEXT = "summarize-spoken-text"
    MC_SINGLE_LISTENING = "mc-single-listening"
    MC_MULTIPLE_LISTENING = "mc-multiple-listening"
    FILL_BLANKS_LISTENING = "fill-blanks-listening"
    HIGHLIGHT_CORRECT_SUMMARY = "highlight-correct-summary"
    SELECT_MISSING_WORD = "select-missing-word"
    HIGHLIGHT_INCORRECT_WORDS = "highlight-incorrect-words"
    WRITE_FROM_DICTATION = "write-from-dictation"


@dataclass(frozen=True)
class QuestionTypeSpec:
    section: Section
    strategy: Strategy
    max_score: int
    weights: Dict[str, float] = field(default_factory=dict)
    word_bounds: Optional[Tuple[int, int]] = None
    skill_contributions: Dict[str, float] = field(default_factory=dict)
    human_review: bool = False


_SPEECH_STD = {"content": 0.5, "fluency": 0.25, "pronunciation": 0.25}
_SUMMARY_WRITING = {"content": 2, "form": 2, "grammar": 2, "vocabulary": 1}

QT = QuestionType
S = Section
ST = Strategy

QUESTION_TYPES: Dict[QuestionType, QuestionTypeSpec] = {
    QT.READ_ALOUD: QuestionTypeSpec(
        S.SPEAKING, ST.GENERATIVE_SPEECH, 15,
        weights={"content": 0.4, "fluency": 0.3, "pronunciation": 0.3},
        skill_contributions={"speaking": 0.5, "reading": 0.5}, human_review=True),
    QT.REPEAT_SENTENCE: QuestionTypeSpec(
        S.SPEAKING, ST.GENERATIVE_SPEECH, 13, weights=dict(_SPEECH_STD),
        skill_contributions={"speaking": 0.5, "listening": 0.5}),
    QT.DESCRIBE_IMAGE: QuestionTypeSpec(
        S.SPEAKING, ST.GENERATIVE_SPEECH, 15, weights=dict(_SPEECH_STD),
        skill_contributions={"speaking": 1.0}, human_review=True),
    QT.RETELL_LECTURE: QuestionTypeSpec(
        S.SPEAKING, ST.GENERATIVE_SPEECH, 16, weights=dict(_SPEECH_STD),
        skill_contributions={"speaking": 0.5, "listening": 0.5}, human_review=True),
    QT.ANSWER_SHORT_QUESTION: QuestionTypeSpec(
        S.SPEAKING, ST.GENERATIVE_SPEECH, 1,
        weights={"content": 0.8, "fluency": 0.1, "pronunciation": 0.1},
        skill_contributions={"speaking": 0.5, "listening": 0.5}),
    QT.SUMMARISE_GROUP_DISCUSSION: QuestionTypeSpec(
        S.SPEAKING, ST.GENERATIVE_SPEECH, 16, weights=dict(_SPEECH_STD),
        skill_contributions={"speaking": 0.55, "listening": 0.45}, human_review=True),
    QT.RESPOND_TO_SITUATION: QuestionTypeSpec(
        S.SPEAKING, ST.GENERATIVE_SPEECH, 13,
        weights={"content": 0.7, "fluency": 0.15, "pronunciation": 0.15},
        skill_contributions={"speaking": 1.0}, human_review=True),

    QT.SUMMARIZE_WRITTEN_TEXT: QuestionTypeSpec(
        S.WRITING, ST.GENERATIVE_WRITING, 12, weights=dict(_SUMMARY_WRITING),
        word_bounds=(5, 75), skill_contributions={"writing": 0.8, "reading": 0.2}, human_review=True),
    QT.WRITE_ESSAY: QuestionTypeSpec(
        S.WRITING, ST.GENERATIVE_WRITING, 26,
        weights={"content": 3, "form": 2, "grammar": 2, "vocabulary": 2, "structure": 2},
        word_bounds=(200, 300), skill_contributions={"writing": 1.0}, human_review=True),

    QT.MC_SINGLE: QuestionTypeSpec(S.READING, ST.OBJECTIVE, 1, skill_contributions={"reading": 1.0}),
    QT.MC_MULTIPLE: QuestionTypeSpec(S.READING, ST.OBJECTIVE, 2, skill_contributions={"reading": 1.0}),
    QT.REORDER_PARAGRAPHS: QuestionTypeSpec(S.READING, ST.OBJECTIVE, 4, skill_contributions={"reading": 1.0}),
    QT.FILL_BLANKS_DROPDOWN: QuestionTypeSpec(
        S.READING, ST.OBJECTIVE, 5, skill_contributions={"reading": 0.5, "writing": 0.5}),
    QT.FILL_BLANKS_DRAG: QuestionTypeSpec(S.READING, ST.OBJECTIVE, 5, skill_contributions={"reading": 1.0}),

    QT.SUMMARIZE_SPOKEN_TEXT: QuestionTypeSpec(
        S.LISTENING, ST.GENERATIVE_WRITING, 10, weights=dict(_SUMMARY_WRITING),
        word_bounds=(50, 70), skill_contributions={"listening": 0.5, "writing": 0.5}, human_review=True),
    QT.MC_SINGLE_LISTENING: QuestionTypeSpec(S.LISTENING, ST.OBJECTIVE, 1, skill_contributions={"listening": 1.0}),
    QT.MC_MULTIPLE_LISTENING: QuestionTypeSpec(S.LISTENING, ST.OBJECTIVE, 2, skill_contributions={"listening": 1.0}),
    QT.FILL_BLANKS_LISTENING: QuestionTypeSpec(
        S.LISTENING, ST.OBJECTIVE, 5, skill_contributions={"listening": 0.5, "writing": 0.5}),
    QT.HIGHLIGHT_CORRECT_SUMMARY: QuestionTypeSpec(
        S.LISTENING, ST.OBJECTIVE, 1, skill_contributions={"listening": 0.5, "reading": 0.5}),
    QT.SELECT_MISSING_WORD: QuestionTypeSpec(S.LISTENING, ST.OBJECTIVE, 1, skill_contributions={"listening": 1.0}),
    QT.HIGHLIGHT_INCORRECT_WORDS: QuestionTypeSpec(
        S.LISTENING, ST.OBJECTIVE, 4, skill_contributions={"listening": 0.5, "reading": 0.5}),
    QT.WRITE_FROM_DICTATION: QuestionTypeSpec(
        S.LISTENING, ST.GENERATIVE_WRITING, 12,
        weights={"content": 0.6, "grammar": 0.2, "vocabulary": 0.2},
        skill_contributions={"listening": 0.5, "writing": 0.5}),
}

# objective types answered with one entry per blank
FILL_BLANK_TYPES = frozenset({QT.FILL_BLANKS_DROPDOWN, QT.FILL_BLANKS_DRAG, QT.FILL_BLANKS_LISTENING})


def _check_tables() -> None:
    missing = [qt.value for qt in QuestionType if qt not in QUESTION_TYPES]
    if missing:
        raise RuntimeError(f"question types without a scoring entry: {missing}")
    for qt, spec in QUESTION_TYPES.items():
        generative = spec.strategy is not Strategy.OBJECTIVE
        if generative != bool(spec.weights):
            raise RuntimeError(f"{qt.value}: weights must be set exactly for generative types")
        unknown = set(spec.weights) - set(TRAITS)
        if unknown:
            raise RuntimeError(f"{qt.value}: unknown traits {sorted(unknown)}")


_check_tables()


def spec_for(question_type: QuestionType | str) -> QuestionTypeSpec:
    return QUESTION_TYPES[QuestionType(question_type)]


def strategy_for(question_type: QuestionType | str) -> Strategy:
    return spec_for(question_type).strategy


def max_score_for(question_type: QuestionType | str) -> int:
    return spec_for(question_type).max_score


def is_generative(question_type: QuestionType | str) -> bool:
    return strategy_for(question_type) is not Strategy.OBJECTIVE


def normalized_weights(question_type: QuestionType | str) -> Dict[str, float]:
    """Trait weights for a generative type, scaled to sum to 1."""
    weights = spec_for(question_type).weights
    total = float(sum(weights.values()))
    if total <= 0:
        return {}
    return {name: w / total for name, w in weights.items()}


def required_traits(question_type: QuestionType | str) -> Tuple[str, ...]:
    return tuple(spec_for(question_type).weights)
