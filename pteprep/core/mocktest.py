# pteprep/core/mocktest.py
"""Full mock test: item selection by a fixed layout and 10..90 section scores."""
from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from pteprep.core.question_types import QuestionType, Section, spec_for
from pteprep.models.schemas import MockTestScores, Question, ScoreOutcome, SectionScore

QT = QuestionType

PTE_MIN = 10
PTE_MAX = 90
TOTAL_DURATION_SECONDS = 139 * 60

# part -> (question type, item count, seconds per item)
MOCK_TEST_LAYOUT: List[Tuple[str, List[Tuple[QuestionType, int, int]]]] = [
    ("speaking", [
        (QT.READ_ALOUD, 6, 40),
        (QT.REPEAT_SENTENCE, 10, 15),
        (QT.DESCRIBE_IMAGE, 3, 40),
        (QT.RETELL_LECTURE, 2, 40),
        (QT.ANSWER_SHORT_QUESTION, 5, 10),
        (QT.SUMMARIZE_WRITTEN_TEXT, 1, 600),
        (QT.WRITE_ESSAY, 1, 1200),
    ]),
    ("reading", [
        (QT.MC_SINGLE, 2, 120),
        (QT.MC_MULTIPLE, 2, 150),
        (QT.REORDER_PARAGRAPHS, 2, 180),
        (QT.FILL_BLANKS_DRAG, 2, 180),
        (QT.FILL_BLANKS_DROPDOWN, 2, 180),
    ]),
    ("listening", [
        (QT.SUMMARIZE_SPOKEN_TEXT, 1, 600),
        (QT.MC_MULTIPLE_LISTENING, 2, 150),
        (QT.FILL_BLANKS_LISTENING, 2, 180),
        (QT.HIGHLIGHT_CORRECT_SUMMARY, 2, 180),
        (QT.MC_SINGLE_LISTENING, 2, 120),
        (QT.SELECT_MISSING_WORD, 2, 120),
        (QT.HIGHLIGHT_INCORRECT_WORDS, 2, 180),
        (QT.WRITE_FROM_DICTATION, 3, 60),
    ]),
]


@dataclass(frozen=True)
class MockTestSlot:
    part: str
    question: Question
    time_limit: int


def build_mock_test(catalog: Iterable[Question], seed: Optional[int] = None) -> List[MockTestSlot]:
    """Up to the layout's count of items per type, shuffled within each type."""
    rng = random.Random(seed)
    by_type: Dict[QuestionType, List[Question]] = {}
    for q in catalog:
        by_type.setdefault(q.type, []).append(q)

    slots: List[MockTestSlot] = []
    for part, entries in MOCK_TEST_LAYOUT:
        for qt, count, seconds in entries:
            pool = list(by_type.get(qt, []))
            rng.shuffle(pool)
            slots.extend(MockTestSlot(part, q, seconds) for q in pool[:count])
    return slots


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def pte_scale(earned: int, max_points: int) -> int:
    """Map earned / max onto 10..90; an empty section is 10."""
    if max_points <= 0:
        return PTE_MIN
    pct = max(0.0, min(1.0, earned / max_points))
    return _round_half_up(PTE_MIN + pct * (PTE_MAX - PTE_MIN))


def mock_test_scores(outcomes: Iterable[ScoreOutcome], total_questions: Optional[int] = None) -> MockTestScores:
    """
    Section and overall scores for a finished mock test.

    Items count toward the section of their question type, so the writing
    tasks of the speaking part land in writing. Outcomes refused by the daily
    limit carry no judgement and are reported as unscored instead.
    """
    sections = {s.value: SectionScore() for s in Section}
    answered = 0
    unscored = 0
    for out in outcomes:
        answered += 1
        if out.status == "limit_reached":
            unscored += 1
            continue
        sec = sections[spec_for(out.question_type).section.value]
        sec.earned += out.result.total_score
        sec.max_points += out.result.max_score
        sec.answered += 1

    for sec in sections.values():
        sec.score = pte_scale(sec.earned, sec.max_points)

    per = {name: sec.score for name, sec in sections.items()}
    overall = _round_half_up(sum(per.values()) / len(per))
    return MockTestScores(
        speaking=per[Section.SPEAKING.value],
        writing=per[Section.WRITING.value],
        reading=per[Section.READING.value],
        listening=per[Section.LISTENING.value],
        overall=overall,
        total_answered=answered,
        total_questions=total_questions if total_questions is not None else answered,
        unscored=unscored,
        sections=sections,
    )
