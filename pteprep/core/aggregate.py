# pteprep/core/aggregate.py
"""Blend trait scores into a type total and build every kind of displayable result."""
from __future__ import annotations

from typing import Dict, List, Optional

from pteprep.core.parsing import ParsedJudgement
from pteprep.core.question_types import (
    TRAIT_MAX,
    TRAIT_MIDPOINT,
    QuestionType,
    normalized_weights,
    required_traits,
    spec_for,
)
from pteprep.models.schemas import ScoreResult

REVIEW_CONFIDENCE = 0.8
AI_UNAVAILABLE = "AI analysis unavailable"


def percentage(total: int, max_score: int) -> int:
    return round(total / max_score * 100)


def clamp_total(total: int, max_score: int) -> int:
    return max(0, min(max_score, total))


def aggregate(traits: Dict[str, int], question_type: QuestionType) -> int:
    """Blend 0..90 trait scores into the type's total.

    total = round(sum(trait * w) / sum(w) * max / 90), clamped to [0, max].
    """
    max_score = spec_for(question_type).max_score
    weights = normalized_weights(question_type)
    if not weights:
        return 0
    blended = sum(traits.get(name, 0) * w for name, w in weights.items())
    return clamp_total(round(blended * max_score / TRAIT_MAX), max_score)


def _result(
    question_type: QuestionType,
    total: int,
    *,
    traits: Optional[Dict[str, int]] = None,
    strengths: Optional[List[str]] = None,
    improvements: Optional[List[str]] = None,
    tips: Optional[List[str]] = None,
    overall_feedback: str = "",
    confidence: float = 1.0,
    source: str,
    ai_available: bool = True,
    needs_review: bool = False,
) -> ScoreResult:
    spec = spec_for(question_type)
    total = clamp_total(total, spec.max_score)
    return ScoreResult(
        total_score=total,
        max_score=spec.max_score,
        percentage=percentage(total, spec.max_score),
        traits=traits or {},
        strengths=strengths or [],
        improvements=improvements or [],
        tips=tips or [],
        overall_feedback=overall_feedback,
        confidence=confidence,
        source=source,
        ai_available=ai_available,
        needs_review=needs_review,
        skill_contributions=dict(spec.skill_contributions),
    )


def generative_result(judgement: ParsedJudgement, question_type: QuestionType) -> ScoreResult:
    spec = spec_for(question_type)
    total = aggregate(judgement.traits, question_type)
    return _result(
        question_type,
        total,
        traits=dict(judgement.traits),
        strengths=judgement.strengths,
        improvements=judgement.improvements,
        tips=judgement.tips,
        overall_feedback=judgement.overall_feedback
        or f"You scored {total} out of {spec.max_score}.",
        confidence=judgement.confidence,
        source="llm",
        needs_review=spec.human_review and judgement.confidence < REVIEW_CONFIDENCE,
    )


def objective_result(total: int, question_type: QuestionType) -> ScoreResult:
    max_score = spec_for(question_type).max_score
    total = clamp_total(total, max_score)
    if total == max_score:
        strengths, improvements = ["Perfect answer!"], []
        overall = "Excellent work! You answered correctly."
    else:
        strengths = ["Some correct answers"] if total > 0 else []
        improvements = ["Review incorrect answers"]
        overall = f"You scored {total} out of {max_score}. Review the correct answers and try again."
    return _result(
        question_type,
        total,
        strengths=strengths,
        improvements=improvements,
        tips=["Practice more questions of this type"],
        overall_feedback=overall,
        source="objective",
    )


def empty_result(question_type: QuestionType, message: str = "No response was given") -> ScoreResult:
    """Zero score for an answer without content. The weighting formula is not used."""
    traits = {name: 0 for name in required_traits(question_type)}
    return _result(
        question_type,
        0,
        traits=traits,
        improvements=[message],
        tips=["Make sure your response is recorded or typed before submitting"],
        overall_feedback=message,
        source="validation",
    )


def fallback_result(question_type: QuestionType, reason: str = "the scoring service could not be reached") -> ScoreResult:
    """Midpoint result shown when the model could not judge the answer."""
    traits = {name: TRAIT_MIDPOINT for name in required_traits(question_type)}
    total = aggregate(traits, question_type)
    return _result(
        question_type,
        total,
        traits=traits,
        improvements=["Try scoring this response again later"],
        tips=["Your answer was saved; this score is an estimate"],
        overall_feedback=f"{AI_UNAVAILABLE}: {reason}. The score shown is a default estimate.",
        confidence=0.0,
        source="fallback",
        ai_available=False,
    )


def limit_result(question_type: QuestionType, message: str) -> ScoreResult:
    return _result(
        question_type,
        0,
        improvements=[message],
        tips=["Upgrade your plan for more daily scoring"],
        overall_feedback=message,
        confidence=0.0,
        source="limit",
        ai_available=False,
    )
