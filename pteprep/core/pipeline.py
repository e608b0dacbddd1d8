# pteprep/core/pipeline.py
"""Scoring pipeline: validate, gate, build request, call, parse, aggregate.

``score_answer`` never raises for a scoring failure: every path ends in a
``ScoreOutcome`` whose ``result`` can be displayed as is.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from sqlmodel import Session

from pteprep.core import aggregate, objective, quota
from pteprep.core.errors import (
    ParseFailure,
    QuotaExhausted,
    TransportFailure,
    ValidationFailure,
)
from pteprep.core.parsing import parse_model_output
from pteprep.core.prompts import build_request, validate_answer
from pteprep.core.question_types import Strategy
from pteprep.models.db_models import Attempt
from pteprep.models.schemas import AnswerIn, Question, ScoreOutcome

logger = logging.getLogger("pteprep.scoring")

# (system_prompt, user_prompt) -> raw model text
ModelCaller = Callable[[str, str], str]

SCORED = "scored"
LIMIT_REACHED = "limit_reached"
FAILED = "failed"


def score_objective(question: Question, answer: AnswerIn) -> ScoreOutcome:
    """Deterministic path: same answer, same result."""
    points, possible = objective.raw_points(question, answer)
    total = objective.rescale(points, possible, question.max_score)
    return ScoreOutcome(
        status=SCORED,
        question_id=question.id,
        question_type=question.type,
        result=aggregate.objective_result(total, question.type),
    )


def _limit_message(exc: QuotaExhausted) -> str:
    return (
        f"Daily scoring limit of {exc.limit} reached. "
        f"Try again after {exc.resets_at.strftime('%Y-%m-%d %H:%M UTC')} or upgrade your plan."
    )


def score_answer(
    question: Question,
    answer: AnswerIn,
    *,
    session: Session,
    user_id: str,
    call_model: Optional[ModelCaller],
    now: Optional[datetime] = None,
) -> ScoreOutcome:
    """Score one answer.

    ``call_model`` is None when no scoring model is configured; generative
    answers then get the labelled fallback and no quota is spent.
    """
    qt = question.type
    try:
        validate_answer(question, answer)
    except ValidationFailure as e:
        logger.debug("empty answer question=%s: %s", question.id, e)
        return ScoreOutcome(
            status=SCORED,
            question_id=question.id,
            question_type=qt,
            result=aggregate.empty_result(qt),
            error_kind=ValidationFailure.kind,
            message="No response was given, so this item scores 0.",
        )

    if question.strategy is Strategy.OBJECTIVE:
        return score_objective(question, answer)

    if call_model is None:
        logger.warning("scoring model not configured; fallback for question=%s", question.id)
        return ScoreOutcome(
            status=FAILED,
            question_id=question.id,
            question_type=qt,
            result=aggregate.fallback_result(qt, "the scoring model is not configured"),
            error_kind="ai_unavailable",
            message=aggregate.AI_UNAVAILABLE,
        )

    request = build_request(question, answer)

    decision = quota.try_consume(session, user_id, now=now)
    if not decision.allowed:
        exc = QuotaExhausted(decision.limit, decision.resets_at)
        msg = _limit_message(exc)
        return ScoreOutcome(
            status=LIMIT_REACHED,
            question_id=question.id,
            question_type=qt,
            result=aggregate.limit_result(qt, msg),
            error_kind=QuotaExhausted.kind,
            message=msg,
            quota=decision.info(),
        )

    raw = None
    try:
        raw = call_model(request.system_prompt, request.user_prompt)
        judgement = parse_model_output(raw, qt)
    except TransportFailure as e:
        logger.warning("model call failed kind=%s question=%s: %s", e.kind, question.id, e)
        return _failed(question, e.kind, decision)
    except ParseFailure as e:
        snippet = (e.raw or raw or "")[:500]
        logger.error("unparseable model output question=%s: %s raw=%r", question.id, e, snippet)
        return _failed(question, e.kind, decision)

    if judgement.defaulted:
        logger.info("traits defaulted question=%s traits=%s", question.id, judgement.defaulted)

    return ScoreOutcome(
        status=SCORED,
        question_id=question.id,
        question_type=qt,
        result=aggregate.generative_result(judgement, qt),
        quota=decision.info(),
    )


def _failed(question: Question, kind: str, decision: quota.UsageDecision) -> ScoreOutcome:
    return ScoreOutcome(
        status=FAILED,
        question_id=question.id,
        question_type=question.type,
        result=aggregate.fallback_result(question.type),
        error_kind=kind,
        message=aggregate.AI_UNAVAILABLE,
        quota=decision.info(),
    )


def record_attempt(
    session: Session,
    user_id: str,
    question: Question,
    answer: AnswerIn,
    outcome: ScoreOutcome,
    model_name: Optional[str] = None,
) -> Optional[Attempt]:
    """Append the outcome to the user's history. Quota refusals are not recorded."""
    if outcome.status == LIMIT_REACHED:
        return None
    r = outcome.result
    row = Attempt(
        user_id=user_id,
        question_id=question.id,
        question_type=question.type.value,
        section=question.section.value,
        response_text=answer.rendering(question.type),
        total_score=r.total_score,
        max_score=r.max_score,
        percentage=r.percentage,
        traits=dict(r.traits),
        feedback={
            "strengths": r.strengths,
            "improvements": r.improvements,
            "tips": r.tips,
            "overallFeedback": r.overall_feedback,
            "errorKind": outcome.error_kind,
        },
        skill_contributions=dict(r.skill_contributions),
        source=r.source,
        status=outcome.status,
        model_name=model_name if r.source == "llm" else None,
        duration_seconds=answer.duration_seconds,
    )
    session.add(row)
    session.commit()
    session.refresh(row)
    return row
