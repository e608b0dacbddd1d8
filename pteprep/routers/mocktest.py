# pteprep/routers/mocktest.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session
from starlette.concurrency import run_in_threadpool

from pteprep.core import llm
from pteprep.core.db import get_session
from pteprep.core.mocktest import TOTAL_DURATION_SECONDS, build_mock_test, mock_test_scores
from pteprep.core.pipeline import ModelCaller, record_attempt, score_answer
from pteprep.core.security import require_user_id
from pteprep.data.questions import all_questions, get_question
from pteprep.models.schemas import MockTestSubmission
from pteprep.routers.score import get_model_caller

logger = logging.getLogger("pteprep.api")

router = APIRouter(prefix="/mock-test", tags=["mock-test"])


@router.get("")
def mock_test(seed: Optional[int] = Query(None, description="fixes the item selection")):
    slots = build_mock_test(all_questions(), seed=seed)
    items = []
    for slot in slots:
        item = slot.question.public_view()
        item["part"] = slot.part
        item["timeLimit"] = slot.time_limit
        items.append(item)
    return {"ok": True, "count": len(items), "durationSeconds": TOTAL_DURATION_SECONDS, "items": items}


@router.post("/score")
async def score_mock_test(
    submission: MockTestSubmission,
    user_id: str = Depends(require_user_id),
    call_model: Optional[ModelCaller] = Depends(get_model_caller),
    session: Session = Depends(get_session),
):
    """Score every submitted answer, then convert the totals to 10..90 section scores."""
    pairs = []
    for entry in submission.answers:
        question = get_question(entry.question_id)
        if question is None:
            raise HTTPException(status_code=404, detail=f"Unknown question '{entry.question_id}'")
        pairs.append((question, entry.answer))

    outcomes = []
    for question, answer in pairs:
        outcome = await run_in_threadpool(
            score_answer,
            question,
            answer,
            session=session,
            user_id=user_id,
            call_model=call_model,
        )
        row = record_attempt(session, user_id, question, answer, outcome, model_name=llm.model_name())
        if row is not None:
            outcome = outcome.model_copy(update={"attempt_id": row.id})
        outcomes.append(outcome)

    scores = mock_test_scores(outcomes, submission.total_questions)
    logger.info(
        "mock test user=%s answered=%s overall=%s unscored=%s",
        user_id, scores.total_answered, scores.overall, scores.unscored,
    )
    return {
        "ok": True,
        "scores": scores.model_dump(by_alias=True, mode="json"),
        "outcomes": [o.model_dump(by_alias=True, mode="json") for o in outcomes],
    }
