# pteprep/routers/score.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from sqlmodel import Session
from starlette.concurrency import run_in_threadpool

from pteprep.core import llm
from pteprep.core.db import get_session
from pteprep.core.pipeline import LIMIT_REACHED, ModelCaller, record_attempt, score_answer
from pteprep.core.security import require_user_id
from pteprep.core.settings import settings
from pteprep.data.questions import get_question
from pteprep.models.schemas import AnswerIn

logger = logging.getLogger("pteprep.api")

router = APIRouter(prefix="", tags=["score"])


def get_model_caller() -> Optional[ModelCaller]:
    """The scoring model, or None when no OPENAI_API_KEY is set."""
    return llm.complete if settings.LLM_configured else None


@router.post("/score/{question_id}")
async def score(
    question_id: str,
    answer: AnswerIn,
    request: Request,
    user_id: str = Depends(require_user_id),
    call_model: Optional[ModelCaller] = Depends(get_model_caller),
    session: Session = Depends(get_session),
):
    question = get_question(question_id)
    if question is None:
        raise HTTPException(status_code=404, detail=f"Unknown question '{question_id}'")

    # model call is blocking; keep it off the event loop
    outcome = await run_in_threadpool(
        score_answer,
        question,
        answer,
        session=session,
        user_id=user_id,
        call_model=call_model,
    )

    if await request.is_disconnected():
        # the client left: nothing is shown, so nothing is recorded
        logger.info("client disconnected before result user=%s question=%s", user_id, question_id)
    else:
        row = record_attempt(session, user_id, question, answer, outcome, model_name=llm.model_name())
        if row is not None:
            outcome = outcome.model_copy(update={"attempt_id": row.id})

    logger.info(
        "scored user=%s question=%s status=%s total=%s/%s source=%s",
        user_id, question_id, outcome.status,
        outcome.result.total_score, outcome.result.max_score, outcome.result.source,
    )
    status_code = 429 if outcome.status == LIMIT_REACHED else 200
    return JSONResponse(status_code=status_code, content=outcome.model_dump(by_alias=True, mode="json"))
