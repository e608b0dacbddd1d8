# pteprep/routers/history.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session, select

from pteprep.core.db import get_session
from pteprep.core.progress import progress_summary
from pteprep.core.question_types import QuestionType
from pteprep.core.security import require_user_id
from pteprep.models.db_models import Attempt
from pteprep.models.schemas import AttemptOut

router = APIRouter(prefix="", tags=["history"])


@router.get("/history")
def history(
    type: Optional[QuestionType] = Query(None, description="filter by question type"),
    limit: int = Query(50, ge=1, le=500),
    user_id: str = Depends(require_user_id),
    session: Session = Depends(get_session),
):
    stmt = select(Attempt).where(Attempt.user_id == user_id)
    if type is not None:
        stmt = stmt.where(Attempt.question_type == type.value)
    stmt = stmt.order_by(Attempt.created_at.desc(), Attempt.id.desc()).limit(limit)
    rows: List[Attempt] = session.exec(stmt).all()

    items = [AttemptOut.model_validate(r, from_attributes=True).model_dump(by_alias=True, mode="json") for r in rows]
    return {"ok": True, "userId": user_id, "items": items}


@router.get("/progress")
def progress(user_id: str = Depends(require_user_id), session: Session = Depends(get_session)):
    rows = session.exec(select(Attempt).where(Attempt.user_id == user_id)).all()
    return {"ok": True, "userId": user_id, **progress_summary(rows)}
