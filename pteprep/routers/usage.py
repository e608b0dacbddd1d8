# pteprep/routers/usage.py
from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from pteprep.core import quota
from pteprep.core.db import get_session
from pteprep.core.security import require_user_id, verify_api_key
from pteprep.models.schemas import TierIn

router = APIRouter(prefix="", tags=["usage"])


@router.get("/usage")
def usage(user_id: str = Depends(require_user_id), session: Session = Depends(get_session)):
    status = quota.usage_status(session, user_id)
    return status.info().model_dump(by_alias=True, mode="json")


@router.put("/subscriptions/{user_id}", dependencies=[Depends(verify_api_key)])
def set_subscription(user_id: str, payload: TierIn, session: Session = Depends(get_session)):
    try:
        sub = quota.set_tier(session, user_id, payload.tier.strip().lower())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {
        "ok": True,
        "userId": sub.user_id,
        "tier": sub.tier,
        "dailyLimit": quota.TIER_LIMITS[sub.tier],
    }
