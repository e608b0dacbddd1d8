# pteprep/core/quota.py
"""Per-user daily scoring quota.

The counter lives in ``daily_usage`` (one row per user and local day). A
call is admitted by a single conditional UPDATE that only succeeds while
``used < limit``, so two concurrent requests can never both pass the last
free slot. A new day in the reference timezone is a new row: that is the
reset.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from sqlalchemy import Date, DateTime, bindparam, text
from sqlmodel import Session

from pteprep.core.settings import settings
from pteprep.models.db_models import Subscription
from pteprep.models.schemas import QuotaInfo

logger = logging.getLogger("pteprep.quota")

AVAILABLE = "available"
EXHAUSTED = "exhausted"

TIER_LIMITS = {
    "free": 10,
    "basic": 50,
    "premium": 200,
    "enterprise": 1000,
}

_SELECT_USED = text(
    "SELECT used FROM daily_usage WHERE user_id = :u AND usage_date = :d"
).bindparams(bindparam("d", type_=Date))

_ENSURE_ROW = text(
    "INSERT INTO daily_usage (user_id, usage_date, used, updated_at) "
    "VALUES (:u, :d, 0, :ts) "
    "ON CONFLICT (user_id, usage_date) DO NOTHING"
).bindparams(bindparam("d", type_=Date), bindparam("ts", type_=DateTime))

# increment-and-compare in one statement
_CONSUME = text(
    "UPDATE daily_usage SET used = used + 1, updated_at = :ts "
    "WHERE user_id = :u AND usage_date = :d AND used < :lim"
).bindparams(bindparam("d", type_=Date), bindparam("ts", type_=DateTime))


@dataclass(frozen=True)
class UsageDecision:
    state: str
    tier: str
    used: int
    limit: int
    resets_at: datetime

    @property
    def allowed(self) -> bool:
        return self.state == AVAILABLE

    @property
    def remaining(self) -> int:
        return max(0, self.limit - self.used)

    def info(self) -> QuotaInfo:
        return QuotaInfo(
            state=self.state,
            tier=self.tier,
            used=self.used,
            limit=self.limit,
            remaining=self.remaining,
            resets_at=self.resets_at,
        )


def _tz() -> ZoneInfo:
    return ZoneInfo(settings.QUOTA_TIMEZONE or "UTC")


def _now(now: Optional[datetime]) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now


def local_day(now: Optional[datetime] = None) -> date:
    return _now(now).astimezone(_tz()).date()


def next_reset(now: Optional[datetime] = None) -> datetime:
    """Next local midnight, in UTC."""
    tz = _tz()
    day = _now(now).astimezone(tz).date() + timedelta(days=1)
    return datetime.combine(day, time.min, tzinfo=tz).astimezone(timezone.utc)


def tier_for(session: Session, user_id: str) -> str:
    sub = session.get(Subscription, user_id)
    tier = sub.tier if sub else settings.DEFAULT_TIER
    return tier if tier in TIER_LIMITS else "free"


def limit_for(session: Session, user_id: str) -> int:
    return TIER_LIMITS[tier_for(session, user_id)]


def set_tier(session: Session, user_id: str, tier: str) -> Subscription:
    if tier not in TIER_LIMITS:
        raise ValueError(f"unknown tier '{tier}'")
    sub = session.get(Subscription, user_id)
    if sub is None:
        sub = Subscription(user_id=user_id, tier=tier)
    else:
        sub.tier = tier
        sub.updated_at = datetime.now(timezone.utc)
    session.add(sub)
    session.commit()
    session.refresh(sub)
    return sub


def _read_used(session: Session, user_id: str, day: date) -> int:
    row = session.execute(_SELECT_USED, {"u": user_id, "d": day}).first()
    return int(row[0]) if row else 0


def usage_status(session: Session, user_id: str, now: Optional[datetime] = None) -> UsageDecision:
    """Report today's usage without consuming anything."""
    tier = tier_for(session, user_id)
    limit = TIER_LIMITS[tier]
    used = _read_used(session, user_id, local_day(now))
    return UsageDecision(
        state=AVAILABLE if used < limit else EXHAUSTED,
        tier=tier,
        used=used,
        limit=limit,
        resets_at=next_reset(now),
    )


def try_consume(session: Session, user_id: str, now: Optional[datetime] = None) -> UsageDecision:
    """Take one scoring call from today's quota, atomically.

    Returns an ``available`` decision when the call may go ahead (usage
    already incremented) and ``exhausted`` when the limit was reached
    (nothing changed).
    """
    tier = tier_for(session, user_id)
    limit = TIER_LIMITS[tier]
    day = local_day(now)
    stamp = _now(now)

    session.execute(_ENSURE_ROW, {"u": user_id, "d": day, "ts": stamp})
    res = session.execute(_CONSUME, {"u": user_id, "d": day, "ts": stamp, "lim": limit})
    session.commit()

    used = _read_used(session, user_id, day)
    if res.rowcount == 1:
        return UsageDecision(AVAILABLE, tier, used, limit, next_reset(now))

    logger.info("quota exhausted user=%s tier=%s used=%s limit=%s", user_id, tier, used, limit)
    return UsageDecision(EXHAUSTED, tier, used, limit, next_reset(now))
