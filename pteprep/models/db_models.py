# pteprep/models/db_models.py
from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import JSON, Column, Field, SQLModel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Attempt(SQLModel, table=True):
    """Append-only history: one scored answer."""
    __tablename__ = "attempts"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(index=True)
    question_id: str = Field(index=True)
    question_type: str = Field(index=True)
    section: str
    response_text: Optional[str] = None

    total_score: int
    max_score: int
    percentage: int
    traits: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))
    feedback: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))
    skill_contributions: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))

    source: str
    status: str
    model_name: Optional[str] = None
    duration_seconds: Optional[float] = None
    created_at: datetime = Field(default_factory=_utcnow, index=True)


class Subscription(SQLModel, table=True):
    __tablename__ = "subscriptions"

    user_id: str = Field(primary_key=True)
    tier: str = "free"
    updated_at: datetime = Field(default_factory=_utcnow)


class DailyUsage(SQLModel, table=True):
    """Scoring calls made by a user on one day of the reference timezone."""
    __tablename__ = "daily_usage"
    __table_args__ = (UniqueConstraint("user_id", "usage_date", name="uq_daily_usage_user_date"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(index=True)
    usage_date: date
    used: int = 0
    updated_at: datetime = Field(default_factory=_utcnow)
