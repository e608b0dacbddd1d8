import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from pteprep.core import db
from pteprep.core.settings import settings


@pytest.fixture()
def engine():
    """Fresh in-memory SQLite database per test."""
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(eng)
    db.set_engine(eng)
    yield eng
    db.set_engine(None)
    eng.dispose()


@pytest.fixture()
def session(engine):
    with Session(engine) as s:
        yield s


@pytest.fixture()
def utc_quota(monkeypatch):
    monkeypatch.setattr(settings, "QUOTA_TIMEZONE", "UTC")
    monkeypatch.setattr(settings, "DEFAULT_TIER", "free")


class CountingModel:
    """Stands in for the scoring model: returns a canned reply and counts calls."""

    def __init__(self, reply=None, exc=None):
        self.reply = reply if reply is not None else (
            '{"traitScores": {"content": 90, "fluency": 90, "pronunciation": 90,'
            ' "form": 90, "grammar": 90, "vocabulary": 90, "structure": 90},'
            ' "confidence": 0.9, "strengths": ["Clear"], "improvements": ["Pace"],'
            ' "tips": ["Record yourself"], "overallFeedback": "Strong answer."}'
        )
        self.exc = exc
        self.calls = []

    def __call__(self, system_prompt, user_prompt):
        self.calls.append((system_prompt, user_prompt))
        if self.exc is not None:
            raise self.exc
        return self.reply


@pytest.fixture()
def model():
    return CountingModel()


@pytest.fixture()
def make_model():
    """Factory for models with a custom reply or a raised error."""
    return CountingModel


@pytest.fixture()
def client(engine, model, utc_quota):
    from pteprep.main import app
    from pteprep.routers.score import get_model_caller

    app.dependency_overrides[get_model_caller] = lambda: model
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
