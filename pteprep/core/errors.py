# pteprep/core/errors.py
"""Scoring error taxonomy.

Every failure on the scoring path is one of these. The pipeline turns each
of them into a displayable outcome; none of them reaches the HTTP client as
a raw exception.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional


class ScoringError(Exception):
    kind = "scoring_error"


class ValidationFailure(ScoringError):
    """The answer has no content for its question type."""
    kind = "validation_failure"


class QuotaExhausted(ScoringError):
    """The user's daily scoring limit is spent."""
    kind = "quota_exhausted"

    def __init__(self, limit: int, resets_at: datetime):
        self.limit = limit
        self.resets_at = resets_at
        super().__init__(f"daily scoring limit of {limit} reached; resets at {resets_at.isoformat()}")


class TransportFailure(ScoringError):
    """Network error, timeout or non-2xx answer from the model provider."""
    kind = "transport_failure"

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class RateLimited(TransportFailure):
    kind = "rate_limited"


class ProviderQuotaExceeded(TransportFailure):
    """The provider account is out of credits (HTTP 402)."""
    kind = "provider_quota_exceeded"


class ParseFailure(ScoringError):
    """The model answered but its text does not hold the expected JSON."""
    kind = "parse_failure"

    def __init__(self, message: str, raw: Optional[str] = None):
        self.raw = raw
        super().__init__(message)
