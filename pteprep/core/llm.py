# pteprep/core/llm.py
from __future__ import annotations

import logging
from typing import Optional

import httpx
import openai
from openai import OpenAI

from pteprep.core.errors import (
    ParseFailure,
    ProviderQuotaExceeded,
    RateLimited,
    TransportFailure,
)
from pteprep.core.settings import settings

logger = logging.getLogger("pteprep.llm")

_CLIENT: Optional[OpenAI] = None


def _get_client() -> OpenAI:
    """OpenAI v1 client with an explicit timeout and no automatic retries."""
    global _CLIENT
    if _CLIENT is None:
        http_client = httpx.Client(timeout=settings.OPENAI_TIMEOUT_SECONDS)
        _CLIENT = OpenAI(
            api_key=settings.OPENAI_API_KEY,
            base_url=settings.OPENAI_BASE_URL,
            http_client=http_client,
            max_retries=0,
        )
    return _CLIENT


def reset_client() -> None:
    global _CLIENT
    _CLIENT = None


def model_name() -> str:
    return settings.OPENAI_MODEL or "gpt-4o-mini"


def complete(system_prompt: str, user_prompt: str) -> str:
    """
    One chat-completion call; returns the raw text of the first choice.
    Failures are raised as TransportFailure (or its RateLimited /
    ProviderQuotaExceeded subtypes); an empty answer is a ParseFailure.
    """
    client = _get_client()
    kwargs = dict(
        model=model_name(),
        messages=[
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ],
        temperature=settings.OPENAI_TEMPERATURE,
        max_tokens=settings.OPENAI_MAX_TOKENS,
    )
    if settings.OPENAI_JSON_MODE:
        kwargs["response_format"] = {"type": "json_object"}

    try:
        resp = client.chat.completions.create(**kwargs)
    except openai.APITimeoutError as e:
        raise TransportFailure(f"model call timed out: {e}") from e
    except openai.APIConnectionError as e:
        raise TransportFailure(f"model unreachable: {e}") from e
    except openai.RateLimitError as e:
        raise RateLimited("model provider rate limit", status_code=429) from e
    except openai.APIStatusError as e:
        if e.status_code == 402:
            raise ProviderQuotaExceeded("model provider out of credits", status_code=402) from e
        raise TransportFailure(f"model call failed: HTTP {e.status_code}", status_code=e.status_code) from e
    except openai.APIError as e:
        # malformed provider response and other SDK errors without a status
        raise TransportFailure(f"model call failed: {type(e).__name__}") from e

    content = resp.choices[0].message.content if resp.choices else None
    if not content:
        raise ParseFailure("empty model response", raw=content)
    return content


def transcribe(data: bytes, filename: str) -> str:
    """Speech-to-text for a recorded answer; returns the plain transcript."""
    client = _get_client()
    try:
        resp = client.audio.transcriptions.create(
            model=settings.TRANSCRIBE_MODEL,
            file=(filename or "answer.webm", data),
        )
    except openai.APITimeoutError as e:
        raise TransportFailure(f"transcription timed out: {e}") from e
    except openai.APIConnectionError as e:
        raise TransportFailure(f"transcription service unreachable: {e}") from e
    except openai.RateLimitError as e:
        raise RateLimited("model provider rate limit", status_code=429) from e
    except openai.APIStatusError as e:
        raise TransportFailure(f"transcription failed: HTTP {e.status_code}", status_code=e.status_code) from e
    except openai.APIError as e:
        raise TransportFailure(f"transcription failed: {type(e).__name__}") from e

    text = (getattr(resp, "text", None) or "").strip()
    if not text:
        raise ParseFailure("empty transcript", raw=text)
    logger.debug("transcribed %s bytes into %s words", len(data), len(text.split()))
    return text
