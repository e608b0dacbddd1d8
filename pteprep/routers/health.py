from fastapi import APIRouter

from pteprep.core.settings import settings

router = APIRouter(prefix="", tags=["health"])


@router.get("/health")
def health():
    return {
        "ok": True,
        "llm_configured": settings.LLM_configured,
        "model": settings.OPENAI_MODEL,
        "openai_key": settings.masked_openai_key(),
    }
