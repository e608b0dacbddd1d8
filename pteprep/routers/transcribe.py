# pteprep/routers/transcribe.py
import logging

from fastapi import APIRouter, File, HTTPException, UploadFile
from starlette.concurrency import run_in_threadpool

from pteprep.core import llm
from pteprep.core.errors import ParseFailure, TransportFailure
from pteprep.core.settings import settings
from pteprep.models.schemas import TranscriptOut

logger = logging.getLogger("pteprep.api")

router = APIRouter(prefix="", tags=["transcribe"])


@router.post("/transcribe")
async def transcribe(file: UploadFile = File(...)):
    """Turn a recorded spoken answer into the text submitted for scoring."""
    if not settings.LLM_configured:
        raise HTTPException(status_code=503, detail="Transcription is not configured")

    data = await file.read()
    if not data:
        raise HTTPException(status_code=400, detail="empty audio file")
    if len(data) > settings.MAX_AUDIO_BYTES:
        raise HTTPException(status_code=413, detail="audio file too large")

    try:
        text = await run_in_threadpool(llm.transcribe, data, file.filename or "answer.webm")
    except TransportFailure as e:
        logger.warning("transcription failed kind=%s: %s", e.kind, e)
        raise HTTPException(status_code=502, detail="Transcription service unavailable")
    except ParseFailure:
        raise HTTPException(status_code=422, detail="No speech detected in the recording")

    out = TranscriptOut(text=text, model_name=settings.TRANSCRIBE_MODEL)
    return out.model_dump(by_alias=True)
