# pteprep/main.py
from __future__ import annotations

import logging
import os

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from mangum import Mangum

# --- Settings / DB ---
from pteprep.core.db import init_db
from pteprep.core.settings import settings

# --- Routers ---
from pteprep.routers import health, history, mocktest, questions, score, transcribe, usage

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("pteprep.api")

# -----------------------------------------------------------------------------
# FastAPI app
# -----------------------------------------------------------------------------
API_PREFIX = "/api/pte"
ROOT_PATH = os.getenv("FASTAPI_ROOT_PATH", "")   # e.g. "/prod" behind API Gateway
BUILD_TAG = os.getenv("BUILD_TAG", "dev")

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    root_path=ROOT_PATH,
)

# -----------------------------------------------------------------------------
# CORS
# -----------------------------------------------------------------------------
ALLOWED_ORIGINS = [
    "http://127.0.0.1:5173", "http://localhost:5173",
    "http://127.0.0.1:8080", "http://localhost:8080",
]
LOCALHOST_REGEX = r"http://(localhost|127\.0\.0\.1):\d+$"

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.ALLOW_ALL_CORS else ALLOWED_ORIGINS,
    allow_origin_regex=".*" if settings.ALLOW_ALL_CORS else LOCALHOST_REGEX,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=86400,
)


# -----------------------------------------------------------------------------
# JSON UTF-8 middleware
# -----------------------------------------------------------------------------
@app.middleware("http")
async def force_utf8_content_type(request: Request, call_next):
    response = await call_next(request)
    ct = response.headers.get("content-type", "")
    if "application/json" in ct.lower() and "charset=" not in ct.lower():
        response.headers["content-type"] = "application/json; charset=utf-8"
    return response


# -----------------------------------------------------------------------------
# Register routers
# -----------------------------------------------------------------------------
app.include_router(questions.router,  prefix=API_PREFIX)
app.include_router(score.router,      prefix=API_PREFIX)
app.include_router(usage.router,      prefix=API_PREFIX)
app.include_router(history.router,    prefix=API_PREFIX)
app.include_router(transcribe.router, prefix=API_PREFIX)
app.include_router(mocktest.router,   prefix=API_PREFIX)
app.include_router(health.router,     prefix=API_PREFIX)


# -----------------------------------------------------------------------------
# Health
# -----------------------------------------------------------------------------
@app.get("/")
def root():
    return {
        "ok": True,
        "service": settings.PROJECT_NAME,
        "prefix": API_PREFIX,
        "docs": "/docs",
        "build": BUILD_TAG,
    }


@app.get("/healthz")
def healthz():
    return {"ok": True}


# -----------------------------------------------------------------------------
# Global exception handler
# -----------------------------------------------------------------------------
@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"ok": False, "error": "internal_error"},
    )


# -----------------------------------------------------------------------------
# Startup
# -----------------------------------------------------------------------------
@app.on_event("startup")
def on_startup():
    init_db()
    logger.info("started %s %s llm_configured=%s", settings.PROJECT_NAME, settings.VERSION, settings.LLM_configured)


# -----------------------------------------------------------------------------
# Lambda handler
# -----------------------------------------------------------------------------
handler = Mangum(app)
