"""FastAPI application for the transcript-rag API."""

import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ....common.exception_handler import (
    format_exception_json,
    get_http_status_code,
    log_exception,
)
from ....composition import container
from ....config.logging import setup_logging
from ....core.domain.exceptions import TranscriptRAGError
from .routers import ab_pairs, chat, documents, health

logger = logging.getLogger(__name__)

# Determine if we're in debug mode (shows full stack traces)
DEBUG_MODE = os.getenv("DEBUG", "false").lower() == "true"


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    settings = container.get_settings()
    setup_logging(settings.log_level, settings.log_file, settings.log_json)
    logger.info("transcript-rag API starting up...")
    logger.info(
        "Ollama at %s (chat %s, embeddings %s)",
        settings.ollama_base_url,
        settings.chat_model,
        settings.embedding_model,
    )
    logger.info("Debug mode: %s", "ENABLED" if DEBUG_MODE else "DISABLED")
    yield
    logger.info("transcript-rag API shutting down...")
    container.get_ollama_client().close()


app = FastAPI(
    title="transcript-rag API",
    description=(
        "Upload transcripts, ask grounded questions about them and compare "
        "A/B style-variant summaries."
    ),
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://localhost:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(documents.router)
app.include_router(chat.router)
app.include_router(ab_pairs.router)


# =============================================================================
# Global Exception Handlers
# =============================================================================


@app.exception_handler(TranscriptRAGError)
async def transcript_rag_error_handler(request: Request, exc: TranscriptRAGError) -> JSONResponse:
    """Return pipeline errors as structured JSON with a mapped status code."""
    log_exception(exc, extra_context={"path": str(request.url.path), "method": request.method})
    return JSONResponse(
        status_code=get_http_status_code(exc),
        content=exc.to_dict(include_trace=DEBUG_MODE),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return any unhandled exception as structured JSON."""
    log_exception(exc, extra_context={"path": str(request.url.path), "method": request.method})
    return JSONResponse(
        status_code=get_http_status_code(exc),
        content=format_exception_json(exc, include_trace=DEBUG_MODE),
    )


__all__ = ["app"]
