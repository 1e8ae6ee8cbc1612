"""FastAPI application for the HTML styles cleaner.

Exports ``app`` for use with ``uvicorn main:app``.
"""

import json
import logging
import traceback
from pathlib import Path

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse, StreamingResponse

# Load .env next to this file so CLEANER_* settings are set
load_dotenv(Path(__file__).resolve().parent / ".env")

from cleaner.service import (
    GENERIC_ERROR_MESSAGE,
    InputTooLargeError,
    check_input_size,
    iter_clean_events,
    run_clean,
)
from models.request import CleanRequest
from models.response import CleanResponse
from settings import Settings, get_settings


# ---------------------------------------------------------------------------
# Structured JSON logging
# ---------------------------------------------------------------------------

class StructuredFormatter(logging.Formatter):
    """JSON-lines formatter for structured log output."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # Include optional extra fields when present
        for key in ("mode", "input_chars", "output_chars", "path"):
            val = getattr(record, key, None)
            if val is not None:
                log_data[key] = val
        if record.exc_info and record.exc_info[0] is not None:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data)


_handler = logging.StreamHandler()
_handler.setFormatter(StructuredFormatter())

logger = logging.getLogger("cleaner")
logger.addHandler(_handler)
logger.setLevel(get_settings().log_level)
# Prevent propagation to root logger to avoid duplicate output
logger.propagate = False


# ---------------------------------------------------------------------------
# FastAPI application
# ---------------------------------------------------------------------------

app = FastAPI(title="HTML Styles Cleaner")


@app.exception_handler(InputTooLargeError)
async def input_too_large_handler(request: Request, exc: InputTooLargeError) -> JSONResponse:
    """Reject oversized markup with 413."""
    logger.warning("%s", exc, extra={"path": request.url.path})
    return JSONResponse(status_code=413, content={"error": str(exc)})


@app.exception_handler(Exception)
async def catch_all_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected parser/serializer failures and return a generic 500."""
    logger.error(
        "Unhandled exception: %s: %s\n%s",
        type(exc).__name__,
        exc,
        traceback.format_exc(),
        extra={"path": request.url.path},
    )
    return JSONResponse(status_code=500, content={"error": GENERIC_ERROR_MESSAGE})


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@app.get("/health")
async def health() -> dict:
    """Health check."""
    return {"status": "healthy"}


@app.post("/clean", response_model=CleanResponse)
async def clean_endpoint(
    request: CleanRequest, settings: Settings = Depends(get_settings)
) -> CleanResponse:
    """Clean markup, picking blocking or chunked mode by input length."""
    return await run_clean(request, settings)


@app.post("/clean/stream")
async def clean_stream(
    request: CleanRequest, settings: Settings = Depends(get_settings)
) -> StreamingResponse:
    """Clean markup in chunked mode, streaming NDJSON progress events.

    Each line is one JSON object: ``progress`` events at chunk boundaries,
    then a single ``result`` (or ``error``) event.
    """
    check_input_size(request, settings)

    async def _lines():
        async for event in iter_clean_events(request, settings):
            yield json.dumps(event) + "\n"

    return StreamingResponse(_lines(), media_type="application/x-ndjson")
