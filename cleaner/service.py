"""Request-level orchestration around the cleaning engine.

Chooses blocking or chunked mode by input length, records character
statistics, and turns progress callbacks into a stream of events.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from typing import Any, Optional

from cleaner.engine import clean, clean_async
from models.request import CleanRequest
from models.response import CleanResponse, ErrorEvent, ProgressEvent, ResultEvent
from parsing.traversal import ProgressCallback
from settings import Settings

logger = logging.getLogger("cleaner")

GENERIC_ERROR_MESSAGE = "Error processing HTML. The input may be malformed."

_DONE = object()


class InputTooLargeError(ValueError):
    """Raised when a request exceeds ``Settings.max_input_chars``."""

    def __init__(self, length: int, limit: int) -> None:
        super().__init__(f"Input of {length} characters exceeds the limit of {limit}")
        self.length = length
        self.limit = limit


def check_input_size(request: CleanRequest, settings: Settings) -> None:
    """Raise ``InputTooLargeError`` if the markup is over the configured cap."""
    length = len(request.html)
    if length > settings.max_input_chars:
        raise InputTooLargeError(length, settings.max_input_chars)


async def run_clean(
    request: CleanRequest,
    settings: Settings,
    on_progress: Optional[ProgressCallback] = None,
    *,
    force_chunked: bool = False,
) -> CleanResponse:
    """Clean one request.

    Inputs longer than ``settings.auto_convert_threshold`` (or any input
    when *force_chunked* is set) use the chunked traversal with
    *on_progress*; shorter ones use the blocking traversal.

    Raises:
        InputTooLargeError: If the markup exceeds ``settings.max_input_chars``.
    """
    check_input_size(request, settings)

    input_chars = len(request.html)
    if force_chunked or input_chars > settings.auto_convert_threshold:
        mode = "chunked"
        html = await clean_async(
            request.html,
            request.options,
            on_progress,
            chunk_size=settings.chunk_size,
        )
    else:
        mode = "blocking"
        html = clean(request.html, request.options)

    response = CleanResponse(
        html=html,
        mode=mode,
        input_chars=input_chars,
        output_chars=len(html),
    )
    logger.info(
        "clean complete",
        extra={
            "mode": mode,
            "input_chars": input_chars,
            "output_chars": response.output_chars,
        },
    )
    return response


async def iter_clean_events(
    request: CleanRequest, settings: Settings
) -> AsyncIterator[dict[str, Any]]:
    """Yield progress events as dicts, then one result or error event.

    Always runs in chunked mode so that progress is reported. If the
    consumer stops iterating early, the in-flight clean is cancelled.
    """
    queue: asyncio.Queue[Any] = asyncio.Queue()

    def on_progress(percent: int, processed: int, total: int) -> None:
        queue.put_nowait(
            ProgressEvent(percent=percent, processed=processed, total=total)
        )

    task = asyncio.create_task(
        run_clean(request, settings, on_progress, force_chunked=True)
    )
    task.add_done_callback(lambda _t: queue.put_nowait(_DONE))

    try:
        while True:
            event = await queue.get()
            if event is _DONE:
                break
            yield event.model_dump()

        try:
            response = task.result()
        except Exception:  # noqa: BLE001
            logger.exception("Cleaning failed")
            yield ErrorEvent(error=GENERIC_ERROR_MESSAGE).model_dump()
            return

        yield ResultEvent(**response.model_dump()).model_dump()
    finally:
        if not task.done():
            task.cancel()
