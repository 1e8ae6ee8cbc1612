"""Public re-exports of all model types."""

from models.options import CleanOptions
from models.progress import ProgressState
from models.request import CleanRequest
from models.response import (
    CleanResponse,
    ErrorEvent,
    ProgressEvent,
    ResultEvent,
    StreamEvent,
)

__all__ = [
    # Options / progress
    "CleanOptions",
    "ProgressState",
    # Request/Response
    "CleanRequest",
    "CleanResponse",
    # Stream events
    "ProgressEvent",
    "ResultEvent",
    "ErrorEvent",
    "StreamEvent",
]
