"""CleanResponse and stream event models."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class CleanResponse(BaseModel):
    """Response body for POST /clean and the final stream event.

    ``mode`` records which traversal ran: ``"blocking"`` for small inputs,
    ``"chunked"`` above the auto-convert threshold.
    """

    html: str
    mode: Literal["blocking", "chunked"]
    input_chars: int
    output_chars: int


class ProgressEvent(BaseModel):
    """One progress update emitted at a chunk boundary."""

    type: Literal["progress"] = "progress"
    percent: int
    processed: int
    total: int


class ResultEvent(CleanResponse):
    """Terminal stream event carrying the cleaned markup."""

    type: Literal["result"] = "result"


class ErrorEvent(BaseModel):
    """Terminal stream event for an unexpected failure."""

    type: Literal["error"] = "error"
    error: str


StreamEvent = Annotated[
    Union[ProgressEvent, ResultEvent, ErrorEvent],
    Field(discriminator="type"),
]
