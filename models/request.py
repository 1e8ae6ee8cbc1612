"""CleanRequest Pydantic model with strict validation (extra=forbid)."""

from pydantic import BaseModel, ConfigDict, Field

from models.options import CleanOptions


class CleanRequest(BaseModel):
    """Incoming request body for the POST /clean endpoints.

    Extra top-level fields are rejected with a 422 response. The nested
    ``options`` object is lenient: unknown toggles are ignored.
    """

    model_config = ConfigDict(extra="forbid")

    html: str
    options: CleanOptions = Field(default_factory=CleanOptions)
