"""ProgressState model reported at chunk boundaries."""

from pydantic import BaseModel, ConfigDict, Field


class ProgressState(BaseModel):
    """Snapshot of a chunked traversal.

    ``total`` is fixed when the traversal starts; attribute removal never
    changes the element count.
    """

    model_config = ConfigDict(frozen=True)

    percent: int = Field(ge=0, le=100)
    processed: int = Field(ge=0)
    total: int = Field(ge=0)

    @classmethod
    def at(cls, processed: int, total: int) -> "ProgressState":
        """Build the state for *processed* of *total*, rounding half up."""
        percent = int(processed * 100 / total + 0.5) if total else 100
        return cls(percent=percent, processed=processed, total=total)
