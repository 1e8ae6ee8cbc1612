"""CleanOptions Pydantic model -- the three removal toggles."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class CleanOptions(BaseModel):
    """Immutable removal options for a single cleaning call.

    Accepts both the camelCase names used by browser clients
    (``removeComments``) and the Python field names (``remove_comments``).
    Unknown keys are ignored and missing keys default to ``False``.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    remove_comments: bool = Field(default=False, alias="removeComments")
    remove_data_attrs: bool = Field(default=False, alias="removeDataAttrs")
    remove_classes: bool = Field(default=False, alias="removeClasses")

    @classmethod
    def coerce(
        cls, options: Optional[Union["CleanOptions", Mapping[str, Any]]]
    ) -> "CleanOptions":
        """Normalize ``None``, a mapping, or an instance into ``CleanOptions``."""
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        return cls.model_validate(dict(options))
