"""Custom event model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TrackedEvent(BaseModel):
    """A named custom event and its properties.

    Parameters
    ----------
    name : str
        Event name as shown in Woopra.
    properties : dict
        Event properties. Keys become ``ce_<key>`` query parameters on
        the direct transport.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    properties: dict[str, Any] = Field(default_factory=dict)

    @field_validator("name")
    @classmethod
    def _require_name(cls, value: str) -> str:
        if not value:
            raise ValueError("event name must be non-empty")
        return value
