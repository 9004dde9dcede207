from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, Field, TypeAdapter, field_validator, model_validator


def coerce_value(raw: Any) -> float:
    """Read a datapoint value the way a C ``strtod`` would: anything unreadable is 0."""
    if isinstance(raw, bool):
        return 1.0 if raw else 0.0
    if isinstance(raw, float):
        return raw
    if isinstance(raw, int):
        try:
            return float(raw)
        except OverflowError:
            return math.copysign(math.inf, raw)
    if isinstance(raw, str):
        try:
            return float(raw.strip())
        except ValueError:
            return 0.0
    return 0.0


class Datapoint(BaseModel):
    """Single ``[value, timestamp]`` pair returned by the render API."""

    value: float = Field(default=0.0, description="Metric value; null or unreadable values read as 0.")
    timestamp: int | None = Field(default=None, description="Unix epoch seconds, when present.")

    @model_validator(mode="before")
    @classmethod
    def _unpack_pair(cls, data: Any) -> Any:
        if not isinstance(data, (list, tuple)):
            return {"value": None, "timestamp": None}
        value = data[0] if len(data) > 0 else None
        timestamp = data[1] if len(data) > 1 else None
        return {"value": value, "timestamp": timestamp}

    @field_validator("value", mode="before")
    @classmethod
    def _coerce_value(cls, raw: Any) -> float:
        return coerce_value(raw)

    @field_validator("timestamp", mode="before")
    @classmethod
    def _coerce_timestamp(cls, raw: Any) -> int | None:
        if isinstance(raw, bool) or not isinstance(raw, (int, float)):
            return None
        if isinstance(raw, float) and not math.isfinite(raw):
            return None
        return int(raw)


class RenderSeries(BaseModel):
    """One target's worth of datapoints from ``/render/?format=json``."""

    target: str | None = None
    datapoints: list[Datapoint] = Field(default_factory=list)

    @field_validator("target", mode="before")
    @classmethod
    def _stringify_target(cls, raw: Any) -> str | None:
        if raw is None:
            return None
        return str(raw)

    @field_validator("datapoints", mode="before")
    @classmethod
    def _default_datapoints(cls, raw: Any) -> Any:
        return [] if raw is None else raw


RenderDocument = TypeAdapter(list[RenderSeries])
