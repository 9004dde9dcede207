from __future__ import annotations

import json
import logging
from typing import Sequence

from pydantic import ValidationError

from check_graphite.core.errors import ParseError
from check_graphite.schemas.render import RenderDocument, RenderSeries


logger = logging.getLogger(__name__)


def parse_render_response(body: bytes | str) -> list[RenderSeries]:
    """Decode a render API body into series, raising ParseError on anything but a JSON array."""
    try:
        payload = json.loads(body)
    except ValueError as exc:
        raise ParseError("JSON parse error") from exc

    if not isinstance(payload, list):
        raise ParseError("JSON parse error")

    try:
        return RenderDocument.validate_python(payload)
    except ValidationError as exc:
        logger.debug("Render response did not match the series schema: %s", exc)
        raise ParseError("JSON parse error") from exc


def series_mean(series: RenderSeries) -> float:
    """Mean of a series' values; a series without datapoints contributes 0."""
    count = len(series.datapoints)
    if count == 0:
        logger.warning(
            "Series %s returned no datapoints; counting it as 0",
            series.target or "<unnamed>",
        )
        return 0.0
    subtotal = 0.0
    for datapoint in series.datapoints:
        subtotal += datapoint.value
    return subtotal / count


def aggregate(series: Sequence[RenderSeries]) -> float:
    """Sum of per-series means.

    Each series is averaged on its own and the averages are added together, so
    a series with one datapoint weighs as much as one with a hundred.
    """
    total = 0.0
    for item in series:
        total += series_mean(item)
    logger.debug("Aggregated %s series to %s", len(series), total)
    return total


def aggregate_body(body: bytes | str) -> float:
    """Parse a raw render API body and reduce it to the check total."""
    return aggregate(parse_render_response(body))
