from __future__ import annotations

import json
import math

import pytest

from check_graphite.core.errors import ParseError
from check_graphite.services.aggregation import (
    aggregate,
    aggregate_body,
    parse_render_response,
    series_mean,
)


def test_single_series_mean() -> None:
    assert aggregate_body(b'[{"datapoints":[[1,0],[3,0]]}]') == pytest.approx(2.0)


def test_sum_of_per_series_means_not_global_mean() -> None:
    body = b'[{"datapoints":[[1,0],[3,0]]},{"datapoints":[[10,0]]}]'
    # A global mean would be 14 / 3.
    assert aggregate_body(body) == pytest.approx(12.0)


def test_parse_keeps_series_order_and_metadata() -> None:
    body = json.dumps(
        [
            {"target": "servers.web1.load", "datapoints": [[0.5, 1700000000], [1.5, 1700000060]]},
            {"target": "servers.web2.load", "datapoints": [[2.0, 1700000000]]},
        ]
    )

    series = parse_render_response(body)

    assert [item.target for item in series] == ["servers.web1.load", "servers.web2.load"]
    assert series[0].datapoints[1].timestamp == 1700000060
    assert aggregate(series) == pytest.approx(3.0)


def test_null_values_count_as_zero() -> None:
    body = b'[{"target":"a","datapoints":[[null,1],[4,2],[null,3],[8,4]]}]'
    # Nulls still count toward the datapoint total.
    assert aggregate_body(body) == pytest.approx(3.0)


def test_lenient_value_coercion() -> None:
    body = json.dumps(
        [{"datapoints": [["2.5", 1], ["garbage", 2], [True, 3], [{"x": 1}, 4], [], 7, {"value": 5}]}]
    )

    series = parse_render_response(body)

    assert [point.value for point in series[0].datapoints] == [2.5, 0.0, 1.0, 0.0, 0.0, 0.0, 0.0]
    assert series_mean(series[0]) == pytest.approx(3.5 / 7)


def test_empty_series_contributes_zero(caplog: pytest.LogCaptureFixture) -> None:
    body = b'[{"target":"idle","datapoints":[]},{"target":"busy","datapoints":[[6,0]]}]'

    with caplog.at_level("WARNING"):
        total = aggregate_body(body)

    assert total == pytest.approx(6.0)
    assert not math.isnan(total)
    assert "idle" in caplog.text


def test_missing_or_null_datapoints_are_empty() -> None:
    series = parse_render_response(b'[{"target":"a"},{"target":"b","datapoints":null}]')

    assert [len(item.datapoints) for item in series] == [0, 0]
    assert aggregate(series) == 0.0


def test_empty_document_is_zero() -> None:
    assert aggregate_body(b"[]") == 0.0


@pytest.mark.parametrize(
    "body",
    [
        b"",
        b"not json",
        b'[{"datapoints":[[1,0]]}',
        b'{"datapoints":[[1,0]]}',
        b'"text"',
        b"[1, 2]",
        b'[{"datapoints":"1,2"}]',
        b"\x80\x81",
    ],
)
def test_malformed_documents_raise_parse_error(body: bytes) -> None:
    with pytest.raises(ParseError) as exc:
        aggregate_body(body)

    assert str(exc.value) == "JSON parse error"
    assert exc.value.exit_code == 3


def test_object_shaped_datapoints_count_as_zero() -> None:
    assert aggregate_body(b'[{"datapoints":[{"value":5},[3,0]]}]') == pytest.approx(1.5)


def test_integer_too_large_for_float_saturates() -> None:
    huge = "9" * 400
    body = f'[{{"datapoints":[[{huge},0]]}},{{"datapoints":[[-{huge},0],[-{huge},60]]}}]'

    series = parse_render_response(body)

    assert series[0].datapoints[0].value == math.inf
    assert series[1].datapoints[0].value == -math.inf
    assert aggregate([series[0]]) == math.inf
