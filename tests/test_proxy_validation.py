"""
Query request validation: schema checks (JH-4001) and date range checks (JH-4002).
"""

from datetime import datetime, timezone

import pytest

from helixgate.engine import DateRangeInvalid, SchemaInvalid
from helixgate.engine.proxy import parse_timestamp, validate_date_range, validate_schema


def valid_payload(**overrides):
    payload = {
        "tags": [{"tagName": "A", "tagId": 1}],
        "startDate": "2025-03-19T04:00:00Z",
        "endDate": "2025-03-19T05:00:00Z",
        "appContextGuid": "G1",
    }
    payload.update(overrides)
    return payload


def test_valid_payload_parses_to_snake_case_fields():
    request = validate_schema(valid_payload())

    assert request.app_context_guid == "G1"
    assert request.tags[0].tag_name == "A"
    assert request.tags[0].tag_id == 1


@pytest.mark.parametrize("missing", ["tags", "startDate", "endDate", "appContextGuid"])
def test_missing_field_is_schema_invalid(missing):
    payload = valid_payload()
    del payload[missing]

    with pytest.raises(SchemaInvalid) as exc_info:
        validate_schema(payload)
    assert exc_info.value.code == "JH-4001"


@pytest.mark.parametrize(
    "overrides",
    [
        {"tags": "A,B"},
        {"tags": []},
        {"tags": [{"tagName": "A"}]},
        {"tags": [{"tagName": "A", "tagId": "1"}]},
        {"startDate": 1742356800},
        {"appContextGuid": ""},
    ],
)
def test_ill_typed_fields_are_schema_invalid(overrides):
    with pytest.raises(SchemaInvalid):
        validate_schema(valid_payload(**overrides))


@pytest.mark.parametrize("payload", [None, [], "tags"])
def test_non_object_body_is_schema_invalid(payload):
    with pytest.raises(SchemaInvalid):
        validate_schema(payload)


def test_date_range_parses_utc():
    start, end = validate_date_range("2025-03-19T04:00:00Z", "2025-03-19T05:00:00+01:00")

    assert start == datetime(2025, 3, 19, 4, 0, tzinfo=timezone.utc)
    assert end == datetime(2025, 3, 19, 4, 0, tzinfo=timezone.utc)


def test_naive_timestamp_is_treated_as_utc():
    assert parse_timestamp("2025-03-19T04:00:00") == datetime(
        2025, 3, 19, 4, 0, tzinfo=timezone.utc
    )


def test_start_after_end_is_rejected():
    with pytest.raises(DateRangeInvalid) as exc_info:
        validate_date_range("2025-03-19T06:00:00Z", "2025-03-19T05:00:00Z")
    assert exc_info.value.code == "JH-4002"
    assert exc_info.value.message == "Start date is after end date"


@pytest.mark.parametrize(
    "start, end",
    [
        ("not-a-date", "2025-03-19T05:00:00Z"),
        ("2025-03-19T04:00:00Z", "2025-13-45T99:00:00Z"),
        ("1700000000", "2025-03-19T05:00:00Z"),
        ("2025-03-19T04:00:00Z", "1700000000.5"),
        (" 1742356800 ", "2025-03-19T05:00:00Z"),
        ("1e9", "2025-03-19T05:00:00Z"),
    ],
)
def test_unparseable_dates_are_rejected(start, end):
    with pytest.raises(DateRangeInvalid) as exc_info:
        validate_date_range(start, end)
    assert exc_info.value.message == "Invalid date format"


@pytest.mark.parametrize("value", ["1700000000", "-1", "0.5", "1.7e9"])
def test_numeric_strings_are_not_timestamps(value):
    with pytest.raises(ValueError):
        parse_timestamp(value)
