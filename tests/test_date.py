from datetime import datetime, timedelta, timezone

import pytest

from parcel import codec
from parcel._types import ErrorKind
from tests.records import ok, err

UTC = timezone.utc


def test_encode_emits_tagged_form():
    assert codec.encode_date(datetime(2024, 1, 1, tzinfo=UTC)) == {
        "__type": "Date",
        "iso": "2024-01-01T00:00:00.000Z",
    }


def test_fraction_is_always_three_digits():
    assert codec.format_iso(datetime(2024, 3, 4, 5, 6, 7, 8000, tzinfo=UTC)) == "2024-03-04T05:06:07.008Z"
    assert codec.format_iso(datetime(2024, 3, 4, 5, 6, 7, 123999, tzinfo=UTC)) == "2024-03-04T05:06:07.123Z"


def test_naive_is_utc_and_aware_is_converted():
    naive = datetime(2024, 1, 1, 0, 0)
    plus_two = datetime(2024, 1, 1, 2, 0, tzinfo=timezone(timedelta(hours=2)))

    assert codec.format_iso(naive) == "2024-01-01T00:00:00.000Z"
    assert codec.format_iso(plus_two) == "2024-01-01T00:00:00.000Z"


def test_naive_round_trip_comes_back_as_aware_utc():
    naive = datetime(2024, 5, 6, 7, 8, 9, 123000)

    decoded = ok(codec.decode_date(codec.encode_date(naive)))

    assert decoded == naive.replace(tzinfo=UTC)
    assert decoded != naive


def test_round_trip_keeps_milliseconds():
    original = datetime(2024, 5, 6, 7, 8, 9, 123456, tzinfo=UTC)

    decoded = ok(codec.decode_date(codec.encode_date(original)))

    assert decoded == original.replace(microsecond=123000)
    assert decoded.tzinfo is not None


def test_bare_and_tagged_forms_decode_equal():
    bare = ok(codec.decode_date("2024-01-02T03:04:05.678Z"))
    tagged = ok(codec.decode_date({"__type": "Date", "iso": "2024-01-02T03:04:05.678Z"}))

    assert bare == tagged == datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=UTC)


@pytest.mark.parametrize(
    "value",
    [
        "2024-01-01",
        "2024-01-01T00:00:00Z",
        "2024-01-01T00:00:00.000+01:00",
        "2024-02-30T00:00:00.000Z",
        "not a date",
        "2024-01-01T00:00:00.000Z\n",
        "\u0662\u0660\u0662\u0664-01-01T00:00:00.000Z",
        {"__type": "Date"},
        {"__type": "Date", "iso": 1704067200},
        {"__type": "Pointer", "iso": "2024-01-01T00:00:00.000Z"},
        1704067200,
        None,
    ],
)
def test_malformed_dates_are_errors(value):
    e = err(codec.decode_date(value))

    assert e.kind == ErrorKind.DATE_FORMAT
    assert e.code == -1
