"""
Codec — wire dates and JSON bodies.

    from parcel import codec

    codec.encode_date(dt)          # {"__type": "Date", "iso": "..."}
    codec.decode_date("2024-01-01T00:00:00.000Z")   # Ok(datetime)
    codec.encode(score)            # Ok('{"score":10,...}')
    codec.decode_object(GameScore, payload)
"""

from parcel.codec._date import (
    DATE_TYPE,
    DATE_FORMAT,
    format_iso,
    parse_iso,
    encode_date,
    decode_date,
    DateStrategy,
    WIRE_DATES,
)
from parcel.codec._json import (
    EncodingFault,
    encode_value,
    encode_body,
    dumps,
    encode,
    decode_json,
    decode_value,
    decode_object,
)

__all__ = (
    # Dates
    "DATE_TYPE",
    "DATE_FORMAT",
    "format_iso",
    "parse_iso",
    "encode_date",
    "decode_date",
    "DateStrategy",
    "WIRE_DATES",
    # JSON
    "EncodingFault",
    "encode_value",
    "encode_body",
    "dumps",
    "encode",
    "decode_json",
    "decode_value",
    "decode_object",
)
