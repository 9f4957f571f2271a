"""
JSON layer — records to wire bodies and server payloads back to records.

Dates go through the DateStrategy installed in parcel.config.
"""

from __future__ import annotations

import base64
import binascii
import functools
import json
import logging
import types
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from datetime import datetime
from enum import Enum
from typing import Any, Union, get_args, get_origin, get_type_hints

from kungfu import Result, Ok, Error

from parcel._types import ParseError
from parcel.config import settings
from parcel.objects._acl import ACL
from parcel.objects._object import ParseObject, wire_name
from parcel.objects._pointer import Pointer

logger = logging.getLogger(__name__)

BYTES_TYPE = "Bytes"


class EncodingFault(Exception):
    """Value has no wire representation."""


# ═══════════════════════════════════════════════════════════════════════════════
# Encode
# ═══════════════════════════════════════════════════════════════════════════════


def encode_value(value: Any) -> Any:
    """
    Convert a value into JSON-ready data.

    Nested records become pointers. Raises EncodingFault for anything
    without a wire form (including unsaved nested records).
    """
    match value:
        case None | bool() | int() | float() | str():
            return value
        case datetime():
            try:
                return settings().date_strategy.encode(value)
            except (OverflowError, ValueError) as e:
                raise EncodingFault(f"Date {value!r} has no wire form: {e}") from e
        case ParseObject():
            if value.object_id is None:
                raise EncodingFault(
                    f"Cannot reference unsaved {value.class_name} from another record"
                )
            return Pointer(value.class_name, value.object_id).to_wire()
        case Pointer():
            return value.to_wire()
        case ACL():
            return value.to_wire()
        case Enum():
            return encode_value(value.value)
        case bytes() | bytearray():
            return {"__type": BYTES_TYPE, "base64": base64.b64encode(value).decode("ascii")}
        case Mapping():
            encoded: dict[str, Any] = {}
            for k, v in value.items():
                if not isinstance(k, str):
                    raise EncodingFault(f"Object keys must be strings, got {k!r}")
                encoded[k] = encode_value(v)
            return encoded
        case list() | tuple() | set() | frozenset():
            return [encode_value(v) for v in value]
        case _:
            raise EncodingFault(f"{type(value).__name__} is not encodable")


def encode_body(obj: ParseObject) -> Result[dict[str, Any], ParseError]:
    """Full record state keyed by wire names."""
    omit_none = settings().omit_none
    body: dict[str, Any] = {}
    try:
        for f in fields(obj):
            value = getattr(obj, f.name)
            # objectId is never sent as null, the path carries the identity
            if value is None and (omit_none or f.name == "object_id"):
                continue
            body[wire_name(f)] = encode_value(value)
    except EncodingFault as e:
        return Error(ParseError.encoding(f"{obj.class_name}: {e}"))
    except RecursionError:
        return Error(ParseError.encoding(f"{obj.class_name}: value refers to itself"))
    return Ok(body)


def dumps(data: Any) -> Result[str, ParseError]:
    try:
        return Ok(json.dumps(data, separators=(",", ":"), allow_nan=False))
    except (TypeError, ValueError) as e:
        return Error(ParseError.encoding(str(e)))


def encode(obj: ParseObject) -> Result[str, ParseError]:
    """Record as a JSON string."""
    match encode_body(obj):
        case Ok(body):
            return dumps(body)
        case Error(e):
            return Error(e)


# ═══════════════════════════════════════════════════════════════════════════════
# Decode
# ═══════════════════════════════════════════════════════════════════════════════


def decode_json(data: bytes | str) -> Result[Any, ParseError]:
    try:
        return Ok(json.loads(data))
    except (UnicodeDecodeError, ValueError) as e:
        logger.warning("Undecodable payload: %s", e)
        return Error(ParseError.decoding(f"Invalid JSON: {e}"))


def decode_value(value: Any) -> Result[Any, ParseError]:
    """
    Untyped decode: tagged objects become Python values.

    {"__type": "Date"} → datetime, {"__type": "Pointer"} → Pointer,
    {"__type": "Bytes"} → bytes. Everything else passes through.
    """
    match value:
        case {"__type": "Date"}:
            return settings().date_strategy.decode(value)
        case {"__type": "Pointer"}:
            return Pointer.from_wire(value)
        case {"__type": "Bytes", "base64": str(data)}:
            try:
                return Ok(base64.b64decode(data, validate=True))
            except binascii.Error as e:
                return Error(ParseError.decoding(f"Invalid base64: {e}"))
        case Mapping():
            decoded: dict[str, Any] = {}
            for k, v in value.items():
                match decode_value(v):
                    case Ok(item):
                        decoded[k] = item
                    case Error(e):
                        return Error(e)
            return Ok(decoded)
        case list():
            items: list[Any] = []
            for v in value:
                match decode_value(v):
                    case Ok(item):
                        items.append(item)
                    case Error(e):
                        return Error(e)
            return Ok(items)
        case _:
            return Ok(value)


@dataclass(frozen=True, slots=True)
class _FieldPlan:
    name: str
    wire: str
    kind: str  # "date" | "acl" | "pointer" | "record" | "sequence" | "any"
    target: type | None = None


def _hint_members(hint: Any) -> tuple[Any, ...]:
    if get_origin(hint) in (Union, types.UnionType):
        return get_args(hint)
    return (hint,)


def _kind_of(hint: Any) -> tuple[str, type | None]:
    for member in _hint_members(hint):
        base = get_origin(member) or member
        if base is datetime:
            return "date", None
        if base is ACL:
            return "acl", None
        if base is Pointer:
            return "pointer", None
        if base in (tuple, set, frozenset):
            return "sequence", base
        if isinstance(base, type) and issubclass(base, ParseObject):
            return "record", base
    return "any", None


@functools.cache
def _plan(cls: type[ParseObject]) -> tuple[_FieldPlan, ...]:
    hints = get_type_hints(cls)
    return tuple(
        _FieldPlan(f.name, wire_name(f), *_kind_of(hints.get(f.name)))
        for f in fields(cls)
        if f.init
    )


def _decode_record(cls: type[ParseObject], raw: Any) -> Result[Any, ParseError]:
    """
    Included object → record.

    A bare pointer carries no fields, so it cannot stand in for a record;
    declare the field as Pointer[...] to keep it unresolved.
    """
    match raw:
        case {"__type": "Object", "className": str(class_name)} if class_name == cls.class_name:
            return decode_object(cls, raw)
        case {"__type": "Pointer"}:
            return Error(
                ParseError.decoding(
                    f"Unfetched pointer where a {cls.class_name} record is expected"
                )
            )
        case _:
            return Error(ParseError.decoding(f"Expected a {cls.class_name} object, got {raw!r}"))


def _decode_field(plan: _FieldPlan, raw: Any) -> Result[Any, ParseError]:
    if raw is None:
        return Ok(None)
    match plan.kind:
        case "date":
            return settings().date_strategy.decode(raw)
        case "acl":
            return ACL.from_wire(raw)
        case "pointer":
            return Pointer.from_wire(raw)
        case "record":
            return _decode_record(plan.target, raw)
        case "sequence":
            match decode_value(raw):
                case Ok(list() as items):
                    return Ok(plan.target(items))
                case Ok(other):
                    return Error(ParseError.decoding(f"Expected a list, got {other!r}"))
                case Error(e):
                    return Error(e)
        case _:
            return decode_value(raw)


def decode_object[T: ParseObject](
    cls: type[T],
    payload: Any,
    base: T | None = None,
) -> Result[T, ParseError]:
    """
    Build a record from a server object payload.

    Wire names map back to fields; datetime fields accept both date forms.
    Keys the record does not declare are ignored. With base, decoded fields
    are laid over it and everything absent from the payload is kept.
    """
    if not isinstance(payload, Mapping):
        return Error(ParseError.decoding(f"{cls.class_name} payload must be an object"))

    values: dict[str, Any] = {}
    for plan in _plan(cls):
        if plan.wire not in payload:
            continue
        match _decode_field(plan, payload[plan.wire]):
            case Ok(value):
                values[plan.name] = value
            case Error(e):
                logger.warning("Bad %s.%s on the wire: %s", cls.class_name, plan.wire, e)
                return Error(e)

    if base is not None:
        return Ok(replace(base, **values))

    try:
        return Ok(cls(**values))
    except TypeError as e:
        return Error(ParseError.decoding(f"Cannot build {cls.class_name}: {e}"))


__all__ = (
    "BYTES_TYPE",
    "EncodingFault",
    "encode_value",
    "encode_body",
    "dumps",
    "encode",
    "decode_json",
    "decode_value",
    "decode_object",
)
