"""
Command builder — describe a save or fetch without performing it.

    save(unsaved)  → CREATE  POST /classes/GameScore          body = record
    save(saved)    → UPDATE  PUT  /classes/GameScore/{id}     body = record
    fetch(saved)   → FETCH   GET  /classes/GameScore/{id}     no body
    fetch(unsaved) → Error(UNADDRESSABLE)

The command carries its own mapper: the transport hands back bytes,
command.decode(bytes) yields the next record value.
"""

from __future__ import annotations

import functools
import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

from kungfu import Result, Ok, Error

from parcel._types import ParseError
from parcel.codec._json import decode_object, dumps, encode_body
from parcel.config import settings
from parcel.objects._object import ParseObject
from parcel.rest._response import apply_ack, decode_payload

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════════
# Verb / Method
# ═══════════════════════════════════════════════════════════════════════════════


class Verb(Enum):
    """What the command does to the record."""

    CREATE = auto()
    UPDATE = auto()
    FETCH = auto()
    FIND = auto()


class Method(Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"


type Mapper[T] = Callable[[Any], Result[T, ParseError]]
"""Decoded (non-error) response payload → result value."""


# ═══════════════════════════════════════════════════════════════════════════════
# RESTCommand — Operation Descriptor
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class RESTCommand[T]:
    """
    One remote call, transport-agnostic.

    payload is the JSON-ready body (None for GET); it has already been
    checked to serialize, so body never fails.
    """

    verb: Verb
    method: Method
    path: str
    payload: dict[str, Any] | None
    mapper: Mapper[T]

    @property
    def body(self) -> str | None:
        if self.payload is None:
            return None
        return json.dumps(self.payload, separators=(",", ":"))

    def decode(self, data: bytes | str) -> Result[T, ParseError]:
        """Raw response → value. Server error bodies come back as Error(REMOTE)."""
        match decode_payload(data):
            case Ok(payload):
                return self.mapper(payload)
            case Error(e):
                return Error(e)

    def to_batch_request(self) -> dict[str, Any]:
        """Entry of a /batch request body."""
        request: dict[str, Any] = {
            "method": self.method.value,
            "path": settings().mount_path + self.path,
        }
        if self.payload is not None:
            request["body"] = self.payload
        return request


# ═══════════════════════════════════════════════════════════════════════════════
# Builders
# ═══════════════════════════════════════════════════════════════════════════════


def save[T: ParseObject](obj: T) -> Result[RESTCommand[T], ParseError]:
    """
    Build a save command.

    Example:
        match save(score):
            case Ok(cmd):
                response = await http.request(cmd.method.value, cmd.path, cmd.body)
                saved = cmd.decode(response)
            case Error(e):
                ...   # ENCODING
    """
    match encode_body(obj):
        case Ok(payload):
            pass
        case Error(e):
            logger.warning("Cannot encode %s: %s", obj.class_name, e.error)
            return Error(e)

    match dumps(payload):
        case Ok(_):
            pass
        case Error(e):
            logger.warning("Cannot encode %s: %s", obj.class_name, e.error)
            return Error(e)

    if obj.is_saved:
        verb, method = Verb.UPDATE, Method.PUT
    else:
        verb, method = Verb.CREATE, Method.POST

    path = obj.remote_path
    logger.debug("Built %s %s %s", verb.name, method.value, path)
    return Ok(
        RESTCommand(
            verb=verb,
            method=method,
            path=path,
            payload=payload,
            mapper=functools.partial(apply_ack, obj),
        )
    )


def fetch[T: ParseObject](obj: T) -> Result[RESTCommand[T], ParseError]:
    """
    Build a fetch command.

    The fetched fields are laid over obj, so fields the server leaves out
    keep their local values.
    """
    if not obj.is_saved:
        return Error(ParseError.unaddressable(obj.class_name))

    path = obj.remote_path
    logger.debug("Built FETCH GET %s", path)
    return Ok(
        RESTCommand(
            verb=Verb.FETCH,
            method=Method.GET,
            path=path,
            payload=None,
            mapper=functools.partial(decode_object, type(obj), base=obj),
        )
    )


__all__ = (
    "Verb",
    "Method",
    "Mapper",
    "RESTCommand",
    "save",
    "fetch",
)
