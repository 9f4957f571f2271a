"""
Class listing — GET /classes/{className}.

Response: {"results": [{...}, ...], "count": 2}. count only comes back when
the server was asked for it.
"""

from __future__ import annotations

import functools
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from kungfu import Result, Ok, Error

from parcel._types import ParseError
from parcel.codec._json import decode_object
from parcel.objects._object import ParseObject
from parcel.rest._command import Method, RESTCommand, Verb


@dataclass(frozen=True, slots=True)
class FindResult[T: ParseObject]:
    results: tuple[T, ...]
    count: int | None = None


def decode_find[T: ParseObject](cls: type[T], payload: Any) -> Result[FindResult[T], ParseError]:
    if not isinstance(payload, Mapping) or not isinstance(payload.get("results"), list):
        return Error(ParseError.decoding("Find response must carry a results list"))

    count = payload.get("count")
    if count is not None and (not isinstance(count, int) or isinstance(count, bool)):
        return Error(ParseError.decoding(f"count must be an integer, got {count!r}"))

    results: list[T] = []
    for item in payload["results"]:
        match decode_object(cls, item):
            case Ok(obj):
                results.append(obj)
            case Error(e):
                return Error(e)
    return Ok(FindResult(results=tuple(results), count=count))


def find_all[T: ParseObject](cls: type[T]) -> RESTCommand[FindResult[T]]:
    """Every record of a class (server-side paging limits apply)."""
    return RESTCommand(
        verb=Verb.FIND,
        method=Method.GET,
        path=f"/classes/{cls.class_name}",
        payload=None,
        mapper=functools.partial(decode_find, cls),
    )


__all__ = ("FindResult", "decode_find", "find_all")
