"""
Batch builder — many saves in one POST /batch.

Request:
    {"requests": [{"method": "POST", "path": "/classes/GameScore", "body": {...}}, ...]}

Response (positional, same length as requests):
    [{"success": {"objectId": "...", "createdAt": "..."}}, {"error": {"code": 101, "error": "..."}}]
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from kungfu import Result, Ok, Error

from parcel._types import ErrorKind, ParseError, decode_error
from parcel.objects._object import ParseObject
from parcel.rest._command import Method, RESTCommand, save
from parcel.rest._response import decode_payload

logger = logging.getLogger(__name__)

BATCH_PATH = "/batch"


@dataclass(frozen=True, slots=True)
class RESTBatchCommand[T]:
    """
    Ordered sequence of commands sent as one call.

    Entries share nothing: each command was built from its own record.
    """

    commands: tuple[RESTCommand[T], ...]

    @property
    def method(self) -> Method:
        return Method.POST

    @property
    def path(self) -> str:
        return BATCH_PATH

    @property
    def payload(self) -> dict[str, Any]:
        return {"requests": [c.to_batch_request() for c in self.commands]}

    @property
    def body(self) -> str:
        return json.dumps(self.payload, separators=(",", ":"))

    def __len__(self) -> int:
        return len(self.commands)

    def decode(self, data: bytes | str) -> Result[list[Result[T, ParseError]], ParseError]:
        """
        Match response entries to commands by index.

        Outer Error: the response as a whole is unusable (server error,
        not a list, length mismatch). Inner Results: per-entry outcome.
        """
        match decode_payload(data):
            case Ok(entries):
                pass
            case Error(e):
                return Error(e)

        if not isinstance(entries, list):
            return Error(ParseError.decoding("Batch response must be a list"))

        if len(entries) != len(self.commands):
            logger.warning(
                "Batch response has %d entries for %d requests",
                len(entries),
                len(self.commands),
            )
            return Error(
                ParseError.local(
                    ErrorKind.BATCH_MISMATCH,
                    f"Expected {len(self.commands)} batch entries, got {len(entries)}",
                )
            )

        return Ok([_decode_entry(c, e) for c, e in zip(self.commands, entries)])


def _decode_entry[T](command: RESTCommand[T], entry: Any) -> Result[T, ParseError]:
    if not isinstance(entry, Mapping):
        return Error(ParseError.decoding(f"Batch entry must be an object, got {entry!r}"))
    if "success" in entry:
        return command.mapper(entry["success"])
    if "error" in entry:
        match decode_error(entry["error"]):
            case Ok(remote):
                return Error(remote)
            case Error(e):
                return Error(e)
    return Error(ParseError.decoding("Batch entry has neither success nor error"))


def save_all[T: ParseObject](objects: Iterable[T]) -> Result[RESTBatchCommand[T], ParseError]:
    """
    Build one save per record, in order.

    Example:
        match save_all([score_a, score_b]):
            case Ok(batch):
                results = batch.decode(await http.post(batch.path, batch.body))
            case Error(e):
                ...   # first record that failed to encode
    """
    commands: list[RESTCommand[T]] = []
    for obj in objects:
        match save(obj):
            case Ok(command):
                commands.append(command)
            case Error(e):
                return Error(e)

    logger.debug("Built batch of %d saves", len(commands))
    return Ok(RESTBatchCommand(commands=tuple(commands)))


__all__ = (
    "BATCH_PATH",
    "RESTBatchCommand",
    "save_all",
)
