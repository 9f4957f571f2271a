"""
Response reconciler — merge a create/update acknowledgement into a record.

    create ack: {"objectId": "abc", "createdAt": "..."}   → id, createdAt, updatedAt = createdAt
    update ack: {"updatedAt": "..."}                       → updatedAt only

Ack classification:

    objectId AND createdAt present ──▶ SaveResponse
                 │
                 else
                 ▼
    updatedAt present ───────────────▶ UpdateResponse
                 │
                 else
                 ▼
    one of objectId / createdAt ─────▶ Error(PARTIAL_CREATE)
    nothing usable ──────────────────▶ Error(ACK_SHAPE)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any

from kungfu import Result, Ok, Error

from parcel._types import ErrorKind, ParseError, is_error_body
from parcel.codec._json import decode_json
from parcel.config import settings
from parcel.objects._object import ParseObject

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════════
# Acknowledgement Shapes
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class SaveResponse:
    """Acknowledgement of a create."""

    object_id: str
    created_at: datetime

    @property
    def updated_at(self) -> datetime:
        # A fresh object has not been updated since it was created
        return self.created_at

    def apply[T: ParseObject](self, obj: T) -> T:
        return replace(
            obj,
            object_id=self.object_id,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


@dataclass(frozen=True, slots=True)
class UpdateResponse:
    """Acknowledgement of an update."""

    updated_at: datetime

    def apply[T: ParseObject](self, obj: T) -> T:
        return replace(obj, updated_at=self.updated_at)


type Ack = SaveResponse | UpdateResponse


@dataclass(frozen=True, slots=True)
class SaveOrUpdateResponse:
    """
    Raw acknowledgement — every field optional.

    Note: The server answers creates and updates with different shapes,
    the caller does not know which one it gets until it is decoded.
    """

    object_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def decode(cls, payload: Any) -> Result[SaveOrUpdateResponse, ParseError]:
        if not isinstance(payload, Mapping):
            return Error(ParseError.decoding(f"Acknowledgement must be an object, got {payload!r}"))

        object_id = payload.get("objectId")
        if object_id is not None and not isinstance(object_id, str):
            return Error(ParseError.decoding(f"objectId must be a string, got {object_id!r}"))

        dates: dict[str, datetime | None] = {}
        for key in ("createdAt", "updatedAt"):
            raw = payload.get(key)
            if raw is None:
                dates[key] = None
                continue
            match settings().date_strategy.decode(raw):
                case Ok(value):
                    dates[key] = value
                case Error(e):
                    return Error(e)

        return Ok(
            cls(
                object_id=object_id,
                created_at=dates["createdAt"],
                updated_at=dates["updatedAt"],
            )
        )

    @property
    def is_create(self) -> bool:
        return self.object_id is not None and self.created_at is not None

    def as_save_response(self) -> Result[SaveResponse, ParseError]:
        if self.object_id is None or self.created_at is None:
            return Error(
                ParseError.local(
                    ErrorKind.PARTIAL_CREATE,
                    "Create acknowledgement needs both objectId and createdAt",
                )
            )
        return Ok(SaveResponse(object_id=self.object_id, created_at=self.created_at))

    def as_update_response(self) -> Result[UpdateResponse, ParseError]:
        if self.updated_at is None:
            return Error(
                ParseError.local(
                    ErrorKind.ACK_SHAPE,
                    "Update acknowledgement without updatedAt",
                )
            )
        return Ok(UpdateResponse(updated_at=self.updated_at))

    def resolve(self) -> Result[Ack, ParseError]:
        """Classify as create or update."""
        if self.is_create:
            return self.as_save_response()
        if self.updated_at is None and (
            self.object_id is not None or self.created_at is not None
        ):
            # Looks like a create that lost half of its fields
            return self.as_save_response()
        return self.as_update_response()

    def apply[T: ParseObject](self, obj: T) -> Result[T, ParseError]:
        match self.resolve():
            case Ok(SaveResponse() as ack):
                logger.debug("%s created as %s", obj.class_name, ack.object_id)
                return Ok(ack.apply(obj))
            case Ok(ack):
                logger.debug("%s %s updated", obj.class_name, obj.object_id)
                return Ok(ack.apply(obj))
            case Error(e):
                logger.warning("Cannot reconcile %s: %s", obj.class_name, e.error)
                return Error(e)


# ═══════════════════════════════════════════════════════════════════════════════
# Reconcile
# ═══════════════════════════════════════════════════════════════════════════════


def apply_ack[T: ParseObject](obj: T, payload: Any) -> Result[T, ParseError]:
    """Apply a decoded acknowledgement payload onto obj."""
    match SaveOrUpdateResponse.decode(payload):
        case Ok(ack):
            return ack.apply(obj)
        case Error(e):
            return Error(e)


def decode_payload(data: bytes | str) -> Result[Any, ParseError]:
    """JSON payload, or Error(REMOTE) when the server sent an error body."""
    match decode_json(data):
        case Ok(payload) if is_error_body(payload):
            logger.info("Server error %s: %s", payload["code"], payload["error"])
            return Error(ParseError(code=payload["code"], error=payload["error"]))
        case other:
            return other


def reconcile[T: ParseObject](obj: T, data: bytes | str) -> Result[T, ParseError]:
    """
    Raw acknowledgement bytes + original record → next record value.

    Example:
        match reconcile(score, b'{"objectId": "abc", "createdAt": "..."}'):
            case Ok(saved):
                saved.object_id   # "abc"
            case Error(e):
                ...
    """
    match decode_payload(data):
        case Ok(payload):
            return apply_ack(obj, payload)
        case Error(e):
            return Error(e)


__all__ = (
    "SaveResponse",
    "UpdateResponse",
    "Ack",
    "SaveOrUpdateResponse",
    "decode_payload",
    "apply_ack",
    "reconcile",
)
