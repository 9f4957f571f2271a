"""
Core types for parcel.

Re-exports from kungfu + the error value shared by every module.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

# Re-export from kungfu
from kungfu import Result, Ok, Error, LazyCoroResult

# ═══════════════════════════════════════════════════════════════════════════════
# Error Kind
# ═══════════════════════════════════════════════════════════════════════════════

LOCAL_ERROR_CODE = -1
"""Code carried by errors raised on this side of the wire."""


class ErrorKind(Enum):
    """Where a ParseError comes from."""

    REMOTE = auto()  # Error body returned by the server
    ENCODING = auto()  # Record could not be serialized
    DECODING = auto()  # Payload is not JSON / not the expected container
    DATE_FORMAT = auto()  # Date on the wire does not match the format
    ACK_SHAPE = auto()  # Update acknowledgement without updatedAt
    PARTIAL_CREATE = auto()  # Only one of objectId / createdAt acknowledged
    BATCH_MISMATCH = auto()  # Batch response length != request length
    UNADDRESSABLE = auto()  # Operation needs an objectId
    TRANSPORT = auto()  # Transport raised while sending


# ═══════════════════════════════════════════════════════════════════════════════
# ParseError — the Error Value
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class ParseError:
    """
    Numeric code + human readable message.

    Field names mirror the server error body: {"code": 101, "error": "..."}.
    kind tells local faults apart; REMOTE errors are passed through verbatim.
    """

    code: int
    error: str
    kind: ErrorKind = ErrorKind.REMOTE

    def __str__(self) -> str:
        return f"[{self.code}] {self.error}"

    @property
    def is_remote(self) -> bool:
        return self.kind == ErrorKind.REMOTE

    @classmethod
    def local(cls, kind: ErrorKind, message: str) -> ParseError:
        return cls(code=LOCAL_ERROR_CODE, error=message, kind=kind)

    @classmethod
    def encoding(cls, message: str) -> ParseError:
        return cls.local(ErrorKind.ENCODING, message)

    @classmethod
    def decoding(cls, message: str) -> ParseError:
        return cls.local(ErrorKind.DECODING, message)

    @classmethod
    def date_format(cls, message: str) -> ParseError:
        return cls.local(ErrorKind.DATE_FORMAT, message)

    @classmethod
    def unaddressable(cls, class_name: str) -> ParseError:
        return cls.local(
            ErrorKind.UNADDRESSABLE,
            f"{class_name} has no objectId",
        )

    @classmethod
    def transport(cls, exc: Exception) -> ParseError:
        return cls.local(ErrorKind.TRANSPORT, f"{type(exc).__name__}: {exc}")


def is_error_body(payload: Any) -> bool:
    """Check if payload has the {"code", "error"} shape."""
    return (
        isinstance(payload, Mapping)
        and isinstance(payload.get("code"), int)
        and not isinstance(payload.get("code"), bool)
        and isinstance(payload.get("error"), str)
    )


def decode_error(payload: Any) -> Result[ParseError, ParseError]:
    """
    Decode a server error body.

    Independent of the success shapes — callers check this first.

    Example:
        decode_error({"code": 101, "error": "Object not found."})
        # Ok(ParseError(101, "Object not found.", ErrorKind.REMOTE))
    """
    if not is_error_body(payload):
        return Error(ParseError.decoding("Payload is not an error body"))
    return Ok(ParseError(code=payload["code"], error=payload["error"]))


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    # Re-exports from kungfu
    "Result",
    "Ok",
    "Error",
    "LazyCoroResult",
    # Errors
    "LOCAL_ERROR_CODE",
    "ErrorKind",
    "ParseError",
    "is_error_body",
    "decode_error",
)
