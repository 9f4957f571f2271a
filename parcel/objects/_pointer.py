"""
Pointer — reference to a stored record without embedding it.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

from kungfu import Result, Ok, Error

from parcel._types import ParseError

if TYPE_CHECKING:
    from parcel.objects._object import ParseObject

POINTER_TYPE = "Pointer"


@dataclass(frozen=True, slots=True)
class Pointer[T: "ParseObject"]:
    """
    (className, objectId) pair.

    Wire form: {"__type": "Pointer", "className": "GameScore", "objectId": "abc"}
    """

    class_name: str
    object_id: str

    @classmethod
    def to(cls, obj: T) -> Result[Pointer[T], ParseError]:
        """Pointer to a saved record."""
        if obj.object_id is None:
            return Error(ParseError.unaddressable(obj.class_name))
        return Ok(cls(class_name=obj.class_name, object_id=obj.object_id))

    @property
    def remote_path(self) -> str:
        return f"/classes/{self.class_name}/{self.object_id}"

    def points_to(self, obj: ParseObject) -> bool:
        return obj.class_name == self.class_name and obj.object_id == self.object_id

    def to_wire(self) -> dict[str, str]:
        return {
            "__type": POINTER_TYPE,
            "className": self.class_name,
            "objectId": self.object_id,
        }

    @classmethod
    def from_wire(cls, payload: Any) -> Result[Pointer[Any], ParseError]:
        if (
            isinstance(payload, Mapping)
            and payload.get("__type") == POINTER_TYPE
            and isinstance(payload.get("className"), str)
            and isinstance(payload.get("objectId"), str)
        ):
            return Ok(cls(class_name=payload["className"], object_id=payload["objectId"]))
        return Error(ParseError.decoding(f"Not a pointer: {payload!r}"))


__all__ = ("POINTER_TYPE", "Pointer")
