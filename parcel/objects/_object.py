"""
ParseObject — the contract every persisted record implements.

Records are frozen dataclasses. Saving never touches the instance:
commands describe the call, the reconciler hands back a new value.
"""

from __future__ import annotations

import logging
import re
from abc import ABC
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, ClassVar, Self, TYPE_CHECKING

from kungfu import Result, Ok, Error

from parcel._types import ParseError
from parcel.objects._acl import ACL
from parcel.objects._pointer import Pointer

if TYPE_CHECKING:
    from parcel.rest._command import RESTCommand
    from parcel.rest._batch import RESTBatchCommand

logger = logging.getLogger(__name__)

WIRE_NAME = "wire"
"""dataclass field metadata key holding the encoded name."""

_CAMEL_RE = re.compile(r"_([a-z0-9])")


# ═══════════════════════════════════════════════════════════════════════════════
# Wire Names
# ═══════════════════════════════════════════════════════════════════════════════


def wire_field(name: str, **kwargs: Any) -> Any:
    """
    dataclass field with an explicit encoded name.

    Example:
        @dataclass(frozen=True)
        class GameScore(ParseObject):
            player: str = wire_field("playerName")
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[WIRE_NAME] = name
    return field(metadata=metadata, **kwargs)


def camel_case(name: str) -> str:
    return _CAMEL_RE.sub(lambda m: m.group(1).upper(), name)


def wire_name(f: Any) -> str:
    """Encoded name of a dataclass field."""
    return f.metadata.get(WIRE_NAME) or camel_case(f.name)


# ═══════════════════════════════════════════════════════════════════════════════
# ParseObject
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, kw_only=True)
class ParseObject(ABC):
    """
    Base for persisted records.

    Subclasses are frozen dataclasses. The class name defaults to the type's
    own name and can be set explicitly:

        @dataclass(frozen=True)
        class GameScore(ParseObject, class_name="Score"):
            score: int
            player_name: str

    objectId / createdAt / updatedAt are server-assigned: leave them unset
    for new records, the reconciler fills them in after a save.
    """

    class_name: ClassVar[str]

    object_id: str | None = wire_field("objectId", default=None)
    created_at: datetime | None = wire_field("createdAt", default=None)
    updated_at: datetime | None = wire_field("updatedAt", default=None)
    acl: ACL | None = wire_field("ACL", default=None)

    def __new__(cls, *args: Any, **kwargs: Any) -> Self:
        if cls is ParseObject:
            raise TypeError("ParseObject is abstract, subclass it to declare a record")
        return super().__new__(cls)

    def __init_subclass__(cls, class_name: str | None = None, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if class_name is not None:
            cls.class_name = class_name
        elif "class_name" not in cls.__dict__:
            # dataclass(slots=True) rebuilds the class, keep what the first pass set
            cls.class_name = cls.__name__

    # ─────────────────────────────────────────────────────────────────────────
    # Addressing
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def is_saved(self) -> bool:
        return self.object_id is not None

    @property
    def collection_path(self) -> str:
        return f"/classes/{self.class_name}"

    @property
    def remote_path(self) -> str:
        """/classes/{className}/{objectId}, or the collection path if unsaved."""
        if self.object_id is not None:
            return f"{self.collection_path}/{self.object_id}"
        return self.collection_path

    def to_pointer(self) -> Result[Pointer[Self], ParseError]:
        return Pointer.to(self)

    # ─────────────────────────────────────────────────────────────────────────
    # Value updates
    # ─────────────────────────────────────────────────────────────────────────

    def with_acl(self, acl: ACL | None) -> Self:
        return replace(self, acl=acl)

    # ─────────────────────────────────────────────────────────────────────────
    # Commands
    # ─────────────────────────────────────────────────────────────────────────

    def save(self) -> Result[RESTCommand[Self], ParseError]:
        """Describe a create (unsaved) or update (saved) of this record."""
        from parcel.rest._command import save

        return save(self)

    def fetch(self) -> Result[RESTCommand[Self], ParseError]:
        """Describe a fetch. Error(UNADDRESSABLE) if the record is unsaved."""
        from parcel.rest._command import fetch

        return fetch(self)

    @classmethod
    def save_all(cls, *objects: Self) -> Result[RESTBatchCommand[Self], ParseError]:
        from parcel.rest._batch import save_all

        return save_all(objects)

    # ─────────────────────────────────────────────────────────────────────────
    # Debug
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def debug_description(self) -> str:
        from parcel.codec._json import encode

        match encode(self):
            case Ok(text):
                return f"{self.class_name} ({text})"
            case Error(e):
                logger.debug("Cannot describe %s: %s", self.class_name, e)
                return f"{self.class_name} ()"

    def __str__(self) -> str:
        return self.debug_description


__all__ = (
    "WIRE_NAME",
    "wire_field",
    "camel_case",
    "wire_name",
    "ParseObject",
)
