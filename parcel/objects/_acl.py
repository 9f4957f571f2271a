"""
ACL — per-user / per-role read and write permissions.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from kungfu import Result, Ok, Error

from parcel._types import ParseError

PUBLIC = "*"
ROLE_PREFIX = "role:"


@dataclass(frozen=True, slots=True)
class Access:
    read: bool = False
    write: bool = False

    @property
    def is_empty(self) -> bool:
        return not (self.read or self.write)


@dataclass(frozen=True, slots=True)
class ACL:
    """
    Access control list.

    Immutable — each with_* method returns a new ACL.
    Entries without any permission are dropped.

    Example:
        acl = ACL().with_public_read().with_write(user_id)

    Wire form: {"*": {"read": true}, "<userId>": {"read": true, "write": true}}
    """

    entries: tuple[tuple[str, Access], ...] = ()

    def access(self, key: str) -> Access:
        for k, a in self.entries:
            if k == key:
                return a
        return Access()

    def _with(self, key: str, access: Access) -> ACL:
        rest = tuple((k, a) for k, a in self.entries if k != key)
        if access.is_empty:
            return ACL(entries=rest)
        return ACL(entries=(*rest, (key, access)))

    def with_read(self, key: str, allowed: bool = True) -> ACL:
        return self._with(key, Access(read=allowed, write=self.access(key).write))

    def with_write(self, key: str, allowed: bool = True) -> ACL:
        return self._with(key, Access(read=self.access(key).read, write=allowed))

    def with_public_read(self, allowed: bool = True) -> ACL:
        return self.with_read(PUBLIC, allowed)

    def with_public_write(self, allowed: bool = True) -> ACL:
        return self.with_write(PUBLIC, allowed)

    def with_role_read(self, role: str, allowed: bool = True) -> ACL:
        return self.with_read(ROLE_PREFIX + role, allowed)

    def with_role_write(self, role: str, allowed: bool = True) -> ACL:
        return self.with_write(ROLE_PREFIX + role, allowed)

    def can_read(self, key: str) -> bool:
        return self.access(key).read

    def can_write(self, key: str) -> bool:
        return self.access(key).write

    @property
    def public_read(self) -> bool:
        return self.can_read(PUBLIC)

    @property
    def public_write(self) -> bool:
        return self.can_write(PUBLIC)

    def to_wire(self) -> dict[str, dict[str, bool]]:
        wire: dict[str, dict[str, bool]] = {}
        for key, access in self.entries:
            perms: dict[str, bool] = {}
            if access.read:
                perms["read"] = True
            if access.write:
                perms["write"] = True
            wire[key] = perms
        return wire

    @classmethod
    def from_wire(cls, payload: Any) -> Result[ACL, ParseError]:
        if not isinstance(payload, Mapping):
            return Error(ParseError.decoding(f"ACL must be an object, got {payload!r}"))

        acl = cls()
        for key, perms in payload.items():
            if not isinstance(key, str) or not isinstance(perms, Mapping):
                return Error(ParseError.decoding(f"Invalid ACL entry: {key!r}"))
            acl = acl._with(
                key,
                Access(read=perms.get("read") is True, write=perms.get("write") is True),
            )
        return Ok(acl)


__all__ = ("PUBLIC", "ROLE_PREFIX", "Access", "ACL")
