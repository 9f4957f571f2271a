"""
Objects — the record contract and its collaborators.

    from dataclasses import dataclass
    from parcel.objects import ParseObject, ACL

    @dataclass(frozen=True)
    class GameScore(ParseObject):
        score: int
        player_name: str

    score = GameScore(score=10, player_name="sean", acl=ACL().with_public_read())
    score.remote_path   # "/classes/GameScore"
"""

from parcel.objects._acl import PUBLIC, ROLE_PREFIX, Access, ACL
from parcel.objects._pointer import POINTER_TYPE, Pointer
from parcel.objects._object import (
    WIRE_NAME,
    wire_field,
    camel_case,
    wire_name,
    ParseObject,
)

__all__ = (
    "PUBLIC",
    "ROLE_PREFIX",
    "Access",
    "ACL",
    "POINTER_TYPE",
    "Pointer",
    "WIRE_NAME",
    "wire_field",
    "camel_case",
    "wire_name",
    "ParseObject",
)
