"""
parcel — typed records for a REST key-value object store.

    from parcel import codec               # Wire dates and JSON bodies
    from parcel import objects as O        # ParseObject, Pointer, ACL
    from parcel import rest as R           # save / fetch / save_all / reconcile
    from parcel import config              # Process-wide settings
"""

# codec first: config and objects are imported through it
from parcel import codec
from parcel import config
from parcel import objects
from parcel import rest
from parcel._types import (
    Result,
    Ok,
    Error,
    LazyCoroResult,
    ErrorKind,
    ParseError,
)
from parcel.objects import ParseObject, Pointer, ACL, wire_field

__version__ = "0.1.0"

__all__ = (
    "codec",
    "config",
    "objects",
    "rest",
    "Result",
    "Ok",
    "Error",
    "LazyCoroResult",
    "ErrorKind",
    "ParseError",
    "ParseObject",
    "Pointer",
    "ACL",
    "wire_field",
)
