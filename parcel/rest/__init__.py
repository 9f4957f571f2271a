"""
REST — commands, reconciliation and batching.

    from parcel import rest as R

    cmd = R.save(score).unwrap()         # CREATE POST /classes/GameScore
    saved = await R.execute(cmd, transport)

    batch = R.save_all([a, b]).unwrap()  # POST /batch
    results = await R.execute(batch, transport)   # Ok([Ok(a'), Error(...)])

Flow:

    record ──save()──▶ RESTCommand ──transport──▶ bytes
                            │                       │
                            └──── decode() ◀────────┘
                                     │
                                     ▼
                          SaveOrUpdateResponse.apply()
                                     │
                                     ▼
                               new record value
"""

from parcel.rest._response import (
    SaveResponse,
    UpdateResponse,
    Ack,
    SaveOrUpdateResponse,
    decode_payload,
    apply_ack,
    reconcile,
)
from parcel.rest._command import (
    Verb,
    Method,
    Mapper,
    RESTCommand,
    save,
    fetch,
)
from parcel.rest._batch import (
    BATCH_PATH,
    RESTBatchCommand,
    save_all,
)
from parcel.rest._find import (
    FindResult,
    decode_find,
    find_all,
)
from parcel.rest._execute import (
    Transport,
    Executable,
    execute,
)

__all__ = (
    # Reconciler
    "SaveResponse",
    "UpdateResponse",
    "Ack",
    "SaveOrUpdateResponse",
    "decode_payload",
    "apply_ack",
    "reconcile",
    # Commands
    "Verb",
    "Method",
    "Mapper",
    "RESTCommand",
    "save",
    "fetch",
    # Batch
    "BATCH_PATH",
    "RESTBatchCommand",
    "save_all",
    # Find
    "FindResult",
    "decode_find",
    "find_all",
    # Execution
    "Transport",
    "Executable",
    "execute",
)
