"""
Execution seam — hand a command to a transport, decode what comes back.

The HTTP client lives outside parcel; anything implementing Transport works.
"""

from __future__ import annotations

import logging
from typing import Protocol

from kungfu import LazyCoroResult, Result, Error

from parcel._types import ParseError
from parcel.rest._command import Method

logger = logging.getLogger(__name__)


class Transport(Protocol):
    """
    Sends one request, returns the raw response body.

    Example — httpx:

        class HttpxTransport:
            def __init__(self, client: httpx.AsyncClient) -> None:
                self.client = client

            async def send(self, method: Method, path: str, body: str | None) -> bytes:
                response = await self.client.request(method.value, path, content=body)
                return response.content
    """

    async def send(self, method: Method, path: str, body: str | None) -> bytes:
        ...


class Executable[T](Protocol):
    """RESTCommand and RESTBatchCommand both qualify."""

    @property
    def method(self) -> Method: ...

    @property
    def path(self) -> str: ...

    @property
    def body(self) -> str | None: ...

    def decode(self, data: bytes | str) -> Result[T, ParseError]: ...


def execute[T](command: Executable[T], transport: Transport) -> LazyCoroResult[T, ParseError]:
    """
    Run a command through a transport.

    Lazy — nothing is sent until awaited. Transport exceptions become
    Error(TRANSPORT); no retries.

    Example:
        match await execute(cmd, transport):
            case Ok(saved):
                ...
            case Error(e):
                ...
    """
    method, path, body = command.method, command.path, command.body

    async def run() -> Result[T, ParseError]:
        try:
            data = await transport.send(method, path, body)
        except Exception as e:
            logger.warning("%s %s failed: %s", method.value, path, e)
            return Error(ParseError.transport(e))
        return command.decode(data)

    return LazyCoroResult(run)


__all__ = ("Transport", "Executable", "execute")
