"""
Save flow — create, update, fetch and batch against an in-memory server.

Key concepts:
- Records are frozen: every save hands back a NEW value
- Commands describe the call; execute() runs them through a Transport
- Errors are values: Result everywhere, nothing raises on bad payloads

    python -m examples.save_flow
"""

from __future__ import annotations

import asyncio
import json
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from kungfu import Ok, Error

from parcel import ParseObject, rest as R
from parcel.codec import format_iso


# ═══════════════════════════════════════════════════════════════════════════════
# Domain
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class GameScore(ParseObject):
    score: int
    player_name: str
    cheat_mode: bool = False


# ═══════════════════════════════════════════════════════════════════════════════
# Fake server — speaks just enough of the REST protocol
# ═══════════════════════════════════════════════════════════════════════════════


class MemoryServer:
    def __init__(self) -> None:
        self.rows: dict[str, dict[str, Any]] = {}

    async def send(self, method: R.Method, path: str, body: str | None) -> bytes:
        payload = json.loads(body) if body else None
        return json.dumps(self._handle(method.value, path, payload)).encode()

    def _handle(self, method: str, path: str, body: Any) -> Any:
        if path == "/batch":
            return [
                self._entry(r["method"], r["path"], r.get("body"))
                for r in body["requests"]
            ]
        return self._one(method, path, body)

    def _entry(self, method: str, path: str, body: Any) -> dict[str, Any]:
        result = self._one(method, path, body)
        if "code" in result:
            return {"error": result}
        return {"success": result}

    def _one(self, method: str, path: str, body: Any) -> dict[str, Any]:
        now = format_iso(datetime.now(timezone.utc))
        parts = path.strip("/").split("/")
        match method, parts:
            case "POST", ["classes", _]:
                object_id = uuid.uuid4().hex[:10]
                self.rows[object_id] = {**body, "objectId": object_id, "createdAt": now, "updatedAt": now}
                return {"objectId": object_id, "createdAt": now}
            case "PUT", ["classes", _, object_id] if object_id in self.rows:
                self.rows[object_id] = {**self.rows[object_id], **body, "updatedAt": now}
                return {"updatedAt": now}
            case "GET", ["classes", _, object_id] if object_id in self.rows:
                return self.rows[object_id]
            case _:
                return {"code": 101, "error": "Object not found."}


# ═══════════════════════════════════════════════════════════════════════════════
# Flow
# ═══════════════════════════════════════════════════════════════════════════════


def banner(title: str) -> None:
    print(f"\n{'─' * 50}\n{title}\n{'─' * 50}")


async def main() -> None:
    server = MemoryServer()
    score = GameScore(score=1337, player_name="Sean Plott")

    banner("1. Create")
    match score.save():
        case Ok(cmd):
            print(f"  {cmd.method.value} {cmd.path} {cmd.body}")
            created = await R.execute(cmd, server)
        case Error(e):
            print(f"  cannot build: {e}")
            return

    match created:
        case Ok(saved):
            print(f"  {saved}")
        case Error(e):
            print(f"  failed: {e}")
            return

    banner("2. Update")
    match saved.save():
        case Ok(cmd):
            print(f"  {cmd.method.value} {cmd.path}")
            print(f"  {await R.execute(cmd, server)}")
        case Error(e):
            print(f"  cannot build: {e}")

    banner("3. Fetch unknown id")
    missing = GameScore(score=0, player_name="?", object_id="nope")
    match missing.fetch():
        case Ok(cmd):
            print(f"  {await R.execute(cmd, server)}")
        case Error(e):
            print(f"  cannot build: {e}")

    banner("4. Batch")
    match GameScore.save_all(
        GameScore(score=1, player_name="a"),
        GameScore(score=2, player_name="b"),
    ):
        case Ok(batch):
            match await R.execute(batch, server):
                case Ok(results):
                    for r in results:
                        print(f"  {r}")
                case Error(e):
                    print(f"  batch failed: {e}")
        case Error(e):
            print(f"  cannot build: {e}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    asyncio.run(main())
