import asyncio
import json
from datetime import datetime, timezone

from parcel import rest as R
from parcel._types import ErrorKind
from tests.records import GameScore, ScriptedTransport, ok, err


def run(lazy):
    async def main():
        return await lazy

    return asyncio.run(main())


def test_save_round_trip():
    transport = ScriptedTransport(b'{"objectId": "abc123", "createdAt": "2024-01-01T00:00:00.000Z"}')
    score = GameScore(score=10, player_name="sean")

    saved = ok(run(R.execute(ok(score.save()), transport)))

    assert saved.object_id == "abc123"
    method, path, body = transport.sent[0]
    assert (method, path) == (R.Method.POST, "/classes/GameScore")
    assert json.loads(body)["playerName"] == "sean"


def test_nothing_is_sent_until_awaited():
    transport = ScriptedTransport(b"{}")

    R.execute(ok(GameScore(score=1, player_name="a").save()), transport)

    assert transport.sent == []


def test_save_then_update():
    transport = ScriptedTransport(
        b'{"objectId": "abc123", "createdAt": "2024-01-01T00:00:00.000Z"}',
        b'{"updatedAt": "2024-01-02T00:00:00.000Z"}',
    )
    created = ok(run(R.execute(ok(GameScore(score=10, player_name="sean").save()), transport)))

    updated = ok(run(R.execute(ok(created.save()), transport)))

    assert transport.sent[1][:2] == (R.Method.PUT, "/classes/GameScore/abc123")
    assert updated.created_at == datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert updated.updated_at == datetime(2024, 1, 2, tzinfo=timezone.utc)


def test_transport_failure_is_error():
    transport = ScriptedTransport(ConnectionError("connection reset"))

    e = err(run(R.execute(ok(GameScore(score=1, player_name="a").save()), transport)))

    assert e.kind == ErrorKind.TRANSPORT
    assert "connection reset" in e.error


def test_batch_through_transport():
    transport = ScriptedTransport(
        b'[{"success": {"objectId": "a", "createdAt": "2024-01-01T00:00:00.000Z"}},'
        b' {"success": {"objectId": "b", "createdAt": "2024-01-01T00:00:00.000Z"}}]'
    )
    batch = ok(R.save_all([GameScore(score=1, player_name="a"), GameScore(score=2, player_name="b")]))

    results = ok(run(R.execute(batch, transport)))

    assert [ok(r).object_id for r in results] == ["a", "b"]
    assert transport.sent[0][:2] == (R.Method.POST, "/batch")


def test_find_all():
    transport = ScriptedTransport(
        b'{"results": [{"objectId": "a", "score": 1, "playerName": "x", "createdAt": "2024-01-01T00:00:00.000Z"},'
        b' {"objectId": "b", "score": 2, "playerName": "y"}], "count": 2}'
    )

    found = ok(run(R.execute(R.find_all(GameScore), transport)))

    assert transport.sent[0] == (R.Method.GET, "/classes/GameScore", None)
    assert [s.object_id for s in found.results] == ["a", "b"]
    assert found.results[0].created_at == datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert found.count == 2


def test_find_entry_missing_required_field():
    e = err(R.decode_find(GameScore, {"results": [{"objectId": "a"}]}))

    assert e.kind == ErrorKind.DECODING
