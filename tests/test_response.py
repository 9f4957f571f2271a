from dataclasses import replace
from datetime import datetime, timezone

import pytest

from parcel import rest as R
from parcel._types import ErrorKind
from tests.records import GameScore, T0, ok, err

UTC = timezone.utc
JAN_1 = datetime(2024, 1, 1, tzinfo=UTC)
JAN_2 = datetime(2024, 1, 2, tzinfo=UTC)


def test_create_ack_sets_identity_and_both_timestamps():
    score = GameScore(score=10, player_name="sean")

    saved = ok(R.reconcile(score, b'{"objectId": "abc123", "createdAt": "2024-01-01T00:00:00.000Z"}'))

    assert saved.object_id == "abc123"
    assert saved.created_at == JAN_1
    assert saved.updated_at == saved.created_at
    assert saved.score == 10 and saved.player_name == "sean"
    # input is a value, not a shared instance
    assert score.object_id is None


def test_update_ack_only_moves_updated_at():
    score = GameScore(score=11, player_name="sean", object_id="abc123", created_at=T0, updated_at=T0)

    saved = ok(R.reconcile(score, b'{"updatedAt": "2024-01-02T00:00:00.000Z"}'))

    assert saved.object_id == "abc123"
    assert saved.created_at == T0
    assert saved.updated_at == JAN_2
    assert saved == replace(score, updated_at=JAN_2)


def test_tagged_dates_in_ack():
    score = GameScore(score=1, player_name="a")

    saved = ok(
        R.reconcile(
            score,
            '{"objectId": "x", "createdAt": {"__type": "Date", "iso": "2024-01-01T00:00:00.000Z"}}',
        )
    )

    assert saved.created_at == JAN_1


def test_empty_ack_on_update_is_ack_shape_fault():
    score = GameScore(score=1, player_name="a", object_id="abc123", created_at=T0)

    e = err(R.reconcile(score, b"{}"))

    assert e.kind == ErrorKind.ACK_SHAPE
    assert e.code == -1


@pytest.mark.parametrize(
    "ack",
    [
        b'{"objectId": "abc123"}',
        b'{"createdAt": "2024-01-01T00:00:00.000Z"}',
    ],
)
def test_half_create_ack_is_its_own_fault(ack):
    e = err(R.reconcile(GameScore(score=1, player_name="a"), ack))

    assert e.kind == ErrorKind.PARTIAL_CREATE


def test_object_id_with_updated_at_is_an_update():
    score = GameScore(score=1, player_name="a", object_id="abc123", created_at=T0)

    saved = ok(R.reconcile(score, b'{"objectId": "other", "updatedAt": "2024-01-02T00:00:00.000Z"}'))

    assert saved.object_id == "abc123"
    assert saved.created_at == T0
    assert saved.updated_at == JAN_2


def test_classification():
    create = ok(R.SaveOrUpdateResponse.decode({"objectId": "a", "createdAt": "2024-01-01T00:00:00.000Z"}))
    update = ok(R.SaveOrUpdateResponse.decode({"updatedAt": "2024-01-02T00:00:00.000Z"}))

    assert create.is_create
    assert not update.is_create
    assert ok(create.resolve()) == R.SaveResponse("a", JAN_1)
    assert ok(update.resolve()) == R.UpdateResponse(JAN_2)
    assert R.SaveResponse("a", JAN_1).updated_at == JAN_1


def test_bad_date_in_ack_is_error_not_crash():
    e = err(R.reconcile(GameScore(score=1, player_name="a"), b'{"objectId": "x", "createdAt": "01/01/2024"}'))

    assert e.kind == ErrorKind.DATE_FORMAT


@pytest.mark.parametrize(
    "data, kind",
    [
        (b"not json", ErrorKind.DECODING),
        (b"[]", ErrorKind.DECODING),
        (b'{"objectId": 12, "createdAt": "2024-01-01T00:00:00.000Z"}', ErrorKind.DECODING),
    ],
)
def test_malformed_ack(data, kind):
    e = err(R.reconcile(GameScore(score=1, player_name="a"), data))

    assert e.kind == kind


def test_server_error_is_remote():
    e = err(R.reconcile(GameScore(score=1, player_name="a"), b'{"code": 137, "error": "A duplicate value for a field with unique values was provided"}'))

    assert e.kind == ErrorKind.REMOTE
    assert e.code == 137
    assert e.is_remote


def test_save_command_decodes_through_reconciler():
    score = GameScore(score=10, player_name="sean")
    cmd = ok(score.save())

    saved = ok(cmd.decode(b'{"objectId": "abc123", "createdAt": "2024-01-01T00:00:00.000Z"}'))

    assert saved.object_id == "abc123"
    assert saved.updated_at == JAN_1
