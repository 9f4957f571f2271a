from datetime import datetime, timezone

from kungfu import Ok

from parcel import codec, config, rest as R
from tests.records import Player, ok


def test_defaults():
    s = config.Settings()

    assert s.date_strategy is codec.WIRE_DATES
    assert s.mount_path == ""
    assert s.omit_none


def test_with_methods_return_new_settings():
    base = config.Settings()
    mounted = base.with_mount_path("/parse/")

    assert base.mount_path == ""
    assert mounted.mount_path == "/parse"
    assert config.Settings().with_mount_path("/").mount_path == ""
    assert mounted.with_omit_none(False).mount_path == "/parse"


def test_configure_returns_previous():
    first = config.Settings().with_mount_path("a")
    config.configure(first)

    previous = config.configure(config.Settings())

    assert previous is first


def test_installed_date_strategy_is_used_for_bodies():
    epoch_strategy = codec.DateStrategy(
        encode=lambda d: {"__type": "Date", "iso": "fixed"},
        decode=lambda v: Ok(datetime(2000, 1, 1, tzinfo=timezone.utc)),
    )
    config.configure(config.Settings().with_date_strategy(epoch_strategy))

    body = ok(R.save(Player(username="a", last_seen=datetime(2024, 1, 1)))).payload
    saved = ok(R.reconcile(Player(username="a"), b'{"objectId": "u", "createdAt": "whatever"}'))

    assert body["lastSeen"] == {"__type": "Date", "iso": "fixed"}
    assert saved.created_at == datetime(2000, 1, 1, tzinfo=timezone.utc)
