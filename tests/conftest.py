import pytest

from parcel import config


@pytest.fixture(autouse=True)
def default_settings():
    """Every test starts from default settings and leaves them that way."""
    previous = config.configure(config.Settings())
    yield config.settings()
    config.configure(previous)
