"""
Process-wide settings.

    from parcel import config

    config.configure(
        config.Settings()
        .with_mount_path("/parse")
    )

Installed once at startup. Encoders and decoders read settings() on every
call, so reconfiguring while requests are in flight is not supported.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

from parcel.codec._date import DateStrategy, WIRE_DATES

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════════
# Settings — Immutable Configuration
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Settings:
    """
    Codec and addressing configuration.

    Fluent builder pattern — each method returns new Settings.

    Example:
        settings = (
            Settings()
            .with_mount_path("/parse")
            .with_omit_none(False)
        )
    """

    date_strategy: DateStrategy = WIRE_DATES
    # Prefix for sub-request paths inside a batch body
    mount_path: str = ""
    omit_none: bool = True

    def with_date_strategy(self, strategy: DateStrategy) -> Settings:
        """Replace the wire date codec."""
        return Settings(
            date_strategy=strategy,
            mount_path=self.mount_path,
            omit_none=self.omit_none,
        )

    def with_mount_path(self, path: str) -> Settings:
        """
        Set server mount path.

        Example:
            .with_mount_path("/parse")   # batch paths become /parse/classes/...
        """
        normalized = "/" + path.strip("/") if path.strip("/") else ""
        return Settings(
            date_strategy=self.date_strategy,
            mount_path=normalized,
            omit_none=self.omit_none,
        )

    def with_omit_none(self, omit: bool = True) -> Settings:
        """Whether None-valued fields are left out of request bodies."""
        return Settings(
            date_strategy=self.date_strategy,
            mount_path=self.mount_path,
            omit_none=omit,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Installed Settings
# ═══════════════════════════════════════════════════════════════════════════════

_lock = threading.Lock()
_current = Settings()


def configure(new: Settings) -> Settings:
    """Install settings process-wide. Returns the previous value."""
    global _current
    with _lock:
        previous, _current = _current, new
    logger.info(
        "parcel settings installed (mount_path=%r, omit_none=%s)",
        new.mount_path,
        new.omit_none,
    )
    return previous


def settings() -> Settings:
    """Currently installed settings."""
    return _current


__all__ = (
    "Settings",
    "configure",
    "settings",
)
