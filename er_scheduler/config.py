"""
Configuration
=============
Environment-driven settings for the ER scheduler. Values are read from
the process environment, with a local ``.env`` file loaded first.
Unusable values fall back to their defaults with a warning.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from er_scheduler.identity_index import INDEX_MODES, MODE_EXACT
from er_scheduler.patient import DEFAULT_TABLE_SIZE

load_dotenv()
logger = logging.getLogger(__name__)


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "")
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r; using %d.", name, raw, default)
        return default


@dataclass(frozen=True)
class Settings:
    """Immutable configuration for the scheduler and its entry points.

    Attributes:
        index_mode: ``exact`` (keyed by SSN and name) or ``fixed`` (prime slot table).
        index_slots: Slot count used when index_mode is ``fixed``.
        log_level: Logging level name for entry points.
    """

    index_mode: str = field(default_factory=lambda: os.getenv("ER_INDEX_MODE", MODE_EXACT))
    index_slots: int = field(default_factory=lambda: _int_env("ER_INDEX_SLOTS", DEFAULT_TABLE_SIZE))
    log_level: str = field(default_factory=lambda: os.getenv("ER_LOG_LEVEL", "WARNING").upper())

    def __post_init__(self) -> None:
        mode = str(self.index_mode).strip().lower()
        if mode not in INDEX_MODES:
            logger.warning(
                "Ignoring unknown index mode %r; using %r.", self.index_mode, MODE_EXACT
            )
            mode = MODE_EXACT
        object.__setattr__(self, "index_mode", mode)

        if self.index_slots < 1:
            logger.warning(
                "Ignoring non-positive index slot count %d; using %d.",
                self.index_slots, DEFAULT_TABLE_SIZE,
            )
            object.__setattr__(self, "index_slots", DEFAULT_TABLE_SIZE)


SETTINGS = Settings()
