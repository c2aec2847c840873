"""
Identity Index
==============
Maps a patient's (SSN, name) identity to the record currently waiting
under it, for O(1) detail lookups.

Two addressing modes are supported:
  - ``exact``: a growable dict keyed directly by (SSN, name). Distinct
    identities never collide.
  - ``fixed``: a fixed table of prime size addressed by the derived
    identity key, one record per slot, no resizing. A later put to an
    occupied slot evicts the previous occupant from lookup.
"""

from __future__ import annotations

import logging
from typing import Hashable, Optional

from er_scheduler.patient import DEFAULT_TABLE_SIZE, Patient, identity_key

logger = logging.getLogger(__name__)

MODE_EXACT = "exact"
MODE_FIXED = "fixed"
INDEX_MODES = (MODE_EXACT, MODE_FIXED)


class IdentityIndex:
    """Keyed index of waiting patients.

    Attributes:
        mode: ``exact`` or ``fixed``.
        slot_count: Bucket count used by ``fixed`` mode.
    """

    def __init__(self, mode: str = MODE_EXACT, slot_count: int = DEFAULT_TABLE_SIZE) -> None:
        """Initialize an empty index.

        Args:
            mode: Addressing mode, ``exact`` or ``fixed``.
            slot_count: Number of buckets for ``fixed`` mode. Must be positive.

        Raises:
            ValueError: If the mode is unknown or slot_count is not positive.
        """
        if mode not in INDEX_MODES:
            raise ValueError(f"Unknown index mode {mode!r}; expected one of {INDEX_MODES}")
        if slot_count < 1:
            raise ValueError("slot_count must be positive")
        self.mode = mode
        self.slot_count = slot_count
        self._table: dict[Hashable, Patient] = {}

    def _key(self, ssn: int, name: str) -> Hashable:
        if self.mode == MODE_FIXED:
            return identity_key(ssn, name, self.slot_count)
        return (ssn, name)

    # ------------------------------------------------------------------
    # Index operations
    # ------------------------------------------------------------------

    def put(self, record: Patient) -> Optional[Patient]:
        """Store a record at its identity key.

        Args:
            record: The patient to index.

        Returns:
            The record previously held in the slot, or None.
        """
        key = self._key(record.ssn, record.name)
        previous = self._table.get(key)
        self._table[key] = record
        if previous is not None and previous != record:
            logger.warning(
                "Index slot %s collision: %s evicted by %s.",
                key, previous.name, record.name,
            )
        return previous

    def get(self, ssn: int, name: str) -> Optional[Patient]:
        """Look up the record for an identity.

        Returns None when the slot is empty or holds a different identity.
        """
        record = self._table.get(self._key(ssn, name))
        if record is None or not record.same_identity(ssn, name):
            return None
        return record

    def remove(self, record: Patient) -> None:
        """Clear the slot at the record's key, whatever it holds."""
        self._table.pop(self._key(record.ssn, record.name), None)

    def __contains__(self, record: object) -> bool:
        if not isinstance(record, Patient):
            return False
        return self.get(record.ssn, record.name) is not None

    def __len__(self) -> int:
        return len(self._table)

    def __repr__(self) -> str:
        return f"IdentityIndex(mode={self.mode!r}, size={len(self)})"
