"""
Patient Record
==============
Immutable value describing one waiting patient.

Two separate relations are defined over the same record:
  - ordering: (priority level, arrival time), used by the priority queue
  - identity: (SSN, name), used by equality, hashing and the identity index
A record can be order-equivalent to another without being equal to it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


# Prime bucket count for the fixed-slot identity key
DEFAULT_TABLE_SIZE = 101

_INT32_MASK = 0xFFFFFFFF


class Priority(IntEnum):
    """Urgency tier. Lower value is more urgent."""

    HIGH = 1
    MEDIUM = 2
    LOW = 3


def _to_int32(value: int) -> int:
    """Wrap an unbounded int to a signed 32-bit integer."""
    value &= _INT32_MASK
    return value - (1 << 32) if value & 0x80000000 else value


def _string_hash(text: str) -> int:
    """31-polynomial hash over the UTF-16 code units of ``text``.

    Lone surrogates hash as their own code unit.
    """
    encoded = text.encode("utf-16-be", "surrogatepass")
    h = 0
    for i in range(0, len(encoded), 2):
        unit = (encoded[i] << 8) | encoded[i + 1]
        h = _to_int32(31 * h + unit)
    return h


def identity_hash(ssn: int, name: str) -> int:
    """Combine SSN and name into a signed 32-bit hash seeded with 17."""
    h = 17
    h = _to_int32(31 * h + _to_int32(ssn))
    h = _to_int32(31 * h + _string_hash(name))
    return h


def identity_key(ssn: int, name: str, table_size: int = DEFAULT_TABLE_SIZE) -> int:
    """Reduce the identity hash of (ssn, name) into ``[0, table_size)``.

    Equal (ssn, name) pairs always give the same key. Different pairs
    may collide.
    """
    return (identity_hash(ssn, name) & 0x7FFFFFFF) % table_size


@dataclass(frozen=True, eq=False)
class Patient:
    """A patient waiting for treatment.

    Attributes:
        name: Full display name.
        ssn: 9-digit national identifier, identity only.
        date_of_birth: Free text, usually MM/DD/YYYY.
        address: Free text.
        phone_number: Opaque text.
        priority_level: 1 (HIGH), 2 (MEDIUM) or 3 (LOW).
        arrival_time: Military clock check-in time, 1..2359.
        treatment_description: Situation presented onsite.
    """

    name: str
    ssn: int
    date_of_birth: str
    address: str
    phone_number: str
    priority_level: int
    arrival_time: int
    treatment_description: str

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    def identity(self) -> tuple[int, str]:
        return (self.ssn, self.name)

    def identity_key(self, table_size: int = DEFAULT_TABLE_SIZE) -> int:
        return identity_key(self.ssn, self.name, table_size)

    def same_identity(self, ssn: int, name: str) -> bool:
        return self.ssn == ssn and self.name == name

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Patient):
            return NotImplemented
        return self.identity == other.identity

    def __hash__(self) -> int:
        return identity_hash(self.ssn, self.name)

    # ------------------------------------------------------------------
    # Ordering
    # ------------------------------------------------------------------

    def order_key(self) -> tuple[int, int]:
        """Sort key: priority level first, then arrival time."""
        return (self.priority_level, self.arrival_time)

    def compare_to(self, other: Patient) -> int:
        """Return -1, 0 or 1 by the triage ordering rule."""
        mine, theirs = self.order_key(), other.order_key()
        return (mine > theirs) - (mine < theirs)

    def __lt__(self, other: Patient) -> bool:
        if not isinstance(other, Patient):
            return NotImplemented
        return self.order_key() < other.order_key()

    def __le__(self, other: Patient) -> bool:
        if not isinstance(other, Patient):
            return NotImplemented
        return self.order_key() <= other.order_key()

    def __gt__(self, other: Patient) -> bool:
        if not isinstance(other, Patient):
            return NotImplemented
        return self.order_key() > other.order_key()

    def __ge__(self, other: Patient) -> bool:
        if not isinstance(other, Patient):
            return NotImplemented
        return self.order_key() >= other.order_key()

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    @property
    def priority(self) -> Priority:
        return Priority(self.priority_level)

    def to_display(self) -> str:
        """Render every field with a fixed label, one per line."""
        lines = [
            "Patient Details:",
            f"Name: {self.name}",
            f"SSN: {self.ssn}",
            f"DOB: {self.date_of_birth}",
            f"Address: {self.address}",
            f"Phone Number: {self.phone_number}",
            f"Priority Level: {self.priority_level}",
            f"Arrival Time: {self.arrival_time}",
            f"Treatment Description: {self.treatment_description}",
        ]
        return "\n".join(lines)

    def summary(self) -> str:
        """Short form used by the waiting list."""
        return (
            f"Name: {self.name}\n"
            f"Priority Level: {self.priority_level}\n"
            f"Treatment: {self.treatment_description}"
        )

    def __str__(self) -> str:
        return self.to_display()
