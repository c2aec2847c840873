"""
Emergency Room Scheduler
========================
Façade over the priority queue and the identity index. Every mutation
goes through here so both structures always describe the same set of
waiting patients.

Lifecycle of a record: Pending (added to both structures) -> Treated
(removed from both by treat_next_patient). Treated is terminal.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

from er_scheduler.config import SETTINGS, Settings
from er_scheduler.errors import EmptyQueueError, PatientNotFoundError, RejectedInputError
from er_scheduler.identity_index import MODE_EXACT, IdentityIndex
from er_scheduler.patient import DEFAULT_TABLE_SIZE, Patient
from er_scheduler.priority_queue import PatientPriorityQueue

logger = logging.getLogger(__name__)


class EmergencyRoomScheduler:
    """Prioritizes patient care by urgency, then arrival time.

    Holds a priority queue for retrieving the most urgent patient and an
    identity index for detail lookups by name and SSN.

    Attributes:
        queue: Waiting patients ordered by urgency.
        index: Waiting patients keyed by identity.
    """

    def __init__(self, index_mode: str = MODE_EXACT, index_slots: int = DEFAULT_TABLE_SIZE) -> None:
        """Initialize an empty scheduler.

        Args:
            index_mode: Identity index addressing mode, ``exact`` or ``fixed``.
            index_slots: Slot count for the ``fixed`` index mode.
        """
        self.queue = PatientPriorityQueue()
        self.index = IdentityIndex(mode=index_mode, slot_count=index_slots)
        # Spans both structures; reentrant so read helpers can nest
        self._lock = threading.RLock()

    @classmethod
    def from_settings(cls, settings: Settings = SETTINGS) -> EmergencyRoomScheduler:
        return cls(index_mode=settings.index_mode, index_slots=settings.index_slots)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_patient(self, patient: Optional[Patient], strict: bool = False) -> bool:
        """Add a patient to the waiting list.

        Args:
            patient: A validated patient record.
            strict: Raise instead of returning False on a missing record.

        Returns:
            True if the patient now waits in both structures, False if the
            record was rejected.

        Raises:
            RejectedInputError: If strict and no record was given.
        """
        if patient is None:
            logger.warning("Cannot add null patient")
            if strict:
                raise RejectedInputError("Cannot add null patient")
            return False

        with self._lock:
            self.queue.insert(patient)
            try:
                self.index.put(patient)
            except Exception:
                self._discard_from_queue(patient)
                raise
        logger.info("Patient %s added to queue.", patient.name)
        return True

    def treat_next_patient(self) -> Optional[Patient]:
        """Remove the most urgent patient from the scheduler.

        Returns:
            The treated patient, or None when nobody is waiting.
        """
        with self._lock:
            try:
                patient = self.queue.extract_min()
            except EmptyQueueError:
                logger.warning("No patients currently requiring treatment")
                return None
            self.index.remove(patient)
        logger.info("Currently treating %s (priority %s).", patient.name, patient.priority_level)
        return patient

    def _discard_from_queue(self, patient: Patient) -> None:
        """Undo a queue insert whose index insert failed."""
        survivors = []
        removed = False
        while not self.queue.is_empty():
            record = self.queue.extract_min()
            if not removed and record is patient:
                removed = True
                continue
            survivors.append(record)
        for record in survivors:
            self.queue.insert(record)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def view_waiting_list(self) -> list[str]:
        """Summaries of every waiting patient, next to be treated first.

        Returns:
            One summary per waiting patient; empty when nobody waits.
        """
        with self._lock:
            return [patient.summary() for patient in self.queue.peek_all()]

    def view_patient_details(self, name: str, ssn: int) -> Optional[Patient]:
        """Find a waiting patient by name and SSN.

        Returns:
            The patient record, or None if no waiting patient matches.
        """
        with self._lock:
            patient = self.index.get(ssn, name)
        if patient is None:
            logger.warning("No patient found with name %s and SSN %s.", name, ssn)
        return patient

    def require_patient(self, name: str, ssn: int) -> Patient:
        """Like view_patient_details, but raise when nothing matches.

        Raises:
            PatientNotFoundError: If no waiting patient has this identity.
        """
        patient = self.view_patient_details(name, ssn)
        if patient is None:
            raise PatientNotFoundError(name, ssn)
        return patient

    def next_patient(self) -> Optional[Patient]:
        with self._lock:
            if self.queue.is_empty():
                return None
            return self.queue.peek()

    def is_empty(self) -> bool:
        with self._lock:
            return self.queue.is_empty()

    @property
    def waiting_count(self) -> int:
        with self._lock:
            return len(self.queue)

    @property
    def indexed_count(self) -> int:
        with self._lock:
            return len(self.index)

    def __len__(self) -> int:
        return self.waiting_count
