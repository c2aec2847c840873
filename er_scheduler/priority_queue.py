"""
Priority Queue
==============
Binary min-heap of waiting patients ordered by (priority level, arrival
time). The root is always the next patient to treat.
"""

from __future__ import annotations

import heapq
import itertools
from typing import Iterator

from er_scheduler.errors import EmptyQueueError
from er_scheduler.patient import Patient


class PatientPriorityQueue:
    """Min-heap where lower (priority, arrival) means more urgent."""

    # insert/extract = O(log n)
    def __init__(self) -> None:
        self._heap: list[tuple[tuple[int, int], int, Patient]] = []
        # Keeps heap comparisons away from Patient on order-equivalent ties
        self._counter = itertools.count()

    def insert(self, record: Patient) -> None:
        heapq.heappush(self._heap, (record.order_key(), next(self._counter), record))

    def extract_min(self) -> Patient:
        """Remove and return the most urgent patient.

        Raises:
            EmptyQueueError: If no patient is waiting.
        """
        if not self._heap:
            raise EmptyQueueError("No patients currently requiring treatment")
        _, _, record = heapq.heappop(self._heap)
        return record

    def peek(self) -> Patient:
        if not self._heap:
            raise EmptyQueueError("Wait List Is Currently Empty.")
        return self._heap[0][2]

    def peek_all(self) -> Iterator[Patient]:
        """Yield every waiting patient, root first, otherwise heap order.

        Each call starts a fresh pass over the current state.
        """
        for _, _, record in list(self._heap):
            yield record

    def is_empty(self) -> bool:
        return not self._heap

    def __iter__(self) -> Iterator[Patient]:
        return self.peek_all()

    def __len__(self) -> int:
        return len(self._heap)
