"""
Scheduler Errors
================
Error kinds reported by the ER scheduler. None of them is fatal: the
scheduler catches and reports the structural ones, and the console
catches validation failures and re-prompts.
"""

from __future__ import annotations


class SchedulerError(Exception):
    """Base class for every error raised by the ER scheduler."""


class RejectedInputError(SchedulerError):
    """A missing patient record was handed to the scheduler."""


class EmptyQueueError(SchedulerError):
    """Treat or peek attempted while no patient is waiting."""


class PatientNotFoundError(SchedulerError):
    """No waiting patient matches the requested (name, SSN) identity."""

    def __init__(self, name: str, ssn: int) -> None:
        self.name = name
        self.ssn = ssn
        super().__init__(
            f"No patient found with name: {name} and SSN {ssn} Combination. Please review"
        )


class InvalidFieldError(SchedulerError, ValueError):
    """Raw input for a patient field failed validation."""

    def __init__(self, field_name: str, message: str) -> None:
        self.field_name = field_name
        super().__init__(message)
