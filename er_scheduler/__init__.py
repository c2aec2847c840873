"""ER waiting-list scheduler: urgency-ordered queue plus identity lookup."""

from er_scheduler.errors import (
    EmptyQueueError,
    InvalidFieldError,
    PatientNotFoundError,
    RejectedInputError,
    SchedulerError,
)
from er_scheduler.patient import Patient, Priority
from er_scheduler.scheduler import EmergencyRoomScheduler

__all__ = [
    "EmergencyRoomScheduler",
    "EmptyQueueError",
    "InvalidFieldError",
    "Patient",
    "PatientNotFoundError",
    "Priority",
    "RejectedInputError",
    "SchedulerError",
]
