"""
Patient Field Validation
========================
Caller-side checks that turn raw console input into a well-formed
Patient. The scheduler itself trusts its input, so every record must
pass through here (or an equivalent) first.

Rules:
  - SSN: exactly 9 digits, 100000000..999999999
  - Priority level: 1 (HIGH), 2 (MEDIUM) or 3 (LOW)
  - Arrival time: military clock, 1..2359, no leading zeros
  - Text fields: required, surrounding whitespace stripped
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from er_scheduler.errors import InvalidFieldError
from er_scheduler.patient import Patient

logger = logging.getLogger(__name__)

SSN_MIN = 100_000_000
SSN_MAX = 999_999_999
ARRIVAL_MIN = 1
ARRIVAL_MAX = 2359

SSN_ERROR = "Invalid SSN. Please enter exactly 9 digits."
PRIORITY_ERROR = "Invalid Priority Level: Must be Numbers 1, 2, or 3."
ARRIVAL_ERROR = "Invalid Arrival time. Must be between 1 and 2359."


def _digits(raw: Any) -> str:
    if isinstance(raw, bool):
        return ""
    text = str(raw).strip()
    return text if text.isascii() and text.isdigit() else ""


def parse_ssn(raw: Any) -> int:
    """Parse a 9-digit SSN.

    Args:
        raw: User input, as text or int.

    Returns:
        The SSN as an int.

    Raises:
        InvalidFieldError: If the value is not exactly 9 digits in range.
    """
    text = _digits(raw)
    if len(text) != 9 or not SSN_MIN <= int(text) <= SSN_MAX:
        raise InvalidFieldError("ssn", SSN_ERROR)
    return int(text)


def parse_priority(raw: Any) -> int:
    text = _digits(raw)
    if text not in ("1", "2", "3"):
        raise InvalidFieldError("priority_level", PRIORITY_ERROR)
    return int(text)


def parse_arrival_time(raw: Any) -> int:
    """Parse a military-clock arrival time such as ``1350`` for 1:50 PM."""
    text = _digits(raw)
    if not text or text.startswith("0") or not ARRIVAL_MIN <= int(text) <= ARRIVAL_MAX:
        raise InvalidFieldError("arrival_time", ARRIVAL_ERROR)
    return int(text)


def require_text(field_name: str, raw: Any) -> str:
    text = "" if raw is None else str(raw).strip()
    if not text:
        raise InvalidFieldError(field_name, f"{field_name.replace('_', ' ').title()} cannot be empty.")
    return text


class PatientForm(BaseModel):
    """All eight patient fields, validated together."""

    name: str = Field(min_length=1)
    ssn: int = Field(ge=SSN_MIN, le=SSN_MAX)
    date_of_birth: str = Field(min_length=1)
    address: str = Field(min_length=1)
    phone_number: str = Field(min_length=1)
    priority_level: int = Field(ge=1, le=3)
    arrival_time: int = Field(ge=ARRIVAL_MIN, le=ARRIVAL_MAX)
    treatment_description: str = Field(min_length=1)

    @field_validator(
        "name", "date_of_birth", "address", "phone_number", "treatment_description",
        mode="before",
    )
    @classmethod
    def _strip_text(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("ssn", mode="before")
    @classmethod
    def _check_ssn(cls, value: Any) -> int:
        return parse_ssn(value)

    @field_validator("priority_level", mode="before")
    @classmethod
    def _check_priority(cls, value: Any) -> int:
        return parse_priority(value)

    @field_validator("arrival_time", mode="before")
    @classmethod
    def _check_arrival(cls, value: Any) -> int:
        return parse_arrival_time(value)

    def to_patient(self) -> Patient:
        return Patient(**self.model_dump())


def build_patient(**fields: Any) -> Patient:
    """Validate raw field values and construct a Patient.

    Raises:
        InvalidFieldError: Naming the first field that failed validation.
    """
    try:
        form = PatientForm(**fields)
    except ValidationError as exc:
        first = exc.errors()[0]
        field_name = str(first["loc"][0]) if first.get("loc") else "patient"
        message = _error_message(field_name, first.get("msg", "Invalid value."))
        logger.info("Rejected patient input: %s (%s).", field_name, message)
        raise InvalidFieldError(field_name, message) from exc
    return form.to_patient()


def _error_message(field_name: str, default: str) -> str:
    return {
        "ssn": SSN_ERROR,
        "priority_level": PRIORITY_ERROR,
        "arrival_time": ARRIVAL_ERROR,
    }.get(field_name, default)
