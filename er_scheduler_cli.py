"""
ER Scheduler — Interactive Console
==================================
Menu-driven front end for the emergency room waiting list. Collects and
validates patient fields, then hands finished records to the scheduler.

Run with: python er_scheduler_cli.py

Menu:
  1. Add a new patient (re-prompts until SSN, priority and arrival are valid)
  2. Treat the next patient (highest priority, earliest arrival)
  3. View the current waiting list (next patient on top, rest unordered)
  4. View one patient's details by name and SSN
  5. Exit
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Callable

# Ensure project root is on the path
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from er_scheduler.config import SETTINGS
from er_scheduler.errors import InvalidFieldError
from er_scheduler.patient import Patient
from er_scheduler.scheduler import EmergencyRoomScheduler
from er_scheduler.validation import (
    build_patient,
    parse_arrival_time,
    parse_priority,
    parse_ssn,
    require_text,
)

logger = logging.getLogger("er_scheduler_cli")

MENU_LINES = (
    "Welcome to our ER Scheduler: Select Option Below (1 - 5)",
    "1: Add New Patient",
    "2: Treat Next Patient",
    "3: View Current Waiting List",
    "4: View A Patient's Details",
    "5: Exit Program",
)


class ConsoleSession:
    """One interactive run of the ER scheduler menu.

    Input and output are injectable so a session can be scripted.

    Attributes:
        scheduler: The scheduler this session drives. Owned by the caller.
    """

    def __init__(
        self,
        scheduler: EmergencyRoomScheduler,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], Any] = print,
    ) -> None:
        self.scheduler = scheduler
        self._input = input_fn
        self._output = output_fn

    # ------------------------------------------------------------------
    # Prompt helpers
    # ------------------------------------------------------------------

    def _ask(self, prompt: str) -> str:
        self._output(prompt)
        return self._input("")

    def _ask_until_valid(self, prompt: str, parse: Callable[[str], Any]) -> Any:
        """Repeat a prompt until ``parse`` accepts the answer."""
        while True:
            raw = self._ask(prompt)
            try:
                return parse(raw)
            except InvalidFieldError as exc:
                self._output(f"{exc} Please try again.")

    def _ask_text(self, prompt: str, field_name: str) -> str:
        return self._ask_until_valid(prompt, lambda raw: require_text(field_name, raw))

    # ------------------------------------------------------------------
    # Menu actions
    # ------------------------------------------------------------------

    def add_patient_flow(self) -> Patient:
        name = self._ask_text("Enter Patient First and Last Name:", "name")
        ssn = self._ask_until_valid("Please enter 9 digit SSN: ", parse_ssn)
        date_of_birth = self._ask_text("Enter Date of Birth", "date_of_birth")
        address = self._ask_text("Enter Address:", "address")
        phone_number = self._ask_text("Enter Phone Number: ", "phone_number")
        priority_level = self._ask_until_valid(
            "Enter Priority Level (1: HIGH, 2: MEDIUM, 3: LOW):", parse_priority
        )
        arrival_time = self._ask_until_valid(
            "Enter Arrival Time in Military Format (Ex: 1350 for 1:50 PM)\n"
            "Input must be between 1 and 2359. Do not lead with zeros.",
            parse_arrival_time,
        )
        treatment = self._ask_text("Enter Treatment Description:", "treatment_description")

        patient = build_patient(
            name=name,
            ssn=ssn,
            date_of_birth=date_of_birth,
            address=address,
            phone_number=phone_number,
            priority_level=priority_level,
            arrival_time=arrival_time,
            treatment_description=treatment,
        )
        self.scheduler.add_patient(patient)
        self._output(f"Patient Added:\n{patient}")
        return patient

    def treat_flow(self) -> None:
        patient = self.scheduler.treat_next_patient()
        if patient is None:
            self._output("No patients currently requiring treatment")
        else:
            self._output(f"Currently Treating: \n{patient}")

    def waiting_list_flow(self) -> None:
        summaries = self.scheduler.view_waiting_list()
        if not summaries:
            self._output("Wait List Is Currently Empty.")
            return
        self._output("Current Waiting List:")
        for summary in summaries:
            self._output(f"{summary}\n")

    def details_flow(self) -> None:
        name = self._ask_text("Enter Patient Name:", "name")
        ssn = self._ask_until_valid("Please enter 9 digit SSN: ", parse_ssn)
        patient = self.scheduler.view_patient_details(name, ssn)
        if patient is None:
            self._output(
                f"No patient found with name: {name} and SSN {ssn} Combination. Please review"
            )
        else:
            self._output(str(patient))

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------

    def run(self) -> None:
        """Show the menu until the user exits or input runs out."""
        actions = {
            "1": self.add_patient_flow,
            "2": self.treat_flow,
            "3": self.waiting_list_flow,
            "4": self.details_flow,
        }
        try:
            while True:
                for line in MENU_LINES:
                    self._output(line)
                selection = self._input("").strip()
                if selection == "5":
                    break
                action = actions.get(selection)
                if action is None:
                    self._output("Invalid Option. Choose a digit between 1 and 5.")
                    continue
                action()
        except EOFError:
            logger.info("Input closed; leaving the menu.")
        self._output("Exiting ER Scheduler. Bye!")


def main() -> None:
    """Build a scheduler from settings and run the console."""
    logging.basicConfig(
        level=getattr(logging, SETTINGS.log_level, logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    scheduler = EmergencyRoomScheduler.from_settings(SETTINGS)
    logger.info("Identity index mode: %s.", scheduler.index.mode)
    ConsoleSession(scheduler).run()


if __name__ == "__main__":
    main()
