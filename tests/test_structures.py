"""
Data Structure Tests
====================
Unit tests for the patient record, the identity index and the priority
queue.

Run with: python -m pytest tests/test_structures.py -v
"""

from __future__ import annotations

import sys
import unittest
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from er_scheduler.errors import EmptyQueueError
from er_scheduler.identity_index import MODE_FIXED, IdentityIndex
from er_scheduler.patient import Patient, Priority, _string_hash, identity_hash, identity_key
from er_scheduler.priority_queue import PatientPriorityQueue


def make_patient(name="Red", ssn=888888888, priority=1, arrival=809, **overrides) -> Patient:
    fields = {
        "name": name,
        "ssn": ssn,
        "date_of_birth": "3/3/2000",
        "address": "9000 Bear Den Drive",
        "phone_number": "444-787-5300",
        "priority_level": priority,
        "arrival_time": arrival,
        "treatment_description": "Chest Pains + Shortness of Breath",
    }
    fields.update(overrides)
    return Patient(**fields)


def find_colliding_name(ssn: int, base: str, table_size: int = 101) -> str:
    """Return a name different from ``base`` sharing its fixed-table slot."""
    target = identity_key(ssn, base, table_size)
    for i in range(10_000):
        candidate = f"Patient {i}"
        if candidate != base and identity_key(ssn, candidate, table_size) == target:
            return candidate
    raise AssertionError("no colliding name found")


class TestPatientRecord(unittest.TestCase):
    """Ordering, identity and rendering of a patient record."""

    def test_identical_entries_are_equal(self):
        self.assertEqual(make_patient(), make_patient())

    def test_equality_ignores_non_identity_fields(self):
        """Same name and SSN is the same patient even if triage fields differ."""
        a = make_patient(priority=1, arrival=809, address="A")
        b = make_patient(priority=3, arrival=2000, address="B")
        self.assertEqual(a, b)
        self.assertEqual(hash(a), hash(b))

    def test_different_ssn_is_different_patient(self):
        self.assertNotEqual(make_patient(ssn=888888888), make_patient(ssn=555555555))

    def test_not_equal_to_other_types(self):
        patient = make_patient()
        self.assertNotEqual(patient, None)
        self.assertNotEqual(patient, "This is a String, not a patient")

    def test_higher_priority_sorts_first(self):
        high = make_patient(name="testpt21", ssn=485888770, priority=1, arrival=809)
        low = make_patient(name="testpt20", ssn=982187888, priority=3, arrival=809)
        self.assertLess(high, low)
        self.assertEqual(high.compare_to(low), -1)

    def test_earlier_arrival_breaks_priority_tie(self):
        earlier = make_patient(name="Earlier Arrival", ssn=982447888, priority=3, arrival=1000)
        later = make_patient(name="Later Arrival", ssn=983387855, priority=3, arrival=1015)
        self.assertLess(earlier, later)
        self.assertGreater(later, earlier)

    def test_order_equivalent_records_are_not_equal(self):
        """Ordering and identity are separate relations."""
        clone1 = make_patient(name="Clone1", ssn=272347578, priority=3, arrival=1000)
        clone2 = make_patient(name="Clone2", ssn=982447888, priority=3, arrival=1000)
        self.assertEqual(clone1.compare_to(clone2), 0)
        self.assertFalse(clone1 < clone2)
        self.assertFalse(clone2 < clone1)
        self.assertNotEqual(clone1, clone2)

    def test_record_is_immutable(self):
        patient = make_patient()
        with self.assertRaises(AttributeError):
            patient.priority_level = 3

    def test_identity_key_is_stable_and_in_range(self):
        a = make_patient(priority=1, address="X")
        b = make_patient(priority=3, address="Y")
        self.assertEqual(a.identity_key(), b.identity_key())
        self.assertTrue(0 <= a.identity_key() < 101)

    def test_identity_key_matches_reference_values(self):
        """Key derivation follows the 17/31 combination hash with 32-bit overflow."""
        # 17*31 + 0 = 527; 527*31 + hash("A") = 16337 + 65 = 16402; 16402 % 101 = 40
        self.assertEqual(identity_key(0, "A"), 40)
        # 527 + 1 = 528; 528*31 = 16368; hash("") is 0
        self.assertEqual(identity_key(1, ""), 16368 % 101)

    def test_name_hash_matches_java_string_hash(self):
        """Name hashing works over UTF-16 code units with 32-bit overflow."""
        self.assertEqual(_string_hash("A"), 65)
        self.assertEqual(_string_hash("Hello World"), -862545276)
        # Non-ASCII BMP character: é is a single code unit (233)
        self.assertEqual(_string_hash("José"), 2315003)
        # Astral character hashes as its surrogate pair D83D DE00
        self.assertEqual(_string_hash("\U0001F600"), 0xD83D * 31 + 0xDE00)
        # Lone surrogate hashes as its own code unit
        self.assertEqual(_string_hash("A\udc80"), 65 * 31 + 0xDC80)

    def test_identity_hash_for_non_ascii_name(self):
        # 17*31 + 0 = 527; 527*31 + 2315003
        self.assertEqual(identity_hash(0, "José"), 527 * 31 + 2315003)

    def test_lone_surrogate_name_is_hashable(self):
        patient = make_patient(name="Bad\udc80Name")
        self.assertEqual(hash(patient), hash(make_patient(name="Bad\udc80Name")))
        self.assertTrue(0 <= patient.identity_key() < 101)

    def test_similar_ssns_give_different_keys(self):
        self.assertNotEqual(
            identity_key(744525687, "Red", 1 << 31),
            identity_key(744525688, "Red", 1 << 31),
        )

    def test_render_lists_fields_in_fixed_order(self):
        patient = Patient(
            "Golden Retriever", 123987456, "11/1/2000", "748 Cherry Lane",
            "555-333-2039", 1, 1045, "Sad Dog",
        )
        expected = (
            "Patient Details:\n"
            "Name: Golden Retriever\n"
            "SSN: 123987456\n"
            "DOB: 11/1/2000\n"
            "Address: 748 Cherry Lane\n"
            "Phone Number: 555-333-2039\n"
            "Priority Level: 1\n"
            "Arrival Time: 1045\n"
            "Treatment Description: Sad Dog"
        )
        self.assertEqual(str(patient), expected)
        self.assertEqual(patient.to_display(), expected)

    def test_summary_and_priority_enum(self):
        patient = make_patient(priority=2)
        self.assertIs(patient.priority, Priority.MEDIUM)
        self.assertIn("Name: Red", patient.summary())
        self.assertIn("Priority Level: 2", patient.summary())
        self.assertIn("Treatment: Chest Pains", patient.summary())


class TestIdentityIndex(unittest.TestCase):
    """Put, get and remove in both addressing modes."""

    def test_put_and_get(self):
        index = IdentityIndex()
        patient = make_patient()
        index.put(patient)
        self.assertIs(index.get(888888888, "Red"), patient)
        self.assertIn(patient, index)
        self.assertEqual(len(index), 1)

    def test_get_with_wrong_name_is_not_found(self):
        index = IdentityIndex()
        index.put(make_patient(name="Bob", ssn=222222222))
        self.assertIsNone(index.get(222222222, "Matt"))
        self.assertIsNone(index.get(999999999, "Frank"))

    def test_remove_clears_slot(self):
        index = IdentityIndex()
        patient = make_patient()
        index.put(patient)
        index.remove(patient)
        self.assertIsNone(index.get(patient.ssn, patient.name))
        self.assertEqual(len(index), 0)
        index.remove(patient)  # already gone
        self.assertEqual(len(index), 0)

    def test_exact_mode_keeps_colliding_identities(self):
        first = make_patient(name="Red", ssn=123456789)
        second = make_patient(name=find_colliding_name(123456789, "Red"), ssn=123456789)
        index = IdentityIndex()
        index.put(first)
        index.put(second)
        self.assertIs(index.get(first.ssn, first.name), first)
        self.assertIs(index.get(second.ssn, second.name), second)

    def test_fixed_mode_evicts_on_collision(self):
        """A later put to an occupied slot hides the earlier patient."""
        first = make_patient(name="Red", ssn=123456789)
        second = make_patient(name=find_colliding_name(123456789, "Red"), ssn=123456789)
        index = IdentityIndex(mode=MODE_FIXED, slot_count=101)
        index.put(first)
        with self.assertLogs("er_scheduler.identity_index", level="WARNING"):
            evicted = index.put(second)
        self.assertIs(evicted, first)
        self.assertIsNone(index.get(first.ssn, first.name))
        self.assertIs(index.get(second.ssn, second.name), second)
        self.assertEqual(len(index), 1)

    def test_fixed_mode_never_exceeds_slot_count(self):
        index = IdentityIndex(mode=MODE_FIXED, slot_count=7)
        for i in range(50):
            index.put(make_patient(name=f"P{i}", ssn=100000000 + i))
        self.assertLessEqual(len(index), 7)

    def test_rejects_bad_configuration(self):
        with self.assertRaises(ValueError):
            IdentityIndex(mode="chained")
        with self.assertRaises(ValueError):
            IdentityIndex(mode=MODE_FIXED, slot_count=0)


class TestPriorityQueue(unittest.TestCase):
    """Min-heap behaviour of the waiting list."""

    def test_extract_in_triage_order(self):
        queue = PatientPriorityQueue()
        arrivals = [(3, 805), (2, 807), (1, 809), (1, 700), (2, 100), (3, 2359)]
        for i, (priority, arrival) in enumerate(arrivals):
            queue.insert(make_patient(name=f"P{i}", ssn=100000000 + i, priority=priority, arrival=arrival))

        extracted = []
        while not queue.is_empty():
            extracted.append(queue.extract_min().order_key())
        self.assertEqual(extracted, sorted(arrivals))

    def test_extract_from_empty_raises(self):
        queue = PatientPriorityQueue()
        with self.assertRaises(EmptyQueueError):
            queue.extract_min()
        with self.assertRaises(EmptyQueueError):
            queue.peek()
        self.assertEqual(len(queue), 0)

    def test_peek_all_is_root_first_and_restartable(self):
        queue = PatientPriorityQueue()
        queue.insert(make_patient(name="Green", ssn=777777777, priority=3, arrival=805))
        queue.insert(make_patient(name="Red", ssn=888888888, priority=1, arrival=809))
        queue.insert(make_patient(name="Yellow", ssn=999999999, priority=2, arrival=807))

        first_pass = list(queue.peek_all())
        second_pass = list(queue)
        self.assertEqual(first_pass[0].name, "Red")
        self.assertEqual(len(first_pass), 3)
        self.assertEqual([p.name for p in first_pass], [p.name for p in second_pass])

        queue.extract_min()
        self.assertEqual(len(list(queue.peek_all())), 2)

    def test_order_equivalent_records_both_come_out(self):
        queue = PatientPriorityQueue()
        queue.insert(make_patient(name="Clone1", ssn=272347578, priority=3, arrival=1000))
        queue.insert(make_patient(name="Clone2", ssn=982447888, priority=3, arrival=1000))
        names = {queue.extract_min().name, queue.extract_min().name}
        self.assertEqual(names, {"Clone1", "Clone2"})


if __name__ == "__main__":
    unittest.main(verbosity=2)
