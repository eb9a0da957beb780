# tests/algorithms/test_conflict_detector.py
from django.test import SimpleTestCase

from algorithms.availability.conflict_detector import ConflictDetector
from tests.helpers import at, booking


class ConflictDetectorTest(SimpleTestCase):
    """Test cases for double-booking detection"""

    def setUp(self):
        self.detector = ConflictDetector()
        self.existing = [
            booking("1", at(2025, 1, 1, 10), at(2025, 1, 1, 12)),
            booking("2", at(2025, 1, 1, 10), at(2025, 1, 1, 12), resource_id="r2"),
            booking("3", at(2025, 1, 1, 14), at(2025, 1, 1, 15), status="cancelled"),
        ]

    def test_double_booking(self):
        candidate = booking("new", at(2025, 1, 1, 11), at(2025, 1, 1, 13))
        conflict = self.detector.check_schedule_conflict(candidate, self.existing)

        self.assertEqual(conflict["resource_id"], "r1")
        self.assertIs(conflict["existing_schedule"], self.existing[0])
        self.assertIs(conflict["new_schedule"], candidate)
        self.assertEqual(conflict["conflict_type"], "double-booking")

    def test_other_resource_is_ignored(self):
        candidate = booking("new", at(2025, 1, 1, 11), at(2025, 1, 1, 13), resource_id="r3")
        self.assertIsNone(self.detector.check_schedule_conflict(candidate, self.existing))

    def test_cancelled_booking_is_ignored(self):
        candidate = booking("new", at(2025, 1, 1, 14), at(2025, 1, 1, 14, 30))
        self.assertIsNone(self.detector.check_schedule_conflict(candidate, self.existing))

    def test_edited_booking_does_not_conflict_with_itself(self):
        edited = booking("1", at(2025, 1, 1, 11), at(2025, 1, 1, 12, 30))
        self.assertIsNone(self.detector.check_schedule_conflict(edited, self.existing))

    def test_adjacent_booking(self):
        candidate = booking("new", at(2025, 1, 1, 12), at(2025, 1, 1, 13))
        self.assertIsNone(self.detector.check_schedule_conflict(candidate, self.existing))

    def test_find_conflict_by_duration(self):
        conflict = self.detector.find_conflict("2025-01-01T09:00:00", 1.5, "r1", self.existing)
        self.assertEqual(conflict["existing_schedule"]["id"], "1")

        self.assertIsNone(self.detector.find_conflict("2025-01-01T09:00:00", 1, "r1", self.existing))

    def test_find_conflict_without_resource_or_start(self):
        self.assertIsNone(self.detector.find_conflict("2025-01-01T11:00:00", 1, None, self.existing))
        self.assertIsNone(self.detector.find_conflict("not a date", 1, "r1", self.existing))

    def test_find_conflict_skips_current_event(self):
        self.assertIsNone(
            self.detector.find_conflict("2025-01-01T11:00:00", 1, "r1", self.existing, current_event_id="1")
        )

    def test_detect_conflicts(self):
        events = self.existing + [
            booking("4", at(2025, 1, 1, 11), at(2025, 1, 1, 11, 30)),
            booking("5", at(2025, 1, 1, 14), at(2025, 1, 1, 15)),
            booking("6", at(2025, 1, 1, 12), at(2025, 1, 1, 13)),
        ]
        self.assertEqual(self.detector.detect_conflicts(events), {"1", "4"})
