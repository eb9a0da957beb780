# tests/algorithms/test_day_grid.py
from datetime import date

from django.test import SimpleTestCase

from algorithms.layout.day_grid import (
    civil_date,
    current_time_position,
    events_for_date,
    generate_time_slots,
    is_current_time_in_range,
    sort_events_by_time,
    split_all_day,
    week_dates,
)
from tests.helpers import at, booking


class TimeGridTest(SimpleTestCase):
    def test_time_slots(self):
        self.assertEqual(generate_time_slots(30, 8, 10), ["08:00", "08:30", "09:00", "09:30"])
        self.assertEqual(len(generate_time_slots(15, 0, 24)), 96)
        self.assertEqual(generate_time_slots(0, 8, 10), [])

    def test_time_slots_default_hours(self):
        slots = generate_time_slots(60)
        self.assertEqual(slots[0], "08:00")
        self.assertEqual(slots[-1], "19:00")

    def test_current_time_position(self):
        self.assertEqual(current_time_position(30, 8, now=at(2025, 1, 1, 9, 30)), 180.0)
        self.assertEqual(current_time_position(60, 8, now=at(2025, 1, 1, 7)), -60.0)

    def test_current_time_in_range(self):
        self.assertTrue(is_current_time_in_range(8, 20, now=at(2025, 1, 1, 8)))
        self.assertFalse(is_current_time_in_range(8, 20, now=at(2025, 1, 1, 20)))
        self.assertFalse(is_current_time_in_range(8, 20, now=at(2025, 1, 1, 3)))


class EventListTest(SimpleTestCase):
    def setUp(self):
        self.events = [
            booking("late", at(2025, 1, 1, 18), at(2025, 1, 1, 19)),
            booking("holiday", at(2025, 1, 1), at(2025, 1, 2), is_all_day=True),
            booking("early", at(2025, 1, 1, 8), at(2025, 1, 1, 9)),
            booking("tomorrow", at(2025, 1, 2, 8), at(2025, 1, 2, 9)),
        ]

    def test_events_for_date(self):
        result = events_for_date(self.events, date(2025, 1, 1))
        self.assertEqual([e["id"] for e in result], ["late", "holiday", "early"])
        self.assertEqual(events_for_date(self.events, "garbage"), [])

    def test_events_for_date_uses_local_date(self):
        # 15:30 UTC on Jan 1 is 00:30 on Jan 2 in Tokyo
        event = booking("x", "2025-01-01T15:30:00Z", "2025-01-01T16:30:00Z")
        self.assertEqual(events_for_date([event], "2025-01-02"), [event])

    def test_events_for_date_in_calendar_timezone(self):
        event = booking("x", "2025-01-01T15:30:00Z", "2025-01-01T16:30:00Z")
        self.assertEqual(events_for_date([event], date(2025, 1, 1), "UTC"), [event])
        self.assertEqual(events_for_date([event], date(2025, 1, 2), "UTC"), [])

    def test_civil_date(self):
        self.assertEqual(civil_date(at(2025, 1, 2, 8), "UTC"), date(2025, 1, 1))
        self.assertEqual(civil_date(at(2025, 1, 2, 8)), date(2025, 1, 2))
        self.assertEqual(civil_date(at(2025, 1, 2, 8), "Not/AZone"), date(2025, 1, 2))
        self.assertEqual(civil_date(date(2025, 1, 2), "UTC"), date(2025, 1, 2))

    def test_split_all_day(self):
        all_day, timed = split_all_day(self.events)
        self.assertEqual([e["id"] for e in all_day], ["holiday"])
        self.assertEqual([e["id"] for e in timed], ["late", "early", "tomorrow"])

    def test_sort_events_by_time(self):
        events = self.events + [booking("undated", None, None)]
        result = sort_events_by_time(events)
        self.assertEqual(
            [e["id"] for e in result], ["holiday", "early", "late", "tomorrow", "undated"]
        )

    def test_week_dates(self):
        days = week_dates("2025-01-01", week_starts_on=1)
        self.assertEqual(days[0], date(2024, 12, 30))
        self.assertEqual(days[-1], date(2025, 1, 5))
        self.assertEqual(len(days), 7)
