# apps/scheduleapp/tests/test_services.py
from unittest.mock import patch

from django.test import SimpleTestCase
from django.utils import timezone

from apps.scheduleapp.services.data_source import InMemoryScheduleDataSource
from apps.scheduleapp.services.schedule_service import ScheduleService
from core.exceptions import (
    DataSourceException,
    InvalidDataException,
    ResourceNotFoundException,
)
from tests.helpers import booking


def create_test_data_source():
    return InMemoryScheduleDataSource(
        events=[
            booking("b1", "2025-01-01T10:00:00", "2025-01-01T12:00:00"),
            booking("b2", "2025-01-01T11:00:00", "2025-01-01T13:00:00", resource_id="r2"),
            booking("h1", "2025-01-01T00:00:00", "2025-01-02T00:00:00", resource_id="r2", is_all_day=True),
        ],
        resources=[
            {"id": "r1", "name": "Room 1", "order": 1, "group_id": "g1"},
            {"id": "r2", "name": "Room 2", "order": 2, "group_id": "g1"},
        ],
        groups=[{"id": "g1", "name": "Annex"}],
    )


class InMemoryDataSourceTest(SimpleTestCase):
    """Test cases for the in-memory schedule backend"""

    def setUp(self):
        self.data_source = create_test_data_source()

    def test_records_are_copies(self):
        self.data_source.list_events()[0]["title"] = "changed"
        self.assertEqual(self.data_source.list_events()[0]["title"], "Booking b1")

    def test_create_assigns_id(self):
        event = self.data_source.create_event(
            {"start_date": "2025-01-02T09:00:00", "end_date": "2025-01-02T10:00:00", "resource_id": "r1"}
        )
        self.assertTrue(event["id"])
        self.assertEqual(len(self.data_source.list_events()), 4)

    def test_create_requires_dates(self):
        with self.assertRaises(InvalidDataException):
            self.data_source.create_event({"title": "No dates"})

    def test_update_and_delete(self):
        updated = self.data_source.update_event("b1", {"title": "Renamed", "id": "other"})
        self.assertEqual(updated["id"], "b1")
        self.assertEqual(updated["title"], "Renamed")

        self.data_source.delete_event("b1")
        self.assertNotIn("b1", [e["id"] for e in self.data_source.list_events()])

    def test_camel_case_update_of_snake_case_record(self):
        updated = self.data_source.update_event(
            "b1", {"startDate": "2025-01-01T14:00:00", "endDate": "2025-01-01T15:00:00"}
        )

        self.assertEqual(updated["startDate"], "2025-01-01T14:00:00")
        self.assertNotIn("start_date", updated)
        self.assertNotIn("end_date", updated)

        service = ScheduleService(self.data_source)
        self.addCleanup(service.close)
        result = service.resource_availability(("2025-01-01T10:00:00", "2025-01-01T10:30:00"))
        self.assertTrue(result[0]["is_available"])

    def test_unknown_event(self):
        with self.assertRaises(ResourceNotFoundException):
            self.data_source.update_event("missing", {})
        with self.assertRaises(ResourceNotFoundException):
            self.data_source.delete_event("missing")

    def test_default_availability_response(self):
        response = self.data_source.get_resource_availability("2025-01-01", "day")
        self.assertEqual(response["view"], "day")
        self.assertEqual([r["resource_id"] for r in response["resources"]], ["r1", "r2"])
        self.assertFalse(response["resources"][0]["is_available"])


class ScheduleServiceTest(SimpleTestCase):
    """Test cases for the schedule session service"""

    def setUp(self):
        self.data_source = create_test_data_source()
        self.service = ScheduleService(self.data_source)
        self.addCleanup(self.service.close)

    def test_fetch_populates_cache(self):
        with patch.object(
            self.data_source,
            "get_resource_availability",
            wraps=self.data_source.get_resource_availability,
        ) as fetch:
            first = self.service.fetch_resource_availability("2025-01-01T09:00:00", "day")
            second = self.service.fetch_resource_availability("2025-01-01T18:00:00", "day")

        self.assertEqual(fetch.call_count, 1)
        self.assertEqual(first, second)
        self.assertEqual(self.service.get_resource_availability_from_cache("2025-01-01", "day"), first)

    def test_views_are_cached_separately(self):
        self.service.fetch_resource_availability("2025-01-01", "day")
        self.assertIsNone(self.service.get_resource_availability_from_cache("2025-01-01", "week"))

    def test_fetch_failure_returns_empty_list(self):
        with patch.object(
            self.data_source,
            "get_resource_availability",
            side_effect=DataSourceException("Backend unreachable"),
        ):
            with self.assertLogs("apps.scheduleapp.services.schedule_service", level="ERROR"):
                result = self.service.fetch_resource_availability("2025-01-01", "day")

        self.assertEqual(result, [])
        self.assertIsNone(self.service.get_resource_availability_from_cache("2025-01-01", "day"))

    def test_mutations_invalidate_the_whole_cache(self):
        mutations = [
            lambda: self.service.create_event(
                booking("new", "2025-01-05T10:00:00", "2025-01-05T11:00:00")
            ),
            lambda: self.service.update_event("b1", {"title": "Renamed"}),
            lambda: self.service.delete_event("b2"),
        ]
        for mutate in mutations:
            self.service.fetch_resource_availability("2025-01-01", "day")
            self.service.fetch_resource_availability("2025-02-01", "month")

            mutate()

            self.assertIsNone(self.service.get_resource_availability_from_cache("2025-01-01", "day"))
            self.assertIsNone(self.service.get_resource_availability_from_cache("2025-02-01", "month"))

    def test_refetch_after_mutation_sees_new_booking(self):
        before = self.service.fetch_resource_availability("2025-01-03", "day")
        self.assertTrue(before["resources"][0]["is_available"])

        self.service.create_event(booking("new", "2025-01-03T10:00:00", "2025-01-03T11:00:00"))
        after = self.service.fetch_resource_availability("2025-01-03", "day")

        self.assertFalse(after["resources"][0]["is_available"])

    def test_failed_mutation_keeps_cache(self):
        self.service.fetch_resource_availability("2025-01-01", "day")

        with self.assertRaises(ResourceNotFoundException):
            self.service.delete_event("missing")

        self.assertIsNotNone(self.service.get_resource_availability_from_cache("2025-01-01", "day"))

    def test_resource_availability(self):
        result = self.service.resource_availability(
            {"start": "2025-01-01T11:30:00", "end": "2025-01-01T12:30:00"}
        )
        self.assertEqual([r["is_available"] for r in result], [False, False])

        result = self.service.resource_availability(
            {"start": "2025-01-01T11:30:00", "end": "2025-01-01T12:30:00"}, exclude_event_id="b1"
        )
        self.assertTrue(result[0]["is_available"])

    def test_available_resources(self):
        free = self.service.available_resources(("2025-01-02T10:00:00", "2025-01-02T11:00:00"))
        self.assertEqual([r["id"] for r in free], ["r1", "r2"])

        free = self.service.available_resources(("2025-01-01T10:00:00", "2025-01-01T11:00:00"))
        self.assertEqual(free, [])

    def test_find_conflict(self):
        conflict = self.service.find_conflict("2025-01-01T09:30:00", 1, "r1")
        self.assertEqual(conflict["existing_schedule"]["id"], "b1")
        self.assertIsNone(self.service.find_conflict("2025-01-01T12:00:00", 1, "r1"))

    def test_resource_display_names(self):
        self.assertEqual(
            self.service.resource_display_names(),
            {"r1": "Room 1 (Annex)", "r2": "Room 2 (Annex)"},
        )
        self.assertEqual(self.service.resource_display_names(["r9"]), {"r9": "r9"})

    def test_layout_day(self):
        day = self.service.layout_day("2025-01-01", slot_minutes=30, start_hour=8)

        self.assertEqual([e["id"] for e in day["all_day"]], ["h1"])
        self.assertEqual([r["event"]["id"] for r in day["timed"]], ["b1", "b2"])
        self.assertEqual([r["column"] for r in day["timed"]], [0, 1])
        self.assertEqual(day["timed"][0]["position"], {"top": 240.0, "height": 240.0})

    def test_layout_week(self):
        week = self.service.layout_week("2025-01-01", week_starts_on=1)

        self.assertEqual(len(week), 7)
        self.assertEqual(str(week[0]["date"]), "2024-12-30")
        self.assertEqual(len(week[2]["timed"]), 2)
        self.assertEqual(week[3]["timed"], [])

    def test_unparseable_date_uses_today(self):
        with self.assertLogs("apps.scheduleapp.services.schedule_service", level="WARNING"):
            result = self.service.fetch_resource_availability("not-a-date", "day")

        self.assertEqual(result["view"], "day")
        self.assertEqual(
            self.service.get_resource_availability_from_cache(timezone.localdate(), "day"), result
        )

    def test_layout_day_selects_dates_in_session_timezone(self):
        # 23:30 UTC on Jan 1 is already Jan 2 in Tokyo
        late = booking("late", "2025-01-01T23:30:00Z", "2025-01-02T00:30:00Z")
        service = ScheduleService(InMemoryScheduleDataSource(events=[late]), timezone_id="UTC")
        self.addCleanup(service.close)

        day = service.layout_day("2025-01-01", slot_minutes=60, start_hour=0)

        self.assertEqual([r["event"]["id"] for r in day["timed"]], ["late"])
        self.assertEqual(day["timed"][0]["position"], {"top": 1410.0, "height": 60.0})
        self.assertEqual(service.layout_day("2025-01-02")["timed"], [])
