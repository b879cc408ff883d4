import contextlib
import io
import tempfile
import unittest
from datetime import datetime
from pathlib import Path

from weekgrid.ics_subscription import ICSSubscription, parse_ical_events

ICS_LINES = [
    "BEGIN:VCALENDAR",
    "VERSION:2.0",
    "PRODID:-//weekgrid//tests//EN",
    "BEGIN:VEVENT",
    "UID:standup",
    "SUMMARY:Standup",
    "DTSTART:20240610T090000",
    "DTEND:20240610T103000",
    "END:VEVENT",
    "BEGIN:VEVENT",
    "UID:holiday",
    "SUMMARY:Holiday",
    "DTSTART;VALUE=DATE:20240612",
    "DTEND;VALUE=DATE:20240613",
    "END:VEVENT",
    "BEGIN:VEVENT",
    "UID:trip",
    "SUMMARY:Trip",
    "DTSTART;VALUE=DATE:20240613",
    "DTEND;VALUE=DATE:20240616",
    "END:VEVENT",
    "BEGIN:VEVENT",
    "UID:call",
    "SUMMARY:Call",
    "DTSTART:20240611T140000",
    "DURATION:PT45M",
    "END:VEVENT",
    "BEGIN:VEVENT",
    "UID:broken",
    "SUMMARY:Broken",
    "DTSTART:20240610T120000",
    "DTEND:20240610T110000",
    "END:VEVENT",
    "END:VCALENDAR",
]
ICS_TEXT = "\r\n".join(ICS_LINES) + "\r\n"


class TestParseIcal(unittest.TestCase):
    def setUp(self) -> None:
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr):
            self.events = {e.id: e for e in parse_ical_events(ICS_TEXT, color="#123456")}
        self.stderr = stderr.getvalue()

    def test_invalid_range_skipped(self) -> None:
        self.assertNotIn("broken", self.events)
        self.assertIn("broken", self.stderr)

    def test_timed_event(self) -> None:
        standup = self.events["standup"]
        self.assertEqual(standup.start, datetime(2024, 6, 10, 9, 0))
        self.assertEqual(standup.end, datetime(2024, 6, 10, 10, 30))
        self.assertFalse(standup.all_day)
        self.assertEqual(standup.title, "Standup")
        self.assertEqual(standup.color, "#123456")

    def test_duration_without_dtend(self) -> None:
        self.assertEqual(self.events["call"].end, datetime(2024, 6, 11, 14, 45))

    def test_all_day_end_is_inclusive(self) -> None:
        holiday = self.events["holiday"]
        self.assertTrue(holiday.all_day)
        self.assertEqual(holiday.start, datetime(2024, 6, 12, 0, 0))
        self.assertEqual(holiday.end, datetime(2024, 6, 12, 23, 59))
        trip = self.events["trip"]
        self.assertEqual(trip.end, datetime(2024, 6, 15, 23, 59))


class TestICSSubscription(unittest.TestCase):
    def test_reads_local_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "calendar.ics"
            path.write_text(ICS_TEXT, encoding="utf-8")
            sub = ICSSubscription(name="Local", url=str(path), color="#abcdef")
            with contextlib.redirect_stderr(io.StringIO()):
                events = sub.events()
        self.assertIsNone(sub.error)
        self.assertIsNotNone(sub.last_fetch)
        self.assertEqual(len(events), 4)
        self.assertTrue(all(e.id.startswith(sub.id + ":") for e in events))
        self.assertTrue(all(e.color == "#abcdef" for e in events))

    def test_file_url(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "calendar.ics"
            path.write_text(ICS_TEXT, encoding="utf-8")
            sub = ICSSubscription(name="Local", url=path.as_uri())
            self.assertTrue(sub.fetch())
        self.assertIn("BEGIN:VCALENDAR", sub.raw_data)

    def test_missing_file_reports_error(self) -> None:
        sub = ICSSubscription(name="Missing", url="/nonexistent/weekgrid/calendar.ics")
        self.assertFalse(sub.fetch())
        self.assertIn("File error", sub.error)
        self.assertEqual(sub.events(), [])


if __name__ == "__main__":
    unittest.main()
