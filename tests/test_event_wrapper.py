import unittest
from datetime import datetime

import pytz

from weekgrid import timezone_utils
from weekgrid.event_wrapper import CalEvent, InvalidEventRange, format_event_time


class TestCalEvent(unittest.TestCase):
    def tearDown(self) -> None:
        timezone_utils.set_timezone(None)

    def test_end_before_start_rejected(self) -> None:
        with self.assertRaises(InvalidEventRange) as ctx:
            CalEvent(id="bad", start=datetime(2024, 6, 10, 12, 0), end=datetime(2024, 6, 10, 11, 0))
        self.assertEqual(ctx.exception.event_id, "bad")
        self.assertIsInstance(ctx.exception, ValueError)

    def test_aware_times_become_local_wall_clock(self) -> None:
        timezone_utils.set_timezone("Europe/Amsterdam")
        e = CalEvent(
            id="utc",
            start=datetime(2024, 6, 10, 7, 0, tzinfo=pytz.UTC),
            end=datetime(2024, 6, 10, 8, 0, tzinfo=pytz.UTC),
        )
        self.assertEqual(e.start, datetime(2024, 6, 10, 9, 0))
        self.assertIsNone(e.start.tzinfo)
        self.assertEqual(e.duration_minutes, 60)

    def test_naive_times_are_kept(self) -> None:
        e = CalEvent(id="n", start=datetime(2024, 6, 10, 7, 0), end=datetime(2024, 6, 10, 7, 0))
        self.assertEqual(e.start, datetime(2024, 6, 10, 7, 0))
        self.assertEqual(e.duration_minutes, 0)


class TestFormatEventTime(unittest.TestCase):
    def test_labels(self) -> None:
        e = CalEvent(id="a", start=datetime(2024, 6, 10, 9, 0), end=datetime(2024, 6, 10, 10, 30))
        self.assertEqual(format_event_time(e, e.duration_minutes), "09:00 - 10:30")
        short = CalEvent(id="b", start=datetime(2024, 6, 10, 9, 0), end=datetime(2024, 6, 10, 9, 30))
        self.assertEqual(format_event_time(short, short.duration_minutes), "09:00")
        all_day = CalEvent(id="c", start=datetime(2024, 6, 10), end=datetime(2024, 6, 10, 23, 59), all_day=True)
        self.assertEqual(format_event_time(all_day, all_day.duration_minutes), "All day")


if __name__ == "__main__":
    unittest.main()
