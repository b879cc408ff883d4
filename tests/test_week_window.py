import unittest
from datetime import datetime, date

from weekgrid.event_wrapper import CalEvent
from weekgrid.week_window import (
    WeekWindow,
    bucket_events,
    get_week_start,
    is_multi_day_event,
    touches_day,
)


def ev(uid, start, end, all_day=False):
    return CalEvent(id=uid, start=start, end=end, title=uid, all_day=all_day)


class TestWeekWindow(unittest.TestCase):
    def test_week_starts_on_sunday_by_default(self) -> None:
        # 2024-06-12 is a Wednesday
        self.assertEqual(get_week_start(date(2024, 6, 12)), date(2024, 6, 9))
        self.assertEqual(get_week_start(date(2024, 6, 9)), date(2024, 6, 9))
        self.assertEqual(get_week_start(date(2024, 6, 15)), date(2024, 6, 9))

    def test_week_starts_on_monday(self) -> None:
        self.assertEqual(get_week_start(date(2024, 6, 12), 1), date(2024, 6, 10))
        self.assertEqual(get_week_start(date(2024, 6, 9), 1), date(2024, 6, 3))

    def test_invalid_week_start(self) -> None:
        with self.assertRaises(ValueError):
            get_week_start(date(2024, 6, 12), 7)

    def test_window_days_and_contains(self) -> None:
        window = WeekWindow.for_date(date(2024, 6, 12))
        self.assertEqual(len(window.days), 7)
        self.assertEqual(window.start, date(2024, 6, 9))
        self.assertEqual(window.end, date(2024, 6, 15))
        self.assertTrue(window.contains(datetime(2024, 6, 9, 0, 0)))
        self.assertTrue(window.contains(datetime(2024, 6, 15, 23, 59)))
        self.assertFalse(window.contains(datetime(2024, 6, 16, 0, 0)))
        self.assertFalse(window.contains(datetime(2024, 6, 8, 23, 59)))


class TestClassifier(unittest.TestCase):
    def test_full_day_span_is_multi_day(self) -> None:
        e = ev("a", datetime(2024, 6, 10, 10, 0), datetime(2024, 6, 11, 10, 0))
        self.assertTrue(is_multi_day_event(e))

    def test_same_day_is_timed(self) -> None:
        e = ev("a", datetime(2024, 6, 10, 10, 0), datetime(2024, 6, 10, 23, 59))
        self.assertFalse(is_multi_day_event(e))

    def test_crossing_midnight_is_multi_day(self) -> None:
        e = ev("late", datetime(2024, 6, 10, 23, 0), datetime(2024, 6, 11, 1, 0))
        self.assertTrue(is_multi_day_event(e))

    def test_flagged_all_day(self) -> None:
        e = ev("a", datetime(2024, 6, 10, 0, 0), datetime(2024, 6, 10, 0, 0), all_day=True)
        self.assertTrue(is_multi_day_event(e))


class TestDayBucketer(unittest.TestCase):
    def setUp(self) -> None:
        self.days = WeekWindow.for_date(date(2024, 6, 12)).days

    def test_touches_start_end_and_middle(self) -> None:
        e = ev("trip", datetime(2024, 6, 10, 15, 0), datetime(2024, 6, 13, 9, 0))
        self.assertTrue(touches_day(e, date(2024, 6, 10)))
        self.assertTrue(touches_day(e, date(2024, 6, 11)))
        self.assertTrue(touches_day(e, date(2024, 6, 13)))
        self.assertFalse(touches_day(e, date(2024, 6, 9)))
        self.assertFalse(touches_day(e, date(2024, 6, 14)))

    def test_timed_event_lands_on_its_day_only(self) -> None:
        e = ev("meeting", datetime(2024, 6, 11, 9, 0), datetime(2024, 6, 11, 10, 0))
        all_day, timed = bucket_events(self.days, [e])
        self.assertEqual(all_day, [])
        self.assertEqual([len(d) for d in timed], [0, 0, 1, 0, 0, 0, 0])

    def test_each_event_routed_once(self) -> None:
        timed_event = ev("t", datetime(2024, 6, 11, 9, 0), datetime(2024, 6, 11, 10, 0))
        banner_event = ev("b", datetime(2024, 6, 11, 9, 0), datetime(2024, 6, 12, 10, 0))
        all_day, timed = bucket_events(self.days, [timed_event, banner_event])
        self.assertEqual(all_day, [banner_event])
        flat = [e for day in timed for e in day]
        self.assertEqual(flat, [timed_event])

    def test_events_outside_window_are_dropped(self) -> None:
        before = ev("old", datetime(2024, 6, 1, 9, 0), datetime(2024, 6, 1, 10, 0))
        old_banner = ev("old-trip", datetime(2024, 6, 1, 9, 0), datetime(2024, 6, 3, 10, 0))
        all_day, timed = bucket_events(self.days, [before, old_banner])
        self.assertEqual(all_day, [])
        self.assertTrue(all(not d for d in timed))

    def test_banner_event_spanning_whole_window(self) -> None:
        e = ev("sabbatical", datetime(2024, 5, 1, 9, 0), datetime(2024, 7, 1, 10, 0))
        all_day, _ = bucket_events(self.days, [e])
        self.assertEqual(all_day, [e])


if __name__ == "__main__":
    unittest.main()
