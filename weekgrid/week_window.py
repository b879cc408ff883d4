"""
Week window, interval classification and day bucketing.

An event is either a banner event (all-day or crossing a date line) or a
timed event for the grid, never both.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, date, time as dt_time
from typing import Iterable

from .event_wrapper import CalEvent

DAYS_PER_WEEK = 7


def day_start(day: date) -> datetime:
    """Local midnight at the beginning of the given day."""
    return datetime.combine(day, dt_time.min)


def get_week_start(d: date, week_starts_on: int = 0) -> date:
    """
    First day of the week containing d.

    week_starts_on counts from Sunday: 0=Sunday, 1=Monday, ... 6=Saturday.
    """
    if not 0 <= week_starts_on <= 6:
        raise ValueError(f"week_starts_on must be in 0..6, got {week_starts_on}")
    # isoweekday(): Monday=1 .. Sunday=7, so % 7 gives Sunday=0
    offset = (d.isoweekday() % 7 - week_starts_on) % 7
    return d - timedelta(days=offset)


@dataclass(frozen=True)
class WeekWindow:
    """The contiguous 7-day span currently displayed."""
    start: date
    days: tuple[date, ...]

    @classmethod
    def for_date(cls, current_date: date, week_starts_on: int = 0) -> 'WeekWindow':
        start = get_week_start(current_date, week_starts_on)
        days = tuple(start + timedelta(days=i) for i in range(DAYS_PER_WEEK))
        return cls(start=start, days=days)

    @property
    def end(self) -> date:
        return self.days[-1]

    def contains(self, dt: datetime) -> bool:
        """True if dt falls anywhere between the first midnight and the end of the last day."""
        return self.start <= dt.date() <= self.end


def is_multi_day_event(event: CalEvent) -> bool:
    """
    Check if an event belongs in the all-day banner.

    Uses the calendar-date difference, not the duration: 23:00 to 01:00 the
    next day is a multi-day event.
    """
    return event.all_day or (event.end.date() - event.start.date()).days >= 1


def touches_day(event: CalEvent, day: date) -> bool:
    """Check if the event is visible on the given day."""
    midnight = day_start(day)
    return (
        event.start.date() == day
        or event.end.date() == day
        or event.start < midnight < event.end
    )


def bucket_events(
    days: Iterable[date],
    events: Iterable[CalEvent],
) -> tuple[list[CalEvent], list[list[CalEvent]]]:
    """
    Distribute events across the days of a window.

    Returns:
        (all_day_events, timed_events_by_day) where all_day_events holds the
        banner events touching at least one day and timed_events_by_day[i]
        the grid events touching days[i].
    """
    days = list(days)
    all_day_events: list[CalEvent] = []
    timed_by_day: list[list[CalEvent]] = [[] for _ in days]

    for event in events:
        if is_multi_day_event(event):
            if any(touches_day(event, day) for day in days):
                all_day_events.append(event)
        else:
            for day_idx, day in enumerate(days):
                if touches_day(event, day):
                    timed_by_day[day_idx].append(event)

    return all_day_events, timed_by_day
