"""
All-day / multi-day banner layout.

Each day cell of the banner lists the banner events touching that day.
A long event is drawn as one segment per day; the title is only drawn on
the event's first day, or on the first day of the window when the event
was already running before the window began.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Sequence

from .event_wrapper import CalEvent
from .week_window import day_start, touches_day


class BorderRounding(Enum):
    """Which ends of a banner segment are rounded."""
    BOTH = "both"
    LEFT = "left"
    RIGHT = "right"
    NONE = "none"


def border_rounding(is_first_day: bool, is_last_day: bool) -> BorderRounding:
    if is_first_day and is_last_day:
        return BorderRounding.BOTH
    elif is_first_day:
        return BorderRounding.LEFT
    elif is_last_day:
        return BorderRounding.RIGHT
    return BorderRounding.NONE


@dataclass(frozen=True)
class BannerEntry:
    """One segment of a banner event inside a single day cell."""
    event: CalEvent
    day: date
    is_first_day: bool
    is_last_day: bool
    show_title: bool
    rounding: BorderRounding
    draggable: bool


def is_single_day_all_day(event: CalEvent) -> bool:
    """A flagged all-day event that starts and ends on the same date."""
    return event.all_day and event.start.date() == event.end.date()


def layout_banner_day(
    all_day_events: Sequence[CalEvent],
    day: date,
    day_index: int,
    window_start: date,
) -> tuple[BannerEntry, ...]:
    """
    Build the banner entries for one day cell.

    Args:
        all_day_events: Banner events of the window
        day: The day of this cell
        day_index: Position of the day in the window (0 = first column)
        window_start: First day of the window
    """
    window_midnight = day_start(window_start)
    entries = []
    day_events = sorted(
        (e for e in all_day_events if touches_day(e, day)),
        key=lambda e: (e.start, e.id),
    )
    for event in day_events:
        is_first_day = event.start.date() == day
        is_last_day = event.end.date() == day
        is_first_visible_day = day_index == 0 and event.start < window_midnight
        entries.append(BannerEntry(
            event=event,
            day=day,
            is_first_day=is_first_day,
            is_last_day=is_last_day,
            show_title=is_first_day or is_first_visible_day,
            rounding=border_rounding(is_first_day, is_last_day),
            draggable=is_single_day_all_day(event),
        ))
    return tuple(entries)


def layout_banner(
    all_day_events: Sequence[CalEvent],
    days: Sequence[date],
) -> tuple[tuple[BannerEntry, ...], ...]:
    """Banner entries for every day of the window, in day order."""
    if not days:
        return ()
    window_start = days[0]
    return tuple(
        layout_banner_day(all_day_events, day, day_idx, window_start)
        for day_idx, day in enumerate(days)
    )
