"""
Full layout pass for the week and day views.

Every pass builds fresh, immutable output. LayoutCache only short-circuits
a pass whose inputs are identical to the previous one.
"""

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from .banner_layout import BannerEntry, layout_banner, layout_banner_day
from .column_layout import PositionedEvent, layout_day_events
from .config import LayoutConfig
from .event_wrapper import CalEvent
from .week_window import WeekWindow, bucket_events


@dataclass(frozen=True)
class DayLayout:
    """Layout of a single day column."""
    day: date
    positioned: tuple[PositionedEvent, ...]
    banner: tuple[BannerEntry, ...]


@dataclass(frozen=True)
class WeekLayout:
    """Layout of the 7-day window."""
    window: WeekWindow
    all_day_events: tuple[CalEvent, ...]
    positioned: tuple[tuple[PositionedEvent, ...], ...]
    banner: tuple[tuple[BannerEntry, ...], ...]

    @property
    def has_all_day_section(self) -> bool:
        return bool(self.all_day_events)

    def day(self, index: int) -> DayLayout:
        return DayLayout(
            day=self.window.days[index],
            positioned=self.positioned[index],
            banner=self.banner[index],
        )

    def days(self) -> list[DayLayout]:
        return [self.day(i) for i in range(len(self.window.days))]


def compute_week_layout(
    current_date: date,
    events: Iterable[CalEvent],
    layout: Optional[LayoutConfig] = None,
) -> WeekLayout:
    """Lay out the week containing current_date."""
    layout = layout or LayoutConfig()
    window = WeekWindow.for_date(current_date, layout.week_starts_on)
    all_day_events, timed_by_day = bucket_events(window.days, events)

    positioned = tuple(
        layout_day_events(day_events, day, layout.hour_height)
        for day, day_events in zip(window.days, timed_by_day)
    )
    return WeekLayout(
        window=window,
        all_day_events=tuple(all_day_events),
        positioned=positioned,
        banner=layout_banner(all_day_events, window.days),
    )


def compute_day_layout(
    day: date,
    events: Iterable[CalEvent],
    layout: Optional[LayoutConfig] = None,
) -> DayLayout:
    """Lay out a single day; the day itself acts as the window start."""
    layout = layout or LayoutConfig()
    all_day_events, timed_by_day = bucket_events([day], events)
    return DayLayout(
        day=day,
        positioned=layout_day_events(timed_by_day[0], day, layout.hour_height),
        banner=layout_banner_day(all_day_events, day, 0, day),
    )


class LayoutCache:
    """Remembers the last week layout and reuses it for identical inputs."""

    def __init__(self):
        self._key = None
        self._layout: Optional[WeekLayout] = None

    def get(
        self,
        current_date: date,
        events: Iterable[CalEvent],
        layout: LayoutConfig,
    ) -> WeekLayout:
        events = tuple(events)
        key = (current_date, events, layout.hour_height, layout.week_starts_on)
        if self._layout is None or key != self._key:
            self._layout = compute_week_layout(current_date, events, layout)
            self._key = key
        return self._layout
