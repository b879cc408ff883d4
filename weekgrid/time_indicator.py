"""
Current time indicator.

Computes where "now" sits inside a day column and whether it belongs to
the displayed day or week. CurrentTimeIndicator refreshes that value on a
QTimer while a view is active.
"""

from dataclasses import dataclass
from datetime import datetime, date
from enum import Enum
from typing import Callable, Optional

from PySide6.QtCore import QObject, QTimer, Signal

from .timezone_utils import local_now
from .week_window import WeekWindow

MINUTES_PER_DAY = 24 * 60


class ViewType(Enum):
    DAY = "day"
    WEEK = "week"


@dataclass(frozen=True)
class TimePosition:
    position: float  # Percent of the day height
    visible: bool
    day_index: Optional[int] = None  # Column of today when visible


def time_position(now: datetime) -> float:
    """Offset of now within its day, as a percentage of the day height."""
    total_minutes = now.hour * 60 + now.minute
    return total_minutes / MINUTES_PER_DAY * 100


def is_time_visible(
    now: datetime,
    current_date: date,
    view: ViewType = ViewType.WEEK,
    week_starts_on: int = 0,
) -> bool:
    """Check if now falls inside the displayed day or week."""
    if view == ViewType.DAY:
        return now.date() == current_date
    return WeekWindow.for_date(current_date, week_starts_on).contains(now)


def current_time_position(
    now: datetime,
    current_date: date,
    view: ViewType = ViewType.WEEK,
    week_starts_on: int = 0,
) -> TimePosition:
    if view == ViewType.DAY:
        day_index = 0 if now.date() == current_date else None
    else:
        window = WeekWindow.for_date(current_date, week_starts_on)
        day_index = window.days.index(now.date()) if window.contains(now) else None
    return TimePosition(
        position=time_position(now),
        visible=day_index is not None,
        day_index=day_index,
    )


class CurrentTimeIndicator(QObject):
    """
    Recurring current-time computation bound to a view's lifetime.

    start() computes once immediately and then every interval_ms; stop()
    cancels the timer. Changing the displayed date restarts the timer for
    the new window.
    """

    # position (percent of day), visible
    changed = Signal(float, bool)

    def __init__(
        self,
        current_date: date,
        view: ViewType = ViewType.WEEK,
        week_starts_on: int = 0,
        interval_ms: int = 60000,
        clock: Optional[Callable[[], datetime]] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._date = current_date
        self._view = view
        self._week_starts_on = week_starts_on
        self._clock = clock or local_now
        self._current = TimePosition(position=0.0, visible=False)

        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self.update)

    @property
    def current(self) -> TimePosition:
        return self._current

    @property
    def position(self) -> float:
        return self._current.position

    @property
    def visible(self) -> bool:
        return self._current.visible

    @property
    def interval_ms(self) -> int:
        return self._timer.interval()

    def is_active(self) -> bool:
        return self._timer.isActive()

    def start(self):
        """Compute now and start the recurring timer."""
        self.update()
        self._timer.start()

    def stop(self):
        self._timer.stop()

    def set_date(self, current_date: date):
        """Track a different day/week, restarting the timer if it was running."""
        was_active = self.is_active()
        self.stop()
        self._date = current_date
        if was_active:
            self.start()

    def update(self) -> TimePosition:
        self._current = current_time_position(
            self._clock(), self._date, self._view, self._week_starts_on
        )
        self.changed.emit(self._current.position, self._current.visible)
        return self._current
