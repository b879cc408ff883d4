"""
Week view presenter.

Holds the displayed date and events, recomputes the layout when either
changes, owns the current time indicator and forwards interactions from
the rendering collaborators to the application.
"""

from datetime import datetime, date, timedelta
from functools import partial
from typing import Callable, Iterable, Optional

from PySide6.QtCore import QObject, Signal

from weekgrid.config import LayoutConfig
from weekgrid.event_wrapper import CalEvent, format_event_time
from weekgrid.time_indicator import CurrentTimeIndicator, TimePosition, ViewType
from weekgrid.week_layout import LayoutCache, WeekLayout
from weekgrid.week_window import day_start
from .collaborators import BannerVisual, EventVisual, SlotCell

# Quarter-hour cells
SLOTS_PER_HOUR = 4
SLOTS_PER_DAY = 24 * SLOTS_PER_HOUR


class WeekViewPresenter(QObject):
    """Layout and interaction state of a week grid."""

    layout_changed = Signal(object)  # WeekLayout
    event_selected = Signal(object)  # CalEvent
    event_create_requested = Signal(object)  # datetime
    time_indicator_changed = Signal(float, bool)  # position (percent), visible

    def __init__(
        self,
        layout_config: Optional[LayoutConfig] = None,
        current_date: Optional[date] = None,
        on_event_select: Optional[Callable[[CalEvent], None]] = None,
        on_event_create: Optional[Callable[[datetime], None]] = None,
        clock: Optional[Callable[[], datetime]] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._layout_config = layout_config or LayoutConfig()
        self._date = current_date or date.today()
        self._events: tuple[CalEvent, ...] = ()
        self._on_event_select = on_event_select
        self._on_event_create = on_event_create
        self._cache = LayoutCache()

        self._time_indicator = CurrentTimeIndicator(
            self._date,
            view=ViewType.WEEK,
            week_starts_on=self._layout_config.week_starts_on,
            interval_ms=self._layout_config.time_indicator_interval * 1000,
            clock=clock,
            parent=self,
        )
        self._time_indicator.changed.connect(self.time_indicator_changed.emit)

    @property
    def current_date(self) -> date:
        return self._date

    @property
    def events(self) -> tuple[CalEvent, ...]:
        return self._events

    @property
    def time_indicator(self) -> CurrentTimeIndicator:
        return self._time_indicator

    @property
    def time_position(self) -> TimePosition:
        return self._time_indicator.current

    def layout(self) -> WeekLayout:
        return self._cache.get(self._date, self._events, self._layout_config)

    def set_date(self, d: date):
        if d == self._date:
            return
        self._date = d
        self._time_indicator.set_date(d)
        self.layout_changed.emit(self.layout())

    def set_events(self, events: Iterable[CalEvent]):
        self._events = tuple(events)
        self.layout_changed.emit(self.layout())

    # ==================== Lifecycle ====================

    def activate(self):
        """View became visible: start tracking the current time."""
        self._time_indicator.start()

    def deactivate(self):
        """View went away: cancel the current time timer."""
        self._time_indicator.stop()

    def is_active(self) -> bool:
        return self._time_indicator.is_active()

    # ==================== Interaction ====================

    def select_event(self, event: CalEvent):
        self.event_selected.emit(event)
        if self._on_event_select is not None:
            self._on_event_select(event)

    @staticmethod
    def slot_start_time(day: date, hour: float) -> datetime:
        """Start time of the cell at the given fractional hour."""
        return day_start(day) + timedelta(minutes=round(hour * 60))

    def create_at(self, day: date, hour: float) -> datetime:
        start_time = self.slot_start_time(day, hour)
        self.event_create_requested.emit(start_time)
        if self._on_event_create is not None:
            self._on_event_create(start_time)
        return start_time

    def populate(
        self,
        event_factory: Callable[[date], EventVisual],
        banner_factory: Callable[[date], BannerVisual],
        cell_factory: Optional[Callable[[date], SlotCell]] = None,
    ) -> WeekLayout:
        """
        Hand the current layout to the rendering collaborators.

        Factories are called with the day the visual belongs to. Cells are
        only created when a cell_factory is given.
        """
        layout = self.layout()
        for day_layout in layout.days():
            day = day_layout.day
            if cell_factory is not None:
                for slot in range(SLOTS_PER_DAY):
                    hour = slot / SLOTS_PER_HOUR
                    cell_factory(day).bind(day, hour, partial(self.create_at, day, hour))
            for entry in day_layout.banner:
                banner_factory(day).show_banner(entry, partial(self.select_event, entry.event))
            for positioned in day_layout.positioned:
                event = positioned.event
                time_label = format_event_time(event, event.duration_minutes)
                event_factory(day).show_event(positioned, time_label, partial(self.select_event, event))
        return layout
