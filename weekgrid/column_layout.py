"""
Column packing for the timed events of a single day.

Overlapping events are cascaded: column 0 spans the full day width and
every further column is shifted right by 10% and narrowed to 90%.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, date

from .event_wrapper import CalEvent
from .week_window import day_start

COLUMN_OFFSET = 0.1
COLUMN_WIDTH = 0.9
BASE_Z_INDEX = 10


@dataclass(frozen=True)
class EventPortion:
    """
    A day-specific portion of an event.

    Represents the visible part of an event on a specific day.
    For example, an event "Sat 17:00 - Sun 04:00" creates two portions:
    - Saturday: visible 17:00-24:00
    - Sunday: visible 00:00-04:00
    """
    event: CalEvent
    display_date: date
    visible_start: datetime
    visible_end: datetime

    @staticmethod
    def create_for_day(event: CalEvent, day: date) -> 'EventPortion':
        """Clip the event to the [00:00, 24:00) range of the given day."""
        midnight = day_start(day)
        start = event.start if event.start.date() == day else midnight
        end = event.end if event.end.date() == day else midnight + timedelta(days=1)
        return EventPortion(event, day, start, end)

    def _hour_of(self, dt: datetime) -> float:
        # Minutes since midnight, so the clipped end of the day reads 24.0
        minutes = (dt - day_start(self.display_date)) // timedelta(minutes=1)
        return minutes / 60.0

    @property
    def start_hour(self) -> float:
        return self._hour_of(self.visible_start)

    @property
    def end_hour(self) -> float:
        return self._hour_of(self.visible_end)

    def overlaps(self, other: 'EventPortion') -> bool:
        """Open-interval overlap: touching endpoints do not count."""
        return self.visible_start < other.visible_end and other.visible_start < self.visible_end


@dataclass(frozen=True)
class PositionedEvent:
    """Rectangle of a timed event inside its day column."""
    event: CalEvent
    top: float
    height: float
    left: float
    width: float
    z_index: int
    column: int
    portion: EventPortion


def column_geometry(column: int) -> tuple[float, float]:
    """(left, width) as fractions of the day column for the given column index."""
    if column == 0:
        return 0.0, 1.0
    return column * COLUMN_OFFSET, COLUMN_WIDTH


def _sort_key(portion: EventPortion):
    # Longer events first on ties; id keeps the order independent of the input
    return (portion.visible_start, -portion.event.duration, portion.event.id)


def assign_columns(portions: list[EventPortion]) -> list[tuple[EventPortion, int]]:
    """
    Greedily assign each portion to the first column it fits in.

    Portions are processed in start order, so the number of columns equals
    the largest set of mutually overlapping portions.
    """
    columns: list[list[EventPortion]] = []
    assigned: list[tuple[EventPortion, int]] = []

    for portion in sorted(portions, key=_sort_key):
        for col_idx, column in enumerate(columns):
            if not any(portion.overlaps(placed) for placed in column):
                column.append(portion)
                assigned.append((portion, col_idx))
                break
        else:
            columns.append([portion])
            assigned.append((portion, len(columns) - 1))

    return assigned


def layout_day_events(
    events: list[CalEvent],
    day: date,
    hour_height: float,
) -> tuple[PositionedEvent, ...]:
    """
    Calculate rectangles for the timed events of one day.

    Args:
        events: Timed events visible on this day
        day: The day being laid out
        hour_height: Height of one hour in the output unit (pixels)

    Returns:
        One PositionedEvent per input event, in placement order.
    """
    if not events:
        return ()

    portions = [EventPortion.create_for_day(event, day) for event in events]
    positioned = []
    for portion, col in assign_columns(portions):
        start_hour = portion.start_hour
        end_hour = portion.end_hour
        left, width = column_geometry(col)
        positioned.append(PositionedEvent(
            event=portion.event,
            top=start_hour * hour_height,
            height=(end_hour - start_hour) * hour_height,
            left=left,
            width=width,
            z_index=BASE_Z_INDEX + col,
            column=col,
            portion=portion,
        ))
    return tuple(positioned)
