"""
Event record consumed by the layout engine.

CalEvent is owned by whoever supplies the events; the layout code only
reads it. Display metadata (title, color) is passed through untouched.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

from .timezone_utils import to_local_naive


class InvalidEventRange(ValueError):
    """Raised at ingestion when an event ends before it starts."""

    def __init__(self, event_id: str, start: datetime, end: datetime):
        super().__init__(
            f"Event '{event_id}' ends before it starts: {start.isoformat()} > {end.isoformat()}"
        )
        self.event_id = event_id
        self.start = start
        self.end = end


@dataclass(frozen=True)
class CalEvent:
    """
    A time-ranged calendar event.

    start/end are stored as naive local wall-clock datetimes. Aware
    datetimes are converted on construction so every comparison in the
    layout code happens in the same frame.
    """
    id: str
    start: datetime
    end: datetime
    title: str = "Untitled"
    color: str = "#4285f4"  # Default Google blue
    all_day: bool = False

    def __post_init__(self):
        object.__setattr__(self, 'start', to_local_naive(self.start))
        object.__setattr__(self, 'end', to_local_naive(self.end))
        if self.end < self.start:
            raise InvalidEventRange(self.id, self.start, self.end)

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    @property
    def duration_minutes(self) -> int:
        return int(self.duration.total_seconds() // 60)


def format_event_time(event: CalEvent, duration_minutes: int) -> str:
    """
    Time label shown inside an event visual.

    Short events (under 45 minutes) only show their start time.
    """
    if event.all_day:
        return "All day"
    if duration_minutes < 45:
        return event.start.strftime('%H:%M')
    return f"{event.start.strftime('%H:%M')} - {event.end.strftime('%H:%M')}"
