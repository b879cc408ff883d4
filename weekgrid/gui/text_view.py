"""
Plain-text rendering of a week layout.

Implements the collaborator interfaces with objects that collect lines,
which the command line prints.
"""

from datetime import date
from typing import Callable, Optional

from weekgrid.banner_layout import BannerEntry, BorderRounding
from weekgrid.column_layout import PositionedEvent
from weekgrid.config import LocalizationConfig
from weekgrid.time_indicator import TimePosition
from .week_view import WeekViewPresenter

# Segment ends drawn for each rounding
_BANNER_ENDS = {
    BorderRounding.BOTH: ("(", ")"),
    BorderRounding.LEFT: ("(", "="),
    BorderRounding.RIGHT: ("=", ")"),
    BorderRounding.NONE: ("=", "="),
}


class TextEventVisual:
    """Collects the line of one timed event."""

    def __init__(self):
        self.line: Optional[str] = None
        self.on_click: Optional[Callable[[], None]] = None

    def show_event(self, positioned: PositionedEvent, time_label: Optional[str], on_click: Callable[[], None]) -> None:
        indent = "  " * positioned.column
        label = f"{time_label}  " if time_label else ""
        self.line = (
            f"{indent}{label}{positioned.event.title}"
            f"  [top={positioned.top:g} height={positioned.height:g}"
            f" left={positioned.left:g} width={positioned.width:g} z={positioned.z_index}]"
        )
        self.on_click = on_click


class TextBannerVisual:
    """Collects the line of one banner segment."""

    def __init__(self):
        self.line: Optional[str] = None
        self.on_click: Optional[Callable[[], None]] = None

    def show_banner(self, entry: BannerEntry, on_click: Callable[[], None]) -> None:
        left, right = _BANNER_ENDS[entry.rounding]
        title = entry.event.title if entry.show_title else "..."
        self.line = f"{left}{title}{right}"
        self.on_click = on_click


class TextSlotCell:
    """A grid cell; only keeps its callback."""

    def __init__(self):
        self.day: Optional[date] = None
        self.hour: Optional[float] = None
        self.on_click: Optional[Callable[[], None]] = None

    def bind(self, day: date, hour: float, on_click: Callable[[], None]) -> None:
        self.day = day
        self.hour = hour
        self.on_click = on_click


def format_time_line(time_pos: TimePosition) -> str:
    if not time_pos.visible:
        return "now: not in this week"
    return f"now: {time_pos.position:.2f}% of the day"


def render_week_text(
    presenter: WeekViewPresenter,
    localization: Optional[LocalizationConfig] = None,
) -> str:
    """Render the presenter's current layout as text, one block per day."""
    localization = localization or LocalizationConfig()
    events_by_day: dict[date, list[TextEventVisual]] = {}
    banners_by_day: dict[date, list[TextBannerVisual]] = {}

    def event_factory(day: date) -> TextEventVisual:
        visual = TextEventVisual()
        events_by_day.setdefault(day, []).append(visual)
        return visual

    def banner_factory(day: date) -> TextBannerVisual:
        visual = TextBannerVisual()
        banners_by_day.setdefault(day, []).append(visual)
        return visual

    layout = presenter.populate(event_factory, banner_factory)

    time_pos = presenter.time_position
    lines = []
    for index, day in enumerate(layout.window.days):
        header = f"{localization.get_day_name(day.weekday())} {day.isoformat()}"
        if time_pos.visible and time_pos.day_index == index:
            header += "  <- today"
        lines.append(header)
        banners = banners_by_day.get(day, [])
        if banners:
            lines.append(f"  {localization.allday_label}: " + " ".join(b.line for b in banners))
        for visual in events_by_day.get(day, []):
            lines.append(f"  {visual.line}")
    lines.append(format_time_line(time_pos))
    return "\n".join(lines)
