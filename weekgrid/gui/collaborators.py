"""
Interfaces of the rendering collaborators.

The layout engine never draws anything. A renderer supplies objects that
accept geometry plus metadata and call back on interaction.
"""

from datetime import date
from typing import Callable, Optional, Protocol

from weekgrid.banner_layout import BannerEntry
from weekgrid.column_layout import PositionedEvent


class SlotCell(Protocol):
    """A clickable quarter-hour cell of the time grid."""

    def bind(self, day: date, hour: float, on_click: Callable[[], None]) -> None:
        """Attach the cell to a day and fractional hour (e.g. 9.25 for 09:15)."""
        ...


class EventVisual(Protocol):
    """Visual of a timed event positioned in a day column."""

    def show_event(
        self,
        positioned: PositionedEvent,
        time_label: Optional[str],
        on_click: Callable[[], None],
    ) -> None:
        ...


class BannerVisual(Protocol):
    """Visual of one day segment of an all-day / multi-day event."""

    def show_banner(self, entry: BannerEntry, on_click: Callable[[], None]) -> None:
        ...
