"""
Weekgrid Layout Module

This module provides the layout engine of the calendar week grid:
- Event record and ingestion checks (event_wrapper.py)
- Week window, classification and day bucketing (week_window.py)
- Column packing of timed events (column_layout.py)
- All-day / multi-day banner layout (banner_layout.py)
- Full week and day layout passes (week_layout.py)
- Current time indicator (time_indicator.py)
- ICS sources (ics_subscription.py) and configuration (config.py)
"""

from .config import Config, LayoutConfig
from .event_wrapper import CalEvent, InvalidEventRange
from .week_window import WeekWindow, is_multi_day_event
from .column_layout import PositionedEvent, layout_day_events
from .banner_layout import BannerEntry, BorderRounding, layout_banner
from .week_layout import WeekLayout, DayLayout, compute_week_layout, compute_day_layout
from .time_indicator import CurrentTimeIndicator, TimePosition, ViewType, current_time_position
from .ics_subscription import ICSSubscription, parse_ical_events

__all__ = [
    'Config',
    'LayoutConfig',
    'CalEvent',
    'InvalidEventRange',
    'WeekWindow',
    'is_multi_day_event',
    'PositionedEvent',
    'layout_day_events',
    'BannerEntry',
    'BorderRounding',
    'layout_banner',
    'WeekLayout',
    'DayLayout',
    'compute_week_layout',
    'compute_day_layout',
    'CurrentTimeIndicator',
    'TimePosition',
    'ViewType',
    'current_time_position',
    'ICSSubscription',
    'parse_ical_events',
]
