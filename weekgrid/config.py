"""
Configuration parser for Weekgrid.

Handles TOML file parsing for layout, localization and ICS subscriptions.
"""

import tomllib
import os
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class SubscriptionConfig:
    """Configuration for a read-only ICS subscription."""
    name: str
    url: str
    color: str = "#34a853"  # Default Google Green


@dataclass
class LayoutConfig:
    """Configuration for the week grid geometry."""
    hour_height: int = 60  # Height of an hour slot in day/week view in pixels
    week_starts_on: int = 0  # 0=Sunday, 1=Monday, ... 6=Saturday
    time_indicator_interval: int = 60  # Seconds between current-time updates

    def __post_init__(self):
        if not 0 <= self.week_starts_on <= 6:
            raise ValueError(f"week_starts_on must be in 0..6, got {self.week_starts_on}")
        if self.hour_height <= 0:
            raise ValueError(f"hour_height must be positive, got {self.hour_height}")
        if self.time_indicator_interval <= 0:
            raise ValueError(
                f"time_indicator_interval must be positive, got {self.time_indicator_interval}"
            )


@dataclass
class LocalizationConfig:
    """Configuration for localized day names."""
    # Default to English abbreviated day names
    day_names: list[str] = None  # Mon Tue Wed Thu Fri Sat Sun
    allday_label: str = "All day"

    def __post_init__(self):
        if self.day_names is None:
            self.day_names = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

    def get_day_name(self, weekday: int) -> str:
        """Get localized day name for weekday (0=Monday, 6=Sunday)."""
        return self.day_names[weekday] if 0 <= weekday < len(self.day_names) else ""


@dataclass
class Config:
    """Main configuration container for Weekgrid."""

    timezone: Optional[str] = None  # None = system timezone
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    localization: LocalizationConfig = field(default_factory=LocalizationConfig)
    subscriptions: list[SubscriptionConfig] = field(default_factory=list)

    @classmethod
    def get_default_config_path(cls) -> Path:
        """Get the default configuration file path."""
        xdg_config = os.environ.get('XDG_CONFIG_HOME', os.path.expanduser('~/.config'))
        return Path(xdg_config) / 'weekgrid' / 'weekgrid.toml'

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> 'Config':
        """Load configuration from TOML file."""
        if config_path is None:
            config_path = cls.get_default_config_path()

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, 'rb') as f:
            data = tomllib.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        """Build a configuration from already parsed TOML data."""
        general = data.get('General', {})
        timezone = general.get('timezone') or None

        # Parse ICS subscriptions
        # Supports both [Subscription.Name] and [Subscription] with nested sub-tables
        subscriptions = []
        for key, value in data.items():
            if key.startswith('Subscription.') and isinstance(value, dict):
                sub_id = key.split('.', 1)[1]
                subscriptions.append(_parse_subscription(sub_id, value))
            elif key == 'Subscription' and isinstance(value, dict):
                for sub_key, sub_value in value.items():
                    if isinstance(sub_value, dict):
                        subscriptions.append(_parse_subscription(sub_key, sub_value))

        # Parse Layout section
        layout_data = data.get('Layout', {})
        layout = LayoutConfig(
            hour_height=layout_data.get('hour_height', LayoutConfig.hour_height),
            week_starts_on=layout_data.get('week_starts_on', LayoutConfig.week_starts_on),
            time_indicator_interval=layout_data.get(
                'time_indicator_interval', LayoutConfig.time_indicator_interval
            ),
        )

        # Parse Localization section
        localization_data = data.get('Localization', {})
        day_names_str = localization_data.get('day_names', '')
        # Parse space-separated day names (if provided)
        day_names = day_names_str.split() if day_names_str else None
        localization = LocalizationConfig(
            day_names=day_names,
            allday_label=localization_data.get('allday_label', LocalizationConfig.allday_label),
        )

        return cls(
            timezone=timezone,
            layout=layout,
            localization=localization,
            subscriptions=subscriptions,
        )


def _parse_subscription(sub_id: str, value: dict) -> SubscriptionConfig:
    return SubscriptionConfig(
        name=value.get('name', sub_id),
        url=value.get('url', ''),
        color=value.get('color', '#34a853'),
    )
