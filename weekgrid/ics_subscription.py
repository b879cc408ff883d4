"""
ICS calendar sources for the week grid.

Fetches raw VCALENDAR text (over HTTP or from a local file) and turns its
VEVENTs into CalEvent records. Recurrence rules are not expanded: each
VEVENT yields at most one event.
"""

import hashlib
import sys
from datetime import datetime, date, timedelta, time as dt_time
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

import pytz
import requests
from icalendar import Calendar as ICalendar

from .event_wrapper import CalEvent, InvalidEventRange

# Last minute of the day an all-day event covers
ALL_DAY_END_TIME = dt_time(23, 59)


def _as_datetime(value) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, dt_time.min)


def event_from_vevent(component, color: str = "#4285f4", source: str = "") -> CalEvent:
    """
    Convert an icalendar VEVENT into a CalEvent.

    Date-valued events are all-day events. Their DTEND is exclusive, so it
    is turned into the last covered day.

    Raises:
        InvalidEventRange: if the event ends before it starts.
    """
    uid = str(component.get('UID') or '')
    if not uid:
        uid = hashlib.md5(component.to_ical()).hexdigest()[:12]
    if source:
        uid = f"{source}:{uid}"
    summary = component.get('SUMMARY')
    title = str(summary) if summary else 'Untitled'

    dtstart = component.get('DTSTART').dt
    dtend_prop = component.get('DTEND')
    duration_prop = component.get('DURATION')

    if isinstance(dtstart, date) and not isinstance(dtstart, datetime):
        if dtend_prop is not None:
            end_date = _as_datetime(dtend_prop.dt).date()
        elif duration_prop is not None:
            end_date = dtstart + duration_prop.dt
        else:
            end_date = dtstart + timedelta(days=1)
        last_day = end_date - timedelta(days=1) if end_date > dtstart else end_date
        return CalEvent(
            id=uid,
            start=datetime.combine(dtstart, dt_time.min),
            end=datetime.combine(last_day, ALL_DAY_END_TIME),
            title=title,
            color=color,
            all_day=True,
        )

    if dtend_prop is not None:
        dtend = _as_datetime(dtend_prop.dt)
    elif duration_prop is not None:
        dtend = dtstart + duration_prop.dt
    else:
        dtend = dtstart

    return CalEvent(id=uid, start=dtstart, end=dtend, title=title, color=color)


def parse_ical_events(ical_text: str, color: str = "#4285f4", source: str = "") -> list[CalEvent]:
    """
    Parse every VEVENT of a VCALENDAR text.

    Events with an invalid range or without DTSTART are skipped and reported
    on stderr.
    """
    calendar = ICalendar.from_ical(ical_text)
    events = []
    for component in calendar.walk('VEVENT'):
        if component.get('DTSTART') is None:
            print(f"ERROR: Skipping VEVENT without DTSTART: {component.get('UID')}", file=sys.stderr)
            continue
        try:
            events.append(event_from_vevent(component, color=color, source=source))
        except InvalidEventRange as e:
            print(f"ERROR: Skipping event: {e}", file=sys.stderr)
    return events


class ICSSubscription:
    """
    A read-only ICS calendar, fetched from a URL or read from a local file.
    """

    def __init__(self, name: str, url: str, color: str = "#34a853"):
        """
        Initialize an ICS subscription.

        Args:
            name: Display name for the subscription
            url: URL (http, https, file) or local path of the ICS file
            color: Color to display events (hex format)
        """
        self.name = name
        self.url = url
        self.color = color
        self.id = self._generate_id(url)

        self._raw_data: Optional[str] = None
        self._last_fetch: Optional[datetime] = None
        self._error: Optional[str] = None

    @staticmethod
    def _generate_id(url: str) -> str:
        """Generate a unique ID from the URL."""
        return hashlib.md5(url.encode()).hexdigest()[:12]

    def _local_path(self) -> Optional[Path]:
        parsed = urlparse(self.url)
        if parsed.scheme in ('http', 'https'):
            return None
        if parsed.scheme == 'file':
            return Path(parsed.path)
        return Path(self.url).expanduser()

    def fetch(self, timeout: int = 30) -> bool:
        """
        Fetch the ICS file.

        Args:
            timeout: Request timeout in seconds

        Returns:
            True if successful, False otherwise.
        """
        path = self._local_path()
        try:
            if path is not None:
                self._raw_data = path.read_text(encoding='utf-8')
            else:
                response = requests.get(
                    self.url,
                    timeout=timeout,
                    headers={
                        'User-Agent': 'Weekgrid/1.0',
                        'Accept': 'text/calendar'
                    }
                )
                response.raise_for_status()

                # Ensure proper UTF-8 decoding
                response.encoding = 'utf-8'
                self._raw_data = response.text
            self._last_fetch = datetime.now(pytz.UTC)
            self._error = None
            return True

        except requests.RequestException as e:
            self._error = f"Network error: {e}"
            return False
        except OSError as e:
            self._error = f"File error: {e}"
            return False

    def get_ical_text(
        self,
        force_fetch: bool = False,
        cache_seconds: int = 300
    ) -> Optional[str]:
        """
        Get the raw VCALENDAR text.

        Args:
            force_fetch: If True, always fetch
            cache_seconds: How long to use cached data (default 5 minutes)

        Returns:
            Raw VCALENDAR text, or None if fetch failed.
        """
        should_fetch = (
            force_fetch or
            self._raw_data is None or
            self._last_fetch is None or
            (datetime.now(pytz.UTC) - self._last_fetch).total_seconds() > cache_seconds
        )

        if should_fetch:
            self.fetch()

        return self._raw_data

    def events(self, force_fetch: bool = False) -> list[CalEvent]:
        """Events of this subscription; empty if the source could not be read."""
        text = self.get_ical_text(force_fetch=force_fetch)
        if text is None:
            return []
        return parse_ical_events(text, color=self.color, source=self.id)

    @property
    def raw_data(self) -> Optional[str]:
        """Get the cached raw VCALENDAR text."""
        return self._raw_data

    @property
    def last_fetch(self) -> Optional[datetime]:
        """Get the last fetch time."""
        return self._last_fetch

    @property
    def error(self) -> Optional[str]:
        """Get the last error message."""
        return self._error
