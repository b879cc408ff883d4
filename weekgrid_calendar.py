#!/usr/bin/env python3
"""
Weekgrid - week grid layout for ICS calendars.

This is the main entry point for the command line.
"""

import sys
import signal
import argparse
from datetime import date
from pathlib import Path

from PySide6.QtCore import QCoreApplication

from weekgrid.config import Config
from weekgrid.ics_subscription import ICSSubscription
from weekgrid.timezone_utils import set_timezone
from weekgrid.gui.week_view import WeekViewPresenter
from weekgrid.gui.text_view import format_time_line, render_week_text


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Weekgrid - lay out a calendar week from ICS files or subscriptions"
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        help="Path to configuration file (default: auto-detect)"
    )
    parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="A date inside the week to display, YYYY-MM-DD (default: today)"
    )
    parser.add_argument(
        "--ics",
        action="append",
        default=[],
        metavar="PATH_OR_URL",
        help="ICS file or URL to read events from (repeatable)"
    )
    parser.add_argument(
        "--watch",
        action="store_true",
        help="Keep running and print the current time position every tick"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output"
    )
    return parser.parse_args(argv)


def load_config(config_path):
    """Load the configuration; defaults when no file exists at the default location."""
    try:
        return Config.load(config_path)
    except FileNotFoundError:
        if config_path is not None:
            raise
        return Config()


def load_subscriptions(config: Config, extra_sources: list[str], debug: bool = False):
    subscriptions = [
        ICSSubscription(name=sub.name, url=sub.url, color=sub.color)
        for sub in config.subscriptions
    ]
    subscriptions.extend(ICSSubscription(name=src, url=src) for src in extra_sources)

    events = []
    for sub in subscriptions:
        sub_events = sub.events()
        if sub.error:
            print(f"ERROR: {sub.name}: {sub.error}", file=sys.stderr)
        elif debug:
            print(f"DEBUG: {sub.name}: {len(sub_events)} events", file=sys.stderr)
        events.extend(sub_events)
    return events


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    try:
        config = load_config(args.config)
    except FileNotFoundError as e:
        print(f"Error: {e}")
        sys.exit(1)
    except Exception as e:
        print(f"Error loading configuration: {e}")
        sys.exit(1)

    if args.debug:
        print(f"DEBUG: Configuration: {args.config or Config.get_default_config_path()}", file=sys.stderr)
        print(f"DEBUG:   ICS subscriptions: {len(config.subscriptions)}", file=sys.stderr)
        print(f"DEBUG:   hour_height={config.layout.hour_height}, week_starts_on={config.layout.week_starts_on}",
              file=sys.stderr)

    set_timezone(config.timezone)

    # The current time indicator runs on a QTimer
    app = QCoreApplication.instance() or QCoreApplication(sys.argv if argv is None else ["weekgrid"])
    app.setApplicationName("Weekgrid")

    try:
        events = load_subscriptions(config, args.ics, debug=args.debug)
    except ValueError as e:
        print(f"Error reading calendar data: {e}")
        sys.exit(1)

    presenter = WeekViewPresenter(config.layout, current_date=args.date or date.today())
    presenter.set_events(events)
    presenter.activate()

    print(render_week_text(presenter, config.localization))

    if not args.watch:
        presenter.deactivate()
        return 0

    presenter.time_indicator_changed.connect(
        lambda *_: print(format_time_line(presenter.time_position), flush=True)
    )
    # Let Ctrl+C end the event loop
    signal.signal(signal.SIGINT, signal.SIG_DFL)
    try:
        return app.exec()
    finally:
        presenter.deactivate()


if __name__ == "__main__":
    sys.exit(main())
