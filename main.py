#!/usr/bin/env python3
"""BongoStats - keyboard and mouse activity statistics."""

import argparse
import logging
import os
import sys
from datetime import date
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from core.aggregator import build_wrapped_stats, wrapped_stats_json
from core.daily_files import DailyFileLocator
from core.json_codec import decode_daily_record
from utils.config import Config
from utils.keycodes import get_key_name

log = logging.getLogger('bongostats')


def default_data_dir() -> Path:
    xdg_data_home = os.environ.get('XDG_DATA_HOME', str(Path.home() / '.local' / 'share'))
    return Path(xdg_data_home) / 'bongostats'


def setup_logging(verbose: bool = False) -> None:
    """Log to a rotating file in the XDG state directory and to stderr."""
    xdg_state_home = os.environ.get('XDG_STATE_HOME', str(Path.home() / '.local' / 'state'))
    log_dir = Path(xdg_state_home) / 'bongostats'
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        # 5MB max, keep 5 backups
        handlers.insert(0, RotatingFileHandler(
            log_dir / 'bongostats.log',
            maxBytes=5*1024*1024,
            backupCount=5
        ))
    except OSError as e:
        print(f"File logging disabled: {e}", file=sys.stderr)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )


def cmd_wrapped(args: argparse.Namespace) -> int:
    config = Config.for_base_dir(args.data_dir)
    year = args.year or date.today().year
    report = build_wrapped_stats(
        DailyFileLocator(args.data_dir), year,
        top_limit=config.get_int('top_inputs_limit')
    )
    print(wrapped_stats_json(report))
    return 0


def cmd_today(args: argparse.Namespace) -> int:
    path = DailyFileLocator(args.data_dir).path_for_date(date.today())
    if not path.exists():
        print(f"No stats recorded today ({path})")
        return 1

    record = decode_daily_record(path.read_text(encoding='utf-8'))
    if record is None:
        print(f"Could not parse {path}")
        return 1

    counters = record.counters
    print("=" * 50)
    print(f"BongoStats for today - last saved {record.date}")
    print("=" * 50)
    print(f"Minutes open:      {counters.total_minutes_open:.2f}")
    print(f"Total key presses: {counters.total_key_presses()}")
    print(f"Total clicks:      {counters.total_mouse_clicks()}")
    print()
    print("--- Mouse Button Clicks ---")
    for label, count in sorted(counters.mouse_button_counts.items()):
        print(f"  {label}: {count}")
    print()
    print(f"--- Top {args.limit} Keys ---")
    top_keys = sorted(counters.key_press_counts.items(), key=lambda item: item[1], reverse=True)
    for code, count in top_keys[:args.limit]:
        print(f"  {get_key_name(code)} ({code}): {count}")
    return 0


def cmd_path(args: argparse.Namespace) -> int:
    print(DailyFileLocator(args.data_dir).path_for_date(date.today()))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Show keyboard and mouse activity statistics"
    )
    parser.add_argument(
        '--data-dir', type=Path, default=default_data_dir(),
        help='Application data directory (default: %(default)s)'
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')

    subparsers = parser.add_subparsers(dest='command', required=True)

    wrapped = subparsers.add_parser('wrapped', help='Year summary as JSON')
    wrapped.add_argument('--year', type=int, default=None, help='Year (default: current)')
    wrapped.set_defaults(func=cmd_wrapped)

    today = subparsers.add_parser('today', help="Today's totals")
    today.add_argument('--limit', type=int, default=10, help='Number of keys to list')
    today.set_defaults(func=cmd_today)

    path = subparsers.add_parser('path', help="Print today's stats file path")
    path.set_defaults(func=cmd_path)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)
    log.debug(f"Data directory: {args.data_dir}")
    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
