"""Year-level "wrapped" statistics summed over daily files."""

import logging
from typing import Callable

from core.daily_files import DailyFileLocator
from core.json_codec import decode_daily_record
from core.merger import add_counter_sets
from core.models import AggregateReport, CounterSet, MouseButton, RankedInput
from utils.keycodes import get_key_name

log = logging.getLogger("bongostats.aggregator")

DEFAULT_TOP_INPUTS = 10
CLICK_SUFFIX = " CLICK"

_BUTTON_ORDER = {button.value: index for index, button in enumerate(MouseButton)}


def _rank_inputs(totals: CounterSet, key_namer: Callable[[int], str],
                 limit: int) -> list[RankedInput]:
    """Rank keys and mouse buttons together by descending count.

    Ties keep a fixed order: keys by ascending code, then mouse buttons
    LEFT, RIGHT, MIDDLE, then any other label alphabetically.
    """
    entries = [
        RankedInput(name=key_namer(code), count=count, kind="key")
        for code, count in sorted(totals.key_press_counts.items())
    ]
    buttons = sorted(
        totals.mouse_button_counts.items(),
        key=lambda item: (_BUTTON_ORDER.get(item[0], len(_BUTTON_ORDER)), item[0]),
    )
    entries.extend(
        RankedInput(name=f"{label}{CLICK_SUFFIX}", count=count, kind="mouse")
        for label, count in buttons
    )
    entries.sort(key=lambda entry: entry.count, reverse=True)
    return entries[:limit]


def build_wrapped_stats(locator: DailyFileLocator, year: int,
                        key_namer: Callable[[int], str] = get_key_name,
                        top_limit: int = DEFAULT_TOP_INPUTS) -> AggregateReport:
    """Sum every daily file of a year into one report.

    Each file covers a different day, so counts are added. Files that cannot
    be read or parsed are skipped and counted in ``files_skipped``.

    Args:
        locator: Locator for the stats data folder
        year: Calendar year to aggregate
        key_namer: Maps key codes to display names
        top_limit: Number of entries in the top inputs ranking

    Returns:
        AggregateReport for the year (all zeros if no files exist)
    """
    totals = CounterSet()
    days = 0
    skipped = 0

    for path in locator.iter_day_files(year):
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            log.warning(f"Skipping unreadable daily file {path}: {e}")
            skipped += 1
            continue
        record = decode_daily_record(text)
        if record is None:
            log.warning(f"Skipping malformed daily file {path}")
            skipped += 1
            continue
        totals = add_counter_sets(totals, record.counters)
        days += 1

    key_presses = totals.total_key_presses()
    mouse_clicks = totals.total_mouse_clicks()
    log.debug(f"Aggregated {days} daily files for {year} ({skipped} skipped)")

    return AggregateReport(
        year=year,
        total_key_presses=key_presses,
        total_mouse_clicks=mouse_clicks,
        total_inputs=key_presses + mouse_clicks,
        total_minutes_open=round(totals.total_minutes_open, 2),
        days_recorded=days,
        files_skipped=skipped,
        key_press_counts=totals.key_press_counts,
        mouse_button_counts=totals.mouse_button_counts,
        top_inputs=_rank_inputs(totals, key_namer, top_limit),
    )


def wrapped_stats_json(report: AggregateReport, indent: int | None = 2) -> str:
    """Serialize a report with the camelCase field names."""
    return report.model_dump_json(by_alias=True, indent=indent)
