"""Reader and writer for the fixed daily stats file schema.

Only the five top-level fields of a daily file are understood:
``year``, ``date``, ``totalMinutesOpen``, ``mouseButtonCounts`` and
``keyPressCounts``. Anything malformed reads as "not found" instead of
raising, so a damaged file never takes the host process down.
"""

import json
import logging
import math
from datetime import datetime
from typing import Any, Optional

from core.models import CounterSet, DailyRecord

log = logging.getLogger("bongostats.json_codec")

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def _escape_char(char: str) -> str:
    if char in _ESCAPES:
        return _ESCAPES[char]
    if char < " ":
        return f"\\u{ord(char):04x}"
    return char


def escape_json_string(value: str) -> str:
    """Escape backslash, quote, newline, carriage return and tab.

    Any other control character is written as a \\uXXXX escape.
    """
    return "".join(_escape_char(char) for char in value)


def _quote(value: str) -> str:
    return f'"{escape_json_string(value)}"'


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-finite number {name} is not allowed")


def parse_document(text: str) -> Optional[dict[str, Any]]:
    """Parse text into a top-level JSON object.

    NaN and Infinity literals are rejected, as is nesting too deep to decode.

    Returns:
        The decoded object, or None if text is not a JSON object
    """
    try:
        document = json.loads(text, parse_constant=_reject_constant)
    except (TypeError, ValueError, RecursionError):
        return None
    if not isinstance(document, dict):
        return None
    return document


def find_value(text: str, field: str) -> Optional[str]:
    """Get the scalar value of a top-level field as raw text.

    Strings are returned unquoted, numbers in their JSON spelling.

    Returns:
        Raw value text, or None if the field is absent or not a scalar
    """
    document = parse_document(text)
    if document is None or field not in document:
        return None
    value = document[field]
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)) or value is None:
        return None
    return json.dumps(value)


def find_object(text: str, field: str) -> Optional[str]:
    """Get the nested object value of a top-level field, braces included.

    Returns:
        JSON text of the object, or None if absent or not an object
    """
    document = parse_document(text)
    if document is None:
        return None
    value = document.get(field)
    if not isinstance(value, dict):
        return None
    return json.dumps(value)


def _as_count(value: Any) -> Optional[int]:
    """Coerce a count to a non-negative int, or None if it isn't one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, float):
        if not value.is_integer():
            return None
        value = int(value)
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            return None
    if not isinstance(value, int) or value < 0:
        return None
    return value


def _as_float(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    try:
        result = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(result) or result < 0:
        return 0.0
    return result


def _as_year(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


def _parse_key_counts(raw: Any) -> dict[int, int]:
    counts: dict[int, int] = {}
    if not isinstance(raw, dict):
        return counts
    for code_text, raw_count in raw.items():
        try:
            code = int(code_text)
        except ValueError:
            log.debug(f"Skipping non-numeric key code {code_text!r}")
            continue
        count = _as_count(raw_count)
        if count is None or code < 0:
            log.debug(f"Skipping invalid count for key {code_text!r}: {raw_count!r}")
            continue
        counts[code] = count
    return counts


def _parse_mouse_counts(raw: Any) -> dict[str, int]:
    counts: dict[str, int] = {}
    if not isinstance(raw, dict):
        return counts
    for label, raw_count in raw.items():
        count = _as_count(raw_count)
        if count is None:
            log.debug(f"Skipping invalid count for button {label!r}: {raw_count!r}")
            continue
        counts[str(label)] = count
    return counts


def decode_daily_record(text: str) -> Optional[DailyRecord]:
    """Decode a daily stats file.

    Invalid individual entries are dropped; the rest of the record survives.

    Args:
        text: File contents

    Returns:
        DailyRecord, or None if the text is not a JSON object at all
    """
    document = parse_document(text)
    if document is None:
        return None

    counters = CounterSet(
        key_press_counts=_parse_key_counts(document.get("keyPressCounts")),
        mouse_button_counts=_parse_mouse_counts(document.get("mouseButtonCounts")),
        total_minutes_open=_as_float(document.get("totalMinutesOpen", 0.0)),
    )
    date = document.get("date")
    return DailyRecord(
        year=_as_year(document.get("year")),
        date=date if isinstance(date, str) else "",
        counters=counters,
    )


def _write_flat_object(entries: list[tuple[str, int]], indent: str) -> str:
    if not entries:
        return "{}"
    lines = [f"{indent}  {_quote(name)}: {count}" for name, count in entries]
    return "{\n" + ",\n".join(lines) + f"\n{indent}}}"


def encode_daily_record(counters: CounterSet, year: int, written_at: datetime) -> str:
    """Encode counters as a daily stats file.

    Args:
        counters: Tallies to write
        year: Calendar year tag
        written_at: Local time of the write, stored in the date field

    Returns:
        JSON text with a trailing newline
    """
    mouse_entries = sorted(counters.mouse_button_counts.items())
    key_entries = [
        (str(code), count) for code, count in sorted(counters.key_press_counts.items())
    ]
    minutes = round(counters.total_minutes_open, 2)

    return (
        "{\n"
        f'  "year": {int(year)},\n'
        f'  "date": {_quote(written_at.strftime(DATE_FORMAT))},\n'
        f'  "totalMinutesOpen": {minutes:.2f},\n'
        f'  "mouseButtonCounts": {_write_flat_object(mouse_entries, "  ")},\n'
        f'  "keyPressCounts": {_write_flat_object(key_entries, "  ")}\n'
        "}\n"
    )
