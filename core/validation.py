"""Validation helpers for BongoStats."""

import logging
from datetime import datetime

log = logging.getLogger("bongostats.validation")


def elapsed_minutes(start: datetime, end: datetime) -> float:
    """Calculate elapsed minutes, ensuring non-negative result.

    Args:
        start: Start of the interval
        end: End of the interval

    Returns:
        Minutes between start and end (non-negative)
    """
    minutes = (end - start).total_seconds() / 60.0
    if minutes < 0:
        log.warning(f"Negative elapsed time: {minutes:.2f} min (start={start}, end={end})")
        return 0.0

    return minutes
