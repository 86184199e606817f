"""Combining counter sets.

Two combinations exist and are deliberately kept apart:

* ``merge_counter_sets`` takes the per-key maximum. It is used when saving
  over today's file, where the in-memory tallies already contain what was
  loaded from disk and adding would count it twice.
* ``add_counter_sets`` takes the per-key sum. It is used by merge-mode loads
  and by the year aggregation, where the inputs cover disjoint activity.
"""

from core.models import CounterSet


def _max_counts(existing: dict, current: dict) -> dict:
    merged = dict(existing)
    for key, count in current.items():
        merged[key] = max(merged.get(key, 0), count)
    return merged


def _sum_counts(left: dict, right: dict) -> dict:
    total = dict(left)
    for key, count in right.items():
        total[key] = total.get(key, 0) + count
    return total


def merge_counter_sets(existing: CounterSet, current: CounterSet) -> CounterSet:
    """Merge on-disk and in-memory tallies, never letting any count shrink.

    Args:
        existing: Tallies read from today's file
        current: In-memory tallies

    Returns:
        New CounterSet holding the per-key maximum of both inputs
    """
    return CounterSet(
        key_press_counts=_max_counts(existing.key_press_counts, current.key_press_counts),
        mouse_button_counts=_max_counts(
            existing.mouse_button_counts, current.mouse_button_counts
        ),
        total_minutes_open=max(existing.total_minutes_open, current.total_minutes_open),
    )


def add_counter_sets(left: CounterSet, right: CounterSet) -> CounterSet:
    """Sum two tallies key by key."""
    return CounterSet(
        key_press_counts=_sum_counts(left.key_press_counts, right.key_press_counts),
        mouse_button_counts=_sum_counts(
            left.mouse_button_counts, right.mouse_button_counts
        ),
        total_minutes_open=left.total_minutes_open + right.total_minutes_open,
    )


def find_regressions(existing: CounterSet, merged: CounterSet) -> list[str]:
    """List every value of ``existing`` that ``merged`` would lower.

    Returns:
        Human-readable descriptions, empty when nothing regresses
    """
    regressions = []
    for code, count in existing.key_press_counts.items():
        merged_count = merged.key_press_counts.get(code, 0)
        if merged_count < count:
            regressions.append(f"key {code}: {count} -> {merged_count}")
    for label, count in existing.mouse_button_counts.items():
        merged_count = merged.mouse_button_counts.get(label, 0)
        if merged_count < count:
            regressions.append(f"mouse {label}: {count} -> {merged_count}")
    if merged.total_minutes_open < existing.total_minutes_open:
        regressions.append(
            f"minutes: {existing.total_minutes_open} -> {merged.total_minutes_open}"
        )
    return regressions
