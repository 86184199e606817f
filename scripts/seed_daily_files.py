#!/usr/bin/env python3
"""Seed a data directory with realistic daily stats files for development."""

import argparse
import random
import sys
from datetime import date, datetime, timedelta
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.daily_files import DailyFileLocator  # noqa: E402
from core.json_codec import encode_daily_record  # noqa: E402
from core.models import CounterSet, MouseButton  # noqa: E402

# Rough English letter frequencies (percent) keyed by virtual-key code
LETTER_WEIGHTS = {
    ord('E'): 12.7, ord('T'): 9.1, ord('A'): 8.2, ord('O'): 7.5, ord('I'): 7.0,
    ord('N'): 6.7, ord('S'): 6.3, ord('H'): 6.1, ord('R'): 6.0, ord('D'): 4.3,
    ord('L'): 4.0, ord('C'): 2.8, ord('U'): 2.8, ord('M'): 2.4, ord('W'): 2.4,
    ord('F'): 2.2, ord('G'): 2.0, ord('Y'): 2.0, ord('P'): 1.9, ord('B'): 1.5,
    ord('V'): 1.0, ord('K'): 0.8, ord('J'): 0.2, ord('X'): 0.2, ord('Q'): 0.1,
    ord('Z'): 0.1,
}
SPACE, ENTER, BACKSPACE, SHIFT = 32, 13, 8, 16


def generate_day(rng: random.Random) -> CounterSet:
    """Generate one day of plausible activity."""
    letters = rng.randint(2000, 20000)
    key_counts: dict[int, int] = {}
    codes = list(LETTER_WEIGHTS)
    weights = list(LETTER_WEIGHTS.values())
    for code in rng.choices(codes, weights=weights, k=letters):
        key_counts[code] = key_counts.get(code, 0) + 1
    key_counts[SPACE] = letters // 5
    key_counts[ENTER] = letters // 60
    key_counts[BACKSPACE] = letters // 25
    key_counts[SHIFT] = letters // 30

    clicks = rng.randint(300, 4000)
    mouse_counts = {
        MouseButton.LEFT.value: int(clicks * 0.85),
        MouseButton.RIGHT.value: int(clicks * 0.12),
        MouseButton.MIDDLE.value: int(clicks * 0.03),
    }
    return CounterSet(
        key_press_counts=key_counts,
        mouse_button_counts=mouse_counts,
        total_minutes_open=round(rng.uniform(30, 600), 2),
    )


def seed_year(base_dir: Path, year: int, days: int, seed: int = 0) -> list[Path]:
    """Write daily files for the first ``days`` days of ``year``.

    Returns:
        Paths written
    """
    rng = random.Random(seed)
    locator = DailyFileLocator(base_dir)
    if not locator.ensure_year_folder(year):
        raise RuntimeError(f"Cannot create {locator.year_folder(year)}")

    written = []
    start = date(year, 1, 1)
    for offset in range(days):
        day = start + timedelta(days=offset)
        if day.year != year:
            break
        path = locator.path_for_date(day)
        written_at = datetime(day.year, day.month, day.day, 23, 59, 0)
        path.write_text(
            encode_daily_record(generate_day(rng), year, written_at), encoding="utf-8"
        )
        written.append(path)
    return written


def main():
    parser = argparse.ArgumentParser(description="Seed daily stats files")
    parser.add_argument("--data-dir", type=Path, required=True, help="Data directory")
    parser.add_argument("--year", type=int, default=date.today().year, help="Year to seed")
    parser.add_argument("--days", type=int, default=30, help="Number of days")
    parser.add_argument("--seed", type=int, default=0, help="Random seed")
    args = parser.parse_args()

    paths = seed_year(args.data_dir, args.year, args.days, args.seed)
    print(f"Wrote {len(paths)} daily files to {DailyFileLocator(args.data_dir).year_folder(args.year)}")


if __name__ == "__main__":
    main()
