"""Load practices, print the ranked leaderboard, and save it to data/."""

from __future__ import annotations

import argparse
from datetime import date
from pathlib import Path
from typing import Callable

import pandas as pd

from redzone.config import get_data_dir, get_rating_params, get_title
from redzone.practice_client import load_practices
from redzone.practice_math import (
    LeaderboardRow,
    RatingParams,
    build_leaderboard,
    format_pct,
    practice_totals,
    rank_label,
)


def leaderboard_frame(rows: list[LeaderboardRow]) -> pd.DataFrame:
    """Leaderboard rows as a DataFrame with 1-based rank."""
    df = pd.DataFrame(
        [r.to_dict() for r in rows],
        columns=["player", "scored", "reps", "pct", "rating"],
    )
    df.insert(0, "rank", range(1, len(df) + 1))
    return df


def save_leaderboard(
    rows: list[LeaderboardRow],
    data_dir: Path | None = None,
    log: Callable[[str], None] = print,
) -> pd.DataFrame:
    """Write leaderboard.csv and leaderboard.json into the data dir."""
    data_dir = data_dir or get_data_dir()
    data_dir.mkdir(parents=True, exist_ok=True)
    df = leaderboard_frame(rows)
    df.to_csv(data_dir / "leaderboard.csv", index=False)
    df.to_json(data_dir / "leaderboard.json", orient="records", indent=2, force_ascii=False)
    log(f"  Saved leaderboard.csv / leaderboard.json ({len(df)} players)")
    return df


def print_leaderboard(
    rows: list[LeaderboardRow],
    practices: list[dict],
    log: Callable[[str], None] = print,
) -> None:
    totals = practice_totals(practices)
    log("=" * 60)
    log(get_title())
    log("=" * 60)
    log(f"Practices loaded: {totals['practices']} · Last update: {totals['last_date'] or '—'}")
    log(f"Aggregate: {totals['total_scores']} scores / {totals['total_reps']} reps · "
        f"Team-wide rate {format_pct(totals['pct'])}")
    log("")
    log(f"{'#':>3}  {'Player':<24}{'Scores':>7}{'Reps':>6}{'Rate':>8}{'Rating':>8}")
    for idx, row in enumerate(rows):
        log(
            f"{rank_label(idx, len(rows)):>3}  {row.player:<24}"
            f"{row.total_scored:>7}{row.total_reps:>6}"
            f"{format_pct(row.pct):>8}{round(row.rating):>8}"
        )


def run_report(
    data_dir: Path | None = None,
    base_url: str | None = None,
    reference_date: date | None = None,
    save: bool = True,
    log: Callable[[str], None] = print,
) -> list[LeaderboardRow]:
    practices = load_practices(data_dir=data_dir, base_url=base_url, log=log)
    params = RatingParams(**get_rating_params(), reference_date=reference_date)
    rows = build_leaderboard(practices, params)
    print_leaderboard(rows, practices, log=log)
    if save:
        save_leaderboard(rows, data_dir=data_dir, log=log)
    return rows


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Print the Red Zone 9s leaderboard.")
    parser.add_argument("--data-dir", type=Path, help="Directory with manifest.json")
    parser.add_argument("--base-url", help="Fetch practices over HTTP instead")
    parser.add_argument("--as-of", type=date.fromisoformat,
                        help="Reference date for rating decay (YYYY-MM-DD)")
    parser.add_argument("--no-save", action="store_true", help="Do not write leaderboard files")
    args = parser.parse_args(argv)

    run_report(
        data_dir=args.data_dir,
        base_url=args.base_url,
        reference_date=args.as_of,
        save=not args.no_save,
    )


if __name__ == "__main__":
    main()
