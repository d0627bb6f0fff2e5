"""Tests for the leaderboard report and its pandas export."""

import json
from datetime import date
from pathlib import Path

import pandas as pd
import pytest

from redzone.practice_math import LeaderboardRow
from redzone.report import (
    leaderboard_frame,
    main,
    print_leaderboard,
    run_report,
    save_leaderboard,
)

SAMPLE_DATA = Path(__file__).resolve().parent.parent / "data"

ROWS = [
    LeaderboardRow("X", 11, 18, 11 / 18, 1011.2),
    LeaderboardRow("Y", 11, 18, 11 / 18, 1011.2),
    LeaderboardRow("Z", 5, 10, 0.5, 989.0),
]


@pytest.fixture
def data_dir(tmp_path):
    for src in SAMPLE_DATA.glob("*.json"):
        (tmp_path / src.name).write_text(src.read_text())
    return tmp_path


class TestLeaderboardFrame:
    def test_columns_and_rank(self):
        df = leaderboard_frame(ROWS)
        assert list(df.columns) == ["rank", "player", "scored", "reps", "pct", "rating"]
        assert list(df["rank"]) == [1, 2, 3]
        assert list(df["player"]) == ["X", "Y", "Z"]

    def test_empty(self):
        df = leaderboard_frame([])
        assert df.empty
        assert "rating" in df.columns


class TestSaveLeaderboard:
    def test_writes_csv_and_json(self, tmp_path):
        save_leaderboard(ROWS, tmp_path, log=lambda msg: None)
        csv = pd.read_csv(tmp_path / "leaderboard.csv")
        assert list(csv["player"]) == ["X", "Y", "Z"]
        records = json.loads((tmp_path / "leaderboard.json").read_text())
        assert records[2] == {"rank": 3, "player": "Z", "scored": 5, "reps": 10, "pct": 0.5, "rating": 989.0}


class TestPrintLeaderboard:
    def test_medals_and_last_place(self):
        lines = []
        print_leaderboard(ROWS, [], log=lines.append)
        text = "\n".join(lines)
        assert "🥇" in text
        assert "🥈" in text
        assert "🥉" in text
        assert "61.1%" in text
        assert "Practices loaded: 0" in text


class TestRunReport:
    def test_sample_data(self, data_dir):
        rows = run_report(data_dir, reference_date=date(2025, 9, 3), save=False, log=lambda msg: None)
        assert len(rows) == 6
        assert rows[0].player == "Adam Grossberg"
        ratings = [r.rating for r in rows]
        assert ratings == sorted(ratings, reverse=True)
        assert not (data_dir / "leaderboard.csv").exists()

    def test_saves_by_default(self, data_dir):
        run_report(data_dir, reference_date=date(2025, 9, 3), log=lambda msg: None)
        assert (data_dir / "leaderboard.csv").exists()
        assert (data_dir / "leaderboard.json").exists()

    def test_main_args(self, data_dir, capsys):
        main(["--data-dir", str(data_dir), "--as-of", "2025-09-03", "--no-save"])
        out = capsys.readouterr().out
        assert "Adam Grossberg" in out
        assert not (data_dir / "leaderboard.csv").exists()
