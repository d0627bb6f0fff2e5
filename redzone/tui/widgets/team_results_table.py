"""Reusable per-team results DataTable for the practice drill-down."""

from __future__ import annotations

from rich.markup import escape
from rich.text import Text
from textual.app import ComposeResult
from textual.widget import Widget
from textual.widgets import DataTable

from redzone.practice_math import NEUTRAL, format_pct


def _fmt_roster(roster: list[str], rankings: dict[str, int]) -> str:
    if not roster:
        return "[dim]—[/dim]"
    return ", ".join(
        f"{escape(p)} ({rankings[p]})" if p in rankings else escape(p)
        for p in roster
    )


class TeamResultsTable(Widget):
    """A DataTable showing one row per team: roster, scores, reps, rate.

    Rates at or above the neutral rate are green, below it red.
    """

    DEFAULT_CSS = """
    TeamResultsTable {
        height: auto;
    }
    """

    def __init__(
        self,
        rows: list[dict] | None = None,
        rankings: dict[str, int] | None = None,
        neutral: float = NEUTRAL,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self._rows = rows or []
        self._rankings = rankings or {}
        self._neutral = neutral

    def compose(self) -> ComposeResult:
        yield DataTable(id="team-results", cursor_type="row")

    def on_mount(self) -> None:
        table = self.query_one("#team-results", DataTable)
        table.add_columns("Team", "Players", "Scores", "Reps", "Rate")
        self.update_rows(self._rows)

    def update_rows(self, rows: list[dict]) -> None:
        """Populate or refresh the table with practice_team_rows() output."""
        self._rows = rows
        table = self.query_one("#team-results", DataTable)
        table.clear()
        for row in rows:
            style = "green" if row["pct"] >= self._neutral else "red"
            label = str(row["team_id"])
            if row.get("name"):
                label = f"{label} · {row['name']}"
            table.add_row(
                Text(label),
                _fmt_roster(row["roster"], self._rankings),
                str(row["scores"]),
                str(row["reps"]),
                f"[{style}]{format_pct(row['pct'])}[/{style}]",
            )
