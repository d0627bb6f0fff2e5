"""Leaderboard screen — players ranked by decayed practice rating."""

from __future__ import annotations

from rich.text import Text
from textual import work
from textual.app import ComposeResult
from textual.widgets import DataTable, Footer, Header, LoadingIndicator, Static

from redzone.config import get_rating_params, get_title
from redzone.practice_math import (
    RatingParams,
    build_leaderboard,
    format_pct,
    player_rankings,
    practice_totals,
    rank_label,
)
from redzone.tui.screens.base import BaseScreen
from redzone.tui.screens.help import HelpScreen
from redzone.tui.screens.player_details import PlayerDetailsScreen

HELP_TEXT = """\
Leaderboard

Team reps and scores are attributed to every rostered
player for that practice. Rate is not per-player.

Rating:
  Parameters: H (half-life, days), K (step size),
  mu (anchor rating), W (rating width), nu (neutral rate)

  w_i  = 2^(-age_i / H)     age_i = practice age in days
  beta = log10(nu / (1 - nu))
  E(R) = 1 / (1 + 10^-((R - mu) / W + beta))
  R_i  = R_(i-1) + K * w_i * (r_i - E(R_(i-1)))

  Practices are applied oldest first; Rating = R_n.

Order: Rating (desc), then score rate (desc),
then total reps, then name.

Keybindings:
  Enter  Player details
  f5     Reload practices
  ?      Show this help
"""


class LeaderboardScreen(BaseScreen):
    """Player leaderboard screen."""

    BINDINGS = [
        ("f5", "reload", "Reload"),
        ("question_mark", "show_help", "Help"),
    ]

    DEFAULT_CSS = """
    #leaderboard-summary {
        height: auto;
        padding: 0 1;
        color: $text-muted;
    }
    #leaderboard-table {
        height: 1fr;
        margin: 0 1;
    }
    #leaderboard-loading {
        height: 100%;
    }
    #leaderboard-message {
        height: 100%;
        content-align: center middle;
    }
    #leaderboard-message.error {
        color: $error;
    }
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._practices: list[dict] = []
        self._params = RatingParams(**get_rating_params())
        self._rows: list = []
        self._rankings: dict[str, int] = {}

    def compose(self) -> ComposeResult:
        yield Header()
        yield LoadingIndicator(id="leaderboard-loading")
        yield Static(id="leaderboard-summary")
        yield DataTable(id="leaderboard-table", cursor_type="row", zebra_stripes=True)
        yield Static(id="leaderboard-message")
        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one("#leaderboard-table", DataTable)
        table.add_columns("#", "Player", "# Scores", "# Reps", "Score %", "Rating")
        self._show_body(False)
        self._load_data()

    def _show_body(self, has_rows: bool) -> None:
        self.query_one("#leaderboard-summary").display = has_rows
        self.query_one("#leaderboard-table").display = has_rows
        self.query_one("#leaderboard-message").display = not has_rows

    def _stop_loading(self) -> None:
        for indicator in self.query(LoadingIndicator):
            indicator.remove()

    @work(exclusive=True, thread=True)
    def _load_data(self) -> None:
        try:
            from redzone.practice_client import load_practices
            practices = load_practices(log=lambda msg: None)
            self.app.call_from_thread(self._on_data_loaded, practices)
        except Exception as e:
            self.app.call_from_thread(self._on_data_error, str(e))

    def _on_data_error(self, error: str) -> None:
        self._stop_loading()
        self._practices = []
        self._rows = []
        self._rankings = {}
        message = self.query_one("#leaderboard-message", Static)
        message.add_class("error")
        message.update(
            f"Failed to load practice data — press [bold]c[/bold] to check the data\n\n{error}"
        )
        self._show_body(False)
        self.notify(f"Leaderboard data error: {error}", severity="error")

    def _on_data_loaded(self, practices: list[dict]) -> None:
        self._stop_loading()
        self._practices = practices
        self._rows = build_leaderboard(practices, self._params)
        self._rankings = player_rankings(self._rows)

        message = self.query_one("#leaderboard-message", Static)
        message.remove_class("error")
        if not practices:
            message.update(
                "No practices found. Add practice JSON files to the data directory "
                "and list them in manifest.json."
            )
            self._show_body(False)
            return

        totals = practice_totals(practices)
        self.query_one("#leaderboard-summary", Static).update(
            f"[bold]{get_title()}[/bold]\n"
            f"Practices loaded: [bold]{totals['practices']}[/bold] · "
            f"Last update: [bold]{totals['last_date'] or '—'}[/bold]\n"
            f"Aggregate: [bold]{totals['total_scores']}[/bold] scores / "
            f"[bold]{totals['total_reps']}[/bold] reps · "
            f"Team-wide rate {format_pct(totals['pct'])}"
        )

        table = self.query_one("#leaderboard-table", DataTable)
        table.clear()
        for idx, row in enumerate(self._rows):
            table.add_row(
                rank_label(idx, len(self._rows)),
                Text(row.player),
                str(row.total_scored),
                str(row.total_reps),
                f"[bold]{format_pct(row.pct)}[/bold]",
                str(round(row.rating)),
                key=row.player,
            )
        self._show_body(True)
        table.focus()

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        if event.data_table.id == "leaderboard-table":
            self.show_player(event.row_key.value)

    def show_player(self, player: str) -> None:
        self.app.push_screen(
            PlayerDetailsScreen(player, self._practices, self._rankings, self._params),
            callback=self._on_player_closed,
        )

    def _on_player_closed(self, player: str | None) -> None:
        # Another player was picked from a practice drill-down
        if player:
            self.show_player(player)

    def action_reload(self) -> None:
        self._load_data()

    def action_show_help(self) -> None:
        self.app.push_screen(HelpScreen("Leaderboard Help", HELP_TEXT, get_rating_params()))
