"""Player drill-down modal — per-practice scoring for one player."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, DataTable, Static

from redzone.practice_math import (
    RatingParams,
    aggregate_player_stats,
    compute_rating,
    find_practice,
    format_pct,
    player_practice_rows,
    summarize_rows,
)
from redzone.tui.screens.practice_details import PracticeDetailsScreen


class PlayerDetailsScreen(ModalScreen[str | None]):
    """One row per practice the player was rostered in, newest first.

    Selecting a row opens that practice. Picking another player from the
    practice dismisses this modal with that player's name.
    """

    BINDINGS = [("escape", "dismiss", "Close")]

    DEFAULT_CSS = """
    PlayerDetailsScreen {
        align: center middle;
    }
    #player-dialog {
        width: 80;
        max-width: 95%;
        height: auto;
        max-height: 90%;
        border: thick $primary;
        background: $surface;
        padding: 1 2;
    }
    #player-title {
        text-style: bold;
    }
    #player-summary {
        color: $text-muted;
        margin-bottom: 1;
    }
    #player-practices {
        height: auto;
        max-height: 20;
    }
    #player-close {
        width: 100%;
        margin-top: 1;
    }
    """

    def __init__(
        self,
        player: str,
        practices: list[dict],
        rankings: dict[str, int] | None = None,
        params: RatingParams | None = None,
    ) -> None:
        super().__init__()
        self._player = player
        self._practices = practices
        self._rankings = rankings or {}
        self._params = params or RatingParams()
        self._rows = player_practice_rows(player, practices)

    @property
    def rating(self) -> float:
        agg = aggregate_player_stats(self._practices).get(self._player)
        return compute_rating(agg.history if agg else [], self._params)

    def _summary_text(self) -> str:
        totals = summarize_rows(self._rows)
        rank = self._rankings.get(self._player, "—")
        return (
            f"Practices: [bold]{len(self._rows)}[/bold] · Overall: "
            f"[bold]{totals['scores']}[/bold] / [bold]{totals['reps']}[/bold] "
            f"({format_pct(totals['pct'])}) · Current Rank: [bold]{rank}[/bold] · "
            f"Current Rating: [bold]{round(self.rating)}[/bold]"
        )

    def compose(self) -> ComposeResult:
        with Vertical(id="player-dialog"):
            yield Static(self._player, id="player-title", markup=False)
            yield Static(self._summary_text(), id="player-summary")
            if self._rows:
                yield DataTable(id="player-practices", cursor_type="row")
            else:
                yield Static("No practices found for this player.", id="player-empty")
            yield Button("Close [Esc]", id="player-close", variant="primary")

    def on_mount(self) -> None:
        if not self._rows:
            return
        table = self.query_one("#player-practices", DataTable)
        table.add_columns("Date", "Teams", "Scores", "Reps", "Rate")
        for i, row in enumerate(self._rows):
            table.add_row(
                str(row["date"]),
                Text(", ".join(str(t) for t in row["team_ids"])),
                str(row["scores"]),
                str(row["reps"]),
                f"[bold]{format_pct(row['pct'])}[/bold]",
                key=str(i),
            )

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        event.stop()
        row = self._rows[int(event.row_key.value)]
        self.show_practice(row["date"])

    def show_practice(self, practice_date: str) -> None:
        practice = find_practice(self._practices, practice_date)
        self.app.push_screen(
            PracticeDetailsScreen(practice_date, practice, self._rankings, self._params.neutral),
            callback=self._on_practice_closed,
        )

    def _on_practice_closed(self, player: str | None) -> None:
        if player and player != self._player:
            self.dismiss(player)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "player-close":
            self.dismiss(None)
