"""Practice drill-down modal — per-team results for a single practice."""

from __future__ import annotations

from rich.markup import escape
from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Label, OptionList, Static
from textual.widgets.option_list import Option

from redzone.practice_math import (
    NEUTRAL,
    format_pct,
    practice_team_rows,
    summarize_rows,
)
from redzone.tui.widgets.team_results_table import TeamResultsTable


class PracticeDetailsScreen(ModalScreen[str | None]):
    """Teams, rosters and rates for one practice.

    Dismisses with a player name when a player is picked from the list, so
    the caller can open that player's details instead.
    """

    BINDINGS = [("escape", "dismiss", "Close")]

    DEFAULT_CSS = """
    PracticeDetailsScreen {
        align: center middle;
    }
    #practice-dialog {
        width: 100;
        max-width: 95%;
        height: auto;
        max-height: 90%;
        border: thick $primary;
        background: $surface;
        padding: 1 2;
    }
    #practice-title {
        text-style: bold;
    }
    #practice-summary {
        color: $text-muted;
        margin-bottom: 1;
    }
    #practice-players {
        height: auto;
        max-height: 10;
        margin-top: 1;
    }
    #practice-close {
        width: 100%;
        margin-top: 1;
    }
    """

    def __init__(
        self,
        practice_date: str,
        practice: dict | None,
        rankings: dict[str, int] | None = None,
        neutral: float = NEUTRAL,
    ) -> None:
        super().__init__()
        self._date = practice_date
        self._practice = practice
        self._rankings = rankings or {}
        self._neutral = neutral
        self._rows = practice_team_rows(practice)

    def _summary_text(self) -> str:
        if self._practice is None:
            return f"[red]No practice data for {escape(str(self._date))}[/red]"
        totals = summarize_rows(self._rows)
        return (
            f"Teams: [bold]{len(self._rows)}[/bold] · Overall: "
            f"[bold]{totals['scores']}[/bold] / [bold]{totals['reps']}[/bold] "
            f"({format_pct(totals['pct'])})"
        )

    def compose(self) -> ComposeResult:
        with Vertical(id="practice-dialog"):
            yield Static(f"Practice {self._date}", id="practice-title", markup=False)
            yield Static(self._summary_text(), id="practice-summary")
            if self._rows:
                yield TeamResultsTable(
                    self._rows, self._rankings, self._neutral, id="practice-teams",
                )
                players = list(dict.fromkeys(p for row in self._rows for p in row["roster"]))
                yield Label("Open player:")
                yield OptionList(
                    *[
                        Option(Text(f"{p} ({self._rankings[p]})" if p in self._rankings else p), id=p)
                        for p in players
                    ],
                    id="practice-players",
                )
            else:
                yield Static("No practice data.", id="practice-empty")
            yield Button("Close [Esc]", id="practice-close", variant="primary")

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        event.stop()
        self.dismiss(event.option.id)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "practice-close":
            self.dismiss(None)
