"""Generate screen — enter one practice's teams and results, preview and save the JSON."""

from __future__ import annotations

from datetime import date

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal, VerticalScroll
from textual.css.query import NoMatches
from textual.widget import Widget
from textual.widgets import (
    Button, Footer, Header, Input, Label, Select, SelectionList, Static,
)

from redzone.config import get_players
from redzone.practice_builder import (
    build_practice,
    practice_json,
    safe_int,
    save_practice,
    team_id_for,
)
from redzone.tui.screens.base import BaseScreen
from redzone.tui.screens.help import HelpScreen

MAX_TEAMS = 10

HELP_TEXT = """\
Generate Practice

Build the JSON record for one practice:
  Date         Practice date (YYYY-MM-DD)
  Teams        Number of teams (ids A, B, C, ...)
  Reps/Scores  Team totals for the practice
  Players      Toggle rostered players with Space

The JSON preview updates as you type. Save writes
<date>.json to the data directory and adds it to
manifest.json.

Keybindings:
  Tab    Next field
  ?      Show this help
  Esc    Home
"""


class TeamEditor(Widget):
    """Reps, scores and roster selection for one team."""

    DEFAULT_CSS = """
    TeamEditor {
        height: auto;
        border-bottom: solid $primary-background;
        padding: 1 0;
    }
    TeamEditor .team-row {
        height: 3;
    }
    TeamEditor .team-label {
        width: 10;
        padding: 1 1;
        text-style: bold;
    }
    TeamEditor Input {
        width: 16;
        margin-right: 1;
    }
    TeamEditor SelectionList {
        height: auto;
        max-height: 12;
    }
    """

    def __init__(self, index: int, players: list[str], **kwargs) -> None:
        super().__init__(**kwargs)
        self.team_index = index
        self._players = players

    def compose(self) -> ComposeResult:
        with Horizontal(classes="team-row"):
            yield Label(f"Team {team_id_for(self.team_index)}", classes="team-label")
            yield Input(value="0", placeholder="Reps", type="integer", classes="reps-input")
            yield Input(value="0", placeholder="Scores", type="integer", classes="scores-input")
        yield SelectionList[str](*[(Text(p), p) for p in self._players], classes="roster-select")

    def value(self) -> dict:
        return {
            "roster": list(self.query_one(".roster-select", SelectionList).selected),
            "reps": safe_int(self.query_one(".reps-input", Input).value),
            "scores": safe_int(self.query_one(".scores-input", Input).value),
        }


class GenerateScreen(BaseScreen):
    """Practice entry screen."""

    DEFAULT_CSS = """
    #generate-controls {
        height: 3;
        padding: 0 1;
    }
    #generate-controls Input {
        width: 20;
        margin-right: 1;
    }
    #generate-controls Select {
        width: 20;
        margin-right: 1;
    }
    #generate-body {
        height: 1fr;
    }
    #team-editors {
        width: 2fr;
        padding: 0 1;
    }
    #practice-json-scroll {
        width: 1fr;
        border-left: solid $primary-background;
        padding: 0 1;
    }
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._players = get_players()

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="generate-controls"):
            yield Input(value=date.today().isoformat(), placeholder="YYYY-MM-DD", id="practice-date")
            yield Select(
                [(f"{n} teams", n) for n in range(1, MAX_TEAMS + 1)],
                value=2,
                allow_blank=False,
                id="team-count",
            )
            yield Button("Save Practice", id="save-practice", variant="primary")
        with Horizontal(id="generate-body"):
            with VerticalScroll(id="team-editors"):
                for i in range(2):
                    yield TeamEditor(i, self._players)
            with VerticalScroll(id="practice-json-scroll"):
                yield Static(id="practice-json", markup=False)
        yield Footer()

    def on_mount(self) -> None:
        self._refresh_json()

    def editors(self) -> list[TeamEditor]:
        return sorted(self.query(TeamEditor), key=lambda e: e.team_index)

    def current_practice(self) -> dict:
        practice_date = self.query_one("#practice-date", Input).value.strip()
        teams = [e.value() for e in self.editors()]
        return build_practice(practice_date, teams, self._players)

    def _refresh_json(self) -> None:
        try:
            practice = self.current_practice()
        except NoMatches:
            # Team editors still mounting
            return
        self.query_one("#practice-json", Static).update(practice_json(practice))

    async def _resize_teams(self, count: int) -> None:
        editors = self.editors()
        container = self.query_one("#team-editors", VerticalScroll)
        for editor in editors[count:]:
            await editor.remove()
        for i in range(len(editors), count):
            await container.mount(TeamEditor(i, self._players))

    async def on_select_changed(self, event: Select.Changed) -> None:
        if event.select.id == "team-count" and event.value is not Select.BLANK:
            await self._resize_teams(int(event.value))
            self._refresh_json()

    def on_input_changed(self, event: Input.Changed) -> None:
        self._refresh_json()

    def on_selection_list_selected_changed(self, event: SelectionList.SelectedChanged) -> None:
        self._refresh_json()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id != "save-practice":
            return
        practice = self.current_practice()
        try:
            date.fromisoformat(practice["date"])
        except ValueError:
            self.notify(f"Invalid date: {practice['date']}", severity="error")
            return
        try:
            path = save_practice(practice, log=lambda msg: None)
        except Exception as e:
            self.notify(f"Could not save practice: {e}", severity="error")
            return
        self.notify(f"Saved {path.name}", severity="information")

    def action_show_help(self) -> None:
        self.app.push_screen(HelpScreen("Generate Help", HELP_TEXT))
