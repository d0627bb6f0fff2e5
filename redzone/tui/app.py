"""Red Zone 9s TUI — main application."""

from textual.app import App, ComposeResult
from textual.widgets import Footer, Header, Static

from redzone.config import get_title
from redzone.tui.screens.data_check import DataCheckScreen
from redzone.tui.screens.generate import GenerateScreen
from redzone.tui.screens.leaderboard import LeaderboardScreen

HOME_TEXT = """\
[bold]Red Zone 9s practice rankings[/bold]

  l  Leaderboard
  c  Data Check
  g  Generate practice JSON
  ?  Help
"""


class RedZoneApp(App):
    """A keyboard-driven TUI for practice leaderboards."""

    TITLE = "Red Zone 9s"
    CSS_PATH = "styles/app.tcss"

    BINDINGS = [
        ("l", "goto('leaderboard')", "Leaderboard"),
        ("c", "goto('data_check')", "Data Check"),
        ("g", "goto('generate')", "Generate"),
        ("q", "quit", "Quit"),
        ("question_mark", "help", "Help"),
    ]

    SCREEN_TITLES = {
        "leaderboard": "Leaderboard",
        "data_check": "Data Check",
        "generate": "Generate Practice",
    }

    def on_mount(self) -> None:
        self.sub_title = get_title()
        # install_screen preserves instances between switches
        self.install_screen(LeaderboardScreen(), name="leaderboard")
        self.install_screen(DataCheckScreen(), name="data_check")
        self.install_screen(GenerateScreen(), name="generate")

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(HOME_TEXT, id="home-text")
        yield Footer()

    def action_goto(self, screen_name: str) -> None:
        # Pop back to default screen first, then push the target
        while len(self.screen_stack) > 1:
            self.pop_screen()
        self.sub_title = self.SCREEN_TITLES.get(screen_name, screen_name)
        self.push_screen(screen_name)

    def action_help(self) -> None:
        from redzone.tui.screens.help import HelpScreen
        self.push_screen(
            HelpScreen(
                "Red Zone 9s Help",
                (
                    "Keybindings:\n"
                    "  l  Leaderboard\n"
                    "  c  Data Check\n"
                    "  g  Generate practice JSON\n"
                    "  q  Quit\n"
                    "  ?  This help screen\n"
                ),
            )
        )


def main() -> None:
    app = RedZoneApp()
    app.run()


if __name__ == "__main__":
    main()
