"""Base screen with shared navigation bindings."""

from textual.screen import Screen


class BaseScreen(Screen):
    """Base class for the main TUI screens — provides navigation keybindings."""

    BINDINGS = [
        ("escape", "go_home", "Home"),
        ("l", "goto('leaderboard')", "Leaderboard"),
        ("c", "goto('data_check')", "Data Check"),
        ("g", "goto('generate')", "Generate"),
        ("q", "quit", "Quit"),
        ("question_mark", "show_help", "Help"),
    ]

    def action_go_home(self) -> None:
        """Pop back to the home screen and restore the league title."""
        while len(self.app.screen_stack) > 1:
            self.app.pop_screen()
        from redzone.config import get_title
        self.app.sub_title = get_title()

    def action_goto(self, screen_name: str) -> None:
        self.app.action_goto(screen_name)

    def action_show_help(self) -> None:
        """Override in subclasses to show screen-specific help."""
        pass
