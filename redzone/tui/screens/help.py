"""Reusable help modal overlay for TUI screens."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Vertical, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Button, Static

# Rating parameter key -> (symbol, unit) as written in the rating help text
PARAM_SYMBOLS = {
    "half_life_days": ("H", " days"),
    "step": ("K", ""),
    "mu": ("mu", ""),
    "width": ("W", ""),
    "neutral": ("nu", ""),
    "initial": ("R_0", ""),
}


def format_params(params: dict[str, float]) -> str:
    """One line per known rating parameter, e.g. '  H = 21 days'."""
    lines = ["Current parameters:"]
    for key, (symbol, unit) in PARAM_SYMBOLS.items():
        if key in params:
            lines.append(f"  {symbol:<4}= {params[key]:g}{unit}")
    return "\n".join(lines)


class HelpScreen(ModalScreen[None]):
    """A scrollable help overlay that closes on Escape or button click.

    When rating parameters are given they are listed under the help text.
    """

    BINDINGS = [("escape", "dismiss", "Close")]

    DEFAULT_CSS = """
    HelpScreen {
        align: center middle;
    }
    #help-dialog {
        width: 72;
        height: auto;
        max-height: 85%;
        border: thick $primary;
        background: $surface;
        padding: 1 2;
    }
    #help-title {
        text-align: center;
        text-style: bold;
        margin-bottom: 1;
    }
    #help-body {
        height: auto;
        max-height: 30;
    }
    #help-params {
        color: $text-muted;
        margin-top: 1;
    }
    #help-close {
        width: 100%;
        margin-top: 1;
    }
    """

    def __init__(self, title: str, body: str, params: dict[str, float] | None = None) -> None:
        super().__init__()
        self._title = title
        self._body = body
        self._params = params

    def compose(self) -> ComposeResult:
        with Vertical(id="help-dialog"):
            yield Static(self._title, id="help-title")
            with VerticalScroll(id="help-body"):
                yield Static(self._body, markup=False)
                if self._params:
                    yield Static(format_params(self._params), id="help-params", markup=False)
            yield Button("Close [Esc]", id="help-close", variant="primary")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "help-close":
            self.dismiss()
