"""Tests for app instantiation, screen switching, keybindings."""

import pytest
from unittest.mock import patch
from textual.widgets import Footer

from redzone.tui.app import RedZoneApp
from redzone.tui.screens.data_check import DataCheckScreen
from redzone.tui.screens.generate import GenerateScreen
from redzone.tui.screens.help import HelpScreen
from redzone.tui.screens.leaderboard import LeaderboardScreen


def _no_load(screen):
    screen._on_data_loaded([])


@pytest.mark.asyncio
async def test_app_instantiates():
    """RedZoneApp instantiates without error using run_test pilot."""
    app = RedZoneApp()
    async with app.run_test() as pilot:
        assert app.title == "Red Zone 9s"
        assert app.sub_title == "Tribe 2025 · Red Zone 9s"


@pytest.mark.asyncio
async def test_keybinding_l_switches_to_leaderboard():
    """Pressing l switches to LeaderboardScreen."""
    app = RedZoneApp()
    async with app.run_test() as pilot:
        with patch(
            "redzone.tui.screens.leaderboard.LeaderboardScreen._load_data",
            lambda self: _no_load(self),
        ):
            await pilot.press("l")
            assert isinstance(app.screen, LeaderboardScreen)
            assert app.sub_title == "Leaderboard"


@pytest.mark.asyncio
async def test_keybinding_q_quits():
    """Pressing q exits the app."""
    app = RedZoneApp()
    async with app.run_test() as pilot:
        await pilot.press("q")
        # If we reach here without hanging, the app exited


@pytest.mark.asyncio
async def test_all_screen_keybindings():
    """Every screen keybinding switches to the correct screen type."""
    bindings = {
        "c": DataCheckScreen,
        "l": LeaderboardScreen,
        "g": GenerateScreen,
    }
    app = RedZoneApp()
    async with app.run_test() as pilot:
        with patch(
            "redzone.tui.screens.leaderboard.LeaderboardScreen._load_data",
            lambda self: _no_load(self),
        ):
            for key, screen_class in bindings.items():
                await pilot.press(key)
                assert isinstance(app.screen, screen_class), (
                    f"Key '{key}' should switch to {screen_class.__name__}, "
                    f"got {type(app.screen).__name__}"
                )


@pytest.mark.asyncio
async def test_escape_returns_home():
    """Escape on a screen returns to the home screen and restores the title."""
    app = RedZoneApp()
    async with app.run_test() as pilot:
        await pilot.press("c")
        assert isinstance(app.screen, DataCheckScreen)
        await pilot.press("escape")
        assert len(app.screen_stack) == 1
        assert app.sub_title == "Tribe 2025 · Red Zone 9s"


@pytest.mark.asyncio
async def test_help_overlay_from_app():
    """Pressing ? on the app shows a help modal."""
    app = RedZoneApp()
    async with app.run_test() as pilot:
        await pilot.press("question_mark")
        assert isinstance(app.screen, HelpScreen)
        await pilot.press("escape")
        assert not isinstance(app.screen, HelpScreen)


@pytest.mark.asyncio
async def test_footer_shows_keybindings():
    """Footer widget is present and shows keybinding hints."""
    app = RedZoneApp()
    async with app.run_test() as pilot:
        footer = app.query_one(Footer)
        assert footer is not None
