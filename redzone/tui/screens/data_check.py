"""Data Check screen — loads practices, runs validation and exports, with live logging."""

from __future__ import annotations

import os
from datetime import datetime

from rich.markup import escape
from textual import work
from textual.app import ComposeResult
from textual.widgets import Button, Footer, Header, RichLog, Static

from redzone.config import get_base_url, get_data_dir, get_manifest_name
from redzone.tui.screens.base import BaseScreen
from redzone.tui.screens.help import HelpScreen

HELP_TEXT = """\
Data Check Screen

Runs the practice data pipeline:
  1. Load manifest and practice files
  2. Data quality checks (shape, dates, reps/scores,
     orphan results, players on two teams)
  3. Roster names vs. the configured player list
  4. Export leaderboard.csv / leaderboard.json

Keybindings:
  Enter  Start checks
  ?      Show this help
  Esc    Return to previous screen

Notes:
  - A failing practice file is skipped, not fatal
  - A missing manifest stops the later steps
  - Misspelled names show up as NAME_MISMATCH
"""


def manifest_freshness() -> str:
    """Describe the practice data source and how old its manifest is."""
    base_url = get_base_url()
    if base_url:
        return f"Source: {base_url}"
    data_dir = get_data_dir()
    manifest = data_dir / get_manifest_name()
    if not manifest.exists():
        return f"Source: {data_dir} | Manifest: [red]missing[/red]"
    mtime = datetime.fromtimestamp(os.path.getmtime(manifest))
    age = datetime.now() - mtime
    if age.days > 0:
        age_str = f"{age.days}d ago"
    elif age.seconds > 3600:
        age_str = f"{age.seconds // 3600}h ago"
    else:
        age_str = f"{age.seconds // 60}m ago"
    return f"Source: {data_dir} | Manifest updated: {age_str}"


class DataCheckScreen(BaseScreen):
    """Screen for checking the practice data files."""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._practices: list[dict] | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(self._freshness_text(), id="data-freshness")
        yield Button("Run Checks", id="start-checks", variant="primary")
        yield RichLog(highlight=True, markup=True, id="check-log")
        yield Footer()

    def _freshness_text(self) -> str:
        return manifest_freshness()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "start-checks":
            event.button.disabled = True
            self._run_checks()

    @work(exclusive=True, thread=True)
    def _run_checks(self) -> None:
        log = self.query_one("#check-log", RichLog)

        def log_fn(msg: str) -> None:
            self.app.call_from_thread(log.write, msg)

        steps = [
            ("Load Practices", self._step_load),
            ("Data Quality", self._step_quality),
            ("Roster Names", self._step_rosters),
            ("Export Leaderboard", self._step_export),
        ]

        self._practices = None
        log_fn("[bold]Starting data checks...[/bold]")
        for name, step_fn in steps:
            log_fn(f"\n[bold blue]>>> {name}[/bold blue]")
            try:
                step_fn(log_fn)
                log_fn(f"[green]  ✓ {name} complete[/green]")
            except Exception as e:
                log_fn(f"[red]  ✗ {name} failed: {escape(str(e))}[/red]")

        log_fn("\n[bold green]Checks finished.[/bold green]")
        self.app.call_from_thread(self._on_checks_done)

    def _on_checks_done(self) -> None:
        btn = self.query_one("#start-checks", Button)
        btn.disabled = False
        freshness = self.query_one("#data-freshness", Static)
        freshness.update(self._freshness_text())
        self.notify("Data checks complete", severity="information")

    def _require_practices(self) -> list[dict]:
        if self._practices is None:
            raise RuntimeError("practices were not loaded")
        return self._practices

    def _step_load(self, log_fn):
        from redzone.practice_client import load_practices
        self._practices = load_practices(log=log_fn)

    def _step_quality(self, log_fn):
        from redzone.validation import run_practice_data_quality
        report = run_practice_data_quality(self._require_practices())
        if report.all_passed:
            log_fn("  All checks passed")
        else:
            log_fn(f"[yellow]  ⚠ {escape(report.summary)}[/yellow]")
        for check in report.checks:
            status = "[green]✓[/green]" if check["passed"] else "[red]✗[/red]"
            log_fn(f"    {status} {check['name']}: {escape(str(check.get('detail', '')))}")

    def _step_rosters(self, log_fn):
        from redzone.validation import validate_rosters
        report = validate_rosters(self._require_practices())
        counts = report["summary"]["counts"]
        log_fn(f"  {report['summary']['total_names']} names: " + ", ".join(
            f"{status} {n}" for status, n in counts.items()
        ))
        for issue in report["issues"]:
            log_fn(f"    [yellow]{escape(issue['name'])}[/yellow] — {escape(issue['detail'])}")

    def _step_export(self, log_fn):
        from redzone.config import get_rating_params
        from redzone.practice_math import RatingParams, build_leaderboard
        from redzone.report import save_leaderboard
        rows = build_leaderboard(
            self._require_practices(), RatingParams(**get_rating_params()),
        )
        save_leaderboard(rows, log=log_fn)

    def action_show_help(self) -> None:
        self.app.push_screen(HelpScreen("Data Check Help", HELP_TEXT))
