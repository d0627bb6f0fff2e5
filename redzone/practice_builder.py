"""Build per-practice JSON records and save them into the data directory."""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from typing import Callable

from redzone.config import get_data_dir, get_manifest_name

LETTERS = [chr(c) for c in range(ord("A"), ord("Z") + 1)]


def team_id_for(index: int) -> str:
    """A, B, C, ... for the first 26 teams, then T27, T28, ..."""
    return LETTERS[index] if index < len(LETTERS) else f"T{index + 1}"


def safe_int(value) -> int:
    """Parse a non-negative int, falling back to 0."""
    try:
        n = int(str(value).strip())
    except (ValueError, TypeError):
        return 0
    return n if n >= 0 else 0


def order_roster(roster: list[str], player_order: list[str] | None = None) -> list[str]:
    """Order a roster by the known player list; unknown names go last, in input order."""
    unique = list(dict.fromkeys(roster))
    if not player_order:
        return unique
    position = {name: i for i, name in enumerate(player_order)}
    return sorted(unique, key=lambda p: position.get(p, len(position)))


def build_practice(
    practice_date: str | date,
    teams: list[dict],
    player_order: list[str] | None = None,
) -> dict:
    """Build a practice record from [{roster, reps, scores}, ...].

    Team ids are assigned by position; the output matches the hand-authored
    practice file layout exactly.
    """
    if isinstance(practice_date, date):
        practice_date = practice_date.isoformat()

    teams_out = []
    results_out = []
    for idx, t in enumerate(teams):
        tid = team_id_for(idx)
        teams_out.append({
            "team_id": tid,
            "roster": order_roster(t.get("roster", []), player_order),
        })
        results_out.append({
            "team_id": tid,
            "reps": safe_int(t.get("reps", 0)),
            "scores": safe_int(t.get("scores", 0)),
        })

    return {
        "date": practice_date or "YYYY-MM-DD",
        "teams": teams_out,
        "results": results_out,
    }


def practice_json(practice: dict) -> str:
    return json.dumps(practice, indent=2, ensure_ascii=False)


def save_json(data, path: Path, log: Callable[[str], None] = print) -> None:
    with open(path, "w") as f:
        f.write(json.dumps(data, indent=2, ensure_ascii=False))
        f.write("\n")
    log(f"  Saved {path.name}")


def save_practice(
    practice: dict,
    data_dir: Path | None = None,
    log: Callable[[str], None] = print,
) -> Path:
    """Write <date>.json and list it in the manifest if it is not already there."""
    data_dir = data_dir or get_data_dir()
    data_dir.mkdir(parents=True, exist_ok=True)

    filename = f"{practice['date']}.json"
    path = data_dir / filename
    save_json(practice, path, log=log)

    manifest_path = data_dir / get_manifest_name()
    manifest: list = []
    if manifest_path.exists():
        with open(manifest_path) as f:
            manifest = json.load(f)
        if not isinstance(manifest, list):
            manifest = []
    if filename not in manifest:
        manifest.append(filename)
        save_json(manifest, manifest_path, log=log)
    else:
        log(f"  {filename} already listed in manifest")
    return path
