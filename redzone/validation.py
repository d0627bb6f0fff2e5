"""Data quality checks over loaded practices and roster name validation.

Player identity is the literal roster string, so a misspelled name silently
becomes a second player. The roster check cross-references every rostered
name against the configured player list to surface those.
"""

import json
import re
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Callable

from redzone.config import get_data_dir, get_players

# Roster validation statuses
CLEAN = "CLEAN"
NAME_MISMATCH = "NAME_MISMATCH"
UNKNOWN_PLAYER = "UNKNOWN_PLAYER"


@dataclass
class DataQualityReport:
    """Summary of data quality checks."""
    checks: list[dict] = field(default_factory=list)

    def add(self, name: str, passed: bool, detail: str = ""):
        self.checks.append({"name": name, "passed": passed, "detail": detail})

    @property
    def all_passed(self) -> bool:
        return all(c["passed"] for c in self.checks)

    @property
    def summary(self) -> str:
        passed = sum(1 for c in self.checks if c["passed"])
        total = len(self.checks)
        return f"{passed}/{total} checks passed"


def _normalize_name(name: str) -> str:
    """Normalize a player name for fuzzy matching.

    Lowercase, strip suffixes (Jr., Sr., II, III, IV), remove apostrophes/periods.
    """
    n = name.lower().strip()
    n = re.sub(r",?\s+(jr\.?|sr\.?|ii|iii|iv)\s*$", "", n)
    n = n.replace("'", "").replace(".", "").replace("-", " ")
    n = re.sub(r"\s+", " ", n).strip()
    return n


def _is_count(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _label(p: dict, i: int) -> str:
    return str(p.get("date") or f"record #{i + 1}")


def run_practice_data_quality(practices: list) -> DataQualityReport:
    """Run data quality checks on loaded practice records."""
    report = DataQualityReport()

    report.add(
        "At least one practice loaded",
        len(practices) > 0,
        f"{len(practices)} practices loaded",
    )

    # Check 1: record shape (these would be skipped by aggregation)
    malformed = [
        f"record #{i + 1}" for i, p in enumerate(practices)
        if not isinstance(p, dict)
        or not isinstance(p.get("teams"), list)
        or not isinstance(p.get("results"), list)
    ]
    report.add(
        "Every record has teams and results",
        len(malformed) == 0,
        f"Skipped: {malformed}" if malformed else "Clean",
    )
    records = [p for p in practices if isinstance(p, dict)]

    # Check 2: dates parse as calendar dates
    bad_dates = []
    for i, p in enumerate(records):
        try:
            date.fromisoformat(str(p.get("date")))
        except ValueError:
            bad_dates.append(_label(p, i))
    report.add(
        "Dates are YYYY-MM-DD",
        len(bad_dates) == 0,
        f"Unparseable: {bad_dates}" if bad_dates else "Clean",
    )

    # Check 3: one file per date
    seen: dict[str, int] = {}
    for p in records:
        seen[str(p.get("date"))] = seen.get(str(p.get("date")), 0) + 1
    dupes = sorted(d for d, n in seen.items() if n > 1)
    report.add(
        "No duplicate practice dates",
        len(dupes) == 0,
        f"Duplicates: {dupes}" if dupes else "Clean",
    )

    bad_counts = []
    over = []
    orphans = []
    missing = []
    doubled = []
    for i, p in enumerate(records):
        label = _label(p, i)
        teams = [t for t in p.get("teams") or [] if isinstance(t, dict)]
        results = [r for r in p.get("results") or [] if isinstance(r, dict)]
        team_ids = {t.get("team_id") for t in teams}
        result_ids = {r.get("team_id") for r in results}

        for r in results:
            reps, scores = r.get("reps"), r.get("scores")
            if not (_is_count(reps) and _is_count(scores)):
                bad_counts.append(f"{label} {r.get('team_id')}")
            elif scores > reps:
                over.append(f"{label} {r.get('team_id')}: {scores}/{reps}")
            if r.get("team_id") not in team_ids:
                orphans.append(f"{label} {r.get('team_id')}")

        for t in teams:
            if t.get("team_id") not in result_ids:
                missing.append(f"{label} {t.get('team_id')}")

        counts: dict[str, int] = {}
        for t in teams:
            for player in t.get("roster") or []:
                counts[player] = counts.get(player, 0) + 1
        doubled.extend(f"{label} {name}" for name, n in counts.items() if n > 1)

    # Check 4: reps/scores are non-negative integers
    report.add(
        "Reps and scores are non-negative integers",
        len(bad_counts) == 0,
        f"Violations: {bad_counts}" if bad_counts else "Clean",
    )

    # Check 5: scores <= reps
    report.add(
        "Scores <= reps for every result",
        len(over) == 0,
        f"Violations: {over}" if over else "Clean",
    )

    # Check 6: every result belongs to a team (orphans are ignored)
    report.add(
        "Every result matches a team",
        len(orphans) == 0,
        f"Orphan results: {orphans}" if orphans else "Clean",
    )

    # Check 7: every team has a result (missing ones count as 0/0)
    report.add(
        "Every team has a result",
        len(missing) == 0,
        f"No result: {missing}" if missing else "Clean",
    )

    # Check 8: a player on two teams in one practice is credited twice
    report.add(
        "No player on two teams in one practice",
        len(doubled) == 0,
        f"Credited twice: {doubled}" if doubled else "Clean",
    )

    return report


def validate_rosters(
    practices: list,
    known_players: list[str] | None = None,
) -> dict:
    """Check every rostered name against the known player list.

    Returns a validation report with per-name results and summary.
    """
    if known_players is None:
        known_players = get_players()

    known = set(known_players)
    by_normalized = {_normalize_name(p): p for p in known_players}

    appearances: dict[str, list[str]] = {}
    for p in practices:
        if not isinstance(p, dict):
            continue
        for t in p.get("teams") or []:
            if not isinstance(t, dict):
                continue
            for name in t.get("roster") or []:
                appearances.setdefault(name, []).append(str(p.get("date")))

    results = []
    counts = {CLEAN: 0, NAME_MISMATCH: 0, UNKNOWN_PLAYER: 0}
    for name in sorted(appearances):
        if name in known:
            status, detail = CLEAN, "Known player"
        elif _normalize_name(name) in by_normalized:
            status = NAME_MISMATCH
            detail = f"Spelled differently from '{by_normalized[_normalize_name(name)]}'"
        else:
            status, detail = UNKNOWN_PLAYER, "Not in the configured player list"
        counts[status] += 1
        results.append({
            "name": name,
            "status": status,
            "detail": detail,
            "practices": appearances[name],
        })

    return {
        "summary": {
            "total_names": len(results),
            "counts": counts,
            "clean_pct": round(counts[CLEAN] / len(results) * 100, 1) if results else 0,
        },
        "issues": [r for r in results if r["status"] != CLEAN],
        "all_results": results,
    }


def print_validation_report(
    quality: DataQualityReport,
    roster_report: dict,
    log: Callable[[str], None] = print,
) -> None:
    """Print a human-readable validation report."""
    log("\n" + "=" * 60)
    log("VALIDATION REPORT")
    log("=" * 60)
    log(f"Data quality: {quality.summary}")
    for check in quality.checks:
        mark = "✓" if check["passed"] else "✗"
        log(f"  {mark} {check['name']}: {check['detail']}")

    summary = roster_report["summary"]
    counts = summary["counts"]
    log(f"\nRoster names checked: {summary['total_names']}")
    log(f"  CLEAN:          {counts[CLEAN]}")
    log(f"  NAME_MISMATCH:  {counts[NAME_MISMATCH]}")
    log(f"  UNKNOWN_PLAYER: {counts[UNKNOWN_PLAYER]}")

    issues = roster_report["issues"]
    if issues:
        log(f"\n--- Issues ({len(issues)}) ---")
        for issue in issues:
            log(f"  {issue['name']} [{issue['status']}] — {issue['detail']} "
                f"({len(issue['practices'])} practices)")
    else:
        log("\nNo roster issues found!")
    log("=" * 60)


def save_validation_report(
    quality: DataQualityReport,
    roster_report: dict,
    data_dir: Path | None = None,
) -> Path:
    """Save the validation report next to the practice data."""
    data_dir = data_dir or get_data_dir()
    data_dir.mkdir(parents=True, exist_ok=True)
    path = data_dir / "validation_report.json"
    with open(path, "w") as f:
        json.dump(
            {"quality": quality.checks, "rosters": roster_report},
            f, indent=2, default=str,
        )
    return path


def run_validation(
    practices: list | None = None,
    log: Callable[[str], None] = print,
) -> tuple[DataQualityReport, dict]:
    """Run the full validation pipeline and print/save results."""
    if practices is None:
        from redzone.practice_client import load_practices
        practices = load_practices(log=log)
    quality = run_practice_data_quality(practices)
    roster_report = validate_rosters(practices)
    print_validation_report(quality, roster_report, log=log)
    path = save_validation_report(quality, roster_report)
    log(f"\nSaved validation report to {path}")
    return quality, roster_report


if __name__ == "__main__":
    run_validation()
