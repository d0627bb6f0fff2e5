"""Shared computation logic for Red Zone 9s practice rankings.

Provides player aggregation, the decayed logistic rating, leaderboard
ordering, and the per-player / per-practice drill-down rows. All of it is testable
without the TUI.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from functools import reduce

# ── Rating defaults ─────────────────────────────────────────────────────
INITIAL = 1000.0
STEP = 200.0
HALF_LIFE = 21.0
MU = 1000.0
WIDTH = 10000.0
NEUTRAL = 0.555

# Keeps log10(ν / (1 - ν)) finite
NEUTRAL_EPS = 1e-6

# E(R) saturates to 0 or 1 past this log10 odds; 10 ** 308 overflows a float
MAX_EXPONENT = 300.0

# Leaderboard tiebreak on total reps after rating and pct are equal.
# True puts the player with more reps first.
MORE_REPS_WINS_TIES = True

RANK_MEDALS = {0: "🥇", 1: "🥈", 2: "🥉"}
LAST_PLACE = "💩"


# ── Data types ──────────────────────────────────────────────────────────

@dataclass(frozen=True)
class PracticeEntry:
    """One team result as seen by a single rostered player."""
    date: str | date
    rate: float


@dataclass
class PlayerAggregate:
    """Cumulative counters plus the dated practice history for a player."""
    total_scored: int = 0
    total_reps: int = 0
    history: list[PracticeEntry] = field(default_factory=list)

    @property
    def pct(self) -> float:
        return self.total_scored / self.total_reps if self.total_reps > 0 else 0.0


@dataclass(frozen=True)
class RatingParams:
    """Parameters of the decayed logistic rating.

    reference_date=None means "today" at the moment compute_rating runs.
    """
    initial: float = INITIAL
    step: float = STEP
    half_life_days: float = HALF_LIFE
    mu: float = MU
    width: float = WIDTH
    neutral: float = NEUTRAL
    reference_date: date | datetime | None = None


@dataclass
class LeaderboardRow:
    player: str
    total_scored: int
    total_reps: int
    pct: float
    rating: float

    def to_dict(self) -> dict:
        return {
            "player": self.player,
            "scored": self.total_scored,
            "reps": self.total_reps,
            "pct": self.pct,
            "rating": self.rating,
        }


# ── Record helpers ──────────────────────────────────────────────────────

def _count(value) -> int:
    """Coerce a reps/scores field to a non-negative int (0 when unusable)."""
    try:
        n = int(value or 0)
    except (ValueError, TypeError, OverflowError):
        return 0
    return max(n, 0)


def _is_practice(practice) -> bool:
    return (
        isinstance(practice, dict)
        and isinstance(practice.get("teams"), list)
        and isinstance(practice.get("results"), list)
    )


def _team_rosters(practice: dict) -> dict[str, list[str]]:
    """Build team_id → roster lookup for a single practice."""
    rosters: dict[str, list[str]] = {}
    for team in practice.get("teams") or []:
        if not isinstance(team, dict):
            continue
        roster = team.get("roster")
        rosters[team.get("team_id")] = list(roster) if isinstance(roster, list) else []
    return rosters


def _parse_date(value) -> date | None:
    """Parse an ISO calendar date, or None when it cannot be read."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        return None


def _calendar_day(value: date | datetime | None) -> date:
    """Strip time-of-day from the reference, in UTC when it carries a zone."""
    if value is None:
        return datetime.now(timezone.utc).date()
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    return value


def practice_rate(reps: int, scores: int) -> float:
    """Scoring rate of a single team result (0 when no reps)."""
    return scores / reps if reps > 0 else 0.0


# ── Aggregation ─────────────────────────────────────────────────────────

@dataclass
class _PlayerAccumulator:
    players: dict[str, PlayerAggregate] = field(default_factory=dict)

    def credit(self, player: str, practice_date, reps: int, scores: int) -> None:
        agg = self.players.setdefault(player, PlayerAggregate())
        agg.total_reps += reps
        agg.total_scored += scores
        agg.history.append(PracticeEntry(date=practice_date, rate=practice_rate(reps, scores)))


def _fold_practice(acc: _PlayerAccumulator, practice) -> _PlayerAccumulator:
    """Attribute every team result of one practice to that team's roster."""
    if not _is_practice(practice):
        return acc

    rosters = _team_rosters(practice)
    for result in practice["results"]:
        if not isinstance(result, dict):
            continue
        roster = rosters.get(result.get("team_id"), [])
        reps = _count(result.get("reps"))
        scores = _count(result.get("scores"))
        # A player on two teams in one practice keeps both entries
        for player in roster:
            acc.credit(player, practice.get("date"), reps, scores)
    return acc


def _history_key(entry: PracticeEntry) -> tuple[str, float]:
    day = _parse_date(entry.date)
    return (day.isoformat() if day else "", entry.rate)


def aggregate_player_stats(practices) -> dict[str, PlayerAggregate]:
    """Fold all practice records into player → PlayerAggregate.

    Records missing teams or results are skipped. Each player's history is
    sorted by date so the result does not depend on record order.
    """
    acc = reduce(_fold_practice, practices or [], _PlayerAccumulator())
    for agg in acc.players.values():
        agg.history.sort(key=_history_key)
    return acc.players


# ── Rating engine ───────────────────────────────────────────────────────

def neutral_bias(neutral: float) -> float:
    """log10 odds of the neutral rate, so that E(mu) == neutral."""
    nz = min(1 - NEUTRAL_EPS, max(NEUTRAL_EPS, neutral))
    return math.log10(nz / (1 - nz))


def expected_rate(rating: float, params: RatingParams | None = None) -> float:
    """Expected scoring rate for a player at the given rating."""
    params = params or RatingParams()
    bias = neutral_bias(params.neutral)
    expo = -((rating - params.mu) / params.width + bias)
    if expo > MAX_EXPONENT:
        return 0.0
    if expo < -MAX_EXPONENT:
        return 1.0
    return 1 / (1 + 10 ** expo)


def decay_weight(age_days: int, half_life_days: float) -> float:
    """Weight of a practice that is age_days old: halves every half-life."""
    if half_life_days > 0:
        return 0.5 ** (age_days / half_life_days)
    return 1.0


def _valid_entries(history) -> list[tuple[date, float]]:
    """Parse and clamp entries, dropping unusable ones, sorted by (date, rate)."""
    valid = []
    for entry in history or []:
        if entry is None:
            continue
        if isinstance(entry, dict):
            raw_date, raw_rate = entry.get("date"), entry.get("rate")
        else:
            raw_date, raw_rate = getattr(entry, "date", None), getattr(entry, "rate", None)
        try:
            rate = float(raw_rate)
        except (ValueError, TypeError):
            continue
        if not math.isfinite(rate):
            continue
        day = _parse_date(raw_date)
        if day is None:
            continue
        valid.append((day, min(1.0, max(0.0, rate))))
    valid.sort()
    return valid


def compute_rating(history, params: RatingParams | None = None) -> float:
    """Decayed logistic (Elo-style) rating over a player's practice history.

    Entries are folded oldest first:
        R ← R + K · 0.5^(age/H) · (rate − E(R))
    where E(R) = 1 / (1 + 10^−((R − mu)/W + β)) and β calibrates E(mu) to the
    neutral rate. An empty history returns params.initial.
    """
    params = params or RatingParams()
    today = _calendar_day(params.reference_date)

    rating = params.initial
    for day, rate in _valid_entries(history):
        age_days = max(0, (today - day).days)
        weight = decay_weight(age_days, params.half_life_days)
        rating += params.step * weight * (rate - expected_rate(rating, params))
    return rating


# ── Leaderboard ─────────────────────────────────────────────────────────

def leaderboard_sort_key(row: LeaderboardRow, more_reps_first: bool = MORE_REPS_WINS_TIES):
    reps_key = -row.total_reps if more_reps_first else row.total_reps
    return (-row.rating, -row.pct, reps_key, row.player)


def to_leaderboard(
    players: dict[str, PlayerAggregate],
    params: RatingParams | None = None,
    more_reps_first: bool = MORE_REPS_WINS_TIES,
) -> list[LeaderboardRow]:
    """Rank players by rating, then pct, then total reps, then name."""
    rows = []
    for player, agg in players.items():
        rows.append(LeaderboardRow(
            player=player,
            total_scored=agg.total_scored,
            total_reps=agg.total_reps,
            pct=agg.pct,
            rating=compute_rating(agg.history, params),
        ))
    rows.sort(key=lambda r: leaderboard_sort_key(r, more_reps_first))
    return rows


def build_leaderboard(practices, params: RatingParams | None = None) -> list[LeaderboardRow]:
    """Full pipeline: aggregate → rate → rank, rerun from scratch every time."""
    return to_leaderboard(aggregate_player_stats(practices), params)


def player_rankings(rows: list[LeaderboardRow]) -> dict[str, int]:
    """Map player → 1-based leaderboard position."""
    return {row.player: idx for idx, row in enumerate(rows, 1)}


def rank_label(index: int, total: int) -> str:
    """Display label for a 0-based leaderboard index: medals, last place, or number."""
    if index in RANK_MEDALS:
        return RANK_MEDALS[index]
    if index == total - 1:
        return LAST_PLACE
    return str(index + 1)


def format_pct(p: float) -> str:
    return f"{p * 100:.1f}%"


# ── Drill-downs ─────────────────────────────────────────────────────────

def _sort_by_date(practices: list[dict]) -> list[dict]:
    return sorted(practices, key=lambda p: str(p.get("date") or ""))


def sort_practices(practices: list) -> list[dict]:
    """Drop non-record entries and order chronologically by embedded date."""
    return _sort_by_date([p for p in practices if isinstance(p, dict)])


def player_practice_rows(player: str, practices: list[dict]) -> list[dict]:
    """Per-practice scoring for one player, newest first.

    Reps and scores are summed over every team the player was rostered on
    in that practice.
    """
    rows = []
    for p in practices:
        if not _is_practice(p):
            continue
        teams = [
            t for t in p["teams"]
            if isinstance(t, dict) and isinstance(t.get("roster"), list) and player in t["roster"]
        ]
        if not teams:
            continue

        results = {r.get("team_id"): r for r in p["results"] if isinstance(r, dict)}
        reps = scores = 0
        team_ids = []
        for t in teams:
            team_ids.append(t.get("team_id"))
            r = results.get(t.get("team_id"))
            if r:
                reps += _count(r.get("reps"))
                scores += _count(r.get("scores"))
        rows.append({
            "date": p.get("date"),
            "team_ids": team_ids,
            "reps": reps,
            "scores": scores,
            "pct": practice_rate(reps, scores),
        })

    rows.sort(key=lambda r: str(r["date"] or ""), reverse=True)
    return rows


def practice_team_rows(practice: dict | None) -> list[dict]:
    """One row per team of a practice, ordered by team_id."""
    if not isinstance(practice, dict):
        return []
    teams = practice.get("teams") if isinstance(practice.get("teams"), list) else []
    results = practice.get("results") if isinstance(practice.get("results"), list) else []

    by_team: dict = {}
    for r in results:
        if isinstance(r, dict):
            by_team[r.get("team_id")] = (_count(r.get("reps")), _count(r.get("scores")))

    rows = []
    for t in teams:
        if not isinstance(t, dict):
            continue
        reps, scores = by_team.get(t.get("team_id"), (0, 0))
        rows.append({
            "team_id": t.get("team_id"),
            "name": t.get("name") or "",
            "roster": list(t["roster"]) if isinstance(t.get("roster"), list) else [],
            "reps": reps,
            "scores": scores,
            "pct": practice_rate(reps, scores),
        })

    rows.sort(key=lambda r: str(r["team_id"]))
    return rows


def summarize_rows(rows: list[dict]) -> dict:
    """Total reps/scores/pct over drill-down rows."""
    reps = sum(r["reps"] for r in rows)
    scores = sum(r["scores"] for r in rows)
    return {"reps": reps, "scores": scores, "pct": practice_rate(reps, scores)}


def practice_totals(practices: list[dict]) -> dict:
    """League-wide totals, counting each team result once (not per player)."""
    total_reps = 0
    total_scores = 0
    dated = []
    for p in practices:
        if not isinstance(p, dict):
            continue
        if p.get("date"):
            dated.append(str(p["date"]))
        for r in p.get("results") or []:
            if isinstance(r, dict):
                total_reps += _count(r.get("reps"))
                total_scores += _count(r.get("scores"))
    return {
        "practices": len(practices),
        "last_date": max(dated) if dated else None,
        "total_reps": total_reps,
        "total_scores": total_scores,
        "pct": practice_rate(total_reps, total_scores),
    }


def find_practice(practices: list[dict], practice_date: str) -> dict | None:
    """Return the practice recorded on a date, if loaded."""
    for p in practices:
        if isinstance(p, dict) and p.get("date") == practice_date:
            return p
    return None
