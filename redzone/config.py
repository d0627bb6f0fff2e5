"""Load league configuration from config.toml with hardcoded fallbacks."""

import os
from pathlib import Path

from dotenv import load_dotenv

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # Python < 3.11

load_dotenv()

_ROOT = Path(__file__).resolve().parent.parent
_CONFIG_PATH = _ROOT / "config.toml"

_FALLBACK_TITLE = "Tribe 2025 · Red Zone 9s"
_FALLBACK_DATA_DIR = _ROOT / "data"
_FALLBACK_MANIFEST = "manifest.json"

_FALLBACK_RATING = {
    "initial": 1000.0,
    "step": 200.0,
    "half_life_days": 21.0,
    "mu": 1000.0,
    "width": 10000.0,
    "neutral": 0.555,
}

_FALLBACK_PLAYERS = [
    "Adam Grossberg",
    "Adithya Deepak",
    "Camilo Castrillon",
    "Connor Case",
    "David Baker",
    "Dhruvsai Dhulipudi",
    "Edan Avissar",
    "Ephraim Connor",
    "Ethan Austin-Cruse",
    "Flavius Penescu",
    "Ganden Fung",
    "Grover Grendzinski",
    "Ivan Sanchez",
    "Jackson Armstrong",
    "Jedidiah Cheng",
    "John Davis",
    "Keller Smith",
    "Matthew Greenberg",
    "Neal Zeng",
    "Nikos Verlenden",
    "Owen Hammond-Lee",
    "Philip Emry",
    "Sam Granade",
    "Sam Grossberg",
    "Stefan McCall",
]


def _load_config() -> dict:
    """Load and return the parsed config.toml, or empty dict if missing."""
    try:
        with open(_CONFIG_PATH, "rb") as f:
            return tomllib.load(f)
    except FileNotFoundError:
        return {}


def get_title() -> str:
    """Return the league/leaderboard title."""
    cfg = _load_config()
    return cfg.get("league", {}).get("title", _FALLBACK_TITLE)


def get_data_dir() -> Path:
    """Return the directory holding manifest.json and the practice files.

    REDZONE_DATA_DIR wins over config.toml; relative paths resolve against
    the repository root.
    """
    env_dir = os.environ.get("REDZONE_DATA_DIR")
    if env_dir:
        return Path(env_dir)
    cfg_dir = _load_config().get("data", {}).get("dir")
    if cfg_dir:
        path = Path(cfg_dir)
        return path if path.is_absolute() else _ROOT / path
    return _FALLBACK_DATA_DIR


def get_base_url() -> str | None:
    """Return the HTTP base URL to fetch practices from, or None for local files."""
    env_url = os.environ.get("REDZONE_BASE_URL")
    if env_url:
        return env_url.rstrip("/")
    url = _load_config().get("data", {}).get("base_url")
    return url.rstrip("/") if url else None


def get_manifest_name() -> str:
    """Return the manifest filename inside the data directory."""
    cfg = _load_config()
    return cfg.get("data", {}).get("manifest", _FALLBACK_MANIFEST)


def get_rating_params() -> dict[str, float]:
    """Return rating engine parameters (config overrides merged over defaults)."""
    cfg = _load_config()
    params = dict(_FALLBACK_RATING)
    for key, val in cfg.get("rating", {}).items():
        if key in params:
            params[key] = float(val)
    return params


def get_players() -> list[str]:
    """Return the known player list, in display order."""
    cfg = _load_config()
    return cfg.get("league", {}).get("players", list(_FALLBACK_PLAYERS))
