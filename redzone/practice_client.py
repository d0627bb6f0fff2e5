"""Load the practice manifest and practice records from disk or over HTTP.

With a base URL configured (config.toml [data] base_url or REDZONE_BASE_URL)
files are fetched with requests; otherwise they are read from the data dir.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable

import requests

from redzone.config import get_base_url, get_data_dir, get_manifest_name
from redzone.practice_math import sort_practices


def _get(url: str) -> list | dict:
    """GET a JSON document, bypassing caches."""
    resp = requests.get(url, headers={"Cache-Control": "no-store"}, timeout=30)
    resp.raise_for_status()
    return resp.json()


def _read(path: Path) -> list | dict:
    with open(path) as f:
        return json.load(f)


def _fetch(filename: str, data_dir: Path | None, base_url: str | None) -> list | dict:
    if base_url:
        return _get(f"{base_url}/{filename}")
    return _read((data_dir or get_data_dir()) / filename)


def fetch_manifest(
    data_dir: Path | None = None,
    base_url: str | None = None,
) -> list[str]:
    """Return the list of practice filenames, in listed order.

    A missing or unreadable manifest raises; a manifest that is not a JSON
    array is treated as empty.
    """
    manifest = _fetch(get_manifest_name(), data_dir, base_url)
    if not isinstance(manifest, list):
        return []
    return [str(name) for name in manifest]


def fetch_practice(
    filename: str,
    data_dir: Path | None = None,
    base_url: str | None = None,
) -> dict:
    """Return one parsed practice record."""
    return _fetch(filename, data_dir, base_url)


def load_practices(
    data_dir: Path | None = None,
    base_url: str | None = None,
    log: Callable[[str], None] = print,
) -> list[dict]:
    """Load every practice listed in the manifest, sorted by embedded date.

    Practice files that fail to load are logged and skipped. Uses the
    configured source when neither data_dir nor base_url is given.
    """
    if data_dir is None and base_url is None:
        base_url = get_base_url()
    source = base_url or str(data_dir or get_data_dir())

    log(f"Loading manifest from {source}...")
    manifest = fetch_manifest(data_dir, base_url)
    if not manifest:
        log("  Manifest is empty")
        return []

    loaded = []
    for filename in manifest:
        try:
            loaded.append(fetch_practice(filename, data_dir, base_url))
        except (OSError, ValueError, requests.RequestException) as e:
            log(f"  Skipping {filename}: {e}")

    practices = sort_practices(loaded)
    log(f"  Loaded {len(practices)}/{len(manifest)} practices")
    return practices
