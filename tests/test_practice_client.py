"""Tests for the practice loader (local files and HTTP)."""

import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from redzone import practice_client


def _write(path, data):
    path.write_text(json.dumps(data))


def _practice(practice_date):
    return {
        "date": practice_date,
        "teams": [{"team_id": "A", "roster": ["X"]}],
        "results": [{"team_id": "A", "reps": 10, "scores": 5}],
    }


@pytest.fixture
def data_dir(tmp_path):
    _write(tmp_path / "manifest.json", ["2025-09-03.json", "2025-09-01.json"])
    _write(tmp_path / "2025-09-03.json", _practice("2025-09-03"))
    _write(tmp_path / "2025-09-01.json", _practice("2025-09-01"))
    return tmp_path


def _response(data):
    resp = MagicMock()
    resp.json.return_value = data
    resp.raise_for_status.return_value = None
    return resp


class TestLocalLoading:
    def test_manifest_order_kept(self, data_dir):
        assert practice_client.fetch_manifest(data_dir) == ["2025-09-03.json", "2025-09-01.json"]

    def test_practices_sorted_by_date(self, data_dir):
        practices = practice_client.load_practices(data_dir, log=lambda msg: None)
        assert [p["date"] for p in practices] == ["2025-09-01", "2025-09-03"]

    def test_bad_file_skipped(self, data_dir):
        _write(data_dir / "manifest.json", ["2025-09-03.json", "broken.json", "missing.json"])
        (data_dir / "broken.json").write_text("{not json")
        messages = []
        practices = practice_client.load_practices(data_dir, log=messages.append)
        assert [p["date"] for p in practices] == ["2025-09-03"]
        assert any("Skipping broken.json" in m for m in messages)
        assert any("Skipping missing.json" in m for m in messages)
        assert messages[-1] == "  Loaded 1/3 practices"

    def test_missing_manifest_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            practice_client.load_practices(tmp_path, log=lambda msg: None)

    def test_non_list_manifest_is_empty(self, tmp_path):
        _write(tmp_path / "manifest.json", {"files": []})
        messages = []
        assert practice_client.load_practices(tmp_path, log=messages.append) == []
        assert "  Manifest is empty" in messages

    def test_fetch_practice(self, data_dir):
        assert practice_client.fetch_practice("2025-09-01.json", data_dir)["date"] == "2025-09-01"

    def test_uses_configured_data_dir(self, data_dir, monkeypatch):
        monkeypatch.delenv("REDZONE_BASE_URL", raising=False)
        monkeypatch.setenv("REDZONE_DATA_DIR", str(data_dir))
        practices = practice_client.load_practices(log=lambda msg: None)
        assert len(practices) == 2


class TestHttpLoading:
    def test_fetches_manifest_then_files(self):
        docs = {
            "https://example.org/data/manifest.json": ["2025-09-03.json"],
            "https://example.org/data/2025-09-03.json": _practice("2025-09-03"),
        }
        with patch("redzone.practice_client.requests.get") as mock_get:
            mock_get.side_effect = lambda url, **kwargs: _response(docs[url])
            practices = practice_client.load_practices(
                base_url="https://example.org/data", log=lambda msg: None,
            )
        assert [p["date"] for p in practices] == ["2025-09-03"]
        urls = [c.args[0] for c in mock_get.call_args_list]
        assert urls == list(docs)
        for c in mock_get.call_args_list:
            assert c.kwargs["headers"] == {"Cache-Control": "no-store"}

    def test_http_error_skips_file(self):
        bad = MagicMock()
        bad.raise_for_status.side_effect = requests.HTTPError("404 Not Found")

        def fake_get(url, **kwargs):
            if url.endswith("manifest.json"):
                return _response(["gone.json", "2025-09-03.json"])
            if url.endswith("gone.json"):
                return bad
            return _response(_practice("2025-09-03"))

        messages = []
        with patch("redzone.practice_client.requests.get", side_effect=fake_get):
            practices = practice_client.load_practices(
                base_url="https://example.org/data", log=messages.append,
            )
        assert len(practices) == 1
        assert any("Skipping gone.json" in m for m in messages)

    def test_manifest_http_error_raises(self):
        bad = MagicMock()
        bad.raise_for_status.side_effect = requests.HTTPError("500 Server Error")
        with patch("redzone.practice_client.requests.get", return_value=bad):
            with pytest.raises(requests.HTTPError):
                practice_client.fetch_manifest(base_url="https://example.org/data")

    def test_env_base_url(self, monkeypatch):
        monkeypatch.setenv("REDZONE_BASE_URL", "https://example.org/data/")
        with patch("redzone.practice_client.requests.get", return_value=_response([])) as mock_get:
            assert practice_client.load_practices(log=lambda msg: None) == []
        assert mock_get.call_args.args[0] == "https://example.org/data/manifest.json"
