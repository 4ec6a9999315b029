from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
import requests

from heavy_metals.aggregate.yearly import InvalidInput
from heavy_metals.config import Settings
from heavy_metals.ingest import snapshot
from heavy_metals.ingest.snapshot import fetch_snapshot, heavy_metals_url, load_snapshot_file

DOC = {"0m": {"2020": [{"01": [{"Cd_µg_L": 0.01}]}]}}


class FakeResponse:
    def __init__(self, payload: Any, status: int = 200) -> None:
        self._payload = payload
        self.status_code = status
        self.text = json.dumps(payload, ensure_ascii=False)

    def json(self) -> Any:
        return self._payload

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


def _settings(tmp_path: Path, url: str = "https://demo-rtdb.firebaseio.com", token: str = "") -> Settings:
    return Settings(url, token, "Heavy_Metals", "mongodb://localhost:27017", "heavy_metals", tmp_path / "cache")


def test_heavy_metals_url() -> None:
    assert heavy_metals_url("https://x.firebaseio.com/", "/Heavy_Metals") == "https://x.firebaseio.com/Heavy_Metals.json"


def test_load_snapshot_file(tmp_path: Path) -> None:
    p = tmp_path / "export.json"
    p.write_text(json.dumps(DOC, ensure_ascii=False), encoding="utf-8")
    assert load_snapshot_file(p) == DOC


def test_load_snapshot_file_rejects_non_object(tmp_path: Path) -> None:
    p = tmp_path / "export.json"
    p.write_text("[1, 2, 3]", encoding="utf-8")
    with pytest.raises(InvalidInput):
        load_snapshot_file(p)


def test_fetch_snapshot_downloads_and_caches(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict[str, Any]] = []

    def fake_get(url: str, params: Any = None, timeout: int = 0) -> FakeResponse:
        calls.append({"url": url, "params": params})
        return FakeResponse(DOC)

    monkeypatch.setattr(snapshot.requests, "get", fake_get)
    s = _settings(tmp_path, token="secret")

    assert fetch_snapshot(s) == DOC
    assert calls == [{"url": "https://demo-rtdb.firebaseio.com/Heavy_Metals.json", "params": {"auth": "secret"}}]
    assert (s.snapshot_cache_dir / "Heavy_Metals.json").exists()

    # second call is served from the cache
    assert fetch_snapshot(s) == DOC
    assert len(calls) == 1

    assert fetch_snapshot(s, use_cache=False) == DOC
    assert len(calls) == 2


def test_fetch_snapshot_missing_node_raises(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(snapshot.requests, "get", lambda *a, **k: FakeResponse(None))
    with pytest.raises(InvalidInput):
        fetch_snapshot(_settings(tmp_path))
    assert not (tmp_path / "cache" / "Heavy_Metals.json").exists()


def test_fetch_snapshot_http_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(snapshot.requests, "get", lambda *a, **k: FakeResponse({}, status=401))
    with pytest.raises(requests.HTTPError):
        fetch_snapshot(_settings(tmp_path))


def test_fetch_snapshot_requires_url(tmp_path: Path) -> None:
    with pytest.raises(RuntimeError):
        fetch_snapshot(_settings(tmp_path, url=""))


@pytest.mark.parametrize("token", ["NaN", "Infinity", "-Infinity"])
def test_load_snapshot_file_rejects_non_standard_constants(tmp_path: Path, token: str) -> None:
    p = tmp_path / "export.json"
    p.write_text('{"0m": {"2020": [{"01": [{"Cd_µg_L": %s}]}]}}' % token, encoding="utf-8")
    with pytest.raises(InvalidInput):
        load_snapshot_file(p)


def test_fetch_snapshot_rejects_non_standard_constants(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    payload = {"0m": {"2020": [{"01": [{"Pb": float("nan")}]}]}}
    monkeypatch.setattr(snapshot.requests, "get", lambda *a, **k: FakeResponse(payload))
    with pytest.raises(InvalidInput):
        fetch_snapshot(_settings(tmp_path))
    assert not (tmp_path / "cache" / "Heavy_Metals.json").exists()
