"""Image resolver tests with the TMDB endpoint patched out."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict, List

import pytest
import requests

sys.path.append(str(Path(__file__).resolve().parents[1]))

from models.costume import CostumeImages, ManualImage, TmdbImage, WikimediaImage
from tools import image_resolver
from tools.image_resolver import (
    PLACEHOLDER_IMAGE,
    TMDB_CONFIG_TTL_SECONDS,
    TMDB_FAILURE_BACKOFF_SECONDS,
    OfflineImageResolver,
    RemoteImageResolver,
)

TMDB_CONFIG = {
    "images": {
        "secure_base_url": "https://image.tmdb.org/t/p/",
        "poster_sizes": ["w92", "w185", "w500", "original"],
    }
}


class _FakeResponse:
    def __init__(self, payload: Dict[str, Any]) -> None:
        self._payload = payload

    def raise_for_status(self) -> None:
        return None

    def json(self) -> Dict[str, Any]:
        return self._payload


class _Clock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture()
def tmdb_calls(monkeypatch: pytest.MonkeyPatch) -> List[Dict[str, Any]]:
    calls: List[Dict[str, Any]] = []

    def _fake_get(url: str, params: Dict[str, Any], timeout: float) -> _FakeResponse:
        calls.append({"url": url, "params": params, "timeout": timeout})
        return _FakeResponse(TMDB_CONFIG)

    monkeypatch.setattr(image_resolver.requests, "get", _fake_get)
    return calls


def _tmdb_images() -> CostumeImages:
    return CostumeImages(
        primary=TmdbImage(tmdb_id=603, image_path="/neo.jpg"),
        alternatives=(ManualImage(url="/costumes/neo.jpg"),),
    )


def test_tmdb_image_uses_cached_configuration(tmdb_calls: List[Dict[str, Any]]) -> None:
    clock = _Clock()
    resolver = RemoteImageResolver(api_key="secret", timeout_seconds=2.0, clock=clock)

    first = resolver.resolve_with_fallback(_tmdb_images())
    second = resolver.resolve_with_fallback(_tmdb_images())

    assert first.url == "https://image.tmdb.org/t/p/w500/neo.jpg"
    assert first.attribution_link == "https://www.themoviedb.org/movie/603"
    assert second == first
    assert len(tmdb_calls) == 1
    assert tmdb_calls[0]["params"] == {"api_key": "secret"}
    assert tmdb_calls[0]["timeout"] == 2.0

    clock.now += TMDB_CONFIG_TTL_SECONDS + 1
    resolver.resolve_with_fallback(_tmdb_images())
    assert len(tmdb_calls) == 2


def test_tmdb_without_key_falls_through_to_alternative(tmdb_calls: List[Dict[str, Any]]) -> None:
    resolved = RemoteImageResolver(api_key=None).resolve_with_fallback(_tmdb_images())

    assert resolved.url == "/costumes/neo.jpg"
    assert tmdb_calls == []


def test_tmdb_failure_degrades_to_placeholder(monkeypatch: pytest.MonkeyPatch) -> None:
    def _boom(*_: Any, **__: Any) -> None:
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(image_resolver.requests, "get", _boom)
    images = CostumeImages(primary=TmdbImage(tmdb_id=1, image_path="/x.jpg", media_type="tv"))

    assert RemoteImageResolver(api_key="secret").resolve_with_fallback(images) == PLACEHOLDER_IMAGE


def test_tmdb_schema_mismatch_degrades_to_placeholder(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(image_resolver.requests, "get", lambda *_, **__: _FakeResponse({"images": {}}))
    images = CostumeImages(primary=TmdbImage(tmdb_id=1, image_path="/x.jpg"))

    assert RemoteImageResolver(api_key="secret").resolve_with_fallback(images) == PLACEHOLDER_IMAGE


def test_wikimedia_url_is_built_locally() -> None:
    images = CostumeImages(primary=WikimediaImage(file_title="Bob Ross 1983.jpg"))

    resolved = RemoteImageResolver().resolve_with_fallback(images)

    assert resolved.url == "https://commons.wikimedia.org/wiki/Special:FilePath/Bob_Ross_1983.jpg?width=500"
    assert resolved.attribution_link == "https://commons.wikimedia.org/wiki/File:Bob_Ross_1983.jpg"


def test_offline_resolver_only_handles_manual_sources() -> None:
    resolver = OfflineImageResolver()

    assert resolver.resolve_with_fallback(_tmdb_images()).url == "/costumes/neo.jpg"
    tmdb_only = CostumeImages(primary=TmdbImage(tmdb_id=1, image_path="/x.jpg"))
    assert resolver.resolve_with_fallback(tmdb_only) == PLACEHOLDER_IMAGE


def test_tmdb_outage_is_not_retried_until_backoff_expires(monkeypatch: pytest.MonkeyPatch) -> None:
    attempts: List[str] = []

    def _flaky(url: str, params: Dict[str, Any], timeout: float) -> _FakeResponse:
        attempts.append(url)
        if len(attempts) == 1:
            raise requests.Timeout("slow")
        return _FakeResponse(TMDB_CONFIG)

    monkeypatch.setattr(image_resolver.requests, "get", _flaky)
    clock = _Clock()
    resolver = RemoteImageResolver(api_key="secret", clock=clock)

    for _ in range(3):
        assert resolver.resolve_with_fallback(_tmdb_images()).url == "/costumes/neo.jpg"
    assert len(attempts) == 1

    clock.now += TMDB_FAILURE_BACKOFF_SECONDS + 1
    recovered = resolver.resolve_with_fallback(_tmdb_images())

    assert recovered.url == "https://image.tmdb.org/t/p/w500/neo.jpg"
    assert len(attempts) == 2
