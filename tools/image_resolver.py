"""Image resolution for catalog entries with a guaranteed placeholder fallback."""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, List, Optional
from urllib.parse import quote

import requests
from pydantic import BaseModel, ValidationError

from models.costume import CostumeImages, ImageSource, ManualImage, TmdbImage, WikimediaImage
from models.recommendation import ResolvedImage
from tools.observability import instrument_tool

LOGGER = logging.getLogger(__name__)

TMDB_CONFIGURATION_URL = "https://api.themoviedb.org/3/configuration"
TMDB_CONFIG_TTL_SECONDS = 24 * 60 * 60
TMDB_FAILURE_BACKOFF_SECONDS = 5 * 60
PREFERRED_POSTER_SIZE = "w500"
WIKIMEDIA_FILE_PATH_URL = "https://commons.wikimedia.org/wiki/Special:FilePath/{title}?width=500"
WIKIMEDIA_FILE_PAGE_URL = "https://commons.wikimedia.org/wiki/File:{title}"

PLACEHOLDER_IMAGE = ResolvedImage(url="/placeholder-costume.svg", attribution_text="Reference image unavailable")


class _TmdbImages(BaseModel):
    secure_base_url: str
    poster_sizes: List[str] = []


class _TmdbConfiguration(BaseModel):
    images: _TmdbImages


@dataclass
class _CachedTmdbConfig:
    base_url: str
    poster_sizes: List[str]
    fetched_at: float


class ImageResolver(ABC):
    """Turns catalog image references into displayable URLs."""

    @abstractmethod
    def resolve(self, source: ImageSource) -> Optional[ResolvedImage]:
        """Return a resolved image or ``None`` when this source is unusable."""

    def resolve_with_fallback(self, images: CostumeImages) -> ResolvedImage:
        """Try the primary then each alternative; never raises."""

        for source in images.in_priority_order():
            resolved = self.resolve(source)
            if resolved is not None:
                return resolved
        return PLACEHOLDER_IMAGE


def resolve_wikimedia(source: WikimediaImage) -> ResolvedImage:
    title = quote(source.file_title.replace(" ", "_"), safe="")
    return ResolvedImage(
        url=WIKIMEDIA_FILE_PATH_URL.format(title=title),
        attribution_text="Image via Wikimedia Commons",
        attribution_link=source.page_url or WIKIMEDIA_FILE_PAGE_URL.format(title=title),
    )


def resolve_manual(source: ManualImage) -> ResolvedImage:
    return ResolvedImage(url=source.url, attribution_text=source.attribution)


class RemoteImageResolver(ImageResolver):
    """TMDB-backed resolver with Wikimedia and manual sources handled locally.

    The TMDB configuration is cached on the instance for 24 hours. Any
    request or schema failure degrades to ``None`` so the caller moves on to
    the next source, and further fetches are skipped for a five minute
    back-off.
    """

    def __init__(
        self,
        api_key: str | None = None,
        timeout_seconds: float = 5.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds
        self._clock = clock
        self._tmdb_config: _CachedTmdbConfig | None = None
        self._tmdb_failed_at: float | None = None

    @instrument_tool("tmdb_configuration")
    def _fetch_tmdb_configuration(self) -> _CachedTmdbConfig:
        response = requests.get(
            TMDB_CONFIGURATION_URL, params={"api_key": self.api_key}, timeout=self.timeout_seconds
        )
        response.raise_for_status()
        parsed = _TmdbConfiguration.model_validate(response.json())
        return _CachedTmdbConfig(
            base_url=parsed.images.secure_base_url,
            poster_sizes=parsed.images.poster_sizes,
            fetched_at=self._clock(),
        )

    def _tmdb_configuration(self) -> _CachedTmdbConfig | None:
        if not self.api_key:
            LOGGER.warning("TMDB API key not configured", extra={"reason": "missing_api_key"})
            return None

        cached = self._tmdb_config
        if cached and self._clock() - cached.fetched_at < TMDB_CONFIG_TTL_SECONDS:
            return cached

        failed_at = self._tmdb_failed_at
        if failed_at is not None and self._clock() - failed_at < TMDB_FAILURE_BACKOFF_SECONDS:
            return None

        try:
            self._tmdb_config = self._fetch_tmdb_configuration()
        except requests.RequestException as exc:
            LOGGER.error("TMDB configuration unreachable", exc_info=exc)
            self._tmdb_failed_at = self._clock()
            return None
        except (ValidationError, ValueError) as exc:
            LOGGER.error("TMDB configuration schema validation failed", exc_info=exc)
            self._tmdb_failed_at = self._clock()
            return None
        self._tmdb_failed_at = None
        return self._tmdb_config

    def _resolve_tmdb(self, source: TmdbImage) -> Optional[ResolvedImage]:
        config = self._tmdb_configuration()
        if config is None:
            return None
        sizes = config.poster_sizes
        if PREFERRED_POSTER_SIZE in sizes or not sizes:
            size = PREFERRED_POSTER_SIZE
        else:
            size = sizes[-2] if len(sizes) > 1 else sizes[0]
        return ResolvedImage(
            url=f"{config.base_url}{size}{source.image_path}",
            attribution_text="Image via TMDB",
            attribution_link=f"https://www.themoviedb.org/{source.media_type}/{source.tmdb_id}",
        )

    def resolve(self, source: ImageSource) -> Optional[ResolvedImage]:
        if isinstance(source, TmdbImage):
            return self._resolve_tmdb(source)
        if isinstance(source, WikimediaImage):
            return resolve_wikimedia(source)
        if isinstance(source, ManualImage):
            return resolve_manual(source)
        return None


class OfflineImageResolver(ImageResolver):
    """Deterministic resolver for tests and offline runs. Never touches the network."""

    def __init__(self, image: ResolvedImage | None = None) -> None:
        self.image = image

    def resolve(self, source: ImageSource) -> Optional[ResolvedImage]:
        if self.image is not None:
            return self.image
        if isinstance(source, ManualImage):
            return resolve_manual(source)
        return None


__all__ = [
    "ImageResolver",
    "OfflineImageResolver",
    "PLACEHOLDER_IMAGE",
    "RemoteImageResolver",
    "resolve_manual",
    "resolve_wikimedia",
]
