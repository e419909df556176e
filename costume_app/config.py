"""Configuration helpers for the Costume Concierge app."""

from dataclasses import dataclass, fields
from pathlib import Path
import os
from typing import Dict, Optional

DEFAULT_GEMINI_MODEL = "models/gemini-1.5-flash-002"
DEFAULT_CATALOG_PATH = "data/costumes.v1.json"
DEFAULT_DATASET_VERSION = "v1"
DEFAULT_CONFIG_DIR = "config/environments"


def read_settings_file(path: Path) -> Dict[str, str]:
    """Read flat ``key: value`` settings. Comments and blank lines are skipped."""

    settings: Dict[str, str] = {}
    with path.open(encoding="utf-8") as handle:
        for raw in handle:
            line = raw.strip()
            if line.startswith("#"):
                continue
            name, sep, value = line.partition(":")
            if not sep or not name:
                continue
            settings[name.strip()] = value.strip().strip("\"'")
    return settings


def settings_file_for(env_name: Optional[str]) -> Optional[Path]:
    """``APP_CONFIG_PATH`` if set, else ``<COSTUME_CONFIG_DIR>/<env>.yaml`` when an env is named."""

    explicit = os.getenv("APP_CONFIG_PATH")
    if explicit:
        return Path(explicit)
    if env_name:
        return Path(os.getenv("COSTUME_CONFIG_DIR", DEFAULT_CONFIG_DIR)) / f"{env_name}.yaml"
    return None


@dataclass
class CostumeConfig:
    """Configuration values for the recommendation service.

    Secrets are optional: without a Google API key the copywriter is skipped
    and every response uses the template fallback, and without a TMDB key the
    image resolver goes straight to the non-TMDB sources.
    """

    catalog_path: str = DEFAULT_CATALOG_PATH
    dataset_version: str = DEFAULT_DATASET_VERSION
    gemini_model: str = DEFAULT_GEMINI_MODEL
    google_api_key: Optional[str] = None
    tmdb_api_key: Optional[str] = None
    generator_timeout_seconds: float = 8.0
    image_timeout_seconds: float = 5.0
    environment: Optional[str] = None

    @classmethod
    def from_env(cls) -> "CostumeConfig":
        """Resolve each field from its upper-cased env var, then the settings file, then the default."""

        env_name = os.getenv("APP_ENV")
        source = settings_file_for(env_name)
        file_values = read_settings_file(source) if source and source.exists() else {}

        values: Dict[str, object] = {"environment": env_name}
        for field in fields(cls):
            if field.name == "environment":
                continue
            raw = os.getenv(field.name.upper()) or file_values.get(field.name)
            if not raw:
                continue
            values[field.name] = float(raw) if field.name.endswith("_seconds") else raw
        return cls(**values)
