# ABOUTME: Runtime configuration for shelfie, read from environment variables.
# ABOUTME: API keys for the catalogs and search providers, database path, HTTP timeout.

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from shelfie.metadata.http import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path.home() / ".shelfie" / "inventory.db"


def _env(name: str) -> str:
    return os.getenv(name, "")


def _env_path(name: str, default: Path) -> Path:
    value = os.getenv(name)
    return Path(value) if value else default


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning("Ignoring %s=%r: not a number, using %s", name, value, default)
        return default


@dataclass
class Settings:
    """Settings resolved from the environment at construction time.

    Missing API keys are left empty: the matching adapter or provider then
    fails its calls and resolution falls through to "not found".
    """

    db_path: Path = field(default_factory=lambda: _env_path("SHELFIE_DB", DEFAULT_DB_PATH))
    http_timeout: float = field(
        default_factory=lambda: _env_float("SHELFIE_HTTP_TIMEOUT", DEFAULT_TIMEOUT)
    )

    rawg_api_key: str = field(default_factory=lambda: _env("RAWG_API_KEY"))
    tmdb_api_key: str = field(default_factory=lambda: _env("TMDB_API_KEY"))
    google_books_api_key: str = field(default_factory=lambda: _env("GOOGLE_BOOKS_API_KEY"))

    serpwow_api_key: str = field(default_factory=lambda: _env("SERPWOW_API_KEY"))
    value_serp_api_key: str = field(default_factory=lambda: _env("VALUE_SERP_API_KEY"))
    scale_serp_api_key: str = field(default_factory=lambda: _env("SCALE_SERP_API_KEY"))
    serp_api_key: str = field(default_factory=lambda: _env("SERP_API_KEY"))
    aves_api_key: str = field(default_factory=lambda: _env("AVES_API_KEY"))
    data_for_seo_api_key: str = field(default_factory=lambda: _env("DATA_FOR_SEO_API_KEY"))
