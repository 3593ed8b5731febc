"""
Runtime configuration for movie-catalog.

Resolution order (last wins):
  1. dataclass defaults
  2. environment — MOVIE_CATALOG_FILE, MOVIE_CATALOG_DEBUG
  3. explicit CLI flags (--file, --debug), applied by cli.main
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

__all__ = ["CatalogConfig", "DEFAULT_DATA_FILE"]

logger = logging.getLogger(__name__)

DEFAULT_DATA_FILE = "movies.csv"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class CatalogConfig:
    """Where the catalog lives and how chatty logging is."""
    data_file: str  = DEFAULT_DATA_FILE
    debug:     bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "CatalogConfig":
        """Build a config from environment variables (os.environ by default)."""
        env = os.environ if environ is None else environ
        data_file = env.get("MOVIE_CATALOG_FILE", "").strip() or DEFAULT_DATA_FILE
        debug = env.get("MOVIE_CATALOG_DEBUG", "").strip().lower() in _TRUTHY
        return cls(data_file=data_file, debug=debug)

    @property
    def log_level(self) -> int:
        return logging.DEBUG if self.debug else logging.INFO
