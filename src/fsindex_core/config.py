"""
Configuration - Centralized settings for FSIndex.

Uses environment variables with sensible defaults. The only setting the
core strictly needs is where the index file lives; the rest bound the
recursive caching walk.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .domain.models import WalkBudget


logger = logging.getLogger(__name__)


DEFAULT_INDEX_FILENAME = "file_cache.db"


@dataclass
class FsIndexConfig:
    """
    Configuration for an indexing session.

    The index file defaults to ``file_cache.db`` in the working directory.
    """

    # --- Paths ---
    index_path: Path = field(default_factory=lambda: Path.cwd() / DEFAULT_INDEX_FILENAME)

    # --- Walk budget (None = unbounded) ---
    max_depth: Optional[int] = None
    max_entries: Optional[int] = None
    max_seconds: Optional[float] = None

    # --- Startup ---
    cache_roots_on_start: bool = False   # Eagerly cache every drive at startup

    # --- Diagnostics ---
    log_level: str = "WARNING"

    def __post_init__(self):
        self.index_path = Path(self.index_path).expanduser().resolve()

    @classmethod
    def from_env(cls) -> "FsIndexConfig":
        """Create config from environment variables."""
        config = cls()

        env_path = os.environ.get("FSINDEX_INDEX_PATH")
        if env_path:
            config.index_path = Path(env_path).expanduser().resolve()

        config.max_depth = _env_number("FSINDEX_MAX_DEPTH", int, config.max_depth)
        config.max_entries = _env_number("FSINDEX_MAX_ENTRIES", int, config.max_entries)
        config.max_seconds = _env_number("FSINDEX_MAX_SECONDS", float, config.max_seconds)

        env_roots = os.environ.get("FSINDEX_CACHE_ROOTS")
        if env_roots:
            config.cache_roots_on_start = env_roots.strip().lower() in ("1", "true", "yes", "on")

        env_level = os.environ.get("FSINDEX_LOG_LEVEL")
        if env_level:
            config.log_level = env_level.strip().upper()

        return config

    def walk_budget(self) -> WalkBudget:
        """Budget applied to every caching walk."""
        return WalkBudget(
            max_depth=self.max_depth,
            max_entries=self.max_entries,
            max_seconds=self.max_seconds,
        )


def _env_number(name: str, convert, default):
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        value = convert(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r", name, raw)
        return default
    if value < 0:
        logger.warning("Ignoring negative %s=%r", name, raw)
        return default
    return value


def configure_logging(level: str = "WARNING") -> None:
    """Configure root logging for applications embedding FSIndex."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
