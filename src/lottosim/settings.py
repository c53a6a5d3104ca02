"""Environment-based settings and logging setup for the CLI and API."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Optional

from .random_source import RandomSource, make_source
from .rules import GameConfig, get_game

logger = logging.getLogger(__name__)


def _int_env(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("%s=%r is not an integer; using %r", name, raw, default)
        return default


@dataclass(frozen=True)
class Settings:
    GAME: str = field(default_factory=lambda: os.getenv("LOTTO_GAME", "powerball"))
    SEED: Optional[int] = field(default_factory=lambda: _int_env("LOTTO_SEED", None))
    LOG_LEVEL: str = field(default_factory=lambda: os.getenv("LOTTO_LOG_LEVEL", "INFO"))
    MAX_TICKETS: int = field(default_factory=lambda: _int_env("LOTTO_MAX_TICKETS", 100_000))

    def game(self) -> GameConfig:
        return get_game(self.GAME)

    def source(self, seed: Optional[int] = None) -> RandomSource:
        """A seeded source when ``seed`` or LOTTO_SEED is set, else system entropy."""
        return make_source(seed if seed is not None else self.SEED)


def get_settings() -> Settings:
    return Settings()


def configure_logging(level: str = "INFO") -> None:
    level_name = str(level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
