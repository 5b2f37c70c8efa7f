from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from src.pulse.models.app_types import (
    HISTORY_COUNT,
    HISTORY_INTERVAL_MS,
    TICK_INTERVAL_MS,
)


@dataclass(frozen=True)
class Settings:
    tick_interval_ms: int = TICK_INTERVAL_MS
    history_count: int = HISTORY_COUNT
    history_interval_ms: int = HISTORY_INTERVAL_MS
    seed: Optional[int] = None
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.tick_interval_ms <= 0:
            raise ValueError("tick_interval_ms must be positive")
        if self.history_count < 0:
            raise ValueError("history_count must be non-negative")
        if self.history_interval_ms < 0:
            raise ValueError("history_interval_ms must be non-negative")


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}") from None


def load_settings() -> Settings:
    """Read PULSE_* settings from the environment (or a .env file)."""
    load_dotenv()

    level = os.getenv("PULSE_LOG_LEVEL", "INFO").upper()
    if not isinstance(logging.getLevelName(level), int):
        raise RuntimeError(f"PULSE_LOG_LEVEL is not a logging level: {level!r}")

    return Settings(
        tick_interval_ms=_env_int("PULSE_TICK_INTERVAL_MS", TICK_INTERVAL_MS),
        history_count=_env_int("PULSE_HISTORY_COUNT", HISTORY_COUNT),
        history_interval_ms=_env_int("PULSE_HISTORY_INTERVAL_MS", HISTORY_INTERVAL_MS),
        seed=_env_int("PULSE_SEED", None),
        log_level=level,
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
