from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional


BUFFER_ROWS = 2


class ConfigError(ValueError):
    """Raised when a game session is configured with unusable values."""


class GravitySpeed(IntEnum):
    """Gravity presets in milliseconds per row."""

    SLOW = 500
    NORMAL = 250
    FAST = 100


@dataclass
class GameConfig:
    width: int = 10
    height: int = 22  # includes BUFFER_ROWS hidden rows at the top
    lookahead: int = 3
    gravity_ms: float = float(GravitySpeed.NORMAL)
    ghost: bool = True
    random_seed: Optional[int] = None

    def validate(self) -> "GameConfig":
        if self.width < 1:
            raise ConfigError(f"width must be at least 1, got {self.width}")
        if self.height <= BUFFER_ROWS:
            raise ConfigError(
                f"height must exceed the {BUFFER_ROWS} buffer rows, got {self.height}"
            )
        if self.lookahead < 1:
            raise ConfigError(f"lookahead must be at least 1, got {self.lookahead}")
        check_gravity_interval(self.gravity_ms)
        return self


def check_gravity_interval(ms: float) -> float:
    if ms <= 0:
        raise ConfigError(f"gravity_ms must be positive, got {ms}")
    return float(ms)
