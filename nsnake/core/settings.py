"""
Game settings and their JSON storage.
"""

import json
import logging
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Optional

from .errors import ConfigError
from .field import Color
from .game_engine import INITIAL_LENGTH
from .geometry import Vector2

logger = logging.getLogger(__name__)

RENDER_MODES = ("blocks", "glyphs")


@dataclass
class GameSettings:
    board_width: int = 20
    board_height: int = 20
    render_mode: str = "blocks"
    snake_color: str = "white"
    fruit_color: str = "yellow"
    seed: Optional[int] = None

    @property
    def board_size(self) -> Vector2:
        return Vector2(self.board_width, self.board_height)

    @property
    def snake_pixel(self) -> Color:
        return _parse_color(self.snake_color)

    @property
    def fruit_pixel(self) -> Color:
        return _parse_color(self.fruit_color)

    def validate(self) -> 'GameSettings':
        for name in ('board_width', 'board_height'):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise ConfigError(f"{name} must be a positive integer, got {value!r}")
        # The starting snake trails below the center cell
        if self.board_height // 2 + INITIAL_LENGTH > self.board_height:
            raise ConfigError(f"board_height must be at least {2 * INITIAL_LENGTH - 1} "
                              f"to fit the starting snake, got {self.board_height}")
        if self.render_mode not in RENDER_MODES:
            raise ConfigError(f"render_mode must be one of {', '.join(RENDER_MODES)}, got {self.render_mode!r}")
        if self.seed is not None and (not isinstance(self.seed, int) or isinstance(self.seed, bool)):
            raise ConfigError(f"seed must be an integer, got {self.seed!r}")
        _parse_color(self.snake_color)
        _parse_color(self.fruit_color)
        return self

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        known_fields = {field.name for field in cls.__dataclass_fields__.values()}
        filtered_data = {k: v for k, v in data.items() if k in known_fields}
        return cls(**filtered_data)


def _parse_color(name: str) -> Color:
    try:
        return Color[str(name).upper()]
    except KeyError:
        raise ConfigError(f"Unknown color: {name!r}") from None


class SettingsManager:
    """Loading and saving of settings files"""

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> GameSettings:
        if not self.path.exists():
            return GameSettings()
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Could not read settings from %s: %s", self.path, e)
            return GameSettings()

        if not isinstance(data, dict):
            logger.warning("Ignoring settings file %s: expected a JSON object", self.path)
            return GameSettings()
        return GameSettings.from_dict(data)

    def save(self, settings: GameSettings):
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump(settings.to_dict(), f, indent=2, ensure_ascii=False)


__all__ = ['GameSettings', 'SettingsManager', 'RENDER_MODES']
