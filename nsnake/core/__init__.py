"""
Platform independent snake engine: geometry, snake model, game rules and
rasterizer. Can be used for the terminal or any other front end.
"""

from .errors import SnakeError, InvalidDirectionError, BoardFullError, ConfigError, TerminalError
from .geometry import Vector2, Direction, Line, direction_vector, opposite, point_on_line, point_inside_area
from .snake import Segment, Snake, point_collides_with_snake, snake_collided
from .game_engine import Game, GameLoop, GameRenderer, InputHandler, GameStatus, Key, RandomSource, tick_interval
from .field import Color, Field, render, render_glyphs, block_glyph, pack_half_blocks, color_pair_index
from .settings import GameSettings, SettingsManager

__all__ = [
    'SnakeError', 'InvalidDirectionError', 'BoardFullError', 'ConfigError', 'TerminalError',
    'Vector2', 'Direction', 'Line', 'direction_vector', 'opposite', 'point_on_line', 'point_inside_area',
    'Segment', 'Snake', 'point_collides_with_snake', 'snake_collided',
    'Game', 'GameLoop', 'GameRenderer', 'InputHandler', 'GameStatus', 'Key', 'RandomSource', 'tick_interval',
    'Color', 'Field', 'render', 'render_glyphs', 'block_glyph', 'pack_half_blocks', 'color_pair_index',
    'GameSettings', 'SettingsManager',
]
