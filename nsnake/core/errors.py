"""
Exception hierarchy shared by the snake core and the platform front ends.
"""


class SnakeError(Exception):
    """Base class for all nsnake errors"""


class InvalidDirectionError(SnakeError, ValueError):
    """A direction-dependent function was given something that is not a Direction"""

    def __init__(self, direction):
        super().__init__(f"Invalid direction: {direction!r}")
        self.direction = direction


class BoardFullError(SnakeError):
    """No free cell is left on the board to place fruit"""


class ConfigError(SnakeError, ValueError):
    """Settings contain a value the game cannot run with"""


class TerminalError(SnakeError):
    """The terminal cannot host the game (too small, no colors...)"""


__all__ = [
    'SnakeError', 'InvalidDirectionError', 'BoardFullError',
    'ConfigError', 'TerminalError'
]
