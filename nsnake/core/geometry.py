"""
Geometry primitives for the snake engine: integer vectors, the four
movement directions and the line queries the collision code is built on.

Coordinates follow the terminal: x grows to the right, y grows downwards,
the origin (0, 0) is the top left cell of the board.
"""

from enum import Enum
from dataclasses import dataclass

from .errors import InvalidDirectionError


@dataclass(frozen=True)
class Vector2:
    x: int
    y: int

    def __add__(self, other: 'Vector2') -> 'Vector2':
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Vector2') -> 'Vector2':
        return self + -other

    def __neg__(self) -> 'Vector2':
        return self * -1

    def __mul__(self, scalar: int) -> 'Vector2':
        return Vector2(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def vector(self) -> Vector2:
        return direction_vector(self)

    def __neg__(self) -> 'Direction':
        return opposite(self)


_VECTORS = {
    Direction.UP: Vector2(0, -1),
    Direction.DOWN: Vector2(0, 1),
    Direction.LEFT: Vector2(-1, 0),
    Direction.RIGHT: Vector2(1, 0),
}

_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


def _lookup(table, direction):
    try:
        return table[direction]
    except (KeyError, TypeError):
        raise InvalidDirectionError(direction) from None


def direction_vector(direction: Direction) -> Vector2:
    """Unit vector of a direction"""
    return _lookup(_VECTORS, direction)


def opposite(direction: Direction) -> Direction:
    """The inverse of a direction (up <-> down, left <-> right)"""
    return _lookup(_OPPOSITES, direction)


@dataclass(frozen=True)
class Line:
    """A straight run of `length` cells starting at `start` and heading in `direction`"""
    start: Vector2
    direction: Direction
    length: int

    def cells(self):
        step = direction_vector(self.direction)
        point = self.start
        for _ in range(self.length):
            yield point
            point = point + step

    @property
    def end(self) -> Vector2:
        """First cell past the far end of the line"""
        return self.start + direction_vector(self.direction) * self.length


def point_on_line(point: Vector2, line: Line) -> bool:
    """
    Check if a point lies on a line.

    The line is closed at its start and open at its far end, so a line of
    length 0 contains nothing.
    """
    diff = point - line.start
    if line.direction == Direction.UP:
        return diff.x == 0 and 0 <= -diff.y < line.length
    if line.direction == Direction.DOWN:
        return diff.x == 0 and 0 <= diff.y < line.length
    if line.direction == Direction.LEFT:
        return diff.y == 0 and 0 <= -diff.x < line.length
    if line.direction == Direction.RIGHT:
        return diff.y == 0 and 0 <= diff.x < line.length
    raise InvalidDirectionError(line.direction)


def point_inside_area(point: Vector2, area: Vector2) -> bool:
    """Check if a point is inside the rectangle (0, 0) .. area (exclusive)"""
    return 0 <= point.x < area.x and 0 <= point.y < area.y


__all__ = [
    'Vector2', 'Direction', 'Line', 'direction_vector', 'opposite',
    'point_on_line', 'point_inside_area'
]
