"""
Snake model.

The body is stored run-length encoded: a head position plus a list of
straight segments ordered from the head to the tail. Each segment records
the direction the snake was moving while it laid that run, so the body is
traced by walking from the head against each segment's direction.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Iterator, List

from .geometry import Vector2, Direction, Line, direction_vector, opposite, point_on_line, point_inside_area


@dataclass
class Segment:
    direction: Direction
    length: int


@dataclass
class Snake:
    head: Vector2
    segments: Deque[Segment] = field(default_factory=deque)

    @classmethod
    def create(cls, head: Vector2, direction: Direction, length: int) -> 'Snake':
        """A straight snake whose body trails behind the head"""
        return cls(head, deque([Segment(direction, length)]))

    @property
    def direction(self) -> Direction:
        """Direction of the front segment, i.e. where the head is moving"""
        if not self.segments:
            raise ValueError("Snake has no segments")
        return self.segments[0].direction

    @property
    def length(self) -> int:
        return sum(segment.length for segment in self.segments)

    def copy(self) -> 'Snake':
        return Snake(self.head, deque(Segment(s.direction, s.length) for s in self.segments))

    def lines(self) -> Iterator[Line]:
        """The body as lines traced backwards from the head, one per segment"""
        start = self.head
        for segment in self.segments:
            line = Line(start, opposite(segment.direction), segment.length)
            yield line
            start = line.end

    def cells(self) -> List[Vector2]:
        """Every body cell from head to tail"""
        return [cell for line in self.lines() for cell in line.cells()]

    def move_head(self, direction: Direction):
        """Move the head one cell forward, growing the snake by one"""
        # A turn starts a new segment at the front
        if not self.segments or self.segments[0].direction != direction:
            self.segments.appendleft(Segment(direction, 0))

        front = self.segments[0]
        self.head = self.head + direction_vector(front.direction)
        front.length += 1

    def shrink_tail(self):
        """Remove the last body cell. A snake without segments is left alone."""
        if not self.segments:
            return

        tail = self.segments[-1]
        tail.length -= 1
        if tail.length <= 0:
            self.segments.pop()


def point_collides_with_snake(point: Vector2, snake: Snake, include_head: bool = True) -> bool:
    """
    Check if a point is on the body of a snake.

    With include_head=False the head cell itself is skipped, but the head
    position can still collide with a later part of the body that loops
    back over it.
    """
    for i, line in enumerate(snake.lines()):
        if i == 0 and not include_head:
            step = direction_vector(line.direction)
            line = Line(line.start + step, line.direction, line.length - 1)
        if point_on_line(point, line):
            return True
    return False


def snake_collided(snake: Snake, board_size: Vector2) -> bool:
    """Check if the head left the board or ran into the body"""
    return (not point_inside_area(snake.head, board_size)
            or point_collides_with_snake(snake.head, snake, include_head=False))


__all__ = ['Segment', 'Snake', 'point_collides_with_snake', 'snake_collided']
