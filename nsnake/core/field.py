"""
Rasterizer: paints a game into a pixel buffer.

The Field is only a view of the game state and is rebuilt every frame.
Terminals draw cells about twice as tall as they are wide, so the block
renderer packs two board rows into one text row with half block glyphs.
"""

from enum import IntEnum
from dataclasses import dataclass
from typing import List, Optional

from .geometry import Vector2, Line, direction_vector, point_inside_area
from .snake import Snake

UPPER_BLOCK = '▀'
LOWER_BLOCK = '▄'
FULL_BLOCK = '█'
EMPTY_BLOCK = ' '

HEAD_GLYPH = 'O'
BODY_GLYPH = 'o'
FRUIT_GLYPH = '%'
EMPTY_GLYPH = ' '


class Color(IntEnum):
    """The eight basic terminal colors, numbered as curses numbers them"""
    BLACK = 0
    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    MAGENTA = 5
    CYAN = 6
    WHITE = 7


def color_pair_index(fg: Color, bg: Color) -> int:
    """curses color pair number reserved for a foreground/background combination"""
    return int(fg) * len(Color) + int(bg) + 1


class Field:
    """A width x height buffer of colors"""

    def __init__(self, size: Vector2, color: Color = Color.BLACK):
        self.size = size
        self.data = [color] * (size.x * size.y)

    def _index(self, point: Vector2) -> int:
        if not point_inside_area(point, self.size):
            raise IndexError(f"Point ({point.x}, {point.y}) is outside the {self.size.x}x{self.size.y} field")
        return point.y * self.size.x + point.x

    def pixel(self, point: Vector2) -> Color:
        return self.data[self._index(point)]

    def set_pixel(self, point: Vector2, color: Color):
        self.data[self._index(point)] = color

    def row(self, y: int) -> List[Color]:
        return self.data[y * self.size.x:(y + 1) * self.size.x]

    def clear(self, color: Color = Color.BLACK):
        self.data = [color] * len(self.data)


def draw_point(field: Field, point: Vector2, color: Color):
    field.set_pixel(point, color)


def draw_line(field: Field, line: Line, color: Color) -> Vector2:
    """Draw a line on a field. Returns the point just past the end of the line."""
    point = line.start
    step = direction_vector(line.direction)
    for _ in range(line.length):
        field.set_pixel(point, color)
        point = point + step
    return point


def draw_snake(field: Field, snake: Snake, color: Color):
    for line in snake.lines():
        draw_line(field, line, color)


def render(field: Field, game, snake_color: Color = Color.WHITE,
           fruit_color: Color = Color.YELLOW, background: Color = Color.BLACK):
    """Redraw the whole field from the game state"""
    field.clear(background)
    if game.fruit is not None:
        draw_point(field, game.fruit, fruit_color)
    draw_snake(field, game.snake, snake_color)


def render_glyphs(game) -> List[str]:
    """Monochrome rendering: one character per board cell"""
    size = game.board_size
    rows = [[EMPTY_GLYPH] * size.x for _ in range(size.y)]

    if game.fruit is not None:
        rows[game.fruit.y][game.fruit.x] = FRUIT_GLYPH
    for cell in game.snake.cells():
        rows[cell.y][cell.x] = BODY_GLYPH
    head = game.snake.head
    rows[head.y][head.x] = HEAD_GLYPH

    return [''.join(row) for row in rows]


def block_glyph(top: bool, bottom: bool) -> str:
    """Glyph for a text cell covering two board rows"""
    if top and bottom:
        return FULL_BLOCK
    if top:
        return UPPER_BLOCK
    if bottom:
        return LOWER_BLOCK
    return EMPTY_BLOCK


@dataclass(frozen=True)
class HalfBlock:
    glyph: str
    fg: Color
    bg: Color


def _pack_pair(top: Color, bottom: Color, background: Color) -> HalfBlock:
    top_set = top != background
    bottom_set = bottom != background
    glyph = block_glyph(top_set, bottom_set)

    if top_set and bottom_set and top != bottom:
        # Two different colors can only be shown as fg over bg
        return HalfBlock(UPPER_BLOCK, top, bottom)
    if top_set:
        return HalfBlock(glyph, top, background)
    if bottom_set:
        return HalfBlock(glyph, bottom, background)
    return HalfBlock(glyph, background, background)


def pack_half_blocks(field: Field, background: Color = Color.BLACK) -> List[List[HalfBlock]]:
    """
    Pack pairs of field rows into rows of half block cells.

    Row y of the result covers field rows 2y (top half) and 2y + 1 (bottom
    half). A trailing odd row is paired with the background color.
    """
    result = []
    for y in range(0, field.size.y, 2):
        top_row = field.row(y)
        bottom_row: Optional[List[Color]] = field.row(y + 1) if y + 1 < field.size.y else None
        packed = []
        for x, top in enumerate(top_row):
            bottom = bottom_row[x] if bottom_row is not None else background
            packed.append(_pack_pair(top, bottom, background))
        result.append(packed)
    return result


__all__ = [
    'Color', 'Field', 'HalfBlock', 'color_pair_index', 'draw_point', 'draw_line',
    'draw_snake', 'render', 'render_glyphs', 'block_glyph', 'pack_half_blocks',
    'UPPER_BLOCK', 'LOWER_BLOCK', 'FULL_BLOCK', 'EMPTY_BLOCK'
]
