#!/usr/bin/env python3
"""
Snake game engine.
Game rules without any platform binding: the same engine can drive a
terminal, a test harness or any other front end that implements
GameRenderer and InputHandler.
"""

import logging
import time
from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable, Optional, Protocol

from .errors import BoardFullError
from .geometry import Vector2, Direction, opposite, point_inside_area
from .snake import Snake, point_collides_with_snake, snake_collided

logger = logging.getLogger(__name__)

INITIAL_LENGTH = 3
DEATH_MESSAGE = "You are dead. Press [Enter] to reset."
WIN_MESSAGE = "You win! Press [Enter] to reset."


class Key(Enum):
    """One input symbol per tick, already decoded from the keyboard"""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    CONFIRM = "confirm"
    QUIT = "quit"
    NONE = "none"


KEY_DIRECTIONS = {
    Key.UP: Direction.UP,
    Key.DOWN: Direction.DOWN,
    Key.LEFT: Direction.LEFT,
    Key.RIGHT: Direction.RIGHT,
}


class GameStatus(Enum):
    ALIVE = "alive"
    DEAD = "dead"


class RandomSource(Protocol):
    """Anything that can draw a uniform integer in [a, b], e.g. random.Random"""

    def randint(self, a: int, b: int) -> int:
        ...


def tick_interval(score: int) -> float:
    """Seconds between ticks; the game speeds up as the score grows"""
    return 10.0 / (40 + score)


class Game:
    """State of one snake game on a fixed size board"""

    def __init__(self, board_size: Vector2):
        self.board_size = board_size
        self.alive = True
        self.score = 0
        self.snake = Snake.create(self.center, Direction.UP, INITIAL_LENGTH)
        self.fruit: Optional[Vector2] = None
        self.message = ""

    @property
    def center(self) -> Vector2:
        return Vector2(self.board_size.x // 2, self.board_size.y // 2)

    @property
    def status(self) -> GameStatus:
        return GameStatus.ALIVE if self.alive else GameStatus.DEAD

    @property
    def cell_count(self) -> int:
        return self.board_size.x * self.board_size.y

    def reset(self, rng: RandomSource):
        """Start a new round: centered vertical snake heading up, score 0, fresh fruit"""
        self.alive = True
        self.score = 0
        self.message = ""
        self.snake = Snake.create(self.center, Direction.UP, INITIAL_LENGTH)
        self.spawn_fruit(rng)
        logger.debug("Game reset on a %dx%d board", self.board_size.x, self.board_size.y)

    def spawn_fruit(self, rng: RandomSource):
        """
        Place fruit on a random free cell.

        Cells are drawn uniformly from the whole board until one is not
        occupied by the snake. Raises BoardFullError when the snake covers
        every cell, since no draw could ever succeed.
        """
        occupied = {cell for cell in self.snake.cells() if point_inside_area(cell, self.board_size)}
        if len(occupied) >= self.cell_count:
            raise BoardFullError(f"Snake covers all {self.cell_count} cells of the board")

        while True:
            i = rng.randint(0, self.cell_count - 1)
            fruit = Vector2(i % self.board_size.x, i // self.board_size.x)
            if not point_collides_with_snake(fruit, self.snake):
                self.fruit = fruit
                return

    def tick(self, key: Key, rng: RandomSource):
        """Process one game tick"""
        # If dead, only confirm resets the game
        if not self.alive:
            if key == Key.CONFIRM:
                self.reset(rng)
            return

        current = self.snake.direction
        new_direction = KEY_DIRECTIONS.get(key, current)

        # Disallow about-turning the snake
        if new_direction == opposite(current):
            new_direction = current

        # Moving the head grows the snake by one
        old_snake = self.snake.copy()
        self.snake.move_head(new_direction)

        if self.snake.head == self.fruit:
            self.score += 1
            logger.debug("Fruit eaten at (%d, %d), score %d", self.fruit.x, self.fruit.y, self.score)
            try:
                self.spawn_fruit(rng)
            except BoardFullError:
                self.fruit = None
                self.alive = False
                self.message = WIN_MESSAGE
                logger.info("Board filled with score %d", self.score)
                return
        else:
            self.snake.shrink_tail()

        if snake_collided(self.snake, self.board_size):
            self.snake = old_snake
            self.alive = False
            self.message = DEATH_MESSAGE
            logger.debug("Snake died with score %d", self.score)


class GameRenderer(ABC):
    """Abstract interface for a renderer (terminal, tests, ...)"""

    @abstractmethod
    def draw_game_field(self, game: Game):
        pass

    @abstractmethod
    def draw_ui(self, score: int, message: str):
        pass

    def present(self):
        """Flush the finished frame to the screen"""


class InputHandler(ABC):
    """Abstract interface for input handling"""

    @abstractmethod
    def get_input(self) -> Key:
        pass


class GameLoop:
    """Drives a game: draw, wait, read one key, tick"""

    def __init__(self, game: Game, renderer: GameRenderer, input_handler: InputHandler,
                 rng: RandomSource, sleep: Optional[Callable[[float], None]] = None):
        self.game = game
        self.renderer = renderer
        self.input_handler = input_handler
        self.rng = rng
        self.sleep = sleep if sleep is not None else time.sleep
        self.ticks = 0

    def draw(self):
        self.renderer.draw_game_field(self.game)
        self.renderer.draw_ui(self.game.score, self.game.message)
        self.renderer.present()

    def run_frame(self) -> bool:
        """Run one frame; False once the player asked to quit"""
        self.draw()
        self.sleep(tick_interval(self.game.score))

        key = self.input_handler.get_input()
        if key == Key.QUIT:
            logger.info("Quit requested after %d ticks", self.ticks)
            return False

        self.game.tick(key, self.rng)
        self.ticks += 1
        return True

    def run(self, max_ticks: Optional[int] = None) -> int:
        """Run until quit (or max_ticks); returns the number of ticks processed"""
        while max_ticks is None or self.ticks < max_ticks:
            if not self.run_frame():
                break
        return self.ticks


__all__ = [
    'Game', 'GameLoop', 'GameRenderer', 'InputHandler', 'GameStatus', 'Key',
    'KEY_DIRECTIONS', 'RandomSource', 'tick_interval',
    'INITIAL_LENGTH', 'DEATH_MESSAGE', 'WIN_MESSAGE'
]
