"""
Tests for nsnake.core.game_engine - game rules, fruit placement and the tick loop.
"""

import random
from collections import deque

import pytest

from nsnake.core.errors import BoardFullError
from nsnake.core.game_engine import (
    Game, GameLoop, GameRenderer, InputHandler, GameStatus, Key,
    tick_interval, DEATH_MESSAGE, WIN_MESSAGE
)
from nsnake.core.geometry import Vector2, Direction, point_inside_area
from nsnake.core.snake import Segment, Snake, point_collides_with_snake


class ScriptedRandom:
    """Returns pre-set integers and records the ranges asked for."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = []

    def randint(self, a, b):
        self.calls.append((a, b))
        return self.values.pop(0)


def new_game(width=20, height=20, seed=1):
    game = Game(Vector2(width, height))
    game.reset(random.Random(seed))
    return game


class TestReset:
    """Tests for Game.reset."""

    def test_reset_state(self):
        """Reset gives a live, scoreless game with a centered 3 cell snake."""
        game = new_game()

        assert game.alive is True
        assert game.status == GameStatus.ALIVE
        assert game.score == 0
        assert game.message == ""
        assert game.snake.head == Vector2(10, 10)
        assert list(game.snake.segments) == [Segment(Direction.UP, 3)]

    @pytest.mark.parametrize("seed", range(20))
    def test_fruit_not_on_snake(self, seed):
        """The first fruit is on the board and off the snake."""
        game = new_game(width=5, height=5, seed=seed)
        assert point_inside_area(game.fruit, game.board_size)
        assert not point_collides_with_snake(game.fruit, game.snake)

    def test_reset_after_death(self):
        """Reset revives a dead game and clears score and message."""
        game = new_game()
        game.alive = False
        game.score = 7
        game.message = DEATH_MESSAGE

        game.reset(random.Random(0))
        assert game.alive is True
        assert game.score == 0
        assert game.message == ""
        assert game.snake.length == 3


class TestSpawnFruit:
    """Tests for fruit placement."""

    def test_rejection_sampling_skips_snake(self):
        """Draws landing on the snake are rejected and drawn again."""
        game = Game(Vector2(20, 20))
        # 210 is (10, 10), the head; 0 is (0, 0)
        rng = ScriptedRandom([210, 0])
        game.spawn_fruit(rng)

        assert game.fruit == Vector2(0, 0)
        assert rng.calls == [(0, 399), (0, 399)]

    def test_index_maps_row_major(self):
        """Cell index i is x = i % width, y = i // width."""
        game = Game(Vector2(20, 20))
        game.spawn_fruit(ScriptedRandom([45]))
        assert game.fruit == Vector2(5, 2)

    def test_full_board_raises(self):
        """With no free cell left, spawning fails instead of looping forever."""
        game = Game(Vector2(1, 3))
        game.snake = Snake.create(Vector2(0, 0), Direction.UP, 3)

        with pytest.raises(BoardFullError):
            game.spawn_fruit(ScriptedRandom([]))

    def test_cells_off_the_board_do_not_count_as_full(self):
        """A snake hanging over the edge leaves its board cells free for fruit."""
        game = Game(Vector2(1, 3))
        game.reset(ScriptedRandom([0]))

        assert game.snake.length == 3
        assert game.fruit == Vector2(0, 0)


class TestTick:
    """Tests for Game.tick."""

    def test_turn_right_three_times(self):
        """Three right ticks bend the snake fully onto the new row."""
        game = new_game()
        game.fruit = Vector2(0, 0)

        game.tick(Key.RIGHT, random.Random(0))
        assert game.snake.head == Vector2(11, 10)
        assert list(game.snake.segments) == [Segment(Direction.RIGHT, 1), Segment(Direction.UP, 2)]

        game.tick(Key.RIGHT, random.Random(0))
        game.tick(Key.RIGHT, random.Random(0))
        assert game.snake.head == Vector2(13, 10)
        assert list(game.snake.segments) == [Segment(Direction.RIGHT, 3)]
        assert game.snake.cells() == [Vector2(13, 10), Vector2(12, 10), Vector2(11, 10)]
        assert game.score == 0
        assert game.alive is True

    def test_no_input_keeps_direction(self):
        """Without a direction key the snake keeps going."""
        game = new_game()
        game.fruit = Vector2(0, 0)
        game.tick(Key.NONE, random.Random(0))

        assert game.snake.head == Vector2(10, 9)
        assert list(game.snake.segments) == [Segment(Direction.UP, 3)]

    def test_reversal_is_ignored(self):
        """Asking for the opposite direction keeps the snake going straight."""
        game = new_game()
        game.fruit = Vector2(0, 0)
        game.tick(Key.DOWN, random.Random(0))

        assert game.alive is True
        assert game.snake.direction == Direction.UP
        assert game.snake.head == Vector2(10, 9)

    def test_confirm_while_alive_is_ignored(self):
        """Confirm does nothing special during play."""
        game = new_game()
        game.fruit = Vector2(0, 0)
        game.tick(Key.CONFIRM, random.Random(0))
        assert game.snake.head == Vector2(10, 9)

    def test_eating_fruit(self):
        """Eating scores one point, grows the snake by one and moves the fruit."""
        game = new_game()
        game.fruit = Vector2(10, 9)
        game.tick(Key.UP, random.Random(0))

        assert game.score == 1
        assert game.snake.length == 4
        assert game.snake.head == Vector2(10, 9)
        assert game.fruit != Vector2(10, 9)
        assert not point_collides_with_snake(game.fruit, game.snake)

    def test_wall_collision_restores_previous_snake(self):
        """Leaving the board kills the snake and keeps the last legal position."""
        game = new_game()
        game.fruit = Vector2(0, 0)

        for _ in range(9):
            game.tick(Key.RIGHT, random.Random(0))
            assert game.alive is True
        assert game.snake.head == Vector2(19, 10)

        before = game.snake.copy()
        game.tick(Key.RIGHT, random.Random(0))

        assert game.alive is False
        assert game.status == GameStatus.DEAD
        assert game.message == DEATH_MESSAGE
        assert game.snake == before

    def test_self_collision_restores_previous_snake(self):
        """Running into the body kills the snake without moving it."""
        game = Game(Vector2(5, 5))
        game.snake = Snake(Vector2(2, 2), deque([
            Segment(Direction.UP, 1),
            Segment(Direction.RIGHT, 2),
            Segment(Direction.DOWN, 2),
            Segment(Direction.LEFT, 3),
            Segment(Direction.UP, 1),
        ]))
        game.fruit = Vector2(4, 4)
        before = game.snake.copy()

        game.tick(Key.UP, random.Random(0))
        assert game.alive is False
        assert game.snake == before

    def test_dead_game_ignores_moves(self):
        """While dead, direction keys change nothing."""
        game = new_game()
        game.alive = False
        before = game.snake.copy()

        for key in [Key.UP, Key.LEFT, Key.NONE, Key.QUIT]:
            game.tick(key, random.Random(0))
        assert game.alive is False
        assert game.snake == before

    def test_dead_game_resets_on_confirm(self):
        """While dead, confirm starts a new round."""
        game = new_game()
        game.alive = False
        game.score = 4
        game.tick(Key.CONFIRM, random.Random(0))

        assert game.alive is True
        assert game.score == 0
        assert game.snake.head == Vector2(10, 10)

    def test_filling_the_board_wins(self):
        """Eating the last free cell ends the round with a win."""
        game = Game(Vector2(1, 5))
        game.reset(ScriptedRandom([1]))
        assert game.fruit == Vector2(0, 1)

        game.tick(Key.UP, random.Random(0))
        assert game.score == 1
        assert game.fruit == Vector2(0, 0)

        game.tick(Key.UP, random.Random(0))
        assert game.score == 2
        assert game.snake.length == 5
        assert game.alive is False
        assert game.fruit is None
        assert game.message == WIN_MESSAGE

        game.tick(Key.CONFIRM, ScriptedRandom([0]))
        assert game.alive is True
        assert game.fruit == Vector2(0, 0)


class TestRandomPlay:
    """Invariants checked over long random games."""

    @pytest.mark.parametrize("seed", range(5))
    def test_invariants_hold_every_tick(self, seed):
        """Length, score, bounds and fruit invariants hold after every tick."""
        rng = random.Random(seed)
        keys = [Key.UP, Key.DOWN, Key.LEFT, Key.RIGHT, Key.NONE, Key.NONE]
        game = Game(Vector2(8, 6))
        game.reset(rng)

        for _ in range(2000):
            was_alive = game.alive
            before = game.snake.copy()
            score = game.score
            key = rng.choice(keys) if game.alive else Key.CONFIRM

            game.tick(key, rng)

            if not was_alive:
                assert game.alive is True
                assert game.score == 0
                assert game.snake.length == 3
            elif not game.alive:
                assert game.snake == before
                assert game.score == score
            elif game.score == score:
                assert game.snake.length == before.length
            else:
                assert game.score == score + 1
                assert game.snake.length == before.length + 1

            assert all(segment.length >= 1 for segment in game.snake.segments)
            if game.fruit is not None:
                assert not point_collides_with_snake(game.fruit, game.snake)
            if game.alive:
                assert game.snake.length == game.score + 3
                assert point_inside_area(game.snake.head, game.board_size)
                assert not point_collides_with_snake(game.snake.head, game.snake, include_head=False)


class TestTickInterval:
    """Tests for game speed."""

    def test_starts_at_quarter_second(self):
        """At score 0 the game ticks four times a second."""
        assert tick_interval(0) == pytest.approx(0.25)

    def test_speeds_up_with_score(self):
        """Higher scores mean shorter ticks."""
        assert tick_interval(10) == pytest.approx(0.2)
        assert tick_interval(100) < tick_interval(10)


class RecordingRenderer(GameRenderer):
    def __init__(self):
        self.frames = []
        self.presented = 0

    def draw_game_field(self, game):
        self.frames.append(game.snake.head)

    def draw_ui(self, score, message):
        self.frames.append((score, message))

    def present(self):
        self.presented += 1


class ScriptedInput(InputHandler):
    def __init__(self, keys):
        self.keys = deque(keys)

    def get_input(self):
        return self.keys.popleft() if self.keys else Key.QUIT


class TestGameLoop:
    """Tests for the draw / wait / read / tick driver."""

    def test_runs_until_quit(self):
        """The loop ticks once per key and stops at quit."""
        game = new_game()
        game.fruit = Vector2(0, 0)
        renderer = RecordingRenderer()
        sleeps = []
        loop = GameLoop(game, renderer, ScriptedInput([Key.NONE, Key.LEFT]), random.Random(0),
                        sleep=sleeps.append)

        assert loop.run() == 2
        assert game.snake.head == Vector2(9, 9)
        assert renderer.presented == 3
        assert renderer.frames[0] == Vector2(10, 10)
        assert renderer.frames[1] == (0, "")
        assert sleeps == [tick_interval(0)] * 3

    def test_max_ticks(self):
        """run(max_ticks) stops without needing a quit key."""
        game = new_game()
        game.fruit = Vector2(0, 0)
        loop = GameLoop(game, RecordingRenderer(), ScriptedInput([Key.NONE] * 10), random.Random(0),
                        sleep=lambda seconds: None)

        assert loop.run(max_ticks=4) == 4
        assert game.snake.head == Vector2(10, 6)

    def test_sleep_follows_score(self):
        """The wait before each tick uses the current score."""
        game = new_game()
        game.fruit = Vector2(10, 9)
        sleeps = []
        loop = GameLoop(game, RecordingRenderer(), ScriptedInput([Key.NONE]), random.Random(0),
                        sleep=sleeps.append)
        loop.run()

        assert sleeps == [tick_interval(0), tick_interval(1)]
