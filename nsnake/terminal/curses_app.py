#!/usr/bin/env python3
"""
Terminal Snake Game
Curses front end for the snake engine.

Controls:
- Arrow keys to move
- Enter to start a new round after dying
- Q or Escape to quit
"""

import argparse
import curses
import locale
import logging
import random
import sys
from pathlib import Path
from typing import List, Optional

from ..core.errors import ConfigError, TerminalError
from ..core.field import Color, Field, color_pair_index, pack_half_blocks, render, render_glyphs
from ..core.game_engine import Game, GameLoop, GameRenderer, InputHandler, Key
from ..core.settings import GameSettings, SettingsManager, RENDER_MODES

logger = logging.getLogger(__name__)

ESCAPE = 27
BOARD_TOP = 3
BOARD_LEFT = 1
BORDER = {'h': '─', 'v': '│', 'tl': '┌', 'tr': '┐', 'bl': '└', 'br': '┘'}

KEY_MAP = {
    curses.KEY_UP: Key.UP,
    curses.KEY_DOWN: Key.DOWN,
    curses.KEY_LEFT: Key.LEFT,
    curses.KEY_RIGHT: Key.RIGHT,
    curses.KEY_ENTER: Key.CONFIRM,
    ord('\n'): Key.CONFIRM,
    ord('\r'): Key.CONFIRM,
    ord('q'): Key.QUIT,
    ord('Q'): Key.QUIT,
    ESCAPE: Key.QUIT,
}


def decode_key(key: int) -> Key:
    """Translate a curses key code; anything unknown (including -1, no key) is Key.NONE"""
    return KEY_MAP.get(key, Key.NONE)


def init_color_pairs():
    """Register one color pair per foreground/background combination"""
    curses.start_color()

    # Pair 0 is fixed by curses, keep one spare
    if curses.COLOR_PAIRS - 2 < len(Color) * len(Color):
        raise TerminalError("Not enough color pairs available.")

    for fg in Color:
        for bg in Color:
            curses.init_pair(color_pair_index(fg, bg), int(fg), int(bg))


def setup_screen(stdscr):
    curses.cbreak()
    curses.noecho()
    curses.nonl()
    stdscr.nodelay(True)
    stdscr.keypad(True)
    try:
        curses.curs_set(0)
    except curses.error:
        logger.debug("Terminal cannot hide the cursor")


class CursesInputHandler(InputHandler):
    def __init__(self, stdscr):
        self.stdscr = stdscr

    def get_input(self) -> Key:
        return decode_key(self.stdscr.getch())


class CursesRenderer(GameRenderer):
    """Draws score, message, a border and the board on a curses window"""

    def __init__(self, stdscr, settings: GameSettings):
        self.stdscr = stdscr
        self.settings = settings
        self.field = Field(settings.board_size)
        self.snake_color = settings.snake_pixel
        self.fruit_color = settings.fruit_pixel

    @property
    def board_rows(self) -> int:
        """Text rows used by the board (two board rows per text row in block mode)"""
        if self.settings.render_mode == "blocks":
            return (self.settings.board_height + 1) // 2
        return self.settings.board_height

    def required_size(self):
        """(rows, columns) needed for status lines, border and board"""
        return BOARD_TOP + self.board_rows + 1, BOARD_LEFT + self.settings.board_width + 1

    def check_size(self):
        height, width = self.stdscr.getmaxyx()
        need_height, need_width = self.required_size()
        if height < need_height or width < need_width:
            raise TerminalError(
                f"Terminal too small! Minimum size: {need_width}x{need_height}, got {width}x{height}"
            )

    def put(self, y: int, x: int, text: str, attr: int = 0):
        try:
            self.stdscr.addstr(y, x, text, attr)
        except curses.error:
            # Writing the bottom right cell moves the cursor off screen
            pass

    def draw_border(self):
        top = BOARD_TOP - 1
        bottom = BOARD_TOP + self.board_rows
        left = BOARD_LEFT - 1
        right = BOARD_LEFT + self.settings.board_width

        inner = BORDER['h'] * (right - left - 1)
        self.put(top, left, BORDER['tl'] + inner + BORDER['tr'])
        self.put(bottom, left, BORDER['bl'] + inner + BORDER['br'])
        for y in range(top + 1, bottom):
            self.put(y, left, BORDER['v'])
            self.put(y, right, BORDER['v'])

    def draw_blocks(self, game: Game):
        render(self.field, game, self.snake_color, self.fruit_color)
        for row, cells in enumerate(pack_half_blocks(self.field)):
            for column, cell in enumerate(cells):
                attr = curses.color_pair(color_pair_index(cell.fg, cell.bg))
                self.put(BOARD_TOP + row, BOARD_LEFT + column, cell.glyph, attr)

    def draw_glyphs(self, game: Game):
        for row, line in enumerate(render_glyphs(game)):
            self.put(BOARD_TOP + row, BOARD_LEFT, line)

    def draw_game_field(self, game: Game):
        if self.settings.render_mode == "blocks":
            self.draw_blocks(game)
        else:
            self.draw_glyphs(game)
        self.draw_border()

    def draw_ui(self, score: int, message: str):
        self.put(0, 0, f"Score: {score}")
        self.stdscr.clrtoeol()
        self.put(1, 0, message)
        self.stdscr.clrtoeol()

    def present(self):
        self.stdscr.refresh()


def play(stdscr, settings: GameSettings, rng: random.Random) -> int:
    """Run the game inside an initialized curses screen; returns ticks played"""
    setup_screen(stdscr)
    if settings.render_mode == "blocks":
        init_color_pairs()

    renderer = CursesRenderer(stdscr, settings)
    renderer.check_size()

    game = Game(settings.board_size)
    game.reset(rng)

    loop = GameLoop(game, renderer, CursesInputHandler(stdscr), rng)
    return loop.run()


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="nsnake", description="Snake in the terminal.")
    parser.add_argument("--config", type=Path, default=None,
                        help="JSON settings file")
    parser.add_argument("--width", type=int, default=None,
                        help="Board width in cells (default: 20)")
    parser.add_argument("--height", type=int, default=None,
                        help="Board height in cells (default: 20)")
    parser.add_argument("--mode", choices=RENDER_MODES, default=None,
                        help="blocks: colored half blocks, glyphs: one character per cell")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for fruit placement")
    parser.add_argument("--write-config", type=Path, default=None,
                        help="Write the effective settings to this file and exit")
    parser.add_argument("--log-file", type=Path, default=None,
                        help="Write log records to this file")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Log level for --log-file (default: INFO)")
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> GameSettings:
    """Settings file (if any) overridden by command line flags"""
    settings = SettingsManager(args.config).load() if args.config else GameSettings()

    overrides = {
        'board_width': args.width,
        'board_height': args.height,
        'render_mode': args.mode,
        'seed': args.seed,
    }
    for name, value in overrides.items():
        if value is not None:
            setattr(settings, name, value)
    return settings.validate()


def configure_logging(args: argparse.Namespace):
    # curses owns the terminal, so only problems go to stderr
    if args.log_file:
        logging.basicConfig(
            filename=str(args.log_file),
            level=getattr(logging, args.log_level),
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )
    else:
        logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args)

    try:
        settings = build_settings(args)
    except ConfigError as e:
        print(f"nsnake: {e}", file=sys.stderr)
        return 2

    if args.write_config:
        SettingsManager(args.write_config).save(settings)
        logger.info("Settings written to %s", args.write_config)
        return 0

    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error as e:
        logger.warning("Could not set locale, block glyphs may not display: %s", e)
    rng = random.Random(settings.seed)

    try:
        ticks = curses.wrapper(play, settings, rng)
    except KeyboardInterrupt:
        print("Game interrupted by user.")
        return 0
    except TerminalError as e:
        print(f"nsnake: {e}", file=sys.stderr)
        return 1

    logger.info("Game over after %d ticks", ticks)
    return 0


if __name__ == "__main__":
    sys.exit(main())
