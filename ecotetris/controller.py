"""Menu, pause and gameplay input handling plus the fixed-rate game clock."""

from __future__ import annotations

import time
from enum import Enum, auto

from .game import Game

BASE_DROP_INTERVAL = 30
ENTER_KEYS = frozenset({"\r", "\n"})
ESCAPE = "\x1b"
MENU_OPTIONS = 2
PAUSE_OPTIONS = 3


class GameState(Enum):
    """Which screen is active."""

    MENU_MAIN = auto()
    GAME_PLAYING = auto()
    GAME_PAUSED = auto()


class Key(Enum):
    """Arrow keys understood by the controller."""

    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()


class Controller:
    """Routes key presses to menus or the game and drives automatic falling."""

    def __init__(self, game: Game) -> None:
        self.game = game
        self.state = GameState.MENU_MAIN
        self.menu_selection = 0
        self.pause_selection = 0
        self.game_initialized = False
        self.started_at = time.monotonic()
        self.drop_counter = 0
        self.quit_requested = False

    def _restart(self) -> None:
        self.game.restart()
        self.started_at = time.monotonic()

    def special_key(self, key: Key) -> None:
        """Handle an arrow key."""
        if self.state is GameState.MENU_MAIN:
            if key is Key.UP:
                self.menu_selection = (self.menu_selection - 1) % MENU_OPTIONS
            elif key is Key.DOWN:
                self.menu_selection = (self.menu_selection + 1) % MENU_OPTIONS
        elif self.state is GameState.GAME_PLAYING:
            if self.game.game_over:
                return
            if key is Key.UP:
                self.game.rotate()
            elif key is Key.LEFT:
                self.game.translate(-1)
            elif key is Key.RIGHT:
                self.game.translate(1)
            elif key is Key.DOWN:
                self.game.move_down()
        else:
            if key is Key.UP:
                self.pause_selection = (self.pause_selection - 1) % PAUSE_OPTIONS
            elif key is Key.DOWN:
                self.pause_selection = (self.pause_selection + 1) % PAUSE_OPTIONS

    def key(self, char: str) -> None:
        """Handle an ordinary key given as a one-character string."""
        if self.state is GameState.MENU_MAIN:
            self._menu_key(char)
        elif self.state is GameState.GAME_PLAYING:
            self._playing_key(char)
        else:
            self._paused_key(char)

    def _menu_key(self, char: str) -> None:
        if char in ENTER_KEYS:
            if self.menu_selection == 0:
                self.state = GameState.GAME_PLAYING
                self._restart()
                self.game_initialized = True
            else:
                self.quit_requested = True
        elif char == ESCAPE:
            self.quit_requested = True

    def _playing_key(self, char: str) -> None:
        if char in ("q", "Q"):
            self.state = GameState.MENU_MAIN
            self.menu_selection = 0
        elif char in ("r", "R"):
            self._restart()
        elif char in ("c", "C"):
            if not self.game.game_over:
                self.game.hold_piece()
        elif char == " ":
            self.hard_drop()
        elif char == ESCAPE:
            if not self.game.game_over:
                self.state = GameState.GAME_PAUSED
                self.pause_selection = 0

    def _paused_key(self, char: str) -> None:
        if char in ENTER_KEYS:
            if self.pause_selection == 0:
                self.state = GameState.GAME_PLAYING
            elif self.pause_selection == 1:
                self.state = GameState.GAME_PLAYING
                self._restart()
            else:
                self.state = GameState.MENU_MAIN
                self.menu_selection = 0
        elif char == ESCAPE:
            self.state = GameState.GAME_PLAYING

    def hard_drop(self) -> None:
        """Move the falling piece down until the next step would collide."""
        game = self.game
        while not game.game_over and not game.line_clearing:
            if game.check_collision(
                game.current_x, game.current_y - 1, game.current_rotation
            ):
                break
            game.move_down()

    def tick(self) -> None:
        """Advance one frame: update effects and apply gravity while playing."""
        if self.state is not GameState.GAME_PLAYING:
            return
        self.game.update()
        if not self.game_initialized:
            return
        if self.game.game_over:
            self.game_initialized = False
            return
        interval = int(BASE_DROP_INTERVAL * self.game.difficulty_multiplier())
        self.drop_counter += 1
        if self.drop_counter >= interval:
            self.game.move_down()
            self.drop_counter = 0