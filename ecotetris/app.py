"""Window, event loop and command-line entry point of the game."""

from __future__ import annotations

import argparse
import random
from typing import Optional, Sequence, Union

import pygame

from .controller import Controller, Key
from .game import Game
from .render import Renderer

WINDOW_TITLE = "EcoTetris - Reciclagem Sustentavel"
WINDOW_SIZE = (1000, 700)
WINDOW_POSITION = (100, 50)
FRAME_MS = 16

_ARROWS = {
    pygame.K_UP: Key.UP,
    pygame.K_DOWN: Key.DOWN,
    pygame.K_LEFT: Key.LEFT,
    pygame.K_RIGHT: Key.RIGHT,
}

_FIXED_CHARS = {
    pygame.K_RETURN: "\r",
    pygame.K_KP_ENTER: "\r",
    pygame.K_ESCAPE: "\x1b",
    pygame.K_SPACE: " ",
}

_WELCOME = (
    "=== EcoTetris - Reciclagem Sustentavel ===",
    "Bem-vindo ao EcoTetris!",
    "Use o menu para navegar pelas opções.",
    "Os controles aparecem na tela durante o jogo.",
    "=============================================",
)


def map_key(key: int, char: str) -> Union[Key, str, None]:
    """Translate a pygame key code and its text into a controller input.

    Arrow keys become a Key, ordinary keys a one-character string, and
    keys that produce nothing the controller understands give None.
    """
    if key in _ARROWS:
        return _ARROWS[key]
    if key in _FIXED_CHARS:
        return _FIXED_CHARS[key]
    if char and len(char) == 1:
        return char
    return None


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="ecotetris", description="Falling-blocks recycling game."
    )
    parser.add_argument(
        "--textures",
        default="textures",
        help="directory holding the block textures (default: textures)",
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="seed for the piece generator"
    )
    return parser.parse_args(argv)


def _dispatch(controller: Controller, event: pygame.event.Event) -> None:
    mapped = map_key(event.key, getattr(event, "unicode", ""))
    if isinstance(mapped, Key):
        controller.special_key(mapped)
    elif mapped is not None:
        controller.key(mapped)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Open the game window and run until the player quits."""
    args = _parse_args(argv)
    game = Game(random.Random(args.seed))
    controller = Controller(game)

    pygame.init()
    try:
        surface = pygame.display.set_mode(WINDOW_SIZE, pygame.RESIZABLE)
        pygame.display.set_caption(WINDOW_TITLE)
        renderer = Renderer(surface, args.textures)

        for line in _WELCOME:
            print(line)

        clock = pygame.time.Clock()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    _dispatch(controller, event)
                elif event.type == pygame.VIDEORESIZE:
                    renderer.surface = pygame.display.get_surface()
            if controller.quit_requested:
                running = False
            if not running:
                break
            controller.tick()
            renderer.draw(controller)
            pygame.display.flip()
            clock.tick(1000 // FRAME_MS)
    finally:
        pygame.quit()
    return 0