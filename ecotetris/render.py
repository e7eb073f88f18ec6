"""Drawing of menus, board, side panels and effects onto a pygame surface."""

from __future__ import annotations

import logging
import math
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Sequence, Union

import pygame

from .controller import Controller, GameState
from .game import ANIMATION_STEPS, Game
from .pieces import BOARD_HEIGHT, BOARD_WIDTH, TrashType, shape_offsets

logger = logging.getLogger(__name__)

WORLD_WIDTH = 25.0
WORLD_HEIGHT = 20.0
REFERENCE_HEIGHT = 700
PREVIEW_SCALE = 0.6

RGB = tuple[float, float, float]
Point = tuple[float, float]

CLEAR_COLOR: RGB = (0.05, 0.05, 0.1)
NEON: RGB = (0.0, 1.0, 0.5)
PANEL_BORDER: RGB = (0.0, 0.6, 0.3)
WHITE: RGB = (1.0, 1.0, 1.0)
YELLOW: RGB = (1.0, 1.0, 0.0)
GREY_TEXT: RGB = (0.7, 0.7, 0.7)

# Font sizes matching the bitmap fonts used by each piece of text.
SMALL = 10
NORMAL = 12
MONO = 13
LARGE = 18
TITLE = 24

_RECYCLE_COLORS: dict[TrashType, RGB] = {
    TrashType.PAPER: (0.3, 0.5, 1.0),
    TrashType.PLASTIC: (1.0, 0.3, 0.3),
    TrashType.METAL: (1.0, 0.8, 0.2),
    TrashType.GLASS: (0.3, 1.0, 0.3),
    TrashType.ORGANIC: (0.8, 0.5, 0.2),
}

_STATS_NAMES: dict[TrashType, str] = {
    TrashType.PAPER: "Papel",
    TrashType.PLASTIC: "Plastico",
    TrashType.METAL: "Metal",
    TrashType.GLASS: "Vidro",
    TrashType.ORGANIC: "Organico",
}

_TEXTURE_FILES: dict[TrashType, str] = {
    TrashType.PAPER: "paper.png",
    TrashType.PLASTIC: "plastic.png",
    TrashType.METAL: "metal.png",
    TrashType.GLASS: "glass.png",
    TrashType.ORGANIC: "organic.png",
}

_CONTROLS = (
    "(up) - Rotacionar",
    "<- -> - Mover",
    "(down) - Acelerar",
    "Espaco - Drop",
    "C - Hold",
    "ESC - Pausar",
    "R - Reiniciar",
    "Q - Sair",
)


def recycle_color(trash_type: TrashType) -> RGB:
    """Colour of the recycling bin and statistics icon for a trash type."""
    try:
        return _RECYCLE_COLORS[TrashType(trash_type)]
    except KeyError:
        raise ValueError(f"{TrashType(trash_type).name} has no recycling colour") from None


def level_progress(level: int, lines_cleared: int) -> float:
    """Fraction of the lines needed for the next level that are already cleared."""
    lines_for_next = level * 10 - lines_cleared
    return 1.0 - lines_for_next / 10.0


def _channel(value: float) -> int:
    return max(0, min(255, int(round(value * 255))))


def _rgb(color: RGB) -> tuple[int, int, int]:
    return (_channel(color[0]), _channel(color[1]), _channel(color[2]))


def _rgba(color: RGB, alpha: float = 1.0) -> tuple[int, int, int, int]:
    return (*_rgb(color), _channel(alpha))


def _lerp(a: Sequence[float], b: Sequence[float], t: float) -> tuple[float, ...]:
    return tuple(x + (y - x) * t for x, y in zip(a, b))


class Renderer:
    """Draws the controller's current screen onto a pygame surface."""

    def __init__(
        self, surface: pygame.Surface, texture_dir: Union[str, Path] = "textures"
    ) -> None:
        self.surface = surface
        self.texture_dir = Path(texture_dir)
        self.textures: dict[TrashType, Optional[pygame.Surface]] = self._load_textures()
        self.glow_time = 0.0
        self.bounce_time = 0.0
        self.symbol_rotation = 0.0
        self.combo_glow = 0.0
        self.displayed_score = 0
        pygame.font.init()
        self._fonts: dict[int, pygame.font.Font] = {}

    def _load_textures(self) -> dict[TrashType, Optional[pygame.Surface]]:
        textures: dict[TrashType, Optional[pygame.Surface]] = {}
        for trash_type, name in _TEXTURE_FILES.items():
            path = self.texture_dir / name
            try:
                textures[trash_type] = pygame.image.load(str(path))
                logger.info("Textura carregada: %s", path)
            except (OSError, pygame.error):
                textures[trash_type] = None
                logger.warning("Erro ao carregar textura: %s", path)
        return textures

    # Coordinates and primitives

    def world_to_screen(self, x: float, y: float) -> tuple[int, int]:
        """Convert world units (25 x 20, y up) to surface pixels (y down)."""
        width, height = self.surface.get_size()
        return (
            round(x * width / WORLD_WIDTH),
            round(height - y * height / WORLD_HEIGHT),
        )

    def _points(self, points: Sequence[Point]) -> list[tuple[int, int]]:
        return [self.world_to_screen(px, py) for px, py in points]

    def _rect(self, x0: float, y0: float, x1: float, y1: float) -> pygame.Rect:
        left, bottom = self.world_to_screen(x0, y0)
        right, top = self.world_to_screen(x1, y1)
        return pygame.Rect(
            min(left, right), min(top, bottom), abs(right - left), abs(bottom - top)
        )

    @contextmanager
    def _overlay(self) -> Iterator[pygame.Surface]:
        layer = pygame.Surface(self.surface.get_size(), pygame.SRCALPHA)
        yield layer
        self.surface.blit(layer, (0, 0))

    def _gradient(
        self,
        target: pygame.Surface,
        corners: tuple[float, float, float, float],
        bottom: tuple[float, ...],
        top: tuple[float, ...],
    ) -> None:
        rect = self._rect(*corners)
        if rect.width == 0 or rect.height == 0:
            return
        span = max(1, rect.height - 1)
        for row in range(rect.height):
            color = _lerp(top, bottom, row / span)
            alpha = color[3] if len(color) > 3 else 1.0
            pygame.draw.line(
                target,
                _rgba(color[:3], alpha),  # type: ignore[arg-type]
                (rect.left, rect.top + row),
                (rect.right - 1, rect.top + row),
            )

    def _loop(
        self,
        target: pygame.Surface,
        corners: tuple[float, float, float, float],
        color: tuple[int, int, int, int],
        width: int = 1,
    ) -> None:
        x0, y0, x1, y1 = corners
        points = self._points([(x0, y0), (x1, y0), (x1, y1), (x0, y1)])
        pygame.draw.lines(target, color, True, points, width)

    def _font(self, size: int) -> pygame.font.Font:
        height = self.surface.get_height()
        scaled = max(6, round(size * 1.3 * height / REFERENCE_HEIGHT))
        font = self._fonts.get(scaled)
        if font is None:
            font = pygame.font.Font(None, scaled)
            self._fonts[scaled] = font
        return font

    def _text(
        self, x: float, y: float, text: str, size: int, color: RGB, alpha: float = 1.0
    ) -> None:
        image = self._font(size).render(text, True, _rgb(color))
        if alpha < 1.0:
            image.set_alpha(_channel(max(0.0, alpha)))
        sx, sy = self.world_to_screen(x, y)
        self.surface.blit(image, (sx, sy - image.get_height()))

    # Blocks

    def _block_image(
        self, trash_type: TrashType, size: tuple[int, int], alpha: float, glow: bool
    ) -> pygame.Surface:
        width, height = max(1, size[0]), max(1, size[1])
        image = pygame.Surface((width, height), pygame.SRCALPHA)
        texture = self.textures.get(trash_type)
        if texture is not None:
            image.blit(pygame.transform.scale(texture, (width, height)), (0, 0))
        else:
            image.fill(_rgba(trash_type.color()))

        intensity = 1.0
        if glow:
            self.glow_time += 0.1
            intensity = 0.8 + 0.2 * math.sin(self.glow_time)
        if glow or alpha < 1.0:
            level = _channel(intensity)
            image.fill(
                (level, level, level, _channel(alpha)),
                special_flags=pygame.BLEND_RGBA_MULT,
            )

        right, bottom = width - 1, height - 1
        light = _rgba(WHITE, alpha * 0.6)
        dark = _rgba((0.2, 0.2, 0.2), alpha * 0.8)
        pygame.draw.line(image, light, (0, 0), (right, 0))
        pygame.draw.line(image, light, (0, 0), (0, bottom))
        pygame.draw.line(image, dark, (right, 0), (right, bottom))
        pygame.draw.line(image, dark, (0, bottom), (right, bottom))
        return image

    def _draw_block(
        self, x: float, y: float, trash_type: TrashType, alpha: float = 1.0, glow: bool = False
    ) -> None:
        rect = self._rect(x, y, x + 1, y + 1)
        self.surface.blit(self._block_image(trash_type, rect.size, alpha, glow), rect.topleft)

    def _draw_preview(
        self, shape: int, types: Sequence[TrashType], ox: float, oy: float, alpha: float
    ) -> None:
        self._draw_block(ox, oy, types[0], alpha)
        for (dx, dy), trash_type in zip(shape_offsets(shape, 0), types[1:]):
            self._draw_block(ox + dx * PREVIEW_SCALE, oy + dy * PREVIEW_SCALE, trash_type, alpha)

    # Screens

    def draw(self, controller: Controller) -> None:
        """Draw the screen that matches the controller's state."""
        state = controller.state
        if state is GameState.MENU_MAIN:
            self._draw_main_menu(controller.menu_selection)
            return
        self._draw_game(controller.game, effects=state is GameState.GAME_PLAYING)
        if state is GameState.GAME_PAUSED:
            self._draw_pause_menu(controller.pause_selection)

    def _draw_background(self) -> None:
        self.surface.fill(_rgb(CLEAR_COLOR))
        self._gradient(
            self.surface,
            (0, 0, WORLD_WIDTH, WORLD_HEIGHT),
            (0.01, 0.02, 0.04),
            (0.02, 0.04, 0.08),
        )

    def _draw_main_menu(self, selection: int) -> None:
        self._draw_background()
        self._text(6.0, 16.0, "ECOTETRIS", TITLE, NEON)
        self._text(7.5, 15.0, "Reciclagem Sustentavel", LARGE, (0.0, 0.8, 0.4))

        if selection == 0:
            self._text(10.0, 12.0, "> JOGAR <", LARGE, YELLOW)
        else:
            self._text(11.0, 12.0, "JOGAR", LARGE, WHITE)
        if selection == 1:
            self._text(10.5, 10.0, "> SAIR <", LARGE, YELLOW)
        else:
            self._text(11.5, 10.0, "SAIR", LARGE, WHITE)

        self._text(7.0, 7.0, "Use as setas para navegar", NORMAL, GREY_TEXT)
        self._text(8.0, 6.0, "ENTER para selecionar", NORMAL, GREY_TEXT)
        self._text(
            4.0, 3.0, "Ajude o planeta separando o lixo corretamente!", NORMAL, (0.0, 0.6, 0.3)
        )
        self._text(6.0, 2.0, "Cada tipo de lixo tem sua cor especial", SMALL, (0.0, 0.6, 0.3))

    def _draw_pause_menu(self, selection: int) -> None:
        with self._overlay() as layer:
            layer.fill(_rgba((0.0, 0.0, 0.0), 0.8))
            pygame.draw.rect(layer, _rgba((0.1, 0.1, 0.2), 0.9), self._rect(8.0, 8.0, 17.0, 15.0))
            self._loop(layer, (8.0, 8.0, 17.0, 15.0), _rgba(NEON), 2)

        self._text(10.5, 14.0, "PAUSADO", LARGE, WHITE)
        options = (
            ("> CONTINUAR <", 9.0, "CONTINUAR", 10.0),
            ("> REINICIAR <", 9.0, "REINICIAR", 10.0),
            ("> SAIR <", 9.5, "SAIR", 10.5),
        )
        y = 12.5
        for index, (marked, marked_x, plain, plain_x) in enumerate(options):
            if selection == index:
                self._text(marked_x, y, marked, NORMAL, YELLOW)
            else:
                self._text(plain_x, y, plain, NORMAL, WHITE)
            y -= 1.0
        self._text(9.0, 9.0, "Setas + ENTER", MONO, GREY_TEXT)

    def _draw_game(self, game: Game, effects: bool) -> None:
        self._draw_background()
        self._draw_board(game)
        self._draw_next_panel(game)
        self._draw_hold_panel(game)
        self._draw_stats_panel(game)
        self._draw_controls_panel()
        self._text(18.0, 8.0, "Conquistas: OK", MONO, WHITE)
        if effects:
            self._draw_particles(game)
            self._draw_combo_effects(game)
            if game.line_clearing:
                self._draw_recycling_animation(game)

    def _draw_board(self, game: Game) -> None:
        for y in range(BOARD_HEIGHT):
            for x in range(BOARD_WIDTH):
                trash_type = game.trash_type_at(x, y)
                if game.line_clearing and y == game.line_being_cleared:
                    if x >= game.animation_step and trash_type is not TrashType.NONE:
                        self._draw_block(x, y, trash_type, 1.0, True)
                elif game.is_occupied(x, y) != game.is_current(x, y):
                    if trash_type is not TrashType.NONE:
                        current = game.is_current(x, y)
                        self._draw_block(x, y, trash_type, 0.9 if current else 1.0, current)

        empty = _rgb((0.01, 0.01, 0.03))
        for y in range(BOARD_HEIGHT):
            for x in range(BOARD_WIDTH):
                if not game.is_occupied(x, y) and not game.is_current(x, y):
                    pygame.draw.rect(self.surface, empty, self._rect(x, y, x + 1, y + 1))

        with self._overlay() as layer:
            grid = _rgba((0.15, 0.15, 0.25), 0.6)
            for i in range(BOARD_WIDTH + 1):
                pygame.draw.line(layer, grid, *self._points([(i, 0.0), (i, float(BOARD_HEIGHT))]))
            for i in range(BOARD_HEIGHT + 1):
                pygame.draw.line(layer, grid, *self._points([(0.0, i), (float(BOARD_WIDTH), i)]))
            self._loop(layer, (-0.1, -0.1, BOARD_WIDTH + 0.1, BOARD_HEIGHT + 0.1), _rgba(NEON), 3)

    def _draw_next_panel(self, game: Game) -> None:
        corners = (12.0, 16.0, 17.0, 19.5)
        with self._overlay() as layer:
            self._gradient(layer, corners, (0.1, 0.15, 0.2, 0.9), (0.05, 0.1, 0.15, 0.9))
            self._loop(layer, corners, _rgba((0.0, 0.8, 0.4)), 2)
        self._text(13.0, 19.0, "PROXIMA", NORMAL, WHITE)
        self._draw_preview(game.next_shape, game.next_types, 14.0, 17.5, 0.9)

    def _draw_hold_panel(self, game: Game) -> None:
        can_hold = game.can_hold
        alpha = 0.9 if can_hold else 0.5
        corners = (12.0, 12.5, 17.0, 15.5)
        border = (0.0, 0.8, 0.4) if can_hold else (0.5, 0.3, 0.2)
        with self._overlay() as layer:
            self._gradient(layer, corners, (0.1, 0.15, 0.2, alpha), (0.05, 0.1, 0.15, alpha))
            self._loop(layer, corners, _rgba(border), 2)
        self._text(13.8, 15.0, "HOLD", NORMAL, WHITE, alpha)
        self._text(12.2, 14.5, "Pressione C", MONO, WHITE, alpha)
        if game.hold_shape is not None:
            self._draw_preview(game.hold_shape, game.hold_types, 14.0, 13.5, alpha)

    def _draw_stats_panel(self, game: Game) -> None:
        corners = (11.5, 0.5, 24.0, 12.0)
        with self._overlay() as layer:
            self._gradient(layer, corners, (0.05, 0.08, 0.12, 0.95), (0.02, 0.04, 0.08, 0.95))
            self._loop(layer, corners, _rgba(PANEL_BORDER), 2)
        self._text(16.0, 11.5, "ESTATISTICAS", LARGE, NEON)

        target = game.score
        if self.displayed_score < target:
            self.displayed_score += max(1, (target - self.displayed_score) // 10)

        y = 10.8
        self._text(12.0, y, f"PONTOS: {self.displayed_score}", NORMAL, WHITE)
        y -= 0.6
        self._text(12.0, y, f"NIVEL: {game.level}", NORMAL, WHITE)

        progress = min(1.0, max(0.0, level_progress(game.level, game.lines_cleared)))
        pygame.draw.rect(self.surface, _rgb((0.2, 0.2, 0.2)), self._rect(18.0, y - 0.1, 23.0, y + 0.3))
        bar = self._rect(18.0, y - 0.1, 18.0 + 5.0 * progress, y + 0.3)
        if bar.width > 0:
            pygame.draw.rect(self.surface, _rgb(NEON), bar)

        y -= 0.8
        self._text(12.0, y, f"LINHAS: {game.lines_cleared}", NORMAL, WHITE)
        y -= 0.5
        if game.combo_count > 0:
            self._text(12.0, y, f"COMBO: {game.combo_count}x", NORMAL, YELLOW)
            y -= 0.5

        y -= 0.3
        self._text(12.0, y, "RECICLADOS:", SMALL, (0.0, 0.8, 0.4))
        y -= 0.5
        for trash_type in TrashType.recyclable():
            pygame.draw.rect(
                self.surface, _rgb(recycle_color(trash_type)), self._rect(12.0, y, 12.3, y + 0.3)
            )
            self._text(
                12.5, y, f"{_STATS_NAMES[trash_type]}: {game.recycled_count(trash_type)}", MONO, WHITE
            )
            y -= 0.4

    def _draw_controls_panel(self) -> None:
        corners = (18.5, 0.5, 24.5, 7.5)
        with self._overlay() as layer:
            self._gradient(layer, corners, (0.05, 0.08, 0.12, 0.9), (0.02, 0.04, 0.08, 0.9))
            self._loop(layer, corners, _rgba(PANEL_BORDER), 1)
        self._text(19.0, 7.0, "CONTROLES", NORMAL, NEON)
        y = 6.3
        for line in _CONTROLS:
            self._text(19.0, y, line, MONO, WHITE)
            y -= 0.4

    # Effects

    def _draw_particles(self, game: Game) -> None:
        if not game.particles:
            return
        with self._overlay() as layer:
            for p in game.particles:
                color = p.trash_type.color()
                life = max(0.0, min(1.0, p.life))
                radius = max(1, round(p.size * 10.0 * life / 2))
                pygame.draw.circle(layer, _rgba(color, life * 0.8), self.world_to_screen(p.x, p.y), radius)
                pygame.draw.line(
                    layer,
                    _rgba(color, life * 0.3),
                    *self._points([(p.x, p.y), (p.x - p.vx * 0.5, p.y - p.vy * 0.5)]),
                )

    def _draw_combo_effects(self, game: Game) -> None:
        if game.combo_count <= 1:
            return
        self.combo_glow += 0.1
        intensity = 0.5 + 0.3 * math.sin(self.combo_glow)
        with self._overlay() as layer:
            self._loop(
                layer,
                (-0.5, -0.5, BOARD_WIDTH + 0.5, BOARD_HEIGHT + 0.5),
                _rgba(YELLOW, intensity * 0.5),
                5,
            )
        text_y = 15.0 + 2.0 * math.sin(self.combo_glow * 0.5)
        self._text(3.0, text_y, f"COMBO x{game.combo_count}!", LARGE, YELLOW, intensity)

    def _draw_recycle_bin(
        self, x: float, y: float, color: RGB, scale: float = 1.0, animated: bool = False
    ) -> None:
        if animated:
            self.bounce_time += 0.2
            scale *= 1.0 + 0.1 * math.sin(self.bounce_time)
            y += 0.2 * math.sin(self.bounce_time * 2)
        r, g, b = color

        with self._overlay() as layer:
            shadow = [
                (x + 0.8 * scale * math.cos(a), y - 0.2 + 0.1 * math.sin(a))
                for a in (i * 2.0 * math.pi / 20.0 for i in range(20))
            ]
            pygame.draw.polygon(layer, _rgba((0.0, 0.0, 0.0), 0.4), self._points(shadow))

            bottom_width = 0.8 * scale
            top_width = 0.6 * scale
            narrowing = bottom_width - top_width
            segment = 1.5 * scale / 10.0
            for i in range(10):
                ratio = i / 10.0
                dark = 1.0 - ratio * 0.3
                quad = [
                    (x - bottom_width + ratio * narrowing, y + i * segment),
                    (x + bottom_width - ratio * narrowing, y + i * segment),
                    (x + bottom_width - (ratio + 0.1) * narrowing, y + (i + 1) * segment),
                    (x - bottom_width + (ratio + 0.1) * narrowing, y + (i + 1) * segment),
                ]
                pygame.draw.polygon(layer, _rgba((r * dark, g * dark, b * dark)), self._points(quad))

            lid = [
                (x - 0.9 * scale, y + 1.5 * scale),
                (x + 0.9 * scale, y + 1.5 * scale),
                (x + 0.8 * scale, y + 1.8 * scale),
                (x - 0.8 * scale, y + 1.8 * scale),
            ]
            lid_color = (r * 0.7 + 0.3, g * 0.7 + 0.3, b * 0.7 + 0.3)
            pygame.draw.polygon(layer, _rgba(lid_color), self._points(lid))

            if animated:
                self.symbol_rotation += 2.0
            turn = math.radians(self.symbol_rotation)
            cx, cy = x, y + 0.9 * scale
            size = 0.25 * scale
            for i in range(3):
                angle = math.radians(i * 120.0)
                local = [
                    (size * math.cos(angle), size * math.sin(angle)),
                    (size * 0.5 * math.cos(angle + 0.5), size * 0.5 * math.sin(angle + 0.5)),
                    (size * 0.5 * math.cos(angle - 0.5), size * 0.5 * math.sin(angle - 0.5)),
                ]
                triangle = [
                    (
                        cx + px * math.cos(turn) - py * math.sin(turn),
                        cy + px * math.sin(turn) + py * math.cos(turn),
                    )
                    for px, py in local
                ]
                pygame.draw.polygon(layer, _rgba(WHITE), self._points(triangle))

    def _draw_recycling_animation(self, game: Game) -> None:
        trash_type = game.line_trash_type
        color = recycle_color(trash_type)
        step = game.animation_step
        scale = 1.5 + 0.2 * math.sin(step * 0.8)
        self._draw_recycle_bin(20.0, 10.0, color, scale, True)

        if 0 < step <= ANIMATION_STEPS:
            progress = step / ANIMATION_STEPS
            start_x = 5.0
            start_y = float(game.line_being_cleared or 0)
            end_x, end_y = 19.5, 11.0
            current_x = start_x + (end_x - start_x) * progress
            current_y = start_y + (end_y - start_y) * progress

            with self._overlay() as layer:
                for i in range(10):
                    trail = progress - i * 0.05
                    if trail > 0:
                        point = self.world_to_screen(
                            start_x + (end_x - start_x) * trail,
                            start_y + (end_y - start_y) * trail,
                        )
                        pygame.draw.circle(layer, _rgba(color, 0.6 * trail), point, 4)

            size = self._rect(0.0, 0.0, 1.0, 1.0).size
            block = self._block_image(trash_type, size, 1.0 - progress * 0.3, True)
            rotated = pygame.transform.rotate(block, progress * 360.0)
            centre = self.world_to_screen(current_x + 0.5, current_y + 0.5)
            self.surface.blit(rotated, rotated.get_rect(center=centre))

            if progress > 0.8:
                impact = (progress - 0.8) * 5.0
                with self._overlay() as layer:
                    white = _rgba(WHITE, impact * 0.8)
                    end = self.world_to_screen(end_x, end_y)
                    pygame.draw.circle(layer, white, end, 10)
                    length = impact * 2.0
                    for i in range(8):
                        angle = math.radians(i * 45.0)
                        tip = self.world_to_screen(
                            end_x + math.cos(angle) * length, end_y + math.sin(angle) * length
                        )
                        pygame.draw.line(layer, white, end, tip)

        self._text(18.0, 8.0, f"{trash_type.display_name()} Reciclado!", NORMAL, WHITE)