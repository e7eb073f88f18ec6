"""Board state and rules of the recycling falling-blocks game."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Optional, Sequence

from .pieces import (
    BOARD_HEIGHT,
    BOARD_WIDTH,
    ROTATION_COUNT,
    SHAPE_COUNT,
    TrashType,
    piece_cells,
)

logger = logging.getLogger(__name__)

SPAWN_Y = 17
HOLD_SPAWN_X = 5
ANIMATION_STEPS = 10
PARTICLES_PER_CELL = 3
FRAME_TIME = 0.016
UNIFORM_BONUS = 1.5
COMBO_BONUS = 1.5

Color = tuple[float, float, float]


@dataclass
class Cell:
    """One square of the board."""

    occupied: bool = False
    current: bool = False
    trash_type: TrashType = TrashType.NONE
    color: Color = (0.0, 0.0, 0.0)
    combo_id: int = -1


@dataclass
class Particle:
    """A short-lived visual spark emitted when a line is recycled."""

    x: float
    y: float
    vx: float
    vy: float
    life: float
    size: float
    trash_type: TrashType


def _in_bounds(x: int, y: int) -> bool:
    return 0 <= x < BOARD_WIDTH and 0 <= y < BOARD_HEIGHT


def _four_types(types: Sequence[TrashType]) -> list[TrashType]:
    result = [TrashType(t) for t in types]
    if len(result) != 4:
        raise ValueError(f"a piece needs exactly 4 trash types, got {len(result)}")
    return result


def _recyclable(trash_type: TrashType) -> TrashType:
    trash_type = TrashType(trash_type)
    if trash_type is TrashType.NONE:
        raise ValueError("NONE is not a recyclable trash type")
    return trash_type


@dataclass
class Game:
    """Complete state of one game: board, pieces, score and effects."""

    rng: random.Random = field(default_factory=random.Random)

    def __post_init__(self) -> None:
        self.board: list[list[Cell]] = self._empty_board()
        self.current_shape = 0
        self.current_rotation = 0
        self.current_x = 0
        self.current_y = 0
        self.current_types: list[TrashType] = [TrashType.PAPER] * 4
        self.game_over = False
        self._reset_progress()
        self.next_shape = 0
        self.next_types: list[TrashType] = [TrashType.PAPER] * 4
        self._generate_next_piece()

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.__post_init__()

    @staticmethod
    def _empty_board() -> list[list[Cell]]:
        return [[Cell() for _ in range(BOARD_HEIGHT)] for _ in range(BOARD_WIDTH)]

    def _reset_progress(self) -> None:
        self.score = 0
        self.level = 1
        self.lines_cleared = 0
        self.combo_count = 0
        self._recycled = {t: 0 for t in TrashType.recyclable()}
        self.hold_shape: Optional[int] = None
        self.hold_types: list[TrashType] = [TrashType.PAPER] * 4
        self.can_hold = True
        self.line_clearing = False
        self.animation_step = 0
        self.line_being_cleared: Optional[int] = None
        self.line_trash_type = TrashType.PAPER
        self.particles: list[Particle] = []

    def restart(self) -> None:
        """Clear everything and start a new game with a fresh piece."""
        self.board = self._empty_board()
        self.game_over = False
        self._reset_progress()
        self._generate_next_piece()
        self.spawn_trashes()

    # Board queries

    def is_occupied(self, x: int, y: int) -> bool:
        """Whether a frozen block lies at (x, y)."""
        return self.board[x][y].occupied

    def is_current(self, x: int, y: int) -> bool:
        """Whether the falling piece covers (x, y)."""
        return self.board[x][y].current

    def trash_type_at(self, x: int, y: int) -> TrashType:
        """Trash type stored at (x, y); NONE outside the board."""
        if _in_bounds(x, y):
            return self.board[x][y].trash_type
        return TrashType.NONE

    # Piece movement

    def set_current(self, x: int, y: int) -> None:
        """Move the falling piece's pivot to (x, y) without collision checks."""
        self._clear_previous_frame()
        self.current_x = x
        self.current_y = y
        self._update_active_trashes()

    def _generate_next_piece(self) -> None:
        self.next_shape = self.rng.randrange(SHAPE_COUNT)
        trash_type = TrashType(self.rng.randrange(len(TrashType.recyclable())))
        self.next_types = [trash_type] * 4

    def spawn_trashes(self) -> None:
        """Bring the queued piece onto the board; ends the game if it cannot fit."""
        if self.line_clearing:
            return
        self.current_shape = self.next_shape
        self.current_types = list(self.next_types)
        self._generate_next_piece()

        rotation = self.rng.randrange(ROTATION_COUNT)
        position = self.rng.randrange(5) + 2
        self.current_rotation = rotation
        if self.check_collision(position, SPAWN_Y, rotation):
            self.game_over = True
        else:
            self.current_x = position
            self.current_y = SPAWN_Y
            self.can_hold = True
            self._update_active_trashes()

    def hold_piece(self) -> None:
        """Put the falling piece aside, or swap it with the one set aside."""
        if not self.can_hold:
            return
        self._clear_previous_frame()

        if self.hold_shape is None:
            self.hold_shape = self.current_shape
            self.hold_types = list(self.current_types)
            self.spawn_trashes()
        else:
            self.hold_shape, self.current_shape = self.current_shape, self.hold_shape
            self.hold_types, self.current_types = self.current_types, self.hold_types
            self.current_rotation = 0
            self.current_x = HOLD_SPAWN_X
            self.current_y = SPAWN_Y
            if self.check_collision(self.current_x, self.current_y, self.current_rotation):
                self.game_over = True
            else:
                self._update_active_trashes()

        self.can_hold = False

    def rotate(self) -> None:
        """Turn the falling piece one step, if the new position is free."""
        rotation = self.current_rotation - 1 if self.current_rotation > 0 else ROTATION_COUNT - 1
        if not self.check_collision(self.current_x, self.current_y, rotation):
            self._clear_previous_frame()
            self.current_rotation = rotation
            self._update_active_trashes()

    def translate(self, direction: int) -> None:
        """Shift the falling piece sideways by direction, if the way is free."""
        new_x = self.current_x + direction
        if not self.check_collision(new_x, self.current_y, self.current_rotation):
            self._clear_previous_frame()
            self.current_x = new_x
            self._update_active_trashes()

    def move_down(self) -> None:
        """Advance one step: animate a clearing line, or drop the piece one row."""
        if self.line_clearing:
            self._advance_line_animation()
            return
        if not self.check_collision(self.current_x, self.current_y - 1, self.current_rotation):
            self._clear_previous_frame()
            self.current_y -= 1
            self._update_active_trashes()
        else:
            self._freeze_current()
            self._check_multiple_lines()
            self.spawn_trashes()

    def drop_trashes(self) -> None:
        """Freeze the piece where it stands, or end the game if it overlaps."""
        if not self.check_collision(self.current_x, self.current_y, self.current_rotation):
            self._freeze_current()
            self.spawn_trashes()
        else:
            self.game_over = True

    def check_collision(self, x: int, y: int, rotation: int) -> bool:
        """Whether the current shape at (x, y) in rotation leaves the board or overlaps."""
        return any(
            not _in_bounds(cx, cy) or self.board[cx][cy].occupied
            for cx, cy in piece_cells(self.current_shape, rotation, x, y)
        )

    def _current_cells(self) -> list[tuple[int, int]]:
        return piece_cells(
            self.current_shape, self.current_rotation, self.current_x, self.current_y
        )

    def _clear_previous_frame(self) -> None:
        for cx, cy in self._current_cells():
            if _in_bounds(cx, cy):
                self.board[cx][cy].current = False

    def _update_active_trashes(self) -> None:
        for (cx, cy), trash_type in zip(self._current_cells(), self.current_types):
            if _in_bounds(cx, cy):
                cell = self.board[cx][cy]
                cell.current = True
                if not cell.occupied:
                    cell.trash_type = trash_type

    def _freeze_current(self) -> None:
        for (cx, cy), trash_type in zip(self._current_cells(), self.current_types):
            cell = self.board[cx][cy]
            cell.occupied = True
            cell.current = False
            cell.trash_type = trash_type

    # Line handling

    def _row_full(self, y: int) -> bool:
        return all(self.board[x][y].occupied for x in range(BOARD_WIDTH))

    def _uniform_type(self, y: int) -> Optional[TrashType]:
        row = [self.board[x][y] for x in range(BOARD_WIDTH)]
        if not all(cell.occupied for cell in row):
            return None
        first = row[0].trash_type
        return first if all(cell.trash_type == first for cell in row) else None

    def _check_multiple_lines(self) -> None:
        if self.line_clearing:
            return
        uniform: list[tuple[int, TrashType]] = []
        y = 0
        while y < BOARD_HEIGHT:
            if self._row_full(y):
                trash_type = self._uniform_type(y)
                if trash_type is None:
                    self._delete_row(y)
                    continue
                uniform.append((y, trash_type))
            y += 1

        if not uniform:
            self.combo_count = 0
            return

        self.combo_count = self.combo_count + 1 if len(uniform) > 1 else 0
        first_y, first_type = uniform[0]
        self._init_line_animation(first_y, first_type)

        for index, (row, trash_type) in enumerate(uniform):
            self._update_score(1, trash_type, index > 0 or self.combo_count > 0)
            self._recycled[trash_type] += 1
            for x in range(BOARD_WIDTH):
                self.create_recycle_effect(x, row, trash_type)

        self.lines_cleared += len(uniform)
        self._update_level()

    def _check_row(self) -> None:
        if self.line_clearing:
            return
        y = 0
        while y < BOARD_HEIGHT:
            if self._row_full(y):
                trash_type = self._uniform_type(y)
                if trash_type is not None:
                    self._init_line_animation(y, trash_type)
                    return
                self._delete_row(y)
                continue
            y += 1

    def _delete_row(self, y: int) -> None:
        for column in self.board:
            for k in range(y, BOARD_HEIGHT - 1):
                below, above = column[k], column[k + 1]
                below.occupied = above.occupied
                below.current = above.current
                below.trash_type = above.trash_type
                below.combo_id = above.combo_id
            top = column[BOARD_HEIGHT - 1]
            top.occupied = False
            top.current = False
            top.combo_id = -1

    def _init_line_animation(self, y: int, trash_type: TrashType) -> None:
        self.line_clearing = True
        self.line_being_cleared = y
        self.line_trash_type = trash_type
        self.animation_step = 0

    def _advance_line_animation(self) -> None:
        if not self.line_clearing:
            return
        self.animation_step += 1
        if self.animation_step >= ANIMATION_STEPS:
            if self.line_being_cleared is not None:
                self._delete_row(self.line_being_cleared)
            self.line_clearing = False
            self.animation_step = 0
            self.line_being_cleared = None
            self.line_trash_type = TrashType.PAPER
            self._check_row()

    # Scoring and progression

    def _update_score(self, lines: int, trash_type: TrashType, is_combo: bool) -> None:
        base_points = trash_type.base_score() * lines
        level_multiplier = 1.0 + (self.level - 1) * 0.1
        combo_multiplier = 1.0 + self.combo_count * 0.2
        points = int(base_points * level_multiplier * combo_multiplier * UNIFORM_BONUS)
        if is_combo:
            points = int(points * COMBO_BONUS)
        self.score += points

    def _update_level(self) -> None:
        new_level = self.lines_cleared // 10 + 1
        if new_level > self.level:
            self.level = new_level
            logger.info("Nível %d alcançado!", self.level)

    def difficulty_multiplier(self) -> float:
        """Factor applied to the automatic drop interval; shrinks with level."""
        return max(0.1, 1.0 - (self.level - 1) * 0.05)

    def recycled_count(self, trash_type: TrashType) -> int:
        """Number of uniform lines of trash_type recycled so far."""
        return self._recycled[_recyclable(trash_type)]

    def set_recycled_count(self, trash_type: TrashType, count: int) -> None:
        """Overwrite the recycled counter of trash_type."""
        self._recycled[_recyclable(trash_type)] = count

    # Particles

    def create_recycle_effect(self, x: int, y: int, trash_type: TrashType) -> None:
        """Emit a small burst of particles from the centre of cell (x, y)."""
        for _ in range(PARTICLES_PER_CELL):
            self.particles.append(
                Particle(
                    x=x + 0.5,
                    y=y + 0.5,
                    vx=(self.rng.randrange(200) - 100) / 100.0,
                    vy=(self.rng.randrange(200) - 100) / 100.0,
                    life=1.0,
                    size=0.1 + self.rng.randrange(20) / 100.0,
                    trash_type=trash_type,
                )
            )

    def _update_particles(self) -> None:
        for p in self.particles:
            p.x += p.vx * FRAME_TIME
            p.y += p.vy * FRAME_TIME
            p.life -= FRAME_TIME
            p.size *= 0.98
        self.particles = [p for p in self.particles if p.life > 0 and p.size > 0.01]

    def update(self) -> None:
        """Advance visual effects by one frame."""
        self._update_particles()

    # State restoration

    def set_cell(
        self, x: int, y: int, occupied: bool, trash_type: TrashType, color: Color
    ) -> None:
        """Set a board cell directly; positions outside the board are ignored."""
        if _in_bounds(x, y):
            cell = self.board[x][y]
            cell.occupied = occupied
            cell.trash_type = TrashType(trash_type)
            cell.color = tuple(color)  # type: ignore[assignment]

    def set_current_piece(
        self, shape: int, rotation: int, x: int, y: int, types: Sequence[TrashType]
    ) -> None:
        """Replace the falling piece without touching the board."""
        self.current_types = _four_types(types)
        self.current_shape = shape
        self.current_rotation = rotation
        self.current_x = x
        self.current_y = y

    def set_next_piece(self, shape: int, types: Sequence[TrashType]) -> None:
        """Replace the queued piece."""
        self.next_types = _four_types(types)
        self.next_shape = shape

    def set_hold_piece(
        self, shape: Optional[int], types: Sequence[TrashType], can_hold: bool
    ) -> None:
        """Replace the held piece and whether holding is allowed."""
        self.hold_types = _four_types(types)
        self.hold_shape = shape
        self.can_hold = can_hold