"""Trash types and tetromino shapes used on the board."""

from __future__ import annotations

from enum import IntEnum

BOARD_WIDTH = 10
BOARD_HEIGHT = 20
SHAPE_COUNT = 7
ROTATION_COUNT = 4

Offset = tuple[int, int]
Cell = tuple[int, int]


class TrashType(IntEnum):
    """Kind of recyclable waste a block is made of."""

    PAPER = 0
    PLASTIC = 1
    METAL = 2
    GLASS = 3
    ORGANIC = 4
    NONE = 5

    @classmethod
    def recyclable(cls) -> tuple["TrashType", ...]:
        """All real trash types, excluding NONE."""
        return tuple(t for t in cls if t is not cls.NONE)

    def display_name(self) -> str:
        """Human-readable name shown to the player."""
        return _NAMES.get(self, "Desconhecido")

    def color(self) -> tuple[float, float, float]:
        """Fallback RGB colour of the type; black for NONE."""
        return _COLORS.get(self, (0.0, 0.0, 0.0))

    def base_score(self) -> int:
        """Points awarded for clearing one uniform line of this type."""
        try:
            return _BASE_SCORES[self]
        except KeyError:
            raise ValueError(f"{self.name} has no base score") from None


_NAMES = {
    TrashType.PAPER: "Papel",
    TrashType.PLASTIC: "Plástico",
    TrashType.METAL: "Metal",
    TrashType.GLASS: "Vidro",
    TrashType.ORGANIC: "Orgânico",
}

_COLORS = {
    TrashType.PAPER: (0.0, 0.0, 1.0),
    TrashType.PLASTIC: (1.0, 0.0, 0.0),
    TrashType.METAL: (1.0, 1.0, 0.0),
    TrashType.GLASS: (0.0, 1.0, 0.0),
    TrashType.ORGANIC: (0.5, 0.25, 0.0),
}

_BASE_SCORES = {
    TrashType.PAPER: 100,
    TrashType.PLASTIC: 150,
    TrashType.METAL: 200,
    TrashType.GLASS: 175,
    TrashType.ORGANIC: 125,
}


def _pairs(*values: int) -> tuple[Offset, Offset, Offset]:
    it = iter(values)
    return tuple(zip(it, it))  # type: ignore[return-value]


# Offsets of the three non-pivot blocks, per shape and rotation.
_SHAPES: tuple[tuple[tuple[Offset, Offset, Offset], ...], ...] = (
    (  # I
        _pairs(-2, 0, -1, 0, 1, 0),
        _pairs(0, -2, 0, -1, 0, 1),
        _pairs(2, 0, 1, 0, -1, 0),
        _pairs(0, 2, 0, 1, 0, -1),
    ),
    (  # S
        _pairs(-1, -1, 0, -1, 1, 0),
        _pairs(1, -1, 1, 0, 0, 1),
        _pairs(1, 1, 0, 1, -1, 0),
        _pairs(-1, 1, -1, 0, 0, -1),
    ),
    (  # reverse S
        _pairs(-1, 1, 0, 1, 1, 0),
        _pairs(-1, -1, -1, 0, 0, 1),
        _pairs(1, -1, 0, -1, -1, 0),
        _pairs(1, 1, 1, 0, 0, -1),
    ),
    (  # L
        _pairs(-1, -1, -1, 0, 1, 0),
        _pairs(1, -1, 0, -1, 0, 1),
        _pairs(1, 1, 1, 0, -1, 0),
        _pairs(-1, 1, 0, 1, 0, -1),
    ),
    (  # reverse L
        _pairs(-1, 1, -1, 0, 1, 0),
        _pairs(-1, -1, 0, -1, 0, 1),
        _pairs(1, -1, 1, 0, -1, 0),
        _pairs(1, 1, 0, 1, 0, -1),
    ),
    (  # T
        _pairs(-1, 0, 0, -1, 1, 0),
        _pairs(0, -1, 1, 0, 0, 1),
        _pairs(1, 0, 0, 1, -1, 0),
        _pairs(0, 1, -1, 0, 0, -1),
    ),
    (  # square
        _pairs(0, -1, -1, -1, -1, 0),
        _pairs(0, -1, -1, -1, -1, 0),
        _pairs(0, -1, -1, -1, -1, 0),
        _pairs(0, -1, -1, -1, -1, 0),
    ),
)


def shape_offsets(shape: int, rotation: int) -> tuple[Offset, Offset, Offset]:
    """Offsets of the three blocks around the pivot of a shape in a rotation."""
    if not 0 <= shape < SHAPE_COUNT:
        raise ValueError(f"shape must be in 0..{SHAPE_COUNT - 1}, got {shape}")
    if not 0 <= rotation < ROTATION_COUNT:
        raise ValueError(
            f"rotation must be in 0..{ROTATION_COUNT - 1}, got {rotation}"
        )
    return _SHAPES[shape][rotation]


def piece_cells(shape: int, rotation: int, x: int, y: int) -> list[Cell]:
    """Board cells covered by a piece whose pivot is at (x, y), pivot first."""
    return [(x, y)] + [(x + dx, y + dy) for dx, dy in shape_offsets(shape, rotation)]