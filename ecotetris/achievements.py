"""Achievements unlocked by reaching score, line, level and recycling goals."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Optional

from .pieces import TrashType

if TYPE_CHECKING:
    from .game import Game

COMPLETE_RECYCLER_ID = 19
ECO_CHAMPION_ID = 20


class AchievementType(Enum):
    """What kind of progress an achievement measures."""

    SCORE_BASED = auto()
    LINES_BASED = auto()
    LEVEL_BASED = auto()
    RECYCLE_BASED = auto()
    COMBO_BASED = auto()
    SPECIAL = auto()


@dataclass
class Achievement:
    """A single goal the player can reach."""

    id: int
    name: str
    description: str
    kind: AchievementType
    target: int
    icon_id: int = 0
    trash_type: TrashType = TrashType.NONE
    unlocked: bool = False


_S = AchievementType.SCORE_BASED
_LN = AchievementType.LINES_BASED
_LV = AchievementType.LEVEL_BASED
_R = AchievementType.RECYCLE_BASED
_C = AchievementType.COMBO_BASED
_SP = AchievementType.SPECIAL

_CATALOGUE = (
    (1, "Primeiro Passo", "Alcance 1.000 pontos", _S, 1000, TrashType.NONE),
    (2, "Reciclador Iniciante", "Alcance 5.000 pontos", _S, 5000, TrashType.NONE),
    (3, "Eco Guerreiro", "Alcance 25.000 pontos", _S, 25000, TrashType.NONE),
    (4, "Mestre da Reciclagem", "Alcance 100.000 pontos", _S, 100000, TrashType.NONE),
    (5, "Lenda Ecológica", "Alcance 500.000 pontos", _S, 500000, TrashType.NONE),
    (6, "Primeira Limpeza", "Limpe 10 linhas", _LN, 10, TrashType.NONE),
    (7, "Limpador Eficiente", "Limpe 100 linhas", _LN, 100, TrashType.NONE),
    (8, "Máquina de Limpeza", "Limpe 500 linhas", _LN, 500, TrashType.NONE),
    (9, "Demolidor Ecológico", "Limpe 1000 linhas", _LN, 1000, TrashType.NONE),
    (10, "Subindo de Nível", "Alcance o nível 5", _LV, 5, TrashType.NONE),
    (11, "Especialista", "Alcance o nível 10", _LV, 10, TrashType.NONE),
    (12, "Mestre", "Alcance o nível 20", _LV, 20, TrashType.NONE),
    (13, "Lenda", "Alcance o nível 50", _LV, 50, TrashType.NONE),
    (14, "Amigo do Papel", "Recicle 100 itens de papel", _R, 100, TrashType.PAPER),
    (15, "Guerreiro do Plástico", "Recicle 100 itens de plástico", _R, 100, TrashType.PLASTIC),
    (16, "Coletor de Metal", "Recicle 100 itens de metal", _R, 100, TrashType.METAL),
    (17, "Protetor do Vidro", "Recicle 100 itens de vidro", _R, 100, TrashType.GLASS),
    (18, "Composteiro", "Recicle 100 itens orgânicos", _R, 100, TrashType.ORGANIC),
    (19, "Reciclador Completo", "Recicle 50 itens de cada tipo", _SP, 50, TrashType.NONE),
    (20, "Eco Champion", "Recicle 1000 itens no total", _SP, 1000, TrashType.NONE),
    (21, "Combo Iniciante", "Faça um combo de 3", _C, 3, TrashType.NONE),
    (22, "Combo Master", "Faça um combo de 5", _C, 5, TrashType.NONE),
    (23, "Combo Legend", "Faça um combo de 10", _C, 10, TrashType.NONE),
    (24, "Velocista Ecológico", "Alcance nível 10 em menos de 5 minutos", _SP, 1, TrashType.NONE),
    (25, "Perfeccionista", "Complete um nível sem errar uma peça", _SP, 1, TrashType.NONE),
)


class AchievementManager:
    """Tracks which achievements a player has unlocked."""

    def __init__(self) -> None:
        self.achievements: list[Achievement] = []
        self.latest: Optional[Achievement] = None
        self._notify = False
        self.reset()

    def reset(self) -> None:
        """Recreate the full catalogue with every achievement locked."""
        self.achievements = [
            Achievement(id_, name, desc, kind, target, icon_id=id_, trash_type=trash)
            for id_, name, desc, kind, target, trash in _CATALOGUE
        ]

    def _reached(self, achievement: Achievement, game: "Game") -> bool:
        kind = achievement.kind
        target = achievement.target
        if kind is AchievementType.SCORE_BASED:
            return game.score >= target
        if kind is AchievementType.LINES_BASED:
            return game.lines_cleared >= target
        if kind is AchievementType.LEVEL_BASED:
            return game.level >= target
        if kind is AchievementType.RECYCLE_BASED:
            if achievement.trash_type is TrashType.NONE:
                return False
            return game.recycled_count(achievement.trash_type) >= target
        if kind is AchievementType.COMBO_BASED:
            return game.combo_count >= target
        counts = [game.recycled_count(t) for t in TrashType.recyclable()]
        if achievement.id == COMPLETE_RECYCLER_ID:
            return all(count >= target for count in counts)
        if achievement.id == ECO_CHAMPION_ID:
            return sum(counts) >= target
        return False

    def check(self, game: "Game") -> None:
        """Unlock every locked achievement whose goal the game has reached."""
        for achievement in self.achievements:
            if not achievement.unlocked and self._reached(achievement, game):
                self.unlock(achievement.id)

    def unlock(self, achievement_id: int) -> None:
        """Unlock an achievement by id; unknown or already unlocked ids are ignored."""
        for achievement in self.achievements:
            if achievement.id == achievement_id and not achievement.unlocked:
                achievement.unlocked = True
                self.latest = achievement
                self._notify = True
                return

    def unlocked(self) -> list[Achievement]:
        """Achievements already unlocked, in catalogue order."""
        return [a for a in self.achievements if a.unlocked]

    def locked(self) -> list[Achievement]:
        """Achievements still locked, in catalogue order."""
        return [a for a in self.achievements if not a.unlocked]

    def unlocked_count(self) -> int:
        """Number of unlocked achievements."""
        return sum(1 for a in self.achievements if a.unlocked)

    def completion_percentage(self) -> float:
        """Share of achievements unlocked, from 0 to 100."""
        if not self.achievements:
            return 0.0
        return self.unlocked_count() / len(self.achievements) * 100.0

    def has_new_achievement(self) -> bool:
        """Whether an achievement was unlocked since the last notification was cleared."""
        return self._notify

    def clear_notification(self) -> None:
        """Acknowledge the latest unlocked achievement."""
        self._notify = False