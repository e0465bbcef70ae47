"""Battle state: an immutable snapshot and the mutable workspace a turn runs on.

:class:`GameState` is what callers observe. It never changes after it has
been committed; its map is frozen and its rosters are tuples.

:class:`BattleWorkspace` is the single mutable copy that one action's
resolution operates on. Every phase reads and writes the workspace, events
are buffered on it, and :meth:`BattleWorkspace.commit` turns it into the next
snapshot in one step so intermediate phase states are never exposed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from ..data.game_enums import GameStatus
from ..events.events import GameEvent, LogMessage, DebugMessage

if TYPE_CHECKING:
    from ..data.data_structures import Vector2
    from ...game.map import GameMap
    from ...game.entities.unit import Player, Enemy, Minion


@dataclass(frozen=True)
class GameState:
    """Immutable battle snapshot."""

    game_map: GameMap
    player: Player
    enemies: tuple[Enemy, ...]
    minions: tuple[Minion, ...]
    game_status: GameStatus = GameStatus.PLAYING
    wave: int = 1
    turn: int = 0
    id_counter: int = 0

    @property
    def is_playing(self) -> bool:
        return self.game_status == GameStatus.PLAYING

    def enemy_at(self, position: Vector2) -> Optional[Enemy]:
        for enemy in self.enemies:
            if enemy.position == position:
                return enemy
        return None

    def minion_at(self, position: Vector2) -> Optional[Minion]:
        for minion in self.minions:
            if minion.position == position:
                return minion
        return None

    def is_occupied(self, position: Vector2) -> bool:
        """True if the player, an enemy or a minion stands on ``position``."""
        return (
            self.player.position == position
            or self.enemy_at(position) is not None
            or self.minion_at(position) is not None
        )


class BattleWorkspace:
    """Mutable working copy of a GameState for one action's resolution."""

    def __init__(self, state: GameState):
        self.game_map: GameMap = state.game_map.copy()
        self.player: Player = state.player
        self.enemies: list[Enemy] = list(state.enemies)
        self.minions: list[Minion] = list(state.minions)
        self.game_status = state.game_status
        self.wave = state.wave
        self.turn = state.turn
        self.id_counter = state.id_counter

        # Enemies killed anywhere in this turn, in order of death
        self.defeated: list[Enemy] = []

        self.events: list[GameEvent] = []

    def next_id(self, prefix: str) -> str:
        """Generate a new stable id such as ``minion_3``."""
        self.id_counter += 1
        return f"{prefix}_{self.id_counter}"

    def occupied_positions(self) -> set[Vector2]:
        """Positions currently held by the player, enemies and minions."""
        occupied = {self.player.position}
        occupied.update(enemy.position for enemy in self.enemies)
        occupied.update(minion.position for minion in self.minions)
        return occupied

    def enemy_index_at(self, position: Vector2) -> Optional[int]:
        for index, enemy in enumerate(self.enemies):
            if enemy.position == position:
                return index
        return None

    def is_occupied(self, position: Vector2) -> bool:
        return position in self.occupied_positions()

    # ============== Events ==============

    def emit(self, event: GameEvent) -> None:
        self.events.append(event)

    def log(self, message: str, category: str = "battle", level: str = "info",
            source: str = "Battle") -> None:
        """Buffer a log line for publication after commit."""
        self.events.append(LogMessage(self.turn, message, category, level, source))

    def debug(self, message: str, source: str, context: Optional[dict] = None) -> None:
        self.events.append(DebugMessage(self.turn, message, source, context))

    # ============== Commit ==============

    def commit(self) -> GameState:
        """Freeze the workspace into the next snapshot."""
        return GameState(
            game_map=self.game_map.freeze(),
            player=self.player,
            enemies=tuple(self.enemies),
            minions=tuple(self.minions),
            game_status=self.game_status,
            wave=self.wave,
            turn=self.turn,
            id_counter=self.id_counter,
        )
