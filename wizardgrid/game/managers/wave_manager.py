"""
Wave Manager - battle setup and wave transitions.
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, Callable

from ...core.data.game_enums import GameStatus
from ...core.engine.game_state import BattleWorkspace, GameState
from ...core.events.events import GameEnded, WaveStarted
from ..entities.unit import Enemy
from ..entities.unit_templates import create_enemy, create_player
from ..map import GameMap

if TYPE_CHECKING:
    from ..scenarios.scenario import BattleScenario


class WaveManager:
    """Spawns wave rosters from a scenario and decides victory."""

    def __init__(self, scenario: "BattleScenario"):
        self.scenario = scenario

    def create_initial_state(self) -> GameState:
        """Fresh battle: static grid, default items, new player, wave 1."""
        counter = 0

        def next_id(prefix: str) -> str:
            nonlocal counter
            counter += 1
            return f"{prefix}_{counter}"

        game_map = self._build_wave_map(next_id)
        enemies = self._spawn_wave(1, next_id)
        player = create_player(self.scenario.player_start, self.scenario.rules)

        return GameState(
            game_map=game_map.freeze(),
            player=player,
            enemies=tuple(enemies),
            minions=(),
            game_status=GameStatus.PLAYING,
            wave=1,
            turn=0,
            id_counter=counter,
        )

    def check_wave_complete(self, workspace: BattleWorkspace) -> bool:
        """Advance to the next wave (or victory) once the roster is empty.

        Returns:
            True if the workspace changed
        """
        if workspace.enemies or workspace.game_status != GameStatus.PLAYING:
            return False

        next_wave = workspace.wave + 1
        if not self.scenario.has_wave(next_wave):
            workspace.game_status = GameStatus.VICTORY
            workspace.emit(GameEnded(workspace.turn, GameStatus.VICTORY,
                                     f"All {workspace.wave} waves cleared"))
            workspace.log("Victory! Every wave has been defeated.", category="wave",
                          source="WaveManager")
            return True

        self.start_wave(workspace, next_wave)
        return True

    def start_wave(self, workspace: BattleWorkspace, wave: int) -> None:
        """Reset the grid, minions and player position, then spawn ``wave``."""
        workspace.game_map = self._build_wave_map(workspace.next_id)
        workspace.minions = []
        workspace.enemies = self._spawn_wave(wave, workspace.next_id)
        workspace.player = replace(workspace.player, position=self.scenario.player_start)
        workspace.wave = wave

        workspace.emit(WaveStarted(workspace.turn, wave, len(workspace.enemies)))
        workspace.log(f"Wave {wave} begins: {len(workspace.enemies)} enemies approach",
                      category="wave", source="WaveManager")

    def _build_wave_map(self, next_id: Callable[[str], str]) -> GameMap:
        game_map = self.scenario.build_terrain()
        item_ids = [next_id("item") for _ in self.scenario.items]
        self.scenario.place_default_items(game_map, item_ids)
        return game_map

    def _spawn_wave(self, wave: int, next_id: Callable[[str], str]) -> list[Enemy]:
        return [
            create_enemy(
                next_id("enemy"),
                spawn.enemy_type,
                spawn.position,
                weakness=spawn.weakness,
                resistance=spawn.resistance,
                health=spawn.health,
            )
            for spawn in self.scenario.get_wave(wave)
        ]
