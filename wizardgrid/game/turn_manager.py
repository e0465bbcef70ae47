"""
Turn management system for the fixed-order resolution pipeline.

After a turn-consuming player action, one turn is resolved on the workspace in
this order: terrain, status effects, minions, enemies, loot and XP, cleanup.
The wave check runs separately, after the result has been committed.
"""
from typing import TYPE_CHECKING, Union

import numpy as np

from ..core.data.data_structures import Vector2
from ..core.data.game_enums import GameStatus
from ..core.data.game_rules import GameRules
from ..core.events.events import GameEnded
from .ai.ai_behaviors import AIDecision, EnemyAI, MinionAI
from .combat.combat_resolver import CombatResolver
from .entities.unit import Minion, Player
from .managers.hazard_manager import HazardManager
from .managers.loot_manager import LootManager
from .managers.progression_manager import ProgressionManager

if TYPE_CHECKING:
    from ..core.engine.game_state import BattleWorkspace


class TurnManager:
    """Runs the resolution pipeline for one turn."""

    def __init__(self, rules: GameRules):
        self.rules = rules
        self.combat_resolver = CombatResolver(rules)
        self.hazard_manager = HazardManager(rules)
        self.progression_manager = ProgressionManager(rules)
        self.loot_manager = LootManager(rules, self.progression_manager)
        self.minion_ai = MinionAI()
        self.enemy_ai = EnemyAI()

    def resolve_turn(self, workspace: "BattleWorkspace", rng: np.random.Generator,
                     focused: bool = False) -> None:
        """Run every phase of one turn on ``workspace``.

        Args:
            workspace: The turn's mutable working copy
            rng: Source of all randomness in the turn
            focused: Whether the turn came from focus/wait
        """
        self.hazard_manager.process_terrain_phase(workspace)
        self.hazard_manager.process_status_phase(workspace)
        if workspace.enemies:
            self.process_minion_phase(workspace)
        self.process_enemy_phase(workspace)
        self.loot_manager.process_loot_phase(workspace, rng)
        self.process_cleanup_phase(workspace, focused)

    @staticmethod
    def _phase_occupancy(workspace: "BattleWorkspace") -> set[Vector2]:
        """Positions that cannot be entered during a movement phase.

        Includes tiles of enemies defeated earlier in the turn, whose corpses
        are placed in the loot phase.
        """
        occupied = workspace.occupied_positions()
        occupied.update(enemy.position for enemy in workspace.defeated)
        return occupied

    def process_minion_phase(self, workspace: "BattleWorkspace") -> None:
        """Each minion, in roster order, attacks an adjacent enemy or steps toward the nearest."""
        occupied = self._phase_occupancy(workspace)

        for index, minion in enumerate(workspace.minions):
            decision = self.minion_ai.choose_action(minion, workspace, occupied)
            workspace.log(f"{minion.name}: {decision.reasoning}", category="ai",
                          level="debug", source="MinionAI")

            if decision.action_name == AIDecision.ATTACK:
                self.combat_resolver.resolve_minion_attack(workspace, minion, decision.target)
            elif decision.action_name == AIDecision.MOVE:
                occupied.discard(minion.position)
                occupied.add(decision.target)
                workspace.minions[index] = minion.moved_to(decision.target)

    def process_enemy_phase(self, workspace: "BattleWorkspace") -> None:
        """Each enemy, in roster order, attacks its target if in range or steps toward it."""
        occupied = self._phase_occupancy(workspace)

        for index, enemy in enumerate(workspace.enemies):
            decision = self.enemy_ai.choose_action(enemy, workspace, occupied)
            workspace.log(f"{enemy.name}: {decision.reasoning}", category="ai",
                          level="debug", source="EnemyAI")

            if decision.action_name == AIDecision.STOMP:
                minions_before = {m.id: m.position for m in workspace.minions}
                self.combat_resolver.resolve_ogre_stomp(workspace, enemy)
                self._release_destroyed_minions(workspace, minions_before, occupied)
            elif decision.action_name == AIDecision.ATTACK:
                target: Union[Player, Minion] = decision.target
                minions_before = {m.id: m.position for m in workspace.minions}
                self.combat_resolver.resolve_enemy_attack(workspace, enemy, target)
                self._release_destroyed_minions(workspace, minions_before, occupied)
            elif decision.action_name == AIDecision.MOVE:
                occupied.discard(enemy.position)
                occupied.add(decision.target)
                workspace.enemies[index] = enemy.moved_to(decision.target)

    @staticmethod
    def _release_destroyed_minions(workspace: "BattleWorkspace", before: dict[str, Vector2],
                                   occupied: set[Vector2]) -> None:
        alive = {minion.id for minion in workspace.minions}
        for minion_id, position in before.items():
            if minion_id not in alive:
                occupied.discard(position)

    def process_cleanup_phase(self, workspace: "BattleWorkspace", focused: bool) -> None:
        """Game-over check, mana regeneration and dash cooldown."""
        player = workspace.player

        if player.health <= 0 and workspace.game_status == GameStatus.PLAYING:
            workspace.game_status = GameStatus.GAME_OVER
            workspace.emit(GameEnded(workspace.turn, GameStatus.GAME_OVER, "The wizard has fallen"))
            workspace.log("Game over! You have been defeated.", category="wave",
                          source="TurnManager")

        regen = self.rules.focus_mana_regen if focused else self.rules.mana_regen
        player = player.with_mana(player.mana + regen)

        if player.dash_cooldown > 0:
            player = player.with_dash_cooldown(player.dash_cooldown - 1)

        workspace.player = player
