"""
Hazard Manager - terrain and status-effect phases of the turn pipeline.

Burning terrain damages whoever stands on it; burn statuses damage the enemy
carrying them. Both tick down once per turn and expire at zero. Minions are
not subject to either.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...core.data.game_enums import StatusEffectType, TerrainEffectType
from ...core.data.game_rules import GameRules
from ...core.events.events import UnitDamaged
from ..combat.combat_resolver import CombatResolver

if TYPE_CHECKING:
    from ...core.engine.game_state import BattleWorkspace


class HazardManager:
    """
    Runs the terrain and status phases.

    Enemy deaths are collected after each phase has applied all of its damage,
    never in the middle of it.
    """

    def __init__(self, rules: GameRules):
        self.rules = rules

    def process_terrain_phase(self, workspace: "BattleWorkspace") -> None:
        """Apply burning terrain damage, then tick every terrain effect."""
        game_map = workspace.game_map
        damage = self.rules.burning_terrain_damage

        for position, effect in list(game_map.terrain_effects.items()):
            if effect.effect_type == TerrainEffectType.BURNING:
                if workspace.player.position == position:
                    CombatResolver.damage_player(workspace, damage, "Terrain")
                    workspace.log(f"You burn for {damage} damage", category="status",
                                  source="HazardManager")
                for index, enemy in enumerate(workspace.enemies):
                    if enemy.position == position:
                        workspace.enemies[index] = enemy.damaged(damage)
                        workspace.emit(UnitDamaged(workspace.turn, enemy.id, damage, "Terrain"))
                        workspace.log(f"{enemy.name} burns for {damage} damage",
                                      category="status", source="HazardManager")

            ticked = effect.ticked()
            if ticked.expired:
                game_map.remove_terrain_effect(position)
            else:
                game_map.set_terrain_effect(position, ticked)

        self._collect_defeated(workspace)

    def process_status_phase(self, workspace: "BattleWorkspace") -> None:
        """Apply status damage to each enemy and tick its effects."""
        for index, enemy in enumerate(workspace.enemies):
            if not enemy.status_effects:
                continue

            damage = sum(
                self.rules.burn_damage
                for effect in enemy.status_effects
                if effect.effect_type == StatusEffectType.BURN
            )
            remaining = tuple(
                ticked for ticked in (effect.ticked() for effect in enemy.status_effects)
                if not ticked.expired
            )
            for effect in enemy.status_effects:
                if effect.duration <= 1:
                    workspace.log(f"{effect.name} wears off {enemy.name}", category="status",
                                  level="debug", source="HazardManager")

            enemy = enemy.with_status_effects(remaining)
            if damage:
                enemy = enemy.damaged(damage)
                workspace.emit(UnitDamaged(workspace.turn, enemy.id, damage, "StatusEffect"))
                workspace.log(f"{enemy.name} takes {damage} burn damage", category="status",
                              source="HazardManager")
            workspace.enemies[index] = enemy

        self._collect_defeated(workspace)

    @staticmethod
    def _collect_defeated(workspace: "BattleWorkspace") -> None:
        for enemy in [e for e in workspace.enemies if e.health <= 0]:
            CombatResolver.defeat_enemy(workspace, enemy, "HazardManager")
