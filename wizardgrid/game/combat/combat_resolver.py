"""
Combat resolution system for applying spell and attack damage.

This module applies the formulas from BattleCalculator to a BattleWorkspace:
elemental spell strikes with their status effects and pushback, enemy attacks
(including the ogre stomp) and minion attacks. Enemies killed here are removed
from the roster and queued on ``workspace.defeated``; corpses and XP are
handled later by the loot phase.
"""
from typing import TYPE_CHECKING, Union

from ...core.data.data_structures import DIRECTION_VECTORS, Vector2, dominant_direction
from ...core.data.game_enums import (
    Element, SpellShape, TerrainEffectType, TileType, ELEMENT_NAMES,
)
from ...core.data.game_info import get_element_info
from ...core.data.game_rules import GameRules
from ...core.events.events import UnitDamaged, UnitDefeated
from ..entities.map_objects import StatusEffect, TerrainEffect
from ..entities.unit import Enemy, Minion, Player, PLAYER_ID
from .battle_calculator import BattleCalculator

if TYPE_CHECKING:
    from ...core.engine.game_state import BattleWorkspace


class CombatResult:
    """Outcome of a single elemental cast."""

    def __init__(self):
        self.targets_hit: list[str] = []
        self.defeated_targets: list[str] = []
        self.damage_dealt: dict[str, int] = {}
        self.pushed: dict[str, Vector2] = {}
        self.ignited: set[Vector2] = set()


class CombatResolver:
    """Applies damage, statuses and pushback to a turn's workspace."""

    def __init__(self, rules: GameRules):
        self.rules = rules

    # ============== Player spells ==============

    def resolve_elemental_spell(
        self,
        workspace: "BattleWorkspace",
        element: Element,
        shape: SpellShape,
        affected_tiles: set[Vector2],
    ) -> CombatResult:
        """Strike every enemy standing on an affected tile.

        Damage is applied to all struck enemies first, then statuses, then
        deaths are collected, then air pushback moves the survivors.
        """
        result = CombatResult()
        caster_position = workspace.player.position
        caster_tile = workspace.game_map.get_tile(caster_position)
        spell_power = workspace.player.spell_power
        element_name = ELEMENT_NAMES[element]

        struck_ids: list[str] = []
        for index, enemy in enumerate(workspace.enemies):
            if enemy.position not in affected_tiles:
                continue
            target_tile = workspace.game_map.get_tile(enemy.position)
            damage = BattleCalculator.calculate_spell_damage(
                element, spell_power, caster_tile, target_tile, enemy, self.rules
            )
            enemy = enemy.damaged(damage)
            enemy = self._apply_spell_status(enemy, element)
            workspace.enemies[index] = enemy

            struck_ids.append(enemy.id)
            result.targets_hit.append(enemy.id)
            result.damage_dealt[enemy.id] = damage
            workspace.emit(UnitDamaged(workspace.turn, enemy.id, damage, "Spell"))
            workspace.log(f"{element_name} strikes {enemy.name} for {damage} damage",
                          source="CombatResolver")

        for enemy in [e for e in workspace.enemies if e.id in struck_ids and e.health <= 0]:
            self.defeat_enemy(workspace, enemy, "CombatResolver")
            result.defeated_targets.append(enemy.id)

        if get_element_info(element).pushback:
            result.pushed = self._apply_pushback(workspace, caster_position, struck_ids)

        if element == Element.FIRE and shape == SpellShape.WALL:
            result.ignited = self._ignite_tiles(workspace, affected_tiles)

        return result

    def _apply_spell_status(self, enemy: Enemy, element: Element) -> Enemy:
        """Refresh (never stack) the element's status effect, if it has one."""
        effect_type = get_element_info(element).status_effect
        if effect_type is None:
            return enemy
        return enemy.with_refreshed_status(
            StatusEffect(effect_type, self.rules.status_duration(effect_type))
        )

    def _apply_pushback(
        self, workspace: "BattleWorkspace", caster_position: Vector2, struck_ids: list[str]
    ) -> dict[str, Vector2]:
        """Push each surviving struck enemy one tile directly away from the caster."""
        pushed: dict[str, Vector2] = {}
        occupied = workspace.occupied_positions()

        for index, enemy in enumerate(workspace.enemies):
            if enemy.id not in struck_ids:
                continue
            direction = dominant_direction(caster_position, enemy.position)
            if direction is None:
                continue
            destination = enemy.position + DIRECTION_VECTORS[direction]
            if not workspace.game_map.is_tile(destination, TileType.EMPTY):
                continue
            if destination in occupied:
                continue

            occupied.discard(enemy.position)
            occupied.add(destination)
            workspace.enemies[index] = enemy.moved_to(destination)
            pushed[enemy.id] = destination
            workspace.log(f"{enemy.name} is pushed back to {destination.to_xy()}",
                          category="movement", source="CombatResolver")
        return pushed

    def _ignite_tiles(self, workspace: "BattleWorkspace", affected_tiles: set[Vector2]) -> set[Vector2]:
        """Set burning terrain on every affected tile that can burn."""
        ignited: set[Vector2] = set()
        for position in sorted(affected_tiles, key=lambda p: (p.y, p.x)):
            if workspace.game_map.get_tile(position) in (TileType.OBSTACLE, TileType.WATER):
                continue
            workspace.game_map.set_terrain_effect(
                position,
                TerrainEffect(TerrainEffectType.BURNING, self.rules.burning_terrain_duration),
            )
            ignited.add(position)
        if ignited:
            workspace.log(f"The ground catches fire on {len(ignited)} tiles",
                          category="status", source="CombatResolver")
        return ignited

    # ============== Enemy and minion attacks ==============

    def resolve_enemy_attack(
        self, workspace: "BattleWorkspace", attacker: Enemy, target: Union[Player, Minion]
    ) -> int:
        """Single-target attack against the player or a minion."""
        target_tile = workspace.game_map.get_tile(target.position)
        nearby = BattleCalculator.count_nearby_goblins(
            attacker, workspace.enemies, self.rules.goblin_swarm_radius
        )
        damage = BattleCalculator.calculate_enemy_attack_damage(
            attacker, target_tile, nearby, self.rules
        )
        self._damage_friendly(workspace, target, damage, "Attack", attacker)
        return damage

    def resolve_ogre_stomp(self, workspace: "BattleWorkspace", attacker: Enemy) -> list[str]:
        """Damage every friendly unit in the attacker's 3x3 neighbourhood."""
        damage = self.rules.ogre_stomp_damage
        hit: list[str] = []
        targets: list[Union[Player, Minion]] = [workspace.player, *workspace.minions]
        for target in targets:
            if attacker.position.chebyshev_distance_to(target.position) <= 1:
                self._damage_friendly(workspace, target, damage, "Stomp", attacker)
                hit.append(target.id)
        return hit

    def _damage_friendly(
        self,
        workspace: "BattleWorkspace",
        target: Union[Player, Minion],
        damage: int,
        source: str,
        attacker: Enemy,
    ) -> None:
        workspace.emit(UnitDamaged(workspace.turn, target.id, damage, source))
        verb = "stomps" if source == "Stomp" else "hits"

        if isinstance(target, Player):
            workspace.player = workspace.player.damaged(damage)
            workspace.log(f"{attacker.name} {verb} you for {damage} damage",
                          source="CombatResolver")
            return

        for index, minion in enumerate(workspace.minions):
            if minion.id != target.id:
                continue
            minion = minion.damaged(damage)
            workspace.log(f"{attacker.name} {verb} {minion.name} for {damage} damage",
                          source="CombatResolver")
            if minion.health <= 0:
                # Minions leave no corpse
                del workspace.minions[index]
                workspace.emit(UnitDefeated(workspace.turn, minion.id, minion.position))
                workspace.log(f"{minion.name} is destroyed", source="CombatResolver")
            else:
                workspace.minions[index] = minion
            return

    def resolve_minion_attack(self, workspace: "BattleWorkspace", minion: Minion, target: Enemy) -> int:
        """Melee attack from a minion against an adjacent enemy."""
        damage = self.rules.minion_attack_damage
        for index, enemy in enumerate(workspace.enemies):
            if enemy.id != target.id:
                continue
            enemy = enemy.damaged(damage)
            workspace.emit(UnitDamaged(workspace.turn, enemy.id, damage, "Attack"))
            workspace.log(f"{minion.name} hits {enemy.name} for {damage} damage",
                          source="CombatResolver")
            workspace.enemies[index] = enemy
            if enemy.health <= 0:
                self.defeat_enemy(workspace, enemy, "CombatResolver")
            break
        return damage

    # ============== Deaths ==============

    @staticmethod
    def defeat_enemy(workspace: "BattleWorkspace", enemy: Enemy, source: str) -> None:
        """Remove an enemy from the roster and queue it for the loot phase."""
        workspace.enemies = [e for e in workspace.enemies if e.id != enemy.id]
        workspace.defeated.append(enemy)
        workspace.emit(UnitDefeated(workspace.turn, enemy.id, enemy.position))
        workspace.log(f"{enemy.name} is defeated", source=source)

    @staticmethod
    def damage_player(workspace: "BattleWorkspace", damage: int, source: str) -> None:
        """Apply non-attack damage (terrain) to the player."""
        workspace.player = workspace.player.damaged(damage)
        workspace.emit(UnitDamaged(workspace.turn, PLAYER_ID, damage, source))
