"""
Battle calculation system for damage values.

This module holds the numeric combat formulas, separate from combat
resolution, so the same numbers can be used to apply damage and to preview it.
"""
import math
from typing import Iterable

from ...core.data.game_enums import Element, EnemyType, TileType
from ...core.data.game_info import get_element_info, get_enemy_type_info
from ...core.data.game_rules import GameRules
from ..entities.unit import Enemy


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


class BattleCalculator:
    """Calculates spell and attack damage."""

    @staticmethod
    def spell_damage_multiplier(
        element: Element,
        caster_tile: TileType,
        target_tile: TileType,
        target: Enemy,
        rules: GameRules,
    ) -> float:
        """Product of every modifier that applies, in fixed order.

        Order: caster on water casting water, fire at a target on water,
        weakness, resistance.
        """
        multiplier = 1.0
        if caster_tile == TileType.WATER and element == Element.WATER:
            multiplier *= rules.water_caster_bonus
        if target_tile == TileType.WATER and element == Element.FIRE:
            multiplier *= rules.fire_on_water_penalty
        if target.weakness == element:
            multiplier *= rules.weakness_multiplier
        if target.resistance == element:
            multiplier *= rules.resistance_multiplier
        return multiplier

    @staticmethod
    def calculate_spell_damage(
        element: Element,
        spell_power: int,
        caster_tile: TileType,
        target_tile: TileType,
        target: Enemy,
        rules: GameRules,
    ) -> int:
        """Final elemental damage against one enemy.

        ``round_half_up((base + spell_power) * multiplier)``.
        """
        base = get_element_info(element).base_damage
        multiplier = BattleCalculator.spell_damage_multiplier(
            element, caster_tile, target_tile, target, rules
        )
        return round_half_up((base + spell_power) * multiplier)

    @staticmethod
    def count_nearby_goblins(attacker: Enemy, enemies: Iterable[Enemy], radius: int) -> int:
        """Other goblins within Manhattan ``radius`` of the attacker."""
        return sum(
            1
            for other in enemies
            if other.id != attacker.id
            and other.enemy_type == EnemyType.GOBLIN
            and attacker.position.manhattan_distance_to(other.position) <= radius
        )

    @staticmethod
    def calculate_enemy_attack_damage(
        attacker: Enemy,
        target_tile: TileType,
        nearby_goblins: int,
        rules: GameRules,
    ) -> int:
        """Single-target attack damage.

        Archers deal reduced damage into forest; goblins gain a swarm bonus
        per other goblin nearby.
        """
        damage: float = get_enemy_type_info(attacker.enemy_type).attack_damage
        if attacker.enemy_type == EnemyType.ARCHER and target_tile == TileType.FOREST:
            damage *= rules.archer_forest_multiplier
        if attacker.enemy_type == EnemyType.GOBLIN:
            damage += rules.goblin_swarm_bonus * nearby_goblins
        return round_half_up(damage)
