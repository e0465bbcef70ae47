"""Unit factories.

Builds players, enemies and minions from the static tables in game_info and
the tunable GameRules, so callers never have to spell out base stats.
"""

from typing import Optional

from ...core.data.data_structures import Vector2
from ...core.data.game_enums import EnemyType, Element
from ...core.data.game_info import get_enemy_type_info
from ...core.data.game_rules import GameRules
from .unit import Enemy, Minion, Player


def create_player(position: Vector2, rules: GameRules) -> Player:
    """Create a level-1 player at full health and mana."""
    return Player(
        position=position,
        health=rules.player_max_health,
        max_health=rules.player_max_health,
        mana=rules.player_max_mana,
        max_mana=rules.player_max_mana,
        xp_to_next_level=rules.xp_base,
    )


def create_enemy(
    enemy_id: str,
    enemy_type: EnemyType,
    position: Vector2,
    weakness: Optional[Element] = None,
    resistance: Optional[Element] = None,
    health: Optional[int] = None,
) -> Enemy:
    """Create an enemy with its type's base stats.

    Args:
        enemy_id: Stable id for the enemy (inherited by its corpse)
        enemy_type: Kind of enemy
        position: Spawn position
        weakness: Element dealing x1.5 damage
        resistance: Element dealing x0.5 damage
        health: Override for the type's base health

    Raises:
        ValueError: If both weakness and resistance are given
    """
    info = get_enemy_type_info(enemy_type)
    return Enemy(
        id=enemy_id,
        enemy_type=enemy_type,
        position=position,
        health=info.health if health is None else health,
        attack_range=info.attack_range,
        xp_value=info.xp_value,
        weakness=weakness,
        resistance=resistance,
    )


def create_minion(
    minion_id: str,
    position: Vector2,
    rules: GameRules,
    undead_type: Optional[EnemyType] = None,
) -> Minion:
    """Create a minion; raised minions carry the corpse's enemy type."""
    return Minion(
        id=minion_id,
        position=position,
        health=rules.minion_health,
        undead_type=undead_type,
    )
