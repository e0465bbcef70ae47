"""Standardized Info classes for game entities.

This module provides a consistent pattern for storing static information
about elements, spell shapes, enemies and items with common interfaces.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from .game_enums import (
    Element, SpellShape, EnemyType, ItemType, StatusEffectType,
    ELEMENT_NAMES, SPELL_SHAPE_NAMES, ENEMY_TYPE_NAMES, ITEM_TYPE_NAMES,
)


@dataclass
class BaseInfo(ABC):
    """Base class for all game entity info classes."""
    name: str
    symbol: str

    @abstractmethod
    def get_gameplay_properties(self) -> Dict[str, Any]:
        """Get properties used for game mechanics."""
        pass


@dataclass
class ElementInfo(BaseInfo):
    """Static information about a spell element."""
    base_damage: int
    status_effect: Optional[StatusEffectType] = None
    pushback: bool = False

    def get_gameplay_properties(self) -> Dict[str, Any]:
        return {
            "base_damage": self.base_damage,
            "status_effect": self.status_effect,
            "pushback": self.pushback,
        }


@dataclass
class SpellShapeInfo(BaseInfo):
    """Static information about a spell shape."""
    mana_cost: int
    deals_damage: bool = False

    def get_gameplay_properties(self) -> Dict[str, Any]:
        return {
            "mana_cost": self.mana_cost,
            "deals_damage": self.deals_damage,
        }


@dataclass
class EnemyTypeInfo(BaseInfo):
    """Static information about an enemy type."""
    health: int
    attack_range: int
    attack_damage: int
    xp_value: int

    def get_gameplay_properties(self) -> Dict[str, Any]:
        return {
            "health": self.health,
            "attack_range": self.attack_range,
            "attack_damage": self.attack_damage,
            "xp_value": self.xp_value,
        }


@dataclass
class ItemInfo(BaseInfo):
    """Static information about a consumable item."""
    restores_health: int = 0
    restores_mana: int = 0

    def get_gameplay_properties(self) -> Dict[str, Any]:
        return {
            "restores_health": self.restores_health,
            "restores_mana": self.restores_mana,
        }


# Centralized data for all elements (fire > water > earth > air)
ELEMENT_DATA: Dict[Element, ElementInfo] = {
    Element.FIRE: ElementInfo(
        ELEMENT_NAMES[Element.FIRE], "F", 30, StatusEffectType.BURN
    ),
    Element.WATER: ElementInfo(
        ELEMENT_NAMES[Element.WATER], "W", 25, StatusEffectType.FROZEN
    ),
    Element.EARTH: ElementInfo(
        ELEMENT_NAMES[Element.EARTH], "E", 20
    ),
    Element.AIR: ElementInfo(
        ELEMENT_NAMES[Element.AIR], "A", 15, pushback=True
    ),
}

# Centralized data for all spell shapes
SPELL_SHAPE_DATA: Dict[SpellShape, SpellShapeInfo] = {
    SpellShape.BALL: SpellShapeInfo(SPELL_SHAPE_NAMES[SpellShape.BALL], "o", 10, True),
    SpellShape.CONE: SpellShapeInfo(SPELL_SHAPE_NAMES[SpellShape.CONE], "v", 15, True),
    SpellShape.WALL: SpellShapeInfo(SPELL_SHAPE_NAMES[SpellShape.WALL], "#", 20, True),
    SpellShape.SELF: SpellShapeInfo(SPELL_SHAPE_NAMES[SpellShape.SELF], "@", 15),
    SpellShape.SUMMON: SpellShapeInfo(SPELL_SHAPE_NAMES[SpellShape.SUMMON], "m", 25),
    SpellShape.RAISE_DEAD: SpellShapeInfo(SPELL_SHAPE_NAMES[SpellShape.RAISE_DEAD], "u", 30),
}

# Centralized data for all enemy types (goblin < ogre in attack damage)
ENEMY_TYPE_DATA: Dict[EnemyType, EnemyTypeInfo] = {
    EnemyType.GOBLIN: EnemyTypeInfo(
        ENEMY_TYPE_NAMES[EnemyType.GOBLIN], "g", 50, 1, 10, 25
    ),
    EnemyType.ARCHER: EnemyTypeInfo(
        ENEMY_TYPE_NAMES[EnemyType.ARCHER], "a", 35, 4, 8, 30
    ),
    EnemyType.OGRE: EnemyTypeInfo(
        ENEMY_TYPE_NAMES[EnemyType.OGRE], "O", 100, 1, 20, 60
    ),
}

# Centralized data for all item types
ITEM_DATA: Dict[ItemType, ItemInfo] = {
    ItemType.HEALTH_POTION: ItemInfo(
        ITEM_TYPE_NAMES[ItemType.HEALTH_POTION], "+", restores_health=30
    ),
    ItemType.MANA_POTION: ItemInfo(
        ITEM_TYPE_NAMES[ItemType.MANA_POTION], "*", restores_mana=30
    ),
}

# Level at which each element or shape joins the unlocked sets
LEVEL_UNLOCKS: Dict[int, Union[Element, SpellShape]] = {
    2: Element.WATER,
    3: SpellShape.CONE,
    4: Element.EARTH,
    5: SpellShape.WALL,
    6: Element.AIR,
    7: SpellShape.SELF,
    8: SpellShape.SUMMON,
    9: SpellShape.RAISE_DEAD,
}


def get_element_info(element: Element) -> ElementInfo:
    """Get info for an element."""
    return ELEMENT_DATA[element]


def get_spell_shape_info(shape: SpellShape) -> SpellShapeInfo:
    """Get info for a spell shape."""
    return SPELL_SHAPE_DATA[shape]


def get_enemy_type_info(enemy_type: EnemyType) -> EnemyTypeInfo:
    """Get info for an enemy type."""
    return ENEMY_TYPE_DATA[enemy_type]


def get_item_info(item_type: ItemType) -> ItemInfo:
    """Get info for an item type."""
    return ITEM_DATA[item_type]
