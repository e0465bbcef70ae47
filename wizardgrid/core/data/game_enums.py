"""Centralized game enums and constants.

This module contains all core game enums that are used across multiple modules,
eliminating duplication and providing a single source of truth.
"""

from enum import Enum, auto


class TileType(Enum):
    """Static or semi-static classification of a grid tile.

    Values are stored directly in the map's uint8 tile matrix.
    """
    EMPTY = 0
    OBSTACLE = 1
    WATER = 2
    FOREST = 3
    CORPSE = 4
    ITEM = 5


class GameStatus(Enum):
    """Overall status of a battle."""
    PLAYING = auto()
    VICTORY = auto()
    GAME_OVER = auto()


class Direction(Enum):
    """Cardinal directions for movement, dashing and facing."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class Element(Enum):
    """Spell elements."""
    FIRE = "fire"
    WATER = "water"
    EARTH = "earth"
    AIR = "air"


class SpellShape(Enum):
    """Spell shapes (how a spell picks its tiles)."""
    BALL = "ball"
    CONE = "cone"
    WALL = "wall"
    SELF = "self"
    SUMMON = "summon"
    RAISE_DEAD = "raise_dead"


class EnemyType(Enum):
    """Kinds of enemies that can appear in a wave."""
    GOBLIN = "goblin"
    ARCHER = "archer"
    OGRE = "ogre"


class ItemType(Enum):
    """Consumable item types."""
    HEALTH_POTION = "health_potion"
    MANA_POTION = "mana_potion"


class StatusEffectType(Enum):
    """Time-limited effects attached to an enemy."""
    BURN = auto()
    FROZEN = auto()


class TerrainEffectType(Enum):
    """Time-limited effects bound to a grid coordinate."""
    BURNING = auto()


# Convenience mappings for log messages
ELEMENT_NAMES = {
    Element.FIRE: "Fire",
    Element.WATER: "Water",
    Element.EARTH: "Earth",
    Element.AIR: "Air",
}

SPELL_SHAPE_NAMES = {
    SpellShape.BALL: "Ball",
    SpellShape.CONE: "Cone",
    SpellShape.WALL: "Wall",
    SpellShape.SELF: "Self",
    SpellShape.SUMMON: "Summon",
    SpellShape.RAISE_DEAD: "Raise Dead",
}

ENEMY_TYPE_NAMES = {
    EnemyType.GOBLIN: "Goblin",
    EnemyType.ARCHER: "Archer",
    EnemyType.OGRE: "Ogre",
}

ITEM_TYPE_NAMES = {
    ItemType.HEALTH_POTION: "Health Potion",
    ItemType.MANA_POTION: "Mana Potion",
}

STATUS_EFFECT_NAMES = {
    StatusEffectType.BURN: "Burn",
    StatusEffectType.FROZEN: "Frozen",
}
