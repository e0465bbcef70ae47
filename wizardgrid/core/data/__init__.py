"""Core data structures and definitions.

This package contains fundamental data types and game definitions:
- data_structures.py: Vector2 and direction helpers for grid coordinates
- game_enums.py: Centralized enums for tiles, elements, shapes, enemies, items
- game_info.py: Static game data and lookup tables
- game_rules.py: Tunable scalar constants for turn resolution
"""

from .data_structures import Vector2, DIRECTION_VECTORS, dominant_direction, step_toward
from .game_enums import (
    TileType, GameStatus, Direction, Element, SpellShape, EnemyType, ItemType,
    StatusEffectType, TerrainEffectType, ELEMENT_NAMES,
    SPELL_SHAPE_NAMES, ENEMY_TYPE_NAMES, ITEM_TYPE_NAMES, STATUS_EFFECT_NAMES,
)
from .game_info import (
    BaseInfo, ElementInfo, SpellShapeInfo, EnemyTypeInfo, ItemInfo,
    ELEMENT_DATA, SPELL_SHAPE_DATA, ENEMY_TYPE_DATA, ITEM_DATA, LEVEL_UNLOCKS,
)
from .game_rules import GameRules

__all__ = [
    "Vector2",
    "DIRECTION_VECTORS",
    "dominant_direction",
    "step_toward",
    "TileType",
    "GameStatus",
    "Direction",
    "Element",
    "SpellShape",
    "EnemyType",
    "ItemType",
    "StatusEffectType",
    "TerrainEffectType",
    "ELEMENT_NAMES",
    "SPELL_SHAPE_NAMES",
    "ENEMY_TYPE_NAMES",
    "ITEM_TYPE_NAMES",
    "STATUS_EFFECT_NAMES",
    "BaseInfo",
    "ElementInfo",
    "SpellShapeInfo",
    "EnemyTypeInfo",
    "ItemInfo",
    "ELEMENT_DATA",
    "SPELL_SHAPE_DATA",
    "ENEMY_TYPE_DATA",
    "ITEM_DATA",
    "LEVEL_UNLOCKS",
    "GameRules",
]
