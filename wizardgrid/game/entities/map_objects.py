"""Map objects: items, corpses and time-limited effects.

These are small immutable records. Items and corpses are keyed by position on
the GameMap overlays (or, for items, held in the player's inventory); effects
are either bound to a coordinate (terrain) or to an enemy (status).
"""

from dataclasses import dataclass, replace

from ...core.data.data_structures import Vector2
from ...core.data.game_enums import (
    EnemyType, ItemType, StatusEffectType, TerrainEffectType,
    ITEM_TYPE_NAMES, STATUS_EFFECT_NAMES,
)


@dataclass(frozen=True)
class Item:
    """A consumable potion."""
    id: str
    item_type: ItemType

    @property
    def name(self) -> str:
        return ITEM_TYPE_NAMES[self.item_type]


@dataclass(frozen=True)
class Corpse:
    """Marker left by a defeated enemy; inherits the enemy's id."""
    id: str
    position: Vector2
    enemy_type: EnemyType


@dataclass(frozen=True)
class StatusEffect:
    """Time-limited effect attached to an enemy."""
    effect_type: StatusEffectType
    duration: int

    @property
    def name(self) -> str:
        return STATUS_EFFECT_NAMES[self.effect_type]

    def ticked(self) -> "StatusEffect":
        """Copy with one turn less remaining."""
        return replace(self, duration=self.duration - 1)

    @property
    def expired(self) -> bool:
        return self.duration <= 0


@dataclass(frozen=True)
class TerrainEffect:
    """Time-limited effect bound to a grid coordinate."""
    effect_type: TerrainEffectType
    duration: int

    def ticked(self) -> "TerrainEffect":
        """Copy with one turn less remaining."""
        return replace(self, duration=self.duration - 1)

    @property
    def expired(self) -> bool:
        return self.duration <= 0
