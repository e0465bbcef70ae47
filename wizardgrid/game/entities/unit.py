"""Combat units: the player, enemies and minions.

All three are frozen records. Turn resolution never mutates a unit in place;
it asks the unit for an updated copy through the methods below. Enemy and
minion update methods only touch variable fields (position, health, status
effects), so the id and enemy type of a unit are fixed for its lifetime.
"""

from dataclasses import dataclass, field, replace
from typing import Optional

from ...core.data.data_structures import Vector2
from ...core.data.game_enums import (
    Direction, Element, SpellShape, EnemyType, StatusEffectType, ENEMY_TYPE_NAMES,
)
from .map_objects import Item, StatusEffect


PLAYER_ID = "player"


@dataclass(frozen=True)
class Player:
    """The wizard controlled by the caller.

    Health may go negative transiently while a turn resolves; game over is
    decided once in cleanup.
    """
    position: Vector2
    health: int
    max_health: int
    mana: int
    max_mana: int
    inventory: tuple[Item, ...] = ()
    dash_cooldown: int = 0
    level: int = 1
    xp: int = 0
    xp_to_next_level: int = 100
    unlocked_elements: frozenset[Element] = frozenset({Element.FIRE})
    unlocked_spell_shapes: frozenset[SpellShape] = frozenset({SpellShape.BALL})
    spell_power: int = 0
    facing: Direction = Direction.UP
    selected_element: Element = Element.FIRE
    selected_shape: SpellShape = SpellShape.BALL

    @property
    def id(self) -> str:
        return PLAYER_ID

    @property
    def name(self) -> str:
        return "Wizard"

    def moved_to(self, position: Vector2) -> "Player":
        return replace(self, position=position)

    def damaged(self, amount: int) -> "Player":
        """Copy with health reduced (not clamped)."""
        return replace(self, health=self.health - amount)

    def healed(self, amount: int) -> "Player":
        """Copy with health raised, clamped to max health."""
        return replace(self, health=min(self.max_health, self.health + amount))

    def with_mana(self, mana: int) -> "Player":
        """Copy with mana set, clamped to [0, max_mana]."""
        return replace(self, mana=max(0, min(self.max_mana, mana)))

    def with_dash_cooldown(self, turns: int) -> "Player":
        return replace(self, dash_cooldown=turns)

    def find_item(self, item_id: str) -> Optional[Item]:
        for item in self.inventory:
            if item.id == item_id:
                return item
        return None

    def with_item(self, item: Item) -> "Player":
        return replace(self, inventory=self.inventory + (item,))

    def without_item(self, item_id: str) -> "Player":
        return replace(
            self, inventory=tuple(item for item in self.inventory if item.id != item_id)
        )


@dataclass(frozen=True)
class Enemy:
    """A hostile unit.

    Raises:
        ValueError: If both weakness and resistance are set
    """
    id: str
    enemy_type: EnemyType
    position: Vector2
    health: int
    attack_range: int
    xp_value: int
    weakness: Optional[Element] = None
    resistance: Optional[Element] = None
    status_effects: tuple[StatusEffect, ...] = field(default=())

    def __post_init__(self):
        if self.weakness is not None and self.resistance is not None:
            raise ValueError(
                f"Enemy {self.id} cannot have both a weakness ({self.weakness.value}) "
                f"and a resistance ({self.resistance.value})"
            )

    @property
    def name(self) -> str:
        return f"{ENEMY_TYPE_NAMES[self.enemy_type]} {self.id}"

    @property
    def is_alive(self) -> bool:
        return self.health > 0

    def has_status(self, effect_type: StatusEffectType) -> bool:
        return any(effect.effect_type == effect_type for effect in self.status_effects)

    def moved_to(self, position: Vector2) -> "Enemy":
        return replace(self, position=position)

    def with_health(self, health: int) -> "Enemy":
        return replace(self, health=health)

    def damaged(self, amount: int) -> "Enemy":
        """Copy with health reduced (not clamped)."""
        return replace(self, health=self.health - amount)

    def with_status_effects(self, effects: tuple[StatusEffect, ...]) -> "Enemy":
        return replace(self, status_effects=tuple(effects))

    def with_refreshed_status(self, effect: StatusEffect) -> "Enemy":
        """Copy with any effect of the same type replaced by ``effect``."""
        kept = tuple(e for e in self.status_effects if e.effect_type != effect.effect_type)
        return replace(self, status_effects=kept + (effect,))


@dataclass(frozen=True)
class Minion:
    """A friendly unit created by summon or raise dead.

    ``undead_type`` is set when the minion was raised from a corpse and is
    None for a generic summoned minion.
    """
    id: str
    position: Vector2
    health: int
    undead_type: Optional[EnemyType] = None

    @property
    def name(self) -> str:
        if self.undead_type is None:
            return f"Minion {self.id}"
        return f"Undead {ENEMY_TYPE_NAMES[self.undead_type]} {self.id}"

    @property
    def is_alive(self) -> bool:
        return self.health > 0

    def moved_to(self, position: Vector2) -> "Minion":
        return replace(self, position=position)

    def damaged(self, amount: int) -> "Minion":
        """Copy with health reduced (not clamped)."""
        return replace(self, health=self.health - amount)
