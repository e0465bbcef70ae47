"""Tunable battle rules.

Per-kind tables (element damage, shape costs, enemy stats, item effects) live
in game_info; this module holds the scalar constants that drive the turn
pipeline. A scenario may override any of them through its ``rules`` mapping.
"""

from dataclasses import dataclass, fields, replace
from typing import Any, Optional

from .game_enums import StatusEffectType


@dataclass(frozen=True)
class GameRules:
    """Scalar constants for turn resolution."""
    grid_size: int = 20

    # Player baseline
    player_max_health: int = 100
    player_max_mana: int = 100

    # Movement abilities
    dash_mana_cost: int = 15
    dash_distance: int = 3
    dash_cooldown: int = 3

    # Mana regeneration applied in cleanup
    mana_regen: int = 2
    focus_mana_regen: int = 10

    self_heal_amount: int = 20

    # Status and terrain effects
    burn_damage: int = 5
    burn_duration: int = 3
    frozen_duration: int = 2
    burning_terrain_damage: int = 5
    burning_terrain_duration: int = 3

    # Damage modifiers
    water_caster_bonus: float = 1.25
    fire_on_water_penalty: float = 0.75
    weakness_multiplier: float = 1.5
    resistance_multiplier: float = 0.5

    # Minions
    minion_health: int = 40
    minion_attack_damage: int = 15

    # Enemy attack modifiers
    goblin_swarm_bonus: int = 2
    goblin_swarm_radius: int = 3
    ogre_stomp_damage: int = 15
    archer_forest_multiplier: float = 0.5

    loot_drop_chance: float = 0.25

    # Progression
    xp_base: int = 100
    xp_multiplier: float = 1.5
    level_health_gain: int = 10
    level_mana_gain: int = 5
    level_spell_power_gain: int = 2

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> "GameRules":
        """Create rules from a mapping of overrides.

        Args:
            data: Field names mapped to values; missing fields keep defaults

        Returns:
            GameRules with the overrides applied

        Raises:
            ValueError: If a key does not name a rule
        """
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown rule(s): {', '.join(unknown)}")
        return replace(cls(), **data)

    def status_duration(self, effect_type: StatusEffectType) -> int:
        """Turns a freshly applied status effect lasts."""
        if effect_type == StatusEffectType.BURN:
            return self.burn_duration
        return self.frozen_duration
