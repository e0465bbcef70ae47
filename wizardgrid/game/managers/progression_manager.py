"""
Progression Manager - experience, level-ups and spell unlocks.
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from ...core.data.game_enums import Element, SpellShape, ELEMENT_NAMES, SPELL_SHAPE_NAMES
from ...core.data.game_info import LEVEL_UNLOCKS
from ...core.data.game_rules import GameRules
from ...core.events.events import PlayerLeveledUp, SpellUnlocked
from ..combat.battle_calculator import round_half_up
from ..entities.unit import Player

if TYPE_CHECKING:
    from ...core.engine.game_state import BattleWorkspace


class ProgressionManager:
    """Grants XP and applies as many level-ups as the XP pays for."""

    def __init__(self, rules: GameRules):
        self.rules = rules

    def xp_to_next_level(self, level: int) -> int:
        """XP needed to advance from ``level`` to ``level + 1``."""
        return round_half_up(self.rules.xp_base * self.rules.xp_multiplier ** (level - 1))

    def level_up(self, player: Player) -> Player:
        """One level-up: spend the threshold, grow stats, refill, unlock."""
        level = player.level + 1
        max_health = player.max_health + self.rules.level_health_gain
        max_mana = player.max_mana + self.rules.level_mana_gain

        elements = set(player.unlocked_elements)
        shapes = set(player.unlocked_spell_shapes)
        unlock = LEVEL_UNLOCKS.get(level)
        if isinstance(unlock, Element):
            elements.add(unlock)
        elif isinstance(unlock, SpellShape):
            shapes.add(unlock)

        return replace(
            player,
            xp=player.xp - player.xp_to_next_level,
            level=level,
            max_health=max_health,
            health=max_health,
            max_mana=max_mana,
            mana=max_mana,
            spell_power=player.spell_power + self.rules.level_spell_power_gain,
            unlocked_elements=frozenset(elements),
            unlocked_spell_shapes=frozenset(shapes),
            xp_to_next_level=self.xp_to_next_level(level),
        )

    def grant_xp(self, workspace: "BattleWorkspace", amount: int) -> int:
        """Add XP to the player and level up as many times as it crosses thresholds.

        Returns:
            Number of levels gained
        """
        if amount <= 0:
            return 0

        player = replace(workspace.player, xp=workspace.player.xp + amount)
        workspace.log(f"You gain {amount} XP", category="progression",
                      source="ProgressionManager")

        levels_gained = 0
        while player.xp >= player.xp_to_next_level:
            player = self.level_up(player)
            levels_gained += 1
            workspace.emit(PlayerLeveledUp(workspace.turn, player.level))
            workspace.log(f"You reach level {player.level}!", category="progression",
                          source="ProgressionManager")

            unlock = LEVEL_UNLOCKS.get(player.level)
            if unlock is not None:
                workspace.emit(SpellUnlocked(workspace.turn, unlock.value))
                name = (ELEMENT_NAMES[unlock] if isinstance(unlock, Element)
                        else SPELL_SHAPE_NAMES[unlock])
                workspace.log(f"Unlocked {name}", category="progression",
                              source="ProgressionManager")

        workspace.player = player
        return levels_gained
