"""
Loot Manager - corpses, potion drops and XP for enemies killed this turn.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import numpy as np

from ...core.data.data_structures import Vector2
from ...core.data.game_enums import ItemType, TileType, ITEM_TYPE_NAMES
from ...core.data.game_rules import GameRules
from ...core.events.events import ItemDropped
from ..entities.map_objects import Corpse, Item
from ..entities.unit import Enemy
from .progression_manager import ProgressionManager

if TYPE_CHECKING:
    from ...core.engine.game_state import BattleWorkspace


LOOT_TYPES: tuple[ItemType, ...] = (ItemType.HEALTH_POTION, ItemType.MANA_POTION)


class LootManager:
    """Processes every enemy defeated during the turn in one pass.

    All randomness comes from the injected ``numpy.random.Generator``.
    """

    def __init__(self, rules: GameRules, progression_manager: ProgressionManager):
        self.rules = rules
        self.progression_manager = progression_manager

    def process_loot_phase(self, workspace: "BattleWorkspace", rng: np.random.Generator) -> None:
        """Corpse each defeated enemy, maybe drop a potion, then grant the XP."""
        if not workspace.defeated:
            return

        for enemy in workspace.defeated:
            workspace.game_map.place_corpse(
                enemy.position, Corpse(enemy.id, enemy.position, enemy.enemy_type)
            )

        # Every corpse is down before any drop picks a tile
        total_xp = 0
        for enemy in workspace.defeated:
            self.roll_loot(workspace, enemy, rng)
            total_xp += enemy.xp_value

        workspace.defeated = []
        self.progression_manager.grant_xp(workspace, total_xp)

    def roll_loot(self, workspace: "BattleWorkspace", enemy: Enemy,
                  rng: np.random.Generator) -> Optional[Item]:
        """With the drop chance, place a random potion next to ``enemy``'s corpse."""
        if rng.random() >= self.rules.loot_drop_chance:
            return None

        item_type = LOOT_TYPES[int(rng.integers(len(LOOT_TYPES)))]
        candidates = self.drop_candidates(workspace, enemy.position)
        if not candidates:
            workspace.log(f"{enemy.name} dropped loot but there was no room for it",
                          category="loot", level="debug", source="LootManager")
            return None

        order = rng.permutation(len(candidates))
        position = candidates[int(order[0])]
        item = Item(workspace.next_id("item"), item_type)
        workspace.game_map.place_item(position, item)
        workspace.emit(ItemDropped(workspace.turn, item.id, item_type, position))
        workspace.log(f"{enemy.name} dropped a {ITEM_TYPE_NAMES[item_type]} at {position.to_xy()}",
                      category="loot", source="LootManager")
        return item

    @staticmethod
    def drop_candidates(workspace: "BattleWorkspace", position: Vector2) -> list[Vector2]:
        """Orthogonal neighbours that are EMPTY tiles with nobody standing on them."""
        occupied = workspace.occupied_positions()
        return [
            neighbor
            for neighbor in position.orthogonal_neighbors()
            if workspace.game_map.is_tile(neighbor, TileType.EMPTY) and neighbor not in occupied
        ]
