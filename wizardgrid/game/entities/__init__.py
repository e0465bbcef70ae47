"""Entity records: units and map objects."""

from .map_objects import Item, Corpse, StatusEffect, TerrainEffect
from .unit import Player, Enemy, Minion, PLAYER_ID
from .unit_templates import create_player, create_enemy, create_minion

__all__ = [
    "Item",
    "Corpse",
    "StatusEffect",
    "TerrainEffect",
    "Player",
    "Enemy",
    "Minion",
    "PLAYER_ID",
    "create_player",
    "create_enemy",
    "create_minion",
]
