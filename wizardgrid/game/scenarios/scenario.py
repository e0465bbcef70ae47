"""Battle scenario definition.

A scenario is everything static about a battle: grid size, the player's start
tile, the terrain layout, default item placements, the wave rosters and any
rule overrides. Wave transitions rebuild the grid from it.
"""

from dataclasses import dataclass, field
from typing import Optional

from ...core.data.data_structures import Vector2
from ...core.data.game_enums import Element, EnemyType, ItemType
from ...core.data.game_rules import GameRules
from ..map import GameMap
from ..entities.map_objects import Item


@dataclass(frozen=True)
class EnemySpawn:
    """One enemy of a wave roster."""
    enemy_type: EnemyType
    position: Vector2
    weakness: Optional[Element] = None
    resistance: Optional[Element] = None
    health: Optional[int] = None


@dataclass(frozen=True)
class ItemPlacement:
    """An item that sits on the grid at the start of every wave."""
    item_type: ItemType
    position: Vector2


@dataclass
class BattleScenario:
    """Static description of a battle."""
    name: str = "Unnamed Battle"
    description: str = ""
    player_start: Vector2 = field(default_factory=lambda: Vector2(0, 0))
    obstacles: tuple[Vector2, ...] = ()
    water: tuple[Vector2, ...] = ()
    forest: tuple[Vector2, ...] = ()
    items: tuple[ItemPlacement, ...] = ()
    waves: dict[int, tuple[EnemySpawn, ...]] = field(default_factory=dict)
    rules: GameRules = field(default_factory=GameRules)

    @property
    def grid_size(self) -> int:
        return self.rules.grid_size

    def has_wave(self, wave: int) -> bool:
        return wave in self.waves

    def get_wave(self, wave: int) -> tuple[EnemySpawn, ...]:
        return self.waves.get(wave, ())

    def build_terrain(self) -> GameMap:
        """A writable map holding only the static terrain layout."""
        return GameMap.from_layout(self.grid_size, self.obstacles, self.water, self.forest)

    def place_default_items(self, game_map: GameMap, item_ids: list[str]) -> None:
        """Put the default items on ``game_map`` using the given ids, in order."""
        for placement, item_id in zip(self.items, item_ids):
            game_map.place_item(placement.position, Item(item_id, placement.item_type))
