"""Battle grid: a tile-type matrix plus positional overlays.

The map holds no game rules. Tile types live in a square numpy ``uint8``
matrix indexed ``tiles[y, x]``; items, corpses and terrain effects live in
dictionaries keyed by Vector2. Placing an item or corpse also sets the
matching tile type, and removing it resets the tile to EMPTY, so an overlay
entry only ever exists where the tile type agrees.

A map attached to a committed GameState is frozen: the tile array is made
non-writeable and every mutator raises RuntimeError. Turn resolution works on
a ``copy()``.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Optional

import numpy as np

from ..core.data.data_structures import Vector2
from ..core.data.game_enums import TileType
from .entities.map_objects import Item, Corpse, TerrainEffect


@dataclass(eq=False)
class GameMap:
    size: int
    tiles: np.ndarray = field(init=False)
    items: dict[Vector2, Item] = field(default_factory=dict)
    corpses: dict[Vector2, Corpse] = field(default_factory=dict)
    terrain_effects: dict[Vector2, TerrainEffect] = field(default_factory=dict)
    _frozen: bool = field(default=False, repr=False)

    def __post_init__(self):
        if self.size <= 0:
            raise ValueError(f"Grid size must be positive, got {self.size}")
        self.tiles = np.full((self.size, self.size), TileType.EMPTY.value, dtype=np.uint8)

    @classmethod
    def from_layout(
        cls,
        size: int,
        obstacles: Iterable[Vector2] = (),
        water: Iterable[Vector2] = (),
        forest: Iterable[Vector2] = (),
    ) -> "GameMap":
        """Build a map with only static terrain.

        Raises:
            ValueError: If a terrain position lies outside the grid
        """
        game_map = cls(size)
        for tile_type, positions in (
            (TileType.OBSTACLE, obstacles),
            (TileType.WATER, water),
            (TileType.FOREST, forest),
        ):
            for position in positions:
                if not game_map.is_valid_position(position):
                    raise ValueError(
                        f"{tile_type.name.lower()} tile {position.to_xy()} is outside "
                        f"the {size}x{size} grid"
                    )
                game_map.set_tile(position, tile_type)
        return game_map

    # ============== Queries ==============

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def is_valid_position(self, position: Vector2) -> bool:
        """Check that a position lies inside [0, size) on both axes."""
        return 0 <= position.y < self.size and 0 <= position.x < self.size

    def get_tile(self, position: Vector2) -> TileType:
        return TileType(int(self.tiles[position.y, position.x]))

    def is_tile(self, position: Vector2, *tile_types: TileType) -> bool:
        """True if the position is on the grid and its tile is one of ``tile_types``."""
        return self.is_valid_position(position) and self.get_tile(position) in tile_types

    def item_at(self, position: Vector2) -> Optional[Item]:
        return self.items.get(position)

    def corpse_at(self, position: Vector2) -> Optional[Corpse]:
        return self.corpses.get(position)

    def terrain_effect_at(self, position: Vector2) -> Optional[TerrainEffect]:
        return self.terrain_effects.get(position)

    def find_tiles(self, tile_type: TileType) -> list[Vector2]:
        """All positions holding ``tile_type``, in row-major order."""
        coords = np.argwhere(self.tiles == tile_type.value)
        return [Vector2(int(y), int(x)) for y, x in coords]

    # ============== Mutators ==============

    def _check_writable(self) -> None:
        if self._frozen:
            raise RuntimeError("GameMap is frozen; mutate a copy() instead")

    def set_tile(self, position: Vector2, tile_type: TileType) -> None:
        self._check_writable()
        self.tiles[position.y, position.x] = tile_type.value

    def place_item(self, position: Vector2, item: Item) -> None:
        self._check_writable()
        self.items[position] = item
        self.tiles[position.y, position.x] = TileType.ITEM.value

    def take_item(self, position: Vector2) -> Optional[Item]:
        """Remove and return the item at ``position``, resetting the tile to EMPTY."""
        self._check_writable()
        item = self.items.pop(position, None)
        if item is not None:
            self.tiles[position.y, position.x] = TileType.EMPTY.value
        return item

    def place_corpse(self, position: Vector2, corpse: Corpse) -> None:
        """Place a corpse; any item on the tile is destroyed."""
        self._check_writable()
        self.items.pop(position, None)
        self.corpses[position] = corpse
        self.tiles[position.y, position.x] = TileType.CORPSE.value

    def remove_corpse(self, position: Vector2) -> Optional[Corpse]:
        """Remove and return the corpse at ``position``, resetting the tile to EMPTY."""
        self._check_writable()
        corpse = self.corpses.pop(position, None)
        if corpse is not None:
            self.tiles[position.y, position.x] = TileType.EMPTY.value
        return corpse

    def set_terrain_effect(self, position: Vector2, effect: TerrainEffect) -> None:
        self._check_writable()
        self.terrain_effects[position] = effect

    def remove_terrain_effect(self, position: Vector2) -> None:
        self._check_writable()
        self.terrain_effects.pop(position, None)

    # ============== Snapshot support ==============

    def copy(self) -> "GameMap":
        """Writable deep copy (overlay values are immutable, so dict copies suffice)."""
        clone = GameMap(
            self.size,
            items=dict(self.items),
            corpses=dict(self.corpses),
            terrain_effects=dict(self.terrain_effects),
        )
        clone.tiles = self.tiles.copy()
        return clone

    def freeze(self) -> "GameMap":
        """Make this map read-only and return it."""
        self.tiles.flags.writeable = False
        self.items = MappingProxyType(self.items)  # type: ignore[assignment]
        self.corpses = MappingProxyType(self.corpses)  # type: ignore[assignment]
        self.terrain_effects = MappingProxyType(self.terrain_effects)  # type: ignore[assignment]
        self._frozen = True
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GameMap):
            return NotImplemented
        return (
            self.size == other.size
            and np.array_equal(self.tiles, other.tiles)
            and self.items == other.items
            and self.corpses == other.corpses
            and self.terrain_effects == other.terrain_effects
        )
