"""Coordinate value type and direction helpers.

Vector2 is the key type for every positional overlay (items, corpses, terrain
effects) and the position of every entity, so it must be immutable and
hashable.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from .game_enums import Direction


@dataclass(frozen=True)
class Vector2:
    """2D grid coordinate.

    Uses (y, x) ordering for direct alignment with 2D array access patterns.
    First parameter is row (y-coordinate), second is column (x-coordinate).
    This creates perfect alignment with array[y, x] access patterns.
    """
    y: int
    x: int

    def __add__(self, other: "Vector2") -> "Vector2":
        """Vector addition."""
        return Vector2(self.y + other.y, self.x + other.x)

    def __sub__(self, other: "Vector2") -> "Vector2":
        """Vector subtraction."""
        return Vector2(self.y - other.y, self.x - other.x)

    def __iter__(self):
        """Make Vector2 iterable for unpacking (y, x order)."""
        yield self.y
        yield self.x

    def __repr__(self) -> str:
        return f"Vector2({self.y}, {self.x})"

    def manhattan_distance_to(self, other: "Vector2") -> int:
        """Calculate Manhattan distance to another vector."""
        return abs(self.y - other.y) + abs(self.x - other.x)

    def chebyshev_distance_to(self, other: "Vector2") -> int:
        """Calculate Chebyshev (king-move) distance to another vector."""
        return max(abs(self.y - other.y), abs(self.x - other.x))

    def orthogonal_neighbors(self) -> list["Vector2"]:
        """The four orthogonally adjacent coordinates (unclipped)."""
        return [self + offset for offset in DIRECTION_VECTORS.values()]

    @classmethod
    def from_xy(cls, x: int, y: int) -> "Vector2":
        """Create Vector2 from column/row order, as used by the public API."""
        return cls(y, x)

    def to_tuple(self) -> tuple[int, int]:
        """Convert to coordinate tuple (y, x order)."""
        return (self.y, self.x)

    def to_xy(self) -> tuple[int, int]:
        """Convert to (x, y) for display."""
        return (self.x, self.y)

    def to_numpy(self) -> NDArray[np.int16]:
        """Convert to numpy array (y, x order)."""
        return np.array([self.y, self.x], dtype=np.int16)


DIRECTION_VECTORS: dict[Direction, Vector2] = {
    Direction.UP: Vector2(-1, 0),
    Direction.DOWN: Vector2(1, 0),
    Direction.LEFT: Vector2(0, -1),
    Direction.RIGHT: Vector2(0, 1),
}


def dominant_direction(origin: Vector2, target: Vector2,
                       default: Optional[Direction] = None) -> Optional[Direction]:
    """Direction from origin to target along the axis with the larger delta.

    Ties (including diagonal deltas of equal size) resolve toward the vertical
    axis. When origin == target, ``default`` is returned.
    """
    dy = target.y - origin.y
    dx = target.x - origin.x
    if dx == 0 and dy == 0:
        return default
    if abs(dx) > abs(dy):
        return Direction.RIGHT if dx > 0 else Direction.LEFT
    return Direction.DOWN if dy > 0 else Direction.UP


def step_toward(origin: Vector2, target: Vector2) -> Vector2:
    """One-tile step from origin toward target, longest axis first.

    Ties resolve toward the horizontal axis. Returns origin when the two
    coincide.
    """
    dy = target.y - origin.y
    dx = target.x - origin.x
    if dx == 0 and dy == 0:
        return origin
    if abs(dx) >= abs(dy):
        return Vector2(origin.y, origin.x + int(np.sign(dx)))
    return Vector2(origin.y + int(np.sign(dy)), origin.x)
