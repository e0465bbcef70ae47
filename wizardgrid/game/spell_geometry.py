"""Spell geometry: which tiles a spell covers.

Pure functions only. Patterns are numpy (y, x) offset templates added to an
anchor tile and clipped to the grid with a vectorized bounds mask.
"""

import numpy as np
from numpy.typing import NDArray

from ..core.data.data_structures import Vector2, dominant_direction
from ..core.data.game_enums import Direction, SpellShape


# One tile ahead, then three tiles two steps ahead spanning left/center/right
CONE_OFFSETS: dict[Direction, NDArray[np.int8]] = {
    Direction.UP: np.array([[-1, 0], [-2, -1], [-2, 0], [-2, 1]], dtype=np.int8),
    Direction.DOWN: np.array([[1, 0], [2, -1], [2, 0], [2, 1]], dtype=np.int8),
    Direction.LEFT: np.array([[0, -1], [-1, -2], [0, -2], [1, -2]], dtype=np.int8),
    Direction.RIGHT: np.array([[0, 1], [-1, 2], [0, 2], [1, 2]], dtype=np.int8),
}

WALL_OFFSETS: NDArray[np.int8] = np.array(
    [
        [-1, -1], [-1, 0], [-1, 1],
        [0, -1], [0, 0], [0, 1],
        [1, -1], [1, 0], [1, 1],
    ],
    dtype=np.int8,
)

SINGLE_OFFSET: NDArray[np.int8] = np.array([[0, 0]], dtype=np.int8)


def _apply_offsets(anchor: Vector2, offsets: NDArray[np.int8], grid_size: int) -> set[Vector2]:
    """Translate offsets to absolute tiles and drop those off the grid."""
    positions = anchor.to_numpy() + offsets.astype(np.int16)

    valid_mask = (
        (positions[:, 0] >= 0)
        & (positions[:, 0] < grid_size)
        & (positions[:, 1] >= 0)
        & (positions[:, 1] < grid_size)
    )

    return {Vector2(int(y), int(x)) for y, x in positions[valid_mask]}


def cone_direction(caster: Vector2, target: Vector2, facing: Direction) -> Direction:
    """Direction a cone points: the facing when aimed at the caster's own tile,
    otherwise the dominant axis toward the target (ties go vertical)."""
    direction = dominant_direction(caster, target, default=facing)
    assert direction is not None
    return direction


def calculate_affected_tiles(
    shape: SpellShape,
    target: Vector2,
    caster: Vector2,
    facing: Direction,
    grid_size: int,
) -> set[Vector2]:
    """Tiles covered by a spell.

    Args:
        shape: Active spell shape
        target: Targeted tile
        caster: Caster position
        facing: Caster facing, used by cones aimed at the caster's own tile
        grid_size: Side length of the square grid

    Returns:
        Set of in-bounds tiles (empty for ``self``)
    """
    if shape == SpellShape.SELF:
        return set()

    if shape == SpellShape.CONE:
        direction = cone_direction(caster, target, facing)
        return _apply_offsets(caster, CONE_OFFSETS[direction], grid_size)

    if shape == SpellShape.WALL:
        return _apply_offsets(target, WALL_OFFSETS, grid_size)

    # Ball, summon and raise dead select the target tile only
    return _apply_offsets(target, SINGLE_OFFSET, grid_size)
