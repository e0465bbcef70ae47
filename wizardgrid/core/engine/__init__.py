"""Battle state snapshot and turn workspace."""

from .game_state import GameState, BattleWorkspace

__all__ = [
    "GameState",
    "BattleWorkspace",
]
