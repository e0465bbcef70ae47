"""Wizard Grid: the combat-resolution core of a grid-based tactical wizard game.

Typical use::

    from wizardgrid import TurnEngine, Direction

    engine = TurnEngine(seed=7)
    state = engine.move(Direction.RIGHT)
    state = engine.cast_spell_at(2, 2)
"""

from .core.data import Direction, Element, GameStatus, SpellShape, Vector2
from .core.engine.game_state import GameState
from .game.scenarios import BattleScenario, ScenarioLoader
from .game.turn_engine import TurnEngine, resolve_action

__version__ = "0.1.0"

__all__ = [
    "Direction",
    "Element",
    "GameStatus",
    "SpellShape",
    "Vector2",
    "GameState",
    "BattleScenario",
    "ScenarioLoader",
    "TurnEngine",
    "resolve_action",
]
