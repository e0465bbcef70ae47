"""Combat formulas and their application."""

from .battle_calculator import BattleCalculator, round_half_up
from .combat_resolver import CombatResolver, CombatResult

__all__ = [
    "BattleCalculator",
    "round_half_up",
    "CombatResolver",
    "CombatResult",
]
