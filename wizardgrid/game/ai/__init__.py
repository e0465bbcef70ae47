"""AI behaviors for enemies and minions."""

from .ai_behaviors import AIBehavior, AIDecision, EnemyAI, MinionAI, find_step

__all__ = [
    "AIBehavior",
    "AIDecision",
    "EnemyAI",
    "MinionAI",
    "find_step",
]
