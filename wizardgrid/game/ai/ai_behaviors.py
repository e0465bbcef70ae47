"""AI Behavior Strategy Classes

This module implements the Strategy design pattern for AI behaviors. A
behavior looks at one unit and the current workspace and returns an
AIDecision; the turn pipeline applies it. Both behaviors chase the nearest
hostile by Manhattan distance and close in one tile at a time with
longest-axis-first steps.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional, Any, Union

from ...core.data.data_structures import Vector2, step_toward
from ...core.data.game_enums import EnemyType, StatusEffectType, TileType

if TYPE_CHECKING:
    from ...core.engine.game_state import BattleWorkspace
    from ..entities.unit import Enemy, Minion, Player


class AIDecision:
    """Represents an AI decision with target information."""

    WAIT = "Wait"
    MOVE = "Move"
    ATTACK = "Attack"
    STOMP = "Stomp"

    def __init__(self, action_name: str, target: Optional[Any] = None, reasoning: str = ""):
        self.action_name = action_name
        self.target = target
        self.reasoning = reasoning

    def __repr__(self) -> str:
        return f"AIDecision({self.action_name!r}, target={self.target!r})"


def find_step(
    origin: Vector2,
    target: Vector2,
    workspace: "BattleWorkspace",
    occupied: set[Vector2],
) -> Optional[Vector2]:
    """One step toward ``target``, or None when that single step is blocked.

    Only the longest-axis step is tried (ties go horizontal). It is blocked by
    obstacles, the grid edge, and any position in ``occupied``.
    """
    destination = step_toward(origin, target)
    if destination == origin:
        return None
    if not workspace.game_map.is_valid_position(destination):
        return None
    if workspace.game_map.get_tile(destination) == TileType.OBSTACLE:
        return None
    if destination in occupied:
        return None
    return destination


class AIBehavior(ABC):
    """Abstract base class for AI behavior strategies."""

    @abstractmethod
    def choose_action(self, unit: Any, workspace: "BattleWorkspace",
                      occupied: set[Vector2]) -> AIDecision:
        """Choose what this unit does this phase.

        Args:
            unit: The unit making the decision
            workspace: Current turn workspace
            occupied: Positions claimed so far this phase

        Returns:
            AIDecision with action and target information
        """
        pass

    @abstractmethod
    def get_behavior_name(self) -> str:
        """Get the name of this AI behavior."""
        pass


class MinionAI(AIBehavior):
    """Minions hunt the nearest enemy and melee it when adjacent."""

    def choose_action(self, unit: "Minion", workspace: "BattleWorkspace",
                      occupied: set[Vector2]) -> AIDecision:
        closest_enemy: Optional["Enemy"] = None
        closest_distance = float('inf')

        # Strict comparison keeps the earliest enemy in roster order on ties
        for enemy in workspace.enemies:
            distance = unit.position.manhattan_distance_to(enemy.position)
            if distance < closest_distance:
                closest_distance = distance
                closest_enemy = enemy

        if closest_enemy is None:
            return AIDecision(AIDecision.WAIT, reasoning="No enemies remain")

        if closest_distance == 1:
            return AIDecision(
                AIDecision.ATTACK,
                target=closest_enemy,
                reasoning=f"Attacking adjacent {closest_enemy.name}",
            )

        destination = find_step(unit.position, closest_enemy.position, workspace, occupied)
        if destination is None:
            return AIDecision(AIDecision.WAIT, reasoning=f"Path to {closest_enemy.name} blocked")
        return AIDecision(
            AIDecision.MOVE,
            target=destination,
            reasoning=f"Moving toward {closest_enemy.name}",
        )

    def get_behavior_name(self) -> str:
        return "Minion"


class EnemyAI(AIBehavior):
    """Enemies chase the player unless a minion is strictly closer."""

    def choose_target(self, unit: "Enemy", workspace: "BattleWorkspace") -> tuple[Union["Player", "Minion"], int]:
        """Nearest friendly unit, with the player as the baseline."""
        target: Union["Player", "Minion"] = workspace.player
        best_distance = unit.position.manhattan_distance_to(workspace.player.position)
        for minion in workspace.minions:
            distance = unit.position.manhattan_distance_to(minion.position)
            if distance < best_distance:
                best_distance = distance
                target = minion
        return target, best_distance

    def choose_action(self, unit: "Enemy", workspace: "BattleWorkspace",
                      occupied: set[Vector2]) -> AIDecision:
        if unit.has_status(StatusEffectType.FROZEN):
            return AIDecision(AIDecision.WAIT, reasoning=f"{unit.name} is frozen")

        target, distance = self.choose_target(unit, workspace)

        if distance <= unit.attack_range:
            if unit.enemy_type == EnemyType.OGRE and distance == 1:
                return AIDecision(AIDecision.STOMP, reasoning=f"{unit.name} stomps")
            return AIDecision(
                AIDecision.ATTACK,
                target=target,
                reasoning=f"Attacking {target.name} at distance {distance}",
            )

        destination = find_step(unit.position, target.position, workspace, occupied)
        if destination is None:
            return AIDecision(AIDecision.WAIT, reasoning=f"Path to {target.name} blocked")
        return AIDecision(
            AIDecision.MOVE,
            target=destination,
            reasoning=f"Moving toward {target.name}",
        )

    def get_behavior_name(self) -> str:
        return "Enemy"
