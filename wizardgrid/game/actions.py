"""Player actions.

Each player-facing operation is an Action with two steps:

- ``validate(state, rules)`` inspects the current snapshot and says whether
  the action may proceed. A rejected action leaves the state untouched and
  never consumes a turn.
- ``execute(workspace, resolver, rules)`` applies the immediate effect to the
  turn's workspace. Actions with ``consumes_turn`` are followed by the full
  resolution pipeline; ``focused`` actions earn the larger mana regeneration.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from ..core.data.data_structures import DIRECTION_VECTORS, Vector2
from ..core.data.game_enums import (
    Direction, Element, SpellShape, TileType,
    ELEMENT_NAMES, SPELL_SHAPE_NAMES, ITEM_TYPE_NAMES,
)
from ..core.data.game_info import get_item_info, get_spell_shape_info
from ..core.data.game_rules import GameRules
from ..core.events.events import ItemPickedUp, MinionSummoned
from .entities.unit_templates import create_minion
from .spell_geometry import calculate_affected_tiles

if TYPE_CHECKING:
    from ..core.engine.game_state import BattleWorkspace, GameState
    from .combat.combat_resolver import CombatResolver


# Tiles the player cannot enter
PLAYER_BLOCKING_TILES = (TileType.OBSTACLE, TileType.CORPSE)


@dataclass
class ActionValidation:
    """Result of action validation."""

    is_valid: bool
    reason: str = ""

    @classmethod
    def valid(cls) -> "ActionValidation":
        """Create a valid result."""
        return cls(is_valid=True)

    @classmethod
    def invalid(cls, reason: str) -> "ActionValidation":
        """Create an invalid result with reason."""
        return cls(is_valid=False, reason=reason)


class Action(ABC):
    """Base class for all player actions."""

    name: str = "Action"
    consumes_turn: bool = True
    focused: bool = False

    @abstractmethod
    def validate(self, state: "GameState", rules: GameRules) -> ActionValidation:
        """Check whether this action may be performed on ``state``."""
        pass

    @abstractmethod
    def execute(self, workspace: "BattleWorkspace", resolver: "CombatResolver",
                rules: GameRules) -> None:
        """Apply the immediate effect to the workspace."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


def _pick_up_item(workspace: "BattleWorkspace", position: Vector2) -> None:
    item = workspace.game_map.take_item(position)
    if item is None:
        return
    workspace.player = workspace.player.with_item(item)
    workspace.emit(ItemPickedUp(workspace.turn, item.id, item.item_type))
    workspace.log(f"You pick up a {ITEM_TYPE_NAMES[item.item_type]}", category="loot",
                  source="Player")


def _can_enter(workspace: "BattleWorkspace", position: Vector2) -> bool:
    return (workspace.game_map.is_valid_position(position)
            and workspace.game_map.get_tile(position) not in PLAYER_BLOCKING_TILES)


class MoveAction(Action):
    """Step one tile; a blocked step still turns the player and costs a turn."""

    name = "Move"

    def __init__(self, direction: Direction):
        self.direction = direction

    def validate(self, state: "GameState", rules: GameRules) -> ActionValidation:
        return ActionValidation.valid()

    def execute(self, workspace: "BattleWorkspace", resolver: "CombatResolver",
                rules: GameRules) -> None:
        player = replace(workspace.player, facing=self.direction)
        destination = player.position + DIRECTION_VECTORS[self.direction]
        workspace.player = player

        if not _can_enter(workspace, destination):
            workspace.log(f"Movement {self.direction.value} is blocked", category="movement",
                          level="debug", source="Player")
            return

        workspace.player = player.moved_to(destination)
        _pick_up_item(workspace, destination)

    def __repr__(self) -> str:
        return f"MoveAction({self.direction.value})"


class DashAction(Action):
    """Travel up to ``dash_distance`` tiles in one turn for mana."""

    name = "Dash"

    def __init__(self, direction: Direction):
        self.direction = direction

    def validate(self, state: "GameState", rules: GameRules) -> ActionValidation:
        if state.player.mana < rules.dash_mana_cost:
            return ActionValidation.invalid(
                f"Dash needs {rules.dash_mana_cost} mana, have {state.player.mana}"
            )
        if state.player.dash_cooldown > 0:
            return ActionValidation.invalid(
                f"Dash is on cooldown for {state.player.dash_cooldown} more turns"
            )
        return ActionValidation.valid()

    def execute(self, workspace: "BattleWorkspace", resolver: "CombatResolver",
                rules: GameRules) -> None:
        step = DIRECTION_VECTORS[self.direction]
        start = workspace.player.position
        workspace.player = replace(
            workspace.player,
            facing=self.direction,
            mana=workspace.player.mana - rules.dash_mana_cost,
            dash_cooldown=rules.dash_cooldown,
        )

        for _ in range(rules.dash_distance):
            destination = workspace.player.position + step
            if not _can_enter(workspace, destination):
                break
            workspace.player = workspace.player.moved_to(destination)
            _pick_up_item(workspace, destination)

        travelled = start.manhattan_distance_to(workspace.player.position)
        workspace.log(f"You dash {self.direction.value} {travelled} tiles", category="movement",
                      source="Player")

    def __repr__(self) -> str:
        return f"DashAction({self.direction.value})"


class UseItemAction(Action):
    """Drink a potion from the inventory."""

    name = "Use Item"

    def __init__(self, item_id: str):
        self.item_id = item_id

    def validate(self, state: "GameState", rules: GameRules) -> ActionValidation:
        if state.player.find_item(self.item_id) is None:
            return ActionValidation.invalid(f"Item {self.item_id} is not in the inventory")
        return ActionValidation.valid()

    def execute(self, workspace: "BattleWorkspace", resolver: "CombatResolver",
                rules: GameRules) -> None:
        item = workspace.player.find_item(self.item_id)
        assert item is not None
        info = get_item_info(item.item_type)

        player = workspace.player.without_item(item.id)
        if info.restores_health:
            player = player.healed(info.restores_health)
        if info.restores_mana:
            player = player.with_mana(player.mana + info.restores_mana)
        workspace.player = player
        workspace.log(f"You drink a {info.name}", category="loot", source="Player")

    def __repr__(self) -> str:
        return f"UseItemAction({self.item_id!r})"


class FocusAction(Action):
    """Spend the turn gathering mana."""

    name = "Focus"
    focused = True

    def validate(self, state: "GameState", rules: GameRules) -> ActionValidation:
        return ActionValidation.valid()

    def execute(self, workspace: "BattleWorkspace", resolver: "CombatResolver",
                rules: GameRules) -> None:
        workspace.log("You focus and gather mana", category="movement", level="debug",
                      source="Player")


class WaitAction(FocusAction):
    """Alias of focus."""

    name = "Wait"


class CastSpellAction(Action):
    """Cast the selected element and shape at a target tile."""

    name = "Cast Spell"

    def __init__(self, target: Vector2):
        self.target = target

    def validate(self, state: "GameState", rules: GameRules) -> ActionValidation:
        player = state.player
        shape = player.selected_shape
        cost = get_spell_shape_info(shape).mana_cost
        if player.mana < cost:
            return ActionValidation.invalid(
                f"{SPELL_SHAPE_NAMES[shape]} needs {cost} mana, have {player.mana}"
            )

        game_map = state.game_map
        if shape == SpellShape.SELF:
            return ActionValidation.valid()

        if not game_map.is_valid_position(self.target):
            return ActionValidation.invalid(f"Target {self.target.to_xy()} is outside the grid")

        if shape == SpellShape.SUMMON:
            if game_map.get_tile(self.target) != TileType.EMPTY:
                return ActionValidation.invalid(f"Cannot summon onto {self.target.to_xy()}: tile not empty")
            if state.is_occupied(self.target):
                return ActionValidation.invalid(f"Cannot summon onto {self.target.to_xy()}: tile occupied")
            return ActionValidation.valid()

        if shape == SpellShape.RAISE_DEAD:
            if game_map.corpse_at(self.target) is None:
                return ActionValidation.invalid(f"No corpse at {self.target.to_xy()}")
            if state.is_occupied(self.target):
                return ActionValidation.invalid(f"Corpse at {self.target.to_xy()} is occupied")
            return ActionValidation.valid()

        return ActionValidation.valid()

    def execute(self, workspace: "BattleWorkspace", resolver: "CombatResolver",
                rules: GameRules) -> None:
        player = workspace.player
        shape = player.selected_shape
        element = player.selected_element
        workspace.player = replace(player, mana=player.mana - get_spell_shape_info(shape).mana_cost)

        if shape == SpellShape.SELF:
            workspace.player = workspace.player.healed(rules.self_heal_amount)
            workspace.log(f"You heal for {rules.self_heal_amount}", source="Player")
        elif shape == SpellShape.SUMMON:
            self._summon(workspace, rules)
        elif shape == SpellShape.RAISE_DEAD:
            self._raise_dead(workspace, rules)
        elif get_spell_shape_info(shape).deals_damage:
            affected = calculate_affected_tiles(
                shape, self.target, player.position, player.facing, workspace.game_map.size
            )
            workspace.log(
                f"You cast {ELEMENT_NAMES[element]} {SPELL_SHAPE_NAMES[shape]} at {self.target.to_xy()}",
                source="Player",
            )
            resolver.resolve_elemental_spell(workspace, element, shape, affected)

    def _summon(self, workspace: "BattleWorkspace", rules: GameRules) -> None:
        minion = create_minion(workspace.next_id("minion"), self.target, rules)
        workspace.minions.append(minion)
        workspace.emit(MinionSummoned(workspace.turn, minion.id, minion.position))
        workspace.log(f"You summon {minion.name} at {self.target.to_xy()}", source="Player")

    def _raise_dead(self, workspace: "BattleWorkspace", rules: GameRules) -> None:
        corpse = workspace.game_map.remove_corpse(self.target)
        assert corpse is not None
        minion = create_minion(
            workspace.next_id("minion"), self.target, rules, undead_type=corpse.enemy_type
        )
        workspace.minions.append(minion)
        workspace.emit(MinionSummoned(workspace.turn, minion.id, minion.position, corpse.enemy_type))
        workspace.log(f"You raise {minion.name} from the dead", source="Player")

    def __repr__(self) -> str:
        return f"CastSpellAction({self.target.to_xy()})"


class SelectElementAction(Action):
    """Change the active element; free."""

    name = "Select Element"
    consumes_turn = False

    def __init__(self, element: Element):
        self.element = element

    def validate(self, state: "GameState", rules: GameRules) -> ActionValidation:
        if self.element not in state.player.unlocked_elements:
            return ActionValidation.invalid(f"{ELEMENT_NAMES[self.element]} is locked")
        return ActionValidation.valid()

    def execute(self, workspace: "BattleWorkspace", resolver: "CombatResolver",
                rules: GameRules) -> None:
        workspace.player = replace(workspace.player, selected_element=self.element)

    def __repr__(self) -> str:
        return f"SelectElementAction({self.element.value})"


class SelectSpellShapeAction(Action):
    """Change the active spell shape; free."""

    name = "Select Shape"
    consumes_turn = False

    def __init__(self, shape: SpellShape):
        self.shape = shape

    def validate(self, state: "GameState", rules: GameRules) -> ActionValidation:
        if self.shape not in state.player.unlocked_spell_shapes:
            return ActionValidation.invalid(f"{SPELL_SHAPE_NAMES[self.shape]} is locked")
        return ActionValidation.valid()

    def execute(self, workspace: "BattleWorkspace", resolver: "CombatResolver",
                rules: GameRules) -> None:
        workspace.player = replace(workspace.player, selected_shape=self.shape)

    def __repr__(self) -> str:
        return f"SelectSpellShapeAction({self.shape.value})"
