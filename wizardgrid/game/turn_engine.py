"""
Turn engine: the public entry point of the battle core.

``resolve_action`` is the pure ``(state, action) -> state`` reducer. It never
touches its input snapshot; a rejected action returns that very snapshot, and
an accepted one returns a newly committed GameState together with the events
produced while resolving it.

``TurnEngine`` owns the current snapshot, the seeded random generator and the
event bus. Each public method builds an action, runs it through the reducer,
replaces the snapshot and publishes the turn's events.
"""
from dataclasses import dataclass, field
from typing import Optional, Union

import numpy as np

from ..core.data.data_structures import Vector2
from ..core.data.game_enums import Direction, Element, SpellShape
from ..core.engine.game_state import BattleWorkspace, GameState
from ..core.events.event_manager import EventManager
from ..core.events.events import ActionRejected, GameEvent, LogMessage, TurnResolved
from .actions import (
    Action, CastSpellAction, DashAction, FocusAction, MoveAction,
    SelectElementAction, SelectSpellShapeAction, UseItemAction, WaitAction,
)
from .entities.map_objects import Item
from .managers.log_manager import LogManager
from .managers.wave_manager import WaveManager
from .scenarios.scenario import BattleScenario
from .scenarios.scenario_loader import ScenarioLoader
from .spell_geometry import calculate_affected_tiles
from .turn_manager import TurnManager


@dataclass
class ActionOutcome:
    """Result of reducing one action."""
    state: GameState
    accepted: bool
    events: list[GameEvent] = field(default_factory=list)
    reason: str = ""


def resolve_action(
    state: GameState,
    action: Action,
    turn_manager: TurnManager,
    wave_manager: WaveManager,
    rng: np.random.Generator,
) -> ActionOutcome:
    """Apply one player action to ``state``.

    Args:
        state: Current snapshot (never modified)
        action: The player's action
        turn_manager: Pipeline to run when the action consumes a turn
        wave_manager: Wave check run after commit
        rng: Source of all randomness

    Returns:
        ActionOutcome holding the next snapshot and the events to publish
    """
    if not state.is_playing:
        return _rejected(state, action, f"Battle is over ({state.game_status.name.lower()})")

    validation = action.validate(state, turn_manager.rules)
    if not validation.is_valid:
        return _rejected(state, action, validation.reason)

    workspace = BattleWorkspace(state)
    if action.consumes_turn:
        workspace.turn += 1

    action.execute(workspace, turn_manager.combat_resolver, turn_manager.rules)

    if action.consumes_turn:
        turn_manager.resolve_turn(workspace, rng, focused=action.focused)
        workspace.emit(TurnResolved(workspace.turn, action.name, action.focused))

    next_state = workspace.commit()
    events = list(workspace.events)

    # Wave check runs on the committed result
    if not next_state.enemies and next_state.is_playing:
        wave_workspace = BattleWorkspace(next_state)
        if wave_manager.check_wave_complete(wave_workspace):
            next_state = wave_workspace.commit()
            events.extend(wave_workspace.events)

    return ActionOutcome(next_state, True, events)


def _rejected(state: GameState, action: Action, reason: str) -> ActionOutcome:
    return ActionOutcome(
        state,
        False,
        [
            ActionRejected(state.turn, action.name, reason),
            LogMessage(state.turn, f"{action.name} rejected: {reason}", "debug", "debug", "TurnEngine"),
        ],
        reason,
    )


class TurnEngine:
    """Holds the authoritative battle snapshot and exposes the player operations.

    Every operation returns the resulting GameState. Rejected operations
    return the current snapshot object unchanged.
    """

    def __init__(
        self,
        scenario: Optional[BattleScenario] = None,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
        event_manager: Optional[EventManager] = None,
    ):
        """Initialize a battle.

        Args:
            scenario: Battle definition (defaults to the packaged scenario)
            rng: Random generator for loot rolls; built from ``seed`` if omitted
            seed: Seed for the default generator
            event_manager: Event bus to publish on (a private one if omitted)
        """
        self.scenario = scenario if scenario is not None else ScenarioLoader.load_default()
        self.rules = self.scenario.rules
        self.rng = rng if rng is not None else np.random.default_rng(seed)

        self.event_manager = event_manager if event_manager is not None else EventManager()
        self.log_manager = LogManager(self.event_manager)

        self.turn_manager = TurnManager(self.rules)
        self.wave_manager = WaveManager(self.scenario)

        self.state = self.wave_manager.create_initial_state()
        self._publish_log(f"Battle '{self.scenario.name}' begins: wave 1, "
                          f"{len(self.state.enemies)} enemies")

    # ============== Dispatch ==============

    def dispatch(self, action: Action) -> GameState:
        """Run ``action`` through the reducer and publish its events."""
        outcome = resolve_action(self.state, action, self.turn_manager, self.wave_manager, self.rng)
        self.state = outcome.state
        self.event_manager.publish_batch(outcome.events, source="TurnEngine")
        self.event_manager.process_events()
        return self.state

    def _publish_log(self, message: str, category: str = "system") -> None:
        self.event_manager.publish(
            LogMessage(self.state.turn, message, category, "info", "TurnEngine"),
            source="TurnEngine",
        )
        self.event_manager.process_events()

    # ============== Player operations ==============

    def move(self, direction: Union[Direction, str]) -> GameState:
        return self.dispatch(MoveAction(Direction(direction)))

    def dash(self, direction: Union[Direction, str]) -> GameState:
        return self.dispatch(DashAction(Direction(direction)))

    def use_item(self, item: Union[Item, str]) -> GameState:
        item_id = item.id if isinstance(item, Item) else item
        return self.dispatch(UseItemAction(item_id))

    def focus(self) -> GameState:
        return self.dispatch(FocusAction())

    def wait(self) -> GameState:
        return self.dispatch(WaitAction())

    def cast_spell_at(self, x: int, y: int) -> GameState:
        """Cast the selected element and shape at column ``x``, row ``y``."""
        return self.dispatch(CastSpellAction(Vector2.from_xy(x, y)))

    def select_element(self, element: Union[Element, str]) -> GameState:
        return self.dispatch(SelectElementAction(Element(element)))

    def select_spell_shape(self, shape: Union[SpellShape, str]) -> GameState:
        return self.dispatch(SelectSpellShapeAction(SpellShape(shape)))

    def restart(self) -> GameState:
        """Re-initialize the whole battle at wave 1."""
        self.state = self.wave_manager.create_initial_state()
        self._publish_log("Battle restarted")
        return self.state

    # ============== Queries ==============

    def affected_tiles(self, target: Optional[Vector2] = None) -> set[Vector2]:
        """Preview the tiles the current loadout would cover at ``target``."""
        if target is None:
            return set()
        player = self.state.player
        return calculate_affected_tiles(
            player.selected_shape, target, player.position, player.facing,
            self.state.game_map.size,
        )
