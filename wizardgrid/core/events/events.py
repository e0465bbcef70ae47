"""Battle events and their types.

This module defines all events that observers can subscribe to. Events are
buffered in the turn's workspace while the pipeline runs and published on the
EventManager only after the new snapshot has been committed.

Event Design Principles:
- Events are immutable dataclasses
- All events carry the turn number they were produced in
- Events use proper enums instead of magic strings where a value is typed
- Keep event types focused and avoid over-granular events
"""

from abc import ABC
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..data.data_structures import Vector2
    from ..data.game_enums import EnemyType, ItemType, GameStatus


class EventType(Enum):
    """Types of battle events that observers can subscribe to."""
    # Turn events
    TURN_RESOLVED = auto()
    ACTION_REJECTED = auto()

    # Unit events
    UNIT_DAMAGED = auto()
    UNIT_DEFEATED = auto()
    MINION_SUMMONED = auto()

    # Item events
    ITEM_DROPPED = auto()
    ITEM_PICKED_UP = auto()

    # Progression events
    PLAYER_LEVELED_UP = auto()
    SPELL_UNLOCKED = auto()

    # Battle flow events
    WAVE_STARTED = auto()
    GAME_ENDED = auto()

    # Logging events
    LOG_MESSAGE = auto()
    DEBUG_MESSAGE = auto()


@dataclass(frozen=True)
class GameEvent(ABC):
    """Base class for all battle events."""
    turn: int
    event_type: EventType = field(init=False)


@dataclass(frozen=True)
class TurnResolved(GameEvent):
    """Event emitted when the turn pipeline has finished and been committed."""
    action_name: str
    focused: bool = False

    def __post_init__(self):
        # Set event_type since dataclass frozen=True prevents normal assignment
        object.__setattr__(self, 'event_type', EventType.TURN_RESOLVED)


@dataclass(frozen=True)
class ActionRejected(GameEvent):
    """Event emitted when a player action is refused without consuming a turn."""
    action_name: str
    reason: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.ACTION_REJECTED)


@dataclass(frozen=True)
class UnitDamaged(GameEvent):
    """Event emitted when a unit takes damage from any source."""
    unit_id: str
    damage: int
    source: str  # "Spell", "Attack", "Stomp", "Terrain", "StatusEffect"

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.UNIT_DAMAGED)


@dataclass(frozen=True)
class UnitDefeated(GameEvent):
    """Event emitted when an enemy or minion is removed from play."""
    unit_id: str
    position: "Vector2"

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.UNIT_DEFEATED)


@dataclass(frozen=True)
class MinionSummoned(GameEvent):
    """Event emitted when a summon or raise-dead cast creates a minion."""
    minion_id: str
    position: "Vector2"
    undead_type: Optional["EnemyType"] = None

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.MINION_SUMMONED)


@dataclass(frozen=True)
class ItemDropped(GameEvent):
    """Event emitted when loot is placed on the grid."""
    item_id: str
    item_type: "ItemType"
    position: "Vector2"

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.ITEM_DROPPED)


@dataclass(frozen=True)
class ItemPickedUp(GameEvent):
    """Event emitted when the player walks onto an item."""
    item_id: str
    item_type: "ItemType"

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.ITEM_PICKED_UP)


@dataclass(frozen=True)
class PlayerLeveledUp(GameEvent):
    """Event emitted once per level gained."""
    new_level: int

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.PLAYER_LEVELED_UP)


@dataclass(frozen=True)
class SpellUnlocked(GameEvent):
    """Event emitted when a level-up unlocks an element or shape."""
    unlocked: str  # Element or SpellShape value

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.SPELL_UNLOCKED)


@dataclass(frozen=True)
class WaveStarted(GameEvent):
    """Event emitted when a wave's roster is spawned."""
    wave: int
    enemy_count: int

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.WAVE_STARTED)


@dataclass(frozen=True)
class GameEnded(GameEvent):
    """Event emitted when the battle reaches a terminal status."""
    status: "GameStatus"
    reason: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.GAME_ENDED)


# Logging Events
@dataclass(frozen=True)
class LogMessage(GameEvent):
    """Event emitted when a log message is created."""
    message: str
    category: str
    level: str
    source: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.LOG_MESSAGE)


@dataclass(frozen=True)
class DebugMessage(GameEvent):
    """Event emitted for debug-specific messages."""
    message: str
    source: str
    context: Optional[dict] = None

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.DEBUG_MESSAGE)
