"""Event system for publisher-subscriber communication.

This package contains the complete event-driven architecture:
- event_manager.py: Publisher-subscriber event routing
- events.py: Event definitions emitted by turn resolution
"""

from .event_manager import EventManager, EventPriority, QueuedEvent
from .events import (
    GameEvent,
    EventType,
    TurnResolved,
    ActionRejected,
    UnitDamaged,
    UnitDefeated,
    MinionSummoned,
    ItemDropped,
    ItemPickedUp,
    PlayerLeveledUp,
    SpellUnlocked,
    WaveStarted,
    GameEnded,
    LogMessage,
    DebugMessage,
)

__all__ = [
    "EventManager",
    "EventPriority",
    "QueuedEvent",
    "GameEvent",
    "EventType",
    "TurnResolved",
    "ActionRejected",
    "UnitDamaged",
    "UnitDefeated",
    "MinionSummoned",
    "ItemDropped",
    "ItemPickedUp",
    "PlayerLeveledUp",
    "SpellUnlocked",
    "WaveStarted",
    "GameEnded",
    "LogMessage",
    "DebugMessage",
]
