"""
Event bus for observing battle resolution.

The turn pipeline never calls observers directly. Each turn's events are
buffered in the workspace and handed to the bus in one batch after the
snapshot is committed; observers (the LogManager, a UI, tests) then receive
them in priority order, publish order within a priority.

The battle is single-threaded, so the bus holds no locks. A subscriber that
raises does not stop delivery: the failure is recorded and re-published as a
DebugMessage so it shows up in the battle log.
"""

from collections import defaultdict, deque
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, Optional

from .events import DebugMessage, EventType, GameEvent


class EventPriority(Enum):
    """Event processing priorities (higher value is processed first)."""
    LOW = 0
    NORMAL = 1
    HIGH = 2
    CRITICAL = 3


@dataclass(frozen=True)
class QueuedEvent:
    """An event waiting on the bus, with its delivery metadata."""
    event: GameEvent
    priority: EventPriority = EventPriority.NORMAL
    sequence: int = 0
    source: str = "unknown"

    def __lt__(self, other: "QueuedEvent") -> bool:
        if self.priority is not other.priority:
            return self.priority.value > other.priority.value
        return self.sequence < other.sequence


EventSubscriber = Callable[[GameEvent], None]


class EventManager:
    """Queued publish/subscribe bus for battle events."""

    def __init__(self, history_size: int = 1000, trace: bool = False):
        """Initialize the event bus.

        Args:
            history_size: Number of delivered events kept for inspection
            trace: Record a line for every subscribe/publish/deliver step
        """
        self.trace = trace

        self._subscribers: dict[EventType, list[EventSubscriber]] = defaultdict(list)
        self._universal_subscribers: list[EventSubscriber] = []

        self._queue: list[QueuedEvent] = []
        self._sequence = 0
        self._events_processed = 0

        self._history: deque[QueuedEvent] = deque(maxlen=history_size)
        self._subscriber_errors: list[str] = []
        self._trace_lines: deque[str] = deque(maxlen=history_size)

    def _trace(self, message: str) -> None:
        if self.trace:
            self._trace_lines.append(message)

    @staticmethod
    def _name(subscriber: EventSubscriber, given: Optional[str] = None) -> str:
        return given or getattr(subscriber, '__qualname__', None) or repr(subscriber)

    # ============== Subscriptions ==============

    def subscribe(
        self,
        event_type: EventType,
        subscriber: EventSubscriber,
        subscriber_name: Optional[str] = None
    ) -> None:
        """Deliver events of ``event_type`` to ``subscriber``."""
        self._subscribers[event_type].append(subscriber)
        self._trace(f"{self._name(subscriber, subscriber_name)} subscribed to {event_type.name}")

    def subscribe_all(
        self,
        subscriber: EventSubscriber,
        subscriber_name: Optional[str] = None
    ) -> None:
        """Deliver every event to ``subscriber``, after the type-specific ones."""
        self._universal_subscribers.append(subscriber)
        self._trace(f"{self._name(subscriber, subscriber_name)} subscribed to ALL")

    def unsubscribe(self, event_type: EventType, subscriber: EventSubscriber) -> bool:
        """Remove a type-specific subscription.

        Returns:
            True if the subscriber was registered for ``event_type``
        """
        subscribers = self._subscribers.get(event_type, [])
        if subscriber not in subscribers:
            return False
        subscribers.remove(subscriber)
        self._trace(f"{self._name(subscriber)} unsubscribed from {event_type.name}")
        return True

    # ============== Publishing ==============

    def publish(
        self,
        event: GameEvent,
        priority: EventPriority = EventPriority.NORMAL,
        source: Optional[str] = None
    ) -> None:
        """Queue an event for the next ``process_events`` call."""
        self._sequence += 1
        queued = QueuedEvent(event, priority, self._sequence, source or "unknown")
        self._queue.append(queued)
        self._trace(f"T{event.turn} queued {type(event).__name__} from {queued.source} "
                    f"({priority.name})")

    def publish_batch(
        self,
        events: Iterable[GameEvent],
        source: Optional[str] = None,
        priority: EventPriority = EventPriority.NORMAL
    ) -> int:
        """Queue a committed turn's events, keeping their emission order.

        Returns:
            Number of events queued
        """
        count = 0
        for event in events:
            self.publish(event, priority, source)
            count += 1
        return count

    # ============== Delivery ==============

    def process_events(self, max_events: Optional[int] = None) -> int:
        """Deliver queued events, highest priority first.

        Events published by subscribers during delivery are queued and
        delivered in the same call unless ``max_events`` is reached.

        Args:
            max_events: Stop after this many deliveries (None for all)

        Returns:
            Number of events delivered
        """
        delivered = 0
        while self._queue:
            if max_events is not None and delivered >= max_events:
                break
            self._queue.sort()
            self._deliver(self._queue.pop(0))
            delivered += 1
        return delivered

    def _deliver(self, queued: QueuedEvent) -> None:
        event = queued.event
        self._history.append(queued)
        self._events_processed += 1
        self._trace(f"T{event.turn} delivering {type(event).__name__}")

        subscribers = list(self._subscribers.get(event.event_type, []))
        subscribers.extend(self._universal_subscribers)

        for subscriber in subscribers:
            try:
                subscriber(event)
            except Exception as e:
                name = self._name(subscriber)
                self._subscriber_errors.append(f"{name}: {e}")
                self._trace(f"T{event.turn} {name} failed on {type(event).__name__}: {e}")
                # A failing debug handler is only recorded, never re-reported
                if event.event_type != EventType.DEBUG_MESSAGE:
                    self.publish(
                        DebugMessage(event.turn, f"Observer {name} failed on "
                                     f"{type(event).__name__}: {e}", "EventManager"),
                        priority=EventPriority.LOW,
                        source="EventManager",
                    )

    def clear_queue(self) -> int:
        """Drop undelivered events.

        Returns:
            Number of events dropped
        """
        count = len(self._queue)
        self._queue.clear()
        self._trace(f"dropped {count} queued events")
        return count

    def has_queued_events(self) -> bool:
        return bool(self._queue)

    # ============== Inspection ==============

    def get_statistics(self) -> dict[str, Any]:
        """Counters for publishing, delivery and subscriptions."""
        return {
            'events_published': self._sequence,
            'events_processed': self._events_processed,
            'events_queued': len(self._queue),
            'subscribers_count': sum(len(subs) for subs in self._subscribers.values()),
            'universal_subscribers_count': len(self._universal_subscribers),
            'event_history_size': len(self._history),
            'subscriber_errors': len(self._subscriber_errors),
        }

    def get_recent_events(
        self,
        count: int = 10,
        event_type: Optional[EventType] = None,
        turn: Optional[int] = None
    ) -> list[GameEvent]:
        """Most recently delivered events, oldest first.

        Args:
            count: Maximum number of events to return
            event_type: Only events of this type
            turn: Only events produced in this turn
        """
        matching = [
            queued.event for queued in self._history
            if (event_type is None or queued.event.event_type == event_type)
            and (turn is None or queued.event.turn == turn)
        ]
        return matching[-count:] if count > 0 else []

    def get_subscriber_errors(self) -> list[str]:
        """Errors raised by subscribers, oldest first."""
        return list(self._subscriber_errors)

    def get_trace(self) -> list[str]:
        return list(self._trace_lines)
