"""
Battle log.

Game components never write logs directly. They emit LogMessage and
DebugMessage events into the turn's workspace; once the turn commits, the
engine publishes them and the LogManager, subscribed on the EventManager,
turns them into LogEntry records.

Entries are keyed by battle turn rather than wall-clock time so that two runs
of the same seeded battle produce the same log.
"""
import os
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from enum import Enum, auto
from typing import Optional, TYPE_CHECKING

from ...core.events.events import EventType, GameEvent, LogMessage, DebugMessage

if TYPE_CHECKING:
    from ...core.events.event_manager import EventManager


class LogCategory(Enum):
    """What part of the battle a message is about."""
    SYSTEM = auto()       # Battle setup, restarts, saving
    BATTLE = auto()       # Spells and attacks
    MOVEMENT = auto()     # Player and unit movement
    AI = auto()           # Enemy and minion decisions
    STATUS = auto()       # Burn, frozen and burning terrain
    LOOT = auto()         # Drops and pickups
    PROGRESSION = auto()  # XP, level-ups, unlocks
    WAVE = auto()         # Wave transitions and battle end
    DEBUG = auto()
    WARNING = auto()
    ERROR = auto()


class LogLevel(Enum):
    """Severity, ordered for threshold filtering."""
    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


CATEGORY_TAGS = {
    LogCategory.SYSTEM: "SYS",
    LogCategory.BATTLE: "BTL",
    LogCategory.MOVEMENT: "MOV",
    LogCategory.AI: "AI",
    LogCategory.STATUS: "STS",
    LogCategory.LOOT: "LOT",
    LogCategory.PROGRESSION: "PRG",
    LogCategory.WAVE: "WAV",
    LogCategory.DEBUG: "DBG",
    LogCategory.WARNING: "WRN",
    LogCategory.ERROR: "ERR",
}

# Categories that stay hidden until the log level drops to theirs
CATEGORY_MIN_LEVELS = {
    LogCategory.DEBUG: LogLevel.DEBUG,
    LogCategory.AI: LogLevel.DEBUG,
    LogCategory.WARNING: LogLevel.WARNING,
    LogCategory.ERROR: LogLevel.ERROR,
}


@dataclass(frozen=True)
class LogEntry:
    """One line of the battle log."""
    text: str
    category: LogCategory
    level: LogLevel = LogLevel.INFO
    turn: int = 0
    source: str = ""

    @property
    def effective_level(self) -> LogLevel:
        return CATEGORY_MIN_LEVELS.get(self.category, self.level)

    def format(self, include_turn: bool = False, include_category: bool = True) -> str:
        """Render the entry, e.g. ``T3 [BTL] Fire ball hits enemy_3 for 30``."""
        parts = []
        if include_turn:
            parts.append(f"T{self.turn}")
        if include_category:
            parts.append(f"[{CATEGORY_TAGS[self.category]}]")
        parts.append(self.text)
        return " ".join(parts)


def _lookup(enum_cls, name: str, default):
    try:
        return enum_cls[name.upper()]
    except KeyError:
        return default


class LogManager:
    """Collects the battle log from the event bus, with category and level filters."""

    def __init__(
        self,
        event_manager: "EventManager",
        max_messages: int = 1000,
        default_level: LogLevel = LogLevel.INFO
    ):
        """Initialize the log manager.

        Args:
            event_manager: Bus to collect LogMessage/DebugMessage events from
            max_messages: Oldest entries are dropped beyond this many
            default_level: Minimum level shown by ``get_messages``
        """
        self.messages: deque[LogEntry] = deque(maxlen=max_messages)
        self.log_level = default_level
        self.enabled_categories = set(LogCategory)
        self.event_manager = event_manager
        self.last_turn = 0

        event_manager.subscribe(EventType.LOG_MESSAGE, self._on_log_message,
                                subscriber_name="LogManager.log_message")
        event_manager.subscribe(EventType.DEBUG_MESSAGE, self._on_debug_message,
                                subscriber_name="LogManager.debug_message")

    # ============== Event handlers ==============

    def _on_log_message(self, event: GameEvent) -> None:
        if not isinstance(event, LogMessage):
            return
        self._append(LogEntry(
            event.message,
            _lookup(LogCategory, event.category, LogCategory.SYSTEM),
            _lookup(LogLevel, event.level, LogLevel.INFO),
            event.turn,
            event.source,
        ))

    def _on_debug_message(self, event: GameEvent) -> None:
        if not isinstance(event, DebugMessage):
            return
        text = event.message
        if event.context:
            details = ", ".join(f"{key}={value}" for key, value in event.context.items())
            text = f"{text} ({details})"
        self._append(LogEntry(text, LogCategory.DEBUG, LogLevel.DEBUG, event.turn, event.source))

    def _append(self, entry: LogEntry) -> None:
        self.messages.append(entry)
        self.last_turn = max(self.last_turn, entry.turn)

    # ============== Direct logging ==============

    def log(self, text: str, category: LogCategory = LogCategory.SYSTEM,
            level: LogLevel = LogLevel.INFO) -> None:
        """Add an entry outside of turn resolution, stamped with the latest turn seen."""
        self._append(LogEntry(text, category, level, self.last_turn, "LogManager"))

    def system(self, text: str) -> None:
        self.log(text, LogCategory.SYSTEM)

    def warning(self, text: str) -> None:
        self.log(text, LogCategory.WARNING, LogLevel.WARNING)

    def error(self, text: str) -> None:
        self.log(text, LogCategory.ERROR, LogLevel.ERROR)

    # ============== Queries ==============

    def is_visible(self, entry: LogEntry) -> bool:
        """Whether the current category and level filters show ``entry``."""
        return (entry.category in self.enabled_categories
                and entry.effective_level.value >= self.log_level.value)

    def get_messages(self, count: Optional[int] = None,
                     categories: Optional[set[LogCategory]] = None) -> list[LogEntry]:
        """Get recent entries.

        Args:
            count: Maximum number of entries to return (None for all)
            categories: Only these categories, regardless of log level
                (None applies the level and category filters)

        Returns:
            Matching entries, oldest first
        """
        if categories:
            filtered = [msg for msg in self.messages
                        if msg.category in categories and msg.category in self.enabled_categories]
        else:
            filtered = [msg for msg in self.messages if self.is_visible(msg)]

        if count is not None and count < len(filtered):
            return filtered[-count:]
        return filtered

    def get_turn_messages(self, turn: Optional[int] = None) -> list[LogEntry]:
        """Visible entries produced in ``turn`` (the latest turn if omitted)."""
        turn = self.last_turn if turn is None else turn
        return [msg for msg in self.messages if msg.turn == turn and self.is_visible(msg)]

    def get_formatted_messages(self, count: Optional[int] = None,
                               include_turn: bool = True) -> list[str]:
        return [msg.format(include_turn=include_turn) for msg in self.get_messages(count)]

    # ============== Filters ==============

    def clear(self) -> None:
        self.messages.clear()
        self.last_turn = 0

    def enable_category(self, category: LogCategory) -> None:
        self.enabled_categories.add(category)

    def disable_category(self, category: LogCategory) -> None:
        self.enabled_categories.discard(category)

    def set_log_level(self, level: LogLevel) -> None:
        self.log_level = level

    def is_debug_enabled(self) -> bool:
        return (LogCategory.DEBUG in self.enabled_categories
                and self.log_level == LogLevel.DEBUG)

    def set_debug(self, enabled: bool) -> None:
        """Show or hide debug and AI entries."""
        if enabled:
            self.enable_category(LogCategory.DEBUG)
            self.set_log_level(LogLevel.DEBUG)
        else:
            self.disable_category(LogCategory.DEBUG)
            self.set_log_level(LogLevel.INFO)

    def toggle_debug(self) -> None:
        self.set_debug(not self.is_debug_enabled())

    # ============== Persistence ==============

    def save_log_to_file(self, log_dir: str = "logs") -> Optional[str]:
        """Write every stored entry, ignoring display filters, to a timestamped file.

        Returns:
            Path of the written file, or None if it could not be written
        """
        now = datetime.now()
        filepath = os.path.join(log_dir, f"battle_{now.strftime('%Y%m%d_%H%M%S')}.log")

        try:
            os.makedirs(log_dir, exist_ok=True)
            with open(filepath, 'w', encoding='utf-8') as f:
                f.write("Wizard Grid - Battle Log\n")
                f.write(f"Generated: {now.strftime('%Y-%m-%d %H:%M:%S')}\n")
                f.write("=" * 60 + "\n")

                if not self.messages:
                    f.write("\nNo messages to save.\n")
                current_turn = None
                for msg in self.messages:
                    if msg.turn != current_turn:
                        current_turn = msg.turn
                        f.write(f"\n--- Turn {current_turn} ---\n")
                    source = f" ({msg.source})" if msg.source else ""
                    f.write(f"[{msg.level.name:<7}] [{msg.category.name}] {msg.text}{source}\n")
        except OSError as e:
            self.error(f"Failed to save battle log: {e}")
            return None

        self.system(f"Battle log saved to {filepath}")
        return filepath
