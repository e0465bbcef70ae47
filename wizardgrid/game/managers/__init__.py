"""Turn-pipeline managers and battle logging."""

from .hazard_manager import HazardManager
from .log_manager import LogManager, LogCategory, LogLevel, LogEntry
from .loot_manager import LootManager
from .progression_manager import ProgressionManager
from .wave_manager import WaveManager

__all__ = [
    "HazardManager",
    "LogManager",
    "LogCategory",
    "LogLevel",
    "LogEntry",
    "LootManager",
    "ProgressionManager",
    "WaveManager",
]
