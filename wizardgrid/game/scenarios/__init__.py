"""Battle scenarios and their YAML loader."""

from .scenario import BattleScenario, EnemySpawn, ItemPlacement
from .scenario_loader import ScenarioLoader, DEFAULT_SCENARIO_PATH

__all__ = [
    "BattleScenario",
    "EnemySpawn",
    "ItemPlacement",
    "ScenarioLoader",
    "DEFAULT_SCENARIO_PATH",
]
