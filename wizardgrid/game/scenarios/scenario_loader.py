from pathlib import Path
from typing import Any, Optional

import yaml

from ...core.data.data_structures import Vector2
from ...core.data.game_enums import Element, EnemyType, ItemType
from ...core.data.game_rules import GameRules
from .scenario import BattleScenario, EnemySpawn, ItemPlacement


DEFAULT_SCENARIO_PATH = Path(__file__).resolve().parents[2] / "assets" / "default_battle.yaml"


class ScenarioLoader:
    """Handles loading battle scenarios from YAML files.

    Coordinates in scenario files are written ``[x, y]``.
    """

    @staticmethod
    def load_from_file(file_path: str) -> BattleScenario:
        """Load a scenario from a YAML file.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file is not valid YAML or not a valid scenario
        """
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError:
            raise FileNotFoundError(f"Scenario file not found: {file_path}")
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse YAML scenario: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Scenario file {file_path} must contain a mapping")

        return ScenarioLoader.parse_scenario(data)

    @staticmethod
    def load_default() -> BattleScenario:
        """Load the scenario shipped with the package."""
        return ScenarioLoader.load_from_file(str(DEFAULT_SCENARIO_PATH))

    @staticmethod
    def parse_scenario(data: dict[str, Any]) -> BattleScenario:
        """Parse scenario data from a dictionary."""
        rules_data = dict(data.get("rules") or {})
        if "grid_size" in data:
            rules_data["grid_size"] = data["grid_size"]
        rules = GameRules.from_dict(rules_data)

        terrain = data.get("terrain") or {}
        scenario = BattleScenario(
            name=data.get("name", "Unnamed Battle"),
            description=data.get("description", ""),
            player_start=ScenarioLoader._parse_position(data.get("player_start", [0, 0]), "player_start"),
            obstacles=ScenarioLoader._parse_positions(terrain.get("obstacles"), "obstacles"),
            water=ScenarioLoader._parse_positions(terrain.get("water"), "water"),
            forest=ScenarioLoader._parse_positions(terrain.get("forest"), "forest"),
            items=tuple(
                ScenarioLoader._parse_item(item_data) for item_data in data.get("items") or []
            ),
            waves=ScenarioLoader._parse_waves(data.get("waves")),
            rules=rules,
        )

        errors = ScenarioLoader.validate_scenario(scenario)
        if errors:
            raise ValueError("Invalid scenario:\n  - " + "\n  - ".join(errors))
        return scenario

    @staticmethod
    def _parse_position(value: Any, context: str) -> Vector2:
        if not isinstance(value, (list, tuple)) or len(value) != 2:
            raise ValueError(f"{context}: position must be [x, y], got {value!r}")
        try:
            x, y = int(value[0]), int(value[1])
        except (TypeError, ValueError):
            raise ValueError(f"{context}: position must contain integers, got {value!r}")
        return Vector2.from_xy(x, y)

    @staticmethod
    def _parse_positions(values: Optional[list], context: str) -> tuple[Vector2, ...]:
        return tuple(ScenarioLoader._parse_position(value, context) for value in values or [])

    @staticmethod
    def _parse_enum(enum_cls, value: Any, context: str):
        try:
            return enum_cls(value)
        except ValueError:
            valid = ", ".join(member.value for member in enum_cls)
            raise ValueError(f"{context}: unknown value {value!r} (expected one of {valid})")

    @staticmethod
    def _parse_item(item_data: dict[str, Any]) -> ItemPlacement:
        return ItemPlacement(
            item_type=ScenarioLoader._parse_enum(ItemType, item_data.get("type"), "items"),
            position=ScenarioLoader._parse_position(item_data.get("position"), "items"),
        )

    @staticmethod
    def _parse_spawn(spawn_data: dict[str, Any], wave: int) -> EnemySpawn:
        context = f"wave {wave}"
        weakness = spawn_data.get("weakness")
        resistance = spawn_data.get("resistance")
        health = spawn_data.get("health")
        return EnemySpawn(
            enemy_type=ScenarioLoader._parse_enum(EnemyType, spawn_data.get("type"), context),
            position=ScenarioLoader._parse_position(spawn_data.get("position"), context),
            weakness=None if weakness is None else ScenarioLoader._parse_enum(Element, weakness, context),
            resistance=None if resistance is None else ScenarioLoader._parse_enum(Element, resistance, context),
            health=None if health is None else int(health),
        )

    @staticmethod
    def _parse_waves(waves_data: Optional[dict]) -> dict[int, tuple[EnemySpawn, ...]]:
        if not waves_data:
            raise ValueError("Scenario must define at least one wave")
        waves: dict[int, tuple[EnemySpawn, ...]] = {}
        for key, spawns in waves_data.items():
            try:
                wave = int(key)
            except (TypeError, ValueError):
                raise ValueError(f"Wave number must be an integer, got {key!r}")
            waves[wave] = tuple(ScenarioLoader._parse_spawn(spawn, wave) for spawn in spawns or [])
        return waves

    @staticmethod
    def validate_scenario(scenario: BattleScenario) -> list[str]:
        """Check a parsed scenario for layout problems.

        Returns:
            List of problems (empty when the scenario is valid)
        """
        errors: list[str] = []
        size = scenario.grid_size

        def in_bounds(position: Vector2) -> bool:
            return 0 <= position.x < size and 0 <= position.y < size

        blocked = set(scenario.obstacles)

        for label, positions in (
            ("obstacle", scenario.obstacles),
            ("water", scenario.water),
            ("forest", scenario.forest),
        ):
            for position in positions:
                if not in_bounds(position):
                    errors.append(f"{label} tile {position.to_xy()} is outside the {size}x{size} grid")

        if not in_bounds(scenario.player_start):
            errors.append(f"player_start {scenario.player_start.to_xy()} is outside the grid")
        elif scenario.player_start in blocked:
            errors.append(f"player_start {scenario.player_start.to_xy()} is on an obstacle")

        for placement in scenario.items:
            if not in_bounds(placement.position):
                errors.append(f"item at {placement.position.to_xy()} is outside the grid")
            elif placement.position in blocked or placement.position in scenario.water \
                    or placement.position in scenario.forest:
                errors.append(f"item at {placement.position.to_xy()} must be on an empty tile")

        if 1 not in scenario.waves:
            errors.append("waves must start at wave 1")

        for wave, spawns in sorted(scenario.waves.items()):
            if not spawns:
                errors.append(f"wave {wave} has no enemies")
            seen: set[Vector2] = set()
            for spawn in spawns:
                where = spawn.position.to_xy()
                if not in_bounds(spawn.position):
                    errors.append(f"wave {wave}: enemy at {where} is outside the grid")
                elif spawn.position in blocked:
                    errors.append(f"wave {wave}: enemy at {where} is on an obstacle")
                elif spawn.position == scenario.player_start:
                    errors.append(f"wave {wave}: enemy at {where} is on the player start")
                elif spawn.position in seen:
                    errors.append(f"wave {wave}: two enemies share {where}")
                if spawn.weakness is not None and spawn.resistance is not None:
                    errors.append(f"wave {wave}: enemy at {where} has both a weakness and a resistance")
                seen.add(spawn.position)

        return errors
