#!/usr/bin/env python3
"""
Scripted battle demo.

Plays a short fixed sequence of operations against a scenario and prints an
ASCII view of each snapshot together with the battle log.

Usage:
    python demos/demo.py [scenario.yaml] [--seed N]
"""

import argparse
import os
import sys

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from wizardgrid import Direction, GameState, ScenarioLoader, TurnEngine
from wizardgrid.core.data.game_enums import TileType


TILE_GLYPHS = {
    TileType.EMPTY: ".",
    TileType.OBSTACLE: "#",
    TileType.WATER: "~",
    TileType.FOREST: "T",
    TileType.CORPSE: "x",
    TileType.ITEM: "!",
}


def render(state: GameState) -> str:
    """Draw the grid with the player (@), enemies (first letter) and minions (m)."""
    size = state.game_map.size
    rows = [[TILE_GLYPHS[TileType(int(state.game_map.tiles[y, x]))] for x in range(size)]
            for y in range(size)]
    for minion in state.minions:
        rows[minion.position.y][minion.position.x] = "m"
    for enemy in state.enemies:
        rows[enemy.position.y][enemy.position.x] = enemy.enemy_type.name[0]
    rows[state.player.position.y][state.player.position.x] = "@"

    player = state.player
    header = (f"Turn {state.turn}  Wave {state.wave}  {state.game_status.name}  "
              f"HP {player.health}/{player.max_health}  MP {player.mana}/{player.max_mana}  "
              f"Lv {player.level} ({player.xp} xp)")
    return "\n".join([header] + ["".join(row) for row in rows])


def scripted_turns(engine: TurnEngine):
    """Yield (label, operation) pairs for the demo script."""
    yield "move right", lambda: engine.move(Direction.RIGHT)
    yield "move down", lambda: engine.move(Direction.DOWN)
    yield "fireball at (2, 2)", lambda: engine.cast_spell_at(2, 2)
    yield "focus", engine.focus
    yield "fireball at (2, 2)", lambda: engine.cast_spell_at(2, 2)
    yield "dash right", lambda: engine.dash(Direction.RIGHT)
    yield "wait", engine.wait
    for enemy in engine.state.enemies:
        yield (f"fireball at {enemy.position.to_xy()}",
               lambda e=enemy: engine.cast_spell_at(*_current_position(engine, e.id)))


def _current_position(engine: TurnEngine, enemy_id: str) -> tuple[int, int]:
    for enemy in engine.state.enemies:
        if enemy.id == enemy_id:
            return enemy.position.to_xy()
    return engine.state.player.position.to_xy()


def main():
    parser = argparse.ArgumentParser(description="Scripted wizardgrid battle")
    parser.add_argument("scenario", nargs="?", help="Scenario YAML file (default: packaged battle)")
    parser.add_argument("--seed", type=int, default=7, help="Seed for loot rolls")
    args = parser.parse_args()

    scenario = ScenarioLoader.load_from_file(args.scenario) if args.scenario else None
    engine = TurnEngine(scenario, seed=args.seed)

    print(f"=== {engine.scenario.name} ===")
    if engine.scenario.description:
        print(engine.scenario.description)
    print(render(engine.state))

    for label, operation in scripted_turns(engine):
        if not engine.state.is_playing:
            break
        state = operation()
        print(f"\n> {label}")
        print(render(state))

    print("\n=== Battle log ===")
    for line in engine.log_manager.get_formatted_messages():
        print(line)


if __name__ == "__main__":
    main()
