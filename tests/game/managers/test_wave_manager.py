"""
Unit tests for battle setup and wave transitions.
"""

from dataclasses import replace

from wizardgrid.core.data.game_enums import (
    Direction, EnemyType, GameStatus, ItemType, TileType,
)
from wizardgrid.core.engine.game_state import BattleWorkspace
from wizardgrid.core.events.events import EventType
from wizardgrid.game.entities.map_objects import Corpse
from wizardgrid.game.managers.wave_manager import WaveManager
from wizardgrid.game.scenarios.scenario import EnemySpawn, ItemPlacement

from test_utils import AssertionHelpers, at, make_scenario


class TestInitialState:
    """Test create_initial_state."""

    def test_initial_state(self, small_scenario):
        state = WaveManager(small_scenario).create_initial_state()

        assert state.wave == 1
        assert state.turn == 0
        assert state.game_status == GameStatus.PLAYING
        assert state.player.position == at(0, 0)
        assert [e.id for e in state.enemies] == ["enemy_1"]
        assert state.minions == ()
        assert state.game_map.is_frozen

    def test_items_are_created_before_enemies(self):
        scenario = make_scenario(items=(
            ItemPlacement(ItemType.HEALTH_POTION, at(2, 2)),
            ItemPlacement(ItemType.MANA_POTION, at(3, 2)),
        ))

        state = WaveManager(scenario).create_initial_state()

        assert state.game_map.item_at(at(2, 2)).id == "item_1"
        assert state.game_map.item_at(at(3, 2)).id == "item_2"
        assert state.enemies[0].id == "enemy_3"
        assert state.id_counter == 3

    def test_spawn_modifiers(self):
        scenario = make_scenario(waves={
            1: (EnemySpawn(EnemyType.OGRE, at(4, 4), resistance=None, health=30),),
        })

        enemy = WaveManager(scenario).create_initial_state().enemies[0]

        assert enemy.enemy_type == EnemyType.OGRE
        assert enemy.health == 30


class TestWaveTransitions:
    """Test check_wave_complete."""

    def _cleared_workspace(self, scenario) -> BattleWorkspace:
        state = WaveManager(scenario).create_initial_state()
        workspace = BattleWorkspace(state)
        workspace.enemies = []
        return workspace

    def test_enemies_remaining(self, small_scenario):
        state = WaveManager(small_scenario).create_initial_state()
        workspace = BattleWorkspace(state)

        assert not WaveManager(small_scenario).check_wave_complete(workspace)
        assert workspace.wave == 1

    def test_next_wave_resets_field(self, small_scenario):
        manager = WaveManager(small_scenario)
        workspace = self._cleared_workspace(small_scenario)
        workspace.player = replace(
            workspace.player, position=at(6, 6), level=3, xp=40, mana=12, facing=Direction.LEFT,
        )
        workspace.minions = []
        workspace.game_map.place_corpse(at(4, 4), Corpse("enemy_1", at(4, 4), EnemyType.GOBLIN))
        workspace.game_map.set_tile(at(1, 1), TileType.OBSTACLE)

        assert manager.check_wave_complete(workspace)

        assert workspace.wave == 2
        assert workspace.player.position == small_scenario.player_start
        assert workspace.player.level == 3
        assert workspace.player.xp == 40
        assert workspace.player.mana == 12
        assert workspace.player.facing == Direction.LEFT
        assert not workspace.game_map.corpses
        assert workspace.game_map.get_tile(at(1, 1)) == TileType.EMPTY
        assert [e.position for e in workspace.enemies] == [at(7, 7)]
        assert workspace.enemies[0].id == "enemy_2"
        AssertionHelpers.assert_event_types(workspace.events, EventType.WAVE_STARTED)

    def test_next_wave_removes_minions(self, small_scenario):
        from wizardgrid.game.entities.unit_templates import create_minion

        workspace = self._cleared_workspace(small_scenario)
        workspace.minions = [create_minion("minion_9", at(3, 3), small_scenario.rules)]

        WaveManager(small_scenario).check_wave_complete(workspace)

        assert workspace.minions == []

    def test_final_wave_is_victory(self, small_scenario):
        manager = WaveManager(small_scenario)
        workspace = self._cleared_workspace(small_scenario)
        workspace.wave = 2

        assert manager.check_wave_complete(workspace)

        assert workspace.game_status == GameStatus.VICTORY
        assert workspace.wave == 2
        AssertionHelpers.assert_event_types(workspace.events, EventType.GAME_ENDED)

    def test_no_transition_after_game_over(self, small_scenario):
        workspace = self._cleared_workspace(small_scenario)
        workspace.game_status = GameStatus.GAME_OVER

        assert not WaveManager(small_scenario).check_wave_complete(workspace)
        assert workspace.wave == 1

    def test_default_items_respawn_with_fresh_ids(self):
        scenario = make_scenario(items=(ItemPlacement(ItemType.HEALTH_POTION, at(2, 2)),))
        workspace = self._cleared_workspace(scenario)
        workspace.game_map.take_item(at(2, 2))

        WaveManager(scenario).check_wave_complete(workspace)

        respawned = workspace.game_map.item_at(at(2, 2))
        assert respawned is not None
        assert respawned.id == "item_3"
        assert workspace.enemies[0].id == "enemy_4"
