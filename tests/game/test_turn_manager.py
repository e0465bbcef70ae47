"""
Unit tests for the fixed-order turn pipeline.
"""

from wizardgrid.core.data.game_enums import EnemyType, GameStatus, StatusEffectType, TileType
from wizardgrid.core.events.events import EventType

from test_utils import AssertionHelpers, FixedRandom, at


def no_loot():
    """Generator stand-in whose loot rolls always miss."""
    return FixedRandom([0.99] * 10)


class TestMinionPhase:
    """Minions act before enemies, in roster order."""

    def test_minion_attacks_adjacent_enemy(self, builder, turn_manager):
        workspace = builder.with_player(9, 9).with_minion(3, 3).with_enemy(4, 3).workspace()

        turn_manager.process_minion_phase(workspace)

        assert workspace.enemies[0].health == 35

    def test_minions_do_not_share_tiles(self, builder, turn_manager):
        workspace = (
            builder.with_player(9, 9)
            .with_minion(0, 5).with_minion(0, 4)
            .with_enemy(0, 0)
            .workspace()
        )

        turn_manager.process_minion_phase(workspace)

        # The first minion is blocked by the second, which then moves up
        assert workspace.minions[0].position == at(0, 5)
        assert workspace.minions[1].position == at(0, 3)

    def test_minion_phase_skipped_without_enemies(self, builder, turn_manager):
        workspace = builder.with_minion(3, 3).workspace()

        turn_manager.resolve_turn(workspace, no_loot())

        assert workspace.minions[0].position == at(3, 3)


class TestEnemyPhase:
    """Enemies attack in range or close in."""

    def test_enemy_attacks_player(self, builder, turn_manager):
        workspace = builder.with_player(0, 0).with_enemy(1, 0).workspace()

        turn_manager.process_enemy_phase(workspace)

        assert workspace.player.health == 90

    def test_enemies_do_not_stack(self, builder, turn_manager):
        workspace = builder.with_player(0, 0).with_enemy(5, 0).with_enemy(6, 0).workspace()

        turn_manager.process_enemy_phase(workspace)

        assert workspace.enemies[0].position == at(4, 0)
        assert workspace.enemies[1].position == at(5, 0)

    def test_enemy_cannot_enter_tile_of_enemy_killed_this_turn(self, builder, turn_manager):
        from wizardgrid.game.combat.combat_resolver import CombatResolver

        workspace = builder.with_player(0, 0).with_enemy(3, 0).with_enemy(4, 0).workspace()
        CombatResolver.defeat_enemy(workspace, workspace.enemies[0], "Test")

        turn_manager.process_enemy_phase(workspace)

        assert workspace.enemies[0].position == at(4, 0)

    def test_frozen_enemy_skips_its_phase(self, builder, turn_manager):
        workspace = builder.with_player(0, 0).with_frozen_enemy(1, 0, turns=2).workspace()

        turn_manager.resolve_turn(workspace, no_loot())
        assert workspace.player.health == 100
        assert workspace.enemies[0].has_status(StatusEffectType.FROZEN)

        turn_manager.resolve_turn(workspace, no_loot())
        assert workspace.player.health == 90

    def test_destroyed_minion_frees_its_tile(self, builder, turn_manager):
        workspace = (
            builder.with_player(3, 0)
            .with_enemy(3, 3, EnemyType.OGRE)
            .with_minion(3, 4, health=5)
            .with_enemy(3, 5)
            .workspace()
        )

        turn_manager.process_enemy_phase(workspace)

        assert workspace.minions == []
        assert workspace.enemies[1].position == at(3, 4)

    def test_ogre_stomp_in_pipeline(self, builder, turn_manager):
        workspace = builder.with_player(4, 4).with_enemy(5, 4, EnemyType.OGRE).workspace()

        turn_manager.process_enemy_phase(workspace)

        assert workspace.player.health == 85


class TestCleanupPhase:
    """Game over, regeneration and cooldown."""

    def test_mana_regeneration(self, builder, turn_manager):
        workspace = builder.with_player(0, 0, mana=50).workspace()
        turn_manager.process_cleanup_phase(workspace, focused=False)
        assert workspace.player.mana == 52

        turn_manager.process_cleanup_phase(workspace, focused=True)
        assert workspace.player.mana == 62

    def test_mana_regen_clamped(self, builder, turn_manager):
        workspace = builder.with_player(0, 0, mana=95).workspace()

        turn_manager.process_cleanup_phase(workspace, focused=True)

        assert workspace.player.mana == 100

    def test_dash_cooldown_ticks(self, builder, turn_manager):
        workspace = builder.with_player(0, 0, dash_cooldown=3).workspace()

        turn_manager.process_cleanup_phase(workspace, focused=False)

        assert workspace.player.dash_cooldown == 2

    def test_game_over(self, builder, turn_manager):
        workspace = builder.with_player(0, 0, health=0).workspace()

        turn_manager.process_cleanup_phase(workspace, focused=False)

        assert workspace.game_status == GameStatus.GAME_OVER
        AssertionHelpers.assert_event_types(workspace.events, EventType.GAME_ENDED)


class TestFullTurn:
    """Phase ordering across one resolve_turn."""

    def test_terrain_before_status_before_enemies(self, builder, turn_manager):
        workspace = (
            builder.with_player(0, 0)
            .with_burning_enemy(2, 0, health=10)
            .with_burning_tile(2, 0)
            .workspace()
        )

        turn_manager.resolve_turn(workspace, no_loot())

        # 5 terrain + 5 burn kills it before it can move or attack
        assert workspace.enemies == []
        assert workspace.player.health == 100
        assert workspace.game_map.get_tile(at(2, 0)) == TileType.CORPSE
        assert workspace.player.xp == 25

    def test_kills_from_several_phases_share_one_loot_pass(self, builder, turn_manager):
        workspace = (
            builder.with_player(9, 9)
            .with_enemy(0, 0, health=5).with_burning_tile(0, 0)
            .with_burning_enemy(5, 5, health=5)
            .workspace()
        )

        turn_manager.resolve_turn(workspace, no_loot())

        assert set(workspace.game_map.corpses) == {at(0, 0), at(5, 5)}
        assert workspace.player.xp == 50
        assert workspace.defeated == []

    def test_player_death_is_final_after_cleanup(self, builder, turn_manager):
        workspace = builder.with_player(0, 0, health=5).with_enemy(1, 0).workspace()

        turn_manager.resolve_turn(workspace, no_loot())

        assert workspace.player.health == -5
        assert workspace.game_status == GameStatus.GAME_OVER
