"""
Unit tests for XP, level-ups and unlocks.
"""

from wizardgrid.core.data.game_enums import Element, SpellShape
from wizardgrid.core.events.events import EventType
from wizardgrid.game.managers.progression_manager import ProgressionManager

from test_utils import AssertionHelpers


class TestThresholds:
    """XP needed per level."""

    def test_thresholds_grow_geometrically(self, rules):
        manager = ProgressionManager(rules)

        assert manager.xp_to_next_level(1) == 100
        assert manager.xp_to_next_level(2) == 150
        assert manager.xp_to_next_level(3) == 225
        assert manager.xp_to_next_level(4) == 338  # 337.5 rounds up


class TestGrantXP:
    """Test grant_xp."""

    def test_below_threshold(self, builder, rules):
        workspace = builder.workspace()

        levels = ProgressionManager(rules).grant_xp(workspace, 60)

        assert levels == 0
        assert workspace.player.xp == 60
        assert workspace.player.level == 1

    def test_single_level_up(self, builder, rules):
        workspace = builder.with_player(0, 0, health=40, mana=5).workspace()

        levels = ProgressionManager(rules).grant_xp(workspace, 120)

        player = workspace.player
        assert levels == 1
        assert player.level == 2
        assert player.xp == 20
        assert player.xp_to_next_level == 150
        assert player.max_health == player.health == 110
        assert player.max_mana == player.mana == 105
        assert player.spell_power == 2
        assert Element.WATER in player.unlocked_elements
        AssertionHelpers.assert_event_types(
            workspace.events, EventType.PLAYER_LEVELED_UP, EventType.SPELL_UNLOCKED
        )

    def test_multiple_level_ups_from_one_grant(self, builder, rules):
        workspace = builder.workspace()

        levels = ProgressionManager(rules).grant_xp(workspace, 260)

        player = workspace.player
        assert levels == 2
        assert player.level == 3
        assert player.xp == 10
        assert SpellShape.CONE in player.unlocked_spell_shapes
        leveled = AssertionHelpers.events_of(workspace.events, EventType.PLAYER_LEVELED_UP)
        assert [event.new_level for event in leveled] == [2, 3]

    def test_zero_xp_does_nothing(self, builder, rules):
        workspace = builder.workspace()

        assert ProgressionManager(rules).grant_xp(workspace, 0) == 0
        assert workspace.events == []

    def test_unlocks_accumulate(self, builder, rules):
        workspace = builder.workspace()
        manager = ProgressionManager(rules)

        for _ in range(8):
            manager.grant_xp(workspace, workspace.player.xp_to_next_level - workspace.player.xp)

        player = workspace.player
        assert player.level == 9
        assert player.unlocked_elements == set(Element)
        assert player.unlocked_spell_shapes == set(SpellShape)
