"""
Unit tests for player action validation and immediate effects.

Actions are executed directly against a workspace here; the turn pipeline
that follows a turn-consuming action is covered in test_turn_manager.
"""

from dataclasses import replace
from unittest.mock import patch

import pytest

from wizardgrid.core.data.game_enums import (
    Direction, Element, EnemyType, ItemType, SpellShape, TileType,
)
from wizardgrid.core.data.game_info import SPELL_SHAPE_DATA
from wizardgrid.core.events.events import EventType
from wizardgrid.game.actions import (
    ActionValidation, CastSpellAction, DashAction, FocusAction, MoveAction,
    SelectElementAction, SelectSpellShapeAction, UseItemAction, WaitAction,
)
from wizardgrid.game.combat.combat_resolver import CombatResolver

from test_utils import AssertionHelpers, at


def run(action, builder, rules):
    """Validate against the built snapshot, then execute on a workspace."""
    state = builder.build()
    validation = action.validate(state, rules)
    workspace = builder.workspace()
    if validation.is_valid:
        action.execute(workspace, CombatResolver(rules), rules)
    return validation, workspace


class TestActionValidation:
    """Test the validation result type."""

    def test_factories(self):
        assert ActionValidation.valid().is_valid
        invalid = ActionValidation.invalid("nope")
        assert not invalid.is_valid
        assert invalid.reason == "nope"


class TestMove:
    """Test MoveAction."""

    def test_move_and_face(self, builder, rules):
        _, workspace = run(MoveAction(Direction.RIGHT), builder.with_player(2, 2), rules)

        assert workspace.player.position == at(3, 2)
        assert workspace.player.facing == Direction.RIGHT

    @pytest.mark.parametrize("blocker", ["obstacle", "corpse", "edge"])
    def test_blocked_move_still_turns(self, builder, rules, blocker):
        if blocker == "obstacle":
            builder.with_player(2, 2).with_obstacles((2, 1))
        elif blocker == "corpse":
            builder.with_player(2, 2).with_corpse(2, 1)
        else:
            builder.with_player(2, 0)

        validation, workspace = run(MoveAction(Direction.UP), builder, rules)

        assert validation.is_valid
        assert workspace.player.position == builder.player.position
        assert workspace.player.facing == Direction.UP

    def test_water_and_forest_are_walkable(self, builder, rules):
        _, workspace = run(MoveAction(Direction.DOWN), builder.with_player(1, 1).with_water((1, 2)), rules)
        assert workspace.player.position == at(1, 2)

        builder.with_forest((1, 2))
        _, workspace = run(MoveAction(Direction.DOWN), builder, rules)
        assert workspace.player.position == at(1, 2)

    def test_enemies_do_not_block_the_player(self, builder, rules):
        _, workspace = run(MoveAction(Direction.RIGHT), builder.with_player(1, 1).with_enemy(2, 1), rules)

        assert workspace.player.position == at(2, 1)

    def test_pick_up_item(self, builder, rules):
        _, workspace = run(
            MoveAction(Direction.RIGHT),
            builder.with_player(1, 1).with_item(2, 1, ItemType.MANA_POTION),
            rules,
        )

        assert [item.item_type for item in workspace.player.inventory] == [ItemType.MANA_POTION]
        assert workspace.game_map.get_tile(at(2, 1)) == TileType.EMPTY
        AssertionHelpers.assert_event_types(workspace.events, EventType.ITEM_PICKED_UP)


class TestDash:
    """Test DashAction."""

    def test_dash_full_distance(self, builder, rules):
        _, workspace = run(DashAction(Direction.RIGHT), builder.with_player(1, 1), rules)

        player = workspace.player
        assert player.position == at(4, 1)
        assert player.mana == 85
        assert player.dash_cooldown == rules.dash_cooldown
        assert player.facing == Direction.RIGHT

    def test_dash_stops_before_obstacle(self, builder, rules):
        _, workspace = run(DashAction(Direction.RIGHT), builder.with_player(1, 1).with_obstacles((3, 1)), rules)

        assert workspace.player.position == at(2, 1)

    def test_dash_stops_at_edge(self, builder, rules):
        _, workspace = run(DashAction(Direction.LEFT), builder.with_player(1, 1), rules)

        assert workspace.player.position == at(0, 1)

    def test_dash_collects_items_along_the_way(self, builder, rules):
        _, workspace = run(
            DashAction(Direction.DOWN),
            builder.with_player(0, 0).with_item(0, 1).with_item(0, 3, ItemType.MANA_POTION),
            rules,
        )

        assert len(workspace.player.inventory) == 2
        assert not workspace.game_map.items

    def test_dash_needs_mana(self, builder, rules):
        validation, workspace = run(DashAction(Direction.RIGHT), builder.with_player(1, 1, mana=14), rules)

        assert not validation.is_valid
        assert "mana" in validation.reason
        assert workspace.player.position == at(1, 1)

    def test_dash_on_cooldown(self, builder, rules):
        validation, _ = run(DashAction(Direction.RIGHT), builder.with_player(1, 1, dash_cooldown=1), rules)

        assert not validation.is_valid
        assert "cooldown" in validation.reason


class TestUseItem:
    """Test UseItemAction."""

    def test_health_potion_clamps(self, builder, rules):
        builder.with_player(0, 0, health=90).with_inventory(ItemType.HEALTH_POTION)
        item_id = builder.player.inventory[0].id

        _, workspace = run(UseItemAction(item_id), builder, rules)

        assert workspace.player.health == 100
        assert workspace.player.inventory == ()

    def test_mana_potion(self, builder, rules):
        builder.with_player(0, 0, mana=20).with_inventory(ItemType.MANA_POTION)

        _, workspace = run(UseItemAction(builder.player.inventory[0].id), builder, rules)

        assert workspace.player.mana == 50

    def test_missing_item(self, builder, rules):
        validation, _ = run(UseItemAction("item_99"), builder, rules)

        assert not validation.is_valid


class TestFocus:
    """Focus and wait only mark the turn as focused."""

    def test_focus_and_wait(self, builder, rules):
        for action in (FocusAction(), WaitAction()):
            validation, workspace = run(action, builder, rules)
            assert validation.is_valid
            assert action.focused
            assert action.consumes_turn
            assert workspace.player == builder.player


class TestCastSpell:
    """Test CastSpellAction."""

    def test_ball_spends_mana_and_damages(self, builder, rules):
        _, workspace = run(CastSpellAction(at(4, 4)), builder.with_enemy(4, 4), rules)

        assert workspace.player.mana == 90
        assert workspace.enemies[0].health == 20

    def test_not_enough_mana(self, builder, rules):
        validation, _ = run(CastSpellAction(at(4, 4)), builder.with_player(0, 0, mana=9), rules)

        assert not validation.is_valid

    def test_out_of_bounds_target(self, builder, rules):
        validation, _ = run(CastSpellAction(at(10, 4)), builder, rules)

        assert not validation.is_valid
        assert "outside" in validation.reason

    def test_cast_on_empty_tile_still_spends_mana(self, builder, rules):
        validation, workspace = run(CastSpellAction(at(6, 6)), builder, rules)

        assert validation.is_valid
        assert workspace.player.mana == 90

    def test_only_damaging_shapes_strike(self, builder, rules):
        harmless = replace(SPELL_SHAPE_DATA[SpellShape.BALL], deals_damage=False)
        builder.with_enemy(3, 3)

        with patch.dict(SPELL_SHAPE_DATA, {SpellShape.BALL: harmless}):
            validation, workspace = run(CastSpellAction(at(3, 3)), builder, rules)

        assert validation.is_valid
        assert workspace.player.mana == 90
        assert workspace.enemies[0].health == 50
        assert workspace.events == []

    def test_cast_does_not_turn_player(self, builder, rules):
        _, workspace = run(
            CastSpellAction(at(9, 0)),
            builder.with_player(0, 0, facing=Direction.DOWN),
            rules,
        )

        assert workspace.player.facing == Direction.DOWN

    def test_self_heal(self, builder, rules):
        builder.with_player(0, 0, health=50, selected_shape=SpellShape.SELF)

        validation, workspace = run(CastSpellAction(at(20, 20)), builder, rules)

        assert validation.is_valid
        assert workspace.player.health == 70
        assert workspace.player.mana == 85

    def test_summon(self, builder, rules):
        builder.with_player(0, 0, selected_shape=SpellShape.SUMMON)

        _, workspace = run(CastSpellAction(at(1, 0)), builder, rules)

        assert len(workspace.minions) == 1
        minion = workspace.minions[0]
        assert minion.position == at(1, 0)
        assert minion.health == rules.minion_health
        assert minion.id == "minion_1"
        assert workspace.player.mana == 75
        AssertionHelpers.assert_event_types(workspace.events, EventType.MINION_SUMMONED)

    @pytest.mark.parametrize("setup", ["water", "unit", "item"])
    def test_summon_needs_free_empty_tile(self, builder, rules, setup):
        builder.with_player(0, 0, selected_shape=SpellShape.SUMMON)
        if setup == "water":
            builder.with_water((1, 0))
        elif setup == "unit":
            builder.with_enemy(1, 0)
        else:
            builder.with_item(1, 0)

        validation, _ = run(CastSpellAction(at(1, 0)), builder, rules)

        assert not validation.is_valid

    def test_raise_dead(self, builder, rules):
        builder.with_player(0, 0, selected_shape=SpellShape.RAISE_DEAD).with_corpse(2, 2, EnemyType.OGRE)

        _, workspace = run(CastSpellAction(at(2, 2)), builder, rules)

        minion = workspace.minions[0]
        assert minion.undead_type == EnemyType.OGRE
        assert minion.position == at(2, 2)
        assert workspace.game_map.corpse_at(at(2, 2)) is None
        assert workspace.game_map.get_tile(at(2, 2)) == TileType.EMPTY
        assert workspace.player.mana == 70

    def test_raise_dead_needs_corpse(self, builder, rules):
        builder.with_player(0, 0, selected_shape=SpellShape.RAISE_DEAD)

        validation, _ = run(CastSpellAction(at(2, 2)), builder, rules)

        assert not validation.is_valid
        assert "corpse" in validation.reason


class TestSelections:
    """Selections are free and require an unlock."""

    def test_select_locked_element(self, builder, rules):
        action = SelectElementAction(Element.WATER)
        validation, _ = run(action, builder, rules)

        assert not validation.is_valid
        assert not action.consumes_turn

    def test_select_unlocked_element(self, builder, rules):
        builder.with_player(0, 0, unlocked_elements=frozenset({Element.FIRE, Element.WATER}))

        _, workspace = run(SelectElementAction(Element.WATER), builder, rules)

        assert workspace.player.selected_element == Element.WATER

    def test_select_shape(self, builder, rules):
        locked, _ = run(SelectSpellShapeAction(SpellShape.WALL), builder, rules)
        assert not locked.is_valid

        builder.with_player(0, 0, unlocked_spell_shapes=frozenset({SpellShape.BALL, SpellShape.WALL}))
        _, workspace = run(SelectSpellShapeAction(SpellShape.WALL), builder, rules)
        assert workspace.player.selected_shape == SpellShape.WALL
