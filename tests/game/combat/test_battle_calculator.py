"""
Unit tests for the BattleCalculator system.

Tests spell damage multipliers and enemy attack damage.
"""

import pytest

from wizardgrid.core.data.game_enums import Element, EnemyType, TileType
from wizardgrid.game.combat.battle_calculator import BattleCalculator, round_half_up
from wizardgrid.game.entities.unit_templates import create_enemy

from test_utils import at


def goblin(weakness=None, resistance=None, enemy_id="enemy_1", position=(5, 5)):
    return create_enemy(enemy_id, EnemyType.GOBLIN, at(*position),
                        weakness=weakness, resistance=resistance)


class TestRounding:
    """Half values round up."""

    @pytest.mark.parametrize("value, expected", [(2.5, 3), (2.49, 2), (37.5, 38), (11.25, 11), (0.0, 0)])
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected


class TestSpellDamage:
    """Test spell damage calculation."""

    def test_base_damage(self, rules):
        damage = BattleCalculator.calculate_spell_damage(
            Element.FIRE, 0, TileType.EMPTY, TileType.EMPTY, goblin(), rules
        )
        assert damage == 30

    def test_spell_power_added_before_multipliers(self, rules):
        damage = BattleCalculator.calculate_spell_damage(
            Element.EARTH, 4, TileType.EMPTY, TileType.EMPTY, goblin(weakness=Element.EARTH), rules
        )
        # (20 + 4) * 1.5
        assert damage == 36

    def test_water_caster_bonus(self, rules):
        damage = BattleCalculator.calculate_spell_damage(
            Element.WATER, 0, TileType.WATER, TileType.EMPTY, goblin(), rules
        )
        # 25 * 1.25 = 31.25
        assert damage == 31

    def test_fire_on_water_penalty(self, rules):
        damage = BattleCalculator.calculate_spell_damage(
            Element.FIRE, 0, TileType.EMPTY, TileType.WATER, goblin(), rules
        )
        assert damage == 23  # 22.5 rounds up

    def test_resistance(self, rules):
        damage = BattleCalculator.calculate_spell_damage(
            Element.AIR, 0, TileType.EMPTY, TileType.EMPTY, goblin(resistance=Element.AIR), rules
        )
        assert damage == 8  # 7.5 rounds up

    def test_multipliers_compound(self, rules):
        multiplier = BattleCalculator.spell_damage_multiplier(
            Element.WATER, TileType.WATER, TileType.EMPTY, goblin(weakness=Element.WATER), rules
        )
        assert multiplier == pytest.approx(1.875)
        damage = BattleCalculator.calculate_spell_damage(
            Element.WATER, 0, TileType.WATER, TileType.EMPTY, goblin(weakness=Element.WATER), rules
        )
        assert damage == 47  # 46.875

    def test_fire_water_and_weakness(self, rules):
        damage = BattleCalculator.calculate_spell_damage(
            Element.FIRE, 0, TileType.EMPTY, TileType.WATER, goblin(weakness=Element.FIRE), rules
        )
        assert damage == 34  # 30 * 0.75 * 1.5 = 33.75

    def test_unrelated_weakness_ignored(self, rules):
        damage = BattleCalculator.calculate_spell_damage(
            Element.FIRE, 0, TileType.EMPTY, TileType.EMPTY, goblin(weakness=Element.AIR), rules
        )
        assert damage == 30


class TestEnemyAttackDamage:
    """Test enemy attack damage."""

    def test_goblin_swarm_bonus(self, rules):
        attacker = goblin()
        others = [
            attacker,
            goblin(enemy_id="enemy_2", position=(5, 7)),
            goblin(enemy_id="enemy_3", position=(8, 5)),
            goblin(enemy_id="enemy_4", position=(9, 9)),
            create_enemy("enemy_5", EnemyType.OGRE, at(5, 6)),
        ]
        nearby = BattleCalculator.count_nearby_goblins(attacker, others, rules.goblin_swarm_radius)
        assert nearby == 2

        damage = BattleCalculator.calculate_enemy_attack_damage(attacker, TileType.EMPTY, nearby, rules)
        assert damage == 14

    def test_archer_forest_penalty(self, rules):
        archer = create_enemy("enemy_1", EnemyType.ARCHER, at(0, 0))
        assert BattleCalculator.calculate_enemy_attack_damage(archer, TileType.EMPTY, 0, rules) == 8
        assert BattleCalculator.calculate_enemy_attack_damage(archer, TileType.FOREST, 0, rules) == 4

    def test_ogre_damage(self, rules):
        ogre = create_enemy("enemy_1", EnemyType.OGRE, at(0, 0))
        assert BattleCalculator.calculate_enemy_attack_damage(ogre, TileType.FOREST, 3, rules) == 20
