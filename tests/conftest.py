"""
Basic test fixtures for the wizardgrid test suite.

Provides simple fixtures for testing the snapshot/workspace battle core.
"""

import sys
import os

import numpy as np
import pytest

# Add the project root to the Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from wizardgrid.core.data.data_structures import Vector2
from wizardgrid.core.data.game_rules import GameRules
from wizardgrid.core.events.event_manager import EventManager
from wizardgrid.game.turn_manager import TurnManager

from test_utils import StateBuilder, make_scenario


@pytest.fixture
def rules():
    """Default battle rules."""
    return GameRules()


@pytest.fixture
def event_manager():
    """Create an event manager for testing."""
    return EventManager()


@pytest.fixture
def turn_manager(rules):
    """Turn pipeline using the default rules."""
    return TurnManager(rules)


@pytest.fixture
def rng():
    """Seeded random generator."""
    return np.random.default_rng(1234)


@pytest.fixture
def builder():
    """Fresh 10x10 state builder with the player at (0, 0)."""
    return StateBuilder(size=10)


@pytest.fixture
def small_scenario():
    """Two-wave scenario on a 10x10 grid."""
    return make_scenario()


@pytest.fixture
def sample_vector():
    """Create a sample Vector2 for testing."""
    return Vector2(2, 3)
