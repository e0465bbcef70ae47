"""Game rules: grid, entities, combat, AI, managers and the turn engine."""
