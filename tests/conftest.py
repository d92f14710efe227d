import pytest

from game.neon_swarm.config import GameConfig
from game.neon_swarm.simulation import SwarmSimulation


def quiet_config(**overrides) -> GameConfig:
    """Default config with random enemy fire switched off"""
    data = {"enemy_fire_chance": 0.0, "shooter_fire_bonus": 0.0}
    data.update(overrides)
    return GameConfig.from_dict(data)


@pytest.fixture
def sim():
    s = SwarmSimulation(quiet_config(), seed=0)
    s.start_game()
    return s
