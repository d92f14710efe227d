"""Neon Swarm - fixed-formation arcade shooter simulation"""

from .config import GameConfig
from .simulation import FrameSnapshot, SwarmSimulation
from .state import GameStatus
from .swarm_env import SwarmEnv, run_random_episode

__all__ = ['GameConfig', 'FrameSnapshot', 'SwarmSimulation', 'GameStatus', 'SwarmEnv', 'run_random_episode']
