"""
SwarmEnv - headless gymnasium host for the Neon Swarm simulation
----------------------------------------------------------------
- Gymnasium API around SwarmSimulation (one env step == one game tick)
- MultiDiscrete action space: [move(3), fire(2)]
  move: 0 stay, 1 left, 2 right; fire: 0 release, 1 hold
- Vector observation: ship state + formation alive mask + nearest enemy shots
- Episode terminates on GameOver, truncates after max_steps

Rendering:
- "rgb_array": numpy rasterizer, no display needed
- "human": arcade window (imported lazily)

Quick test:
    python -m game.neon_swarm.swarm_env
"""

from __future__ import annotations

import time
from typing import Any, Dict, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .config import GameConfig
from .persistence import HighScoreStore
from .render import rasterize
from .simulation import SwarmSimulation
from .state import GameStatus
from .utils import clamp


class SwarmEnv(gym.Env):
    """Neon Swarm as a gymnasium environment"""

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        config: Optional[GameConfig] = None,
        max_steps: int = 18000,  # 5 minutes at 60 FPS
        k_projectiles: int = 5,
        store: Optional[HighScoreStore] = None,
        verbose: int = 0,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode
        self.config = config or GameConfig()
        self.max_steps = max_steps
        self.k_projectiles = k_projectiles
        self.store = store or HighScoreStore()
        self.verbose = verbose
        self.dt = 1.0 / self.config.target_fps

        self.action_space = spaces.MultiDiscrete([3, 2])

        # Ship: x(1) cooldown(1) lives(1) level(1) direction(1) formation depth(1)
        # Grid: alive mask (rows * cols)
        # Each enemy projectile: rel pos(2)
        n_cells = self.config.enemy_rows * self.config.enemy_cols
        obs_dim = 6 + n_cells + self.k_projectiles * 2
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self.sim: SwarmSimulation = None  # type: ignore
        self._window = None
        self._step_count = 0
        self._events: Dict[str, float] = {}

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)

        sim_seed = int(self.np_random.integers(0, 2**31 - 1))
        self.sim = SwarmSimulation(self.config, store=self.store, seed=sim_seed, verbose=self.verbose)
        self.sim.start_game()
        self._step_count = 0

        obs = self._get_obs()
        info = self._get_info()
        return obs, info

    def step(self, action):
        move, fire = int(action[0]), int(action[1])

        self._apply_intents(move, fire)

        score_before = self.sim.tracker.score
        lives_before = self.sim.tracker.lives
        level_before = self.sim.tracker.level

        self.sim.update(self.dt)

        self._events = {
            "points": float(self.sim.tracker.score - score_before),
            "lives_lost": float(lives_before - self.sim.tracker.lives),
            "waves_cleared": float(self.sim.tracker.level - level_before),
        }
        reward = self._compute_reward()

        terminated = self.sim.status is GameStatus.GAME_OVER
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    def _apply_intents(self, move: int, fire: int):
        if move == 1:
            self.sim.move_right(False)
            self.sim.move_left(True)
        elif move == 2:
            self.sim.move_left(False)
            self.sim.move_right(True)
        else:
            self.sim.move_left(False)
            self.sim.move_right(False)

        # Never let "fire" restart a finished episode
        if self.sim.status is GameStatus.PLAYING or not fire:
            self.sim.fire(bool(fire))

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        cfg = self.config
        sim = self.sim
        p = sim.player

        span = max(1e-6, cfg.playfield_width - p.width)
        cooldown = p.cooldown / max(1, cfg.fire_cooldown_frames)
        lives = sim.tracker.lives / max(1, cfg.starting_lives)
        level = min(sim.tracker.level, 10) / 10.0
        living = [e for e in sim.enemies if not e.marked_for_deletion]
        depth = max((e.bottom for e in living), default=0.0) / cfg.playfield_height

        obs_parts = [
            (p.x / span) * 2 - 1,  # map to [-1,1]
            clamp(cooldown * 2 - 1, -1, 1),
            lives * 2 - 1,
            level * 2 - 1,
            sim.direction,
            clamp(depth * 2 - 1, -1, 1),
        ]

        mask = np.zeros((cfg.enemy_rows, cfg.enemy_cols), dtype=np.float32)
        for e in living:
            mask[e.row, e.col] = 1.0
        obs_parts += mask.ravel().tolist()

        # Enemy projectiles: top-K nearest to the ship
        px, py = p.center
        shots = sorted(
            (b for b in sim.projectiles if b.is_enemy and not b.marked_for_deletion),
            key=lambda b: (b.x - px) ** 2 + (b.y - py) ** 2,
        )
        for i in range(self.k_projectiles):
            if i < len(shots):
                b = shots[i]
                dx = (b.x - px) / cfg.playfield_width
                dy = (b.y - py) / cfg.playfield_height
                obs_parts += [clamp(dx, -1, 1), clamp(dy, -1, 1)]
            else:
                obs_parts += [0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _compute_reward(self) -> float:
        R_POINTS = 0.01   # per score point (a basic kill is +1.0)
        R_WAVE = 2.0
        R_LIFE = 1.0
        R_DEATH = 5.0

        reward = 0.0
        reward += R_POINTS * self._events.get("points", 0.0)
        reward += R_WAVE * self._events.get("waves_cleared", 0.0)
        reward -= R_LIFE * self._events.get("lives_lost", 0.0)

        if self.sim.status is GameStatus.GAME_OVER:
            reward -= R_DEATH

        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        info: Dict[str, Any] = dict(self.sim.tracker.snapshot())
        info.update({
            "status": self.sim.status.name,
            "num_enemies": len(self.sim.enemies),
            "num_projectiles": len(self.sim.projectiles),
            "step": self._step_count,
        })
        return info

    # ----------------------------
    # Rendering
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self.render_mode == "rgb_array":
            return rasterize(self.sim.snapshot(), self.config.playfield_width, self.config.playfield_height)

        if self._window is None:
            from .window import SwarmWindow
            self._window = SwarmWindow(self.sim, scheduled=False)
        self._window.sim = self.sim
        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = False, seed: Optional[int] = 42, verbose: int = 1) -> Dict[str, Any]:
    """Play one episode with random actions and return the final info"""
    env = SwarmEnv(render_mode="human" if render else None, verbose=verbose)
    obs, info = env.reset(seed=seed)
    env.action_space.seed(seed)

    terminated = False
    truncated = False
    total = 0.0

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward
        if render:
            time.sleep(env.dt)

    if verbose > 0:
        print(f"[SwarmEnv] Random episode return: {total:.2f} "
              f"(score={info['score']}, wave={info['level']}, steps={info['step']})")

    env.close()
    return info


if __name__ == "__main__":
    run_random_episode(render=True)
