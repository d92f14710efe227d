import numpy as np

from conftest import quiet_config
from game.neon_swarm.entities import Projectile
from game.neon_swarm.swarm_env import SwarmEnv


def test_reset_observation_in_space():
    env = SwarmEnv(config=quiet_config())
    obs, info = env.reset(seed=0)

    assert obs.shape == env.observation_space.shape
    assert env.observation_space.contains(obs)
    assert info["status"] == "PLAYING"
    assert (info["score"], info["lives"], info["level"]) == (0, 3, 1)
    # whole formation alive
    assert obs[6:6 + 32].sum() == 32


def test_step_moves_ship():
    env = SwarmEnv(config=quiet_config())
    env.reset(seed=0)
    x = env.sim.player.x

    obs, reward, terminated, truncated, info = env.step(np.array([1, 0]))
    assert env.sim.player.x == x - 7
    assert env.observation_space.contains(obs)

    env.step(np.array([2, 0]))
    assert env.sim.player.x == x
    assert not terminated and not truncated
    assert reward == 0.0


def test_fire_action_shoots():
    env = SwarmEnv(config=quiet_config())
    env.reset(seed=0)

    env.step(np.array([0, 1]))

    assert len(env.sim.projectiles) == 1


def test_kill_reward():
    env = SwarmEnv(config=quiet_config())
    env.reset(seed=0)
    sim = env.sim
    e = next(e for e in sim.enemies if e.kind == "basic")
    sim.projectiles.append(Projectile(id="t", x=e.x + 12, y=e.y + 8, width=4, height=12, color="#fff"))

    _, reward, _, _, info = env.step(np.array([0, 0]))

    assert info["score"] == 100
    assert reward == 1.0


def test_defeat_terminates():
    env = SwarmEnv(config=quiet_config())
    env.reset(seed=0)
    sim = env.sim
    sim.enemies[0].y = sim.player.y

    _, reward, terminated, truncated, info = env.step(np.array([0, 1]))

    assert terminated
    assert info["status"] == "GAME_OVER"
    assert reward == -3.0 - 5.0

    # fire must not restart a finished episode
    env.step(np.array([0, 1]))
    assert env.sim.status.name == "GAME_OVER"


def test_truncates_at_max_steps():
    env = SwarmEnv(config=quiet_config(), max_steps=3)
    env.reset(seed=0)

    results = [env.step(np.array([0, 0])) for _ in range(3)]

    assert [r[3] for r in results] == [False, False, True]


def test_seeded_resets_are_reproducible():
    env = SwarmEnv(config=quiet_config(enemy_fire_chance=0.02))

    def rollout():
        env.reset(seed=11)
        for _ in range(120):
            obs, *_ = env.step(np.array([0, 1]))
        return obs

    np.testing.assert_array_equal(rollout(), rollout())


def test_rgb_array_render():
    env = SwarmEnv(render_mode="rgb_array", config=quiet_config())
    env.reset(seed=0)

    frame = env.render()

    assert frame.shape == (600, 800, 3)
    assert frame.dtype == np.uint8
