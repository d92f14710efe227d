import pytest

from conftest import quiet_config
from game.neon_swarm.entities import Particle, Projectile, Star
from game.neon_swarm.persistence import HighScoreStore
from game.neon_swarm.simulation import SwarmSimulation
from game.neon_swarm.state import GameStatus


def shot_at(x, y, is_enemy=False, vy=0.0):
    return Projectile(id="test-shot", x=x, y=y, width=4, height=12, color="#ccffff",
                      vy=vy, is_enemy=is_enemy)


# ----------------------------
# State gating and resets
# ----------------------------

def test_update_is_noop_in_menu():
    s = SwarmSimulation(quiet_config(), seed=0)
    xs = [e.x for e in s.enemies]

    s.update(1 / 60)

    assert s.status is GameStatus.MENU
    assert s.frame == 0
    assert [e.x for e in s.enemies] == xs


def test_start_game_full_reset(sim):
    assert sim.status is GameStatus.PLAYING
    t = sim.tracker
    assert (t.score, t.lives, t.level) == (0, 3, 1)
    assert len(sim.enemies) == 32
    assert all(e.vx == 2.5 for e in sim.enemies)
    assert (sim.player.x, sim.player.y) == (384.0, 540)
    assert sim.projectiles == [] and sim.particles == []
    assert sim.direction == 1.0


def test_fire_in_menu_starts_game():
    s = SwarmSimulation(quiet_config(), seed=0)

    s.fire(True)

    assert s.status is GameStatus.PLAYING
    assert not s.player.is_shooting


def test_full_reset_from_game_over(sim):
    sim.tracker.score = 900
    sim.tracker.advance_level()
    sim.projectiles.append(shot_at(10, 10))
    sim.enemies[0].y = sim.player.y  # formation landed
    sim.update()
    assert sim.status is GameStatus.GAME_OVER

    sim.fire(True)

    t = sim.tracker
    assert sim.status is GameStatus.PLAYING
    assert (t.score, t.lives, t.level) == (0, 3, 1)
    assert len(sim.enemies) == 32
    assert all(e.vx == 2.5 for e in sim.enemies)
    assert sim.projectiles == [] and sim.particles == []
    assert sim.player.hp == 3


# ----------------------------
# Player
# ----------------------------

def test_player_clamped_to_playfield(sim):
    sim.player.x = 3
    sim.move_left(True)
    sim.update()
    assert sim.player.x == 0

    sim.player.x = 765
    sim.move_right(True)
    sim.update()
    assert sim.player.x == 800 - 32


def test_player_stays_in_bounds_over_many_frames(sim):
    sim.move_left(True)
    for _ in range(150):
        sim.update()
        assert 0 <= sim.player.x <= 800 - sim.player.width
    sim.move_right(True)
    for _ in range(150):
        sim.update()
        assert 0 <= sim.player.x <= 800 - sim.player.width


def test_opposite_release_does_not_cancel_motion(sim):
    sim.move_left(True)
    sim.move_right(False)
    assert sim.player.vx == -7

    sim.move_right(True)
    sim.move_left(False)
    assert sim.player.vx == 7

    sim.move_right(False)
    assert sim.player.vx == 0


def test_no_shot_while_cooling_down(sim):
    sim.player.cooldown = 5
    sim.fire(True)

    sim.update()

    assert sim.projectiles == []
    assert sim.player.cooldown == 4


def test_shot_when_ready_resets_cooldown(sim):
    sim.fire(True)

    sim.update()

    shots = [p for p in sim.projectiles if not p.is_enemy]
    assert len(shots) == 1
    assert sim.player.cooldown == 15
    assert shots[0].x == sim.player.x + 16 - 2
    assert shots[0].y == sim.player.y - 10  # moved once in the same frame
    assert shots[0].vy == -10


def test_holding_fire_respects_rate(sim):
    sim.player.x = 0  # out of the formation's path
    sim.fire(True)
    for _ in range(31):
        sim.update()

    # frames 1, 16 and 31
    assert len([p for p in sim.projectiles if not p.is_enemy]) == 3


def test_projectile_leaving_playfield_is_removed(sim):
    sim.projectiles.append(shot_at(10, 5, vy=-10))
    sim.projectiles.append(shot_at(10, 300, vy=-10))

    sim.update()

    assert [p.y for p in sim.projectiles] == [290]


# ----------------------------
# Formation
# ----------------------------

def test_formation_marches_together(sim):
    before = {e.id: (e.x, e.y) for e in sim.enemies}

    sim.update()

    for e in sim.enemies:
        x, y = before[e.id]
        assert e.x == x + 2.5
        assert e.y == y


def test_formation_flips_and_drops_at_right_edge(sim):
    shift = (800 - 28) - max(e.x for e in sim.enemies) - 1
    for e in sim.enemies:
        e.x += shift
    ys = {e.id: e.y for e in sim.enemies}

    sim.update()

    assert sim.direction == -1.0
    for e in sim.enemies:
        assert e.y == ys[e.id] + 20

    xs = {e.id: e.x for e in sim.enemies}
    sim.update()
    for e in sim.enemies:
        assert e.x == xs[e.id] - 2.5


def test_formation_flips_at_left_edge(sim):
    sim.direction = -1.0
    shift = min(e.x for e in sim.enemies) - 1
    for e in sim.enemies:
        e.x -= shift

    sim.update()

    assert sim.direction == 1.0


def test_level_clear_keeps_score_and_lives(sim):
    sim.tracker.score = 1300
    sim.tracker.lives = 2
    sim.player.x = 10
    sim.player.cooldown = 7
    sim.fire(True)
    sim.projectiles.append(shot_at(10, 10))
    sim.particles.append(Particle(id="p", x=0, y=0, width=2, height=2, color="#ffff00"))
    sim.enemies = []

    sim.update()

    t = sim.tracker
    assert sim.status is GameStatus.PLAYING
    assert (t.score, t.lives, t.level) == (1300, 2, 2)
    assert len(sim.enemies) == 32
    assert all(e.vx == 3.0 for e in sim.enemies)
    assert sim.projectiles == [] and sim.particles == []
    assert sim.player.x == 384.0
    assert sim.player.cooldown == 0
    assert not sim.player.is_shooting

    sim.update()
    assert t.level == 2


def test_destroying_the_shooter_row_scores_1600(sim):
    for e in sim.enemies:
        if e.kind == "shooter":
            sim.projectiles.append(shot_at(e.x + 12, e.y + 8))

    sim.update()

    assert sim.tracker.score == 8 * 200
    assert len(sim.enemies) == 24
    assert all(e.kind == "basic" for e in sim.enemies)
    assert sim.projectiles == []
    assert len(sim.particles) == 8 * 15


def test_last_enemy_cleared_next_frame(sim):
    sim.enemies = sim.enemies[:1]
    e = sim.enemies[0]
    sim.projectiles.append(shot_at(e.x + 12, e.y + 8))

    sim.update()
    assert sim.enemies == []
    assert sim.tracker.level == 1

    sim.update()
    assert sim.tracker.level == 2
    assert sim.tracker.score == 200


# ----------------------------
# Enemy fire and defeat
# ----------------------------

def test_every_enemy_fires_at_full_chance():
    s = SwarmSimulation(quiet_config(enemy_fire_chance=1.0), seed=0)
    s.start_game()

    s.update()

    shots = [p for p in s.projectiles if p.is_enemy]
    assert len(shots) == 32
    assert all(p.vy == 6 for p in shots)


def test_only_shooters_fire_with_bonus_only():
    s = SwarmSimulation(quiet_config(shooter_fire_bonus=1.0), seed=0)
    s.start_game()

    s.update()

    shots = [p for p in s.projectiles if p.is_enemy]
    assert len(shots) == 8
    shooters = {(e.x + e.width / 2, e.y + e.height) for e in s.enemies if e.kind == "shooter"}
    assert {(p.x, p.y) for p in shots} == shooters


def test_enemy_hit_costs_a_life(sim):
    p = sim.player
    sim.projectiles.append(shot_at(p.x + 10, p.y + 5, is_enemy=True))

    sim.update()

    assert sim.tracker.lives == 2
    assert p.hp == 2
    assert sim.status is GameStatus.PLAYING
    assert sim.projectiles == []
    assert len(sim.particles) == 15
    assert all(part.color == p.color for part in sim.particles)


def test_losing_last_life_ends_game(sim):
    sim.tracker.lives = 1
    p = sim.player
    sim.projectiles.append(shot_at(p.x + 10, p.y + 5, is_enemy=True))
    sim.projectiles.append(shot_at(p.x + 12, p.y + 5, is_enemy=True))

    sim.update()

    assert sim.status is GameStatus.GAME_OVER
    assert sim.tracker.lives == 0

    frame = sim.frame
    sim.update()
    assert sim.frame == frame


def test_descent_to_player_ends_game(sim):
    sim.enemies[-1].y = sim.player.y - sim.enemies[-1].height

    sim.update()

    assert sim.status is GameStatus.GAME_OVER
    assert sim.tracker.lives == 0
    assert sim.snapshot().player is None


# ----------------------------
# Particles and stars
# ----------------------------

def test_particles_fade_and_expire(sim):
    fading = Particle(id="a", x=10, y=10, width=2, height=2, color="#ffff00", vx=1, vy=-2)
    dying = Particle(id="b", x=0, y=0, width=2, height=2, color="#ffff00", life=0.01, alpha=0.01)
    sim.particles = [fading, dying]

    sim.update()

    assert sim.particles == [fading]
    assert (fading.x, fading.y) == (11, 8)
    assert fading.life == pytest.approx(0.98)
    assert fading.alpha == fading.life


def test_stars_wrap_to_top(sim):
    star = Star(x=50, y=599.5, size=1, speed=1, brightness=0.5)
    sim.stars = [star]

    sim.update()

    assert star.y == 0
    assert 0 <= star.x < 800


# ----------------------------
# Timing, snapshots, high score
# ----------------------------

def test_frame_coupled_by_default(sim):
    sim.move_right(True)
    x = sim.player.x

    sim.update(dt=0.5)

    assert sim.player.x == x + 7
    assert sim.last_dt == 0.5


def test_time_scaled_motion():
    s = SwarmSimulation(quiet_config(time_scaled=True), seed=0)
    s.start_game()
    s.move_right(True)
    x = s.player.x

    s.update(dt=2 / 60)

    assert s.player.x == pytest.approx(x + 14)


def test_snapshot_is_a_copy(sim):
    snap = sim.snapshot()
    snap.enemies[0].x = -500
    snap.player.x = -500

    assert sim.enemies[0].x != -500
    assert sim.player.x != -500
    assert snap.status is GameStatus.PLAYING
    assert (snap.score, snap.lives, snap.level) == (0, 3, 1)


def test_high_score_persisted_when_beaten():
    store = HighScoreStore()
    store.save_high_score(150)
    s = SwarmSimulation(quiet_config(), store=store, seed=0)
    s.start_game()
    e = s.enemies[0]
    s.projectiles.append(shot_at(e.x + 12, e.y + 8))

    s.update()

    assert s.tracker.high_score == 200
    assert store.load_high_score() == 200


def test_same_seed_same_game():
    def play(seed):
        s = SwarmSimulation(quiet_config(enemy_fire_chance=0.01), seed=seed)
        s.start_game()
        s.fire(True)
        s.move_left(True)
        for _ in range(240):
            s.update()
        return (
            s.tracker.score,
            s.tracker.lives,
            [(e.x, e.y) for e in s.enemies],
            [(p.x, p.y) for p in s.projectiles],
            [(st.x, st.y) for st in s.stars],
        )

    assert play(7) == play(7)


# ----------------------------
# Clamped configurations
# ----------------------------

def test_oversized_grid_marches_normally():
    s = SwarmSimulation(quiet_config(enemy_cols=20), seed=0)
    s.start_game()

    assert min(e.x for e in s.enemies) >= 0
    for _ in range(60):
        s.update()

    assert s.status is GameStatus.PLAYING
    assert s.tracker.lives == 3


def test_zero_rows_does_not_skip_waves():
    s = SwarmSimulation(quiet_config(enemy_rows=0), seed=0)
    s.start_game()

    for _ in range(60):
        s.update()

    assert len(s.enemies) == 8
    assert s.tracker.level == 1
