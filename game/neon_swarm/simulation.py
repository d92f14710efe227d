"""
SwarmSimulation - the per-frame game core
-----------------------------------------
- One owned context: player, formation, projectiles, particles, stars
- Input handlers only touch the intent surface (player.vx, player.is_shooting)
- Frame-coupled by default: every tick advances one fixed increment,
  whatever dt says. Set `time_scaled` in the config to scale motion by dt.
- Deletion is two-phase: entities are marked during the frame and
  compacted once all reads are done

Hosts (arcade window, gymnasium env) call `update(dt)` once per tick and
read `snapshot()` afterwards.
"""

from __future__ import annotations

import copy
import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .collisions import resolve_collisions
from .config import COLORS, GameConfig
from .entities import Enemy, Particle, Player, Projectile, Star, next_id
from .persistence import HighScoreStore
from .spawner import create_explosion, init_enemies, init_stars
from .state import GameStateMachine, GameStatus, ScoreTracker
from .utils import clamp


@dataclass(frozen=True)
class FrameSnapshot:
    """Read-only view handed to renderers once per tick"""
    status: GameStatus
    player: Optional[Player]  # None once defeated
    enemies: Tuple[Enemy, ...]
    projectiles: Tuple[Projectile, ...]
    particles: Tuple[Particle, ...]
    stars: Tuple[Star, ...]
    score: int
    lives: int
    level: int
    high_score: int


class SwarmSimulation:
    """Deterministic (given a seed) simulation of one Neon Swarm session"""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        store: Optional[HighScoreStore] = None,
        seed: Optional[int] = None,
        verbose: int = 0,
    ):
        self.config = config or GameConfig()
        self.verbose = verbose
        self.rng = random.Random(seed)

        self.machine = GameStateMachine()
        self.tracker = ScoreTracker(
            starting_lives=self.config.starting_lives,
            score_basic=self.config.score_basic,
            score_shooter=self.config.score_shooter,
            store=store or HighScoreStore(),
        )

        x, y = self.config.player_start
        self.player = Player(
            id="player",
            x=x,
            y=y,
            width=self.config.player_size,
            height=self.config.player_size,
            color=COLORS["PLAYER"],
            hp=self.tracker.lives,
        )
        self.enemies: List[Enemy] = init_enemies(1, self.config)
        self.projectiles: List[Projectile] = []
        self.particles: List[Particle] = []
        self.stars: List[Star] = init_stars(
            self.config.star_count,
            self.config.playfield_width,
            self.config.playfield_height,
            rng=self.rng,
        )

        self.direction = 1.0  # shared by the whole formation: 1 right, -1 left
        self.frame = 0
        self.last_dt: Optional[float] = None

    # ----------------------------
    # Session control
    # ----------------------------

    @property
    def status(self) -> GameStatus:
        return self.machine.status

    def start_game(self):
        """Full reset, from Menu or GameOver"""
        self.machine.fire("start")
        self.tracker.reset()
        self._reset_wave(self.tracker.level)
        self.frame = 0
        if self.verbose > 0:
            print(f"[NeonSwarm] New game (lives={self.tracker.lives}, "
                  f"high score={self.tracker.high_score})")

    def next_level(self):
        """Formation cleared: keep score and lives, respawn one level harder"""
        self.machine.fire("level_cleared")
        level = self.tracker.advance_level()
        self._reset_wave(level)
        if self.verbose > 0:
            print(f"[NeonSwarm] Wave {level} spawned "
                  f"(score={self.tracker.score}, lives={self.tracker.lives})")

    def _reset_wave(self, level: int):
        x, y = self.config.player_start
        p = self.player
        p.x, p.y = x, y
        p.vx = 0.0
        p.is_shooting = False
        p.cooldown = 0
        p.hp = self.tracker.lives
        p.marked_for_deletion = False

        self.projectiles = []
        self.particles = []
        self.enemies = init_enemies(level, self.config)
        self.direction = 1.0
        if not self.stars:
            self.stars = init_stars(
                self.config.star_count,
                self.config.playfield_width,
                self.config.playfield_height,
                rng=self.rng,
            )

    def _defeat(self):
        self.tracker.wipe_out()
        self.player.hp = 0
        self.machine.fire("defeated")
        if self.verbose > 0:
            print(f"[NeonSwarm] Game over at wave {self.tracker.level} "
                  f"(score={self.tracker.score})")

    # ----------------------------
    # Input intents
    # ----------------------------

    def move_left(self, active: bool):
        if active:
            self.player.vx = -self.config.player_speed
        elif self.player.vx < 0:
            self.player.vx = 0.0

    def move_right(self, active: bool):
        if active:
            self.player.vx = self.config.player_speed
        elif self.player.vx > 0:
            self.player.vx = 0.0

    def fire(self, active: bool):
        """Hold to shoot while playing; outside play a press starts a game"""
        if not active:
            self.player.is_shooting = False
        elif self.machine.is_playing:
            self.player.is_shooting = True
        elif self.machine.can("start"):
            self.start_game()

    # ----------------------------
    # Frame step
    # ----------------------------

    def update(self, dt: Optional[float] = None):
        """
        Advance the game by one tick.

        :param dt: seconds since the previous tick. Ignored unless the
            config enables `time_scaled`.
        """
        if not self.machine.is_playing:
            return

        self.frame += 1
        self.last_dt = dt
        scale = self._motion_scale(dt)

        self._update_player(scale)
        self._update_fire_control()
        self._update_projectiles(scale)

        living = [e for e in self.enemies if not e.marked_for_deletion]
        if not living:
            self.next_level()
            return

        if self._update_enemies(living, scale):
            self.direction *= -1
            for e in living:
                e.y += self.config.enemy_drop_height

        self._enemy_fire(living)

        lowest = max(e.bottom for e in living)
        if lowest >= self.player.y:
            self._defeat()
            return

        self._handle_collisions()

        self.enemies = [e for e in self.enemies if not e.marked_for_deletion]
        self.projectiles = [p for p in self.projectiles if not p.marked_for_deletion]

        self._update_particles(scale)
        self._update_stars(scale)

    def _motion_scale(self, dt: Optional[float]) -> float:
        if not self.config.time_scaled or dt is None:
            return 1.0
        return clamp(dt * self.config.target_fps, 0.0, 3.0)

    def _update_player(self, scale: float):
        p = self.player
        p.x += p.vx * scale
        p.x = clamp(p.x, 0, self.config.playfield_width - p.width)

    def _update_fire_control(self):
        p = self.player
        if p.cooldown > 0:
            p.cooldown -= 1
        if p.is_shooting and p.cooldown <= 0:
            self.projectiles.append(Projectile(
                id=next_id("bull"),
                x=p.x + p.width / 2 - 2,
                y=p.y,
                width=4,
                height=12,
                color=COLORS["PLAYER_BULLET"],
                vx=0.0,
                vy=-self.config.projectile_speed,
                is_enemy=False,
            ))
            p.cooldown = self.config.fire_cooldown_frames

    def _update_projectiles(self, scale: float):
        height = self.config.playfield_height
        for b in self.projectiles:
            b.x += b.vx * scale
            b.y += b.vy * scale
            if b.y < 0 or b.y > height:
                b.marked_for_deletion = True

    def _update_enemies(self, living: List[Enemy], scale: float) -> bool:
        """Move the formation sideways; return True if anyone reached an edge"""
        width = self.config.playfield_width
        hit_edge = False
        for e in living:
            e.x += e.vx * self.direction * scale
            if e.x <= 0 or e.x >= width - e.width:
                hit_edge = True
        return hit_edge

    def _enemy_fire(self, living: List[Enemy]):
        # Independent trial per enemy per frame, no cooldown
        base = self.config.enemy_fire_chance * self.tracker.level
        for e in living:
            chance = base + (self.config.shooter_fire_bonus if e.kind == "shooter" else 0.0)
            if self.rng.random() < chance:
                self.projectiles.append(Projectile(
                    id=next_id("ebull"),
                    x=e.x + e.width / 2,
                    y=e.y + e.height,
                    width=6,
                    height=12,
                    color=COLORS["ENEMY_BULLET"],
                    vx=0.0,
                    vy=self.config.enemy_projectile_speed,
                    is_enemy=True,
                ))

    def _handle_collisions(self):
        for hit in resolve_collisions(self.player, self.enemies, self.projectiles):
            self.particles.extend(create_explosion(
                hit.x, hit.y, hit.color,
                n=self.config.explosion_particles,
                rng=self.rng,
            ))
            if hit.player_hit:
                self.player.hp = self.tracker.lose_life()
                if self.tracker.defeated and self.machine.is_playing:
                    self._defeat()
            else:
                self.tracker.award_kill(hit.enemy.kind)

    def _update_particles(self, scale: float):
        decay = self.config.particle_decay * scale
        for p in self.particles:
            p.x += p.vx * scale
            p.y += p.vy * scale
            p.life = max(0.0, p.life - decay)
            p.alpha = p.life
            if p.life <= 0:
                p.marked_for_deletion = True
        self.particles = [p for p in self.particles if not p.marked_for_deletion]

    def _update_stars(self, scale: float):
        for s in self.stars:
            s.y += s.speed * scale
            if s.y > self.config.playfield_height:
                s.y = 0.0
                s.x = self.rng.random() * self.config.playfield_width

    # ----------------------------
    # Renderer view
    # ----------------------------

    def snapshot(self) -> FrameSnapshot:
        counters = self.tracker.snapshot()
        return FrameSnapshot(
            status=self.status,
            player=copy.copy(self.player) if counters["lives"] > 0 else None,
            enemies=tuple(copy.copy(e) for e in self.enemies if not e.marked_for_deletion),
            projectiles=tuple(copy.copy(p) for p in self.projectiles if not p.marked_for_deletion),
            particles=tuple(copy.copy(p) for p in self.particles),
            stars=tuple(copy.copy(s) for s in self.stars),
            **counters,
        )
