"""
Arcade desktop host: keyboard input, frame scheduling and drawing
"""

from __future__ import annotations

import math
from typing import Dict, Optional

import arcade

from .config import COLORS, KEYS, GameConfig
from .persistence import HighScoreStore
from .simulation import FrameSnapshot, SwarmSimulation
from .state import GameStatus
from .utils import hex_to_rgb

HUD_C = (34, 211, 238)
WAVE_C = (236, 72, 153)
OVERLAY_C = (0, 0, 0, 180)
GAME_OVER_C = (69, 10, 10, 200)
FAIL_C = (239, 68, 68)


def _rgba(color: str, alpha: float = 1.0):
    r, g, b = hex_to_rgb(color)
    return r, g, b, int(255 * max(0.0, min(1.0, alpha)))


def _build_keymap() -> Dict[int, str]:
    """Map arcade key codes to the LEFT / RIGHT / SHOOT intents"""
    keymap = {}
    for intent, names in KEYS.items():
        for name in names:
            keymap[getattr(arcade.key, name)] = intent
    return keymap


class SwarmWindow(arcade.Window):
    """Arcade window that drives a SwarmSimulation and draws its snapshots"""

    def __init__(self, sim: SwarmSimulation, scheduled: bool = True, title: str = "NEON SWARM"):
        cfg = sim.config
        super().__init__(cfg.playfield_width, cfg.playfield_height, title)
        self.sim = sim
        self.background_color = hex_to_rgb(COLORS["BACKGROUND"])
        self._keymap = _build_keymap()
        self._scheduled = False
        if scheduled:
            self.start()

    # ----------------------------
    # Frame scheduling
    # ----------------------------

    def start(self):
        if not self._scheduled:
            arcade.schedule(self._tick, 1.0 / self.sim.config.target_fps)
            self._scheduled = True

    def stop(self):
        if self._scheduled:
            arcade.unschedule(self._tick)
            self._scheduled = False

    def _tick(self, delta_time: float):
        self.sim.update(delta_time)

    def close(self):
        # No orphaned ticks after teardown
        self.stop()
        super().close()

    # ----------------------------
    # Input
    # ----------------------------

    def on_key_press(self, symbol: int, modifiers: int):
        intent = self._keymap.get(symbol)
        if intent == "LEFT":
            self.sim.move_left(True)
        elif intent == "RIGHT":
            self.sim.move_right(True)
        elif intent == "SHOOT":
            self.sim.fire(True)

    def on_key_release(self, symbol: int, modifiers: int):
        intent = self._keymap.get(symbol)
        if intent == "LEFT":
            self.sim.move_left(False)
        elif intent == "RIGHT":
            self.sim.move_right(False)
        elif intent == "SHOOT":
            self.sim.fire(False)

    # ----------------------------
    # Drawing (simulation y grows downward, arcade y grows upward)
    # ----------------------------

    def _flip(self, y: float) -> float:
        return self.height - y

    def on_draw(self):
        self.clear()
        snap = self.sim.snapshot()

        self._draw_stars(snap)
        if snap.player is not None:
            self._draw_player(snap)
        self._draw_enemies(snap)
        self._draw_projectiles(snap)
        self._draw_particles(snap)
        self._draw_hud(snap)

        if snap.status is GameStatus.MENU:
            self._draw_menu()
        elif snap.status is GameStatus.GAME_OVER:
            self._draw_game_over(snap)

    def _draw_stars(self, snap: FrameSnapshot):
        for s in snap.stars:
            arcade.draw_circle_filled(s.x, self._flip(s.y), s.size,
                                      (255, 255, 255, int(255 * s.brightness)))

    def _draw_player(self, snap: FrameSnapshot):
        p = snap.player
        points = [
            (p.x + p.width / 2, self._flip(p.y)),
            (p.x + p.width, self._flip(p.y + p.height)),
            (p.x + p.width / 2, self._flip(p.y + p.height - 5)),
            (p.x, self._flip(p.y + p.height)),
        ]
        arcade.draw_polygon_filled(points, hex_to_rgb(COLORS["BACKGROUND"]))
        arcade.draw_polygon_outline(points, hex_to_rgb(p.color), 2)

    def _draw_enemies(self, snap: FrameSnapshot):
        for e in snap.enemies:
            color = hex_to_rgb(e.color)
            cx, cy = e.center
            if e.kind == "shooter":
                r = e.width / 2
                hexagon = [
                    (cx + r * math.cos(i * math.pi / 3), self._flip(cy + r * math.sin(i * math.pi / 3)))
                    for i in range(6)
                ]
                arcade.draw_polygon_outline(hexagon, color, 2)
            else:
                arcade.draw_lrbt_rectangle_outline(
                    e.x, e.x + e.width, self._flip(e.y + e.height), self._flip(e.y), color, 2
                )
            arcade.draw_circle_filled(cx, self._flip(cy), 3, color)

    def _draw_projectiles(self, snap: FrameSnapshot):
        for b in snap.projectiles:
            arcade.draw_lrbt_rectangle_filled(
                b.x, b.x + b.width, self._flip(b.y + b.height), self._flip(b.y), hex_to_rgb(b.color)
            )

    def _draw_particles(self, snap: FrameSnapshot):
        for p in snap.particles:
            arcade.draw_circle_filled(p.x, self._flip(p.y), p.width, _rgba(p.color, p.alpha))

    def _draw_hud(self, snap: FrameSnapshot):
        top = self.height - 30
        arcade.draw_text(f"SCORE {snap.score:06d}", 12, top, HUD_C, 16)
        arcade.draw_text(f"WAVE {snap.level}", self.width / 2, top, WAVE_C, 14, anchor_x="center")
        arcade.draw_text(f"HIGH SCORE {snap.high_score:06d}", self.width - 12, top, HUD_C, 14,
                         anchor_x="right")
        for i in range(snap.lives):
            left = self.width - 12 - (i + 1) * 28
            arcade.draw_lrbt_rectangle_outline(left, left + 22, top - 34, top - 12, HUD_C, 1)

    def _draw_menu(self):
        arcade.draw_lrbt_rectangle_filled(0, self.width, 0, self.height, OVERLAY_C)
        cx, cy = self.width / 2, self.height / 2
        arcade.draw_text("NEON SWARM", cx, cy + 60, HUD_C, 48, anchor_x="center", bold=True)
        arcade.draw_text("PRESS START TO DEFEND", cx, cy, (165, 243, 252), 18, anchor_x="center")
        arcade.draw_text("ARROWS TO MOVE - SPACE TO FIRE", cx, cy - 60, (107, 114, 128), 12,
                         anchor_x="center")

    def _draw_game_over(self, snap: FrameSnapshot):
        arcade.draw_lrbt_rectangle_filled(0, self.width, 0, self.height, GAME_OVER_C)
        cx, cy = self.width / 2, self.height / 2
        arcade.draw_text("MISSION FAILED", cx, cy + 60, FAIL_C, 40, anchor_x="center", bold=True)
        arcade.draw_text("FINAL SCORE", cx, cy + 10, (254, 202, 202), 18, anchor_x="center")
        arcade.draw_text(str(snap.score), cx, cy - 30, (255, 255, 255), 28, anchor_x="center")
        arcade.draw_text("PRESS FIRE TO RETRY", cx, cy - 80, (252, 165, 165), 14, anchor_x="center")


def run_window(
    config: Optional[GameConfig] = None,
    store: Optional[HighScoreStore] = None,
    seed: Optional[int] = None,
    verbose: int = 0,
):
    """Open the game window and block until it is closed"""
    sim = SwarmSimulation(config, store=store, seed=seed, verbose=verbose)
    window = SwarmWindow(sim)
    if verbose > 0:
        print(f"[NeonSwarm] Window {window.width}x{window.height} "
              f"at {sim.config.target_fps} FPS")
    arcade.run()
