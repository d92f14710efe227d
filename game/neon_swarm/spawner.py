"""
Spawning helpers: star field, enemy grid and explosion bursts
"""

import math
import random
from typing import List

from .config import COLORS, GAME_CONFIG, GameConfig
from .entities import Enemy, Particle, Star, next_id


def init_stars(
    count: int = GAME_CONFIG["star_count"],
    width: float = GAME_CONFIG["playfield_width"],
    height: float = GAME_CONFIG["playfield_height"],
    rng=random,
) -> List[Star]:
    """Scatter `count` stars uniformly over the playfield"""
    stars = []
    for _ in range(count):
        stars.append(Star(
            x=rng.random() * width,
            y=rng.random() * height,
            size=rng.random() * 2 + 0.5,
            speed=rng.random() * 3 + 0.5,
            brightness=rng.random(),
        ))
    return stars


def enemy_speed(config: GameConfig, level: int) -> float:
    """Horizontal speed magnitude for a wave; grows linearly with level"""
    return config.enemy_speed_x + level * 0.5


def init_enemies(level: int, config: GameConfig) -> List[Enemy]:
    """
    Lay out the ROWS x COLS formation for a level.

    The grid is centred horizontally. Row 0 is made of shooters, every
    other row of basic enemies. All enemies share the same speed.
    """
    cell = config.enemy_size + config.enemy_padding
    start_x = (config.playfield_width - config.enemy_cols * cell) / 2
    start_y = config.enemy_start_y
    speed = enemy_speed(config, level)

    enemies = []
    for row in range(config.enemy_rows):
        shooter = row == 0
        for col in range(config.enemy_cols):
            enemies.append(Enemy(
                id=f"e-{row}-{col}",
                x=start_x + col * cell,
                y=start_y + row * cell,
                width=config.enemy_size,
                height=config.enemy_size,
                color=COLORS["ENEMY_SHOOTER"] if shooter else COLORS["ENEMY_BASIC"],
                kind="shooter" if shooter else "basic",
                row=row,
                col=col,
                vx=speed,
                vy=0.0,
            ))
    return enemies


def create_explosion(x: float, y: float, color: str, n: int = 15, rng=random) -> List[Particle]:
    """Radial burst of `n` particles centred on (x, y)"""
    particles = []
    for _ in range(n):
        angle = rng.random() * math.pi * 2
        speed = rng.random() * 4 + 1
        particles.append(Particle(
            id=next_id("p"),
            x=x,
            y=y,
            width=rng.random() * 4 + 2,
            height=rng.random() * 4 + 2,
            color=color,
            vx=math.cos(angle) * speed,
            vy=math.sin(angle) * speed,
            life=1.0,
            max_life=1.0,
            alpha=1.0,
        ))
    return particles
