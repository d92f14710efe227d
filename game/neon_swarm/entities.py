"""
Game entity dataclasses
"""

import itertools
from dataclasses import dataclass
from typing import Literal, Tuple

EnemyKind = Literal["basic", "shooter", "diver"]

_ids = itertools.count()


def next_id(prefix: str) -> str:
    """Return a fresh entity id such as ``bull-17``"""
    return f"{prefix}-{next(_ids)}"


@dataclass
class Entity:
    """Axis-aligned rectangle with a soft-delete flag"""
    id: str
    x: float
    y: float
    width: float
    height: float
    color: str
    marked_for_deletion: bool = False

    @property
    def center(self) -> Tuple[float, float]:
        return self.x + self.width / 2, self.y + self.height / 2

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass
class Player(Entity):
    """Player ship. vx and is_shooting are the input intent surface"""
    vx: float = 0.0  # signed horizontal speed
    is_shooting: bool = False
    cooldown: int = 0  # frames until next shot
    hp: int = 3


@dataclass
class Enemy(Entity):
    """Formation member; row/col never change after spawn"""
    kind: EnemyKind = "basic"
    row: int = 0
    col: int = 0
    vx: float = 0.0
    vy: float = 0.0


@dataclass
class Projectile(Entity):
    vx: float = 0.0
    vy: float = 0.0
    is_enemy: bool = False


@dataclass
class Particle(Entity):
    """Explosion debris, fades out as life goes 1.0 -> 0.0"""
    vx: float = 0.0
    vy: float = 0.0
    life: float = 1.0
    max_life: float = 1.0
    alpha: float = 1.0


@dataclass
class Star:
    """Background star (not a combat entity)"""
    x: float
    y: float
    size: float
    speed: float
    brightness: float
