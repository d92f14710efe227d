"""
Projectile collision resolution
"""

from dataclasses import dataclass
from typing import List, Optional

from .entities import Enemy, Player, Projectile
from .utils import aabb_collide


@dataclass
class Hit:
    """One resolved collision. `enemy` is None when the player was hit"""
    projectile: Projectile
    x: float
    y: float
    color: str
    enemy: Optional[Enemy] = None

    @property
    def player_hit(self) -> bool:
        return self.enemy is None


def resolve_collisions(
    player: Player,
    enemies: List[Enemy],
    projectiles: List[Projectile],
) -> List[Hit]:
    """
    Mark colliding projectiles and enemies for deletion.

    Projectiles and enemies that are already marked are skipped, so the
    first collision wins and nothing is credited twice. Scoring and lives
    are left to the caller; this only reports what was hit.
    """
    hits: List[Hit] = []

    for p in projectiles:
        if p.marked_for_deletion:
            continue

        if not p.is_enemy:
            for e in enemies:
                if e.marked_for_deletion:
                    continue
                if aabb_collide(p, e):
                    e.marked_for_deletion = True
                    p.marked_for_deletion = True
                    cx, cy = e.center
                    hits.append(Hit(projectile=p, x=cx, y=cy, color=e.color, enemy=e))
                    break
        elif aabb_collide(p, player):
            p.marked_for_deletion = True
            cx, cy = player.center
            hits.append(Hit(projectile=p, x=cx, y=cy, color=player.color))

    return hits
