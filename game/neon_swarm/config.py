"""
Game configuration for Neon Swarm
Default tuning values plus the typed config the simulation reads.
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

from .utils import clamp

# ==============================================================================
# DEFAULTS
# ==============================================================================

GAME_CONFIG = {
    # Playfield
    "playfield_width": 800,
    "playfield_height": 600,
    # Player
    "player_speed": 7.0,
    "player_size": 32,
    "player_y_offset": 60,      # distance from bottom edge to ship top
    "projectile_speed": 10.0,
    "fire_cooldown_frames": 15,
    "starting_lives": 3,
    # Formation
    "enemy_rows": 4,
    "enemy_cols": 8,
    "enemy_size": 28,
    "enemy_padding": 20,
    "enemy_start_y": 60,
    "enemy_speed_x": 2.0,
    "enemy_drop_height": 20.0,
    "enemy_projectile_speed": 6.0,
    "enemy_fire_chance": 0.0005,   # per enemy, per frame, times level
    "shooter_fire_bonus": 0.002,
    # Scoring
    "score_basic": 100,
    "score_shooter": 200,
    # Effects
    "star_count": 100,
    "explosion_particles": 15,
    "particle_decay": 0.02,
    # Timing
    "target_fps": 60,
    "time_scaled": False,
}

COLORS = {
    "PLAYER": "#00ffff",
    "PLAYER_BULLET": "#ccffff",
    "ENEMY_BASIC": "#ff00ff",
    "ENEMY_SHOOTER": "#ff9900",
    "ENEMY_BULLET": "#ff3333",
    "PARTICLE_EXPLOSION": "#ffff00",
    "BACKGROUND": "#050510",
}

KEYS = {
    "LEFT": ["LEFT", "A"],
    "RIGHT": ["RIGHT", "D"],
    "SHOOT": ["SPACE", "ENTER"],
}

# camelCase spellings accepted by GameConfig.from_dict
_ALIASES = {
    "playfieldWidth": "playfield_width",
    "playfieldHeight": "playfield_height",
    "playerSpeed": "player_speed",
    "playerSize": "player_size",
    "projectileSpeed": "projectile_speed",
    "enemyProjectileSpeed": "enemy_projectile_speed",
    "fireCooldownFrames": "fire_cooldown_frames",
    "enemyRows": "enemy_rows",
    "enemyCols": "enemy_cols",
    "enemySize": "enemy_size",
    "enemyPadding": "enemy_padding",
    "enemySpeedX": "enemy_speed_x",
    "enemyDropHeight": "enemy_drop_height",
}


@dataclass
class GameConfig:
    """Tuning values for one game. Out-of-range values are clamped, never rejected."""

    playfield_width: int = GAME_CONFIG["playfield_width"]
    playfield_height: int = GAME_CONFIG["playfield_height"]
    player_speed: float = GAME_CONFIG["player_speed"]
    player_size: int = GAME_CONFIG["player_size"]
    player_y_offset: int = GAME_CONFIG["player_y_offset"]
    projectile_speed: float = GAME_CONFIG["projectile_speed"]
    fire_cooldown_frames: int = GAME_CONFIG["fire_cooldown_frames"]
    starting_lives: int = GAME_CONFIG["starting_lives"]
    enemy_rows: int = GAME_CONFIG["enemy_rows"]
    enemy_cols: int = GAME_CONFIG["enemy_cols"]
    enemy_size: int = GAME_CONFIG["enemy_size"]
    enemy_padding: int = GAME_CONFIG["enemy_padding"]
    enemy_start_y: int = GAME_CONFIG["enemy_start_y"]
    enemy_speed_x: float = GAME_CONFIG["enemy_speed_x"]
    enemy_drop_height: float = GAME_CONFIG["enemy_drop_height"]
    enemy_projectile_speed: float = GAME_CONFIG["enemy_projectile_speed"]
    enemy_fire_chance: float = GAME_CONFIG["enemy_fire_chance"]
    shooter_fire_bonus: float = GAME_CONFIG["shooter_fire_bonus"]
    score_basic: int = GAME_CONFIG["score_basic"]
    score_shooter: int = GAME_CONFIG["score_shooter"]
    star_count: int = GAME_CONFIG["star_count"]
    explosion_particles: int = GAME_CONFIG["explosion_particles"]
    particle_decay: float = GAME_CONFIG["particle_decay"]
    target_fps: int = GAME_CONFIG["target_fps"]
    time_scaled: bool = GAME_CONFIG["time_scaled"]

    def __post_init__(self):
        self.playfield_width = max(1, int(self.playfield_width))
        self.playfield_height = max(1, int(self.playfield_height))
        self.player_size = int(clamp(int(self.player_size), 1, min(self.playfield_width, self.playfield_height)))
        # the whole hull stays inside the playfield
        self.player_y_offset = int(clamp(int(self.player_y_offset), self.player_size, self.playfield_height))
        self.player_speed = max(0.0, float(self.player_speed))
        self.projectile_speed = max(0.0, float(self.projectile_speed))
        self.enemy_projectile_speed = max(0.0, float(self.enemy_projectile_speed))
        self.fire_cooldown_frames = max(0, int(self.fire_cooldown_frames))
        self.starting_lives = max(1, int(self.starting_lives))
        self.enemy_size = int(clamp(int(self.enemy_size), 1, self.playfield_width))
        self.enemy_padding = max(0, int(self.enemy_padding))
        # at least one enemy, and the grid fits the playfield width
        max_cols = max(1, self.playfield_width // (self.enemy_size + self.enemy_padding))
        self.enemy_rows = max(1, int(self.enemy_rows))
        self.enemy_cols = int(clamp(int(self.enemy_cols), 1, max_cols))
        self.enemy_start_y = max(0, int(self.enemy_start_y))
        self.enemy_speed_x = max(0.0, float(self.enemy_speed_x))
        self.enemy_drop_height = max(0.0, float(self.enemy_drop_height))
        self.enemy_fire_chance = clamp(float(self.enemy_fire_chance), 0.0, 1.0)
        self.shooter_fire_bonus = clamp(float(self.shooter_fire_bonus), 0.0, 1.0)
        self.score_basic = max(0, int(self.score_basic))
        self.score_shooter = max(0, int(self.score_shooter))
        self.star_count = max(0, int(self.star_count))
        self.explosion_particles = max(0, int(self.explosion_particles))
        self.particle_decay = clamp(float(self.particle_decay), 1e-4, 1.0)
        self.target_fps = max(1, int(self.target_fps))
        self.time_scaled = bool(self.time_scaled)

    @property
    def player_start(self):
        """Default (x, y) of the ship's top-left corner"""
        x = self.playfield_width / 2 - self.player_size / 2
        y = self.playfield_height - self.player_y_offset
        return x, y

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]] = None) -> "GameConfig":
        """
        Build a config from a (possibly partial) dict.

        Keys may use snake_case or the camelCase option names.
        Unknown keys raise ValueError.
        """
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in (data or {}).items():
            name = _ALIASES.get(key, key)
            if name not in known:
                raise ValueError(f"Unknown config option: {key}")
            kwargs[name] = value
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}
