"""
Game status state machine and score/progress tracking
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, Tuple

from .persistence import HighScoreStore


class GameStatus(Enum):
    MENU = auto()
    PLAYING = auto()
    GAME_OVER = auto()
    VICTORY = auto()  # reserved, the formation is always respawned instead


class InvalidTransition(ValueError):
    """Raised when an event is not allowed in the current status"""


# (status, event) -> next status
TRANSITIONS: Dict[Tuple[GameStatus, str], GameStatus] = {
    (GameStatus.MENU, "start"): GameStatus.PLAYING,
    (GameStatus.GAME_OVER, "start"): GameStatus.PLAYING,
    (GameStatus.PLAYING, "level_cleared"): GameStatus.PLAYING,
    (GameStatus.PLAYING, "defeated"): GameStatus.GAME_OVER,
}


class GameStateMachine:
    """Menu -> Playing -> GameOver -> Playing"""

    def __init__(self):
        self.status = GameStatus.MENU

    @property
    def is_playing(self) -> bool:
        return self.status is GameStatus.PLAYING

    def can(self, event: str) -> bool:
        return (self.status, event) in TRANSITIONS

    def fire(self, event: str) -> GameStatus:
        """Apply `event` and return the new status"""
        try:
            self.status = TRANSITIONS[(self.status, event)]
        except KeyError:
            raise InvalidTransition(f"'{event}' is not allowed in {self.status.name}") from None
        return self.status


@dataclass
class ScoreTracker:
    """Score, lives and level counters, plus the best score seen so far"""
    starting_lives: int = 3
    score_basic: int = 100
    score_shooter: int = 200
    store: HighScoreStore = field(default_factory=HighScoreStore)
    score: int = 0
    lives: int = 3
    level: int = 1
    high_score: int = 0

    def __post_init__(self):
        self.lives = self.starting_lives
        self.high_score = self.store.load_high_score() or 0

    def reset(self):
        self.score = 0
        self.lives = self.starting_lives
        self.level = 1

    def advance_level(self) -> int:
        self.level += 1
        return self.level

    def award_kill(self, kind: str) -> int:
        """Add the points for destroying an enemy of `kind`"""
        points = self.score_shooter if kind == "shooter" else self.score_basic
        self.score += points
        self._update_high_score()
        return points

    def lose_life(self) -> int:
        self.lives = max(0, self.lives - 1)
        return self.lives

    def wipe_out(self):
        self.lives = 0

    @property
    def defeated(self) -> bool:
        return self.lives <= 0

    def _update_high_score(self):
        if self.score > self.high_score:
            self.high_score = self.score
            self.store.save_high_score(self.score)

    def snapshot(self) -> Dict[str, int]:
        return {
            "score": self.score,
            "lives": self.lives,
            "level": self.level,
            "high_score": self.high_score,
        }
