"""
High-score persistence
"""

import json
import os
import warnings
from typing import Optional

DEFAULT_HIGH_SCORE_PATH = os.path.join(os.path.expanduser("~"), ".neon_swarm", "highscore.json")


class HighScoreStore:
    """
    Stores the best score as JSON ``{"high_score": int}``.

    With ``path=None`` the score lives in memory only (headless runs, tests).
    """

    def __init__(self, path: Optional[str] = None):
        self.path = path
        self._memory: Optional[int] = None

    def load_high_score(self) -> Optional[int]:
        """Return the stored score, or None if missing or malformed"""
        if self.path is None:
            return self._memory
        try:
            with open(self.path, "r") as f:
                data = json.load(f)
        except (OSError, ValueError):
            return None

        value = data.get("high_score") if isinstance(data, dict) else None
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            return None
        return value

    def save_high_score(self, score: int) -> None:
        if self.path is None:
            self._memory = int(score)
            return
        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.path, "w") as f:
                json.dump({"high_score": int(score)}, f)
        except OSError as exc:
            warnings.warn(f"Could not save high score to {self.path}: {exc}")
