"""
Local high-score persistence (a single integer in a JSON file)
"""

import json
import os
from typing import Optional

HIGH_SCORE_KEY = "high-score"
HIGH_SCORE_ENV = "BLASTER_HIGH_SCORE_FILE"


def default_high_score_path() -> str:
    """Path from $BLASTER_HIGH_SCORE_FILE, else ~/.blaster/high_score.json"""
    override = os.environ.get(HIGH_SCORE_ENV)
    if override:
        return override
    return os.path.join(os.path.expanduser("~"), ".blaster", "high_score.json")


class HighScoreStore:
    """
    Stores the best score under one named key.

    The read-compare-write in record() is not atomic; two sessions sharing
    a file can race, and the last writer wins.
    """

    def __init__(self, path: Optional[str] = None, key: str = HIGH_SCORE_KEY, verbose: int = 0):
        self.path = path or default_high_score_path()
        self.key = key
        self.verbose = verbose
        self.write_count = 0

    def load(self) -> int:
        """Stored high score, or 0 when absent or unreadable"""
        if not os.path.exists(self.path):
            return 0
        try:
            with open(self.path, "r") as f:
                data = json.load(f)
            return max(0, int(data.get(self.key, 0)))
        except (OSError, ValueError, TypeError, AttributeError) as e:
            if self.verbose > 0:
                print(f"[HighScoreStore] Ignoring unreadable {self.path}: {e}")
            return 0

    def save(self, score: int):
        os.makedirs(os.path.dirname(os.path.abspath(self.path)), exist_ok=True)
        with open(self.path, "w") as f:
            json.dump({self.key: int(score)}, f, indent=2)
        self.write_count += 1

    def record(self, score: int) -> int:
        """Persist max(stored, score) and return it"""
        best = max(self.load(), int(score))
        self.save(best)
        if self.verbose > 0:
            print(f"[HighScoreStore] Best score {best} saved to {self.path}")
        return best


class MemoryHighScoreStore(HighScoreStore):
    """In-memory store for headless runs and tests"""

    def __init__(self, initial: int = 0, key: str = HIGH_SCORE_KEY):
        super().__init__(path=":memory:", key=key)
        self._value = int(initial)

    def load(self) -> int:
        return self._value

    def save(self, score: int):
        self._value = int(score)
        self.write_count += 1
