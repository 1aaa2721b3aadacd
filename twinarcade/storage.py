# storage.py
# Flat JSON key-value persistence for best score and pong statistics.
# Every failure degrades to defaults; nothing here raises to the game loop.

import json
import logging
from pathlib import Path

from .pong import Statistics

logger = logging.getLogger(__name__)

BEST_KEY = "best-score"
STATS_KEY = "statistics"


def load_json(path, default):
    try:
        if path.exists():
            return json.loads(path.read_text())
    except (OSError, ValueError) as exc:
        logger.warning("could not read %s (%s), using defaults", path, exc)
    return default


def save_json(path, data):
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2))
        return True
    except OSError as exc:
        logger.warning("could not write %s (%s)", path, exc)
        return False


class KeyValueStore:
    """One JSON object on disk. Writes are synchronous; last write wins."""
    def __init__(self, path):
        self.path = Path(path)

    def _read(self):
        data = load_json(self.path, {})
        if not isinstance(data, dict):
            logger.warning("%s does not hold an object, starting empty", self.path)
            return {}
        return data

    def get(self, key, default=None):
        return self._read().get(key, default)

    def set(self, key, value):
        data = self._read()
        data[key] = value
        return save_json(self.path, data)


class HighScoreStore:
    def __init__(self, kv):
        self.kv = kv

    def load(self) -> int:
        raw = self.kv.get(BEST_KEY, 0)
        try:
            return max(0, int(raw))
        except (TypeError, ValueError):
            logger.warning("malformed %s %r, resetting to 0", BEST_KEY, raw)
            return 0

    def save(self, best: int):
        # never let a stale writer lower the record
        best = max(int(best), self.load())
        self.kv.set(BEST_KEY, best)
        return best


class StatisticsStore:
    def __init__(self, kv):
        self.kv = kv

    def load(self) -> Statistics:
        raw = self.kv.get(STATS_KEY)
        if raw is None:
            return Statistics()
        try:
            return Statistics.from_record(raw)
        except (TypeError, ValueError, AttributeError):
            logger.warning("malformed %s %r, using zeroed statistics", STATS_KEY, raw)
            return Statistics()

    def save(self, stats: Statistics):
        self.kv.set(STATS_KEY, stats.to_record())
        return stats
