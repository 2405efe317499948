import os
import json
import math
import logging

from crimson_dot.constants import BEST_TIME_KEY, SAVE_FILE

logger = logging.getLogger(__name__)


def format_time(seconds: float) -> str:
    """Seconds -> M:SS."""
    minutes = math.floor(seconds / 60)
    secs = math.floor(seconds % 60)
    return f"{minutes}:{secs:02d}"


class BestTimeStore:
    """Persists the fastest ascension time to a small JSON file.

    Uses a simple atomic replace pattern to avoid truncated saves. A missing or
    corrupt file simply means there is no best time yet.
    """
    def __init__(self, path=None, key=BEST_TIME_KEY):
        self.path = os.fspath(path) if path else os.getenv("CRIMSON_DOT_SAVE_FILE", SAVE_FILE)
        self.key = key

    def _read(self):
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, 'r') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Failed to read save file '%s': %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def load(self):
        """Return the stored best time in seconds, or None."""
        value = self._read().get(self.key)
        try:
            best = float(value)
        except (TypeError, ValueError):
            return None
        if not math.isfinite(best) or best <= 0:
            return None
        return best

    def record(self, elapsed):
        """Store elapsed if it beats the current best. Returns the best time after recording."""
        best = self.load()
        if elapsed and elapsed > 0 and (best is None or elapsed < best):
            data = self._read()
            data[self.key] = float(elapsed)
            # Write to a temp file then atomically replace the save file
            tmp = self.path + ".tmp"
            with open(tmp, 'w') as f:
                json.dump(data, f)
            os.replace(tmp, self.path)
            logger.info("New best time %s", format_time(elapsed))
            best = float(elapsed)
        return best
