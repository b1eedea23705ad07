"""
Explanation Cache - Generated explanation text keyed by movement and language.
"""

import json
import logging
import os
import tempfile
import threading
import time
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from src.pathing import Movement

logger = logging.getLogger(__name__)


# 24 hours
DEFAULT_TTL_SECONDS = 24 * 60 * 60


def build_cache_key(movement: Movement, language: str) -> str:
    """
    Cache key for a movement/language pair.

    Example:
        "0,0-1,2-NE-en"
    """
    return f"{movement.cache_key}-{language}"


class ExplanationCache:
    """
    JSON-file cache of explanation strings with a per-entry time to live.

    Each entry stores the text and the time it was written. Expired entries
    are removed when read. There is no size bound and no cross-process
    locking. Like CoordinateStore, failures are logged and swallowed so a
    broken cache only costs a regeneration.

    Thread safety:
        Explanation workers share one instance. Every read-modify-write runs
        under a lock, and the file is swapped in with os.replace so a reader
        never sees a half-written file.

    Attributes:
        path: JSON file holding all entries
        ttl_seconds: Entry lifetime
    """

    def __init__(self, path: Path, ttl_seconds: float = DEFAULT_TTL_SECONDS,
                 clock: Callable[[], float] = time.time):
        """
        Args:
            path: JSON file to read and write
            ttl_seconds: Entry lifetime in seconds
            clock: Time source returning seconds (injectable for tests)
        """
        self.path = Path(path)
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()

    def get(self, movement: Movement, language: str) -> Optional[str]:
        """
        Look up a cached explanation.

        Args:
            movement: Movement the explanation belongs to
            language: Language code

        Returns:
            Cached text, or None if missing or expired
        """
        key = build_cache_key(movement, language)
        with self._lock:
            entries = self._read()
            entry = entries.get(key)
            if not isinstance(entry, dict) or "explanation" not in entry:
                return None

            age = self._clock() - float(entry.get("timestamp", 0))
            if age > self.ttl_seconds:
                logger.debug(f"Cache entry expired: {key}")
                del entries[key]
                self._write(entries)
                return None

            return entry["explanation"]

    def put(self, movement: Movement, language: str, explanation: str) -> None:
        """
        Store an explanation.

        Args:
            movement: Movement the explanation belongs to
            language: Language code
            explanation: Text to cache
        """
        key = build_cache_key(movement, language)
        with self._lock:
            entries = self._read()
            entries[key] = {"explanation": explanation, "timestamp": self._clock()}
            self._write(entries)

    def clear(self) -> None:
        """Remove every entry."""
        with self._lock:
            self._write({})

    def __len__(self) -> int:
        with self._lock:
            return len(self._read())

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to read explanation cache: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, entries: Dict[str, Any]) -> None:
        tmp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=str(self.path.parent)
            )
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(entries, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.path)
            tmp_path = None
        except OSError as e:
            logger.warning(f"Failed to write explanation cache: {e}")
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                try:
                    os.unlink(tmp_path)
                except OSError as e:
                    logger.debug(f"Could not remove temporary cache file {tmp_path}: {e}")
