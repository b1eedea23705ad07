"""
Tests for coordinate persistence and the explanation cache

Usage:
    python -m pytest tests/test_storage.py
"""

import json
import sys
import threading
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.pathing import Direction, Movement, Point
from src.storage import CoordinateStore, ExplanationCache, build_cache_key


class FakeClock:
    """Manually advanced time source."""

    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


MOVEMENT = Movement(Point(0, 0), Point(1, 2), Direction.NE, 1)


# --- CoordinateStore ---

def test_store_round_trip(tmp_path):
    store = CoordinateStore(tmp_path / "nested" / "coordinates.json")
    assert store.save([Point(0, 0), Point(3, 4)])
    assert store.load() == [Point(0, 0), Point(3, 4)]


def test_store_file_format(tmp_path):
    store = CoordinateStore(tmp_path / "coordinates.json")
    store.save([Point(2, 1)])
    assert json.loads(store.path.read_text(encoding="utf-8")) == [{"x": 2, "y": 1}]


def test_store_missing_file(tmp_path):
    assert CoordinateStore(tmp_path / "none.json").load() == []


def test_store_corrupt_file(tmp_path):
    path = tmp_path / "coordinates.json"
    path.write_text("{not json", encoding="utf-8")
    assert CoordinateStore(path).load() == []


def test_store_invalid_entries(tmp_path):
    path = tmp_path / "coordinates.json"
    path.write_text('[{"x": -4, "y": 1}]', encoding="utf-8")
    assert CoordinateStore(path).load() == []


def test_store_save_failure_returns_false(tmp_path):
    # A directory where the file should be
    path = tmp_path / "coordinates.json"
    path.mkdir()
    assert not CoordinateStore(path).save([Point(0, 0)])


# --- ExplanationCache ---

def test_cache_key_format():
    assert build_cache_key(MOVEMENT, "en") == "0,0-1,2-NE-en"


def test_cache_put_and_get(tmp_path):
    cache = ExplanationCache(tmp_path / "explanations.json")
    assert cache.get(MOVEMENT, "en") is None

    cache.put(MOVEMENT, "en", "Diagonal first.")
    assert cache.get(MOVEMENT, "en") == "Diagonal first."
    assert cache.get(MOVEMENT, "es") is None
    assert len(cache) == 1


def test_cache_entries_expire(tmp_path):
    clock = FakeClock()
    cache = ExplanationCache(tmp_path / "explanations.json", ttl_seconds=60, clock=clock)
    cache.put(MOVEMENT, "en", "text")

    clock.now += 59
    assert cache.get(MOVEMENT, "en") == "text"

    clock.now += 2
    assert cache.get(MOVEMENT, "en") is None
    assert len(cache) == 0  # Expired entry removed


def test_cache_persists_across_instances(tmp_path):
    path = tmp_path / "explanations.json"
    ExplanationCache(path).put(MOVEMENT, "es", "Texto")
    assert ExplanationCache(path).get(MOVEMENT, "es") == "Texto"


def test_cache_clear(tmp_path):
    cache = ExplanationCache(tmp_path / "explanations.json")
    cache.put(MOVEMENT, "en", "a")
    cache.clear()
    assert len(cache) == 0


def test_cache_concurrent_puts_keep_every_entry(tmp_path):
    """Workers writing at the same time must not drop each other's entries."""
    cache = ExplanationCache(tmp_path / "explanations.json")
    movements = [Movement(Point(i, 0), Point(i, 1), Direction.N, 1) for i in range(40)]
    barrier = threading.Barrier(len(movements))

    def writer(movement):
        barrier.wait()
        for n in range(5):
            cache.put(movement, "en", f"text {movement.origin.x} #{n}")

    threads = [threading.Thread(target=writer, args=(m,)) for m in movements]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    stored = [m for m in movements if cache.get(m, "en") is not None]
    assert len(stored) == len(movements)
    assert cache.get(movements[7], "en") == "text 7 #4"
    # No temporary files left behind
    assert [p.name for p in tmp_path.iterdir()] == ["explanations.json"]


@pytest.mark.skipif(sys.platform == "win32", reason="os.replace fails while the target is open on Windows")
def test_cache_readers_never_see_partial_file(tmp_path):
    """A second instance on the same file reads while the first writes."""
    path = tmp_path / "explanations.json"
    writer_cache = ExplanationCache(path)
    reader_cache = ExplanationCache(path)
    writer_cache.put(MOVEMENT, "en", "seed")
    done = threading.Event()
    misses = []

    def reader():
        while not done.is_set():
            if reader_cache.get(MOVEMENT, "en") is None:
                misses.append(1)

    thread = threading.Thread(target=reader)
    thread.start()
    for i in range(200):
        writer_cache.put(MOVEMENT, "en", f"value {i}")
    done.set()
    thread.join()

    assert misses == []


def test_cache_corrupt_file(tmp_path):
    path = tmp_path / "explanations.json"
    path.write_text("[1, 2", encoding="utf-8")
    cache = ExplanationCache(path)

    assert cache.get(MOVEMENT, "en") is None
    cache.put(MOVEMENT, "en", "fresh")
    assert cache.get(MOVEMENT, "en") == "fresh"
