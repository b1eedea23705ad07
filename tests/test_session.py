"""
Tests for the path session orchestration

Usage:
    python -m pytest tests/test_session.py
"""

import json
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.path_session import (
    EXAMPLE_WAYPOINTS,
    PathFailure,
    PathSession,
    PathSuccess,
    calculate_path,
)
from src.pathing import Direction, Point
from src.storage import CoordinateStore
from src.validation import DUPLICATE_CONSECUTIVE, INVALID_JSON


def test_calculate_path_success():
    result = calculate_path('[{"x": 0, "y": 0}, {"x": 1, "y": 2}, {"x": 3, "y": 1}]')

    assert isinstance(result, PathSuccess)
    assert result.success
    assert result.total_steps == 4
    assert [m.step_number for m in result.movements] == [1, 2]
    assert result.movements[0].direction == Direction.NE


def test_calculate_path_single_point():
    result = calculate_path('[{"x": 4, "y": 4}]')
    assert result.success
    assert result.total_steps == 0
    assert result.movements == []


def test_calculate_path_failure_keys():
    result = calculate_path("[")
    assert isinstance(result, PathFailure)
    assert not result.success
    assert result.error == INVALID_JSON

    result = calculate_path('[{"x": 1, "y": 1}, {"x": 1, "y": 1}]')
    assert result.error == DUPLICATE_CONSECUTIVE


def test_session_calculate_updates_state():
    session = PathSession()
    assert not session.has_path

    session.set_coordinates_json('[{"x": 0, "y": 0}, {"x": 2, "y": 2}]')
    session.calculate()

    assert session.has_path
    assert session.total_steps == 2
    assert session.error is None
    assert session.movement(1).target == Point(2, 2)
    assert session.movement(0) is None
    assert session.movement(2) is None
    assert session.sequence_text() == "(0,0) → (2,2)"


def test_session_failure_keeps_previous_path():
    session = PathSession()
    session.set_coordinates_json('[{"x": 0, "y": 0}, {"x": 3, "y": 0}]')
    session.calculate()

    session.set_coordinates_json('[{"x": -1, "y": 0}]')
    result = session.calculate()

    assert not result.success
    assert session.error == result.error
    assert session.total_steps == 3
    assert len(session.movements) == 1


def test_session_editing_clears_error():
    session = PathSession()
    session.set_coordinates_json("oops")
    session.calculate()
    assert session.error == INVALID_JSON

    session.set_coordinates_json("[]")
    assert session.error is None


def test_load_example():
    session = PathSession()
    session.load_example()

    assert json.loads(session.coordinates_json) == [p.to_dict() for p in EXAMPLE_WAYPOINTS]
    result = session.calculate()
    assert result.success
    assert result.total_steps == 3


def test_successful_calculation_is_persisted(tmp_path):
    store = CoordinateStore(tmp_path / "data" / "coordinates.json")
    session = PathSession(store)

    session.set_coordinates_json('[{"x": 1, "y": 1}, {"x": 5, "y": 2}]')
    session.calculate()

    assert store.load() == [Point(1, 1), Point(5, 2)]


def test_failed_calculation_is_not_persisted(tmp_path):
    store = CoordinateStore(tmp_path / "coordinates.json")
    session = PathSession(store)

    session.set_coordinates_json("[]")
    session.calculate()

    assert not store.path.exists()


def test_load_saved_restores_path(tmp_path):
    store = CoordinateStore(tmp_path / "coordinates.json")
    store.save([Point(0, 0), Point(2, 3)])

    session = PathSession(store)
    assert session.load_saved()
    assert session.total_steps == 3
    assert session.coordinates == [Point(0, 0), Point(2, 3)]
    assert '"x": 2' in session.coordinates_json


def test_load_saved_without_data(tmp_path):
    assert not PathSession().load_saved()
    assert not PathSession(CoordinateStore(tmp_path / "missing.json")).load_saved()


def test_load_saved_rejects_stored_duplicates(tmp_path):
    path = tmp_path / "coordinates.json"
    path.write_text('[{"x": 1, "y": 1}, {"x": 1, "y": 1}]', encoding="utf-8")

    session = PathSession(CoordinateStore(path))
    assert not session.load_saved()
    assert not session.has_path
