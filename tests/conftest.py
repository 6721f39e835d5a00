import os
import sys

import pytest

# Make tests/factories importable regardless of invocation directory
TESTS_DIR = os.path.dirname(__file__)
if TESTS_DIR not in sys.path:
    sys.path.insert(0, TESTS_DIR)

from factories import cave_record, floor_record, make_unit, unit_record  # noqa: E402


@pytest.fixture
def start_room():
    return make_unit("room_start", 3, 3, doors=[(0, 1), (2, 1)], spawn_groups=[7, 0], link=True)


@pytest.fixture
def corner_room():
    """3x2 room with a door on every side."""
    return make_unit("room_corner", 3, 2, doors=[(0, 0), (1, 1), (2, 2), (3, 0)], link=True)


@pytest.fixture
def cave_records():
    units = [
        unit_record("room_a", 2, 2, room_type=1, doors=[(0, 0), (2, 1), (1, 0)], spawn_groups=[7]),
        unit_record("way_b", 1, 2, room_type=2, doors=[(0, 0), (2, 0)]),
        unit_record("cap_c", 1, 1, room_type=0, doors=[(0, 0)], spawn_groups=[9]),
    ]
    return [
        cave_record("TC", [floor_record(0, units), floor_record(1, units, has_geyser=True)]),
        cave_record("Ex", [floor_record(0, units)]),
    ]
