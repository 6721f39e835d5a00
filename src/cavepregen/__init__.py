"""
Cave unit model and deterministic pre-placement engine.

Reproduces the parts of a cave sublevel generator that run before any
random placement: the generation parameter model, rotation expansion of map
tiles, their unstable ordering, door links and the sublevel registry.
"""

from .errors import (
    CaveInfoError,
    InvalidRoomTypeError,
    SublevelNotFoundError,
    RecordError,
    ValidationError,
)
from .caveinfo import (
    CaveInfo,
    CaveUnit,
    DoorLink,
    DoorUnit,
    FloorInfo,
    RoomType,
    SpawnPoint,
    prepare_cave_units,
    sort_cave_units,
    expand_rotations,
)
from .registry import SublevelRegistry

__all__ = [
    'CaveInfoError',
    'InvalidRoomTypeError',
    'SublevelNotFoundError',
    'RecordError',
    'ValidationError',
    'CaveInfo',
    'CaveUnit',
    'DoorLink',
    'DoorUnit',
    'FloorInfo',
    'RoomType',
    'SpawnPoint',
    'prepare_cave_units',
    'sort_cave_units',
    'expand_rotations',
    'SublevelRegistry',
]

__version__ = '1.0.0'
