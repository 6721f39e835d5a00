"""
Sublevel generation parameter model.

Provides the data a sublevel is generated from, together with the two steps
that have to match the generator exactly before any random placement runs:
the rotation expansion of map tiles and their unstable ordering.

Usage:
    from cavepregen.caveinfo import FloorInfo, prepare_cave_units

    units = prepare_cave_units(floor.cave_units)
    widest = floor.max_num_doors_single_unit()
"""

from .gamedata import (
    TekiInfo,
    ItemInfo,
    GateInfo,
    CapInfo,
    RoomType,
    SpawnPoint,
    DoorLink,
    DoorUnit,
    CaveUnit,
)
from .floor_info import FloorInfo, CaveInfo
from .unit_sorting import sort_cave_units, expand_rotations, prepare_cave_units
from .door_links import (
    door_position,
    door_positions,
    door_distance_matrix,
    compute_door_links,
    link_doors,
)
from .aggregation import (
    TekiGroupView,
    teki_group,
    max_num_doors_single_unit,
    units_with_start_spawnpoint,
    units_by_room_type,
)

__all__ = [
    # Spawnable objects
    'TekiInfo',
    'ItemInfo',
    'GateInfo',
    'CapInfo',
    # Map tiles
    'RoomType',
    'SpawnPoint',
    'DoorLink',
    'DoorUnit',
    'CaveUnit',
    # Floors
    'FloorInfo',
    'CaveInfo',
    # Ordering and rotation
    'sort_cave_units',
    'expand_rotations',
    'prepare_cave_units',
    # Door geometry
    'door_position',
    'door_positions',
    'door_distance_matrix',
    'compute_door_links',
    'link_doors',
    # Queries
    'TekiGroupView',
    'teki_group',
    'max_num_doors_single_unit',
    'units_with_start_spawnpoint',
    'units_by_room_type',
]
