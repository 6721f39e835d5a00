"""
Door geometry and door linking for map tiles.

Door positions are derived from the tile footprint alone:
- The tile spans [0, width] x [0, height] grid cells
- Direction 0 sits on the top edge (y = 0), 1 on the right edge (x = width),
  2 on the bottom edge (y = height), 3 on the left edge (x = 0)
- side_lateral_offset counts cells from the low-coordinate end of that edge
- The door is centred on its cell, so offset k maps to k + 0.5

Distances are in world units (cells * GRID_CELL_SIZE) and stored as 32-bit
floats, the precision the generator works in.
"""

from __future__ import annotations

import logging
from typing import List

import numpy as np

from ..config import GRID_CELL_SIZE
from .gamedata import CaveUnit, DoorLink, DoorUnit

logger = logging.getLogger(__name__)


def door_position(unit: CaveUnit, door: DoorUnit) -> np.ndarray:
    """Get a door's position in the unit's local space.

    Args:
        unit: Unit the door belongs to
        door: Door to place

    Returns:
        float32 array (x, y) in world units
    """
    along = door.side_lateral_offset + 0.5
    direction = door.direction % 4
    if direction == 0:
        cell = (along, 0.0)
    elif direction == 1:
        cell = (unit.width, along)
    elif direction == 2:
        cell = (along, unit.height)
    else:
        cell = (0.0, along)
    return np.asarray(cell, dtype=np.float32) * np.float32(GRID_CELL_SIZE)


def door_positions(unit: CaveUnit) -> np.ndarray:
    """Get every door position of a unit as an (n, 2) float32 array."""
    if not unit.doors:
        return np.zeros((0, 2), dtype=np.float32)
    return np.stack([door_position(unit, door) for door in unit.doors])


def door_distance_matrix(unit: CaveUnit) -> np.ndarray:
    """Pairwise straight-line distances between a unit's doors.

    Returns:
        Symmetric (n, n) float32 array with a zero diagonal
    """
    positions = door_positions(unit)
    deltas = positions[:, np.newaxis, :] - positions[np.newaxis, :, :]
    return np.sqrt(np.sum(deltas * deltas, axis=-1)).astype(np.float32)


def compute_door_links(unit: CaveUnit) -> List[List[DoorLink]]:
    """Build the door links of a unit without touching it.

    One link per ordered pair of distinct doors, so every unordered pair
    produces a link in each direction with the same distance.

    Returns:
        Link lists indexed by door id, each ordered by partner door id
    """
    distances = door_distance_matrix(unit)
    links: List[List[DoorLink]] = []
    for i in range(len(unit.doors)):
        links.append([
            DoorLink(distance=float(distances[i, j]), door_id=j, tekiflag=False)
            for j in range(len(unit.doors))
            if j != i
        ])
    return links


def link_doors(unit: CaveUnit) -> CaveUnit:
    """Attach freshly computed door links to every door of a unit.

    Existing links are replaced and num_links is brought in line. Meant to
    run once while a unit is being built; rotated copies keep the links
    of the unit they were copied from.

    Returns:
        The same unit, for chaining
    """
    for door, links in zip(unit.doors, compute_door_links(unit)):
        door.door_links = links
        door.num_links = len(links)
    logger.debug(f"Linked {len(unit.doors)} doors on {unit.unit_folder_name}")
    return unit
