"""
Cave unit ordering and rotation expansion.

The generator's very first step sorts its candidate units by footprint area,
breaking ties with door count. The sort it uses is not a textbook one: it is
unstable, and the relative order of units that compare equal feeds straight
into seed-dependent placement. sort_cave_units() reproduces it step for step.
A library sort (stable or not) gives a different order among ties.
"""

from __future__ import annotations

import logging
from typing import Iterable, List

from .gamedata import CaveUnit

logger = logging.getLogger(__name__)


def sort_cave_units(unsorted: Iterable[CaveUnit]) -> List[CaveUnit]:
    """Order units the way the generator does.

    Like a bubble sort, except the anchor at `i` is compared against the
    whole remaining list rather than its neighbour. On the first later unit
    it is greater than, the anchor is moved to the end of the list and the
    unit that slid into position `i` is checked next.

    Args:
        unsorted: Units to order; not modified

    Returns:
        New list, non-decreasing by (area, num_doors)
    """
    units = list(unsorted)
    relocations = 0
    i = 0
    while i < len(units):
        j = i + 1
        while j < len(units):
            if units[i] > units[j]:
                units.append(units.pop(i))
                relocations += 1
                break
            j += 1
        else:
            i += 1
    logger.debug(f"Sorted {len(units)} units with {relocations} relocations")
    return units


def expand_rotations(units: Iterable[CaveUnit]) -> List[CaveUnit]:
    """Duplicate each unit for every quarter turn.

    Output order is unit by unit, rotations 0, 1, 2, 3 consecutively.
    """
    return [
        unit.copy_and_rotate_to(rotation)
        for unit in units
        for rotation in range(4)
    ]


def prepare_cave_units(units: Iterable[CaveUnit]) -> List[CaveUnit]:
    """Expand rotations and then sort, producing the generator's unit list."""
    expanded = expand_rotations(units)
    logger.debug(f"Expanded to {len(expanded)} rotated units")
    return sort_cave_units(expanded)
