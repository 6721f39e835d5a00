"""
Read-only queries over a floor's generation parameters.

These give the placement step side-effect-free views of a FloorInfo.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Iterator, List

from .gamedata import CaveUnit, RoomType, TekiInfo

if TYPE_CHECKING:
    from .floor_info import FloorInfo


class TekiGroupView:
    """Restartable view of the teki in one spawn group.

    Each iteration re-filters the floor's teki list, so the view can be
    consumed any number of times.
    """

    def __init__(self, teki_info: List[TekiInfo], group: int):
        self._teki_info = teki_info
        self.group = group

    def __iter__(self) -> Iterator[TekiInfo]:
        return (teki for teki in self._teki_info if teki.group == self.group)

    def __repr__(self) -> str:
        return f"TekiGroupView(group={self.group})"


def teki_group(floor: 'FloorInfo', group: int) -> TekiGroupView:
    """Get all teki in a spawn group."""
    return TekiGroupView(floor.teki_info, group)


def max_num_doors_single_unit(floor: 'FloorInfo') -> int:
    """Find the highest door count of any unit on the floor.

    Returns:
        The maximum num_doors, or 0 when the floor has no units
    """
    return max((unit.num_doors for unit in floor.cave_units), default=0)


def units_with_start_spawnpoint(floor: 'FloorInfo') -> List[CaveUnit]:
    return [unit for unit in floor.cave_units if unit.has_start_spawnpoint()]


def units_by_room_type(floor: 'FloorInfo') -> Dict[RoomType, List[CaveUnit]]:
    """Group the floor's units by room type, keeping their order.

    Every RoomType is present as a key, possibly with an empty list.
    """
    grouped: Dict[RoomType, List[CaveUnit]] = {room_type: [] for room_type in RoomType}
    for unit in floor.cave_units:
        grouped[unit.room_type].append(unit)
    return grouped
