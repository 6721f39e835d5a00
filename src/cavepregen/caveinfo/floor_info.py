"""
Per-sublevel generation parameters.

FloorInfo is everything needed to generate one sublevel: its limits and
probabilities, its candidate map tiles, and the teki, items, gates and cap
teki that may spawn on it. CaveInfo groups the floors of a whole cave.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..errors import CaveInfoError
from . import aggregation
from .gamedata import CapInfo, CaveUnit, GateInfo, ItemInfo, RoomType, TekiInfo
from .unit_sorting import prepare_cave_units


@dataclass
class FloorInfo:
    """
    Generation parameters for one sublevel.

    Attributes:
        cave_name: Cave name for debugging and logging only (e.g. "SCx")
        sublevel: 0-indexed sublevel number
        max_main_objects: Maximum number of main (teki) objects
        max_treasures: Maximum number of treasures
        max_gates: Maximum number of gates
        num_rooms: Number of rooms, excluding corridors and caps/alcoves
        corridor_probability: In range [0, 1]; relative corridor:room scale
        cap_probability: In range [0, 1]; chance of a cap instead of an alcove
        has_geyser: Whether the exit geyser spawns
        exit_plugged: Whether the exit hole is plugged
        cave_units: Candidate map tiles
        teki_info: Teki definitions
        item_info: Loose treasure definitions
        gate_info: Gate definitions
        cap_info: Alcove object definitions
        is_final_floor: Whether this is the cave's last sublevel
        units_prepared: True when cave_units already holds every rotation,
                        ordered (as the record loader builds it)
    """
    cave_name: Optional[str] = None
    sublevel: int = 0
    max_main_objects: int = 0
    max_treasures: int = 0
    max_gates: int = 0
    num_rooms: int = 0
    corridor_probability: float = 0.0
    cap_probability: float = 0.0
    has_geyser: bool = False
    exit_plugged: bool = False
    cave_units: List[CaveUnit] = field(default_factory=list)
    teki_info: List[TekiInfo] = field(default_factory=list)
    item_info: List[ItemInfo] = field(default_factory=list)
    gate_info: List[GateInfo] = field(default_factory=list)
    cap_info: List[CapInfo] = field(default_factory=list)
    is_final_floor: bool = False
    units_prepared: bool = False

    def name(self) -> str:
        """
        Get the human-readable sublevel name, e.g. "SCx7".

        Not used by generation; the sublevel number is shown 1-indexed.

        Raises:
            CaveInfoError: If the floor has no cave name
        """
        if self.cave_name is None:
            raise CaveInfoError("No cave name found!")
        return f"{self.cave_name}{self.sublevel + 1}"

    def teki_group(self, group: int) -> aggregation.TekiGroupView:
        return aggregation.teki_group(self, group)

    def max_num_doors_single_unit(self) -> int:
        return aggregation.max_num_doors_single_unit(self)

    def units_by_room_type(self) -> Dict[RoomType, List[CaveUnit]]:
        return aggregation.units_by_room_type(self)

    def prepared_units(self) -> List[CaveUnit]:
        """Expand every unit into its rotations and order them.

        Returns a new list; cave_units is left as it is. A floor whose
        units are already prepared is not expanded a second time.
        """
        if self.units_prepared:
            return list(self.cave_units)
        return prepare_cave_units(self.cave_units)

    def base_units(self) -> List[CaveUnit]:
        """The unrotated tiles of this floor, one per unit definition."""
        if self.units_prepared:
            return [unit for unit in self.cave_units if unit.rotation == 0]
        return list(self.cave_units)


@dataclass
class CaveInfo:
    """
    The FloorInfo of every sublevel in a cave.

    Attributes:
        num_floors: Number of sublevels
        floors: FloorInfo per sublevel, in sublevel order
    """
    num_floors: int
    floors: List[FloorInfo] = field(default_factory=list)

    def floor(self, sublevel: int) -> FloorInfo:
        """Get a floor by its 0-indexed sublevel number.

        Raises:
            CaveInfoError: If the cave has no such sublevel
        """
        for floor in self.floors:
            if floor.sublevel == sublevel:
                return floor
        raise CaveInfoError(f"Cave has no sublevel {sublevel}")
