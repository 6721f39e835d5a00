"""
Game data types for sublevel generation parameters.

Defines the entities a sublevel's generation parameters are built from:
- TekiInfo: Enemy / hazard definition ("teki")
- ItemInfo: Loose treasure definition
- GateInfo: Gate definition
- CapInfo: Object spawned in an alcove spawn point
- RoomType: Map tile classification (Room, Hallway, DeadEnd)
- SpawnPoint: Spawn location relative to its tile's origin
- DoorLink: Straight line between two doors of the same tile
- DoorUnit: Connection point on a tile's boundary
- CaveUnit: One map tile definition, possibly rotated

Ordering System:
- CaveUnits compare by footprint area (width * height), then door count
- Two structurally different units can compare equal
- The generator's unit ordering depends on this coarse equality, see
  unit_sorting.sort_cave_units()

Rotation System:
- Rotations are quarter turns, 0-3
- CaveUnit.copy_and_rotate_to() swaps width/height on odd turns and moves
  doors with the generator's lateral offset flip rule
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from ..config import CANDYPOP_MARKER, START_SPAWN_GROUP
from ..errors import CaveInfoError, InvalidRoomTypeError


# =============================================================================
# SPAWNABLE OBJECT DEFINITIONS
# =============================================================================

@dataclass
class TekiInfo:
    """
    Enemy, hazard, plant or other spawnable object definition.

    Treasures carried inside an enemy are declared here through `carrying`,
    not in ItemInfo.

    Attributes:
        internal_name: Internal identifier (e.g. "Chappy")
        carrying: Identifier of the object held by this teki, if any
        minimum_amount: Number always spawned before filler distribution
        filler_distribution_weight: Weight in the filler distribution
        group: Spawn group; controls which spawn points it can use
        spawn_method: Spawn method identifier; present for falling teki
    """
    internal_name: str
    carrying: Optional[str] = None
    minimum_amount: int = 0
    filler_distribution_weight: int = 0
    group: int = 0
    spawn_method: Optional[str] = None


@dataclass
class ItemInfo:
    """Loose treasure sitting in the open or buried, not held by a teki."""
    internal_name: str
    min_amount: int = 0
    filler_distribution_weight: int = 0


@dataclass
class GateInfo:
    """Gate definition."""
    health: float
    spawn_distribution_weight: int = 0


@dataclass
class CapInfo:
    """
    Object spawned in an alcove (a dead end with a spawn point).

    Same shape as TekiInfo, but `group` controls how many spawn rather than
    where: the location is always the alcove's single spawn point. Objects
    spawned from CapInfo don't count towards the floor's maximums.
    """
    internal_name: str
    carrying: Optional[str] = None
    minimum_amount: int = 0
    filler_distribution_weight: int = 0
    group: int = 0
    spawn_method: Optional[str] = None

    def is_candypop(self) -> bool:
        """Check whether this cap teki is a Candypop Bud ("pom" internally)."""
        return CANDYPOP_MARKER in self.internal_name.lower()

    def is_falling(self) -> bool:
        """Every spawn method except the absent one makes the object fall."""
        return self.spawn_method is not None


# =============================================================================
# MAP TILE GEOMETRY
# =============================================================================

class RoomType(Enum):
    """Map tile classification."""
    ROOM = "room"
    HALLWAY = "hallway"
    DEAD_END = "dead_end"

    @classmethod
    def from_index(cls, index: int) -> 'RoomType':
        """Map the numeric room type used by unit definition files.

        Args:
            index: 0 (dead end), 1 (room) or 2 (hallway)

        Returns:
            The matching RoomType

        Raises:
            InvalidRoomTypeError: For any other value
        """
        mapping = {
            0: cls.DEAD_END,
            1: cls.ROOM,
            2: cls.HALLWAY,
        }
        # bool is an int subclass; True must not pass as a room
        if isinstance(index, bool) or index not in mapping:
            raise InvalidRoomTypeError(index)
        return mapping[index]

    def to_index(self) -> int:
        return {
            RoomType.DEAD_END: 0,
            RoomType.ROOM: 1,
            RoomType.HALLWAY: 2,
        }[self]


@dataclass
class SpawnPoint:
    """
    Spawn location for everything placed in a sublevel.

    Positions are relative to the owning unit's origin, NOT global coords.
    """
    group: int
    pos_x: float = 0.0
    pos_y: float = 0.0
    pos_z: float = 0.0
    angle_degrees: float = 0.0
    radius: float = 0.0
    min_num: int = 0
    max_num: int = 0

    @property
    def position(self) -> Tuple[float, float, float]:
        return (self.pos_x, self.pos_y, self.pos_z)

    def is_start(self) -> bool:
        return self.group == START_SPAWN_GROUP


@dataclass
class DoorLink:
    """
    Straight line between two doors in the same tile.

    This is not a path: the line can cross out-of-bounds and otherwise
    uncrossable space. DoorLinks never connect doors of separate tiles.

    Attributes:
        distance: Straight line distance in world units
        door_id: Index of the other door within the tile
        tekiflag: Whether a teki should spawn in the seam of the origin door.
                  The only field the placement step may change.
    """
    distance: float
    door_id: int
    tekiflag: bool = False


@dataclass
class DoorUnit:
    """
    Door on a map tile, i.e. an open spot where another tile can attach.

    All doors are exactly one grid cell wide.

    Attributes:
        direction: Facing, 0-3
        side_lateral_offset: Cell index along the side the door faces
        waypoint_index: Index of the navigation waypoint behind this door
        num_links: Number of door links
        door_links: Links to every other door of the same tile
    """
    direction: int
    side_lateral_offset: int
    waypoint_index: int = 0
    num_links: int = 0
    door_links: List[DoorLink] = field(default_factory=list)

    def facing(self, other: 'DoorUnit') -> bool:
        """Check whether two doors face opposite ways."""
        return abs(self.direction - other.direction) == 2


@dataclass(eq=False)
class CaveUnit:
    """
    One possible map tile on a sublevel.

    Equality and ordering are deliberately coarse: units compare by
    footprint area first and door count second. Use `is` for identity.

    Attributes:
        unit_folder_name: Unit identifier (e.g. "room_4x4a_4_snow")
        width: Width in cave grid cells, not in-game coords
        height: Height in cave grid cells, not in-game coords
        room_type: Room, hallway or dead end
        num_doors: Door count
        doors: Doors, indexed by door id
        rotation: Quarter turns, 0-3
        spawn_points: Spawn points relative to the unit origin
    """
    unit_folder_name: str
    width: int
    height: int
    room_type: RoomType
    num_doors: int = 0
    doors: List[DoorUnit] = field(default_factory=list)
    rotation: int = 0
    spawn_points: List[SpawnPoint] = field(default_factory=list)

    # -------------------------------------------------------------------------
    # Comparator
    # -------------------------------------------------------------------------

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def sort_key(self) -> Tuple[int, int]:
        return (self.area, self.num_doors)

    def __eq__(self, other):
        if not isinstance(other, CaveUnit):
            return NotImplemented
        return self.sort_key == other.sort_key

    def __lt__(self, other):
        if not isinstance(other, CaveUnit):
            return NotImplemented
        return self.sort_key < other.sort_key

    def __le__(self, other):
        if not isinstance(other, CaveUnit):
            return NotImplemented
        return self.sort_key <= other.sort_key

    def __gt__(self, other):
        if not isinstance(other, CaveUnit):
            return NotImplemented
        return self.sort_key > other.sort_key

    def __ge__(self, other):
        if not isinstance(other, CaveUnit):
            return NotImplemented
        return self.sort_key >= other.sort_key

    __hash__ = None

    # -------------------------------------------------------------------------
    # Rotation
    # -------------------------------------------------------------------------

    def copy_and_rotate_to(self, rotation: int) -> 'CaveUnit':
        """Copy this unit and apply a rotation to the copy.

        The door offset flip below reproduces the generator's behaviour as
        observed, including which turn amounts flip which axis. It is not a
        rigid rotation of the door positions.

        Args:
            rotation: Quarter turns to add, 0-3

        Returns:
            New CaveUnit sharing no mutable state with this one
        """
        new_unit = copy.deepcopy(self)
        new_unit.rotation = (self.rotation + rotation) % 4
        if rotation % 2 == 1:
            new_unit.width = self.height
            new_unit.height = self.width

        for door in new_unit.doors:
            if door.direction in (0, 2) and rotation in (2, 3):
                door.side_lateral_offset = self.width - 1 - door.side_lateral_offset
            elif door.direction in (1, 3) and rotation in (1, 2):
                door.side_lateral_offset = self.height - 1 - door.side_lateral_offset
            door.direction = (door.direction + rotation) % 4

        return new_unit

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def has_start_spawnpoint(self) -> bool:
        return any(sp.is_start() for sp in self.spawn_points)

    def link(self, door_index: int, link_index: int) -> DoorLink:
        """Get a door link by door and link index."""
        return self.doors[door_index].door_links[link_index]

    def set_seam_flag(self, door_index: int, link_index: int, value: bool = True) -> None:
        """Set the teki seam flag of one door link.

        This is the single mutation the placement step is allowed to make
        after construction.

        Raises:
            CaveInfoError: If either index is out of range
        """
        try:
            link = self.link(door_index, link_index)
        except IndexError:
            raise CaveInfoError(
                f"{self.unit_folder_name}: no link {link_index} on door {door_index}"
            ) from None
        link.tekiflag = value
