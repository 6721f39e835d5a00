"""
Turns parsed sublevel records into the generation parameter model.

Records are JSON-compatible dicts, one file per cave:

    {
      "cave_name": "SCx",
      "floors": [
        {"sublevel": 0, "max_main_objects": 12, ..., "cave_units": [...],
         "teki_info": [...], "item_info": [...], "gate_info": [...],
         "cap_info": [...]},
        ...
      ]
    }

Reading the game's own CaveInfo text format is left to the parsing tools
that produce these records. Every unit built here gets its door links, and
each floor's unit list is expanded into rotations and ordered the way the
generator orders it.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional

from ..caveinfo.door_links import link_doors
from ..caveinfo.floor_info import CaveInfo, FloorInfo
from ..caveinfo.gamedata import (
    CapInfo,
    CaveUnit,
    DoorUnit,
    GateInfo,
    ItemInfo,
    RoomType,
    SpawnPoint,
    TekiInfo,
)
from ..caveinfo.unit_sorting import prepare_cave_units
from ..errors import RecordError

logger = logging.getLogger(__name__)


_REQUIRED = object()


def _require(data: Mapping[str, Any], key: str, context: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise RecordError(f"{context}: missing field {key!r}") from None
    except TypeError:
        raise RecordError(f"{context}: expected an object, got {type(data).__name__}") from None


def _field(data: Mapping[str, Any], key: str, context: str, convert: Callable[[Any], Any],
           default: Any = _REQUIRED) -> Any:
    """Read one field and convert it, reporting bad values with context.

    Args:
        data: Record to read from
        key: Field name
        context: Description of the record for error messages
        convert: int, float or another single-argument converter
        default: Value used when the field is absent; required if omitted

    Raises:
        RecordError: If the field is missing (and required) or won't convert
    """
    if default is not _REQUIRED and isinstance(data, Mapping) and key not in data:
        return default
    value = _require(data, key, context)
    # bool is an int subclass; True must not pass as a count
    if isinstance(value, bool) and convert in (int, float):
        raise RecordError(f"{context}: field {key!r} must be a number, got {value!r}")
    try:
        return convert(value)
    except (TypeError, ValueError):
        raise RecordError(f"{context}: field {key!r} has invalid value {value!r}") from None


def _flag(data: Mapping[str, Any], key: str, context: str) -> bool:
    """Read an optional boolean field; anything but true/false is rejected."""
    value = _field(data, key, context, lambda v: v, default=False)
    if not isinstance(value, bool):
        raise RecordError(f"{context}: field {key!r} must be true or false, got {value!r}")
    return value


def _records(data: Mapping[str, Any], key: str, context: str, required: bool = False) -> List[Any]:
    """Read a field holding a list of nested records."""
    value = _field(data, key, context, lambda v: v, default=_REQUIRED if required else [])
    if not isinstance(value, list):
        raise RecordError(f"{context}: field {key!r} must be a list, got {type(value).__name__}")
    return value


def _optional_str(data: Mapping[str, Any], key: str, context: str) -> Optional[str]:
    value = _field(data, key, context, lambda v: v, default=None)
    if value is not None and not isinstance(value, str):
        raise RecordError(f"{context}: field {key!r} must be a string, got {value!r}")
    return value


# =============================================================================
# ENTITY RECORDS
# =============================================================================

def _dict_to_spawn_point(data: Dict[str, Any], context: str) -> SpawnPoint:
    return SpawnPoint(
        group=_field(data, "group", context, int),
        pos_x=_field(data, "pos_x", context, float, 0.0),
        pos_y=_field(data, "pos_y", context, float, 0.0),
        pos_z=_field(data, "pos_z", context, float, 0.0),
        angle_degrees=_field(data, "angle_degrees", context, float, 0.0),
        radius=_field(data, "radius", context, float, 0.0),
        min_num=_field(data, "min_num", context, int, 0),
        max_num=_field(data, "max_num", context, int, 0),
    )


def _dict_to_door(data: Dict[str, Any], context: str) -> DoorUnit:
    return DoorUnit(
        direction=_field(data, "direction", context, int),
        side_lateral_offset=_field(data, "side_lateral_offset", context, int),
        waypoint_index=_field(data, "waypoint_index", context, int, 0),
    )


def unit_from_record(data: Dict[str, Any]) -> CaveUnit:
    """Create a linked, unrotated CaveUnit from a record.

    Raises:
        RecordError: If a required field is missing or has the wrong shape
        InvalidRoomTypeError: If room_type is not 0, 1 or 2
    """
    name = _field(data, "unit_folder_name", "unit", str)
    context = f"unit {name}"
    doors = [
        _dict_to_door(door, f"{context} door {index}")
        for index, door in enumerate(_records(data, "doors", context))
    ]
    unit = CaveUnit(
        unit_folder_name=name,
        width=_field(data, "width", context, int),
        height=_field(data, "height", context, int),
        room_type=RoomType.from_index(_require(data, "room_type", context)),
        num_doors=_field(data, "num_doors", context, int, len(doors)),
        doors=doors,
        rotation=0,
        spawn_points=[
            _dict_to_spawn_point(sp, f"{context} spawn point {index}")
            for index, sp in enumerate(_records(data, "spawn_points", context))
        ],
    )
    return link_doors(unit)


def _dict_to_teki(data: Dict[str, Any], context: str) -> TekiInfo:
    return TekiInfo(
        internal_name=_field(data, "internal_name", context, str),
        carrying=_optional_str(data, "carrying", context),
        minimum_amount=_field(data, "minimum_amount", context, int, 0),
        filler_distribution_weight=_field(data, "filler_distribution_weight", context, int, 0),
        group=_field(data, "group", context, int, 0),
        spawn_method=_optional_str(data, "spawn_method", context),
    )


def _dict_to_item(data: Dict[str, Any], context: str) -> ItemInfo:
    return ItemInfo(
        internal_name=_field(data, "internal_name", context, str),
        min_amount=_field(data, "min_amount", context, int, 0),
        filler_distribution_weight=_field(data, "filler_distribution_weight", context, int, 0),
    )


def _dict_to_gate(data: Dict[str, Any], context: str) -> GateInfo:
    return GateInfo(
        health=_field(data, "health", context, float),
        spawn_distribution_weight=_field(data, "spawn_distribution_weight", context, int, 0),
    )


def _dict_to_cap(data: Dict[str, Any], context: str) -> CapInfo:
    return CapInfo(
        internal_name=_field(data, "internal_name", context, str),
        carrying=_optional_str(data, "carrying", context),
        minimum_amount=_field(data, "minimum_amount", context, int, 0),
        filler_distribution_weight=_field(data, "filler_distribution_weight", context, int, 0),
        group=_field(data, "group", context, int, 0),
        spawn_method=_optional_str(data, "spawn_method", context),
    )


# =============================================================================
# FLOOR AND CAVE RECORDS
# =============================================================================

def floor_from_record(data: Dict[str, Any], cave_name: Optional[str] = None) -> FloorInfo:
    """Create a FloorInfo from a floor record.

    Args:
        data: Floor record
        cave_name: Cave name to use when the record doesn't carry one

    Returns:
        FloorInfo whose cave_units are rotation-expanded and ordered
        (units_prepared is set)

    Raises:
        RecordError: If a required field is missing or has the wrong shape
    """
    cave_name = _optional_str(data, "cave_name", f"cave {cave_name} floor") or cave_name
    sublevel = _field(data, "sublevel", f"cave {cave_name} floor", int)
    context = f"{cave_name} sublevel {sublevel}"

    units = [unit_from_record(unit) for unit in _records(data, "cave_units", context)]

    return FloorInfo(
        cave_name=cave_name,
        sublevel=sublevel,
        max_main_objects=_field(data, "max_main_objects", context, int, 0),
        max_treasures=_field(data, "max_treasures", context, int, 0),
        max_gates=_field(data, "max_gates", context, int, 0),
        num_rooms=_field(data, "num_rooms", context, int, 0),
        corridor_probability=_field(data, "corridor_probability", context, float, 0.0),
        cap_probability=_field(data, "cap_probability", context, float, 0.0),
        has_geyser=_flag(data, "has_geyser", context),
        exit_plugged=_flag(data, "exit_plugged", context),
        cave_units=prepare_cave_units(units),
        teki_info=[_dict_to_teki(t, f"{context} teki") for t in _records(data, "teki_info", context)],
        item_info=[_dict_to_item(i, f"{context} item") for i in _records(data, "item_info", context)],
        gate_info=[_dict_to_gate(g, f"{context} gate") for g in _records(data, "gate_info", context)],
        cap_info=[_dict_to_cap(c, f"{context} cap") for c in _records(data, "cap_info", context)],
        is_final_floor=_flag(data, "is_final_floor", context),
        units_prepared=True,
    )


def cave_from_record(data: Dict[str, Any]) -> CaveInfo:
    """Create a CaveInfo from a cave record.

    When no floor record says is_final_floor, the highest sublevel is
    marked final.

    Raises:
        RecordError: If the record is not an object or has no floor list
    """
    cave_name = _optional_str(data, "cave_name", "cave")
    context = f"cave {cave_name}"
    floors = [floor_from_record(floor, cave_name) for floor in _records(data, "floors", context, required=True)]
    floors.sort(key=lambda floor: floor.sublevel)
    if floors and not any(floor.is_final_floor for floor in floors):
        floors[-1].is_final_floor = True
    return CaveInfo(num_floors=len(floors), floors=floors)


def load_cave_file(file_path: Path) -> CaveInfo:
    """Load a cave record file.

    Raises:
        RecordError: If the file is not valid JSON or a record is malformed
        OSError: If the file cannot be read
    """
    with open(file_path, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise RecordError(f"{file_path}: {e}") from e
    cave = cave_from_record(data)
    logger.debug(f"Loaded {cave.num_floors} floors from {file_path}")
    return cave


def load_all_sublevels(data_dir: Path, file_pattern: str = "*.json") -> Dict[str, FloorInfo]:
    """Load every cave file in a directory, keyed by lower-cased sublevel name.

    Args:
        data_dir: Directory holding cave record files
        file_pattern: Glob selecting the files

    Returns:
        Dict like {"scx7": FloorInfo, ...}

    Raises:
        RecordError: If two floors share a name, or any record is malformed
    """
    sublevels: Dict[str, FloorInfo] = {}
    for file_path in sorted(Path(data_dir).glob(file_pattern)):
        for floor in load_cave_file(file_path).floors:
            key = floor.name().lower()
            if key in sublevels:
                raise RecordError(f"{file_path}: duplicate sublevel {floor.name()}")
            sublevels[key] = floor
    return sublevels


def records_to_sublevels(records: List[Dict[str, Any]]) -> Dict[str, FloorInfo]:
    """Same as load_all_sublevels, for cave records already in memory."""
    sublevels: Dict[str, FloorInfo] = {}
    for record in records:
        for floor in cave_from_record(record).floors:
            key = floor.name().lower()
            if key in sublevels:
                raise RecordError(f"duplicate sublevel {floor.name()}")
            sublevels[key] = floor
    return sublevels
