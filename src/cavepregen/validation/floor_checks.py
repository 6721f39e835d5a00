"""
Consistency checks for a sublevel's generation parameters.

Rules:
- CAVE-001 (FAIL): No unit has a start spawn point
- CAVE-002 (FAIL): A unit's num_doors disagrees with its door list
- CAVE-003 (WARN): Corridor or cap probability outside [0, 1]
- CAVE-004 (FAIL): A door's lateral offset falls outside its side
- CAVE-005 (WARN): A door's num_links disagrees with its link list

Checks only read the floor.
"""

from __future__ import annotations

from typing import Optional

from ..caveinfo.floor_info import FloorInfo
from ..caveinfo.gamedata import CaveUnit
from .core import Severity, ValidationIssue, ValidationResult


def _floor_label(floor: FloorInfo) -> Optional[str]:
    if floor.cave_name is None:
        return None
    return floor.name()


def check_start_spawnpoint(floor: FloorInfo) -> ValidationResult:
    result = ValidationResult()
    if not any(unit.has_start_spawnpoint() for unit in floor.cave_units):
        result.add_issue(ValidationIssue(
            severity=Severity.FAIL,
            code="CAVE-001",
            message="No unit has a start spawn point (group 7)",
            remediation="Add a room with a group 7 spawn point",
            sublevel=_floor_label(floor),
        ))
    return result


def check_probabilities(floor: FloorInfo) -> ValidationResult:
    result = ValidationResult()
    for attr in ("corridor_probability", "cap_probability"):
        value = getattr(floor, attr)
        if not 0.0 <= value <= 1.0:
            result.add_issue(ValidationIssue(
                severity=Severity.WARN,
                code="CAVE-003",
                message=f"{attr} is {value}, outside [0, 1]",
                sublevel=_floor_label(floor),
            ))
    return result


def check_unit_doors(unit: CaveUnit, sublevel: Optional[str] = None) -> ValidationResult:
    """Check a unit's door bookkeeping and door placement.

    Args:
        unit: Unit to check
        sublevel: Sublevel name to attach to issues

    Returns:
        ValidationResult with CAVE-002, CAVE-004 and CAVE-005 issues
    """
    result = ValidationResult()

    if unit.num_doors != len(unit.doors):
        result.add_issue(ValidationIssue(
            severity=Severity.FAIL,
            code="CAVE-002",
            message=f"num_doors is {unit.num_doors} but {len(unit.doors)} doors are defined",
            sublevel=sublevel,
            unit=unit.unit_folder_name,
        ))

    for index, door in enumerate(unit.doors):
        side = unit.width if door.direction % 2 == 0 else unit.height
        if not 0 <= door.side_lateral_offset < side:
            result.add_issue(ValidationIssue(
                severity=Severity.FAIL,
                code="CAVE-004",
                message=f"Offset {door.side_lateral_offset} is outside a side of {side} cells",
                sublevel=sublevel,
                unit=unit.unit_folder_name,
                door=index,
            ))
        if door.num_links != len(door.door_links):
            result.add_issue(ValidationIssue(
                severity=Severity.WARN,
                code="CAVE-005",
                message=f"num_links is {door.num_links} but {len(door.door_links)} links are defined",
                remediation="Rebuild links with link_doors()",
                sublevel=sublevel,
                unit=unit.unit_folder_name,
                door=index,
            ))

    return result


def validate_floor_info(floor: FloorInfo) -> ValidationResult:
    """Run every floor check.

    Door checks run on the unrotated tiles, so a prepared floor reports
    each bad tile once rather than once per rotation.

    Returns:
        Merged ValidationResult
    """
    result = ValidationResult()
    result.merge(check_start_spawnpoint(floor))
    result.merge(check_probabilities(floor))
    sublevel = _floor_label(floor)
    for unit in floor.base_units():
        result.merge(check_unit_doors(unit, sublevel))
    return result
