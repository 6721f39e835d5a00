"""
Sublevel registry and record loading.

Usage:
    from cavepregen.registry import SublevelRegistry

    registry = SublevelRegistry.from_config()
    floor = registry.get("SCx7")
"""

from .sublevel_registry import SublevelRegistry, SublevelSource
from .record_loader import (
    unit_from_record,
    floor_from_record,
    cave_from_record,
    load_cave_file,
    load_all_sublevels,
    records_to_sublevels,
)

__all__ = [
    'SublevelRegistry',
    'SublevelSource',
    'unit_from_record',
    'floor_from_record',
    'cave_from_record',
    'load_cave_file',
    'load_all_sublevels',
    'records_to_sublevels',
]
