"""
Configuration values for the cave unit model and the sublevel registry.

Game constants live at module level. Registry settings are collected in
RegistryConfig; the data directory is resolved at call time so tests and
tools can point it elsewhere through the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

# Width of one cave grid cell (and of every door) in game-world units
GRID_CELL_SIZE = 170.0

# Spawn group used by the start point (research pod / ship)
START_SPAWN_GROUP = 7

# Lower-case substring marking Candypop Buds in cap teki names
CANDYPOP_MARKER = "pom"

# Environment variable overriding the sublevel record directory
DATA_DIR_ENV = "CAVEPREGEN_DATA_DIR"


def get_data_dir() -> Path:
    """
    Get the directory holding sublevel record files.

    Returns:
        $CAVEPREGEN_DATA_DIR if set, otherwise ~/.config/cavepregen/sublevels.
        The directory is not created.
    """
    override = os.environ.get(DATA_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "cavepregen" / "sublevels"


@dataclass
class RegistryConfig:
    """
    Settings for loading the sublevel registry from record files.

    Attributes:
        data_dir: Directory scanned for record files
        strict: If True, FAIL validation issues raise instead of being logged
        file_pattern: Glob selecting record files inside data_dir
    """
    data_dir: Path = field(default_factory=get_data_dir)
    strict: bool = False
    file_pattern: str = "*.json"
