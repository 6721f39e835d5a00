"""
Sublevel registry: lookup from sublevel names to their FloorInfo.

The registry is filled once, from a source callable, the first time it is
needed. Afterwards it is read-only and can be shared between threads without
locking. Construct one registry and hand it to the code that needs lookups.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, Iterator, List, Mapping, Optional

from ..caveinfo.floor_info import FloorInfo
from ..config import RegistryConfig
from ..errors import RecordError, SublevelNotFoundError, ValidationError
from ..validation.core import ValidationResult
from ..validation.floor_checks import validate_floor_info
from .record_loader import load_all_sublevels

logger = logging.getLogger(__name__)

SublevelSource = Callable[[], Mapping[str, FloorInfo]]


class SublevelRegistry:
    """
    Registry of fully built FloorInfo instances.

    Lookups are case-insensitive ("SCx7" and "scx7" are the same sublevel).
    Lifecycle: empty at construction, populated exactly once by the first
    lookup or ensure_initialized() call, never cleared. If the source
    raises, nothing is cached and the next access tries again.

    Attributes:
        strict: If True, FAIL validation issues raise ValidationError
                instead of being logged
    """

    def __init__(self, source: SublevelSource, strict: bool = False, validate: bool = True,
                 source_name: Optional[str] = None):
        """Initialize the registry.

        Args:
            source: Callable returning {sublevel name: FloorInfo}. Called at
                    most once per successful initialization.
            strict: Raise on FAIL validation issues
            validate: Run floor validation while initializing
            source_name: Where the sublevels come from, for log messages
                         (defaults to the source's repr)
        """
        self._source = source
        self.strict = strict
        self._validate = validate
        self._source_name = source_name or repr(source)
        self._floors: Optional[Dict[str, FloorInfo]] = None
        self._init_lock = threading.Lock()

    @classmethod
    def from_config(cls, config: Optional[RegistryConfig] = None) -> 'SublevelRegistry':
        """Create a registry reading cave record files from a directory."""
        config = config or RegistryConfig()

        def source() -> Mapping[str, FloorInfo]:
            return load_all_sublevels(config.data_dir, config.file_pattern)

        return cls(source, strict=config.strict, source_name=str(config.data_dir))

    # -------------------------------------------------------------------------
    # Initialization
    # -------------------------------------------------------------------------

    @property
    def is_initialized(self) -> bool:
        return self._floors is not None

    def ensure_initialized(self) -> None:
        """Populate the registry if it hasn't been yet.

        Safe to call repeatedly and from several threads at once: only one
        caller runs the source, the others wait and then see its result.

        Raises:
            ValidationError: In strict mode, if a floor has FAIL issues
            RecordError: If two source names differ only by case
            Any exception raised by the source
        """
        if self._floors is not None:
            return
        with self._init_lock:
            if self._floors is not None:
                return
            floors = self._normalize(self._source())
            if self._validate:
                self._check(floors)
            # Publish only the completed mapping
            self._floors = floors
        logger.info(f"Sublevel registry initialized with {len(floors)} sublevels from {self._source_name}")

    def _normalize(self, source_floors: Mapping[str, FloorInfo]) -> Dict[str, FloorInfo]:
        floors: Dict[str, FloorInfo] = {}
        for name, floor in source_floors.items():
            key = name.lower()
            if key in floors:
                raise RecordError(f"{self._source_name}: sublevel names differ only by case: {name}")
            floors[key] = floor
        return floors

    def _check(self, floors: Mapping[str, FloorInfo]) -> None:
        combined = ValidationResult()
        for floor in floors.values():
            result = validate_floor_info(floor)
            for issue in result.errors:
                logger.error(issue.format())
            combined.merge(result)
        if self.strict and combined.failed:
            raise ValidationError(combined)

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def get(self, name: str) -> FloorInfo:
        """Get a sublevel by name (case-insensitive).

        Raises:
            SublevelNotFoundError: If no sublevel has that name
        """
        self.ensure_initialized()
        try:
            return self._floors[name.lower()]
        except KeyError:
            raise SublevelNotFoundError(name) from None

    def find(self, name: str) -> Optional[FloorInfo]:
        """Like get(), but returns None for unknown names."""
        try:
            return self.get(name)
        except SublevelNotFoundError:
            return None

    def list_sublevels(self) -> List[str]:
        """List all sublevel keys, sorted."""
        self.ensure_initialized()
        return sorted(self._floors.keys())

    def __contains__(self, name: str) -> bool:
        self.ensure_initialized()
        return name.lower() in self._floors

    def __len__(self) -> int:
        self.ensure_initialized()
        return len(self._floors)

    def __iter__(self) -> Iterator[str]:
        return iter(self.list_sublevels())
