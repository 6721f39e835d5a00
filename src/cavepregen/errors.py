"""
Exception hierarchy for the cave unit model.

Every error raised by this package derives from CaveInfoError so callers can
catch the whole family in one place:
- InvalidRoomTypeError: room classification outside the known set
- SublevelNotFoundError: registry lookup for an unknown sublevel
- RecordError: a sublevel record is missing fields or has the wrong shape
- ValidationError: strict loading found FAIL-severity validation issues
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .validation.core import ValidationResult


class CaveInfoError(Exception):
    """Base class for all cave unit model errors."""


class InvalidRoomTypeError(CaveInfoError, ValueError):
    """Raised when a room classification index is not 0, 1 or 2.

    Attributes:
        value: The offending room type value
    """

    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid room type specified: {value!r}")


class SublevelNotFoundError(CaveInfoError, KeyError):
    """Raised when the registry has no sublevel for an identifier.

    Attributes:
        name: Identifier as given by the caller
        key: Normalized (lower-cased) lookup key
    """

    def __init__(self, name: str):
        self.name = name
        self.key = name.lower()
        super().__init__(f"No sublevel named {name!r}")

    def __str__(self) -> str:
        # KeyError repr-quotes its message otherwise
        return self.args[0]


class RecordError(CaveInfoError):
    """Raised when a sublevel record cannot be turned into the model."""


class ValidationError(CaveInfoError):
    """Raised when strict loading finds FAIL severity issues.

    Attributes:
        result: The ValidationResult that caused the failure
    """

    def __init__(self, result: 'ValidationResult'):
        self.result = result
        super().__init__(result.report())
