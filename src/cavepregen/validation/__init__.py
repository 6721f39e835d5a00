"""
Validation for sublevel generation parameters.

Public API:
    - ValidationResult, ValidationIssue, Severity: Core result types
    - validate_floor_info(): Run every floor check
    - ValidationError: Raised by strict loading on FAIL issues
"""

from ..errors import ValidationError
from .core import Severity, ValidationIssue, ValidationResult
from .floor_checks import (
    check_probabilities,
    check_start_spawnpoint,
    check_unit_doors,
    validate_floor_info,
)

__all__ = [
    # Core types
    'Severity',
    'ValidationIssue',
    'ValidationResult',
    'ValidationError',
    # Checks
    'check_start_spawnpoint',
    'check_probabilities',
    'check_unit_doors',
    'validate_floor_info',
]
