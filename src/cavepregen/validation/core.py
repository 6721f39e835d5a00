"""
Core data structures for floor validation.

- Severity: Issue severity levels (INFO, WARN, FAIL)
- ValidationIssue: Individual validation finding
- ValidationResult: Collection of issues with pass/fail status
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional


class Severity(Enum):
    """Validation issue severity levels.

    - INFO: Informational, doesn't affect pass/fail
    - WARN: Suspicious data the generator still accepts
    - FAIL: Data the placement step cannot work with
    """
    INFO = auto()
    WARN = auto()
    FAIL = auto()

    def __str__(self) -> str:
        return self.name


@dataclass
class ValidationIssue:
    """A single validation finding.

    Attributes:
        severity: Issue severity (INFO, WARN, FAIL)
        code: Rule code (e.g., "CAVE-001")
        message: Human-readable description
        remediation: Optional suggested fix
        sublevel: Optional sublevel name the issue was found on
        unit: Optional unit folder name
        door: Optional door index within the unit
    """
    severity: Severity
    code: str
    message: str
    remediation: Optional[str] = None
    sublevel: Optional[str] = None
    unit: Optional[str] = None
    door: Optional[int] = None

    def format(self) -> str:
        """Format issue for display.

        Returns:
            [SEVERITY] CODE sublevel=S unit=U door=D :: message :: fix=FIX
        """
        sublevel = self.sublevel or '-'
        unit = self.unit or '-'
        door = '-' if self.door is None else self.door
        fix = self.remediation or 'N/A'

        return (
            f"[{self.severity}] {self.code} "
            f"sublevel={sublevel} unit={unit} door={door} :: "
            f"{self.message} :: fix={fix}"
        )

    def __str__(self) -> str:
        return self.format()


@dataclass
class ValidationResult:
    """Collection of validation issues with pass/fail determination.

    Properties:
        passed: True if no FAIL severity issues
        failed: True if any FAIL severity issues
        warnings: List of WARN severity issues
        errors: List of FAIL severity issues
    """
    issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.failed

    @property
    def failed(self) -> bool:
        return any(i.severity == Severity.FAIL for i in self.issues)

    @property
    def warnings(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.WARN]

    @property
    def errors(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.FAIL]

    def codes(self) -> List[str]:
        return [i.code for i in self.issues]

    def add_issue(self, issue: ValidationIssue) -> None:
        self.issues.append(issue)

    def merge(self, other: 'ValidationResult') -> 'ValidationResult':
        """Merge another result into this one.

        Returns:
            Self for chaining
        """
        self.issues.extend(other.issues)
        return self

    def report(self) -> str:
        """Generate a formatted, multi-line report of all issues."""
        if not self.issues:
            return "Validation passed: No issues found"

        status = "PASSED" if self.passed else "FAILED"
        lines = [f"Validation {status}: {len(self.issues)} issue(s)", "-" * 60]

        for severity in [Severity.FAIL, Severity.WARN, Severity.INFO]:
            severity_issues = [i for i in self.issues if i.severity == severity]
            if severity_issues:
                lines.append(f"\n{severity.name} ({len(severity_issues)}):")
                for issue in severity_issues:
                    lines.append(issue.format())

        return "\n".join(lines)
