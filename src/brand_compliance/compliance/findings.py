"""
Findings & Validation Result
==============================
What rules emit and what the engine returns.

A Violation blocks publication; a ValidationWarning is advisory;
a Suggestion proposes a concrete edit. `ValidationResult.valid` is
derived from the violation list, so it cannot drift out of sync.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

SEVERITIES = ("error", "critical")


@dataclass(frozen=True)
class Violation:
    """A blocking rule failure."""

    rule_id: str
    severity: str  # "error" | "critical"
    message: str
    field: str | None = None
    value: Any = None

    def __post_init__(self) -> None:
        if self.severity not in SEVERITIES:
            raise ValueError(f"Unknown severity '{self.severity}' for {self.rule_id}")

    def to_dict(self) -> dict:
        d = {"rule_id": self.rule_id, "severity": self.severity, "message": self.message}
        if self.field is not None:
            d["field"] = self.field
        if self.value is not None:
            d["value"] = self.value
        return d


@dataclass(frozen=True)
class ValidationWarning:
    """An informational finding. Never affects validity."""

    rule_id: str
    message: str
    field: str | None = None

    def to_dict(self) -> dict:
        d = {"rule_id": self.rule_id, "message": self.message}
        if self.field is not None:
            d["field"] = self.field
        return d


@dataclass(frozen=True)
class Suggestion:
    type: str
    message: str
    suggested_value: str | None = None

    def to_dict(self) -> dict:
        d = {"type": self.type, "message": self.message}
        if self.suggested_value is not None:
            d["suggested_value"] = self.suggested_value
        return d


Finding = Union[Violation, ValidationWarning, Suggestion]


@dataclass
class ValidationResult:
    """Outcome of evaluating one asset."""

    violations: list[Violation] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)
    suggestions: list[Suggestion] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.violations

    def add(self, finding: Finding) -> None:
        if isinstance(finding, Violation):
            self.violations.append(finding)
        elif isinstance(finding, ValidationWarning):
            self.warnings.append(finding)
        elif isinstance(finding, Suggestion):
            self.suggestions.append(finding)
        else:
            raise TypeError(f"Not a finding: {finding!r}")

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "valid": self.valid,
            "violations": [v.to_dict() for v in self.violations],
            "warnings": [w.to_dict() for w in self.warnings],
            "suggestions": [s.to_dict() for s in self.suggestions],
        }
