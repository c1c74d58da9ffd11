"""
Expected-vs-actual comparison for golden cases.

Strictness levels:
    count   — verdict, violation count, warning count
    strict  — count checks, plus the ordered rule ids wherever the
              expected entries name them
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from brand_compliance.compliance.findings import ValidationResult
from brand_compliance.utils.helpers import as_list


@dataclass(frozen=True)
class Mismatch:
    field: str
    expected: Any
    actual: Any

    def to_dict(self) -> dict:
        return {"field": self.field, "expected": self.expected, "actual": self.actual}


def _expected_rule_ids(entries: list) -> list[str] | None:
    """Rule ids listed by the fixture, or None if any entry leaves them out."""
    ids = []
    for e in entries:
        if not isinstance(e, Mapping) or "rule_id" not in e:
            return None
        ids.append(e["rule_id"])
    return ids


def compare_results(
    actual: ValidationResult,
    expected: Mapping[str, Any],
    strictness: str = "count",
) -> list[Mismatch]:
    """Return every way `actual` departs from `expected`. Empty means pass."""
    mismatches: list[Mismatch] = []

    if actual.valid != expected.get("valid"):
        mismatches.append(Mismatch("valid", expected.get("valid"), actual.valid))

    expected_violations = as_list(expected.get("violations"))
    if len(actual.violations) != len(expected_violations):
        mismatches.append(Mismatch("violations.length", len(expected_violations), len(actual.violations)))

    expected_warnings = as_list(expected.get("warnings"))
    if len(actual.warnings) != len(expected_warnings):
        mismatches.append(Mismatch("warnings.length", len(expected_warnings), len(actual.warnings)))

    if strictness == "strict":
        for label, exp_entries, act_entries in (
            ("violations", expected_violations, actual.violations),
            ("warnings", expected_warnings, actual.warnings),
        ):
            exp_ids = _expected_rule_ids(exp_entries)
            act_ids = [f.rule_id for f in act_entries]
            if exp_ids is not None and exp_ids != act_ids:
                mismatches.append(Mismatch(f"{label}.rule_ids", exp_ids, act_ids))

    return mismatches
