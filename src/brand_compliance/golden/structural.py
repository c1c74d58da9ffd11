"""
Structural fixture checks: well-formedness only, no rule evaluation.
"""

from __future__ import annotations

from collections.abc import Mapping

from brand_compliance.errors import StructuralFieldError
from brand_compliance.golden.loader import FixtureCase

REQUIRED_FIELDS = ("id", "name", "category", "input", "expected")


def _missing(value: object) -> bool:
    return value is None or value == ""


def structural_problems(case: FixtureCase) -> list[str]:
    """List everything wrong with a case's shape. Empty list means well-formed."""
    problems = [f"missing {name}" for name in REQUIRED_FIELDS if _missing(case.raw.get(name))]
    expected = case.raw.get("expected")
    if not _missing(expected):
        if not isinstance(expected, Mapping) or not isinstance(expected.get("valid"), bool):
            problems.append("expected.valid must be boolean")
    return problems


def assert_well_formed(case: FixtureCase) -> None:
    problems = structural_problems(case)
    if problems:
        raise StructuralFieldError(case.id, problems)
