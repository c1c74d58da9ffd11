"""
Error Taxonomy
===============
Exceptions raised across the engine, the golden harness and the
health collaborator.

- FixtureFormatError    → corpus cannot be used at all; the run aborts.
- RuleEvaluationFault   → one rule blew up on one asset; the harness
                          records the case as failed and moves on.
- StructuralFieldError  → one fixture is malformed (structural mode).
- DependencyProbeError  → one health probe failed or timed out.
"""

from __future__ import annotations


class BrandComplianceError(Exception):
    """Base class for all brand_compliance errors."""


class FixtureFormatError(BrandComplianceError):
    """The golden corpus is unreadable or lacks a list-valued `test_cases`."""


class CorpusNotFoundError(FixtureFormatError):
    """The golden corpus file does not exist."""


class RuleEvaluationFault(BrandComplianceError):
    """A rule raised while evaluating an asset."""

    def __init__(self, rule_name: str, cause: BaseException):
        self.rule_name = rule_name
        self.cause = cause
        super().__init__(f"Rule '{rule_name}' failed: {cause}")


class StructuralFieldError(BrandComplianceError):
    """A fixture case is missing required fields or has a malformed expectation."""

    def __init__(self, case_id: str, problems: list[str]):
        self.case_id = case_id
        self.problems = list(problems)
        super().__init__(f"{case_id}: {', '.join(self.problems)}")


class DependencyProbeError(BrandComplianceError):
    """A health dependency probe raised or exceeded its timeout."""

    def __init__(self, dependency: str, message: str):
        self.dependency = dependency
        super().__init__(message)
