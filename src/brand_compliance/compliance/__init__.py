"""Compliance engine subpackage: context, rules, findings, evaluation."""

from brand_compliance.compliance.context import (
    BrandContext,
    CampaignContext,
    ContentAsset,
    ValidationContext,
)
from brand_compliance.compliance.engine import ComplianceEngine, evaluate, evaluate_fixture
from brand_compliance.compliance.findings import (
    Suggestion,
    ValidationResult,
    ValidationWarning,
    Violation,
)
from brand_compliance.compliance.rules import DEFAULT_CATALOG, Rule, RuleCatalog

__all__ = [
    "BrandContext",
    "CampaignContext",
    "ComplianceEngine",
    "ContentAsset",
    "DEFAULT_CATALOG",
    "Rule",
    "RuleCatalog",
    "Suggestion",
    "ValidationContext",
    "ValidationResult",
    "ValidationWarning",
    "Violation",
    "evaluate",
    "evaluate_fixture",
]
