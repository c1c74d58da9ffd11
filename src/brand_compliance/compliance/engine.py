"""
Compliance Engine — Main Entry Point
======================================
Evaluates one content asset against its brand/campaign context:

1. Select catalog rules whose trigger token is in the asset category
   (plus any rules the campaign adds explicitly)
2. Run each rule in catalog order, collecting findings in emission order
3. Drop findings for rules the campaign disabled
4. Return a fresh ValidationResult (valid ⇔ no violations)

No I/O, no shared mutable state: safe to call concurrently.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from brand_compliance.compliance.context import ContentAsset, ValidationContext
from brand_compliance.compliance.findings import ValidationResult
from brand_compliance.compliance.rules import DEFAULT_CATALOG, Rule, RuleCatalog
from brand_compliance.errors import RuleEvaluationFault
from brand_compliance.utils.log import get_logger

logger = get_logger(__name__)


class ComplianceEngine:
    """Dispatches assets to the rule catalog and aggregates findings."""

    def __init__(self, catalog: RuleCatalog | None = None):
        self.catalog = catalog if catalog is not None else DEFAULT_CATALOG

    def select_rules(self, asset: ContentAsset, context: ValidationContext) -> list[Rule]:
        """Rules that apply to this asset, in catalog order."""
        extra = context.campaign.additional_rules if context.campaign else ()
        return [
            rule for rule in self.catalog
            if rule.matches(asset.category) or any(rule.answers_to(x) for x in extra)
        ]

    def evaluate(self, asset: ContentAsset, context: ValidationContext) -> ValidationResult:
        """
        Validate one asset.

        Raises:
            ValueError: empty category or missing brand context.
            RuleEvaluationFault: a rule raised unexpectedly.
        """
        if not isinstance(asset.category, str) or not asset.category:
            raise ValueError("asset.category must be a non-empty string")
        if context.brand is None:
            raise ValueError("context.brand is required")

        disabled = context.campaign.disabled_rules if context.campaign else frozenset()
        result = ValidationResult()

        for rule in self.select_rules(asset, context):
            logger.debug("Rule %s → %s", rule.name, asset.category)
            try:
                findings = list(rule.check(asset, context))
            except Exception as e:
                raise RuleEvaluationFault(rule.name, e) from e

            for finding in findings:
                rule_id = getattr(finding, "rule_id", None)
                if rule_id is not None and rule_id in disabled:
                    logger.debug("  %s disabled by campaign, dropped", rule_id)
                    continue
                result.add(finding)

        logger.debug(
            "Evaluated %s: valid=%s, %d violations, %d warnings",
            asset.category, result.valid, len(result.violations), len(result.warnings),
        )
        return result


_default_engine = ComplianceEngine()


def evaluate(asset: ContentAsset, context: ValidationContext) -> ValidationResult:
    """Evaluate with the default rule catalog."""
    return _default_engine.evaluate(asset, context)


def evaluate_fixture(
    category: str,
    payload: Mapping[str, Any] | None,
    context: Mapping[str, Any] | None,
    engine: ComplianceEngine | None = None,
) -> ValidationResult:
    """Convenience wrapper taking raw fixture-shaped mappings."""
    engine = engine or _default_engine
    return engine.evaluate(
        ContentAsset.from_dict(category, payload),
        ValidationContext.from_fixture(context),
    )
