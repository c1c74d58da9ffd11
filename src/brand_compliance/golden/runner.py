"""
Golden Test Runner
===================
Feeds every fixture in a corpus through the compliance engine and
diffs the result against the fixture's expectation.

Two modes:
- semantic   — group by category (sorted), evaluate, compare
- structural — check fixture well-formedness only; the engine is never called

Each run returns its own RunSummary; nothing is accumulated globally,
so runs can be repeated in one process.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any

from brand_compliance.compliance.context import ContentAsset, ValidationContext
from brand_compliance.compliance.engine import ComplianceEngine
from brand_compliance.errors import StructuralFieldError
from brand_compliance.golden.compare import Mismatch, compare_results
from brand_compliance.golden.loader import FixtureCase, FixtureCorpus
from brand_compliance.golden.structural import assert_well_formed
from brand_compliance.utils.log import get_logger

logger = get_logger(__name__)

SEMANTIC = "semantic"
STRUCTURAL = "structural"


@dataclass
class CaseOutcome:
    """Result of running one fixture."""

    id: str
    name: str
    category: str
    passed: bool
    mismatches: list[Mismatch] = field(default_factory=list)
    actual: dict | None = None
    expected: Any = None
    error: str | None = None
    problems: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        d: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "passed": self.passed,
        }
        if self.error is not None:
            d["error"] = self.error
        if self.problems:
            d["problems"] = list(self.problems)
        if self.actual is not None:
            d["mismatches"] = [m.to_dict() for m in self.mismatches]
            d["actual"] = self.actual
            d["expected"] = self.expected
        return d


@dataclass
class RunSummary:
    """Run-scoped accumulator."""

    mode: str
    strictness: str = "count"
    total: int = 0
    passed: int = 0
    failed: int = 0
    skipped: int = 0
    outcomes: list[CaseOutcome] = field(default_factory=list)

    def record(self, outcome: CaseOutcome) -> None:
        self.total += 1
        if outcome.passed:
            self.passed += 1
        else:
            self.failed += 1
        self.outcomes.append(outcome)

    @property
    def success(self) -> bool:
        return self.failed == 0

    @property
    def pass_rate(self) -> float:
        return (self.passed / self.total * 100) if self.total else 100.0

    def counts(self) -> dict:
        return {"total": self.total, "passed": self.passed, "failed": self.failed, "skipped": self.skipped}

    def by_category(self) -> dict[str, list[CaseOutcome]]:
        groups: dict[str, list[CaseOutcome]] = defaultdict(list)
        for o in self.outcomes:
            groups[o.category].append(o)
        return dict(groups)


def group_by_category(cases: list[FixtureCase]) -> list[tuple[str, list[FixtureCase]]]:
    """Sorted category groups; corpus order is kept within a group."""
    groups: dict[str, list[FixtureCase]] = defaultdict(list)
    for case in cases:
        groups[case.category_label].append(case)
    return sorted(groups.items())


def run_case(
    case: FixtureCase,
    engine: ComplianceEngine,
    strictness: str = "count",
) -> CaseOutcome:
    """Evaluate one fixture. Any fault is captured as a failed outcome."""
    try:
        asset = ContentAsset.from_dict(case.category, case.input)
        context = ValidationContext.from_fixture(case.context)
        actual = engine.evaluate(asset, context)
        mismatches = compare_results(actual, case.expected, strictness)
    except Exception as e:
        logger.error("Case %s raised: %s", case.id, e, exc_info=True)
        return CaseOutcome(
            id=case.id, name=case.name, category=case.category_label,
            passed=False, error=str(e),
        )

    return CaseOutcome(
        id=case.id,
        name=case.name,
        category=case.category_label,
        passed=not mismatches,
        mismatches=mismatches,
        actual=actual.to_dict(),
        expected=case.raw.get("expected"),
    )


def run_semantic(
    corpus: FixtureCorpus,
    engine: ComplianceEngine | None = None,
    strictness: str = "count",
) -> RunSummary:
    """Run every case through the engine, category by category."""
    engine = engine or ComplianceEngine()
    summary = RunSummary(mode=SEMANTIC, strictness=strictness)
    logger.info("Semantic run: %d cases, strictness=%s", len(corpus.cases), strictness)

    for category, cases in group_by_category(corpus.cases):
        logger.debug("Category %s: %d cases", category, len(cases))
        for case in cases:
            summary.record(run_case(case, engine, strictness))

    logger.info("Semantic run finished: %d passed, %d failed", summary.passed, summary.failed)
    return summary


def run_structural(corpus: FixtureCorpus) -> RunSummary:
    """Check each case's shape in corpus order."""
    summary = RunSummary(mode=STRUCTURAL)
    logger.info("Structural run: %d cases", len(corpus.cases))

    for case in corpus.cases:
        try:
            assert_well_formed(case)
        except StructuralFieldError as e:
            summary.record(CaseOutcome(
                id=case.id, name=case.name, category=case.category_label,
                passed=False, problems=e.problems,
            ))
            continue
        summary.record(CaseOutcome(id=case.id, name=case.name, category=case.category_label, passed=True))

    logger.info("Structural run finished: %d valid, %d invalid", summary.passed, summary.failed)
    return summary
