"""Golden conformance harness: fixture loading, runs, reports."""

from brand_compliance.golden.loader import FixtureCase, FixtureCorpus, load_corpus
from brand_compliance.golden.report import write_report
from brand_compliance.golden.runner import RunSummary, run_semantic, run_structural

__all__ = [
    "FixtureCase",
    "FixtureCorpus",
    "RunSummary",
    "load_corpus",
    "run_semantic",
    "run_structural",
    "write_report",
]
