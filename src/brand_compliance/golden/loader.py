"""
Fixture Loader
===============
Loads the golden-test corpus (YAML or JSON) into FixtureCase objects.

Only the top-level shape is enforced here: `test_cases` must be a list.
Per-case shape is checked by structural mode, or surfaces as a failed
case during semantic evaluation.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from brand_compliance.errors import CorpusNotFoundError, FixtureFormatError
from brand_compliance.utils.log import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class FixtureCase:
    """One golden case. `raw` keeps the document exactly as written."""

    raw: Mapping[str, Any]
    index: int = 0

    @property
    def id(self) -> str:
        return str(self.raw.get("id") or f"test_{self.index}")

    @property
    def name(self) -> str:
        return str(self.raw.get("name") or "")

    @property
    def category(self) -> Any:
        """Category as written; may be a non-string in a malformed case."""
        return self.raw.get("category") or "uncategorized"

    @property
    def category_label(self) -> str:
        """Printable category used for grouping and reports."""
        return str(self.category)

    @property
    def input(self) -> Mapping[str, Any]:
        return self.raw.get("input") or {}

    @property
    def context(self) -> Mapping[str, Any]:
        return self.raw.get("context") or {}

    @property
    def expected(self) -> Mapping[str, Any]:
        return self.raw.get("expected") or {}


@dataclass
class FixtureCorpus:
    path: Path
    metadata: dict = field(default_factory=dict)
    cases: list[FixtureCase] = field(default_factory=list)

    @property
    def declared_total(self) -> int | None:
        return self.metadata.get("total_test_cases")


def load_corpus(path: Path) -> FixtureCorpus:
    """
    Parse a golden corpus document.

    Raises:
        CorpusNotFoundError: the file does not exist.
        FixtureFormatError: unreadable or unparsable document, or no list-valued `test_cases`.
    """
    path = Path(path)
    logger.info("Loading golden tests from %s", path)

    if not path.is_file():
        raise CorpusNotFoundError(f"Golden tests file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise FixtureFormatError(f"Cannot parse golden tests {path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise FixtureFormatError(f"Cannot read golden tests {path}: {e}") from e

    if not isinstance(data, Mapping) or not isinstance(data.get("test_cases"), list):
        raise FixtureFormatError("Invalid golden tests format: missing test_cases array")

    metadata = data.get("metadata") or {}
    if not isinstance(metadata, Mapping):
        metadata = {}

    cases = [
        FixtureCase(raw=tc if isinstance(tc, Mapping) else {}, index=i)
        for i, tc in enumerate(data["test_cases"])
    ]
    corpus = FixtureCorpus(path=path, metadata=dict(metadata), cases=cases)

    logger.info("Found %d test cases (corpus version %s)", len(cases), metadata.get("version", "unspecified"))
    declared = corpus.declared_total
    if declared and declared != len(cases):
        logger.warning(
            "Metadata count mismatch: %s declared, %d found", declared, len(cases),
        )
    return corpus
