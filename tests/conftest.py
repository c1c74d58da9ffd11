"""Pytest configuration and shared fixtures."""

import copy
import sys
from pathlib import Path

import pytest

# Add project root and src to path
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT / "src"))

GENOME = {
    "id": "brand_acme",
    "identity": {"name": "Acme Capital"},
    "visual_identity": {
        "colors": {
            "primary": {"name": "Acme Blue", "hex": "#1A73E8"},
            "secondary": [{"name": "Growth Green", "hex": "#34A853"}],
            "accent": [{"name": "Signal Yellow", "hex": "#FBBC05"}],
            "neutral": {"background": "#FFFFFF", "text_primary": "#202124"},
        },
        "typography": {
            "primary_font": {"family": "Inter"},
            "secondary_font": {"family": "Georgia"},
            "monospace_font": {"family": "JetBrains Mono"},
        },
    },
    "verbal_identity": {
        "vocabulary": {
            "banned": ["cheap", "guarantee"],
            "avoid": ["synergy"],
            "preferred": ["invest"],
            "replacements": [{"from": "utilize", "to": "use"}],
        },
    },
}


@pytest.fixture
def project_root():
    return ROOT


@pytest.fixture
def genome():
    """A fresh copy of the Acme brand genome."""
    return copy.deepcopy(GENOME)


@pytest.fixture
def context(genome):
    from brand_compliance.compliance.context import ValidationContext

    return ValidationContext.from_fixture({"brand_genome": genome})


@pytest.fixture
def make_asset():
    """Build a ContentAsset from a category and fixture-style payload."""
    from brand_compliance.compliance.context import ContentAsset

    def _make(category, **payload):
        return ContentAsset.from_dict(category, payload)

    return _make


@pytest.fixture
def golden_corpus_path(project_root):
    return project_root / "tests" / "golden" / "golden-tests.yaml"
