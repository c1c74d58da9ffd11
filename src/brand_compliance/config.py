"""
Configuration loader.

Loads settings from config/settings.yaml and .env,
merges them, and provides a typed Settings object
accessible everywhere via `get_settings()`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml
from dotenv import load_dotenv

from brand_compliance.utils.helpers import env_flag

# Project root = 3 levels up from src/brand_compliance/config.py
ROOT = Path(__file__).resolve().parent.parent.parent
CONFIG_DIR = ROOT / "config"
SETTINGS_FILE = CONFIG_DIR / "settings.yaml"

STRICTNESS_LEVELS = ("count", "strict")
LOG_FILE_NAME = "brand-compliance.log"


@dataclass
class PathSettings:
    corpus_path: Path = field(default_factory=lambda: ROOT / "tests" / "golden" / "golden-tests.yaml")
    reports_dir: Path = field(default_factory=lambda: ROOT / "reports" / "golden-tests")
    log_dir: Path = field(default_factory=lambda: ROOT / "outputs" / "logs")

    @property
    def log_file(self) -> Path:
        """Default run log written by the CLI."""
        return self.log_dir / LOG_FILE_NAME


@dataclass
class GoldenSettings:
    structural_only: bool = False
    strictness: str = "count"  # "count", "strict"


@dataclass
class HealthSettings:
    service_name: str = "brand-compliance"
    version: str = "unknown"
    probe_timeout_s: float = 5.0


@dataclass
class Settings:
    """Top-level settings object."""

    paths: PathSettings = field(default_factory=PathSettings)
    golden: GoldenSettings = field(default_factory=GoldenSettings)
    health: HealthSettings = field(default_factory=HealthSettings)
    log_level: str = "INFO"


# ── Singleton ─────────────────────────────────────────

_settings: Settings | None = None


def _load_yaml() -> dict:
    """Load the YAML config file."""
    if SETTINGS_FILE.exists():
        with open(SETTINGS_FILE, "r") as f:
            return yaml.safe_load(f) or {}
    return {}


def _resolve(path: str | Path) -> Path:
    """Relative paths from YAML are anchored at the project root."""
    p = Path(path)
    return p if p.is_absolute() else ROOT / p


def get_settings() -> Settings:
    """Get the global Settings instance (lazy-loaded singleton)."""
    global _settings
    if _settings is not None:
        return _settings

    # Load .env
    load_dotenv(ROOT / ".env")

    # Load YAML
    raw = _load_yaml()

    # Paths: YAML relative to ROOT, env overrides relative to the cwd
    paths_raw = raw.get("paths", {})
    defaults = PathSettings()
    corpus_env = os.getenv("GOLDEN_TESTS_PATH")
    reports_env = os.getenv("GOLDEN_REPORTS_DIR")
    log_env = os.getenv("LOG_DIR")
    paths = PathSettings(
        corpus_path=Path(corpus_env) if corpus_env else (
            _resolve(paths_raw["corpus"]) if "corpus" in paths_raw else defaults.corpus_path
        ),
        reports_dir=Path(reports_env) if reports_env else (
            _resolve(paths_raw["reports_dir"]) if "reports_dir" in paths_raw else defaults.reports_dir
        ),
        log_dir=Path(log_env) if log_env else (
            _resolve(paths_raw["log_dir"]) if "log_dir" in paths_raw else defaults.log_dir
        ),
    )

    golden_raw = raw.get("golden", {})
    strictness = os.getenv("GOLDEN_STRICTNESS", golden_raw.get("strictness", "count")).lower()
    if strictness not in STRICTNESS_LEVELS:
        raise ValueError(
            f"Unknown golden strictness '{strictness}' (expected one of {', '.join(STRICTNESS_LEVELS)})"
        )
    golden = GoldenSettings(
        structural_only=(
            env_flag(os.getenv("STRUCTURAL_ONLY"))
            or env_flag(os.getenv("CI_FOUNDATION"))
            or bool(golden_raw.get("structural_only", False))
        ),
        strictness=strictness,
    )

    health_raw = raw.get("health", {})
    health = HealthSettings(
        service_name=os.getenv("SERVICE_NAME", health_raw.get("service_name", "brand-compliance")),
        version=os.getenv("APP_VERSION", health_raw.get("version", "unknown")),
        probe_timeout_s=float(health_raw.get("probe_timeout_s", 5.0)),
    )

    log_raw = raw.get("logging", {})

    _settings = Settings(
        paths=paths,
        golden=golden,
        health=health,
        log_level=os.getenv("LOG_LEVEL", log_raw.get("level", "INFO")),
    )

    return _settings


def reload_settings() -> Settings:
    """Force reload of settings (clears the cached instance)."""
    global _settings
    _settings = None
    return get_settings()
