"""Tests for the configuration module."""

import pytest


@pytest.fixture
def clean_env(monkeypatch):
    for var in ("STRUCTURAL_ONLY", "CI_FOUNDATION", "GOLDEN_TESTS_PATH", "GOLDEN_REPORTS_DIR",
                "GOLDEN_STRICTNESS", "SERVICE_NAME", "APP_VERSION", "LOG_DIR"):
        monkeypatch.delenv(var, raising=False)
    yield monkeypatch
    from brand_compliance.config import reload_settings
    monkeypatch.undo()
    reload_settings()


def test_settings_loads(clean_env):
    """Settings singleton loads without error."""
    from brand_compliance.config import reload_settings

    s = reload_settings()
    assert s is not None
    assert s.paths.corpus_path.name == "golden-tests.yaml"
    assert s.golden.structural_only is False
    assert s.golden.strictness == "count"
    assert s.health.probe_timeout_s == 5.0


def test_singleton(clean_env):
    from brand_compliance.config import get_settings, reload_settings

    reload_settings()
    assert get_settings() is get_settings()


@pytest.mark.parametrize("var,value,expected", [
    ("STRUCTURAL_ONLY", "true", True),
    ("STRUCTURAL_ONLY", "TRUE", True),
    ("STRUCTURAL_ONLY", "1", False),
    ("CI_FOUNDATION", "true", True),
    ("STRUCTURAL_ONLY", "false", False),
])
def test_structural_switch(clean_env, var, value, expected):
    from brand_compliance.config import reload_settings

    clean_env.setenv(var, value)
    assert reload_settings().golden.structural_only is expected


def test_env_overrides_paths(clean_env, tmp_path):
    from brand_compliance.config import reload_settings

    clean_env.setenv("GOLDEN_TESTS_PATH", str(tmp_path / "corpus.yaml"))
    clean_env.setenv("GOLDEN_REPORTS_DIR", str(tmp_path / "reports"))
    s = reload_settings()
    assert s.paths.corpus_path == tmp_path / "corpus.yaml"
    assert s.paths.reports_dir == tmp_path / "reports"


def test_invalid_strictness(clean_env):
    from brand_compliance.config import reload_settings

    clean_env.setenv("GOLDEN_STRICTNESS", "fuzzy")
    with pytest.raises(ValueError):
        reload_settings()


def test_log_file_follows_log_dir(clean_env, tmp_path):
    from brand_compliance.config import reload_settings

    s = reload_settings()
    assert s.paths.log_file.name == "brand-compliance.log"
    assert s.paths.log_file.parent == s.paths.log_dir

    clean_env.setenv("LOG_DIR", str(tmp_path / "logs"))
    assert reload_settings().paths.log_file == tmp_path / "logs" / "brand-compliance.log"
