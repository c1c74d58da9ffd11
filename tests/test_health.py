"""Tests for the health checker."""

import asyncio

import pytest

from brand_compliance.health import HealthChecker, HealthStatus, aggregate_status, default_checker


def _run(coro):
    return asyncio.run(coro)


@pytest.mark.parametrize("statuses,expected", [
    ([], HealthStatus.HEALTHY),
    ([HealthStatus.HEALTHY, HealthStatus.HEALTHY], HealthStatus.HEALTHY),
    ([HealthStatus.HEALTHY, HealthStatus.UNHEALTHY], HealthStatus.UNHEALTHY),
    ([HealthStatus.DEGRADED, HealthStatus.UNHEALTHY], HealthStatus.UNHEALTHY),
    ([HealthStatus.HEALTHY, HealthStatus.DEGRADED], HealthStatus.DEGRADED),
])
def test_aggregate_status(statuses, expected):
    assert aggregate_status(statuses) is expected


def test_no_dependencies_is_healthy():
    checker = HealthChecker("svc", version="1.2.3")
    code, payload = _run(checker.respond("/health"))
    assert code == 200
    assert payload["status"] == "healthy"
    assert payload["service"] == "svc"
    assert payload["version"] == "1.2.3"
    assert payload["dependencies"] == {}


def test_failures_are_isolated_per_dependency():
    checker = HealthChecker("svc", probe_timeout=0.2)

    async def slow():
        await asyncio.sleep(5)
        return True

    def broken():
        raise ConnectionError("refused")

    async def fine():
        return True

    checker.register_dependency("slow", slow)
    checker.register_dependency("broken", broken)
    checker.register_dependency("fine", fine)
    checker.register_dependency("sync_false", lambda: False)

    deps = _run(checker.check_dependencies())
    assert deps["slow"].status is HealthStatus.UNHEALTHY
    assert deps["slow"].error == "Timeout"
    assert deps["broken"].status is HealthStatus.UNHEALTHY
    assert deps["broken"].error == "refused"
    assert deps["fine"].status is HealthStatus.HEALTHY
    assert deps["fine"].error is None
    assert deps["sync_false"].status is HealthStatus.UNHEALTHY


def test_degraded_dependency():
    checker = HealthChecker("svc")
    checker.register_dependency("cache", lambda: HealthStatus.DEGRADED)
    code, payload = _run(checker.respond("/health"))
    assert payload["status"] == "degraded"
    assert code == 503


def test_readiness_and_liveness():
    checker = HealthChecker("svc")
    checker.register_dependency("db", lambda: False)

    code, payload = _run(checker.respond("/health/ready"))
    assert code == 503
    assert payload["ready"] is False
    assert payload["dependencies"]["db"]["status"] == "unhealthy"

    code, payload = _run(checker.respond("/health/live"))
    assert code == 200
    assert payload["status"] == "healthy"


def test_default_checker(tmp_path):
    from brand_compliance.config import Settings

    settings = Settings()
    corpus = tmp_path / "golden.yaml"
    corpus.write_text("test_cases: []\n", encoding="utf-8")
    settings.paths.corpus_path = corpus
    settings.paths.reports_dir = tmp_path

    code, payload = _run(default_checker(settings).respond("/health"))
    assert code == 200
    assert set(payload["dependencies"]) == {"golden_corpus", "reports_dir"}


def test_default_checker_missing_corpus(tmp_path):
    from brand_compliance.config import Settings

    settings = Settings()
    settings.paths.corpus_path = tmp_path / "missing.yaml"
    settings.paths.reports_dir = tmp_path / "not-yet"

    payload = _run(default_checker(settings).get_health())
    assert payload["status"] == "unhealthy"
    assert payload["dependencies"]["golden_corpus"]["status"] == "unhealthy"
    assert payload["dependencies"]["reports_dir"]["status"] == "degraded"
