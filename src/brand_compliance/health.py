"""
Health Checks
==============
Liveness / readiness / overall health payloads for the service.

Dependency probes run concurrently, each bounded by a timeout, and a
failing or slow probe only marks its own entry unhealthy. `respond()`
maps a request path to (HTTP status, JSON payload) for whichever web
framework hosts the service.
"""

from __future__ import annotations

import asyncio
import inspect
import os
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from brand_compliance.config import Settings, get_settings
from brand_compliance.errors import DependencyProbeError
from brand_compliance.utils.helpers import utc_now_iso
from brand_compliance.utils.log import get_logger

logger = get_logger(__name__)


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


ProbeResult = Union[bool, HealthStatus]
Probe = Callable[[], Union[ProbeResult, Awaitable[ProbeResult]]]


@dataclass
class DependencyStatus:
    status: HealthStatus
    latency_ms: int
    error: str | None = None

    def to_dict(self) -> dict:
        d: dict[str, Any] = {"status": self.status.value, "latencyMs": self.latency_ms}
        if self.error is not None:
            d["error"] = self.error
        return d


def aggregate_status(statuses: list[HealthStatus]) -> HealthStatus:
    """Pessimistic roll-up: all healthy → healthy, any unhealthy → unhealthy, else degraded."""
    if all(s is HealthStatus.HEALTHY for s in statuses):
        return HealthStatus.HEALTHY
    if any(s is HealthStatus.UNHEALTHY for s in statuses):
        return HealthStatus.UNHEALTHY
    return HealthStatus.DEGRADED


class HealthChecker:
    """Registry of dependency probes plus the three health payloads."""

    def __init__(
        self,
        service_name: str | None = None,
        version: str | None = None,
        probe_timeout: float = 5.0,
    ):
        self.service_name = service_name or os.getenv("SERVICE_NAME", "unknown")
        self.version = version or os.getenv("APP_VERSION", "unknown")
        self.probe_timeout = probe_timeout
        self.dependencies: dict[str, Probe] = {}
        self._started = time.monotonic()

    def register_dependency(self, name: str, check: Probe) -> None:
        """Register a probe returning True/False or a HealthStatus (sync or async)."""
        self.dependencies[name] = check

    @property
    def uptime(self) -> int:
        return int(time.monotonic() - self._started)

    async def _call_probe(self, name: str, check: Probe) -> HealthStatus:
        try:
            if inspect.iscoroutinefunction(check):
                outcome = await asyncio.wait_for(check(), timeout=self.probe_timeout)
            else:
                outcome = await asyncio.wait_for(asyncio.to_thread(check), timeout=self.probe_timeout)
                if inspect.isawaitable(outcome):
                    outcome = await asyncio.wait_for(outcome, timeout=self.probe_timeout)
        except asyncio.TimeoutError as e:
            raise DependencyProbeError(name, "Timeout") from e
        except Exception as e:
            raise DependencyProbeError(name, str(e)) from e

        if isinstance(outcome, HealthStatus):
            return outcome
        return HealthStatus.HEALTHY if outcome else HealthStatus.UNHEALTHY

    async def _probe(self, name: str, check: Probe) -> DependencyStatus:
        started = time.monotonic()
        try:
            status = await self._call_probe(name, check)
        except DependencyProbeError as e:
            logger.warning("Dependency %s unhealthy: %s", name, e)
            return DependencyStatus(
                status=HealthStatus.UNHEALTHY,
                latency_ms=int((time.monotonic() - started) * 1000),
                error=str(e),
            )
        return DependencyStatus(status=status, latency_ms=int((time.monotonic() - started) * 1000))

    async def check_dependencies(self) -> dict[str, DependencyStatus]:
        names = list(self.dependencies)
        results = await asyncio.gather(*(self._probe(n, self.dependencies[n]) for n in names))
        return dict(zip(names, results))

    async def get_health(self) -> dict:
        dependencies = await self.check_dependencies()
        status = aggregate_status([d.status for d in dependencies.values()])
        return {
            "status": status.value,
            "service": self.service_name,
            "version": self.version,
            "timestamp": utc_now_iso(),
            "uptime": self.uptime,
            "dependencies": {n: d.to_dict() for n, d in dependencies.items()},
        }

    def get_liveness(self) -> dict:
        return {
            "status": HealthStatus.HEALTHY.value,
            "service": self.service_name,
            "timestamp": utc_now_iso(),
        }

    async def get_readiness(self) -> dict:
        dependencies = await self.check_dependencies()
        ready = all(d.status is HealthStatus.HEALTHY for d in dependencies.values())
        return {
            "status": (HealthStatus.HEALTHY if ready else HealthStatus.UNHEALTHY).value,
            "service": self.service_name,
            "timestamp": utc_now_iso(),
            "ready": ready,
            "dependencies": {n: d.to_dict() for n, d in dependencies.items()},
        }

    async def respond(self, path: str = "/health") -> tuple[int, dict]:
        """Route a health request path to (status_code, payload)."""
        try:
            if path in ("/health/live", "/health/liveness"):
                return 200, self.get_liveness()
            if path in ("/health/ready", "/health/readiness"):
                payload = await self.get_readiness()
            else:
                payload = await self.get_health()
            code = 200 if payload["status"] == HealthStatus.HEALTHY.value else 503
            return code, payload
        except Exception as e:
            logger.error("Health endpoint %s failed: %s", path, e, exc_info=True)
            return 500, {
                "status": HealthStatus.UNHEALTHY.value,
                "service": self.service_name,
                "error": str(e),
                "timestamp": utc_now_iso(),
            }


def default_checker(settings: Settings | None = None) -> HealthChecker:
    """Checker wired to the golden corpus and the reports directory."""
    settings = settings or get_settings()
    checker = HealthChecker(
        service_name=settings.health.service_name,
        version=settings.health.version,
        probe_timeout=settings.health.probe_timeout_s,
    )

    corpus = settings.paths.corpus_path
    reports = settings.paths.reports_dir

    def golden_corpus() -> bool:
        return corpus.is_file() and os.access(corpus, os.R_OK)

    def reports_dir() -> ProbeResult:
        if reports.is_dir():
            return os.access(reports, os.W_OK)
        # Not created yet: degraded as long as it can be.
        ancestor = next((p for p in reports.parents if p.exists()), None)
        if ancestor is not None and os.access(ancestor, os.W_OK):
            return HealthStatus.DEGRADED
        return False

    checker.register_dependency("golden_corpus", golden_corpus)
    checker.register_dependency("reports_dir", reports_dir)
    return checker
