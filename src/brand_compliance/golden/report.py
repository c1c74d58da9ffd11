"""
Report Generator
==================
Writes the machine-readable golden-test report: one uniquely named
JSON file per run, plus `latest.json` overwritten with the same content.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

from brand_compliance.golden.runner import RunSummary
from brand_compliance.utils.log import get_logger

logger = get_logger(__name__)

LATEST_NAME = "latest.json"


def build_report(summary: RunSummary, timestamp: datetime | None = None) -> dict:
    """Render a RunSummary into the report document."""
    timestamp = timestamp or datetime.now(timezone.utc)
    return {
        "timestamp": timestamp.isoformat().replace("+00:00", "Z"),
        "mode": summary.mode,
        "strictness": summary.strictness,
        "summary": summary.counts(),
        "results": [o.to_dict() for o in summary.outcomes],
    }


def _unique_path(reports_dir: Path, timestamp: datetime) -> Path:
    stem = f"golden-tests-{timestamp.strftime('%Y%m%dT%H%M%S%fZ')}"
    path = reports_dir / f"{stem}.json"
    n = 1
    while path.exists():
        path = reports_dir / f"{stem}-{n}.json"
        n += 1
    return path


def write_report(summary: RunSummary, reports_dir: Path) -> tuple[Path, Path]:
    """
    Persist the report for a run.

    Returns: (report_path, latest_path)
    """
    reports_dir = Path(reports_dir)
    reports_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now(timezone.utc)
    content = json.dumps(build_report(summary, timestamp), indent=2, ensure_ascii=False)

    report_path = _unique_path(reports_dir, timestamp)
    report_path.write_text(content, encoding="utf-8")

    latest_path = reports_dir / LATEST_NAME
    latest_path.write_text(content, encoding="utf-8")

    logger.info("Report: %s (latest → %s)", report_path.name, latest_path)
    return report_path, latest_path
