"""
Brand Compliance CLI
=====================
Command-line interface for the brand compliance engine.

Commands:
    golden    — Run the golden-test corpus (semantic or structural mode)
    validate  — Validate a single asset against a brand genome
    rules     — List the rule catalog
    health    — Print the service health payload
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path

import click
import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from brand_compliance import __version__
from brand_compliance.config import STRICTNESS_LEVELS, get_settings
from brand_compliance.errors import BrandComplianceError, FixtureFormatError
from brand_compliance.utils.log import get_logger, setup_logging

logger = get_logger(__name__)
console = Console()


def _read_document(path: Path) -> dict:
    """Load a YAML or JSON document from disk."""
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if not isinstance(data, dict):
        raise click.BadParameter(f"{path} does not contain a mapping")
    return data


# ═══════════════════════════════════════════════════════
#  Root group
# ═══════════════════════════════════════════════════════
@click.group()
@click.version_option(version=__version__, prog_name="brand-compliance")
@click.option("--log-file", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="Run log (DEBUG). Default: <log_dir>/brand-compliance.log.")
@click.option("--log-level", default=None,
              type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
              help="Console log level. Default: $LOG_LEVEL or config value.")
def main(log_file: Path | None, log_level: str | None):
    """Validate marketing assets against a brand's codified rules."""
    settings = get_settings()
    setup_logging(log_level or settings.log_level, log_file or settings.paths.log_file)


# ═══════════════════════════════════════════════════════
#  GOLDEN — run the conformance corpus
# ═══════════════════════════════════════════════════════
@main.command()
@click.option(
    "--corpus", "-c",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Golden tests file. Default: $GOLDEN_TESTS_PATH or config value.",
)
@click.option(
    "--structural/--semantic",
    default=None,
    help="Only validate fixture structure. Default: $STRUCTURAL_ONLY / $CI_FOUNDATION.",
)
@click.option(
    "--strictness", "-s",
    type=click.Choice(STRICTNESS_LEVELS, case_sensitive=False),
    default=None,
    help="How closely actual results must match expectations.",
)
@click.option(
    "--reports-dir", "-o",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Where to write the JSON report. Default: config value.",
)
def golden(corpus: Path | None, structural: bool | None, strictness: str | None, reports_dir: Path | None):
    """Run the golden-test corpus through the compliance engine."""
    from brand_compliance.golden.loader import load_corpus
    from brand_compliance.golden.report import write_report
    from brand_compliance.golden.runner import run_semantic, run_structural

    settings = get_settings()
    corpus_path = corpus or settings.paths.corpus_path
    out_dir = reports_dir or settings.paths.reports_dir
    structural_only = settings.golden.structural_only if structural is None else structural
    strictness = (strictness or settings.golden.strictness).lower()

    console.print()
    console.rule("[bold]Brand Compliance — Golden Tests[/bold]")
    console.print(f"\n[blue]Loading golden tests from:[/blue] {corpus_path}\n")

    try:
        data = load_corpus(corpus_path)
    except FixtureFormatError as e:
        console.print(f"[red]Failed to load golden tests: {escape(str(e))}[/red]")
        sys.exit(1)

    console.print(f"[cyan]Found {len(data.cases)} test cases[/cyan]")

    if structural_only:
        console.print("\n[yellow]Running in STRUCTURAL VALIDATION mode[/yellow]")
        console.print("[dim](compliance engine bypassed, validating test file structure)[/dim]\n")
        summary = run_structural(data)
        _print_structural(summary, data)
    else:
        summary = run_semantic(data, strictness=strictness)
        _print_semantic(summary)

    report_path, _ = write_report(summary, out_dir)
    console.print(f"\n[blue]Report saved to:[/blue] {report_path}")

    if summary.success:
        label = "Structural validation passed!" if structural_only else "All golden tests passed!"
        console.print(f"[green]{label}[/green]\n")
        sys.exit(0)
    label = "Structural validation failed!" if structural_only else "Golden tests failed!"
    console.print(f"[red]{label}[/red]\n")
    sys.exit(1)


def _print_structural(summary, corpus) -> None:
    for o in summary.outcomes:
        if o.passed:
            console.print(f"  [green]\\[OK][/green] {o.id}: structure valid")
        else:
            console.print(f"  [red]\\[ERR][/red] {o.id}: {', '.join(o.problems)}")

    if corpus.metadata:
        declared = corpus.declared_total
        console.print("\n[blue]Metadata:[/blue]")
        console.print(f"  Version: {corpus.metadata.get('version', 'not specified')}")
        console.print(f"  Total test cases declared: {declared or 'not specified'}")
        console.print(f"  Actual test cases found: {len(corpus.cases)}")
        if declared and declared != len(corpus.cases):
            console.print("  [yellow]Warning: metadata count mismatch[/yellow]")

    console.print()
    console.rule("[bold]Structural Validation Summary[/bold]")
    console.print(f"  Total test cases: {summary.total}")
    console.print(f"  [green]Valid:   {summary.passed}[/green]")
    console.print(f"  [red]Invalid: {summary.failed}[/red]")


def _print_semantic(summary) -> None:
    for category, outcomes in summary.by_category().items():
        console.print(f"\n[bold]{category}[/bold]")
        console.print("-" * 40)
        for o in outcomes:
            prefix = f"  [cyan]{o.id}[/cyan] - {o.name} ... "
            if o.error is not None:
                console.print(f"{prefix}[red]ERROR: {escape(o.error)}[/red]")
            elif o.passed:
                console.print(f"{prefix}[green]PASSED[/green]")
            else:
                console.print(f"{prefix}[red]FAILED[/red]")
                for m in o.mismatches:
                    console.print(
                        f"    [yellow]→ {m.field}: expected {json.dumps(m.expected)}, "
                        f"got {json.dumps(m.actual)}[/yellow]"
                    )

    console.print()
    console.rule("[bold]Summary[/bold]")
    console.print(f"  Total:   {summary.total}")
    console.print(f"  [green]Passed:  {summary.passed}[/green]")
    console.print(f"  [red]Failed:  {summary.failed}[/red]")
    console.print(f"  [yellow]Skipped: {summary.skipped}[/yellow]")
    console.print(f"\n  Pass Rate: {summary.pass_rate:.1f}%")


# ═══════════════════════════════════════════════════════
#  VALIDATE — one asset against a brand
# ═══════════════════════════════════════════════════════
@main.command()
@click.argument("asset_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--brand", "-b", "brand_file", required=True,
              type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="Brand Genome document (YAML/JSON).")
@click.option("--campaign", "campaign_file", default=None,
              type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="Campaign Blueprint with compliance overrides.")
@click.option("--category", default=None, help="Override the asset's category.")
@click.option("--json", "as_json", is_flag=True, help="Print the raw result as JSON.")
def validate(asset_file: Path, brand_file: Path, campaign_file: Path | None, category: str | None, as_json: bool):
    """Validate ASSET_FILE against a brand genome."""
    from brand_compliance.compliance.context import (
        BrandContext,
        CampaignContext,
        ContentAsset,
        ValidationContext,
    )
    from brand_compliance.compliance.engine import evaluate

    try:
        asset_doc = _read_document(asset_file)
        brand = BrandContext.from_genome(_read_document(brand_file))
        campaign = CampaignContext.from_blueprint(_read_document(campaign_file)) if campaign_file else None
    except (yaml.YAMLError, UnicodeDecodeError) as e:
        console.print(f"[red]Cannot parse input document: {escape(str(e))}[/red]")
        sys.exit(1)

    category = category or asset_doc.get("category")
    if not category:
        console.print("[red]Asset has no category.[/red] Add one or pass --category.")
        sys.exit(1)

    payload = asset_doc.get("input", asset_doc)
    asset = ContentAsset.from_dict(category, payload)
    context = ValidationContext(brand=brand, campaign=campaign)

    try:
        result = evaluate(asset, context)
    except (BrandComplianceError, ValueError) as e:
        logger.error("Validation of %s failed: %s", asset_file, e, exc_info=True)
        console.print(f"[red]Validation failed: {escape(str(e))}[/red]")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        _print_findings(asset_file.name, category, context, result)

    sys.exit(0 if result.valid else 1)


def _print_findings(label: str, category: str, context, result) -> None:
    status = "[green]VALID[/green]" if result.valid else "[red]INVALID[/red]"
    against = context.brand.name or "unnamed brand"
    if context.campaign and context.campaign.campaign_id:
        against += f" / campaign {context.campaign.campaign_id}"
    console.print(f"\n[bold]{label}[/bold] ({category}) against {against}: {status}\n")

    if not (result.violations or result.warnings or result.suggestions):
        console.print("[dim]  No findings.[/dim]\n")
        return

    table = Table(title="Findings", show_lines=True)
    table.add_column("Kind", style="bold")
    table.add_column("Rule", style="cyan")
    table.add_column("Severity", justify="center")
    table.add_column("Field")
    table.add_column("Message")

    for v in result.violations:
        color = "red" if v.severity == "critical" else "yellow"
        table.add_row("violation", v.rule_id, f"[{color}]{v.severity}[/{color}]", v.field or "-", v.message)
    for w in result.warnings:
        table.add_row("warning", w.rule_id, "[dim]info[/dim]", w.field or "-", w.message)
    for s in result.suggestions:
        table.add_row("suggestion", s.type, "-", "-", s.message)

    console.print(table)
    console.print()


# ═══════════════════════════════════════════════════════
#  RULES — list the catalog
# ═══════════════════════════════════════════════════════
@main.command()
def rules():
    """List registered compliance rules."""
    from brand_compliance.compliance.rules import DEFAULT_CATALOG

    table = Table(title="Rule Catalog", show_lines=True)
    table.add_column("Rule", style="bold")
    table.add_column("Trigger", style="cyan")
    table.add_column("Rule IDs")
    table.add_column("Description", style="dim")

    for rule in DEFAULT_CATALOG:
        table.add_row(rule.name, rule.trigger, ", ".join(rule.rule_ids), rule.description)

    console.print()
    console.print(table)


# ═══════════════════════════════════════════════════════
#  HEALTH — dependency probes
# ═══════════════════════════════════════════════════════
@main.command()
@click.option(
    "--probe",
    type=click.Choice(["health", "live", "ready"], case_sensitive=False),
    default="health",
    help="Which payload to print.",
)
def health(probe: str):
    """Print the health payload; exit 1 unless healthy."""
    from brand_compliance.health import default_checker

    path = {"health": "/health", "live": "/health/live", "ready": "/health/ready"}[probe.lower()]
    code, payload = asyncio.run(default_checker().respond(path))
    click.echo(json.dumps(payload, indent=2))
    sys.exit(0 if code == 200 else 1)


if __name__ == "__main__":
    main()
