# SecureAI-Scan — Static analysis for LLM integration risks
# Copyright (C) 2026 SecureAI-Scan Contributors
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program. If not, see <https://www.gnu.org/licenses/>.

"""SecureAI-Scan CLI.

Usage:
    secureai scan [PATH] [--severity high] [--rules AI001,AI003] [--output report.md]
    secureai deps [PATH]
    secureai explain AI001
    secureai prompt-risk "Ignore previous instructions and ..."
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from secureai import __version__
from secureai.config import ConfigError, ScanConfig, load_config
from secureai.models.findings import Finding, Severity
from secureai.models.report import ReportMeta
from secureai.reporter.builder import build_report
from secureai.reporter.console_out import (
    DEFAULT_LIMIT,
    console,
    print_debug_files,
    print_explanation,
    print_prompt_risk,
    print_scan_summary,
)
from secureai.reporter.json_out import to_canonical_json, write_report
from secureai.reporter.markdown_out import format_markdown, write_markdown
from secureai.scanner.baseline import BaselineError, apply_baseline
from secureai.scanner.dependency_guard import scan_dependency_files
from secureai.scanner.explainer import StaticExplainer
from secureai.scanner.filters import (
    filter_findings_by_severity,
    parse_rule_ids,
    resolve_rule_selection,
)
from secureai.scanner.prompt_risk import evaluate_prompt_risk
from secureai.scanner.rules import AVAILABLE_RULE_IDS
from secureai.scanner.scan import scan_repository_detailed

app = typer.Typer(
    name="secureai",
    help=(
        "SecureAI-Scan: static analysis for LLM integration risks in TypeScript/JavaScript. "
        "Run 'secureai <command> --help' for flags."
    ),
    add_completion=False,
)

logger = logging.getLogger("secureai")

OUTPUT_FORMATS = ("json", "markdown")


def _configure_logging(*, debug: bool, quiet: bool) -> None:
    if quiet:
        logging.basicConfig(level=logging.ERROR)
    elif debug:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.INFO)

    for _name in ("httpcore", "httpx"):
        logging.getLogger(_name).setLevel(logging.WARNING)


def _fail(message: str) -> None:
    console.print(f"[red]Error: {message}[/red]", highlight=False)
    raise typer.Exit(code=1)


def _resolve_target(path: str) -> Path:
    target_dir = Path(path).resolve()
    if not target_dir.exists():
        _fail(f"Directory not found: {target_dir}")
    if not target_dir.is_dir():
        _fail(f"Not a directory: {target_dir}")
    return target_dir


def _resolve_severity(cli_value: Optional[str], config: ScanConfig) -> Optional[Severity]:
    if cli_value is not None:
        return Severity.parse(cli_value)
    return config.severity


def _resolve_rules(cli_value: Optional[str], only_ai: bool, config: ScanConfig) -> Optional[list[str]]:
    rules = parse_rule_ids(cli_value) if cli_value is not None else (config.rules or None)
    return resolve_rule_selection(rules, only_ai or config.only_ai)


def _resolve_baseline(cli_value: Optional[str], config: ScanConfig, target_dir: Path) -> Optional[Path]:
    if cli_value:
        return Path(cli_value)
    if config.baseline:
        return target_dir / config.baseline
    return None


def _write_output(report, output: str, quiet: bool = False) -> None:
    output_path = Path(output)
    suffix = output_path.suffix.lower()
    if suffix == ".json":
        write_report(report, output_path)
    elif suffix == ".md":
        write_markdown(report, output_path)
    else:
        _fail(f"Unsupported output extension '{output_path.suffix}'. Use .json or .md.")
    if not quiet:
        console.print(f"[dim]Report written to {output_path}[/dim]")


@app.command()
def scan(
    path: str = typer.Argument(".", help="Path to scan (default: current directory)"),
    severity: Optional[str] = typer.Option(
        None, "--severity", "-s", help="Minimum severity to report (low, medium, high, critical)"
    ),
    rules: Optional[str] = typer.Option(
        None, "--rules", "-r", help=f"Comma-separated rule IDs ({', '.join(AVAILABLE_RULE_IDS)})"
    ),
    only_ai: bool = typer.Option(False, "--only-ai", help="Run only AI-risk rules (AI*)"),
    limit: int = typer.Option(DEFAULT_LIMIT, "--limit", "-n", min=0, help="Top findings shown in the terminal"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write full report to a .json or .md file"),
    output_format: Optional[str] = typer.Option(
        None, "--format", "-f", help="Print the full report to stdout (json or markdown)"
    ),
    baseline: Optional[str] = typer.Option(
        None, "--baseline", help="Baseline file; created on first run, otherwise only new findings are reported"
    ),
    deps: bool = typer.Option(False, "--deps", help="Also check package.json / requirements.txt dependencies"),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to secureai.yaml"),
    debug: bool = typer.Option(False, "--debug", help="Show scanned files and debug logs"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress all output except errors"),
) -> None:
    """Scan a TypeScript/JavaScript repository for LLM integration risks."""
    _configure_logging(debug=debug, quiet=quiet)
    target_dir = _resolve_target(path)

    if output_format is not None and output_format.lower() not in OUTPUT_FORMATS:
        _fail(f"Invalid --format value '{output_format}'. Use one of: {', '.join(OUTPUT_FORMATS)}.")

    try:
        config = load_config(target_dir, Path(config_path) if config_path else None)
        min_severity = _resolve_severity(severity, config)
        selected_rules = _resolve_rules(rules, only_ai, config)
    except ValueError as e:
        _fail(str(e))

    try:
        result = scan_repository_detailed(target_dir, selected_rules, config.exclude)
    except (FileNotFoundError, NotADirectoryError) as e:
        _fail(str(e))

    if debug and not quiet:
        print_debug_files(result.scanned_files, selected_rules)

    findings: list[Finding] = list(result.findings)
    if deps:
        findings.extend(scan_dependency_files(target_dir))

    baseline_result = None
    baseline_path = _resolve_baseline(baseline, config, target_dir)
    if baseline_path is not None:
        try:
            baseline_result = apply_baseline(baseline_path, findings)
        except BaselineError as e:
            _fail(str(e))
        findings = baseline_result.findings

    findings = filter_findings_by_severity(findings, min_severity)

    report = build_report(
        findings,
        ignored=result.ignored_findings,
        root=target_dir,
        baseline=baseline_result,
        scanned_files=result.scanned_files,
        meta=ReportMeta(scan_target=str(target_dir)),
    )

    if output_format is not None:
        if output_format.lower() == "json":
            typer.echo(to_canonical_json(report), nl=False)
        else:
            typer.echo(format_markdown(report), nl=False)
        if output:
            _write_output(report, output, quiet=True)
        return

    if output:
        _write_output(report, output, quiet)

    if not quiet:
        print_scan_summary(report, limit)


@app.command()
def deps(
    path: str = typer.Argument(".", help="Project root containing package.json / requirements.txt"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress all output except errors"),
) -> None:
    """Check declared dependencies for missing or look-alike packages."""
    _configure_logging(debug=False, quiet=quiet)
    target_dir = _resolve_target(path)

    findings = scan_dependency_files(target_dir)
    if quiet:
        return
    if not findings:
        console.print("[green]No dependency issues found.[/green]")
        return
    for finding in findings:
        console.print(
            f"- {finding.rule_id} {finding.file}:{finding.line} {finding.summary}",
            highlight=False,
        )


@app.command()
def explain(
    rule_id: str = typer.Argument(..., help="Rule ID to explain (e.g. AI001)"),
) -> None:
    """Explain why a rule matters and how to fix it."""
    normalized = rule_id.strip().upper()
    if normalized not in AVAILABLE_RULE_IDS:
        _fail(f"Unknown rule ID: {rule_id}. Available rules: {', '.join(AVAILABLE_RULE_IDS)}.")
    print_explanation(normalized, StaticExplainer().explain_rule(normalized))


@app.command(name="prompt-risk")
def prompt_risk(
    text: str = typer.Argument(..., help="Prompt text to evaluate"),
) -> None:
    """Score a free-text prompt for injection-prone patterns."""
    print_prompt_risk(evaluate_prompt_risk(text))


@app.command()
def version() -> None:
    """Show the SecureAI-Scan version."""
    console.print(f"SecureAI-Scan v{__version__}")


if __name__ == "__main__":
    app()
