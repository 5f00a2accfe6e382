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

"""Rich terminal output: severity summary and top findings."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from secureai.models.findings import Finding, Severity
from secureai.models.report import ScanReport
from secureai.scanner.explainer import FindingExplanation
from secureai.scanner.prompt_risk import PromptRiskLevel, PromptRiskResult


def _make_console() -> Console:
    return Console(soft_wrap=True)


console = _make_console()
err_console = Console(stderr=True, soft_wrap=True)

SEVERITY_STYLE: dict[Severity, str] = {
    Severity.CRITICAL: "bold red",
    Severity.HIGH: "yellow",
    Severity.MEDIUM: "bright_yellow",
    Severity.LOW: "green",
}

RISK_LEVEL_STYLE: dict[PromptRiskLevel, str] = {
    PromptRiskLevel.HIGH: "bold red",
    PromptRiskLevel.MEDIUM: "yellow",
    PromptRiskLevel.LOW: "green",
}

DEFAULT_LIMIT = 5


def severity_label(severity: Severity) -> str:
    style = SEVERITY_STYLE[severity]
    return f"[{style}]{severity.value.upper()}[/{style}]"


def top_findings(findings: list[Finding], limit: int) -> list[Finding]:
    """Risk findings by descending confidence; stable for ties."""
    ranked = sorted(
        (f for f in findings if not f.is_informational),
        key=lambda f: f.confidence,
        reverse=True,
    )
    return ranked[:limit] if limit > 0 else []


def print_scan_summary(report: ScanReport, limit: int = DEFAULT_LIMIT) -> None:
    console.print("[bold]SecureAI-Scan Summary[/bold]\n")

    table = Table(show_header=True, header_style="bold")
    table.add_column("Severity")
    table.add_column("Count", justify="right")
    for severity in (Severity.CRITICAL, Severity.HIGH, Severity.MEDIUM, Severity.LOW):
        table.add_row(severity_label(severity), str(report.summary.by_severity[severity]))
    console.print(table)
    console.print(
        f"Total issues: {report.summary.total} "
        f"(High/Critical: {report.summary.high_or_critical})"
    )

    diff = report.baseline_diff
    if diff is not None:
        if diff.created:
            console.print(f"[dim]Baseline created: {diff.baseline_path}[/dim]")
        else:
            console.print(
                f"[dim]Baseline: {diff.new_or_regressed_count} new or regressed, "
                f"{diff.unchanged_count} unchanged[/dim]"
            )

    if report.summary.total == 0:
        console.print("\n[green]No findings.[/green]")
        return

    shown = top_findings(report.findings, limit)
    console.print("\n[bold]Top findings (by confidence):[/bold]")
    if not shown:
        console.print("- (none shown)")
    for finding in shown:
        console.print(
            f"- {severity_label(finding.severity)} {finding.rule_id} "
            f"{finding.file}:{finding.line} ({finding.confidence:.2f}) {finding.summary}",
            highlight=False,
        )

    if len(shown) < report.summary.total:
        console.print(
            f"\n[dim]Showing top {len(shown)} of {report.summary.total} findings. "
            f"Use --output to export the full report.[/dim]"
        )

    if report.ignored_findings:
        console.print(f"[dim]{len(report.ignored_findings)} finding(s) suppressed by secureai-ignore.[/dim]")


def print_debug_files(files: list[str], rules: list[str] | None, preview: int = 20) -> None:
    err_console.print(f"[dim][debug] Scanned files: {len(files)}[/dim]")
    err_console.print(f"[dim][debug] Rules selected: {', '.join(rules) if rules else 'all'}[/dim]")
    for path in files[:preview]:
        err_console.print(f"[dim]- {path}[/dim]", highlight=False)
    if len(files) > preview:
        err_console.print(f"[dim][debug] ...and {len(files) - preview} more[/dim]")


def print_explanation(rule_id: str, explanation: FindingExplanation) -> None:
    console.print(f"[bold]# {rule_id}[/bold]\n")
    console.print(f"[bold]Why this is dangerous:[/bold]\n{explanation.why_risky}\n")
    console.print(f"[bold]How attackers exploit it:[/bold]\n{explanation.how_exploited}\n")
    console.print(f"[bold]How to fix:[/bold]\n{explanation.how_to_fix}\n")
    console.print("[bold]Fix example:[/bold]\n")
    console.print(explanation.code_example, markup=False, highlight=False)


def print_prompt_risk(result: PromptRiskResult) -> None:
    style = RISK_LEVEL_STYLE[result.level]
    console.print(f"Prompt risk: [{style}]{result.level.value}[/{style}]")
    console.print("\n[bold]Reasons:[/bold]")
    for reason in result.reasons:
        console.print(f"- {reason}")
    console.print("\n[bold]Suggestions:[/bold]")
    for suggestion in result.suggestions:
        console.print(f"- {suggestion}")
