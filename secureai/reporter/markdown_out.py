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

"""Markdown report rendering."""

from __future__ import annotations

import logging
from pathlib import Path

from secureai.models.findings import Severity
from secureai.models.report import ReportGroupedFinding, ScanReport, SnippetLine
from secureai.scanner.explainer import StaticExplainer

logger = logging.getLogger(__name__)

# Rule-specific reasons shown under "Why this was flagged:"
WHY_FLAGGED: dict[str, list[str]] = {
    "AI001": [
        "A prompt is built with string concatenation or a template literal.",
        "The prompt references a function parameter or request-derived value.",
    ],
    "AI002": [
        "A console/logger call receives prompt, response or credential-like data.",
    ],
    "AI003": [
        "The function looks like a request handler (req/request/ctx parameter).",
        "An LLM SDK call runs before any auth/requireAuth/isAuthenticated call.",
    ],
    "AI004": [
        "A user/profile/session/request/payload object or JSON.stringify output is sent to the model.",
    ],
}

SEVERITY_ORDER = (Severity.CRITICAL, Severity.HIGH, Severity.MEDIUM, Severity.LOW)


def _confidence_range(group: ReportGroupedFinding) -> str:
    if group.confidence_min == group.confidence_max:
        return f"{group.confidence_max:.2f}"
    return f"{group.confidence_min:.2f}–{group.confidence_max:.2f}"


def _render_snippet(snippet: list[SnippetLine]) -> list[str]:
    if not snippet:
        return []
    width = len(str(snippet[-1].line_number))
    out = ["```"]
    for line in snippet:
        marker = ">>" if line.highlight else "  "
        out.append(f"{marker} {line.line_number:>{width}} | {line.text}")
    out.append("```")
    return out


def _render_group(group: ReportGroupedFinding, explainer: StaticExplainer) -> list[str]:
    out = [
        f"### {group.rule_id} — {group.title}",
        "",
        f"- **Severity:** {group.severity.value}",
        f"- **Confidence:** {_confidence_range(group)}",
        f"- **Occurrences:** {len(group.occurrences)}",
        "",
        group.description,
        "",
    ]
    reasons = WHY_FLAGGED.get(group.rule_id)
    if reasons:
        out.append("Why this was flagged:")
        out.extend(f"- {reason}" for reason in reasons)
        out.append("")

    for occurrence in group.occurrences:
        out.append(f"**{occurrence.file}:{occurrence.line}** (confidence {occurrence.confidence:.2f})")
        out.append("")
        snippet = _render_snippet(occurrence.snippet)
        if snippet:
            out.extend(snippet)
            out.append("")

    out.append(f"**Recommendation:** {group.recommendation}")
    if group.rule_id in WHY_FLAGGED:
        explanation = explainer.explain_rule(group.rule_id)
        out.extend(["", "Fix example:", "", "```ts", explanation.code_example, "```"])
    out.append("")
    return out


def format_markdown(report: ScanReport) -> str:
    explainer = StaticExplainer()
    meta = report.meta
    summary = report.summary
    out = [
        f"# {meta.tool} Report",
        "",
        f"- **Version:** {meta.version}",
        f"- **Scanned at:** {meta.scanned_at}",
    ]
    if meta.scan_target:
        out.append(f"- **Target:** {meta.scan_target}")
    out.extend(["", "## Summary", "", "| Severity | Count |", "| --- | --- |"])
    for severity in SEVERITY_ORDER:
        out.append(f"| {severity.value} | {summary.by_severity[severity]} |")
    out.extend([
        "",
        f"Total issues: {summary.total} (High/Critical: {summary.high_or_critical})",
        "",
    ])

    diff = report.baseline_diff
    if diff is not None:
        out.extend(["## Baseline", ""])
        if diff.created:
            out.append(f"Baseline created at `{diff.baseline_path}` with {diff.current_count} findings.")
        else:
            out.extend([
                f"- Baseline: `{diff.baseline_path}` ({diff.baseline_count} findings)",
                f"- Current findings: {diff.current_count}",
                f"- New or regressed: {diff.new_or_regressed_count}",
                f"- Unchanged: {diff.unchanged_count}",
            ])
        out.append("")

    out.extend(["## Findings", ""])
    if not report.grouped_findings:
        out.extend(["No findings.", ""])
    for group in report.grouped_findings:
        out.extend(_render_group(group, explainer))

    if report.informational:
        out.extend(["## LLM SDK Inventory", "", "| Pattern | Location |", "| --- | --- |"])
        for group in report.informational:
            for occurrence in group.occurrences:
                out.append(f"| {group.title} | {occurrence.file}:{occurrence.line} |")
        out.append("")

    if report.ignored_findings:
        out.extend(["## Ignored Findings", ""])
        for item in report.ignored_findings:
            out.append(
                f"- {item.rule_id} at {item.file}:{item.line} "
                f"(annotation line {item.annotation_line}): {item.reason}"
            )
        out.append("")

    return "\n".join(out).rstrip("\n") + "\n"


def write_markdown(report: ScanReport, output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(format_markdown(report), encoding="utf-8", newline="\n")
    logger.info("Wrote Markdown report to %s", output_path)
