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

"""Builds the ScanReport model from scan results.

Findings are grouped per rule id; risk findings and LLM_* inventory
items are kept apart. Snippets are read from the scanned tree when a root
path is given.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from secureai.models.baseline import BaselineResult
from secureai.models.findings import SEVERITY_RANK, Finding, IgnoredFinding
from secureai.models.report import (
    ReportBaselineDiff,
    ReportGroupedFinding,
    ReportIgnoredFinding,
    ReportMeta,
    ReportOccurrence,
    ReportSummary,
    ScanReport,
    SnippetLine,
)

logger = logging.getLogger(__name__)

SNIPPET_CONTEXT_LINES = 2


class SnippetReader:
    """Caches file lines so each file is read at most once per report."""

    def __init__(self, root: Optional[Path]) -> None:
        self.root = root
        self._cache: dict[str, Optional[list[str]]] = {}

    def _lines(self, rel_path: str) -> Optional[list[str]]:
        if self.root is None:
            return None
        if rel_path not in self._cache:
            try:
                text = (self.root / rel_path).read_text(encoding="utf-8", errors="replace")
                self._cache[rel_path] = text.splitlines()
            except OSError as e:
                logger.debug("No snippet for %s: %s", rel_path, e)
                self._cache[rel_path] = None
        return self._cache[rel_path]

    def snippet(self, rel_path: str, line: int) -> list[SnippetLine]:
        lines = self._lines(rel_path)
        if not lines or line < 1 or line > len(lines):
            return []
        start = max(1, line - SNIPPET_CONTEXT_LINES)
        end = min(len(lines), line + SNIPPET_CONTEXT_LINES)
        return [
            SnippetLine(line_number=n, text=lines[n - 1], highlight=(n == line))
            for n in range(start, end + 1)
        ]


def build_summary(findings: list[Finding]) -> ReportSummary:
    summary = ReportSummary()
    for finding in findings:
        summary.by_severity[finding.severity] += 1
    summary.total = len(findings)
    return summary


def group_by_rule(findings: list[Finding], reader: SnippetReader) -> list[ReportGroupedFinding]:
    """Group per rule, most severe first, then highest confidence."""
    groups: dict[str, ReportGroupedFinding] = {}
    for finding in findings:
        group = groups.get(finding.rule_id)
        if group is None:
            group = ReportGroupedFinding(
                rule_id=finding.rule_id,
                title=finding.title,
                severity=finding.severity,
                confidence_min=finding.confidence,
                confidence_max=finding.confidence,
                summary=finding.summary,
                description=finding.description,
                recommendation=finding.recommendation,
            )
            groups[finding.rule_id] = group
        group.confidence_min = min(group.confidence_min, finding.confidence)
        group.confidence_max = max(group.confidence_max, finding.confidence)
        group.occurrences.append(
            ReportOccurrence(
                file=finding.file,
                line=finding.line,
                confidence=finding.confidence,
                snippet=reader.snippet(finding.file, finding.line),
            )
        )

    return sorted(
        groups.values(),
        key=lambda g: (-SEVERITY_RANK[g.severity], -g.confidence_max, g.rule_id),
    )


def build_report(
    findings: list[Finding],
    *,
    ignored: Optional[list[IgnoredFinding]] = None,
    root: Optional[Path] = None,
    baseline: Optional[BaselineResult] = None,
    scanned_files: Optional[list[str]] = None,
    meta: Optional[ReportMeta] = None,
) -> ScanReport:
    reader = SnippetReader(root)
    issues = [f for f in findings if not f.is_informational]
    informational = [f for f in findings if f.is_informational]

    baseline_diff = None
    if baseline is not None:
        baseline_diff = ReportBaselineDiff(
            created=baseline.created,
            baseline_path=baseline.baseline_path,
            baseline_count=baseline.baseline_count,
            current_count=baseline.current_count,
            new_or_regressed_count=baseline.new_or_regressed_count,
            unchanged_count=baseline.unchanged_count,
        )

    return ScanReport(
        meta=meta or ReportMeta(scan_target=str(root) if root else ""),
        summary=build_summary(issues),
        baseline_diff=baseline_diff,
        findings=list(findings),
        grouped_findings=group_by_rule(issues, reader),
        informational=group_by_rule(informational, reader),
        ignored_findings=[
            ReportIgnoredFinding(
                rule_id=item.finding.rule_id,
                title=item.finding.title,
                severity=item.finding.severity,
                file=item.finding.file,
                line=item.finding.line,
                reason=item.reason,
                annotation_line=item.annotation_line,
            )
            for item in (ignored or [])
        ],
        scanned_files=list(scanned_files or []),
    )
