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

"""Pydantic models for the scan report consumed by the reporters."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field

from secureai import __version__
from secureai.models.findings import Finding, Severity


class ReportMeta(BaseModel):
    tool: str = "SecureAI-Scan"
    version: str = __version__
    scanned_at: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    scan_target: str = ""


class ReportSummary(BaseModel):
    """Counts over risk findings only; LLM_* inventory items are excluded."""

    total: int = 0
    by_severity: dict[Severity, int] = Field(
        default_factory=lambda: {s: 0 for s in Severity}
    )

    @property
    def high_or_critical(self) -> int:
        return self.by_severity[Severity.HIGH] + self.by_severity[Severity.CRITICAL]


class SnippetLine(BaseModel):
    line_number: int
    text: str
    highlight: bool = False


class ReportOccurrence(BaseModel):
    file: str
    line: int
    confidence: float
    snippet: list[SnippetLine] = Field(default_factory=list)


class ReportGroupedFinding(BaseModel):
    """All occurrences of one rule id."""

    rule_id: str
    title: str
    severity: Severity
    confidence_min: float
    confidence_max: float
    summary: str
    description: str
    recommendation: str
    occurrences: list[ReportOccurrence] = Field(default_factory=list)


class ReportIgnoredFinding(BaseModel):
    rule_id: str
    title: str
    severity: Severity
    file: str
    line: int
    reason: str
    annotation_line: int


class ReportBaselineDiff(BaseModel):
    created: bool
    baseline_path: str
    baseline_count: int
    current_count: int
    new_or_regressed_count: int
    unchanged_count: int


class ScanReport(BaseModel):
    meta: ReportMeta = Field(default_factory=ReportMeta)
    summary: ReportSummary = Field(default_factory=ReportSummary)
    baseline_diff: Optional[ReportBaselineDiff] = None
    findings: list[Finding] = Field(default_factory=list)
    grouped_findings: list[ReportGroupedFinding] = Field(default_factory=list)
    informational: list[ReportGroupedFinding] = Field(default_factory=list)
    ignored_findings: list[ReportIgnoredFinding] = Field(default_factory=list)
    scanned_files: list[str] = Field(default_factory=list)
