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

"""Pydantic models for the persisted findings baseline."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from secureai.models.findings import Finding, Severity

BASELINE_SCHEMA = "secureai-baseline/v1"


class BaselineEntry(BaseModel):
    """Minimal identity + strength of a previously seen finding."""

    rule_id: str
    file: str
    line: int
    severity: Severity
    confidence: float

    @classmethod
    def from_finding(cls, finding: Finding) -> "BaselineEntry":
        return cls(
            rule_id=finding.rule_id,
            file=finding.file,
            line=finding.line,
            severity=finding.severity,
            confidence=finding.confidence,
        )


class BaselineFile(BaseModel):
    """On-disk baseline document.

    The schema tag is checked literally on read; there is no migration
    between schema versions.
    """

    schema_: str = Field(default=BASELINE_SCHEMA, alias="schema")
    created_at: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat(),
        alias="createdAt",
    )
    findings: list[BaselineEntry] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)


class BaselineResult(BaseModel):
    """Outcome of comparing the current findings against a baseline."""

    created: bool
    baseline_path: str
    findings: list[Finding] = Field(default_factory=list)  # new or regressed
    baseline_count: int = 0
    current_count: int = 0

    @property
    def new_or_regressed_count(self) -> int:
        return len(self.findings)

    @property
    def unchanged_count(self) -> int:
        return self.current_count - self.new_or_regressed_count
