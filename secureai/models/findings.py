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

"""Pydantic models for findings and suppressed findings."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Severity(str, Enum):
    """Severity level of a finding. Fixed per rule."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return SEVERITY_RANK[self]

    @classmethod
    def parse(cls, value: str) -> "Severity":
        """Parse user-supplied severity text (case-insensitive)."""
        normalized = value.strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        choices = ", ".join(m.value for m in cls)
        raise ValueError(f'Invalid severity "{value}". Expected one of: {choices}.')


SEVERITY_RANK: dict[Severity, int] = {
    Severity.LOW: 1,
    Severity.MEDIUM: 2,
    Severity.HIGH: 3,
    Severity.CRITICAL: 4,
}


class Finding(BaseModel):
    """One reported occurrence of a risky pattern.

    severity is fixed by the emitting rule; confidence is computed per
    occurrence by the confidence scorer and always lies in [0, 1].
    """

    model_config = ConfigDict(frozen=True)

    rule_id: str
    title: str
    severity: Severity
    file: str  # root-relative, POSIX separators
    line: int
    summary: str
    description: str = ""
    recommendation: str = ""
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)

    @property
    def is_informational(self) -> bool:
        """Inventory findings (LLM_*) are not counted as risks."""
        return self.rule_id.startswith("LLM_")


class IgnoredFinding(BaseModel):
    """A finding suppressed by an inline ``secureai-ignore`` directive."""

    model_config = ConfigDict(frozen=True)

    finding: Finding
    reason: str
    annotation_line: int
