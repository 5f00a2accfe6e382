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

"""Severity filtering and rule selection."""

from __future__ import annotations

from typing import Optional, Sequence

from secureai.models.findings import SEVERITY_RANK, Finding, Severity
from secureai.scanner.rules import AVAILABLE_RULE_IDS, Rule


def filter_findings_by_severity(
    findings: list[Finding],
    min_severity: Optional[Severity] = None,
) -> list[Finding]:
    if min_severity is None:
        return findings
    min_rank = SEVERITY_RANK[min_severity]
    return [f for f in findings if SEVERITY_RANK[f.severity] >= min_rank]


def select_rules(rules: Sequence[Rule], selected: Optional[Sequence[str]] = None) -> list[Rule]:
    if not selected:
        return list(rules)
    return [rule for rule in rules if rule.id in selected]


def parse_rule_ids(value: str) -> list[str]:
    """Parse a comma-separated rule id list and validate it."""
    rules = [r.strip().upper() for r in value.split(",") if r.strip()]
    if not rules:
        raise ValueError("Invalid --rules value. Provide a comma-separated list of rule IDs.")
    validate_rule_ids(rules)
    return rules


def validate_rule_ids(rule_ids: Sequence[str]) -> None:
    invalid = [r for r in rule_ids if r not in AVAILABLE_RULE_IDS]
    if invalid:
        raise ValueError(
            f"Unknown rule ID(s): {', '.join(invalid)}. "
            f"Available rules: {', '.join(AVAILABLE_RULE_IDS)}."
        )


def resolve_rule_selection(
    rules: Optional[list[str]],
    only_ai: bool,
) -> Optional[list[str]]:
    """Apply --only-ai on top of an explicit rule list."""
    if not only_ai:
        return rules
    ai_rules = [rid for rid in AVAILABLE_RULE_IDS if rid.startswith("AI")]
    if not rules:
        return ai_rules
    non_ai = [rid for rid in rules if not rid.startswith("AI")]
    if non_ai:
        raise ValueError(f"--only-ai cannot be combined with non-AI rules: {', '.join(non_ai)}.")
    return rules
