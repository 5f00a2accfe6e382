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

"""Static per-rule explanations, loaded from data/explanations.yaml."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel

from secureai.models.findings import Finding, Severity

logger = logging.getLogger(__name__)

EXPLANATIONS_PATH = Path(__file__).parent.parent / "data" / "explanations.yaml"


class FindingExplanation(BaseModel):
    summary: str
    why_risky: str
    how_exploited: str
    how_to_fix: str
    code_example: str


@lru_cache(maxsize=1)
def load_explanations() -> dict[str, FindingExplanation]:
    try:
        with open(EXPLANATIONS_PATH, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Explanations not found at %s", EXPLANATIONS_PATH)
        return {}
    return {rule_id: FindingExplanation(**entry) for rule_id, entry in data.items()}


def _fallback(finding: Finding) -> FindingExplanation:
    return FindingExplanation(
        summary=finding.title,
        why_risky="This pattern can introduce security risk when untrusted data is involved.",
        how_exploited=(
            "An attacker may manipulate inputs or control execution flow to gain "
            "unintended access."
        ),
        how_to_fix=(
            "Review data flow, validate inputs, and apply least-privilege checks "
            "before LLM usage."
        ),
        code_example="// Add authentication, validation, and data minimization as applicable.",
    )


class StaticExplainer:
    def explain(self, finding: Finding) -> FindingExplanation:
        return load_explanations().get(finding.rule_id) or _fallback(finding)

    def explain_rule(self, rule_id: str) -> FindingExplanation:
        placeholder = Finding(rule_id=rule_id, title=rule_id, severity=Severity.MEDIUM, file="", line=0, summary="")
        return self.explain(placeholder)
