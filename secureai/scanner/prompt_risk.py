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

"""Free-text prompt risk scoring — regex keyword families, additive score."""

from __future__ import annotations

import re
from enum import Enum

from pydantic import BaseModel, Field


class PromptRiskLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class PromptRiskResult(BaseModel):
    level: PromptRiskLevel
    reasons: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)


OVERRIDE_PATTERNS: list[re.Pattern] = [
    re.compile(r"\bignore (all |any )?(previous|prior|above) instructions?\b", re.IGNORECASE),
    re.compile(r"\bdisregard (all |any )?(previous|prior|above) instructions?\b", re.IGNORECASE),
    re.compile(r"\bdeveloper mode\b", re.IGNORECASE),
    re.compile(r"\bjailbreak\b", re.IGNORECASE),
    re.compile(r"\bbypass (safety|guardrails?|restrictions?)\b", re.IGNORECASE),
]

USER_INPUT_PATTERNS: list[re.Pattern] = [
    re.compile(r"\$\{\s*(user(Input)?|input|message|prompt|query)\s*\}", re.IGNORECASE),
    re.compile(r"\{\{\s*(user(Input)?|input|message|prompt|query)\s*\}\}", re.IGNORECASE),
    re.compile(r"\b(raw|untrusted)\s+user\s+input\b", re.IGNORECASE),
    re.compile(r"\bappend user input\b", re.IGNORECASE),
]

DANGEROUS_SYSTEM_PATTERNS: list[re.Pattern] = [
    re.compile(r"\breveal (secrets?|keys?|passwords?)\b", re.IGNORECASE),
    re.compile(r"\bexfiltrat(e|ion)\b", re.IGNORECASE),
    re.compile(r"\bdisable (safety|policy|guardrails?)\b", re.IGNORECASE),
    re.compile(r"\bno restrictions?\b", re.IGNORECASE),
    re.compile(r"\bexecute (shell|command|script)\b", re.IGNORECASE),
]

LONG_PROMPT_THRESHOLD = 600

_REASON_USER_INPUT = "Prompt appears to include unescaped user-controlled input."
_REASON_OVERRIDE = "Prompt includes instruction-override language (ignore/bypass style)."
_REASON_SYSTEM = "Prompt contains potentially dangerous system-level keywords."
_REASON_LONG = "Very long prompts increase review complexity and hidden risk."


def _matches_any(patterns: list[re.Pattern], text: str) -> bool:
    return any(p.search(text) for p in patterns)


def evaluate_prompt_risk(prompt_text: str) -> PromptRiskResult:
    normalized = prompt_text.strip()
    if not normalized:
        return PromptRiskResult(
            level=PromptRiskLevel.LOW,
            reasons=["Prompt text is empty."],
            suggestions=["Provide the exact prompt text to evaluate risk."],
        )

    reasons: list[str] = []
    score = 0

    if _matches_any(USER_INPUT_PATTERNS, normalized):
        score += 2
        reasons.append(_REASON_USER_INPUT)
    if _matches_any(OVERRIDE_PATTERNS, normalized):
        score += 2
        reasons.append(_REASON_OVERRIDE)
    if _matches_any(DANGEROUS_SYSTEM_PATTERNS, normalized):
        score += 1
        reasons.append(_REASON_SYSTEM)
    if len(normalized) > LONG_PROMPT_THRESHOLD:
        score += 1
        reasons.append(_REASON_LONG)

    if score >= 4:
        level = PromptRiskLevel.HIGH
    elif score >= 2:
        level = PromptRiskLevel.MEDIUM
    else:
        level = PromptRiskLevel.LOW

    suggestions = _build_suggestions(level, reasons)
    if not reasons:
        reasons.append("No high-risk heuristic patterns were detected.")

    return PromptRiskResult(level=level, reasons=reasons, suggestions=suggestions)


def _build_suggestions(level: PromptRiskLevel, reasons: list[str]) -> list[str]:
    suggestions = []
    if _REASON_USER_INPUT in reasons:
        suggestions.append("Encode or delimit user input before including it in prompts.")
    if _REASON_OVERRIDE in reasons:
        suggestions.append("Remove ignore/bypass instructions and enforce strict role boundaries.")
    if _REASON_SYSTEM in reasons:
        suggestions.append("Avoid prompts that request secrets, policy bypass, or shell execution.")
    if level is PromptRiskLevel.LOW and not suggestions:
        suggestions.append("Keep prompts explicit, minimal, and separated by role.")
    if not suggestions:
        suggestions.append("Review prompt templates with security-focused code review.")
    return suggestions
