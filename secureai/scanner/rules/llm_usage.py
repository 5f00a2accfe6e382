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

"""AI100 — inventory of LLM SDK call sites (informational, LLM_* ids)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from secureai.models.findings import Finding, Severity
from secureai.scanner.confidence import calculate_confidence
from secureai.scanner.rules.base import Rule, iter_calls
from secureai.scanner.syntax import SyntaxCorpus, call_callee_text


@dataclass(frozen=True)
class UsagePattern:
    id: str
    title: str
    matcher: Callable[[str], bool]


USAGE_PATTERNS: tuple[UsagePattern, ...] = (
    UsagePattern(
        "LLM_OPENAI_CHAT_COMPLETIONS_CREATE",
        "OpenAI chat.completions.create usage",
        lambda text: "openai.chat.completions.create" in text,
    ),
    UsagePattern(
        "LLM_OPENAI_CHATCOMPLETION_CREATE",
        "OpenAI ChatCompletion.create usage",
        lambda text: "openai.chatcompletion.create" in text,
    ),
    UsagePattern(
        "LLM_ANTHROPIC_MESSAGES",
        "Anthropic messages client usage",
        lambda text: "anthropic.messages.create" in text or ".messages.create" in text,
    ),
    UsagePattern(
        "LLM_GEMINI_GENERATECONTENT",
        "Gemini generateContent usage",
        lambda text: "generatecontent" in text,
    ),
)


class LlmUsageRule(Rule):
    id = "AI100"
    title = "LLM SDK usage detection"
    severity = Severity.LOW

    def evaluate(self, corpus: SyntaxCorpus) -> list[Finding]:
        findings: list[Finding] = []

        for unit in corpus.units:
            for call in iter_calls(unit.root):
                callee = call_callee_text(call)
                for pattern in USAGE_PATTERNS:
                    if not pattern.matcher(callee):
                        continue
                    findings.append(
                        self.make_finding(
                            unit,
                            call.line,
                            rule_id=pattern.id,
                            title=pattern.title,
                            summary="LLM SDK usage detected.",
                            description="LLM SDK usage detected.",
                            recommendation=(
                                "Review the call to ensure prompts, inputs, and outputs "
                                "are securely handled."
                            ),
                            confidence=calculate_confidence(confirmed_llm_call=True),
                        )
                    )

        return findings
