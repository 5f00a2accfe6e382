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

"""AI004 — whole user/session/request objects sent to an LLM."""

from __future__ import annotations

from secureai.models.findings import Finding, Severity
from secureai.scanner.confidence import calculate_confidence
from secureai.scanner.rules.base import Rule, is_llm_call, iter_calls, prompt_arguments
from secureai.scanner.syntax import (
    NodeKind,
    SyntaxCorpus,
    SyntaxNode,
    call_callee_text,
    classify_node,
    identifiers_in,
)

SENSITIVE_OBJECT_NAMES = frozenset({
    "user",
    "profile",
    "metadata",
    "session",
    "request",
    "payload",
})


def is_json_stringify(node: SyntaxNode) -> bool:
    if classify_node(node) is not NodeKind.CALL:
        return False
    callee = call_callee_text(node)
    return callee == "json.stringify" or callee.endswith(".json.stringify")


def contains_sensitive_object(arg: SyntaxNode) -> bool:
    return any(ident.text.lower() in SENSITIVE_OBJECT_NAMES for ident in identifiers_in(arg))


def contains_json_stringify(arg: SyntaxNode) -> bool:
    if is_json_stringify(arg):
        return True
    return any(is_json_stringify(call) for call in arg.descendants_of_kind(NodeKind.CALL))


class SensitiveDataToLlmRule(Rule):
    id = "AI004"
    title = "Sensitive data sent to LLM"
    severity = Severity.HIGH

    def evaluate(self, corpus: SyntaxCorpus) -> list[Finding]:
        findings: list[Finding] = []

        for unit in corpus.units:
            for call in iter_calls(unit.root):
                if not is_llm_call(call):
                    continue

                for arg in prompt_arguments(call):
                    hits_sensitive = contains_sensitive_object(arg)
                    if not hits_sensitive and not contains_json_stringify(arg):
                        continue

                    findings.append(
                        self.make_finding(
                            unit,
                            arg.line,
                            summary="Large user context sent directly to LLM.",
                            description=(
                                "Potential PII exposure risk: user/profile/session data is "
                                "sent to an LLM without minimization."
                            ),
                            recommendation=(
                                "Minimize or redact sensitive fields before sending to LLMs; "
                                "send only necessary attributes."
                            ),
                            confidence=calculate_confidence(
                                direct_user_input=True,
                                request_object_source=hits_sensitive,
                                confirmed_llm_call=True,
                            ),
                        )
                    )

        return findings
