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

"""AI002 — prompt/response data or credentials passed to a logger."""

from __future__ import annotations

from secureai.models.findings import Finding, Severity
from secureai.scanner.confidence import calculate_confidence
from secureai.scanner.rules.base import Rule, iter_calls
from secureai.scanner.syntax import (
    NodeKind,
    SyntaxCorpus,
    SyntaxNode,
    call_arguments,
    call_callee_text,
    identifiers_in,
    member_property_name,
)

LOGGER_CALLEE_PATTERNS = (
    "console.log",
    "console.info",
    "console.warn",
    "console.error",
    "console.debug",
    "logger.log",
    "logger.info",
    "logger.warn",
    "logger.error",
    "logger.debug",
)

SENSITIVE_NAMES = ("email", "token", "password", "apikey", "api_key")
PROMPT_NAMES = ("prompt", "messages", "completion", "response", "output")


def is_logger_call(call: SyntaxNode) -> bool:
    callee = call_callee_text(call)
    return any(pattern in callee for pattern in LOGGER_CALLEE_PATTERNS)


def _is_sensitive_name(name: str) -> bool:
    normalized = name.lower()
    return any(s in normalized for s in SENSITIVE_NAMES) or any(
        p in normalized for p in PROMPT_NAMES
    )


def argument_contains_sensitive_data(arg: SyntaxNode) -> bool:
    """Identifiers, property names, then raw text, in that order."""
    if any(_is_sensitive_name(ident.text) for ident in identifiers_in(arg)):
        return True

    for access in arg.descendants_of_kind(NodeKind.MEMBER_ACCESS):
        if _is_sensitive_name(member_property_name(access)):
            return True

    return _is_sensitive_name(arg.text)


class SensitivePromptLoggingRule(Rule):
    id = "AI002"
    title = "Sensitive prompt logging"
    severity = Severity.HIGH

    def evaluate(self, corpus: SyntaxCorpus) -> list[Finding]:
        findings: list[Finding] = []

        for unit in corpus.units:
            for call in iter_calls(unit.root):
                if not is_logger_call(call):
                    continue

                args = call_arguments(call)
                if not args:
                    continue
                if not any(argument_contains_sensitive_data(arg) for arg in args):
                    continue

                findings.append(
                    self.make_finding(
                        unit,
                        call.line,
                        summary="Prompt or response data is logged.",
                        description=(
                            "Prompt content or LLM responses are logged alongside "
                            "potentially sensitive fields."
                        ),
                        recommendation=(
                            "Avoid logging prompt/response data or redact sensitive fields "
                            "like email, token, password, or apiKey."
                        ),
                        confidence=calculate_confidence(direct_user_input=True),
                    )
                )

        return findings
