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

"""AI003 — LLM invoked in a request handler before any auth check.

Per handler, calls are walked in source order with a one-way
Unauthenticated -> Authenticated state; it is never reset.
"""

from __future__ import annotations

from enum import Enum

from secureai.models.findings import Finding, Severity
from secureai.scanner.confidence import calculate_confidence
from secureai.scanner.rules.base import Rule, is_llm_call, iter_calls, iter_functions
from secureai.scanner.syntax import SyntaxCorpus, SyntaxNode, call_callee_text, function_parameters

AUTH_FUNCTIONS = ("auth", "isauthenticated", "requireauth")

HANDLER_PARAMETER_NAMES = frozenset({"req", "request", "ctx"})


class AuthState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"


def is_auth_call(call: SyntaxNode) -> bool:
    callee = call_callee_text(call)
    return any(name in callee for name in AUTH_FUNCTIONS)


def is_request_handler(fn: SyntaxNode) -> bool:
    return any(name.lower() in HANDLER_PARAMETER_NAMES for name in function_parameters(fn))


class LlmBeforeAuthRule(Rule):
    id = "AI003"
    title = "LLM call before authentication"
    severity = Severity.CRITICAL

    def evaluate(self, corpus: SyntaxCorpus) -> list[Finding]:
        findings: list[Finding] = []

        for unit in corpus.units:
            for fn in iter_functions(unit):
                if not is_request_handler(fn):
                    continue

                state = AuthState.UNAUTHENTICATED
                for call in iter_calls(fn):
                    if is_auth_call(call):
                        state = AuthState.AUTHENTICATED
                        continue
                    if not is_llm_call(call) or state is AuthState.AUTHENTICATED:
                        continue

                    findings.append(
                        self.make_finding(
                            unit,
                            call.line,
                            summary="LLM call occurs before auth checks.",
                            description=(
                                "LLM call occurs in a request handler before "
                                "authentication checks."
                            ),
                            recommendation=(
                                "Ensure authentication/authorization runs before invoking "
                                "LLMs in request handlers."
                            ),
                            confidence=calculate_confidence(
                                request_object_source=True,
                                confirmed_llm_call=True,
                            ),
                        )
                    )

        return findings
