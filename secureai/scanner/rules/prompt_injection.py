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

"""AI001 — user input concatenated or interpolated into an LLM prompt."""

from __future__ import annotations

from secureai.models.findings import Finding, Severity
from secureai.scanner.confidence import calculate_confidence
from secureai.scanner.rules.base import (
    Rule,
    is_llm_call,
    iter_calls,
    iter_functions,
    prompt_arguments,
)
from secureai.scanner.syntax import (
    NodeKind,
    SyntaxCorpus,
    SyntaxNode,
    classify_node,
    identifiers_in,
    is_string_concatenation,
)
from secureai.scanner.taint import collect_tainted_identifiers


def _is_template_literal(node: SyntaxNode) -> bool:
    return classify_node(node) is NodeKind.TEMPLATE_LITERAL


class PromptInjectionRule(Rule):
    id = "AI001"
    title = "Prompt injection via user input"
    severity = Severity.HIGH

    def evaluate(self, corpus: SyntaxCorpus) -> list[Finding]:
        findings: list[Finding] = []

        for unit in corpus.units:
            for fn in iter_functions(unit):
                taint = collect_tainted_identifiers(fn)
                if taint.is_empty():
                    continue

                for call in iter_calls(fn):
                    if not is_llm_call(call):
                        continue

                    for arg in prompt_arguments(call):
                        if not (is_string_concatenation(arg) or _is_template_literal(arg)):
                            continue

                        names = {ident.text for ident in identifiers_in(arg)}
                        if not names & taint.tainted:
                            continue

                        findings.append(
                            self.make_finding(
                                unit,
                                arg.line,
                                summary="User input is concatenated into a prompt.",
                                description="User input flows directly into LLM prompt",
                                recommendation="Use role separation and input encoding",
                                confidence=calculate_confidence(
                                    direct_user_input=bool(names & taint.from_params),
                                    request_object_source=bool(names & taint.from_request),
                                    string_concat_or_template=True,
                                    confirmed_llm_call=True,
                                ),
                            )
                        )

        return findings
