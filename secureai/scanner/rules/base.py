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

"""Shared rule plumbing: the Rule base class and LLM-call heuristics.

Every rule is stateless across files and returns a fresh list of
findings per evaluation. Malformed nodes (missing arguments, odd
property shapes) yield no finding rather than an error.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from secureai.models.findings import Finding, Severity
from secureai.scanner.syntax import (
    NodeKind,
    SourceUnit,
    SyntaxCorpus,
    SyntaxNode,
    call_arguments,
    call_callee_text,
    classify_node,
    object_property_values,
)

logger = logging.getLogger(__name__)

# Callee substrings (lowercase) that mark a call as an LLM SDK call
LLM_CALLEE_PATTERNS = (
    "openai",
    "anthropic",
    "google",
    "gemini",
    "genai",
)


class Rule(ABC):
    """A stateless detector with a fixed id, title and severity."""

    id: str = ""
    title: str = ""
    severity: Severity = Severity.LOW

    @abstractmethod
    def evaluate(self, corpus: SyntaxCorpus) -> list[Finding]:
        """Scan the corpus and return raw (un-deduplicated) findings."""

    def make_finding(
        self,
        unit: SourceUnit,
        line: int,
        *,
        summary: str,
        description: str,
        recommendation: str,
        confidence: float,
        rule_id: str | None = None,
        title: str | None = None,
    ) -> Finding:
        return Finding(
            rule_id=rule_id or self.id,
            title=title or self.title,
            severity=self.severity,
            file=unit.path,
            line=line,
            summary=summary,
            description=description,
            recommendation=recommendation,
            confidence=confidence,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r}, severity={self.severity.value})"


def is_llm_call(node: SyntaxNode) -> bool:
    """Broad, recall-oriented check on the callee text."""
    if classify_node(node) is not NodeKind.CALL:
        return False
    callee = call_callee_text(node)
    return any(pattern in callee for pattern in LLM_CALLEE_PATTERNS)


def iter_calls(node: SyntaxNode) -> list[SyntaxNode]:
    """All call expressions under node, in source order."""
    return node.descendants_of_kind(NodeKind.CALL)


def iter_functions(unit: SourceUnit) -> list[SyntaxNode]:
    return unit.root.descendants_of_kind(NodeKind.FUNCTION_LIKE)


def prompt_arguments(call: SyntaxNode) -> list[SyntaxNode]:
    """Extract the prompt-bearing argument(s) of an LLM call.

    Either the first argument itself, or, when the first argument is an
    object literal, its `prompt` value and the `content` value of every
    object element of its `messages` array.
    """
    args = call_arguments(call)
    if not args:
        return []

    first = args[0]
    if classify_node(first) is not NodeKind.OBJECT_LITERAL:
        return [first]

    nodes: list[SyntaxNode] = []
    nodes.extend(object_property_values(first, "prompt"))
    for messages in object_property_values(first, "messages"):
        if classify_node(messages) is not NodeKind.ARRAY_LITERAL:
            continue
        for element in messages.named_children:
            if classify_node(element) is not NodeKind.OBJECT_LITERAL:
                continue
            nodes.extend(object_property_values(element, "content"))
    return nodes
