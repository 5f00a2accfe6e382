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

"""Intra-function taint tracking.

For one function-like node, classify local identifiers as
parameter-derived or request-derived. Propagation is a single pass over
variable declarations in document order: a declaration whose source is
declared later in the file stays untainted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from secureai.scanner.syntax import (
    NodeKind,
    SyntaxNode,
    classify_node,
    declaration_initializer,
    declaration_name,
    function_parameters,
    member_root,
)

logger = logging.getLogger(__name__)

REQUEST_OBJECT_NAMES = frozenset({"req", "request"})


class TaintClass(str, Enum):
    PARAMETER = "parameter"
    REQUEST_DERIVED = "request_derived"
    UNTAINTED = "untainted"


@dataclass(frozen=True)
class ScopeTaint:
    """Tainted identifier sets of one function scope.

    An identifier may sit in both labelled subsets when it was copied
    from a name that is itself in both.
    """

    from_params: frozenset[str]
    from_request: frozenset[str]

    @property
    def tainted(self) -> frozenset[str]:
        return self.from_params | self.from_request

    def is_empty(self) -> bool:
        return not self.from_params and not self.from_request

    def classify(self, name: str) -> TaintClass:
        if name in self.from_params:
            return TaintClass.PARAMETER
        if name in self.from_request:
            return TaintClass.REQUEST_DERIVED
        return TaintClass.UNTAINTED


def is_request_object_access(node: SyntaxNode) -> bool:
    """True for `req.x...`, `request.x...` and `ctx.request...` accesses."""
    if classify_node(node) is not NodeKind.MEMBER_ACCESS:
        return False
    root = member_root(node)
    if classify_node(root) is not NodeKind.IDENTIFIER:
        return False
    root_name = root.text.lower()
    if root_name in REQUEST_OBJECT_NAMES:
        return True
    if root_name == "ctx":
        return node.text.lower().replace("?.", ".").startswith("ctx.request")
    return False


def collect_tainted_identifiers(fn: SyntaxNode) -> ScopeTaint:
    """Compute the taint sets for a function-like node."""
    from_params: set[str] = set()
    from_request: set[str] = set()

    if classify_node(fn) is NodeKind.FUNCTION_LIKE:
        from_params.update(function_parameters(fn))

    for decl in fn.descendants_of_kind(NodeKind.VARIABLE_DECL):
        name = declaration_name(decl)
        initializer = declaration_initializer(decl)
        if name is None or initializer is None:
            continue

        if classify_node(initializer) is NodeKind.IDENTIFIER:
            source = initializer.text
            if source in from_params:
                from_params.add(name)
            if source in from_request:
                from_request.add(name)
            if source in from_params or source in from_request:
                continue

        if is_request_object_access(initializer):
            from_request.add(name)

    return ScopeTaint(frozenset(from_params), frozenset(from_request))
