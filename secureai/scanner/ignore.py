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

"""Inline suppression via `// secureai-ignore <RULE_ID>: <reason>` comments.

A directive suppresses at most one finding: the first finding (ordered by
normalized file, then line) of the same rule that appears on a later line
of the same file. Matching runs after global dedupe and sort, so the
outcome does not depend on rule execution order.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from secureai.models.findings import Finding, IgnoredFinding
from secureai.scanner.dedupe import normalize_file_key
from secureai.scanner.syntax import SourceUnit

logger = logging.getLogger(__name__)

IGNORE_PATTERN = re.compile(r"^\s*//\s*secureai-ignore\s+([A-Za-z0-9_]+)\s*:\s*(.+?)\s*$")


class DirectiveState(str, Enum):
    UNCONSUMED = "unconsumed"
    CONSUMED = "consumed"


@dataclass
class IgnoreDirective:
    rule_id: str
    reason: str
    line: int
    state: DirectiveState = DirectiveState.UNCONSUMED

    @property
    def consumed(self) -> bool:
        return self.state is DirectiveState.CONSUMED

    def consume(self) -> None:
        if self.consumed:
            raise RuntimeError(f"Directive at line {self.line} already consumed")
        self.state = DirectiveState.CONSUMED

    def matches(self, finding: Finding) -> bool:
        return (
            not self.consumed
            and self.rule_id == finding.rule_id
            and self.line < finding.line
        )


def parse_ignore_directives(lines: Iterable[str]) -> list[IgnoreDirective]:
    """Parse directives from raw source lines (1-based line numbers).

    Directives whose reason is empty after trimming are not registered.
    """
    directives = []
    for index, line in enumerate(lines, start=1):
        match = IGNORE_PATTERN.match(line)
        if not match:
            continue
        reason = match.group(2).strip()
        if not reason:
            continue
        directives.append(
            IgnoreDirective(rule_id=match.group(1).upper(), reason=reason, line=index)
        )
    return directives


def collect_directives(units: Iterable[SourceUnit]) -> dict[str, list[IgnoreDirective]]:
    """Directives per normalized file key. Fresh state for every call."""
    by_file: dict[str, list[IgnoreDirective]] = {}
    for unit in units:
        directives = parse_ignore_directives(unit.lines)
        if directives:
            by_file.setdefault(normalize_file_key(unit.path), []).extend(directives)
    return by_file


def apply_ignore_annotations(
    directives_by_file: dict[str, list[IgnoreDirective]],
    findings: list[Finding],
) -> tuple[list[Finding], list[IgnoredFinding]]:
    """Split findings into (active, ignored).

    Active findings come back in (normalized file, line) order.
    """
    active: list[Finding] = []
    ignored: list[IgnoredFinding] = []

    ordered = sorted(findings, key=lambda f: (normalize_file_key(f.file), f.line))

    for finding in ordered:
        directives = directives_by_file.get(normalize_file_key(finding.file), [])
        match = next((d for d in directives if d.matches(finding)), None)
        if match is None:
            active.append(finding)
            continue

        match.consume()
        ignored.append(
            IgnoredFinding(finding=finding, reason=match.reason, annotation_line=match.line)
        )
        logger.debug(
            "Suppressed %s at %s:%d (directive line %d)",
            finding.rule_id, finding.file, finding.line, match.line,
        )

    return active, ignored
