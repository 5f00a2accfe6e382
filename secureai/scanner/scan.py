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

"""Scan pipeline: corpus -> rules -> dedupe -> ignore annotations."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

from secureai.models.findings import Finding, IgnoredFinding
from secureai.scanner.dedupe import dedupe_findings
from secureai.scanner.ignore import apply_ignore_annotations, collect_directives
from secureai.scanner.filters import select_rules
from secureai.scanner.rules import RULES
from secureai.scanner.syntax import SyntaxCorpus, load_corpus

logger = logging.getLogger(__name__)


@dataclass
class ScanResult:
    findings: list[Finding] = field(default_factory=list)
    ignored_findings: list[IgnoredFinding] = field(default_factory=list)
    scanned_files: list[str] = field(default_factory=list)


def evaluate_corpus(
    corpus: SyntaxCorpus,
    rules: Optional[Sequence[str]] = None,
) -> ScanResult:
    """Run the selected rules over an already parsed corpus."""
    raw: list[Finding] = []
    for rule in select_rules(RULES, rules):
        rule_findings = rule.evaluate(corpus)
        logger.debug("%s produced %d raw findings", rule.id, len(rule_findings))
        raw.extend(rule_findings)

    deduped = dedupe_findings(raw)
    active, ignored = apply_ignore_annotations(collect_directives(corpus.units), deduped)

    return ScanResult(
        findings=active,
        ignored_findings=ignored,
        scanned_files=corpus.files,
    )


def scan_repository_detailed(
    root_path: str | Path,
    rules: Optional[Sequence[str]] = None,
    exclude: Optional[list[str]] = None,
) -> ScanResult:
    """Scan a source tree and return active + ignored findings."""
    corpus = load_corpus(Path(root_path), exclude)
    result = evaluate_corpus(corpus, rules)
    logger.info(
        "Scanned %d files: %d findings, %d ignored",
        len(result.scanned_files), len(result.findings), len(result.ignored_findings),
    )
    return result


def scan_repository(
    root_path: str | Path,
    rules: Optional[Sequence[str]] = None,
) -> list[Finding]:
    return scan_repository_detailed(root_path, rules).findings
