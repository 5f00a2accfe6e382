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

"""Finding deduplication across rules and compiled/source file twins."""

from __future__ import annotations

import logging
import re

from secureai.models.findings import Finding

logger = logging.getLogger(__name__)

_SOURCE_EXTENSION = re.compile(r"\.(ts|tsx|js|jsx)$")


def normalize_file_key(file_path: str) -> str:
    """Lowercase, forward slashes, source extension stripped.

    `src/App.ts` and `src\\app.js` both become `src/app`.
    """
    normalized = file_path.replace("\\", "/").lower()
    return _SOURCE_EXTENSION.sub("", normalized)


def finding_key(finding: Finding) -> tuple[str, str, int, str]:
    return (finding.rule_id, normalize_file_key(finding.file), finding.line, finding.summary)


def dedupe_findings(findings: list[Finding]) -> list[Finding]:
    """Keep the first finding per canonical key, preserving input order."""
    seen: set[tuple[str, str, int, str]] = set()
    unique: list[Finding] = []
    for finding in findings:
        key = finding_key(finding)
        if key in seen:
            continue
        seen.add(key)
        unique.append(finding)

    dropped = len(findings) - len(unique)
    if dropped:
        logger.debug("Dropped %d duplicate findings", dropped)
    return unique
