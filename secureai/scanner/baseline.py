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

"""Baseline differ — surface only new or regressed findings.

The first run against a missing baseline path writes the snapshot. Later
runs read it and never rewrite it. A baseline with the wrong schema tag
or a malformed findings list is a hard error; there is no migration.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from secureai.models.baseline import (
    BASELINE_SCHEMA,
    BaselineEntry,
    BaselineFile,
    BaselineResult,
)
from secureai.models.findings import SEVERITY_RANK, Finding
from secureai.scanner.dedupe import normalize_file_key

logger = logging.getLogger(__name__)

CONFIDENCE_EPSILON = 1e-6


class BaselineError(ValueError):
    """Raised when a baseline file is malformed or uses another schema."""


def baseline_key(rule_id: str, file_path: str, line: int) -> tuple[str, str, int]:
    return (rule_id, normalize_file_key(file_path), line)


def is_new_or_regressed(finding: Finding, previous: BaselineEntry | None) -> bool:
    if previous is None:
        return True
    if SEVERITY_RANK[finding.severity] > SEVERITY_RANK[previous.severity]:
        return True
    return finding.confidence > previous.confidence + CONFIDENCE_EPSILON


def write_baseline(path: Path, findings: list[Finding]) -> BaselineFile:
    entries = sorted(
        (BaselineEntry.from_finding(f) for f in findings),
        key=lambda e: baseline_key(e.rule_id, e.file, e.line),
    )
    baseline = BaselineFile(findings=entries)

    path.parent.mkdir(parents=True, exist_ok=True)
    content = json.dumps(baseline.model_dump(mode="json", by_alias=True), indent=2)
    path.write_text(content + "\n", encoding="utf-8", newline="\n")
    logger.info("Created baseline with %d findings at %s", len(entries), path)
    return baseline


def read_baseline(path: Path) -> BaselineFile:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise BaselineError(f'Cannot read baseline file "{path}": {e}') from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise BaselineError(f'Invalid baseline file "{path}": {e}') from e

    if (
        not isinstance(data, dict)
        or data.get("schema") != BASELINE_SCHEMA
        or not isinstance(data.get("findings"), list)
    ):
        raise BaselineError(
            f'Invalid baseline file "{path}". Expected schema "{BASELINE_SCHEMA}".'
        )

    try:
        return BaselineFile.model_validate(
            {"schema": data["schema"], "createdAt": data.get("createdAt", ""), "findings": data["findings"]}
        )
    except ValidationError as e:
        raise BaselineError(f'Malformed findings in baseline file "{path}": {e}') from e


def apply_baseline(baseline_path: str | Path, findings: list[Finding]) -> BaselineResult:
    """Create the baseline on first run, otherwise diff against it."""
    path = Path(baseline_path).resolve()

    if not path.exists():
        write_baseline(path, findings)
        return BaselineResult(
            created=True,
            baseline_path=str(path),
            findings=list(findings),
            baseline_count=len(findings),
            current_count=len(findings),
        )

    baseline = read_baseline(path)
    by_key = {baseline_key(e.rule_id, e.file, e.line): e for e in baseline.findings}

    diff = [
        f for f in findings
        if is_new_or_regressed(f, by_key.get(baseline_key(f.rule_id, f.file, f.line)))
    ]
    logger.info(
        "Baseline diff: %d current, %d new or regressed", len(findings), len(diff)
    )

    return BaselineResult(
        created=False,
        baseline_path=str(path),
        findings=diff,
        baseline_count=len(baseline.findings),
        current_count=len(findings),
    )
