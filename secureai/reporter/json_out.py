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

"""JSON export of scan reports.

The report is written with sorted keys and two-space indentation so that
two scans of the same tree produce byte-identical files.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from secureai.models.report import ScanReport

logger = logging.getLogger(__name__)


def to_canonical_json(data: BaseModel | dict[str, Any]) -> str:
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json")
    return json.dumps(data, sort_keys=True, indent=2, ensure_ascii=False) + "\n"


def write_report(report: ScanReport, output_path: Path) -> None:
    """Write ``report`` to ``output_path``, creating parent directories."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(to_canonical_json(report), encoding="utf-8", newline="\n")
    logger.info(
        "Wrote JSON report (%d findings, %d ignored) to %s",
        report.summary.total, len(report.ignored_findings), output_path,
    )
