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

"""Project configuration loaded from secureai.yaml.

Example:

    severity: high
    rules: [AI001, AI003]
    exclude:
      - generated
    baseline: .secureai/baseline.json

CLI flags override every value set here.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from secureai.models.findings import Severity
from secureai.scanner.filters import validate_rule_ids

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "secureai.yaml"


class ConfigError(ValueError):
    """Raised when secureai.yaml cannot be parsed or validated."""


class ScanConfig(BaseModel):
    severity: Optional[Severity] = None
    rules: list[str] = Field(default_factory=list)
    only_ai: bool = False
    exclude: list[str] = Field(default_factory=list)
    baseline: Optional[str] = None

    @field_validator("severity", mode="before")
    @classmethod
    def _parse_severity(cls, value):
        if isinstance(value, str):
            return Severity.parse(value)
        return value

    @field_validator("rules", mode="before")
    @classmethod
    def _normalize_rules(cls, value):
        if isinstance(value, str):
            value = value.split(",")
        rules = [str(r).strip().upper() for r in value or [] if str(r).strip()]
        validate_rule_ids(rules)
        return rules


def load_config(root: Path, config_path: Optional[Path] = None) -> ScanConfig:
    """Load config from an explicit path or <root>/secureai.yaml.

    A missing default file yields defaults; a missing explicit file, bad
    YAML or a schema error raises ConfigError.
    """
    path = Path(config_path) if config_path else Path(root) / CONFIG_FILE_NAME
    if not path.exists():
        if config_path:
            raise ConfigError(f"Config file not found: {path}")
        return ScanConfig()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config root in {path} must be a mapping")

    try:
        config = ScanConfig(**data)
    except (ValidationError, ValueError) as e:
        raise ConfigError(f"Invalid config in {path}: {e}") from e

    logger.debug("Loaded config from %s", path)
    return config
