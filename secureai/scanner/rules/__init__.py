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

"""Rule registry."""

from __future__ import annotations

from secureai.scanner.rules.base import Rule
from secureai.scanner.rules.llm_before_auth import LlmBeforeAuthRule
from secureai.scanner.rules.llm_usage import LlmUsageRule
from secureai.scanner.rules.prompt_injection import PromptInjectionRule
from secureai.scanner.rules.sensitive_data import SensitiveDataToLlmRule
from secureai.scanner.rules.sensitive_logging import SensitivePromptLoggingRule

RULES: list[Rule] = [
    PromptInjectionRule(),
    LlmUsageRule(),
    SensitivePromptLoggingRule(),
    LlmBeforeAuthRule(),
    SensitiveDataToLlmRule(),
]

AVAILABLE_RULE_IDS: list[str] = [rule.id for rule in RULES]

__all__ = ["AVAILABLE_RULE_IDS", "RULES", "Rule"]
