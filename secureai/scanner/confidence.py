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

"""Confidence scoring — additive weights over four boolean signals.

This is a ranking heuristic, not a probability.
"""

from __future__ import annotations

DIRECT_USER_INPUT_WEIGHT = 0.3
STRING_CONCAT_OR_TEMPLATE_WEIGHT = 0.3
REQUEST_OBJECT_SOURCE_WEIGHT = 0.2
CONFIRMED_LLM_CALL_WEIGHT = 0.2


def calculate_confidence(
    *,
    direct_user_input: bool = False,
    string_concat_or_template: bool = False,
    request_object_source: bool = False,
    confirmed_llm_call: bool = False,
) -> float:
    """Return min(1, sum of applicable weights), rounded to 2 decimals."""
    score = 0.0
    if direct_user_input:
        score += DIRECT_USER_INPUT_WEIGHT
    if string_concat_or_template:
        score += STRING_CONCAT_OR_TEMPLATE_WEIGHT
    if request_object_source:
        score += REQUEST_OBJECT_SOURCE_WEIGHT
    if confirmed_llm_call:
        score += CONFIRMED_LLM_CALL_WEIGHT
    return min(1.0, round(score, 2))
