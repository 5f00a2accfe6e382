"""Tests for the confidence scorer."""

import itertools

import pytest

from secureai.scanner.confidence import calculate_confidence


class TestCalculateConfidence:
    """Additive weights, capped at 1 and rounded to two decimals."""

    def test_no_signals(self):
        assert calculate_confidence() == 0.0

    def test_all_signals(self):
        assert calculate_confidence(
            direct_user_input=True,
            string_concat_or_template=True,
            request_object_source=True,
            confirmed_llm_call=True,
        ) == 1.0

    @pytest.mark.parametrize(
        "kwargs, expected",
        [
            ({"direct_user_input": True}, 0.3),
            ({"string_concat_or_template": True}, 0.3),
            ({"request_object_source": True}, 0.2),
            ({"confirmed_llm_call": True}, 0.2),
            ({"request_object_source": True, "confirmed_llm_call": True}, 0.4),
            ({"direct_user_input": True, "request_object_source": True, "confirmed_llm_call": True}, 0.7),
        ],
    )
    def test_weights(self, kwargs, expected):
        assert calculate_confidence(**kwargs) == expected

    def test_always_in_unit_interval(self):
        for flags in itertools.product([False, True], repeat=4):
            score = calculate_confidence(
                direct_user_input=flags[0],
                string_concat_or_template=flags[1],
                request_object_source=flags[2],
                confirmed_llm_call=flags[3],
            )
            assert 0.0 <= score <= 1.0
            assert score == round(score, 2)
