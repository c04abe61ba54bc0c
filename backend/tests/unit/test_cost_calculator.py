"""Unit tests for oracle cost calculation"""

import pytest

from infrastructure.ai.cost_calculator import calculate_cost_micros, format_cost_usd


class TestCalculateCostMicros:
    """Test micro-USD pricing of completions"""

    def test_gpt_4o_mini(self):
        assert calculate_cost_micros("gpt-4o-mini", 1000, 500) == 450

    def test_model_name_is_case_insensitive(self):
        assert calculate_cost_micros("GPT-4o-mini", 1000, 500) == 450

    def test_typical_match_prompt(self):
        """Test a 10-candidate prompt costs well under a cent"""
        assert calculate_cost_micros("gpt-4o-mini", 420, 35) == 84

    def test_unknown_model(self):
        with pytest.raises(ValueError, match="No pricing"):
            calculate_cost_micros("gpt-0", 10, 10)


class TestFormatCostUsd:

    def test_format(self):
        assert format_cost_usd(450) == "$0.000450"
        assert format_cost_usd(0) == "$0.000000"
