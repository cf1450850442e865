"""
Unit tests for the comparison functions.
"""

import pytest

from ean.run.comparison import comparison_functions, direct_comparison, inverse_comparison


class TestComparison:
    """Test direct and inverse comparison."""

    def test_direct(self):
        """Test the higher score wins."""
        assert direct_comparison(2.0, 1.0) is True
        assert direct_comparison(1.0, 2.0) is False

    def test_inverse(self):
        """Test the lower score wins."""
        assert inverse_comparison(0.1, 0.3) is True
        assert inverse_comparison(0.3, 0.1) is False

    @pytest.mark.parametrize("comparison", [direct_comparison, inverse_comparison])
    def test_ties_are_not_wins(self, comparison):
        """Test equal scores do not beat each other."""
        assert comparison(0.5, 0.5) is False

    def test_lookup_by_name(self):
        """Test functions can be looked up by their configuration name."""
        assert comparison_functions['direct'] is direct_comparison
        assert comparison_functions['inverse'] is inverse_comparison
        assert len(comparison_functions) == 2
