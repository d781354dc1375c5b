"""Tests for the Bin type."""

import math

import pytest

from streamhist.bins import Bin, sum_counts


class TestConstruction:
    """Bins only accept finite means."""

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_new_invalid(self, value):
        with pytest.raises(ValueError):
            Bin(value, 1)

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_from_value_invalid(self, value):
        with pytest.raises(ValueError):
            Bin.from_value(value)

    def test_negative_count(self):
        with pytest.raises(ValueError):
            Bin(1.0, -1)

    def test_from_value(self):
        """from_value gives a bin of count one."""
        b = Bin.from_value(3.14)
        assert b.mean == 3.14
        assert b.count == 1

    def test_unpack(self):
        mean, count = Bin(42.0, 2)
        assert (mean, count) == (42.0, 2)


class TestComparison:
    """Equality and ordering only look at the means."""

    def test_equal_ignores_count(self):
        assert Bin(0.0, 0) == Bin(0.0, 0)
        assert Bin(0.0, 0) == Bin(0.0, 10)
        assert Bin(10.0, 0) == Bin(10.0, 10)
        assert Bin(10.0, 0) != Bin(0.0, 10)

    def test_ordering(self):
        assert Bin(0.0, 0) < Bin(1.0, 0)
        assert Bin(-1.0, 0) > Bin(-2.0, 0)
        assert Bin(0.0, 5) <= Bin(1.0, 0)
        assert Bin(1.0, 5) >= Bin(1.0, 0)

    def test_hash_consistent_with_equality(self):
        assert len({Bin(1.0, 1), Bin(1.0, 7), Bin(2.0, 1)}) == 2

    def test_sorting_is_stable(self):
        bins = sorted([Bin(2.0, 1), Bin(1.0, 1), Bin(1.0, 2)])
        assert [tuple(b) for b in bins] == [(1.0, 1), (1.0, 2), (2.0, 1)]


class TestCombine:
    """Adding bins takes the count-weighted mean."""

    def test_weighted_mean(self):
        # (1 * 2 + 2 * 3) / (2 + 3) = 8 / 5 = 1.6
        b = Bin(1.0, 2) + Bin(2.0, 3)
        assert b.mean == pytest.approx(1.6)
        assert b.count == 5

    def test_symmetric(self):
        assert tuple(Bin(30.0, 1) + Bin(35.0, 1)) == (32.5, 2)
        assert tuple(Bin(35.0, 1) + Bin(30.0, 1)) == (32.5, 2)

    def test_sum_counts(self):
        assert sum_counts([]) == 0
        assert sum_counts([Bin(1.0, 2), Bin(2.0, 3)]) == 5
