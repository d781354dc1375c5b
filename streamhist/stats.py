"""
Statistics over a streaming histogram.

The interpolated queries model the mass of every bin as spread in a trapezoid
between the bin and its neighbours, see Ben-Haim & Tom-Tov (2010) Algorithms 3
("Sum") and 4 ("Uniform"). The ``fast_*`` variants skip the interpolation and
treat the histogram as a step function.
"""

import math
from typing import Tuple

import numpy as np

from .bins import Bin, sum_counts


def _check_probability(prob: float):
    if not 0.0 <= prob <= 1.0:
        raise ValueError(f"{prob} is not a valid probability")


class StatsMixin:
    """Queries shared by `StreamHist`. Expects ``bins``, ``min`` and ``max``."""

    def mean(self) -> float:
        if self.is_empty():
            return math.nan
        return sum(b.mean * b.count for b in self.bins) / self.count()

    def variance(self) -> float:
        # population variance, no Bessel correction
        if self.is_empty():
            return math.nan
        m = self.mean()
        return sum(b.count * (b.mean - m) ** 2 for b in self.bins) / self.count()

    def stdev(self) -> float:
        return math.sqrt(self.variance())

    # Algorithm 3: Sum
    def count_by(self, value: float) -> float:
        """Approximate number of values in (-inf, value]."""
        if math.isnan(value):
            return math.nan
        if self.is_empty() or value <= self.min:
            return 0.0
        if value > self.max:
            return self.count()

        idx = self._partition_point(value)
        s = float(sum_counts(self.bins[:max(idx - 1, 0)]))

        left, right = self._neighbors(idx)
        pi, mi = left.mean, float(left.count)
        pj, mj = right.mean, float(right.count)

        if pj - pi <= 0.0:
            extra = 0.0
        else:
            mb = mi + (mj - mi) / (pj - pi) * (value - pi)
            extra = (mi + mb) / 2.0 * (value - pi) / (pj - pi)
        return s + mi / 2.0 + extra

    def cdf(self, value: float) -> float:
        if self.is_empty():
            return math.nan
        return self.count_by(value) / self.count()

    # Algorithm 4: Uniform
    def quantile(self, prob: float) -> float:
        _check_probability(prob)
        if self.is_empty():
            return math.nan
        if prob == 0.0:
            return self.min
        if prob == 1.0:
            return self.max

        target = prob * self.count()
        idx, s = self._find_cumulative_count(target)

        left, right = self._neighbors(idx)
        pi, mi = left.mean, float(left.count)
        pj, mj = right.mean, float(right.count)

        d = target - s
        a = mj - mi
        if a == 0.0:
            return pi + (pj - pi) * (d / mi)
        b = 2.0 * mi
        c = -2.0 * d
        disc = b ** 2 - 4.0 * a * c
        if disc < 0:
            disc = 0.0
        z = (-b + math.sqrt(disc)) / (2.0 * a)
        return pi + (pj - pi) * z

    def median(self) -> float:
        return self.quantile(0.5)

    def fast_count_by(self, value: float) -> float:
        """Sum of counts of the bins with mean <= value, no interpolation."""
        if math.isnan(value):
            return math.nan
        if self.is_empty() or value <= self.min:
            return 0.0
        if value > self.max:
            return self.count()
        return float(sum_counts(b for b in self.bins if b.mean <= value))

    def fast_cdf(self, value: float) -> float:
        if self.is_empty():
            return math.nan
        return self.fast_count_by(value) / self.count()

    def fast_quantile(self, prob: float) -> float:
        """Mean of the last bin whose cumulative count does not exceed ``prob * count()``."""
        _check_probability(prob)
        if self.is_empty():
            return self.min
        cum = np.cumsum(self._counts())
        k = int(np.searchsorted(cum, prob * cum[-1], side="right"))
        if k == 0:
            return self.min
        return self.bins[k - 1].mean

    def iqr(self) -> float:
        return self.fast_quantile(0.75) - self.fast_quantile(0.25)

    def _find_cumulative_count(self, target: float) -> Tuple[int, float]:
        # half-bin cumulative sums, the midpoints between consecutive bins
        m = self._counts()
        cum_right = np.cumsum(m) - m / 2
        idx = int(np.searchsorted(cum_right, target, side="right"))
        s = float(cum_right[idx - 1]) if idx > 0 else 0.0
        return idx, s

    def _neighbors(self, idx: int) -> Tuple[Bin, Bin]:
        """Bins at ``idx - 1`` and ``idx``, with zero-weight bins pinned at min/max past the ends."""
        if idx == 0:
            return Bin(self.min, 0), self.bins[0]
        if idx >= len(self.bins):
            return self.bins[-1], Bin(self.max, 0)
        return self.bins[idx - 1], self.bins[idx]
