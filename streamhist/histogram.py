"""
Histogram Data Structure from Ben-Haim and Tom-Tov (2010)

Reference: Yael Ben-Haim and Elad Tom-Tov. A streaming parallel decision tree algorithm. Journal of Machine Learning Research, 11(2), 2010.
"""

import copy
import logging
import math
from bisect import bisect_left
from typing import Iterable, Iterator, List

import numpy as np

from .bins import Bin, sum_counts
from .stats import StatsMixin

logger = logging.getLogger(__name__)


class StreamHist(StatsMixin):
    """
    Streaming histogram: at most ``size`` bins sorted by their means, plus the
    smallest and largest value ever inserted (NaN while empty).

    Example:
        hist = StreamHist.with_capacity(10)
        for x in values:
            hist.insert(x)
        hist.median(), hist.quantile(0.99)
    """

    def __init__(self, size: int = 0):
        if size < 0:
            raise ValueError(f"size must be non-negative, got {size}")
        self.size = size  # Max number of bins
        self.bins: List[Bin] = []
        self.min = math.nan
        self.max = math.nan

    @classmethod
    def with_capacity(cls, size: int) -> "StreamHist":
        return cls(size)

    @classmethod
    def from_values(cls, values: Iterable[float]) -> "StreamHist":
        """One bin per value, sized to fit all of them. Repeated values are not combined."""
        return cls.from_bins(Bin.from_value(x) for x in values)

    @classmethod
    def from_bins(cls, bins: Iterable[Bin]) -> "StreamHist":
        bins = sorted(bins)
        hist = cls(len(bins))
        if bins:
            hist.bins = bins
            hist.min = bins[0].mean
            hist.max = bins[-1].mean
        return hist

    # Algorithm 1: Update
    def insert(self, value: float):
        """
        Add one value. The first value into an empty histogram is trimmed like
        any other, so a histogram of size zero keeps no bins and only records
        ``min`` and ``max``.
        """
        if not math.isfinite(value):
            raise ValueError(f"{value} is not a number")

        if self.is_empty():
            self.min = value
            self.max = value
            self.bins.insert(0, Bin.from_value(value))
            self._trim()
            return

        if value < self.min:
            self.min = value
        if value > self.max:
            self.max = value

        # if value exactly matches a bin mean increase its count
        idx = self._partition_point(value)
        if idx < len(self.bins) and self.bins[idx].mean == value:
            b = self.bins[idx]
            self.bins[idx] = Bin(b.mean, b.count + 1)
            return
        # Otherwise add new bin and reduce len(bins) to size
        self.bins.insert(idx, Bin.from_value(value))
        self._trim()

    def update(self, values: Iterable[float]) -> "StreamHist":
        for x in values:
            self.insert(x)
        return self

    # Algorithm 2: Merge self with other
    def merge(self, other: "StreamHist"):
        """Absorb the bins of ``other``, keeping our own ``size``."""
        # stable sort, equal means are left for _trim to combine
        self.bins = sorted(self.bins + other.bins)
        self.min = float(np.fmin(self.min, other.min))
        self.max = float(np.fmax(self.max, other.max))
        self._trim()
        logger.debug("merged %d bins into histogram of size %d", len(other.bins), self.size)

    def resize(self, size: int):
        if size < 0:
            raise ValueError(f"size must be non-negative, got {size}")
        logger.debug("resizing histogram from %d to %d bins", self.size, size)
        self.size = size
        self._trim()

    def count(self) -> float:
        return float(sum_counts(self.bins))

    def is_empty(self) -> bool:
        return not self.bins

    def copy(self) -> "StreamHist":
        return copy.deepcopy(self)

    def _partition_point(self, value: float) -> int:
        """Number of bins with mean strictly below ``value``."""
        if math.isnan(value):
            raise ValueError(f"{value} is not a number")
        return bisect_left(self.bins, value, key=lambda b: b.mean)

    def _means(self) -> np.ndarray:
        return np.fromiter((b.mean for b in self.bins), dtype=float, count=len(self.bins))

    def _counts(self) -> np.ndarray:
        return np.fromiter((b.count for b in self.bins), dtype=float, count=len(self.bins))

    def _trim(self):
        if self.size == 0:
            self.bins = []
            return
        while len(self.bins) > self.size:
            # find i that minimizes p[i+1] - p[i], aka closest adjacent pair
            qi = int(np.argmin(np.diff(self._means())))
            self.bins[qi:qi + 2] = [self.bins[qi] + self.bins[qi + 1]]

    def __iter__(self) -> Iterator[Bin]:
        return iter(self.bins)

    def __len__(self) -> int:
        return len(self.bins)

    def __eq__(self, other):
        if not isinstance(other, StreamHist):
            return NotImplemented
        return (
            self.bins == other.bins
            and _nan_or_eq(self.min, other.min)
            and _nan_or_eq(self.max, other.max)
            and self.size == other.size
        )

    __hash__ = None

    def __repr__(self):
        bins = ", ".join(f"({b.mean}, {b.count})" for b in self.bins)
        return f"StreamHist(bins=[{bins}], min={self.min}, max={self.max}, size={self.size})"


def _nan_or_eq(a: float, b: float) -> bool:
    return (math.isnan(a) and math.isnan(b)) or a == b
