"""
Weighted kernel density estimation on top of a `StreamHist`.

Every bin contributes one kernel centred at its mean and weighted by its
count. The bandwidth rules of thumb below pick a kernel width from the
histogram alone, without access to the raw samples.
"""

import math
from typing import Callable, Dict, Optional

import numpy as np

from .histogram import StreamHist


def triangular(u):
    """Triangular kernel ``1 - |u|`` for ``|u| <= 1``."""
    return 1.0 - np.minimum(np.abs(u), 1.0)


def gaussian(u):
    """Gaussian kernel ``exp(-u^2 / 2) / sqrt(2 pi)``."""
    return np.exp(-0.5 * np.square(u)) / math.sqrt(2.0 * math.pi)


def epanechnikov(u):
    """Epanechnikov kernel ``3/4 (1 - u^2)`` for ``|u| <= 1``."""
    return 0.75 * (1.0 - np.square(np.minimum(np.abs(u), 1.0)))


def uniform(u):
    """Uniform kernel ``1/2`` for ``|u| <= 1``."""
    return np.where(np.abs(u) <= 1.0, 0.5, 0.0)


KERNELS: Dict[str, Callable] = {
    "triangular": triangular,
    "gaussian": gaussian,
    "epanechnikov": epanechnikov,
    "uniform": uniform,
}


class KernelDensity:
    """
    Kernel density estimator for a histogram.

    The histogram is copied, later changes to the original do not affect the
    estimator. ``bandwidth`` is picked with `auto` unless given and may be
    reassigned at any time.

    Example:
        kde = KernelDensity(hist)
        kde.bandwidth = bin_width(hist)
        kde.density(3.5)
    """

    def __init__(self, hist: StreamHist, bandwidth: Optional[float] = None, kernel: str = "triangular"):
        if kernel not in KERNELS:
            raise ValueError(f"kernel must be one of {sorted(KERNELS)}, got {kernel!r}")
        self._hist = hist.copy()
        self.bandwidth = auto(self._hist) if bandwidth is None else float(bandwidth)
        self.kernel = kernel
        self._kernel_fn = KERNELS[kernel]

    @property
    def hist(self) -> StreamHist:
        return self._hist

    def density(self, value: float) -> float:
        if math.isnan(value) or self._hist.is_empty():
            return math.nan
        means = self._hist._means()
        counts = self._hist._counts()
        with np.errstate(divide="ignore", invalid="ignore"):
            u = (value - means) / self.bandwidth
            d = np.sum(self._kernel_fn(u) * counts)
            return float(d / (self._hist.count() * self.bandwidth))


# ------------------------------------------------------------
# Bandwidth rules of thumb
# ------------------------------------------------------------
def auto(hist: StreamHist) -> float:
    """Maximum of the `sturges` and `fd` rules (as in numpy.histogram_bin_edges)."""
    return float(np.fmax(sturges(hist), fd(hist)))


def fd(hist: StreamHist) -> float:
    """Freedman and Diaconis rule."""
    if hist.is_empty():
        return math.nan
    return 2.0 * hist.iqr() * hist.size ** -0.33


def sturges(hist: StreamHist) -> float:
    """Sturges rule: the range divided by the "optimal" number of bins."""
    if hist.is_empty():
        return math.nan
    k = 1.0 + math.log2(hist.count())
    return (hist.max - hist.min) / k


def bin_width(hist: StreamHist) -> float:
    """Average width of the histogram bins."""
    if hist.is_empty():
        return math.nan
    return (hist.max - hist.min) / hist.size


def scott(hist: StreamHist) -> float:
    """Scott's rule."""
    if hist.is_empty():
        return math.nan
    return 3.5 * hist.stdev() * hist.size ** -0.33


def silverman(hist: StreamHist) -> float:
    """Silverman's rule."""
    if hist.is_empty():
        return math.nan
    a = min(hist.stdev(), hist.iqr() / 1.34)
    return 0.9 * a * hist.size ** -0.2
