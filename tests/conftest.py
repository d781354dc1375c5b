"""Shared fixtures for the histogram tests."""

import pytest

from streamhist import Bin, StreamHist


def pairs(hist):
    """(mean, count) tuples of the bins, since bins compare by mean only."""
    return [tuple(b) for b in hist]


@pytest.fixture
def five():
    """One bin for each of 1..5."""
    return StreamHist.from_values([1.0, 2.0, 3.0, 4.0, 5.0])


@pytest.fixture
def uneven():
    """Three bins of unequal weight with min/max beyond the bin means."""
    hist = StreamHist.from_bins([Bin(7.0, 3), Bin(20.0, 1), Bin(34.0, 3)])
    hist.min = 1.0
    hist.max = 37.0
    return hist
