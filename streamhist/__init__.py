"""
Streaming histograms as described in "A Streaming Parallel Decision Tree
Algorithm" by Ben-Haim and Tom-Tov (2010).

Example:
    hist = StreamHist.with_capacity(10)
    hist.insert(1.13)
    hist.insert(2.67)
    hist.mean()

    kde = KernelDensity(hist)
    kde.density(3.14)
"""

from .bins import Bin
from .density import KernelDensity
from .histogram import StreamHist
from .parse import MissingValueError, NotANumberError, ParseFailedError, ParsingError, parse
from .serde import HistogramFormatError, from_dict, from_json, to_dict, to_json

__version__ = "0.1.0"

__all__ = [
    "Bin",
    "StreamHist",
    "KernelDensity",
    "parse",
    "ParsingError",
    "MissingValueError",
    "ParseFailedError",
    "NotANumberError",
    "HistogramFormatError",
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
]
