"""
Import and export of histograms.

JSON uses the interchange shape ``{"means": [...], "counts": [...], "min": x,
"max": y}`` with ``min``/``max`` null for an empty histogram. MessagePack
stores the whole histogram as ``[[[mean, count], ...], min, max, size]``.
"""

import json
import logging
import math
from pathlib import Path
from typing import IO, Any, Dict, Optional, Union

import msgpack
from msgpack.exceptions import UnpackException

from .bins import Bin
from .histogram import StreamHist

logger = logging.getLogger(__name__)


class HistogramFormatError(ValueError):
    """Serialized histogram is malformed."""


def _optional(value: float) -> Optional[float]:
    return None if math.isnan(value) else value


def to_dict(hist: StreamHist) -> Dict[str, Any]:
    return {
        "means": [b.mean for b in hist],
        "counts": [b.count for b in hist],
        "min": _optional(hist.min),
        "max": _optional(hist.max),
    }


def _to_bin(mean: Any, count: Any) -> Bin:
    # zero-count bins are only used as synthetic query neighbours
    if count < 1:
        raise ValueError(f"bin counts must be positive, got {count}")
    return Bin(mean, count)


def from_dict(data: Dict[str, Any]) -> StreamHist:
    """
    Build a histogram from the interchange shape.

    ``min`` and ``max`` fall back to the smallest and largest bin means when
    missing or null, and ``size`` is the number of bins.
    """
    if not isinstance(data, dict):
        raise HistogramFormatError(f"expected an object, got {type(data).__name__}")
    try:
        means, counts = data["means"], data["counts"]
    except KeyError as e:
        raise HistogramFormatError(f"missing field {e}") from None
    if not isinstance(means, list) or not isinstance(counts, list):
        raise HistogramFormatError("means and counts must be arrays")
    if len(means) != len(counts):
        raise HistogramFormatError(
            f"means and counts differ in length: {len(means)} vs {len(counts)}"
        )
    try:
        hist = StreamHist.from_bins(_to_bin(m, c) for m, c in zip(means, counts))
        if data.get("min") is not None:
            hist.min = float(data["min"])
        if data.get("max") is not None:
            hist.max = float(data["max"])
    except (TypeError, ValueError) as e:
        raise HistogramFormatError(f"invalid histogram: {e}") from e
    return hist


def to_json(hist: StreamHist) -> str:
    return json.dumps(to_dict(hist), separators=(",", ":"))


def from_json(text: Union[str, bytes]) -> StreamHist:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise HistogramFormatError(f"invalid JSON: {e}") from e
    return from_dict(data)


def read_json(fp: IO) -> StreamHist:
    return from_json(fp.read())


def write_json(hist: StreamHist, fp: IO[str]):
    fp.write(to_json(hist))


def read_msgpack(fp: IO[bytes]) -> StreamHist:
    try:
        payload = msgpack.unpackb(fp.read(), raw=False)
    except (ValueError, UnpackException) as e:
        raise HistogramFormatError(f"invalid MessagePack: {e}") from e
    try:
        bins, lo, hi, size = payload
        hist = StreamHist(int(size))
        hist.bins = sorted(_to_bin(m, c) for m, c in bins)
        hist.min = float(lo)
        hist.max = float(hi)
    except (TypeError, ValueError) as e:
        raise HistogramFormatError(f"unexpected MessagePack payload: {e}") from e
    return hist


def write_msgpack(hist: StreamHist, fp: IO[bytes]):
    bins = [[b.mean, b.count] for b in hist]
    msgpack.pack([bins, hist.min, hist.max, hist.size], fp)


def _is_json(path: Path) -> bool:
    return path.suffix.lower() == ".json"


def load(path: Union[str, Path]) -> StreamHist:
    """Read a histogram, as JSON when the extension is ``.json``, MessagePack otherwise."""
    path = Path(path)
    logger.debug("loading histogram from %s", path)
    if _is_json(path):
        with open(path, encoding="utf-8") as f:
            return read_json(f)
    with open(path, "rb") as f:
        return read_msgpack(f)


def dump(hist: StreamHist, path: Union[str, Path]):
    """Write a histogram, as JSON when the extension is ``.json``, MessagePack otherwise."""
    path = Path(path)
    logger.debug("saving histogram with %d bins to %s", len(hist), path)
    if _is_json(path):
        with open(path, "w", encoding="utf-8") as f:
            write_json(hist, f)
    else:
        with open(path, "wb") as f:
            write_msgpack(hist, f)
