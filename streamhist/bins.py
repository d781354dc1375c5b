import math
from functools import total_ordering
from typing import Iterable


@total_ordering
class Bin:
    """
    A cluster of samples summarized by their mean and count.

    Bins are compared, ordered and hashed by ``mean`` only, the ``count`` is
    ignored. Adding two bins merges them into their weighted average.
    """

    __slots__ = ("mean", "count")

    def __init__(self, mean: float, count: int = 1):
        if not math.isfinite(mean):
            raise ValueError(f"{mean} is not a number")
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        self.mean = float(mean)
        self.count = int(count)

    @classmethod
    def from_value(cls, value: float) -> "Bin":
        return cls(value, 1)

    def __add__(self, other: "Bin") -> "Bin":
        # weighted mean of both bins
        total = self.count + other.count
        mean = (self.mean * self.count + other.mean * other.count) / total
        return Bin(mean, total)

    def __eq__(self, other):
        if not isinstance(other, Bin):
            return NotImplemented
        return self.mean == other.mean

    def __lt__(self, other):
        if not isinstance(other, Bin):
            return NotImplemented
        return self.mean < other.mean

    def __hash__(self):
        return hash(self.mean)

    def __iter__(self):
        yield self.mean
        yield self.count

    def __repr__(self):
        return f"Bin(mean={self.mean!r}, count={self.count!r})"


def sum_counts(bins: Iterable[Bin]) -> int:
    return sum(b.count for b in bins)
