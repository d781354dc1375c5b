"""Parsing whitespace-separated text input into finite floats."""

import logging
import math
from typing import Iterable, Iterator

logger = logging.getLogger(__name__)


class ParsingError(ValueError):
    """A line could not be turned into a value for the histogram."""


class MissingValueError(ParsingError):
    def __init__(self):
        super().__init__("nothing to read")


class ParseFailedError(ParsingError):
    def __init__(self, field: str):
        super().__init__(f"parsing {field} failed")
        self.field = field


class NotANumberError(ParsingError):
    """The field parsed fine but is NaN or infinite."""

    def __init__(self, value: float):
        super().__init__(f"{value} is not a number")
        self.value = value


def parse(line: str, index: int) -> float:
    """
    Parse the field at zero-based ``index`` of ``line`` as a float.

    Raises:
        MissingValueError: the line has fewer than ``index + 1`` fields
        ParseFailedError: the field is not a number
        NotANumberError: the field is NaN or infinite
    """
    fields = line.split()
    if index >= len(fields):
        raise MissingValueError()
    field = fields[index]
    # float() also takes digit separators such as 1_000
    if "_" in field:
        raise ParseFailedError(field)
    try:
        value = float(field)
    except ValueError:
        raise ParseFailedError(field) from None
    if not math.isfinite(value):
        raise NotANumberError(value)
    return value


def iter_values(lines: Iterable[str], index: int) -> Iterator[float]:
    """Yield the parsed values, skipping (and logging) the lines that fail."""
    for lineno, line in enumerate(lines, start=1):
        try:
            yield parse(line, index)
        except ParsingError as e:
            logger.warning("line %d: %s", lineno, e)
