"""
Streaming histogram command line.

Usage:
    ls -la | awk 'NR>1 {print $5}' | streamhist -b 5
    streamhist -s -b 15 -w 20 -f 2 data.tsv
    streamhist -f 1 -b 15 -o hist.msgpack data.tsv
    streamhist -ir -b 10 -l hist.msgpack
"""

import logging
import sys
from typing import Optional

import click
import numpy as np

from .bins import Bin
from .config import ConfigError, load_config
from .histogram import StreamHist
from .parse import iter_values
from .serde import HistogramFormatError, dump, load, to_json

logger = logging.getLogger(__name__)

IO_ERROR_CODE = 74


def _setup_logging(verbose: int):
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(message)s", stream=sys.stderr)


def _pretty(value: float) -> str:
    return np.format_float_positional(value, precision=3, trim="-")


def _bin_to_string(b: Bin, max_count: int, width: int) -> str:
    # bars are scaled relative to the largest bin
    bar_width = int(b.count / max_count * width + 0.5)
    return f"{_pretty(b.mean):>8} {b.count}\t{'■' * bar_width}"


def _print_histogram(hist: StreamHist, width: int):
    max_count = max((b.count for b in hist), default=0)
    click.echo("mean\tcount")
    for b in hist:
        click.echo(_bin_to_string(b, max_count, width))


def _print_statistics(hist: StreamHist):
    for name, value in [
        ("Mean", hist.mean()),
        ("StDev", hist.stdev()),
        ("Min", hist.min),
        ("25% quantile", hist.quantile(0.25)),
        ("Median", hist.median()),
        ("75% quantile", hist.quantile(0.75)),
        ("Max", hist.max),
    ]:
        click.echo(f"{name:14} {_pretty(value):<8}")
    click.echo(f"{'Sample size':14} {hist.count():<8.0f}")


def _read_data(hist: StreamHist, path: Optional[str], field: int):
    if path is None:
        hist.update(iter_values(click.get_text_stream("stdin"), field - 1))
        return
    with open(path) as f:
        hist.update(iter_values(f, field - 1))


def _fail(message: str, error: Exception):
    logger.error("%s: %s", message, error)
    sys.exit(IO_ERROR_CODE)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("-b", "--number-of-bins", type=click.IntRange(min=0), metavar="NUMBER",
              help="The number of bins  [default: 10]")
@click.option("-r", "--force-resize", is_flag=True,
              help="Resize the histogram to the number of bins given by -b")
@click.option("-l", "--load-from", type=click.Path(dir_okay=False), metavar="PATH",
              help="Initialize the histogram from the file (MessagePack unless the extension is .json)")
@click.option("-o", "--output-file", type=click.Path(dir_okay=False), metavar="PATH",
              help="Save the histogram to the file (MessagePack unless the extension is .json)")
@click.option("-f", "--field", type=click.IntRange(min=1), metavar="NUMBER",
              help="Use the nth whitespace-separated field of the input  [default: 1]")
@click.option("-j", "--json", "print_json", is_flag=True, help="Print JSON of the histogram")
@click.option("-s", "--statistics", is_flag=True, help="Print the statistics")
@click.option("-n", "--no-summary", is_flag=True, help="Don't print the summary of the histogram")
@click.option("-w", "--width", type=click.IntRange(min=0), metavar="NUMBER",
              help="Maximal width of the histogram bars  [default: 10]")
@click.option("-i", "--ignore-input", is_flag=True, help="Don't update the histogram (ignore FILE and stdin)")
@click.option("-c", "--config", "config_path", type=click.Path(dir_okay=False), envvar="STREAMHIST_CONFIG",
              metavar="PATH", help="YAML file with the default options")
@click.option("-v", "--verbose", count=True, help="Log more (-vv for debug)")
@click.argument("file", required=False, type=click.Path(dir_okay=False))
def main(number_of_bins, force_resize, load_from, output_file, field, print_json,
         statistics, no_summary, width, ignore_input, config_path, verbose, file):
    """
    Streaming histogram of the numbers read from FILE, or stdin if not given.
    """
    _setup_logging(verbose)

    try:
        config = load_config(config_path)
    except (OSError, ConfigError) as e:
        raise click.BadParameter(str(e), param_hint="'--config'")

    bins = config.bins if number_of_bins is None else number_of_bins
    field = config.field if field is None else field
    width = config.width if width is None else width

    try:
        hist = load(load_from) if load_from else StreamHist.with_capacity(bins)
    except (OSError, HistogramFormatError) as e:
        _fail("failed to initialize the histogram", e)

    if force_resize:
        hist.resize(bins)

    if not ignore_input:
        try:
            _read_data(hist, file, field)
        except (OSError, UnicodeDecodeError) as e:
            _fail("failed to read the input", e)
        logger.info("read %.0f values into %d bins", hist.count(), len(hist))

    if print_json:
        click.echo(to_json(hist))
    if not no_summary:
        _print_histogram(hist, width)
    if statistics:
        _print_statistics(hist)

    if output_file:
        try:
            dump(hist, output_file)
        except OSError as e:
            _fail("failed to write the output", e)


if __name__ == "__main__":
    main()
