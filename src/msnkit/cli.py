__all__ = ["main", "build_parser"]

import argparse
import logging
import os
import sys
from typing import Optional, Sequence

from .cmds.head import head
from .cmds.match import match_spectra
from .cmds.metadata_filter import metadata_filter
from .cmds.mzml_cat import mzml_cat
from .cmds.stats import stats
from .similarity.matcher import PeakMatcher
from .specio.errors import SpectrumFormatError
from .specio.formats import SpectrumFormat
from .specio.mgf import SpectrumWriter
from .specio.mzml import MzmlSpectrumReader
from .specio.readers import open_spectrum_reader
from .util.io.path import open_input
from .util.log import get_logger
from .util.progress import NoProgressFactory, TqdmProgressFactory


def _format_arg(s: str) -> SpectrumFormat:
    try:
        return SpectrumFormat.from_str(s)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def _output_format_arg(s: str) -> SpectrumFormat:
    f = _format_arg(s)
    if f is SpectrumFormat.MZML:
        raise argparse.ArgumentTypeError("mzML output is not supported")
    return f


def _input_format_arg(s: str) -> SpectrumFormat:
    f = _format_arg(s)
    if f is SpectrumFormat.JSON:
        raise argparse.ArgumentTypeError("JSON input is not supported")
    return f


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="msn-kit", description="CLI for dealing with MGF and mzML files."
    )
    parser.add_argument(
        "-o",
        dest="output_format",
        type=_output_format_arg,
        default=SpectrumFormat.MGF,
        help="output format of spectra: mgf or json (default: mgf)",
    )
    parser.add_argument("--log-file", help="also write log messages to this file")
    parser.add_argument(
        "--verbose", action="store_true", help="log debug messages"
    )
    parser.add_argument(
        "--progress", action="store_true", help="show a progress bar on stderr"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_input(p, with_format=True):
        p.add_argument("input", nargs="?", help="the input path or stdin")
        if with_format:
            p.add_argument(
                "--format",
                dest="input_format",
                type=_input_format_arg,
                help="input format: mgf or mzml (default: from extension, mgf for stdin)",
            )

    p = subparsers.add_parser(
        "head",
        help="output the top n records, similar to head(1)",
    )
    p.add_argument(
        "-n", dest="number", type=int, default=5, help="how many records to print"
    )
    add_input(p)

    p = subparsers.add_parser(
        "metadata-filter",
        help="select spectra based on the key value pairs in the metadata",
    )
    p.add_argument(
        "-k",
        dest="key",
        required=True,
        help="the key to check, spectra missing the key are omitted",
    )
    p.add_argument(
        "-v", dest="value", help="the value for key, only equal values are kept"
    )
    add_input(p)

    p = subparsers.add_parser("stats", help="compute stats for inputs")
    add_input(p)

    p = subparsers.add_parser("mzml-cat", help="cat an mzML file")
    add_input(p, with_format=False)

    p = subparsers.add_parser(
        "match", help="match peaks of paired spectra from two inputs"
    )
    p.add_argument("input_a", help="first input path")
    p.add_argument("input_b", help="second input path")
    p.add_argument(
        "--format",
        dest="input_format",
        type=_input_format_arg,
        help="input format: mgf or mzml (default: from extension)",
    )
    p.add_argument("--tolerance", type=float, help="m/z tolerance")
    p.add_argument(
        "--shift", type=float, help="offset added to m/z values of the second input"
    )
    p.add_argument("--config", help="matcher config file (.yaml or .json)")
    p.add_argument("--out", dest="dest_file", help="output csv file (default: stdout)")

    return parser


def run(args: argparse.Namespace, logger: logging.Logger):
    output = sys.stdout
    progress_factory = TqdmProgressFactory() if args.progress else NoProgressFactory()

    if args.command == "match":
        matcher = PeakMatcher(
            configs=args.config, tolerance=args.tolerance, shift=args.shift
        )
        logger.info(f"Use configs: {matcher.get_configs()}")
        with open_spectrum_reader(args.input_a, args.input_format) as spectra_a, \
                open_spectrum_reader(args.input_b, args.input_format) as spectra_b:
            matches = match_spectra(progress_factory(spectra_a), spectra_b, matcher)
        matches.to_csv(args.dest_file or output, index=False)
        logger.info(f"Total: {len(matches)} matched peaks")
        return

    writer = SpectrumWriter(output, args.output_format)

    if args.command == "mzml-cat":
        with MzmlSpectrumReader(open_input(args.input, binary=True)) as reader:
            count = mzml_cat(progress_factory(reader), writer)
        writer.flush()
        logger.debug(f"Wrote {count} spectra")
        return

    with open_spectrum_reader(args.input, args.input_format) as reader:
        spectra = progress_factory(reader)
        if args.command == "head":
            count = head(spectra, writer, args.number)
        elif args.command == "metadata-filter":
            count = metadata_filter(spectra, writer, args.key, args.value)
        elif args.command == "stats":
            stats(spectra, output)
            count = None
        else:
            raise ValueError(f"unknown command {args.command}")

    writer.flush()
    if count is not None:
        logger.debug(f"Wrote {count} spectra")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logger = get_logger(
        "msnkit",
        file=args.log_file,
        level=logging.DEBUG if args.verbose else logging.INFO,
    )

    try:
        run(args, logger)
    except BrokenPipeError:
        # downstream closed early, e.g. piped into head(1)
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        return 0
    except (SpectrumFormatError, OSError) as e:
        logger.error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
