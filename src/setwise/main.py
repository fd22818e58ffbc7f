"""Main CLI entry point for setwise."""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .algebra import DIFFERENCE, INTERSECTION, SYMMETRIC_DIFFERENCE, UNION, compute_relation
from .config import OUTPUT_FORMATS, CompareConfig
from .errors import SetwiseError
from .logging_utils import configure_logging, verbosity_to_level
from .report import Reporter
from .settings import get_max_line_bytes
from .sources import STDIN_SENTINEL, SetBuilder

logger = logging.getLogger(__name__)

EXIT_SAME = 0
EXIT_DIFFERENT = 1
EXIT_ERROR = 2


def create_parser() -> argparse.ArgumentParser:
    """Create command line argument parser."""
    parser = argparse.ArgumentParser(
        prog="setwise",
        description=(
            "Compare two files or lists as sets of lines. Lines are normalized "
            "(case folded, cut at a delimiter, optionally stripped of domain "
            "suffixes) before comparing, which helps spot gaps between data "
            "from different sources."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  setwise hosts_a.txt hosts_b.txt
  setwise --ignore-fqdn --intersection inventory.csv dns.txt
  setwise --pipe cmdb.txt scan.txt | wc -l
  setwise --extract 'host=(\\S+)' --format json -o out.json a.log b.log
  cat list.txt | setwise --stats - other.txt
        """,
    )

    parser.add_argument("file_a", metavar="FILE_A", help="first input (- for stdin)")
    parser.add_argument("file_b", metavar="FILE_B", help="second input (- for stdin)")

    # Normalization
    parser.add_argument(
        "-c",
        "--case-sensitive",
        action="store_true",
        help="compare case sensitively (default: fold to lowercase)",
    )
    parser.add_argument(
        "-d",
        "--delimiter",
        default=",",
        help="keep only the text before this delimiter (default: ,)",
    )
    parser.add_argument(
        "-f",
        "--ignore-fqdn",
        action="store_true",
        help="keep only the text before the first dot",
    )
    parser.add_argument(
        "-e",
        "--extract",
        metavar="REGEX",
        help="keep only the first capture group (or whole match) of REGEX; "
        "lines that do not match are skipped",
    )
    parser.add_argument("--trim-prefix", metavar="STR", help="remove this prefix when present")
    parser.add_argument("--trim-suffix", metavar="STR", help="remove this suffix when present")

    # Operation
    operations = parser.add_mutually_exclusive_group()
    operations.add_argument(
        "-i",
        "--intersection",
        dest="operation",
        action="store_const",
        const=INTERSECTION,
        help="show the intersection of the two inputs",
    )
    operations.add_argument(
        "-u",
        "--union",
        dest="operation",
        action="store_const",
        const=UNION,
        help="show the union of the two inputs",
    )
    operations.add_argument(
        "-s",
        "--symmetric-difference",
        dest="operation",
        action="store_const",
        const=SYMMETRIC_DIFFERENCE,
        help="show lines present in exactly one input",
    )
    parser.set_defaults(operation=DIFFERENCE)

    # Output
    parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default="text",
        help="output encoding (default: text)",
    )
    parser.add_argument("-o", "--output", metavar="PATH", help="write output to PATH")
    parser.add_argument("--count", action="store_true", help="print only result sizes")
    parser.add_argument(
        "--stats", action="store_true", help="print size and overlap statistics"
    )
    parser.add_argument(
        "-p",
        "--pipe",
        action="store_true",
        help="do not print headers to allow the output to be piped",
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="verbose output (repeatable)"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command line arguments."""
    if args.file_a == STDIN_SENTINEL and args.file_b == STDIN_SENTINEL:
        raise ValueError("only one of FILE_A and FILE_B may be read from stdin")
    if args.delimiter == "":
        raise ValueError("--delimiter cannot be empty")


def create_config(args: argparse.Namespace) -> CompareConfig:
    """Create configuration from command line arguments."""
    return CompareConfig(
        case_sensitive=args.case_sensitive,
        delimiter=args.delimiter,
        ignore_fqdn=args.ignore_fqdn,
        extract_pattern=args.extract,
        trim_prefix=args.trim_prefix,
        trim_suffix=args.trim_suffix,
        output_format=args.format,
        output_path=args.output,
        count_only=args.count,
        stats=args.stats,
        pipe=args.pipe,
        max_line_bytes=get_max_line_bytes(),
    )


def run_comparison(config: CompareConfig, source_a: str, source_b: str, operation: str) -> bool:
    """Compare two sources and report; return True if differences were found."""
    builder = SetBuilder(config)
    set_a = builder.build(source_a)
    set_b = builder.build(source_b)

    result = compute_relation(set_a, set_b, operation, pipe=config.pipe)
    logger.debug("Operation complete", extra={"operation": result.operation})

    return Reporter(config).report(result)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(verbosity_to_level(args.verbose))

    try:
        validate_args(args)
    except ValueError as e:
        parser.error(str(e))

    try:
        config = create_config(args)
        logger.debug("Resolved configuration", extra=config.to_log_dict())

        differences_found = run_comparison(config, args.file_a, args.file_b, args.operation)

    except SetwiseError as e:
        logger.error("%s", e.message, extra={"code": e.code, "details": e.details})
        return EXIT_ERROR

    except Exception:
        logger.exception("Internal error")
        return EXIT_ERROR

    return EXIT_DIFFERENT if differences_found else EXIT_SAME


if __name__ == "__main__":
    sys.exit(main())
