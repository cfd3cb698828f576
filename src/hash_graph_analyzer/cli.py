"""Command-line interface for the hash graph analyzer."""

import argparse
import logging
import sys

from hash_graph_analyzer.config import (
    DEFAULT_BITS,
    DEFAULT_MAX_DOMAIN_BITS,
    AnalyzerConfig,
    Strategy,
)
from hash_graph_analyzer.errors import AnalyzerError
from hash_graph_analyzer.graph.oracle import DEFAULT_DIGEST
from hash_graph_analyzer.solver.analyze import main_analyze


def configure_logging(level: int = logging.INFO) -> None:
    """Configure logging to write to stderr."""
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="hash-graph-analyzer",
        description="Measure tail and cycle lengths of a truncated hash's functional graph.",
    )

    parser.add_argument(
        "--bits",
        "-k",
        type=int,
        default=DEFAULT_BITS,
        help=f"Truncated hash width in bits, a multiple of 8 (default: {DEFAULT_BITS})",
    )

    parser.add_argument(
        "--strategy",
        choices=[s.value for s in Strategy],
        default=Strategy.DISJOINT_SET.value,
        help="Component accounting strategy (default: disjoint-set)",
    )

    parser.add_argument(
        "--digest",
        default=DEFAULT_DIGEST,
        help=f"hashlib algorithm to truncate (default: {DEFAULT_DIGEST})",
    )

    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of parallel workers (default: auto)",
    )

    parser.add_argument(
        "--no-table",
        action="store_true",
        help="Walk with the hash itself instead of a precomputed edge table",
    )

    parser.add_argument(
        "--max-bits",
        type=int,
        default=DEFAULT_MAX_DOMAIN_BITS,
        help=f"Refuse to scan domains wider than this (default: {DEFAULT_MAX_DOMAIN_BITS})",
    )

    parser.add_argument(
        "--dump-mapping",
        action="store_true",
        help="Print x -> H(x) for the whole domain",
    )

    parser.add_argument(
        "--dump-labels",
        action="store_true",
        help="Print every node's classification (full-labeling only)",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level (default: INFO)",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    # Configure logging based on --log-level
    log_level = getattr(logging, args.log_level)
    configure_logging(log_level)

    if args.dump_labels and args.strategy != Strategy.FULL_LABELING:
        parser.error("--dump-labels requires --strategy full-labeling")

    try:
        config = AnalyzerConfig(
            bits=args.bits,
            strategy=args.strategy,
            digest_name=args.digest,
            tabulate=not args.no_table,
            include_mapping=args.dump_mapping,
            max_domain_bits=args.max_bits,
            workers=args.workers,
        )
        main_analyze(
            config,
            dump_mapping=args.dump_mapping,
            dump_labels=args.dump_labels,
        )
    except AnalyzerError as exc:
        parser.error(str(exc))

    return 0


if __name__ == "__main__":
    sys.exit(main())
