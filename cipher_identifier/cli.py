"""
Cipher Identifier Command Line Interface

Usage:
    cipher-identifier <command> [args]

Commands:
    identify    Rank the most likely ciphers for a ciphertext
    benchmark   Measure top-N accuracy over a labelled dataset
    calibrate   Build a profile table from a labelled dataset
    serve       Run the HTTP API

Examples:
    cipher-identifier identify -t "WKLVLVDWHVW" -n 10
    cipher-identifier identify -f message.txt -c Vigenere
    cipher-identifier benchmark data/random_cipher_data.json
    cipher-identifier calibrate data/random_cipher_data.json -o profiles.json
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console

from cipher_identifier.core.config import get_settings
from cipher_identifier.core.exceptions import CipherIdentifierError, DatasetError
from cipher_identifier.core.logging import configure_logging
from cipher_identifier.presenter import (
    candidates_title,
    format_basic_stats,
    format_candidates,
    format_report,
)
from cipher_identifier.services.benchmark.runner import load_dataset, run_benchmark
from cipher_identifier.services.pipeline.identifier import (
    CipherIdentifier,
    fingerprint_many,
    normalize,
)
from cipher_identifier.services.profiles.metadata import CipherCatalog
from cipher_identifier.services.profiles.store import ProfileStore

logger = logging.getLogger(__name__)

console = Console()


def _read_text(args) -> str:
    if args.file is not None:
        try:
            return Path(args.file).read_text(encoding="utf-8")
        except OSError as e:
            raise DatasetError(f"Cannot read {args.file}: {e.strerror or e}") from e
    if args.text is not None:
        return args.text
    raise CipherIdentifierError("Text input expected. Run with --help for usage information.")


def cmd_identify(args) -> int:
    """Print basic stats and the ranking for one ciphertext."""
    settings = get_settings()
    identifier = CipherIdentifier.from_settings(settings)
    catalog = CipherCatalog.load_or_empty(settings.cipher_types_path)

    top_n = settings.default_top_n if args.number is None else args.number
    result = identifier.identify(
        _read_text(args),
        top_n=top_n,
        highlight=args.cipher,
    )

    console.print()
    console.print("Basic stats", style="bold")
    console.print(format_basic_stats(result.basic_stats))
    console.print()
    console.print(candidates_title(top_n), style="bold")
    console.print(format_candidates(result.candidates, catalog))
    return 0


def cmd_benchmark(args) -> int:
    """Print top-N accuracy over a dataset."""
    identifier = CipherIdentifier.from_settings(get_settings())
    dataset = load_dataset(args.data)

    report = run_benchmark(
        identifier,
        dataset.records,
        top_n=args.number,
        failures=dataset.failures,
        line_numbers=dataset.lines,
    )

    console.print()
    console.print(format_report(report))
    return 0


def cmd_calibrate(args) -> int:
    """Write a profile table averaged from a labelled dataset."""
    settings = get_settings()
    dataset = load_dataset(args.data)

    logger.info("Calibrating profiles from %d records", len(dataset.records))
    texts = [normalize(record.ciphertext) for record in dataset.records]
    vectors = fingerprint_many(texts, settings.max_parallel_workers)

    store = ProfileStore.from_samples(
        (record.ciphertype, vector)
        for record, vector in zip(dataset.records, vectors)
    )
    store.to_json(args.output)

    console.print(
        f"Wrote {len(store)} profiles from {len(dataset.records)} records to {args.output}",
        markup=False,
        soft_wrap=True,
    )
    return 0


def cmd_serve(args) -> int:
    """Run the HTTP API."""
    from cipher_identifier.main import run

    run(host=args.host, port=args.port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Verbosity level (-v info, -vv debug)",
    )

    parser = argparse.ArgumentParser(
        prog="cipher-identifier",
        description="Analyzes ciphertext and identifies the most likely cipher types",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    cipher-identifier identify -t "WKLVLVDWHVW" -n 10
    cipher-identifier identify -f message.txt -c Vigenere
    cipher-identifier benchmark data/random_cipher_data.json
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    identify_parser = subparsers.add_parser(
        "identify",
        parents=[common],
        help="Rank the most likely ciphers for a ciphertext",
    )
    source = identify_parser.add_mutually_exclusive_group()
    source.add_argument("-t", "--text", help="The ciphertext to analyze")
    source.add_argument("-f", "--file", help="Input file containing ciphertext")
    identify_parser.add_argument(
        "-n", "--number",
        type=int,
        help="The top n most likely ciphers to display (default: DEFAULT_TOP_N, 5)",
    )
    identify_parser.add_argument(
        "-c", "--cipher",
        help="Highlight a specific cipher in the list",
    )

    benchmark_parser = subparsers.add_parser(
        "benchmark",
        parents=[common],
        help="Measure top-N accuracy over a labelled dataset",
    )
    benchmark_parser.add_argument("data", help="JSON lines file of {ciphertype, ciphertext}")
    benchmark_parser.add_argument(
        "-n", "--number",
        type=int,
        help="Count a record correct within the top n (default: DEFAULT_TOP_N, 5)",
    )

    calibrate_parser = subparsers.add_parser(
        "calibrate",
        parents=[common],
        help="Build a profile table from a labelled dataset",
    )
    calibrate_parser.add_argument("data", help="JSON lines file of {ciphertype, ciphertext}")
    calibrate_parser.add_argument(
        "-o", "--output",
        required=True,
        help="Path of the profile table to write",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        parents=[common],
        help="Run the HTTP API",
    )
    serve_parser.add_argument("--host", default="0.0.0.0")
    serve_parser.add_argument("--port", type=int, default=8000)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Cipher Identifier CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    configure_logging(level)

    handlers = {
        "identify": cmd_identify,
        "benchmark": cmd_benchmark,
        "calibrate": cmd_calibrate,
        "serve": cmd_serve,
    }

    try:
        return handlers[args.command](args)
    except (CipherIdentifierError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
