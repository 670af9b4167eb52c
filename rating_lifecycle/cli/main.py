"""
Command-line interface for rating cycles.

Usage:
    python -m rating_lifecycle run <results.parquet> --ratings <participants.parquet> [options]
    python -m rating_lifecycle top <results.parquet> --ratings <participants.parquet> [options]
    python -m rating_lifecycle movers <results.parquet> --ratings <participants.parquet> [options]
"""

import argparse
import logging
import sys

import polars as pl

from ..utils.logging import get_logger, log_timing

logger = get_logger(__name__)


def _run_cycles(args, observers=()):
    """Load inputs, run one cycle per (cycle, day) and return CycleResults."""
    from ..base import ratings_from_dataframe
    from ..cycle import run_by_day
    from ..data import ResultDataset
    from ..results import CycleResults
    from ..systems import Elo

    dataset = ResultDataset.from_parquet(args.data)
    elo = Elo(k_factor=args.k_factor, scale=args.scale, initial_rating=args.initial_rating)
    ratings = ratings_from_dataframe(
        pl.read_parquet(args.ratings),
        initial_rating=elo.config.initial_rating,
    )

    print(f"Loaded {dataset}")
    print(f"Rating with {elo}...")

    with log_timing(logger, "rating cycles"):
        outcomes = run_by_day(ratings, dataset, elo, observers=observers)
    return CycleResults(ratings, outcomes)


def cmd_run(args):
    """Run the cycles and optionally save ratings and outcomes."""
    from ..hooks import LoggingObserver, ParquetOutcomeWriter

    observers = [LoggingObserver()]
    if args.outcomes:
        observers.append(ParquetOutcomeWriter(args.outcomes))

    results = _run_cycles(args, observers=observers)
    print(f"\n{results}")

    if args.output:
        results.save(args.output)
        print(f"\nSaved ratings to {args.output}")
    if args.outcomes:
        print(f"Saved outcomes to {args.outcomes}")

    if args.top:
        print(f"\nTop {args.top} participants:")
        print(results.top(args.top))

    return 0


def cmd_top(args):
    """Show top N participants after the cycles."""
    results = _run_cycles(args)
    print(f"\nTop {args.n} participants:\n")
    print(results.top(args.n))
    return 0


def cmd_movers(args):
    """Show participants whose rating moved the most."""
    results = _run_cycles(args)
    print(f"\nBiggest movers ({args.n}):\n")
    print(results.movers(args.n))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Rating Lifecycle CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Common arguments
    def add_common_args(p):
        p.add_argument("data", help="Path to results parquet file")
        p.add_argument("--ratings", "-r", required=True,
                       help="Path to participants parquet file (id, name, rank, rating)")
        p.add_argument("--k-factor", "-k", type=float, default=32.0,
                       help="K-factor for Elo (default: 32)")
        p.add_argument("--scale", type=float, default=400.0,
                       help="Elo scale (default: 400)")
        p.add_argument("--initial-rating", type=float, default=1500.0,
                       help="Rating for participants without one (default: 1500)")
        p.add_argument("--verbose", "-v", action="store_true",
                       help="Log every result")

    run_parser = subparsers.add_parser("run", help="Run rating cycles")
    add_common_args(run_parser)
    run_parser.add_argument("--output", "-o", help="Save final ratings to file")
    run_parser.add_argument("--outcomes", help="Directory for per-day outcome parquet files")
    run_parser.add_argument("--top", "-t", type=int, default=10,
                            help="Show top N participants (default: 10)")

    top_parser = subparsers.add_parser("top", help="Show top N participants")
    add_common_args(top_parser)
    top_parser.add_argument("-n", type=int, default=10, help="Number of participants")

    movers_parser = subparsers.add_parser("movers", help="Show biggest rating changes")
    add_common_args(movers_parser)
    movers_parser.add_argument("-n", type=int, default=10, help="Number of participants")

    return parser


def main(argv=None):
    """Main entry point for CLI."""
    from ..cycle import RatingCycleError
    from ..utils import setup_logging

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING, format_style="simple")

    commands = {
        "run": cmd_run,
        "top": cmd_top,
        "movers": cmd_movers,
    }

    try:
        return commands[args.command](args)
    except RatingCycleError as exc:
        print(f"Rating cycle failed: {exc}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
