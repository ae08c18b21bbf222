"""Command line entry point. Enables ``python -m movie_success``."""

import argparse
import json
import sys
from pathlib import Path

from movie_success.etl.utils import setup_from_settings
from movie_success.settings import CastVariantConfig, get_settings_dump, settings

logger = setup_from_settings()


# =============================================================================
# ARGUMENT PARSING
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser.

    Returns:
        Parser with the ``run``, ``model`` and ``show-config`` commands.
    """
    parser = argparse.ArgumentParser(
        prog="movie_success",
        description="Movie success scoring pipeline",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m movie_success run --movies movies.csv --details details.csv --output features.parquet
  python -m movie_success run --movies m.csv --details d.csv --cast2-main 5 --cast2-supporting 0.3
  python -m movie_success model --features features.parquet
  python -m movie_success show-config
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command")

    run_parser = subparsers.add_parser("run", help="Load, clean and score the movies")
    run_parser.add_argument("--movies", type=Path, default=None, help="Movies table")
    run_parser.add_argument("--details", type=Path, default=None, help="Details table")
    run_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Feature table output (default: <DATA_DIR>/processed/features.parquet)",
    )
    run_parser.add_argument("--directors-output", type=Path, default=None)
    run_parser.add_argument(
        "--actors-output",
        type=Path,
        default=None,
        help="Base path of per-actor tables (one file per cast variant)",
    )
    run_parser.add_argument("--cast-main", type=int, default=None, help="cast_score main actor count")
    run_parser.add_argument(
        "--cast-supporting", type=float, default=None, help="cast_score supporting weight"
    )
    run_parser.add_argument("--cast2-main", type=int, default=None, help="cast_score2 main actor count")
    run_parser.add_argument(
        "--cast2-supporting", type=float, default=None, help="cast_score2 supporting weight"
    )
    run_parser.add_argument(
        "--cross-wire",
        action="store_true",
        help="Score cast_score2 movies from cast_score actor totals",
    )
    run_parser.add_argument("--fit", action="store_true", help="Fit the success models afterwards")

    model_parser = subparsers.add_parser("model", help="Fit models on a saved feature table")
    model_parser.add_argument("--features", type=Path, required=True, help="Feature table")

    subparsers.add_parser("show-config", help="Print the effective configuration")

    return parser


# =============================================================================
# COMMAND HANDLERS
# =============================================================================


def _merge_variant(base: CastVariantConfig, main: int | None, weight: float | None) -> CastVariantConfig:
    """Apply CLI overrides to one cast variant."""
    updates = {}
    if main is not None:
        updates["main_actor_count"] = main
    if weight is not None:
        updates["supporting_weight"] = weight
    return CastVariantConfig.model_validate({**base.model_dump(), **updates})


def run_command(args: argparse.Namespace) -> None:
    """Handle ``run``."""
    from movie_success.etl.pipeline import run_pipeline
    from movie_success.modeling import ModelingHarness

    scoring = settings.scoring.model_copy(
        update={
            "cast_score": _merge_variant(settings.scoring.cast_score, args.cast_main, args.cast_supporting),
            "cast_score2": _merge_variant(
                settings.scoring.cast_score2, args.cast2_main, args.cast2_supporting
            ),
            "cross_wire": args.cross_wire or settings.scoring.cross_wire,
        }
    )

    result = run_pipeline(
        args.movies or settings.inputs.movies_path,
        args.details or settings.inputs.details_path,
        scoring=scoring,
        output_path=args.output or settings.paths.features_path,
        directors_output=args.directors_output,
        actors_output=args.actors_output,
    )
    logger.info("Run summary: %s", json.dumps(result.to_dict()))

    if args.fit:
        reports = ModelingHarness().fit_all(result.features)
        print(json.dumps([report.to_dict() for report in reports], indent=2))


def model_command(args: argparse.Namespace) -> None:
    """Handle ``model``."""
    from movie_success.etl.loader import MovieLoader
    from movie_success.modeling import ModelingHarness

    features = MovieLoader().load_table(args.features)
    reports = ModelingHarness().fit_all(features)
    print(json.dumps([report.to_dict() for report in reports], indent=2))


def show_config_command(_: argparse.Namespace) -> None:
    """Handle ``show-config``."""
    print(json.dumps(get_settings_dump(), indent=2, default=str))


COMMANDS = {
    "run": run_command,
    "model": model_command,
    "show-config": show_config_command,
}


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================


def main(argv: list[str] | None = None) -> int:
    """CLI entry point.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        COMMANDS[args.command](args)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 130
    except Exception as e:
        logger.error("Fatal error: %s", e, exc_info=True)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
