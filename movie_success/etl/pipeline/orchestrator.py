"""Pipeline orchestration.

``run_transforms`` chains the pure stages over an in-memory table;
``run_pipeline`` adds loading from disk and optional export.
"""

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import polars as pl

from movie_success.etl import schemas
from movie_success.etl.pipeline.steps import (
    step_1_load,
    step_2_clean,
    step_3_label,
    step_4_primary_genre,
    step_5_director,
    step_6_cast,
)
from movie_success.etl.writer import save_table
from movie_success.settings import InputSettings, ScoringSettings, settings

logger = logging.getLogger(__name__)


# =============================================================================
# RESULT
# =============================================================================


@dataclass
class PipelineResult:
    """Everything a pipeline run produces.

    Attributes:
        movies: Cleaned movie table with every derived column.
        directors: Per-director quality table.
        actors: Per-actor quality table of each cast variant.
        start_time: Run start timestamp.
        end_time: Run end timestamp.
    """

    movies: pl.DataFrame
    directors: pl.DataFrame
    actors: dict[str, pl.DataFrame] = field(default_factory=dict)
    start_time: datetime | None = None
    end_time: datetime | None = None

    @property
    def features(self) -> pl.DataFrame:
        """Feature table handed to the modeling harness."""
        return build_feature_table(self.movies)

    @property
    def duration_seconds(self) -> float:
        """Run duration in seconds."""
        if not self.start_time or not self.end_time:
            return 0.0
        return round((self.end_time - self.start_time).total_seconds(), 2)

    def to_dict(self) -> dict[str, Any]:
        """Summary of the run for logging or JSON export."""
        return {
            "duration_seconds": self.duration_seconds,
            "movies": len(self.movies),
            "directors": len(self.directors),
            "actors": {column: len(table) for column, table in self.actors.items()},
        }

    def log_summary(self) -> None:
        """Log the run summary."""
        logger.info(
            "Pipeline complete in %.2fs: %d movies, %d directors",
            self.duration_seconds,
            len(self.movies),
            len(self.directors),
        )


# =============================================================================
# TRANSFORMS
# =============================================================================


def build_feature_table(movies: pl.DataFrame) -> pl.DataFrame:
    """Project a fully scored movie table onto the model features.

    Raises:
        MissingColumnError: If a stage has not run.
    """
    schemas.require_columns(movies, schemas.FEATURE_COLUMNS, "feature table")
    return movies.select(schemas.FEATURE_COLUMNS)


def run_transforms(
    merged: pl.DataFrame,
    scoring: ScoringSettings | None = None,
) -> PipelineResult:
    """Run stages 2-6 on an already joined table.

    Args:
        merged: Output of the loader.
        scoring: Scoring configuration (default: global settings).

    Returns:
        Pipeline result; ``merged`` is left untouched.
    """
    scoring = scoring or settings.scoring
    start = datetime.now(UTC)

    movies = step_2_clean(merged)
    movies = step_3_label(movies, scoring)
    movies = step_4_primary_genre(movies)
    movies, directors = step_5_director(movies)
    movies, actors = step_6_cast(movies, scoring)

    result = PipelineResult(
        movies=movies,
        directors=directors,
        actors=actors,
        start_time=start,
        end_time=datetime.now(UTC),
    )
    result.log_summary()
    return result


def run_pipeline(
    movies_path: Path,
    details_path: Path,
    *,
    scoring: ScoringSettings | None = None,
    inputs: InputSettings | None = None,
    output_path: Path | None = None,
    directors_output: Path | None = None,
    actors_output: Path | None = None,
) -> PipelineResult:
    """Load, transform and optionally export.

    Args:
        movies_path: Movies table.
        details_path: Details table.
        scoring: Scoring configuration (default: global settings).
        inputs: Input configuration (default: global settings).
        output_path: Where to write the feature table.
        directors_output: Where to write the per-director table.
        actors_output: Base path of the per-actor tables; each variant is
            written next to it with its column name appended to the stem.

    Returns:
        Pipeline result.
    """
    inputs = inputs or settings.inputs
    merged = step_1_load(Path(movies_path), Path(details_path), inputs)
    result = run_transforms(merged, scoring)

    if output_path:
        save_table(result.features, Path(output_path))
    if directors_output:
        save_table(result.directors, Path(directors_output))
    if actors_output:
        for column, table in result.actors.items():
            save_table(table, variant_path(Path(actors_output), column))

    return result


def variant_path(base: Path, column: str) -> Path:
    """``actors.csv`` + ``cast_score2`` -> ``actors_cast_score2.csv``."""
    return base.with_name(f"{base.stem}_{column}{base.suffix}")
