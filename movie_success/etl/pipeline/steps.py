"""Pipeline stages (1-6).

Each step wraps one component and logs a banner before it runs:
    - Step 1: Load and join the movies and details tables
    - Step 2: Drop incomplete movies, default award indicators
    - Step 3: Quality and sales outcome labels
    - Step 4: Primary genre
    - Step 5: Director quality
    - Step 6: Cast quality (two variants)
"""

import logging
from pathlib import Path

import polars as pl

from movie_success.etl import schemas
from movie_success.etl.cleaner import Cleaner
from movie_success.etl.loader import MovieLoader
from movie_success.etl.scoring import (
    CastScorer,
    DirectorScorer,
    OutcomeLabeler,
    extract_primary_genre,
)
from movie_success.settings import InputSettings, ScoringSettings

logger = logging.getLogger(__name__)

TOTAL_STEPS = 6


def _banner(step: int, title: str) -> None:
    """Log the step header."""
    logger.info("=" * 60)
    logger.info("STEP %d/%d : %s", step, TOTAL_STEPS, title)
    logger.info("=" * 60)


# =============================================================================
# STEP 1: LOAD
# =============================================================================


def step_1_load(
    movies_path: Path,
    details_path: Path,
    inputs: InputSettings,
) -> pl.DataFrame:
    """Load both tables and join them on the movie key.

    Raises:
        DataIntegrityError: If the tables do not describe the same movies.
    """
    _banner(1, "LOAD MOVIES + DETAILS")
    try:
        loader = MovieLoader(key_column=inputs.key_column, list_separator=inputs.list_separator)
        merged = loader.load(movies_path, details_path)
    except Exception as e:
        logger.error("Step 1 failed (load): %s", e)
        raise
    logger.info("Step 1 done: %d movies", len(merged))
    return merged


# =============================================================================
# STEP 2: CLEAN
# =============================================================================


def step_2_clean(df: pl.DataFrame) -> pl.DataFrame:
    """Drop incomplete rows and project the movie record."""
    _banner(2, "CLEAN")
    cleaned = Cleaner().clean(df)
    logger.info("Step 2 done: %d movies kept", len(cleaned))
    return cleaned


# =============================================================================
# STEP 3: OUTCOME LABELS
# =============================================================================


def step_3_label(df: pl.DataFrame, scoring: ScoringSettings) -> pl.DataFrame:
    """Append quality and sales outcome labels."""
    _banner(3, "OUTCOME LABELS")
    labeler = OutcomeLabeler(
        good_rating_threshold=scoring.good_rating_threshold,
        sales_quantile=scoring.sales_quantile,
    )
    return labeler.label(df)


# =============================================================================
# STEP 4: PRIMARY GENRE
# =============================================================================


def step_4_primary_genre(df: pl.DataFrame) -> pl.DataFrame:
    """Append the primary genre."""
    _banner(4, "PRIMARY GENRE")
    return extract_primary_genre(df)


# =============================================================================
# STEP 5: DIRECTOR QUALITY
# =============================================================================


def step_5_director(df: pl.DataFrame) -> tuple[pl.DataFrame, pl.DataFrame]:
    """Append director credit and quality.

    Returns:
        Scored movie table and the per-director table.
    """
    _banner(5, "DIRECTOR QUALITY")
    scorer = DirectorScorer()
    scored = scorer.score(df)
    return scored, scorer.director_table(scored)


# =============================================================================
# STEP 6: CAST QUALITY
# =============================================================================


def step_6_cast(
    df: pl.DataFrame,
    scoring: ScoringSettings,
) -> tuple[pl.DataFrame, dict[str, pl.DataFrame]]:
    """Append both cast score variants.

    With ``scoring.cross_wire`` the second variant reuses the first
    variant's actor totals and only applies its own billing weights at
    the movie level. Otherwise both variants are computed independently.

    Returns:
        Scored movie table and the per-actor table of each variant,
        keyed by output column.
    """
    _banner(6, "CAST QUALITY")
    first = CastScorer(
        main_actor_count=scoring.cast_score.main_actor_count,
        supporting_weight=scoring.cast_score.supporting_weight,
        output_column=schemas.CAST_SCORE,
    )
    second = CastScorer(
        main_actor_count=scoring.cast_score2.main_actor_count,
        supporting_weight=scoring.cast_score2.supporting_weight,
        output_column=schemas.CAST_SCORE2,
    )

    first_actors = first.actor_scores(df)
    second_actors = first_actors if scoring.cross_wire else second.actor_scores(df)
    if scoring.cross_wire:
        logger.warning(
            "Cross-wired cast scores: %s uses %s actor totals", schemas.CAST_SCORE2, schemas.CAST_SCORE
        )

    scored = first.score(df)
    scored = second.score(scored, actor_scores=second_actors if scoring.cross_wire else None)

    actor_tables = {
        schemas.CAST_SCORE: first_actors,
        schemas.CAST_SCORE2: second_actors,
    }
    return scored, actor_tables
