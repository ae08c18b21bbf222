"""Column names and column groups of the movie tables.

Every stage refers to columns through these constants so that renaming
a column is a single edit.
"""

from typing import Final

import polars as pl

# =============================================================================
# INPUT COLUMNS
# =============================================================================

ID: Final[str] = "id"
TITLE: Final[str] = "title"
YEAR: Final[str] = "year"
CAST: Final[str] = "cast"
DIRECTOR: Final[str] = "director"
GENRES: Final[str] = "genres"
RATING: Final[str] = "rating_all"
GROSS: Final[str] = "cumulative_worldwide_gross"

AWARD_WIN: Final[str] = "award_win"
AWARD_NOM: Final[str] = "award_nom"
WINNER_OSCAR: Final[str] = "winner_oscar"
NOMINEE_OSCAR: Final[str] = "nominee_oscar"

AWARD_COLUMNS: Final[tuple[str, ...]] = (AWARD_WIN, AWARD_NOM, WINNER_OSCAR, NOMINEE_OSCAR)
"""Indicators filled with 0 ("no award") when missing."""

LIST_COLUMNS: Final[tuple[str, ...]] = (CAST, DIRECTOR, GENRES)
"""Ordered sequences; the first entry carries meaning."""

REQUIRED_COLUMNS: Final[tuple[str, ...]] = (CAST, DIRECTOR, GROSS, RATING, GENRES)
"""Rows missing any of these are dropped by the cleaner."""

MOVIE_COLUMNS: Final[tuple[str, ...]] = (
    ID,
    TITLE,
    YEAR,
    CAST,
    DIRECTOR,
    GENRES,
    RATING,
    GROSS,
    *AWARD_COLUMNS,
)
"""Projection kept after cleaning."""

NUMERIC_SCHEMA: Final[dict[str, pl.DataType]] = {
    YEAR: pl.Int64(),
    RATING: pl.Float64(),
    GROSS: pl.Float64(),
    **{column: pl.Float64() for column in AWARD_COLUMNS},
}

# =============================================================================
# DERIVED COLUMNS
# =============================================================================

GOOD_RATING_FLAG: Final[str] = "good_rating_flag"
WIN_NOM_FLAG: Final[str] = "win_nom_flag"
OUTCOME_QUALITY: Final[str] = "outcome_quality"
YEAR_THRESHOLD: Final[str] = "year_top10_threshold"
OUTCOME_SALES: Final[str] = "outcome_sales"
PRIMARY_GENRE: Final[str] = "primary_genre"
DIRECTOR_CREDIT: Final[str] = "director_credit"
PRIMARY_DIRECTOR: Final[str] = "primary_director"
DIRECTOR_QUALITY: Final[str] = "director_quality"
CAST_SCORE: Final[str] = "cast_score"
CAST_SCORE2: Final[str] = "cast_score2"

# Person tables
ACTOR: Final[str] = "actor"
ACTOR_QUALITY: Final[str] = "actor_quality"
BILLING_POSITION: Final[str] = "billing_position"
CREDIT_WEIGHT: Final[str] = "credit_weight"
CREDIT_COUNT: Final[str] = "credit_count"
MOVIE_COUNT: Final[str] = "movie_count"

OUTCOME_COLUMNS: Final[tuple[str, ...]] = (OUTCOME_QUALITY, OUTCOME_SALES)

FEATURE_COLUMNS: Final[tuple[str, ...]] = (
    ID,
    TITLE,
    YEAR,
    OUTCOME_QUALITY,
    OUTCOME_SALES,
    PRIMARY_GENRE,
    DIRECTOR_QUALITY,
    CAST_SCORE,
    CAST_SCORE2,
)
"""Projection handed to the modeling harness."""


# =============================================================================
# ERRORS
# =============================================================================


class DataIntegrityError(Exception):
    """Raised when an input table violates a structural precondition."""


class MissingColumnError(DataIntegrityError):
    """Raised when a stage receives a table without a column it needs."""


def require_columns(df: pl.DataFrame, columns: tuple[str, ...] | list[str], stage: str) -> None:
    """Check that ``df`` carries every column in ``columns``.

    Args:
        df: Table handed to the stage.
        columns: Columns the stage reads.
        stage: Stage name used in the error message.

    Raises:
        MissingColumnError: If any column is absent.
    """
    missing = [column for column in columns if column not in df.columns]
    if missing:
        raise MissingColumnError(f"{stage}: missing required column(s) {missing}")
