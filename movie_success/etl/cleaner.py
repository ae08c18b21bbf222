"""Row filtering and projection of the joined movie table."""

import logging
from dataclasses import dataclass

import polars as pl

from movie_success.etl import schemas

logger = logging.getLogger(__name__)


@dataclass
class CleaningStats:
    """Statistics for one cleaning run.

    Attributes:
        input_rows: Rows received.
        null_rows_removed: Rows missing a required field.
        output_rows: Rows kept.
    """

    input_rows: int = 0
    null_rows_removed: int = 0
    output_rows: int = 0

    def log_summary(self) -> None:
        """Log cleaning statistics."""
        logger.info(
            "Cleaning complete: %d rows in, %d dropped for missing fields, %d kept",
            self.input_rows,
            self.null_rows_removed,
            self.output_rows,
        )
        if self.input_rows and not self.output_rows:
            logger.warning("Cleaning removed every row")


class Cleaner:
    """Drops incomplete movies, defaults award indicators, projects columns.

    Attributes:
        stats: Statistics of the last run.
    """

    def __init__(self) -> None:
        """Initialize cleaner with empty statistics."""
        self.stats = CleaningStats()

    def clean(self, df: pl.DataFrame) -> pl.DataFrame:
        """Return the cleaned table.

        Rows missing any of ``cast``, ``director``, ``genres``,
        ``rating_all`` or ``cumulative_worldwide_gross`` are dropped. Missing
        award indicators become 0. Columns outside the movie record are
        dropped; an empty result is returned as is.

        Args:
            df: Joined table from the loader.

        Returns:
            Cleaned table with exactly the movie-record columns.

        Raises:
            MissingColumnError: If a record column is absent.
        """
        schemas.require_columns(
            df,
            [c for c in schemas.MOVIE_COLUMNS if c not in schemas.AWARD_COLUMNS],
            "cleaner",
        )
        self.stats = CleaningStats(input_rows=len(df))

        kept = df.drop_nulls(subset=list(schemas.REQUIRED_COLUMNS))
        self.stats.null_rows_removed = len(df) - len(kept)

        kept = kept.with_columns(
            [self._award_expr(column, kept) for column in schemas.AWARD_COLUMNS]
        ).select(schemas.MOVIE_COLUMNS)

        self.stats.output_rows = len(kept)
        self.stats.log_summary()
        return kept

    @staticmethod
    def _award_expr(column: str, df: pl.DataFrame) -> pl.Expr:
        """Award indicator as a 0/1 float, 0 when missing or absent."""
        if column not in df.columns:
            return pl.lit(0.0, dtype=pl.Float64).alias(column)
        return pl.col(column).cast(pl.Float64, strict=False).fill_null(0.0).alias(column)
