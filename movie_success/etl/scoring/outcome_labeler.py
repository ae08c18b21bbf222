"""Binary success labels: reception (quality) and box office (sales).

The sales threshold is the per-year quantile of worldwide gross computed
with linear interpolation between order statistics: for fraction p over n
sorted values v[0..n-1] the quantile sits at rank p * (n - 1). A year with
a single movie therefore uses that movie's own gross, and since the label
is a strict ``>`` comparison that movie is never labeled a sales success.
"""

import logging
from dataclasses import dataclass, field
from typing import Final

import polars as pl

from movie_success.etl import schemas

logger = logging.getLogger(__name__)

DEFAULT_GOOD_RATING: Final[float] = 7.0
DEFAULT_SALES_QUANTILE: Final[float] = 0.9
QUANTILE_INTERPOLATION: Final[str] = "linear"


@dataclass
class OutcomeStats:
    """Label counts of one labeling run."""

    total_movies: int = 0
    quality_positive: int = 0
    sales_positive: int = 0
    year_groups: int = 0
    thresholds: dict[int, float] = field(default_factory=dict)

    def log_summary(self) -> None:
        """Log label statistics."""
        logger.info(
            "Outcome labels: %d movies, quality=%d, sales=%d across %d year(s)",
            self.total_movies,
            self.quality_positive,
            self.sales_positive,
            self.year_groups,
        )


class OutcomeLabeler:
    """Derives ``outcome_quality`` and ``outcome_sales`` for every movie.

    Attributes:
        good_rating_threshold: Ratings strictly above it count as good.
        sales_quantile: Per-year gross quantile used as the sales cutoff.
        stats: Statistics of the last run.
    """

    def __init__(
        self,
        good_rating_threshold: float = DEFAULT_GOOD_RATING,
        sales_quantile: float = DEFAULT_SALES_QUANTILE,
    ) -> None:
        if not 0.0 < sales_quantile < 1.0:
            raise ValueError(f"sales_quantile must be in (0, 1), got {sales_quantile}")
        self.good_rating_threshold = good_rating_threshold
        self.sales_quantile = sales_quantile
        self.stats = OutcomeStats()

    def label(self, df: pl.DataFrame) -> pl.DataFrame:
        """Append the flag, threshold and outcome columns.

        Added columns: ``good_rating_flag``, ``win_nom_flag``,
        ``outcome_quality``, ``year_top10_threshold``, ``outcome_sales``.
        Movies without a year get a null threshold and a null sales label.

        Args:
            df: Cleaned movie table.

        Returns:
            Table with the label columns appended.
        """
        schemas.require_columns(
            df,
            (schemas.YEAR, schemas.RATING, schemas.GROSS, *schemas.AWARD_COLUMNS),
            "outcome labeler",
        )

        gross = pl.col(schemas.GROSS)
        labeled = df.with_columns(
            (pl.col(schemas.RATING) > self.good_rating_threshold).alias(schemas.GOOD_RATING_FLAG),
            (pl.sum_horizontal(schemas.AWARD_COLUMNS) > 0).alias(schemas.WIN_NOM_FLAG),
            pl.when(pl.col(schemas.YEAR).is_not_null())
            .then(
                gross.quantile(self.sales_quantile, interpolation=QUANTILE_INTERPOLATION).over(
                    schemas.YEAR
                )
            )
            .otherwise(None)
            .alias(schemas.YEAR_THRESHOLD),
        ).with_columns(
            (pl.col(schemas.GOOD_RATING_FLAG) | pl.col(schemas.WIN_NOM_FLAG)).alias(
                schemas.OUTCOME_QUALITY
            ),
            (gross > pl.col(schemas.YEAR_THRESHOLD)).alias(schemas.OUTCOME_SALES),
        )

        self._update_stats(labeled)
        return labeled

    def year_thresholds(self, df: pl.DataFrame) -> pl.DataFrame:
        """Per-year sales thresholds, one row per non-null year.

        Args:
            df: Cleaned movie table.

        Returns:
            Columns ``year``, ``year_top10_threshold``, ``movie_count``.
        """
        schemas.require_columns(df, (schemas.YEAR, schemas.GROSS), "outcome labeler")
        return (
            df.filter(pl.col(schemas.YEAR).is_not_null())
            .group_by(schemas.YEAR)
            .agg(
                pl.col(schemas.GROSS)
                .quantile(self.sales_quantile, interpolation=QUANTILE_INTERPOLATION)
                .alias(schemas.YEAR_THRESHOLD),
                pl.len().alias(schemas.MOVIE_COUNT),
            )
            .sort(schemas.YEAR)
        )

    def _update_stats(self, labeled: pl.DataFrame) -> None:
        """Recompute statistics from a labeled table."""
        thresholds = self.year_thresholds(labeled)
        self.stats = OutcomeStats(
            total_movies=len(labeled),
            quality_positive=int(labeled.get_column(schemas.OUTCOME_QUALITY).sum()),
            sales_positive=int(labeled.get_column(schemas.OUTCOME_SALES).sum()),
            year_groups=len(thresholds),
            thresholds=dict(
                zip(
                    thresholds.get_column(schemas.YEAR).to_list(),
                    thresholds.get_column(schemas.YEAR_THRESHOLD).to_list(),
                    strict=True,
                )
            ),
        )
        self.stats.log_summary()
