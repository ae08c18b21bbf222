"""Cast quality: weighted career totals of actors, folded back onto movies.

Scoring runs in two passes over the billing credits of every movie:

1. Each credit (movie, actor, 1-based billing position) gets a weight of
   1.0 for positions up to ``main_actor_count`` and ``supporting_weight``
   after that. An actor's quality is the sum of ``rating_all * weight``
   over all their credits. Totals are not normalized by the number of
   movies, so prolific actors accumulate larger scores.
2. A movie's cast score is the sum, over its credits, of the credited
   actor's quality times the same billing weight.
"""

import logging
from dataclasses import dataclass
from typing import Final

import polars as pl

from movie_success.etl import schemas

logger = logging.getLogger(__name__)

ROW_INDEX: Final[str] = "__movie_row"
MAIN_WEIGHT: Final[float] = 1.0


@dataclass
class CastStats:
    """Statistics for one cast scoring run."""

    output_column: str = schemas.CAST_SCORE
    total_movies: int = 0
    credits: int = 0
    actors: int = 0
    movies_without_cast: int = 0
    reused_actor_scores: bool = False

    def log_summary(self) -> None:
        """Log cast scoring statistics."""
        logger.info(
            "Cast scores (%s): %d actors, %d credits over %d movies (%d without cast)%s",
            self.output_column,
            self.actors,
            self.credits,
            self.total_movies,
            self.movies_without_cast,
            ", actor totals supplied by caller" if self.reused_actor_scores else "",
        )


class CastScorer:
    """One parameterization of the cast scorer.

    Attributes:
        main_actor_count: Billing positions weighted 1.0.
        supporting_weight: Weight of later billing positions.
        output_column: Name of the movie-level score column.
        stats: Statistics of the last run.
    """

    def __init__(
        self,
        main_actor_count: int = 2,
        supporting_weight: float = 0.1,
        output_column: str = schemas.CAST_SCORE,
    ) -> None:
        if main_actor_count < 1:
            raise ValueError(f"main_actor_count must be >= 1, got {main_actor_count}")
        if supporting_weight < 0:
            raise ValueError(f"supporting_weight must be >= 0, got {supporting_weight}")
        self.main_actor_count = main_actor_count
        self.supporting_weight = supporting_weight
        self.output_column = output_column
        self.stats = CastStats(output_column=output_column)

    # =========================================================================
    # Public API
    # =========================================================================

    def credits(self, df: pl.DataFrame) -> pl.DataFrame:
        """Explode casts into one row per billing credit.

        Args:
            df: Movie table with ``cast`` and ``rating_all``.

        Returns:
            Columns ``id``, ``actor``, ``billing_position``,
            ``credit_weight``, ``rating_all``, in movie then billing order.
        """
        return self._credits(df.with_row_index(ROW_INDEX)).drop(ROW_INDEX)

    def actor_scores(self, df: pl.DataFrame) -> pl.DataFrame:
        """Per-actor quality totals.

        Args:
            df: Movie table with ``cast`` and ``rating_all``.

        Returns:
            Columns ``actor``, ``actor_quality``, ``credit_count``, sorted
            by quality then name.
        """
        return (
            self.credits(df)
            .group_by(schemas.ACTOR)
            .agg(
                (pl.col(schemas.RATING) * pl.col(schemas.CREDIT_WEIGHT))
                .sum()
                .alias(schemas.ACTOR_QUALITY),
                pl.len().alias(schemas.CREDIT_COUNT),
            )
            .sort([schemas.ACTOR_QUALITY, schemas.ACTOR], descending=[True, False])
        )

    def score(
        self,
        df: pl.DataFrame,
        actor_scores: pl.DataFrame | None = None,
    ) -> pl.DataFrame:
        """Append the movie-level cast score column.

        Args:
            df: Movie table with ``cast`` and ``rating_all``.
            actor_scores: Optional precomputed ``actor``/``actor_quality``
                table; when given, it replaces this scorer's own actor
                totals and only the billing weights of this scorer apply.

        Returns:
            Table with ``output_column`` appended; movies with an empty
            cast score 0.0.
        """
        indexed = df.with_row_index(ROW_INDEX)
        credits = self._credits(indexed)

        if actor_scores is None:
            credits = credits.with_columns(
                (pl.col(schemas.RATING) * pl.col(schemas.CREDIT_WEIGHT))
                .sum()
                .over(schemas.ACTOR)
                .alias(schemas.ACTOR_QUALITY)
            )
        else:
            schemas.require_columns(
                actor_scores, (schemas.ACTOR, schemas.ACTOR_QUALITY), "cast scorer"
            )
            credits = credits.join(
                actor_scores.select(schemas.ACTOR, schemas.ACTOR_QUALITY),
                on=schemas.ACTOR,
                how="left",
            ).with_columns(pl.col(schemas.ACTOR_QUALITY).fill_null(0.0))

        per_movie = credits.group_by(ROW_INDEX).agg(
            (pl.col(schemas.ACTOR_QUALITY) * pl.col(schemas.CREDIT_WEIGHT))
            .sum()
            .alias(self.output_column)
        )

        scored = (
            indexed.join(per_movie, on=ROW_INDEX, how="left")
            .sort(ROW_INDEX)
            .drop(ROW_INDEX)
            .with_columns(pl.col(self.output_column).fill_null(0.0))
        )

        self._update_stats(scored, credits, reused=actor_scores is not None)
        return scored

    # =========================================================================
    # Internal Methods
    # =========================================================================

    def _credits(self, indexed: pl.DataFrame) -> pl.DataFrame:
        """Explode an indexed movie table into weighted credits."""
        schemas.require_columns(indexed, (schemas.ID, schemas.CAST, schemas.RATING), "cast scorer")

        cast_size = pl.col(schemas.CAST).list.len().cast(pl.Int64)
        position = pl.col(schemas.BILLING_POSITION)
        return (
            indexed.select(
                ROW_INDEX,
                schemas.ID,
                pl.col(schemas.CAST).alias(schemas.ACTOR),
                pl.int_ranges(1, cast_size + 1).alias(schemas.BILLING_POSITION),
                schemas.RATING,
            )
            .explode([schemas.ACTOR, schemas.BILLING_POSITION])
            .filter(pl.col(schemas.ACTOR).is_not_null())
            .with_columns(
                pl.when(position <= self.main_actor_count)
                .then(pl.lit(MAIN_WEIGHT))
                .otherwise(pl.lit(self.supporting_weight))
                .alias(schemas.CREDIT_WEIGHT)
            )
            .select(
                ROW_INDEX,
                schemas.ID,
                schemas.ACTOR,
                schemas.BILLING_POSITION,
                schemas.CREDIT_WEIGHT,
                schemas.RATING,
            )
        )

    def _update_stats(self, scored: pl.DataFrame, credits: pl.DataFrame, reused: bool) -> None:
        """Recompute statistics from a scored table and its credits."""
        self.stats = CastStats(
            output_column=self.output_column,
            total_movies=len(scored),
            credits=len(credits),
            actors=credits.get_column(schemas.ACTOR).n_unique(),
            movies_without_cast=scored.filter(pl.col(schemas.CAST).list.len() == 0).height,
            reused_actor_scores=reused,
        )
        self.stats.log_summary()
