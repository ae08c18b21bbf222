"""Director quality: mean per-movie credit over a director's filmography.

Each movie earns its primary director a credit of 0, 1 or 2, one point
for a good rating and one for an award win or nomination. A director's
quality is the mean credit over every movie where they are listed first,
broadcast back onto each of those movies. No shrinkage is applied, so a
single-movie director carries that movie's raw credit. Names are the
identity, so two people sharing a name share a score.
"""

import logging
from dataclasses import dataclass

import polars as pl

from movie_success.etl import schemas

logger = logging.getLogger(__name__)


@dataclass
class DirectorStats:
    """Statistics for one director scoring run."""

    total_movies: int = 0
    directors: int = 0
    single_movie_directors: int = 0
    movies_without_director: int = 0

    def log_summary(self) -> None:
        """Log director scoring statistics."""
        logger.info(
            "Director scores: %d directors over %d movies (%d with a single movie, %d movies unscored)",
            self.directors,
            self.total_movies,
            self.single_movie_directors,
            self.movies_without_director,
        )


class DirectorScorer:
    """Computes ``director_credit`` and ``director_quality``.

    Attributes:
        stats: Statistics of the last run.
    """

    def __init__(self) -> None:
        """Initialize scorer with empty statistics."""
        self.stats = DirectorStats()

    # =========================================================================
    # Public API
    # =========================================================================

    def score(self, df: pl.DataFrame) -> pl.DataFrame:
        """Append ``director_credit``, ``primary_director`` and ``director_quality``.

        Args:
            df: Labeled movie table (needs both outcome flags).

        Returns:
            Table with the director columns appended. Movies with an empty
            director list get a null primary director and a null quality.
        """
        schemas.require_columns(
            df,
            (schemas.DIRECTOR, schemas.GOOD_RATING_FLAG, schemas.WIN_NOM_FLAG),
            "director scorer",
        )

        director = pl.col(schemas.PRIMARY_DIRECTOR)
        scored = df.with_columns(
            (
                pl.col(schemas.GOOD_RATING_FLAG).cast(pl.Int64)
                + pl.col(schemas.WIN_NOM_FLAG).cast(pl.Int64)
            ).alias(schemas.DIRECTOR_CREDIT),
            pl.col(schemas.DIRECTOR).list.first().alias(schemas.PRIMARY_DIRECTOR),
        ).with_columns(
            pl.when(director.is_not_null())
            .then(pl.col(schemas.DIRECTOR_CREDIT).mean().over(schemas.PRIMARY_DIRECTOR))
            .otherwise(None)
            .alias(schemas.DIRECTOR_QUALITY)
        )

        self._update_stats(scored)
        return scored

    @staticmethod
    def director_table(scored: pl.DataFrame) -> pl.DataFrame:
        """One row per director.

        Args:
            scored: Output of :meth:`score`.

        Returns:
            Columns ``primary_director``, ``director_quality``,
            ``movie_count``, sorted by quality then name.
        """
        schemas.require_columns(
            scored, (schemas.PRIMARY_DIRECTOR, schemas.DIRECTOR_CREDIT), "director table"
        )
        return (
            scored.filter(pl.col(schemas.PRIMARY_DIRECTOR).is_not_null())
            .group_by(schemas.PRIMARY_DIRECTOR)
            .agg(
                pl.col(schemas.DIRECTOR_CREDIT).mean().alias(schemas.DIRECTOR_QUALITY),
                pl.len().alias(schemas.MOVIE_COUNT),
            )
            .sort(
                [schemas.DIRECTOR_QUALITY, schemas.PRIMARY_DIRECTOR],
                descending=[True, False],
            )
        )

    # =========================================================================
    # Internal Methods
    # =========================================================================

    def _update_stats(self, scored: pl.DataFrame) -> None:
        """Recompute statistics from a scored table."""
        table = self.director_table(scored)
        self.stats = DirectorStats(
            total_movies=len(scored),
            directors=len(table),
            single_movie_directors=table.filter(pl.col(schemas.MOVIE_COUNT) == 1).height,
            movies_without_director=scored.get_column(schemas.PRIMARY_DIRECTOR).null_count(),
        )
        self.stats.log_summary()
