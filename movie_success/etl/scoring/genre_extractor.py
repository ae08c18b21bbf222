"""Primary genre: the first entry of each movie's genre list."""

import logging

import polars as pl

from movie_success.etl import schemas

logger = logging.getLogger(__name__)


def extract_primary_genre(df: pl.DataFrame) -> pl.DataFrame:
    """Append ``primary_genre``.

    An empty genre list yields a null primary genre; such movies are left
    out of categorical modeling downstream.

    Args:
        df: Movie table with a ``genres`` list column.

    Returns:
        Table with ``primary_genre`` appended.
    """
    schemas.require_columns(df, (schemas.GENRES,), "genre extractor")

    result = df.with_columns(pl.col(schemas.GENRES).list.first().alias(schemas.PRIMARY_GENRE))

    missing = result.get_column(schemas.PRIMARY_GENRE).null_count()
    if missing:
        logger.warning("%d movies have no primary genre", missing)
    logger.info(
        "Primary genres: %d distinct over %d movies",
        result.get_column(schemas.PRIMARY_GENRE).drop_nulls().n_unique(),
        len(result),
    )
    return result
