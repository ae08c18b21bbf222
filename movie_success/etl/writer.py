"""Table export by file extension (CSV, Parquet, JSON)."""

import logging
from pathlib import Path

import polars as pl

from movie_success.etl.loader import CSV_EXT, JSON_EXT, NDJSON_EXT, PARQUET_EXT

logger = logging.getLogger(__name__)


def save_table(df: pl.DataFrame, path: Path) -> Path:
    """Write ``df`` to ``path``, choosing the format from the suffix.

    Parent directories are created. List columns cannot be written to
    CSV; project them away first.

    Args:
        df: Table to save.
        path: Output path (.csv, .parquet, .json or .ndjson).

    Returns:
        Path to the saved file.

    Raises:
        ValueError: If the extension is not supported.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in {CSV_EXT, PARQUET_EXT, JSON_EXT, NDJSON_EXT}:
        raise ValueError(f"Unsupported file format: {suffix}")

    path.parent.mkdir(parents=True, exist_ok=True)
    if suffix == CSV_EXT:
        df.write_csv(path)
    elif suffix == PARQUET_EXT:
        df.write_parquet(path, compression="zstd")
    elif suffix == JSON_EXT:
        df.write_json(path)
    else:
        df.write_ndjson(path)

    logger.info("Saved %s (%d rows)", path.name, len(df))
    return path
