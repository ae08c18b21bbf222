"""Loader for the two movie tables.

Reads the movies table and the details table (CSV, Parquet or JSON),
checks that they describe exactly the same set of movies, and joins them
on the movie key. Text-encoded sequences are split into lists and numeric
columns are coerced so downstream stages see a single, typed table.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

import polars as pl

from movie_success.etl import schemas
from movie_success.etl.schemas import DataIntegrityError, MissingColumnError

logger = logging.getLogger(__name__)

# File extensions
CSV_EXT: Final[str] = ".csv"
PARQUET_EXT: Final[str] = ".parquet"
JSON_EXT: Final[str] = ".json"
NDJSON_EXT: Final[str] = ".ndjson"

MAX_REPORTED_KEYS: Final[int] = 5
"""Offending keys quoted in integrity error messages."""

CSV_SCHEMA_INFERENCE_ROWS: Final[int] = 10_000

ROW_INDEX: Final[str] = "__movies_row"

GROSS_FORMATTING: Final[str] = r"[$,\s]"
"""Currency and grouping characters stripped from a text gross column."""


# =============================================================================
# LOAD STATISTICS
# =============================================================================


@dataclass
class LoadStats:
    """Statistics for one load/merge run.

    Attributes:
        movies_rows: Rows in the movies table.
        details_rows: Rows in the details table.
        merged_rows: Rows after the keyed join.
        dropped_columns: Details columns shadowed by movies columns.
    """

    movies_rows: int = 0
    details_rows: int = 0
    merged_rows: int = 0
    dropped_columns: list[str] = field(default_factory=list)

    def log_summary(self) -> None:
        """Log load statistics."""
        logger.info(
            "Load complete: movies=%d, details=%d, merged=%d (shadowed columns: %s)",
            self.movies_rows,
            self.details_rows,
            self.merged_rows,
            ", ".join(self.dropped_columns) or "none",
        )


# =============================================================================
# MOVIE LOADER
# =============================================================================


class MovieLoader:
    """Reads and joins the movies and details tables.

    Attributes:
        key_column: Movie identifier shared by both tables.
        list_separator: Separator of text-encoded sequences.
        stats: Statistics of the last merge.
    """

    def __init__(self, key_column: str = schemas.ID, list_separator: str = ",") -> None:
        """Initialize loader.

        Args:
            key_column: Movie identifier shared by both tables.
            list_separator: Separator of text-encoded sequences.
        """
        self.key_column = key_column
        self.list_separator = list_separator
        self.stats = LoadStats()

    # =========================================================================
    # Public API
    # =========================================================================

    def load(self, movies_path: Path, details_path: Path) -> pl.DataFrame:
        """Read both tables, join them and normalize column types.

        Args:
            movies_path: Movies table path.
            details_path: Details table path.

        Returns:
            Joined, typed table keyed by ``id``.

        Raises:
            FileNotFoundError: If a path does not exist.
            DataIntegrityError: If the tables do not describe the same movies.
        """
        movies = self.load_table(movies_path)
        details = self.load_table(details_path)
        merged = self.merge(movies, details)
        return self.normalize(merged)

    def load_table(self, path: Path) -> pl.DataFrame:
        """Load one table based on its extension.

        Args:
            path: File path.

        Returns:
            Loaded DataFrame.

        Raises:
            FileNotFoundError: If the file is missing.
            ValueError: If the extension is not supported.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Input table not found: {path}")

        logger.info("Loading table %s", path.name)
        suffix = path.suffix.lower()
        if suffix == CSV_EXT:
            return pl.read_csv(path, infer_schema_length=CSV_SCHEMA_INFERENCE_ROWS)
        if suffix == PARQUET_EXT:
            return pl.read_parquet(path)
        if suffix == JSON_EXT:
            return pl.read_json(path)
        if suffix == NDJSON_EXT:
            return pl.read_ndjson(path)
        raise ValueError(f"Unsupported file format: {suffix}")

    def merge(self, movies: pl.DataFrame, details: pl.DataFrame) -> pl.DataFrame:
        """Join the two tables on the movie key.

        Both tables must hold the same movies, once each. Columns present
        in both tables keep the movies table's values, and rows keep the
        movies table's order.

        Args:
            movies: Movies table.
            details: Details table.

        Returns:
            One row per movie, key renamed to ``id``.

        Raises:
            DataIntegrityError: On null, duplicate or unmatched keys, or
                differing row counts.
        """
        self.stats = LoadStats(movies_rows=len(movies), details_rows=len(details))

        movies = self._prepare_keys(movies, "movies")
        details = self._prepare_keys(details, "details")
        self._check_alignment(movies, details)

        shadowed = [c for c in details.columns if c != self.key_column and c in movies.columns]
        if shadowed:
            logger.warning("Columns %s exist in both tables, keeping the movies table values", shadowed)
            details = details.drop(shadowed)

        merged = (
            movies.with_row_index(ROW_INDEX)
            .join(details, on=self.key_column, how="inner", validate="1:1")
            .sort(ROW_INDEX)
            .drop(ROW_INDEX)
        )
        if self.key_column != schemas.ID:
            merged = merged.rename({self.key_column: schemas.ID})

        self.stats.merged_rows = len(merged)
        self.stats.dropped_columns = shadowed
        self.stats.log_summary()
        return merged

    def normalize(self, df: pl.DataFrame) -> pl.DataFrame:
        """Coerce sequence and numeric columns to their working types.

        Sequence columns stored as text are split on ``list_separator``.
        A text gross is stripped of currency and grouping characters first;
        numeric columns that still fail to parse become null.

        Args:
            df: Joined table.

        Returns:
            Typed table.
        """
        expressions: list[pl.Expr] = []

        for column in schemas.LIST_COLUMNS:
            if column in df.columns:
                expressions.append(self._list_expr(column, df.schema[column]))

        for column, dtype in schemas.NUMERIC_SCHEMA.items():
            if column not in df.columns:
                continue
            source = pl.col(column)
            if column == schemas.GROSS and df.schema[column] == pl.String:
                source = source.str.replace_all(GROSS_FORMATTING, "")
            expressions.append(source.cast(dtype, strict=False).alias(column))

        return df.with_columns(expressions) if expressions else df

    # =========================================================================
    # Internal Methods
    # =========================================================================

    def _prepare_keys(self, df: pl.DataFrame, table: str) -> pl.DataFrame:
        """Check the key column and cast it to text.

        Raises:
            MissingColumnError: If the key column is absent.
            DataIntegrityError: On null or duplicate keys, or when an ``id``
                column would collide with the renamed key.
        """
        if self.key_column not in df.columns:
            raise MissingColumnError(f"{table} table has no key column '{self.key_column}'")
        if self.key_column != schemas.ID and schemas.ID in df.columns:
            raise DataIntegrityError(
                f"{table} table has an '{schemas.ID}' column besides key column "
                f"'{self.key_column}'; the key is renamed to '{schemas.ID}' after the join"
            )

        df = df.with_columns(pl.col(self.key_column).cast(pl.String))
        keys = df.get_column(self.key_column)

        null_count = keys.null_count()
        if null_count:
            raise DataIntegrityError(f"{table} table has {null_count} null key(s)")

        duplicated = keys.filter(keys.is_duplicated()).unique(maintain_order=True)
        if len(duplicated):
            raise DataIntegrityError(
                f"{table} table has duplicate key(s): {self._sample(duplicated.to_list())}"
            )
        return df

    def _check_alignment(self, movies: pl.DataFrame, details: pl.DataFrame) -> None:
        """Check that both tables hold the same set of keys.

        Raises:
            DataIntegrityError: On differing row counts or key sets.
        """
        if len(movies) != len(details):
            raise DataIntegrityError(
                f"row count mismatch: movies={len(movies)}, details={len(details)}"
            )

        movie_keys = set(movies.get_column(self.key_column).to_list())
        detail_keys = set(details.get_column(self.key_column).to_list())
        if movie_keys != detail_keys:
            raise DataIntegrityError(
                "key mismatch: "
                f"only in movies={self._sample(sorted(movie_keys - detail_keys))}, "
                f"only in details={self._sample(sorted(detail_keys - movie_keys))}"
            )

    def _list_expr(self, column: str, dtype: pl.DataType) -> pl.Expr:
        """Build the expression turning ``column`` into a clean list of text."""
        if isinstance(dtype, pl.List):
            items = pl.col(column).list.eval(pl.element().cast(pl.String).str.strip_chars())
        else:
            items = (
                pl.col(column)
                .cast(pl.String)
                .str.split(self.list_separator)
                .list.eval(pl.element().str.strip_chars())
            )
        return items.list.eval(pl.element().filter(pl.element().str.len_chars() > 0)).alias(column)

    @staticmethod
    def _sample(keys: list[str]) -> list[str]:
        """Truncate a key list for error messages."""
        return keys[:MAX_REPORTED_KEYS]
