"""Shared pytest fixtures for the movie success pipeline."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import polars as pl
import pytest

MOVIE_SCHEMA: dict[str, pl.DataType] = {
    "id": pl.String(),
    "title": pl.String(),
    "year": pl.Int64(),
    "cast": pl.List(pl.String()),
    "director": pl.List(pl.String()),
    "genres": pl.List(pl.String()),
    "rating_all": pl.Float64(),
    "cumulative_worldwide_gross": pl.Float64(),
    "award_win": pl.Float64(),
    "award_nom": pl.Float64(),
    "winner_oscar": pl.Float64(),
    "nominee_oscar": pl.Float64(),
}

_ENV_VARS = [
    "DATA_DIR",
    "LOG_LEVEL",
    "LOG_DIR",
    "MOVIES_FILE",
    "DETAILS_FILE",
    "MOVIE_KEY_COLUMN",
    "LIST_SEPARATOR",
    "GOOD_RATING_THRESHOLD",
    "SALES_QUANTILE",
    "CAST_SCORE",
    "CAST_SCORE2",
    "CAST_CROSS_WIRE",
    "MODEL_TEST_FRACTION",
    "MODEL_RANDOM_SEED",
    "MODEL_MAX_ITER",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Isolate every test from pipeline environment variables."""
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)


def _movie_row(index: int, overrides: dict[str, Any]) -> dict[str, Any]:
    row: dict[str, Any] = {
        "id": f"m{index}",
        "title": f"Movie {index}",
        "year": 2010,
        "cast": ["Actor A", "Actor B"],
        "director": ["Director D"],
        "genres": ["Drama"],
        "rating_all": 6.0,
        "cumulative_worldwide_gross": 100.0,
        "award_win": 0.0,
        "award_nom": 0.0,
        "winner_oscar": 0.0,
        "nominee_oscar": 0.0,
    }
    row.update(overrides)
    return row


@pytest.fixture
def make_movies() -> Callable[..., pl.DataFrame]:
    """Factory building a typed movie table from per-row overrides."""

    def _make(*rows: dict[str, Any]) -> pl.DataFrame:
        records = [_movie_row(i, overrides) for i, overrides in enumerate(rows)]
        return pl.DataFrame(records, schema=MOVIE_SCHEMA)

    return _make


@pytest.fixture
def sample_movies(make_movies: Callable[..., pl.DataFrame]) -> pl.DataFrame:
    """Small catalogue spanning two years, three directors and shared actors."""
    return make_movies(
        {"id": "p", "cast": ["X", "Y"], "director": ["D"], "rating_all": 8.0,
         "cumulative_worldwide_gross": 900.0},
        {"id": "q", "cast": ["Y", "Z", "X"], "director": ["D"], "rating_all": 6.0,
         "award_nom": 1.0, "cumulative_worldwide_gross": 100.0, "genres": ["Comedy", "Drama"]},
        {"id": "r", "year": 2011, "cast": ["Z"], "director": ["E", "D"], "rating_all": 5.0,
         "cumulative_worldwide_gross": 50.0, "genres": ["Horror"]},
        {"id": "s", "year": 2011, "cast": ["W", "X", "Y", "Z", "V"], "director": ["F"],
         "rating_all": 7.5, "winner_oscar": 1.0, "cumulative_worldwide_gross": 5000.0},
    )


@pytest.fixture
def movie_tables(tmp_path: Path) -> tuple[Path, Path]:
    """Movies and details CSV files, details stored in reverse order."""
    movies = pl.DataFrame(
        {
            "id": [1, 2, 3, 4],
            "title": ["Alpha", "Beta", "Gamma", "Delta"],
            "year": [2010, 2010, 2011, 2011],
            "cast": ["Ann, Bob", "Bob, Cid, Ann", "Cid", "Dan, Ann"],
            "director": ["Dee", "Dee", "Eve", None],
            "genres": ["Drama, Comedy", "Comedy", "Horror", "Drama"],
            "budget": [10, 20, 30, 40],
        }
    )
    details = pl.DataFrame(
        {
            "id": [4, 3, 2, 1],
            "rating_all": [6.5, 5.0, 8.0, 7.2],
            "cumulative_worldwide_gross": [400.0, 300.0, 900.0, 100.0],
            "award_win": [None, 0, 1, 0],
            "award_nom": [0, 0, 0, None],
            "winner_oscar": [0, 0, 0, 0],
            "nominee_oscar": [0, 0, 0, 0],
        }
    )
    movies_path = tmp_path / "movies.csv"
    details_path = tmp_path / "details.csv"
    movies.write_csv(movies_path)
    details.write_csv(details_path)
    return movies_path, details_path
