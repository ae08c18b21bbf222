"""Generate a synthetic pair of movie tables for local runs.

Writes a movies table (title, year, cast, director, genres) and a details
table (ratings, gross, award indicators) sharing the ``id`` column, with
sequence fields encoded as comma-separated text like the real export.
Some rows deliberately miss required fields so the cleaner has work.

Usage::

    python scripts/generate_sample_data.py --output-dir data/raw --movies 2000
"""

from __future__ import annotations

import argparse
from pathlib import Path

import numpy as np
import polars as pl

GENRES = ["Drama", "Comedy", "Action", "Horror", "Thriller", "Romance", "Animation", "Documentary"]
YEARS = list(range(2000, 2020))
MISSING_SHARE = 0.03


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate synthetic movie tables")
    parser.add_argument("--output-dir", type=Path, default=Path("data/raw"))
    parser.add_argument("--movies", type=int, default=2000, help="Number of movies")
    parser.add_argument("--actors", type=int, default=1500, help="Size of the actor pool")
    parser.add_argument("--directors", type=int, default=400, help="Size of the director pool")
    parser.add_argument("--seed", type=int, default=7)
    return parser.parse_args()


def _names(prefix: str, count: int) -> list[str]:
    return [f"{prefix} {i:04d}" for i in range(count)]


def build_tables(
    n_movies: int,
    n_actors: int,
    n_directors: int,
    seed: int,
) -> tuple[pl.DataFrame, pl.DataFrame]:
    """Build the movies and details tables.

    Returns:
        (movies, details), row-aligned on ``id``.
    """
    rng = np.random.default_rng(seed)
    actors = _names("Actor", n_actors)
    directors = _names("Director", n_directors)
    ids = [f"tt{i:07d}" for i in range(n_movies)]

    casts = [
        ", ".join(rng.choice(actors, size=rng.integers(1, 9), replace=False))
        for _ in range(n_movies)
    ]
    genres = [
        ", ".join(rng.choice(GENRES, size=rng.integers(1, 4), replace=False))
        for _ in range(n_movies)
    ]

    movies = pl.DataFrame(
        {
            "id": ids,
            "title": [f"Movie {i}" for i in range(n_movies)],
            "year": rng.choice(YEARS, size=n_movies),
            "cast": casts,
            "director": rng.choice(directors, size=n_movies),
            "genres": genres,
        }
    )

    details = pl.DataFrame(
        {
            "id": ids,
            "rating_all": np.round(np.clip(rng.normal(6.4, 1.1, n_movies), 1.0, 10.0), 1),
            "cumulative_worldwide_gross": np.round(rng.lognormal(16.0, 1.5, n_movies)),
            "award_win": rng.binomial(1, 0.08, n_movies).astype(float),
            "award_nom": rng.binomial(1, 0.15, n_movies).astype(float),
            "winner_oscar": rng.binomial(1, 0.01, n_movies).astype(float),
            "nominee_oscar": rng.binomial(1, 0.03, n_movies).astype(float),
        }
    )

    missing = pl.Series(rng.random(n_movies) < MISSING_SHARE)
    details = details.with_columns(
        pl.when(pl.lit(missing)).then(None).otherwise(pl.col("rating_all")).alias("rating_all"),
        pl.when(pl.lit(pl.Series(rng.random(n_movies) < 0.2)))
        .then(None)
        .otherwise(pl.col("award_nom"))
        .alias("award_nom"),
    )
    return movies, details


def main() -> int:
    args = _parse_args()
    movies, details = build_tables(args.movies, args.actors, args.directors, args.seed)

    args.output_dir.mkdir(parents=True, exist_ok=True)
    movies.write_csv(args.output_dir / "movies.csv")
    details.write_csv(args.output_dir / "movie_details.csv")
    print(f"Wrote {len(movies)} movies to {args.output_dir}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
