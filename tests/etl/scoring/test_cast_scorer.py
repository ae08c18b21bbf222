"""Unit tests for cast quality scoring."""

import polars as pl
import pytest
from pytest import approx

from movie_success.etl.pipeline.steps import step_6_cast
from movie_success.etl.schemas import MissingColumnError
from movie_success.etl.scoring import CastScorer, CastStats
from movie_success.settings import CastVariantConfig, ScoringSettings


@pytest.fixture
def two_movies(make_movies) -> pl.DataFrame:
    """Movie P (rating 8) billed X, Y; movie Q (rating 6) billed Y, Z, X."""
    return make_movies(
        {"id": "p", "cast": ["X", "Y"], "rating_all": 8.0},
        {"id": "q", "cast": ["Y", "Z", "X"], "rating_all": 6.0},
    )


def _actor_quality(table: pl.DataFrame) -> dict[str, float]:
    return dict(
        zip(
            table.get_column("actor").to_list(),
            table.get_column("actor_quality").to_list(),
            strict=True,
        )
    )


# -------------------------------------------------------------------------
# Construction
# -------------------------------------------------------------------------


class TestCastScorerInit:
    @staticmethod
    def test_defaults() -> None:
        scorer = CastScorer()
        assert scorer.main_actor_count == 2
        assert scorer.supporting_weight == approx(0.1)
        assert scorer.output_column == "cast_score"
        assert isinstance(scorer.stats, CastStats)

    @staticmethod
    def test_rejects_zero_main_actors() -> None:
        with pytest.raises(ValueError, match="main_actor_count"):
            CastScorer(main_actor_count=0)

    @staticmethod
    def test_rejects_negative_weight() -> None:
        with pytest.raises(ValueError, match="supporting_weight"):
            CastScorer(supporting_weight=-0.1)


# -------------------------------------------------------------------------
# Credits and actor totals
# -------------------------------------------------------------------------


class TestCredits:
    @staticmethod
    def test_billing_weights(make_movies) -> None:
        df = make_movies({"cast": ["A", "B", "C"]})
        credits = CastScorer(main_actor_count=2, supporting_weight=0.1).credits(df)
        assert credits.get_column("actor").to_list() == ["A", "B", "C"]
        assert credits.get_column("billing_position").to_list() == [1, 2, 3]
        assert credits.get_column("credit_weight").to_list() == [
            approx(1.0),
            approx(1.0),
            approx(0.1),
        ]

    @staticmethod
    def test_empty_cast_has_no_credits(make_movies) -> None:
        df = make_movies({"cast": []}, {"cast": ["A"]})
        credits = CastScorer().credits(df)
        assert credits.get_column("actor").to_list() == ["A"]
        assert credits.columns == ["id", "actor", "billing_position", "credit_weight", "rating_all"]

    @staticmethod
    def test_actor_totals(two_movies) -> None:
        table = CastScorer(main_actor_count=2, supporting_weight=0.1).actor_scores(two_movies)
        assert _actor_quality(table) == {"X": approx(8.6), "Y": approx(14.0), "Z": approx(6.0)}
        assert table.get_column("actor").to_list() == ["Y", "X", "Z"]
        assert table.get_column("credit_count").to_list() == [2, 2, 1]

    @staticmethod
    def test_totals_not_normalized(make_movies) -> None:
        df = make_movies(*[{"cast": ["Prolific"], "rating_all": 5.0} for _ in range(4)])
        table = CastScorer().actor_scores(df)
        assert _actor_quality(table) == {"Prolific": approx(20.0)}


# -------------------------------------------------------------------------
# Movie scores
# -------------------------------------------------------------------------


class TestScore:
    @staticmethod
    def test_movie_scores(two_movies) -> None:
        scored = CastScorer(main_actor_count=2, supporting_weight=0.1).score(two_movies)
        # P = X + Y = 8.6 + 14.0; Q = Y + Z + 0.1 * X
        assert scored.get_column("cast_score").to_list() == [approx(22.6), approx(20.86)]

    @staticmethod
    def test_wide_main_billing(two_movies) -> None:
        scored = CastScorer(
            main_actor_count=4, supporting_weight=0.2, output_column="cast_score2"
        ).score(two_movies)
        assert scored.get_column("cast_score2").to_list() == [approx(28.0), approx(34.0)]

    @staticmethod
    def test_empty_cast_scores_zero(make_movies) -> None:
        df = make_movies({"cast": []}, {"cast": ["A"], "rating_all": 4.0})
        scored = CastScorer().score(df)
        assert scored.get_column("cast_score").to_list() == [approx(0.0), approx(4.0)]

    @staticmethod
    def test_order_and_columns_preserved(sample_movies) -> None:
        scored = CastScorer().score(sample_movies)
        assert scored.get_column("id").to_list() == ["p", "q", "r", "s"]
        assert scored.columns == [*sample_movies.columns, "cast_score"]

    @staticmethod
    def test_scores_non_negative(sample_movies) -> None:
        scored = CastScorer().score(sample_movies)
        assert scored.get_column("cast_score").min() >= 0.0

    @staticmethod
    def test_supplied_actor_scores(two_movies) -> None:
        actors = pl.DataFrame({"actor": ["X", "Y"], "actor_quality": [1.0, 2.0]})
        scored = CastScorer(main_actor_count=1, supporting_weight=0.5).score(
            two_movies, actor_scores=actors
        )
        # P = 1 * X + 0.5 * Y; Q = 1 * Y + 0.5 * Z(unknown, 0) + 0.5 * X
        assert scored.get_column("cast_score").to_list() == [approx(2.0), approx(2.5)]

    @staticmethod
    def test_supplied_table_needs_quality(two_movies) -> None:
        with pytest.raises(MissingColumnError, match="actor_quality"):
            CastScorer().score(two_movies, actor_scores=pl.DataFrame({"actor": ["X"]}))

    @staticmethod
    def test_stats_updated(make_movies) -> None:
        df = make_movies({"cast": []}, {"cast": ["A", "B"]}, {"cast": ["B"]})
        scorer = CastScorer()
        scorer.score(df)
        assert scorer.stats.total_movies == 3
        assert scorer.stats.credits == 3
        assert scorer.stats.actors == 2
        assert scorer.stats.movies_without_cast == 1
        assert scorer.stats.reused_actor_scores is False


# -------------------------------------------------------------------------
# Both variants (pipeline step)
# -------------------------------------------------------------------------


def _scoring(cross_wire: bool) -> ScoringSettings:
    return ScoringSettings(
        CAST_SCORE=CastVariantConfig(main_actor_count=2, supporting_weight=0.1),
        CAST_SCORE2=CastVariantConfig(main_actor_count=4, supporting_weight=0.2),
        CAST_CROSS_WIRE=cross_wire,
    )


class TestCastVariants:
    @staticmethod
    def test_independent_variants(two_movies) -> None:
        scored, actors = step_6_cast(two_movies, _scoring(cross_wire=False))
        assert scored.get_column("cast_score").to_list() == [approx(22.6), approx(20.86)]
        assert scored.get_column("cast_score2").to_list() == [approx(28.0), approx(34.0)]
        assert _actor_quality(actors["cast_score2"]) == {
            "X": approx(14.0),
            "Y": approx(14.0),
            "Z": approx(6.0),
        }

    @staticmethod
    def test_cross_wired_variants(two_movies) -> None:
        scored, actors = step_6_cast(two_movies, _scoring(cross_wire=True))
        # second variant weights over first variant actor totals
        assert scored.get_column("cast_score2").to_list() == [approx(22.6), approx(28.6)]
        assert actors["cast_score2"] is actors["cast_score"]
