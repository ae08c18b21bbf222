"""Scoring stages: outcome labels, primary genre, director and cast scores.

Example:
    >>> from movie_success.etl.scoring import CastScorer, DirectorScorer, OutcomeLabeler
    >>> labeled = OutcomeLabeler().label(clean_movies)
    >>> scored = DirectorScorer().score(extract_primary_genre(labeled))
    >>> scored = CastScorer(main_actor_count=2, supporting_weight=0.1).score(scored)
"""

from movie_success.etl.scoring.cast_scorer import CastScorer, CastStats
from movie_success.etl.scoring.director_scorer import DirectorScorer, DirectorStats
from movie_success.etl.scoring.genre_extractor import extract_primary_genre
from movie_success.etl.scoring.outcome_labeler import OutcomeLabeler, OutcomeStats

__all__ = [
    "CastScorer",
    "CastStats",
    "DirectorScorer",
    "DirectorStats",
    "OutcomeLabeler",
    "OutcomeStats",
    "extract_primary_genre",
]
