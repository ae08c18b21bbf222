"""Modeling harness: logistic regression over the feature table."""

from movie_success.modeling.harness import ModelingHarness, ModelReport

__all__ = ["ModelReport", "ModelingHarness"]
