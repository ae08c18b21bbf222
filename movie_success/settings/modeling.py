"""Modeling harness configuration settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ModelingSettings(BaseSettings):
    """Logistic regression harness configuration.

    Attributes:
        test_fraction: Share of rows held out for evaluation.
        random_seed: Seed of the train/test split.
        max_iter: Solver iteration cap.
    """

    test_fraction: float = Field(default=0.1, gt=0.0, lt=1.0, alias="MODEL_TEST_FRACTION")
    random_seed: int = Field(default=42, alias="MODEL_RANDOM_SEED")
    max_iter: int = Field(default=1000, ge=1, alias="MODEL_MAX_ITER")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )
