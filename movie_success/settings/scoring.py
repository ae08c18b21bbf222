"""Scoring configuration settings.

Thresholds of the outcome labels and the two cast-scoring variants.
Cast variants are read from the environment as JSON objects, e.g.
``CAST_SCORE2='{"main_actor_count": 4, "supporting_weight": 0.2}'``.
"""

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CastVariantConfig(BaseModel):
    """Billing weights of one cast-scoring variant.

    Attributes:
        main_actor_count: Billing positions 1..M weigh 1.0.
        supporting_weight: Weight of every position after M.
    """

    main_actor_count: int = Field(default=2, ge=1)
    supporting_weight: float = Field(default=0.1, ge=0.0)


class ScoringSettings(BaseSettings):
    """Outcome labeling and person scoring configuration.

    Attributes:
        good_rating_threshold: Ratings strictly above it are "good".
        sales_quantile: Per-year gross quantile used as the sales threshold.
        cast_score: First cast variant (default M=2, S=0.1).
        cast_score2: Second cast variant (default M=4, S=0.2).
        cross_wire: Reuse cast_score actor totals for cast_score2 movies.
    """

    good_rating_threshold: float = Field(default=7.0, alias="GOOD_RATING_THRESHOLD")
    sales_quantile: float = Field(default=0.9, gt=0.0, lt=1.0, alias="SALES_QUANTILE")
    cast_score: CastVariantConfig = Field(
        default_factory=lambda: CastVariantConfig(main_actor_count=2, supporting_weight=0.1),
        alias="CAST_SCORE",
    )
    cast_score2: CastVariantConfig = Field(
        default_factory=lambda: CastVariantConfig(main_actor_count=4, supporting_weight=0.2),
        alias="CAST_SCORE2",
    )
    cross_wire: bool = Field(default=False, alias="CAST_CROSS_WIRE")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )
