"""Centralized configuration for the movie success pipeline.

All configuration values are sourced from environment variables (.env file)
and every value has a safe default, so the pipeline runs unconfigured.

Usage:
    from movie_success.settings import settings

    settings.scoring.cast_score.main_actor_count
    settings.modeling.test_fraction
"""

from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from movie_success.settings.base import LoggingSettings, PathsSettings
from movie_success.settings.inputs import InputSettings
from movie_success.settings.modeling import ModelingSettings
from movie_success.settings.scoring import CastVariantConfig, ScoringSettings

__all__ = [
    # Main
    "Settings",
    "settings",
    # Base
    "PathsSettings",
    "LoggingSettings",
    # Pipeline
    "InputSettings",
    "ScoringSettings",
    "CastVariantConfig",
    "ModelingSettings",
    # Utilities
    "get_settings_dump",
]


# =============================================================================
# GLOBAL SETTINGS
# =============================================================================


class Settings(BaseSettings):
    """Global application settings.

    Aggregates all configuration sections into a single object.
    Access via the singleton: `from movie_success.settings import settings`
    """

    paths: PathsSettings = Field(default_factory=PathsSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    inputs: InputSettings = Field(default_factory=InputSettings)
    scoring: ScoringSettings = Field(default_factory=ScoringSettings)
    modeling: ModelingSettings = Field(default_factory=ModelingSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# =============================================================================
# SINGLETON INSTANCE
# =============================================================================

settings = Settings()


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def get_settings_dump() -> dict[str, Any]:
    """Return the effective configuration as a plain dictionary.

    Returns:
        Configuration dictionary safe for logging.
    """
    config = settings.model_dump(mode="json")
    config["paths"].update(
        raw_dir=str(settings.paths.raw_dir),
        processed_dir=str(settings.paths.processed_dir),
        features_path=str(settings.paths.features_path),
    )
    config["inputs"].update(
        movies_path=str(settings.inputs.movies_path),
        details_path=str(settings.inputs.details_path),
    )
    return config
