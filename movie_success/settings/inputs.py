"""Input tables configuration settings.

The movie dataset ships as two row-aligned tables sharing a movie key.
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class InputSettings(BaseSettings):
    """Input tables configuration.

    Attributes:
        movies_file: Primary table (title, year, cast, director, genres).
        details_file: Secondary table (ratings, gross, awards).
        key_column: Movie identifier shared by both tables.
        list_separator: Separator of text-encoded sequence fields.
    """

    movies_file: str = Field(default="movies.csv", alias="MOVIES_FILE")
    details_file: str = Field(default="movie_details.csv", alias="DETAILS_FILE")
    key_column: str = Field(default="id", alias="MOVIE_KEY_COLUMN")
    list_separator: str = Field(default=",", alias="LIST_SEPARATOR")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("list_separator")
    @classmethod
    def validate_list_separator(cls, v: str) -> str:
        """Reject an empty separator."""
        if not v:
            raise ValueError("LIST_SEPARATOR must not be empty")
        return v

    @property
    def movies_path(self) -> Path:
        """Default path of the movies table."""
        from movie_success.settings.base import PathsSettings

        return PathsSettings().raw_dir / self.movies_file

    @property
    def details_path(self) -> Path:
        """Default path of the details table."""
        from movie_success.settings.base import PathsSettings

        return PathsSettings().raw_dir / self.details_file
