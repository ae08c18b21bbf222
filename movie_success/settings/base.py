"""Data and logging locations.

Relative directories from the environment are anchored at the project
root, so a run uses the same data and log locations whatever the
working directory.
"""

from pathlib import Path
from typing import Final

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT: Final[Path] = Path(__file__).resolve().parent.parent.parent
FEATURES_FILE: Final[str] = "features.parquet"
VALID_LOG_LEVELS: Final[frozenset[str]] = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


def anchor_path(path: Path) -> Path:
    """Resolve a relative path against the project root."""
    return path if path.is_absolute() else PROJECT_ROOT / path


class PathsSettings(BaseSettings):
    """Data directories.

    Inputs are looked up in ``<DATA_DIR>/raw`` and the feature table is
    written to ``<DATA_DIR>/processed`` unless the CLI says otherwise.

    Attributes:
        data_dir: Root of the raw and processed tables.
    """

    data_dir: Path = Field(default=Path("data"), alias="DATA_DIR")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("data_dir")
    @classmethod
    def anchor_data_dir(cls, v: Path) -> Path:
        return anchor_path(v)

    @property
    def raw_dir(self) -> Path:
        """Raw input tables (movies and details)."""
        return self.data_dir / "raw"

    @property
    def processed_dir(self) -> Path:
        """Feature and person tables produced by the pipeline."""
        return self.data_dir / "processed"

    @property
    def features_path(self) -> Path:
        """Default destination of the feature table."""
        return self.processed_dir / FEATURES_FILE


class LoggingSettings(BaseSettings):
    """Logging configuration.

    Attributes:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_dir: Directory of the dated log files.
    """

    level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_dir: Path = Field(default=Path("logs"), alias="LOG_DIR")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        v_upper = v.upper()
        if v_upper not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid LOG_LEVEL. Valid: {sorted(VALID_LOG_LEVELS)}")
        return v_upper

    @field_validator("log_dir")
    @classmethod
    def anchor_log_dir(cls, v: Path) -> Path:
        return anchor_path(v)
