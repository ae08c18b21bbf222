"""Tests for the settings modules.

Every test runs with the pipeline environment variables removed (see
the autouse ``clean_env`` fixture).
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from movie_success.settings import (
    CastVariantConfig,
    InputSettings,
    LoggingSettings,
    ModelingSettings,
    PathsSettings,
    ScoringSettings,
    Settings,
    get_settings_dump,
)
from movie_success.settings.base import PROJECT_ROOT, anchor_path

# =============================================================================
# BASE
# =============================================================================


class TestAnchorPath:
    @staticmethod
    def test_root_holds_package() -> None:
        assert (PROJECT_ROOT / "movie_success").is_dir()

    @staticmethod
    def test_relative_anchored_at_root() -> None:
        assert anchor_path(Path("data")) == PROJECT_ROOT / "data"

    @staticmethod
    def test_absolute_untouched(tmp_path: Path) -> None:
        assert anchor_path(tmp_path) == tmp_path


class TestPathsSettings:
    @staticmethod
    def test_defaults() -> None:
        paths = PathsSettings()
        assert paths.data_dir == PROJECT_ROOT / "data"
        assert paths.raw_dir == paths.data_dir / "raw"
        assert paths.features_path == paths.data_dir / "processed" / "features.parquet"

    @staticmethod
    def test_data_dir_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("DATA_DIR", str(tmp_path))
        paths = PathsSettings()
        assert paths.processed_dir == tmp_path / "processed"
        assert InputSettings().movies_path == tmp_path / "raw" / "movies.csv"

    @staticmethod
    def test_relative_data_dir_ignores_cwd(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("DATA_DIR", "datasets")
        assert PathsSettings().data_dir == PROJECT_ROOT / "datasets"


class TestLoggingSettings:
    @staticmethod
    def test_defaults() -> None:
        logging_settings = LoggingSettings()
        assert logging_settings.level == "INFO"
        assert logging_settings.log_dir == PROJECT_ROOT / "logs"

    @staticmethod
    def test_log_dir_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("LOG_DIR", str(tmp_path / "run_logs"))
        assert LoggingSettings().log_dir == tmp_path / "run_logs"

    @staticmethod
    def test_level_upper_cased(monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert LoggingSettings().level == "DEBUG"

    @staticmethod
    def test_invalid_level(monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "VERBOSE")
        with pytest.raises(ValidationError, match="LOG_LEVEL"):
            LoggingSettings()


# =============================================================================
# INPUTS
# =============================================================================


class TestInputSettings:
    @staticmethod
    def test_defaults() -> None:
        inputs = InputSettings()
        assert inputs.key_column == "id"
        assert inputs.list_separator == ","
        assert inputs.movies_path == PathsSettings().raw_dir / "movies.csv"
        assert inputs.details_path.name == "movie_details.csv"

    @staticmethod
    def test_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MOVIES_FILE", "imdb_movies.parquet")
        monkeypatch.setenv("MOVIE_KEY_COLUMN", "imdb_title_id")
        inputs = InputSettings()
        assert inputs.movies_path.name == "imdb_movies.parquet"
        assert inputs.key_column == "imdb_title_id"

    @staticmethod
    def test_empty_separator_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LIST_SEPARATOR", "")
        with pytest.raises(ValidationError, match="LIST_SEPARATOR"):
            InputSettings()


# =============================================================================
# SCORING
# =============================================================================


class TestScoringSettings:
    @staticmethod
    def test_defaults() -> None:
        scoring = ScoringSettings()
        assert scoring.good_rating_threshold == 7.0
        assert scoring.sales_quantile == 0.9
        assert scoring.cast_score == CastVariantConfig(main_actor_count=2, supporting_weight=0.1)
        assert scoring.cast_score2 == CastVariantConfig(main_actor_count=4, supporting_weight=0.2)
        assert scoring.cross_wire is False

    @staticmethod
    def test_variant_from_json(monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CAST_SCORE2", '{"main_actor_count": 5, "supporting_weight": 0.3}')
        scoring = ScoringSettings()
        assert scoring.cast_score2.main_actor_count == 5
        assert scoring.cast_score2.supporting_weight == 0.3

    @staticmethod
    def test_cross_wire_flag(monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CAST_CROSS_WIRE", "true")
        assert ScoringSettings().cross_wire is True

    @staticmethod
    @pytest.mark.parametrize("value", ["0", "1", "1.5"])
    def test_invalid_quantile(monkeypatch: pytest.MonkeyPatch, value: str) -> None:
        monkeypatch.setenv("SALES_QUANTILE", value)
        with pytest.raises(ValidationError):
            ScoringSettings()

    @staticmethod
    def test_invalid_variant() -> None:
        with pytest.raises(ValidationError):
            CastVariantConfig(main_actor_count=0)
        with pytest.raises(ValidationError):
            CastVariantConfig(supporting_weight=-1.0)


# =============================================================================
# MODELING
# =============================================================================


class TestModelingSettings:
    @staticmethod
    def test_defaults() -> None:
        modeling = ModelingSettings()
        assert modeling.test_fraction == 0.1
        assert modeling.random_seed == 42
        assert modeling.max_iter == 1000

    @staticmethod
    def test_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MODEL_TEST_FRACTION", "0.25")
        monkeypatch.setenv("MODEL_RANDOM_SEED", "7")
        modeling = ModelingSettings()
        assert modeling.test_fraction == 0.25
        assert modeling.random_seed == 7

    @staticmethod
    def test_invalid_fraction(monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MODEL_TEST_FRACTION", "1.0")
        with pytest.raises(ValidationError):
            ModelingSettings()


# =============================================================================
# AGGREGATE
# =============================================================================


class TestSettings:
    @staticmethod
    def test_sections() -> None:
        config = Settings()
        assert config.scoring.cast_score.main_actor_count == 2
        assert config.modeling.random_seed == 42

    @staticmethod
    def test_dump_reports_effective_locations() -> None:
        dump = get_settings_dump()
        assert set(dump) == {"paths", "logging", "inputs", "scoring", "modeling"}
        assert dump["logging"]["log_dir"] == str(PROJECT_ROOT / "logs")
        features_path = PROJECT_ROOT / "data" / "processed" / "features.parquet"
        assert dump["paths"]["features_path"] == str(features_path)
        assert Path(dump["inputs"]["movies_path"]).parent == PROJECT_ROOT / "data" / "raw"
