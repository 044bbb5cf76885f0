"""
Unit tests for configuration management.
"""

import pytest
from datetime import timedelta
from pathlib import Path

from driving_school.utils.config import Config


ENV_VARS = (
    "SCHOOL_NAME",
    "SCHOOL_DATA_FILE",
    "OUTPUT_DIR",
    "LOG_LEVEL",
    "LOG_FILE",
    "DEFAULT_LESSON_DURATION",
    "STORE_FAILURE_THRESHOLD",
    "STORE_RETRY_SECONDS",
)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run without inherited settings or a stray .env file."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


class TestConfig:
    """Test cases for Config."""

    def test_defaults(self, clean_env):
        """Test values used when nothing is configured."""
        config = Config()

        assert config.school_name == "Autoescola"
        assert config.data_file is None
        assert config.output_dir == Path("output")
        assert config.log_level == "INFO"
        assert config.log_file is None
        assert config.default_lesson_duration == 50
        assert config.store_failure_threshold == 5
        assert config.store_retry_timeout == timedelta(seconds=60)
        assert config.validate()

    def test_environment_overrides(self, clean_env):
        """Test environment variables are read."""
        clean_env.setenv("SCHOOL_DATA_FILE", "data/school.json")
        clean_env.setenv("LOG_LEVEL", "debug")
        clean_env.setenv("DEFAULT_LESSON_DURATION", "100")
        clean_env.setenv("STORE_RETRY_SECONDS", "5")

        config = Config()

        assert config.data_file == Path("data/school.json")
        assert config.log_level == "DEBUG"
        assert config.default_lesson_duration == 100
        assert config.store_retry_timeout == timedelta(seconds=5)
        assert config.validate()

    def test_blank_school_name(self, clean_env):
        """Test an empty school name is rejected."""
        clean_env.setenv("SCHOOL_NAME", "  ")

        with pytest.raises(ValueError, match="SCHOOL_NAME"):
            Config().validate()

    def test_invalid_values_reported_together(self, clean_env):
        """Test validate lists every problem."""
        clean_env.setenv("SCHOOL_DATA_FILE", "school.csv")
        clean_env.setenv("DEFAULT_LESSON_DURATION", "60")
        clean_env.setenv("LOG_LEVEL", "VERBOSE")

        with pytest.raises(ValueError) as exc_info:
            Config().validate()

        message = str(exc_info.value)
        assert "SCHOOL_DATA_FILE" in message
        assert "DEFAULT_LESSON_DURATION" in message
        assert "LOG_LEVEL" in message

    def test_non_integer_values_reported(self, clean_env):
        """Test non-numeric settings load and then fail validation."""
        clean_env.setenv("DEFAULT_LESSON_DURATION", "fifty")
        clean_env.setenv("STORE_RETRY_SECONDS", "soon")

        config = Config()

        with pytest.raises(ValueError) as exc_info:
            config.validate()

        message = str(exc_info.value)
        assert "DEFAULT_LESSON_DURATION must be an integer, got 'fifty'" in message
        assert "STORE_RETRY_SECONDS must be an integer, got 'soon'" in message

    def test_non_integer_value_on_access(self, clean_env):
        """Test reading a non-numeric setting raises ValueError."""
        clean_env.setenv("STORE_FAILURE_THRESHOLD", "many")

        with pytest.raises(ValueError, match="must be an integer"):
            Config().store_failure_threshold

    def test_non_positive_store_settings(self, clean_env):
        """Test store settings must be positive."""
        clean_env.setenv("STORE_FAILURE_THRESHOLD", "0")

        with pytest.raises(ValueError, match="STORE_FAILURE_THRESHOLD must be positive"):
            Config().validate()

    def test_create_output_directories(self, clean_env, tmp_path):
        """Test log and export directories are created."""
        clean_env.setenv("OUTPUT_DIR", str(tmp_path / "out"))

        Config().create_output_directories()

        assert (tmp_path / "out" / "logs").is_dir()
        assert (tmp_path / "out" / "exports").is_dir()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
