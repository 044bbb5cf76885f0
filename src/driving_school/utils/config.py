"""
Configuration management with environment variables.

This module provides centralized configuration management
with validation and type safety.
"""

import os
from datetime import timedelta
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from ..models.lesson import LESSON_DURATIONS


class Config:
    """
    Application configuration manager.

    Loads configuration from environment variables (and a .env file, if
    present) and provides validated access to configuration values.

    Attributes:
        school_name: Display name of the driving school
        data_file: JSON snapshot with students, instructors, vehicles, lessons
        output_dir: Output directory for logs and exports
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file path
        default_lesson_duration: Duration used when a request has none (50 or 100)
        store_failure_threshold: Store failures before the circuit opens
        store_retry_timeout: Cool-down before the store is tried again

    Examples:
        >>> config = Config()
        >>> if config.validate():
        ...     print(f"Loading data from: {config.data_file}")
    """

    def __init__(self):
        """Initialize configuration by loading environment variables."""
        load_dotenv()

        self._school_name = os.getenv("SCHOOL_NAME", "Autoescola")

        data_file = os.getenv("SCHOOL_DATA_FILE")
        self._data_file = Path(data_file) if data_file else None

        # Output settings
        self._output_dir = Path(os.getenv("OUTPUT_DIR", "output"))
        self._log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        self._log_file = os.getenv("LOG_FILE") or None

        # Raw strings; parsed on access and checked by validate()
        self._numeric = {
            "DEFAULT_LESSON_DURATION": os.getenv("DEFAULT_LESSON_DURATION", "50"),
            "STORE_FAILURE_THRESHOLD": os.getenv("STORE_FAILURE_THRESHOLD", "5"),
            "STORE_RETRY_SECONDS": os.getenv("STORE_RETRY_SECONDS", "60"),
        }

    @property
    def school_name(self) -> str:
        """Get the school display name."""
        return self._school_name

    @property
    def data_file(self) -> Optional[Path]:
        """Get the snapshot data file, if configured."""
        return self._data_file

    @property
    def output_dir(self) -> Path:
        """Get output directory path."""
        return self._output_dir

    @property
    def log_level(self) -> str:
        """Get logging level."""
        return self._log_level

    @property
    def log_file(self) -> Optional[str]:
        """Get log file path, if file logging is enabled."""
        return self._log_file

    @property
    def default_lesson_duration(self) -> int:
        """Get default lesson duration in minutes."""
        return self._int_setting("DEFAULT_LESSON_DURATION")

    @property
    def store_failure_threshold(self) -> int:
        """Get number of store failures that opens the circuit."""
        return self._int_setting("STORE_FAILURE_THRESHOLD")

    @property
    def store_retry_timeout(self) -> timedelta:
        """Get cool-down before retrying a failing store."""
        return timedelta(seconds=self._int_setting("STORE_RETRY_SECONDS"))

    def _int_setting(self, name: str) -> int:
        """
        Parse a numeric setting.

        Raises:
            ValueError: If the value is not an integer
        """
        raw = self._numeric[name]
        try:
            return int(raw)
        except (TypeError, ValueError):
            raise ValueError(f"{name} must be an integer, got {raw!r}")

    def validate(self) -> bool:
        """
        Validate configuration values.

        Returns:
            True if all configuration is valid

        Raises:
            ValueError: If validation fails
        """
        errors = []

        if not self._school_name.strip():
            errors.append("SCHOOL_NAME must not be empty")

        if self._data_file is not None and self._data_file.suffix.lower() != ".json":
            errors.append("SCHOOL_DATA_FILE must be a .json file")

        numbers = {}
        for name in self._numeric:
            try:
                numbers[name] = self._int_setting(name)
            except ValueError as e:
                errors.append(str(e))

        duration = numbers.get("DEFAULT_LESSON_DURATION")
        if duration is not None and duration not in LESSON_DURATIONS:
            errors.append(
                "DEFAULT_LESSON_DURATION must be one of: "
                f"{', '.join(str(d) for d in LESSON_DURATIONS)}"
            )

        for name in ("STORE_FAILURE_THRESHOLD", "STORE_RETRY_SECONDS"):
            if numbers.get(name) is not None and numbers[name] <= 0:
                errors.append(f"{name} must be positive")

        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self._log_level not in valid_levels:
            errors.append(
                f"LOG_LEVEL must be one of: {', '.join(valid_levels)}"
            )

        if errors:
            error_msg = "Configuration validation failed:\n  - " + "\n  - ".join(errors)
            raise ValueError(error_msg)

        return True

    def create_output_directories(self):
        """Create output directories if they don't exist."""
        for directory in (self.output_dir / "logs", self.output_dir / "exports"):
            directory.mkdir(parents=True, exist_ok=True)
