"""
Core configuration management for EmbedPrep.

This module provides centralized application settings using Pydantic settings
with support for environment variables and type validation. Per-entity-type
tuning (chunk sizes, quality thresholds, cleaner flags) is not an environment
concern and lives in ``embedprep.processing.registry``; the settings here cover
the runtime knobs shared by every target type.

Classes:
    Settings: Main configuration class with all application settings

Environment Variables:
    Settings can be overridden using environment variables with the same names
    as the class attributes (case-sensitive), or through a ``.env`` file.

Example:
    >>> from embedprep.core.config.settings import Settings
    >>> settings = Settings(DUPLICATE_SIMILARITY_THRESHOLD=0.9)
    >>> settings.DUPLICATE_SIMILARITY_THRESHOLD
    0.9

Configuration Sections:
    - Application: Basic app configuration (name, version, environment)
    - Logging: Application logging configuration
    - Quality Gate: Defaults shared by all target types
"""

from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Attributes:
        APP_NAME: Application name identifier
        APP_VERSION: Current application version
        ENVIRONMENT: Deployment environment (development/testing/production)
        DEBUG: Enable debug mode with rich console logging

        LOG_LEVEL: Logging level (DEBUG/INFO/WARNING/ERROR/CRITICAL)
        LOG_FORMAT: Log format (json/text)
        LOG_FILE_PATH: Path for log file output (optional)

        DUPLICATE_SIMILARITY_THRESHOLD: Word-set similarity at or above which
            a later chunk is treated as a near-duplicate of an earlier one
        DEFAULT_TARGET_TYPE: Target type used by the CLI when none is given

    Example:
        >>> settings = Settings()
        >>> print(f"Log level: {settings.LOG_LEVEL}")
    """

    # Application
    APP_NAME: str = "EmbedPrep"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = "production"
    DEBUG: bool = False

    # Logging Configuration
    LOG_LEVEL: str = "WARNING"
    LOG_FORMAT: str = "json"
    LOG_FILE_PATH: Optional[str] = None

    # Quality Gate
    DUPLICATE_SIMILARITY_THRESHOLD: float = 0.95
    DEFAULT_TARGET_TYPE: str = "post"

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """
        Validate logging level is a supported value.

        Converts to uppercase for consistency.

        Raises:
            ValueError: If log level is not supported
        """
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of: {valid_levels}")
        return v.upper()

    @field_validator("DUPLICATE_SIMILARITY_THRESHOLD")
    @classmethod
    def validate_similarity_threshold(cls, v: float) -> float:
        """Similarity is a Jaccard ratio, so the threshold must lie in [0, 1]."""
        if not 0.0 <= v <= 1.0:
            raise ValueError("DUPLICATE_SIMILARITY_THRESHOLD must be between 0 and 1")
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",  # This will ignore extra fields from environment
    )


settings = Settings()
