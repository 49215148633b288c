"""
Configuration schemas and validation utilities for EmbedPrep.

This module holds the Pydantic models behind every per-type preprocessing
setting, plus the validation of partial overrides that an operator may supply
(for example from a YAML file or an admin settings table) on top of the
built-in registry defaults.

Key Features:
    - Frozen Pydantic models for cleaner, chunking and quality gate settings
    - Numeric bounds shared by the defaults and by operator overrides
    - Cross-field checks (overlap < target_size <= max_size)
    - Loading overrides from YAML or JSON files
    - Detailed error reporting through ConfigurationError

Example Usage:
    >>> overrides = ConfigValidator.validate_config(
    ...     {"post": {"chunking": {"target_size": 400}}}
    ... )
    >>> overrides[TargetType.POST].chunking.target_size
    400
"""

import json
import re
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from embedprep.core.exceptions.custom_exceptions import ConfigurationError
from embedprep.processing.base import ChunkingStrategy, TargetType

# Bounds for chunking config values (tokens)
CHUNKING_BOUNDS: Dict[str, Tuple[int, int]] = {
    "target_size": (50, 2000),
    "overlap": (0, 500),
    "min_size": (1, 1000),
    "max_size": (100, 5000),
}

# Bounds for quality gate config values
QUALITY_BOUNDS: Dict[str, Tuple[float, float]] = {
    "min_length": (1, 1000),
    "min_quality_score": (0.0, 1.0),
    "max_noise_ratio": (0.0, 1.0),
}


class CleanerConfig(BaseModel):
    """Flags selecting which cleaners run, in pipeline order."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    remove_html: bool = True
    remove_markdown: bool = True
    remove_urls: bool = True
    remove_emails: bool = True
    remove_noise: bool = True
    normalize_unicode: bool = True
    normalize_whitespace: bool = True
    preserve_heading_structure: bool = False
    custom_patterns: Tuple[str, ...] = ()

    @field_validator("custom_patterns")
    @classmethod
    def validate_patterns_compile(cls, v):
        for pattern in v:
            try:
                re.compile(pattern)
            except re.error as e:
                raise ValueError(f"invalid custom pattern {pattern!r}: {e}")
        return v


class ChunkingConfig(BaseModel):
    """
    Segmentation settings for one target type.

    Sizes are estimated tokens. ``target_size`` is what packing aims for,
    ``max_size`` is the point past which a span must be split further and
    ``overlap`` only applies to the fixed-size strategy.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", use_enum_values=False)

    target_size: int = Field(
        ge=CHUNKING_BOUNDS["target_size"][0], le=CHUNKING_BOUNDS["target_size"][1]
    )
    max_size: int = Field(
        ge=CHUNKING_BOUNDS["max_size"][0], le=CHUNKING_BOUNDS["max_size"][1]
    )
    overlap: int = Field(
        default=0, ge=CHUNKING_BOUNDS["overlap"][0], le=CHUNKING_BOUNDS["overlap"][1]
    )
    min_size: int = Field(
        default=1, ge=CHUNKING_BOUNDS["min_size"][0], le=CHUNKING_BOUNDS["min_size"][1]
    )
    split_by: ChunkingStrategy = ChunkingStrategy.SENTENCE
    use_headings_as_boundary: bool = False

    @model_validator(mode="after")
    def validate_sizes(self):
        if self.overlap >= self.target_size:
            raise ValueError("overlap must be smaller than target_size")
        if self.target_size > self.max_size:
            raise ValueError("target_size must not exceed max_size")
        return self


class QualityGateConfig(BaseModel):
    """
    Quality gate thresholds for one target type.

    ``min_length`` is a character count. ``min_quality_score`` separates
    passed from incomplete chunks among the valid ones.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    min_length: int = Field(
        ge=QUALITY_BOUNDS["min_length"][0], le=QUALITY_BOUNDS["min_length"][1]
    )
    max_noise_ratio: float = Field(
        ge=QUALITY_BOUNDS["max_noise_ratio"][0], le=QUALITY_BOUNDS["max_noise_ratio"][1]
    )
    min_quality_score: float = Field(
        default=0.5,
        ge=QUALITY_BOUNDS["min_quality_score"][0],
        le=QUALITY_BOUNDS["min_quality_score"][1],
    )


class TypePreprocessingConfig(BaseModel):
    """Complete preprocessing configuration for one target type."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    cleaning: CleanerConfig
    chunking: ChunkingConfig
    quality: QualityGateConfig


class ChunkingConfigOverride(BaseModel):
    """Partial ChunkingConfig; unset fields keep the registry default."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    target_size: Optional[int] = Field(
        default=None,
        ge=CHUNKING_BOUNDS["target_size"][0],
        le=CHUNKING_BOUNDS["target_size"][1],
    )
    max_size: Optional[int] = Field(
        default=None,
        ge=CHUNKING_BOUNDS["max_size"][0],
        le=CHUNKING_BOUNDS["max_size"][1],
    )
    overlap: Optional[int] = Field(
        default=None,
        ge=CHUNKING_BOUNDS["overlap"][0],
        le=CHUNKING_BOUNDS["overlap"][1],
    )
    min_size: Optional[int] = Field(
        default=None,
        ge=CHUNKING_BOUNDS["min_size"][0],
        le=CHUNKING_BOUNDS["min_size"][1],
    )
    split_by: Optional[ChunkingStrategy] = None
    use_headings_as_boundary: Optional[bool] = None


class QualityGateConfigOverride(BaseModel):
    """Partial QualityGateConfig; unset fields keep the registry default."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    min_length: Optional[int] = Field(
        default=None,
        ge=QUALITY_BOUNDS["min_length"][0],
        le=QUALITY_BOUNDS["min_length"][1],
    )
    max_noise_ratio: Optional[float] = Field(
        default=None,
        ge=QUALITY_BOUNDS["max_noise_ratio"][0],
        le=QUALITY_BOUNDS["max_noise_ratio"][1],
    )
    min_quality_score: Optional[float] = Field(
        default=None,
        ge=QUALITY_BOUNDS["min_quality_score"][0],
        le=QUALITY_BOUNDS["min_quality_score"][1],
    )


class PreprocessingConfigOverride(BaseModel):
    """Operator override for one target type. Cleaning is not overridable."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    chunking: Optional[ChunkingConfigOverride] = None
    quality: Optional[QualityGateConfigOverride] = None


def _format_errors(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in e['loc'])}: {e['msg']}" for e in error.errors()
    )


def merge_config_override(
    base: TypePreprocessingConfig,
    override: Optional[PreprocessingConfigOverride],
) -> TypePreprocessingConfig:
    """
    Apply ``override`` on top of ``base`` and re-validate the result.

    The merged sections are validated as a whole, so an override that is
    valid on its own but conflicts with a default (say an overlap above the
    default target size) is rejected.

    Raises:
        ConfigurationError: If the merged configuration is invalid
    """
    if override is None:
        return base

    try:
        chunking = base.chunking
        if override.chunking is not None:
            chunking = ChunkingConfig.model_validate(
                {
                    **base.chunking.model_dump(),
                    **override.chunking.model_dump(exclude_none=True),
                }
            )
        quality = base.quality
        if override.quality is not None:
            quality = QualityGateConfig.model_validate(
                {
                    **base.quality.model_dump(),
                    **override.quality.model_dump(exclude_none=True),
                }
            )
    except ValidationError as e:
        raise ConfigurationError(
            f"Configuration override conflicts with defaults: {_format_errors(e)}",
            error_code="CONFIG_OVERRIDE_CONFLICT",
            details={"override": override.model_dump(exclude_none=True)},
        ) from e

    return TypePreprocessingConfig(
        cleaning=base.cleaning, chunking=chunking, quality=quality
    )


def validate_preprocessing_config(
    data: Any,
) -> Dict[TargetType, PreprocessingConfigOverride]:
    """
    Validate a ``{target_type: override}`` mapping.

    ``None`` is treated as "no overrides".

    Raises:
        ConfigurationError: For unknown target types or invalid values
    """
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            "Preprocessing config must be a mapping of target type to overrides",
            error_code="CONFIG_INVALID_FORMAT",
            details={"received": type(data).__name__},
        )

    overrides: Dict[TargetType, PreprocessingConfigOverride] = {}
    errors = []
    for key, value in data.items():
        try:
            target_type = TargetType(key)
        except ValueError:
            errors.append(f"{key}: unknown target type")
            continue
        try:
            overrides[target_type] = PreprocessingConfigOverride.model_validate(
                value or {}
            )
        except ValidationError as e:
            errors.append(f"{key}.{_format_errors(e)}")

    if errors:
        raise ConfigurationError(
            f"Configuration validation failed: {'; '.join(errors)}",
            error_code="CONFIG_VALIDATION_ERROR",
            details={"errors": errors},
        )
    return overrides


class ConfigValidator:
    """Load and validate preprocessing override files"""

    @staticmethod
    def load_config(file_path: str) -> Dict[str, Any]:
        """Load configuration from a YAML or JSON file"""
        path = Path(file_path)

        if not path.exists():
            raise ConfigurationError(f"Configuration file not found: {file_path}")

        suffix = path.suffix.lower()
        if suffix not in [".yaml", ".yml", ".json"]:
            raise ConfigurationError(f"Unsupported file format: {path.suffix}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                if suffix == ".json":
                    return json.load(f)
                return yaml.safe_load(f)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to load configuration: {e}") from e

    @staticmethod
    def validate_config(
        config: Any,
    ) -> Dict[TargetType, PreprocessingConfigOverride]:
        """Validate a preprocessing override mapping"""
        return validate_preprocessing_config(config)

    @staticmethod
    def validate_file(file_path: str) -> Dict[TargetType, PreprocessingConfigOverride]:
        """Load and validate a configuration file"""
        config = ConfigValidator.load_config(file_path)
        return ConfigValidator.validate_config(config)
