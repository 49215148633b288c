"""
Per-target-type configuration registry.

Each target type carries independently tuned cleaning, chunking and quality
settings:

    - comment: plain text, sentence splitting, very low minimum length
    - post: Markdown articles, heading-aware semantic chunking, larger sizes
    - product / gallery_item: short descriptions and captions, no heading logic

The tables are built once at import time from frozen models and exposed
through read-only mappings. Adding a target type means adding a row to every
table below.
"""

from types import MappingProxyType
from typing import Mapping, Union

from embedprep.core.config.validation import (
    ChunkingConfig,
    CleanerConfig,
    QualityGateConfig,
    TypePreprocessingConfig,
)
from embedprep.core.exceptions.custom_exceptions import ConfigurationError
from embedprep.processing.base import ChunkingStrategy, TargetType

DEFAULT_CLEANER_CONFIG = CleanerConfig()

CLEANING_CONFIGS: Mapping[TargetType, CleanerConfig] = MappingProxyType(
    {
        TargetType.PRODUCT: CleanerConfig(remove_markdown=True),
        TargetType.POST: CleanerConfig(
            remove_markdown=True, preserve_heading_structure=True
        ),
        # Captions and comments are plain text; keep literal * and _ intact.
        TargetType.GALLERY_ITEM: CleanerConfig(remove_markdown=False),
        TargetType.COMMENT: CleanerConfig(remove_markdown=False),
    }
)

CHUNKING_CONFIGS: Mapping[TargetType, ChunkingConfig] = MappingProxyType(
    {
        TargetType.PRODUCT: ChunkingConfig(
            target_size=300,
            max_size=600,
            min_size=64,
            overlap=45,
            split_by=ChunkingStrategy.PARAGRAPH,
            use_headings_as_boundary=False,
        ),
        TargetType.POST: ChunkingConfig(
            target_size=500,
            max_size=1000,
            min_size=128,
            overlap=75,
            split_by=ChunkingStrategy.SEMANTIC,
            use_headings_as_boundary=True,
        ),
        TargetType.GALLERY_ITEM: ChunkingConfig(
            target_size=128,
            max_size=256,
            min_size=32,
            overlap=20,
            split_by=ChunkingStrategy.SENTENCE,
            use_headings_as_boundary=False,
        ),
        TargetType.COMMENT: ChunkingConfig(
            target_size=128,
            max_size=256,
            min_size=16,
            overlap=0,
            split_by=ChunkingStrategy.SENTENCE,
            use_headings_as_boundary=False,
        ),
    }
)

QUALITY_CONFIGS: Mapping[TargetType, QualityGateConfig] = MappingProxyType(
    {
        TargetType.PRODUCT: QualityGateConfig(
            min_length=20, max_noise_ratio=0.3, min_quality_score=0.6
        ),
        TargetType.POST: QualityGateConfig(
            min_length=50, max_noise_ratio=0.3, min_quality_score=0.6
        ),
        TargetType.GALLERY_ITEM: QualityGateConfig(
            min_length=10, max_noise_ratio=0.4, min_quality_score=0.5
        ),
        TargetType.COMMENT: QualityGateConfig(
            min_length=5, max_noise_ratio=0.4, min_quality_score=0.5
        ),
    }
)

TYPE_CONFIGS: Mapping[TargetType, TypePreprocessingConfig] = MappingProxyType(
    {
        target_type: TypePreprocessingConfig(
            cleaning=CLEANING_CONFIGS[target_type],
            chunking=CHUNKING_CONFIGS[target_type],
            quality=QUALITY_CONFIGS[target_type],
        )
        for target_type in TargetType
    }
)


def resolve_target_type(target_type: Union[TargetType, str]) -> TargetType:
    """
    Coerce ``target_type`` to the TargetType enum.

    Raises:
        ConfigurationError: If the value is not one of the known types
    """
    try:
        return TargetType(target_type)
    except ValueError as e:
        raise ConfigurationError(
            f"Unknown target type {target_type!r}",
            error_code="CONFIG_UNKNOWN_TARGET_TYPE",
            details={"known_types": [t.value for t in TargetType]},
        ) from e


def get_cleaning_config(target_type: Union[TargetType, str]) -> CleanerConfig:
    return CLEANING_CONFIGS[resolve_target_type(target_type)]


def get_chunking_config(target_type: Union[TargetType, str]) -> ChunkingConfig:
    return CHUNKING_CONFIGS[resolve_target_type(target_type)]


def get_quality_config(target_type: Union[TargetType, str]) -> QualityGateConfig:
    return QUALITY_CONFIGS[resolve_target_type(target_type)]


def get_preprocessing_config(
    target_type: Union[TargetType, str]
) -> TypePreprocessingConfig:
    """Full cleaning, chunking and quality configuration for ``target_type``."""
    return TYPE_CONFIGS[resolve_target_type(target_type)]
