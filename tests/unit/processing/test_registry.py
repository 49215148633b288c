"""
Tests for the per-target-type configuration registry.
"""

import pytest
from pydantic import ValidationError

from embedprep.core.exceptions.custom_exceptions import ConfigurationError
from embedprep.processing.base import ChunkingStrategy, TargetType
from embedprep.processing.registry import (
    CHUNKING_CONFIGS,
    CLEANING_CONFIGS,
    QUALITY_CONFIGS,
    TYPE_CONFIGS,
    get_chunking_config,
    get_cleaning_config,
    get_preprocessing_config,
    get_quality_config,
    resolve_target_type,
)


class TestRegistryTables:
    """Test cases for the registry contents."""

    def test_every_type_has_every_row(self):
        for table in (CLEANING_CONFIGS, CHUNKING_CONFIGS, QUALITY_CONFIGS, TYPE_CONFIGS):
            assert set(table) == set(TargetType)

    @pytest.mark.parametrize(
        "target_type,target,maximum,minimum,overlap,strategy,headings",
        [
            ("product", 300, 600, 64, 45, ChunkingStrategy.PARAGRAPH, False),
            ("post", 500, 1000, 128, 75, ChunkingStrategy.SEMANTIC, True),
            ("gallery_item", 128, 256, 32, 20, ChunkingStrategy.SENTENCE, False),
            ("comment", 128, 256, 16, 0, ChunkingStrategy.SENTENCE, False),
        ],
    )
    def test_chunking_rows(
        self, target_type, target, maximum, minimum, overlap, strategy, headings
    ):
        config = get_chunking_config(target_type)

        assert config.target_size == target
        assert config.max_size == maximum
        assert config.min_size == minimum
        assert config.overlap == overlap
        assert config.split_by == strategy
        assert config.use_headings_as_boundary is headings

    @pytest.mark.parametrize(
        "target_type,min_length,max_noise,min_score",
        [
            ("product", 20, 0.3, 0.6),
            ("post", 50, 0.3, 0.6),
            ("gallery_item", 10, 0.4, 0.5),
            ("comment", 5, 0.4, 0.5),
        ],
    )
    def test_quality_rows(self, target_type, min_length, max_noise, min_score):
        config = get_quality_config(target_type)

        assert config.min_length == min_length
        assert config.max_noise_ratio == max_noise
        assert config.min_quality_score == min_score

    def test_cleaning_rows(self):
        assert get_cleaning_config("product").remove_markdown
        assert not get_cleaning_config("product").preserve_heading_structure
        assert get_cleaning_config("post").preserve_heading_structure
        assert not get_cleaning_config("gallery_item").remove_markdown
        assert not get_cleaning_config("comment").remove_markdown

    def test_sizes_are_consistent(self):
        for config in CHUNKING_CONFIGS.values():
            assert config.overlap < config.target_size <= config.max_size


class TestLookups:
    """Test cases for lookup functions."""

    def test_string_and_enum_agree(self):
        for target_type in TargetType:
            assert get_preprocessing_config(target_type) == get_preprocessing_config(
                target_type.value
            )

    def test_full_config(self):
        config = get_preprocessing_config(TargetType.POST)

        assert config.cleaning == CLEANING_CONFIGS[TargetType.POST]
        assert config.chunking == CHUNKING_CONFIGS[TargetType.POST]
        assert config.quality == QUALITY_CONFIGS[TargetType.POST]

    def test_resolve(self):
        assert resolve_target_type("gallery_item") is TargetType.GALLERY_ITEM

    def test_unknown_type(self):
        with pytest.raises(ConfigurationError) as exc_info:
            get_chunking_config("newsletter")

        assert exc_info.value.error_code == "CONFIG_UNKNOWN_TARGET_TYPE"
        assert "post" in exc_info.value.details["known_types"]


class TestImmutability:
    """Defaults cannot be modified at runtime."""

    def test_tables_are_read_only(self):
        with pytest.raises(TypeError):
            CHUNKING_CONFIGS[TargetType.POST] = CHUNKING_CONFIGS[TargetType.COMMENT]

    def test_configs_are_frozen(self):
        with pytest.raises(ValidationError):
            get_chunking_config("post").target_size = 10
