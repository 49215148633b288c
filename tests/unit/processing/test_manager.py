"""
Unit tests for ProcessingManager and the pipeline entry points
"""

import json

import pytest

from embedprep.core.config.validation import PreprocessingConfigOverride
from embedprep.core.exceptions.custom_exceptions import ConfigurationError
from embedprep.processing import (
    PreprocessingInput,
    ProcessingManager,
    QualityStatus,
    TargetType,
    preprocess_and_filter,
    preprocess_content,
)
from embedprep.processing.base import ChunkingStrategy, InvalidReason

PRODUCT_TEXT = "First paragraph.\n\nSecond paragraph.\n\nThird paragraph."


class TestProcessingManager:
    """Test cases for ProcessingManager"""

    def test_initialization(self):
        manager = ProcessingManager("post")

        assert manager.target_type is TargetType.POST
        assert manager.config.chunking.target_size == 500
        assert manager.config.quality.min_length == 50

    def test_initialization_with_override(self):
        override = PreprocessingConfigOverride.model_validate(
            {"chunking": {"target_size": 400}}
        )

        manager = ProcessingManager(TargetType.POST, config_override=override)

        assert manager.config.chunking.target_size == 400
        assert manager.config.chunking.max_size == 1000

    def test_unknown_target_type(self):
        with pytest.raises(ConfigurationError):
            ProcessingManager("newsletter")

    def test_conflicting_override(self):
        override = PreprocessingConfigOverride.model_validate(
            {"chunking": {"overlap": 200}}
        )

        with pytest.raises(ConfigurationError) as exc_info:
            ProcessingManager("comment", config_override=override)

        assert exc_info.value.error_code == "CONFIG_OVERRIDE_CONFLICT"

    def test_empty_content(self):
        result = ProcessingManager("product").process("")

        assert result.chunks == ()
        assert result.metadata.quality.total == 0
        assert result.metadata.cleaning.cleaning_ratio == 1.0
        assert result.metadata.chunking.total_chunks == 0
        assert result.metadata.chunking.strategy == ChunkingStrategy.PARAGRAPH

    def test_short_product_paragraphs_merge(self):
        """Paragraphs below the product min_size are merged into one chunk."""
        result = ProcessingManager("product").process(PRODUCT_TEXT)

        assert [c.text for c in result.chunks] == [PRODUCT_TEXT]
        assert result.chunks[0].char_end == len(PRODUCT_TEXT)
        assert result.chunks[0].quality_status == QualityStatus.PASSED

    def test_min_size_override_keeps_short_paragraphs_apart(self):
        override = PreprocessingConfigOverride.model_validate(
            {"chunking": {"min_size": 1}}
        )

        result = ProcessingManager("product", override).process(PRODUCT_TEXT)

        assert [c.text for c in result.chunks] == [
            "First paragraph.",
            "Second paragraph.",
            "Third paragraph.",
        ]
        assert all(
            c.validity_result.reason == InvalidReason.TOO_SHORT for c in result.chunks
        )
        assert result.metadata.quality.failed == 3

    def test_post_sections(self, sample_article):
        result = ProcessingManager("post").process(sample_article)

        assert len(result.chunks) == 2
        assert [c.heading_context for c in result.chunks] == ["Intro", "Details"]
        assert result.chunks[0].text.startswith("# Intro")
        assert result.chunks[1].text.startswith("# Details")
        assert all(c.quality_status == QualityStatus.PASSED for c in result.chunks)
        assert result.metadata.chunking.strategy == ChunkingStrategy.SEMANTIC

    def test_short_comment_sentences_merge(self):
        raw = "<p>Nice   shot.</p> <p>Lovely light here!</p>"

        result = ProcessingManager("comment").process(raw)

        assert [c.text for c in result.chunks] == ["Nice shot. Lovely light here!"]
        assert (result.chunks[0].char_start, result.chunks[0].char_end) == (0, 29)

    def test_offsets_refer_to_cleaned_text(self):
        raw = "<p>Nice   shot.</p> <p>Lovely light here!</p>"
        override = PreprocessingConfigOverride.model_validate(
            {"chunking": {"min_size": 1}}
        )

        result = ProcessingManager("comment", override).process(raw)

        assert [c.text for c in result.chunks] == ["Nice shot.", "Lovely light here!"]
        assert result.chunks[1].char_start == 11
        assert result.metadata.cleaning.cleaners_applied[0] == "HtmlStripper"

    def test_duplicate_sentence_in_comment(self, sample_comment, comment_sentences):
        first, second = comment_sentences

        result = ProcessingManager("comment").process(sample_comment)

        assert [c.text for c in result.chunks] == [first, first, second]
        assert [c.quality_status for c in result.chunks] == [
            QualityStatus.PASSED,
            QualityStatus.FAILED,
            QualityStatus.PASSED,
        ]
        quality = result.metadata.quality
        assert (quality.total, quality.passed, quality.failed) == (3, 2, 1)

    def test_summary_matches_chunks(self, sample_article):
        result = ProcessingManager("post").process(sample_article)
        quality = result.metadata.quality

        assert quality.total == len(result.chunks)
        assert quality.passed + quality.incomplete + quality.failed == quality.total

    def test_process_and_filter(self, sample_comment):
        manager = ProcessingManager("comment")

        full = manager.process(sample_comment)
        filtered = manager.process_and_filter(sample_comment)

        assert [c.index for c in filtered.chunks] == [0, 2]
        assert isinstance(filtered.chunks, tuple)
        assert all(c.is_embeddable for c in filtered.chunks)
        assert filtered.metadata == full.metadata

    def test_process_and_filter_all_failed(self):
        manager = ProcessingManager("comment")

        filtered = manager.process_and_filter("Hi!")

        assert filtered.chunks == ()
        assert filtered.metadata.quality.total == 1

    def test_override_changes_quality_gate(self, sample_comment):
        override = PreprocessingConfigOverride.model_validate(
            {"quality": {"min_length": 100}}
        )

        result = ProcessingManager("comment", override).process(sample_comment)

        assert result.chunks[0].validity_result.reason == InvalidReason.TOO_SHORT

    def test_result_is_json_serializable(self, sample_comment):
        result = ProcessingManager("comment").process(sample_comment)

        data = json.loads(json.dumps(result.to_dict()))

        assert data["chunks"][1]["quality_status"] == "failed"
        assert data["chunks"][1]["validity_result"]["reason"] == "duplicate"
        assert data["metadata"]["chunking"]["strategy"] == "sentence"
        assert data["metadata"]["quality"]["total"] == 3


class TestPipelineFunctions:
    """Test cases for preprocess_content and preprocess_and_filter"""

    def test_preprocess_content(self, sample_comment):
        result = preprocess_content(
            PreprocessingInput(target_type=TargetType.COMMENT, raw_content=sample_comment)
        )

        assert result.metadata.quality.total == 3

    def test_preprocess_content_empty(self):
        result = preprocess_content(
            PreprocessingInput(target_type=TargetType.PRODUCT, raw_content="")
        )

        assert result.chunks == ()
        assert result.metadata.quality.total == 0

    def test_preprocess_and_filter(self, sample_comment, comment_sentences):
        result = preprocess_and_filter(
            PreprocessingInput(target_type=TargetType.COMMENT, raw_content=sample_comment)
        )

        assert [c.text for c in result.chunks] == list(comment_sentences)
        assert result.metadata.quality.failed == 1

    def test_deterministic(self, sample_article):
        data = PreprocessingInput(target_type=TargetType.POST, raw_content=sample_article)

        assert preprocess_content(data) == preprocess_content(data)
