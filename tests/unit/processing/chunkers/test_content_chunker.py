"""
Tests for chunk_content dispatch, positioning and metadata.
"""

import pytest

from embedprep.core.config.validation import ChunkingConfig
from embedprep.core.exceptions.custom_exceptions import ConfigurationError
from embedprep.processing.base import ChunkingStrategy
from embedprep.processing.chunking.content_chunker import (
    chunk_content,
    chunk_content_for_type,
    get_chunker,
)
from embedprep.processing.chunking.semantic_chunker import SemanticChunker
from embedprep.processing.chunking.sentence_chunker import (
    ParagraphChunker,
    SentenceChunker,
)
from embedprep.processing.chunking.sliding_window_chunker import SlidingWindowChunker
from embedprep.processing.chunking.token_estimator import estimate_token_count


def _config(split_by, **kwargs):
    values = {"target_size": 50, "max_size": 100, "split_by": split_by}
    values.update(kwargs)
    return ChunkingConfig(**values)


class TestGetChunker:
    """Test cases for strategy selection."""

    @pytest.mark.parametrize(
        "split_by,expected",
        [
            ("sentence", SentenceChunker),
            ("paragraph", ParagraphChunker),
            ("fixed", SlidingWindowChunker),
            ("semantic", SemanticChunker),
        ],
    )
    def test_strategy_classes(self, split_by, expected):
        assert isinstance(get_chunker(_config(split_by)), expected)

    def test_fixed_sizes_are_converted_to_characters(self):
        chunker = get_chunker(_config("fixed", overlap=10))

        assert chunker.chunk_size == 200
        assert chunker.chunk_overlap == 40


class TestChunkContent:
    """Test cases for chunk_content."""

    def test_paragraph_scenario(self):
        text = "First paragraph.\n\nSecond paragraph.\n\nThird paragraph."

        result = chunk_content(text, _config("paragraph"))

        assert [c.text for c in result.chunks] == [
            "First paragraph.",
            "Second paragraph.",
            "Third paragraph.",
        ]
        assert [c.char_start for c in result.chunks] == [0, 18, 37]
        assert [c.char_end for c in result.chunks] == [16, 35, 53]

    def test_offsets_match_source(self):
        text = "Hello world. 你好。再見！ Done."

        result = chunk_content(text, _config("sentence"))

        for chunk in result.chunks:
            assert text[chunk.char_start : chunk.char_end] == chunk.text

    def test_repeated_sentences_move_forward(self):
        result = chunk_content("Yes. Yes. Yes.", _config("sentence"))

        assert [c.char_start for c in result.chunks] == [0, 5, 10]

    def test_indices_are_gap_free(self, sample_article):
        result = chunk_content(sample_article, _config("sentence"))

        assert [c.index for c in result.chunks] == list(range(len(result.chunks)))
        assert all(c.char_end > c.char_start for c in result.chunks)

    def test_fixed_windows_overlap(self):
        text = "abcdefghij" * 50

        result = chunk_content(text, _config("fixed", overlap=10))

        assert [c.char_start for c in result.chunks] == [0, 160, 320]
        assert [c.token_count for c in result.chunks] == [50, 50, 45]
        first, second = result.chunks[0], result.chunks[1]
        assert first.text[-40:] == second.text[:40]

    def test_token_counts(self):
        result = chunk_content("abcdefgh. 中文。", _config("sentence"))

        # 9 Latin characters; 2 ideographs plus a full-width terminator
        assert [c.token_count for c in result.chunks] == [3, 4]

    def test_metadata(self):
        text = "First paragraph.\n\nSecond paragraph.\n\nThird paragraph."

        metadata = chunk_content(text, _config("paragraph")).metadata

        assert metadata.total_chunks == 3
        assert metadata.strategy == ChunkingStrategy.PARAGRAPH
        assert metadata.original_length == len(text)
        assert metadata.average_tokens == 4

    def test_empty_content(self):
        result = chunk_content("", _config("semantic"))

        assert result.chunks == ()
        assert result.metadata.total_chunks == 0
        assert result.metadata.average_tokens == 0

    def test_heading_context(self, heading_config):
        body = "Lorem ipsum dolor sit amet. " * 10
        text = f"# Section 1\n\n{body}\n\n# Section 2\n\n{body}"

        result = chunk_content(text, heading_config)

        assert [c.heading_context for c in result.chunks] == ["Section 1", "Section 2"]
        assert result.chunks[1].char_start == text.index("# Section 2")

    def test_heading_context_unset_without_heading_boundaries(self):
        text = "# Title\n\nBody text."

        result = chunk_content(text, _config("paragraph"))

        assert all(c.heading_context is None for c in result.chunks)


class TestSizeNormalization:
    """Test cases for merging small segments and cutting large ones."""

    def test_small_segments_merge_up_to_min_size(self):
        text = "One. Two. Three. Four."

        result = chunk_content(text, _config("sentence", min_size=3))

        assert [c.text for c in result.chunks] == ["One. Two.", "Three. Four."]
        assert [(c.char_start, c.char_end) for c in result.chunks] == [(0, 9), (10, 22)]

    def test_trailing_small_segment_joins_previous_chunk(self):
        result = chunk_content("One. Two. Three.", _config("sentence", min_size=3))

        assert [c.text for c in result.chunks] == ["One. Two. Three."]

    def test_merged_chunks_are_exact_slices(self):
        text = "First line.\n\nSecond line.\n\nThird line."

        result = chunk_content(text, _config("paragraph", min_size=1000))

        assert len(result.chunks) == 1
        assert result.chunks[0].text == text
        assert result.chunks[0].char_start == 0
        assert result.chunks[0].char_end == len(text)

    def test_merging_stops_at_max_size(self):
        sentence = "This sentence is exactly long enough to matter here. "
        text = (sentence * 20).strip()

        result = chunk_content(text, _config("sentence", min_size=1000))

        assert len(result.chunks) > 1
        assert all(c.token_count <= 100 for c in result.chunks)
        for previous, current in zip(result.chunks, result.chunks[1:]):
            assert previous.char_end <= current.char_start

    def test_oversized_paragraph_is_split(self):
        text = " ".join(["word"] * 800)

        result = chunk_content_for_type(text, "product")

        assert len(result.chunks) > 1
        assert all(c.token_count <= 600 for c in result.chunks)
        for chunk in result.chunks:
            assert text[chunk.char_start : chunk.char_end] == chunk.text
        for previous, current in zip(result.chunks, result.chunks[1:]):
            assert previous.char_end <= current.char_start

    def test_oversized_cjk_sentence_respects_max_size(self):
        text = "中" * 1000

        result = chunk_content_for_type(text, "comment")

        assert all(estimate_token_count(c.text) <= 256 for c in result.chunks)
        assert "".join(c.text for c in result.chunks) == text

    def test_fixed_windows_are_not_merged(self):
        text = "abcdefghij" * 50

        result = chunk_content(text, _config("fixed", overlap=10, min_size=1000))

        assert len(result.chunks) == 3

    def test_chunks_are_immutable(self):
        result = chunk_content("One. Two.", _config("sentence"))

        assert isinstance(result.chunks, tuple)
        with pytest.raises(AttributeError):
            result.chunks.append(None)


class TestChunkContentForType:
    """Test cases for registry-driven chunking."""

    def test_comment_uses_sentences(self):
        result = chunk_content_for_type("Nice. Very nice!", "comment")

        assert result.metadata.strategy == ChunkingStrategy.SENTENCE
        assert [c.text for c in result.chunks] == ["Nice. Very nice!"]

    def test_unknown_type(self):
        with pytest.raises(ConfigurationError):
            chunk_content_for_type("text", "newsletter")
