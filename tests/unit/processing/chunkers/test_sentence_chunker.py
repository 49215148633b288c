"""
Tests for the sentence and paragraph splitters.
"""

from embedprep.processing.chunking.sentence_chunker import (
    ParagraphChunker,
    SentenceChunker,
    split_by_paragraphs,
    split_by_sentences,
)


class TestSplitBySentences:
    """Test cases for split_by_sentences."""

    def test_latin_and_cjk_terminators(self):
        sentences = split_by_sentences("First one. Second one! 第三句。第四句？")

        assert sentences == ["First one.", "Second one!", "第三句。", "第四句？"]

    def test_latin_terminator_needs_whitespace(self):
        """Decimal points and abbreviations without a following space don't split."""
        assert split_by_sentences("Version 2.5 is out. Update now?") == [
            "Version 2.5 is out.",
            "Update now?",
        ]

    def test_cjk_terminator_without_whitespace(self):
        assert split_by_sentences("你好。再見！") == ["你好。", "再見！"]

    def test_text_without_terminator(self):
        assert split_by_sentences("  no terminator here  ") == ["no terminator here"]

    def test_empty_and_blank(self):
        assert split_by_sentences("") == []
        assert split_by_sentences("   \n  ") == []

    def test_no_blank_segments(self):
        sentences = split_by_sentences("One.   Two!\n\n\nThree?   ")

        assert sentences == ["One.", "Two!", "Three?"]
        assert all(s.strip() == s and s for s in sentences)


class TestSplitByParagraphs:
    """Test cases for split_by_paragraphs."""

    def test_blank_line_boundaries(self):
        text = "First paragraph.\n\nSecond paragraph.\n\nThird paragraph."

        assert split_by_paragraphs(text) == [
            "First paragraph.",
            "Second paragraph.",
            "Third paragraph.",
        ]

    def test_trims_and_collapses_multiple_blank_lines(self):
        assert split_by_paragraphs("  First  \n\n\n\n  Second  ") == ["First", "Second"]

    def test_blank_line_with_spaces(self):
        assert split_by_paragraphs("A\n   \nB") == ["A", "B"]

    def test_single_newline_is_not_a_boundary(self):
        assert split_by_paragraphs("Line one\nLine two") == ["Line one\nLine two"]

    def test_empty(self):
        assert split_by_paragraphs("") == []
        assert split_by_paragraphs("\n\n\n") == []


class TestChunkerObjects:
    """Test cases for the strategy objects."""

    def test_sentence_chunker(self):
        assert SentenceChunker().chunk("One. Two.", {}) == ["One.", "Two."]

    def test_paragraph_chunker(self):
        assert ParagraphChunker().chunk("One.\n\nTwo.", {}) == ["One.", "Two."]
