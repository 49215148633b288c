"""
Sentence and paragraph splitters.

Both splitters return trimmed, non-empty segments in document order. They
never invent text: every segment is a slice of the input.
"""

import re
from typing import Any, Dict, List

from embedprep.core.logging.logger import get_logger
from embedprep.processing.base import BaseChunker

logger = get_logger(__name__)

# CJK terminators end a sentence on their own; Latin ones need trailing space.
SENTENCE_BOUNDARY = re.compile(r"(?<=[。！？])\s*|(?<=[.!?])\s+")

# Two or more newlines, allowing blank lines that hold only spaces or tabs.
PARAGRAPH_BOUNDARY = re.compile(r"\n[ \t\r]*\n\s*")


def split_by_sentences(content: str) -> List[str]:
    """
    Split content into sentences.

    Example:
        >>> split_by_sentences("First one. Second one! 第三句。第四句？")
        ['First one.', 'Second one!', '第三句。', '第四句？']
    """
    if not content:
        return []
    return [s.strip() for s in SENTENCE_BOUNDARY.split(content) if s.strip()]


def split_by_paragraphs(content: str) -> List[str]:
    """
    Split content on blank lines.

    Example:
        >>> split_by_paragraphs("  First  \\n\\n\\n\\n  Second  ")
        ['First', 'Second']
    """
    if not content:
        return []
    return [p.strip() for p in PARAGRAPH_BOUNDARY.split(content) if p.strip()]


class SentenceChunker(BaseChunker):
    """One segment per sentence; suited to captions and comments."""

    def chunk(self, content: str, metadata: Dict[str, Any]) -> List[str]:
        sentences = split_by_sentences(content)
        logger.debug("Split content by sentences", segments=len(sentences))
        return sentences


class ParagraphChunker(BaseChunker):
    """One segment per paragraph; suited to short structured descriptions."""

    def chunk(self, content: str, metadata: Dict[str, Any]) -> List[str]:
        paragraphs = split_by_paragraphs(content)
        logger.debug("Split content by paragraphs", segments=len(paragraphs))
        return paragraphs
