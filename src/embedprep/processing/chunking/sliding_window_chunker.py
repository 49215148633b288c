"""
Sliding Window Chunker Implementation.

Fixed-size windowing with explicit overlap. A window of ``size`` characters
moves across the text in steps of ``size - overlap``; consecutive windows
therefore share ``overlap`` characters, which preserves context that a hard
cut would lose. The last window may be shorter than ``size``.

For a text of length ``n > size`` the number of windows is
``ceil((n - overlap) / (size - overlap))``; text that fits in one window is
returned whole.

Example:
    >>> split_by_fixed_size("0123456789abcdefghijklmnop", 10, 0)
    ['0123456789', 'abcdefghij', 'klmnop']
    >>> split_by_fixed_size("A" * 50, 20, 5)
    ['AAAAAAAAAAAAAAAAAAAA', 'AAAAAAAAAAAAAAAAAAAA', 'AAAAAAAAAAAAAAAAAAAA']
"""

from typing import Any, Dict, List, Tuple

from embedprep.core.logging.logger import get_logger
from embedprep.processing.base import BaseChunker

logger = get_logger(__name__)


def _normalize_window(size: int, overlap: int) -> Tuple[int, int]:
    if size < 1:
        logger.warning("Window size < 1. Setting window size to 1.", size=size)
        size = 1
    if overlap < 0:
        overlap = 0
    if overlap >= size:
        logger.warning(
            "Overlap size greater than or equal to window size. Adjusting overlap.",
            size=size,
            overlap=overlap,
        )
        overlap = size - 1
    return size, overlap


def fixed_size_spans(length: int, size: int, overlap: int) -> List[Tuple[int, int]]:
    """
    Compute ``(start, end)`` offsets of the sliding windows over a text.

    Args:
        length: Length of the text being windowed
        size: Window width in characters
        overlap: Characters shared by consecutive windows (clamped below size)

    Returns:
        Window spans in order; empty for an empty text
    """
    if length <= 0:
        return []

    size, overlap = _normalize_window(size, overlap)
    if length <= size:
        return [(0, length)]

    step = size - overlap
    spans = []
    start = 0
    while True:
        end = min(start + size, length)
        spans.append((start, end))
        if end >= length:
            break
        start += step
    return spans


def split_by_fixed_size(content: str, size: int, overlap: int) -> List[str]:
    """Split content into overlapping windows of ``size`` characters."""
    return [content[start:end] for start, end in fixed_size_spans(len(content), size, overlap)]


class SlidingWindowChunker(BaseChunker):
    """
    A chunker that uses a sliding window approach to create overlapping chunks.

    ``chunk_size`` and ``chunk_overlap`` are characters. Windows are raw
    slices: they are not trimmed, so the offsets of consecutive windows stay
    exactly ``step_size`` apart.

    Use Cases:
        - Dense text without paragraph or sentence structure
        - Content where context across arbitrary cut points matters
    """

    def __init__(self, chunk_size: int, chunk_overlap: int):
        """
        Initialize the sliding window chunker.

        Args:
            chunk_size: Size of each window in characters
            chunk_overlap: Characters shared by consecutive windows

        Notes:
            An overlap >= chunk_size is clamped to chunk_size - 1 so the
            window always advances.
        """
        chunk_size, chunk_overlap = _normalize_window(chunk_size, chunk_overlap)
        super().__init__(chunk_size, chunk_overlap)
        self.step_size = chunk_size - chunk_overlap

    def spans(self, content: str) -> List[Tuple[int, int]]:
        """Window offsets for ``content``."""
        return fixed_size_spans(len(content), self.chunk_size, self.chunk_overlap)

    def chunk(self, content: str, metadata: Dict[str, Any]) -> List[str]:
        """
        Chunk the content using sliding window approach.

        Args:
            content: Text content to chunk
            metadata: Additional metadata (unused in this implementation)

        Returns:
            List of text windows with overlaps
        """
        if not content:
            logger.debug("Empty content provided, returning empty list")
            return []

        chunks = [content[start:end] for start, end in self.spans(content)]
        logger.debug(f"Created {len(chunks)} chunks using sliding window approach")
        return chunks
