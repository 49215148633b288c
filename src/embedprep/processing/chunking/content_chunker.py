"""
Chunk dispatch and positioning.

chunk_content picks the segmentation strategy named by the config, then turns
each returned text segment into a ContentChunk carrying its character offsets
in the source, its estimated token cost and, for heading-aware configs, the
heading it falls under.

The fixed strategy converts token sizes to characters at four characters per
token and positions its windows arithmetically, because overlapping windows
cannot be located by a forward search. All other strategies produce
non-overlapping segments that are located with a cursor moving forward
through the source, then normalized by size:

    - a segment above ``max_size`` tokens is cut into contiguous windows of at
      most ``target_size`` tokens
    - adjacent segments are merged into one contiguous span until it reaches
      ``min_size`` tokens, as long as the merge stays within ``max_size``
    - a trailing span still below ``min_size`` joins the previous chunk when
      the result fits in ``max_size``

Merged chunks are exact slices of the source, separators included, so
neighbouring chunks never overlap.
"""

from typing import List, Optional, Sequence, Tuple, Union

from embedprep.core.config.validation import ChunkingConfig
from embedprep.core.logging.logger import get_logger
from embedprep.processing.base import (
    BaseChunker,
    ChunkingMetadata,
    ChunkingStrategy,
    ChunkResult,
    ContentChunk,
    TargetType,
)
from embedprep.processing.chunking.semantic_chunker import (
    SemanticChunker,
    extract_headings,
    get_heading_context,
    split_oversized,
)
from embedprep.processing.chunking.sentence_chunker import (
    ParagraphChunker,
    SentenceChunker,
)
from embedprep.processing.chunking.sliding_window_chunker import SlidingWindowChunker
from embedprep.processing.chunking.token_estimator import estimate_token_count
from embedprep.processing.registry import get_chunking_config

logger = get_logger(__name__)

CHARS_PER_TOKEN = 4


def get_chunker(config: ChunkingConfig) -> BaseChunker:
    """Build the strategy object for ``config.split_by``."""
    strategy = ChunkingStrategy(config.split_by)

    if strategy == ChunkingStrategy.SENTENCE:
        return SentenceChunker()
    elif strategy == ChunkingStrategy.PARAGRAPH:
        return ParagraphChunker()
    elif strategy == ChunkingStrategy.FIXED:
        return SlidingWindowChunker(
            config.target_size * CHARS_PER_TOKEN,
            config.overlap * CHARS_PER_TOKEN,
        )
    return SemanticChunker(config)


Span = Tuple[int, int]


def _locate(content: str, segment: str, cursor: int) -> Span:
    position = content.find(segment, cursor)
    if position >= 0:
        return position, position + len(segment)

    stripped = segment.strip()
    if stripped:
        position = content.find(stripped, cursor)
        if position >= 0:
            return position, position + len(stripped)

    # Segment is not a slice of the source; keep offsets monotonic.
    return cursor, min(len(content), cursor + max(1, len(segment)))


def _locate_segments(content: str, chunker: BaseChunker) -> List[Span]:
    located = []
    cursor = 0
    for segment in chunker.chunk(content, {}):
        if not segment:
            continue
        start, end = _locate(content, segment, cursor)
        if end > start:
            located.append((start, end))
        cursor = end
    return located


def _span_tokens(content: str, start: int, end: int) -> int:
    return estimate_token_count(content[start:end])


def normalize_spans(
    content: str, spans: Sequence[Span], config: ChunkingConfig
) -> List[Span]:
    """
    Merge small spans and cut oversized ones so chunk sizes respect the config.

    Args:
        content: Source text the spans point into
        spans: Ordered, non-overlapping ``(start, end)`` offsets
        config: Chunking configuration supplying ``min_size``, ``target_size``
            and ``max_size``

    Returns:
        Ordered, non-overlapping spans. Every span costs at most ``max_size``
        tokens.
    """
    result: List[Span] = []
    buffer: Optional[Span] = None

    for start, end in spans:
        if _span_tokens(content, start, end) > config.max_size:
            if buffer is not None:
                result.append(buffer)
            windows = split_oversized(content, start, end, config)
            if not windows:
                buffer = None
                continue
            result.extend(windows[:-1])
            buffer = windows[-1]
        elif buffer is None:
            buffer = (start, end)
        elif _span_tokens(content, buffer[0], end) <= config.max_size:
            buffer = (buffer[0], end)
        else:
            result.append(buffer)
            buffer = (start, end)

        if _span_tokens(content, *buffer) >= config.min_size:
            result.append(buffer)
            buffer = None

    if buffer is not None:
        if result and _span_tokens(content, result[-1][0], buffer[1]) <= config.max_size:
            result[-1] = (result[-1][0], buffer[1])
        else:
            result.append(buffer)
    return result


def chunk_spans(content: str, config: ChunkingConfig) -> List[Span]:
    """Return the ``(start, end)`` offsets of every chunk ``config`` produces."""
    chunker = get_chunker(config)
    if isinstance(chunker, SlidingWindowChunker):
        return chunker.spans(content)
    return normalize_spans(content, _locate_segments(content, chunker), config)


def chunk_content(content: str, config: ChunkingConfig) -> ChunkResult:
    """
    Chunk content according to ``config``.

    Args:
        content: Already cleaned text
        config: Chunking configuration

    Returns:
        ChunkResult with gap-free, 0-based chunk indices and metadata
        ``total_chunks``, ``strategy``, ``original_length`` and
        ``average_tokens``

    Example:
        >>> config = ChunkingConfig(target_size=100, max_size=200, split_by="paragraph")
        >>> result = chunk_content("First.\\n\\nSecond.", config)
        >>> [(c.index, c.text, c.char_start) for c in result.chunks]
        [(0, 'First.', 0), (1, 'Second.', 8)]
    """
    strategy = ChunkingStrategy(config.split_by)
    headings = extract_headings(content) if config.use_headings_as_boundary else []

    chunks: List[ContentChunk] = []
    for start, end in chunk_spans(content, config):
        text = content[start:end]
        chunks.append(
            ContentChunk(
                index=len(chunks),
                text=text,
                char_start=start,
                char_end=end,
                token_count=estimate_token_count(text),
                heading_context=(
                    get_heading_context(headings, start)
                    if config.use_headings_as_boundary
                    else None
                ),
            )
        )

    total_tokens = sum(chunk.token_count for chunk in chunks)
    metadata = ChunkingMetadata(
        total_chunks=len(chunks),
        strategy=strategy,
        original_length=len(content),
        average_tokens=round(total_tokens / len(chunks)) if chunks else 0,
    )

    logger.debug(
        "Chunked content",
        strategy=strategy.value,
        chunks=metadata.total_chunks,
        average_tokens=metadata.average_tokens,
    )
    return ChunkResult(chunks=tuple(chunks), metadata=metadata)


def chunk_content_for_type(
    content: str, target_type: Union[TargetType, str]
) -> ChunkResult:
    """Chunk content with the registry's chunking config for ``target_type``."""
    return chunk_content(content, get_chunking_config(target_type))
