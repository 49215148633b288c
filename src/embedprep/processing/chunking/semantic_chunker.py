"""
Heading-aware semantic chunking.

Author-placed headings are strong topic boundaries, so long articles are
first cut at their Markdown headings. Headings alone are not enough when a
section is itself too long or when the text has no headings, so those spans
fall back to paragraph packing: consecutive paragraphs are grouped while the
group stays within the target size, and a single paragraph above the maximum
size is cut into contiguous windows costing at most the target size.

Boundary priority:
    1. Headings of level 1-3 (when the config enables heading boundaries)
    2. Paragraph breaks (blank lines)
    3. Windows that add up each character's token cost

All sizes are estimated tokens. Every segment produced here is an exact,
trimmed slice of the input text and segments never overlap.

Example:
    >>> config = ChunkingConfig(
    ...     target_size=50, max_size=100, split_by="semantic",
    ...     use_headings_as_boundary=True,
    ... )
    >>> text = "# One\\n\\n" + "alpha " * 80 + "\\n\\n# Two\\n\\n" + "beta " * 80
    >>> [s.split("\\n")[0] for s in split_by_semantic(text, config)][:1]
    ['# One']
"""

import re
from typing import Any, Dict, List, Optional, Sequence, Tuple

from embedprep.core.config.validation import ChunkingConfig
from embedprep.core.logging.logger import get_logger
from embedprep.processing.base import BaseChunker, HeadingMarker
from embedprep.processing.chunking.sentence_chunker import PARAGRAPH_BOUNDARY
from embedprep.processing.chunking.token_estimator import (
    estimate_token_count,
    token_budget_spans,
)

logger = get_logger(__name__)

HEADING_PATTERN = re.compile(r"^(#{1,6})[ \t]+(.+?)(?:[ \t]+#+)?[ \t]*$", re.MULTILINE)

# Deeper headings stay inside their parent section.
MAX_BOUNDARY_LEVEL = 3

Span = Tuple[int, int]


def extract_headings(content: str) -> List[HeadingMarker]:
    """
    Find Markdown headings at line starts.

    Example:
        >>> [(h.text, h.level) for h in extract_headings("# Title\\n\\nBody\\n\\n## Part")]
        [('Title', 1), ('Part', 2)]
    """
    headings = []
    for match in HEADING_PATTERN.finditer(content):
        text = match.group(2).strip()
        if text:
            headings.append(
                HeadingMarker(
                    text=text, position=match.start(), level=len(match.group(1))
                )
            )
    return headings


def get_heading_context(
    headings: Sequence[HeadingMarker], position: int
) -> Optional[str]:
    """
    Return the text of the last heading at or before ``position``.

    Returns None when ``position`` precedes every heading.
    """
    for heading in reversed(headings):
        if heading.position <= position:
            return heading.text
    return None


def _trim_span(content: str, start: int, end: int) -> Span:
    while start < end and content[start].isspace():
        start += 1
    while end > start and content[end - 1].isspace():
        end -= 1
    return start, end


def _paragraph_spans(content: str, start: int, end: int) -> List[Span]:
    spans = []
    cursor = start
    for boundary in PARAGRAPH_BOUNDARY.finditer(content, start, end):
        spans.append(_trim_span(content, cursor, boundary.start()))
        cursor = boundary.end()
    spans.append(_trim_span(content, cursor, end))
    return [(s, e) for s, e in spans if e > s]


def split_oversized(
    content: str, start: int, end: int, config: ChunkingConfig
) -> List[Span]:
    """Cut one span into trimmed windows of at most ``config.target_size`` tokens."""
    spans = []
    for s, e in token_budget_spans(content, start, end, config.target_size):
        s, e = _trim_span(content, s, e)
        if e > s:
            spans.append((s, e))
    return spans


def _pack_paragraphs(
    content: str, start: int, end: int, config: ChunkingConfig
) -> List[Span]:
    spans: List[Span] = []
    current: Optional[Span] = None

    for p_start, p_end in _paragraph_spans(content, start, end):
        tokens = estimate_token_count(content[p_start:p_end])
        if tokens > config.max_size:
            if current:
                spans.append(current)
                current = None
            spans.extend(split_oversized(content, p_start, p_end, config))
            continue

        if current is None:
            current = (p_start, p_end)
        elif estimate_token_count(content[current[0] : p_end]) <= config.target_size:
            current = (current[0], p_end)
        else:
            spans.append(current)
            current = (p_start, p_end)

    if current:
        spans.append(current)
    return spans


def _heading_sections(content: str) -> List[Span]:
    boundaries = [
        h.position for h in extract_headings(content) if h.level <= MAX_BOUNDARY_LEVEL
    ]
    if not boundaries:
        return []

    sections = []
    if boundaries[0] > 0:
        sections.append((0, boundaries[0]))
    for i, position in enumerate(boundaries):
        next_position = boundaries[i + 1] if i + 1 < len(boundaries) else len(content)
        sections.append((position, next_position))
    return sections


def semantic_spans(content: str, config: ChunkingConfig) -> List[Span]:
    """
    Compute the segment offsets used by split_by_semantic.

    Args:
        content: Cleaned text
        config: Chunking configuration (max_size, target_size, headings flag)

    Returns:
        Trimmed, non-overlapping ``(start, end)`` spans in document order
    """
    start, end = _trim_span(content, 0, len(content))
    if start >= end:
        return []

    if estimate_token_count(content) <= config.max_size:
        return [(start, end)]

    sections = _heading_sections(content) if config.use_headings_as_boundary else []
    if not sections:
        logger.debug("No heading boundaries, packing paragraphs")
        return _pack_paragraphs(content, start, end, config)

    spans: List[Span] = []
    for s_start, s_end in sections:
        s_start, s_end = _trim_span(content, s_start, s_end)
        if s_start >= s_end:
            continue
        if estimate_token_count(content[s_start:s_end]) <= config.max_size:
            spans.append((s_start, s_end))
        else:
            spans.extend(_pack_paragraphs(content, s_start, s_end, config))

    logger.debug(
        "Split content at heading boundaries", sections=len(sections), segments=len(spans)
    )
    return spans


def split_by_semantic(content: str, config: ChunkingConfig) -> List[str]:
    """
    Split content at heading boundaries, falling back to paragraph packing.

    Text whose estimated token count fits in ``config.max_size`` is returned
    as a single segment.
    """
    return [content[s:e] for s, e in semantic_spans(content, config)]


class SemanticChunker(BaseChunker):
    """
    Strategy object around split_by_semantic.

    ``chunk_size`` is the target size and ``chunk_overlap`` is unused: semantic
    segments never overlap.
    """

    def __init__(self, config: ChunkingConfig):
        super().__init__(config.target_size, 0)
        self.config = config

    def chunk(self, content: str, metadata: Dict[str, Any]) -> List[str]:
        return split_by_semantic(content, self.config)
