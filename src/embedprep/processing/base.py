"""
Base classes and data structures for the preprocessing phase.

This module defines the value types that flow through the pipeline
(clean -> chunk -> quality gate) and the abstract interfaces implemented by
cleaners and chunking strategies.

Classes:
    ContentChunk: Positioned text segment produced by a chunker
    HeadingMarker: Markdown heading with its character offset
    ValidityResult: Outcome of the validity checks for one chunk
    QualifiedChunk: ContentChunk with a quality status and score
    PreprocessingInput / PreprocessingResult: Pipeline input and output
    BasePreprocessor: Abstract base class for text cleaning operations
    BaseChunker: Abstract base class for segmentation strategies

Every result type is a frozen dataclass: it is built once per invocation,
never mutated afterwards and safe to hand to concurrent consumers.

Example:
    >>> from embedprep.processing.base import ContentChunk
    >>> chunk = ContentChunk(
    ...     index=0, text="Hello world.", char_start=0, char_end=12, token_count=3
    ... )
    >>> chunk.to_dict()["char_end"]
    12
"""

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, fields
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class TargetType(str, Enum):
    """Category of source entity; selects the configuration row that applies."""

    PRODUCT = "product"
    POST = "post"
    GALLERY_ITEM = "gallery_item"
    COMMENT = "comment"


class ChunkingStrategy(str, Enum):
    """Segmentation strategies understood by chunk_content."""

    SENTENCE = "sentence"
    PARAGRAPH = "paragraph"
    FIXED = "fixed"
    SEMANTIC = "semantic"


class QualityStatus(str, Enum):
    """
    Tri-state chunk outcome.

    - PASSED: ready for embedding
    - INCOMPLETE: marginal but still embeddable
    - FAILED: excluded from embedding
    """

    PASSED = "passed"
    INCOMPLETE = "incomplete"
    FAILED = "failed"


class InvalidReason(str, Enum):
    """Reasons a chunk fails the quality gate."""

    TOO_NOISY = "too_noisy"
    TOO_SHORT = "too_short"
    NO_CONTENT = "no_content"
    DUPLICATE = "duplicate"


def _serialize(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _serialize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_serialize(v) for v in value]
    return value


@dataclass(frozen=True)
class HeadingMarker:
    """A Markdown heading found at a line start."""

    text: str
    position: int
    level: int = 1


@dataclass(frozen=True)
class ContentChunk:
    """
    A positioned span of (cleaned) source text plus its estimated token cost.

    Attributes:
        index (int): 0-based position within one pipeline run, gap free
        text (str): Chunk text, an exact slice of the source
        char_start (int): Offset of the first character in the source
        char_end (int): Offset one past the last character (> char_start)
        token_count (int): Estimated token cost of ``text``
        heading_context (Optional[str]): Innermost preceding heading, when the
            chunking config uses headings as boundaries

    Ranges of consecutive chunks never overlap, except under the fixed-size
    strategy where the overlap is explicit.
    """

    index: int
    text: str
    char_start: int
    char_end: int
    token_count: int
    heading_context: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert the chunk to a JSON-serializable dictionary."""
        return _serialize(asdict(self))


@dataclass(frozen=True)
class ValidityMetrics:
    """Raw measurements taken by the validity check."""

    char_count: int
    word_count: int
    noise_ratio: float


@dataclass(frozen=True)
class ValidityResult:
    """
    Tagged outcome of ``check_validity``.

    ``reason`` is set only when ``is_valid`` is False. ``metrics`` is always
    present so callers can report why a chunk was accepted or rejected.
    """

    is_valid: bool
    metrics: ValidityMetrics
    reason: Optional[InvalidReason] = None

    def to_dict(self) -> Dict[str, Any]:
        return _serialize(asdict(self))


@dataclass(frozen=True)
class QualifiedChunk(ContentChunk):
    """
    A ContentChunk that went through the quality gate.

    Attributes:
        quality_status (QualityStatus): passed / incomplete / failed
        quality_score (float): Ranking signal in [0, 1]; 0 for failed chunks
        validity_result (Optional[ValidityResult]): Checks behind the status
    """

    quality_status: QualityStatus = QualityStatus.FAILED
    quality_score: float = 0.0
    validity_result: Optional[ValidityResult] = None

    @classmethod
    def from_chunk(
        cls,
        chunk: ContentChunk,
        quality_status: QualityStatus,
        quality_score: float,
        validity_result: ValidityResult,
    ) -> "QualifiedChunk":
        """Copy the positional fields of ``chunk`` and attach the verdict."""
        base = {f.name: getattr(chunk, f.name) for f in fields(ContentChunk)}
        return cls(
            **base,
            quality_status=quality_status,
            quality_score=quality_score,
            validity_result=validity_result,
        )

    @property
    def is_embeddable(self) -> bool:
        """Only passed and incomplete chunks may be sent for embedding."""
        return self.quality_status != QualityStatus.FAILED


@dataclass(frozen=True)
class CleaningMetadata:
    original_length: int
    cleaned_length: int
    cleaning_ratio: float
    cleaners_applied: Tuple[str, ...] = ()


@dataclass(frozen=True)
class CleanedContent:
    """Output of ``clean_content``: the cleaned text and what changed."""

    raw: str
    cleaned: str
    removed_patterns: Tuple[str, ...]
    metadata: CleaningMetadata


@dataclass(frozen=True)
class ChunkingMetadata:
    total_chunks: int
    strategy: ChunkingStrategy
    original_length: int
    average_tokens: int = 0


@dataclass(frozen=True)
class ChunkResult:
    """Output of ``chunk_content``."""

    chunks: Tuple[ContentChunk, ...]
    metadata: ChunkingMetadata


@dataclass(frozen=True)
class QualitySummary:
    """Status counts; ``total`` always equals passed + incomplete + failed."""

    total: int = 0
    passed: int = 0
    incomplete: int = 0
    failed: int = 0


@dataclass(frozen=True)
class PreprocessingMetadata:
    cleaning: CleaningMetadata
    chunking: ChunkingMetadata
    quality: QualitySummary

    def to_dict(self) -> Dict[str, Any]:
        return _serialize(asdict(self))


@dataclass(frozen=True)
class PreprocessingInput:
    """Raw content of one entity plus the target type that selects its config."""

    target_type: TargetType
    raw_content: str


@dataclass(frozen=True)
class PreprocessingResult:
    """
    Output of the preprocessing pipeline.

    ``metadata`` always describes the full, unfiltered run, even when
    ``chunks`` has been filtered by ``preprocess_and_filter``.
    """

    chunks: Tuple[QualifiedChunk, ...]
    metadata: PreprocessingMetadata

    def to_dict(self) -> Dict[str, Any]:
        return {
            "chunks": [chunk.to_dict() for chunk in self.chunks],
            "metadata": self.metadata.to_dict(),
        }


class BasePreprocessor(ABC):
    """
    Abstract base class for all content cleaners.

    Subclasses implement process(). The ``name`` is what the pipeline records
    in ``cleaners_applied`` and ``removed_type`` is the pattern family recorded
    in ``removed_patterns`` when the cleaner changed the text.

    Example:
        >>> from embedprep.processing.preprocessing.cleaners import UrlRemover
        >>> cleaner = UrlRemover()
        >>> cleaner("see https://example.com now")
        'see  now'
    """

    name: str = "BasePreprocessor"
    removed_type: str = "custom"

    @abstractmethod
    def process(self, content: str) -> str:
        """
        Process raw content and return the cleaned version.

        Args:
            content (str): Raw text content to be processed

        Returns:
            str: Cleaned text content
        """
        pass

    def __call__(self, content: str) -> str:
        return self.process(content)


class BaseChunker(ABC):
    """
    Abstract base class for segmentation strategies.

    Chunkers return plain text segments in document order; chunk_content turns
    them into positioned ContentChunk objects.

    Attributes:
        chunk_size (int): Strategy specific size (characters or tokens)
        chunk_overlap (int): Overlap between adjacent segments

    Example:
        >>> from embedprep.processing.chunking import SentenceChunker
        >>> SentenceChunker().chunk("One. Two.", {})
        ['One.', 'Two.']
    """

    def __init__(self, chunk_size: int = 0, chunk_overlap: int = 0):
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap

    @abstractmethod
    def chunk(self, content: str, metadata: Dict[str, Any]) -> List[str]:
        """
        Split content into a list of text segments.

        Args:
            content (str): Cleaned text content to be chunked
            metadata (Dict[str, Any]): Additional metadata (strategy specific)

        Returns:
            List[str]: Non-empty segments, ordered by appearance in source
        """
        pass
