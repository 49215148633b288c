"""
Quality gate for preprocessed chunks.

Every chunk leaving the chunker is classified before anything is sent to an
embedding model:

    - failed: too noisy, too short, no meaningful words, or a near-duplicate
      of an earlier chunk. Never embedded.
    - incomplete: valid, but its quality score is below the per-type
      ``min_quality_score``. Embedded, ranked lower.
    - passed: valid and above the score line.

Failure is data, never an exception: the reason travels in the chunk's
ValidityResult together with the measurements behind it.

Quality Score:
    score = 0.6 * min(1, char_count / (4 * min_length)) + 0.4 * (1 - noise_ratio)

    The length term saturates once a chunk is four times the minimum length,
    so long chunks are not favoured without bound.

Duplicate Detection:
    1. Exact repeats after case folding and whitespace collapsing
    2. Word-set Jaccard similarity >= threshold against every earlier,
       not yet flagged chunk

    The first member of each group is never flagged.

Example:
    >>> from embedprep.processing.registry import get_quality_config
    >>> qualified = quality_gate_chunks(chunks, get_quality_config("post"))
    >>> summary = get_quality_summary(qualified)
    >>> summary.total == len(chunks)
    True
"""

import re
from typing import FrozenSet, List, Optional, Sequence, Set, Union

from embedprep.core.config.settings import settings
from embedprep.core.config.validation import QualityGateConfig
from embedprep.core.logging.logger import get_logger
from embedprep.processing.base import (
    ContentChunk,
    InvalidReason,
    QualifiedChunk,
    QualityStatus,
    QualitySummary,
    TargetType,
    ValidityMetrics,
    ValidityResult,
)
from embedprep.processing.chunking.token_estimator import CJK_PATTERN
from embedprep.processing.registry import get_quality_config

logger = get_logger(__name__)

LENGTH_WEIGHT = 0.6
NOISE_WEIGHT = 0.4
# Length term reaches 1.0 at this multiple of min_length
LENGTH_SATURATION = 4

_WHITESPACE = re.compile(r"\s+")


def _words(text: str) -> List[str]:
    # CJK ideographs are words on their own; the rest splits on whitespace.
    words = CJK_PATTERN.findall(text)
    for token in CJK_PATTERN.sub(" ", text).split():
        word = "".join(char for char in token if char.isalnum())
        if word:
            words.append(word)
    return words


def _word_set(text: str) -> FrozenSet[str]:
    return frozenset(word.casefold() for word in _words(text))


def _jaccard(words1: FrozenSet[str], words2: FrozenSet[str]) -> float:
    if not words1 and not words2:
        return 1.0
    if not words1 or not words2:
        return 0.0
    return len(words1 & words2) / len(words1 | words2)


def calculate_noise_ratio(text: str) -> float:
    """
    Fraction of characters that are not letters or digits.

    Whitespace and punctuation count as noise. Empty text is all noise.

    Example:
        >>> calculate_noise_ratio("")
        1.0
        >>> calculate_noise_ratio("abc123")
        0.0
    """
    if not text:
        return 1.0
    noise = sum(1 for char in text if not char.isalnum())
    return noise / len(text)


def count_words(text: str) -> int:
    """
    Count meaningful words, with each CJK ideograph counting as one.

    Example:
        >>> count_words("Hello, world! 你好")
        4
    """
    return len(_words(text))


def is_purely_punctuation(text: str) -> bool:
    """True when ``text`` holds no letter or digit at all."""
    return not any(char.isalnum() for char in text)


def check_validity(chunk: ContentChunk, config: QualityGateConfig) -> ValidityResult:
    """
    Run the validity checks for one chunk.

    Checks, in order:
        1. noise_ratio > max_noise_ratio -> too_noisy
        2. char_count < min_length -> too_short
        3. no words, or punctuation only -> no_content

    Args:
        chunk: Chunk to check
        config: Per-type quality thresholds

    Returns:
        ValidityResult; ``metrics`` is filled in every case
    """
    text = chunk.text
    metrics = ValidityMetrics(
        char_count=len(text),
        word_count=count_words(text),
        noise_ratio=calculate_noise_ratio(text),
    )

    if metrics.noise_ratio > config.max_noise_ratio:
        return ValidityResult(
            is_valid=False, reason=InvalidReason.TOO_NOISY, metrics=metrics
        )
    if metrics.char_count < config.min_length:
        return ValidityResult(
            is_valid=False, reason=InvalidReason.TOO_SHORT, metrics=metrics
        )
    if metrics.word_count == 0 or is_purely_punctuation(text):
        return ValidityResult(
            is_valid=False, reason=InvalidReason.NO_CONTENT, metrics=metrics
        )
    return ValidityResult(is_valid=True, metrics=metrics)


def calculate_quality_score(chunk: ContentChunk, config: QualityGateConfig) -> float:
    """
    Score a chunk in [0, 1]; higher is better.

    Example:
        >>> config = QualityGateConfig(min_length=10, max_noise_ratio=0.4)
        >>> chunk = ContentChunk(0, "a" * 40, 0, 40, 10)
        >>> calculate_quality_score(chunk, config)
        1.0
    """
    text = chunk.text
    length_score = min(1.0, len(text) / (LENGTH_SATURATION * config.min_length))
    noise_score = 1.0 - calculate_noise_ratio(text)
    score = LENGTH_WEIGHT * length_score + NOISE_WEIGHT * noise_score
    return max(0.0, min(1.0, score))


def calculate_similarity(text1: str, text2: str) -> float:
    """
    Jaccard similarity of the case-folded word sets of two texts.

    Two texts without words are identical (1.0); a text without words is
    unrelated to one with words (0.0).

    Example:
        >>> calculate_similarity("The quick fox", "the QUICK fox!")
        1.0
        >>> calculate_similarity("alpha beta", "gamma delta")
        0.0
    """
    return _jaccard(_word_set(text1), _word_set(text2))


def _normalize_for_hash(text: str) -> str:
    return _WHITESPACE.sub(" ", text.casefold()).strip()


def detect_duplicate_chunks(
    chunks: Sequence[ContentChunk], threshold: Optional[float] = None
) -> Set[int]:
    """
    Find chunks that repeat an earlier chunk.

    Args:
        chunks: Chunks in document order
        threshold: Similarity at or above which a chunk is a near-duplicate,
            defaults to settings.DUPLICATE_SIMILARITY_THRESHOLD

    Returns:
        Positions (in ``chunks``) of the later occurrences
    """
    if threshold is None:
        threshold = settings.DUPLICATE_SIMILARITY_THRESHOLD

    duplicates: Set[int] = set()
    seen = set()
    for i, chunk in enumerate(chunks):
        key = _normalize_for_hash(chunk.text)
        if key in seen:
            duplicates.add(i)
        else:
            seen.add(key)

    remaining = [i for i in range(len(chunks)) if i not in duplicates]
    word_sets = {i: _word_set(chunks[i].text) for i in remaining}
    for position, i in enumerate(remaining):
        words_i = word_sets[i]
        for j in remaining[:position]:
            if j in duplicates:
                continue
            words_j = word_sets[j]
            # Jaccard never exceeds the ratio of the two set sizes.
            if words_i and words_j:
                smaller, larger = sorted((len(words_i), len(words_j)))
                if smaller / larger < threshold:
                    continue
            if _jaccard(words_i, words_j) >= threshold:
                duplicates.add(i)
                break

    if duplicates:
        logger.debug("Detected duplicate chunks", duplicates=sorted(duplicates))
    return duplicates


def qualify_chunk(
    chunk: ContentChunk, config: QualityGateConfig, is_duplicate: bool = False
) -> QualifiedChunk:
    """
    Attach a quality status and score to one chunk.

    Duplicates and invalid chunks fail with a score of 0. Valid chunks pass
    when their score reaches ``config.min_quality_score`` and are incomplete
    otherwise.
    """
    if is_duplicate:
        text = chunk.text
        validity = ValidityResult(
            is_valid=False,
            reason=InvalidReason.DUPLICATE,
            metrics=ValidityMetrics(
                char_count=len(text),
                word_count=count_words(text),
                noise_ratio=calculate_noise_ratio(text),
            ),
        )
        return QualifiedChunk.from_chunk(chunk, QualityStatus.FAILED, 0.0, validity)

    validity = check_validity(chunk, config)
    if not validity.is_valid:
        return QualifiedChunk.from_chunk(chunk, QualityStatus.FAILED, 0.0, validity)

    score = calculate_quality_score(chunk, config)
    status = (
        QualityStatus.PASSED
        if score >= config.min_quality_score
        else QualityStatus.INCOMPLETE
    )
    return QualifiedChunk.from_chunk(chunk, status, score, validity)


def quality_gate_chunks(
    chunks: Sequence[ContentChunk], config: QualityGateConfig
) -> List[QualifiedChunk]:
    """
    Qualify every chunk, keeping order and indices.

    Duplicate detection runs once over the whole sequence first.
    """
    duplicates = detect_duplicate_chunks(chunks)
    return [
        qualify_chunk(chunk, config, i in duplicates) for i, chunk in enumerate(chunks)
    ]


def quality_gate_chunks_for_type(
    chunks: Sequence[ContentChunk], target_type: Union[TargetType, str]
) -> List[QualifiedChunk]:
    return quality_gate_chunks(chunks, get_quality_config(target_type))


def get_quality_summary(chunks: Sequence[QualifiedChunk]) -> QualitySummary:
    """Count chunks per quality status."""
    passed = sum(1 for c in chunks if c.quality_status == QualityStatus.PASSED)
    incomplete = sum(1 for c in chunks if c.quality_status == QualityStatus.INCOMPLETE)
    failed = sum(1 for c in chunks if c.quality_status == QualityStatus.FAILED)
    return QualitySummary(
        total=len(chunks), passed=passed, incomplete=incomplete, failed=failed
    )
