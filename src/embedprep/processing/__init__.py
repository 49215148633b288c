"""
EmbedPrep Processing Module - Cleaning, Chunking and Quality Gating.

This module turns the raw text of an entity into positioned, scored chunks
that are safe to send to an embedding model.

Core Components:
    - ProcessingManager: Pipeline bound to one target type
    - preprocess_content / preprocess_and_filter: One-call entry points
    - ContentChunk / QualifiedChunk: Chunk types before and after the gate
    - BasePreprocessor / BaseChunker: Interfaces for cleaners and strategies

The processing pipeline transforms raw content through these stages:
    1. Cleaning: Strip HTML, Markdown, boilerplate, URLs and emails
    2. Chunking: Sentence, paragraph, fixed-size or heading-aware splitting
    3. Quality Gate: Duplicate detection, validity checks and scoring

Example:
    >>> from embedprep.processing import PreprocessingInput, preprocess_and_filter
    >>> result = preprocess_and_filter(
    ...     PreprocessingInput(target_type="comment", raw_content="Great shot!")
    ... )
    >>> [chunk.text for chunk in result.chunks]
    ['Great shot!']
"""

from .base import (
    BaseChunker,
    BasePreprocessor,
    ContentChunk,
    PreprocessingInput,
    PreprocessingResult,
    QualifiedChunk,
    QualityStatus,
    TargetType,
)
from .manager import ProcessingManager, preprocess_and_filter, preprocess_content

__all__ = [
    "ProcessingManager",
    "preprocess_content",
    "preprocess_and_filter",
    "PreprocessingInput",
    "PreprocessingResult",
    "ContentChunk",
    "QualifiedChunk",
    "QualityStatus",
    "TargetType",
    "BasePreprocessor",
    "BaseChunker",
]
