"""
EmbedPrep Chunking Module - Segmentation Strategies

This module splits cleaned text into positioned chunks sized for embedding
models, with token costs estimated for mixed Latin and CJK text.

Available Chunkers:
    - SentenceChunker: One segment per sentence (Latin and CJK terminators)
    - ParagraphChunker: One segment per blank-line separated paragraph
    - SlidingWindowChunker: Fixed-size character windows with overlap
    - SemanticChunker: Heading sections, then paragraph packing

Key Functions:
    - chunk_content: Dispatch on ChunkingConfig.split_by and position segments
    - chunk_content_for_type: Same, with the registry config for a target type
    - estimate_token_count: Script-aware token estimate
    - extract_headings / get_heading_context: Markdown heading lookup

See Also: embedprep.processing.base for base classes and data types
"""

from .content_chunker import chunk_content, chunk_content_for_type, get_chunker
from .semantic_chunker import (
    SemanticChunker,
    extract_headings,
    get_heading_context,
    split_by_semantic,
)
from .sentence_chunker import (
    ParagraphChunker,
    SentenceChunker,
    split_by_paragraphs,
    split_by_sentences,
)
from .sliding_window_chunker import SlidingWindowChunker, split_by_fixed_size
from .token_estimator import estimate_token_count

__all__ = [
    "SentenceChunker",
    "ParagraphChunker",
    "SlidingWindowChunker",
    "SemanticChunker",
    "chunk_content",
    "chunk_content_for_type",
    "get_chunker",
    "split_by_sentences",
    "split_by_paragraphs",
    "split_by_fixed_size",
    "split_by_semantic",
    "extract_headings",
    "get_heading_context",
    "estimate_token_count",
]
