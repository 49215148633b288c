"""
EmbedPrep - Quality-Gated Content Preprocessing for Embeddings

EmbedPrep converts raw multilingual (Latin and CJK) content such as product
descriptions, articles, gallery captions and user comments into positioned,
scored and validated text chunks ready for vector embedding and semantic
retrieval.

Key Features:
    - HTML, Markdown and boilerplate cleaning
    - Sentence, paragraph, fixed-size and heading-aware semantic chunking
    - Script-aware token estimation for mixed Latin and CJK text
    - Noise and length validity checks, quality scoring, duplicate detection
    - Per-entity-type configuration with validated operator overrides
    - Structured logging and a preview CLI

Modules:
    core: Configuration, logging and the exception hierarchy
    processing: Cleaners, chunkers, quality gate, registry and pipeline
    cli: Command-line preview tools

Example:
    >>> from embedprep import PreprocessingInput, preprocess_content
    >>> result = preprocess_content(
    ...     PreprocessingInput(target_type="post", raw_content="# Hi\\n\\nHello there.")
    ... )
    >>> result.metadata.chunking.strategy.value
    'semantic'
"""

__version__ = "0.1.0"
__author__ = "EmbedPrep"
__description__ = (
    "Content preprocessing and quality-gated chunking for embedding "
    "pipelines: cleaning, script-aware token estimation, heading-aware "
    "segmentation and chunk validation."
)

from embedprep.core.config.settings import Settings
from embedprep.core.logging.logger import get_logger
from embedprep.processing import (
    PreprocessingInput,
    PreprocessingResult,
    ProcessingManager,
    preprocess_and_filter,
    preprocess_content,
)

__all__ = [
    "Settings",
    "get_logger",
    "ProcessingManager",
    "PreprocessingInput",
    "PreprocessingResult",
    "preprocess_content",
    "preprocess_and_filter",
]
