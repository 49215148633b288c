"""
Processing Manager for orchestrating cleaning, chunking and quality gating.

This module is the entry point of the preprocessing core. It takes the raw
content of one entity together with its target type and produces the
positioned, scored chunks that an embedding service may send to a model.

Core Processing Pipeline:
    1. Configuration: Resolve the per-type config, apply any operator override
    2. Cleaning: Strip markup and boilerplate (clean_content)
    3. Chunking: Segment the cleaned text (chunk_content)
    4. Quality Gate: Flag duplicates, validate and score (quality_gate_chunks)
    5. Output: PreprocessingResult with metadata from every stage

Chunk offsets refer to the cleaned text, not the raw input.

Filtering:
    preprocess_and_filter() drops failed chunks from the returned list but
    keeps the metadata of the full run, so callers can still audit how many
    chunks were rejected and why.

Example Usage:
    >>> manager = ProcessingManager("post")
    >>> result = manager.process("# Title\\n\\nSome article text...")
    >>> result.metadata.quality.total == len(result.chunks)
    True
    >>> embeddable = manager.process_and_filter("# Title\\n\\nSome article text...")
    >>> all(chunk.is_embeddable for chunk in embeddable.chunks)
    True

Classes:
    ProcessingManager: Pipeline bound to one target type and its config
"""

from dataclasses import replace
from typing import Optional, Union

from embedprep.core.config.validation import (
    PreprocessingConfigOverride,
    TypePreprocessingConfig,
    merge_config_override,
)
from embedprep.core.logging.logger import get_logger
from embedprep.processing.base import (
    ChunkingMetadata,
    ChunkingStrategy,
    CleaningMetadata,
    PreprocessingInput,
    PreprocessingMetadata,
    PreprocessingResult,
    QualityStatus,
    QualitySummary,
    TargetType,
)
from embedprep.processing.chunking.content_chunker import chunk_content
from embedprep.processing.preprocessing.cleaners import clean_content
from embedprep.processing.quality import get_quality_summary, quality_gate_chunks
from embedprep.processing.registry import (
    get_preprocessing_config,
    resolve_target_type,
)

logger = get_logger(__name__)


class ProcessingManager:
    """
    Runs the preprocessing pipeline for one target type.

    The configuration is resolved once, at construction, from the registry
    and an optional operator override. A manager holds no per-call state, so
    one instance can process any number of entities, concurrently if needed.

    Attributes:
        target_type (TargetType): Entity category the config belongs to
        config (TypePreprocessingConfig): Effective cleaning, chunking and
            quality configuration

    Example:
        >>> override = PreprocessingConfigOverride.model_validate(
        ...     {"quality": {"min_length": 10}}
        ... )
        >>> manager = ProcessingManager("comment", config_override=override)
        >>> manager.config.quality.min_length
        10

    Raises:
        ConfigurationError: For an unknown target type, or an override that
            conflicts with the defaults
    """

    def __init__(
        self,
        target_type: Union[TargetType, str],
        config_override: Optional[PreprocessingConfigOverride] = None,
    ):
        self.target_type = resolve_target_type(target_type)
        self.config: TypePreprocessingConfig = merge_config_override(
            get_preprocessing_config(self.target_type), config_override
        )

    def _empty_result(self) -> PreprocessingResult:
        metadata = PreprocessingMetadata(
            cleaning=CleaningMetadata(
                original_length=0, cleaned_length=0, cleaning_ratio=1.0
            ),
            chunking=ChunkingMetadata(
                total_chunks=0,
                strategy=ChunkingStrategy(self.config.chunking.split_by),
                original_length=0,
            ),
            quality=QualitySummary(),
        )
        return PreprocessingResult(chunks=(), metadata=metadata)

    def process(self, raw_content: str) -> PreprocessingResult:
        """
        Clean, chunk and quality-gate ``raw_content``.

        Args:
            raw_content: Raw entity content, possibly empty

        Returns:
            PreprocessingResult holding every chunk, failed ones included
        """
        if not raw_content:
            logger.info(
                "Skipping preprocessing for empty content",
                target_type=self.target_type.value,
            )
            return self._empty_result()

        cleaned = clean_content(raw_content, self.config.cleaning)
        chunked = chunk_content(cleaned.cleaned, self.config.chunking)
        qualified = quality_gate_chunks(chunked.chunks, self.config.quality)
        summary = get_quality_summary(qualified)

        logger.info(
            "Preprocessed content",
            target_type=self.target_type.value,
            strategy=chunked.metadata.strategy.value,
            cleaning_ratio=round(cleaned.metadata.cleaning_ratio, 3),
            total=summary.total,
            passed=summary.passed,
            incomplete=summary.incomplete,
            failed=summary.failed,
        )
        return PreprocessingResult(
            chunks=tuple(qualified),
            metadata=PreprocessingMetadata(
                cleaning=cleaned.metadata,
                chunking=chunked.metadata,
                quality=summary,
            ),
        )

    def process_and_filter(self, raw_content: str) -> PreprocessingResult:
        """
        Like process(), without the failed chunks.

        The metadata is that of the unfiltered run.
        """
        result = self.process(raw_content)
        return replace(
            result,
            chunks=tuple(
                chunk
                for chunk in result.chunks
                if chunk.quality_status != QualityStatus.FAILED
            ),
        )


def preprocess_content(
    preprocessing_input: PreprocessingInput,
    config_override: Optional[PreprocessingConfigOverride] = None,
) -> PreprocessingResult:
    """
    Run the full pipeline for one entity.

    Example:
        >>> result = preprocess_content(
        ...     PreprocessingInput(target_type="product", raw_content="")
        ... )
        >>> (len(result.chunks), result.metadata.quality.total)
        (0, 0)
    """
    manager = ProcessingManager(preprocessing_input.target_type, config_override)
    return manager.process(preprocessing_input.raw_content)


def preprocess_and_filter(
    preprocessing_input: PreprocessingInput,
    config_override: Optional[PreprocessingConfigOverride] = None,
) -> PreprocessingResult:
    """Run the full pipeline and drop failed chunks, keeping full-run metadata."""
    manager = ProcessingManager(preprocessing_input.target_type, config_override)
    return manager.process_and_filter(preprocessing_input.raw_content)
