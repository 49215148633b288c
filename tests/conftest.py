"""
Pytest configuration and fixtures for EmbedPrep tests
"""

from typing import Callable, Tuple

import pytest

from embedprep.core.config.validation import ChunkingConfig
from embedprep.processing.base import ChunkingStrategy, ContentChunk
from embedprep.processing.chunking.token_estimator import estimate_token_count


@pytest.fixture
def make_chunk() -> Callable[..., ContentChunk]:
    """Factory for ContentChunk objects positioned one after the other"""

    def _make(text: str, index: int = 0, char_start: int = 0) -> ContentChunk:
        return ContentChunk(
            index=index,
            text=text,
            char_start=char_start,
            char_end=char_start + max(1, len(text)),
            token_count=estimate_token_count(text),
        )

    return _make


@pytest.fixture
def heading_config() -> ChunkingConfig:
    """Small semantic config with heading boundaries enabled"""
    return ChunkingConfig(
        target_size=50,
        max_size=100,
        split_by=ChunkingStrategy.SEMANTIC,
        use_headings_as_boundary=True,
    )


@pytest.fixture
def sample_article() -> str:
    """Markdown post whose two sections together exceed the post max size"""
    intro = "\n\n".join(
        f"Paragraph {i} talks about topic {i} in some detail. " * 6 for i in range(8)
    )
    details = "\n\n".join(
        f"Paragraph {i} talks about topic {i} in some detail. " * 6
        for i in range(8, 16)
    )
    return f"# Intro\n\n{intro}\n\n# Details\n\n{details}"


@pytest.fixture
def comment_sentences() -> Tuple[str, str]:
    """Two distinct sentences, each long enough to stand as a comment chunk"""
    return (
        "The morning light across the harbour makes this photo feel calm and warm.",
        "Great composition, and the colours of the boats really stand out nicely.",
    )


@pytest.fixture
def sample_comment(comment_sentences) -> str:
    """Comment whose first sentence is repeated"""
    first, second = comment_sentences
    return f"{first} {first} {second}"
