"""
EmbedPrep Text Preprocessing Components

This module provides the cleaners that strip markup and noise from raw entity
content before chunking.

Available Preprocessors:
    - HTMLCleaner: Removes HTML tags and artifacts
    - NoiseFilter: Removes navigation, copyright and UI prompt boilerplate
    - MarkdownStripper: Removes Markdown syntax
    - UrlRemover / EmailRedactor: Remove URLs, redact email addresses
    - UnicodeNormalizer: NFC plus full-width folding
    - WhitespaceNormalizer: Normalizes whitespace and removes extra spaces

Available Functions:
    - clean_content: Runs the cleaners enabled by a CleanerConfig
"""

from .cleaners import (
    CustomPatternRemover,
    EmailRedactor,
    HTMLCleaner,
    MarkdownStripper,
    NoiseFilter,
    UnicodeNormalizer,
    UrlRemover,
    WhitespaceNormalizer,
    build_cleaners,
    clean_content,
)

__all__ = [
    "HTMLCleaner",
    "NoiseFilter",
    "MarkdownStripper",
    "UrlRemover",
    "EmailRedactor",
    "UnicodeNormalizer",
    "WhitespaceNormalizer",
    "CustomPatternRemover",
    "build_cleaners",
    "clean_content",
]
