"""
Text cleaning and normalization preprocessors for content standardization.

This module provides the cleaners that prepare raw entity content (product
descriptions, Markdown posts, captions, comments) for chunking and embedding.
Each cleaner handles one kind of artifact and implements the BasePreprocessor
interface, so they can be run individually or chained by clean_content().

Key Preprocessors:
    - HTMLCleaner: Removes HTML tags, scripts and styles, decodes entities
    - NoiseFilter: Drops navigation bars, copyright lines, UI prompts, ad markers
    - MarkdownStripper: Removes Markdown syntax while keeping the text
    - UrlRemover: Removes http(s) URLs
    - EmailRedactor: Replaces email addresses with an [EMAIL] placeholder
    - UnicodeNormalizer: NFC normalization and full-width to half-width folding
    - CustomPatternRemover: Removes matches of an operator supplied regex
    - WhitespaceNormalizer: Standardizes spacing and line breaks

Pipeline Order:
    clean_content() applies the enabled cleaners in the order listed above.
    The order matters: HTML goes first so that noise and Markdown patterns see
    plain text, and whitespace normalization runs last to tidy the gaps left
    by every other step, custom patterns included.

Paragraph breaks (blank lines) survive cleaning, because the paragraph and
semantic chunkers depend on them.

Example:
    >>> cleaner = HTMLCleaner()
    >>> cleaner.process("<p>Sample <b>HTML</b> content</p>")
    'Sample  HTML  content'
    >>> result = clean_content("<p>Hello   world</p>", CleanerConfig())
    >>> result.cleaned
    'Hello world'
    >>> result.metadata.cleaners_applied
    ('HtmlStripper', 'WhitespaceNormalizer')
"""

import re
import unicodedata
from typing import List, Optional

from bs4 import BeautifulSoup

from embedprep.core.config.validation import CleanerConfig
from embedprep.core.logging.logger import get_logger
from embedprep.processing.base import BasePreprocessor, CleanedContent, CleaningMetadata

logger = get_logger(__name__)

# Visual noise commonly scraped along with the real content (EN and zh-Hant)
NOISE_PATTERNS = [
    # Navigation bars
    re.compile(
        r"^(Home|About|Contact|Products|Services)([ \t]*\|[ \t]*[\w \t]+)+$",
        re.IGNORECASE | re.MULTILINE,
    ),
    re.compile(
        r"^[ \t]*(首頁|關於|聯絡|產品|服務)([ \t]*[|｜][ \t]*[\u4e00-\u9fff\w \t]+)+$",
        re.IGNORECASE | re.MULTILINE,
    ),
    # Copyright notices
    re.compile(r"Copyright\s*©?\s*\d{4}.*$", re.IGNORECASE | re.MULTILINE),
    re.compile(r"©\s*\d{4}.*$", re.IGNORECASE | re.MULTILINE),
    # UI prompts
    re.compile(r"點此閱讀更多|閱讀更多|查看更多|了解更多"),
    re.compile(r"Read more|View more|Learn more|Click here", re.IGNORECASE),
    re.compile(r"Loading\.{2,}|載入中\.{2,}", re.IGNORECASE),
    # Ad markers
    re.compile(r"\[AD\]|\[廣告\]|\[Sponsored\]|Sponsored", re.IGNORECASE),
    # Empty link placeholders
    re.compile(r"\[link\]|\[連結\]", re.IGNORECASE),
]

URL_PATTERN = re.compile(r"https?://[^\s]+")
EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
EMAIL_PLACEHOLDER = "[EMAIL]"

# Full-width letters and digits plus common punctuation. The CJK sentence
# terminators 。！？ are left alone so sentence splitting still sees them.
FULLWIDTH_TO_HALFWIDTH = {
    **{chr(code): chr(code - 0xFEE0) for code in range(ord("０"), ord("９") + 1)},
    **{chr(code): chr(code - 0xFEE0) for code in range(ord("Ａ"), ord("Ｚ") + 1)},
    **{chr(code): chr(code - 0xFEE0) for code in range(ord("ａ"), ord("ｚ") + 1)},
    "，": ",",
    "：": ":",
    "；": ";",
    "（": "(",
    "）": ")",
    "　": " ",
}
_FULLWIDTH_TABLE = str.maketrans(FULLWIDTH_TO_HALFWIDTH)


class HTMLCleaner(BasePreprocessor):
    """
    HTML content cleaner and text extractor.

    Parses the markup with BeautifulSoup, drops script and style elements
    together with their content, and returns the remaining text with entities
    decoded. Elements are joined with a space so adjacent block elements do
    not run together; whitespace is tidied later by WhitespaceNormalizer.

    Content without any "<" or "&" cannot hold markup or entities and is
    returned unchanged without parsing.

    Example:
        >>> HTMLCleaner().process("<div>Tom &amp; Jerry<script>x()</script></div>")
        'Tom & Jerry'
    """

    name = "HtmlStripper"
    removed_type = "html"

    def process(self, content: str) -> str:
        if "<" not in content and "&" not in content:
            return content

        soup = BeautifulSoup(content, "html.parser")

        # Remove script and style elements
        for script_or_style in soup(["script", "style"]):
            script_or_style.decompose()

        return soup.get_text(" ")


class NoiseFilter(BasePreprocessor):
    """
    Removes boilerplate that carries no meaning for retrieval.

    Covers navigation bars ("Home | About | Contact"), copyright lines,
    "read more" style prompts, loading indicators, sponsored markers and
    empty link placeholders, in English and Traditional Chinese.
    """

    name = "NoiseFilter"
    removed_type = "noise"

    def process(self, content: str) -> str:
        for pattern in NOISE_PATTERNS:
            content = pattern.sub("", content)
        return content


class MarkdownStripper(BasePreprocessor):
    """
    Removes Markdown syntax, keeping the readable text.

    Code blocks and inline code become a space, emphasis markers are dropped,
    links keep their label, images are removed entirely, and rules,
    blockquote markers and list markers are stripped. Heading markers are
    removed unless ``preserve_headings`` is set, in which case they stay so
    that the semantic chunker can use them as section boundaries.

    Example:
        >>> MarkdownStripper().process("# Title\\n\\nSome **bold** [link](http://x)")
        'Title\\n\\nSome bold link'
    """

    name = "MarkdownStripper"
    removed_type = "markdown"

    CODE_BLOCK = re.compile(r"```[\s\S]*?```")
    INLINE_CODE = re.compile(r"`[^`]+`")
    STRONG = re.compile(r"(\*\*|__)(.*?)\1")
    EMPHASIS = re.compile(r"(\*|_)(.*?)\1")
    IMAGE = re.compile(r"!\[([^\]]*)\]\([^)]+\)")
    LINK = re.compile(r"\[([^\]]+)\]\([^)]+\)")
    HORIZONTAL_RULE = re.compile(r"^[-*_]{3,}[ \t]*$", re.MULTILINE)
    BLOCKQUOTE = re.compile(r"^>[ \t]+", re.MULTILINE)
    BULLET = re.compile(r"^[ \t]*[-*+][ \t]+", re.MULTILINE)
    NUMBERED = re.compile(r"^[ \t]*\d+\.[ \t]+", re.MULTILINE)
    HEADING = re.compile(r"^#{1,6}[ \t]+", re.MULTILINE)

    def __init__(self, preserve_headings: bool = False):
        self.preserve_headings = preserve_headings

    def process(self, content: str) -> str:
        content = self.CODE_BLOCK.sub(" ", content)
        content = self.INLINE_CODE.sub(" ", content)
        # Line markers first, a "* " bullet would otherwise open an emphasis
        content = self.HORIZONTAL_RULE.sub("", content)
        content = self.BLOCKQUOTE.sub("", content)
        content = self.BULLET.sub("", content)
        content = self.NUMBERED.sub("", content)
        content = self.STRONG.sub(r"\2", content)
        content = self.EMPHASIS.sub(r"\2", content)
        # An image is a link with a leading "!"
        content = self.IMAGE.sub("", content)
        content = self.LINK.sub(r"\1", content)

        if not self.preserve_headings:
            content = self.HEADING.sub("", content)
        return content


class UrlRemover(BasePreprocessor):
    name = "UrlRemover"
    removed_type = "urls"

    def process(self, content: str) -> str:
        return URL_PATTERN.sub("", content)


class EmailRedactor(BasePreprocessor):
    """Replaces email addresses with a fixed placeholder."""

    name = "EmailRedactor"
    removed_type = "emails"

    def process(self, content: str) -> str:
        return EMAIL_PATTERN.sub(EMAIL_PLACEHOLDER, content)


class UnicodeNormalizer(BasePreprocessor):
    """
    NFC normalization followed by full-width to half-width folding.

    Example:
        >>> UnicodeNormalizer().process("ＡＢＣ１２３，ｏｋ")
        'ABC123,ok'
    """

    name = "UnicodeNormalizer"
    removed_type = "unicode"

    def process(self, content: str) -> str:
        content = unicodedata.normalize("NFC", content)
        return content.translate(_FULLWIDTH_TABLE)


class WhitespaceNormalizer(BasePreprocessor):
    """
    Whitespace and line break normalizer.

    Normalization Rules:
        - CRLF and lone CR line endings become LF
        - Tabs become spaces
        - Three or more consecutive newlines collapse to one blank line
        - Runs of spaces collapse to a single space
        - Leading and trailing whitespace removed

    A single blank line is kept, so paragraph structure survives.

    Example:
        >>> WhitespaceNormalizer().process("This  has\\tspaces.\\r\\n\\r\\n\\r\\nNext.")
        'This has spaces.\\n\\nNext.'
    """

    name = "WhitespaceNormalizer"
    removed_type = "whitespace"

    def process(self, content: str) -> str:
        content = content.replace("\r\n", "\n").replace("\r", "\n")
        content = content.replace("\t", " ")
        content = re.sub(r"\n{3,}", "\n\n", content)
        content = re.sub(r" {2,}", " ", content)
        return content.strip()


class CustomPatternRemover(BasePreprocessor):
    """Removes every match of one operator supplied regular expression."""

    name = "CustomPattern"

    def __init__(self, pattern: str):
        self.pattern = re.compile(pattern)
        self.removed_type = pattern

    def process(self, content: str) -> str:
        return self.pattern.sub("", content)


def build_cleaners(config: CleanerConfig) -> List[BasePreprocessor]:
    """
    Instantiate the cleaners enabled by ``config`` in pipeline order.

    Args:
        config: Cleaner flags for one target type

    Returns:
        List of preprocessors to apply one after the other
    """
    cleaners: List[BasePreprocessor] = []
    if config.remove_html:
        cleaners.append(HTMLCleaner())
    if config.remove_noise:
        cleaners.append(NoiseFilter())
    if config.remove_markdown:
        cleaners.append(MarkdownStripper(config.preserve_heading_structure))
    if config.remove_urls:
        cleaners.append(UrlRemover())
    if config.remove_emails:
        cleaners.append(EmailRedactor())
    if config.normalize_unicode:
        cleaners.append(UnicodeNormalizer())
    for pattern in config.custom_patterns:
        cleaners.append(CustomPatternRemover(pattern))
    if config.normalize_whitespace:
        cleaners.append(WhitespaceNormalizer())
    return cleaners


def clean_content(raw: str, config: Optional[CleanerConfig] = None) -> CleanedContent:
    """
    Run the enabled cleaners over ``raw`` and record what changed.

    A cleaner is listed in ``cleaners_applied`` (and its pattern family in
    ``removed_patterns``) only when it changed the text. WhitespaceNormalizer
    is the exception: when enabled it is always listed, since its output is
    the final form of the text.

    Args:
        raw: Raw entity content
        config: Cleaner flags, defaults to every cleaner enabled

    Returns:
        CleanedContent with ``cleaning_ratio`` = cleaned / original length
        (1.0 for empty input)
    """
    config = config or CleanerConfig()

    if not raw:
        return CleanedContent(
            raw=raw,
            cleaned="",
            removed_patterns=(),
            metadata=CleaningMetadata(
                original_length=0, cleaned_length=0, cleaning_ratio=1.0
            ),
        )

    cleaned = raw
    applied: List[str] = []
    removed: List[str] = []

    for cleaner in build_cleaners(config):
        result = cleaner(cleaned)
        if isinstance(cleaner, WhitespaceNormalizer):
            applied.append(cleaner.name)
        elif result != cleaned:
            applied.append(cleaner.name)
            removed.append(cleaner.removed_type)
        cleaned = result

    metadata = CleaningMetadata(
        original_length=len(raw),
        cleaned_length=len(cleaned),
        cleaning_ratio=len(cleaned) / len(raw),
        cleaners_applied=tuple(applied),
    )
    logger.debug(
        "Cleaned content",
        original_length=metadata.original_length,
        cleaned_length=metadata.cleaned_length,
        cleaners_applied=applied,
    )
    return CleanedContent(
        raw=raw, cleaned=cleaned, removed_patterns=tuple(removed), metadata=metadata
    )
