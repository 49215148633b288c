"""
Token Estimator
===============

Script-aware token cost estimation without a tokenizer dependency.

Latin text, digits, punctuation and whitespace cost roughly one token per four
characters. CJK ideographs are much denser and cost 1.5 tokens each. Mixed
text sums both contributions and the total is rounded up, so any non-empty
text costs at least one token.
"""

import math
import re
from typing import List, Tuple

LATIN_TOKENS_PER_CHAR = 0.25
CJK_TOKENS_PER_CHAR = 1.5

# CJK Unified Ideographs, Extension A and Compatibility Ideographs
_CJK_RANGES = (
    (0x3400, 0x4DBF),
    (0x4E00, 0x9FFF),
    (0xF900, 0xFAFF),
)
CJK_PATTERN = re.compile(
    "[" + "".join(f"{chr(low)}-{chr(high)}" for low, high in _CJK_RANGES) + "]"
)


def is_cjk_character(char: str) -> bool:
    """Return True when ``char`` is a CJK ideograph."""
    code = ord(char)
    for low, high in _CJK_RANGES:
        if low <= code <= high:
            return True
    return False


def count_cjk_characters(text: str) -> int:
    """Count CJK ideographs in ``text``."""
    return len(CJK_PATTERN.findall(text))


def estimate_token_count(text: str) -> int:
    """
    Estimate the token cost of ``text``.

    Args:
        text: Any text, possibly empty

    Returns:
        Estimated token count, 0 for empty text

    Example:
        >>> estimate_token_count("")
        0
        >>> estimate_token_count("abcdefgh")
        2
        >>> estimate_token_count("這是測試")
        6
    """
    if not text:
        return 0

    cjk_chars = count_cjk_characters(text)
    other_chars = len(text) - cjk_chars
    return math.ceil(
        cjk_chars * CJK_TOKENS_PER_CHAR + other_chars * LATIN_TOKENS_PER_CHAR
    )


def _char_cost(char: str) -> float:
    return CJK_TOKENS_PER_CHAR if is_cjk_character(char) else LATIN_TOKENS_PER_CHAR


def token_budget_spans(
    text: str, start: int, end: int, budget: int
) -> List[Tuple[int, int]]:
    """
    Cut ``text[start:end]`` into contiguous windows costing at most ``budget``.

    Character costs are summed as the window grows, so a window over CJK text
    is much shorter than one over Latin text. A window is cut after its last
    whitespace when it has one, otherwise right before the character that
    would exceed the budget. Windows are not trimmed.

    Example:
        >>> token_budget_spans("aaaa bbbb cccc", 0, 14, 3)
        [(0, 10), (10, 14)]
    """
    spans = []
    window_start = start
    cost = 0.0
    last_space = -1
    position = start

    while position < end:
        char = text[position]
        char_cost = _char_cost(char)

        if cost + char_cost > budget and position > window_start:
            cut = last_space + 1 if last_space >= window_start else position
            spans.append((window_start, cut))
            window_start = cut
            cost = sum(_char_cost(c) for c in text[cut:position])
            last_space = -1
            continue

        cost += char_cost
        if char.isspace():
            last_space = position
        position += 1

    if window_start < end:
        spans.append((window_start, end))
    return spans
