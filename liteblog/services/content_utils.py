"""Content processing utilities - deep helper module."""

import re

EXCERPT_LENGTH = 200
"""
Maximum length of an article excerpt before the ellipsis.

Rationale: 200 chars is ~2 sentences, enough for a list card, small enough
to keep list responses light. Changing this value affects every article list.
"""

EXCERPT_WORD_LOOKBACK = 30

# Order matters: code blocks and images go before links and emphasis.
_MARKDOWN_RULES = [
    (re.compile(r"```[^`]*```"), ""),
    (re.compile(r"!\[([^\]]*)\]\([^)]+\)"), ""),
    (re.compile(r"\[([^\]]+)\]\([^)]+\)"), r"\1"),
    (re.compile(r"^#{1,6}\s*", re.MULTILINE), ""),
    (re.compile(r"\*{1,2}([^*]+)\*{1,2}"), r"\1"),
    (re.compile(r"_{1,2}([^_]+)_{1,2}"), r"\1"),
    (re.compile(r"`([^`]+)`"), r"\1"),
    (re.compile(r"\s+"), " "),
]


def strip_markdown(content: str) -> str:
    """Best-effort removal of markdown syntax, leaving readable plain text."""
    text = content
    for pattern, replacement in _MARKDOWN_RULES:
        text = pattern.sub(replacement, text)
    return text.strip()


def generate_excerpt(content: str, max_length: int = EXCERPT_LENGTH) -> str:
    """
    Generate a plain-text excerpt from markdown content.

    DEEP MODULE: Hides markdown stripping and word-boundary truncation.

    Args:
        content: The full article content (markdown)
        max_length: Length in code points before the ellipsis; negatives count as 0

    Returns:
        Stripped text, truncated at a word boundary with "..." if it was too long
    """
    max_length = max(max_length, 0)
    text = strip_markdown(content)
    if len(text) <= max_length:
        return text

    cut = max_length
    i = max_length
    while i > max_length - EXCERPT_WORD_LOOKBACK and i > 0:
        if text[i] == " ":
            cut = i
            break
        i -= 1

    return text[:cut].rstrip() + "..."
