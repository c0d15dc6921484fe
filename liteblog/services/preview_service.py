"""Preview generation - deep helper module.

Cuts article content down to a preview for readers who may not see all of it.
The cut lands on a natural boundary when ``smart_paragraph`` is on: a paragraph
break, a line break or a sentence end shortly after the target length, else a
sentence end or a space shortly before it.

All lengths are counted in code points, so CJK text is never split mid-character.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..models.article import DEFAULT_PREVIEW_MIN_CHARS, DEFAULT_PREVIEW_PERCENTAGE

SENTENCE_ENDINGS = frozenset(".!?。！？；")

FORWARD_WINDOW = 100
"""How far past the target the smart cut looks for a boundary."""

SENTENCE_LOOKBACK = 50
WORD_LOOKBACK = 30

ELLIPSIS = "..."


@dataclass(frozen=True)
class PreviewConfig:
    """How much of an article a masked reader gets.

    Out-of-range values are clamped on construction: percentage to [0, 100],
    min_chars to >= 0.
    """

    percentage: int = DEFAULT_PREVIEW_PERCENTAGE
    min_chars: int = DEFAULT_PREVIEW_MIN_CHARS
    smart_paragraph: bool = True

    def __post_init__(self):
        object.__setattr__(self, "percentage", min(max(int(self.percentage), 0), 100))
        object.__setattr__(self, "min_chars", max(int(self.min_chars), 0))
        object.__setattr__(self, "smart_paragraph", bool(self.smart_paragraph))

    @classmethod
    def from_article(cls, article) -> "PreviewConfig":
        return cls(
            percentage=article.preview_percentage if article.preview_percentage is not None
            else DEFAULT_PREVIEW_PERCENTAGE,
            min_chars=article.preview_min_chars if article.preview_min_chars is not None
            else DEFAULT_PREVIEW_MIN_CHARS,
            smart_paragraph=article.preview_smart_paragraph if article.preview_smart_paragraph is not None
            else True,
        )


def preview_target(total: int, config: PreviewConfig) -> int:
    """Target preview length: the larger of the percentage share and min_chars."""
    return max(config.min_chars, total * config.percentage // 100)


def find_smart_cut_point(content: str, target: int) -> int:
    """
    Find where to end a preview near *target*.

    DEEP MODULE: callers only see an index. First match wins:
        1. paragraph break in [target, target+100) -> just after it
        2. line break in the same window -> just after it
        3. sentence punctuation in the same window -> just after it
        4. sentence punctuation up to 50 code points before target -> just after it
        5. space or tab up to 30 code points before target -> at it
        6. target itself

    Args:
        content: Full text
        target: Desired cut index (0 <= target < len(content))

    Returns:
        Cut index; the preview is ``content[:index]``.
    """
    n = len(content)
    end = min(target + FORWARD_WINDOW, n)

    for i in range(target, end - 1):
        if content[i] == "\n" and content[i + 1] == "\n":
            return i + 2

    for i in range(target, end):
        if content[i] == "\n":
            return i + 1

    for i in range(target, end):
        if content[i] in SENTENCE_ENDINGS:
            return i + 1

    i = min(target, n - 1)
    while i > target - SENTENCE_LOOKBACK and i > 0:
        if content[i] in SENTENCE_ENDINGS:
            return i + 1
        i -= 1

    i = min(target, n - 1)
    while i > target - WORD_LOOKBACK and i > 0:
        if content[i] in (" ", "\t"):
            return i
        i -= 1

    return target


def generate_preview(content: str, config: PreviewConfig) -> str:
    """Return the preview of *content*; never longer than the input."""
    if not content:
        return ""

    total = len(content)
    target = preview_target(total, config)
    if target >= total:
        return content

    if not config.smart_paragraph:
        return content[:target]

    cut = min(max(find_smart_cut_point(content, target), 0), total)
    return content[:cut]


def generate_preview_with_ellipsis(content: str, config: PreviewConfig) -> tuple[str, bool]:
    """Like ``generate_preview`` but marks truncation with a trailing ellipsis.

    Returns:
        ``(preview, was_truncated)``. When truncated, trailing whitespace is
        trimmed before the ellipsis is appended.
    """
    preview = generate_preview(content, config)
    if len(preview) >= len(content):
        return preview, False
    return preview.rstrip(" \t\n\r") + ELLIPSIS, True
