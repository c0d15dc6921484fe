"""Tests for markdown stripping and excerpt generation."""

from liteblog.services.content_utils import EXCERPT_LENGTH, generate_excerpt, strip_markdown


class TestStripMarkdown:

    def test_headings(self):
        assert strip_markdown("# Title\n## Sub") == "Title Sub"

    def test_emphasis(self):
        assert strip_markdown("**bold** and *italic* and __strong__") == "bold and italic and strong"

    def test_links_keep_label(self):
        assert strip_markdown("see [the docs](https://example.com) now") == "see the docs now"

    def test_images_removed(self):
        assert strip_markdown("before ![alt text](img.png) after") == "before after"

    def test_code_blocks_removed_inline_code_unwrapped(self):
        text = "Intro\n```\nprint('x')\n```\nUse `pip install` here"
        assert strip_markdown(text) == "Intro Use pip install here"

    def test_whitespace_collapsed(self):
        assert strip_markdown("  a\n\n\tb   c  ") == "a b c"


class TestGenerateExcerpt:

    def test_default_length(self):
        assert EXCERPT_LENGTH == 200

    def test_short_text_unchanged(self):
        assert generate_excerpt("Just a line.") == "Just a line."

    def test_cuts_at_word_boundary(self):
        assert generate_excerpt("word " * 10, max_length=10) == "word word..."

    def test_hard_cut_without_nearby_space(self):
        assert generate_excerpt("x" * 100, max_length=40) == "x" * 40 + "..."

    def test_strips_markdown_first(self):
        excerpt = generate_excerpt("# Heading\n\n**Bold** text " + "more " * 100)
        assert excerpt.startswith("Heading Bold text more")
        assert excerpt.endswith("...")
        assert len(excerpt) <= EXCERPT_LENGTH + 3

    def test_negative_length_clamps_to_zero(self):
        assert generate_excerpt("hello", max_length=-5) == "..."

    def test_empty(self):
        assert generate_excerpt("") == ""

    def test_cjk_counts_code_points(self):
        assert generate_excerpt("你好世界你好世界", max_length=4) == "你好世界..."
