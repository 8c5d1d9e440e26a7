"""Tests for the Markdown renderer."""

import pytest

from deltamark import MarkdownCodec, decode, encode
from deltamark.config import CodecConfig, codec_config_context
from deltamark.delta import Delta
from deltamark.document import Document
from deltamark.embeds import BlockEmbed, SpanEmbed
from deltamark.errors import UnsupportedAttributeError
from deltamark.renderers import DocumentRenderer, MarkdownRenderer
from deltamark.style import (
    ALIGNMENT,
    BOLD,
    FOREGROUND_COLOR,
    ITALIC,
    QUOTE,
    UNDERLINE,
    Style,
    heading,
    link,
)
from deltamark.text import extract_text


def doc_of(*inserts: tuple) -> Document:
    """Build a document from (data, style) pairs."""
    delta = Delta()
    for data, style in inserts:
        delta.insert(data, style)
    return Document.from_delta(delta)


def roundtrip(source: str) -> str:
    return encode(decode(source))


class TestInlineFormatting:
    """Attribute diffing between text runs."""

    @pytest.mark.parametrize(
        "source",
        [
            "**a**",
            "_a_",
            "~~a~~",
            "`a`",
            "[docs](https://x.org)",
            "**_bold italic_**",
            "_**x**_",
            "**[text](http://x)**",
        ],
    )
    def test_simple_styles(self, source: str) -> None:
        assert roundtrip(source) == source + "\n\n"

    def test_italic_asterisks_become_underscores(self) -> None:
        assert roundtrip("*a* and __b__") == "_a_ and **b**\n\n"

    def test_opening_and_closing_order(self) -> None:
        doc = doc_of(
            ("Hello ", Style.of(BOLD)),
            ("big", Style.of(BOLD, ITALIC)),
            (" world\n", None),
        )
        assert encode(doc) == "**Hello _big_** world\n\n"

    def test_trailing_space_moves_outside_tags(self) -> None:
        doc = doc_of(("bold ", Style.of(BOLD)), ("x\n", None))
        assert encode(doc) == "**bold** x\n\n"

    def test_leading_space_written_before_tags(self) -> None:
        doc = doc_of(("x", None), (" bold", Style.of(BOLD)), ("\n", None))
        assert encode(doc) == "x **bold**\n\n"

    def test_whitespace_only_run_opens_nothing(self) -> None:
        doc = doc_of(("a", None), ("  ", Style.of(BOLD)), ("b\n", None))
        assert encode(doc) == "a  b\n\n"

    def test_closing_earlier_attribute_reopens_later_one(self) -> None:
        doc = doc_of(
            ("a", Style.of(BOLD, ITALIC)),
            ("b", Style.of(ITALIC)),
            ("\n", None),
        )
        assert encode(doc) == "**_a_**_b_\n\n"

    def test_link_boundary_between_equal_labels(self) -> None:
        doc = doc_of(("a", Style.of(link("u"))), ("b", Style.of(link("v"))), ("\n", None))
        assert encode(doc) == "[a](u)[b](v)\n\n"


class TestBlocks:
    """Line attributes and block grouping."""

    def test_heading(self) -> None:
        assert roundtrip("# Hello **World**") == "# Hello **World**\n\n"
        assert roundtrip("### Deep") == "### Deep\n\n"

    def test_unordered_list(self) -> None:
        assert roundtrip("* a\n* b") == "* a\n* b\n\n"

    def test_ordered_list_is_renumbered(self) -> None:
        assert roundtrip("1. a\n1. b\n7. c") == "1. a\n2. b\n3. c\n\n"

    def test_ordered_list_counters_per_indent(self) -> None:
        source = "1. a\n2. b\n  1. c\n  2. d\n3. e\n  1. f"
        assert roundtrip(source) == source + "\n\n"

    def test_indented_unordered(self) -> None:
        assert roundtrip("* a\n  * b") == "* a\n  * b\n\n"

    def test_checklist(self) -> None:
        assert roundtrip("- [ ] a\n- [x] b") == "- [ ] a\n- [X] b\n\n"

    def test_quote(self) -> None:
        assert roundtrip("> a\n> b") == "> a\n> b\n\n"

    def test_quoted_heading(self) -> None:
        assert roundtrip("> # Title") == "> # Title\n\n"

    def test_block_tag_precedes_heading_regardless_of_order(self) -> None:
        doc = doc_of(("x", None), ("\n", Style.of(heading(1), QUOTE)))
        assert encode(doc) == "> # x\n\n"

    def test_code_block(self) -> None:
        assert roundtrip("```\nx = 1\n  y\n```") == "```\nx = 1\n  y\n```\n\n"

    def test_code_block_keeps_markdown_verbatim(self) -> None:
        assert roundtrip("```\n**x**\n```") == "```\n**x**\n```\n\n"

    def test_paragraphs_separated_by_blank_line(self) -> None:
        assert roundtrip("# T\npara") == "# T\n\npara\n\n"

    def test_adjacent_blocks(self) -> None:
        assert roundtrip("* a\n1. b") == "* a\n\n1. b\n\n"


class TestEmbeds:
    """Horizontal rules, span embeds and fallbacks."""

    def test_horizontal_rule(self) -> None:
        assert roundtrip("---") == "---\n\n\n"

    def test_rule_between_paragraphs_is_stable(self) -> None:
        once = roundtrip("a\n---\nb")
        assert "\n---\n" in once
        assert decode(once) == decode("a\n---\nb")

    def test_hashtag_and_reference(self) -> None:
        assert roundtrip("see #news cc @ana") == "see #news cc @ana\n\n"

    def test_embed_after_styled_run_closes_tags(self) -> None:
        assert roundtrip("**a**#t") == "**a**#t\n\n"

    def test_unknown_block_embed_strict(self) -> None:
        doc = doc_of((BlockEmbed("image"), None), ("\n", None))
        with pytest.raises(UnsupportedAttributeError) as exc_info:
            encode(doc)
        assert exc_info.value.attribute == "embed:image"

    def test_unknown_block_embed_placeholder(self) -> None:
        doc = doc_of((BlockEmbed("image"), None), ("\n", None))
        assert encode(doc, strict=False) == "[object]\n\n"

    def test_span_embed_without_text(self) -> None:
        doc = doc_of(("a ", None), (SpanEmbed("mention"), None), ("\n", None))
        with pytest.raises(UnsupportedAttributeError):
            encode(doc)
        assert encode(doc, strict=False) == "a [object]\n\n"


class TestStrictMode:
    """Attributes without Markdown syntax."""

    def test_underline_strict_raises(self) -> None:
        doc = doc_of(("x", Style.of(UNDERLINE)), ("\n", None))
        with pytest.raises(UnsupportedAttributeError) as exc_info:
            encode(doc)
        assert exc_info.value.attribute == "u"
        assert "'u=True'" in str(exc_info.value)

    def test_underline_non_strict(self) -> None:
        doc = doc_of(("x", Style.of(UNDERLINE)), ("\n", None))
        assert encode(doc, strict=False) == "<u>x</u>\n\n"

    def test_color_placeholder(self) -> None:
        doc = doc_of(("x", Style.of(FOREGROUND_COLOR.with_value("#f00"))), ("\n", None))
        assert encode(doc, strict=False) == "[object]x[object]\n\n"
        with pytest.raises(UnsupportedAttributeError) as exc_info:
            encode(doc)
        assert exc_info.value.attribute == "fg"
        assert exc_info.value.value == "#f00"

    def test_line_attribute_strict(self) -> None:
        doc = doc_of(("x", None), ("\n", Style.of(ALIGNMENT.with_value("center"))))
        with pytest.raises(UnsupportedAttributeError) as exc_info:
            encode(doc)
        assert exc_info.value.attribute == "alignment"

    def test_strict_default_from_config(self) -> None:
        doc = doc_of(("x", Style.of(UNDERLINE)), ("\n", None))
        with codec_config_context(CodecConfig(strict_encoding=False)):
            assert encode(doc) == "<u>x</u>\n\n"
        with pytest.raises(UnsupportedAttributeError):
            encode(doc)

    def test_codec_non_strict(self) -> None:
        codec = MarkdownCodec(strict_encoding=False)
        doc = doc_of(("x", Style.of(UNDERLINE)), ("\n", None))
        assert codec.encode(doc) == "<u>x</u>\n\n"
        assert not codec.encoder.strict


class TestRendererProtocol:
    """MarkdownRenderer conforms to DocumentRenderer."""

    def test_isinstance(self) -> None:
        assert isinstance(MarkdownRenderer(), DocumentRenderer)

    def test_renderer_reusable(self) -> None:
        renderer = MarkdownRenderer()
        doc = decode("* a")
        assert renderer.render(doc) == renderer.render(doc)

    def test_plain_text_encoder_conforms(self) -> None:
        class PlainTextEncoder:
            def render(self, node: Document) -> str:
                return extract_text(node)

        encoder = PlainTextEncoder()
        assert isinstance(encoder, DocumentRenderer)
        assert encoder.render(decode("# **Hi** #x")) == "Hi #x"
