"""Markdown renderer: document tree to Markdown text.

Walks the line/block tree and writes Markdown using two StringBuilders,
one for the document and one for the line in progress.

Inline formatting is written by diffing attribute sets between consecutive
text runs: attributes that end are closed in reverse acquisition order,
attributes that start are opened in acquisition order.

    [b] "Hello "  [b, i] "big"  [] " world"
    → **Hello _big_** world

Strict mode raises UnsupportedAttributeError for attributes and embeds that
have no Markdown syntax. Non-strict mode writes ``<u>...</u>`` for underline
and an ``[object]`` placeholder for anything else.

Thread Safety:
All per-render state is encapsulated in RenderContext, created fresh for each
render() call. A MarkdownRenderer can be shared across threads.

"""

from __future__ import annotations

from dataclasses import dataclass, field

from deltamark.document import BlockNode, Document, EmbedNode, LineNode, TextNode
from deltamark.embeds import HORIZONTAL_RULE_TYPE, Embed
from deltamark.errors import UnsupportedAttributeError
from deltamark.stringbuilder import StringBuilder
from deltamark.style import (
    BLOCK,
    BOLD,
    CHECK_LIST,
    CHECKED,
    CODE,
    EMPTY_STYLE,
    HEADING,
    INDENT,
    INLINE_CODE,
    ITALIC,
    LINK,
    ORDERED_LIST,
    STRIKETHROUGH,
    UNDERLINE,
    Attribute,
    Style,
)
from deltamark.utils.logger import get_logger

logger = get_logger(__name__)

OBJECT_PLACEHOLDER = "[object]"

# Block values whose per-line prefix is written when the line opens
_SIMPLE_BLOCKS: dict[str, str] = {
    "quote": "> ",
    "ul": "* ",
    "ol": ". ",
    "cl": "",
}


@dataclass(slots=True)
class RenderContext:
    """Per-render mutable state.

    Attributes:
        buffer: Finished output
        line: The line being written
        inline_style: Inline attributes currently open on this line
        block: Block attribute whose tag is currently open

    """

    buffer: StringBuilder = field(default_factory=StringBuilder)
    line: StringBuilder = field(default_factory=StringBuilder)
    inline_style: Style = EMPTY_STYLE
    block: Attribute | None = None


class MarkdownRenderer:
    """Render a Document to Markdown.

    Usage:
        >>> renderer = MarkdownRenderer(strict=False)
        >>> renderer.render(document)
        '# Title\\n\\n'

    """

    __slots__ = ("_strict",)

    def __init__(self, *, strict: bool = True) -> None:
        """Initialize renderer.

        Args:
            strict: Raise for attributes without a Markdown representation
        """
        self._strict = strict

    @property
    def strict(self) -> bool:
        return self._strict

    def render(self, node: Document) -> str:
        """Render document to Markdown.

        Top-level lines and blocks are each followed by a blank line.

        Raises:
            UnsupportedAttributeError: In strict mode, for attributes or embeds
                without Markdown syntax.
        """
        ctx = RenderContext()
        for child in node.children:
            match child:
                case BlockNode():
                    self._render_block(child, ctx)
                case LineNode():
                    self._render_line(child, ctx)
            ctx.buffer.append("\n\n")
        return ctx.buffer.build()

    # =========================================================================
    # Blocks and lines
    # =========================================================================

    def _render_block(self, block: BlockNode, ctx: RenderContext) -> None:
        ordered = block.style.contains_same(ORDERED_LIST)
        checklist = block.style.contains_same(CHECK_LIST)

        # Next item number for each indent level
        item_numbers: dict[int, int] = {}
        previous_level = 0
        for line in block.children:
            level = int(line.style.value(INDENT) or 0)
            if level > 0:
                ctx.line.append("  " * level)
            if level > previous_level or level not in item_numbers:
                item_numbers[level] = 1
            previous_level = level

            if ordered:
                ctx.line.append(str(item_numbers[level]))
            elif checklist:
                ctx.line.append("- [X] " if line.style.contains(CHECKED) else "- [ ] ")

            self._render_line(line, ctx)
            if not line.is_last:
                ctx.buffer.append("\n")
            item_numbers[level] += 1

        # Flush: an unstyled line closes whatever block tag is still open
        self._render_line(LineNode(), ctx)
        ctx.block = None

    def _render_line(self, line: LineNode, ctx: RenderContext) -> None:
        if line.has_block_embed:
            self._render_block_embed(line.children[0].value, ctx)  # type: ignore[union-attr]
            return

        # The block tag leads the line: "> # x", never "# > x"
        line_attrs = sorted(line.style.line_attributes, key=lambda attr: attr.key != BLOCK.key)
        for attr in line_attrs:
            if attr.key != BLOCK.key:
                self._write_attribute(ctx.line, attr)
            elif ctx.block != attr:
                self._write_attribute(ctx.line, attr)
                ctx.block = attr
            elif attr != CODE:
                self._write_attribute(ctx.line, attr)

        for child in line.children:
            match child:
                case TextNode():
                    self._render_text(child, ctx)
                case EmbedNode():
                    self._render_span_embed(child.value, ctx)

        self._render_text(TextNode(), ctx)

        block = line.style.get(BLOCK)
        if ctx.block is not None and ctx.block != block:
            self._write_attribute(ctx.line, ctx.block, close=True)

        ctx.buffer.append(ctx.line.build())
        ctx.line.clear()

    def _render_text(self, node: TextNode, ctx: RenderContext) -> None:
        """Write a text run, closing and opening inline tags around it."""
        padding = ctx.line.trim_right()

        # Close from the innermost tag down to the first attribute that ends
        open_attrs = list(ctx.inline_style.inline_attributes)
        keep = len(open_attrs)
        for idx, attr in enumerate(open_attrs):
            if not node.style.contains_same(attr):
                keep = idx
                break
        for attr in reversed(open_attrs[keep:]):
            self._write_attribute(ctx.line, attr, close=True)
        open_attrs = open_attrs[:keep]

        ctx.line.append(padding)

        text = node.value.lstrip()
        ctx.line.append(node.value[: len(node.value) - len(text)])

        if text:
            for attr in node.style.inline_attributes:
                if attr not in open_attrs:
                    self._write_attribute(ctx.line, attr)
                    open_attrs.append(attr)
            ctx.line.append(text)

        ctx.inline_style = Style(tuple(open_attrs))

    # =========================================================================
    # Embeds
    # =========================================================================

    def _render_block_embed(self, embed: Embed, ctx: RenderContext) -> None:
        if embed.type == HORIZONTAL_RULE_TYPE:
            if ctx.buffer and not ctx.buffer.endswith("\n"):
                ctx.buffer.append("\n")
            ctx.buffer.append("---\n")
            return
        ctx.buffer.append(self._fallback(f"embed:{embed.type}"))

    def _render_span_embed(self, embed: Embed, ctx: RenderContext) -> None:
        # Embed payloads are unformatted; close open inline tags first
        self._render_text(TextNode(), ctx)
        text = embed.text
        if text is not None:
            ctx.line.append(text)
            return
        ctx.line.append(self._fallback(f"embed:{embed.type}"))

    # =========================================================================
    # Tags
    # =========================================================================

    def _write_attribute(self, sb: StringBuilder, attr: Attribute, *, close: bool = False) -> None:
        match attr.key:
            case BOLD.key:
                sb.append("**")
            case ITALIC.key:
                sb.append("_")
            case INLINE_CODE.key:
                sb.append("`")
            case STRIKETHROUGH.key:
                sb.append("~~")
            case LINK.key:
                sb.append(f"]({attr.value})" if close else "[")
            case HEADING.key:
                sb.append("#" * int(attr.value or 0) + " ")
            case BLOCK.key:
                self._write_block_tag(sb, attr, close=close)
            case CHECKED.key | INDENT.key:
                # Rendered by _render_block as part of the item prefix
                pass
            case UNDERLINE.key if not self._strict:
                sb.append("</u>" if close else "<u>")
            case _:
                sb.append(self._fallback(attr.key, attr.value))

    def _write_block_tag(self, sb: StringBuilder, attr: Attribute, *, close: bool = False) -> None:
        if attr == CODE:
            sb.append("\n```" if close else "```\n")
            return
        if close:
            return
        tag = _SIMPLE_BLOCKS.get(str(attr.value))
        if tag is None:
            sb.append(self._fallback(attr.key, attr.value))
            return
        sb.append(tag)

    def _fallback(self, name: str, value: object = None) -> str:
        """Placeholder for something Markdown cannot express.

        Raises:
            UnsupportedAttributeError: In strict mode.
        """
        if self._strict:
            raise UnsupportedAttributeError(name, value)
        logger.debug("No Markdown syntax for %s=%r, writing placeholder", name, value)
        return OBJECT_PLACEHOLDER
