"""Document model: a line/block tree built from a delta.

Node Hierarchy:
Document
├── LineNode (top-level line without a block attribute)
│   ├── TextNode
│   └── EmbedNode
└── BlockNode (consecutive lines sharing one block attribute)
    └── LineNode
        ├── TextNode
        └── EmbedNode

Line styles hold line attributes only; text styles hold inline attributes
only. A line whose single child is a block embed (a horizontal rule) is a
block-embed line.

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from deltamark.delta import Delta
from deltamark.embeds import Embed
from deltamark.errors import DocumentError
from deltamark.style import BLOCK, EMPTY_STYLE, Attribute, Style

# =============================================================================
# Leaf Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class TextNode:
    """A run of text sharing one inline style."""

    value: str = ""
    style: Style = EMPTY_STYLE

    @property
    def length(self) -> int:
        return len(self.value)


@dataclass(frozen=True, slots=True)
class EmbedNode:
    """An embedded object inside a line."""

    value: Embed

    @property
    def length(self) -> int:
        return 1


LeafNode: TypeAlias = TextNode | EmbedNode

# =============================================================================
# Container Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class LineNode:
    """One line of the document.

    Attributes:
        style: Line attributes (heading, block, indent, checked, ...)
        children: Text and embed nodes in order
        is_last: Whether this is the last child of its container

    """

    style: Style = EMPTY_STYLE
    children: tuple[LeafNode, ...] = ()
    is_last: bool = False

    @property
    def has_block_embed(self) -> bool:
        return (
            len(self.children) == 1
            and isinstance(self.children[0], EmbedNode)
            and not self.children[0].value.inline
        )

    @property
    def is_empty(self) -> bool:
        return not self.children


@dataclass(frozen=True, slots=True)
class BlockNode:
    """Consecutive lines sharing one block attribute.

    Attributes:
        style: Style holding just the block attribute
        children: The grouped lines

    """

    style: Style
    children: tuple[LineNode, ...]


@dataclass(frozen=True, slots=True)
class Document:
    """Root of the tree."""

    children: tuple[LineNode | BlockNode, ...]

    @classmethod
    def from_delta(cls, delta: Delta) -> Document:
        """Build the line/block tree from an insert-only delta.

        A missing final terminator is supplied. A trailing empty, unstyled
        line is dropped when the document has other lines.

        Raises:
            DocumentError: If an operation holds neither text nor an embed.
        """
        builder = _LineBuilder()
        for op in delta:
            data = op.data
            if isinstance(data, Embed):
                builder.add_embed(data)
            elif isinstance(data, str):
                builder.add_text(data, op.attributes)
            else:
                raise DocumentError(f"Cannot insert {type(data).__name__} into a document")
        lines = builder.finish()

        if len(lines) > 1 and lines[-1] == (EMPTY_STYLE, ()):
            lines.pop()

        return cls(children=_group_lines(lines))

    def lines(self) -> tuple[LineNode, ...]:
        """All lines in document order, with blocks flattened."""
        result: list[LineNode] = []
        for child in self.children:
            if isinstance(child, BlockNode):
                result.extend(child.children)
            else:
                result.append(child)
        return tuple(result)

    def to_delta(self) -> Delta:
        """Rebuild the canonical delta for this document."""
        delta = Delta()
        for line in self.lines():
            for leaf in line.children:
                if isinstance(leaf, TextNode):
                    delta.insert(leaf.value, leaf.style)
                else:
                    delta.insert(leaf.value)
            delta.insert("\n", line.style)
        return delta


# =============================================================================
# Tree construction
# =============================================================================


class _LineBuilder:
    """Splits a delta stream into (line style, leaves) pairs."""

    __slots__ = ("_current", "_lines", "_open_block_embed")

    def __init__(self) -> None:
        self._lines: list[tuple[Style, tuple[LeafNode, ...]]] = []
        self._current: list[LeafNode] = []
        self._open_block_embed = False

    def add_embed(self, embed: Embed) -> None:
        if embed.inline:
            self._close_block_embed()
        elif self._current:
            self._close_line(EMPTY_STYLE)
        self._current.append(EmbedNode(embed))
        self._open_block_embed = not embed.inline

    def add_text(self, text: str, attributes: Style) -> None:
        inline = Style(attributes.inline_attributes)
        line_style = Style(attributes.line_attributes)
        segments = text.split("\n")
        for idx, segment in enumerate(segments):
            if segment:
                self._close_block_embed()
                self._append_text(segment, inline)
            if idx < len(segments) - 1:
                self._close_line(line_style)

    def finish(self) -> list[tuple[Style, tuple[LeafNode, ...]]]:
        if self._current or not self._lines:
            self._close_line(EMPTY_STYLE)
        return self._lines

    def _append_text(self, text: str, style: Style) -> None:
        if self._current:
            previous = self._current[-1]
            if isinstance(previous, TextNode) and previous.style == style:
                self._current[-1] = TextNode(previous.value + text, style)
                return
        self._current.append(TextNode(text, style))

    def _close_block_embed(self) -> None:
        # A block embed owns its line; anything after it starts a new one
        if self._open_block_embed:
            self._close_line(EMPTY_STYLE)

    def _close_line(self, style: Style) -> None:
        self._lines.append((style, tuple(self._current)))
        self._current = []
        self._open_block_embed = False


def _group_lines(
    lines: list[tuple[Style, tuple[LeafNode, ...]]],
) -> tuple[LineNode | BlockNode, ...]:
    groups: list[tuple[Attribute | None, list[tuple[Style, tuple[LeafNode, ...]]]]] = []
    for style, leaves in lines:
        block = style.get(BLOCK)
        if block is not None and groups and groups[-1][0] == block:
            groups[-1][1].append((style, leaves))
        else:
            groups.append((block, [(style, leaves)]))

    children: list[LineNode | BlockNode] = []
    for group_idx, (block, members) in enumerate(groups):
        if block is None:
            style, leaves = members[0]
            children.append(LineNode(style, leaves, is_last=group_idx == len(groups) - 1))
            continue
        block_lines = tuple(
            LineNode(style, leaves, is_last=idx == len(members) - 1)
            for idx, (style, leaves) in enumerate(members)
        )
        children.append(BlockNode(Style.of(block), block_lines))
    return tuple(children)
