"""Line classifier mixin: block-level rules for one Markdown line.

Rules, in priority order:

1. Inside a fenced code block: the closing fence toggles out, every other
   line is kept verbatim as a code line
2. First line of an empty document, when blank: a bare terminator
3. Horizontal rule (``---``, ``***``, ``___``)
4. Blockquote (``> ``): reclassify the remainder with ``block=quote``
5. Opening code fence
6. Ordered, unordered and check lists
7. ATX heading
8. Paragraph

Only one block attribute applies per line. Blockquote is the one block that
wraps further rules, through recursion, and its attribute then rules out
lists and nested quotes.
"""

from __future__ import annotations

from deltamark.decoding import patterns
from deltamark.delta import Delta
from deltamark.embeds import HORIZONTAL_RULE
from deltamark.style import (
    BLOCK,
    CHECK_LIST,
    CHECKED,
    CODE,
    EMPTY_STYLE,
    ORDERED_LIST,
    QUOTE,
    UNORDERED_LIST,
    Style,
    heading,
    indent,
)
from deltamark.utils.logger import get_logger

logger = get_logger(__name__)

_LIST_RULES = (
    (patterns.ORDERED_LIST, ORDERED_LIST),
    (patterns.UNORDERED_LIST, UNORDERED_LIST),
    (patterns.CHECK_LIST, CHECK_LIST),
)


class LineClassifierMixin:
    """Mixin providing block-level line classification."""

    _delta: Delta
    _in_code_block: bool

    def _emit_span(
        self,
        span: str,
        style: Style | None,
        append_terminator: bool,
        *,
        nested: bool = False,
    ) -> None:
        """Tokenize an inline span. Implemented by SpanTokenizerMixin."""
        raise NotImplementedError

    def _emit_terminator(self, style: Style | None) -> None:
        """Append a line terminator. Implemented by SpanTokenizerMixin."""
        raise NotImplementedError

    def _classify_line(self, line: str, style: Style | None = None) -> None:
        """Classify one line and append its inserts to the delta.

        Args:
            line: Line content without its newline
            style: Style inherited from an enclosing blockquote, if any
        """
        if self._in_code_block:
            self._handle_code_line(line)
            return

        if not line and self._delta.is_empty:
            self._delta.insert("\n")
            return

        if self._try_horizontal_rule(line):
            return
        if self._try_blockquote(line, style):
            return
        if self._try_code_fence(line):
            return
        if self._try_list(line, style):
            return
        if self._try_heading(line, style):
            return

        if line:
            self._emit_paragraph(line, style)

    def _handle_code_line(self, line: str) -> None:
        if patterns.CODE_FENCE.match(line):
            self._in_code_block = False
            logger.debug("Leaving fenced code block")
            return
        self._delta.insert(line)
        self._delta.insert("\n", Style.of(CODE))

    def _try_code_fence(self, line: str) -> bool:
        if patterns.CODE_FENCE.match(line) is None:
            return False
        self._in_code_block = True
        logger.debug("Entering fenced code block")
        return True

    def _try_horizontal_rule(self, line: str) -> bool:
        if patterns.HORIZONTAL_RULE.match(line) is None:
            return False
        # Classified lines always end in a terminator; only a seeded delta lacks one
        if not self._delta.is_empty and not self._delta.last.ends_with_newline():
            self._delta.insert("\n")
        self._delta.insert(HORIZONTAL_RULE)
        self._delta.insert("\n")
        return True

    def _try_blockquote(self, line: str, style: Style | None) -> bool:
        if style is not None and style.contains(BLOCK):
            return False
        match = patterns.BLOCKQUOTE.match(line)
        if match is None:
            return False
        outer = style if style is not None else EMPTY_STYLE
        self._classify_line(match["content"], outer.put(QUOTE))
        return True

    def _try_list(self, line: str, style: Style | None) -> bool:
        if style is not None and style.contains(BLOCK):
            return False

        for pattern, block in _LIST_RULES:
            match = pattern.match(line)
            if match is not None:
                break
        else:
            return False

        line_style = (style if style is not None else EMPTY_STYLE).put(block)
        level = len(match["indent"]) // 2
        if level > 0:
            line_style = line_style.put(indent(level))
        if block == CHECK_LIST and match["mark"] != " ":
            line_style = line_style.put(CHECKED)

        self._emit_span(match["content"], Style(line_style.inline_attributes), False)
        self._emit_terminator(line_style)
        return True

    def _try_heading(self, line: str, style: Style | None) -> bool:
        match = patterns.HEADING.match(line)
        if match is None:
            return False
        line_style = (style if style is not None else EMPTY_STYLE).put(
            heading(len(match["hashes"]))
        )
        self._emit_span(match["content"], Style(line_style.inline_attributes), False)
        self._emit_terminator(line_style)
        return True

    def _emit_paragraph(self, line: str, style: Style | None) -> None:
        if style is None or style.is_inline:
            self._emit_span(line, style, True)
            return
        # Inherited line attributes (from a blockquote) go on the terminator only
        self._emit_span(line, Style(style.inline_attributes), False)
        self._emit_terminator(style)
