"""Span tokenizer mixin: inline constructs within one line.

Collects matches for inline styles, links, hashtags and references over a
span, merges them into one ordered stream and replays it into the delta:

    "see **[docs](https://x.org)** #news"
     │    │                        └── hashtag embed
     │    └── bold span → link span → "docs" {b, a}
     └── literal "see "

Inline code content is inserted literally. Every other style or link match
recurses on its content with the new attribute merged under the outer style.
Hashtags and references are only detected at the top level of a line.
"""

from __future__ import annotations

import re

from deltamark.config import CodecConfig
from deltamark.decoding import patterns
from deltamark.delta import Delta
from deltamark.embeds import hashtag, reference
from deltamark.matching import Match, MatchKind, linearize, merge_matches
from deltamark.style import (
    BOLD,
    EMPTY_STYLE,
    INLINE_CODE,
    ITALIC,
    STRIKETHROUGH,
    Style,
    link,
)
from deltamark.utils.logger import get_logger

logger = get_logger(__name__)

CODE_TAG = "`"
STRIKETHROUGH_TAG = "~~"


def style_for_tag(tag: str) -> Style:
    """Map an emphasis delimiter run to its style.

    Three-character runs give bold and italic, outermost delimiter first:
    ``**_`` acquires bold before italic, ``_**`` italic before bold.
    """
    if tag == CODE_TAG:
        return Style.of(INLINE_CODE)
    if tag == STRIKETHROUGH_TAG:
        return Style.of(STRIKETHROUGH)
    if len(tag) == 3:
        if tag[0] == tag[1]:
            return Style.of(BOLD, ITALIC)
        return Style.of(ITALIC, BOLD)
    if len(tag) == 2:
        return Style.of(BOLD)
    return Style.of(ITALIC)


def _style_match(m: re.Match[str]) -> Match:
    """Convert an INLINE_STYLE regex match into a STYLE Match (content, tag)."""
    if m["italic_bold_text"] is not None:
        content, tag = m["italic_bold_text"], m["ib_italic"] + m["ib_bold"]
    elif m["bold_italic_text"] is not None:
        content, tag = m["bold_italic_text"], m["bi_bold"] + m["bi_italic"]
    elif m["bold_or_italic_text"] is not None:
        content, tag = m["bold_or_italic_text"], m["boi_tag"]
    elif m["strike_through_text"] is not None:
        content, tag = m["strike_through_text"], STRIKETHROUGH_TAG
    else:
        content, tag = m["inline_code_text"], CODE_TAG
    return Match(m.start(), m.end(), m.group(0), MatchKind.STYLE, (content, tag))


class SpanTokenizerMixin:
    """Mixin providing inline span tokenization."""

    _config: CodecConfig
    _delta: Delta

    def _emit_span(
        self,
        span: str,
        style: Style | None,
        append_terminator: bool,
        *,
        nested: bool = False,
    ) -> None:
        """Tokenize ``span`` and append its fragments to the delta.

        Args:
            span: Text to tokenize
            style: Outer style applied to every fragment
            append_terminator: Append a line terminator carrying the outer
                style's line attributes (also for an empty span)
            nested: True inside a style or link match; disables hashtag and
                reference detection
        """
        outer = style if style is not None else EMPTY_STYLE
        inline = Style(outer.inline_attributes)

        collections: list[list[Match]] = []
        if not outer.contains(INLINE_CODE):
            collections.append(self._collect_styles(span))
        collections.append(self._collect_links(span))
        if not nested:
            collections.append(self._collect_hashtags(span))
            collections.append(self._collect_references(span))

        for piece in linearize(span, merge_matches(*collections)):
            if isinstance(piece, str):
                self._delta.insert(piece, inline)
            else:
                self._emit_match(piece, inline)

        if append_terminator:
            self._emit_terminator(outer)

    def _emit_terminator(self, style: Style | None) -> None:
        """Append a line terminator carrying the line attributes of ``style``."""
        line_style = Style(style.line_attributes) if style is not None else EMPTY_STYLE
        self._delta.insert("\n", line_style)

    def _emit_match(self, token: Match, outer: Style) -> None:
        match token.kind:
            case MatchKind.STYLE:
                content, tag = token.groups
                inner = style_for_tag(tag).under(outer)
                if tag == CODE_TAG:
                    self._delta.insert(content, inner)
                else:
                    self._emit_span(content, inner, False, nested=True)
            case MatchKind.LINK:
                label, href = token.groups
                self._emit_span(label, Style.of(link(href)).under(outer), False, nested=True)
            case MatchKind.HASHTAG:
                self._delta.insert(hashtag(token.text))
            case MatchKind.REFERENCE:
                self._delta.insert(reference(token.text))

    def _collect_styles(self, span: str) -> list[Match]:
        return [_style_match(m) for m in patterns.INLINE_STYLE.finditer(span)]

    def _collect_links(self, span: str) -> list[Match]:
        return [
            Match(m.start(), m.end(), m.group(0), MatchKind.LINK, (m["label"], m["href"]))
            for m in patterns.LINK.finditer(span)
        ]

    def _collect_hashtags(self, span: str) -> list[Match]:
        return [
            Match(m.start(), m.end(), m.group(0), MatchKind.HASHTAG)
            for m in patterns.HASHTAG.finditer(span)
        ]

    def _collect_references(self, span: str) -> list[Match]:
        matches = []
        for m in patterns.REFERENCE.finditer(span):
            if not self._config.accepts_reference(m.group(0)):
                logger.debug("Reference %r rejected by validator", m.group(0))
                continue
            matches.append(Match(m.start(), m.end(), m.group(0), MatchKind.REFERENCE))
        return matches
