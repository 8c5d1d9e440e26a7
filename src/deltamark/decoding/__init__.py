"""Markdown decoding for deltamark.

The decoder is composed from two mixins:
- LineClassifierMixin: block rules for one line (lists, headings, quotes, code)
- SpanTokenizerMixin: inline rules for one span (emphasis, links, hashtags)
"""

from deltamark.decoding.core import Decoder
from deltamark.decoding.lines import LineClassifierMixin
from deltamark.decoding.spans import SpanTokenizerMixin, style_for_tag

__all__ = [
    "Decoder",
    "LineClassifierMixin",
    "SpanTokenizerMixin",
    "style_for_tag",
]
