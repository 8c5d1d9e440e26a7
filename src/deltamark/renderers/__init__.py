"""Renderers for deltamark documents."""

from deltamark.renderers.markdown import MarkdownRenderer, RenderContext
from deltamark.renderers.protocol import DocumentRenderer

__all__ = [
    "DocumentRenderer",
    "MarkdownRenderer",
    "RenderContext",
]
