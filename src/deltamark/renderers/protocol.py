"""Encoder interface: anything that turns a decoded Document back into text.

``MarkdownRenderer`` is the built-in encoder; its strict flag decides whether
formatting without Markdown syntax raises or degrades to a placeholder.
Other targets only need a ``render`` method:

    from deltamark import Document, extract_text

    class PlainTextEncoder:
        def render(self, node: Document) -> str:
            return extract_text(node)

    assert isinstance(PlainTextEncoder(), DocumentRenderer)

"""

from typing import Protocol, runtime_checkable

from deltamark.document import Document


@runtime_checkable
class DocumentRenderer(Protocol):
    """Encoder from a Document tree to text."""

    def render(self, node: Document) -> str:
        """Encode ``node``; may raise UnsupportedAttributeError."""
        ...
