"""
deltamark: Markdown codec for delta-based rich-text documents

Converts Markdown to an ordered list of insert operations ("delta") with
formatting attributes, and back. Built for rich-text editors that import and
export Markdown while keeping emphasis, links, lists, quotes and code intact.

Quick Start:
    >>> from deltamark import decode, encode
    >>> doc = decode("# Hello **World**")
    >>> encode(doc)
    '# Hello **World**\\n\\n'

    >>> # Or configure a codec once
    >>> from deltamark import MarkdownCodec
    >>> codec = MarkdownCodec(strict_encoding=False)
    >>> codec.encode(codec.decode("- [x] done"))
    '- [X] done\\n\\n'

References:
    >>> codec = MarkdownCodec(reference_validator=lambda ref: ref == "@ana")
    >>> doc = codec.decode("ping @ana and @bob")  # only @ana becomes an embed

Installation:
    pip install deltamark            # zero runtime dependencies
"""

from collections.abc import Iterable
from dataclasses import replace

from deltamark.config import (
    CodecConfig,
    ReferenceValidator,
    codec_config_context,
    get_codec_config,
    reset_codec_config,
    set_codec_config,
)
from deltamark.decoding import Decoder
from deltamark.delta import Delta, Operation
from deltamark.document import BlockNode, Document, EmbedNode, LineNode, TextNode
from deltamark.embeds import HORIZONTAL_RULE, BlockEmbed, Embed, SpanEmbed
from deltamark.errors import (
    DeltamarkError,
    DocumentError,
    SerializationError,
    UnsupportedAttributeError,
)
from deltamark.renderers.markdown import MarkdownRenderer
from deltamark.renderers.protocol import DocumentRenderer
from deltamark.serialization import from_json, from_list, to_json, to_list
from deltamark.style import Attribute, AttributeScope, Style
from deltamark.text import extract_text

__version__ = "0.1.0"


def _decode_config(reference_validator: ReferenceValidator | None) -> CodecConfig:
    config = get_codec_config()
    if reference_validator is None:
        return config
    return replace(config, reference_validator=reference_validator)


def decode_delta(
    source: str,
    *,
    reference_validator: ReferenceValidator | None = None,
) -> Delta:
    """Decode Markdown source into a delta.

    Args:
        source: Markdown source text
        reference_validator: Predicate receiving ``"@name"``; references it
            rejects stay literal text (uses the active config if None)

    Returns:
        Delta of insert operations
    """
    with codec_config_context(_decode_config(reference_validator)):
        return Decoder().decode(source)


def decode(
    source: str,
    *,
    reference_validator: ReferenceValidator | None = None,
) -> Document:
    """Decode Markdown source into a Document.

    Never raises for string input; unrecognized syntax is kept as text.

    Example:
        >>> doc = decode("* item")
        >>> doc.children[0].style.to_json()
        {'block': 'ul'}
    """
    return Document.from_delta(decode_delta(source, reference_validator=reference_validator))


def encode(document: Document, *, strict: bool | None = None) -> str:
    """Encode a Document as Markdown.

    Args:
        document: Document to encode
        strict: Raise for attributes without Markdown syntax
            (uses the active config's ``strict_encoding`` if None)

    Raises:
        UnsupportedAttributeError: In strict mode.
    """
    if strict is None:
        strict = get_codec_config().strict_encoding
    return MarkdownRenderer(strict=strict).render(document)


class MarkdownCodec:
    """Markdown codec holding one configuration.

    Usage:
        >>> codec = MarkdownCodec(strict_encoding=False)
        >>> text = codec.encode(codec.decode("**hi**"))

    Thread Safety:
        Uses ContextVar for context-local configuration. Safe to use multiple
        codecs concurrently from different threads.

    """

    __slots__ = ("_config",)

    def __init__(
        self,
        *,
        strict_encoding: bool = True,
        reference_validator: ReferenceValidator | None = None,
    ) -> None:
        """Initialize codec.

        Args:
            strict_encoding: Raise for attributes without Markdown syntax
            reference_validator: Predicate deciding which ``@name`` tokens
                become reference embeds (None accepts all)
        """
        self._config = CodecConfig(
            strict_encoding=strict_encoding,
            reference_validator=reference_validator,
        )

    @property
    def config(self) -> CodecConfig:
        return self._config

    @property
    def decoder(self) -> Decoder:
        """A fresh decoder bound to this codec's configuration."""
        return Decoder(self._config)

    @property
    def encoder(self) -> MarkdownRenderer:
        return MarkdownRenderer(strict=self._config.strict_encoding)

    def decode(self, source: str) -> Document:
        """Decode Markdown source into a Document."""
        with codec_config_context(self._config):
            return Document.from_delta(Decoder().decode(source))

    def decode_many(self, sources: Iterable[str]) -> list[Document]:
        """Decode several sources under one config context."""
        with codec_config_context(self._config):
            return [Document.from_delta(Decoder().decode(source)) for source in sources]

    def encode(self, document: Document) -> str:
        """Encode a Document as Markdown."""
        return self.encoder.render(document)


__all__ = [  # noqa: RUF022
    # Version
    "__version__",
    # Core API
    "decode",
    "decode_delta",
    "encode",
    "MarkdownCodec",
    # Document model
    "Document",
    "LineNode",
    "BlockNode",
    "TextNode",
    "EmbedNode",
    # Delta
    "Delta",
    "Operation",
    "Embed",
    "SpanEmbed",
    "BlockEmbed",
    "HORIZONTAL_RULE",
    # Style
    "Attribute",
    "AttributeScope",
    "Style",
    # Codec parts
    "Decoder",
    "MarkdownRenderer",
    "DocumentRenderer",
    # Serialization
    "to_list",
    "from_list",
    "to_json",
    "from_json",
    # Text
    "extract_text",
    # Configuration (ContextVar-based)
    "CodecConfig",
    "ReferenceValidator",
    "get_codec_config",
    "set_codec_config",
    "reset_codec_config",
    "codec_config_context",
    # Errors
    "DeltamarkError",
    "DocumentError",
    "SerializationError",
    "UnsupportedAttributeError",
]
