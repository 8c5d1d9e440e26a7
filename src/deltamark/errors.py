"""Exception classes for deltamark.

Provides standardized exceptions for error handling throughout deltamark.
Decoding never raises; these are produced by encoding, document construction
and serialization.
"""

from __future__ import annotations


class DeltamarkError(Exception):
    """Base exception for all deltamark errors.

    Subclass this for specific error categories.
    """

    pass


class UnsupportedAttributeError(DeltamarkError):
    """Attribute or embed without a native Markdown representation.

    Raised by the Markdown encoder in strict mode. In non-strict mode the
    encoder substitutes a fallback instead (``<u>`` for underline, an opaque
    placeholder for everything else).
    """

    def __init__(self, attribute: str, value: object = None) -> None:
        """Initialize with the offending attribute.

        Args:
            attribute: Attribute key or embed type (e.g., "u", "embed:image")
            value: Attribute value, if any
        """
        self.attribute = attribute
        self.value = value

        detail = f"={value!r}" if value is not None else ""
        super().__init__(f"Cannot encode attribute '{attribute}{detail}' as Markdown")


class DocumentError(DeltamarkError):
    """Error while building a document from a delta.

    Raised when an operation carries data the document model cannot hold.
    """

    pass


class SerializationError(DeltamarkError):
    """Error while converting a delta from its JSON form.

    Raised for malformed operations or unknown attribute keys.
    """

    def __init__(self, message: str, index: int | None = None) -> None:
        """Initialize serialization error.

        Args:
            message: Error description
            index: Position of the offending operation (optional)
        """
        self.message = message
        self.index = index

        location = f"operation {index}: " if index is not None else ""
        super().__init__(f"{location}{message}")
