"""StringBuilder for O(n) string accumulation.

Appends to a list, joins once at the end: O(n) total vs O(n²) for
repeated string concatenation. The Markdown encoder keeps two of these,
one for the document and one for the line being written.

Thread Safety:
StringBuilder instances are local to each render() call.
No shared mutable state.

"""

from __future__ import annotations


class StringBuilder:
    """Efficient string accumulator.

    Appends to a list, joins once at the end.

    Usage:
            >>> sb = StringBuilder()
            >>> sb.append("**")
            >>> sb.append("Hello")
            >>> sb.append("**")
            >>> sb.build()
            '**Hello**'

    """

    __slots__ = ("_parts",)

    def __init__(self) -> None:
        """Initialize empty StringBuilder."""
        self._parts: list[str] = []

    def append(self, s: str) -> StringBuilder:
        """Append a string to the builder.

        Args:
            s: String to append (empty strings are skipped)

        Returns:
            self for method chaining
        """
        if s:
            self._parts.append(s)
        return self

    def extend(self, strings: list[str]) -> StringBuilder:
        """Append multiple strings at once."""
        self._parts.extend(s for s in strings if s)
        return self

    def endswith(self, suffix: str) -> bool:
        """Check whether the accumulated text ends with ``suffix``.

        Only the trailing parts are inspected, so this stays cheap on long
        documents.
        """
        tail = ""
        for part in reversed(self._parts):
            tail = part + tail
            if len(tail) >= len(suffix):
                break
        return tail.endswith(suffix)

    def trim_right(self) -> str:
        """Remove trailing spaces and return them.

        Lets a caller write closing tags directly after the last visible
        character and then put the spaces back.

        Returns:
            The removed spaces ("" when the text does not end with a space)
        """
        if not self.endswith(" "):
            return ""
        text = self.build()
        trimmed = text.rstrip(" ")
        self._parts = [trimmed] if trimmed else []
        return text[len(trimmed) :]

    def build(self) -> str:
        """Join all parts into final string.

        Returns:
            Concatenated string of all appended parts
        """
        return "".join(self._parts)

    def clear(self) -> StringBuilder:
        """Clear all accumulated parts.

        Returns:
            self for method chaining
        """
        self._parts.clear()
        return self

    def __len__(self) -> int:
        """Return number of parts (not total length)."""
        return len(self._parts)

    def __bool__(self) -> bool:
        """Return True if any parts have been appended."""
        return bool(self._parts)
