"""Formatting attributes and immutable styles.

An Attribute is a (key, scope, value) triple. Inline attributes apply to a
run of text; line attributes apply to a whole line and travel on the line's
terminating newline.

Attribute keys:
Inline
├── b          bold
├── i          italic
├── u          underline
├── s          strikethrough
├── c          inline code
├── a          link (value: href)
├── bg / fg    background / foreground color
Line
├── heading    heading level (1..6)
├── block      quote | ol | ul | cl | code
├── indent     indent level
├── checked    checklist item is checked
└── alignment  left | center | right | justify

A Style is a persistent value: every operation returns a new Style, so
recursive decoding can pass styles down without aliasing.

Thread Safety:
All types are frozen and safe to share across threads.

"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, TypeAlias

AttributeValue: TypeAlias = bool | int | str


class AttributeScope(Enum):
    """Where an attribute applies."""

    INLINE = "inline"
    LINE = "line"


@dataclass(frozen=True, slots=True)
class Attribute:
    """A single formatting attribute.

    Two attributes are equal when key, scope and value all match. A value of
    None means "unset" and removes the key when merged into a Style.

    """

    key: str
    scope: AttributeScope
    value: AttributeValue | None = None

    @property
    def is_inline(self) -> bool:
        return self.scope is AttributeScope.INLINE

    def with_value(self, value: AttributeValue | None) -> Attribute:
        """Return a copy of this attribute carrying ``value``."""
        return replace(self, value=value)

    @property
    def unset(self) -> Attribute:
        """Attribute that removes this key when merged."""
        return replace(self, value=None)


BLOCK_KEY = "block"

BOLD = Attribute("b", AttributeScope.INLINE, True)
ITALIC = Attribute("i", AttributeScope.INLINE, True)
UNDERLINE = Attribute("u", AttributeScope.INLINE, True)
STRIKETHROUGH = Attribute("s", AttributeScope.INLINE, True)
INLINE_CODE = Attribute("c", AttributeScope.INLINE, True)
LINK = Attribute("a", AttributeScope.INLINE)
BACKGROUND_COLOR = Attribute("bg", AttributeScope.INLINE)
FOREGROUND_COLOR = Attribute("fg", AttributeScope.INLINE)

HEADING = Attribute("heading", AttributeScope.LINE)
BLOCK = Attribute(BLOCK_KEY, AttributeScope.LINE)
QUOTE = BLOCK.with_value("quote")
ORDERED_LIST = BLOCK.with_value("ol")
UNORDERED_LIST = BLOCK.with_value("ul")
CHECK_LIST = BLOCK.with_value("cl")
CODE = BLOCK.with_value("code")
INDENT = Attribute("indent", AttributeScope.LINE)
CHECKED = Attribute("checked", AttributeScope.LINE, True)
ALIGNMENT = Attribute("alignment", AttributeScope.LINE)

# Templates used to rebuild attributes from their JSON form
ATTRIBUTE_REGISTRY: dict[str, Attribute] = {
    attr.key: attr
    for attr in (
        BOLD,
        ITALIC,
        UNDERLINE,
        STRIKETHROUGH,
        INLINE_CODE,
        LINK,
        BACKGROUND_COLOR,
        FOREGROUND_COLOR,
        HEADING,
        BLOCK,
        INDENT,
        CHECKED,
        ALIGNMENT,
    )
}


def link(href: str) -> Attribute:
    """Link attribute pointing at ``href``."""
    return LINK.with_value(href)


def heading(level: int) -> Attribute:
    """Heading attribute of the given level."""
    return HEADING.with_value(level)


def indent(level: int) -> Attribute:
    """Indent attribute of the given level."""
    return INDENT.with_value(level)


def attribute_from(key: str, value: AttributeValue | None) -> Attribute:
    """Rebuild an attribute from its key and value.

    Raises:
        KeyError: If ``key`` is not a registered attribute.
    """
    return ATTRIBUTE_REGISTRY[key].with_value(value)


@dataclass(frozen=True, slots=True)
class Style:
    """Immutable, insertion-ordered set of attributes keyed by attribute key.

    The order attributes were acquired in is kept: the encoder opens inline
    tags in that order and closes them in reverse.

    Usage:
        >>> style = Style.of(BOLD).put(link("https://x.org"))
        >>> style.contains(LINK)
        True
        >>> style.value(LINK)
        'https://x.org'

    """

    attributes: tuple[Attribute, ...] = ()

    @classmethod
    def of(cls, *attributes: Attribute) -> Style:
        """Build a style from attributes (later keys overwrite earlier ones)."""
        return EMPTY_STYLE.put_all(attributes)

    @classmethod
    def from_json(cls, data: Mapping[str, Any] | None) -> Style:
        """Build a style from a ``{key: value}`` mapping.

        Raises:
            KeyError: If a key is not a registered attribute.
        """
        if not data:
            return EMPTY_STYLE
        return cls.of(*(attribute_from(key, value) for key, value in data.items()))

    def to_json(self) -> dict[str, AttributeValue] | None:
        """Return the ``{key: value}`` mapping, or None when empty."""
        if not self.attributes:
            return None
        return {attr.key: attr.value for attr in self.attributes}  # type: ignore[misc]

    # Queries

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(attr.key for attr in self.attributes)

    @property
    def is_empty(self) -> bool:
        return not self.attributes

    @property
    def is_inline(self) -> bool:
        """True when every attribute is inline (an empty style counts)."""
        return all(attr.is_inline for attr in self.attributes)

    @property
    def inline_attributes(self) -> tuple[Attribute, ...]:
        return tuple(attr for attr in self.attributes if attr.is_inline)

    @property
    def line_attributes(self) -> tuple[Attribute, ...]:
        return tuple(attr for attr in self.attributes if not attr.is_inline)

    def contains(self, attribute: Attribute) -> bool:
        """True if an attribute with the same key is present (any value)."""
        return any(attr.key == attribute.key for attr in self.attributes)

    def contains_same(self, attribute: Attribute) -> bool:
        """True if exactly this attribute (key and value) is present."""
        return attribute in self.attributes

    def get(self, attribute: Attribute) -> Attribute | None:
        """Return the attribute stored under ``attribute.key``."""
        for attr in self.attributes:
            if attr.key == attribute.key:
                return attr
        return None

    def value(self, attribute: Attribute) -> AttributeValue | None:
        """Return the value stored under ``attribute.key``."""
        found = self.get(attribute)
        return found.value if found is not None else None

    # Updates (all return a new Style)

    def put(self, attribute: Attribute) -> Style:
        """Set ``attribute``, overwriting the same key in place."""
        attrs = list(self.attributes)
        for idx, attr in enumerate(attrs):
            if attr.key == attribute.key:
                attrs[idx] = attribute
                return Style(tuple(attrs))
        attrs.append(attribute)
        return Style(tuple(attrs))

    def put_all(self, attributes: Iterable[Attribute]) -> Style:
        style = self
        for attr in attributes:
            style = style.put(attr)
        return style

    def remove(self, attribute: Attribute) -> Style:
        """Drop the attribute stored under ``attribute.key``."""
        if not self.contains(attribute):
            return self
        return Style(tuple(attr for attr in self.attributes if attr.key != attribute.key))

    def merge(self, attribute: Attribute) -> Style:
        """Put ``attribute``, or remove its key when its value is None."""
        if attribute.value is None:
            return self.remove(attribute)
        return self.put(attribute)

    def merge_all(self, other: Style) -> Style:
        """Merge every attribute of ``other``; ``other`` wins on conflicts."""
        style = self
        for attr in other.attributes:
            style = style.merge(attr)
        return style

    def under(self, outer: Style) -> Style:
        """Merge this style beneath ``outer``.

        Outer attributes come first and win on key conflicts, so a nested
        construct keeps the formatting of the construct that encloses it.
        """
        outer_keys = set(outer.keys)
        return Style(
            outer.attributes
            + tuple(attr for attr in self.attributes if attr.key not in outer_keys)
        )

    def __iter__(self) -> Iterator[Attribute]:
        return iter(self.attributes)

    def __len__(self) -> int:
        return len(self.attributes)


EMPTY_STYLE = Style()
