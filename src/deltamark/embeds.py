"""Embeddable objects carried by a delta.

An embed is an atomic insert of length 1. Span embeds sit inside a line
next to text (hashtags, references); block embeds occupy a line of their
own (horizontal rules).

JSON form:
    {"_type": "hashtag", "_inline": true, "text": "#python"}
    {"_type": "hr", "_inline": false}

"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar

HASHTAG = "hashtag"
REFERENCE = "reference"
HORIZONTAL_RULE_TYPE = "hr"


def _freeze(value: Any) -> Any:
    """Hashable stand-in for a JSON-like payload value."""
    if isinstance(value, Mapping):
        return tuple(sorted((k, _freeze(v)) for k, v in value.items()))
    if isinstance(value, list | tuple):
        return tuple(_freeze(v) for v in value)
    return value


@dataclass(frozen=True, slots=True)
class Embed:
    """Base class for embeds.

    Attributes:
        type: Embed kind (e.g., "hashtag", "hr")
        data: Small payload, e.g. ``{"text": "#python"}``

    """

    inline: ClassVar[bool] = False

    type: str
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def text(self) -> str | None:
        """Raw text payload, if the embed has one."""
        value = self.data.get("text")
        return value if isinstance(value, str) else None

    def to_json(self) -> dict[str, Any]:
        return {"_type": self.type, "_inline": self.inline, **self.data}

    def __hash__(self) -> int:
        return hash((self.type, _freeze(self.data)))

    @staticmethod
    def from_json(data: Mapping[str, Any]) -> Embed:
        """Rebuild a span or block embed from its JSON form.

        Raises:
            KeyError: If ``_type`` is missing.
        """
        payload = {k: v for k, v in data.items() if k not in ("_type", "_inline")}
        cls = SpanEmbed if data.get("_inline", False) else BlockEmbed
        return cls(data["_type"], payload)


@dataclass(frozen=True, slots=True, eq=False)
class SpanEmbed(Embed):
    """Embed placed inline within a line of text."""

    inline: ClassVar[bool] = True


@dataclass(frozen=True, slots=True, eq=False)
class BlockEmbed(Embed):
    """Embed occupying an entire line."""

    inline: ClassVar[bool] = False


HORIZONTAL_RULE = BlockEmbed(HORIZONTAL_RULE_TYPE)


def hashtag(text: str) -> SpanEmbed:
    """Hashtag embed; ``text`` includes the leading ``#``."""
    return SpanEmbed(HASHTAG, {"text": text})


def reference(text: str) -> SpanEmbed:
    """Reference embed; ``text`` includes the leading ``@``."""
    return SpanEmbed(REFERENCE, {"text": text})
