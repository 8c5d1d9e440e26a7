"""Ordered interval merging for inline pattern matches.

The span tokenizer runs several independent regular expressions over the
same text (emphasis, links, hashtags, references). Each produces matches;
this module merges them into one left-to-right stream.

Ordering:
    Matches sort by start offset, then by kind priority:
    STYLE < LINK < HASHTAG < REFERENCE

Overlap:
    While replaying, a match that starts before the end of the previously
    accepted match is dropped. For nested constructs (a link inside bold)
    the inner match is re-detected when the enclosing match's content is
    tokenized recursively. Partial overlaps resolve to the earliest start.

Thread Safety:
All types are immutable NamedTuples; functions are pure.

"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from enum import IntEnum
from typing import NamedTuple


class MatchKind(IntEnum):
    """Match category; the integer value is the tie-break priority."""

    STYLE = 0
    LINK = 1
    HASHTAG = 2
    REFERENCE = 3


class Match(NamedTuple):
    """A pattern detection within one span.

    Attributes:
        start: Offset of the first matched character.
        end: Offset one past the last matched character.
        text: The full matched text.
        kind: What the pattern detected.
        groups: Kind-specific captures, e.g. (content, tag) for STYLE
            or (label, href) for LINK.

    """

    start: int
    end: int
    text: str
    kind: MatchKind
    groups: tuple[str, ...] = ()

    @property
    def sort_key(self) -> tuple[int, int]:
        return (self.start, int(self.kind))


def merge_matches(*collections: Iterable[Match]) -> list[Match]:
    """Merge match collections into one list ordered by start, then priority.

    Args:
        *collections: Independently collected matches.

    Returns:
        All matches, globally ordered.
    """
    merged = [match for collection in collections for match in collection]
    merged.sort(key=lambda match: match.sort_key)
    return merged


def linearize(text: str, matches: Iterable[Match]) -> Iterator[str | Match]:
    """Replay ordered matches over ``text`` with literal gaps filled in.

    Args:
        text: The span the matches were collected from.
        matches: Matches ordered as returned by merge_matches().

    Yields:
        Literal text fragments (never empty) and accepted matches, in order.
    """
    pos = 0
    for match in matches:
        if match.start < pos:
            continue
        if match.start > pos:
            yield text[pos : match.start]
        yield match
        pos = match.end
    if pos < len(text):
        yield text[pos:]
