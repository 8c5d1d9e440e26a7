"""Delta: ordered insert operations describing a rich-text document.

A document delta is a list of inserts. Text inserts carry inline attributes;
each line ends with a ``"\\n"`` insert whose attributes are the line's
attributes. Embeds are inserts of length 1.

Example:
    >>> delta = Delta().insert("Title").insert("\\n", Style.of(heading(1)))
    >>> len(delta)
    2

Only the insert operations needed to describe a whole document are modelled;
retain/delete and the compose/transform algebra are out of scope.

Thread Safety:
Operations are immutable. A Delta is a builder owned by one decode() call.

"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from deltamark.embeds import Embed
from deltamark.style import EMPTY_STYLE, Style


@dataclass(frozen=True, slots=True)
class Operation:
    """A single insert.

    Attributes:
        data: Inserted text or embed
        attributes: Formatting applied to the inserted data

    """

    data: str | Embed
    attributes: Style = EMPTY_STYLE

    @property
    def is_text(self) -> bool:
        return isinstance(self.data, str)

    @property
    def length(self) -> int:
        return len(self.data) if isinstance(self.data, str) else 1

    def ends_with_newline(self) -> bool:
        return isinstance(self.data, str) and self.data.endswith("\n")


class Delta:
    """Insert-only delta builder.

    Adjacent text inserts with equal attributes are coalesced, so the
    operation list is canonical for a given document.
    """

    __slots__ = ("_operations",)

    def __init__(self, operations: Iterable[Operation] = ()) -> None:
        self._operations: list[Operation] = []
        for op in operations:
            self.insert(op.data, op.attributes)

    def insert(self, data: str | Embed, attributes: Style | None = None) -> Delta:
        """Append an insert.

        Empty strings are ignored.

        Returns:
            self for method chaining
        """
        if isinstance(data, str) and not data:
            return self
        style = attributes if attributes is not None else EMPTY_STYLE
        if isinstance(data, str) and self._operations:
            last = self._operations[-1]
            if isinstance(last.data, str) and last.attributes == style:
                self._operations[-1] = Operation(last.data + data, style)
                return self
        self._operations.append(Operation(data, style))
        return self

    @property
    def is_empty(self) -> bool:
        return not self._operations

    @property
    def last(self) -> Operation:
        """Last operation.

        Raises:
            IndexError: If the delta is empty.
        """
        return self._operations[-1]

    @property
    def length(self) -> int:
        """Document length (sum of operation lengths)."""
        return sum(op.length for op in self._operations)

    def operations(self) -> tuple[Operation, ...]:
        return tuple(self._operations)

    def __iter__(self) -> Iterator[Operation]:
        return iter(self._operations)

    def __len__(self) -> int:
        return len(self._operations)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Delta):
            return NotImplemented
        return self._operations == other._operations

    def __repr__(self) -> str:
        return f"Delta({self._operations!r})"
