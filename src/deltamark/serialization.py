"""Delta serialization: Quill-style JSON for deltamark deltas.

Converts deltas to/from JSON-compatible operation lists:

    [
        {"insert": "Title"},
        {"insert": "\\n", "attributes": {"heading": 1}},
        {"insert": {"_type": "hr", "_inline": false}},
        {"insert": "\\n"}
    ]

Attribute key order is kept, since it records the order in which inline
formatting was acquired. Output is deterministic for a given delta.

Example:
    from deltamark import decode_delta
    from deltamark.serialization import to_json, from_json

    delta = decode_delta("# Hello **World**")
    assert from_json(to_json(delta)) == delta

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
from collections.abc import Mapping
from typing import Any

from deltamark.delta import Delta, Operation
from deltamark.document import Document
from deltamark.embeds import Embed
from deltamark.errors import SerializationError
from deltamark.style import Style


def operation_to_dict(op: Operation) -> dict[str, Any]:
    """Convert one operation to its JSON-compatible dict."""
    data = op.data.to_json() if isinstance(op.data, Embed) else op.data
    result: dict[str, Any] = {"insert": data}
    attributes = op.attributes.to_json()
    if attributes:
        result["attributes"] = attributes
    return result


def to_list(delta: Delta | Document) -> list[dict[str, Any]]:
    """Convert a delta (or a document's delta) to a list of operation dicts."""
    if isinstance(delta, Document):
        delta = delta.to_delta()
    return [operation_to_dict(op) for op in delta]


def from_list(ops: list[Mapping[str, Any]]) -> Delta:
    """Rebuild a delta from operation dicts.

    Raises:
        SerializationError: If an operation is not an insert, holds an
            unsupported value, or uses an unknown attribute key.
    """
    delta = Delta()
    for index, raw in enumerate(ops):
        if not isinstance(raw, Mapping) or "insert" not in raw:
            raise SerializationError("Expected an insert operation", index)

        data = raw["insert"]
        if isinstance(data, Mapping):
            if "_type" not in data:
                raise SerializationError("Embed is missing '_type'", index)
            data = Embed.from_json(data)
        elif not isinstance(data, str):
            raise SerializationError(f"Cannot insert {type(data).__name__}", index)

        raw_attributes = raw.get("attributes")
        if not isinstance(raw_attributes, Mapping | None):
            raise SerializationError("Attributes must be a mapping", index)
        try:
            attributes = Style.from_json(raw_attributes)
        except KeyError as exc:
            raise SerializationError(f"Unknown attribute {exc.args[0]!r}", index) from exc

        delta.insert(data, attributes)
    return delta


def to_json(delta: Delta | Document, *, indent: int | None = None) -> str:
    """Serialize a delta (or a document) to a JSON string.

    Args:
        delta: Delta or Document to serialize.
        indent: JSON indentation level (None for compact).

    """
    return json.dumps(to_list(delta), indent=indent, ensure_ascii=False)


def from_json(data: str) -> Delta:
    """Deserialize a delta from a JSON string.

    Raises:
        SerializationError: If the JSON is not a list of insert operations.
    """
    raw = json.loads(data)
    if not isinstance(raw, list):
        raise SerializationError(f"Expected a list of operations, got {type(raw).__name__}")
    return from_list(raw)
