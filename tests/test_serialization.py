"""Tests for deltamark.serialization: Quill-style JSON operations."""

import json

import pytest

from deltamark import decode, decode_delta
from deltamark.delta import Delta
from deltamark.embeds import HORIZONTAL_RULE, BlockEmbed, SpanEmbed, hashtag
from deltamark.errors import SerializationError
from deltamark.serialization import from_json, from_list, to_json, to_list
from deltamark.style import BOLD, ITALIC, Style, heading


class TestToList:
    """Converting deltas to operation dicts."""

    def test_text_and_attributes(self) -> None:
        delta = Delta().insert("Title").insert("\n", Style.of(heading(2)))
        assert to_list(delta) == [
            {"insert": "Title"},
            {"insert": "\n", "attributes": {"heading": 2}},
        ]

    def test_embeds(self) -> None:
        delta = Delta().insert(HORIZONTAL_RULE).insert(hashtag("#x"))
        assert to_list(delta) == [
            {"insert": {"_type": "hr", "_inline": False}},
            {"insert": {"_type": "hashtag", "_inline": True, "text": "#x"}},
        ]

    def test_document_accepted(self) -> None:
        doc = decode("* a")
        assert to_list(doc) == to_list(doc.to_delta())

    def test_attribute_order_kept(self) -> None:
        delta = Delta().insert("x", Style.of(ITALIC, BOLD))
        assert list(to_list(delta)[0]["attributes"]) == ["i", "b"]


class TestJson:
    """JSON strings."""

    def test_round_trip(self) -> None:
        delta = decode_delta("# Hello **World**\n\n* [x](u) #tag\n---")
        assert from_json(to_json(delta)) == delta

    def test_non_ascii_kept(self) -> None:
        text = to_json(Delta().insert("héllo\n"))
        assert "héllo" in text

    def test_indent(self) -> None:
        text = to_json(Delta().insert("a\n"), indent=2)
        assert json.loads(text) == [{"insert": "a\n"}]
        assert "\n  " in text

    def test_not_a_list(self) -> None:
        with pytest.raises(SerializationError, match="Expected a list"):
            from_json('{"insert": "x"}')


class TestFromList:
    """Rebuilding deltas and rejecting malformed operations."""

    def test_embed_classes(self) -> None:
        delta = from_list(
            [
                {"insert": {"_type": "image", "_inline": False, "src": "a.png"}},
                {"insert": {"_type": "mention", "_inline": True}},
            ]
        )
        first, second = delta.operations()
        assert first.data == BlockEmbed("image", {"src": "a.png"})
        assert second.data == SpanEmbed("mention")

    def test_coalesces(self) -> None:
        delta = from_list([{"insert": "a"}, {"insert": "b"}])
        assert len(delta) == 1

    def test_non_insert(self) -> None:
        with pytest.raises(SerializationError) as exc_info:
            from_list([{"insert": "a"}, {"retain": 3}])
        assert exc_info.value.index == 1
        assert str(exc_info.value).startswith("operation 1: ")

    def test_embed_without_type(self) -> None:
        with pytest.raises(SerializationError, match="_type"):
            from_list([{"insert": {"text": "#x"}}])

    def test_bad_insert_type(self) -> None:
        with pytest.raises(SerializationError, match="Cannot insert int"):
            from_list([{"insert": 3}])

    def test_unknown_attribute(self) -> None:
        with pytest.raises(SerializationError, match="'blink'"):
            from_list([{"insert": "x", "attributes": {"blink": True}}])

    @pytest.mark.parametrize("attributes", [["b"], "b", 1])
    def test_attributes_not_a_mapping(self, attributes: object) -> None:
        with pytest.raises(SerializationError, match="mapping") as exc_info:
            from_list([{"insert": "a\n"}, {"insert": "x", "attributes": attributes}])
        assert exc_info.value.index == 1

    def test_null_attributes_mean_empty(self) -> None:
        assert from_list([{"insert": "x", "attributes": None}]) == Delta().insert("x")
