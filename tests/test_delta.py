"""Tests for the insert-only delta builder."""

import pytest

from deltamark import decode
from deltamark.delta import Delta, Operation
from deltamark.embeds import HORIZONTAL_RULE, BlockEmbed, SpanEmbed, hashtag
from deltamark.style import BOLD, EMPTY_STYLE, Style, heading


class TestInsert:
    """Delta.insert coalescing rules."""

    def test_coalesces_equal_styles(self) -> None:
        delta = Delta().insert("Hello ").insert("world")
        assert delta.operations() == (Operation("Hello world"),)

    def test_keeps_different_styles_apart(self) -> None:
        delta = Delta().insert("a").insert("b", Style.of(BOLD))
        assert len(delta) == 2

    def test_ignores_empty_strings(self) -> None:
        delta = Delta().insert("").insert("x").insert("")
        assert delta.operations() == (Operation("x"),)

    def test_embeds_never_coalesce(self) -> None:
        delta = Delta().insert(hashtag("#a")).insert(hashtag("#a"))
        assert len(delta) == 2

    def test_text_after_embed_starts_new_operation(self) -> None:
        delta = Delta().insert("a").insert(HORIZONTAL_RULE).insert("b")
        assert [op.data for op in delta] == ["a", HORIZONTAL_RULE, "b"]

    def test_none_attributes_mean_empty(self) -> None:
        delta = Delta().insert("x", None)
        assert delta.last.attributes is EMPTY_STYLE


class TestDeltaQueries:
    """Lengths, equality and access."""

    def test_length_counts_embeds_as_one(self) -> None:
        delta = Delta().insert("abc").insert(HORIZONTAL_RULE).insert("\n")
        assert delta.length == 5

    def test_last_on_empty_raises(self) -> None:
        with pytest.raises(IndexError):
            Delta().last

    def test_equality(self) -> None:
        a = Delta().insert("T").insert("\n", Style.of(heading(1)))
        b = Delta([Operation("T"), Operation("\n", Style.of(heading(1)))])
        assert a == b
        assert a != Delta().insert("T\n")

    def test_constructor_coalesces(self) -> None:
        delta = Delta([Operation("a"), Operation("b")])
        assert delta.operations() == (Operation("ab"),)

    def test_operation_helpers(self) -> None:
        assert Operation("x\n").ends_with_newline()
        assert not Operation(HORIZONTAL_RULE).ends_with_newline()
        assert not Operation(HORIZONTAL_RULE).is_text
        assert Operation(HORIZONTAL_RULE).length == 1


class TestHashing:
    """Operations and documents holding embeds are hashable."""

    def test_equal_embeds_hash_equal(self) -> None:
        assert hash(hashtag("#a")) == hash(hashtag("#a"))
        assert len({hashtag("#a"), hashtag("#a"), hashtag("#b")}) == 2

    def test_span_and_block_embeds_stay_distinct(self) -> None:
        assert SpanEmbed("x") != BlockEmbed("x")

    def test_nested_payload(self) -> None:
        embed = BlockEmbed("image", {"size": [1, 2], "meta": {"alt": "a"}})
        assert hash(embed) == hash(BlockEmbed("image", {"meta": {"alt": "a"}, "size": [1, 2]}))

    def test_operation_with_embed(self) -> None:
        assert hash(Operation(hashtag("#a"))) == hash(Operation(hashtag("#a")))

    def test_document_with_embeds(self) -> None:
        doc = decode("see #x\n---")
        assert hash(doc) == hash(decode("see #x\n---"))
