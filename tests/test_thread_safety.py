"""Thread safety tests for the codec.

Decoder state lives on per-call instances and configuration travels through a
ContextVar. These tests run real threads to catch shared-state bugs:
1. Concurrent decodes of different sources never mix results
2. Codecs with different reference validators stay isolated
3. A shared MarkdownRenderer produces identical output under concurrency
"""

from concurrent.futures import ThreadPoolExecutor

from deltamark import MarkdownCodec, decode, encode
from deltamark.renderers import MarkdownRenderer

SOURCES = [
    "# Title {n}\n\n* a\n* **b**",
    "```\ncode {n}\n```\nafter",
    "> quote {n} with @ref and #tag",
    "1. one {n}\n  1. nested\n2. two",
    "- [x] done {n}\n- [ ] todo",
]


class TestConcurrentDecoding:
    """Decoding from many threads at once."""

    def test_decodes_match_sequential_results(self) -> None:
        sources = [s.format(n=n) for n in range(20) for s in SOURCES]
        expected = [encode(decode(s)) for s in sources]

        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(lambda s: encode(decode(s)), sources))

        assert results == expected

    def test_codecs_with_different_validators(self) -> None:
        accept = MarkdownCodec(reference_validator=lambda ref: True)
        reject = MarkdownCodec(reference_validator=lambda ref: False)

        def run(idx: int) -> tuple[int, int]:
            codec = accept if idx % 2 == 0 else reject
            doc = codec.decode("hi @ana")
            return idx, len(doc.lines()[0].children)

        with ThreadPoolExecutor(max_workers=8) as executor:
            results = dict(executor.map(run, range(64)))

        # Accepted: "hi " + reference embed; rejected: one text run
        assert all(count == (2 if idx % 2 == 0 else 1) for idx, count in results.items())

    def test_shared_renderer(self) -> None:
        renderer = MarkdownRenderer()
        doc = decode("# A\n\n* **b** _c_\n\n```\nd\n```")
        expected = renderer.render(doc)

        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(lambda _: renderer.render(doc), range(50)))

        assert all(r == expected for r in results)
