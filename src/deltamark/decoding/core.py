"""Markdown decoder: text to delta.

Splits the source into lines, classifies each line and tokenizes its
inline spans. The result is a Delta ready for Document.from_delta().

Thread Safety:
Decoder instances hold all per-call state (the delta being built and the
fenced-code flag). Create one per source string; concurrent decodes on
separate instances never interact.

"""

from __future__ import annotations

from deltamark.config import CodecConfig, get_codec_config
from deltamark.decoding.lines import LineClassifierMixin
from deltamark.decoding.spans import SpanTokenizerMixin
from deltamark.delta import Delta


class Decoder(
    # Listed first so its methods override the line classifier's stubs
    SpanTokenizerMixin,
    LineClassifierMixin,
):
    """Line-by-line Markdown decoder.

    Usage:
            >>> delta = Decoder().decode("# Hello **World**")
            >>> [op.data for op in delta]
            ['Hello ', 'World', '\\n']

    """

    __slots__ = (
        "_config",
        "_delta",
        "_in_code_block",
    )

    def __init__(self, config: CodecConfig | None = None) -> None:
        """Initialize decoder.

        Args:
            config: Codec configuration (uses the active context config if None)
        """
        self._config = config if config is not None else get_codec_config()
        self._delta = Delta()
        self._in_code_block = False

    def decode(self, source: str) -> Delta:
        """Decode Markdown source into a delta.

        Never raises: constructs that do not match a rule are kept as
        literal text.
        """
        self._delta = Delta()
        self._in_code_block = False
        for line in source.replace("\r\n", "\n").split("\n"):
            self._classify_line(line)
        return self._delta
