"""Compiled patterns for the Markdown decoder.

All patterns are module-level constants compiled once at import time.
Line patterns are applied with ``match`` (anchored at the line start);
span patterns are applied with ``finditer``.

Emphasis pairing relies on backreferences: the closing delimiter must repeat
the opening one (reversed for mixed runs), so ``**_x_**`` pairs while
``**_x**_`` does not. Emphasis content may not end with a space or with a
delimiter character, which keeps ``** **`` and ``***`` literal.
"""

import re

# =============================================================================
# Line patterns
# =============================================================================

HORIZONTAL_RULE = re.compile(r"^ *([-*_])\1{2,}\s*$")
BLOCKQUOTE = re.compile(r"^> *(?P<content>.*)")
CODE_FENCE = re.compile(r"^ *```")
ORDERED_LIST = re.compile(r"^(?P<indent> *)\d+[.)] +(?P<content>.*)")
UNORDERED_LIST = re.compile(r"^(?P<indent> *)\* +(?P<content>.*)")
CHECK_LIST = re.compile(r"^(?P<indent> *)- +\[(?P<mark>[ xX])\] +(?P<content>.*)")
HEADING = re.compile(r"^(?P<hashes>#+) +(?P<content>.+)")

# =============================================================================
# Span patterns
# =============================================================================

_ITALIC_BOLD = (
    r"(?P<ib_italic>[*_])(?P<ib_bold>(?P<ib_char>[*_])(?P=ib_char))"
    r"(?P<italic_bold_text>.*?(?![*_])[^ ])"
    r"(?P=ib_bold)(?P=ib_italic)"
)
_BOLD_ITALIC = (
    r"(?P<bi_bold>(?P<bi_char>[*_])(?P=bi_char))(?P<bi_italic>[*_])"
    r"(?P<bold_italic_text>.*?(?![*_])[^ ])"
    r"(?P=bi_italic)(?P=bi_bold)"
)
_BOLD_OR_ITALIC = (
    r"(?P<boi_tag>(?P<boi_char>[*_])(?P=boi_char)?)"
    r"(?P<bold_or_italic_text>.*?(?!(?P=boi_char))[^ ])"
    r"(?P=boi_tag)(?!(?P=boi_char))"
)
_STRIKETHROUGH = r"~~(?P<strike_through_text>.+?)~~"
_INLINE_CODE = r"`(?P<inline_code_text>.+?)`"

# Alternation order is the priority order for matches starting at one offset
INLINE_STYLE = re.compile(
    "|".join(
        f"(?:{alternative})"
        for alternative in (
            _ITALIC_BOLD,
            _BOLD_ITALIC,
            _BOLD_OR_ITALIC,
            _STRIKETHROUGH,
            _INLINE_CODE,
        )
    )
)

LINK = re.compile(r"\[(?P<label>.+?)\]\((?P<href>[^)]+)\)")
HASHTAG = re.compile(r"#\S+")
REFERENCE = re.compile(r"@\S+")
