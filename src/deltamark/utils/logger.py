"""Logger lookup for deltamark modules.

Every codec logger lives under the ``deltamark`` namespace, so a host
editor can switch codec diagnostics on or off in one place:

    deltamark.decoding.lines       code fence enter/leave
    deltamark.decoding.spans       references rejected by the validator
    deltamark.renderers.markdown   placeholders written in non-strict mode

Only DEBUG records are emitted; the codec never configures handlers.

Example:
    >>> import logging
    >>> logging.basicConfig()
    >>> logging.getLogger("deltamark").setLevel(logging.DEBUG)
"""

from __future__ import annotations

import logging

_ROOT = "deltamark"


def get_logger(name: str) -> logging.Logger:
    """Logger for a codec module, rooted at ``deltamark``.

    Module ``__name__`` values are already rooted and pass through unchanged.

    Example:
        >>> get_logger("decoding.lines").name
        'deltamark.decoding.lines'
    """
    if not (name == _ROOT or name.startswith(f"{_ROOT}.")):
        name = f"{_ROOT}.{name}"
    return logging.getLogger(name)
