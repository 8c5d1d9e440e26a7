"""Utility modules for deltamark.

Provides:
- logger: get_logger for logging
"""

from deltamark.utils.logger import get_logger

__all__ = [
    "get_logger",
]
