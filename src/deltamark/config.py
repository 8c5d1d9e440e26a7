"""ContextVar-based codec configuration for deltamark.

Provides context-local configuration using Python's ContextVars (PEP 567).
Config is set once per MarkdownCodec call, read by the decoder and encoder
running in that context.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and concurrent codecs never see each other's config.

Usage:
    # In MarkdownCodec
    codec = MarkdownCodec(strict_encoding=False)
    text = codec.encode(document)  # Sets config internally via ContextVar

    # Direct decoder usage (advanced)
    from deltamark.config import codec_config_context, CodecConfig

    with codec_config_context(CodecConfig(reference_validator=is_known_user)):
        delta = Decoder().decode(source)

"""

from collections.abc import Callable
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Iterator, TypeAlias

# Receives the full reference text including the leading "@".
ReferenceValidator: TypeAlias = Callable[[str], bool]


@dataclass(frozen=True, slots=True)
class CodecConfig:
    """Immutable codec configuration.

    Frozen dataclass ensures thread-safety (immutable after creation).

    Attributes:
        strict_encoding: Raise UnsupportedAttributeError for attributes that
            have no Markdown syntax instead of writing a fallback
        reference_validator: Predicate deciding which ``@name`` tokens become
            reference embeds; None accepts every reference

    """

    strict_encoding: bool = True
    reference_validator: ReferenceValidator | None = None

    @classmethod
    def from_dict(cls, config_dict: dict) -> "CodecConfig":
        """Create CodecConfig from dictionary.

        Only includes keys that are valid CodecConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = CodecConfig.from_dict({"strict_encoding": False, "x": 1})
            >>> config.strict_encoding
            False

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)

    def accepts_reference(self, reference: str) -> bool:
        """Return True if ``reference`` should become a reference embed."""
        if self.reference_validator is None:
            return True
        return bool(self.reference_validator(reference))


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: CodecConfig = CodecConfig()

_codec_config: ContextVar[CodecConfig] = ContextVar(
    "codec_config",
    default=_DEFAULT_CONFIG,
)


def get_codec_config() -> CodecConfig:
    """Get current codec configuration (context-local)."""
    return _codec_config.get()


def set_codec_config(config: CodecConfig) -> None:
    """Set codec configuration for current context.

    Args:
        config: CodecConfig instance to use for this context.

    """
    _codec_config.set(config)


def reset_codec_config() -> None:
    """Reset to default configuration.

    Reuses the module-level _DEFAULT_CONFIG singleton, avoiding allocation.

    """
    _codec_config.set(_DEFAULT_CONFIG)


@contextmanager
def codec_config_context(config: CodecConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: CodecConfig to use within the context.

    Example:
        >>> with codec_config_context(CodecConfig(strict_encoding=False)):
        ...     text = encode(document)
        >>> # Automatically reset to previous config

    Thread Safety:
        Only affects the current context. Properly restores previous
        config even if an exception is raised.

    """
    previous = _codec_config.get()
    _codec_config.set(config)
    try:
        yield
    finally:
        _codec_config.set(previous)


__all__ = [
    "CodecConfig",
    "ReferenceValidator",
    "codec_config_context",
    "get_codec_config",
    "reset_codec_config",
    "set_codec_config",
]
