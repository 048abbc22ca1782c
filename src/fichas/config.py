"""ContextVar-based tokenizer configuration for fichas.

Provides context-local defaults for new tokenizers using Python's ContextVars
(PEP 567). A tokenizer snapshots the active config when it is constructed;
changing the config later does not affect existing instances.

Thread Safety:
    ContextVars are thread-local. Each thread has independent storage, so no
    locks are needed.

Usage:
    from fichas import Tokenizer, BuiltinTokenType
    from fichas.config import TokenizerConfig, tokenizer_config_context

    config = TokenizerConfig(
        builtins=(BuiltinTokenType.IDENTIFIER, BuiltinTokenType.SPACE),
    )
    with tokenizer_config_context(config):
        tk = Tokenizer()  # identifier and space already registered

    # Or pass it explicitly
    tk = Tokenizer(config=config)

"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fichas.policy import ErrorHandler
    from fichas.tokens import BuiltinTokenType


@dataclass(frozen=True, slots=True)
class TokenizerConfig:
    """Immutable tokenizer configuration.

    Note: source_file is intentionally excluded; it describes one input, not
    configuration. It is a Tokenizer constructor argument.

    Attributes:
        builtins: Builtin kinds registered, in this order, at construction
        error_handler: Handler installed at construction (None = fatal policy)
        flags: Extra ``re`` flags applied to the composite pattern
        trace_tokens: Debug-log every token consumed by ``next()``

    """

    builtins: tuple[BuiltinTokenType, ...] = ()
    error_handler: ErrorHandler | None = None
    flags: int = 0
    trace_tokens: bool = False

    @classmethod
    def from_dict(cls, config_dict: dict) -> TokenizerConfig:
        """Create TokenizerConfig from dictionary.

        Only includes keys that are valid TokenizerConfig fields; unknown keys
        are silently ignored. A list for ``builtins`` is converted to a tuple.

        Example:
            >>> config = TokenizerConfig.from_dict({
            ...     "trace_tokens": True,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.trace_tokens
            True

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        if "builtins" in filtered:
            filtered["builtins"] = tuple(filtered["builtins"])
        return cls(**filtered)


_DEFAULT_CONFIG: TokenizerConfig = TokenizerConfig()

_tokenizer_config: ContextVar[TokenizerConfig] = ContextVar(
    "tokenizer_config",
    default=_DEFAULT_CONFIG,
)


def get_tokenizer_config() -> TokenizerConfig:
    """Get current tokenizer configuration (context-local)."""
    return _tokenizer_config.get()


def set_tokenizer_config(config: TokenizerConfig) -> None:
    """Set tokenizer configuration for current context.

    Args:
        config: TokenizerConfig instance to use for this context.

    """
    _tokenizer_config.set(config)


def reset_tokenizer_config() -> None:
    """Reset to default configuration."""
    _tokenizer_config.set(_DEFAULT_CONFIG)


@contextmanager
def tokenizer_config_context(config: TokenizerConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Args:
        config: TokenizerConfig to use within the context.

    Yields:
        None

    """
    previous = _tokenizer_config.get()
    _tokenizer_config.set(config)
    try:
        yield
    finally:
        _tokenizer_config.set(previous)


__all__ = [
    "TokenizerConfig",
    "get_tokenizer_config",
    "set_tokenizer_config",
    "reset_tokenizer_config",
    "tokenizer_config_context",
]
