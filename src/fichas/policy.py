"""Error policy for the tokenizer.

The tokenizer never decides whether a failure is recoverable. It calls the
installed handler with an ``ErrorKind`` and the cursor position and reads the
truthiness of the result:

- falsy: fatal, the tokenizer raises the matching ``TokenizeError``
- truthy: the owner handled it; ``next()``/``peek()`` return the ERROR
  sentinel, ``expect()`` returns False

With no handler installed the tokenizer uses ``DEFAULT_ERROR_POLICY``, which
always reports fatal, so misuse fails fast instead of looping.

Example:
    >>> from fichas import ErrorKind, LenientErrorPolicy, Tokenizer
    >>> tk = Tokenizer()
    >>> tk.set_handle(LenientErrorPolicy())
    >>> tk.set_handle(lambda kind, pos: kind is ErrorKind.UNEXPECTED_TOKEN)
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Protocol, runtime_checkable

from fichas.utils.logger import get_logger

logger = get_logger(__name__)


class ErrorKind(Enum):
    """Discriminator passed to the error handler."""

    PATTERN_NOT_MATCHED = auto()  # no alternative matched at the cursor
    UNEXPECTED_TOKEN = auto()  # expect() mismatch


@runtime_checkable
class ErrorHandler(Protocol):
    """Callable deciding recoverability of a tokenizer failure.

    Args:
        kind: Which failure occurred
        position: Cursor offset in the input buffer

    Returns:
        Anything; only truthiness is inspected
    """

    def __call__(self, kind: ErrorKind, position: int) -> object: ...


class FatalErrorPolicy:
    """Default policy: every failure is fatal."""

    __slots__ = ()

    def __call__(self, kind: ErrorKind, position: int) -> bool:
        return False

    def __repr__(self) -> str:
        return "FatalErrorPolicy()"


class LenientErrorPolicy:
    """Log-and-continue policy.

    Logs a warning for each failure and reports it as handled. Keeps a count
    per kind so callers can decide afterwards whether the input was clean.
    """

    __slots__ = ("counts",)

    def __init__(self) -> None:
        self.counts: dict[ErrorKind, int] = {kind: 0 for kind in ErrorKind}

    def __call__(self, kind: ErrorKind, position: int) -> bool:
        self.counts[kind] += 1
        logger.warning("Tokenizer error %s at offset %d (continuing)", kind.name, position)
        return True

    @property
    def total(self) -> int:
        """Number of failures seen so far."""
        return sum(self.counts.values())


DEFAULT_ERROR_POLICY = FatalErrorPolicy()

__all__ = [
    "DEFAULT_ERROR_POLICY",
    "ErrorHandler",
    "ErrorKind",
    "FatalErrorPolicy",
    "LenientErrorPolicy",
]
