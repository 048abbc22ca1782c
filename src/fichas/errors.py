"""Exception classes for fichas.

Two families live here:

- Data-dependent failures (``TokenizeError`` and subclasses). These are only
  raised after the installed error handler declined to recover.
- Programming errors (``RegistrationError``, ``TokenizerStateError``,
  ``TokenTypeNameError``). These fail immediately and never reach the handler.
"""

from __future__ import annotations

from fichas.tokens import type_code_repr


class FichasError(Exception):
    """Base exception for all fichas errors.

    Subclass this for specific error categories.
    """

    pass


class TokenizeError(FichasError):
    """Error while producing tokens from an input buffer.

    Raised when the error handler reports a failure as fatal.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize tokenize error with optional location.

        Args:
            message: Error description
            lineno: Line number where error occurred (1-indexed)
            col_offset: Column offset where error occurred (1-indexed)
            offset: Absolute position in the input buffer
            source_file: Path to source file (optional)
        """
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.offset = offset
        self.source_file = source_file

        location = ""
        if source_file:
            location = f"{source_file}:"
        if lineno is not None:
            location += f"{lineno}:"
            if col_offset is not None:
                location += f"{col_offset}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")


class PatternNotMatchedError(TokenizeError):
    """No registered alternative produced a usable match at the cursor.

    Only reachable through a malformed registered pattern, e.g. one that
    matches the empty string and wins over the fallback.
    """

    pass


class UnexpectedTokenError(TokenizeError):
    """``expect()`` found a different token type than the one requested."""

    def __init__(
        self,
        expected: int,
        found: int,
        lineno: int | None = None,
        col_offset: int | None = None,
        offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        self.expected = expected
        self.found = found
        super().__init__(
            f"unexpected token: expected {type_code_repr(expected)}, "
            f"found {type_code_repr(found)}",
            lineno=lineno,
            col_offset=col_offset,
            offset=offset,
            source_file=source_file,
        )


class RegistrationError(FichasError):
    """Invalid pattern registration.

    Raised for registration after ``assign()``, duplicate or out-of-range
    type codes, and patterns that fail to compile.
    """

    pass


class TokenizerStateError(FichasError, RuntimeError):
    """Operation called in the wrong lifecycle state.

    Cursor operations need a prior ``assign()``; ``assign()`` is one-shot.
    """

    pass


class TokenTypeNameError(FichasError, LookupError):
    """Display name requested for a type code registered without one."""

    def __init__(self, type_code: int) -> None:
        self.type_code = type_code
        super().__init__(f"token type {type_code} has no display name")
