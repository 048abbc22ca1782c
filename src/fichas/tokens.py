"""Token and builtin type codes for the fichas tokenizer.

A type code is a plain ``int``. The small negative range is reserved for the
builtin categories below; non-negative codes belong to the caller.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.

Memory Note:
Token does not copy its text. It keeps a reference to the buffer passed to
``assign()`` plus a half-open ``[start, end)`` span, and slices on demand.
``str`` and ``bytes`` are immutable, so the buffer stays valid for as long as
any token refers to it.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from fichas.location import SourceLocation


S = TypeVar("S", str, bytes)

class BuiltinTokenType(IntEnum):
    """Reserved type codes.

    ERROR doubles as the sentinel returned at end of input and as the
    classification of the fallback alternative (one unclassifiable unit).
    """

    IDENTIFIER = -7
    NUMBER_LITERAL = -6
    STRING_LITERAL = -5
    CHAR_LITERAL = -4
    SPACE = -3
    NEWLINE = -2
    ERROR = -1


# Lowest code in the reserved range; anything below is out of range.
MIN_TYPE_CODE = min(BuiltinTokenType)


def type_code_repr(type_code: int) -> str:
    """Readable form of a type code: the builtin name or the raw integer."""
    try:
        return BuiltinTokenType(type_code).name
    except ValueError:
        return str(type_code)


@dataclass(frozen=True, slots=True)
class Token(Generic[S]):
    """A classified span of the input buffer.

    Attributes:
        source: The whole input buffer (aliased, never copied)
        start: Start offset (inclusive)
        end: End offset (exclusive)
        type: Resolved type code
        lineno: Line number where the token starts (1-indexed)

    Performance:
        SourceLocation is created lazily on first access to `.location`.

    """

    source: S = field(repr=False)
    start: int
    end: int
    type: int
    lineno: int
    _source_file: str | None = field(default=None, repr=False, compare=False)
    _location_cache: SourceLocation | None = field(
        default=None, repr=False, compare=False, hash=False
    )

    @property
    def value(self) -> S:
        """The text this token spans."""
        return self.source[self.start : self.end]

    @property
    def location(self) -> SourceLocation:
        """Get source location (lazily created and cached)."""
        if self._location_cache is not None:
            return self._location_cache

        from fichas.location import SourceLocation

        loc = SourceLocation.at(
            self.source,
            self.start,
            self.lineno,
            end_offset=self.end,
            source_file=self._source_file,
        )
        object.__setattr__(self, "_location_cache", loc)
        return loc

    def __len__(self) -> int:
        return self.end - self.start

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.value
        if len(val) > 20:
            val = val[:17] + (b"..." if isinstance(val, bytes) else "...")
        return f"Token({type_code_repr(self.type)}, {val!r}, {self.start}:{self.end}, line {self.lineno})"
