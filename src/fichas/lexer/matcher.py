"""Composite matcher: one compiled pattern for all registered alternatives.

The composite is ``(p0)|(p1)|...|((?s:.))``. Every registered pattern gets a
wrapper group, and the last alternative is the fallback, which matches exactly
one unit of any value. Matching is anchored at the cursor, so with the
fallback in place there is a match at every position before end of input.

Priority is first-registered-wins, not longest match. ``re`` alternation
already tries alternatives left to right, but the winner is still resolved
explicitly by scanning wrapper groups in registration order.

"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from fichas.errors import RegistrationError
from fichas.tokens import BuiltinTokenType

if TYPE_CHECKING:
    from fichas.lexer.registry import PatternRegistry

FALLBACK_PATTERN = r"(?s:.)"


def wrap_alternative(pattern: str | bytes) -> str | bytes:
    """Wrap ``pattern`` in the capturing group used inside the composite."""
    if isinstance(pattern, bytes):
        return b"(" + pattern + b")"
    return "(" + pattern + ")"


@dataclass(frozen=True, slots=True)
class Match:
    """Result of matching at one position.

    Attributes:
        index: Winning alternative (registration order; fallback is last)
        type: Type code of the winning alternative
        start: Match start (always the cursor)
        end: Match end (exclusive, always > start)

    """

    index: int
    type: int
    start: int
    end: int


class CompositeMatcher:
    """Compiled alternation of all registered patterns plus the fallback.

    Thread Safety:
        Immutable after construction. Compiled ``re`` patterns are safe to
        share across threads.
    """

    __slots__ = ("_pattern", "_group_indices", "_types")

    def __init__(self, registry: PatternRegistry, flags: int = 0) -> None:
        """Compile the composite pattern.

        Args:
            registry: Frozen pattern registry
            flags: ``re`` flags for the whole composite

        Raises:
            RegistrationError: If the composite does not compile
        """
        unit_type = registry.unit_type
        fallback = FALLBACK_PATTERN.encode("ascii") if unit_type is bytes else FALLBACK_PATTERN
        separator = b"|" if unit_type is bytes else "|"

        alternatives = [wrap_alternative(entry.pattern) for entry in registry.entries]
        alternatives.append(wrap_alternative(fallback))

        group_indices: list[int] = []
        types: list[int] = []
        group = 1
        for entry in registry.entries:
            group_indices.append(group)
            types.append(entry.type)
            group += 1 + entry.group_count
        group_indices.append(group)
        types.append(BuiltinTokenType.ERROR)

        try:
            self._pattern = re.compile(separator.join(alternatives), flags)
        except (re.error, ValueError) as exc:
            msg = f"composite pattern does not compile: {exc}"
            raise RegistrationError(msg) from exc

        self._group_indices = tuple(group_indices)
        self._types = tuple(types)

    @property
    def pattern(self) -> re.Pattern:
        """The compiled composite pattern."""
        return self._pattern

    @property
    def alternative_count(self) -> int:
        """Number of alternatives, fallback included."""
        return len(self._group_indices)

    @property
    def fallback_index(self) -> int:
        """Index of the fallback alternative (always the last one)."""
        return len(self._group_indices) - 1

    def match(self, source: str | bytes, pos: int) -> Match | None:
        """Match at ``pos``.

        The whole buffer stays visible to the pattern: ``^`` and ``\\A`` match
        only at offset 0 (``^`` also after a newline under ``re.MULTILINE``),
        and lookbehind sees the text before ``pos``. A pattern like ``^#``
        therefore matches mid-input only at a line start with MULTILINE.

        Returns:
            The winning alternative, or None when nothing matched or the
            winner matched zero units (a malformed pattern)
        """
        found = self._pattern.match(source, pos)
        if found is None:
            return None

        for index, group in enumerate(self._group_indices):
            start = found.start(group)
            if start != -1:
                break
        else:
            return None

        end = found.end(group)
        if end == start:
            return None
        return Match(index=index, type=self._types[index], start=start, end=end)
