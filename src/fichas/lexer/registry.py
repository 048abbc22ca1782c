"""Pattern registry for tokenizer alternatives.

Registration order is match priority: the first registered pattern that
matches at the cursor wins, regardless of match length.

Thread Safety:
PatternRegistry is immutable after creation. Safe to share.
Use PatternRegistryBuilder for mutable construction.

Example:
    >>> builder = PatternRegistryBuilder(str)
    >>> registry = builder.register(r"[0-9]+", 0, "INT").register(r"\\+", 1).build()
    >>> registry.display_name(0)
    'INT'
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from fichas.errors import RegistrationError, TokenTypeNameError
from fichas.lexer.matcher import wrap_alternative
from fichas.tokens import MIN_TYPE_CODE, BuiltinTokenType


OCTAL_DIGITS = "01234567"


def find_numbered_reference(pattern: str | bytes) -> int | None:
    """Offset of the first numbered group reference in ``pattern``, if any.

    Catches ``\\1``..``\\99`` backreferences outside character classes and
    ``(?(1)...)`` conditionals. Three-digit octal escapes such as ``\\101``
    are not references. Inside the composite every group number shifts by
    the wrapper groups in front of it, so such references would point at
    the wrong group.
    """
    text = pattern.decode("latin-1") if isinstance(pattern, bytes) else pattern
    in_class = False
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == "\\":
            following = text[i + 1 : i + 4]
            is_octal = len(following) == 3 and all(c in OCTAL_DIGITS for c in following)
            if not in_class and following[:1].isdigit() and following[:1] != "0" and not is_octal:
                return i
            i += 2
            continue
        if in_class:
            if ch == "]":
                in_class = False
        elif ch == "[":
            in_class = True
            # A ']' right after '[' or '[^' is literal
            i += 1
            if text[i : i + 1] == "^":
                i += 1
            if text[i : i + 1] == "]":
                i += 1
            continue
        elif text.startswith("(?(", i) and text[i + 3 : i + 4].isdigit():
            return i
        i += 1
    return None


@dataclass(frozen=True, slots=True)
class PatternEntry:
    """One registered alternative.

    Attributes:
        pattern: Regular expression source (str or bytes)
        type: Type code reported for matches of this pattern
        order: Registration index; lower wins
        name: Optional display name
        group_count: Capturing groups inside ``pattern``

    """

    pattern: str | bytes
    type: int
    order: int
    name: str | None = None
    group_count: int = 0


class PatternRegistry:
    """Immutable, ordered set of pattern entries.

    Thread Safety:
        Immutable after creation. Safe to share across threads.
    """

    __slots__ = ("_entries", "_names", "_unit_type")

    def __init__(
        self,
        entries: tuple[PatternEntry, ...],
        names: dict[int, str],
        unit_type: type,
    ) -> None:
        """Initialize registry with pre-built mappings.

        Use PatternRegistryBuilder to create instances.
        """
        self._entries = entries
        self._names = names
        self._unit_type = unit_type

    @property
    def entries(self) -> tuple[PatternEntry, ...]:
        """Entries in registration (priority) order."""
        return self._entries

    @property
    def unit_type(self) -> type:
        """``str`` or ``bytes``."""
        return self._unit_type

    def display_name(self, type_code: int) -> str:
        """Get the display name registered for ``type_code``.

        Raises:
            TokenTypeNameError: If the code was registered without a name,
                or never registered
        """
        try:
            return self._names[type_code]
        except KeyError:
            raise TokenTypeNameError(type_code) from None

    def has_name(self, type_code: int) -> bool:
        """Check if ``type_code`` has a display name."""
        return type_code in self._names

    def __contains__(self, type_code: int) -> bool:
        """Support 'code in registry' syntax."""
        return any(entry.type == type_code for entry in self._entries)

    def __len__(self) -> int:
        """Number of registered patterns (fallback excluded)."""
        return len(self._entries)


class PatternRegistryBuilder:
    """Mutable builder for PatternRegistry.

    Validates each registration eagerly so a bad pattern fails at the call
    that added it rather than at ``assign()``.
    """

    __slots__ = ("_entries", "_names", "_codes", "_unit_type", "_flags")

    def __init__(self, unit_type: type = str, flags: int = 0) -> None:
        """Initialize empty builder.

        Args:
            unit_type: ``str`` (wide) or ``bytes`` (narrow)
            flags: ``re`` flags used when validating each pattern
        """
        self._entries: list[PatternEntry] = []
        self._names: dict[int, str] = {}
        self._codes: set[int] = set()
        self._unit_type = unit_type
        self._flags = flags

    def register(
        self,
        pattern: str | bytes,
        type_code: int,
        name: str | None = None,
    ) -> PatternRegistryBuilder:
        """Register a pattern.

        Args:
            pattern: Regular expression in the builder's unit type
            type_code: Type code for matches
            name: Optional display name

        Returns:
            Self for chaining

        Raises:
            RegistrationError: Duplicate or out-of-range code, a numbered
                group reference, or a pattern that does not compile
            TypeError: Pattern of the wrong code-unit width
        """
        if not isinstance(pattern, self._unit_type):
            msg = (
                f"pattern must be {self._unit_type.__name__}, "
                f"got {type(pattern).__name__}"
            )
            raise TypeError(msg)

        if type_code < MIN_TYPE_CODE or type_code == BuiltinTokenType.ERROR:
            msg = f"type code {type_code} is out of range or reserved"
            raise RegistrationError(msg)

        if type_code in self._codes:
            msg = f"type code {type_code} already registered"
            raise RegistrationError(msg)

        reference_at = find_numbered_reference(pattern)
        if reference_at is not None:
            msg = (
                f"numbered group reference at position {reference_at} in {pattern!r} "
                f"for type {type_code}; group numbers shift inside the composite "
                "pattern, use a named group with (?P=name) instead"
            )
            raise RegistrationError(msg)

        try:
            compiled = re.compile(wrap_alternative(pattern), self._flags)
        except (re.error, ValueError) as exc:
            msg = f"invalid pattern {pattern!r} for type {type_code}: {exc}"
            raise RegistrationError(msg) from exc

        self._entries.append(
            PatternEntry(
                pattern=pattern,
                type=type_code,
                order=len(self._entries),
                name=name,
                group_count=compiled.groups - 1,
            )
        )
        self._codes.add(type_code)
        if name is not None:
            self._names[type_code] = name
        return self

    def build(self) -> PatternRegistry:
        """Build immutable registry from registered patterns."""
        return PatternRegistry(
            entries=tuple(self._entries),
            names=dict(self._names),
            unit_type=self._unit_type,
        )

    def __len__(self) -> int:
        """Number of registered patterns."""
        return len(self._entries)
