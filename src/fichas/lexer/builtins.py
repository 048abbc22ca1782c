"""Builtin token patterns.

Each builtin kind maps to a fixed pattern and a display name. Patterns are
written as text with ASCII-only character classes, so the same source string
works for the wide tokenizer and, encoded, for the narrow one.
"""

from __future__ import annotations

from fichas.tokens import BuiltinTokenType

BUILTIN_PATTERNS: dict[BuiltinTokenType, tuple[str, str]] = {
    # Letter or underscore, then word characters
    BuiltinTokenType.IDENTIFIER: (r"[A-Za-z_][A-Za-z0-9_]*", "IDENTIFIER"),
    # Optional leading minus, digits, optional decimal fraction
    BuiltinTokenType.NUMBER_LITERAL: (r"-?[0-9]+(?:\.[0-9]+)?", "NUMBER"),
    # No unescaped quote or line break inside
    BuiltinTokenType.STRING_LITERAL: (r'"(?:[^"\\\r\n]|\\.)*"', "STRING"),
    BuiltinTokenType.CHAR_LITERAL: (r"'(?:[^'\\\r\n]|\\.)*'", "CHAR"),
    # Horizontal whitespace run collapses into one token
    BuiltinTokenType.SPACE: (r"[ \t]+", "SPACE"),
    # A run of one line-break style collapses into one token
    BuiltinTokenType.NEWLINE: (r"(?:\r\n)+|\n+|\r+", "NEWLINE"),
}


def builtin_pattern(kind: BuiltinTokenType, unit_type: type) -> tuple[str | bytes, str]:
    """Return ``(pattern, display_name)`` for ``kind`` in the requested width.

    Raises:
        KeyError: If ``kind`` has no builtin pattern (e.g. ERROR)
    """
    pattern, name = BUILTIN_PATTERNS[kind]
    if unit_type is bytes:
        return pattern.encode("ascii"), name
    return pattern, name
