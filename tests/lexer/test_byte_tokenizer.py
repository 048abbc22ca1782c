"""Tests for the narrow (bytes) tokenizer."""

from __future__ import annotations

import pytest

from fichas import BuiltinTokenType, ByteTokenizer, Tokenizer
from fichas.lexer.builtins import BUILTIN_PATTERNS


class TestByteTokenizer:
    """ByteTokenizer mirrors Tokenizer over bytes."""

    def test_end_to_end(self) -> None:
        tk = ByteTokenizer()
        for kind in (
            BuiltinTokenType.IDENTIFIER,
            BuiltinTokenType.SPACE,
            BuiltinTokenType.NUMBER_LITERAL,
        ):
            assert tk.add_builtin_token_type(kind)
        tk.assign(b"foo 42")

        pairs = [(t.type, t.value) for t in tk.tokenize()]
        assert pairs == [
            (BuiltinTokenType.IDENTIFIER, b"foo"),
            (BuiltinTokenType.SPACE, b" "),
            (BuiltinTokenType.NUMBER_LITERAL, b"42"),
        ]
        assert tk.next() == BuiltinTokenType.ERROR

    def test_builtin_patterns_are_bytes(self) -> None:
        tk = ByteTokenizer()
        for kind in BUILTIN_PATTERNS:
            tk.add_builtin_token_type(kind)
        tk.assign(b"")
        assert all(isinstance(e.pattern, bytes) for e in tk.registry.entries)
        assert tk.registry.unit_type is bytes

    def test_display_names_are_text(self) -> None:
        tk = ByteTokenizer()
        tk.add_token_type(rb"\+", 0, "PLUS")
        tk.assign(b"+")
        tk.next()
        assert tk.current_token_type_string() == "PLUS"

    def test_fallback_is_one_byte(self) -> None:
        """Non-ASCII input is split into single-byte fallback units."""
        source = "é".encode()
        tk = ByteTokenizer()
        tk.assign(source)
        values = [t.value for t in tk.tokenize()]
        assert values == [b"\xc3", b"\xa9"]

    def test_wide_fallback_is_one_character(self) -> None:
        tk = Tokenizer()
        tk.assign("é")
        assert [t.value for t in tk.tokenize()] == ["é"]

    def test_rejects_text_input(self) -> None:
        tk = ByteTokenizer()
        with pytest.raises(TypeError):
            tk.assign("text")  # type: ignore[arg-type]

    def test_newline_counting(self) -> None:
        tk = ByteTokenizer()
        tk.add_builtin_token_type(BuiltinTokenType.NEWLINE)
        tk.add_builtin_token_type(BuiltinTokenType.IDENTIFIER)
        tk.assign(b"a\r\n\r\nb")
        tokens = list(tk.tokenize())
        assert tokens[-1].lineno == 2
        assert tokens[-1].location.col_offset == 1

    def test_repr_truncates_long_values(self) -> None:
        tk = ByteTokenizer()
        tk.add_builtin_token_type(BuiltinTokenType.IDENTIFIER)
        tk.assign(b"a" * 40)
        tk.next()
        text = repr(tk.current_token())
        assert text.startswith("Token(IDENTIFIER, b'aaaaaaaaaaaaaaaaa...'")
