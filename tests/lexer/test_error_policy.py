"""Tests for the injectable error handler.

A zero-width pattern (``x*``) is the malformed registration that makes
PATTERN_NOT_MATCHED reachable: it wins at every position where it matches
nothing, so no usable match exists.
"""

from __future__ import annotations

import logging

import pytest

from fichas import (
    BuiltinTokenType,
    ErrorHandler,
    ErrorKind,
    FatalErrorPolicy,
    LenientErrorPolicy,
    PatternNotMatchedError,
    TokenizeError,
    Tokenizer,
    UnexpectedTokenError,
)
from fichas.policy import DEFAULT_ERROR_POLICY

ERROR = BuiltinTokenType.ERROR
IDENTIFIER = BuiltinTokenType.IDENTIFIER
NUMBER = BuiltinTokenType.NUMBER_LITERAL


def malformed_tokenizer(source: str) -> Tokenizer:
    tk = Tokenizer(source_file="input.txt")
    tk.add_token_type(r"x*", 0)
    tk.assign(source)
    return tk


class TestDefaultPolicy:
    """No handler installed means every failure is fatal."""

    def test_default_is_fatal_policy(self) -> None:
        assert isinstance(DEFAULT_ERROR_POLICY, FatalErrorPolicy)
        assert not DEFAULT_ERROR_POLICY(ErrorKind.PATTERN_NOT_MATCHED, 0)
        assert not DEFAULT_ERROR_POLICY(ErrorKind.UNEXPECTED_TOKEN, 0)

    def test_pattern_not_matched_raises(self) -> None:
        tk = malformed_tokenizer("abc")
        with pytest.raises(PatternNotMatchedError) as exc_info:
            tk.next()
        err = exc_info.value
        assert err.offset == 0
        assert err.lineno == 1
        assert err.col_offset == 1
        assert "input.txt:1:1" in str(err)
        assert tk.position == 0

    def test_peek_also_raises(self) -> None:
        tk = malformed_tokenizer("abc")
        with pytest.raises(PatternNotMatchedError):
            tk.peek()

    def test_unexpected_token_raises(self) -> None:
        tk = Tokenizer()
        tk.add_builtin_token_type(IDENTIFIER)
        tk.add_builtin_token_type(NUMBER)
        tk.assign("foo")
        with pytest.raises(UnexpectedTokenError) as exc_info:
            tk.expect(NUMBER)
        err = exc_info.value
        assert err.expected == NUMBER
        assert err.found == IDENTIFIER
        assert isinstance(err, TokenizeError)
        assert tk.position == 0

    def test_set_handle_none_restores_default(self) -> None:
        tk = malformed_tokenizer("abc")
        tk.set_handle(lambda kind, pos: True)
        tk.set_handle(None)
        with pytest.raises(PatternNotMatchedError):
            tk.next()


class TestHandlerResult:
    """Truthiness of the handler result decides recoverability."""

    @pytest.mark.parametrize("result", [False, 0, None, ""])
    def test_falsy_result_is_fatal(self, result: object) -> None:
        tk = malformed_tokenizer("abc")
        tk.set_handle(lambda kind, pos: result)
        with pytest.raises(PatternNotMatchedError):
            tk.next()

    @pytest.mark.parametrize("result", [True, 1, "handled"])
    def test_truthy_result_surfaces_sentinel(self, result: object) -> None:
        tk = malformed_tokenizer("abc")
        tk.set_handle(lambda kind, pos: result)
        assert tk.next() == ERROR
        assert tk.position == 0
        assert not tk.exhausted
        token = tk.current_token()
        assert token.type == ERROR
        assert token.start == token.end == 0

    def test_handler_receives_kind_and_position(self) -> None:
        calls: list[tuple[ErrorKind, int]] = []

        def handler(kind: ErrorKind, position: int) -> bool:
            calls.append((kind, position))
            return True

        tk = Tokenizer()
        tk.add_token_type(r"x*", 0)
        tk.assign("xxa")
        tk.set_handle(handler)
        assert tk.next() == 0
        assert tk.next() == ERROR
        assert calls == [(ErrorKind.PATTERN_NOT_MATCHED, 2)]

    def test_expect_mismatch_kind(self) -> None:
        calls: list[ErrorKind] = []
        tk = Tokenizer()
        tk.add_builtin_token_type(IDENTIFIER)
        tk.assign("a")
        tk.set_handle(lambda kind, pos: calls.append(kind) or True)
        assert tk.expect(NUMBER) is False
        assert calls == [ErrorKind.UNEXPECTED_TOKEN]

    def test_handler_not_called_on_success(self) -> None:
        calls: list[ErrorKind] = []
        tk = Tokenizer()
        tk.add_builtin_token_type(IDENTIFIER)
        tk.assign("a")
        tk.set_handle(lambda kind, pos: calls.append(kind) or True)
        assert tk.expect(IDENTIFIER)
        tk.next()
        tk.next()
        assert calls == []

    def test_end_of_input_is_not_an_error(self) -> None:
        """Reaching the end returns ERROR without consulting the handler."""
        tk = Tokenizer()
        tk.assign("")
        tk.set_handle(lambda kind, pos: pytest.fail("handler called"))
        assert tk.next() == ERROR

    def test_tokenize_stops_without_progress(self) -> None:
        tk = malformed_tokenizer("xxab")
        tk.set_handle(LenientErrorPolicy())
        tokens = list(tk.tokenize())
        assert [t.value for t in tokens] == ["xx"]
        assert tk.position == 2


class TestLenientPolicy:
    """Log-and-continue policy."""

    def test_counts_and_logs(self, caplog: pytest.LogCaptureFixture) -> None:
        policy = LenientErrorPolicy()
        tk = malformed_tokenizer("a")
        tk.set_handle(policy)

        with caplog.at_level(logging.WARNING, logger="fichas"):
            tk.next()
            tk.peek()

        assert policy.counts[ErrorKind.PATTERN_NOT_MATCHED] == 2
        assert policy.counts[ErrorKind.UNEXPECTED_TOKEN] == 0
        assert policy.total == 2
        assert "PATTERN_NOT_MATCHED" in caplog.text

    def test_protocol_conformance(self) -> None:
        assert isinstance(LenientErrorPolicy(), ErrorHandler)
        assert isinstance(FatalErrorPolicy(), ErrorHandler)


class TestResynchronization:
    """An owner can resynchronize after a recovered expect() mismatch."""

    def test_skip_until_expected(self) -> None:
        tk = Tokenizer()
        tk.add_builtin_token_type(NUMBER)
        tk.add_token_type(r";", 0, "SEMI")
        tk.assign("1 ?? ;2")
        tk.set_handle(LenientErrorPolicy())

        assert tk.tryget(NUMBER)
        while not tk.expect(0) and not tk.exhausted:
            tk.next()
        assert tk.tryget(0)
        assert tk.next() == NUMBER
        assert tk.current_token().value == "2"
