"""Error construction, formatting, and hierarchy tests."""

import pytest

from fichas import (
    BuiltinTokenType,
    FichasError,
    PatternNotMatchedError,
    RegistrationError,
    TokenizeError,
    TokenizerStateError,
    TokenTypeNameError,
    UnexpectedTokenError,
)

# =========================================================================
# TokenizeError construction and formatting
# =========================================================================


class TestTokenizeErrorFormatting:
    """Verify TokenizeError produces well-formatted messages."""

    def test_message_only(self) -> None:
        err = TokenizeError("bad input")
        assert str(err) == "bad input"
        assert err.lineno is None
        assert err.col_offset is None
        assert err.offset is None

    def test_with_line_number(self) -> None:
        err = TokenizeError("bad input", lineno=42)
        assert str(err) == "42 bad input"

    def test_with_line_and_column(self) -> None:
        err = TokenizeError("bad input", lineno=10, col_offset=5)
        assert "10:5" in str(err)

    def test_with_source_file(self) -> None:
        err = TokenizeError("bad input", lineno=1, col_offset=1, source_file="a.txt")
        assert str(err) == "a.txt:1:1 bad input"

    def test_is_fichas_error(self) -> None:
        assert isinstance(TokenizeError("x"), FichasError)


# =========================================================================
# Handler-routed errors
# =========================================================================


class TestHandlerRoutedErrors:
    """Errors raised after the handler declines to recover."""

    def test_pattern_not_matched_hierarchy(self) -> None:
        err = PatternNotMatchedError("no match", lineno=2, col_offset=3, offset=9)
        assert isinstance(err, TokenizeError)
        assert err.offset == 9

    def test_unexpected_token_message(self) -> None:
        err = UnexpectedTokenError(
            expected=BuiltinTokenType.NUMBER_LITERAL,
            found=BuiltinTokenType.IDENTIFIER,
            lineno=3,
            col_offset=4,
        )
        assert err.expected == BuiltinTokenType.NUMBER_LITERAL
        assert err.found == BuiltinTokenType.IDENTIFIER
        assert str(err).startswith("3:4 unexpected token")
        assert isinstance(err, TokenizeError)

    def test_unexpected_token_message_names_types(self) -> None:
        err = UnexpectedTokenError(expected=BuiltinTokenType.NUMBER_LITERAL, found=5)
        assert str(err) == "unexpected token: expected NUMBER_LITERAL, found 5"


# =========================================================================
# Programming errors
# =========================================================================


class TestProgrammingErrors:
    """Contract violations fail immediately, outside the handler."""

    def test_registration_error(self) -> None:
        assert issubclass(RegistrationError, FichasError)

    def test_state_error_is_runtime_error(self) -> None:
        with pytest.raises(RuntimeError):
            raise TokenizerStateError("assign() first")

    def test_type_name_error_is_lookup_error(self) -> None:
        err = TokenTypeNameError(7)
        assert isinstance(err, LookupError)
        assert isinstance(err, FichasError)
        assert err.type_code == 7
        assert "7" in str(err)
