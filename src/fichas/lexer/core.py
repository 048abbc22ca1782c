"""Pull tokenizer: stream cursor plus lookahead/consume primitives.

The caller registers patterns, calls ``assign(text)`` once, then drives a
recursive-descent parser with ``next``, ``peek``, ``expect`` and ``tryget``.

Lifecycle:
    Uninitialized --assign()--> Ready --next() at end of input--> Exhausted

Buffer Contract:
The tokenizer keeps a reference to the buffer given to ``assign()`` and every
token slices that same object. ``str`` and ``bytes`` are immutable, so tokens
stay valid after the tokenizer is discarded.

Thread Safety:
Tokenizer instances are not safe for concurrent use. Create one per thread
and per input. No shared mutable state between instances.

"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, ClassVar, Generic, TypeVar

from fichas.config import TokenizerConfig, get_tokenizer_config
from fichas.errors import (
    PatternNotMatchedError,
    RegistrationError,
    TokenizerStateError,
    UnexpectedTokenError,
)
from fichas.lexer.builtins import BUILTIN_PATTERNS, builtin_pattern
from fichas.lexer.matcher import CompositeMatcher
from fichas.lexer.registry import PatternRegistry, PatternRegistryBuilder
from fichas.location import SourceLocation
from fichas.policy import DEFAULT_ERROR_POLICY, ErrorKind
from fichas.tokens import BuiltinTokenType, Token, type_code_repr
from fichas.utils.logger import get_logger, get_trace_logger

if TYPE_CHECKING:
    from fichas.policy import ErrorHandler

S = TypeVar("S", str, bytes)

logger = get_logger(__name__)
trace_logger = get_trace_logger()

ERROR = BuiltinTokenType.ERROR
NEWLINE = BuiltinTokenType.NEWLINE


class BaseTokenizer(Generic[S]):
    """Regex-driven pull tokenizer, generic over the code-unit type.

    Use the concrete ``Tokenizer`` (``str``) or ``ByteTokenizer`` (``bytes``).

    Usage:
            >>> tk = Tokenizer()
            >>> tk.add_builtin_token_type(BuiltinTokenType.IDENTIFIER)
            True
            >>> tk.add_builtin_token_type(BuiltinTokenType.SPACE)
            True
            >>> tk.add_builtin_token_type(BuiltinTokenType.NUMBER_LITERAL)
            True
            >>> tk.assign("foo 42")
            >>> tk.next(), tk.current_token().value
            (<BuiltinTokenType.IDENTIFIER: -7>, 'foo')

    """

    unit_type: ClassVar[type] = str

    __slots__ = (
        "_builder",
        "_registry",
        "_matcher",
        "_handler",
        "_flags",
        "_trace_tokens",
        "_source",
        "_source_len",
        "_source_file",
        "_pos",
        "_prev",
        "_lineno",
        "_token",
        "_initialized",
    )

    def __init__(
        self,
        *,
        source_file: str | None = None,
        config: TokenizerConfig | None = None,
    ) -> None:
        """Initialize an empty tokenizer.

        Args:
            source_file: Optional source file path for error messages
            config: Configuration; defaults to the context-local config

        Raises:
            RegistrationError: If the config names an unsupported builtin
        """
        if config is None:
            config = get_tokenizer_config()

        self._flags = config.flags
        self._trace_tokens = config.trace_tokens
        self._builder = PatternRegistryBuilder(self.unit_type, self._flags)
        self._registry: PatternRegistry | None = None
        self._matcher: CompositeMatcher | None = None
        self._handler: ErrorHandler = DEFAULT_ERROR_POLICY
        self._source_file = source_file

        self._source: S | None = None
        self._source_len = 0
        self._pos = 0
        self._prev = 0
        self._lineno = 1
        self._token: Token[S] | None = None
        self._initialized = False

        if config.error_handler is not None:
            self.set_handle(config.error_handler)
        for kind in config.builtins:
            if not self.add_builtin_token_type(kind):
                msg = f"unsupported builtin token type in config: {kind!r}"
                raise RegistrationError(msg)

    # =========================================================================
    # Registration
    # =========================================================================

    def add_token_type(self, pattern: S, type_code: int, display_name: str | None = None) -> None:
        """Register a pattern; earlier registrations win over later ones.

        Args:
            pattern: Regular expression in this tokenizer's unit type
            type_code: Type code reported for matches (unique)
            display_name: Optional name for ``current_token_type_string()``

        Raises:
            RegistrationError: After ``assign()``, on a duplicate or
                out-of-range code, on a numbered group reference, or if the
                pattern does not compile
            TypeError: Pattern of the wrong width
        """
        if self._initialized:
            msg = "cannot add token type after assign()"
            raise RegistrationError(msg)
        self._builder.register(pattern, type_code, display_name)

    def add_builtin_token_type(self, kind: BuiltinTokenType | int) -> bool:
        """Register one of the builtin patterns.

        Returns:
            False if ``kind`` has no builtin pattern (ERROR or unknown codes),
            True once registered

        Raises:
            RegistrationError: After ``assign()`` or if ``kind`` is already
                registered
        """
        try:
            kind = BuiltinTokenType(kind)
        except ValueError:
            return False
        if kind not in BUILTIN_PATTERNS:
            return False
        pattern, name = builtin_pattern(kind, self.unit_type)
        self.add_token_type(pattern, kind, name)
        return True

    def set_handle(self, handler: ErrorHandler | None) -> None:
        """Install the error handler; None restores the fatal default."""
        self._handler = DEFAULT_ERROR_POLICY if handler is None else handler

    # =========================================================================
    # Initialization
    # =========================================================================

    def assign(self, text: S) -> None:
        """Bind the input buffer and freeze registration.

        One-shot: compiles the composite pattern and resets the cursor, the
        previous-position bookmark and the line counter.

        Raises:
            TokenizerStateError: If called twice
            TypeError: Text of the wrong width
            RegistrationError: If the composite pattern does not compile
        """
        if self._initialized:
            msg = "assign() may only be called once per tokenizer"
            raise TokenizerStateError(msg)
        if not isinstance(text, self.unit_type):
            msg = f"text must be {self.unit_type.__name__}, got {type(text).__name__}"
            raise TypeError(msg)

        self._registry = self._builder.build()
        self._matcher = CompositeMatcher(self._registry, self._flags)
        self._source = text
        self._source_len = len(text)
        self._pos = 0
        self._prev = 0
        self._lineno = 1
        self._token = self._make_error_token()
        self._initialized = True

        logger.debug(
            "Tokenizer assigned %d units, %d alternatives (fallback included)",
            self._source_len,
            self._matcher.alternative_count,
        )

    # =========================================================================
    # State accessors
    # =========================================================================

    @property
    def source(self) -> S:
        """The buffer passed to ``assign()``."""
        self._require_ready()
        return self._source

    @property
    def registry(self) -> PatternRegistry:
        """The frozen pattern registry (available after ``assign()``)."""
        self._require_ready()
        return self._registry

    @property
    def position(self) -> int:
        """Cursor offset."""
        return self._pos

    @property
    def previous_position(self) -> int:
        """Cursor offset before the last successful ``next()``."""
        return self._prev

    @property
    def lineno(self) -> int:
        """Current line (1-indexed; one increment per NEWLINE token)."""
        return self._lineno

    @property
    def exhausted(self) -> bool:
        """True once the cursor has reached end of input.

        ``next()`` returns ERROR both here and for a fallback-classified unit;
        this property tells the two apart.
        """
        return self._initialized and self._pos >= self._source_len

    def current_token(self) -> Token[S]:
        """The token produced by the most recent ``next()`` or ``peek()``."""
        self._require_ready()
        return self._token

    def current_token_type_string(self) -> str:
        """Display name of the current token's type.

        Raises:
            TokenTypeNameError: If that type has no display name
        """
        self._require_ready()
        return self._registry.display_name(self._token.type)

    # =========================================================================
    # Consume / lookahead
    # =========================================================================

    def next(self) -> int:
        """Consume one token and return its type code.

        Returns ERROR at end of input, for a fallback unit (which is still
        consumed), and after a recovered match failure (cursor unchanged).

        Raises:
            PatternNotMatchedError: If the handler reports a match failure
                as fatal
        """
        self._require_ready()
        token = self._scan()
        if token is None:
            return ERROR

        self._prev = self._pos
        self._pos = token.end
        if token.type == NEWLINE:
            self._lineno += 1
        if self._trace_tokens:
            trace_logger.debug("next -> %r", token)
        return token.type

    def peek(self) -> int:
        """Classify the token at the cursor without consuming it.

        Updates ``current_token()`` but never moves the cursor, the
        previous-position bookmark or the line counter. Recomputed every call.
        """
        self._require_ready()
        token = self._scan()
        if token is None:
            return ERROR
        return token.type

    def expect(self, expected: int) -> bool:
        """Check that the next token has type ``expected``; never consumes.

        On mismatch the handler receives UNEXPECTED_TOKEN with the cursor.

        Raises:
            UnexpectedTokenError: If the handler reports the mismatch as fatal
        """
        found = self.peek()
        if found == expected:
            return True
        if not self._handler(ErrorKind.UNEXPECTED_TOKEN, self._pos):
            loc = self._location()
            raise UnexpectedTokenError(
                expected,
                found,
                lineno=loc.lineno,
                col_offset=loc.col_offset,
                offset=loc.offset,
                source_file=self._source_file,
            )
        logger.debug(
            "Recovered unexpected token at offset %d: expected %s, found %s",
            self._pos,
            type_code_repr(expected),
            type_code_repr(found),
        )
        return False

    def tryget(self, expected: int) -> bool:
        """Consume the next token only if it has type ``expected``.

        At end of input ``tryget(ERROR)`` returns True and consumes nothing,
        the same ERROR that ``next()`` reports there. Check ``exhausted``
        first when the difference matters.
        """
        if self.peek() == expected:
            self.next()
            return True
        return False

    @staticmethod
    def succeed(type_code: int) -> bool:
        """True iff ``type_code`` is not the ERROR sentinel."""
        return type_code != ERROR

    def tokenize(self) -> Iterator[Token[S]]:
        """Consume the rest of the input, yielding every token.

        Fallback units are yielded too (type ERROR). Stops early if a
        recovered match failure leaves the cursor in place.
        """
        self._require_ready()
        while not self.exhausted:
            before = self._pos
            self.next()
            if self._pos == before:
                return
            yield self._token

    # =========================================================================
    # Internals
    # =========================================================================

    def _scan(self) -> Token[S] | None:
        """Match at the cursor and record the result as the current token.

        Returns:
            The matched token, or None at end of input or after a recovered
            match failure (the current token is then a zero-width ERROR)
        """
        if self._pos >= self._source_len:
            self._token = self._make_error_token()
            return None

        found = self._matcher.match(self._source, self._pos)
        if found is None:
            self._token = self._make_error_token()
            if not self._handler(ErrorKind.PATTERN_NOT_MATCHED, self._pos):
                loc = self._location()
                raise PatternNotMatchedError(
                    "no pattern matched (a registered pattern may match the empty string)",
                    lineno=loc.lineno,
                    col_offset=loc.col_offset,
                    offset=loc.offset,
                    source_file=self._source_file,
                )
            logger.debug("Recovered unmatched input at offset %d", self._pos)
            return None

        self._token = Token(
            source=self._source,
            start=found.start,
            end=found.end,
            type=found.type,
            lineno=self._lineno,
            _source_file=self._source_file,
        )
        return self._token

    def _make_error_token(self) -> Token[S]:
        """Zero-width ERROR token at the cursor."""
        return Token(
            source=self._source,
            start=self._pos,
            end=self._pos,
            type=ERROR,
            lineno=self._lineno,
            _source_file=self._source_file,
        )

    def _location(self) -> SourceLocation:
        return SourceLocation.at(
            self._source, self._pos, self._lineno, source_file=self._source_file
        )

    def _require_ready(self) -> None:
        if not self._initialized:
            msg = "assign() must be called before using the tokenizer"
            raise TokenizerStateError(msg)


class Tokenizer(BaseTokenizer[str]):
    """Wide tokenizer: ``str`` patterns and text."""

    unit_type: ClassVar[type] = str

    __slots__ = ()


class ByteTokenizer(BaseTokenizer[bytes]):
    """Narrow tokenizer: ``bytes`` patterns and text."""

    unit_type: ClassVar[type] = bytes

    __slots__ = ()
