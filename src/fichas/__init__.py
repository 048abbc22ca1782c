"""
fichas: pull tokenizer for hand-written recursive-descent parsers

Register patterns in priority order, bind one input, then pull classified
tokens with next/peek/expect/tryget. Zero runtime dependencies.

Quick Start:
    >>> from fichas import BuiltinTokenType, Tokenizer
    >>> tk = Tokenizer()
    >>> tk.add_builtin_token_type(BuiltinTokenType.IDENTIFIER)
    True
    >>> tk.add_token_type(r"=", 0, "ASSIGN")
    >>> tk.assign("x=y")
    >>> tk.tryget(BuiltinTokenType.IDENTIFIER)
    True
    >>> tk.expect(0)
    True
    >>> tk.current_token_type_string()
    'ASSIGN'

Narrow input:
    >>> from fichas import ByteTokenizer
    >>> btk = ByteTokenizer()
    >>> btk.add_token_type(rb"[0-9]+", 0)
    >>> btk.assign(b"123")
"""

from fichas.config import (
    TokenizerConfig,
    get_tokenizer_config,
    reset_tokenizer_config,
    set_tokenizer_config,
    tokenizer_config_context,
)
from fichas.errors import (
    FichasError,
    PatternNotMatchedError,
    RegistrationError,
    TokenizeError,
    TokenizerStateError,
    TokenTypeNameError,
    UnexpectedTokenError,
)
from fichas.lexer import (
    BaseTokenizer,
    ByteTokenizer,
    CompositeMatcher,
    PatternRegistry,
    PatternRegistryBuilder,
    Tokenizer,
)
from fichas.location import SourceLocation
from fichas.policy import (
    DEFAULT_ERROR_POLICY,
    ErrorHandler,
    ErrorKind,
    FatalErrorPolicy,
    LenientErrorPolicy,
)
from fichas.tokens import BuiltinTokenType, Token

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_ERROR_POLICY",
    "BaseTokenizer",
    "BuiltinTokenType",
    "ByteTokenizer",
    "CompositeMatcher",
    "ErrorHandler",
    "ErrorKind",
    "FatalErrorPolicy",
    "FichasError",
    "LenientErrorPolicy",
    "PatternNotMatchedError",
    "PatternRegistry",
    "PatternRegistryBuilder",
    "RegistrationError",
    "SourceLocation",
    "Token",
    "TokenTypeNameError",
    "TokenizeError",
    "Tokenizer",
    "TokenizerConfig",
    "TokenizerStateError",
    "UnexpectedTokenError",
    "get_tokenizer_config",
    "reset_tokenizer_config",
    "set_tokenizer_config",
    "tokenizer_config_context",
]
