"""Pull tokenizer for hand-written recursive-descent parsers.

Architecture:
lexer/
├── __init__.py          # Re-exports Tokenizer, ByteTokenizer, BaseTokenizer
├── core.py              # Stream cursor and next/peek/expect/tryget
├── matcher.py           # Composite pattern, first-registered-wins resolution
├── registry.py          # Ordered pattern entries (builder + frozen registry)
└── builtins.py          # The six builtin patterns

Usage:
    >>> from fichas.lexer import Tokenizer
    >>> from fichas.tokens import BuiltinTokenType
    >>> tk = Tokenizer()
    >>> for kind in (BuiltinTokenType.IDENTIFIER, BuiltinTokenType.SPACE):
    ...     _ = tk.add_builtin_token_type(kind)
    >>> tk.assign("hello world")
    >>> for token in tk.tokenize():
    ...     print(token)
    Token(IDENTIFIER, 'hello', 0:5, line 1)
    Token(SPACE, ' ', 5:6, line 1)
    Token(IDENTIFIER, 'world', 6:11, line 1)

"""

from fichas.lexer.core import BaseTokenizer, ByteTokenizer, Tokenizer
from fichas.lexer.matcher import CompositeMatcher, Match
from fichas.lexer.registry import PatternEntry, PatternRegistry, PatternRegistryBuilder

__all__ = [
    "BaseTokenizer",
    "ByteTokenizer",
    "CompositeMatcher",
    "Match",
    "PatternEntry",
    "PatternRegistry",
    "PatternRegistryBuilder",
    "Tokenizer",
]
