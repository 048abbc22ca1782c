"""Tokenize a line of code with the builtin patterns."""

from fichas import BuiltinTokenType, Tokenizer

tk = Tokenizer()
for kind in BuiltinTokenType:
    tk.add_builtin_token_type(kind)  # ERROR is not a pattern; returns False
tk.assign('greet("world", 42)\n')

for token in tk.tokenize():
    print(token)
