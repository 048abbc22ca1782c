"""Read `key = value` settings with a recursive-descent parser.

Bad lines are reported and skipped instead of aborting the whole file:
the error handler logs and recovers, and the parser resynchronizes on the
next newline token.
"""

import logging

from fichas import BuiltinTokenType, LenientErrorPolicy, Tokenizer

EQUALS, COMMENT = 0, 1
IDENTIFIER = BuiltinTokenType.IDENTIFIER
SPACE = BuiltinTokenType.SPACE
NEWLINE = BuiltinTokenType.NEWLINE
VALUES = (BuiltinTokenType.NUMBER_LITERAL, BuiltinTokenType.STRING_LITERAL, IDENTIFIER)

SOURCE = """\
name = "fichas"
# comment lines are ignored
retries = 3
broken line here
timeout = 2.5
"""


def read_settings(source: str) -> dict[str, str]:
    tk = Tokenizer(source_file="settings.conf")
    tk.add_token_type(r"=", EQUALS, "EQUALS")
    tk.add_token_type(r"#[^\r\n]*", COMMENT, "COMMENT")
    for kind in (NEWLINE, SPACE, *VALUES):
        tk.add_builtin_token_type(kind)
    policy = LenientErrorPolicy()
    tk.set_handle(policy)
    tk.assign(source)

    settings: dict[str, str] = {}
    while not tk.exhausted:
        if tk.tryget(NEWLINE) or tk.tryget(COMMENT):
            continue
        if parse_assignment(tk, settings):
            continue
        # Resynchronize: drop the rest of the line
        while not tk.exhausted and tk.peek() != NEWLINE:
            tk.next()
    print(f"{policy.total} problem(s) skipped")
    return settings


def parse_assignment(tk: Tokenizer, settings: dict[str, str]) -> bool:
    if not tk.expect(IDENTIFIER):
        return False
    tk.next()
    key = tk.current_token().value
    tk.tryget(SPACE)
    if not tk.expect(EQUALS):
        return False
    tk.next()
    tk.tryget(SPACE)
    for kind in VALUES:
        if tk.tryget(kind):
            settings[key] = tk.current_token().value
            return True
    tk.expect(VALUES[0])
    return False


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING)
    print(read_settings(SOURCE))
