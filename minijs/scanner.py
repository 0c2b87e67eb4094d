"""Scanner for minijs source text.

The scanner produces tokens on demand rather than all at once. The parser
pulls tokens with `next()`, looks one token ahead with `peek()` and uses
`match_and_consume()` for optional syntax. `peek()` works by saving the
scanner position, scanning one token and restoring the saved position, so
it never changes what the following `next()` returns.

Whitespace (newlines included) and `//` line comments separate tokens and
are otherwise ignored. Any character that starts no token is reported as a
`LexError` instead of being skipped.
"""

from __future__ import annotations

from typing import List, Tuple, Union

from .errors import ErrorInfo, LexError
from .tokens import (
    DOUBLE_CHAR_TOKENS, KEYWORDS, SINGLE_CHAR_TOKENS, Token, TokenType,
)

Expected = Union[Token, TokenType, Tuple[TokenType, ...]]


def is_ident_start(c: str) -> bool:
    return c.isascii() and (c.isalpha() or c == '_')


def is_ident_rest(c: str) -> bool:
    # identifiers hold letters and underscores only, digits end them
    return is_ident_start(c)


def is_digit(c: str) -> bool:
    return '0' <= c <= '9'


def token_matches(token: Token, expected: Expected) -> bool:
    """Compare a token against a whole token, a token type or a tuple of types."""
    if isinstance(expected, Token):
        return token == expected
    if isinstance(expected, tuple):
        return token.type in expected
    return token.type is expected


class Scanner:
    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1

    # Public API

    def next(self) -> Token:
        """Consume and return the next token; returns EOF forever once exhausted."""
        self._skip_insignificant()
        line, column = self.line, self.column
        if self.pos >= len(self.source):
            return Token(TokenType.EOF, line=line, column=column)

        c = self.source[self.pos]
        if is_ident_start(c):
            return self._identifier(line, column)
        if is_digit(c) or (c == '.' and is_digit(self._char_at(self.pos + 1))):
            return self._number(line, column)
        if c == '"':
            return self._string(line, column)

        pair = self.source[self.pos:self.pos + 2]
        if pair in DOUBLE_CHAR_TOKENS:
            self._advance(2)
            return Token(DOUBLE_CHAR_TOKENS[pair], line=line, column=column)
        if c in SINGLE_CHAR_TOKENS:
            self._advance()
            return Token(SINGLE_CHAR_TOKENS[c], line=line, column=column)

        raise LexError(
            ErrorInfo('IllegalCharacter', f"unexpected character {c!r} at {line}:{column}"),
            line, column,
        )

    def peek(self) -> Token:
        """Return the next token without consuming it."""
        saved = (self.pos, self.line, self.column)
        try:
            return self.next()
        finally:
            self.pos, self.line, self.column = saved

    def match_and_consume(self, expected: Expected) -> bool:
        if token_matches(self.peek(), expected):
            self.next()
            return True
        return False

    def is_at_end(self) -> bool:
        return self.peek().type is TokenType.EOF

    def tokens(self) -> List[Token]:
        """Scan the rest of the input, returning every token up to and including EOF."""
        result: List[Token] = []
        while True:
            token = self.next()
            result.append(token)
            if token.type is TokenType.EOF:
                return result

    # Character level helpers

    def _char_at(self, index: int) -> str:
        if index < len(self.source):
            return self.source[index]
        return ''

    def _advance(self, n: int = 1):
        for _ in range(n):
            if self.pos < len(self.source) and self.source[self.pos] == '\n':
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def _skip_insignificant(self):
        while self.pos < len(self.source):
            c = self.source[self.pos]
            if c.isspace():
                self._advance()
            elif c == '/' and self._char_at(self.pos + 1) == '/':
                while self.pos < len(self.source) and self.source[self.pos] != '\n':
                    self._advance()
            else:
                break

    def _identifier(self, line: int, column: int) -> Token:
        start = self.pos
        while self.pos < len(self.source) and is_ident_rest(self.source[self.pos]):
            self._advance()
        text = self.source[start:self.pos]
        if text in KEYWORDS:
            return Token(KEYWORDS[text], line=line, column=column)
        return Token(TokenType.IDENT, text, line, column)

    def _number(self, line: int, column: int) -> Token:
        # digits with at most one decimal point; a second '.' starts the next token
        start = self.pos
        seen_dot = False
        while self.pos < len(self.source):
            c = self.source[self.pos]
            if is_digit(c):
                self._advance()
            elif c == '.' and not seen_dot and is_digit(self._char_at(self.pos + 1)):
                seen_dot = True
                self._advance()
            else:
                break
        return Token(TokenType.NUMBER, self.source[start:self.pos], line, column)

    def _string(self, line: int, column: int) -> Token:
        self._advance()  # opening quote
        start = self.pos
        while self.pos < len(self.source) and self.source[self.pos] != '"':
            self._advance()
        if self.pos >= len(self.source):
            raise LexError(
                ErrorInfo('UnterminatedString', f"unterminated string literal at {line}:{column}"),
                line, column,
            )
        text = self.source[start:self.pos]
        self._advance()  # closing quote
        return Token(TokenType.STRING, text, line, column)
