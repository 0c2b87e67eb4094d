"""Token model for minijs.

Tokens are small immutable records. Two tokens are equal when their type
and payload match; the source position is carried along for error
messages only and never takes part in comparisons.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional


class TokenType(Enum):
    # Payload carrying tokens
    IDENT = 'identifier'
    NUMBER = 'number'
    STRING = 'string'

    # Literal keywords
    TRUE = 'true'
    FALSE = 'false'
    NULL = 'null'

    # Statement keywords
    LET = 'let'
    IF = 'if'
    ELSE = 'else'
    WHILE = 'while'
    FOR = 'for'
    DO = 'do'
    FUNCTION = 'function'
    RETURN = 'return'
    PRINT = 'print'

    # Operators
    BANG = '!'
    ASSIGN = '='
    EQUAL = '=='
    NOT_EQUAL = '!='
    LESS = '<'
    LESS_EQUAL = '<='
    GREATER = '>'
    GREATER_EQUAL = '>='
    PLUS = '+'
    MINUS = '-'
    STAR = '*'
    SLASH = '/'
    AND = '&&'
    OR = '||'

    # Punctuation
    COMMA = ','
    SEMICOLON = ';'
    LPAREN = '('
    RPAREN = ')'
    LBRACE = '{'
    RBRACE = '}'

    EOF = 'end of input'


KEYWORDS: Dict[str, TokenType] = {
    'let': TokenType.LET,
    'if': TokenType.IF,
    'else': TokenType.ELSE,
    'while': TokenType.WHILE,
    'for': TokenType.FOR,
    'do': TokenType.DO,
    'function': TokenType.FUNCTION,
    'return': TokenType.RETURN,
    'true': TokenType.TRUE,
    'false': TokenType.FALSE,
    'null': TokenType.NULL,
    'print': TokenType.PRINT,
    'and': TokenType.AND,
    'or': TokenType.OR,
}

# Two character operators, checked before their one character prefixes.
DOUBLE_CHAR_TOKENS: Dict[str, TokenType] = {
    '==': TokenType.EQUAL,
    '!=': TokenType.NOT_EQUAL,
    '<=': TokenType.LESS_EQUAL,
    '>=': TokenType.GREATER_EQUAL,
    '&&': TokenType.AND,
    '||': TokenType.OR,
}

SINGLE_CHAR_TOKENS: Dict[str, TokenType] = {
    '!': TokenType.BANG,
    '=': TokenType.ASSIGN,
    '<': TokenType.LESS,
    '>': TokenType.GREATER,
    '+': TokenType.PLUS,
    '-': TokenType.MINUS,
    '*': TokenType.STAR,
    '/': TokenType.SLASH,
    ',': TokenType.COMMA,
    ';': TokenType.SEMICOLON,
    '(': TokenType.LPAREN,
    ')': TokenType.RPAREN,
    '{': TokenType.LBRACE,
    '}': TokenType.RBRACE,
}


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: Optional[str] = None  # only identifiers, numbers and strings carry one
    line: int = field(default=0, compare=False)
    column: int = field(default=0, compare=False)

    @staticmethod
    def ident(name: str) -> 'Token':
        return Token(TokenType.IDENT, name)

    @staticmethod
    def number(text: str) -> 'Token':
        return Token(TokenType.NUMBER, text)

    @staticmethod
    def string(text: str) -> 'Token':
        return Token(TokenType.STRING, text)

    def __str__(self) -> str:
        if self.type is TokenType.STRING:
            return f'string "{self.value}"'
        if self.value is not None:
            return f"{self.type.value} {self.value}"
        return repr(self.type.value) if self.type is not TokenType.EOF else self.type.value

    def __repr__(self) -> str:
        if self.value is not None:
            return f"Token({self.type.name}, {self.value!r})"
        return f"Token({self.type.name})"
