"""Tokens produced by the lexer. A Token is created once and never mutated afterwards."""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Union


class TokenKind(Enum):
    """Closed set of token kinds."""
    # Grouping
    LPAREN = auto()
    RPAREN = auto()
    LBRACKET = auto()
    RBRACKET = auto()

    # Arithmetic
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()
    SLASH_SLASH = auto()
    PERCENT = auto()

    # equal? and nequal?
    EQUAL_TO = auto()
    NOT_EQUAL_TO = auto()

    # > >= < <=
    GREATER_THAN = auto()
    GREATER_THAN_OR_EQUAL_TO = auto()
    LESS_THAN = auto()
    LESS_THAN_OR_EQUAL_TO = auto()

    # not, true?, and, or
    NOT = auto()
    TRUTHY = auto()
    AND = auto()
    OR = auto()

    # Keywords
    LET = auto()
    PRINT = auto()
    PRINTLN = auto()
    IF = auto()
    THEN = auto()
    ELSE = auto()
    COND = auto()
    TRUE = auto()
    FALSE = auto()
    NULL = auto()

    IDENTIFIER = auto()
    NUMBER = auto()

    # Character that cannot start any token; reported by the parser
    UNIDENTIFIED = auto()

    EOF = auto()


# words that look like identifiers but are reserved
KEYWORDS = {
    "let": TokenKind.LET,
    "print": TokenKind.PRINT,
    "println": TokenKind.PRINTLN,
    "if": TokenKind.IF,
    "then": TokenKind.THEN,
    "else": TokenKind.ELSE,
    "cond": TokenKind.COND,
    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
    "null": TokenKind.NULL,
    "not": TokenKind.NOT,
    "and": TokenKind.AND,
    "or": TokenKind.OR,
    "equal?": TokenKind.EQUAL_TO,
    "nequal?": TokenKind.NOT_EQUAL_TO,
    "true?": TokenKind.TRUTHY,
}

KEYWORD_LITERALS = {
    TokenKind.TRUE: True,
    TokenKind.FALSE: False,
    TokenKind.NULL: None,
}


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    lexeme: str
    literal: Optional[Union[float, bool]]
    line: int
    column: int

    def __repr__(self):
        return f"Token({self.kind.name}, '{self.lexeme}', {self.line}:{self.column})"
