"""Lexical analysis for chameleon: converts source text into a list of Tokens. Lexical grammar:

```
<number>     ::= <digit>+ ("." <digit>+)?
<identifier> ::= [a-zA-Z_$] [a-zA-Z_$0-9?-]*     ; keywords such as "let" or "equal?" are looked up afterwards
<operator>   ::= "(" | ")" | "[" | "]" | "+" | "-" | "*" | "/" | "//" | "%" | ">" | ">=" | "<" | "<="
<comment>    ::= ";" <char>* <newline>
               | "``" <char>* "``"               ; may span multiple lines
```

The lexer never raises: a character that cannot start a token becomes a one-character UNIDENTIFIED token, which the
parser reports when it reaches it.
"""

import string

from chameleon.core.token import KEYWORD_LITERALS, KEYWORDS, Token, TokenKind


IDENTIFIER_START = string.ascii_letters + "_$"
IDENTIFIER_PART = IDENTIFIER_START + string.digits + "?-"

SINGLE_CHAR_TOKENS = {
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "[": TokenKind.LBRACKET,
    "]": TokenKind.RBRACKET,
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.STAR,
    "%": TokenKind.PERCENT,
}

# first char: (second char, kind if matched, kind otherwise)
DOUBLE_CHAR_TOKENS = {
    "/": ("/", TokenKind.SLASH_SLASH, TokenKind.SLASH),
    ">": ("=", TokenKind.GREATER_THAN_OR_EQUAL_TO, TokenKind.GREATER_THAN),
    "<": ("=", TokenKind.LESS_THAN_OR_EQUAL_TO, TokenKind.LESS_THAN),
}

BLOCK_COMMENT = "``"


class Lexer:
    """Scans a whole source string. tokenize can be called again, in which case it rescans from the beginning."""

    def __init__(self, source):
        self.source = source
        self._reset()

    def _reset(self):
        self.tokens = []
        self.start = 0     # index of the first character of the token being scanned
        self.current = 0   # index of the next character to consume
        self.line = 1
        self.column = 1
        self._start_line = 1
        self._start_column = 1

    def tokenize(self):
        """Returns the list of Tokens in self.source, always terminated by a single EOF token."""
        self._reset()

        while not self.is_at_end:
            self.start = self.current
            self._start_line, self._start_column = self.line, self.column
            self._scan_token()

        self.tokens.append(Token(TokenKind.EOF, "", None, self.line, self.column))
        return self.tokens

    @property
    def is_at_end(self):
        return self.current >= len(self.source)

    def _peek(self, offset=0):
        idx = self.current + offset
        return self.source[idx] if idx < len(self.source) else ""

    def _advance(self):
        """Consumes one character, keeping line and column up to date."""
        char = self.source[self.current]
        self.current += 1
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return char

    def _match(self, expected):
        if self._peek() != expected:
            return False
        self._advance()
        return True

    def _add_token(self, kind, literal=None):
        lexeme = self.source[self.start:self.current]
        self.tokens.append(Token(kind, lexeme, literal, self._start_line, self._start_column))

    def _scan_token(self):
        char = self._advance()

        if char in string.whitespace:
            return
        elif char == ";":
            while self._peek() and self._peek() != "\n":
                self._advance()
        elif char == "`" and self._peek() == "`":
            self._block_comment()
        elif char in SINGLE_CHAR_TOKENS:
            self._add_token(SINGLE_CHAR_TOKENS[char])
        elif char in DOUBLE_CHAR_TOKENS:
            second, matched, single = DOUBLE_CHAR_TOKENS[char]
            self._add_token(matched if self._match(second) else single)
        elif char in string.digits:
            self._number()
        elif char in IDENTIFIER_START:
            self._identifier()
        else:
            self._add_token(TokenKind.UNIDENTIFIED)

    def _block_comment(self):
        """Skips a block comment. If it is never closed, emits an UNIDENTIFIED token for its opening."""
        self._advance()  # second opening backtick
        while not self.is_at_end:
            if self._peek() == "`" and self._peek(1) == "`":
                self._advance()
                self._advance()
                return
            self._advance()

        self.tokens.append(Token(TokenKind.UNIDENTIFIED, BLOCK_COMMENT, None, self._start_line, self._start_column))

    def _number(self):
        while self._peek() and self._peek() in string.digits:
            self._advance()

        if self._peek() == "." and self._peek(1) and self._peek(1) in string.digits:
            self._advance()
            while self._peek() and self._peek() in string.digits:
                self._advance()

        self._add_token(TokenKind.NUMBER, float(self.source[self.start:self.current]))

    def _identifier(self):
        while self._peek() and self._peek() in IDENTIFIER_PART:
            self._advance()

        word = self.source[self.start:self.current]
        kind = KEYWORDS.get(word, TokenKind.IDENTIFIER)
        self._add_token(kind, KEYWORD_LITERALS.get(kind))


def tokenize(source):
    """Shortcut for Lexer(source).tokenize()."""
    return Lexer(source).tokenize()
