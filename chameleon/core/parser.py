"""Recursive-descent parser for chameleon. Each nonterminal of the grammar is implemented as a method:

```
program    -> expression* EOF
expression -> let | print | if | cond | logical | group | equality
let        -> "(" "let" "[" binding+ "]" expression+ ")"
binding    -> IDENTIFIER equality
print      -> "(" ("print" | "println") equality+ ")"
if         -> "(" "if" equality "(" "then" expression+ ")" ("(" "else" expression+ ")")? ")"
cond       -> "(" "cond" ("(" equality expression+ ")")+ ("(" "else" expression+ ")")? ")"
logical    -> "(" ("and" | "or") equality equality+ ")"
group      -> "(" expression+ ")"                      ; only when the token after "(" is another "("
equality   -> "(" ("equal?" | "nequal?") comparison comparison+ ")" | comparison
comparison -> "(" (">" | ">=" | "<" | "<=") binary binary+ ")" | binary
binary     -> "(" ("+" | "-" | "*" | "/" | "//" | "%") unary unary+ ")" | unary
unary      -> ("+" | "-" | "not" | "true?") expression
            | "(" <compound form>                       ; parsed as a whole expression
            | literal
literal    -> NUMBER | IDENTIFIER | "true" | "false" | "null"
```

Every compound form starts with "(" followed by a distinguishing token, so peeking at the next two tokens is always
enough to pick a rule. N-ary operators are folded left-associatively into binary nodes: (+ 1 2 3) is parsed as
(+ (+ 1 2) 3), and (equal? 2 2 2) as (equal? (equal? 2 2) 2).

Parsing is fail-fast: the first error raises a ParseError and no partial program is returned.
"""

from chameleon.core.expr import (Binary, Binding, Body, Clause, Cond, Group, IfExpr, Let, Literal, Logical, Print,
                                 Unary, Variable)
from chameleon.core.lexer import BLOCK_COMMENT, tokenize
from chameleon.core.token import TokenKind
from chameleon.lang.error import GenericException, ParseError


EQUALITY_OPERATORS = (TokenKind.EQUAL_TO, TokenKind.NOT_EQUAL_TO)
COMPARISON_OPERATORS = (TokenKind.GREATER_THAN, TokenKind.GREATER_THAN_OR_EQUAL_TO, TokenKind.LESS_THAN,
                        TokenKind.LESS_THAN_OR_EQUAL_TO)
BINARY_OPERATORS = (TokenKind.PLUS, TokenKind.MINUS, TokenKind.STAR, TokenKind.SLASH, TokenKind.SLASH_SLASH,
                    TokenKind.PERCENT)
UNARY_OPERATORS = (TokenKind.PLUS, TokenKind.MINUS, TokenKind.NOT, TokenKind.TRUTHY)
LOGICAL_OPERATORS = (TokenKind.AND, TokenKind.OR)

# tokens that may follow "(" to open a compound form
COMPOUND_FORMS = (TokenKind.LET, TokenKind.PRINT, TokenKind.PRINTLN, TokenKind.IF, TokenKind.COND,
                  TokenKind.LPAREN) + LOGICAL_OPERATORS + EQUALITY_OPERATORS + COMPARISON_OPERATORS + BINARY_OPERATORS

# tokens that may start an expression
EXPRESSION_START = (TokenKind.LPAREN, TokenKind.NUMBER, TokenKind.IDENTIFIER, TokenKind.TRUE, TokenKind.FALSE,
                    TokenKind.NULL) + UNARY_OPERATORS

LITERALS = (TokenKind.NUMBER, TokenKind.TRUE, TokenKind.FALSE, TokenKind.NULL)


class Parser:
    """Builds the AST of a program from the tokens produced by the Lexer."""

    def __init__(self, tokens):
        if not tokens or tokens[-1].kind is not TokenKind.EOF:
            raise GenericException("token sequence must end with an EOF token", internal=True)

        self.tokens = tokens
        self.position = 0  # index of the next token to process

    def parse(self):
        """Returns the program as a list of top-level expressions. Raises ParseError on the first syntax error."""
        self.position = 0
        return self._program()

    # grammar rules

    def _program(self):
        expressions = []
        while not self._peek_is(TokenKind.EOF):
            expressions.append(self._expression())
        return expressions

    def _expression(self):
        if not self._has_expression():
            raise self._error(self._peek(), "Expected an expression")

        if self._peek_is(TokenKind.LPAREN):
            if self._peek_next_is(TokenKind.LET):
                return self._let()
            elif self._peek_next_is(TokenKind.PRINT, TokenKind.PRINTLN):
                return self._print()
            elif self._peek_next_is(TokenKind.IF):
                return self._if()
            elif self._peek_next_is(TokenKind.COND):
                return self._cond()
            elif self._peek_next_is(*LOGICAL_OPERATORS):
                return self._logical()
            elif self._peek_next_is(TokenKind.LPAREN):
                return self._group()

        return self._equality()

    def _let(self):
        self._advance()  # (
        self._advance()  # let
        self._consume(TokenKind.LBRACKET, "Expected \"[\" after let")

        bindings = []
        while not self._peek_is(TokenKind.RBRACKET, TokenKind.EOF):
            if not self._peek_is(TokenKind.IDENTIFIER):
                raise self._error(self._peek(), "Expected an identifier in the bindings of let")
            bindings.append(self._binding())

        if not bindings:
            raise self._error(self._peek(), "Expected at least one binding")

        self._consume(TokenKind.RBRACKET, "Missing closing \"]\"")
        body = self._body("let")
        self._consume(TokenKind.RPAREN, "Missing closing \")\"")
        return Let(tuple(bindings), body)

    def _binding(self):
        name = self._advance()
        return Binding(name, self._equality())

    def _body(self, form):
        exprs = []
        while self._has_expression():
            exprs.append(self._expression())

        if not exprs:
            raise self._error(self._peek(), f"Expected at least one expression in the body of {form}")
        return Body(tuple(exprs))

    def _print(self):
        self._advance()  # (
        operator = self._advance()

        exprs = []
        while self._has_expression():
            exprs.append(self._equality())

        if not exprs:
            raise self._error(self._peek(), f"Expected at least one expression after {operator.lexeme}")

        self._consume(TokenKind.RPAREN, "Missing closing \")\"")
        return Print(operator, tuple(exprs))

    def _if(self):
        self._advance()  # (
        self._advance()  # if

        if self._peek_is(TokenKind.LPAREN) and self._peek_next_is(TokenKind.THEN):
            raise self._error(self._peek_next(), "Expected a condition before then")
        condition = self._equality()

        if not (self._peek_is(TokenKind.LPAREN) and self._peek_next_is(TokenKind.THEN)):
            raise self._error(self._peek(), "Expected a (then ...) clause after the condition of if")
        self._advance()  # (
        self._advance()  # then
        then_body = self._body("then")
        self._consume(TokenKind.RPAREN, "Missing closing \")\"")

        else_body = self._else()
        self._consume(TokenKind.RPAREN, "Missing closing \")\"")
        return IfExpr(condition, then_body, else_body)

    def _else(self):
        """Parses an optional (else ...) clause. Returns None if there is none."""
        if not (self._peek_is(TokenKind.LPAREN) and self._peek_next_is(TokenKind.ELSE)):
            return None

        self._advance()  # (
        self._advance()  # else
        else_body = self._body("else")
        self._consume(TokenKind.RPAREN, "Missing closing \")\"")
        return else_body

    def _cond(self):
        self._advance()  # (
        self._advance()  # cond

        clauses = []
        while self._peek_is(TokenKind.LPAREN) and not self._peek_next_is(TokenKind.ELSE):
            clauses.append(self._clause())

        if not clauses:
            raise self._error(self._peek(), "Expected at least one clause in cond")

        else_body = self._else()
        self._consume(TokenKind.RPAREN, "Missing closing \")\"")
        return Cond(tuple(clauses), else_body)

    def _clause(self):
        self._advance()  # (
        condition = self._equality()
        body = self._body("a cond clause")
        self._consume(TokenKind.RPAREN, "Missing closing \")\"")
        return Clause(condition, body)

    def _logical(self):
        self._advance()  # (
        operator = self._advance()

        first = self._equality()
        second = self._equality()
        expr = Logical(operator, first, second)

        while self._has_expression():
            expr = Logical(operator, expr, self._equality())

        self._consume(TokenKind.RPAREN, "Missing closing \")\"")
        return expr

    def _group(self):
        self._advance()  # (

        items = []
        while self._has_expression():
            items.append(self._expression())

        self._consume(TokenKind.RPAREN, "Missing closing \")\"")
        return Group(tuple(items))

    def _equality(self):
        return self._fold(EQUALITY_OPERATORS, self._comparison)

    def _comparison(self):
        return self._fold(COMPARISON_OPERATORS, self._binary)

    def _binary(self):
        return self._fold(BINARY_OPERATORS, self._unary)

    def _fold(self, operators, operand):
        """Parses "(" operator operand operand+ ")" as a left-associative chain of Binary nodes if the next two tokens
        are "(" and one of operators. Otherwise parses a single operand.
        """
        if not (self._peek_is(TokenKind.LPAREN) and self._peek_next_is(*operators)):
            return operand()

        self._advance()  # (
        operator = self._advance()

        first = operand()
        second = operand()
        expr = Binary(operator, first, second)

        while self._has_expression():
            expr = Binary(operator, expr, operand())

        self._consume(TokenKind.RPAREN, "Missing closing \")\"")
        return expr

    def _unary(self):
        if self._peek_is(*UNARY_OPERATORS):
            operator = self._advance()
            return Unary(operator, self._expression())

        if self._peek_is(TokenKind.LPAREN):
            if self._peek_next_is(*COMPOUND_FORMS):
                return self._expression()

            token = self._peek_next()
            if token.kind is TokenKind.IDENTIFIER:
                raise self._error(token, f"\"{token.lexeme}\" is not an operator or keyword")
            raise self._error(token, "Expected an operator or keyword after \"(\"")

        return self._literal()

    def _literal(self):
        token = self._peek()

        if token.kind in LITERALS:
            self._advance()
            return Literal(token.literal)
        elif token.kind is TokenKind.IDENTIFIER:
            self._advance()
            return Variable(token)

        raise self._error(token, "Expected an expression")

    # token helpers

    def _error(self, token, msg):
        """Returns a ParseError for token. Unidentified tokens are always reported as such, whatever was expected."""
        if token.kind is TokenKind.UNIDENTIFIED:
            if token.lexeme == BLOCK_COMMENT:
                msg = "Unterminated block comment"
            else:
                msg = f"Unidentified token \"{token.lexeme}\""
        return ParseError(token, msg)

    def _consume(self, kind, msg):
        """Returns the next token if it is of the given kind. Otherwise raises a ParseError with msg."""
        if self._peek_is(kind):
            return self._advance()
        raise self._error(self._peek(), msg)

    def _advance(self):
        """Consumes and returns the next token. EOF is never consumed."""
        token = self.tokens[self.position]
        if token.kind is not TokenKind.EOF:
            self.position += 1
        return token

    def _peek(self):
        return self.tokens[self.position]

    def _peek_next(self):
        return self.tokens[min(self.position + 1, len(self.tokens) - 1)]

    def _peek_is(self, *kinds):
        return self._peek().kind in kinds

    def _peek_next_is(self, *kinds):
        return self._peek_next().kind in kinds

    def _has_expression(self):
        """Whether or not the next token can start an expression."""
        return self._peek_is(*EXPRESSION_START)


def parse(source):
    """Lexes and parses source. Returns the list of top-level expressions."""
    return Parser(tokenize(source)).parse()
