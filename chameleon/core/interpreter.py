"""Tree-walking evaluator for chameleon ASTs.

Every node class has exactly one evaluation rule in Interpreter.rules. Operands are evaluated before their operator
is applied (post-order). The Scope to resolve identifiers in is passed explicitly to every rule: a let hands a fresh
child Scope to its bindings and body, and nothing outside the let ever sees that child.
"""

import math
import operator
import sys

from chameleon.core.expr import (Binary, Binding, Body, Clause, Cond, Group, IfExpr, Let, Literal, Logical, Print,
                                 Unary, Variable)
from chameleon.core.scope import Scope
from chameleon.core.token import TokenKind
from chameleon.core.values import is_equal, is_number, is_truthy, stringify
from chameleon.lang.error import EvaluationError, GenericException


def _floor_divide(left, right):
    quotient = left / right
    return float(math.floor(quotient)) if math.isfinite(quotient) else quotient


ARITHMETIC = {
    TokenKind.PLUS: operator.add,
    TokenKind.MINUS: operator.sub,
    TokenKind.STAR: operator.mul,
    TokenKind.SLASH: operator.truediv,
    TokenKind.SLASH_SLASH: _floor_divide,
    TokenKind.PERCENT: math.fmod,
}

DIVISIONS = (TokenKind.SLASH, TokenKind.SLASH_SLASH, TokenKind.PERCENT)

COMPARISONS = {
    TokenKind.GREATER_THAN: operator.gt,
    TokenKind.GREATER_THAN_OR_EQUAL_TO: operator.ge,
    TokenKind.LESS_THAN: operator.lt,
    TokenKind.LESS_THAN_OR_EQUAL_TO: operator.le,
}

_NO_MATCH = object()  # result of a cond clause whose condition is falsy


class Interpreter:
    """Evaluates programs, writing the output of print/println to out (stdout by default)."""

    def __init__(self, out=None):
        self.out = out if out is not None else sys.stdout
        self.globals = Scope()

        self.rules = {
            Literal: self._literal,
            Variable: self._variable,
            Unary: self._unary,
            Binary: self._binary,
            Logical: self._logical,
            Group: self._group,
            Print: self._print,
            Binding: self._binding,
            Let: self._let,
            Body: self._body,
            IfExpr: self._if,
            Clause: self._clause,
            Cond: self._cond,
        }

    def interpret(self, program, scope=None):
        """Evaluates each top-level expression of program in order. Returns the list of their values. The first
        EvaluationError aborts the run.
        """
        scope = scope if scope is not None else self.globals
        return [self.evaluate(expr, scope) for expr in program]

    def evaluate(self, expr, scope):
        """Evaluates expr in scope and returns its value."""
        try:
            rule = self.rules[type(expr)]
        except KeyError:
            raise GenericException(f"no evaluation rule for {type(expr).__name__}", internal=True)
        return rule(expr, scope)

    # evaluation rules

    def _literal(self, expr, scope):
        return expr.value

    def _variable(self, expr, scope):
        return scope.get(expr.name)

    def _unary(self, expr, scope):
        operand = self.evaluate(expr.operand, scope)
        kind = expr.operator.kind

        if kind is TokenKind.NOT:
            return not is_truthy(operand)
        elif kind is TokenKind.TRUTHY:
            return is_truthy(operand)

        if not is_number(operand):
            raise EvaluationError(expr.operator, f"Expected number after unary operator \"{expr.operator.lexeme}\"")
        return -operand if kind is TokenKind.MINUS else operand

    def _binary(self, expr, scope):
        left = self.evaluate(expr.left, scope)
        right = self.evaluate(expr.right, scope)
        kind = expr.operator.kind

        if kind is TokenKind.EQUAL_TO:
            return is_equal(left, right)
        elif kind is TokenKind.NOT_EQUAL_TO:
            return not is_equal(left, right)

        if not (is_number(left) and is_number(right)):
            raise EvaluationError(expr.operator, f"Binary operator \"{expr.operator.lexeme}\" only operates on numbers")

        if kind in COMPARISONS:
            return COMPARISONS[kind](left, right)

        if kind in DIVISIONS and right == 0:
            raise EvaluationError(expr.operator, "Cannot divide by 0")
        return ARITHMETIC[kind](left, right)

    def _logical(self, expr, scope):
        left = self.evaluate(expr.left, scope)

        if expr.operator.kind is TokenKind.OR:
            if is_truthy(left):
                return left
        elif not is_truthy(left):
            return left

        return self.evaluate(expr.right, scope)

    def _group(self, expr, scope):
        for item in expr.items:
            self.evaluate(item, scope)
        return None

    def _print(self, expr, scope):
        end = "\n" if expr.operator.kind is TokenKind.PRINTLN else ""
        for sub_expr in expr.exprs:
            self.out.write(stringify(self.evaluate(sub_expr, scope)) + end)
        return None

    def _binding(self, expr, scope):
        value = self.evaluate(expr.value, scope)
        scope.define(expr.name.lexeme, value)
        return value

    def _let(self, expr, scope):
        let_scope = scope.child()
        for binding in expr.bindings:
            self.evaluate(binding, let_scope)
        return self.evaluate(expr.body, let_scope)

    def _body(self, expr, scope):
        value = None
        for sub_expr in expr.exprs:
            value = self.evaluate(sub_expr, scope)
        return value

    def _if(self, expr, scope):
        if is_truthy(self.evaluate(expr.condition, scope)):
            return self.evaluate(expr.then_body, scope)
        elif expr.else_body is not None:
            return self.evaluate(expr.else_body, scope)
        return None

    def _clause(self, expr, scope):
        """Returns the value of the clause's body, or _NO_MATCH if its condition is falsy."""
        if is_truthy(self.evaluate(expr.condition, scope)):
            return self.evaluate(expr.body, scope)
        return _NO_MATCH

    def _cond(self, expr, scope):
        for clause in expr.clauses:
            value = self.evaluate(clause, scope)
            if value is not _NO_MATCH:
                return value

        if expr.else_body is not None:
            return self.evaluate(expr.else_body, scope)
        return None
