"""Abstract syntax tree of chameleon programs. The parser builds these nodes and the interpreter consumes them.

Every node is a frozen dataclass and every sequence inside a node is a tuple, so a tree cannot change once built.
Nodes that can fail at runtime keep their operator/name Token so errors can point at the source.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Tuple

from chameleon.core.token import Token
from chameleon.core.values import stringify


class Expr(ABC):
    """Superclass of every AST node."""

    @property
    @abstractmethod
    def label(self):
        """Short description of this node (without its children), used by display."""

    @property
    def children(self):
        """Sub-nodes of this node, in evaluation order."""
        return ()

    def display(self, indents=0):
        """Recursively displays the tree with readable format.

        Format:
        <label>(
            <label>(
                ...
                <label>  # <-- if node has no children
            )
        )
        """
        result = f"{'    ' * indents}{self.label}"
        children = [child for child in self.children if child is not None]
        if children:
            result += "("
            for child in children:
                result += "\n" + child.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents})"
        return result


@dataclass(frozen=True)
class Literal(Expr):
    value: object

    @property
    def label(self):
        return f"Literal {stringify(self.value)}"


@dataclass(frozen=True)
class Variable(Expr):
    name: Token

    @property
    def label(self):
        return f"Variable {self.name.lexeme}"


@dataclass(frozen=True)
class Unary(Expr):
    operator: Token
    operand: Expr

    @property
    def label(self):
        return f"Unary '{self.operator.lexeme}'"

    @property
    def children(self):
        return (self.operand,)


@dataclass(frozen=True)
class Binary(Expr):
    operator: Token
    left: Expr
    right: Expr

    @property
    def label(self):
        return f"Binary '{self.operator.lexeme}'"

    @property
    def children(self):
        return self.left, self.right


@dataclass(frozen=True)
class Logical(Expr):
    """and/or. The right operand is only evaluated if the left one does not decide the result."""
    operator: Token
    left: Expr
    right: Expr

    @property
    def label(self):
        return f"Logical '{self.operator.lexeme}'"

    @property
    def children(self):
        return self.left, self.right


@dataclass(frozen=True)
class Group(Expr):
    """Expressions evaluated in order for effect. A group has no value of its own (null)."""
    items: Tuple[Expr, ...]

    @property
    def label(self):
        return "Group"

    @property
    def children(self):
        return self.items


@dataclass(frozen=True)
class Print(Expr):
    """print or println, told apart by operator."""
    operator: Token
    exprs: Tuple[Expr, ...]

    @property
    def label(self):
        return f"Print '{self.operator.lexeme}'"

    @property
    def children(self):
        return self.exprs


@dataclass(frozen=True)
class Binding(Expr):
    name: Token
    value: Expr

    @property
    def label(self):
        return f"Binding {self.name.lexeme}"

    @property
    def children(self):
        return (self.value,)


@dataclass(frozen=True)
class Body(Expr):
    """Non-empty sequence of expressions whose value is the value of the last one."""
    exprs: Tuple[Expr, ...]

    @property
    def label(self):
        return "Body"

    @property
    def children(self):
        return self.exprs


@dataclass(frozen=True)
class Let(Expr):
    bindings: Tuple[Binding, ...]
    body: Body

    @property
    def label(self):
        return "Let"

    @property
    def children(self):
        return self.bindings + (self.body,)


@dataclass(frozen=True)
class IfExpr(Expr):
    condition: Expr
    then_body: Body
    else_body: Optional[Body] = None

    @property
    def label(self):
        return "If"

    @property
    def children(self):
        return self.condition, self.then_body, self.else_body


@dataclass(frozen=True)
class Clause(Expr):
    """One (condition body...) branch of a cond."""
    condition: Expr
    body: Body

    @property
    def label(self):
        return "Clause"

    @property
    def children(self):
        return self.condition, self.body


@dataclass(frozen=True)
class Cond(Expr):
    clauses: Tuple[Clause, ...]
    else_body: Optional[Body] = None

    @property
    def label(self):
        return "Cond"

    @property
    def children(self):
        return self.clauses + (self.else_body,)
