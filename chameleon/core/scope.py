"""Lexical scopes of let expressions."""

from chameleon.lang.error import EvaluationError


class Scope:
    """Binding table plus a link to the enclosing Scope. The global Scope is the only one without a parent. A child
    Scope lives exactly as long as the evaluation of the let that created it.
    """

    def __init__(self, parent=None):
        self.parent = parent
        self.bindings = {}

    def child(self):
        """Returns a new Scope enclosed by this one."""
        return Scope(self)

    def define(self, name, value):
        """Binds name to value in this Scope only. Enclosing Scopes are never touched, so this may shadow them."""
        self.bindings[name] = value

    def get(self, name):
        """Returns the value bound to Token name in the innermost Scope that binds it. Raises EvaluationError if no
        Scope in the chain does.
        """
        scope = self
        while scope is not None:
            if name.lexeme in scope.bindings:
                return scope.bindings[name.lexeme]
            scope = scope.parent

        raise EvaluationError(name, f"Undefined identifier \"{name.lexeme}\"")

    @property
    def depth(self):
        """Number of enclosing Scopes."""
        return 0 if self.parent is None else self.parent.depth + 1

    def __repr__(self):
        return f"Scope(depth={self.depth}, bindings={self.bindings})"
