import unittest

from chameleon.core.scope import Scope
from chameleon.core.token import Token, TokenKind
from chameleon.lang.error import EvaluationError


def name(lexeme):
    return Token(TokenKind.IDENTIFIER, lexeme, None, 1, 1)


class ScopeTestCase(unittest.TestCase):

    def test_define_and_get(self):
        scope = Scope()
        scope.define("x", 1.0)
        scope.define("y", None)

        self.assertEqual(1.0, scope.get(name("x")))
        self.assertIsNone(scope.get(name("y")))

        scope.define("x", 2.0)
        self.assertEqual(2.0, scope.get(name("x")))

    def test_shadowing(self):
        outer = Scope()
        outer.define("a", -1.0)
        outer.define("b", -2.0)

        inner = outer.child()
        inner.define("a", 999.0)

        self.assertEqual(999.0, inner.get(name("a")))
        self.assertEqual(-2.0, inner.get(name("b")))
        self.assertEqual(-1.0, outer.get(name("a")))
        self.assertEqual({"a": 999.0}, inner.bindings)

    def test_undefined(self):
        scope = Scope().child().child()
        with self.assertRaises(EvaluationError) as context:
            scope.get(Token(TokenKind.IDENTIFIER, "missing", None, 4, 2))

        self.assertEqual("Undefined identifier \"missing\"", context.exception.msg)
        self.assertEqual((4, 2), (context.exception.line, context.exception.column))

    def test_chain(self):
        root = Scope()
        root.define("x", 1.0)
        leaf = root.child().child()

        self.assertIs(root, leaf.parent.parent)
        self.assertEqual(2, leaf.depth)
        self.assertEqual(0, root.depth)


if __name__ == '__main__':
    unittest.main()
