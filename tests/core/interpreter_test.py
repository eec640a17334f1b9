import io
import unittest

from chameleon.core.expr import Expr
from chameleon.core.interpreter import Interpreter
from chameleon.core.parser import parse
from chameleon.lang.error import EvaluationError, GenericException


def run(source):
    """Returns everything source prints."""
    out = io.StringIO()
    Interpreter(out).interpret(parse(source))
    return out.getvalue()


def evaluate(source):
    """Returns the value of the last top-level expression of source."""
    return Interpreter(io.StringIO()).interpret(parse(source))[-1]


class InterpreterTestCase(unittest.TestCase):

    def test_output(self):
        cases = {
            "(print (+ 1 2 3))": "6",
            "(print (/ 22 8))": "2.75",
            "(print (// 22 8))": "2",
            "(let [x 1 y (+ 1 x)] (println x y))": "1\n2\n",
            "(let [a -1 b -2] (println a) (let [a 999 b b] (println a b)))": "-1\n999\n-2\n",
            "(print 1 2)": "12",
            "(print true null 1.5 false)": "truenull1.5false",
            "(println (equal? 2 2 2))": "false\n",
            "((println 1) (println 2))": "1\n2\n",
            "(print (if false (then 1)))": "null",
            "(println (- 0.5 1))": "-0.5\n",
            "(print " + "9" * 400 + ")": "Infinity",
            "(print (- 0 " + "9" * 400 + "))": "-Infinity",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, run(case), case)

    def test_arithmetic(self):
        cases = {
            "(+ 1 2 3)": 6.0,
            "(- 10 1 2)": 7.0,
            "(* 2 3 4)": 24.0,
            "(/ 22 8)": 2.75,
            "(// 22 8)": 2.0,
            "(// -7 2)": -4.0,
            "(% 7 3)": 1.0,
            "(% -7 3)": -1.0,
            "(% 7.5 2)": 1.5,
            "(- 5 (+ 1 1))": 3.0,
            "- (+ 1 2)": -3.0,
            "+ 4": 4.0,
        }
        for case, expected in cases.items():
            self.assertEqual(expected, evaluate(case), case)

    def test_comparison_and_equality(self):
        cases = {
            "(> 3 2)": True,
            "(>= 2 2)": True,
            "(< 3 2)": False,
            "(<= 1 2 )": True,
            "(equal? 2 2 2)": False,
            "(equal? 2 2)": True,
            "(equal? null null)": True,
            "(equal? null 0)": False,
            "(equal? 0 false)": False,
            "(equal? 1 true)": False,
            "(equal? false false)": True,
            "(nequal? 1 2)": True,
            "(nequal? null null)": False,
        }
        for case, expected in cases.items():
            self.assertIs(expected, evaluate(case), case)

    def test_truthiness(self):
        falsy = ["0", "false", "null", "(- 1 1)"]
        truthy = ["1", "-1", "0.5", "true", "(+ 1 1)"]

        for case in falsy:
            self.assertIs(False, evaluate(f"true? {case}"), case)
            self.assertIs(True, evaluate(f"not {case}"), case)
        for case in truthy:
            self.assertIs(True, evaluate(f"true? {case}"), case)
            self.assertIs(False, evaluate(f"not {case}"), case)

        for case in falsy + truthy:
            self.assertIs(evaluate(f"true? {case}"), evaluate(f"not not {case}"), case)

    def test_logical(self):
        cases = {
            "(or 0 5)": 5.0,
            "(or 1 (/ 1 0))": 1.0,
            "(and 0 (/ 1 0))": 0.0,
            "(and 1 2 3)": 3.0,
            "(and 1 null 3)": None,
            "(or null false)": False,
            "(or false null 7)": 7.0,
        }
        for case, expected in cases.items():
            self.assertEqual(expected, evaluate(case), case)

        self.assertEqual("", run("(and false (println 1))"))
        self.assertEqual("", run("(or true (println 1))"))

    def test_conditionals(self):
        cases = {
            "(if 0 (then 1) (else 2))": 2.0,
            "(if 1 (then 1 2))": 2.0,
            "(if null (then 1))": None,
            "(cond (false 1) (0 2) (3 4))": 4.0,
            "(cond (false 1) (true 2) (true 3))": 2.0,
            "(cond (false 1))": None,
            "(cond (false 1) (else 9))": 9.0,
            "(cond ((> 1 2) 1) (true null) (else 3))": None,
        }
        for case, expected in cases.items():
            self.assertEqual(expected, evaluate(case), case)

        self.assertEqual("2\n", run("(if false (then (println 1)) (else (println 2)))"))
        self.assertEqual("1\n2\n", run("(cond ((println 1) 1) (true (println 2)))"))

    def test_let(self):
        cases = {
            "(let [x 2] (* x x))": 4.0,
            "(let [x 1 y (+ x 1) z (+ y 1)] z)": 3.0,
            "(let [x 1 x 2] x)": 2.0,
            "(let [x 1] (let [x 2] x))": 2.0,
            "(let [x 1] (let [y 2] (+ x y)))": 3.0,
            "(let [x 1] (let [x (+ x 10)] x))": 11.0,
            "(let [x 1] (let [x 2] x) x)": 1.0,
        }
        for case, expected in cases.items():
            self.assertEqual(expected, evaluate(case), case)

    def test_scope_discipline(self):
        interpreter = Interpreter(io.StringIO())
        interpreter.interpret(parse("(let [x 1] (let [y 2] y))"))
        self.assertEqual({}, interpreter.globals.bindings)

        self.assertRaises(EvaluationError, interpreter.interpret, parse("(let [x 1] (/ x 0))"))
        self.assertEqual({}, interpreter.globals.bindings)

        self.assertRaises(EvaluationError, interpreter.interpret, parse("(let [x 1] x) x"))

    def test_runtime_errors(self):
        cases = {
            "(let [a 100] (println b))": ("Undefined identifier \"b\"", "b"),
            "(let [x y y 1] x)": ("Undefined identifier \"y\"", "y"),
            "(print (> 3 2 1))": ("Binary operator \">\" only operates on numbers", ">"),
            "(+ 1 true)": ("Binary operator \"+\" only operates on numbers", "+"),
            "(* null 2)": ("Binary operator \"*\" only operates on numbers", "*"),
            "(<= false 2)": ("Binary operator \"<=\" only operates on numbers", "<="),
            "- true": ("Expected number after unary operator \"-\"", "-"),
            "+ null": ("Expected number after unary operator \"+\"", "+"),
            "(/ 5 0)": ("Cannot divide by 0", "/"),
            "(// 5 0)": ("Cannot divide by 0", "//"),
            "(% 5 0)": ("Cannot divide by 0", "%"),
            "(% 0 0)": ("Cannot divide by 0", "%"),
            "(/ 1.5 (- 2 2))": ("Cannot divide by 0", "/"),
        }
        for case, (msg, lexeme) in cases.items():
            with self.assertRaises(EvaluationError) as context:
                evaluate(case)
            error = context.exception
            self.assertEqual(msg, error.msg, case)
            self.assertEqual(lexeme, error.token.lexeme, case)
            self.assertEqual("RuntimeError", error.name, case)

    def test_error_location(self):
        with self.assertRaises(EvaluationError) as context:
            evaluate("(let [a 1]\n  (println a\n    b))")
        self.assertEqual((3, 5), (context.exception.line, context.exception.column))

    def test_halts_on_first_error(self):
        out = io.StringIO()
        interpreter = Interpreter(out)
        self.assertRaises(EvaluationError, interpreter.interpret, parse("(println 1) (println x) (println 2)"))
        self.assertEqual("1\n", out.getvalue())

    def test_every_node_has_a_rule(self):
        rules = Interpreter().rules
        for cls in Expr.__subclasses__():
            self.assertIn(cls, rules, cls.__name__)

        self.assertRaises(GenericException, Interpreter().evaluate, object(), Interpreter().globals)


if __name__ == '__main__':
    unittest.main()
