import io
import unittest
from contextlib import redirect_stdout

from chameleon.lang.error import ErrorHandler
from chameleon.lang.session import Session
from chameleon.lang.shell import Shell


class ShellTestCase(unittest.TestCase):

    def setUp(self):
        self.out = io.StringIO()
        self.error_handler = ErrorHandler(fatal=True, color=False, stream=io.StringIO())
        self.shell = Shell(Session(self.error_handler, Session.SH_FILE, cmd_line=True, out=self.out))

    def send(self, *lines):
        with redirect_stdout(self.out):
            return [self.shell.onecmd(line) for line in lines]

    def test_results(self):
        self.send("(+ 1 2)", "(println 4)", "true? 0", "null")
        self.assertEqual("3\n4\nfalse\n", self.out.getvalue())

    def test_continuation(self):
        self.send("(let [x 1]")
        self.assertEqual(Shell.secondary_prompt, self.shell.prompt)
        self.assertEqual("", self.out.getvalue())

        self.send("  (println x)", "  (+ x 1))")
        self.assertEqual(Shell._tmp_prompt, self.shell.prompt)
        self.assertEqual("1\n2\n", self.out.getvalue())

    def test_errors_do_not_exit(self):
        self.send("(println y)", "(print (")
        self.assertEqual(Shell.secondary_prompt, self.shell.prompt)

        self.send("))")
        self.assertEqual(Shell._tmp_prompt, self.shell.prompt)
        self.assertIn("RuntimeError: Undefined identifier \"y\"", self.error_handler.stream.getvalue())
        self.assertIn("ParseError", self.error_handler.stream.getvalue())
        self.assertEqual(2, self.error_handler.errors)

        self.send("(println 1)")
        self.assertEqual("1\n", self.out.getvalue())

    def test_exit(self):
        self.assertEqual([False], self.send("exit now"))
        self.assertIn("warning: unrecognized argument to exit: 'now'", self.error_handler.stream.getvalue())

        self.assertEqual([True], self.send("exit"))
        self.assertEqual([True], self.send("EOF"))
        self.assertEqual("\n", self.out.getvalue())

    def test_command_like_names(self):
        self.send("(let [exit? 5]", "exit?)")
        self.assertEqual(Shell._tmp_prompt, self.shell.prompt)
        self.assertEqual("5\n", self.out.getvalue())

        self.send("(let [help-x 2]", "help-x)")
        self.assertEqual("5\n2\n", self.out.getvalue())

        self.send("(let [x 1]", "exit)")
        self.assertEqual(Shell._tmp_prompt, self.shell.prompt)
        self.assertIn("RuntimeError: Undefined identifier \"exit\"", self.error_handler.stream.getvalue())

        self.send("help-x")
        self.assertIn("RuntimeError: Undefined identifier \"help-x\"", self.error_handler.stream.getvalue())
        self.assertEqual("5\n2\n", self.out.getvalue())

    def test_emptyline(self):
        self.send("(+ 1 1)")
        self.send("")
        self.assertEqual("2\n", self.out.getvalue())


if __name__ == '__main__':
    unittest.main()
