"""Session control for chameleon. Runs the lexer, parser and interpreter over a source file or over lines typed in
command-line mode.
"""

from chameleon.core.expr import Print
from chameleon.core.interpreter import Interpreter
from chameleon.core.lexer import BLOCK_COMMENT, tokenize
from chameleon.core.parser import Parser
from chameleon.core.token import TokenKind
from chameleon.core.values import stringify
from chameleon.lang.error import EvaluationError, GenericException


OPENERS = (TokenKind.LPAREN, TokenKind.LBRACKET)
CLOSERS = (TokenKind.RPAREN, TokenKind.RBRACKET)


class Session:
    """Governs a chameleon session. All expressions run in a session share its Interpreter and global Scope."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path, cmd_line=False, keep_going=False, out=None, show_tokens=False,
                 show_ast=False):
        self.error_handler = error_handler
        self.error_handler.register_source(path, "")

        self.path = path              # used for error messages
        self.cmd_line = cmd_line      # whether or not in command-line mode
        self.keep_going = keep_going  # whether or not a RuntimeError spares the remaining top-level expressions
        self.show_tokens = show_tokens
        self.show_ast = show_ast

        self.interpreter = Interpreter(out)
        self.to_exec = []  # parsed top-level expressions waiting to be run
        self.results = []  # values of expressions run in command-line mode

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    source = file.read()
            except OSError:
                raise GenericException(f"'{path}' could not be opened")

            self.add(source)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

    @property
    def out(self):
        return self.interpreter.out

    @staticmethod
    def needs_continuation(source):
        """Whether or not source ends inside an unclosed "(", "[" or block comment, in which case command-line mode
        keeps reading lines before running it.
        """
        depth = 0
        for token in tokenize(source):
            if token.kind in OPENERS:
                depth += 1
            elif token.kind in CLOSERS:
                depth -= 1
            elif token.kind is TokenKind.UNIDENTIFIED and token.lexeme == BLOCK_COMMENT:
                return True
        return depth > 0

    def add(self, source):
        """Lexes and parses source, queueing its top-level expressions. Nothing is queued if source does not parse.
        Must be called before calling run.
        """
        self.error_handler.register_source(self.path, source)  # in case an error is raised

        tokens = tokenize(source)
        if self.show_tokens:
            for token in tokens:
                self.out.write(f"{token!r}\n")

        program = Parser(tokens).parse()
        if self.show_ast:
            for expr in program:
                self.out.write(expr.display() + "\n")

        self.to_exec.extend(program)

    def run(self):
        """Runs the queued top-level expressions in order. A RuntimeError stops the run and is raised, unless
        keep_going is set: then it is reported and the next expression runs. In command-line mode nothing stays queued
        after run, however it exits.
        """
        try:
            while self.to_exec:
                expr = self.to_exec.pop(0)

                try:
                    value = self.interpreter.evaluate(expr, self.interpreter.globals)
                except EvaluationError as error:
                    if not self.keep_going:
                        self.to_exec.clear()
                        raise
                    self.error_handler.throw(error)
                    continue

                if self.cmd_line and value is not None and not isinstance(expr, Print):
                    self.results.append(value)
        finally:
            if self.cmd_line:
                self.to_exec.clear()

    def pop(self):
        """Removes and returns the display string of the oldest result."""
        return stringify(self.results.pop(0))
