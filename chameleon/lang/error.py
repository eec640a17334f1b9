"""Error handling for the chameleon language. Only GenericExceptions should be encountered during running: if another
type of error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Two kinds of errors are visible to users:

```
ParseError    ; grammar violation, raised by the parser before anything runs
RuntimeError  ; type mismatch, division by zero or undefined identifier, raised during evaluation
```

Both carry the offending Token, so ErrorHandler can point at its line and column.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Any error raised by chameleon. token is the offending Token (if known), used to locate the error in source."""
    name = "error"

    def __init__(self, msg, token=None, internal=False):
        super().__init__(msg)
        self.msg = msg
        self.token = token
        self.internal = internal

    @property
    def line(self):
        return self.token.line if self.token is not None else None

    @property
    def column(self):
        return self.token.column if self.token is not None else None

    def __str__(self):
        if self.token is None:
            return f"{self.name}: {self.msg}"
        return f"{self.name} at {self.token.line}:{self.token.column}: {self.msg}"


class ParseError(GenericException):
    """Raised on the first grammar violation. Aborts the entire parse."""
    name = "ParseError"

    def __init__(self, token, msg):
        super().__init__(msg, token)


class EvaluationError(GenericException):
    """Raised during evaluation. Aborts evaluation of the current top-level expression."""
    name = "RuntimeError"

    def __init__(self, token, msg):
        super().__init__(msg, token)


class ErrorHandler:
    """Context manager that will silently suppress Python errors and report chameleon errors/warnings instead."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True, color=True, stream=None):
        self.fatal = fatal
        self.color = color
        self.stream = stream if stream is not None else sys.stderr

        self.path = None
        self.lines = []
        self.errors = 0  # number of errors reported so far

    def register_source(self, path, source):
        """Registers the source currently being run. Should be called prior to Session add/run."""
        self.path = path
        self.lines = source.splitlines()

    def _paint(self, text, color=None, bold=True):
        if not self.color:
            return text
        return colored(text, color, attrs=["bold"] if bold else None)

    def diagnose(self, error, warning=False):
        """Returns the offending source line with the error's token highlighted and underlined. Returns None if the
        line cannot be found.
        """
        if error.token is None or not 0 < error.token.line <= len(self.lines):
            return None

        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR
        line = self.lines[error.token.line - 1]
        start = min(error.token.column - 1, len(line))
        end = min(start + max(len(error.token.lexeme), 1), len(line))

        diagnosis = "  " + line[:start] + self._paint(line[start:end], color) + line[end:] + "\n"
        diagnosis += "  " + " " * start + self._paint("^" + "~" * (end - start - 1), color)
        return diagnosis

    def _location(self, error):
        path = self.path if self.path is not None else "<unknown>"
        if error.token is None:
            return f"{path}: "
        return f"{path}:{error.token.line}:{error.token.column}: "

    def warn(self, msg, token=None):
        """Generates and prints a warning message."""
        warning = GenericException(msg, token)

        warning_msg = self._paint(self._location(warning))
        warning_msg += self._paint("warning: ", ErrorHandler.WARNING) + warning.msg
        print(warning_msg, file=self.stream)

        diagnosis = self.diagnose(warning, warning=True)
        if diagnosis:
            print(diagnosis, file=self.stream)

    def throw(self, error):
        """Prints error, a GenericException, with its location and a diagnosis of the offending source. Exits with
        status 1 if this handler is fatal.
        """
        self.errors += 1

        error_msg = self._paint(self._location(error))
        if error.internal:
            error_msg += self._paint("[internal] ", ErrorHandler.ERROR)
        error_msg += self._paint(f"{error.name}: ", ErrorHandler.ERROR) + error.msg
        print(error_msg, file=self.stream)

        if not error.internal:
            diagnosis = self.diagnose(error)
            if diagnosis:
                print(diagnosis, file=self.stream)

        if self.fatal:
            sys.exit(1)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("maximum recursion depth exceeded: expression is nested too deeply"))
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
