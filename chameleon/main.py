"""Runs the chameleon interpreter on a source file, or in command-line mode if no file is given. Also uses the error
handling context manager. Called from the chameleon console script.
"""

import argparse
import sys

from chameleon.lang.error import ErrorHandler
from chameleon.lang.session import Session
from chameleon.lang.shell import Shell


def build_parser():
    parser = argparse.ArgumentParser(prog="chameleon", description="Interpreter for the chameleon language.")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("--keep-going", action="store_true",
                        help="report a runtime error and go on with the next top-level expression instead of halting")
    parser.add_argument("--tokens", action="store_true", help="print the tokens of the source before running it")
    parser.add_argument("--ast", action="store_true", help="print the syntax tree of the source before running it")
    parser.add_argument("--no-color", action="store_true", help="do not color error messages")
    return parser


def main(argv=None):
    """Runs chameleon interpreter. Called from chameleon console script."""
    assert sys.version_info >= (3, 7), "chameleon cannot be run with python < 3.7"

    with ErrorHandler() as error_handler:
        args = build_parser().parse_args(argv)

        error_handler.fatal = not args.keep_going
        error_handler.color = not args.no_color
        options = dict(keep_going=args.keep_going, show_tokens=args.tokens, show_ast=args.ast)

        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False, **options)
            sess.run()

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True, **options)).cmdloop()

    if args.file is not None and error_handler.errors:
        sys.exit(1)  # errors were reported without exiting (--keep-going)


if __name__ == "__main__":
    main()
