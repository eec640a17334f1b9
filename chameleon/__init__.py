"""chameleon: interpreter for a small parenthesized, Lisp-like expression language.

Basic program flow:
    1. Lexer: turns source text into Tokens (see chameleon/core/lexer.py)
        - characters that cannot start a token become UNIDENTIFIED tokens instead of raising
    2. Parser: builds the AST by recursive descent (see chameleon/core/parser.py for the grammar)
        - fails on the first syntax error, nothing is run
    3. Interpreter: walks the AST directly, resolving identifiers through let Scopes
        - not a compiler, so there is no bytecode or optimization step

chameleon/lang contains everything around the core: error reporting, sessions and the interactive shell.
"""

__version__ = "0.1.0"
