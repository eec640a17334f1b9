"""Handles interactive/command-line mode for the chameleon interpreter. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """chameleon interpreter shell."""
    intro = "chameleon interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations
    commands = ("exit", "help", "?")

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self._tmp_line = ""

    def onecmd(self, line):
        """Only a bare command word outside of a line continuation is a shell command. Anything else, e.g. 'exit?'
        or 'help-x', is chameleon code.
        """
        if line == "EOF":
            return super().onecmd(line)

        words = line.split(None, 1)
        if self._tmp_line or (words and words[0] not in Shell.commands):
            return self.default(line)
        return super().onecmd(line)

    def default(self, line):
        """Executes arbitrary chameleon code."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            source = self._tmp_line + line + "\n"

            if self.sess.needs_continuation(source):
                self._tmp_line = source
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt

            self.sess.add(source)
            self.sess.run()

            while self.sess.results:
                print(self.sess.pop())

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the chameleon interpreter!\n\n"
              "chameleon is a small parenthesized expression language. Every operator is written \n"
              "before its operands, which may be numbers, true, false, null or names bound by let.\n\n"
              "Try it out by typing '(println (+ 1 2 3))'. Next, try typing \n"
              "'(let [x 2 y (* x 10)] (println y))'. Unclosed parentheses continue on the next line.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit("")

    def do_exit(self, arg):
        """Exits interpreter."""
        if arg:
            self.sess.error_handler.warn(f"unrecognized argument to exit: '{arg}'")
            return False
        return True
