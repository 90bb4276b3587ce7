"""Handles interactive mode for the lox interpreter. Uses cmd as backend."""

import cmd

from lox.syntax.scanner import Scanner
from lox.syntax.token import TokenType


class Shell(cmd.Cmd):
    """Lox interpreter shell."""
    intro = "Lox interpreter :: Python backend\nType 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self.sess.error_handler.fatal = False

        self._tmp_line = ""

    @staticmethod
    def is_open(line):
        """Whether line opens more blocks than it closes, i.e. needs a continuation. Braces inside strings and
        comments do not count.
        """
        tokens, __ = Scanner(line).scan_tokens()
        kinds = [token.kind for token in tokens]
        return kinds.count(TokenType.LEFT_BRACE) > kinds.count(TokenType.RIGHT_BRACE)

    def default(self, line):
        """Executes arbitrary lox source."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            line = self._tmp_line + line + "\n"

            if Shell.is_open(line):
                self._tmp_line = line
                self.prompt = self.secondary_prompt
            else:
                self._tmp_line = ""
                self.prompt = self._tmp_prompt
                self.sess.run(line)

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        if arg:  # e.g. `help = 1` assigns a variable named help
            return self.default(self.lastcmd)
        print("Welcome to the lox interpreter!\n\n"
              "Type a statement or an expression and press enter. Expression values are echoed, \n"
              "semicolons are optional, and variables live until the shell exits.\n\n"
              "Try it out by typing 'var greeting = \"hello\"'. Next, try typing \n"
              "'greeting + \" world\"'. This will give 'hello world' as the result.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        if arg:
            return self.default(self.lastcmd)
        return True
