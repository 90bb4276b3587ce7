"""Session control for lox. A Session drives the pipeline (scan -> parse -> interpret) for one CLI command, either over
a whole file or line by line from the shell, and routes every error through the session's ErrorHandler.
"""

from lox.lang.error import ParseError, SourceError
from lox.runtime.interpreter import Interpreter
from lox.syntax.parser import Parser
from lox.syntax.printer import AstPrinter
from lox.syntax.scanner import Scanner


class Session:
    """Governs a lox session: which stages run, whether semicolons are required, and whether expression values are
    echoed. Global variables live as long as the session does.
    """
    COMMANDS = ("tokenize", "parse", "evaluate", "run")

    def __init__(self, error_handler, command="run", out=None):
        if command not in Session.COMMANDS:
            raise ValueError(f"unknown command '{command}'")

        self.error_handler = error_handler
        self.command = command
        self.out = out  # program output stream (sys.stdout if None)

        self.interpreter = Interpreter(echo=command == "evaluate", out=out)

    @property
    def require_semicolons(self):
        return self.command == "run"

    @staticmethod
    def read(path):
        """Returns the raw bytes of path. Decoding is left to the scanner."""
        try:
            with open(path, "rb") as file:
                return file.read()
        except OSError:
            raise SourceError(path)

    def execute(self, source):
        """Runs self.command over source (bytes or str)."""
        if self.command == "tokenize":
            self.tokenize(source)
        elif self.command == "parse":
            for statement in self.parse(source) or []:
                self._write(AstPrinter().print(statement))
        else:
            self.run(source)

    def scan(self, source):
        """Returns the tokens of source, reporting every scanner error. Scanning itself never stops on errors."""
        tokens, errors = Scanner(source).scan_tokens()
        for error in errors:
            self.error_handler.report(error)
        return tokens, errors

    def tokenize(self, source):
        tokens, __ = self.scan(source)
        for token in tokens:
            self._write(str(token))

    def parse(self, source):
        """Returns the statements of source, or None if source has scanner errors. Every parse error is reported and
        the last one is raised, so a partially parsed program is never run.
        """
        tokens, errors = self.scan(source)
        if errors:
            return None

        parser = Parser(tokens, self.require_semicolons)
        try:
            return parser.parse()
        except ParseError:
            *reported, last = parser.errors
            for error in reported:
                self.error_handler.report(error)
            raise last from None

    def run(self, source):
        statements = self.parse(source)
        if statements is not None:
            self.interpreter.interpret(statements)

    def _write(self, text):
        print(text, file=self.out)
