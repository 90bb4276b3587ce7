"""Error handling for the lox interpreter. Every stage of the pipeline raises its own family of LoxException: scanner
errors are collected and reported without stopping the scan, while parser and runtime errors abort their stage. If
another type of error makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Exit codes follow sysexits.h: 65 (EX_DATAERR) for scanner/parser failures, 66 (EX_NOINPUT) for unreadable sources and
70 (EX_SOFTWARE) for runtime failures.
"""

import os
import sys

from termcolor import colored

from lox.syntax.token import TokenType


class LoxException(Exception):
    """Templates an error message so that it can be thrown by ErrorHandler. template is filled with exprs, the
    offending snippets of source (highlighted when displayed).
    """
    template = "{}"
    exit_code = 1

    def __init__(self, line, *exprs):
        self.line = line
        self.exprs = exprs
        super().__init__(self.display())

    @property
    def msg(self):
        """Plain message, without line information."""
        return self.format_msg()

    def format_msg(self, highlight=str):
        return self.template.format(*(highlight(expr) for expr in self.exprs))

    def display(self, highlight=str):
        """Returns the full error text as shown to the user. highlight is applied to each expr."""
        return self.format_msg(highlight)


class SourceError(LoxException):
    """Source file could not be read."""
    template = "'{}' could not be opened"
    exit_code = 66

    def __init__(self, path):
        self.path = path
        super().__init__(None, path)

    def display(self, highlight=str):
        return "error: " + self.format_msg(highlight)


class InternalError(LoxException):
    """Wraps any non-lox exception that escaped the pipeline."""
    template = "unknown error: '{}'"
    exit_code = 70

    def __init__(self, exc_type, exc_val):
        super().__init__(None, f"{exc_type.__name__}: {exc_val}")

    def display(self, highlight=str):
        return "[internal] " + self.format_msg(highlight)


# ---------------------------------------------------------------------------------------------------------------------
# scanner errors


class ScanError(LoxException):
    """Superclass of errors found while scanning. These never abort the scan."""
    exit_code = 65

    def display(self, highlight=str):
        return f"[line {self.line}] Error: {self.format_msg(highlight)}"


class UnterminatedString(ScanError):
    template = "Unterminated string."


class UnexpectedCharacter(ScanError):
    template = "Unexpected character: {}"

    def __init__(self, line, char):
        self.char = char
        super().__init__(line, char)


class InvalidEncoding(ScanError):
    template = "Invalid UTF-8 sequence."


# ---------------------------------------------------------------------------------------------------------------------
# parser errors


class ParseError(LoxException):
    """Raised by the parser at the first token that does not fit the grammar."""
    template = "{}"
    exit_code = 65

    def __init__(self, token, message):
        self.token = token
        self.message = message
        super().__init__(token.line, message)

    @property
    def where(self):
        if self.token.kind is TokenType.EOF:
            return " at end"
        return f" at '{self.token.lexeme}'"

    def display(self, highlight=str):
        return f"[line {self.line}] Error{self.where}: {self.format_msg(highlight)}"


# ---------------------------------------------------------------------------------------------------------------------
# runtime errors


class LoxRuntimeError(LoxException):
    """Superclass of errors raised while interpreting. The interpreter stops at the first one."""
    exit_code = 70

    def display(self, highlight=str):
        return f"{self.format_msg(highlight)}\n[line {self.line}]"


class InvalidUnaryOperand(LoxRuntimeError):
    template = "Operand must be a number."


class InvalidBinaryOperands(LoxRuntimeError):
    template = "Operands must be numbers."

    def __init__(self, line, operator=None):
        self.operator = operator
        if operator == "+":
            self.template = "Operands must be two numbers or two strings."
        super().__init__(line)


class UndefinedVariable(LoxRuntimeError):
    template = "Undefined variable '{}'."

    def __init__(self, name, line):
        self.name = name
        super().__init__(line, name)


class DivisionByZero(LoxRuntimeError):
    template = "Division by zero."


class RecursionDepthExceeded(LoxRuntimeError):
    """Program nesting exceeded the Python stack."""
    template = "Maximum recursion depth exceeded."

    def display(self, highlight=str):
        return self.format_msg(highlight)


class ErrorHandler:
    """Context manager that will report lox errors on stream and convert stray Python errors to internal errors."""
    ERROR = "red"

    def __init__(self, fatal=True, stream=None, color=None):
        self.fatal = fatal
        self.stream = stream
        self.color = color if color is not None else self.can_color(self.stream or sys.stderr)
        self.exit_code = 0

    @staticmethod
    def can_color(stream):
        """Color only interactive streams, and honor the NO_COLOR convention."""
        if "NO_COLOR" in os.environ:
            return False
        isatty = getattr(stream, "isatty", None)
        return bool(isatty and isatty())

    def highlight(self, text, color=ERROR, attrs=("bold",)):
        if not self.color:
            return text
        return colored(text, color, attrs=list(attrs), force_color=True)

    def _write(self, text):
        print(text, file=self.stream if self.stream is not None else sys.stderr)

    def report(self, error):
        """Prints error without stopping anything. Used for errors that do not abort a stage."""
        self._write(error.display(self.highlight))

        self.exit_code = max(self.exit_code, error.exit_code)

    def throw(self, error):
        """Reports error, then exits with its stage's exit code if this handler is fatal."""
        self.report(error)
        if self.fatal:
            sys.exit(error.exit_code)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is None:
            return False
        elif issubclass(exc_type, KeyboardInterrupt):
            self._write(self.highlight("keyboard interrupt", ErrorHandler.ERROR))
            if self.fatal:
                sys.exit(130)
        elif issubclass(exc_type, SystemExit):
            do_exit = True
        elif issubclass(exc_type, RecursionError):
            self.throw(RecursionDepthExceeded(None))
        elif issubclass(exc_type, LoxException):
            self.throw(exc_val)
        else:
            self.throw(InternalError(exc_type, exc_val))

        return not do_exit
