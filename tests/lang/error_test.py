import io
import unittest

from lox.lang.error import (DivisionByZero, ErrorHandler, InternalError, InvalidEncoding, ParseError, SourceError,
                            UnexpectedCharacter, UnterminatedString, UndefinedVariable)
from lox.syntax.token import Token, TokenType


class LoxExceptionTestCase(unittest.TestCase):

    def test_display(self):
        semicolon = Token(TokenType.SEMICOLON, ";", None, 3)
        eof = Token(TokenType.EOF, "", None, 4)
        cases = {
            "[line 1] Error: Unterminated string.": UnterminatedString(1),
            "[line 2] Error: Unexpected character: @": UnexpectedCharacter(2, "@"),
            "[line 5] Error: Invalid UTF-8 sequence.": InvalidEncoding(5),
            "[line 3] Error at ';': Expect expression.": ParseError(semicolon, "Expect expression."),
            "[line 4] Error at end: Expect '}' after block.": ParseError(eof, "Expect '}' after block."),
            "[line 8] Error at 'EOF': Expect ';' after value.":
                ParseError(Token(TokenType.IDENTIFIER, "EOF", None, 8), "Expect ';' after value."),
            "Undefined variable 'y'.\n[line 6]": UndefinedVariable("y", 6),
            "Division by zero.\n[line 7]": DivisionByZero(7),
            "error: 'missing.lox' could not be opened": SourceError("missing.lox"),
            "[internal] unknown error: 'ValueError: boom'": InternalError(ValueError, "boom"),
        }
        for expected, case in cases.items():
            self.assertEqual(expected, case.display(), expected)
            self.assertEqual(expected, str(case), expected)

    def test_exit_codes(self):
        cases = {
            65: [UnterminatedString(1), UnexpectedCharacter(1, "#"), InvalidEncoding(1),
                 ParseError(Token(TokenType.EOF, "", None, 1), "Expect expression.")],
            66: [SourceError("x")],
            70: [UndefinedVariable("y", 1), DivisionByZero(1), InternalError(KeyError, "k")],
        }
        for code, errors in cases.items():
            for error in errors:
                self.assertEqual(code, error.exit_code, error)

    def test_msg(self):
        self.assertEqual("Undefined variable 'y'.", UndefinedVariable("y", 6).msg)


class ErrorHandlerTestCase(unittest.TestCase):

    def setUp(self):
        self.stream = io.StringIO()

    def test_report(self):
        handler = ErrorHandler(stream=self.stream)
        self.assertFalse(handler.color)

        handler.report(UnexpectedCharacter(1, "$"))
        handler.report(UnterminatedString(2))

        self.assertEqual("[line 1] Error: Unexpected character: $\n[line 2] Error: Unterminated string.\n",
                         self.stream.getvalue())
        self.assertEqual(65, handler.exit_code)

    def test_color(self):
        handler = ErrorHandler(stream=self.stream, color=True)
        handler.report(UndefinedVariable("y", 1))
        self.assertIn("\033[", self.stream.getvalue())
        self.assertIn("y", self.stream.getvalue())

    def test_fatal(self):
        with self.assertRaises(SystemExit) as context:
            with ErrorHandler(stream=self.stream):
                raise DivisionByZero(3)
        self.assertEqual(70, context.exception.code)
        self.assertEqual("Division by zero.\n[line 3]\n", self.stream.getvalue())

        with self.assertRaises(SystemExit) as context:
            with ErrorHandler(stream=self.stream):
                raise ParseError(Token(TokenType.EOF, "", None, 1), "Expect expression.")
        self.assertEqual(65, context.exception.code)

    def test_not_fatal(self):
        with ErrorHandler(fatal=False, stream=self.stream) as handler:
            raise UndefinedVariable("y", 1)
        self.assertEqual(70, handler.exit_code)
        self.assertEqual("Undefined variable 'y'.\n[line 1]\n", self.stream.getvalue())

    def test_internal(self):
        with self.assertRaises(SystemExit) as context:
            with ErrorHandler(stream=self.stream):
                raise KeyError("k")
        self.assertEqual(70, context.exception.code)
        self.assertTrue(self.stream.getvalue().startswith("[internal] unknown error: 'KeyError"))

    def test_recursion(self):
        with ErrorHandler(fatal=False, stream=self.stream) as handler:
            raise RecursionError("maximum recursion depth exceeded")
        self.assertEqual(70, handler.exit_code)
        self.assertEqual("Maximum recursion depth exceeded.\n", self.stream.getvalue())

    def test_system_exit_passes_through(self):
        with self.assertRaises(SystemExit) as context:
            with ErrorHandler(stream=self.stream):
                raise SystemExit(2)
        self.assertEqual(2, context.exception.code)
        self.assertEqual("", self.stream.getvalue())

    def test_keyboard_interrupt(self):
        with ErrorHandler(fatal=False, stream=self.stream):
            raise KeyboardInterrupt
        self.assertEqual("keyboard interrupt\n", self.stream.getvalue())

        with self.assertRaises(SystemExit) as context:
            with ErrorHandler(stream=self.stream):
                raise KeyboardInterrupt
        self.assertEqual(130, context.exception.code)


if __name__ == '__main__':
    unittest.main()
