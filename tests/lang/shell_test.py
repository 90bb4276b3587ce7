import io
import unittest

from lox.lang.error import ErrorHandler
from lox.lang.session import Session
from lox.lang.shell import Shell


class ShellTestCase(unittest.TestCase):

    def setUp(self):
        self.out = io.StringIO()
        self.err = io.StringIO()
        self.shell = Shell(Session(ErrorHandler(stream=self.err), "evaluate", out=self.out))

    def enter(self, *lines):
        for line in lines:
            self.shell.onecmd(line)
        return self.out.getvalue().splitlines()

    def test_echo(self):
        self.assertEqual(["3.0", "hi"], self.enter("1 + 2", 'print "hi"'))

    def test_globals_persist(self):
        self.assertEqual(["2.0", "2.0"], self.enter("var x = 1", "x = x + 1;", "print x"))

    def test_continuation(self):
        self.enter("{")
        self.assertEqual(Shell.secondary_prompt, self.shell.prompt)

        self.assertEqual([], self.enter("var a = 1", "print a"))
        self.assertEqual(["1.0"], self.enter("}"))
        self.assertEqual(Shell.prompt, self.shell.prompt)

    def test_errors_are_not_fatal(self):
        self.assertEqual([], self.enter("print missing"))
        self.assertEqual("Undefined variable 'missing'.\n[line 1]\n", self.err.getvalue())

        self.assertEqual([], self.enter("1 = 2"))
        self.assertIn("Invalid assignment target.", self.err.getvalue())

        self.assertEqual(["ok"], self.enter('"ok"'))

    def test_braces_in_strings_and_comments(self):
        self.assertEqual(["{"], self.enter('print "{"'))
        self.assertEqual(Shell.prompt, self.shell.prompt)

        self.assertEqual(["{", "1.0"], self.enter("1 // {"))
        self.assertEqual(Shell.prompt, self.shell.prompt)

        self.assertEqual(["{", "1.0", "}"], self.enter('{ print "}"; // }', "}"))
        self.assertEqual("", self.err.getvalue())

    def test_command_names_as_variables(self):
        self.assertFalse(self.shell.onecmd("var exit = 1"))
        self.assertFalse(self.shell.onecmd("exit = 2"))
        self.assertFalse(self.shell.onecmd("var help = 3"))
        self.assertFalse(self.shell.onecmd("help = help + exit"))
        self.assertEqual(["2.0", "5.0", "7.0"], self.enter("print exit + help"))
        self.assertEqual("", self.err.getvalue())

    def test_exit(self):
        self.assertTrue(self.shell.onecmd("exit"))
        self.assertFalse(self.shell.emptyline())


if __name__ == '__main__':
    unittest.main()
