import contextlib
import io
import os
import tempfile
import unittest

from lox.main import main


class MainTestCase(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = self._tmp.name
        self.out = io.StringIO()
        self.err = io.StringIO()

    def tearDown(self):
        self._tmp.cleanup()

    def write(self, source, name="test.lox"):
        path = os.path.join(self.tmp, name)
        with open(path, "wb") as file:
            file.write(source.encode("utf-8") if isinstance(source, str) else source)
        return path

    def lox(self, *argv):
        """Returns the exit code of `lox argv`."""
        with contextlib.redirect_stderr(self.err):
            try:
                return main(list(argv), out=self.out)
            except SystemExit as exit:
                return exit.code

    def test_tokenize(self):
        path = self.write("var x;")
        self.assertEqual(0, self.lox("tokenize", path))
        self.assertEqual("VAR var null\nIDENTIFIER x null\nSEMICOLON ; null\nEOF  null\n", self.out.getvalue())

    def test_tokenize_errors(self):
        path = self.write("@")
        self.assertEqual(65, self.lox("tokenize", path))
        self.assertEqual("EOF  null\n", self.out.getvalue())
        self.assertEqual("[line 1] Error: Unexpected character: @\n", self.err.getvalue())

    def test_parse(self):
        self.assertEqual(0, self.lox("parse", self.write("1 + 2")))
        self.assertEqual("(+ 1.0 2.0)\n", self.out.getvalue())

    def test_parse_error(self):
        self.assertEqual(65, self.lox("parse", self.write("(1 + 2")))
        self.assertEqual("[line 1] Error at end: Expect ')' after expression.\n", self.err.getvalue())

    def test_evaluate(self):
        self.assertEqual(0, self.lox("evaluate", self.write('"hello" + " world"')))
        self.assertEqual("hello world\n", self.out.getvalue())

    def test_run(self):
        path = self.write("var x = 1;\n{ var x = 2; print x; }\nprint x;\nx;")
        self.assertEqual(0, self.lox("run", path))
        self.assertEqual("2.0\n1.0\n", self.out.getvalue())

    def test_runtime_error(self):
        self.assertEqual(70, self.lox("run", self.write("print y;")))
        self.assertEqual("", self.out.getvalue())
        self.assertEqual("Undefined variable 'y'.\n[line 1]\n", self.err.getvalue())

        self.assertEqual(70, self.lox("evaluate", self.write("-true")))

    def test_missing_file(self):
        self.assertEqual(66, self.lox("run", os.path.join(self.tmp, "missing.lox")))
        self.assertIn("could not be opened", self.err.getvalue())

    def test_invalid_utf8(self):
        path = self.write(b'print "\xff";\nprint 1;')
        self.assertEqual(65, self.lox("run", path))
        self.assertEqual("", self.out.getvalue())
        self.assertEqual("[line 1] Error: Invalid UTF-8 sequence.\n", self.err.getvalue())

    def test_usage(self):
        with contextlib.redirect_stderr(io.StringIO()):
            self.assertEqual(2, self.lox("compile", self.write("")))
            self.assertEqual(2, self.lox("run"))
            self.assertEqual(2, self.lox())


if __name__ == '__main__':
    unittest.main()
