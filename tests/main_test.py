import io
import os
import sys
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest import mock

from monkey.main import main


class MainTestCase(unittest.TestCase):

    def setUp(self):
        fd, self.path = tempfile.mkstemp(suffix=".mk")
        os.close(fd)

    def tearDown(self):
        os.remove(self.path)

    def write(self, source):
        with open(self.path, "w") as file:
            file.write(source)

    def run_main(self, source, *argv):
        """Writes source to the temp file and runs monkey on it. Returns what it printed."""
        self.write(source)

        stdout = io.StringIO()
        with redirect_stdout(stdout):
            main([self.path, *argv])
        return stdout.getvalue()

    def test_file(self):
        source = "let newAdder = fn(x) { fn(y) { x + y } };\nlet addTwo = newAdder(2);\naddTwo(3);\n"
        self.assertEqual("5\n", self.run_main(source))

    def test_file_with_puts(self):
        self.assertEqual("hello\n3\nnull\n", self.run_main("puts(\"hello\", len(\"abc\"))"))

    def test_modes(self):
        self.assertEqual("let a = 5;(a * 2)\n", self.run_main("let a = 5; a * 2", "--mode", "parse"))
        self.assertEqual("Type:INT, Literal:5\nType:EOF, Literal:\n", self.run_main("5", "--mode", "lex"))

    def test_runtime_error_exits(self):
        with redirect_stdout(io.StringIO()), self.assertRaises(SystemExit) as cm:
            self.run_main("let a = 1;\na / 0\n")

        self.assertEqual(1, cm.exception.code)

    def test_runtime_error_is_reported(self):
        self.write("foobar")

        stdout = io.StringIO()
        with redirect_stdout(stdout), self.assertRaises(SystemExit):
            main([self.path])

        self.assertIn("error:", stdout.getvalue())
        self.assertIn("identifier not found: foobar", stdout.getvalue())

    def test_parser_error_exits(self):
        self.write("let x 5;")

        stdout = io.StringIO()
        with redirect_stdout(stdout), self.assertRaises(SystemExit) as cm:
            main([self.path])

        self.assertEqual(1, cm.exception.code)
        self.assertIn("expected next token to be ASSIGN, got INT instead", stdout.getvalue())

    def test_missing_file(self):
        stdout = io.StringIO()
        with redirect_stdout(stdout), self.assertRaises(SystemExit) as cm:
            main([self.path + ".missing"])

        self.assertEqual(1, cm.exception.code)
        self.assertIn("could not be opened", stdout.getvalue())

    def test_bad_arguments(self):
        with redirect_stderr(io.StringIO()), self.assertRaises(SystemExit) as cm:
            main([self.path, "--mode", "compile"])
        self.assertEqual(2, cm.exception.code)

    def test_recursion_limit(self):
        limit = sys.getrecursionlimit()
        try:
            self.assertEqual("1\n", self.run_main("1", "--recursion-limit", "5000"))
            self.assertEqual(5000, sys.getrecursionlimit())
        finally:
            sys.setrecursionlimit(limit)

    def test_shell(self):
        stdout = io.StringIO()
        with mock.patch("sys.stdin", io.StringIO("let a = 3;\na + 1\n")), redirect_stdout(stdout):
            main([])

        output = stdout.getvalue()
        self.assertIn("Monkey interpreter :: Python backend", output)
        self.assertIn("3\n", output)
        self.assertIn("4\n", output)


if __name__ == '__main__':
    unittest.main()
