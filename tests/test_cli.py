"""
Tests for the ``yali`` command line.

Author: xwest
"""

import io
import os
import sys
import tempfile
import unittest
from contextlib import redirect_stdout

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from yali import cli


class TestRunFile(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def _write(self, name: str, text: str) -> str:
        path = os.path.join(self.tmp.name, name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
        return path

    def test_clean_file(self):
        path = self._write("ok.yali", "var answer = 42;\n")
        out, err = io.StringIO(), io.StringIO()

        status = cli.run_file(path, out, err)

        self.assertEqual(status, 0)
        lines = out.getvalue().splitlines()
        self.assertEqual(len(lines), 6)
        self.assertTrue(lines[0].startswith("VAR"))
        self.assertIn("42.0", lines[3])
        self.assertTrue(lines[-1].startswith("EOF"))
        self.assertEqual(err.getvalue(), "")

    def test_file_with_errors(self):
        path = self._write("bad.yali", 'print 1;\n@\n"open')
        out, err = io.StringIO(), io.StringIO()

        status = cli.run_file(path, out, err)

        self.assertEqual(status, cli.EX_DATAERR)
        self.assertEqual(err.getvalue().splitlines(), [
            "[line 2] Error: Unexpected character: '@'",
            "[line 3] Error: Unterminated string.",
        ])
        # Valid tokens are still printed
        self.assertTrue(out.getvalue().startswith("PRINT"))

    def test_missing_file(self):
        out, err = io.StringIO(), io.StringIO()
        status = cli.run_file(os.path.join(self.tmp.name, "nope.yali"), out, err)
        self.assertEqual(status, cli.EX_NOINPUT)
        self.assertIn("cannot read", err.getvalue())

    def test_file_not_utf8(self):
        path = os.path.join(self.tmp.name, "latin1.yali")
        with open(path, "wb") as f:
            f.write(b'print "\xff\xfe";\n')
        out, err = io.StringIO(), io.StringIO()

        status = cli.run_file(path, out, err)

        self.assertEqual(status, cli.EX_DATAERR)
        self.assertIn("cannot decode", err.getvalue())
        self.assertEqual(out.getvalue(), "")


class TestPrompt(unittest.TestCase):

    def test_each_line_is_scanned(self):
        stdin = io.StringIO("1 + 2\n#\nnil\n")
        out, err = io.StringIO(), io.StringIO()

        status = cli.run_prompt(stdin, out, err)

        self.assertEqual(status, 0)
        self.assertIn("PLUS", out.getvalue())
        self.assertIn("NIL", out.getvalue())
        self.assertEqual(err.getvalue().strip(), "[line 1] Error: Unexpected character: '#'")

    def test_line_terminator_is_not_scanned(self):
        stdin = io.StringIO("nil\n1\r\n")
        out, err = io.StringIO(), io.StringIO()

        cli.run_prompt(stdin, out, err)

        eof_lines = [line for line in out.getvalue().splitlines() if "EOF" in line]
        self.assertEqual(len(eof_lines), 2)
        for line in eof_lines:
            self.assertTrue(line.endswith("(line 1)"), line)
        self.assertEqual(err.getvalue(), "")


class TestMain(unittest.TestCase):

    def test_too_many_arguments(self):
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            status = cli.main(["a.yali", "b.yali"])
        self.assertEqual(status, cli.EX_USAGE)
        self.assertEqual(buffer.getvalue().strip(), "Usage: yali [script]")

    def test_runs_script(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "s.yali")
            with open(path, "w", encoding="utf-8") as f:
                f.write("fun f() {}")
            buffer = io.StringIO()
            with redirect_stdout(buffer):
                status = cli.main([path])
        self.assertEqual(status, 0)
        self.assertIn("FUN", buffer.getvalue())


if __name__ == "__main__":
    unittest.main()
