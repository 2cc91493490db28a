import io
import unittest
from contextlib import redirect_stdout

from mathlisp.lang.error import ErrorHandler
from mathlisp.lang.session import Session
from mathlisp.lang.shell import Shell


def run_shell(lines):
    """Feeds lines to a fresh Shell and returns everything it printed."""
    stdin = io.StringIO("".join(line + "\n" for line in lines))
    stdout = io.StringIO()

    shell = Shell(Session(ErrorHandler(), cmd_line=True), stdin=stdin, stdout=stdout)
    shell.use_rawinput = False

    with redirect_stdout(stdout):
        shell.cmdloop()
    return stdout.getvalue()


class ShellTestCase(unittest.TestCase):

    def test_prints_results(self):
        out = run_shell(["(+ 1 2)", "(- (+ (/ 100 5) (* 2 6)) 10)", "(foo 1 2)"])
        self.assertIn("Number(3)", out)
        self.assertIn("Number(22)", out)
        self.assertIn('List([Symbol("foo"), Number(1), Number(2)])', out)
        self.assertIn("lisp> ", out)

    def test_bad_line_does_not_stop_loop(self):
        out = run_shell(["(+ 1 2", "(/ 5 0)", ")", "(* 6 7)"])
        self.assertIn("Unbalanced parentheses: missing right paren.", out)
        self.assertIn("Division by zero", out)
        self.assertIn("Unexpected right paren found.", out)
        self.assertEqual(3, out.count("ERROR: "))
        self.assertIn("Number(42)", out)

    def test_huge_number_does_not_stop_loop(self):
        out = run_shell(["(+ 1 " + "9" * 5000 + ")", "(+ 1 2)"])
        self.assertIn("is out of range", out)
        self.assertNotIn("[internal]", out)
        self.assertIn("Number(3)", out)

    def test_symbol_lines(self):
        out = run_shell(["foo", "+"])
        self.assertIn('Symbol("foo")', out)
        self.assertIn('Symbol("+")', out)

    def test_empty_line_ignored(self):
        out = run_shell(["(+ 1 1)", "", "   "])
        self.assertEqual(1, out.count("Number(2)"))
        self.assertNotIn("ERROR", out)

    def test_exit(self):
        out = run_shell(["exit", "(+ 1 2)"])
        self.assertNotIn("Number(3)", out)

    def test_help(self):
        out = run_shell(["help"])
        self.assertIn("Welcome to the math lisp interpreter!", out)
        self.assertIn("are shell commands, not", out)

    def test_command_words_as_data(self):
        out = run_shell(["(help)", "(exit 1)"])
        self.assertIn('List([Symbol("help")])', out)
        self.assertIn('List([Symbol("exit"), Number(1)])', out)
        self.assertNotIn("Welcome", out)


if __name__ == '__main__':
    unittest.main()
