import io
import unittest
from contextlib import redirect_stdout

from mathlisp.lang.error import ErrorHandler, EvaluationError, ParseError
from mathlisp.lang.session import Session
from mathlisp.pure.grammar import List, Number, Symbol


class SessionTestCase(unittest.TestCase):

    def setUp(self):
        self.sess = Session(ErrorHandler(fatal=False), cmd_line=True)

    def test_cmd_line_not_fatal(self):
        self.assertFalse(self.sess.error_handler.fatal)
        self.assertTrue(Session(ErrorHandler()).error_handler.fatal)

    def test_add_run_pop(self):
        self.sess.add("(+ 1 2)", 1)
        self.sess.add("(foo 1 2)", 2)
        self.assertEqual([1, 2], list(self.sess.to_exec))
        self.assertEqual([], self.sess.results)

        self.sess.run()
        self.assertEqual({}, self.sess.to_exec)
        self.assertEqual(List([Symbol("foo"), Number(1), Number(2)]), self.sess.pop())
        self.assertEqual(Number(3), self.sess.pop())

    def test_eval_line(self):
        cases = {
            "(- (+ (/ 100 5) (* 2 6)) 10)": Number(22),
            "  (- 5)  \n": Number(-5),
            "(/ 7 2)": Number(3),
            "7": Number(7),
        }
        for line_num, (case, expected) in enumerate(cases.items(), 1):
            self.assertEqual(expected, self.sess.eval_line(case, line_num), case)

    def test_errors_propagate(self):
        self.assertRaises(ParseError, self.sess.eval_line, "(+ 1 2", 1)
        self.assertEqual({}, self.sess.to_exec)

        self.assertRaises(EvaluationError, self.sess.eval_line, "(/ 5 0)", 2)
        self.assertEqual({}, self.sess.to_exec)  # failing expression is dropped
        self.assertEqual(Number(1), self.sess.eval_line("(+ 1)", 3))

    def test_skipped_characters_warn(self):
        out = io.StringIO()
        with redirect_stdout(out):
            result = self.sess.eval_line("(+ 1 $ 2)", 4)

        self.assertEqual(Number(3), result)
        self.assertIn("<in>:4: ", out.getvalue())
        self.assertIn("skipped unrecognized character '$'", out.getvalue())

    def test_verbose_steps(self):
        self.sess.error_handler.verbose = True

        out = io.StringIO()
        with redirect_stdout(out):
            self.sess.eval_line("(* 2 3)", 1)

        for label in ["[tokens] ", "[ast] ", "[result] "]:
            self.assertIn(label, out.getvalue())
        self.assertIn("Number(6)", out.getvalue())

    def test_handler_recovers(self):
        out = io.StringIO()
        with redirect_stdout(out):
            with self.sess.error_handler:
                self.sess.eval_line("(+ 1 foo)", 1)
            result = self.sess.eval_line("(+ 1 2)", 2)

        self.assertIn("ERROR: ", out.getvalue())
        self.assertIn("Invalid + operation", out.getvalue())
        self.assertEqual(Number(3), result)


if __name__ == '__main__':
    unittest.main()
