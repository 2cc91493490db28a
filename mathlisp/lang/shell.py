"""Handles interactive/command-line mode for mathlisp interpreter. Uses cmd as backend.

cmd.Cmd dispatches a line whose first word names a command before anything else sees it, so the bare symbols `help`,
`exit` and `EOF` (and a line starting with `?`) run shell commands instead of being evaluated. Wrap them in a form,
e.g. `(help)`, to get them back as data.
"""

import cmd


class Shell(cmd.Cmd):
    """Math lisp interpreter shell."""
    intro = "Math lisp interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = "lisp> "

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self.line_num = 0

    def default(self, line):
        """Evaluates arbitrary mathlisp expression and prints the result."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            print(repr(self.sess.eval_line(line, self.line_num)))

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the math lisp interpreter!\n\n"
              "Expressions are numbers, symbols, or parenthesized forms. A form headed by one of\n"
              "the operators +, -, * or / is reduced to a number; any other form is returned as is.\n\n"
              "Try it out by typing '(+ 1 2)', which gives 'Number(3)', or\n"
              "'(- (+ (/ 100 5) (* 2 6)) 10)', which gives 'Number(22)'. Numbers are 64-bit\n"
              "integers and division truncates toward zero.\n\n"
              "The words 'help', 'exit' and 'EOF' and a leading '?' are shell commands, not\n"
              "expressions. Type 'exit' or Ctrl-D to quit.")

    def emptyline(self):
        """Blank lines are skipped: no evaluation, and cmd's repeat-last-command is disabled."""

    def do_EOF(self, arg):
        """Ctrl-D: leaves the shell on a fresh line."""
        print()
        return True

    def do_exit(self, arg):
        """Leaves the shell. Returning True stops cmdloop."""
        return True
