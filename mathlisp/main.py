"""Runs the mathlisp interpreter, either on expressions given with -e or in command-line mode. Also uses the error
handling context manager. Called from the mathlisp console script.
"""

import argparse

from mathlisp.lang.error import ErrorHandler
from mathlisp.lang.session import Session
from mathlisp.lang.shell import Shell


def main(argv=None):
    """Runs mathlisp interpreter. Called from mathlisp console script."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="mathlisp", description="Simple math lisp interpreter.")
        parser.add_argument("-e", "--eval", dest="exprs", action="append", metavar="EXPR",
                            help="expression to evaluate and print (repeatable; if absent, goes to command-line mode)")
        parser.add_argument("-v", "--verbose", action="store_true", help="print tokens and syntax tree of each line")
        args = parser.parse_args(argv)

        error_handler.verbose = args.verbose

        if args.exprs:
            sess = Session(error_handler)
            for line_num, expr in enumerate(args.exprs, 1):
                print(repr(sess.eval_line(expr, line_num)))

        else:
            Shell(Session(error_handler, cmd_line=True)).cmdloop()


if __name__ == "__main__":
    main()
