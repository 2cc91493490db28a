"""Error handling for mathlisp. Only GenericExceptions should be encountered during running: if another type of error
is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Errors fall into three stages, one per pipeline component: LexicalError, ParseError and EvaluationError. Each one is
raised at the first failure and propagates unchanged up to the ErrorHandler of the line being run.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error/warning message so that it can be used to throw a mathlisp error/warning."""

    def __init__(self, msg, expr="", start=0, end=-1, diagnosis=True, internal=False):
        super().__init__(msg)

        self.msg = msg
        self.expr = expr  # offending source text
        self.start = start
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.diagnosis = diagnosis
        self.internal = internal

    def __str__(self):
        return self.msg


class LexicalError(GenericException):
    """Raised by the lexer. Only out-of-range number literals are lexical errors."""


class ParseError(GenericException):
    """Raised by the parser on a malformed token stream."""


class EvaluationError(GenericException):
    """Raised by the evaluator on a bad operand count or type, division by zero or overflow."""

    def __init__(self, msg, **kwargs):
        kwargs.setdefault("diagnosis", False)  # AST nodes don't carry source offsets
        super().__init__(msg, **kwargs)


class ErrorHandler:
    """Context manager that will silently suppress Python errors and print mathlisp errors/warnings."""
    ERROR = "red"
    WARNING = "magenta"
    STEP = "cyan"

    def __init__(self, fatal=True, verbose=False):
        self.fatal = fatal
        self.verbose = verbose
        self.traceback = {}
        self._internal = None  # last internal error thrown, re-raised untouched by outer handlers

    def register_file(self, path):
        """Adds path to traceback with no current line. A path already registered keeps its line."""
        self.traceback.setdefault(path, (None, None))

    def register_line(self, path, line, line_num):
        """Marks line (number line_num of path) as the one being run, so warnings can point at it."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Clears the current line of path once it has run without error."""
        self.traceback[path] = (None, None)

    def register_step(self, label, text):
        """Prints one pipeline stage of the current line. Silent unless verbose."""
        if self.verbose:
            print(colored(f"[{label}] ", ErrorHandler.STEP, attrs=["bold"]) + str(text))

    @staticmethod
    def diagnose(error, warning=False):
        """Returns offending part of error.expr highlighted and bolded, underlined with a caret."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        diagnosis = "  " + error.expr[:error.start]

        end = max(error.end, error.start + 1)
        diagnosis += colored(error.expr[error.start:end], color, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += colored("^" + "~" * (end - error.start - 1), color, attrs=["bold"])

        return diagnosis

    def _location(self):
        """Returns 'file:line:' prefix of the registered line, if any."""
        for file, (line, line_num) in self.traceback.items():
            if line is not None:
                return f"{file}:{line_num}: "
        return ""

    def warn(self, *args, **kwargs):
        """Generates and prints warning message based on args, which are passed on to GenericException."""
        error = GenericException(*args, **kwargs)

        warning_msg = colored(self._location(), attrs=["bold"])
        warning_msg += colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.msg
        print(warning_msg)

        if error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error, warning=True))

    def throw(self, error):
        """Prints error as 'ERROR: <msg>' plus a diagnosis. error must be a GenericException. Exits if self.fatal."""
        error_msg = ""
        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("ERROR: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error))

        if self.fatal:
            sys.exit(1)
        self.traceback = {path: (None, None) for path in self.traceback}  # reset lines, keep registered files

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("expression nested too deeply, maximum recursion depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_val is not None and exc_val is self._internal:
            do_exit = True  # already reported by a nested use of this handler
        elif exc_type is not None:
            self._internal = exc_val
            self.throw(GenericException(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
