"""Session control for mathlisp. Drives each input line through the lexer, parser and evaluator, reporting warnings and
pipeline steps through the session's ErrorHandler.
"""

from mathlisp.pure.evaluator import evaluate
from mathlisp.pure.grammar import parse
from mathlisp.pure.lexical import Tokenizer


class Session:
    """Governs a mathlisp session. Lines are parsed on add and evaluated lazily on run; results queue up until popped."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path=SH_FILE, cmd_line=False):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode

        self.to_exec = {}  # dict of line num: parsed expressions to evaluate
        self.results = []  # evaluated expressions, oldest first

        if self.cmd_line:
            self.error_handler.fatal = False

    @staticmethod
    def preprocess_line(line):
        """Removes surrounding whitespace from a line. Must be called before calling add."""
        return line.strip()

    def add(self, line, line_num):
        """Tokenizes and parses line, queueing the expression for run. Raises LexicalError/ParseError."""
        self.error_handler.register_line(self.path, line, line_num)  # in case error is raised

        tokenizer = Tokenizer(line)
        for offset, char in tokenizer.skipped:
            self.error_handler.warn(f"skipped unrecognized character '{char}'", line, start=offset, end=offset + 1)
        self.error_handler.register_step("tokens", tokenizer.tokens)

        expr = parse(tokenizer.tokens, line)
        self.error_handler.register_step("ast", "\n" + expr.display())

        self.to_exec[line_num] = expr
        self.error_handler.remove_line(self.path)  # error was not raised

    def run(self):
        """Evaluates this session's queued expressions in line order. Will raise any errors that are encountered; the
        failing expression is dropped from the queue either way.
        """
        for line_num, expr in list(self.to_exec.items()):
            self.error_handler.register_line(self.path, str(expr), line_num)

            try:
                result = evaluate(expr)
            finally:
                del self.to_exec[line_num]

            self.error_handler.register_step("result", repr(result))
            self.results.append(result)
            self.error_handler.remove_line(self.path)

    def pop(self):
        """Removes and returns the most recent result."""
        return self.results.pop()

    def eval_line(self, line, line_num):
        """add, run and pop in one go. Returns the result of line."""
        self.add(self.preprocess_line(line), line_num)
        self.run()
        return self.pop()
