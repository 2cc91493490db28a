"""Simple math lisp interpreter.

Basic program flow, one line at a time:
    1. Lexer: produces a flat list of tokens from the line
        - For lexemes, see mathlisp/pure/lexical.py
    2. Parser: recursively assembles the tokens into a single expression tree
        - For grammar rules, see mathlisp/pure/grammar.py
    3. Evaluator: walks the tree and reduces it to a Number, or returns it unchanged if it isn't an arithmetic form
        - For operators, see mathlisp/pure/evaluator.py

Each stage raises its own GenericException subclass (see mathlisp/lang/error.py) at the first failure.

    >>> interpret("(- (+ (/ 100 5) (* 2 6)) 10)")
    Number(22)
"""

from mathlisp.pure.evaluator import evaluate
from mathlisp.pure.grammar import parse
from mathlisp.pure.lexical import tokenize


def interpret(text):
    """Runs text through the whole pipeline and returns the resulting expression."""
    return evaluate(parse(tokenize(text), text))
