"""mathlisp abstract syntax tree and recursive-descent parser.

Formally, mathlisp grammar can be succinctly defined as

```
<expr> ::= <number>                 ; Number
         | <symbol>                 ; Symbol
         | "(" <expr>* ")"          ; List, conventionally headed by an operator symbol
```

See pure/lexical.py for the lexemes. Parsing is single-pass with one token of lookahead and no backtracking; the first
error found aborts the whole parse.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from mathlisp.lang.error import ParseError
from mathlisp.pure.lexical import TokenType


class LispExpr(ABC):
    """Superclass of all AST nodes. Nodes are immutable and compare structurally."""

    @abstractmethod
    def display(self, indents=0):
        """Recursively displays the tree with readable format.

        Format:
        List([
            Symbol("+"),
            Number(1)
        ])
        """

    @property
    def is_atom(self):
        return True


@dataclass(frozen=True, repr=False)
class Number(LispExpr):
    value: int

    def display(self, indents=0):
        return "    " * indents + repr(self)

    def __repr__(self):
        return f"Number({self.value})"

    def __str__(self):
        return str(self.value)


@dataclass(frozen=True, repr=False)
class Symbol(LispExpr):
    name: str

    def display(self, indents=0):
        return "    " * indents + repr(self)

    def __repr__(self):
        return f'Symbol("{self.name}")'

    def __str__(self):
        return self.name


@dataclass(frozen=True, repr=False)
class List(LispExpr):
    """Parenthesized form. items is always stored as a tuple, whatever iterable it was built from."""
    items: tuple = ()

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))

    @property
    def is_atom(self):
        return False

    @property
    def head(self):
        """First item, or None for the empty list."""
        return self.items[0] if self.items else None

    @property
    def operands(self):
        return self.items[1:]

    def display(self, indents=0):
        if not self.items:
            return "    " * indents + "List([])"

        result = "    " * indents + "List(["
        result += ",".join("\n" + item.display(indents + 1) for item in self.items)
        return result + "\n" + "    " * indents + "])"

    def __repr__(self):
        return f"List([{', '.join(repr(item) for item in self.items)}])"

    def __str__(self):
        return f"({' '.join(str(item) for item in self.items)})"

    def __len__(self):
        return len(self.items)


class Parser:
    """Recursive-descent parser over a token list. Each call to parse consumes exactly one expression."""

    def __init__(self, tokens, source=""):
        """source is the line tokens were read from, used for error diagnoses."""
        self.tokens = list(tokens)
        self.source = source
        self.pos = 0

    @property
    def exhausted(self):
        return self.pos >= len(self.tokens)

    def peek(self):
        """Returns the next unconsumed token, or None."""
        return None if self.exhausted else self.tokens[self.pos]

    def next(self):
        """Consumes and returns the next token, or None."""
        token = self.peek()
        if token is not None:
            self.pos += 1
        return token

    def error(self, msg, token=None):
        """Returns ParseError with msg, pointing at token (or the end of source if token is None)."""
        if token is None:
            start = end = len(self.source.rstrip())
        else:
            start, end = token.start, token.end
        return ParseError(msg, self.source, start, end, diagnosis=bool(self.source))

    def parse(self):
        """Parses one expression from the front of the remaining tokens."""
        token = self.next()

        if token is None:
            raise self.error("Invalid expression")
        elif token.type is TokenType.LEFT_PAREN:
            return self.parse_form(token)
        elif token.type is TokenType.RIGHT_PAREN:
            raise self.error("Unexpected right paren found.", token)
        elif token.type is TokenType.NUMBER:
            return Number(token.value)
        return Symbol(token.value)

    def parse_form(self, left_paren):
        """Parses the rest of a form whose left paren has been consumed, including its closing right paren."""
        if self.exhausted:
            raise self.error("Invalid expression")

        items = []
        while True:
            token = self.peek()
            if token is None:
                raise self.error("Unbalanced parentheses: missing right paren.", left_paren)
            elif token.type is TokenType.RIGHT_PAREN:
                break
            items.append(self.parse())

        self.next()  # closing right paren
        return List(items)


def parse(tokens, source=""):
    """Parses tokens into a single expression. Unlike Parser.parse, every token must belong to that expression."""
    parser = Parser(tokens, source)
    expr = parser.parse()

    if not parser.exhausted:
        raise parser.error("Unexpected token after expression.", parser.peek())
    return expr
