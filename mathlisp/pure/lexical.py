"""Lexical analysis for mathlisp: turns a source line into a flat list of Tokens.

The `pure` directory contains the language core (lexer, parser, evaluator) and knows nothing about sessions, shells or
output. Lexemes can be defined as

```
<left_paren>  ::= "("
<right_paren> ::= ")"
<number>      ::= <digit>+                          ; must fit in a signed 64-bit integer
<symbol>      ::= <symbol_start> <symbol_char>*     ; "+", "-", "*", "/", or alphanumeric names
<whitespace>  ::= <space>+                          ; recognized, then discarded

<symbol_start> ::= <letter> | "+" | "-" | "*" | "/"
<symbol_char>  ::= <symbol_start> | <digit>
```

Letters and digits are ASCII only. Note that a leading sign is part of a symbol, so `-5` is the symbol `-5` and not a
negative number: negation is spelled `(- 5)`.

Characters that start none of the lexemes above are skipped: the scanner records them in Tokenizer.skipped and moves on
by one character, so every scan makes progress.
"""

from dataclasses import dataclass, field
from enum import Enum
import string

from mathlisp.lang.error import LexicalError


INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1


class TokenType(Enum):
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"
    NUMBER = "number"
    SYMBOL = "symbol"


@dataclass(frozen=True)
class Token:
    """A classified lexeme. start and end are offsets into the source line and are ignored by ==."""
    type: TokenType
    value: object = None
    start: int = field(default=0, compare=False)
    end: int = field(default=0, compare=False)

    def __repr__(self):
        if self.value is None:
            return f"Token({self.type.name})"
        return f"Token({self.type.name}, {self.value!r})"


class State(Enum):
    """Scanner states. START is the state before the first character of a lexeme is classified."""
    START = 0
    LEFT_PAREN = 1
    RIGHT_PAREN = 2
    NUMBER = 3
    SYMBOL = 4
    WHITESPACE = 5


class Tokenizer:
    """Character-classifying finite-state scanner. Construct with a source line, then read tokens/skipped."""
    DIGITS = frozenset(string.digits)
    OPERATORS = frozenset("+-*/")
    SYMBOL_START = frozenset(string.ascii_letters) | OPERATORS
    SYMBOL_CHARS = SYMBOL_START | DIGITS

    def __init__(self, text):
        self.text = text
        self.tokens = []
        self.skipped = []  # list of (offset, char) that matched no lexeme

        self.tokenize()

    @staticmethod
    def classify(char):
        """Returns the state entered from START on char, or None if char starts no lexeme."""
        if char == "(":
            return State.LEFT_PAREN
        elif char == ")":
            return State.RIGHT_PAREN
        elif char in Tokenizer.DIGITS:
            return State.NUMBER
        elif char in Tokenizer.SYMBOL_START:
            return State.SYMBOL
        elif char.isspace():
            return State.WHITESPACE
        return None

    @staticmethod
    def extends(state, char):
        """Whether or not char continues the lexeme being scanned in state."""
        if state is State.NUMBER:
            return char in Tokenizer.DIGITS
        elif state is State.SYMBOL:
            return char in Tokenizer.SYMBOL_CHARS
        elif state is State.WHITESPACE:
            return char.isspace()
        return False  # parentheses are exactly one character

    def scan(self, start):
        """Greedily matches one lexeme starting at start. Returns (state, end); end == start means no match."""
        state = State.START
        end = start

        for idx in range(start, len(self.text)):
            char = self.text[idx]
            if state is State.START:
                next_state = self.classify(char)
            else:
                next_state = state if self.extends(state, char) else None

            if next_state is None:
                break
            state = next_state
            end += 1

        return state, end

    def tokenize(self):
        """Scans self.text from the beginning, filling self.tokens and self.skipped."""
        cursor = 0

        while cursor < len(self.text):
            state, end = self.scan(cursor)

            if state is State.START:
                self.skipped.append((cursor, self.text[cursor]))
                cursor += 1
                continue

            lexeme = self.text[cursor:end]
            if state is State.LEFT_PAREN:
                self.tokens.append(Token(TokenType.LEFT_PAREN, start=cursor, end=end))
            elif state is State.RIGHT_PAREN:
                self.tokens.append(Token(TokenType.RIGHT_PAREN, start=cursor, end=end))
            elif state is State.NUMBER:
                self.tokens.append(Token(TokenType.NUMBER, self.to_int64(lexeme, cursor), cursor, end))
            elif state is State.SYMBOL:
                self.tokens.append(Token(TokenType.SYMBOL, lexeme, cursor, end))

            cursor = end

    def to_int64(self, lexeme, start):
        """Converts a digit run to int, raising LexicalError if it doesn't fit in a signed 64-bit integer."""
        digits = lexeme.lstrip("0")
        # length first: int() refuses digit runs longer than sys.get_int_max_str_digits()
        if len(digits) > len(str(INT64_MAX)) or int(digits or "0") > INT64_MAX:
            shown = lexeme if len(lexeme) <= 24 else f"{lexeme[:10]}...{lexeme[-10:]}"
            raise LexicalError(f"Number literal '{shown}' is out of range", self.text, start, start + len(lexeme))
        return int(digits or "0")


def tokenize(text):
    """Returns the list of Tokens in text. Unrecognized characters are dropped; use Tokenizer to see which."""
    return Tokenizer(text).tokens
