"""Tree-walking evaluator for mathlisp.

Evaluation is purely functional: there is no environment and nothing is carried between calls. Atoms evaluate to
themselves, and so does any form that isn't headed by one of the four arithmetic operators. Operator forms fold their
evaluated operands left to right:

```
(+ a b ...)   ; 0 + a + b + ...        any number of operands
(- a)         ; -a
(- a b ...)   ; a - b - ...            at least one operand
(* a b ...)   ; a * b * ...            at least two operands
(/ a b ...)   ; a / b / ...            at least two operands, truncating toward zero
```

All values are signed 64-bit integers; a result outside that range is an error rather than a silent wraparound.
"""

from enum import Enum
from functools import reduce

from mathlisp.lang.error import EvaluationError
from mathlisp.pure.grammar import List, Number, Symbol
from mathlisp.pure.lexical import INT64_MAX, INT64_MIN


def truncdiv(dividend, divisor):
    """Integer division rounding toward zero (python's // rounds toward negative infinity)."""
    quotient = abs(dividend) // abs(divisor)
    return -quotient if (dividend < 0) != (divisor < 0) else quotient


class Operator(Enum):
    """Closed set of operators a form can be headed by. (symbol, minimum number of operands)"""
    ADD = ("+", 0)
    SUB = ("-", 1)
    MUL = ("*", 2)
    DIV = ("/", 2)

    def __init__(self, symbol, min_operands):
        self.symbol = symbol
        self.min_operands = min_operands

    @classmethod
    def resolve(cls, head):
        """Returns the Operator named by head, or None if head is not an operator Symbol."""
        if isinstance(head, Symbol):
            for operator in cls:
                if operator.symbol == head.name:
                    return operator
        return None

    def invalid(self):
        return EvaluationError(f"Invalid {self.symbol} operation")

    def check(self, value):
        """Returns value if it fits in a signed 64-bit integer."""
        if not INT64_MIN <= value <= INT64_MAX:
            raise EvaluationError(f"Integer overflow in {self.symbol} operation")
        return value

    def step(self, acc, value):
        """One step of this operator's left fold."""
        if self is Operator.ADD:
            return self.check(acc + value)
        elif self is Operator.SUB:
            return self.check(acc - value)
        elif self is Operator.MUL:
            return self.check(acc * value)
        elif value == 0:
            raise EvaluationError("Division by zero")
        return self.check(truncdiv(acc, value))

    def apply(self, values):
        """Folds values, an iterable of ints, with this operator. values is consumed lazily, so a failing operand
        aborts the fold where it is reached.
        """
        if self is Operator.ADD:
            return reduce(self.step, values, 0)
        return reduce(self.step, values)


def evaluate_operand(operator, expr):
    """Evaluates expr and returns its int value, which it must have for operator to accept it."""
    result = evaluate(expr)
    if not isinstance(result, Number):
        raise operator.invalid()
    return result.value


def evaluate(expr):
    """Reduces expr to a Number, or returns it unchanged if it is not an operator form."""
    if not isinstance(expr, List):
        return expr

    if not expr.items:
        raise EvaluationError("Cannot evaluate empty list")

    operator = Operator.resolve(expr.head)
    if operator is None:
        return expr

    if len(expr.operands) < operator.min_operands:
        raise operator.invalid()

    values = (evaluate_operand(operator, operand) for operand in expr.operands)
    if operator is Operator.SUB and len(expr.operands) == 1:
        return Number(operator.check(-next(values)))  # unary negation
    return Number(operator.apply(values))
