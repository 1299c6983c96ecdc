# Registry.py
"""Static tables shared by every stage: token kinds, delimiter families,
operator metadata, the recognized functions (with their arity) and constants.

Nothing in here is mutated after import.
"""

from enum import Enum
from collections import namedtuple


class TokenKind(Enum):
    NUMBER = "number"
    CONSTANT = "constant"
    FUNCTION = "function"
    OPERATOR = "operator"
    UNARY_PLUS = "unary_plus"
    OPEN = "open"
    CLOSE = "close"
    RADICAL = "radical"
    FACTORIAL = "factorial"
    PERCENT = "percent"
    SEPARATOR = "separator"


class Delimiter(Enum):
    PAREN = "()"
    BRACE = "{}"
    BRACKET = "[]"


class Token(namedtuple("Token", ["kind", "text", "position", "family"])):
    """One lexical unit. ``family`` is only set for OPEN / CLOSE tokens."""
    __slots__ = ()

    def __new__(cls, kind, text, position=None, family=None):
        return super().__new__(cls, kind, text, position, family)

    def __repr__(self):
        if self.kind in (TokenKind.OPEN, TokenKind.CLOSE):
            return f"{self.kind.name}({self.text!r}, {self.family.name})"
        return f"{self.kind.name}({self.text!r})"


LEFT = "left"
RIGHT = "right"

OperatorInfo = namedtuple("OperatorInfo", ["precedence", "associativity"])

# Higher binds tighter. The radical sits above every binary operator.
OPERATORS = {
    "+": OperatorInfo(1, LEFT),
    "-": OperatorInfo(1, LEFT),
    "*": OperatorInfo(2, LEFT),
    "/": OperatorInfo(2, LEFT),
    "^": OperatorInfo(3, RIGHT),
    "√": OperatorInfo(4, RIGHT),
}

# Functions waiting on the operator stack are never popped by a binary operator
FUNCTION_PRECEDENCE = 0

RADICAL = "√"
FACTORIAL = "!"
PERCENT = "%"
SEPARATOR = ","

OPENING = {"(": Delimiter.PAREN, "{": Delimiter.BRACE, "[": Delimiter.BRACKET}
CLOSING = {")": Delimiter.PAREN, "}": Delimiter.BRACE, "]": Delimiter.BRACKET}

CONSTANTS = {
    "pi": "3.14159265358979323846264338327950288419716939937510",
    "e": "2.71828182845904523536028747135266249775724709369995",
    "π": "3.14159265358979323846264338327950288419716939937510",
}

# name -> arity
FUNCTIONS = {
    "sin": 1,
    "cos": 1,
    "tan": 1,
    "asin": 1,
    "acos": 1,
    "atan": 1,
    "sinh": 1,
    "cosh": 1,
    "tanh": 1,
    "asinh": 1,
    "acosh": 1,
    "atanh": 1,
    "ln": 1,
    "log": 2,
    "log10": 1,
    "exp": 1,
    "sqrt": 1,
    "nrt": 2,
    "ceil": 1,
    "floor": 1,
    "abs": 1,
    "min": 2,
    "max": 2,
    "nPr": 2,
    "nCr": 2,
    "gcd": 2,
}

# Functions whose input or output is an angle
TRIG_FUNCTIONS = frozenset(["sin", "cos", "tan", "asin", "acos", "atan"])


def isFunction(name):
    return name in FUNCTIONS


def isConstant(name):
    return name in CONSTANTS


def isOp(symbol):
    """Return True for the five binary operators."""
    return symbol in OPERATORS and symbol != RADICAL


def precedence(token):
    """Precedence of an operator-stack entry (operator, radical or function)."""
    if token.kind == TokenKind.FUNCTION:
        return FUNCTION_PRECEDENCE
    return OPERATORS[token.text].precedence


def is_left_associative(token):
    return OPERATORS[token.text].associativity == LEFT


def arity(name):
    return FUNCTIONS[name]
