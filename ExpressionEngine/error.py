# error.py
"""Error taxonomy for the expression engine.

Every failure is one of three kinds. Callers branch on ``error.kind`` (or on
the exception class), never on the message text.
"""

from enum import Enum


class ErrorKind(Enum):
    INVALID_EXPRESSION = "InvalidExpression"
    ZERO_DIVISION = "ZeroDivision"
    OUT_OF_DOMAIN = "OutOfDomain"


class EvaluationError(Exception):
    kind = None

    def __init__(self, message, code="9999", expression=None, position=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.expression = expression
        self.position = position

    @property
    def stage(self):
        """Pipeline stage that raised the error, from the first code digit."""
        return Stage_Dictionary.get(self.code[:1], Stage_Dictionary["9"])

    def describe(self):
        """Return 'Error <code>: <title> - <message>' for display."""
        title = ERROR_MESSAGES.get(self.code, ERROR_MESSAGES["9999"])
        return f"Error {self.code}: {title} - {self.message}"


class InvalidExpression(EvaluationError):
    kind = ErrorKind.INVALID_EXPRESSION


class ZeroDivision(EvaluationError):
    kind = ErrorKind.ZERO_DIVISION


class OutOfDomain(EvaluationError):
    kind = ErrorKind.OUT_OF_DOMAIN


class ConfigurationError(ValueError):
    def __init__(self, message, code="5000"):
        super().__init__(message)
        self.message = message
        self.code = code



Stage_Dictionary = {

    "1" : "Tokenizer",
    "2" : "Postfix Converter",
    "3" : "Postfix Evaluator",
    "4" : "Math Function Library",
    "5" : "Configuration",
    "9" : "Unexpected"

}

#Error codes are structured in:
# 1. Digit: Stage (see Stage_Dictionary)
# 2. Digit: 0 = InvalidExpression, 1 = ZeroDivision, 2 = OutOfDomain
# 3. and 4. Digit: Error Number



ERROR_MESSAGES = {
    "1000" : "Empty expression.",
    "1001" : "Invalid function or constant: ", # + name and position
    "1002" : "Invalid number format: ", # + literal and position
    "1003" : "More than one '.' in one number.",
    "1004" : "Invalid character: ", # + character and position
    "1005" : "Expression too long.",

    "2000" : "Mismatched delimiters.",
    "2001" : "Missing opening delimiter.",
    "2002" : "Missing closing delimiter.",
    "2003" : "Argument separator outside of a delimiter.",
    "2004" : "Nesting too deep.",
    "2005" : "Unexpected Token: ", # + token

    "3000" : "Missing operand.",
    "3001" : "Invalid expression: incorrect number of operands or operators.",
    "3002" : "Invalid number: ", # + literal
    "3003" : "Unknown function: ", # + name
    "3110" : "Division by zero.",
    "3111" : "Zero raised to a negative power.",
    "3220" : "Square root of negative number.",
    "3221" : "Negative base raised to a fractional exponent.",
    "3222" : "Factorial of a negative or non-integer number.",
    "3226" : "Number too big.",
    "3227" : "Number too small.",

    "4200" : "Undefined tan() value.",
    "4201" : "Inverse trigonometric input out of range [-1, 1].",
    "4202" : "Logarithm of non-positive number.",
    "4203" : "Invalid logarithm base.",
    "4204" : "Invalid root.",
    "4205" : "Integer arguments required.",
    "4206" : "acosh input below 1.",
    "4207" : "atanh input outside (-1, 1).",
    "4208" : "Square root of negative number.",
    "4209" : "Number too big.",
    "4110" : "Zero raised to a negative power.",

    "5000" : "Configuration Error: ", # + setting
    "5001" : "Unknown setting: ", # + key
    "5002" : "Invalid settings file: ", # + path

    "9999" : "Unexpected Error: " #+error
}
