# Tokenizer.py
"""Lexical stage: raw expression text -> flat list of typed tokens.

- Identifiers must name a known constant or function.
- '-' and '+' are read as signs when they appear in unary position
  (start of input, after an opening delimiter, an operator, ',' '√' or a
  unary '+'); otherwise they are binary operators.
- Implicit multiplication is inserted while emitting, e.g. '2pi' -> 2 * pi.
"""

import logging

from . import Registry as R
from . import error as E
from .Registry import Token, TokenKind

logger = logging.getLogger(__name__)

DIGITS = "0123456789"

# Kinds after which a '-' / '+' is a sign rather than a binary operator
_UNARY_CONTEXT = (TokenKind.OPEN, TokenKind.OPERATOR, TokenKind.SEPARATOR,
                  TokenKind.RADICAL, TokenKind.UNARY_PLUS)

_VALUE_START = (TokenKind.NUMBER, TokenKind.CONSTANT, TokenKind.FUNCTION, TokenKind.OPEN)

# (previous kind, next kind) pairs that imply a '*' between them
_IMPLICIT_MULTIPLICATION = {
    TokenKind.NUMBER: (TokenKind.CONSTANT, TokenKind.FUNCTION, TokenKind.OPEN, TokenKind.RADICAL),
    TokenKind.CLOSE: _VALUE_START + (TokenKind.RADICAL,),
    TokenKind.CONSTANT: _VALUE_START + (TokenKind.RADICAL,),
    TokenKind.FACTORIAL: _VALUE_START,
    TokenKind.PERCENT: _VALUE_START,
}


def is_unary_position(tokens):
    """True when a sign read now belongs to a number, not to a binary operator."""
    return not tokens or tokens[-1].kind in _UNARY_CONTEXT


def emit(tokens, token):
    """Append ``token``, inserting '*' first when the pair implies multiplication."""
    if tokens and token.kind in _IMPLICIT_MULTIPLICATION.get(tokens[-1].kind, ()):
        tokens.append(Token(TokenKind.OPERATOR, "*"))
    tokens.append(token)


def read_number(expression, b, start):
    """Scan a numeric literal starting at ``b``; return (literal, next index)."""
    str_number = ""
    if expression[b] == "-":
        str_number = "-"
        b += 1

    hat_schon_komma = False  # Only one dot allowed in a numeric literal
    has_digits = False
    while b < len(expression) and (expression[b] in DIGITS or expression[b] == "."):
        if expression[b] == ".":
            if hat_schon_komma:
                raise E.InvalidExpression(
                    f"Invalid number format '{str_number}{expression[b]}' at position {start}: more than one '.'",
                    code="1003", position=start)
            hat_schon_komma = True
        else:
            has_digits = True
        str_number += expression[b]
        b += 1

    if not has_digits:
        raise E.InvalidExpression(f"Invalid number format '{str_number}' at position {start}",
                                  code="1002", position=start)
    return str_number, b


def tokenize(expression):
    """Convert ``expression`` into a list of tokens (see module docstring)."""
    tokens = []
    b = 0

    while b < len(expression):
        current_char = expression[b]

        # --- Whitespace (ignored) ---
        if current_char.isspace():
            b += 1

        # --- Identifiers: constants and functions ---
        elif current_char.isalpha():
            start = b
            while b < len(expression) and expression[b].isalpha():
                b += 1
            # Digits extend the name only when the longer name is known ('log10', not '2pi3')
            end = b
            while end < len(expression) and expression[end] in DIGITS:
                end += 1
            if end > b and (R.isFunction(expression[start:end]) or R.isConstant(expression[start:end])):
                b = end
            name = expression[start:b]
            if R.isConstant(name):
                emit(tokens, Token(TokenKind.CONSTANT, name, start))
            elif R.isFunction(name):
                emit(tokens, Token(TokenKind.FUNCTION, name, start))
            else:
                raise E.InvalidExpression(f"Invalid function or constant '{name}' at position {start}",
                                          code="1001", position=start)

        # --- Numbers, including a leading sign in unary position ---
        elif current_char in DIGITS or current_char == "." or (
                current_char == "-" and is_unary_position(tokens)):
            literal, b = read_number(expression, b, b)
            emit(tokens, Token(TokenKind.NUMBER, literal, b - len(literal)))

        elif current_char == "+" and is_unary_position(tokens):
            emit(tokens, Token(TokenKind.UNARY_PLUS, current_char, b))
            b += 1

        # --- Binary operators ---
        elif R.isOp(current_char):
            emit(tokens, Token(TokenKind.OPERATOR, current_char, b))
            b += 1

        # --- Delimiters ---
        elif current_char in R.OPENING:
            emit(tokens, Token(TokenKind.OPEN, current_char, b, R.OPENING[current_char]))
            b += 1
        elif current_char in R.CLOSING:
            emit(tokens, Token(TokenKind.CLOSE, current_char, b, R.CLOSING[current_char]))
            b += 1

        # --- Single character specials ---
        elif current_char == R.RADICAL:
            emit(tokens, Token(TokenKind.RADICAL, current_char, b))
            b += 1
        elif current_char == R.FACTORIAL:
            emit(tokens, Token(TokenKind.FACTORIAL, current_char, b))
            b += 1
        elif current_char == R.PERCENT:
            emit(tokens, Token(TokenKind.PERCENT, current_char, b))
            b += 1
        elif current_char == R.SEPARATOR:
            emit(tokens, Token(TokenKind.SEPARATOR, current_char, b))
            b += 1

        else:
            raise E.InvalidExpression(f"Invalid character '{current_char}' at position {b}",
                                      code="1004", position=b)

    logger.debug("tokens: %s", tokens)
    return tokens
