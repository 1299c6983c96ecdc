# PostfixConverter.py
"""Infix -> postfix conversion (shunting-yard).

The operator stack holds three sorts of entries, told apart by token kind:
binary operators / the radical, functions, and opening delimiters.
"""

import logging

from . import Registry as R
from . import config_manager as config_manager
from . import error as E
from .Registry import Token, TokenKind

logger = logging.getLogger(__name__)

_PASS_THROUGH = (TokenKind.NUMBER, TokenKind.FACTORIAL, TokenKind.PERCENT, TokenKind.UNARY_PLUS)


def _delimiter_error(token, code, message):
    position = token.position if token is not None else None
    if position is not None:
        message = f"{message} at position {position}"
    return E.InvalidExpression(message, code=code, position=position)


def _pops_before(top, incoming):
    """Return True if ``top`` must be emitted before ``incoming`` is pushed."""
    if top.kind == TokenKind.OPEN:
        return False
    top_precedence = R.precedence(top)
    incoming_precedence = R.precedence(incoming)
    if top_precedence > incoming_precedence:
        return True
    return top_precedence == incoming_precedence and R.is_left_associative(incoming)


def to_postfix(tokens, settings=None):
    """Reorder ``tokens`` into postfix order. Constants become NUMBER tokens."""
    max_depth = config_manager.load_setting_value("max_nesting_depth", settings)
    stack = []
    output = []
    depth = 0

    for token in tokens:
        if token.kind in _PASS_THROUGH:
            output.append(token)

        elif token.kind == TokenKind.CONSTANT:
            # Resolved now, evaluation only ever sees literals
            output.append(Token(TokenKind.NUMBER, R.CONSTANTS[token.text], token.position))

        elif token.kind in (TokenKind.FUNCTION, TokenKind.RADICAL):
            stack.append(token)

        elif token.kind == TokenKind.OPEN:
            depth += 1
            if depth > max_depth:
                raise _delimiter_error(token, "2004", f"Nesting deeper than {max_depth} levels")
            stack.append(token)

        elif token.kind == TokenKind.SEPARATOR:
            while stack and stack[-1].kind != TokenKind.OPEN:
                output.append(stack.pop())
            if not stack:
                raise _delimiter_error(token, "2003", "Argument separator ',' outside of a delimiter")

        elif token.kind == TokenKind.CLOSE:
            while stack and stack[-1].kind != TokenKind.OPEN:
                output.append(stack.pop())
            if not stack:
                raise _delimiter_error(token, "2001", f"Mismatched delimiters: no opening delimiter for '{token.text}'")
            opening = stack.pop()
            if opening.family != token.family:
                raise _delimiter_error(token, "2000",
                                       f"Mismatched delimiters: '{opening.text}' closed by '{token.text}'")
            depth -= 1
            # Attach a pending function / radical to the argument list just closed
            if stack and stack[-1].kind in (TokenKind.FUNCTION, TokenKind.RADICAL):
                output.append(stack.pop())

        elif token.kind == TokenKind.OPERATOR:
            while stack and _pops_before(stack[-1], token):
                output.append(stack.pop())
            stack.append(token)

        else:
            raise _delimiter_error(token, "2005", f"Unexpected token: {token.text}")

    while stack:
        top = stack.pop()
        if top.kind == TokenKind.OPEN:
            raise _delimiter_error(top, "2002", f"Mismatched delimiters: '{top.text}' is never closed")
        output.append(top)

    logger.debug("postfix: %s", output)
    return output
