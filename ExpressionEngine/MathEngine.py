# MathEngine.py
"""""
Core calculation engine.

Pipeline
--------
1) Tokenizer: converts a raw input string into a flat list of typed tokens.
2) Postfix Converter: shunting-yard reordering into postfix (RPN) order.
3) Postfix Evaluator: runs the postfix list on a Decimal stack at the working
   precision, delegating named functions to the ScientificEngine.

Public entry points are ``evaluate`` (raises EvaluationError) and
``try_evaluate`` (returns an EvaluationResult).
"""""

import decimal
import logging
from collections import namedtuple
from decimal import Decimal, ROUND_HALF_UP

from . import Registry as R
from . import ScientificEngine
from . import Tokenizer
from . import PostfixConverter
from . import config_manager as config_manager
from . import error as E
from .Registry import TokenKind

logger = logging.getLogger(__name__)

HUNDRED = Decimal(100)


EvaluationResult = namedtuple("EvaluationResult", ["value", "error"])
EvaluationResult.__doc__ = "Outcome of try_evaluate: exactly one of value / error is set."


# -----------------------------
# Stack helpers
# -----------------------------

def pop_operands(stack, count, token):
    """Pop ``count`` values in argument order, or fail on a short stack."""
    if len(stack) < count:
        raise E.InvalidExpression(
            f"Missing operand for '{token.text}': needs {count}, found {len(stack)}",
            code="3000", position=token.position)
    operands = stack[len(stack) - count:]
    del stack[len(stack) - count:]
    return operands


def parse_number(env, token):
    try:
        return env.decimal.create_decimal(token.text)
    except decimal.InvalidOperation:
        raise E.InvalidExpression(f"Invalid number '{token.text}'", code="3002", position=token.position)


# -----------------------------
# Operators
# -----------------------------

def power(env, base, exponent):
    """base ^ exponent with the real-valued rules for negative bases."""
    ctx = env.decimal

    if ScientificEngine.is_integer(exponent):
        if exponent == 0:
            return Decimal(1)
        if base == 0 and exponent < 0:
            raise E.ZeroDivision(f"Zero raised to negative power {exponent}", code="3111")
        return ctx.power(base, exponent)

    if base >= 0:
        if base == 0:
            if exponent < 0:
                raise E.ZeroDivision(f"Zero raised to negative power {exponent}", code="3111")
            return Decimal(0)
        return ctx.power(base, exponent)

    # Negative base, fractional exponent: look for an odd denominator q with
    # exponent ~= p / q, then the real root exists.
    max_denominator = env.settings["power_max_denominator"]
    tolerance = Decimal(str(env.settings["power_tolerance"]))
    for q in range(1, max_denominator + 1, 2):
        qb = ctx.multiply(exponent, q)
        p = qb.to_integral_value(rounding=ROUND_HALF_UP)
        if abs(ctx.subtract(qb, p)) < tolerance:
            logger.debug("exponent %s ~= %s/%s", exponent, p, q)
            root = -ScientificEngine.real_root(env, -base, q)
            return ctx.power(root, p)

    raise E.OutOfDomain(
        f"Negative base {base} raised to fractional exponent {exponent} "
        f"(even denominator or non-rational exponent)", code="3221")


def apply_operator(env, symbol, left, right):
    ctx = env.decimal
    if symbol == '+':
        return ctx.add(left, right)
    elif symbol == '-':
        return ctx.subtract(left, right)
    elif symbol == '*':
        return ctx.multiply(left, right)
    elif symbol == '/':
        if right == 0:
            raise E.ZeroDivision(f"Division by zero: {left} / {right}", code="3110")
        return ctx.divide(left, right)
    elif symbol == '^':
        return power(env, left, right)
    else:
        raise E.InvalidExpression(f"Unknown operator: {symbol}", code="3001")


def apply_function(env, token, operands, use_degrees):
    implementation = ScientificEngine.FUNCTION_TABLE.get(token.text)
    if implementation is None:
        raise E.InvalidExpression(f"Unknown function: {token.text}", code="3003", position=token.position)
    if token.text in R.TRIG_FUNCTIONS:
        return implementation(env, *operands, use_degrees=use_degrees)
    return implementation(env, *operands)


# -----------------------------
# Postfix evaluation
# -----------------------------

def evaluate_postfix(postfix, use_degrees=False, env=None):
    """Run a postfix token list and return the single resulting Decimal."""
    if env is None:
        env = ScientificEngine.NumericEnvironment()
    stack = []

    with decimal.localcontext(env.decimal):
        for token in postfix:
            if token.kind == TokenKind.NUMBER:
                stack.append(parse_number(env, token))

            elif token.kind == TokenKind.OPERATOR:
                left, right = pop_operands(stack, 2, token)
                stack.append(apply_operator(env, token.text, left, right))

            elif token.kind == TokenKind.FACTORIAL:
                (value,) = pop_operands(stack, 1, token)
                stack.append(ScientificEngine.factorial(env, value))

            elif token.kind == TokenKind.RADICAL:
                (value,) = pop_operands(stack, 1, token)
                if value < 0:
                    raise E.OutOfDomain(f"Square root of negative number {value}", code="3220",
                                        position=token.position)
                stack.append(env.decimal.sqrt(value))

            elif token.kind == TokenKind.PERCENT:
                (value,) = pop_operands(stack, 1, token)
                stack.append(env.decimal.divide(value, HUNDRED))

            elif token.kind == TokenKind.UNARY_PLUS:
                pass

            elif token.kind == TokenKind.FUNCTION:
                operands = pop_operands(stack, R.arity(token.text), token)
                stack.append(apply_function(env, token, operands, use_degrees))

            else:
                raise E.InvalidExpression(f"Unexpected token in postfix: {token.text}", code="3001",
                                          position=token.position)

    if len(stack) != 1:
        raise E.InvalidExpression("Invalid expression: incorrect number of operands or operators",
                                  code="3001")
    return stack[0]


# -----------------------------
# Public entry points
# -----------------------------

def evaluate(expression, use_degrees=False, settings=None):
    """Main API: tokenize -> postfix -> evaluate. Returns a Decimal.

    ``settings`` is an optional mapping of overrides for config_manager's
    defaults. Raises InvalidExpression, ZeroDivision or OutOfDomain.
    """
    settings = config_manager.load_settings(settings)
    try:
        if expression is None or not expression.strip():
            raise E.InvalidExpression("Expression cannot be empty", code="1000")

        max_length = settings["max_expression_length"]
        if len(expression) > max_length:
            raise E.InvalidExpression(f"Expression longer than {max_length} characters", code="1005")

        env = ScientificEngine.NumericEnvironment(settings)
        tokens = Tokenizer.tokenize(expression)
        postfix = PostfixConverter.to_postfix(tokens, settings)
        ergebnis = evaluate_postfix(postfix, use_degrees, env)
        logger.debug("%r = %s", expression, ergebnis)
        return ergebnis

    # Re-raise our errors after attaching the source expression
    except E.EvaluationError as e:
        e.expression = expression
        logger.debug("%r failed: %s", expression, e.describe())
        raise e
    # Translate decimal signals that escaped the explicit checks
    except decimal.DivisionByZero as e:
        raise E.ZeroDivision(f"Division by zero: {e}", code="3110", expression=expression) from e
    except decimal.Overflow as e:
        raise E.OutOfDomain("Number too large (Arithmetic overflow).", code="3226", expression=expression) from e
    except decimal.Underflow as e:
        raise E.OutOfDomain("Number too small (Arithmetic underflow).", code="3227", expression=expression) from e
    except decimal.InvalidOperation as e:
        raise E.OutOfDomain(f"Undefined arithmetic operation: {e}", code="3226", expression=expression) from e


def try_evaluate(expression, use_degrees=False, settings=None):
    """Like ``evaluate`` but returns EvaluationResult(value, error) instead of raising."""
    try:
        return EvaluationResult(evaluate(expression, use_degrees, settings), None)
    except E.EvaluationError as e:
        return EvaluationResult(None, e)
