# ScientificEngine.py
"""Math function library.

Every function takes ``Decimal`` operands and returns a ``Decimal`` rounded to
the working precision. Transcendental functions are computed with mpmath at
the working precision plus a few guard digits, then rounded back.

Domain violations raise ``OutOfDomain`` (or ``ZeroDivision`` where a
reciprocal of zero would be needed).
"""

import math
from decimal import Decimal, ROUND_CEILING, ROUND_FLOOR

import mpmath

from . import config_manager as config_manager
from . import error as E


ONE = Decimal(1)


class NumericEnvironment:
    """Numeric state owned by one evaluation.

    Holds the decimal context (working precision) and a private mpmath
    context, so concurrent evaluations never share precision settings.
    """

    def __init__(self, settings=None):
        self.settings = settings if settings is not None else config_manager.load_settings()
        self.decimal = config_manager.make_context(self.settings)
        self.mp = mpmath.MPContext()
        self.mp.dps = self.settings["precision"] + self.settings["guard_digits"]
        self.tan_epsilon = self.mp.mpf(str(self.settings["tan_epsilon"]))

    def to_mpf(self, value):
        return self.mp.mpf(str(value).lower())

    def to_decimal(self, value):
        if self.mp.isint(value):
            return self.from_int(int(value))
        return self.decimal.create_decimal(self.mp.nstr(value, self.mp.dps))

    def from_int(self, value):
        return self.decimal.create_decimal(value)


# -----------------------------
# Small helpers
# -----------------------------

def is_integer(value):
    """Return True if the Decimal has no fractional part."""
    return value.is_finite() and value == value.to_integral_value()


def require_integers(name, *values):
    for value in values:
        if not is_integer(value):
            raise E.OutOfDomain(f"{name}() requires integer arguments, got {value}", code="4205")
    return [int(value) for value in values]


def require_limit(env, name, value):
    limit = env.settings["max_factorial"]
    if value > limit:
        raise E.OutOfDomain(f"{name}() argument {value} exceeds the supported limit {limit}", code="4209")


def real_root(env, value, order):
    """Real ``order``-th root of a non-negative Decimal (``order`` a positive int)."""
    if value == 0:
        return Decimal(0)
    return env.to_decimal(env.mp.root(env.to_mpf(value), order))


# -----------------------------
# Trigonometry
# -----------------------------

def _angle(env, x, use_degrees):
    angle = env.to_mpf(x)
    if use_degrees:
        angle = env.mp.radians(angle)
    return angle


def _inverse_angle(env, result, use_degrees):
    if use_degrees:
        result = env.mp.degrees(result)
    return env.to_decimal(result)


def _check_unit_interval(name, x):
    if x < -1 or x > 1:
        raise E.OutOfDomain(f"{name} input {x} out of range [-1, 1]", code="4201")


def sin(env, x, use_degrees=False):
    return env.to_decimal(env.mp.sin(_angle(env, x, use_degrees)))


def cos(env, x, use_degrees=False):
    return env.to_decimal(env.mp.cos(_angle(env, x, use_degrees)))


def tan(env, x, use_degrees=False):
    angle = _angle(env, x, use_degrees)
    if abs(env.mp.cos(angle)) < env.tan_epsilon:
        raise E.OutOfDomain(f"Undefined tan() value for {x}", code="4200")
    return env.to_decimal(env.mp.tan(angle))


def asin(env, x, use_degrees=False):
    _check_unit_interval("asin", x)
    return _inverse_angle(env, env.mp.asin(env.to_mpf(x)), use_degrees)


def acos(env, x, use_degrees=False):
    _check_unit_interval("acos", x)
    return _inverse_angle(env, env.mp.acos(env.to_mpf(x)), use_degrees)


def atan(env, x, use_degrees=False):
    return _inverse_angle(env, env.mp.atan(env.to_mpf(x)), use_degrees)


# -----------------------------
# Hyperbolic (angle mode does not apply)
# -----------------------------

def sinh(env, x):
    return env.to_decimal(env.mp.sinh(env.to_mpf(x)))


def cosh(env, x):
    return env.to_decimal(env.mp.cosh(env.to_mpf(x)))


def tanh(env, x):
    return env.to_decimal(env.mp.tanh(env.to_mpf(x)))


def asinh(env, x):
    return env.to_decimal(env.mp.asinh(env.to_mpf(x)))


def acosh(env, x):
    if x < 1:
        raise E.OutOfDomain(f"acosh input {x} below 1", code="4206")
    return env.to_decimal(env.mp.acosh(env.to_mpf(x)))


def atanh(env, x):
    if x <= -1 or x >= 1:
        raise E.OutOfDomain(f"atanh input {x} outside (-1, 1)", code="4207")
    return env.to_decimal(env.mp.atanh(env.to_mpf(x)))


# -----------------------------
# Logarithms, exponentials and roots
# -----------------------------

def ln(env, x):
    if x <= 0:
        raise E.OutOfDomain(f"ln of non-positive number {x}", code="4202")
    return env.to_decimal(env.mp.ln(env.to_mpf(x)))


def log(env, base, value):
    """Logarithm of ``value`` to ``base`` (argument order: base, value)."""
    if base <= 0 or value <= 0:
        raise E.OutOfDomain(f"log of non-positive number (base {base}, value {value})", code="4202")
    if base == 1:
        raise E.OutOfDomain("Logarithm base must not be 1", code="4203")
    return env.to_decimal(env.mp.log(env.to_mpf(value), env.to_mpf(base)))


def log10(env, x):
    if x <= 0:
        raise E.OutOfDomain(f"log10 of non-positive number {x}", code="4202")
    return env.to_decimal(env.mp.log10(env.to_mpf(x)))


def exp(env, x):
    return env.to_decimal(env.mp.exp(env.to_mpf(x)))


def sqrt(env, x):
    if x < 0:
        raise E.OutOfDomain(f"Square root of negative number {x}", code="4208")
    return env.decimal.sqrt(x)


def nrt(env, n, x):
    """n-th root of x. Negative x only has a real root for odd integer n."""
    if n == 0:
        raise E.OutOfDomain("Zeroth root is undefined", code="4204")

    if x == 0:
        if n < 0:
            raise E.ZeroDivision(f"Zero has no root of negative order {n}", code="4110")
        return Decimal(0)

    if is_integer(n):
        order = int(n)
        if x < 0 and order % 2 == 0:
            raise E.OutOfDomain(f"Even-order root ({order}) of negative number {x}", code="4204")
        root = real_root(env, abs(x), abs(order))
        if x < 0:
            root = -root
        if order < 0:
            root = env.decimal.divide(ONE, root)
        return root

    if x < 0:
        raise E.OutOfDomain(f"Non-integer root order {n} of negative number {x}", code="4204")
    return env.to_decimal(env.mp.power(env.to_mpf(x), 1 / env.to_mpf(n)))


# -----------------------------
# Rounding, comparison
# -----------------------------

def ceil(env, x):
    return env.decimal.plus(x.to_integral_value(rounding=ROUND_CEILING))


def floor(env, x):
    return env.decimal.plus(x.to_integral_value(rounding=ROUND_FLOOR))


def absolute(env, x):
    return env.decimal.abs(x)


def minimum(env, a, b):
    return min(a, b)


def maximum(env, a, b):
    return max(a, b)


# -----------------------------
# Combinatorics
# -----------------------------

def factorial(env, x):
    if not is_integer(x) or x < 0:
        raise E.OutOfDomain(f"Factorial requires a non-negative integer, got {x}", code="3222")
    n = int(x)
    require_limit(env, "factorial", n)
    return env.from_int(math.factorial(n))


def nPr(env, n, r):
    n, r = require_integers("nPr", n, r)
    if r < 0 or r > n:
        return Decimal(0)
    require_limit(env, "nPr", r)
    result = 1
    for i in range(n - r + 1, n + 1):
        result *= i
    return env.from_int(result)


def nCr(env, n, r):
    n, r = require_integers("nCr", n, r)
    if r < 0 or r > n:
        return Decimal(0)
    r = min(r, n - r)
    require_limit(env, "nCr", r)
    result = 1
    for i in range(1, r + 1):
        result = result * (n - r + i) // i
    return env.from_int(result)


def gcd(env, a, b):
    a, b = require_integers("gcd", a, b)
    return env.from_int(math.gcd(a, b))


# name -> implementation; trig entries also take ``use_degrees``
FUNCTION_TABLE = {
    "sin": sin,
    "cos": cos,
    "tan": tan,
    "asin": asin,
    "acos": acos,
    "atan": atan,
    "sinh": sinh,
    "cosh": cosh,
    "tanh": tanh,
    "asinh": asinh,
    "acosh": acosh,
    "atanh": atanh,
    "ln": ln,
    "log": log,
    "log10": log10,
    "exp": exp,
    "sqrt": sqrt,
    "nrt": nrt,
    "ceil": ceil,
    "floor": floor,
    "abs": absolute,
    "min": minimum,
    "max": maximum,
    "nPr": nPr,
    "nCr": nCr,
    "gcd": gcd,
}
