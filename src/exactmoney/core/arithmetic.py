#!/usr/bin/env python3
"""
Exact Arithmetic Substrate

Thin layer over the standard library's `decimal` and `fractions` modules that
the money engine uses for every numeric step.

Numbers are either a `Decimal` (exact base-10 value with a scale) or a
`Fraction` (exact rational). Addition, subtraction and multiplication of two
decimals stay decimal and keep their natural scale; anything that involves a
rational, and every division, is computed as a rational. Rounding only ever
happens in `to_scale()` and `to_step()`, under an explicit `RoundingMode`.

Key Principles:
- Never use floating-point arithmetic; floats are parsed through `str()`
- Never round implicitly: `RoundingMode.UNNECESSARY` fails instead
- Decimal operations run in a fresh context wide enough to be exact
"""

import re
from decimal import (
    MAX_EMAX,
    MAX_PREC,
    MIN_EMIN,
    ROUND_CEILING,
    ROUND_DOWN,
    ROUND_FLOOR,
    ROUND_HALF_DOWN,
    ROUND_HALF_EVEN,
    ROUND_HALF_UP,
    ROUND_UP,
    Decimal,
    DivisionByZero,
    Inexact,
    InvalidOperation,
    Overflow,
)
from decimal import Context as DecimalContext
from enum import Enum
from fractions import Fraction

from .errors import DivisionByZeroError, MalformedNumberError, RoundingRequiredError

Number = Decimal | Fraction
NumberLike = Decimal | Fraction | int | float | str

_DECIMAL_PATTERN = re.compile(r"^[-+]?\d+(?:\.\d+)?(?:[eE][-+]?\d+)?$")
_RATIONAL_PATTERN = re.compile(r"^([-+]?\d+)/(\d+)$")

# Largest decimal exponent accepted on input, in either direction
MAX_EXPONENT = 4000


class RoundingMode(Enum):
    """Rounding directions, mapped onto the `decimal` module constants."""

    UNNECESSARY = "UNNECESSARY"  # fail if the result is inexact
    UP = ROUND_UP  # away from zero
    DOWN = ROUND_DOWN  # toward zero
    CEILING = ROUND_CEILING  # toward positive infinity
    FLOOR = ROUND_FLOOR  # toward negative infinity
    HALF_UP = ROUND_HALF_UP
    HALF_DOWN = ROUND_HALF_DOWN
    HALF_EVEN = ROUND_HALF_EVEN

    @classmethod
    def from_name(cls, name: str) -> "RoundingMode":
        """Look up a rounding mode by name, e.g. 'half_up' or 'HALF-UP'."""
        key = name.strip().upper().replace("-", "_")
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"Unknown rounding mode: {name!r}") from None


def _context(trap_inexact: bool = True) -> DecimalContext:
    """Fresh decimal context in which +, - and * never round."""
    traps = [InvalidOperation, DivisionByZero, Overflow]
    if trap_inexact:
        traps.append(Inexact)
    return DecimalContext(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN, traps=traps)


def _drop_positive_exponent(value: Decimal) -> Decimal:
    # 1E+3 becomes 1000 so that every decimal has a non-negative scale
    if value.as_tuple().exponent > 0:
        return value.quantize(Decimal(1), context=_context())
    return value


def _parsed_decimal(value: Decimal, original: object) -> Decimal:
    """Reject exponents beyond MAX_EXPONENT, then drop any positive exponent."""
    if abs(value.as_tuple().exponent) > MAX_EXPONENT:
        raise MalformedNumberError(original)
    try:
        return _drop_positive_exponent(value)
    except InvalidOperation:
        raise MalformedNumberError(original) from None


def parse_number(value: NumberLike) -> Number:
    """
    Convert a supported input into a `Decimal` or a `Fraction`.

    Accepts decimals, fractions, integers, floats, decimal strings such as
    "-12.34" or "1.5e3", and rational strings such as "3/7".

    Args:
        value: Number to parse

    Returns:
        Exact Decimal, or Fraction for rational input

    Raises:
        MalformedNumberError: If the value is not a finite number, or its
            exponent is beyond MAX_EXPONENT
        DivisionByZeroError: If a rational string has a zero denominator
    """
    if isinstance(value, Fraction):
        return value
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise MalformedNumberError(value)
        return _parsed_decimal(value, value)
    if isinstance(value, bool):
        raise MalformedNumberError(value)
    if isinstance(value, int):
        return Decimal(value)

    if isinstance(value, float):
        text = str(value)
    elif isinstance(value, str):
        text = value.strip()
    else:
        raise MalformedNumberError(value)

    rational = _RATIONAL_PATTERN.match(text)
    if rational:
        numerator, denominator = int(rational.group(1)), int(rational.group(2))
        if denominator == 0:
            raise DivisionByZeroError(f"Rational number {text!r} has a zero denominator")
        return Fraction(numerator, denominator)

    if not _DECIMAL_PATTERN.match(text):
        raise MalformedNumberError(value)

    try:
        number = Decimal(text)
    except InvalidOperation:
        raise MalformedNumberError(value) from None
    return _parsed_decimal(number, value)


def to_integer(value: NumberLike) -> int:
    """
    Convert a value to an int without rounding.

    Raises:
        RoundingRequiredError: If the value has a fractional part
    """
    number = Fraction(parse_number(value))
    if number.denominator != 1:
        raise RoundingRequiredError(f"{value} is not an integer value")
    return number.numerator


def add(a: Number, b: Number) -> Number:
    """Exact sum."""
    if isinstance(a, Decimal) and isinstance(b, Decimal):
        return _context().add(a, b)
    return Fraction(a) + Fraction(b)


def subtract(a: Number, b: Number) -> Number:
    """Exact difference."""
    if isinstance(a, Decimal) and isinstance(b, Decimal):
        return _context().subtract(a, b)
    return Fraction(a) - Fraction(b)


def multiply(a: Number, b: Number) -> Number:
    """Exact product. Two decimals keep the sum of their scales (12.340 * 1.2 = 14.8080)."""
    if isinstance(a, Decimal) and isinstance(b, Decimal):
        return _context().multiply(a, b)
    return Fraction(a) * Fraction(b)


def divide(a: Number, b: Number) -> Fraction:
    """
    Exact quotient, always as a rational.

    Raises:
        DivisionByZeroError: If b is zero
    """
    divisor = Fraction(b)
    if divisor == 0:
        raise DivisionByZeroError("Division by zero")
    return Fraction(a) / divisor


def negate(value: Number) -> Number:
    if isinstance(value, Decimal):
        return value.copy_negate()
    return -value


def absolute(value: Number) -> Number:
    if isinstance(value, Decimal):
        return value.copy_abs()
    return abs(value)


def sign_of(value: Number) -> int:
    """-1, 0 or 1. Negative zero is zero."""
    return (value > 0) - (value < 0)


def compare(a: Number, b: Number) -> int:
    """Three-way comparison of exact values, regardless of scale."""
    left, right = Fraction(a), Fraction(b)
    return (left > right) - (left < right)


def scale_of(value: Decimal) -> int:
    """Number of digits after the decimal point."""
    exponent = value.as_tuple().exponent
    return -exponent if exponent < 0 else 0


def unscaled_value_of(value: Decimal) -> int:
    """Digits of the decimal as an integer, ignoring the point: 123.4567 -> 1234567."""
    sign, digits, exponent = value.as_tuple()
    unscaled = int("".join(str(digit) for digit in digits))
    if exponent > 0:
        unscaled *= 10**exponent
    return -unscaled if sign else unscaled


def from_unscaled(unscaled: int, scale: int) -> Decimal:
    """Build a decimal from its unscaled digits: (12345, 2) -> 123.45."""
    return Decimal(f"{unscaled}E{-scale}")


def move_point_right(value: Decimal, places: int) -> Decimal:
    """Shift the decimal point without rounding: (1.2345, 2) -> 123.45."""
    return _drop_positive_exponent(value.scaleb(places, context=_context()))


def normalize_zero(value: Decimal) -> Decimal:
    """Turn -0.00 into 0.00, keeping the scale."""
    return value.copy_abs() if value.is_zero() else value


def to_scale(value: Number, scale: int, rounding_mode: RoundingMode) -> Decimal:
    """
    Round a value to a fixed number of decimal places.

    Args:
        value: Exact decimal or rational
        scale: Target number of decimal places (>= 0)
        rounding_mode: Direction to round in when the value does not fit

    Returns:
        Decimal with exactly `scale` decimal places

    Raises:
        RoundingRequiredError: If rounding is needed and the mode is UNNECESSARY
    """
    fraction = Fraction(value)
    negative = fraction < 0
    quotient, remainder = divmod(abs(fraction.numerator) * 10**scale, fraction.denominator)

    if remainder == 0:
        return from_unscaled(-quotient if negative else quotient, scale)

    if rounding_mode is RoundingMode.UNNECESSARY:
        raise RoundingRequiredError(f"Rounding is necessary to represent {value} at scale {scale}")

    # One extra digit stands for the discarded part: 1 below half, 5 at half, 9 above half
    doubled = 2 * remainder
    if doubled < fraction.denominator:
        guard = 1
    elif doubled == fraction.denominator:
        guard = 5
    else:
        guard = 9

    digits = quotient * 10 + guard
    approximation = from_unscaled(-digits if negative else digits, scale + 1)

    return approximation.quantize(
        from_unscaled(1, scale),
        rounding=rounding_mode.value,
        context=_context(trap_inexact=False),
    )


def to_step(value: Number, scale: int, step: int, rounding_mode: RoundingMode) -> Decimal:
    """
    Round a value to a multiple of `step` units of the last place at `scale`.

    The value is rounded once, directly to the nearest allowed multiple, so
    1.014 at scale 2 with step 2 and HALF_DOWN gives 1.02.

    Raises:
        RoundingRequiredError: If rounding is needed and the mode is UNNECESSARY
    """
    if step == 1:
        return to_scale(value, scale, rounding_mode)

    units = Fraction(value) * 10**scale / step

    try:
        steps = int(to_scale(units, 0, rounding_mode))
    except RoundingRequiredError:
        raise RoundingRequiredError(
            f"Rounding is necessary to represent {value} as a multiple of {step} units at scale {scale}"
        ) from None

    return from_unscaled(steps * step, scale)


def to_exact_decimal(value: Number) -> Decimal:
    """
    Convert a value to a decimal without any rounding.

    Decimals are returned as they are. Rationals are expanded at the smallest
    scale that represents them exactly (11/20 -> 0.55).

    Raises:
        RoundingRequiredError: If the rational has no finite decimal expansion
    """
    if isinstance(value, Decimal):
        return _drop_positive_exponent(value)

    denominator = value.denominator
    twos = fives = 0
    while denominator % 2 == 0:
        denominator //= 2
        twos += 1
    while denominator % 5 == 0:
        denominator //= 5
        fives += 1

    if denominator != 1:
        raise RoundingRequiredError(f"{value} has no exact decimal representation")

    scale = max(twos, fives)
    return from_unscaled(value.numerator * 10**scale // value.denominator, scale)


def plain(value: Decimal) -> str:
    """Decimal as a plain string, never in scientific notation."""
    return format(value, "f")
