#!/usr/bin/env python3
"""
Money Error Taxonomy

Every failure in the value engine is a logic or input error raised at the
point of the call. Nothing here is transient, so nothing is ever retried.
Each class also derives from the closest built-in exception so callers can
catch either the specific kind or the generic Python category.
"""

from typing import Any


class MoneyError(Exception):
    """Base class for all value engine errors."""

    pass


class MalformedNumberError(MoneyError, ValueError):
    """Raised when an input cannot be parsed as a number."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"Value {value!r} is not a valid number")


class UnknownCurrencyError(MoneyError, ValueError):
    """Raised when a currency code is not present in the registry."""

    def __init__(self, code: Any):
        self.code = code
        super().__init__(f"Unknown currency code: {code!r}")


class RoundingRequiredError(MoneyError, ArithmeticError):
    """Raised when a result does not fit the target scale and no rounding mode was given."""

    pass


class DivisionByZeroError(MoneyError, ZeroDivisionError):
    """Raised when dividing by exactly zero."""

    pass


class MoneyMismatchError(MoneyError, ValueError):
    """Raised when two monies cannot be combined."""

    pass


class CurrencyMismatchError(MoneyMismatchError):
    """Raised when two monies carry different currencies."""

    def __init__(self, expected: Any, actual: Any):
        self.expected = expected
        self.actual = actual
        super().__init__(f"The monies do not share the same currency: expected {expected}, got {actual}")


class ContextMismatchError(MoneyMismatchError):
    """Raised when two monies carry different contexts in an operation that requires the same one."""

    def __init__(self, operation: str, expected: Any, actual: Any):
        self.operation = operation
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"The monies do not share the same context: {operation}() requires {expected!r}, got {actual!r}. "
            "Convert one of them with with_context() first"
        )
