"""
exactmoney - Exact Monetary Values

Immutable money amounts tied to a currency and a rounding context, with
exact arithmetic, explicit rounding, comparison and lossless allocation.

Key Features:
- Money never rounds silently: inexact results need an explicit RoundingMode
- Pluggable rounding contexts: default, cash, fixed precision, exact
- Allocation across ratios that always sums back to the original amount
- RationalMoney for chaining exact operations before a final rounding
- Explicit currency registry loaded from ISO 4217 data

Packages:
- core: Money, contexts, currencies, configuration, formatting
- cli: Command-line interface

Example Usage:
    from exactmoney import Money, RoundingMode

    Money.of("100", "USD").allocate([30, 20, 40, 40])
    Money.of("3/7", "EUR", rounding_mode=RoundingMode.DOWN)  # EUR 0.42
"""

__version__ = "0.3.0"

from .core.arithmetic import RoundingMode
from .core.context import CashContext, Context, DefaultContext, ExactContext, PrecisionContext
from .core.currency import Currency, CurrencyRegistry
from .core.errors import (
    ContextMismatchError,
    CurrencyMismatchError,
    DivisionByZeroError,
    MalformedNumberError,
    MoneyError,
    MoneyMismatchError,
    RoundingRequiredError,
    UnknownCurrencyError,
)
from .core.money import Money
from .core.rational import RationalMoney

__all__ = [
    "CashContext",
    "Context",
    "ContextMismatchError",
    "Currency",
    "CurrencyMismatchError",
    "CurrencyRegistry",
    "DefaultContext",
    "DivisionByZeroError",
    "ExactContext",
    "MalformedNumberError",
    "Money",
    "MoneyError",
    "MoneyMismatchError",
    "PrecisionContext",
    "RationalMoney",
    "RoundingMode",
    "RoundingRequiredError",
    "UnknownCurrencyError",
]
