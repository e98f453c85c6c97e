"""
Core Value Engine

This package provides:
- Exact arithmetic helpers over `decimal` and `fractions`
- Currency descriptors and an explicit ISO 4217 registry
- Rounding contexts and the Money / RationalMoney value types
- Locale formatting and allocation reporting adapters
- Configuration management for the command-line tools
"""

from .arithmetic import RoundingMode
from .context import (
    CashContext,
    Context,
    DefaultContext,
    ExactContext,
    PrecisionContext,
    apply_context,
    context_step,
)
from .currency import Currency, CurrencyRegistry, resolve_currency
from .errors import (
    ContextMismatchError,
    CurrencyMismatchError,
    DivisionByZeroError,
    MalformedNumberError,
    MoneyError,
    MoneyMismatchError,
    RoundingRequiredError,
    UnknownCurrencyError,
)
from .formatting import MoneyFormatter, format_money, locale_formatter
from .money import Money
from .rational import RationalMoney

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
    "MoneyFormatter",
    "MoneyMismatchError",
    "PrecisionContext",
    "RationalMoney",
    "RoundingMode",
    "RoundingRequiredError",
    "UnknownCurrencyError",
    "apply_context",
    "context_step",
    "format_money",
    "locale_formatter",
    "resolve_currency",
]
