#!/usr/bin/env python3
"""
Locale Formatting Adapter

Money never formats itself beyond its plain "<CODE> <amount>" string. Locale
formatting is delegated to a formatter callable that receives the amount as a
plain decimal string and the currency code. The default formatter forwards to
Babel's CLDR-based `format_currency`.
"""

from collections.abc import Callable
from decimal import Decimal

from babel.numbers import format_currency

MoneyFormatter = Callable[[str, str], str]


def format_money(amount: str, currency_code: str, locale: str) -> str:
    """
    Format an amount for a locale with Babel.

    Args:
        amount: Plain decimal string, e.g. "1234.50"
        currency_code: ISO currency code, e.g. "EUR"
        locale: Locale identifier, e.g. "en_US" or "de_DE"

    Returns:
        Localized string such as "$1,234.50"
    """
    return format_currency(Decimal(amount), currency_code, locale=locale)


def locale_formatter(locale: str) -> MoneyFormatter:
    """Build a formatter bound to one locale."""

    def formatter(amount: str, currency_code: str) -> str:
        return format_money(amount, currency_code, locale)

    return formatter
