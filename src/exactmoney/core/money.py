#!/usr/bin/env python3
"""
Money Value Type

Immutable monetary amount tied to a currency and a rounding context.

Every Money is created through `Money.create()`, which asks the context to
materialize the raw number at the right scale. Every arithmetic operation
computes an exact result and sends it through the same path with the Money's
own context, so a Money is never left unrounded relative to its context.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal
from fractions import Fraction
from typing import TYPE_CHECKING

from . import arithmetic
from .arithmetic import Number, NumberLike, RoundingMode
from .context import Context, DefaultContext, apply_context, context_step
from .currency import Currency, CurrencyRegistry, resolve_currency
from .errors import ContextMismatchError, CurrencyMismatchError, DivisionByZeroError
from .formatting import MoneyFormatter, locale_formatter

if TYPE_CHECKING:
    from .rational import RationalMoney

logger = logging.getLogger(__name__)

UNNECESSARY = RoundingMode.UNNECESSARY


@dataclass(frozen=True, eq=False, repr=False)
class Money:
    """
    A monetary value in a given currency and context.

    Use the factories (`of`, `of_minor`, `of_rational`, `zero`) rather than
    the constructor; they guarantee the amount matches the context.

    Examples:
        >>> Money.of("2.5", "USD")
        Money('2.50', 'USD', DefaultContext())
        >>> [str(m) for m in Money.of(100, "USD").allocate([30, 20, 40, 40])]
        ['USD 23.08', 'USD 15.39', 'USD 30.77', 'USD 30.76']

        >>> # Rounding is never silent: Money.of("1.2", "JPY") raises RoundingRequiredError
        >>> str(Money.of("1.2", "JPY", rounding_mode=RoundingMode.DOWN))
        'JPY 1'
    """

    amount: Decimal
    currency: Currency
    context: Context

    # Factories

    @classmethod
    def create(
        cls,
        amount: Number,
        currency: Currency,
        context: Context,
        rounding_mode: RoundingMode = UNNECESSARY,
    ) -> "Money":
        """Apply the context to an exact number and wrap the result."""
        return cls(apply_context(context, amount, currency, rounding_mode), currency, context)

    @classmethod
    def of(
        cls,
        amount: NumberLike,
        currency: Currency | str,
        context: Context | None = None,
        rounding_mode: RoundingMode = UNNECESSARY,
        *,
        registry: CurrencyRegistry | None = None,
    ) -> "Money":
        """
        Create Money from a number and a currency.

        By default the amount is scaled to the currency's default fraction
        digits, so `Money.of("2.5", "USD")` is `USD 2.50`.

        Args:
            amount: Decimal, Fraction, int, float or numeric string ("3/7" is a rational)
            currency: Currency descriptor or ISO code
            context: Rounding context (default: DefaultContext)
            rounding_mode: Direction to round in if the amount does not fit the context
            registry: Registry used to resolve codes (default: ISO 4217)

        Returns:
            Money object

        Raises:
            MalformedNumberError: If the amount is not a valid number
            UnknownCurrencyError: If the currency code is not registered
            RoundingRequiredError: If rounding is needed and the mode is UNNECESSARY
        """
        currency = resolve_currency(currency, registry)
        if context is None:
            context = DefaultContext()
        return cls.create(arithmetic.parse_number(amount), currency, context, rounding_mode)

    @classmethod
    def of_minor(
        cls,
        minor_amount: NumberLike,
        currency: Currency | str,
        *,
        registry: CurrencyRegistry | None = None,
    ) -> "Money":
        """
        Create Money from an integer count of minor units (e.g. cents).

        The result always has a DefaultContext and is always exact.

        Examples:
            Money.of_minor(600, "USD") -> USD 6.00
            Money.of_minor(600, "JPY") -> JPY 600

        Raises:
            RoundingRequiredError: If the minor amount is not an integer
        """
        currency = resolve_currency(currency, registry)
        units = arithmetic.to_integer(minor_amount)
        amount = arithmetic.from_unscaled(units, currency.default_fraction_digits)
        return cls(arithmetic.normalize_zero(amount), currency, DefaultContext())

    @classmethod
    def of_rational(
        cls,
        money: "RationalMoney",
        context: Context,
        rounding_mode: RoundingMode = UNNECESSARY,
    ) -> "Money":
        """Create Money from a RationalMoney, committing to a context."""
        return cls.create(money.amount, money.currency, context, rounding_mode)

    @classmethod
    def zero(
        cls,
        currency: Currency | str,
        context: Context | None = None,
        *,
        registry: CurrencyRegistry | None = None,
    ) -> "Money":
        """Zero in the given currency and context (default: DefaultContext)."""
        currency = resolve_currency(currency, registry)
        if context is None:
            context = DefaultContext()
        return cls.create(Decimal(0), currency, context)

    # Aggregates

    @classmethod
    def min(cls, first: "Money", *monies: "Money") -> "Money":
        """
        Smallest of the given monies. Ties keep the earliest one.

        Raises:
            CurrencyMismatchError: If the monies are not all in the same currency
        """
        result = first
        for money in monies:
            if money.is_less_than(result):
                result = money
        return result

    @classmethod
    def max(cls, first: "Money", *monies: "Money") -> "Money":
        """
        Largest of the given monies. Ties keep the earliest one.

        Raises:
            CurrencyMismatchError: If the monies are not all in the same currency
        """
        result = first
        for money in monies:
            if money.is_greater_than(result):
                result = money
        return result

    @classmethod
    def total(cls, first: "Money", *monies: "Money") -> "Money":
        """
        Sum of the given monies.

        Stricter than min/max: the monies must share both currency and context.

        Raises:
            CurrencyMismatchError: If the currencies differ
            ContextMismatchError: If the contexts differ
        """
        result = first
        for money in monies:
            result = result.plus(money)
        return result

    # Accessors

    @property
    def minor_amount(self) -> Decimal:
        """
        Amount in minor units of the currency.

        USD 1.23 gives 123. If the scale is larger than the currency's, the
        result keeps a fractional part: USD 1.2345 gives 123.45.
        """
        return arithmetic.move_point_right(self.amount, self.currency.default_fraction_digits)

    @property
    def unscaled_amount(self) -> int:
        """Digits of the amount as an integer, ignoring the point: USD 123.4567 gives 1234567."""
        return arithmetic.unscaled_value_of(self.amount)

    @property
    def sign(self) -> int:
        """-1, 0 or 1."""
        return arithmetic.sign_of(self.amount)

    def with_context(self, context: Context, rounding_mode: RoundingMode = UNNECESSARY) -> "Money":
        """Re-express this Money in another context."""
        return self.create(self.amount, self.currency, context, rounding_mode)

    def to_rational(self) -> "RationalMoney":
        """Exact, context-free copy of this Money for chaining operations."""
        from .rational import RationalMoney

        return RationalMoney(Fraction(self.amount), self.currency)

    # Arithmetic

    def plus(self, that: "Money | NumberLike", rounding_mode: RoundingMode = UNNECESSARY) -> "Money":
        """
        Add a Money or a number.

        Raises:
            CurrencyMismatchError: If `that` is a Money in another currency
            ContextMismatchError: If `that` is a Money in another context
            RoundingRequiredError: If the sum does not fit this context
        """
        operand = self._operand(that, "plus")
        return self.create(arithmetic.add(self.amount, operand), self.currency, self.context, rounding_mode)

    def minus(self, that: "Money | NumberLike", rounding_mode: RoundingMode = UNNECESSARY) -> "Money":
        """
        Subtract a Money or a number.

        Raises:
            CurrencyMismatchError: If `that` is a Money in another currency
            ContextMismatchError: If `that` is a Money in another context
            RoundingRequiredError: If the difference does not fit this context
        """
        operand = self._operand(that, "minus")
        return self.create(arithmetic.subtract(self.amount, operand), self.currency, self.context, rounding_mode)

    def multiplied_by(self, that: NumberLike, rounding_mode: RoundingMode = UNNECESSARY) -> "Money":
        """Multiply by a number."""
        operand = arithmetic.parse_number(that)
        return self.create(arithmetic.multiply(self.amount, operand), self.currency, self.context, rounding_mode)

    def divided_by(self, that: NumberLike, rounding_mode: RoundingMode = UNNECESSARY) -> "Money":
        """
        Divide by a number, exactly, then round to this context.

        Raises:
            DivisionByZeroError: If the divisor is zero
            RoundingRequiredError: If the quotient does not fit this context
        """
        operand = arithmetic.parse_number(that)
        return self.create(arithmetic.divide(self.amount, operand), self.currency, self.context, rounding_mode)

    def quotient(self, that: NumberLike) -> "Money":
        """
        Integer quotient of the division by an integer, in steps of this context.

        Truncates toward zero and never needs a rounding mode. USD 10.00 / 3
        gives USD 3.33. This is the building block of `allocate()`.

        Raises:
            RoundingRequiredError: If the divisor is not an integer
            DivisionByZeroError: If the divisor is zero
        """
        quotient, _ = self._divide_in_steps(that)
        return quotient

    def quotient_and_remainder(self, that: NumberLike) -> tuple["Money", "Money"]:
        """
        Quotient and remainder of the division by an integer.

        `quotient * divisor + remainder` always equals this Money exactly.
        USD 10.00 / 3 gives (USD 3.33, USD 0.01).

        Raises:
            RoundingRequiredError: If the divisor is not an integer
            DivisionByZeroError: If the divisor is zero
        """
        return self._divide_in_steps(that)

    def allocate(self, ratios: Sequence[int]) -> list["Money"]:
        """
        Split this Money according to integer ratios, without losing a unit.

        Each part first gets its share rounded toward zero. The leftover is
        then handed out one step at a time, starting from the first part.

        Example:
            USD 100.00 allocated [30, 20, 40, 40]
            -> [USD 23.08, USD 15.39, USD 30.77, USD 30.76]

        Args:
            ratios: Non-negative integers, at least one of them non-zero

        Returns:
            List of monies in the order of the ratios, summing to this Money

        Raises:
            ValueError: If the ratios are empty, negative, not integers or all zero
        """
        ratios = list(ratios)
        if not ratios:
            raise ValueError("Cannot allocate to an empty list of ratios")
        for ratio in ratios:
            if isinstance(ratio, bool) or not isinstance(ratio, int):
                raise ValueError(f"Ratios must be integers, got {ratio!r}")
            if ratio < 0:
                raise ValueError(f"Ratios must be non-negative, got {ratio}")

        total = sum(ratios)
        if total == 0:
            raise ValueError("Cannot allocate to ratios that sum to zero")

        monies = [self.multiplied_by(ratio).quotient(total) for ratio in ratios]

        remainder = self
        for money in monies:
            remainder = remainder.minus(money)

        if remainder.is_zero():
            return monies

        unit_amount = arithmetic.from_unscaled(context_step(self.context), arithmetic.scale_of(self.amount))
        unit = Money(unit_amount, self.currency, self.context)
        if remainder.is_negative():
            unit = unit.negated()

        logger.debug("Allocating remainder %s of %s in units of %s", remainder, self, unit)

        index = 0
        while not remainder.is_zero():
            monies[index] = monies[index].plus(unit)
            remainder = remainder.minus(unit)
            index = (index + 1) % len(monies)

        return monies

    def abs(self) -> "Money":
        """Absolute value, same context."""
        return Money(self.amount.copy_abs(), self.currency, self.context)

    def negated(self) -> "Money":
        """Negated value, same context."""
        return Money(arithmetic.normalize_zero(self.amount.copy_negate()), self.currency, self.context)

    def converted_to(
        self,
        currency: Currency | str,
        exchange_rate: NumberLike,
        context: Context | None = None,
        rounding_mode: RoundingMode = UNNECESSARY,
        *,
        registry: CurrencyRegistry | None = None,
    ) -> "Money":
        """
        Convert to another currency by multiplying with an exchange rate.

        The result keeps this Money's context unless one is given.
        USD 1.23 converted to JPY at 125 with DOWN gives JPY 153.

        Raises:
            UnknownCurrencyError: If the target currency code is not registered
            RoundingRequiredError: If the result does not fit the context
        """
        currency = resolve_currency(currency, registry)
        if context is None:
            context = self.context
        rate = arithmetic.parse_number(exchange_rate)
        amount = arithmetic.multiply(Fraction(self.amount), rate)
        return self.create(amount, currency, context, rounding_mode)

    # Sign predicates

    def is_zero(self) -> bool:
        return self.amount.is_zero()

    def is_positive(self) -> bool:
        return self.sign > 0

    def is_positive_or_zero(self) -> bool:
        return self.sign >= 0

    def is_negative(self) -> bool:
        return self.sign < 0

    def is_negative_or_zero(self) -> bool:
        return self.sign <= 0

    # Comparison (currency must match, context may differ)

    def compare_to(self, that: "Money | NumberLike") -> int:
        """
        Compare with a Money or a number: -1, 0 or 1.

        Raises:
            CurrencyMismatchError: If `that` is a Money in another currency
        """
        return arithmetic.compare(self.amount, self._operand(that))

    def is_equal_to(self, that: "Money | NumberLike") -> bool:
        return self.compare_to(that) == 0

    def is_less_than(self, that: "Money | NumberLike") -> bool:
        return self.compare_to(that) < 0

    def is_less_than_or_equal_to(self, that: "Money | NumberLike") -> bool:
        return self.compare_to(that) <= 0

    def is_greater_than(self, that: "Money | NumberLike") -> bool:
        return self.compare_to(that) > 0

    def is_greater_than_or_equal_to(self, that: "Money | NumberLike") -> bool:
        return self.compare_to(that) >= 0

    # Formatting

    def format_with(self, formatter: MoneyFormatter) -> str:
        """Format through a formatter callable taking (amount, currency_code)."""
        return formatter(arithmetic.plain(self.amount), self.currency.code)

    def format_to(self, locale: str) -> str:
        """Format for a locale, e.g. 'en_US' gives '$1.23'."""
        return self.format_with(locale_formatter(locale))

    # Internal helpers

    def _operand(self, that: "Money | NumberLike", operation: str | None = None) -> Number:
        """Extract the number from an operand, checking currency, and context when `operation` is given."""
        if isinstance(that, Money):
            if not that.currency.is_(self.currency):
                raise CurrencyMismatchError(self.currency, that.currency)
            if operation is not None and that.context != self.context:
                raise ContextMismatchError(operation, self.context, that.context)
            return that.amount
        return arithmetic.parse_number(that)

    def _divide_in_steps(self, that: NumberLike) -> tuple["Money", "Money"]:
        divisor = arithmetic.to_integer(that)
        if divisor == 0:
            raise DivisionByZeroError("Division by zero")

        step = context_step(self.context)
        scale = arithmetic.scale_of(self.amount)
        units = arithmetic.unscaled_value_of(self.amount) // step

        # Truncate toward zero; the remainder takes the sign of the dividend
        quotient = abs(units) // abs(divisor)
        if (units < 0) != (divisor < 0):
            quotient = -quotient
        remainder = units - quotient * divisor

        return (
            self._with_amount(arithmetic.from_unscaled(quotient * step, scale)),
            self._with_amount(arithmetic.from_unscaled(remainder * step, scale)),
        )

    def _with_amount(self, amount: Decimal) -> "Money":
        return Money(arithmetic.normalize_zero(amount), self.currency, self.context)

    # Python operators

    def __add__(self, other: object) -> "Money":
        """Same as plus()."""
        if isinstance(other, (Money, Decimal, Fraction, int, float, str)):
            return self.plus(other)
        return NotImplemented

    def __radd__(self, other: object) -> "Money":
        """Number + Money, which also lets sum() start from 0."""
        if isinstance(other, (Decimal, Fraction, int, float)):
            return self.plus(other)
        return NotImplemented

    def __sub__(self, other: object) -> "Money":
        """Same as minus()."""
        if isinstance(other, (Money, Decimal, Fraction, int, float, str)):
            return self.minus(other)
        return NotImplemented

    def __rsub__(self, other: object) -> "Money":
        """Number - Money."""
        if isinstance(other, (Decimal, Fraction, int, float)):
            return self.negated().plus(other)
        return NotImplemented

    def __mul__(self, other: object) -> "Money":
        """Same as multiplied_by()."""
        if isinstance(other, (Decimal, Fraction, int, float)):
            return self.multiplied_by(other)
        return NotImplemented

    def __rmul__(self, other: object) -> "Money":
        return self.__mul__(other)

    def __truediv__(self, other: object) -> "Money":
        """Same as divided_by()."""
        if isinstance(other, (Decimal, Fraction, int, float)):
            return self.divided_by(other)
        return NotImplemented

    def __neg__(self) -> "Money":
        return self.negated()

    def __pos__(self) -> "Money":
        return self

    def __abs__(self) -> "Money":
        return self.abs()

    def __lt__(self, other: "Money") -> bool:
        """Less than comparison; currencies must match."""
        if not isinstance(other, Money):
            return NotImplemented
        return self.is_less_than(other)

    def __le__(self, other: "Money") -> bool:
        """Less than or equal comparison; currencies must match."""
        if not isinstance(other, Money):
            return NotImplemented
        return self.is_less_than_or_equal_to(other)

    def __gt__(self, other: "Money") -> bool:
        """Greater than comparison; currencies must match."""
        if not isinstance(other, Money):
            return NotImplemented
        return self.is_greater_than(other)

    def __ge__(self, other: "Money") -> bool:
        """Greater than or equal comparison; currencies must match."""
        if not isinstance(other, Money):
            return NotImplemented
        return self.is_greater_than_or_equal_to(other)

    def __eq__(self, other: object) -> bool:
        """Structural equality: same currency, same context and same numeric amount."""
        if not isinstance(other, Money):
            return NotImplemented
        return self.currency == other.currency and self.context == other.context and self.amount == other.amount

    def __hash__(self) -> int:
        """Hash consistent with equality."""
        return hash((self.amount, self.currency.code, self.context))

    def __str__(self) -> str:
        """Non-localized string such as 'USD 1.23'."""
        return f"{self.currency.code} {arithmetic.plain(self.amount)}"

    def __repr__(self) -> str:
        """Repr format."""
        return f"Money({arithmetic.plain(self.amount)!r}, {self.currency.code!r}, {self.context!r})"
