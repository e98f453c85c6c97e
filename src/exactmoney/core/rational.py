#!/usr/bin/env python3
"""
RationalMoney: exact, context-free money.

Used to chain several operations without any intermediate rounding, then
commit to a context once at the end:

    total = Money.of("10", "USD").to_rational().divided_by(3).multiplied_by(3)
    total.with_context(DefaultContext())  # USD 10.00, not USD 9.99
"""

from dataclasses import dataclass
from fractions import Fraction
from typing import TYPE_CHECKING

from . import arithmetic
from .arithmetic import NumberLike, RoundingMode
from .context import Context
from .currency import Currency, CurrencyRegistry, resolve_currency
from .errors import CurrencyMismatchError

if TYPE_CHECKING:
    from .money import Money


@dataclass(frozen=True, eq=False, repr=False)
class RationalMoney:
    """Immutable pair of an exact rational amount and a currency."""

    amount: Fraction
    currency: Currency

    @classmethod
    def of(
        cls,
        amount: NumberLike,
        currency: Currency | str,
        *,
        registry: CurrencyRegistry | None = None,
    ) -> "RationalMoney":
        """Create a RationalMoney from any supported number and a currency."""
        return cls(Fraction(arithmetic.parse_number(amount)), resolve_currency(currency, registry))

    def plus(self, that: "RationalMoney | NumberLike") -> "RationalMoney":
        return self._with(self.amount + self._operand(that))

    def minus(self, that: "RationalMoney | NumberLike") -> "RationalMoney":
        return self._with(self.amount - self._operand(that))

    def multiplied_by(self, that: NumberLike) -> "RationalMoney":
        return self._with(self.amount * Fraction(arithmetic.parse_number(that)))

    def divided_by(self, that: NumberLike) -> "RationalMoney":
        return self._with(arithmetic.divide(self.amount, arithmetic.parse_number(that)))

    def with_context(self, context: Context, rounding_mode: RoundingMode = RoundingMode.UNNECESSARY) -> "Money":
        """Commit to a context, producing a Money."""
        from .money import Money

        return Money.of_rational(self, context, rounding_mode)

    def _operand(self, that: "RationalMoney | NumberLike") -> Fraction:
        if isinstance(that, RationalMoney):
            if not that.currency.is_(self.currency):
                raise CurrencyMismatchError(self.currency, that.currency)
            return that.amount
        return Fraction(arithmetic.parse_number(that))

    def _with(self, amount: Fraction) -> "RationalMoney":
        return RationalMoney(amount, self.currency)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RationalMoney):
            return NotImplemented
        return self.currency == other.currency and self.amount == other.amount

    def __hash__(self) -> int:
        return hash((self.amount, self.currency.code))

    def __str__(self) -> str:
        """String such as 'EUR 7716/625'."""
        return f"{self.currency.code} {self.amount}"

    def __repr__(self) -> str:
        return f"RationalMoney('{self.amount}', {self.currency.code!r})"
