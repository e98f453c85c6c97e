#!/usr/bin/env python3
"""
Rounding Contexts

A context decides the canonical decimal form a Money amount must take: its
scale, and the step (in units of the last decimal place) that the amount must
be a multiple of.

The set of contexts is closed:

- DefaultContext: scale = currency's default fraction digits, step 1.
- CashContext(step): currency's default scale, amounts are multiples of
  `step` minor units (e.g. CHF cash rounds to 5 rappen).
- PrecisionContext(scale, step=1): fixed scale, independent of the currency.
- ExactContext: no rounding at all; the natural scale of each result is kept.

Contexts are plain frozen values with structural equality. The behaviour lives
in `apply_context()` and `context_step()`, which handle every variant.
"""

from dataclasses import dataclass
from decimal import Decimal

from .arithmetic import (
    Number,
    RoundingMode,
    normalize_zero,
    to_exact_decimal,
    to_scale,
    to_step,
)
from .currency import Currency


def _check_step(step: object) -> None:
    if isinstance(step, bool) or not isinstance(step, int) or step < 1:
        raise ValueError(f"Step must be a positive integer, got {step!r}")


@dataclass(frozen=True)
class DefaultContext:
    """Currency's default scale, no cash rounding."""


@dataclass(frozen=True)
class CashContext:
    """Currency's default scale, amounts are multiples of `step` minor units."""

    step: int

    def __post_init__(self) -> None:
        _check_step(self.step)


@dataclass(frozen=True)
class PrecisionContext:
    """Fixed scale and step, regardless of the currency."""

    scale: int
    step: int = 1

    def __post_init__(self) -> None:
        if isinstance(self.scale, bool) or not isinstance(self.scale, int) or self.scale < 0:
            raise ValueError(f"Scale must be a non-negative integer, got {self.scale!r}")
        _check_step(self.step)


@dataclass(frozen=True)
class ExactContext:
    """No rounding; results keep whatever scale they need to be exact."""


Context = DefaultContext | CashContext | PrecisionContext | ExactContext


def context_step(context: Context) -> int:
    """Step of the context, in units of the amount's last decimal place."""
    if isinstance(context, (CashContext, PrecisionContext)):
        return context.step
    if isinstance(context, (DefaultContext, ExactContext)):
        return 1
    raise TypeError(f"Unsupported context: {context!r}")


def apply_context(
    context: Context,
    value: Number,
    currency: Currency,
    rounding_mode: RoundingMode = RoundingMode.UNNECESSARY,
) -> Decimal:
    """
    Materialize a value as the canonical decimal for a context.

    Args:
        context: Context whose policy applies
        value: Exact decimal or rational to convert
        currency: Currency supplying the default scale
        rounding_mode: Direction to round in when the value does not fit.
            Ignored by ExactContext, which never rounds.

    Returns:
        Decimal at the context's scale, aligned to its step

    Raises:
        RoundingRequiredError: If the value does not fit and the mode is UNNECESSARY,
            or for ExactContext, if the value has no finite decimal expansion
    """
    if isinstance(context, ExactContext):
        result = to_exact_decimal(value)
    elif isinstance(context, DefaultContext):
        result = to_scale(value, currency.default_fraction_digits, rounding_mode)
    elif isinstance(context, CashContext):
        result = to_step(value, currency.default_fraction_digits, context.step, rounding_mode)
    elif isinstance(context, PrecisionContext):
        result = to_step(value, context.scale, context.step, rounding_mode)
    else:
        raise TypeError(f"Unsupported context: {context!r}")

    return normalize_zero(result)
