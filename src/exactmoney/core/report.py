#!/usr/bin/env python3
"""
Allocation Report

Tabulates an allocation as a pandas DataFrame for display. Amounts are kept
as exact Decimal objects; nothing is converted to float.
"""

from collections.abc import Sequence

import pandas as pd

from .money import Money


def allocation_frame(money: Money, ratios: Sequence[int]) -> pd.DataFrame:
    """
    Allocate a Money across ratios and return the parts as a table.

    Args:
        money: Amount to split
        ratios: Non-negative integer ratios

    Returns:
        DataFrame with columns: ratio, amount, minor_amount (one row per ratio)
    """
    parts = money.allocate(ratios)
    return pd.DataFrame(
        {
            "ratio": list(ratios),
            "amount": pd.Series([part.amount for part in parts], dtype="object"),
            "minor_amount": pd.Series([part.minor_amount for part in parts], dtype="object"),
        }
    )


def frame_total(frame: pd.DataFrame, money: Money) -> Money:
    """Sum the amount column back into a Money in the same currency and context."""
    total = Money.zero(money.currency, money.context)
    for amount in frame["amount"]:
        total = total.plus(amount)
    return total
