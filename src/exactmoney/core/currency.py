#!/usr/bin/env python3
"""
Currency Descriptors and Registry

A Currency is a thin, immutable descriptor: ISO code, numeric code, name and
the number of fraction digits of its minor unit (2 for USD cents, 0 for JPY,
3 for TND millimes).

Currencies are looked up through an explicit CurrencyRegistry object rather
than process-wide state. The packaged ISO 4217 table is available through
`CurrencyRegistry.iso()`, and custom currencies are added by building a new
registry with `with_currencies()`.
"""

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from functools import lru_cache
from importlib.resources import files
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from .errors import UnknownCurrencyError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Currency:
    """
    Immutable currency descriptor.

    Two currencies are the same currency when their codes match.

    Examples:
        >>> tnd = Currency("TND", 788, "Tunisian Dinar", 3)
        >>> str(tnd)
        'TND'
        >>> tnd.default_fraction_digits
        3
    """

    code: str
    numeric_code: int
    name: str
    default_fraction_digits: int

    def __post_init__(self) -> None:
        if not isinstance(self.code, str) or not self.code.strip():
            raise ValueError(f"Currency code must be a non-empty string, got {self.code!r}")
        if not isinstance(self.default_fraction_digits, int) or self.default_fraction_digits < 0:
            raise ValueError(
                f"Fraction digits must be a non-negative integer, got {self.default_fraction_digits!r}"
            )
        object.__setattr__(self, "code", self.code.strip().upper())

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Currency":
        """Build a currency from a registry file entry."""
        return cls(
            code=str(data["code"]),
            numeric_code=int(data.get("numeric_code", 0)),
            name=str(data.get("name", data["code"])),
            default_fraction_digits=int(data["fraction_digits"]),
        )

    def is_(self, other: "Currency | str") -> bool:
        """Check whether this is the given currency or currency code."""
        if isinstance(other, Currency):
            return self.code == other.code
        return self.code == str(other).strip().upper()

    def __eq__(self, other: object) -> bool:
        """Check equality by code."""
        if not isinstance(other, Currency):
            return NotImplemented
        return self.code == other.code

    def __hash__(self) -> int:
        """Hash based on currency code."""
        return hash(self.code)

    def __str__(self) -> str:
        """Currency code."""
        return self.code

    def __repr__(self) -> str:
        """Repr format."""
        return f"Currency({self.code!r}, {self.numeric_code}, {self.name!r}, {self.default_fraction_digits})"


@dataclass(frozen=True, eq=False)
class CurrencyRegistry:
    """
    Immutable lookup table of currencies by code.

    Registries are never modified in place; `with_currencies()` returns a new
    registry, so one registry can be shared freely between threads. The table
    is held in a read-only mapping. Registries compare and hash by identity.
    """

    _currencies: Mapping[str, Currency] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_currencies", MappingProxyType(dict(self._currencies)))

    @classmethod
    def of(cls, currencies: Iterable[Currency]) -> "CurrencyRegistry":
        """Build a registry from currency descriptors. Later duplicates replace earlier ones."""
        return cls({currency.code: currency for currency in currencies})

    @classmethod
    def iso(cls) -> "CurrencyRegistry":
        """Registry of the packaged ISO 4217 currencies."""
        return _load_iso_registry()

    @classmethod
    def from_yaml(cls, path: Path | str) -> "CurrencyRegistry":
        """
        Load a registry from a YAML file.

        The file holds a top-level `currencies` list whose entries have
        `code`, `numeric_code`, `name` and `fraction_digits`.

        Args:
            path: YAML file to read

        Returns:
            Registry with the currencies from the file
        """
        with open(path, encoding="utf-8") as f:
            registry = cls._from_text(f.read())
        logger.info("Loaded %d currencies from %s", len(registry), path)
        return registry

    @classmethod
    def _from_text(cls, text: str) -> "CurrencyRegistry":
        data = yaml.safe_load(text) or {}
        entries = data.get("currencies", [])
        if not isinstance(entries, list):
            raise ValueError("Currency file must contain a 'currencies' list")
        return cls.of(Currency.from_dict(entry) for entry in entries)

    def with_currencies(self, *currencies: Currency) -> "CurrencyRegistry":
        """Return a new registry that also contains the given currencies."""
        merged = dict(self._currencies)
        for currency in currencies:
            merged[currency.code] = currency
        return CurrencyRegistry(merged)

    def merged_with(self, other: "CurrencyRegistry") -> "CurrencyRegistry":
        """Return a new registry holding both tables; `other` wins on duplicate codes."""
        return self.with_currencies(*other)

    def lookup(self, code: str) -> Currency:
        """
        Find a currency by its code (case-insensitive).

        Raises:
            UnknownCurrencyError: If the code is not registered
        """
        if not isinstance(code, str):
            raise UnknownCurrencyError(code)
        try:
            return self._currencies[code.strip().upper()]
        except KeyError:
            raise UnknownCurrencyError(code) from None

    def resolve(self, currency: "Currency | str") -> Currency:
        """Return the descriptor itself, or look the code up."""
        if isinstance(currency, Currency):
            return currency
        return self.lookup(currency)

    def codes(self) -> list[str]:
        """Sorted list of registered codes."""
        return sorted(self._currencies)

    def __contains__(self, code: object) -> bool:
        if isinstance(code, Currency):
            code = code.code
        return isinstance(code, str) and code.strip().upper() in self._currencies

    def __iter__(self) -> Iterator[Currency]:
        return iter(self._currencies.values())

    def __len__(self) -> int:
        return len(self._currencies)

    def __repr__(self) -> str:
        return f"CurrencyRegistry({len(self)} currencies)"


@lru_cache(maxsize=1)
def _load_iso_registry() -> CurrencyRegistry:
    text = (files("exactmoney.core") / "data" / "currencies.yaml").read_text(encoding="utf-8")
    registry = CurrencyRegistry._from_text(text)
    logger.debug("Loaded %d ISO 4217 currencies", len(registry))
    return registry


def resolve_currency(currency: Currency | str, registry: CurrencyRegistry | None = None) -> Currency:
    """
    Return a currency descriptor as is, or look its code up.

    Codes are looked up in `registry`, or in the ISO 4217 registry when none
    is given.

    Raises:
        UnknownCurrencyError: If the code is not registered
    """
    if registry is None:
        registry = CurrencyRegistry.iso()
    return registry.resolve(currency)
