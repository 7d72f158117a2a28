"""Money-like derived accessors over integer cents attributes.

Usage:
    @catalog.declare
    def Plan(t):
        t.attribute("id", int)
        t.attribute("price_cents", int)
        t.monetize("price_cents")          # record.price -> Money

    Plan.find(1).price.amount  # Decimal("9.99")
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

_CENTS_SUFFIX = "_cents"


@dataclass(frozen=True, slots=True)
class Money:
    """An amount of money stored as integer cents."""

    cents: int
    currency: str = "USD"

    @property
    def amount(self) -> Decimal:
        return Decimal(self.cents).scaleb(-2)

    def format(self) -> str:
        """Format as ``1,234.50 USD``."""
        return f"{self.amount:,.2f} {self.currency}"

    def __str__(self) -> str:
        return self.format()


@dataclass(frozen=True, slots=True)
class MoneyField:
    """Declaration of a derived money accessor.

    Attributes:
        cents_attribute: Integer attribute holding cents.
        accessor: Record accessor name.
        currency: Currency code, or None for the catalog default.
    """

    cents_attribute: str
    accessor: str
    currency: str | None = None


def money_accessor_name(cents_attribute: str) -> str:
    """Default accessor name: ``price_cents`` -> ``price``."""
    if cents_attribute.endswith(_CENTS_SUFFIX):
        return cents_attribute[: -len(_CENTS_SUFFIX)]
    return cents_attribute
