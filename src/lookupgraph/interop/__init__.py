"""Thin derived accessors layered over record attributes."""

from lookupgraph.interop.money import Money, MoneyField, money_accessor_name

__all__ = [
    "Money",
    "MoneyField",
    "money_accessor_name",
]
