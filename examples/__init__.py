"""Example lookup catalogs for lookupgraph.

This package demonstrates library usage but is not part of the core API.
"""

from .readme_example import Carrier, ExpressMethod, ShippingMethod, catalog

__all__ = [
    "Carrier",
    "ExpressMethod",
    "ShippingMethod",
    "catalog",
]
