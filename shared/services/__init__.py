"""
Shared Services

Base class, helpers and value types for flat-rate service rules.
"""

from .base import (
    SUBTOTAL_DTYPE,
    ServiceRate,
    ships_to,
    subtotal_at_most,
    subtotal_above,
    column_suffix,
    frame_subtotal,
)
from .types import (
    DEFAULT_CURRENCY,
    ShippingService,
    Money,
    RateQuote,
    ShipmentContext,
    to_decimal,
    normalize_country,
)

__all__ = [
    # Base
    "SUBTOTAL_DTYPE",
    "ServiceRate",
    "ships_to",
    "subtotal_at_most",
    "subtotal_above",
    "column_suffix",
    "frame_subtotal",
    # Types
    "DEFAULT_CURRENCY",
    "ShippingService",
    "Money",
    "RateQuote",
    "ShipmentContext",
    "to_decimal",
    "normalize_country",
]
