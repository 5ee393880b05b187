"""
Xpresspost - USA (USA.XP)

The only paid service for US destinations.
"""

from decimal import Decimal

import polars as pl

from .base import ServiceRate, ships_to, subtotal_at_most

from ..data.reference import CURRENCY, USA_COUNTRY, FREE_SHIPPING_THRESHOLD, SERVICE_LABELS


class USA_XP(ServiceRate):
    """Xpresspost - US destinations, subtotal <= threshold."""

    # Identity
    code = "USA.XP"
    label = SERVICE_LABELS[code]

    # Pricing
    price = Decimal("20")
    currency = CURRENCY

    @classmethod
    def conditions(cls) -> pl.Expr:
        return ships_to(USA_COUNTRY) & subtotal_at_most(FREE_SHIPPING_THRESHOLD)
