"""
Expedited Parcel - Canada (DOM.EP)

Faster domestic service, priced above Regular Parcel. Same eligibility.
"""

from decimal import Decimal

import polars as pl

from .base import ServiceRate, ships_to, subtotal_at_most

from ..data.reference import CURRENCY, DOMESTIC_COUNTRY, FREE_SHIPPING_THRESHOLD, SERVICE_LABELS


class DOM_EP(ServiceRate):
    """Expedited Parcel - CA destinations, subtotal <= threshold."""

    # Identity
    code = "DOM.EP"
    label = SERVICE_LABELS[code]

    # Pricing
    price = Decimal("18")
    currency = CURRENCY

    @classmethod
    def conditions(cls) -> pl.Expr:
        return ships_to(DOMESTIC_COUNTRY) & subtotal_at_most(FREE_SHIPPING_THRESHOLD)
