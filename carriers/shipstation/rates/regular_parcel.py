"""
Regular Parcel - Canada (DOM.RP)

Domestic ground service. Offered for Canadian destinations until the
order qualifies for free shipping.
"""

from decimal import Decimal

import polars as pl

from .base import ServiceRate, ships_to, subtotal_at_most

from ..data.reference import CURRENCY, DOMESTIC_COUNTRY, FREE_SHIPPING_THRESHOLD, SERVICE_LABELS


class DOM_RP(ServiceRate):
    """Regular Parcel - CA destinations, subtotal <= threshold."""

    # Identity
    code = "DOM.RP"
    label = SERVICE_LABELS[code]

    # Pricing
    price = Decimal("12")
    currency = CURRENCY

    @classmethod
    def conditions(cls) -> pl.Expr:
        return ships_to(DOMESTIC_COUNTRY) & subtotal_at_most(FREE_SHIPPING_THRESHOLD)
