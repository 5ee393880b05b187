"""
Free Shipping (Free)

THRESHOLD PATTERN
-----------------
Free shipping is the only rule that ignores the destination country. Once
the subtotal goes above FREE_SHIPPING_THRESHOLD it is offered everywhere,
and every paid service stops applying (their rules use <= on the same
threshold), so a shipment never sees both paid and free quotes.

If the method does not enable "Free", orders above the threshold get no
quotes at all.
"""

from decimal import Decimal

import polars as pl

from .base import ServiceRate, subtotal_above

from ..data.reference import CURRENCY, FREE_SHIPPING_CODE, FREE_SHIPPING_THRESHOLD, SERVICE_LABELS


class FREE(ServiceRate):
    """Free shipping - any country, subtotal > threshold."""

    # Identity
    code = FREE_SHIPPING_CODE
    label = SERVICE_LABELS[code]

    # Pricing
    price = Decimal("0")
    currency = CURRENCY

    @classmethod
    def conditions(cls) -> pl.Expr:
        return subtotal_above(FREE_SHIPPING_THRESHOLD)
