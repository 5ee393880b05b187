"""
Flat-Rate Pricing

Threshold and currency for the Ship Station flat-rate table.
Last updated: 2026-10-19

RATE TABLE
----------
    Service   Applies when                          Price (CAD)
    DOM.RP    country == CA  and subtotal <= 100    12
    DOM.EP    country == CA  and subtotal <= 100    18
    USA.XP    country == US  and subtotal <= 100    20
    Free      subtotal > 100 (any country)          0

The threshold is inclusive on the paid side: a subtotal of exactly 100
still pays for shipping.
"""

from decimal import Decimal

CURRENCY = "CAD"

FREE_SHIPPING_THRESHOLD = Decimal("100")

DOMESTIC_COUNTRY = "CA"
USA_COUNTRY = "US"
