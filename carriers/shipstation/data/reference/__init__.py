"""
Reference Data

Static reference data for pricing and the service catalog.
"""

from .pricing import CURRENCY, FREE_SHIPPING_THRESHOLD, DOMESTIC_COUNTRY, USA_COUNTRY
from .services import FREE_SHIPPING_CODE, SERVICE_LABELS, DEFAULT_SERVICE_CODES

__all__ = [
    "CURRENCY",
    "FREE_SHIPPING_THRESHOLD",
    "DOMESTIC_COUNTRY",
    "USA_COUNTRY",
    "FREE_SHIPPING_CODE",
    "SERVICE_LABELS",
    "DEFAULT_SERVICE_CODES",
]
