"""
Ship Station Data

Reference data and loaders for the service catalog, pricing and shipments.

Structure:
    - reference/: Static reference data (pricing, service catalog)
    - loaders/: Shipment file loaders
"""

from shared.services import ShippingService

from .reference.pricing import CURRENCY, FREE_SHIPPING_THRESHOLD, DOMESTIC_COUNTRY, USA_COUNTRY
from .reference.services import FREE_SHIPPING_CODE, SERVICE_LABELS, DEFAULT_SERVICE_CODES

# Re-export loaders for convenience
from .loaders import load_shipments, REQUIRED_COLUMNS


# Catalog as value objects, keyed by code
SERVICES = {code: ShippingService(code, label) for code, label in SERVICE_LABELS.items()}

DEFAULT_SERVICES = [SERVICES[code] for code in DEFAULT_SERVICE_CODES]


def get_services(codes) -> list[ShippingService]:
    """
    Build an ordered service list from service codes.

    Duplicate codes are dropped, keeping the first occurrence.

    Raises:
        ValueError: If a code is not in the catalog
    """
    unknown = [code for code in codes if code not in SERVICES]
    if unknown:
        raise ValueError(
            f"Unknown service code(s): {', '.join(map(str, unknown))}. "
            f"Expected one of: {', '.join(SERVICES)}"
        )
    return [SERVICES[code] for code in dict.fromkeys(codes)]


__all__ = [
    # Catalog
    "SERVICES",
    "DEFAULT_SERVICES",
    "get_services",
    # Shipment loaders
    "load_shipments",
    "REQUIRED_COLUMNS",
    # Pricing config
    "CURRENCY",
    "FREE_SHIPPING_THRESHOLD",
    "DOMESTIC_COUNTRY",
    "USA_COUNTRY",
    # Service config
    "FREE_SHIPPING_CODE",
    "SERVICE_LABELS",
    "DEFAULT_SERVICE_CODES",
]
