"""
Order Context Accessor

Reads the rating inputs out of an order from the host system. The host
passes orders as plain mappings:

    {
        "subtotal": {"number": "57.50", "currency_code": "CAD"},   # or 57.50
        "shipping_profile": {
            "address": {"country_code": "CA", "postal_code": "K1A 0B1", ...}
        }
    }

Hosts with a different order model pass their own accessor to
ShippingMethod instead.
"""

from collections.abc import Mapping

from shared.log import get_logger
from shared.services import ShipmentContext

from .data.reference import CURRENCY


logger = get_logger(__name__)


def context_from_order(order: Mapping) -> ShipmentContext:
    """
    Build a ShipmentContext from an order mapping.

    A missing shipping profile, missing address, or empty address all mean
    "no address" and produce an unaddressable context rather than an error.

    Raises:
        ValueError: If the shipping profile or address is not a mapping, the
            currency code is not a string, or the subtotal is missing or not
            a valid non-negative number
    """
    profile = _mapping(order.get("shipping_profile"), "shipping_profile")
    address = _mapping(profile.get("address"), "shipping_profile.address")
    has_address = any(value not in (None, "") for value in address.values())

    subtotal = order.get("subtotal")
    if isinstance(subtotal, Mapping):
        currency = subtotal.get("currency_code")
        if currency is not None and not isinstance(currency, str):
            raise ValueError(f"subtotal currency_code must be a string, got {type(currency).__name__}")
        if currency and currency.strip().upper() != CURRENCY:
            logger.warning("subtotal_currency_mismatch", currency=currency, expected=CURRENCY)
        subtotal = subtotal.get("number")
    if subtotal is None:
        raise ValueError("order has no subtotal")

    return ShipmentContext(
        country_code=address.get("country_code"),
        order_subtotal=subtotal,
        has_address=has_address,
    )


def _mapping(value, field: str) -> Mapping:
    """Empty values mean "not given"; anything else must be a mapping."""
    if not value:
        return {}
    if not isinstance(value, Mapping):
        raise ValueError(f"order {field} must be a mapping, got {type(value).__name__}")
    return value


__all__ = ["context_from_order"]
