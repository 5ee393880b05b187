"""
Shipping Value Types

Immutable values passed in and out of every rate calculator.

    ShippingService  - one named delivery option (code + display label)
    Money            - non-negative decimal amount in a currency
    RateQuote        - one price offer for one service, stamped with the
                       id of the shipping method that produced it
    ShipmentContext  - what a calculator needs to know about a shipment:
                       destination country, order subtotal, address present
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import NamedTuple


DEFAULT_CURRENCY = "CAD"


# =============================================================================
# HELPERS
# =============================================================================

def to_decimal(value, field: str) -> Decimal:
    """
    Convert a number or numeric string to Decimal.

    Floats go through str() so 100.01 stays 100.01 rather than its binary
    expansion.

    Raises:
        ValueError: If the value is not numeric
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool) or value is None:
        raise ValueError(f"{field} must be a number, got {value!r}")
    try:
        return Decimal(str(value).strip())
    except InvalidOperation as e:
        raise ValueError(f"{field} must be a number, got {value!r}") from e


def normalize_country(country_code: str | None) -> str | None:
    """Upper-case and strip an ISO-2 country code. Empty becomes None."""
    if country_code is None:
        return None
    country_code = str(country_code).strip().upper()
    return country_code or None


# =============================================================================
# VALUE TYPES
# =============================================================================

class ShippingService(NamedTuple):
    """A shipping service offered by a method (e.g. "DOM.RP", "Regular Parcel - Canada")."""
    code: str
    label: str


@dataclass(frozen=True)
class Money:
    """Decimal amount in a currency. Amount is never negative."""

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self):
        amount = to_decimal(self.amount, "amount")
        if amount.is_nan() or amount < 0:
            raise ValueError(f"amount must be non-negative, got {amount}")
        if not self.currency:
            raise ValueError("currency is required")
        object.__setattr__(self, "amount", amount)
        object.__setattr__(self, "currency", self.currency.upper())

    def __str__(self) -> str:
        return f"{self.amount:.2f} {self.currency}"


@dataclass(frozen=True)
class RateQuote:
    """One rate offered to checkout. Transient; never persisted."""

    shipping_method_id: str | int
    service: ShippingService
    amount: Money


@dataclass(frozen=True)
class ShipmentContext:
    """
    Read-only rating input for one shipment.

    Attributes:
        country_code    - Destination ISO-2 code ("CA", "US"); None if unknown
        order_subtotal  - Order subtotal, non-negative
        has_address     - False when the shipping profile has no address
    """

    country_code: str | None
    order_subtotal: Decimal
    has_address: bool = True

    def __post_init__(self):
        subtotal = to_decimal(self.order_subtotal, "order_subtotal")
        if subtotal.is_nan() or subtotal < 0:
            raise ValueError(f"order_subtotal must be non-negative, got {subtotal}")
        object.__setattr__(self, "order_subtotal", subtotal)
        object.__setattr__(self, "country_code", normalize_country(self.country_code))

    @property
    def is_addressable(self) -> bool:
        """True when there is a destination to rate against."""
        return self.has_address and self.country_code is not None


__all__ = [
    "DEFAULT_CURRENCY",
    "ShippingService",
    "Money",
    "RateQuote",
    "ShipmentContext",
    "to_decimal",
    "normalize_country",
]
