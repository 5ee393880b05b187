"""
Service Rate Base Class

Shared base class for flat-rate shipping service rules.
"""

from abc import ABC
from decimal import ROUND_CEILING, Context, Decimal, InvalidOperation

import polars as pl

from .types import Money, ShippingService, to_decimal


# Subtotals are compared as decimals, never floats
SUBTOTAL_PRECISION = 38
SUBTOTAL_SCALE = 18
SUBTOTAL_DTYPE = pl.Decimal(SUBTOTAL_PRECISION, SUBTOTAL_SCALE)


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def ships_to(country_code: str, country_col: str = "shipping_country") -> pl.Expr:
    """
    Check if the destination country matches.

    Args:
        country_code: ISO-2 country code (upper case)
        country_col: Column name containing the normalized country code

    Returns:
        Polars expression evaluating to True for matching rows
    """
    return pl.col(country_col) == country_code


def frame_subtotal(value, field: str = "order_subtotal") -> Decimal:
    """
    Fit a subtotal to SUBTOTAL_SCALE decimal places, rounding up.

    Rounding up keeps every comparison against a threshold with at most
    SUBTOTAL_SCALE places exact: 100.0000000000000000001 becomes
    100.000000000000000001, still above 100, and no value <= 100 moves
    past it.

    Raises:
        ValueError: If the value does not fit SUBTOTAL_DTYPE
    """
    value = to_decimal(value, field)
    try:
        return value.quantize(
            Decimal(1).scaleb(-SUBTOTAL_SCALE),
            context=Context(prec=SUBTOTAL_PRECISION, rounding=ROUND_CEILING),
        )
    except InvalidOperation as e:
        raise ValueError(f"{field} {value} is too large to rate") from e


def threshold_lit(threshold) -> pl.Expr:
    """Threshold as a literal of the subtotal column dtype."""
    return pl.lit(frame_subtotal(threshold, "threshold"), dtype=SUBTOTAL_DTYPE)


def subtotal_at_most(threshold, subtotal_col: str = "order_subtotal") -> pl.Expr:
    """Subtotal <= threshold (inclusive)."""
    return pl.col(subtotal_col) <= threshold_lit(threshold)


def subtotal_above(threshold, subtotal_col: str = "order_subtotal") -> pl.Expr:
    """Subtotal > threshold (exclusive)."""
    return pl.col(subtotal_col) > threshold_lit(threshold)


def column_suffix(code: str) -> str:
    """Column-safe form of a service code ("DOM.RP" -> "dom_rp")."""
    return code.lower().replace(".", "_").replace("-", "_").replace(" ", "_")


# =============================================================================
# BASE CLASS
# =============================================================================

class ServiceRate(ABC):
    """
    Base class for all service rate rules.

    Attributes:
        IDENTITY
            code        - Service code (e.g., "DOM.RP", "Free")
            label       - Human-readable service name

        PRICING
            price       - Flat price as Decimal
            currency    - ISO currency code (e.g., "CAD")
    """

    # -------------------------------------------------------------------------
    # IDENTITY
    # -------------------------------------------------------------------------
    code: str
    label: str

    # -------------------------------------------------------------------------
    # PRICING
    # -------------------------------------------------------------------------
    price: Decimal
    currency: str

    # -------------------------------------------------------------------------
    # METHODS
    # -------------------------------------------------------------------------

    @classmethod
    def service(cls) -> ShippingService:
        return ShippingService(cls.code, cls.label)

    @classmethod
    def amount(cls) -> Money:
        """Quoted amount for this service."""
        return Money(cls.price, cls.currency)

    @classmethod
    def flag_column(cls) -> str:
        return f"rate_{column_suffix(cls.code)}"

    @classmethod
    def cost_column(cls) -> str:
        return f"cost_{column_suffix(cls.code)}"

    @classmethod
    def conditions(cls) -> pl.Expr:
        """
        Polars expression for when this service is offered.

        Default returns True (offered for every addressable shipment).
        Override with the service's eligibility rule.
        """
        return pl.lit(True)
