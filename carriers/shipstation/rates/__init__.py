"""
Rates Package

Exports all service rate rules and lookups.

Each rule is evaluated independently per shipment. The paid rules and the
free rule split on the same threshold, so at most the domestic pair or the
free rule applies to any one shipment.
"""

from .base import ServiceRate
from .regular_parcel import DOM_RP
from .expedited_parcel import DOM_EP
from .xpresspost_usa import USA_XP
from .free_shipping import FREE

from ..data.reference import CURRENCY, SERVICE_LABELS


# All rates, in catalog order
ALL = [DOM_EP, DOM_RP, USA_XP, FREE]

BY_CODE = {r.code: r for r in ALL}


# =============================================================================
# HELPERS
# =============================================================================

def get_rate(code: str) -> type[ServiceRate] | None:
    """Get the rate rule for a service code, or None if it has no rule."""
    return BY_CODE.get(code)


# =============================================================================
# VALIDATION
# =============================================================================

def validate_rates() -> None:
    """
    Validate rate configuration integrity.

    Raises ValueError if any configuration issues are found.
    Called at import time to fail fast on configuration errors.
    """
    errors = []

    codes = [r.code for r in ALL]
    duplicates = sorted({c for c in codes if codes.count(c) > 1})
    if duplicates:
        errors.append(f"duplicate service code(s): {', '.join(duplicates)}")

    for r in ALL:
        # Check code is in the service catalog
        if r.code not in SERVICE_LABELS:
            errors.append(f"{r.code}: not in SERVICE_LABELS")

        # Check price is a non-negative Decimal
        if r.price < 0:
            errors.append(f"{r.code}: price {r.price} is negative")

        # Check all rates quote in the same currency
        if r.currency != CURRENCY:
            errors.append(f"{r.code}: currency {r.currency} != {CURRENCY}")

    if errors:
        raise ValueError("Rate configuration errors:\n  " + "\n  ".join(errors))


# Run validation at import time
validate_rates()

__all__ = [
    # Base
    "ServiceRate",
    # Rate classes
    "DOM_RP",
    "DOM_EP",
    "USA_XP",
    "FREE",
    # Lists
    "ALL",
    "BY_CODE",
    # Helpers
    "get_rate",
    "validate_rates",
]
