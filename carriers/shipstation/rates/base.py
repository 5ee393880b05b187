"""
Service Rate Base Class

Re-exports from shared.services for Ship Station rates.
"""

from shared.services import ServiceRate, ships_to, subtotal_at_most, subtotal_above

__all__ = [
    "ServiceRate",
    "ships_to",
    "subtotal_at_most",
    "subtotal_above",
]
