"""
Ship Station Data Loaders

Loaders for shipment files to rate in batch.
"""

from .shipments import load_shipments, REQUIRED_COLUMNS

__all__ = [
    "load_shipments",
    "REQUIRED_COLUMNS",
]
