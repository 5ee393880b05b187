"""
Ship Station Carrier Module

Flat-rate shipping quotes by destination country and order subtotal.
"""

from .calculate_rates import calculate_rates, calculate_rates_frame
from .config import ShippingMethodConfig, load_configuration
from .method import ShippingMethod
from .version import VERSION

__all__ = [
    "calculate_rates",
    "calculate_rates_frame",
    "ShippingMethod",
    "ShippingMethodConfig",
    "load_configuration",
    "VERSION",
]
