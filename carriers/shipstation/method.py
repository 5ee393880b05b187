"""
Ship Station Shipping Method

The rating method instance a host checkout talks to. Holds its own id,
its configuration, and an accessor that turns the host's order into a
ShipmentContext; rating itself is delegated to calculate_rates().
"""

from collections.abc import Callable
from typing import Any

from shared.services import RateQuote, ShipmentContext

from .calculate_rates import calculate_rates
from .config import ShippingMethodConfig
from .data import get_services
from .orders import context_from_order


class ShippingMethod:
    """Flat-rate Ship Station method."""

    plugin_id = "shipstation"
    label = "Ship Station"

    def __init__(
        self,
        shipping_method_id: str | int,
        configuration: ShippingMethodConfig | None = None,
        order_accessor: Callable[[Any], ShipmentContext] | None = None,
    ):
        if shipping_method_id is None:
            raise ValueError("shipping_method_id is required")

        if configuration is None:
            configuration = ShippingMethodConfig()
        configuration.validate()

        self.shipping_method_id = shipping_method_id
        self.configuration = configuration
        self.order_accessor = order_accessor or context_from_order
        self.services = get_services(configuration.services)

    def calculate_rates(self, order) -> list[RateQuote]:
        """Rate quotes for an order, stamped with this method's id."""
        context = self.order_accessor(order)
        return calculate_rates(context, self.services, self.shipping_method_id)

    def api_is_configured(self) -> bool:
        return self.configuration.api_is_configured()

    def __repr__(self) -> str:
        codes = ", ".join(s.code for s in self.services)
        return f"ShippingMethod(id={self.shipping_method_id!r}, services=[{codes}])"
