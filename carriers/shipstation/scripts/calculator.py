"""
Ship Station Rate Calculator
============================

Interactive CLI tool to show the flat-rate quotes for a single shipment.

Usage:
    python -m carriers.shipstation.scripts.calculator
"""

from carriers.shipstation.calculate_rates import calculate_rates
from carriers.shipstation.data import DEFAULT_SERVICES, get_services
from carriers.shipstation.data.reference import CURRENCY, FREE_SHIPPING_THRESHOLD
from carriers.shipstation.version import VERSION
from shared.services import ShipmentContext


# Quotes from the interactive calculator are not attached to a stored method
CALCULATOR_METHOD_ID = "calculator"


def get_user_input() -> dict:
    """Prompt user for shipment details."""
    print("\n=== Ship Station Flat-Rate Calculator ===")
    print(f"Version: {VERSION}\n")

    # Destination
    country = input("Destination country (ISO-2, e.g. CA, US; blank = no address): ").strip()

    # Subtotal
    subtotal = input(f"Order subtotal ({CURRENCY}): ").strip()

    # Services
    default_codes = ",".join(s.code for s in DEFAULT_SERVICES)
    codes = input(f"Services [default: {default_codes}]: ").strip()

    return {
        "country_code": country or None,
        "order_subtotal": subtotal,
        "services": [c.strip() for c in codes.split(",") if c.strip()] if codes else None,
    }


def print_results(quotes: list, context: ShipmentContext) -> None:
    """Print calculation results."""
    print("\n" + "=" * 50)
    print("RATE QUOTES")
    print("=" * 50)

    # Input summary
    print(f"\nDestination: {context.country_code or '(no address)'}")
    print(f"Subtotal: {context.order_subtotal:.2f} {CURRENCY}", end="")
    if context.order_subtotal > FREE_SHIPPING_THRESHOLD:
        print(f" (above free shipping threshold of {FREE_SHIPPING_THRESHOLD})")
    else:
        print()

    if not quotes:
        print("\nNo services available for this shipment.\n")
        return

    print("\n--- Services ---")
    for quote in quotes:
        print(f"{quote.service.code:<8} {quote.service.label:<28} {quote.amount}")
    print()


def main():
    """Main entry point."""
    try:
        # Get user input
        shipment = get_user_input()

        services = DEFAULT_SERVICES
        if shipment["services"]:
            services = get_services(shipment["services"])

        context = ShipmentContext(
            country_code=shipment["country_code"],
            order_subtotal=shipment["order_subtotal"],
            has_address=shipment["country_code"] is not None,
        )

        quotes = calculate_rates(context, services, CALCULATOR_METHOD_ID)

        # Print results
        print_results(quotes, context)

    except KeyboardInterrupt:
        print("\n\nCancelled.")
    except ValueError as e:
        print(f"\nError: {e}")


if __name__ == "__main__":
    main()
