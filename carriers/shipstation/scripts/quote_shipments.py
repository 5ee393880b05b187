"""
Quote Shipments from File
=========================

Rates every shipment in a CSV file and writes the flags and costs back out.

Usage:
    python -m carriers.shipstation.scripts.quote_shipments shipments.csv
    python -m carriers.shipstation.scripts.quote_shipments shipments.csv --output rated.csv
    python -m carriers.shipstation.scripts.quote_shipments shipments.csv --services DOM.RP,DOM.EP
    python -m carriers.shipstation.scripts.quote_shipments shipments.csv --config shipstation.json
"""

import argparse
import sys
from pathlib import Path

import polars as pl

from carriers.shipstation.calculate_rates import calculate_rates_frame
from carriers.shipstation.config import load_configuration
from carriers.shipstation.data import DEFAULT_SERVICES, get_services, load_shipments
from carriers.shipstation.rates import get_rate
from carriers.shipstation.version import VERSION
from shared.log import setup_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Rate shipments in a CSV file with the Ship Station flat-rate table",
    )
    parser.add_argument("input", type=Path, help="Shipments CSV (shipping_country, order_subtotal)")
    parser.add_argument("--output", type=Path, help="Write rated shipments to this CSV")
    services = parser.add_mutually_exclusive_group()
    services.add_argument("--services", help="Comma-separated service codes (default: all)")
    services.add_argument("--config", type=Path, help="Method configuration JSON (uses its services)")
    parser.add_argument("--log-level", default="WARNING", help="DEBUG, INFO, WARNING, ERROR")
    parser.add_argument("--log-format", default="console", choices=["console", "json"])
    return parser.parse_args(argv)


def resolve_services(args: argparse.Namespace) -> list:
    if args.config:
        return get_services(load_configuration(args.config).services)
    if args.services:
        return get_services([c.strip() for c in args.services.split(",") if c.strip()])
    return DEFAULT_SERVICES


def print_summary(df: pl.DataFrame, services: list) -> None:
    """Print quote counts and costs per service."""
    print("\n" + "=" * 50)
    print(f"SHIPMENTS RATED: {len(df):,}  (calculator {VERSION})")
    print("=" * 50)

    print(f"\n{'Service':<8} {'Quoted':>8} {'Cost':>12}")
    for service in services:
        rate = get_rate(service.code)
        if rate is None:
            continue
        quoted = int(df[rate.flag_column()].sum())
        cost = df[rate.cost_column()].sum()
        print(f"{service.code:<8} {quoted:>8,} {cost:>12,.2f}")

    no_rates = int((df["rate_count"] == 0).sum())
    print(f"\nShipments without any rate: {no_rates:,}")
    print()


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    try:
        setup_logging(args.log_level, args.log_format)
        services = resolve_services(args)

        print(f"Loading shipments from {args.input}...")
        df = load_shipments(args.input)
        print(f"  Loaded {len(df):,} shipments")

        df = calculate_rates_frame(df, services)
        print_summary(df, services)

        if args.output:
            df.write_csv(args.output)
            print(f"Rated shipments saved to: {args.output}")

    except (FileNotFoundError, ValueError) as e:
        print(f"\nError: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
