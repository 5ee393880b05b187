"""
Ship Station Flat-Rate Calculator

Two entry points over the same rate rules:

    calculate_rates(context, services, shipping_method_id)
        One shipment in, ordered list of RateQuote out. This is what
        checkout calls.

    calculate_rates_frame(df, services)
        DataFrame in, DataFrame out, for rating shipment files in batch.

REQUIRED INPUT COLUMNS (batch)
------------------------------
    shipping_country    - Destination ISO-2 code (null/blank when unknown)
    order_subtotal      - Order subtotal, non-negative

OPTIONAL INPUT COLUMNS (batch)
------------------------------
    has_address         - False when the shipment has no address

OUTPUT COLUMNS ADDED
--------------------
    supplement_shipments() adds:
        - has_address (normalized; false when country is blank)

    calculate() adds:
        - rate_* flags per configured service (dom_ep, dom_rp, usa_xp, free)
        - cost_* amounts per configured service (0.0 when not offered)
        - rate_count, cost_cheapest
        - calculator_version

USAGE
-----
    from carriers.shipstation.calculate_rates import calculate_rates
    quotes = calculate_rates(context, DEFAULT_SERVICES, shipping_method_id="3")
"""

import polars as pl

from shared.log import get_logger
from shared.services import (
    SUBTOTAL_DTYPE,
    RateQuote,
    ShipmentContext,
    ShippingService,
    frame_subtotal,
)

from .data import DEFAULT_SERVICES, REQUIRED_COLUMNS
from .rates import ServiceRate, get_rate
from .version import VERSION


logger = get_logger(__name__)


# =============================================================================
# SINGLE SHIPMENT
# =============================================================================

def calculate_rates(
    context: ShipmentContext,
    services: list[ShippingService],
    shipping_method_id: str | int,
) -> list[RateQuote]:
    """
    Calculate rate quotes for one shipment.

    Args:
        context: Destination and subtotal for the shipment
        services: Services enabled on the method; output follows this order
        shipping_method_id: Id of the method producing the quotes, stamped
            on every quote as given

    Returns:
        One RateQuote per service whose rule applies. Empty when the
        shipment has no address.

    Raises:
        ValueError: If shipping_method_id is None
    """
    if shipping_method_id is None:
        raise ValueError("shipping_method_id is required")

    if not context.is_addressable:
        logger.debug("no_destination_address", shipping_method_id=shipping_method_id)
        return []

    rated, unrated = resolve_rates(services)
    for code in unrated:
        logger.debug("service_without_rate", service=code)

    if not rated:
        return []

    df = calculate(shipment_frame(context), [rate for _, rate in rated])
    row = df.row(0, named=True)

    quotes = [
        RateQuote(
            shipping_method_id=shipping_method_id,
            service=service,
            amount=rate.amount(),
        )
        for service, rate in rated
        if row[rate.flag_column()]
    ]

    logger.debug(
        "rates_calculated",
        shipping_method_id=shipping_method_id,
        country=context.country_code,
        subtotal=str(context.order_subtotal),
        services=[q.service.code for q in quotes],
    )
    return quotes


def shipment_frame(context: ShipmentContext) -> pl.DataFrame:
    """Create a single-row DataFrame from a shipment context."""
    return pl.DataFrame(
        {
            "shipping_country": [context.country_code],
            "order_subtotal": [frame_subtotal(context.order_subtotal)],
            "has_address": [context.is_addressable],
        },
        schema={
            "shipping_country": pl.Utf8,
            "order_subtotal": SUBTOTAL_DTYPE,
            "has_address": pl.Boolean,
        },
    )


def resolve_rates(
    services: list[ShippingService],
) -> tuple[list[tuple[ShippingService, type[ServiceRate]]], list[str]]:
    """
    Pair services with their rate rules.

    Services are matched by code. Only the first service with a given code
    is kept.

    Returns:
        (rated, unrated): (service, rule) pairs in input order, and the
        codes that have no rule
    """
    rated = []
    unrated = []
    seen = set()
    for service in services:
        if service.code in seen:
            continue
        seen.add(service.code)
        rate = get_rate(service.code)
        if rate is None:
            unrated.append(service.code)
            continue
        rated.append((service, rate))
    return rated, unrated


# =============================================================================
# BATCH
# =============================================================================

def calculate_rates_frame(
    df: pl.DataFrame,
    services: list[ShippingService] | None = None,
) -> pl.DataFrame:
    """
    Calculate rate flags and costs for a shipment DataFrame.

    Args:
        df: Shipment DataFrame with required columns (see module docstring)
        services: Services to rate (DEFAULT_SERVICES if not provided)

    Returns:
        DataFrame with normalized inputs, rate flags, and costs
    """
    if services is None:
        services = DEFAULT_SERVICES

    rated, unrated = resolve_rates(services)
    for code in unrated:
        logger.warning("service_without_rate", service=code)
    rates = [rate for _, rate in rated]

    df = supplement_shipments(df)
    df = calculate(df, rates)

    logger.info(
        "frame_rated",
        shipments=len(df),
        without_rates=int((df["rate_count"] == 0).sum()),
        calculator_version=VERSION,
    )
    return df


# =============================================================================
# SUPPLEMENT SHIPMENTS
# =============================================================================

def supplement_shipments(df: pl.DataFrame) -> pl.DataFrame:
    """
    Validate and normalize shipment inputs.

    Raises:
        ValueError: If a required column is missing, or any subtotal is
            null or negative
    """
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required column(s): {', '.join(missing)}")

    df = _normalize_inputs(df)
    _validate_subtotals(df)
    return _add_has_address(df)


def _normalize_inputs(df: pl.DataFrame) -> pl.DataFrame:
    """Upper-case country codes (blank -> null) and cast subtotal to decimal."""
    country = pl.col("shipping_country").cast(pl.Utf8).str.strip_chars().str.to_uppercase()
    return df.with_columns([
        pl.when(country == "").then(None).otherwise(country).alias("shipping_country"),
        pl.col("order_subtotal").cast(SUBTOTAL_DTYPE),
    ])


def _validate_subtotals(df: pl.DataFrame) -> None:
    null_count = df["order_subtotal"].null_count()
    if null_count > 0:
        raise ValueError(f"{null_count} shipment(s) have no order_subtotal.")

    negative_count = df.filter(pl.col("order_subtotal") < pl.lit(0, dtype=SUBTOTAL_DTYPE)).height
    if negative_count > 0:
        raise ValueError(
            f"{negative_count} shipment(s) have a negative order_subtotal. "
            f"Subtotals must be >= 0."
        )


def _add_has_address(df: pl.DataFrame) -> pl.DataFrame:
    """
    Shipments are addressable when has_address is true (default true) and
    the country is known. Unknown has_address (null) counts as no address.
    """
    country_known = pl.col("shipping_country").is_not_null()

    if "has_address" in df.columns:
        expr = pl.col("has_address").cast(pl.Boolean).fill_null(False) & country_known
    else:
        expr = country_known

    return df.with_columns(expr.alias("has_address"))


# =============================================================================
# CALCULATE RATES
# =============================================================================

def calculate(df: pl.DataFrame, rates: list[type[ServiceRate]]) -> pl.DataFrame:
    """
    Calculate rate flags and costs for supplemented shipments.

    Args:
        df: Supplemented shipment DataFrame from supplement_shipments
        rates: Rate rules to apply, in output order

    Returns:
        DataFrame with rate flags, costs, summary columns and version
    """
    for rate in rates:
        df = _apply_single_rate(df, rate)

    df = _summarize(df, rates)
    df = _stamp_version(df)
    return df


def _apply_single_rate(df: pl.DataFrame, rate: type[ServiceRate]) -> pl.DataFrame:
    """Apply one rate rule. Rows without an address never get a rate."""
    flag_col = rate.flag_column()
    cost_col = rate.cost_column()

    df = df.with_columns(
        (pl.col("has_address") & rate.conditions()).fill_null(False).alias(flag_col)
    )
    df = df.with_columns(
        pl.when(pl.col(flag_col))
        .then(pl.lit(float(rate.price)))
        .otherwise(pl.lit(0.0))
        .alias(cost_col)
    )

    return df


def _summarize(df: pl.DataFrame, rates: list[type[ServiceRate]]) -> pl.DataFrame:
    """Add rate_count (quotes offered) and cost_cheapest (null when none)."""
    if not rates:
        return df.with_columns([
            pl.lit(0, dtype=pl.Int32).alias("rate_count"),
            pl.lit(None, dtype=pl.Float64).alias("cost_cheapest"),
        ])

    offered_costs = [
        pl.when(pl.col(r.flag_column())).then(pl.col(r.cost_column()))
        for r in rates
    ]
    return df.with_columns([
        pl.sum_horizontal([pl.col(r.flag_column()).cast(pl.Int32) for r in rates])
        .cast(pl.Int32)
        .alias("rate_count"),
        pl.min_horizontal(offered_costs).alias("cost_cheapest"),
    ])


def _stamp_version(df: pl.DataFrame) -> pl.DataFrame:
    """Stamp calculator version on output."""
    return df.with_columns(pl.lit(VERSION).alias("calculator_version"))


__all__ = [
    "calculate_rates",
    "calculate_rates_frame",
    "shipment_frame",
    "resolve_rates",
    "supplement_shipments",
    "calculate",
]
