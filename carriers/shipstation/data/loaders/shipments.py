"""
Shipment File Loader

Loads shipments to rate from a CSV export of the order system.

REQUIRED COLUMNS
----------------
    shipping_country    - Destination ISO-2 code (blank when no address)
    order_subtotal      - Order subtotal in CAD

OPTIONAL COLUMNS
----------------
    has_address         - true/false; derived from shipping_country if absent

Any other columns (order ids, dates) are carried through as text.
"""

from pathlib import Path

import polars as pl

from shared.services import SUBTOTAL_DTYPE


REQUIRED_COLUMNS = ["shipping_country", "order_subtotal"]


def load_shipments(path: str | Path) -> pl.DataFrame:
    """
    Load shipments from CSV.

    Args:
        path: CSV file path

    Returns:
        DataFrame with shipping_country as Utf8 and order_subtotal as SUBTOTAL_DTYPE

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If a required column is missing or a subtotal is not numeric
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Shipment file not found: {path}")

    # Read as text so order ids and country codes keep their form
    df = pl.read_csv(path, infer_schema_length=0)

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"{path.name} is missing required column(s): {', '.join(missing)}")

    try:
        df = df.with_columns(pl.col("order_subtotal").str.strip_chars().cast(SUBTOTAL_DTYPE))
    except pl.exceptions.InvalidOperationError as e:
        raise ValueError(f"{path.name} has a non-numeric order_subtotal") from e

    if "has_address" in df.columns:
        df = df.with_columns(
            pl.col("has_address")
            .str.strip_chars()
            .str.to_lowercase()
            .is_in(["true", "1", "yes", "y"])
            .alias("has_address")
        )

    return df
