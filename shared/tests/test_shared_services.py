"""
Unit Tests for Shared Service Types and Helpers

Run with: pytest shared/tests/test_shared_services.py -v
"""

import importlib
import logging
from decimal import Decimal

import pytest
import polars as pl
import structlog

import shared.log
from shared.log import SecretMaskingProcessor, setup_logging
from shared.services import (
    SUBTOTAL_DTYPE,
    Money,
    RateQuote,
    ServiceRate,
    ShipmentContext,
    ShippingService,
    column_suffix,
    frame_subtotal,
    ships_to,
    subtotal_above,
    subtotal_at_most,
    to_decimal,
)


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def restore_logging():
    """Put structlog and the root logger back after a test configures them."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    structlog.reset_defaults()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


@pytest.fixture
def shipments():
    return pl.DataFrame({
        "shipping_country": ["CA", "US", None, "CA"],
        "order_subtotal": [
            Decimal("99.99"),
            Decimal("100"),
            Decimal("100.01"),
            Decimal("100.000000000000001"),
        ],
    }, schema={"shipping_country": pl.Utf8, "order_subtotal": SUBTOTAL_DTYPE})


# =============================================================================
# MONEY TESTS
# =============================================================================

class TestMoney:
    """Tests for the Money value type."""

    def test_amount_coerced_to_decimal(self):
        assert Money(12).amount == Decimal("12")
        assert Money("18.50").amount == Decimal("18.50")
        assert Money(100.01).amount == Decimal("100.01")

    def test_default_currency(self):
        assert Money(1).currency == "CAD"

    def test_currency_upper_cased(self):
        assert Money(1, "usd").currency == "USD"

    def test_value_equality(self):
        assert Money(Decimal("12"), "CAD") == Money(12, "CAD")
        assert Money(12, "CAD") != Money(12, "USD")

    def test_negative_rejected(self):
        with pytest.raises(ValueError, match="non-negative"):
            Money(-1)

    def test_not_a_number_rejected(self):
        with pytest.raises(ValueError, match="must be a number"):
            Money("twelve")

    def test_immutable(self):
        money = Money(1)
        with pytest.raises(AttributeError):
            money.amount = Decimal("2")

    def test_str(self):
        assert str(Money(12)) == "12.00 CAD"


# =============================================================================
# SHIPMENT CONTEXT TESTS
# =============================================================================

class TestShipmentContext:
    """Tests for ShipmentContext normalization."""

    def test_country_normalized(self):
        assert ShipmentContext(" ca ", 1).country_code == "CA"

    def test_blank_country_is_none(self):
        context = ShipmentContext("", 1)
        assert context.country_code is None
        assert context.is_addressable is False

    def test_addressable(self):
        assert ShipmentContext("CA", 1).is_addressable is True
        assert ShipmentContext("CA", 1, has_address=False).is_addressable is False

    def test_subtotal_decimal(self):
        assert ShipmentContext("CA", "100.00").order_subtotal == Decimal("100")

    def test_negative_subtotal_rejected(self):
        with pytest.raises(ValueError, match="order_subtotal"):
            ShipmentContext("CA", Decimal("-0.01"))

    def test_nan_subtotal_rejected(self):
        with pytest.raises(ValueError):
            ShipmentContext("CA", Decimal("NaN"))

    def test_hashable_value(self):
        assert len({ShipmentContext("CA", 1), ShipmentContext("ca", "1")}) == 1


# =============================================================================
# QUOTE AND SERVICE TESTS
# =============================================================================

class TestQuoteTypes:
    """Tests for ShippingService and RateQuote."""

    def test_service_fields(self):
        service = ShippingService("DOM.RP", "Regular Parcel - Canada")
        assert service.code == "DOM.RP"
        assert service.label == "Regular Parcel - Canada"

    def test_quote_equality(self):
        service = ShippingService("DOM.RP", "Regular Parcel - Canada")
        assert RateQuote("3", service, Money(12)) == RateQuote("3", service, Money("12.0"))


class TestToDecimal:

    def test_bool_rejected(self):
        with pytest.raises(ValueError):
            to_decimal(True, "amount")

    def test_none_rejected(self):
        with pytest.raises(ValueError):
            to_decimal(None, "amount")

    def test_passthrough(self):
        value = Decimal("3.50")
        assert to_decimal(value, "amount") is value


# =============================================================================
# RULE HELPER TESTS
# =============================================================================

class TestRuleHelpers:
    """Tests for polars rule expressions."""

    def test_ships_to(self, shipments):
        result = shipments.select(ships_to("CA").fill_null(False))
        assert result.to_series().to_list() == [True, False, False, True]

    def test_subtotal_at_most_inclusive(self, shipments):
        result = shipments.select(subtotal_at_most(Decimal("100")))
        assert result.to_series().to_list() == [True, True, False, False]

    def test_subtotal_above_exclusive(self, shipments):
        result = shipments.select(subtotal_above(100))
        assert result.to_series().to_list() == [False, False, True, True]

    def test_frame_subtotal_rounds_up(self):
        assert frame_subtotal(Decimal("100.0000000000000000001")) > Decimal("100")
        assert frame_subtotal(Decimal("99.99")) == Decimal("99.99")
        assert frame_subtotal("100") == Decimal("100")

    def test_frame_subtotal_too_large(self):
        with pytest.raises(ValueError, match="too large"):
            frame_subtotal(Decimal("1e20"))

    def test_column_suffix(self):
        assert column_suffix("DOM.RP") == "dom_rp"
        assert column_suffix("Free") == "free"

    def test_base_class_defaults(self, shipments):
        class FLAT(ServiceRate):
            code = "FLAT"
            label = "Flat"
            price = Decimal("5")
            currency = "CAD"

        assert FLAT.service() == ShippingService("FLAT", "Flat")
        assert FLAT.amount() == Money(5, "CAD")
        assert shipments.select(FLAT.conditions()).to_series().to_list() == [True]


# =============================================================================
# LOGGING TESTS
# =============================================================================

class TestLogging:
    """Tests for logging helpers."""

    def test_secrets_masked(self):
        event = {
            "event": "configuration_loaded",
            "api": {"username": "user", "password": "hunter2"},
            "api_key": "abc",
            "api_secret": "",
        }
        masked = SecretMaskingProcessor()(None, "info", event)
        assert masked["api"]["password"] == "***MASKED***"
        assert masked["api"]["username"] == "user"
        assert masked["api_key"] == "***MASKED***"
        assert masked["api_secret"] == ""

    def test_unknown_level_rejected(self):
        with pytest.raises(ValueError, match="log level"):
            setup_logging("LOUD")

    def test_unknown_format_rejected(self):
        with pytest.raises(ValueError, match="log format"):
            setup_logging("INFO", "xml")

    def test_import_leaves_structlog_unconfigured(self, restore_logging):
        structlog.reset_defaults()
        importlib.reload(shared.log)
        assert not structlog.is_configured()

    def test_setup_configures_structlog(self, restore_logging):
        setup_logging("DEBUG", "json")
        assert structlog.is_configured()
        assert logging.getLogger().level == logging.DEBUG
