"""
Unit Tests for Shipment Loading and the Batch Quote Script

Run with: pytest carriers/shipstation/tests/test_quote_shipments.py -v
"""

import json
from decimal import Decimal

import pytest
import polars as pl

from carriers.shipstation.data import get_services, load_shipments
from carriers.shipstation.scripts import calculator, quote_shipments
from shared.services import SUBTOTAL_DTYPE


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture(autouse=True)
def keep_logging(monkeypatch):
    """Leave the root logger alone while running main()."""
    monkeypatch.setattr(quote_shipments, "setup_logging", lambda *args: None)


@pytest.fixture
def shipments_csv(tmp_path):
    """Small shipments export."""
    path = tmp_path / "shipments.csv"
    path.write_text(
        "order_id,shipping_country,order_subtotal,has_address\n"
        "A1,CA,50,true\n"
        "A2,US,75.25,true\n"
        "A3,CA,150,true\n"
        "A4,,20,false\n",
        encoding="utf-8",
    )
    return path


# =============================================================================
# LOADER TESTS
# =============================================================================

class TestLoadShipments:
    """Tests for CSV loading."""

    def test_schema(self, shipments_csv):
        df = load_shipments(shipments_csv)
        assert df.schema["shipping_country"] == pl.Utf8
        assert df.schema["order_subtotal"] == SUBTOTAL_DTYPE
        assert df.schema["has_address"] == pl.Boolean
        assert len(df) == 4

    def test_text_has_address(self, tmp_path):
        path = tmp_path / "text.csv"
        path.write_text("shipping_country,order_subtotal,has_address\nCA,1,yes\nCA,1,no\n", encoding="utf-8")
        df = load_shipments(path)
        assert df["has_address"].to_list() == [True, False]

    def test_precise_subtotal_kept(self, tmp_path):
        path = tmp_path / "precise.csv"
        path.write_text("shipping_country,order_subtotal\nCA,100.000000000000001\n", encoding="utf-8")
        df = load_shipments(path)
        assert df["order_subtotal"][0] > Decimal("100")

    def test_non_numeric_subtotal(self, tmp_path):
        path = tmp_path / "words.csv"
        path.write_text("shipping_country,order_subtotal\nCA,lots\n", encoding="utf-8")
        with pytest.raises(ValueError, match="non-numeric"):
            load_shipments(path)

    def test_missing_column(self, tmp_path):
        path = tmp_path / "bad.csv"
        path.write_text("shipping_country\nCA\n", encoding="utf-8")
        with pytest.raises(ValueError, match="order_subtotal"):
            load_shipments(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_shipments(tmp_path / "nope.csv")


# =============================================================================
# SCRIPT TESTS
# =============================================================================

class TestQuoteShipmentsScript:
    """Tests for the quote_shipments command."""

    def test_writes_output(self, shipments_csv, tmp_path, capsys):
        output = tmp_path / "rated.csv"
        assert quote_shipments.main([str(shipments_csv), "--output", str(output)]) == 0

        rated = pl.read_csv(output)
        assert rated["rate_count"].to_list() == [2, 1, 1, 0]
        assert "SHIPMENTS RATED: 4" in capsys.readouterr().out

    def test_services_option(self, shipments_csv, tmp_path):
        output = tmp_path / "rated.csv"
        args = [str(shipments_csv), "--services", "DOM.RP", "--output", str(output)]
        assert quote_shipments.main(args) == 0
        assert "rate_dom_ep" not in pl.read_csv(output).columns

    def test_config_option(self, shipments_csv, tmp_path):
        config = tmp_path / "shipstation.json"
        config.write_text(json.dumps({"services": ["USA.XP"]}), encoding="utf-8")
        args = quote_shipments.parse_args([str(shipments_csv), "--config", str(config)])
        assert quote_shipments.resolve_services(args) == get_services(["USA.XP"])

    def test_unknown_service_fails(self, shipments_csv, capsys):
        assert quote_shipments.main([str(shipments_csv), "--services", "DOM.XX"]) == 1
        assert "Unknown service code" in capsys.readouterr().err

    def test_missing_input_fails(self, tmp_path, capsys):
        assert quote_shipments.main([str(tmp_path / "none.csv")]) == 1
        assert "not found" in capsys.readouterr().err


class TestCalculatorScript:
    """Tests for the interactive calculator."""

    def run(self, monkeypatch, answers):
        answers = iter(answers)
        monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))
        calculator.main()

    def test_domestic_quotes(self, monkeypatch, capsys):
        self.run(monkeypatch, ["CA", "50", ""])
        out = capsys.readouterr().out
        assert "DOM.EP" in out
        assert "18.00 CAD" in out
        assert "USA.XP" not in out

    def test_no_address(self, monkeypatch, capsys):
        self.run(monkeypatch, ["", "250", ""])
        out = capsys.readouterr().out
        assert "(no address)" in out
        assert "No services available" in out

    def test_selected_services(self, monkeypatch, capsys):
        self.run(monkeypatch, ["CA", "150", "DOM.RP,DOM.EP"])
        assert "No services available" in capsys.readouterr().out

    def test_bad_subtotal(self, monkeypatch, capsys):
        self.run(monkeypatch, ["CA", "lots", ""])
        assert "Error: order_subtotal must be a number" in capsys.readouterr().out
