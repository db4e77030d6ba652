# tests/test_tax.py
from __future__ import annotations

import pytest

from invoice_pdf.models import Totals
from invoice_pdf.rendering.tax import TaxRegime, format_tax_amount, is_present, money_text, quantity_text


@pytest.mark.parametrize(
    "totals, expected",
    [
        (Totals(cgst="₹52.15", sgst="₹52.14"), TaxRegime.CGST_SGST),
        (Totals(cgst=9, sgst=9, igst=18), TaxRegime.CGST_SGST),
        (Totals(cgst="₹52.15", sgst=0, igst="₹104.29"), TaxRegime.IGST),
        (Totals(cgst=0, sgst=0, igst=104.29), TaxRegime.IGST),
        (Totals(cgst=0, sgst=0, igst=0, gst="₹104.29"), TaxRegime.GENERIC),
        (Totals(), TaxRegime.GENERIC),
        (Totals(cgst="₹0.00", sgst="₹0.00", igst=""), TaxRegime.GENERIC),
    ],
)
def test_regime_from_totals(totals, expected):
    assert TaxRegime.from_totals(totals) is expected


def test_is_present_treats_blank_and_zero_as_absent():
    assert not is_present(None)
    assert not is_present("")
    assert not is_present("   ")
    assert not is_present(0)
    assert not is_present(0.0)
    assert not is_present("₹0.00")
    assert is_present("₹12.00")
    assert is_present(-5)
    assert is_present("N/A")


@pytest.mark.parametrize(
    "value, expected",
    [
        (52.146, "52.15"),
        (104.29, "104.29"),
        (7, "7.00"),
        ("12.5", "12.50"),
        (" 3 ", "3.00"),
        (None, "0.00"),
        ("abc", "0.00"),
        ("52.15abc", "52.15"),
        ("-4.5 units", "-4.50"),
        ("1.5e1", "15.00"),
        ("₹52.15", "0.00"),
        ("", "0.00"),
        (float("nan"), "0.00"),
        (float("inf"), "0.00"),
    ],
)
def test_format_tax_amount(value, expected):
    assert format_tax_amount(value) == expected


def test_money_text_passes_display_strings_through():
    assert money_text("₹2,590.00") == "₹2,590.00"
    assert money_text(2590) == "2590.00"
    assert money_text(12.5) == "12.50"
    assert money_text(None) == ""


def test_quantity_text():
    assert quantity_text(2) == "2"
    assert quantity_text(2.0) == "2"
    assert quantity_text(1.5) == "1.5"
    assert quantity_text(None) == ""
