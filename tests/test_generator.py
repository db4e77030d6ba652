# tests/test_generator.py
from __future__ import annotations

import io

import pytest
from pypdf import PdfReader

from invoice_pdf.config import Settings
from invoice_pdf.exceptions import RenderError
from invoice_pdf.rendering import generator as generator_mod
from invoice_pdf.rendering.generator import InvoicePdfGenerator, generate_invoice_pdf
from invoice_pdf.rendering.templates import get_template, normalize_template_name, zen
from invoice_pdf.rendering.templates.minimalist import MinimalistTemplate
from invoice_pdf.rendering.templates.zen import DEFAULT_COLORS as ZEN_COLORS
from invoice_pdf.rendering.templates.zen import ZenTemplate
from tests.conftest import FakeImages, RecordingCanvas


def _text(pdf: bytes) -> str:
    return "\n".join(p.extract_text() or "" for p in PdfReader(io.BytesIO(pdf)).pages)


def _pages(pdf: bytes) -> int:
    return len(PdfReader(io.BytesIO(pdf)).pages)


@pytest.fixture
def recording(monkeypatch):
    monkeypatch.setattr(generator_mod, "PageCanvas", RecordingCanvas)
    RecordingCanvas.last = None
    return lambda: RecordingCanvas.last


def test_template_lookup_is_case_insensitive_with_fallback(images):
    assert normalize_template_name("ZEN") == "zen"
    assert normalize_template_name(" Minimalist ") == "minimalist"
    assert normalize_template_name("nonexistent") == "minimalist"
    assert normalize_template_name(None) == "minimalist"
    assert isinstance(get_template("Zen", images), ZenTemplate)
    assert isinstance(get_template("bogus", images), MinimalistTemplate)


def test_minimalist_cgst_invoice_end_to_end(settings, images, cgst_invoice, company_config):
    pdf = InvoicePdfGenerator(settings, images).generate(cgst_invoice, company_config)

    assert pdf.startswith(b"%PDF")
    text = _text(pdf)
    assert "ABC Fashion" in text
    assert "BILL TO" in text
    assert "CGST" in text and "SGST" in text
    assert "IGST" not in text
    assert "Dan Brown" in text
    assert "Maharashtra jurisdiction" in text


def test_zen_igst_invoice_end_to_end(settings, images, igst_invoice, company_config):
    pdf = InvoicePdfGenerator(settings, images).generate(igst_invoice, {**company_config, "template": "zen"})
    text = _text(pdf)
    assert "Order Items" in text
    assert "IGST" in text
    assert "CGST" not in text


def test_unknown_template_falls_back_to_minimalist(settings, images, cgst_invoice):
    pdf = InvoicePdfGenerator(settings, images).generate(cgst_invoice, {"template": "nonexistent"})
    text = _text(pdf)
    assert "BILL TO" in text
    assert "Order Items" not in text


def test_settings_default_template_applies_without_config(images, cgst_invoice):
    pdf = InvoicePdfGenerator(Settings(default_template="zen"), images).generate(cgst_invoice)
    assert "Order Items" in _text(pdf)


def test_config_template_beats_settings_default(images, cgst_invoice):
    gen = InvoicePdfGenerator(Settings(default_template="zen"), images)
    assert "BILL TO" in _text(gen.generate(cgst_invoice, {"template": "minimalist"}))


def test_long_invoice_spans_pages(settings, images, cgst_invoice):
    item = cgst_invoice["lineItems"][0]
    cgst_invoice["lineItems"] = [dict(item, name=f"Item {i}") for i in range(40)]
    pdf = generate_invoice_pdf(cgst_invoice, {"template": "zen"}, settings=settings, image_store=images)
    assert _pages(pdf) >= 2
    text = _text(pdf)
    assert "Item 0" in text and "Item 39" in text


def test_seed_color_from_settings_when_no_color_config(images, cgst_invoice, recording):
    gen = InvoicePdfGenerator(Settings(default_primary_color="#ff0000"), images)
    gen.generate(cgst_invoice, {"template": "zen"})
    banner = recording().of("rect")[0]
    assert banner["fill"] == "#ff0000"


def test_color_config_beats_settings_seed(images, cgst_invoice, recording):
    gen = InvoicePdfGenerator(Settings(default_primary_color="#ff0000"), images)
    gen.generate(cgst_invoice, {"template": "zen", "colors": {"secondary": "#00ff00"}})
    banner = recording().of("rect")[0]
    assert banner["fill"] == ZEN_COLORS.primary


def test_stage_failure_surfaces_as_render_error(settings, images, cgst_invoice, monkeypatch):
    def boom(*args, **kwargs):
        raise ValueError("totals exploded")

    monkeypatch.setattr(ZenTemplate, "render_totals", boom)
    with pytest.raises(RenderError) as exc:
        InvoicePdfGenerator(settings, images).generate(cgst_invoice, {"template": "zen"})
    assert isinstance(exc.value.__cause__, ValueError)
    assert "totals exploded" in str(exc.value)


def test_image_failures_do_not_abort_render(settings, cgst_invoice, company_config):
    company_config["company"].update({"logo": "shops/x/logo.png", "signature": "shops/x/sig.png"})
    pdf = InvoicePdfGenerator(settings, FakeImages()).generate(cgst_invoice, company_config)
    text = _text(pdf)
    assert "ABC Fashion" in text
    assert "Authorized Signatory" not in text


def test_signature_rendered_when_available(settings, images, cgst_invoice, company_config):
    company_config["company"]["signature"] = "shops/mystore/signature.png"
    pdf = InvoicePdfGenerator(settings, images).generate(cgst_invoice, company_config)
    assert "Authorized Signatory" in _text(pdf)


@pytest.mark.parametrize("count", [7, 8])
def test_zen_short_overflow_keeps_totals_together(settings, images, cgst_invoice, company_config, recording, count):
    item = cgst_invoice["lineItems"][0]
    cgst_invoice["lineItems"] = [dict(item, name=f"Item {i}") for i in range(count)]
    company_config["company"]["signature"] = "shops/mystore/signature.png"

    pdf = InvoicePdfGenerator(settings, images).generate(cgst_invoice, {**company_config, "template": "zen"})

    assert _pages(pdf) <= 2
    c = recording()
    assert c.page_count <= 2
    texts = c.of("text")
    total_label = [op for op in texts if op["text"] == "Total:"][0]
    total_value = [op for op in texts if op["text"] == "₹2190.00"][-1]
    assert total_label["page"] == total_value["page"]
    box = [op for op in c.of("rect") if op["h"] == zen.TOTALS_H][0]
    assert box["page"] == total_label["page"]
    for label in ("Subtotal:", "Discount:", "CGST:", "SGST:"):
        op = [t for t in texts if t["text"] == label][-1]
        assert op["page"] == box["page"]
    assert "Authorized Signatory" in _text(pdf)


@pytest.mark.parametrize("name, label", [("zen", "Zen (Colorful)"), ("minimalist", "Minimalist")])
def test_generation_logs_template_label(settings, images, cgst_invoice, caplog, name, label):
    caplog.set_level("INFO", logger="invoice_pdf.rendering.generator")
    InvoicePdfGenerator(settings, images).generate(cgst_invoice, {"template": name})
    assert f"Generating invoice #1001 with template: {label}" in caplog.text
