# tests/test_handler.py
from __future__ import annotations

import json

import pytest

from invoice_pdf import handler as handler_mod
from invoice_pdf.config import Settings
from invoice_pdf.exceptions import InvalidInvoiceRequest
from invoice_pdf.rendering.generator import InvoicePdfGenerator
from invoice_pdf.services.invoice_service import InvoiceDeliveryService, InvoiceRequest


class FakeUploader:
    def __init__(self, fail: Exception | None = None):
        self.calls = []
        self.fail = fail

    def __call__(self, pdf, order_name, shop):
        if self.fail:
            raise self.fail
        self.calls.append((pdf, order_name, shop))
        key = f"shops/{shop}/invoices/invoice-{order_name.lstrip('#')}-1.pdf"
        return key, f"https://example.test/{key}"


@pytest.fixture
def uploader():
    return FakeUploader()


@pytest.fixture
def notified():
    return []


@pytest.fixture
def service(images, uploader, notified):
    settings = Settings()

    def notifier(invoice, url, cfg, link_days=7):
        notified.append((invoice.customer.email, url, cfg.source, link_days))
        return invoice.customer.email

    return InvoiceDeliveryService(
        settings,
        generator=InvoicePdfGenerator(settings, images),
        uploader=uploader,
        config_loader=lambda shop, s: {"template": "zen", "company": {"name": "ABC Fashion"}},
        notifier=notifier,
    )


@pytest.fixture(autouse=True)
def use_service(monkeypatch, service):
    monkeypatch.setattr(handler_mod, "_service", service)


def test_happy_path(cgst_invoice, uploader, notified):
    event = {"invoiceData": cgst_invoice, "shop": "mystore.myshopify.com", "orderId": 12345, "orderName": "#1001"}

    resp = handler_mod.handler(event, None)

    assert resp["statusCode"] == 200
    assert resp["invoiceId"]
    assert resp["fileName"] == "shops/mystore.myshopify.com/invoices/invoice-1001-1.pdf"
    assert resp["s3Url"].endswith(resp["fileName"])
    assert resp["emailSentTo"] == "dan.brown@example.com"

    pdf, order_name, shop = uploader.calls[0]
    assert pdf.startswith(b"%PDF")
    assert (order_name, shop) == ("#1001", "mystore.myshopify.com")
    assert notified == [("dan.brown@example.com", resp["s3Url"], "database", 7)]


def test_order_name_falls_back_to_payload(cgst_invoice, uploader):
    handler_mod.handler({"invoiceData": cgst_invoice, "shop": "s"}, None)
    assert uploader.calls[0][1] == "#1001"


def test_no_email_gives_null(cgst_invoice):
    cgst_invoice["customer"]["email"] = None
    resp = handler_mod.handler({"invoiceData": cgst_invoice, "shop": "s"}, None)
    assert resp["statusCode"] == 200
    assert resp["emailSentTo"] is None


@pytest.mark.parametrize(
    "event",
    [
        {},
        None,
        {"shop": "s"},
        {"invoiceData": {"order": {}}},
        {"invoiceData": {}, "shop": "s"},
        {"invoiceData": {"order": {}}, "shop": "  "},
    ],
)
def test_missing_fields_is_400(event):
    resp = handler_mod.handler(event, None)
    assert resp["statusCode"] == 400
    assert "error" not in resp
    assert "invoiceData, shop" in json.loads(resp["body"])["error"]


def test_upload_failure_is_500(service, cgst_invoice, monkeypatch):
    monkeypatch.setattr(service, "_uploader", FakeUploader(fail=RuntimeError("bucket gone")))
    resp = handler_mod.handler({"invoiceData": cgst_invoice, "shop": "s"}, None)
    assert resp == {"statusCode": 500, "error": "bucket gone"}


def test_request_parsing():
    req = InvoiceRequest.from_event({"invoiceData": {"order": {"name": "#9"}}, "shop": " s ", "orderId": 5})
    assert req.shop == "s"
    assert req.order_id == "5"
    assert req.display_order_name == "#9"
    with pytest.raises(InvalidInvoiceRequest):
        InvoiceRequest.from_event({"invoiceData": [], "shop": "s"})
