# tests/conftest.py
from __future__ import annotations

import copy
import io
from typing import Any, Dict, List, Tuple

import pytest
from PIL import Image

from invoice_pdf.config import Settings
from invoice_pdf.exceptions import ImageFetchError
from invoice_pdf.models import InvoiceData, TemplateConfig
from invoice_pdf.rendering.canvas import PageCanvas


class RecordingCanvas(PageCanvas):
    """PageCanvas that also keeps a list of every drawing call."""

    last: "RecordingCanvas | None" = None

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.ops: List[Tuple[str, Dict[str, Any]]] = []
        RecordingCanvas.last = self

    def add_page(self) -> None:
        self.ops.append(("page", {"n": self.page_count + 1}))
        super().add_page()

    def text(self, text, x, y, **kw):
        self.ops.append(("text", {"text": text, "x": x, "y": y, "page": self.page_count, **kw}))
        return super().text(text, x, y, **kw)

    def rect(self, x, y, w, h, **kw):
        self.ops.append(("rect", {"x": x, "y": y, "w": w, "h": h, "page": self.page_count, **kw}))
        return super().rect(x, y, w, h, **kw)

    def line(self, x0, y0, x1, y1, **kw):
        self.ops.append(("line", {"x0": x0, "y0": y0, "x1": x1, "y1": y1, **kw}))
        return super().line(x0, y0, x1, y1, **kw)

    def image(self, data, x, y, **kw):
        self.ops.append(("image", {"x": x, "y": y, **kw}))
        return super().image(data, x, y, **kw)

    # ---------- helpers ----------

    def texts(self) -> List[str]:
        return [op["text"] for kind, op in self.ops if kind == "text"]

    def of(self, kind: str) -> List[Dict[str, Any]]:
        return [op for k, op in self.ops if k == kind]

    def index_of_text(self, text: str) -> int:
        for i, (kind, op) in enumerate(self.ops):
            if kind == "text" and op["text"] == text:
                return i
        raise AssertionError(f"text {text!r} was not drawn")


class FakeImages:
    """In-memory ImageSource; unknown references raise like the real store."""

    def __init__(self, remote: Dict[str, bytes] | None = None, bundled: Dict[str, bytes] | None = None):
        self.remote = dict(remote or {})
        self.bundled = dict(bundled or {})
        self.fetched: List[str] = []
        self.read: List[str] = []

    def fetch_image(self, reference: str) -> bytes:
        self.fetched.append(reference)
        if reference not in self.remote:
            raise ImageFetchError(reference, "NoSuchKey")
        return self.remote[reference]

    def read_bundled_asset(self, name: str) -> bytes:
        self.read.append(name)
        if name not in self.bundled:
            raise ImageFetchError(name, "FileNotFoundError")
        return self.bundled[name]


def _png(size=(120, 40), color=(30, 30, 200)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    return _png()


@pytest.fixture
def images(png_bytes) -> FakeImages:
    return FakeImages(
        remote={
            "shops/mystore/logo.png": png_bytes,
            "shops/mystore/signature.png": png_bytes,
        },
        bundled={"signature.png": png_bytes},
    )


@pytest.fixture
def canvas() -> RecordingCanvas:
    return RecordingCanvas()


@pytest.fixture
def settings() -> Settings:
    return Settings()


# =========================
# Payloads
# =========================

BASE_INVOICE: Dict[str, Any] = {
    "order": {
        "name": "#1001",
        "orderNumber": "1001",
        "date": "2025-12-29",
        "notes": "Please handle with care. Gift wrapping requested.",
    },
    "customer": {"name": "Dan Brown", "phone": "9769003006", "email": "dan.brown@example.com"},
    "shippingAddress": {
        "address": "123 Road ABC Colony Borivali East, C-102 - ABC Tower",
        "city": "Mumbai",
        "state": "Maharashtra",
        "zip": "400066",
    },
    "lineItems": [
        {
            "name": "Pleated Trousers | Latte Cream",
            "description": "Variant: XS",
            "quantity": 1,
            "mrp": "₹2590.00",
            "discount": "₹400.00",
            "sellingPrice": "₹2085.71",
            "sellingPriceAfterTax": "₹2190.00",
            "tax": "₹104.29",
            "_cgst": 52.145,
            "_sgst": 52.145,
            "_igst": 0,
        }
    ],
    "totals": {
        "subtotal": "₹2590.00",
        "discount": "₹400.00",
        "shipping": "₹0.00",
        "cgst": "₹52.15",
        "sgst": "₹52.14",
        "igst": 0,
        "total": "₹2190.00",
    },
}


def make_invoice(**totals_overrides) -> Dict[str, Any]:
    inv = copy.deepcopy(BASE_INVOICE)
    inv["totals"].update(totals_overrides)
    return inv


@pytest.fixture
def cgst_invoice() -> Dict[str, Any]:
    return make_invoice()


@pytest.fixture
def igst_invoice() -> Dict[str, Any]:
    inv = make_invoice(cgst=0, sgst=0, igst="₹104.29")
    inv["lineItems"][0].update({"_cgst": 0, "_sgst": 0, "_igst": 104.29})
    return inv


@pytest.fixture
def generic_invoice() -> Dict[str, Any]:
    inv = make_invoice(cgst=None, sgst=None, igst=None, gst="₹104.29")
    return inv


@pytest.fixture
def company_config() -> Dict[str, Any]:
    return {
        "company": {
            "name": "ABC Fashion",
            "legalName": "ABC Retail Pvt Ltd",
            "gstin": "27ABCDE1234F1Z5",
            "email": "support@abc.com",
            "address": {
                "line1": "123 Fashion Street",
                "line2": "Andheri West",
                "city": "Mumbai",
                "state": "Maharashtra",
                "pincode": "400058",
            },
        }
    }


def invoice_data(payload: Dict[str, Any]) -> InvoiceData:
    return InvoiceData.from_dict(payload)


def template_config(payload: Dict[str, Any] | None) -> TemplateConfig | None:
    return TemplateConfig.from_dict(payload) if payload is not None else None
