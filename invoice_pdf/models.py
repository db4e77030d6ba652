# invoice_pdf/models.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Tuple

# =========================
# Invoice payload
# =========================
#
# Payloads arrive as camelCase JSON produced by the upstream transformer.
# Money display fields are kept as received (normally pre-formatted strings);
# the per-item regime tax amounts (_cgst/_sgst/_igst) are raw numbers.


def _s(v: Any) -> str:
    if v is None:
        return ""
    return str(v)


def _opt(v: Any) -> Optional[str]:
    if v is None:
        return None
    t = str(v)
    return t if t.strip() else None


@dataclass(frozen=True)
class Order:
    name: str = ""
    order_number: str = ""
    date: str = ""
    notes: Optional[str] = None


@dataclass(frozen=True)
class Customer:
    name: str = ""
    phone: Optional[str] = None
    email: Optional[str] = None


@dataclass(frozen=True)
class ShippingAddress:
    address: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""


@dataclass(frozen=True)
class LineItem:
    name: str
    description: Optional[str] = None
    quantity: Any = 0
    mrp: Any = ""
    discount: Any = ""
    selling_price: Any = ""
    selling_price_after_tax: Any = ""
    tax: Any = ""
    cgst: Any = None
    sgst: Any = None
    igst: Any = None


@dataclass(frozen=True)
class Totals:
    subtotal: Any = ""
    total: Any = ""
    discount: Any = None
    shipping: Any = None
    cgst: Any = None
    sgst: Any = None
    igst: Any = None
    gst: Any = None


@dataclass(frozen=True)
class InvoiceData:
    order: Order = field(default_factory=Order)
    customer: Customer = field(default_factory=Customer)
    shipping_address: ShippingAddress = field(default_factory=ShippingAddress)
    line_items: Tuple[LineItem, ...] = ()
    totals: Totals = field(default_factory=Totals)

    @classmethod
    def from_dict(cls, j: Mapping[str, Any]) -> "InvoiceData":
        o = j.get("order") or {}
        c = j.get("customer") or {}
        a = j.get("shippingAddress") or {}
        t = j.get("totals") or {}

        items = []
        for x in (j.get("lineItems") or []):
            items.append(
                LineItem(
                    name=_s(x.get("name")),
                    description=_opt(x.get("description")),
                    quantity=x.get("quantity", 0),
                    mrp=x.get("mrp", ""),
                    discount=x.get("discount", ""),
                    selling_price=x.get("sellingPrice", ""),
                    selling_price_after_tax=x.get("sellingPriceAfterTax", ""),
                    tax=x.get("tax", ""),
                    cgst=x.get("_cgst"),
                    sgst=x.get("_sgst"),
                    igst=x.get("_igst"),
                )
            )

        return cls(
            order=Order(
                name=_s(o.get("name")),
                order_number=_s(o.get("orderNumber")),
                date=_s(o.get("date")),
                notes=_opt(o.get("notes")),
            ),
            customer=Customer(
                name=_s(c.get("name")),
                phone=_opt(c.get("phone")),
                email=_opt(c.get("email")),
            ),
            shipping_address=ShippingAddress(
                address=_s(a.get("address")),
                city=_s(a.get("city")),
                state=_s(a.get("state")),
                zip=_s(a.get("zip")),
            ),
            line_items=tuple(items),
            totals=Totals(
                subtotal=t.get("subtotal", ""),
                total=t.get("total", ""),
                discount=t.get("discount"),
                shipping=t.get("shipping"),
                cgst=t.get("cgst"),
                sgst=t.get("sgst"),
                igst=t.get("igst"),
                gst=t.get("gst"),
            ),
        )


# =========================
# Template configuration (every field optional)
# =========================


def _num(v: Any) -> Optional[float]:
    if v is None or v == "":
        return None
    try:
        return float(v)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class CompanyAddress:
    line1: Optional[str] = None
    line2: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = None


@dataclass(frozen=True)
class CompanyConfig:
    name: Optional[str] = None
    legal_name: Optional[str] = None
    address: Optional[CompanyAddress] = None
    gstin: Optional[str] = None
    logo: Optional[str] = None
    signature: Optional[str] = None
    include_signature: Optional[bool] = None
    email: Optional[str] = None


@dataclass(frozen=True)
class FontConfig:
    family: Optional[str] = None
    title_size: Optional[float] = None
    heading_size: Optional[float] = None
    body_size: Optional[float] = None
    table_size: Optional[float] = None


@dataclass(frozen=True)
class ColorConfig:
    primary: Optional[str] = None
    secondary: Optional[str] = None
    accent: Optional[str] = None
    border: Optional[str] = None
    background: Optional[str] = None
    success: Optional[str] = None
    warning: Optional[str] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class StylingConfig:
    header_background_color: Optional[str] = None
    header_text_color: Optional[str] = None
    document_header_bg_color: Optional[str] = None
    table_header_bg_color: Optional[str] = None


@dataclass(frozen=True)
class TemplateConfig:
    template: Optional[str] = None
    source: str = "request"
    company: Optional[CompanyConfig] = None
    fonts: Optional[FontConfig] = None
    colors: Optional[ColorConfig] = None
    styling: Optional[StylingConfig] = None

    @classmethod
    def from_dict(cls, j: Mapping[str, Any] | None, *, source: str | None = None) -> "TemplateConfig":
        j = j or {}
        company = j.get("company")
        fonts = j.get("fonts")
        colors = j.get("colors")
        styling = j.get("styling")

        company_cfg = None
        if company:
            addr = company.get("address")
            include = company.get("includeSignature")
            company_cfg = CompanyConfig(
                name=_opt(company.get("name")),
                legal_name=_opt(company.get("legalName")),
                address=CompanyAddress(
                    line1=_s(addr.get("line1")) if addr.get("line1") is not None else None,
                    line2=_s(addr.get("line2")) if addr.get("line2") is not None else None,
                    city=_opt(addr.get("city")),
                    state=_opt(addr.get("state")),
                    pincode=_opt(addr.get("pincode")),
                ) if addr else None,
                gstin=_opt(company.get("gstin")),
                logo=_opt(company.get("logo")),
                signature=_opt(company.get("signature")),
                include_signature=None if include is None else bool(include),
                email=_opt(company.get("email")),
            )

        font_cfg = None
        if fonts:
            font_cfg = FontConfig(
                family=_opt(fonts.get("family")),
                title_size=_num(fonts.get("titleSize")),
                heading_size=_num(fonts.get("headingSize")),
                body_size=_num(fonts.get("bodySize")),
                table_size=_num(fonts.get("tableSize")),
            )

        color_cfg = None
        if colors:
            color_cfg = ColorConfig(**{k: _opt(colors.get(k)) for k in ColorConfig.__dataclass_fields__})

        styling_cfg = None
        if styling:
            styling_cfg = StylingConfig(
                header_background_color=_opt(styling.get("headerBackgroundColor")),
                header_text_color=_opt(styling.get("headerTextColor")),
                document_header_bg_color=_opt(styling.get("documentHeaderBgColor")),
                table_header_bg_color=_opt(styling.get("tableHeaderBgColor")),
            )

        return cls(
            template=_opt(j.get("template")),
            source=source or _opt(j.get("source")) or "request",
            company=company_cfg,
            fonts=font_cfg,
            colors=color_cfg,
            styling=styling_cfg,
        )
