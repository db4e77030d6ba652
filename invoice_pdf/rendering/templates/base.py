# invoice_pdf/rendering/templates/base.py
from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import Dict, List, Protocol, Sequence, Tuple

from reportlab.lib.utils import ImageReader

from invoice_pdf.models import ColorConfig, InvoiceData, LineItem, TemplateConfig, Totals
from invoice_pdf.rendering.canvas import PageCanvas
from invoice_pdf.rendering.colors import ColorScheme
from invoice_pdf.rendering.style import StyleConfig
from invoice_pdf.rendering.tax import (
    TaxRegime,
    format_tax_amount,
    is_present,
    money_text,
    quantity_text,
)

log = logging.getLogger(__name__)

# =========================
# Shared layout constants
# =========================

PAGE_BREAK_Y = 700      # rows starting below this move to a new page
PAGE_TOP_Y = 50         # where rows resume on a continued page
TABLE_X0 = 50
TABLE_X1 = 545
TABLE_W = TABLE_X1 - TABLE_X0

TEXT_DARK = "#111827"
TEXT_BODY = "#374151"
TEXT_MUTED = "#6b7280"

RUPEE = "₹"
VARIANT_PREFIX = "Variant: "


class ImageSource(Protocol):
    def fetch_image(self, reference: str) -> bytes:
        ...

    def read_bundled_asset(self, name: str) -> bytes:
        ...


class InvoiceTemplate(Protocol):
    """
    Capability set the generator depends on. Each stage takes the cursor
    produced by the previous one and returns the next.
    """

    name: str
    label: str

    def resolve_colors(self, seed: str | None = None, color_config: ColorConfig | None = None) -> ColorScheme:
        ...

    def resolve_style(self, config: TemplateConfig | None, colors: ColorScheme) -> StyleConfig:
        ...

    def render_header(self, c: PageCanvas, data: InvoiceData, colors: ColorScheme, style: StyleConfig) -> float:
        ...

    def render_order_info(self, c: PageCanvas, data: InvoiceData, y: float, colors: ColorScheme, style: StyleConfig) -> float:
        ...

    def render_line_items(
        self, c: PageCanvas, data: InvoiceData, y: float, colors: ColorScheme, style: StyleConfig, regime: TaxRegime
    ) -> float:
        ...

    def render_totals(
        self, c: PageCanvas, data: InvoiceData, y: float, colors: ColorScheme, style: StyleConfig, regime: TaxRegime
    ) -> float:
        ...

    def render_signature(self, c: PageCanvas, data: InvoiceData, y: float, colors: ColorScheme, style: StyleConfig) -> float:
        ...

    def render_footer(self, c: PageCanvas, data: InvoiceData, y: float, colors: ColorScheme, style: StyleConfig) -> float:
        ...


# =========================
# Images
# =========================

def _decodable(data: bytes) -> bytes:
    ImageReader(io.BytesIO(data)).getSize()
    return data


def load_logo(images: ImageSource, reference: str | None) -> bytes | None:
    if not reference:
        return None
    try:
        return _decodable(images.fetch_image(reference))
    except Exception as e:
        log.warning("Error loading logo %r: %s", reference, e)
        return None


def load_signature(images: ImageSource, reference: str) -> bytes | None:
    """
    References containing a path separator live in object storage,
    bare file names in the bundled assets directory.
    """
    try:
        if "/" in reference:
            log.info("Fetching signature from storage: %s", reference)
            return _decodable(images.fetch_image(reference))
        return _decodable(images.read_bundled_asset(reference))
    except Exception as e:
        log.warning("Signature image %r could not be loaded, skipping signature: %s", reference, e)
        return None


def draw_logo(c: PageCanvas, data: bytes | None, x: float, y: float, fit: Tuple[float, float]) -> None:
    if not data:
        return
    try:
        c.image(data, x, y, fit=fit, align="right")
    except Exception as e:
        log.warning("Logo image could not be drawn: %s", e)


# =========================
# Bill-To box (two-pass)
# =========================

@dataclass(frozen=True)
class BoxLine:
    text: str
    font: str
    size: float
    color: str
    advance: float | None = None  # None: measured height + MEASURED_GAP


MEASURED_GAP = 3


def layout_box_lines(
    c: PageCanvas,
    lines: Sequence[BoxLine],
    x: float,
    y: float,
    width: float,
    *,
    draw: bool,
) -> float:
    """
    Walk the lines with the same advances whether measuring or drawing,
    so the measured height always matches what gets drawn.
    """
    for ln in lines:
        if draw:
            c.text(ln.text, x, y, font=ln.font, size=ln.size, color=ln.color, width=width)
        if ln.advance is not None:
            y += ln.advance
        else:
            y += c.height_of_string(ln.text, font=ln.font, size=ln.size, width=width) + MEASURED_GAP
    return y


def bill_to_body(data: InvoiceData, style: StyleConfig, *, size: float, line_h: float) -> List[BoxLine]:
    """Address, city/state/zip and phone lines shared by both templates."""
    addr = data.shipping_address
    f = style.fonts
    out: List[BoxLine] = []

    if addr.address:
        out.append(BoxLine(addr.address, f.regular, size, TEXT_BODY))

    city_state_zip = ", ".join(p for p in (addr.city, addr.state, addr.zip) if p)
    if city_state_zip:
        out.append(BoxLine(city_state_zip, f.regular, size, TEXT_BODY))

    if data.customer.phone:
        out.append(BoxLine(f"Phone: {data.customer.phone}", f.regular, size, TEXT_BODY, advance=line_h))

    return out


def draw_two_pass_box(
    c: PageCanvas,
    lines: Sequence[BoxLine],
    *,
    x: float,
    y: float,
    width: float,
    padding: float,
    top_pad: float,
    bottom_pad: float,
    min_height: float,
    fill: str | None,
    stroke: str | None,
    radius: float = 0.0,
) -> Tuple[float, float]:
    """
    Pass one measures, the box is drawn at its final size, pass two draws
    the text on top. Returns (text_end_y, box_height).
    """
    text_x = x + padding
    text_w = width - padding * 2

    end_y = layout_box_lines(c, lines, text_x, y + top_pad, text_w, draw=False)
    box_h = max(min_height, end_y - y + bottom_pad)

    c.rect(x, y, width, box_h, fill=fill, stroke=stroke, radius=radius)
    end_y = layout_box_lines(c, lines, text_x, y + top_pad, text_w, draw=True)
    return end_y, box_h


# =========================
# Line items table
# =========================

@dataclass(frozen=True)
class Column:
    key: str
    header: str
    x: float
    width: float
    align: str = "right"


def item_display_name(item: LineItem) -> str:
    if item.description:
        return f"{item.name} ({item.description.replace(VARIANT_PREFIX, '')})"
    return item.name


def row_values(item: LineItem) -> Dict[str, str]:
    return {
        "item": item_display_name(item),
        "qty": quantity_text(item.quantity),
        "mrp": money_text(item.mrp),
        "discount": money_text(item.discount),
        "before_tax": money_text(item.selling_price),
        "cgst": f"{RUPEE}{format_tax_amount(item.cgst)}",
        "sgst": f"{RUPEE}{format_tax_amount(item.sgst)}",
        "igst": f"{RUPEE}{format_tax_amount(item.igst)}",
        "tax": money_text(item.tax),
        "after_tax": money_text(item.selling_price_after_tax),
    }


def draw_header_labels(
    c: PageCanvas,
    columns: Sequence[Column],
    y: float,
    *,
    font: str,
    size: float,
    color: str,
    dy_single: float,
    dy_multi: float,
) -> None:
    for col in columns:
        dy = dy_multi if "\n" in col.header else dy_single
        c.text(col.header, col.x, y + dy, font=font, size=size, color=color, width=col.width, align=col.align)


@dataclass(frozen=True)
class RowStyle:
    height: float
    text_dy: float
    font: str
    size: float
    shade: str
    separator: str
    text_color: str
    discount_color: str
    after_tax_color: str


def draw_item_rows(
    c: PageCanvas,
    items: Sequence[LineItem],
    columns: Sequence[Column],
    y: float,
    rs: RowStyle,
) -> float:
    """
    One row per item in input order. The page-break check runs before the
    row is drawn, so the row that crossed the threshold lands on the new page.
    """
    for index, item in enumerate(items):
        if y > PAGE_BREAK_Y:
            c.add_page()
            y = PAGE_TOP_Y

        if index % 2 == 0:
            c.rect(TABLE_X0, y, TABLE_W, rs.height, fill=rs.shade)

        values = row_values(item)
        for col in columns:
            color = rs.text_color
            if col.key == "discount":
                color = rs.discount_color
            elif col.key == "after_tax":
                color = rs.after_tax_color

            c.text(
                values[col.key],
                col.x,
                y + rs.text_dy,
                font=rs.font,
                size=rs.size,
                color=color,
                width=col.width,
                align=col.align,
                max_height=(rs.height - 10) if col.key == "item" else None,
            )

        y += rs.height
        c.line(TABLE_X0, y, TABLE_X1, y, color=rs.separator, width=0.5)

    return y


# =========================
# Totals
# =========================

@dataclass(frozen=True)
class TotalsLine:
    label: str
    value: str
    kind: str = "normal"  # normal | discount


def totals_lines(totals: Totals, regime: TaxRegime) -> List[TotalsLine]:
    """
    Lines between Subtotal and the Total rule, in print order.
    Absent fields are skipped, not blanked.
    """
    out = [TotalsLine("Subtotal:", money_text(totals.subtotal))]

    if is_present(totals.discount):
        out.append(TotalsLine("Discount:", money_text(totals.discount), kind="discount"))

    if is_present(totals.shipping):
        out.append(TotalsLine("Shipping:", money_text(totals.shipping)))

    if regime is TaxRegime.CGST_SGST:
        out.append(TotalsLine("CGST:", money_text(totals.cgst)))
        out.append(TotalsLine("SGST:", money_text(totals.sgst)))
    elif regime is TaxRegime.IGST:
        out.append(TotalsLine("IGST:", money_text(totals.igst)))
    elif is_present(totals.gst):
        out.append(TotalsLine("GST:", money_text(totals.gst)))

    return out


def disclaimer_text(state: str) -> str:
    return (
        f"All disputes are subject to {state} jurisdiction only. Goods once sold will only be taken back "
        "or exchanged as per the store's exchange/return policy"
    )


# =========================
# Page room
# =========================

def ensure_room(c: PageCanvas, y: float, height: float) -> float:
    """
    Start a new page when a block of the given height would run past the
    bottom margin. A block taller than a whole page is left to the
    canvas's own text continuation once it starts at the top.
    """
    if y + height > c.max_y and y > PAGE_TOP_Y:
        c.add_page()
        return PAGE_TOP_Y
    return y
