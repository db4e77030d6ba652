# invoice_pdf/rendering/templates/minimalist.py
from __future__ import annotations

import logging
from typing import Dict, List

from invoice_pdf.models import ColorConfig, InvoiceData, TemplateConfig
from invoice_pdf.rendering.canvas import PAGE_W, PageCanvas
from invoice_pdf.rendering.colors import ColorScheme, resolve_colors
from invoice_pdf.rendering.style import StyleConfig, StyleDefaults, resolve_style
from invoice_pdf.rendering.tax import TaxRegime, money_text
from invoice_pdf.rendering.templates.base import (
    TABLE_W,
    TABLE_X0,
    TEXT_BODY,
    TEXT_DARK,
    TEXT_MUTED,
    BoxLine,
    Column,
    ImageSource,
    RowStyle,
    bill_to_body,
    disclaimer_text,
    draw_header_labels,
    draw_item_rows,
    draw_logo,
    draw_two_pass_box,
    ensure_room,
    load_logo,
    load_signature,
    totals_lines,
)

log = logging.getLogger(__name__)

# =========================
# Layout constants
# =========================

# Header banner (address lines joined onto one row to keep it short)
BANNER_H = 110
HEADER_TEXT_X = 50
HEADER_TOP_Y = 22
HEADER_TEXT_W = 390
LOGO_X = 455
LOGO_Y = 20
LOGO_FIT = (90, 70)
HEADER_GAP_BELOW = 20

# Info row
INFO_VALUE_X = 140
INFO_HEADING_GAP = 30

# Bill-To box
BILL_X = 320
BILL_W = 225
BILL_PAD = 10
BILL_TOP_PAD = 10
BILL_MIN_H = 80
INFO_BOTTOM_GAP = 20

# Items table
TABLE_TOP_GAP = 15
TABLE_HEAD_H = 24
ROW_H = 30
ROW_TEXT_DY = 10

COLUMNS: Dict[TaxRegime, List[Column]] = {
    TaxRegime.CGST_SGST: [
        Column("item", "Item", 55, 95, align="left"),
        Column("qty", "Qty", 152, 22, align="center"),
        Column("mrp", "MRP", 176, 50),
        Column("discount", "Discount", 228, 46),
        Column("before_tax", "Price\nbefore tax", 276, 54),
        Column("cgst", "CGST", 332, 46),
        Column("sgst", "SGST", 380, 46),
        Column("after_tax", "Price\nafter tax", 428, 112),
    ],
    TaxRegime.IGST: [
        Column("item", "Item", 55, 115, align="left"),
        Column("qty", "Qty", 172, 24, align="center"),
        Column("mrp", "MRP", 198, 56),
        Column("discount", "Discount", 256, 52),
        Column("before_tax", "Price\nbefore tax", 310, 62),
        Column("igst", "IGST", 374, 56),
        Column("after_tax", "Price\nafter tax", 432, 108),
    ],
    TaxRegime.GENERIC: [
        Column("item", "Item", 55, 120, align="left"),
        Column("qty", "Qty", 177, 24, align="center"),
        Column("mrp", "MRP", 203, 56),
        Column("discount", "Discount", 261, 52),
        Column("before_tax", "Selling price\nbefore tax", 315, 62),
        Column("tax", "Tax", 379, 52),
        Column("after_tax", "Selling price\nafter tax", 433, 107),
    ],
}

# Totals box
TOTALS_TOP_GAP = 20
TOTALS_X = 335
TOTALS_W = 210
TOTALS_H = 140
TOTALS_PAD_TOP = 12
TOTALS_LEFT_X = 345
TOTALS_RIGHT_X = 535
TOTALS_GAP_BELOW = 20

# Signature
SIG_TOP_GAP = 30
SIG_BOX_X = 375
SIG_BOX_W = 170
SIG_BOX_H = 80
SIG_FIT = (120, 40)

# Footer
FOOTER_TOP_GAP = 30
FOOTER_GAP_BELOW = 30

DEFAULT_COLORS = ColorScheme(
    primary="#333333",
    secondary="#555555",
    accent="#111111",
    border="#d1d5db",
    background="#f5f5f5",
    success="#15803d",
    warning="#b45309",
    error="#b91c1c",
)

STYLE_DEFAULTS = StyleDefaults(title_size=24, heading_size=14, body_size=10, table_size=8)


class MinimalistTemplate:
    """Monochrome layout with a short header band and square boxes."""

    name = "minimalist"
    label = "Minimalist"

    def __init__(self, images: ImageSource):
        self.images = images

    def resolve_colors(self, seed: str | None = None, color_config: ColorConfig | None = None) -> ColorScheme:
        return resolve_colors(DEFAULT_COLORS, seed, color_config)

    def resolve_style(self, config: TemplateConfig | None, colors: ColorScheme) -> StyleConfig:
        return resolve_style(config, STYLE_DEFAULTS, colors)

    def render_header(self, c: PageCanvas, data: InvoiceData, colors: ColorScheme, style: StyleConfig) -> float:
        co = style.company
        f = style.fonts
        text_color = style.header.text_color
        body_lh = f.body_size * 1.3

        c.rect(0, 0, PAGE_W, BANNER_H, fill=style.header.banner_color)

        y = HEADER_TOP_Y
        c.text(co.name, HEADER_TEXT_X, y, font=f.bold, size=f.title_size, color=text_color, width=HEADER_TEXT_W)
        y += f.title_size * 1.15

        c.text(co.legal_name, HEADER_TEXT_X, y, font=f.regular, size=f.body_size, color=text_color, width=HEADER_TEXT_W)
        y += body_lh

        address = ", ".join(p.strip() for p in (co.address_line1, co.address_line2) if p.strip())
        if address:
            c.text(address, HEADER_TEXT_X, y, font=f.regular, size=f.body_size, color=text_color, width=HEADER_TEXT_W)
            y += body_lh

        city_line = co.city_state_pin
        if city_line and city_line != "-":
            c.text(city_line, HEADER_TEXT_X, y, font=f.regular, size=f.body_size, color=text_color, width=HEADER_TEXT_W)
            y += body_lh

        if co.gstin.strip():
            c.text(f"GSTIN: {co.gstin}", HEADER_TEXT_X, y, font=f.regular, size=f.body_size - 1, color=text_color)

        draw_logo(c, load_logo(self.images, co.logo), LOGO_X, LOGO_Y, LOGO_FIT)

        return BANNER_H + HEADER_GAP_BELOW

    def render_order_info(self, c: PageCanvas, data: InvoiceData, y: float, colors: ColorScheme, style: StyleConfig) -> float:
        f = style.fonts
        lh = f.body_size * 1.6
        order = data.order
        top = y

        c.text("INVOICE", TABLE_X0, y, font=f.bold, size=f.heading_size + 4, color=colors.primary)
        y += INFO_HEADING_GAP

        pairs = [
            ("Invoice No:", order.name or "N/A"),
            ("Invoice Date:", order.date or "N/A"),
            ("Order No:", order.order_number or order.name or "N/A"),
        ]
        for label, value in pairs:
            c.text(label, TABLE_X0, y, font=f.bold, size=f.body_size, color=colors.secondary)
            c.text(value, INFO_VALUE_X, y, font=f.regular, size=f.body_size, color=TEXT_DARK, width=BILL_X - INFO_VALUE_X - 10)
            y += lh

        lines = [
            BoxLine("BILL TO", f.bold, f.body_size, colors.secondary, advance=lh),
            BoxLine(data.customer.name or "N/A", f.bold, f.body_size, TEXT_DARK, advance=lh),
        ]
        lines += bill_to_body(data, style, size=f.body_size - 1, line_h=lh)

        _, box_h = draw_two_pass_box(
            c,
            lines,
            x=BILL_X,
            y=top,
            width=BILL_W,
            padding=BILL_PAD,
            top_pad=BILL_TOP_PAD,
            bottom_pad=BILL_TOP_PAD,
            min_height=BILL_MIN_H,
            fill=colors.background,
            stroke=colors.border,
        )

        return max(y, top + box_h) + INFO_BOTTOM_GAP

    def render_line_items(
        self, c: PageCanvas, data: InvoiceData, y: float, colors: ColorScheme, style: StyleConfig, regime: TaxRegime
    ) -> float:
        f = style.fonts
        y += TABLE_TOP_GAP

        c.text("Items", TABLE_X0, y, font=f.bold, size=f.heading_size, color=colors.primary)
        y += f.heading_size * 1.4

        columns = COLUMNS[regime]
        c.rect(TABLE_X0, y, TABLE_W, TABLE_HEAD_H, fill=style.header.table_header_color)
        draw_header_labels(
            c,
            columns,
            y,
            font=f.bold,
            size=f.table_size,
            color=style.header.text_color,
            dy_single=8,
            dy_multi=3,
        )
        y += TABLE_HEAD_H

        return draw_item_rows(
            c,
            data.line_items,
            columns,
            y,
            RowStyle(
                height=ROW_H,
                text_dy=ROW_TEXT_DY,
                font=f.regular,
                size=f.table_size,
                shade=colors.background,
                separator=colors.border,
                text_color=TEXT_DARK,
                discount_color=colors.error,
                after_tax_color=TEXT_DARK,
            ),
        )

    def render_totals(
        self, c: PageCanvas, data: InvoiceData, y: float, colors: ColorScheme, style: StyleConfig, regime: TaxRegime
    ) -> float:
        f = style.fonts
        lh = f.body_size * 1.6
        value_w = TOTALS_RIGHT_X - TOTALS_LEFT_X

        y = ensure_room(c, y, TOTALS_TOP_GAP + TOTALS_H)
        box_y = y + TOTALS_TOP_GAP
        c.rect(TOTALS_X, box_y, TOTALS_W, TOTALS_H, stroke=colors.border, line_width=1)

        y = box_y + TOTALS_PAD_TOP
        for ln in totals_lines(data.totals, regime):
            color = colors.error if ln.kind == "discount" else TEXT_BODY
            c.text(ln.label, TOTALS_LEFT_X, y, font=f.regular, size=f.body_size, color=color)
            c.text(ln.value, TOTALS_LEFT_X, y, font=f.regular, size=f.body_size, color=color, width=value_w, align="right")
            y += lh

        y += 4
        c.line(TOTALS_LEFT_X, y, TOTALS_RIGHT_X, y, color=colors.border, width=1)
        y += 8

        total_fs = f.body_size + 2
        c.text("Total:", TOTALS_LEFT_X, y, font=f.bold, size=total_fs, color=colors.primary)
        c.text(money_text(data.totals.total), TOTALS_LEFT_X, y, font=f.bold, size=total_fs,
               color=colors.primary, width=value_w, align="right")

        return box_y + TOTALS_H + TOTALS_GAP_BELOW

    def render_signature(self, c: PageCanvas, data: InvoiceData, y: float, colors: ColorScheme, style: StyleConfig) -> float:
        co = style.company
        if not co.include_signature or not co.signature:
            log.info("Signature disabled or not configured, skipping signature section")
            return y

        signature = load_signature(self.images, co.signature)
        if signature is None:
            return y

        f = style.fonts
        y = ensure_room(c, y, SIG_TOP_GAP + SIG_BOX_H)
        y += SIG_TOP_GAP

        c.rect(SIG_BOX_X, y - 8, SIG_BOX_W, SIG_BOX_H, stroke=colors.border, line_width=0.75)
        c.text("Authorized Signatory", SIG_BOX_X, y, font=f.regular, size=f.body_size - 1,
               color=colors.secondary, width=SIG_BOX_W, align="center")
        c.image(signature, SIG_BOX_X + (SIG_BOX_W - SIG_FIT[0]) / 2.0, y + 14, fit=SIG_FIT, align="center")
        c.line(SIG_BOX_X + 10, y + 60, SIG_BOX_X + SIG_BOX_W - 10, y + 60, color=colors.primary, width=1)

        return y + SIG_BOX_H

    def render_footer(self, c: PageCanvas, data: InvoiceData, y: float, colors: ColorScheme, style: StyleConfig) -> float:
        f = style.fonts
        lh = f.body_size * 1.5
        y += FOOTER_TOP_GAP

        notes = data.order.notes
        if not notes:
            return y

        notes_fs = f.body_size - 1
        disclaimer = disclaimer_text(style.company.jurisdiction)
        email_line = f"If you have any questions, please contact at {style.company.email}"
        block_h = lh + c.height_of_string(notes, font=f.regular, size=notes_fs, width=TABLE_W - 8) + 8
        if style.company.email:
            block_h += c.height_of_string(email_line, font=f.regular, size=notes_fs, width=TABLE_W) + 4
        block_h += c.height_of_string(disclaimer, font=f.regular, size=f.body_size - 2, width=TABLE_W)
        y = ensure_room(c, y, block_h)

        top = y
        c.text("Notes", TABLE_X0 + 8, y, font=f.bold, size=f.body_size + 1, color=colors.primary)
        y += lh

        y = c.text(notes, TABLE_X0 + 8, y, font=f.regular, size=notes_fs, color=TEXT_DARK, width=TABLE_W - 8)
        # left rule marks the notes block
        c.line(TABLE_X0, top, TABLE_X0, y, color=colors.accent, width=2)
        y += 8

        if style.company.email:
            y = c.text(email_line, TABLE_X0, y, font=f.regular, size=notes_fs, color=TEXT_BODY, width=TABLE_W)
            y += 4

        y = c.text(disclaimer, TABLE_X0, y, font=f.regular, size=f.body_size - 2, color=TEXT_MUTED, width=TABLE_W)

        return y + FOOTER_GAP_BELOW
