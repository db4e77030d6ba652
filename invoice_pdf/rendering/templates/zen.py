# invoice_pdf/rendering/templates/zen.py
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
    TABLE_X1,
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

# Header banner (tall enough for two address lines + city + GSTIN)
BANNER_H = 140
ACCENT_STRIP_H = 4
HEADER_TEXT_X = 50
HEADER_TOP_Y = 30
HEADER_TEXT_W = 390
LOGO_X = 445
LOGO_FIT = (100, 80)
HEADER_GAP_BELOW = 20

# Invoice badge + info columns
BADGE_W = 120
BADGE_H = 35
BADGE_RADIUS = 8
BADGE_FS = 20
INFO_GAP = 8

# Bill-To box
BILL_X = 300
BILL_W = 245
BILL_PAD = 10
BILL_TOP_PAD = 12
BILL_MIN_H = 90
BILL_RADIUS = 6
INFO_BOTTOM_GAP = 15

# Items table
TABLE_TOP_GAP = 20
TABLE_RULE_DY = 25
TABLE_HEAD_GAP = 40
TABLE_HEAD_H = 35
ROW_H = 40
ROW_TEXT_DY = 15

COLUMNS: Dict[TaxRegime, List[Column]] = {
    TaxRegime.CGST_SGST: [
        Column("item", "Item", 55, 90, align="left"),
        Column("qty", "Qty", 150, 20, align="center"),
        Column("mrp", "MRP", 175, 48),
        Column("discount", "Discount", 228, 40),
        Column("before_tax", "Price\nbefore tax", 273, 50),
        Column("cgst", "CGST", 328, 40),
        Column("sgst", "SGST", 373, 40),
        Column("after_tax", "Price after tax", 418, 87),
    ],
    TaxRegime.IGST: [
        Column("item", "Item", 55, 105, align="left"),
        Column("qty", "Qty", 165, 20, align="center"),
        Column("mrp", "MRP", 190, 50),
        Column("discount", "Discount", 245, 45),
        Column("before_tax", "Price\nbefore tax", 295, 55),
        Column("igst", "IGST", 355, 50),
        Column("after_tax", "Price after tax", 408, 97),
    ],
    TaxRegime.GENERIC: [
        Column("item", "Item", 55, 110, align="left"),
        Column("qty", "Qty", 170, 25, align="center"),
        Column("mrp", "MRP", 200, 55),
        Column("discount", "Discount", 260, 55),
        Column("before_tax", "Selling price\nbefore tax", 320, 60),
        Column("tax", "Tax", 385, 45),
        Column("after_tax", "Selling price\nafter tax", 405, 100),
    ],
}

# Totals box
TOTALS_TOP_GAP = 20
TOTALS_X = 340
TOTALS_W = 205
TOTALS_H = 150
TOTALS_RADIUS = 8
TOTALS_PAD_TOP = 15
TOTALS_LEFT_X = 350
TOTALS_RIGHT_X = 535
TOTALS_GAP_BELOW = 20

# Signature box
SIG_BOX_X = 380
SIG_BOX_W = 165
SIG_BOX_H = 80
SIG_FIT = (115, 40)

# Notes
NOTES_X = 60
NOTES_W = 475

DEFAULT_COLORS = ColorScheme(
    primary="#6366f1",      # indigo
    secondary="#8b5cf6",    # purple
    accent="#ec4899",       # pink
    border="#e0e7ff",
    background="#faf5ff",
    success="#10b981",
    warning="#f59e0b",
    error="#ef4444",
)

STYLE_DEFAULTS = StyleDefaults(title_size=32, heading_size=18, body_size=11, table_size=8)


class ZenTemplate:
    """
    Colorful layout: tall indigo banner with accent strip, badge heading,
    rounded boxes and color-coded prices.
    """

    name = "zen"
    label = "Zen (Colorful)"

    def __init__(self, images: ImageSource):
        self.images = images

    def resolve_colors(self, seed: str | None = None, color_config: ColorConfig | None = None) -> ColorScheme:
        return resolve_colors(DEFAULT_COLORS, seed, color_config)

    def resolve_style(self, config: TemplateConfig | None, colors: ColorScheme) -> StyleConfig:
        return resolve_style(config, STYLE_DEFAULTS, colors)

    # ---------- header ----------

    def render_header(self, c: PageCanvas, data: InvoiceData, colors: ColorScheme, style: StyleConfig) -> float:
        co = style.company
        f = style.fonts
        text_color = style.header.text_color
        title_lh = f.title_size * 1.2
        body_lh = f.body_size * 1.35

        c.rect(0, 0, PAGE_W, BANNER_H, fill=style.header.document_banner_color)
        c.rect(0, BANNER_H - ACCENT_STRIP_H, PAGE_W, ACCENT_STRIP_H, fill=colors.accent)

        y = HEADER_TOP_Y
        c.text(co.name, HEADER_TEXT_X, y, font=f.bold, size=f.title_size, color=text_color, width=HEADER_TEXT_W)
        y += title_lh - 5

        c.text(co.legal_name, HEADER_TEXT_X, y, font=f.regular, size=f.body_size, color=text_color, width=HEADER_TEXT_W)
        y += body_lh - 1

        for line in (co.address_line1, co.address_line2):
            if not line.strip():
                continue
            c.text(line.strip(), HEADER_TEXT_X, y, font=f.regular, size=f.body_size, color=text_color, width=HEADER_TEXT_W)
            y += body_lh - 1

        city_line = co.city_state_pin
        if city_line and city_line != "-":
            c.text(city_line, HEADER_TEXT_X, y, font=f.regular, size=f.body_size, color=text_color, width=HEADER_TEXT_W)
            y += body_lh - 1

        if co.gstin.strip():
            c.text(f"GSTIN: {co.gstin}", HEADER_TEXT_X, y, font=f.regular, size=f.body_size - 1, color=text_color)

        draw_logo(c, load_logo(self.images, co.logo), LOGO_X, HEADER_TOP_Y, LOGO_FIT)

        return BANNER_H + HEADER_GAP_BELOW

    # ---------- order info ----------

    def render_order_info(self, c: PageCanvas, data: InvoiceData, y: float, colors: ColorScheme, style: StyleConfig) -> float:
        f = style.fonts
        body_lh = f.body_size * 1.35
        order = data.order

        c.rect(TABLE_X0, y, BADGE_W, BADGE_H, fill=colors.accent, radius=BADGE_RADIUS)
        c.text("INVOICE", TABLE_X0, y + 9, font=f.bold, size=BADGE_FS, color="#ffffff", width=BADGE_W, align="center")
        y += BADGE_H + 15

        pairs = [
            ("Invoice Number:", order.name or "N/A"),
            ("Invoice Date:", order.date or "N/A"),
            ("Order Number:", order.order_number or order.name or "N/A"),
        ]
        for i, (label, value) in enumerate(pairs):
            if i:
                y += body_lh + INFO_GAP
            c.text(label, TABLE_X0, y, font=f.bold, size=f.body_size, color=colors.primary)
            y += body_lh
            c.text(value, TABLE_X0, y, font=f.regular, size=f.body_size, color=TEXT_DARK, width=BILL_X - TABLE_X0 - 10)

        # Box top sits just above the first label
        box_y = y - (body_lh * 6) - INFO_GAP

        lines = [
            BoxLine("Bill To:", f.bold, f.body_size + 1, colors.secondary, advance=body_lh + 4),
            BoxLine(data.customer.name or "N/A", f.bold, f.body_size, TEXT_DARK, advance=body_lh),
        ]
        lines += bill_to_body(data, style, size=f.body_size - 1, line_h=body_lh)

        bill_end, _ = draw_two_pass_box(
            c,
            lines,
            x=BILL_X,
            y=box_y,
            width=BILL_W,
            padding=BILL_PAD,
            top_pad=BILL_TOP_PAD,
            bottom_pad=BILL_TOP_PAD,
            min_height=BILL_MIN_H,
            fill=colors.background,
            stroke=colors.border,
            radius=BILL_RADIUS,
        )

        return max(y + body_lh + 4, bill_end + INFO_BOTTOM_GAP)

    # ---------- line items ----------

    def render_line_items(
        self, c: PageCanvas, data: InvoiceData, y: float, colors: ColorScheme, style: StyleConfig, regime: TaxRegime
    ) -> float:
        f = style.fonts
        y += TABLE_TOP_GAP

        c.text("Order Items", TABLE_X0, y, font=f.bold, size=f.heading_size, color=colors.primary)
        c.line(TABLE_X0, y + TABLE_RULE_DY, TABLE_X1, y + TABLE_RULE_DY, color=colors.accent, width=2)
        y += TABLE_HEAD_GAP

        columns = COLUMNS[regime]
        c.rect(TABLE_X0, y, TABLE_W, TABLE_HEAD_H, fill=style.header.table_header_color, radius=4)
        draw_header_labels(
            c,
            columns,
            y,
            font=f.bold,
            size=f.table_size,
            color=style.header.text_color,
            dy_single=12,
            dy_multi=8,
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
                size=f.table_size - 0.5,
                shade=colors.background,
                separator=colors.border,
                text_color=TEXT_DARK,
                discount_color=colors.error,
                after_tax_color=colors.success,
            ),
        )

    # ---------- totals ----------

    def render_totals(
        self, c: PageCanvas, data: InvoiceData, y: float, colors: ColorScheme, style: StyleConfig, regime: TaxRegime
    ) -> float:
        f = style.fonts
        body_lh = f.body_size * 1.5
        value_w = TOTALS_RIGHT_X - TOTALS_LEFT_X

        y = ensure_room(c, y, TOTALS_TOP_GAP + TOTALS_H)
        box_y = y + TOTALS_TOP_GAP
        c.rect(
            TOTALS_X,
            box_y,
            TOTALS_W,
            TOTALS_H,
            fill=colors.background,
            stroke=colors.primary,
            line_width=1.5,
            radius=TOTALS_RADIUS,
        )

        y = box_y + TOTALS_PAD_TOP
        for ln in totals_lines(data.totals, regime):
            color = colors.error if ln.kind == "discount" else TEXT_BODY
            c.text(ln.label, TOTALS_LEFT_X, y, font=f.regular, size=f.body_size, color=color)
            c.text(ln.value, TOTALS_LEFT_X, y, font=f.regular, size=f.body_size, color=color, width=value_w, align="right")
            y += body_lh + 2

        y += 5
        c.line(TOTALS_LEFT_X, y, TOTALS_RIGHT_X, y, color=colors.primary, width=1)
        y += 10

        total_fs = f.body_size + 3
        c.text("Total:", TOTALS_LEFT_X, y, font=f.bold, size=total_fs, color=colors.primary)
        c.text(
            money_text(data.totals.total),
            TOTALS_LEFT_X,
            y,
            font=f.bold,
            size=total_fs,
            color=colors.accent,
            width=value_w,
            align="right",
        )

        return box_y + TOTALS_H + TOTALS_GAP_BELOW

    # ---------- signature ----------

    def render_signature(self, c: PageCanvas, data: InvoiceData, y: float, colors: ColorScheme, style: StyleConfig) -> float:
        co = style.company
        if not co.include_signature or not co.signature:
            log.info("Signature disabled or not configured, skipping signature section")
            return y

        signature = load_signature(self.images, co.signature)
        if signature is None:
            return y

        f = style.fonts
        top_gap = f.body_size * 1.5 * 3
        y = ensure_room(c, y, top_gap + SIG_BOX_H)
        y += top_gap

        c.rect(SIG_BOX_X, y - 10, SIG_BOX_W, SIG_BOX_H, fill=colors.background, stroke=colors.border, radius=6)
        c.text("Authorized Signatory", SIG_BOX_X + 10, y, font=f.regular, size=f.body_size - 1,
               color=colors.secondary, width=SIG_BOX_W - 20, align="center")
        c.image(signature, SIG_BOX_X + 10, y + 15, fit=SIG_FIT, align="center")
        c.line(SIG_BOX_X + 10, y + 60, SIG_BOX_X + SIG_BOX_W - 10, y + 60, color=colors.primary, width=1.5)

        return y + SIG_BOX_H

    # ---------- footer ----------

    def render_footer(self, c: PageCanvas, data: InvoiceData, y: float, colors: ColorScheme, style: StyleConfig) -> float:
        f = style.fonts
        body_lh = f.body_size * 1.5
        y += body_lh * 2

        notes = data.order.notes
        if not notes:
            return y

        notes_fs = f.body_size - 1
        notes_h = c.height_of_string(notes, font=f.regular, size=notes_fs, width=NOTES_W)
        box_h = body_lh + 18 + notes_h + 8

        disclaimer = disclaimer_text(style.company.jurisdiction)
        block_h = body_lh + 18 + notes_h + body_lh
        if style.company.email:
            block_h += body_lh + 5
        block_h += c.height_of_string(disclaimer, font=f.regular, size=f.body_size - 2, width=NOTES_W)
        y = ensure_room(c, y, block_h)

        c.rect(TABLE_X0, y, TABLE_W, box_h, fill=colors.background, stroke=colors.border, radius=6)

        c.text("NOTES", NOTES_X, y + 15, font=f.bold, size=f.heading_size - 4, color=colors.secondary)
        y += body_lh + 18

        c.text(notes, NOTES_X, y, font=f.regular, size=notes_fs, color=TEXT_DARK, width=NOTES_W)
        y += notes_h + body_lh

        if style.company.email:
            c.text(
                f"If you have any questions, please contact at {style.company.email}",
                NOTES_X, y, font=f.regular, size=notes_fs, color=TEXT_BODY, width=NOTES_W,
            )
            y += body_lh + 5

        c.text(disclaimer, NOTES_X, y, font=f.regular, size=f.body_size - 2, color=TEXT_MUTED, width=NOTES_W)
        y += c.height_of_string(disclaimer, font=f.regular, size=f.body_size - 2, width=NOTES_W)

        return y + body_lh * 3
