# invoice_pdf/rendering/canvas.py
from __future__ import annotations

import io
import logging
import re
from typing import List, Tuple

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import ImageReader
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

log = logging.getLogger(__name__)

# =========================
# Page constants
# =========================

PAGE_W, PAGE_H = A4
PAGE_MARGIN = 50

# Standard Type1 fonts have no rupee glyph
RUPEE = "₹"
RUPEE_FALLBACK = "Rs."

_BOLD_FONTS = {
    "Helvetica": "Helvetica-Bold",
    "Times-Roman": "Times-Bold",
    "Times": "Times-Bold",
    "Courier": "Courier-Bold",
}

_RGBA_RE = re.compile(
    r"^rgba?\(\s*([\d.]+)\s*,\s*([\d.]+)\s*,\s*([\d.]+)\s*(?:,\s*([\d.]+)\s*)?\)$",
    re.I,
)


def _known_font(name: str) -> bool:
    return name in pdfmetrics.standardFonts or name in pdfmetrics.getRegisteredFontNames()


def resolve_font_pair(family: str | None) -> Tuple[str, str]:
    """
    Returns (regular, bold) font names for a configured family.
    Unknown families fall back to Helvetica.
    """
    family = (family or "").strip() or "Helvetica"
    if family == "Times":
        family = "Times-Roman"

    if not _known_font(family):
        log.warning("Font family %r is not available, using Helvetica", family)
        return "Helvetica", "Helvetica-Bold"

    bold = _BOLD_FONTS.get(family) or f"{family}-Bold"
    if not _known_font(bold):
        bold = family
    return family, bold


def to_color(value) -> colors.Color:
    """
    Accepts '#rrggbb', CSS color names and 'rgba(r, g, b, a)' strings.
    """
    if isinstance(value, colors.Color):
        return value
    v = (value or "").strip()
    m = _RGBA_RE.match(v)
    if m:
        r, g, b = (float(m.group(i)) / 255.0 for i in (1, 2, 3))
        alpha = float(m.group(4)) if m.group(4) is not None else 1.0
        return colors.Color(r, g, b, alpha=alpha)
    return colors.toColor(v)


def line_height(font: str, size: float) -> float:
    asc, desc = pdfmetrics.getAscentDescent(font, size)
    return (asc - desc) * 1.25


def wrap_text(text: str, font: str, size: float, max_w: float | None) -> List[str]:
    """
    Word-wrap each paragraph of text to max_w points.
    Words wider than max_w are split by character.
    """
    out: List[str] = []
    for para in (text or "").replace("\r", "").split("\n"):
        words = para.split()
        if not words:
            out.append("")
            continue
        if max_w is None or max_w <= 0:
            out.append(" ".join(words))
            continue

        cur = ""
        for w in words:
            test = (cur + " " + w).strip()
            if stringWidth(test, font, size) <= max_w:
                cur = test
                continue
            if cur:
                out.append(cur)
            if stringWidth(w, font, size) <= max_w:
                cur = w
            else:
                chunk = ""
                for ch in w:
                    t2 = chunk + ch
                    if stringWidth(t2, font, size) <= max_w:
                        chunk = t2
                    else:
                        if chunk:
                            out.append(chunk)
                        chunk = ch
                cur = chunk
        if cur:
            out.append(cur)
    return out


class PageCanvas:
    """
    Drawing surface with top-down coordinates (y grows down from the page top).

    Text lines that would start below the bottom margin continue on a new
    page at the top margin. Everything else draws exactly where asked.
    """

    def __init__(self, buf: io.BytesIO | None = None, pagesize: Tuple[float, float] = A4, margin: float = PAGE_MARGIN):
        self.buf = buf if buf is not None else io.BytesIO()
        self.width, self.height = pagesize
        self.margin = margin
        self.page_count = 1
        self._c = canvas.Canvas(self.buf, pagesize=pagesize)

    @property
    def max_y(self) -> float:
        return self.height - self.margin

    def _y(self, y: float) -> float:
        return self.height - y

    # ---------- pages ----------

    def add_page(self) -> None:
        self._c.showPage()
        self.page_count += 1

    def finish(self) -> bytes:
        self._c.save()
        return self.buf.getvalue()

    # ---------- text ----------

    def _printable(self, text: str, font: str) -> str:
        if font in pdfmetrics.standardFonts:
            return text.replace(RUPEE, RUPEE_FALLBACK)
        return text

    def _text_width(self, x: float, width: float | None) -> float:
        if width is not None:
            return width
        return self.width - self.margin - x

    def height_of_string(self, text: str, *, font: str, size: float, width: float | None = None, x: float = 0.0) -> float:
        lines = wrap_text(self._printable(text, font), font, size, self._text_width(x, width))
        return len(lines) * line_height(font, size)

    def text(
        self,
        text: str,
        x: float,
        y: float,
        *,
        font: str,
        size: float,
        color="#000000",
        width: float | None = None,
        align: str = "left",
        max_height: float | None = None,
    ) -> float:
        """
        Draw wrapped text with its top edge at y. Returns y below the last line.
        """
        text = self._printable("" if text is None else str(text), font)
        box_w = self._text_width(x, width)
        lh = line_height(font, size)
        ascent = pdfmetrics.getAscent(font, size)

        lines = wrap_text(text, font, size, box_w)
        if max_height is not None:
            lines = lines[: max(1, int(max_height // lh))]

        self._c.setFont(font, size)
        self._c.setFillColor(to_color(color))

        for ln in lines:
            if y + lh > self.max_y:
                self.add_page()
                y = self.margin
                self._c.setFont(font, size)
                self._c.setFillColor(to_color(color))

            base = self._y(y + ascent)
            if align == "right":
                self._c.drawRightString(x + box_w, base, ln)
            elif align == "center":
                self._c.drawCentredString(x + box_w / 2.0, base, ln)
            else:
                self._c.drawString(x, base, ln)
            y += lh

        return y

    # ---------- shapes ----------

    def rect(
        self,
        x: float,
        y: float,
        w: float,
        h: float,
        *,
        fill=None,
        stroke=None,
        line_width: float = 1.0,
        radius: float = 0.0,
    ) -> None:
        if fill is not None:
            self._c.setFillColor(to_color(fill))
        if stroke is not None:
            self._c.setStrokeColor(to_color(stroke))
            self._c.setLineWidth(line_width)

        do_fill = 1 if fill is not None else 0
        do_stroke = 1 if stroke is not None else 0
        if radius > 0:
            self._c.roundRect(x, self._y(y + h), w, h, radius, stroke=do_stroke, fill=do_fill)
        else:
            self._c.rect(x, self._y(y + h), w, h, stroke=do_stroke, fill=do_fill)

    def line(self, x0: float, y0: float, x1: float, y1: float, *, color="#000000", width: float = 1.0) -> None:
        self._c.setStrokeColor(to_color(color))
        self._c.setLineWidth(width)
        self._c.line(x0, self._y(y0), x1, self._y(y1))

    def image(self, data: bytes, x: float, y: float, *, fit: Tuple[float, float], align: str = "left") -> Tuple[float, float]:
        """
        Scale the image to fit inside fit=(w, h) keeping aspect ratio.
        align positions it horizontally inside the box. Returns drawn (w, h).
        """
        img = ImageReader(io.BytesIO(data))
        iw, ih = img.getSize()
        box_w, box_h = fit
        scale = min(box_w / float(iw), box_h / float(ih)) if iw and ih else 1.0
        dw, dh = iw * scale, ih * scale

        if align == "right":
            x = x + box_w - dw
        elif align == "center":
            x = x + (box_w - dw) / 2.0

        self._c.drawImage(img, x, self._y(y + dh), width=dw, height=dh, mask="auto")
        return dw, dh
