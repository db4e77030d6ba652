# invoice_pdf/rendering/generator.py
from __future__ import annotations

import logging
from typing import Any, Dict, Mapping

from invoice_pdf.config import Settings
from invoice_pdf.exceptions import RenderError
from invoice_pdf.models import InvoiceData, TemplateConfig
from invoice_pdf.rendering.canvas import PageCanvas
from invoice_pdf.rendering.tax import TaxRegime
from invoice_pdf.rendering.templates import get_template
from invoice_pdf.rendering.templates.base import ImageSource

log = logging.getLogger(__name__)


def _keys(obj: Any) -> str:
    if isinstance(obj, Mapping):
        return ", ".join(obj.keys()) or "N/A"
    return "N/A"


def _log_payload(payload: Mapping[str, Any]) -> None:
    items = payload.get("lineItems") or []
    log.debug("Invoice data keys: %s", _keys(payload))
    log.debug("Order keys: %s", _keys(payload.get("order")))
    log.debug("Customer keys: %s", _keys(payload.get("customer")))
    log.debug("ShippingAddress keys: %s", _keys(payload.get("shippingAddress")))
    log.debug("LineItems count: %d, first item keys: %s", len(items), _keys(items[0]) if items else "N/A")
    log.debug("Totals keys: %s", _keys(payload.get("totals")))


class InvoicePdfGenerator:
    """
    Runs one template's stages over a fresh canvas and returns PDF bytes.

    Colors, style and tax regime are resolved once up front; every stage
    receives the same values and threads the vertical cursor to the next.
    """

    def __init__(self, settings: Settings | None = None, image_store: ImageSource | None = None):
        self.settings = settings or Settings.from_env()
        if image_store is None:
            from invoice_pdf.storage.images import ImageStore

            image_store = ImageStore(self.settings)
        self.images = image_store

    def generate(
        self,
        invoice: InvoiceData | Dict[str, Any],
        template_config: TemplateConfig | Dict[str, Any] | None = None,
    ) -> bytes:
        if isinstance(invoice, Mapping):
            _log_payload(invoice)
            invoice = InvoiceData.from_dict(invoice)
        if isinstance(template_config, Mapping):
            template_config = TemplateConfig.from_dict(template_config)

        requested = template_config.template if template_config else None
        template = get_template(self.settings.template_name(requested), self.images)
        log.info("Generating invoice %s with template: %s", invoice.order.name or "?", template.label)

        try:
            if template_config is not None and template_config.colors is not None:
                colors = template.resolve_colors(template_config.colors.primary, template_config.colors)
            else:
                colors = template.resolve_colors(self.settings.default_primary_color)

            style = template.resolve_style(template_config, colors)
            regime = TaxRegime.from_totals(invoice.totals)

            c = PageCanvas()
            y = template.render_header(c, invoice, colors, style)
            y = template.render_order_info(c, invoice, y, colors, style)
            y = template.render_line_items(c, invoice, y, colors, style, regime)
            y = template.render_totals(c, invoice, y, colors, style, regime)
            y = template.render_signature(c, invoice, y, colors, style)
            template.render_footer(c, invoice, y, colors, style)

            pdf = c.finish()
        except Exception as e:
            log.exception("Invoice render failed (template=%s)", template.name)
            raise RenderError(f"{type(e).__name__}: {e}") from e

        log.info("PDF generated: %.2f KB, %d page(s)", len(pdf) / 1024.0, c.page_count)
        return pdf


def generate_invoice_pdf(
    invoice: InvoiceData | Dict[str, Any],
    template_config: TemplateConfig | Dict[str, Any] | None = None,
    *,
    settings: Settings | None = None,
    image_store: ImageSource | None = None,
) -> bytes:
    return InvoicePdfGenerator(settings, image_store).generate(invoice, template_config)
