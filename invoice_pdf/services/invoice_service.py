# invoice_pdf/services/invoice_service.py
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from invoice_pdf.config import Settings
from invoice_pdf.exceptions import InvalidInvoiceRequest
from invoice_pdf.models import InvoiceData, TemplateConfig
from invoice_pdf.rendering.generator import InvoicePdfGenerator
from invoice_pdf.services.notifications import send_invoice_notification
from invoice_pdf.services.template_config import format_config_for_pdf, load_template_config

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class InvoiceRequest:
    invoice_data: Dict[str, Any]
    shop: str
    order_id: Optional[str] = None
    order_name: Optional[str] = None

    @classmethod
    def from_event(cls, event: Mapping[str, Any] | None) -> "InvoiceRequest":
        event = event or {}
        invoice_data = event.get("invoiceData")
        shop = (event.get("shop") or "").strip() if isinstance(event.get("shop"), str) else ""

        if not isinstance(invoice_data, Mapping) or not invoice_data or not shop:
            raise InvalidInvoiceRequest("Missing required fields: invoiceData, shop")

        order_id = event.get("orderId")
        return cls(
            invoice_data=dict(invoice_data),
            shop=shop,
            order_id=str(order_id) if order_id is not None else None,
            order_name=event.get("orderName") or None,
        )

    @property
    def display_order_name(self) -> str:
        order = self.invoice_data.get("order") or {}
        return self.order_name or order.get("name") or "unknown"


@dataclass(frozen=True)
class InvoiceResult:
    invoice_id: str
    file_name: str
    s3_url: str
    email_sent_to: Optional[str]

    def to_response(self) -> Dict[str, Any]:
        return {
            "statusCode": 200,
            "invoiceId": self.invoice_id,
            "fileName": self.file_name,
            "s3Url": self.s3_url,
            "emailSentTo": self.email_sent_to,
        }


class InvoiceDeliveryService:
    """
    Config lookup -> render -> upload -> notify for one invoice request.
    No database writes; callers record the result.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        generator: InvoicePdfGenerator | None = None,
        uploader: Callable[[bytes, str, str], Tuple[str, str]] | None = None,
        config_loader: Callable[[str, Settings], Optional[Dict[str, Any]]] = load_template_config,
        notifier: Callable[..., Optional[str]] = send_invoice_notification,
    ):
        self.settings = settings
        self.generator = generator or InvoicePdfGenerator(settings)
        self._uploader = uploader
        self.config_loader = config_loader
        self.notifier = notifier

    def _upload(self, pdf: bytes, order_name: str, shop: str) -> Tuple[str, str]:
        if self._uploader is None:
            from invoice_pdf.storage.s3_storage import S3Storage

            self._uploader = S3Storage(self.settings).upload_invoice
        return self._uploader(pdf, order_name, shop)

    def template_config_for(self, shop: str) -> TemplateConfig:
        cfg = format_config_for_pdf(self.config_loader(shop, self.settings), self.settings)
        log.info("Using template config from: %s", cfg.source)
        return cfg

    def render(self, req: InvoiceRequest) -> Tuple[bytes, TemplateConfig]:
        cfg = self.template_config_for(req.shop)
        return self.generator.generate(req.invoice_data, cfg), cfg

    def deliver(self, req: InvoiceRequest) -> InvoiceResult:
        invoice_id = str(uuid.uuid4())
        log.info("Generating PDF for order %s, shop %s, invoiceId %s", req.display_order_name, req.shop, invoice_id)

        pdf, cfg = self.render(req)
        log.info("PDF generated: %.2f KB", len(pdf) / 1024.0)

        file_name, url = self._upload(pdf, req.display_order_name, req.shop)
        log.info("PDF uploaded: %s", file_name)

        invoice = InvoiceData.from_dict(req.invoice_data)
        link_days = max(1, self.settings.presign_expires_seconds // 86400)
        email_sent_to = self.notifier(invoice, url, cfg, link_days=link_days)

        return InvoiceResult(
            invoice_id=invoice_id,
            file_name=file_name,
            s3_url=url,
            email_sent_to=email_sent_to or None,
        )
