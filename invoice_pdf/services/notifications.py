# invoice_pdf/services/notifications.py
from __future__ import annotations

import logging
import smtplib
from typing import Callable, Optional

from invoice_pdf.email.render import build_subject, render_template
from invoice_pdf.email.smtp_sender import send_email_smtp
from invoice_pdf.models import InvoiceData, TemplateConfig
from invoice_pdf.rendering.tax import money_text

log = logging.getLogger(__name__)

DEFAULT_LINK_DAYS = 7
DEFAULT_BUTTON_COLOR = "#333333"


def _company(template_config: TemplateConfig | None):
    if template_config is None or template_config.company is None:
        return None
    return template_config.company


def send_invoice_notification(
    invoice: InvoiceData,
    invoice_url: str,
    template_config: TemplateConfig | None = None,
    *,
    link_days: int = DEFAULT_LINK_DAYS,
    sender: Callable[..., None] = send_email_smtp,
) -> Optional[str]:
    """
    Email the customer a link to their invoice.

    Returns the recipient address, or None when there is no recipient or
    sending failed. Failures never propagate: the invoice already exists.
    """
    to_email = (invoice.customer.email or "").strip()
    if not to_email:
        log.info("No customer email on %s, skipping notification", invoice.order.name or "invoice")
        return None

    company = _company(template_config)
    company_name = (company.name if company else None) or ""
    colors = template_config.colors if template_config else None

    ctx = {
        "customer_name": invoice.customer.name,
        "order_name": invoice.order.name,
        "invoice_url": invoice_url,
        "total": money_text(invoice.totals.total),
        "company_name": company_name,
        "support_email": company.email if company else None,
        "primary_color": (colors.primary if colors else None) or DEFAULT_BUTTON_COLOR,
        "expires_days": link_days,
    }

    try:
        sender(
            to_email=to_email,
            subject=build_subject(invoice.order.name, company_name),
            html_body=render_template("invoice.html", ctx),
            text_body=render_template("invoice.txt", ctx),
            from_name=company_name or None,
        )
    except (smtplib.SMTPException, OSError, KeyError, ValueError) as e:
        # KeyError: SMTP env not configured
        log.warning("Invoice email to %s failed: %s: %s", to_email, type(e).__name__, e)
        return None

    log.info("Invoice email sent to %s", to_email)
    return to_email
