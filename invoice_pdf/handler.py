# invoice_pdf/handler.py
"""
Lambda entry point.

Input (event):
  {
    "invoiceData": {order, customer, shippingAddress, lineItems, totals},
    "shop": "mystore.myshopify.com",
    "orderId": "12345",
    "orderName": "#1001"
  }

Output:
  {statusCode: 200, invoiceId, fileName, s3Url, emailSentTo}
  {statusCode: 400, body: "{\"error\": ...}"}
  {statusCode: 500, error}
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict

from invoice_pdf.config import Settings, configure_logging
from invoice_pdf.exceptions import InvalidInvoiceRequest
from invoice_pdf.services.invoice_service import InvoiceDeliveryService, InvoiceRequest

log = logging.getLogger(__name__)

_service: InvoiceDeliveryService | None = None


def get_service() -> InvoiceDeliveryService:
    global _service
    if _service is None:
        configure_logging()
        _service = InvoiceDeliveryService(Settings.from_env())
    return _service


def handler(event: Dict[str, Any] | None, context: Any = None) -> Dict[str, Any]:
    log.info("generate-pdf-invoice invoked, event keys: %s", ", ".join((event or {}).keys()))
    try:
        req = InvoiceRequest.from_event(event)
        return get_service().deliver(req).to_response()
    except InvalidInvoiceRequest as e:
        return {"statusCode": 400, "body": json.dumps({"error": str(e)})}
    except Exception as e:
        log.exception("generate-pdf-invoice failed")
        return {"statusCode": 500, "error": str(e)}
