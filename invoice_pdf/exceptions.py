# invoice_pdf/exceptions.py
from __future__ import annotations


class InvoicePdfError(Exception):
    """Base exception for invoice rendering and delivery."""


class InvalidInvoiceRequest(InvoicePdfError):
    """Request is missing required top-level fields."""


class RenderError(InvoicePdfError):
    """A drawing stage failed; no document was produced."""


class ImageFetchError(InvoicePdfError):
    """Logo or signature image could not be loaded."""

    def __init__(self, reference: str, reason: str = ""):
        self.reference = reference
        self.reason = reason
        super().__init__(f"Could not load image {reference!r}: {reason}" if reason else f"Could not load image {reference!r}")


class StorageError(InvoicePdfError):
    """Object storage is not configured."""
