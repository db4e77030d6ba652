# invoice_pdf/rendering/__init__.py
from invoice_pdf.rendering.generator import InvoicePdfGenerator, generate_invoice_pdf

__all__ = ["InvoicePdfGenerator", "generate_invoice_pdf"]
