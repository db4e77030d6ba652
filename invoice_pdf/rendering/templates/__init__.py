# invoice_pdf/rendering/templates/__init__.py
from __future__ import annotations

import logging
from typing import Dict, Type

from invoice_pdf.config import BUILTIN_TEMPLATE
from invoice_pdf.rendering.templates.base import ImageSource, InvoiceTemplate
from invoice_pdf.rendering.templates.minimalist import MinimalistTemplate
from invoice_pdf.rendering.templates.zen import ZenTemplate

log = logging.getLogger(__name__)

TEMPLATES: Dict[str, Type] = {
    MinimalistTemplate.name: MinimalistTemplate,
    ZenTemplate.name: ZenTemplate,
}


def normalize_template_name(name: str | None) -> str:
    n = (name or "").strip().lower()
    if n in TEMPLATES:
        return n
    if n:
        log.warning("Unknown invoice template %r, using %s", name, BUILTIN_TEMPLATE)
    return BUILTIN_TEMPLATE  # safe default


def get_template(name: str | None, images: ImageSource) -> InvoiceTemplate:
    return TEMPLATES[normalize_template_name(name)](images)


__all__ = ["TEMPLATES", "get_template", "normalize_template_name", "MinimalistTemplate", "ZenTemplate"]
