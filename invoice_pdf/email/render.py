# invoice_pdf/email/render.py
from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

TEMPLATE_DIR = Path(__file__).parent / "templates"

_jinja = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=select_autoescape(["html", "xml"]),
    keep_trailing_newline=True,
)


def render_template(template_name: str, context: dict) -> str:
    tpl = _jinja.get_template(template_name)
    return tpl.render(**context)


def build_subject(order_name: str, company_name: str) -> str:
    label = order_name or "invoice"
    if company_name:
        return f"Invoice {label} from {company_name}"
    return f"Invoice {label}"
