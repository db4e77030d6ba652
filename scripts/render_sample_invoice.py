# scripts/render_sample_invoice.py
from __future__ import annotations

import argparse
import json
from pathlib import Path

from pypdf import PdfReader

from invoice_pdf.config import Settings, configure_logging
from invoice_pdf.rendering.generator import InvoicePdfGenerator

SAMPLE = Path(__file__).parent / "sample_invoice.json"


def main() -> None:
    ap = argparse.ArgumentParser(description="Render a sample invoice PDF for visual checks.")
    ap.add_argument("--input", type=Path, default=SAMPLE, help="JSON with invoiceData and optional templateConfig")
    ap.add_argument("--template", help="override templateConfig.template (minimalist | zen)")
    ap.add_argument("--out", type=Path, default=None, help="output PDF path")
    ap.add_argument("--no-config", action="store_true", help="ignore templateConfig from the input file")
    args = ap.parse_args()

    configure_logging()
    payload = json.loads(args.input.read_text(encoding="utf-8"))

    invoice = payload["invoiceData"]
    cfg = None if args.no_config else dict(payload.get("templateConfig") or {})
    if args.template:
        cfg = {**(cfg or {}), "template": args.template}

    pdf = InvoicePdfGenerator(Settings.from_env()).generate(invoice, cfg)

    order = (invoice.get("order") or {}).get("name") or "sample"
    out = args.out or Path(f"test-{(cfg or {}).get('template') or 'minimalist'}-invoice-{order.lstrip('#')}.pdf")
    out.write_bytes(pdf)

    reader = PdfReader(str(out))
    print("✅ wrote:", out.resolve())
    print("   size:", f"{len(pdf) / 1024:.2f} KB", "pages:", len(reader.pages))


if __name__ == "__main__":
    main()
