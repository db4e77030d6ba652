# invoice_pdf/api_main.py
from __future__ import annotations

import logging

from fastapi import Body, Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from invoice_pdf import __version__
from invoice_pdf.config import Settings, configure_logging
from invoice_pdf.exceptions import InvalidInvoiceRequest, RenderError, StorageError
from invoice_pdf.models import TemplateConfig
from invoice_pdf.services.invoice_service import InvoiceDeliveryService, InvoiceRequest
from invoice_pdf.services.keys import key_part

log = logging.getLogger(__name__)

configure_logging()

app = FastAPI(title="Invoice PDF API", version=__version__)

# CORS for local frontend dev (React/Vite/etc.)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_service: InvoiceDeliveryService | None = None


def get_service() -> InvoiceDeliveryService:
    global _service
    if _service is None:
        _service = InvoiceDeliveryService(Settings.from_env())
    return _service


@app.get("/")
def root():
    return {"ok": True, "try": ["/docs", "/api/health", "/api/invoices"]}


@app.get("/api/health")
def health():
    return {"ok": True, "version": __version__}


@app.post("/api/invoices")
def create_invoice(body: dict = Body(...), service: InvoiceDeliveryService = Depends(get_service)):
    try:
        req = InvoiceRequest.from_event(body)
    except InvalidInvoiceRequest as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        return service.deliver(req).to_response()
    except RenderError as e:
        raise HTTPException(status_code=500, detail=f"Render failed: {e}")
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/api/invoices/preview")
def preview_invoice(body: dict = Body(...), service: InvoiceDeliveryService = Depends(get_service)):
    """
    Render without uploading or emailing. An inline "templateConfig" wins
    over the shop's saved config; with neither, defaults apply.
    """
    try:
        req = InvoiceRequest.from_event({"shop": "preview", **body})
    except InvalidInvoiceRequest as e:
        raise HTTPException(status_code=400, detail=str(e))

    inline_cfg = body.get("templateConfig")
    try:
        if isinstance(inline_cfg, dict):
            pdf = service.generator.generate(req.invoice_data, TemplateConfig.from_dict(inline_cfg))
        else:
            pdf, _cfg = service.render(req)
    except RenderError as e:
        raise HTTPException(status_code=500, detail=f"Render failed: {e}")

    filename = f"invoice-{key_part(req.display_order_name)}.pdf"
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'inline; filename="{filename}"'},
    )
