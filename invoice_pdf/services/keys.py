# invoice_pdf/services/keys.py
from __future__ import annotations

import re
from datetime import datetime, timezone

_UNSAFE = re.compile(r"[^A-Za-z0-9._-]+")


def epoch_ms(now: datetime | None = None) -> int:
    now = now or datetime.now(timezone.utc)
    return int(now.timestamp() * 1000)


def key_part(value: str | None, fallback: str = "unknown") -> str:
    # "#1001" -> "1001", "my store.myshopify.com" -> "my-store.myshopify.com"
    v = _UNSAFE.sub("-", (value or "").strip()).strip("-.")
    return v or fallback


def invoice_key(order_name: str | None, shop: str, now: datetime | None = None) -> str:
    return f"shops/{key_part(shop)}/invoices/invoice-{key_part(order_name)}-{epoch_ms(now)}.pdf"


def invoice_filename(key: str) -> str:
    return key.rsplit("/", 1)[-1]
