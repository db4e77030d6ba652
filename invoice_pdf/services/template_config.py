# invoice_pdf/services/template_config.py
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Mapping

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from invoice_pdf.config import Settings
from invoice_pdf.db import session_scope
from invoice_pdf.models import TemplateConfig

log = logging.getLogger(__name__)


def _decode(value: Any) -> Dict[str, Any]:
    # JSON columns come back as dicts; TEXT columns as strings
    if value is None:
        return {}
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    parsed = json.loads(value) if str(value).strip() else {}
    if not isinstance(parsed, dict):
        raise ValueError(f"template config must be a JSON object, got {type(parsed).__name__}")
    return parsed


def get_template_config(db: Session, shop: str) -> Dict[str, Any] | None:
    """
    Read-only lookup of the shop's saved template settings.
    Returns the camelCase config dict with "template" filled from its column.
    """
    row = db.execute(
        text(
            """
            SELECT shop, template, config
            FROM template_configs
            WHERE shop = :shop
            """
        ),
        {"shop": shop},
    ).mappings().first()

    if not row:
        return None

    cfg = _decode(row["config"])
    if row["template"]:
        cfg["template"] = row["template"]
    return cfg


def load_template_config(shop: str, settings: Settings) -> Dict[str, Any] | None:
    """
    get_template_config against settings.database_url.
    No database or a failing one means "use defaults", never an error.
    """
    if not settings.database_url:
        log.info("DATABASE_URL not set, using default template config")
        return None

    try:
        with session_scope(settings.database_url) as db:
            return get_template_config(db, shop)
    except (SQLAlchemyError, ValueError) as e:
        log.warning("Could not load template config for %s, using defaults: %s", shop, e)
        return None


def format_config_for_pdf(raw: Mapping[str, Any] | None, settings: Settings) -> TemplateConfig:
    if raw:
        return TemplateConfig.from_dict(raw, source="database")
    return TemplateConfig(template=settings.default_template, source="default")
