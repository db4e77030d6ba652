# tests/test_template_config.py
from __future__ import annotations

import json

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session

from invoice_pdf.config import Settings
from invoice_pdf.services.template_config import format_config_for_pdf, get_template_config, load_template_config

CONFIG = {
    "colors": {"primary": "#6366f1"},
    "fonts": {"bodySize": 12},
    "company": {"name": "ABC Fashion", "includeSignature": False},
}


@pytest.fixture
def db_url(tmp_path):
    url = f"sqlite:///{tmp_path / 'configs.db'}"
    engine = create_engine(url)
    with engine.begin() as conn:
        conn.execute(text("CREATE TABLE template_configs (shop TEXT PRIMARY KEY, template TEXT, config TEXT)"))
        conn.execute(
            text("INSERT INTO template_configs (shop, template, config) VALUES (:s, :t, :c)"),
            {"s": "mystore.myshopify.com", "t": "zen", "c": json.dumps(CONFIG)},
        )
        conn.execute(
            text("INSERT INTO template_configs (shop, template, config) VALUES (:s, :t, :c)"),
            {"s": "broken.myshopify.com", "t": "zen", "c": "{not json"},
        )
    engine.dispose()
    return url


def test_get_template_config_decodes_stored_json(db_url):
    with Session(create_engine(db_url)) as db:
        raw = get_template_config(db, "mystore.myshopify.com")
    assert raw["template"] == "zen"
    assert raw["company"]["name"] == "ABC Fashion"


def test_get_template_config_unknown_shop(db_url):
    with Session(create_engine(db_url)) as db:
        assert get_template_config(db, "nobody.myshopify.com") is None


def test_format_config_from_database(db_url):
    raw = load_template_config("mystore.myshopify.com", Settings(database_url=db_url))
    cfg = format_config_for_pdf(raw, Settings())
    assert cfg.source == "database"
    assert cfg.template == "zen"
    assert cfg.colors.primary == "#6366f1"
    assert cfg.fonts.body_size == 12
    assert cfg.company.include_signature is False


def test_format_config_default_uses_settings_template():
    cfg = format_config_for_pdf(None, Settings(default_template="zen"))
    assert cfg.source == "default"
    assert cfg.template == "zen"
    assert cfg.colors is None


def test_no_database_url_means_defaults():
    assert load_template_config("mystore.myshopify.com", Settings()) is None


def test_database_error_falls_back(tmp_path, caplog):
    url = f"sqlite:///{tmp_path / 'empty.db'}"
    assert load_template_config("mystore.myshopify.com", Settings(database_url=url)) is None
    assert "using defaults" in caplog.text


def test_corrupt_config_row_falls_back(db_url, caplog):
    assert load_template_config("broken.myshopify.com", Settings(database_url=db_url)) is None
    assert "broken.myshopify.com" in caplog.text
