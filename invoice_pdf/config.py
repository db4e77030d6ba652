# invoice_pdf/config.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

BUILTIN_TEMPLATE = "minimalist"
DEFAULT_ASSETS_DIR = Path(__file__).parent / "assets"

# 7 days, the longest SigV4 presign S3 accepts
DEFAULT_PRESIGN_SECONDS = 7 * 24 * 3600

_LOG_LEVELS = {"DEBUG": logging.DEBUG, "INFO": logging.INFO, "WARNING": logging.WARNING, "ERROR": logging.ERROR}


def _env(name: str) -> str | None:
    val = (os.getenv(name) or "").strip()
    return val or None


@dataclass(frozen=True)
class Settings:
    """
    Process-wide defaults, read once and passed explicitly to the generator.

    Template precedence when rendering:
      template_config.template > default_template > "minimalist"
    """

    default_template: str | None = None
    default_primary_color: str | None = None
    local_assets_path: Path | None = None
    assets_dir: Path = DEFAULT_ASSETS_DIR

    s3_bucket: str | None = None
    aws_region: str = "us-east-1"
    aws_profile: str | None = None
    presign_expires_seconds: int = DEFAULT_PRESIGN_SECONDS

    database_url: str | None = None

    @classmethod
    def from_env(cls) -> "Settings":
        # Local dev convenience: loads from .env if present.
        # On Lambda, env vars come from the function configuration.
        load_dotenv(".env")

        local_assets = _env("LOCAL_ASSETS_PATH")
        assets_dir = _env("INVOICE_ASSETS_DIR")

        return cls(
            default_template=_env("INVOICE_TEMPLATE"),
            default_primary_color=_env("INVOICE_PRIMARY_COLOR"),
            local_assets_path=Path(local_assets) if local_assets else None,
            assets_dir=Path(assets_dir) if assets_dir else DEFAULT_ASSETS_DIR,
            s3_bucket=_env("S3_BUCKET"),
            aws_region=_env("AWS_REGION") or "us-east-1",
            aws_profile=_env("AWS_PROFILE"),
            presign_expires_seconds=int(_env("PRESIGN_EXPIRES_SECONDS") or DEFAULT_PRESIGN_SECONDS),
            database_url=_env("DATABASE_URL"),
        )

    def template_name(self, requested: str | None) -> str:
        return (requested or self.default_template or BUILTIN_TEMPLATE).strip().lower()


def configure_logging(level: str | None = None) -> None:
    name = (level or os.getenv("LOG_LEVEL") or "INFO").strip().upper()
    logging.basicConfig(
        level=_LOG_LEVELS.get(name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
