# invoice_pdf/storage/s3_storage.py
from __future__ import annotations

import logging
from datetime import datetime
from typing import Tuple
from urllib.parse import quote

import boto3
from botocore.client import Config

from invoice_pdf.config import Settings
from invoice_pdf.exceptions import StorageError
from invoice_pdf.services.keys import invoice_filename, invoice_key

log = logging.getLogger(__name__)


def _safe_filename(name: str) -> str:
    # Keep it simple for Content-Disposition; browsers are picky.
    name = (name or "invoice.pdf").strip().replace("\n", " ").replace("\r", " ")
    if not name.lower().endswith(".pdf"):
        name += ".pdf"
    return name


class S3Storage:
    def __init__(self, settings: Settings | None = None, client=None):
        self.settings = settings or Settings.from_env()

        self.bucket = self.settings.s3_bucket
        if not self.bucket:
            raise StorageError("S3_BUCKET is not set")

        if client is not None:
            self.s3 = client
            return

        profile = self.settings.aws_profile
        session = boto3.Session(profile_name=profile) if profile else boto3.Session()

        # signature_version helps with some environments, safe default
        self.s3 = session.client(
            "s3",
            region_name=self.settings.aws_region,
            config=Config(signature_version="s3v4"),
        )

    def upload_pdf_bytes(self, key: str, data: bytes) -> None:
        self.s3.put_object(
            Bucket=self.bucket,
            Key=key,
            Body=data,
            ContentType="application/pdf",
        )

    def download_bytes(self, key: str) -> bytes:
        resp = self.s3.get_object(Bucket=self.bucket, Key=key)
        return resp["Body"].read()

    def presign_get_url(
        self,
        key: str,
        expires_seconds: int | None = None,
        download_filename: str | None = None,
        inline: bool = True,
    ) -> str:
        """
        inline=True opens in browser tab; inline=False forces download.
        """
        params = {"Bucket": self.bucket, "Key": key}

        if download_filename:
            fname = _safe_filename(download_filename)
            disp = "inline" if inline else "attachment"
            # filename*= for utf-8 safety
            params["ResponseContentDisposition"] = f"{disp}; filename*=UTF-8''{quote(fname)}"
            params["ResponseContentType"] = "application/pdf"

        return self.s3.generate_presigned_url(
            ClientMethod="get_object",
            Params=params,
            ExpiresIn=int(expires_seconds or self.settings.presign_expires_seconds),
        )

    def upload_invoice(self, pdf: bytes, order_name: str | None, shop: str, now: datetime | None = None) -> Tuple[str, str]:
        """
        Store a rendered invoice under the shop's prefix.
        Returns (key, presigned_url).
        """
        key = invoice_key(order_name, shop, now)
        self.upload_pdf_bytes(key, pdf)
        log.info("Uploaded invoice to s3://%s/%s (%d bytes)", self.bucket, key, len(pdf))
        return key, self.presign_get_url(key, download_filename=invoice_filename(key))
