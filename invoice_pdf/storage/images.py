# invoice_pdf/storage/images.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from botocore.exceptions import BotoCoreError, ClientError

from invoice_pdf.config import Settings
from invoice_pdf.exceptions import ImageFetchError, StorageError

log = logging.getLogger(__name__)


def _read_file(path: Path) -> bytes:
    with open(path, "rb") as f:
        return f.read()


class ImageStore:
    """
    Resolves logo and signature references to raw image bytes.

    fetch_image looks under LOCAL_ASSETS_PATH first (by file name), then
    treats the reference as an object key in the invoice bucket.
    read_bundled_asset only reads the packaged assets directory.
    """

    def __init__(self, settings: Settings, storage_factory: Callable | None = None):
        self.settings = settings
        self._storage_factory = storage_factory
        self._storage = None

    def _get_storage(self):
        if self._storage is None:
            if self._storage_factory is not None:
                self._storage = self._storage_factory()
            else:
                from invoice_pdf.storage.s3_storage import S3Storage

                self._storage = S3Storage(self.settings)
        return self._storage

    def _local_candidate(self, reference: str) -> Path | None:
        base = self.settings.local_assets_path
        if base is None:
            return None
        for p in (base / reference, base / Path(reference).name):
            if p.is_file():
                return p
        return None

    def fetch_image(self, reference: str) -> bytes:
        ref = (reference or "").strip()
        if not ref:
            raise ImageFetchError(reference, "empty reference")

        local = self._local_candidate(ref)
        if local is not None:
            log.info("Loading image from local assets: %s", local)
            return _read_file(local)

        key = ref.lstrip("/")
        try:
            data = self._get_storage().download_bytes(key)
        except (ClientError, BotoCoreError, StorageError) as e:
            raise ImageFetchError(reference, f"{type(e).__name__}: {e}") from e

        if not data:
            raise ImageFetchError(reference, "empty object")
        return data

    def read_bundled_asset(self, name: str) -> bytes:
        path = self.settings.assets_dir / Path(name).name
        try:
            return _read_file(path)
        except OSError as e:
            raise ImageFetchError(name, f"{type(e).__name__}: {e}") from e
