import os
import uuid
import logging
from typing import Optional

from werkzeug.utils import secure_filename

from kashrut_reports.config import config

logger = logging.getLogger(__name__)

UPLOADS_URL_PREFIX = "/uploads/"


class StorageService:
    """
    File storage abstraction (local folder vs Google Cloud Storage).

    Either way the returned reference is `/uploads/<uuid>_<secure name>`;
    the app serves that path from the folder or streams it from the bucket.
    """

    def __init__(self, upload_folder: str = None, bucket_name: Optional[str] = None):
        self.upload_folder = os.path.abspath(upload_folder or config.UPLOAD_FOLDER)
        self.bucket_name = bucket_name if bucket_name is not None else config.UPLOAD_BUCKET
        self.client = None
        self._setup_client()

    def _setup_client(self):
        if not self.bucket_name:
            logger.info(f"📂 Storage Service: using LOCAL folder {self.upload_folder}")
            return
        from google.cloud import storage
        self.client = storage.Client()
        logger.info(f"☁️ Storage Service: using GCS bucket {self.bucket_name}")

    @property
    def is_remote(self) -> bool:
        return self.client is not None

    @staticmethod
    def unique_name(original_filename: str) -> str:
        name = secure_filename(original_filename or "") or "file"
        return f"{uuid.uuid4()}_{name}"

    def save(self, content: bytes, original_filename: str, content_type: str = None) -> str:
        """Stores the bytes under a fresh unique name and returns its reference."""
        name = self.unique_name(original_filename)

        if self.is_remote:
            try:
                blob = self.client.bucket(self.bucket_name).blob(f"uploads/{name}")
                blob.upload_from_string(content, content_type=content_type)
            except Exception as e:
                logger.error(f"❌ GCS upload failed for {name}: {e}")
                raise
        else:
            os.makedirs(self.upload_folder, exist_ok=True)
            with open(os.path.join(self.upload_folder, name), "wb") as f:
                f.write(content)

        logger.info(f"✅ File stored: {name}")
        return UPLOADS_URL_PREFIX + name

    def read(self, name: str) -> Optional[bytes]:
        """Bytes of a stored file, or None if it doesn't exist."""
        name = secure_filename(name)
        if not name:
            return None

        if self.is_remote:
            blob = self.client.bucket(self.bucket_name).blob(f"uploads/{name}")
            if not blob.exists():
                return None
            return blob.download_as_bytes()

        path = os.path.join(self.upload_folder, name)
        if not os.path.isfile(path):
            return None
        with open(path, "rb") as f:
            return f.read()
