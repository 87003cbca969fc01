"""Validated storage of photo and document uploads."""
import logging
from dataclasses import dataclass, field
from typing import List

from kashrut_reports.config import config
from kashrut_reports.domain.exceptions import UploadError
from kashrut_reports.error_codes import ErrorCode
from kashrut_reports.infrastructure.security.file_validator import FileValidator

logger = logging.getLogger(__name__)


@dataclass
class UploadedFile:
    """One file of an upload batch, already read into memory."""
    filename: str
    content: bytes
    content_type: str = None


@dataclass
class UploadResult:
    file_paths: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"filePaths": self.file_paths}


class UploadService:
    def __init__(self, storage, max_upload_mb: int = None):
        self._storage = storage
        max_mb = max_upload_mb or config.MAX_UPLOAD_MB
        self._photo_validator = FileValidator.create_photo_validator(max_mb)
        self._document_validator = FileValidator.create_document_validator(max_mb)

    def store_photos(self, files: List[UploadedFile]) -> UploadResult:
        return self._store(files, self._photo_validator, config.MAX_PHOTOS_PER_UPLOAD)

    def store_documents(self, files: List[UploadedFile]) -> UploadResult:
        return self._store(files, self._document_validator, config.MAX_DOCUMENTS_PER_UPLOAD)

    def _store(self, files: List[UploadedFile], validator: FileValidator, limit: int) -> UploadResult:
        files = [f for f in files or [] if f.filename]
        if not files:
            raise UploadError(ErrorCode.ERR_1001["user_msg"], ErrorCode.ERR_1001["code"])
        if len(files) > limit:
            err = ErrorCode.ERR_1002
            raise UploadError(err["user_msg"].format(limit=limit), err["code"])

        # whole batch is checked before anything is written
        for f in files:
            result = validator.validate(f.content, f.filename)
            if not result.is_valid:
                err = ErrorCode.ERR_1003 if result.error_code == "FILE_TOO_LARGE" else ErrorCode.ERR_1004
                logger.warning(f"⚠️ Upload rejected [{err['code']}] {err['admin_msg']}: {result.error_message}")
                raise UploadError(result.error_message, err["code"])

        paths = [self._storage.save(f.content, f.filename, f.content_type) for f in files]
        logger.info(f"📎 Stored {len(paths)} file(s)", extra={"props": {"files": paths}})
        return UploadResult(file_paths=paths)
