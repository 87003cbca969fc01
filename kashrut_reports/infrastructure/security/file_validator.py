"""
Upload validation by magic bytes.

The declared extension must agree with the detected content type, so a
renamed executable is rejected even if it ends in `.jpg`.
"""
import logging
import os
from dataclasses import dataclass
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

IMAGE_TYPES = ["png", "jpg", "gif", "webp"]
# Office files: "ooxml" is the zip container of .docx/.xlsx, "ole" the compound file of .doc/.xls
OFFICE_TYPES = ["ooxml", "ole"]


@dataclass
class ValidationResult:
    """Result of file validation."""
    is_valid: bool
    file_type: Optional[str] = None
    error_message: Optional[str] = None
    error_code: Optional[str] = None


class FileValidator:
    # {file_type: [(magic_bytes, offset), ...]}
    MAGIC_BYTES = {
        "pdf": [(b"%PDF", 0)],
        "png": [(b"\x89PNG\r\n\x1a\n", 0)],
        "jpg": [
            (b"\xff\xd8\xff\xe0", 0),  # JFIF
            (b"\xff\xd8\xff\xe1", 0),  # Exif
            (b"\xff\xd8\xff\xe2", 0),
            (b"\xff\xd8\xff\xdb", 0),
            (b"\xff\xd8\xff\xee", 0),
        ],
        "gif": [(b"GIF87a", 0), (b"GIF89a", 0)],
        "webp": [(b"RIFF", 0)],  # plus "WEBP" at offset 8
        "ooxml": [(b"PK\x03\x04", 0)],
        "ole": [(b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1", 0)],
    }

    EXTENSION_MAP = {
        ".pdf": "pdf",
        ".png": "png",
        ".jpg": "jpg",
        ".jpeg": "jpg",
        ".gif": "gif",
        ".webp": "webp",
        ".docx": "ooxml",
        ".xlsx": "ooxml",
        ".doc": "ole",
        ".xls": "ole",
    }

    def __init__(self, allowed_types: Optional[list] = None, max_size_bytes: Optional[int] = None):
        self.allowed_types = allowed_types or list(IMAGE_TYPES)
        self.max_size_bytes = max_size_bytes

    def validate(self, file_content: bytes, filename: str, check_extension: bool = True) -> ValidationResult:
        if not file_content:
            return ValidationResult(is_valid=False, error_message=f"{filename}: file is empty", error_code="EMPTY_FILE")

        if self.max_size_bytes and len(file_content) > self.max_size_bytes:
            max_mb = self.max_size_bytes / (1024 * 1024)
            return ValidationResult(
                is_valid=False,
                error_message=f"{filename}: file too large (max {max_mb:.0f} MB)",
                error_code="FILE_TOO_LARGE",
            )

        detected_type = self._detect_file_type(file_content)
        if not detected_type:
            logger.warning(f"Failed to detect file type for: {filename}")
            return ValidationResult(
                is_valid=False,
                error_message=f"{filename}: unrecognized file type",
                error_code="UNKNOWN_FILE_TYPE",
            )

        if detected_type not in self.allowed_types:
            logger.warning(f"File type not allowed: {detected_type} for {filename}")
            return ValidationResult(
                is_valid=False,
                file_type=detected_type,
                error_message=f"{filename}: file type '{detected_type}' is not allowed. "
                              f"Allowed types: {', '.join(self.allowed_types)}",
                error_code="FILE_TYPE_NOT_ALLOWED",
            )

        if check_extension:
            ok, message = self._validate_extension(filename, detected_type)
            if not ok:
                return ValidationResult(
                    is_valid=False,
                    file_type=detected_type,
                    error_message=f"{filename}: {message}",
                    error_code="EXTENSION_MISMATCH",
                )

        logger.info(f"File validation passed: {filename} (type: {detected_type})")
        return ValidationResult(is_valid=True, file_type=detected_type)

    def _detect_file_type(self, content: bytes) -> Optional[str]:
        for file_type, signatures in self.MAGIC_BYTES.items():
            for magic, offset in signatures:
                if content[offset:offset + len(magic)] != magic:
                    continue
                if file_type == "webp":
                    if content[8:12] == b"WEBP":
                        return "webp"
                    continue
                return file_type
        return None

    def _validate_extension(self, filename: str, detected_type: str) -> Tuple[bool, str]:
        ext = os.path.splitext(filename.lower())[1]
        if not ext:
            return False, "file has no extension"
        if self.EXTENSION_MAP.get(ext) != detected_type:
            return False, f"extension ({ext}) does not match content ({detected_type})"
        return True, ""

    @classmethod
    def create_photo_validator(cls, max_size_mb: int = 10) -> "FileValidator":
        return cls(allowed_types=list(IMAGE_TYPES), max_size_bytes=max_size_mb * 1024 * 1024)

    @classmethod
    def create_document_validator(cls, max_size_mb: int = 10) -> "FileValidator":
        """PDFs, Word and Excel files, plus scanned images."""
        return cls(allowed_types=["pdf"] + OFFICE_TYPES + IMAGE_TYPES, max_size_bytes=max_size_mb * 1024 * 1024)
