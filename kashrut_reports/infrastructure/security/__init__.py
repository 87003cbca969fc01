from .file_validator import FileValidator, ValidationResult
from .rate_limiter import limiter, init_limiter, upload_limit

__all__ = ["FileValidator", "ValidationResult", "limiter", "init_limiter", "upload_limit"]
