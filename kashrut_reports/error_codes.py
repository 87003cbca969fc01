"""
Structured error codes.

Each entry carries a message safe to show the operator (`user_msg`) and a
more precise one for the server log (`admin_msg`).
"""


class ErrorCode:
    """Error catalog with user-facing and admin messages."""

    # Upload (1xxx)
    ERR_1001 = {
        "code": "ERR_1001",
        "admin_msg": "Upload request without files",
        "user_msg": "No files provided",
    }

    ERR_1002 = {
        "code": "ERR_1002",
        "admin_msg": "Upload batch exceeds the per-request file count",
        "user_msg": "Too many files. Maximum {limit} per upload.",
    }

    ERR_1003 = {
        "code": "ERR_1003",
        "admin_msg": "Uploaded file exceeds MAX_UPLOAD_MB",
        "user_msg": "File is too large. Maximum {limit} MB per file.",
    }

    ERR_1004 = {
        "code": "ERR_1004",
        "admin_msg": "Magic bytes / extension check failed",
        "user_msg": "File type not allowed.",
    }

    # Validation (2xxx)
    ERR_2001 = {
        "code": "ERR_2001",
        "admin_msg": "Request body failed schema validation",
        "user_msg": "Some fields are missing or invalid.",
    }

    # Database (3xxx)
    ERR_3001 = {
        "code": "ERR_3001",
        "admin_msg": "Commit failed",
        "user_msg": "Failed to save data. Please try again.",
    }

    ERR_3002 = {
        "code": "ERR_3002",
        "admin_msg": "Database connection lost",
        "user_msg": "Connection to the server failed. Please try again.",
    }

    ERR_3003 = {
        "code": "ERR_3003",
        "admin_msg": "Integrity violation (duplicate key or constraint)",
        "user_msg": "This record conflicts with an existing one.",
    }

    # Storage (4xxx)
    ERR_4001 = {
        "code": "ERR_4001",
        "admin_msg": "Storage write failed (local folder or GCS)",
        "user_msg": "Failed to store the file. Please try again.",
    }

    # Report (5xxx)
    ERR_5001 = {
        "code": "ERR_5001",
        "admin_msg": "PDF rendering failed (WeasyPrint)",
        "user_msg": "Failed to generate the report. Please try again.",
    }

    # Generic (9xxx)
    ERR_9001 = {
        "code": "ERR_9001",
        "admin_msg": "Uncategorized exception",
        "user_msg": "An unexpected error occurred.",
    }

    @staticmethod
    def get_error(exception_or_code):
        """
        Error entry for a code ("ERR_1001") or an exception, whose text is
        matched against known failure patterns. Falls back to ERR_9001.
        """
        if isinstance(exception_or_code, str):
            return getattr(ErrorCode, exception_or_code, ErrorCode.ERR_9001)

        error_str = str(exception_or_code).lower()

        if "too large" in error_str:
            return ErrorCode.ERR_1003
        if "not allowed" in error_str or "unrecognized file type" in error_str:
            return ErrorCode.ERR_1004

        if "duplicate" in error_str or "unique constraint" in error_str or "integrity" in error_str:
            return ErrorCode.ERR_3003
        if "connection" in error_str or "operationalerror" in error_str:
            return ErrorCode.ERR_3002
        if "commit" in error_str or "database" in error_str:
            return ErrorCode.ERR_3001

        if "storage" in error_str or "bucket" in error_str:
            return ErrorCode.ERR_4001
        if "pdf" in error_str or "weasyprint" in error_str:
            return ErrorCode.ERR_5001

        return ErrorCode.ERR_9001
