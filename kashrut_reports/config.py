import os


class Config:
    # Security
    SECRET_KEY = os.getenv("SECRET_KEY", "dev_secret_key_change_in_production")

    # Database
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///kashrut_reports.db")

    # Uploads (local folder, or a GCS bucket when UPLOAD_BUCKET is set)
    UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", "uploads")
    UPLOAD_BUCKET = os.getenv("UPLOAD_BUCKET")
    MAX_UPLOAD_MB = int(os.getenv("MAX_UPLOAD_MB", "10"))
    MAX_PHOTOS_PER_UPLOAD = 10
    MAX_DOCUMENTS_PER_UPLOAD = 5

    # Report previews kept in memory
    PREVIEW_CACHE_SIZE = int(os.getenv("PREVIEW_CACHE_SIZE", "32"))

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Wizard API client
    API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8080")
    API_TIMEOUT_SECONDS = float(os.getenv("API_TIMEOUT_SECONDS", "10"))

config = Config()
