import mimetypes

from flask import Flask, abort, send_from_directory, Response
from dotenv import load_dotenv

# .env must be loaded before the config module reads the environment
load_dotenv()

from kashrut_reports.config import config
from kashrut_reports.logging_config import setup_logging
from kashrut_reports import database


def create_app(config_overrides: dict = None) -> Flask:
    logger = setup_logging(config.LOG_LEVEL)

    app = Flask(__name__)
    app.config.update(
        SECRET_KEY=config.SECRET_KEY,
        DATABASE_URL=config.DATABASE_URL,
        UPLOAD_FOLDER=config.UPLOAD_FOLDER,
        UPLOAD_BUCKET=config.UPLOAD_BUCKET,
        MAX_UPLOAD_MB=config.MAX_UPLOAD_MB,
        PREVIEW_CACHE_SIZE=config.PREVIEW_CACHE_SIZE,
        # whole multipart request: a full photo batch plus form overhead
        MAX_CONTENT_LENGTH=(config.MAX_UPLOAD_MB * config.MAX_PHOTOS_PER_UPLOAD + 1) * 1024 * 1024,
    )
    app.json.sort_keys = False
    if config_overrides:
        app.config.update(config_overrides)

    # Database
    try:
        database.init_db(app.config["DATABASE_URL"])
        from kashrut_reports.migration import run_migrations
        run_migrations(database.engine)
        logger.info("✅ Database initialized")
    except Exception as e:
        logger.error(f"❌ Database initialization failed: {e}")
        raise

    # Long-lived services
    from kashrut_reports.services.storage_service import StorageService
    from kashrut_reports.application.report_service import PreviewCache

    app.storage_service = StorageService(
        upload_folder=app.config["UPLOAD_FOLDER"],
        bucket_name=app.config.get("UPLOAD_BUCKET") or "",
    )
    app.preview_cache = PreviewCache(max_entries=app.config["PREVIEW_CACHE_SIZE"])

    # PDF Service (WeasyPrint needs system libraries; reports fail cleanly without them)
    try:
        from kashrut_reports.services.pdf_service import PDFService
        app.pdf_service = PDFService()
        logger.info("✅ PDF service initialized")
    except Exception as e:
        logger.error(f"⚠️ Failed to initialize PDF service: {e}")
        app.pdf_service = None

    # Rate limiting
    from kashrut_reports.infrastructure.security.rate_limiter import init_limiter
    init_limiter(app)

    # Blueprints
    from kashrut_reports.api_routes import inspections_bp, factories_bp, uploads_bp, register_error_handlers
    app.register_blueprint(inspections_bp)
    app.register_blueprint(factories_bp)
    app.register_blueprint(uploads_bp)
    register_error_handlers(app)
    logger.info("✅ Blueprints registered: inspections, factories, uploads")

    @app.route("/uploads/<path:name>")
    def uploaded_file(name):
        storage = app.storage_service
        if not storage.is_remote:
            return send_from_directory(storage.upload_folder, name)
        content = storage.read(name)
        if content is None:
            abort(404)
        return Response(content, mimetype=mimetypes.guess_type(name)[0] or "application/octet-stream")

    @app.route("/health")
    def health():
        return {"status": "ok"}

    from kashrut_reports.container import teardown_uow

    @app.teardown_appcontext
    def shutdown_session(exception=None):
        teardown_uow(exception)
        if database.db_session:
            database.db_session.remove()

    return app
