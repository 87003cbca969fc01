"""
Per-request wiring of services, cached in Flask's g.

Long-lived collaborators (storage, PDF renderer, preview cache) are created
once in create_app() and hung on the app object.
"""
from flask import g, current_app

from kashrut_reports.database import get_db
from kashrut_reports.repositories.unit_of_work import UnitOfWork


def get_uow() -> UnitOfWork:
    """Get or create UnitOfWork for the current request."""
    if "uow" not in g:
        db = next(get_db())
        g.uow = UnitOfWork(db)
    return g.uow


def get_factory_service():
    from kashrut_reports.application.factory_service import FactoryService
    return FactoryService(get_uow())


def get_inspection_service():
    from kashrut_reports.application.inspection_service import InspectionService
    return InspectionService(get_uow())


def get_dashboard_service():
    from kashrut_reports.application.dashboard_service import DashboardService
    return DashboardService(get_uow())


def get_upload_service():
    from kashrut_reports.application.upload_service import UploadService
    return UploadService(current_app.storage_service, max_upload_mb=current_app.config.get("MAX_UPLOAD_MB"))


def get_report_service():
    from kashrut_reports.application.report_service import ReportService
    return ReportService(get_uow(), current_app.pdf_service, current_app.preview_cache)


def teardown_uow(exception=None):
    """Registered with app.teardown_appcontext."""
    uow = g.pop("uow", None)
    if uow:
        if exception:
            uow.rollback()
        uow.close()
