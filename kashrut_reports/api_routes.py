import io
import logging

from flask import Blueprint, current_app, jsonify, request, send_file
from werkzeug.exceptions import HTTPException

from kashrut_reports.application.upload_service import UploadedFile
from kashrut_reports.container import (
    get_dashboard_service,
    get_factory_service,
    get_inspection_service,
    get_report_service,
    get_upload_service,
)
from kashrut_reports.domain.exceptions import DomainError, StoreError, ValidationError
from kashrut_reports.error_codes import ErrorCode
from kashrut_reports.infrastructure.security.rate_limiter import upload_limit
from kashrut_reports.schemas import factory_to_dict, inspection_to_dict

logger = logging.getLogger(__name__)

inspections_bp = Blueprint("inspections", __name__, url_prefix="/api")
factories_bp = Blueprint("factories", __name__, url_prefix="/api/factories")
uploads_bp = Blueprint("uploads", __name__, url_prefix="/api/upload")


def _json_body():
    return request.get_json(silent=True)


def _search_query() -> str:
    query = (request.args.get("q") or "").strip()
    if not query:
        raise ValidationError("Search query is required")
    return query


# ── Inspections ───────────────────────────────────────────────────

@inspections_bp.route("/inspections", methods=["GET"])
def list_inspections():
    inspections = get_inspection_service().list_inspections()
    return jsonify([inspection_to_dict(i) for i in inspections])


@inspections_bp.route("/inspections/stats", methods=["GET"])
def inspection_stats():
    return jsonify(get_dashboard_service().get_stats())


@inspections_bp.route("/inspections/search", methods=["GET"])
def search_inspections():
    inspections = get_inspection_service().search(_search_query())
    return jsonify([inspection_to_dict(i) for i in inspections])


@inspections_bp.route("/inspections/filter", methods=["GET"])
def filter_inspections():
    inspections = get_inspection_service().filter(
        status=request.args.get("status"),
        date_from=request.args.get("dateFrom"),
        date_to=request.args.get("dateTo"),
        inspector=request.args.get("inspector"),
    )
    return jsonify([inspection_to_dict(i) for i in inspections])


@inspections_bp.route("/inspections/<int:inspection_id>", methods=["GET"])
def get_inspection(inspection_id):
    return jsonify(inspection_to_dict(get_inspection_service().get_inspection(inspection_id)))


@inspections_bp.route("/inspections", methods=["POST"])
def create_inspection():
    inspection = get_inspection_service().create_inspection(_json_body())
    return jsonify(inspection_to_dict(inspection)), 201


@inspections_bp.route("/inspections/<int:inspection_id>", methods=["PATCH"])
def update_inspection(inspection_id):
    inspection = get_inspection_service().update_inspection(inspection_id, _json_body())
    return jsonify(inspection_to_dict(inspection))


@inspections_bp.route("/inspections/<int:inspection_id>", methods=["DELETE"])
def delete_inspection(inspection_id):
    get_inspection_service().delete_inspection(inspection_id)
    current_app.preview_cache.release(inspection_id)
    return jsonify({"message": "Inspection deleted"})


# ── Reports ───────────────────────────────────────────────────────

@inspections_bp.route("/inspections/<int:inspection_id>/report/preview", methods=["GET"])
def preview_report(inspection_id):
    report = get_report_service().preview(inspection_id)
    return send_file(
        io.BytesIO(report.content),
        mimetype="application/pdf",
        as_attachment=False,
        download_name=report.filename,
    )


@inspections_bp.route("/inspections/<int:inspection_id>/report/preview", methods=["DELETE"])
def close_report_preview(inspection_id):
    released = get_report_service().close_preview(inspection_id)
    return jsonify({"message": "Preview closed", "released": released})


@inspections_bp.route("/inspections/<int:inspection_id>/report/download", methods=["GET"])
def download_report(inspection_id):
    report = get_report_service().download(inspection_id)
    return send_file(
        io.BytesIO(report.content),
        mimetype="application/pdf",
        as_attachment=True,
        download_name=report.filename,
    )


@inspections_bp.route("/dashboard", methods=["GET"])
def dashboard():
    return jsonify(get_dashboard_service().get_dashboard())


# ── Factories ─────────────────────────────────────────────────────

@factories_bp.route("", methods=["GET"])
def list_factories():
    return jsonify([factory_to_dict(f) for f in get_factory_service().list_factories()])


@factories_bp.route("/search", methods=["GET"])
def search_factories():
    return jsonify([factory_to_dict(f) for f in get_factory_service().search(_search_query())])


@factories_bp.route("/<int:factory_id>", methods=["GET"])
def get_factory(factory_id):
    return jsonify(factory_to_dict(get_factory_service().get_factory(factory_id)))


@factories_bp.route("", methods=["POST"])
def create_factory():
    factory = get_factory_service().create_factory(_json_body())
    return jsonify(factory_to_dict(factory)), 201


@factories_bp.route("/<int:factory_id>", methods=["PUT"])
def update_factory(factory_id):
    factory = get_factory_service().update_factory(factory_id, _json_body())
    return jsonify(factory_to_dict(factory))


@factories_bp.route("/<int:factory_id>", methods=["DELETE"])
def delete_factory(factory_id):
    get_factory_service().delete_factory(factory_id)
    return jsonify({"message": "Factory deleted"})


# ── Uploads ───────────────────────────────────────────────────────

def _uploaded_files(field_name):
    return [
        UploadedFile(filename=f.filename, content=f.read(), content_type=f.mimetype)
        for f in request.files.getlist(field_name)
    ]


@uploads_bp.route("/photos", methods=["POST"])
@upload_limit()
def upload_photos():
    result = get_upload_service().store_photos(_uploaded_files("photos"))
    return jsonify(result.to_dict())


@uploads_bp.route("/documents", methods=["POST"])
@upload_limit()
def upload_documents():
    result = get_upload_service().store_documents(_uploaded_files("documents"))
    return jsonify(result.to_dict())


# ── Error handling ────────────────────────────────────────────────

def register_error_handlers(app):
    """Every failure leaves the API as `{message}` JSON (validation adds `errors`)."""

    @app.errorhandler(DomainError)
    def handle_domain_error(e):
        if isinstance(e, StoreError):
            err = ErrorCode.get_error(e.cause) if e.cause else ErrorCode.ERR_3001
            logger.error(f"💥 [{err['code']}] {err['admin_msg']}: {e.message} ({e.cause})")
        elif isinstance(e, ValidationError):
            err = ErrorCode.ERR_2001
            logger.warning(f"⚠️ [{err['code']}] {err['admin_msg']}: {e.message}")
        elif e.status_code >= 500:
            logger.error(f"💥 {e.code}: {e.message}")
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return jsonify({"message": e.description or e.name}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        err = ErrorCode.get_error(e)
        logger.exception(f"💥 Unhandled error [{err['code']}]: {e}")
        return jsonify({"message": "Internal server error"}), 500
