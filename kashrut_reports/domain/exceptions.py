"""
Domain exceptions - Business-level errors.

These exceptions represent business rule violations and domain-specific errors.
They are caught at the API boundary (see api_routes.register_error_handlers)
and translated to `{message}` JSON responses.
"""
from typing import List, Optional


class DomainError(Exception):
    """Base exception for all domain errors."""

    status_code = 500

    def __init__(self, message: str, code: str = "DOMAIN_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"message": self.message}


class ValidationError(DomainError):
    """
    Raised when input fails schema constraints.

    `errors` attributes the failure to specific fields:
    [{"field": "factoryName", "message": "Field required"}, ...]
    """

    status_code = 400

    def __init__(self, message: str, field: str = None, errors: Optional[List[dict]] = None):
        self.field = field
        self.errors = list(errors or [])
        if field and not self.errors:
            self.errors = [{"field": field, "message": message}]
        code = f"VALIDATION_ERROR_{field.upper()}" if field else "VALIDATION_ERROR"
        super().__init__(message, code)

    @property
    def fields(self) -> List[str]:
        return [e["field"] for e in self.errors if e.get("field")]

    def to_dict(self) -> dict:
        return {"message": self.message, "errors": self.errors}


class NotFoundError(DomainError):
    """Raised when an entity is not found."""

    status_code = 404

    def __init__(self, entity_type: str, identifier=None):
        self.entity_type = entity_type
        self.identifier = identifier
        message = f"{entity_type} not found"
        super().__init__(message, f"{entity_type.upper()}_NOT_FOUND")


class StoreError(DomainError):
    """
    Unexpected persistence failure. The message is always generic; the
    original exception is kept on `cause` for server-side logging only.
    """

    def __init__(self, message: str = "Internal server error", cause: Exception = None):
        self.cause = cause
        super().__init__(message, "STORE_ERROR")


class UploadError(DomainError):
    """Raised when an upload batch is empty, too large, or has a rejected file."""

    status_code = 400

    def __init__(self, message: str, error_code: str = "UPLOAD_ERROR"):
        super().__init__(message, error_code)


# Specific domain errors

class InspectionNotFoundError(NotFoundError):
    def __init__(self, inspection_id=None):
        super().__init__("Inspection", inspection_id)


class FactoryNotFoundError(NotFoundError):
    def __init__(self, factory_id=None):
        super().__init__("Factory", factory_id)


class WizardInputError(ValidationError):
    """Operator input rejected by the wizard before anything is merged (e.g. a non-numeric count)."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}", field)


class ReportRenderError(DomainError):
    """PDF rendering failed or the renderer is not available."""

    def __init__(self, message: str = "Failed to generate the report"):
        super().__init__(message, "REPORT_RENDER_ERROR")
