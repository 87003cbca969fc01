from .exceptions import (
    DomainError,
    ValidationError,
    NotFoundError,
    StoreError,
    UploadError,
    InspectionNotFoundError,
    FactoryNotFoundError,
    WizardInputError,
    ReportRenderError,
)

__all__ = [
    "DomainError",
    "ValidationError",
    "NotFoundError",
    "StoreError",
    "UploadError",
    "InspectionNotFoundError",
    "FactoryNotFoundError",
    "WizardInputError",
    "ReportRenderError",
]
