"""
Request/response schemas (pydantic v2).

The JSON API speaks camelCase (`factoryName`, `documentFiles`, ...) while the
ORM models use snake_case attributes; the alias generator maps between them.
"""
from datetime import date, datetime
from typing import Dict, List, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from kashrut_reports.domain.exceptions import ValidationError
from kashrut_reports.domain.value_objects import Email, parse_optional_int
from kashrut_reports.models_db import FactoryCategory, InspectionStatus

NUMERIC_FIELDS = ("employee_count", "shifts_per_day", "working_days")


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _required_text(value):
    if value is None or not str(value).strip():
        raise ValueError("Field is required")
    return str(value).strip()


def _optional_int(value):
    try:
        return parse_optional_int(value)
    except ValidationError as e:
        raise ValueError(e.message)


def _optional_email(value):
    # drafts may hold a half-typed address; only well-formed ones are normalised
    value = _blank_to_none(value)
    if value is None:
        return None
    try:
        return Email(str(value)).value
    except ValidationError:
        return str(value).strip()


class FactoryFields(CamelModel):
    """Fields shared by factory profiles and inspections (contact + background)."""

    map_link: Optional[str] = None
    contact_name: Optional[str] = None
    contact_position: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    current_products: Optional[str] = None
    employee_count: Optional[int] = None
    shifts_per_day: Optional[int] = None
    working_days: Optional[int] = None
    kashrut: Optional[str] = None

    @field_validator(
        "map_link", "contact_name", "contact_position", "contact_phone",
        "current_products", "kashrut",
        mode="before",
    )
    @classmethod
    def _strip_blank(cls, value):
        return _blank_to_none(value)

    @field_validator("contact_email", mode="before")
    @classmethod
    def _normalize_email(cls, value):
        return _optional_email(value)

    @field_validator(*NUMERIC_FIELDS, mode="before")
    @classmethod
    def _check_numeric(cls, value):
        return _optional_int(value)


# ── Factories ─────────────────────────────────────────────────────

class FactoryCreate(FactoryFields):
    name: str
    address: str

    @field_validator("name", "address", mode="before")
    @classmethod
    def _not_empty(cls, value):
        return _required_text(value)


class FactoryUpdate(FactoryFields):
    name: Optional[str] = None
    address: Optional[str] = None

    @field_validator("name", "address", mode="before")
    @classmethod
    def _not_empty(cls, value):
        return _required_text(value)


class FactoryOut(FactoryFields):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    name: str
    address: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ── Inspections ───────────────────────────────────────────────────

class DocumentsChecklist(CamelModel):
    master_ingredient_list: bool = False
    blueprint: bool = False
    flowchart: bool = False
    boiler_blueprint: bool = False


class InspectionFields(FactoryFields):
    hebrew_date: Optional[str] = None

    documents: Optional[DocumentsChecklist] = None
    document_files: Dict[str, List[str]] = Field(default_factory=dict)

    category: Optional[FactoryCategory] = None

    ingredients: Optional[str] = None
    boiler_details: Optional[str] = None
    cleaning_protocols: Optional[str] = None

    bishul_yisrael: bool = False
    afiyat_yisrael: bool = False
    chalav_yisrael: bool = False
    linat_laila: bool = False
    kavush: bool = False
    chadash: bool = False
    hafrashat_challa: bool = False
    kashrut_pesach: bool = False

    photos: List[str] = Field(default_factory=list)
    attachments: List[str] = Field(default_factory=list)

    summary: Optional[str] = None
    recommendations: Optional[str] = None
    inspector_opinion: Optional[str] = None

    status: InspectionStatus = InspectionStatus.DRAFT

    @field_validator(
        "hebrew_date", "ingredients", "boiler_details", "cleaning_protocols",
        "summary", "recommendations", "inspector_opinion", "category",
        mode="before",
    )
    @classmethod
    def _strip_blank_narrative(cls, value):
        return _blank_to_none(value)


class InspectionCreate(InspectionFields):
    factory_name: str
    inspector: str
    factory_address: str
    gregorian_date: date

    @field_validator("factory_name", "inspector", "factory_address", mode="before")
    @classmethod
    def _not_empty(cls, value):
        return _required_text(value)


class InspectionUpdate(InspectionFields):
    """PATCH body: every field optional; only keys present in the body are applied."""

    factory_name: Optional[str] = None
    inspector: Optional[str] = None
    factory_address: Optional[str] = None
    gregorian_date: Optional[date] = None

    @field_validator("factory_name", "inspector", "factory_address", mode="before")
    @classmethod
    def _not_empty(cls, value):
        return _required_text(value)

    @field_validator("gregorian_date", mode="before")
    @classmethod
    def _no_null_date(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValueError("Field is required")
        return value


class InspectionOut(InspectionFields):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    factory_name: str
    inspector: str
    factory_address: str
    gregorian_date: date
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ── Helpers ───────────────────────────────────────────────────────

def validate_payload(model_cls: Type[CamelModel], payload, entity: str = "inspection") -> CamelModel:
    """
    Validates a JSON body against `model_cls`, converting pydantic's errors to
    a domain ValidationError with one entry per offending field (camelCase).
    """
    if not isinstance(payload, dict):
        raise ValidationError(f"Invalid {entity} data - request body must be a JSON object")

    try:
        return model_cls.model_validate(payload)
    except PydanticValidationError as e:
        errors = []
        missing = []
        for err in e.errors():
            # loc is already expressed in aliases (camelCase)
            loc = [str(p) for p in err.get("loc", ())]
            field = ".".join(loc) if loc else "__root__"
            message = err.get("msg", "Invalid value")
            errors.append({"field": field, "message": message})
            if err.get("type") == "missing" or "Field is required" in message:
                missing.append(field)

        if missing:
            message = f"Invalid {entity} data - missing required fields: {', '.join(missing)}"
        else:
            message = f"Invalid {entity} data - invalid fields: {', '.join(e['field'] for e in errors)}"
        raise ValidationError(message, errors=errors)


def to_columns(model: CamelModel, only_set: bool = False) -> dict:
    """snake_case dict ready to be set on an ORM row."""
    data = model.model_dump(exclude_unset=only_set)
    if data.get("category") is not None:
        data["category"] = FactoryCategory(data["category"]).value
    if "status" in data and data["status"] is not None:
        data["status"] = InspectionStatus(data["status"]).value
    if data.get("documents") is None and "documents" in data:
        if only_set:
            data.pop("documents")
        else:
            data["documents"] = DocumentsChecklist().model_dump(by_alias=True)
    elif data.get("documents") is not None:
        data["documents"] = DocumentsChecklist.model_validate(data["documents"]).model_dump(by_alias=True)
    return data


def factory_to_dict(factory) -> dict:
    return FactoryOut.model_validate(factory).model_dump(by_alias=True, mode="json")


def inspection_to_dict(inspection) -> dict:
    return InspectionOut.model_validate(inspection).model_dump(by_alias=True, mode="json")
