"""
In-progress inspection held by the wizard.

One field group per wizard step; each step merges only into its own group.
Payloads exchanged with the API are camelCase, the groups are snake_case.
"""
import logging
from dataclasses import dataclass, field, fields, replace
from typing import Dict, List, Optional

from pydantic.alias_generators import to_camel

from kashrut_reports.models_db import DOCUMENT_KEYS, InspectionStatus, empty_documents
from ..exceptions import ValidationError, WizardInputError
from ..value_objects import coerce_optional_int, parse_optional_int

logger = logging.getLogger(__name__)

NUMERIC_FIELDS = ("employee_count", "shifts_per_day", "working_days")


@dataclass
class BasicInfoFields:
    factory_name: Optional[str] = None
    factory_address: Optional[str] = None
    map_link: Optional[str] = None
    gregorian_date: Optional[str] = None
    hebrew_date: Optional[str] = None

    contact_name: Optional[str] = None
    contact_position: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None

    current_products: Optional[str] = None
    employee_count: Optional[int] = None
    shifts_per_day: Optional[int] = None
    working_days: Optional[int] = None
    kashrut: Optional[str] = None


@dataclass
class DocumentsFields:
    documents: Dict[str, bool] = field(default_factory=empty_documents)
    document_files: Dict[str, List[str]] = field(default_factory=dict)


@dataclass
class CategoryFields:
    category: Optional[str] = None

    bishul_yisrael: bool = False
    afiyat_yisrael: bool = False
    chalav_yisrael: bool = False
    linat_laila: bool = False
    kavush: bool = False
    chadash: bool = False
    hafrashat_challa: bool = False
    kashrut_pesach: bool = False

    ingredients: Optional[str] = None
    boiler_details: Optional[str] = None
    cleaning_protocols: Optional[str] = None


@dataclass
class PhotosFields:
    inspector: Optional[str] = None
    photos: List[str] = field(default_factory=list)
    attachments: List[str] = field(default_factory=list)
    summary: Optional[str] = None
    recommendations: Optional[str] = None
    inspector_opinion: Optional[str] = None


GROUPS = (BasicInfoFields, DocumentsFields, CategoryFields, PhotosFields)


def _owned(group_cls, values: dict) -> dict:
    names = {f.name for f in fields(group_cls)}
    return {k: v for k, v in values.items() if k in names}


def merge_basic_info(group: BasicInfoFields, values: dict) -> BasicInfoFields:
    """Numeric answers are parsed here; a bad one rejects the whole merge."""
    updates = _owned(BasicInfoFields, values)
    for name in NUMERIC_FIELDS:
        if name in updates:
            try:
                updates[name] = parse_optional_int(updates[name], name)
            except ValidationError as e:
                raise WizardInputError(name, e.message)
    return replace(group, **updates)


def merge_documents(group: DocumentsFields, values: dict) -> DocumentsFields:
    updates = _owned(DocumentsFields, values)
    if "documents" in updates:
        checklist = updates["documents"] or {}
        unknown = set(checklist) - set(DOCUMENT_KEYS)
        if unknown:
            raise WizardInputError("documents", f"unknown checklist keys: {', '.join(sorted(unknown))}")
        updates["documents"] = {**group.documents, **{k: bool(v) for k, v in checklist.items()}}
    if "document_files" in updates:
        updates["document_files"] = {k: list(v) for k, v in (updates["document_files"] or {}).items()}
    return replace(group, **updates)


def merge_category(group: CategoryFields, values: dict) -> CategoryFields:
    return replace(group, **_owned(CategoryFields, values))


def merge_photos(group: PhotosFields, values: dict) -> PhotosFields:
    updates = _owned(PhotosFields, values)
    for name in ("photos", "attachments"):
        if name in updates:
            updates[name] = list(updates[name] or [])
    return replace(group, **updates)


@dataclass
class InspectionDraft:
    basic: BasicInfoFields = field(default_factory=BasicInfoFields)
    documents: DocumentsFields = field(default_factory=DocumentsFields)
    category: CategoryFields = field(default_factory=CategoryFields)
    photos: PhotosFields = field(default_factory=PhotosFields)
    status: str = InspectionStatus.DRAFT.value

    def groups(self):
        return (self.basic, self.documents, self.category, self.photos)

    def to_payload(self) -> dict:
        """camelCase request body for the inspections API."""
        payload = {}
        for group in self.groups():
            for f in fields(group):
                value = getattr(group, f.name)
                if isinstance(value, dict):
                    value = {k: list(v) if isinstance(v, list) else v for k, v in value.items()}
                elif isinstance(value, list):
                    value = list(value)
                payload[to_camel(f.name)] = value
        payload["status"] = self.status
        return payload

    @classmethod
    def from_record(cls, record: dict) -> "InspectionDraft":
        """Draft loaded from a stored inspection (camelCase dict)."""
        built = []
        for group_cls in GROUPS:
            values = {}
            for f in fields(group_cls):
                key = to_camel(f.name)
                if key in record and record[key] is not None:
                    values[f.name] = record[key]
            for name in NUMERIC_FIELDS:
                if name in values:
                    values[name] = coerce_optional_int(values[name])
            built.append(group_cls(**values))

        draft = cls(*built)
        draft.documents.documents = {**empty_documents(), **(draft.documents.documents or {})}
        draft.status = record.get("status") or InspectionStatus.DRAFT.value
        return draft


def factory_values(factory: dict) -> dict:
    """
    Basic-info values copied from a factory profile (camelCase dict).
    Numeric answers that don't parse are dropped.
    """
    values = {
        "factory_name": factory.get("name"),
        "factory_address": factory.get("address"),
    }
    for name in ("map_link", "contact_name", "contact_position", "contact_email",
                 "contact_phone", "current_products", "kashrut"):
        values[name] = factory.get(to_camel(name))

    for name in NUMERIC_FIELDS:
        raw = factory.get(to_camel(name))
        number = coerce_optional_int(raw)
        if raw not in (None, "") and number is None:
            logger.warning(f"⚠️ Ignoring non-numeric {name} from factory profile: {raw!r}")
        values[name] = number
    return values
