"""
Multi-step inspection wizard.

Steps: factory selection -> basic info -> documents -> category -> photos.
The wizard owns an InspectionDraft and persists it through a gateway
(ServiceGateway in-process, ApiGateway over HTTP).
"""
import logging
from dataclasses import dataclass
from datetime import date
from enum import IntEnum
from typing import Callable, List, Optional

from kashrut_reports.domain.entities import (
    InspectionDraft,
    factory_values,
    merge_basic_info,
    merge_category,
    merge_documents,
    merge_photos,
)
from kashrut_reports.domain.exceptions import WizardInputError
from kashrut_reports.models_db import DOCUMENT_KEYS, InspectionStatus
from kashrut_reports.services.hebrew_calendar import to_hebrew_date

from .gateways import GatewayError

logger = logging.getLogger(__name__)

REPORTS_PATH = "/reports"
SAVE_FAILED_MESSAGE = "Failed to save inspection. Please try again."

DRAFT_PLACEHOLDERS = {
    "factoryName": "Draft Factory",
    "inspector": "Inspector",
    "factoryAddress": "Address",
}


class Step(IntEnum):
    FACTORY_SELECTION = 0
    BASIC_INFO = 1
    DOCUMENTS = 2
    CATEGORY = 3
    PHOTOS = 4


@dataclass
class SaveResult:
    success: bool
    message: str = ""
    inspection: Optional[dict] = None
    redirect: Optional[str] = None


class PendingFactorySelection:
    """
    Factory chosen on another screen ("start inspection" from the factory
    list) and handed to the next wizard. Read once, then cleared.
    """

    def __init__(self):
        self._factory = None

    def offer(self, factory: dict):
        self._factory = factory

    def take(self) -> Optional[dict]:
        factory, self._factory = self._factory, None
        return factory

    def __bool__(self) -> bool:
        return self._factory is not None


class InspectionWizard:
    def __init__(
        self,
        gateway,
        inspection_id: int = None,
        factory_id: int = None,
        pending: PendingFactorySelection = None,
        today: Callable[[], date] = date.today,
    ):
        self.gateway = gateway
        self.inspection_id = inspection_id
        self.draft = InspectionDraft()
        self.selected_factory: Optional[dict] = None
        self._today = today
        self._factory_merged = False

        handoff = pending.take() if pending else None

        if self.is_editing:
            self.draft = InspectionDraft.from_record(self.gateway.get_inspection(inspection_id))
            self.step = Step.BASIC_INFO
            return

        source = None
        if factory_id is not None:
            try:
                source = self.gateway.get_factory(factory_id)
            except GatewayError as e:
                logger.warning(f"⚠️ Could not load factory {factory_id}: {e.message}")
        source = source or handoff

        if source:
            self.selected_factory = source
            self._merge_factory(source)

        upstream = factory_id is not None or handoff is not None
        self.step = Step.BASIC_INFO if upstream else Step.FACTORY_SELECTION

    @property
    def is_editing(self) -> bool:
        return self.inspection_id is not None

    # ── Navigation ────────────────────────────────────────────────

    def next(self) -> Step:
        if self.step < Step.PHOTOS:
            self.step = Step(self.step + 1)
        return self.step

    def previous(self) -> Step:
        if self.step > Step.FACTORY_SELECTION:
            self.step = Step(self.step - 1)
        return self.step

    def go_to(self, step) -> Step:
        self.step = Step(step)
        return self.step

    # ── Factory selection ─────────────────────────────────────────

    def select_factory(self, factory: Optional[dict]) -> Step:
        if factory:
            self.selected_factory = factory
            self._merge_factory(factory)
        self.step = Step.BASIC_INFO
        return self.step

    def _merge_factory(self, factory: dict) -> bool:
        """Copies the factory's fields once; never over an edit or a loaded record."""
        if self.is_editing or self._factory_merged or self.draft.basic.factory_name:
            return False
        self.draft.basic = merge_basic_info(self.draft.basic, factory_values(factory))
        self._factory_merged = True
        logger.info(f"🏭 Draft pre-filled from factory {factory.get('name')}")
        return True

    # ── Step submissions ──────────────────────────────────────────

    def submit_basic_info(self, **values) -> Step:
        previous_date = self.draft.basic.gregorian_date
        self.draft.basic = merge_basic_info(self.draft.basic, values)
        if "gregorian_date" in values and self.draft.basic.gregorian_date != previous_date:
            self._refresh_hebrew_date()
        return self.next()

    def set_gregorian_date(self, value):
        previous_date = self.draft.basic.gregorian_date
        self.draft.basic = merge_basic_info(self.draft.basic, {"gregorian_date": value})
        if value != previous_date:
            self._refresh_hebrew_date()

    def _refresh_hebrew_date(self):
        value = self.draft.basic.gregorian_date
        try:
            hebrew_date = to_hebrew_date(value)
        except (ValueError, TypeError) as e:
            logger.warning(f"⚠️ Hebrew date not updated for {value!r}: {e}")
            return
        self.draft.basic = merge_basic_info(self.draft.basic, {"hebrew_date": hebrew_date})

    def submit_documents(self, **values) -> Step:
        self.draft.documents = merge_documents(self.draft.documents, values)
        return self.next()

    def submit_category(self, **values) -> Step:
        self.draft.category = merge_category(self.draft.category, values)
        return self.next()

    def submit_photos(self, **values) -> Step:
        self.draft.photos = merge_photos(self.draft.photos, values)
        return self.next()

    # ── Local file lists (stored bytes are never deleted here) ────

    def add_photos(self, refs: List[str]):
        self.draft.photos.photos = self.draft.photos.photos + list(refs)

    def remove_photo(self, ref: str):
        self.draft.photos.photos = [p for p in self.draft.photos.photos if p != ref]

    def add_document_files(self, key: str, refs: List[str]):
        if key not in DOCUMENT_KEYS:
            raise WizardInputError("documentFiles", f"unknown checklist key: {key}")
        files = dict(self.draft.documents.document_files)
        files[key] = files.get(key, []) + list(refs)
        self.draft.documents.document_files = files

    def remove_document_file(self, key: str, ref: str):
        files = dict(self.draft.documents.document_files)
        if key in files:
            files[key] = [f for f in files[key] if f != ref]
        self.draft.documents.document_files = files

    # ── Persistence ───────────────────────────────────────────────

    def save_draft(self) -> SaveResult:
        payload = self.draft.to_payload()
        for key, placeholder in DRAFT_PLACEHOLDERS.items():
            if not payload.get(key):
                payload[key] = placeholder
        if not payload.get("gregorianDate"):
            payload["gregorianDate"] = self._today().isoformat()
        payload["status"] = InspectionStatus.DRAFT.value

        result = self._upsert(payload)
        if result.success:
            self.draft.status = InspectionStatus.DRAFT.value
            result.message = "Draft saved"
        return result

    def complete(self) -> SaveResult:
        payload = self.draft.to_payload()
        payload["status"] = InspectionStatus.COMPLETED.value

        result = self._upsert(payload)
        if result.success:
            self.draft.status = InspectionStatus.COMPLETED.value
            result.message = "Inspection completed"
            result.redirect = REPORTS_PATH
        return result

    def _upsert(self, payload: dict) -> SaveResult:
        try:
            if self.is_editing:
                saved = self.gateway.update_inspection(self.inspection_id, payload)
            else:
                saved = self.gateway.create_inspection(payload)
        except GatewayError as e:
            logger.warning(f"⚠️ Save failed ({e.status}): {e.message}")
            return SaveResult(success=False, message=failure_message(e))

        if not self.is_editing and saved.get("id") is not None:
            # later saves update this record
            self.inspection_id = saved["id"]
        return SaveResult(success=True, inspection=saved)


def failure_message(error: GatewayError) -> str:
    fields = [e.get("field") for e in error.field_errors if e.get("field")]
    if error.status == 400 and fields:
        return f"missing required fields: {', '.join(fields)}"
    return SAVE_FAILED_MESSAGE
