"""Inspection record store: CRUD, search and compound filtering."""
import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from kashrut_reports.domain.exceptions import InspectionNotFoundError, StoreError, ValidationError
from kashrut_reports.models_db import Inspection, InspectionStatus, utcnow
from kashrut_reports.schemas import InspectionCreate, InspectionUpdate, to_columns, validate_payload

logger = logging.getLogger(__name__)


def parse_date_param(value: Optional[str], name: str) -> Optional[date]:
    """Query-string date (YYYY-MM-DD); blank means unbounded."""
    if not value or not value.strip():
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise ValidationError(f"Invalid date for {name}: {value}", name)


class InspectionService:
    def __init__(self, uow):
        self._uow = uow

    def list_inspections(self, limit: int = None) -> List[Inspection]:
        return self._uow.inspections.get_all(limit=limit)

    def get_inspection(self, inspection_id: int) -> Inspection:
        inspection = self._uow.inspections.get_by_id(inspection_id)
        if not inspection:
            raise InspectionNotFoundError(inspection_id)
        return inspection

    def search(self, query: str) -> List[Inspection]:
        if not query or not query.strip():
            raise ValidationError("Search query is required", "q")
        return self._uow.inspections.search(query.strip())

    def filter(self, status=None, date_from=None, date_to=None, inspector=None) -> List[Inspection]:
        if status:
            valid = {s.value for s in InspectionStatus}
            if status not in valid:
                raise ValidationError(f"Invalid status: {status}", "status")
        return self._uow.inspections.filter(
            status=status or None,
            date_from=parse_date_param(date_from, "dateFrom") if isinstance(date_from, str) else date_from,
            date_to=parse_date_param(date_to, "dateTo") if isinstance(date_to, str) else date_to,
            inspector=(inspector or "").strip() or None,
        )

    def create_inspection(self, payload: dict) -> Inspection:
        data = validate_payload(InspectionCreate, payload)
        inspection = Inspection(**to_columns(data))
        try:
            self._uow.inspections.add(inspection)
            self._uow.commit()
            self._uow.refresh(inspection)
        except SQLAlchemyError as e:
            self._uow.rollback()
            logger.error(f"❌ Error creating inspection: {e}")
            raise StoreError("Failed to create inspection", cause=e)
        logger.info(
            f"✅ Inspection created: {inspection.id}",
            extra={"props": {"inspection_id": inspection.id, "status": inspection.status}},
        )
        return inspection

    def update_inspection(self, inspection_id: int, payload: dict) -> Inspection:
        """Partial update: keys absent from the payload keep their stored value."""
        data = validate_payload(InspectionUpdate, payload)
        inspection = self.get_inspection(inspection_id)
        for key, value in to_columns(data, only_set=True).items():
            setattr(inspection, key, value)
        inspection.updated_at = utcnow()
        try:
            self._uow.commit()
            self._uow.refresh(inspection)
        except SQLAlchemyError as e:
            self._uow.rollback()
            logger.error(f"❌ Error updating inspection {inspection_id}: {e}")
            raise StoreError("Failed to update inspection", cause=e)
        return inspection

    def delete_inspection(self, inspection_id: int) -> None:
        inspection = self.get_inspection(inspection_id)
        try:
            self._uow.inspections.delete(inspection)
            self._uow.commit()
        except SQLAlchemyError as e:
            self._uow.rollback()
            logger.error(f"❌ Error deleting inspection {inspection_id}: {e}")
            raise StoreError("Failed to delete inspection", cause=e)
        logger.info(f"🗑️ Inspection deleted: {inspection_id}")
