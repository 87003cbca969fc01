"""Repository for Inspection records."""
from datetime import date, datetime
from typing import Optional, List

from sqlalchemy import func, or_

from kashrut_reports.models_db import Inspection


class InspectionRepository:
    def __init__(self, session):
        self._session = session

    def _newest_first(self, query):
        return query.order_by(Inspection.created_at.desc(), Inspection.id.desc())

    def get_by_id(self, id: int) -> Optional[Inspection]:
        return self._session.get(Inspection, id)

    def get_all(self, limit: int = None) -> List[Inspection]:
        query = self._newest_first(self._session.query(Inspection))
        if limit:
            query = query.limit(limit)
        return query.all()

    def search(self, query: str) -> List[Inspection]:
        """Case-insensitive substring match on factory name, inspector or address."""
        return self._newest_first(self._session.query(Inspection).filter(
            or_(
                Inspection.factory_name.icontains(query, autoescape=True),
                Inspection.inspector.icontains(query, autoescape=True),
                Inspection.factory_address.icontains(query, autoescape=True),
            )
        )).all()

    def filter(
        self,
        status: str = None,
        date_from: date = None,
        date_to: date = None,
        inspector: str = None,
    ) -> List[Inspection]:
        """Compound filter; date bounds apply to the inspection date and are inclusive."""
        query = self._session.query(Inspection)
        if status:
            query = query.filter(Inspection.status == status)
        if date_from:
            query = query.filter(Inspection.gregorian_date >= date_from)
        if date_to:
            query = query.filter(Inspection.gregorian_date <= date_to)
        if inspector:
            query = query.filter(Inspection.inspector.icontains(inspector, autoescape=True))
        return self._newest_first(query).all()

    def count(self, status: str = None, created_since: datetime = None) -> int:
        query = self._session.query(func.count(Inspection.id))
        if status:
            query = query.filter(Inspection.status == status)
        if created_since:
            query = query.filter(Inspection.created_at >= created_since)
        return query.scalar() or 0

    def add(self, inspection: Inspection) -> Inspection:
        self._session.add(inspection)
        return inspection

    def delete(self, inspection: Inspection) -> None:
        self._session.delete(inspection)
