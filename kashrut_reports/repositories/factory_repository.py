"""Repository for Factory profiles."""
from typing import Optional, List

from sqlalchemy import or_

from kashrut_reports.models_db import Factory


class FactoryRepository:
    def __init__(self, session):
        self._session = session

    def get_by_id(self, id: int) -> Optional[Factory]:
        return self._session.get(Factory, id)

    def get_all(self) -> List[Factory]:
        return self._session.query(Factory).order_by(Factory.name.asc(), Factory.id.asc()).all()

    def search(self, query: str) -> List[Factory]:
        """Case-insensitive substring match on name or address."""
        return self._session.query(Factory).filter(
            or_(
                Factory.name.icontains(query, autoescape=True),
                Factory.address.icontains(query, autoescape=True),
            )
        ).order_by(Factory.name.asc(), Factory.id.asc()).all()

    def add(self, factory: Factory) -> Factory:
        self._session.add(factory)
        return factory

    def delete(self, factory: Factory) -> None:
        self._session.delete(factory)
