"""Factory registry: CRUD and search over reusable factory profiles."""
import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError

from kashrut_reports.domain.exceptions import FactoryNotFoundError, StoreError, ValidationError
from kashrut_reports.models_db import Factory, utcnow
from kashrut_reports.schemas import FactoryCreate, FactoryUpdate, to_columns, validate_payload

logger = logging.getLogger(__name__)


class FactoryService:
    def __init__(self, uow):
        self._uow = uow

    def list_factories(self) -> List[Factory]:
        return self._uow.factories.get_all()

    def get_factory(self, factory_id: int) -> Factory:
        factory = self._uow.factories.get_by_id(factory_id)
        if not factory:
            raise FactoryNotFoundError(factory_id)
        return factory

    def search(self, query: str) -> List[Factory]:
        if not query or not query.strip():
            raise ValidationError("Search query is required", "q")
        return self._uow.factories.search(query.strip())

    def create_factory(self, payload: dict) -> Factory:
        data = validate_payload(FactoryCreate, payload, entity="factory")
        factory = Factory(**to_columns(data))
        try:
            self._uow.factories.add(factory)
            self._uow.commit()
            self._uow.refresh(factory)
        except SQLAlchemyError as e:
            self._uow.rollback()
            logger.error(f"❌ Error creating factory: {e}")
            raise StoreError("Failed to create factory", cause=e)
        logger.info(f"✅ Factory created: {factory.id} ({factory.name})")
        return factory

    def update_factory(self, factory_id: int, payload: dict) -> Factory:
        data = validate_payload(FactoryUpdate, payload, entity="factory")
        factory = self.get_factory(factory_id)
        for key, value in to_columns(data, only_set=True).items():
            setattr(factory, key, value)
        factory.updated_at = utcnow()
        try:
            self._uow.commit()
            self._uow.refresh(factory)
        except SQLAlchemyError as e:
            self._uow.rollback()
            logger.error(f"❌ Error updating factory {factory_id}: {e}")
            raise StoreError("Failed to update factory", cause=e)
        return factory

    def delete_factory(self, factory_id: int) -> None:
        factory = self.get_factory(factory_id)
        try:
            self._uow.factories.delete(factory)
            self._uow.commit()
        except SQLAlchemyError as e:
            self._uow.rollback()
            logger.error(f"❌ Error deleting factory {factory_id}: {e}")
            raise StoreError("Failed to delete factory", cause=e)
        logger.info(f"🗑️ Factory deleted: {factory_id}")
