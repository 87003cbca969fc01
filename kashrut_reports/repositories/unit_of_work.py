"""
Unit of Work pattern for managing database transactions.

Provides a single entry point for all repositories within a request,
ensuring consistent transaction management.
"""
from .factory_repository import FactoryRepository
from .inspection_repository import InspectionRepository


class UnitOfWork:
    """
    Aggregates all repositories and manages the database session lifecycle.

    Usage:
        uow = UnitOfWork(session)
        factory = uow.factories.get_by_id(3)
        uow.inspections.add(inspection)
        uow.commit()
    """

    def __init__(self, session):
        self.session = session
        self.factories = FactoryRepository(session)
        self.inspections = InspectionRepository(session)

    def commit(self):
        self.session.commit()

    def rollback(self):
        self.session.rollback()

    def flush(self):
        self.session.flush()

    def refresh(self, instance):
        self.session.refresh(instance)

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            self.rollback()
        self.close()
        return False
