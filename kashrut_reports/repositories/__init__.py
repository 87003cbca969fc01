from .unit_of_work import UnitOfWork
from .factory_repository import FactoryRepository
from .inspection_repository import InspectionRepository
