import pytest
from datetime import date

from kashrut_reports import database
from kashrut_reports.app import create_app
from kashrut_reports.models_db import Base, Factory, Inspection, empty_documents


# ---------------------------------------------------------------------------
# File content helpers
# ---------------------------------------------------------------------------

def create_test_png_content() -> bytes:
    return b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def create_test_jpg_content() -> bytes:
    return b"\xff\xd8\xff\xe0" + b"\x00" * 64


def create_test_pdf_content() -> bytes:
    return b"%PDF-1.4\n1 0 obj\n<<>>\nendobj\nxref\n0 1\ntrailer\n<<>>\nstartxref\n0\n%%EOF\n"


# ---------------------------------------------------------------------------
# Model factories
# ---------------------------------------------------------------------------

class FactoryProfileFactory:
    _counter = 0

    @classmethod
    def create(cls, session, **kwargs) -> Factory:
        cls._counter += 1
        data = {
            "name": f"Test Factory {cls._counter}",
            "address": f"{cls._counter} Industrial Zone",
        }
        data.update(kwargs)
        factory = Factory(**data)
        session.add(factory)
        session.commit()
        return factory


class InspectionFactory:
    _counter = 0

    @classmethod
    def create(cls, session, **kwargs) -> Inspection:
        cls._counter += 1
        data = {
            "factory_name": f"Inspected Factory {cls._counter}",
            "inspector": "Rabbi Test",
            "factory_address": f"{cls._counter} Test Street",
            "gregorian_date": date(2026, 10, 1),
            "documents": empty_documents(),
            "status": "draft",
        }
        data.update(kwargs)
        inspection = Inspection(**data)
        session.add(inspection)
        session.commit()
        return inspection


# ---------------------------------------------------------------------------
# App / DB fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def app(tmp_path):
    app = create_app({
        "TESTING": True,
        "DATABASE_URL": "sqlite://",
        "RATELIMIT_ENABLED": False,
        "UPLOAD_FOLDER": str(tmp_path / "uploads"),
        "UPLOAD_BUCKET": "",
    })
    yield app
    database.db_session.remove()
    Base.metadata.drop_all(bind=database.engine)


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture
def db_session(app):
    session = database.db_session()
    yield session
    session.rollback()


@pytest.fixture
def factory_profile_factory():
    return FactoryProfileFactory


@pytest.fixture
def inspection_factory():
    return InspectionFactory


@pytest.fixture
def inspection_payload():
    return {
        "factoryName": "Golden Grain Bakery",
        "inspector": "Rabbi Cohen",
        "factoryAddress": "12 Mill Road, Haifa",
        "gregorianDate": "2026-10-19",
    }


@pytest.fixture
def png_bytes():
    return create_test_png_content()


@pytest.fixture
def jpg_bytes():
    return create_test_jpg_content()


@pytest.fixture
def pdf_bytes():
    return create_test_pdf_content()
