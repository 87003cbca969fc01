"""
Backends the wizard saves through.

ServiceGateway calls the application services in-process; ApiGateway talks
to a running server over HTTP. Both return camelCase dicts and raise
GatewayError with the server's status code and `{message[, errors]}` body.
"""
import logging
from typing import Optional

import requests

from kashrut_reports.config import config
from kashrut_reports.domain.exceptions import DomainError
from kashrut_reports.schemas import factory_to_dict, inspection_to_dict

from .factory_service import FactoryService
from .inspection_service import InspectionService

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    def __init__(self, status: int, payload: Optional[dict] = None):
        self.status = status
        self.payload = payload or {}
        super().__init__(self.message)

    @property
    def message(self) -> str:
        return self.payload.get("message") or f"Request failed with status {self.status}"

    @property
    def field_errors(self) -> list:
        return list(self.payload.get("errors") or [])


class ServiceGateway:
    def __init__(self, uow):
        self._factories = FactoryService(uow)
        self._inspections = InspectionService(uow)

    def _call(self, fn, *args):
        try:
            return fn(*args)
        except DomainError as e:
            raise GatewayError(e.status_code, e.to_dict())

    def get_factory(self, factory_id) -> dict:
        return factory_to_dict(self._call(self._factories.get_factory, int(factory_id)))

    def get_inspection(self, inspection_id) -> dict:
        return inspection_to_dict(self._call(self._inspections.get_inspection, int(inspection_id)))

    def create_inspection(self, payload: dict) -> dict:
        return inspection_to_dict(self._call(self._inspections.create_inspection, payload))

    def update_inspection(self, inspection_id, payload: dict) -> dict:
        return inspection_to_dict(self._call(self._inspections.update_inspection, int(inspection_id), payload))


class ApiGateway:
    def __init__(self, base_url: str = None, timeout: float = None, session: requests.Session = None):
        self.base_url = (base_url or config.API_BASE_URL).rstrip("/")
        self.timeout = timeout or config.API_TIMEOUT_SECONDS
        self.session = session or requests.Session()

    def _request(self, method: str, path: str, payload: dict = None) -> dict:
        url = f"{self.base_url}/api{path}"
        try:
            response = self.session.request(method, url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"❌ {method} {url} failed: {e}")
            raise GatewayError(503, {"message": "Server unavailable"})

        try:
            body = response.json()
        except ValueError:
            body = {"message": response.text}

        if response.status_code >= 400:
            raise GatewayError(response.status_code, body if isinstance(body, dict) else {})
        return body

    def get_factory(self, factory_id) -> dict:
        return self._request("GET", f"/factories/{factory_id}")

    def get_inspection(self, inspection_id) -> dict:
        return self._request("GET", f"/inspections/{inspection_id}")

    def create_inspection(self, payload: dict) -> dict:
        return self._request("POST", "/inspections", payload)

    def update_inspection(self, inspection_id, payload: dict) -> dict:
        return self._request("PATCH", f"/inspections/{inspection_id}", payload)
