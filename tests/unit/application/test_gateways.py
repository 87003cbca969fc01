"""Tests for the wizard gateways."""
from unittest.mock import MagicMock

import pytest
import requests

from kashrut_reports.application.gateways import ApiGateway, GatewayError, ServiceGateway
from kashrut_reports.repositories import UnitOfWork


def _response(status, body):
    response = MagicMock()
    response.status_code = status
    response.json.return_value = body
    return response


class TestServiceGateway:

    def test_create_and_get(self, db_session, inspection_payload):
        gateway = ServiceGateway(UnitOfWork(db_session))

        created = gateway.create_inspection(inspection_payload)
        fetched = gateway.get_inspection(created["id"])

        assert fetched["factoryName"] == "Golden Grain Bakery"

    def test_domain_errors_carry_status_and_body(self, db_session):
        gateway = ServiceGateway(UnitOfWork(db_session))

        with pytest.raises(GatewayError) as exc:
            gateway.create_inspection({})
        assert exc.value.status == 400
        assert {e["field"] for e in exc.value.field_errors} >= {"factoryName", "inspector"}

        with pytest.raises(GatewayError) as exc:
            gateway.get_factory(42)
        assert exc.value.status == 404
        assert exc.value.message == "Factory not found"


class TestApiGateway:

    def test_create_posts_json(self):
        session = MagicMock()
        session.request.return_value = _response(201, {"id": 7})
        gateway = ApiGateway(base_url="http://api.test/", timeout=3, session=session)

        assert gateway.create_inspection({"factoryName": "A"}) == {"id": 7}
        session.request.assert_called_once_with(
            "POST", "http://api.test/api/inspections", json={"factoryName": "A"}, timeout=3,
        )

    def test_update_uses_patch(self):
        session = MagicMock()
        session.request.return_value = _response(200, {"id": 7})
        ApiGateway(base_url="http://api.test", session=session).update_inspection(7, {"status": "draft"})

        method, url = session.request.call_args[0]
        assert method == "PATCH"
        assert url == "http://api.test/api/inspections/7"

    def test_error_response_raises(self):
        session = MagicMock()
        session.request.return_value = _response(400, {
            "message": "Invalid inspection data - missing required fields: inspector",
            "errors": [{"field": "inspector", "message": "Field required"}],
        })

        with pytest.raises(GatewayError) as exc:
            ApiGateway(base_url="http://api.test", session=session).create_inspection({})

        assert exc.value.status == 400
        assert exc.value.field_errors[0]["field"] == "inspector"

    def test_connection_failure(self):
        session = MagicMock()
        session.request.side_effect = requests.ConnectionError("refused")

        with pytest.raises(GatewayError) as exc:
            ApiGateway(base_url="http://api.test", session=session).get_factory(1)

        assert exc.value.status == 503
