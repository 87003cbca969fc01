"""Tests for the inspection wizard state machine."""
from datetime import date
from unittest.mock import MagicMock, patch

import pytest

from kashrut_reports.application.gateways import GatewayError, ServiceGateway
from kashrut_reports.application.wizard import (
    InspectionWizard,
    PendingFactorySelection,
    SAVE_FAILED_MESSAGE,
    Step,
)
from kashrut_reports.domain.exceptions import WizardInputError
from kashrut_reports.repositories import UnitOfWork

TODAY = date(2026, 10, 19)

FACTORY = {
    "id": 3,
    "name": "Golden Grain",
    "address": "12 Mill Road",
    "mapLink": "https://maps.example/golden",
    "contactName": "Dana Levi",
    "employeeCount": 85,
    "shiftsPerDay": "2",
    "kashrut": "previous",
}

OTHER_FACTORY = {"id": 4, "name": "Blue Coast", "address": "77 Harbor Way"}


@pytest.fixture
def gateway():
    gw = MagicMock()
    gw.get_factory.return_value = dict(FACTORY)
    gw.create_inspection.side_effect = lambda payload: {**payload, "id": 101}
    gw.update_inspection.side_effect = lambda inspection_id, payload: {**payload, "id": inspection_id}
    return gw


def make_wizard(gateway, **kwargs):
    return InspectionWizard(gateway, today=lambda: TODAY, **kwargs)


class TestEntry:

    def test_new_inspection_starts_at_factory_selection(self, gateway):
        wizard = make_wizard(gateway)
        assert wizard.step == Step.FACTORY_SELECTION
        assert wizard.draft.basic.factory_name is None

    def test_factory_id_starts_at_basic_info_prefilled(self, gateway):
        wizard = make_wizard(gateway, factory_id=3)

        gateway.get_factory.assert_called_once_with(3)
        assert wizard.step == Step.BASIC_INFO
        assert wizard.draft.basic.factory_name == "Golden Grain"
        assert wizard.draft.basic.factory_address == "12 Mill Road"
        assert wizard.draft.basic.shifts_per_day == 2

    def test_pending_selection_consumed_once(self, gateway):
        pending = PendingFactorySelection()
        pending.offer(dict(FACTORY))

        wizard = make_wizard(gateway, pending=pending)

        assert wizard.step == Step.BASIC_INFO
        assert wizard.draft.basic.contact_name == "Dana Levi"
        assert not pending
        assert make_wizard(gateway, pending=pending).step == Step.FACTORY_SELECTION

    def test_unresolvable_factory_id_still_skips_selection(self, gateway):
        gateway.get_factory.side_effect = GatewayError(404, {"message": "Factory not found"})
        wizard = make_wizard(gateway, factory_id=77)
        assert wizard.step == Step.BASIC_INFO
        assert wizard.draft.basic.factory_name is None

    def test_editing_loads_record_and_never_merges_factory(self, gateway):
        gateway.get_inspection.return_value = {
            "id": 5, "factoryName": "Stored Name", "inspector": "Rabbi Katz",
            "factoryAddress": "Stored Address", "gregorianDate": "2026-01-01", "status": "pending",
        }
        pending = PendingFactorySelection()
        pending.offer(dict(FACTORY))

        wizard = make_wizard(gateway, inspection_id=5, pending=pending)
        wizard.select_factory(dict(OTHER_FACTORY))

        assert wizard.is_editing
        assert wizard.step == Step.BASIC_INFO
        assert wizard.draft.basic.factory_name == "Stored Name"
        assert wizard.draft.photos.inspector == "Rabbi Katz"


class TestNavigation:

    def test_next_and_previous_stay_in_bounds(self, gateway):
        wizard = make_wizard(gateway)

        assert wizard.previous() == Step.FACTORY_SELECTION
        for _ in range(10):
            wizard.next()
        assert wizard.step == Step.PHOTOS
        assert wizard.previous() == Step.CATEGORY

    def test_go_to_any_step(self, gateway):
        wizard = make_wizard(gateway)
        assert wizard.go_to(4) == Step.PHOTOS
        assert wizard.go_to(Step.DOCUMENTS) == Step.DOCUMENTS
        with pytest.raises(ValueError):
            wizard.go_to(9)

    def test_select_none_advances_without_merge(self, gateway):
        wizard = make_wizard(gateway)
        assert wizard.select_factory(None) == Step.BASIC_INFO
        assert wizard.draft.basic.factory_name is None


class TestFactoryMerge:

    def test_merged_exactly_once(self, gateway):
        wizard = make_wizard(gateway)
        wizard.select_factory(dict(FACTORY))

        wizard.go_to(Step.FACTORY_SELECTION)
        wizard.select_factory(dict(OTHER_FACTORY))

        assert wizard.draft.basic.factory_name == "Golden Grain"
        assert wizard.draft.basic.factory_address == "12 Mill Road"

    def test_user_edits_survive_repeated_offers(self, gateway):
        wizard = make_wizard(gateway, factory_id=3)
        wizard.submit_basic_info(contact_name="Someone Else")

        wizard.go_to(Step.FACTORY_SELECTION)
        wizard.select_factory(dict(FACTORY))

        assert wizard.draft.basic.contact_name == "Someone Else"

    def test_non_numeric_factory_values_dropped(self, gateway):
        gateway.get_factory.return_value = {**FACTORY, "employeeCount": "roughly 80"}
        wizard = make_wizard(gateway, factory_id=3)
        assert wizard.draft.basic.employee_count is None


class TestStepSubmission:

    def test_submit_merges_and_advances(self, gateway):
        wizard = make_wizard(gateway, factory_id=3)

        assert wizard.submit_basic_info(factory_name="Renamed", employee_count="12") == Step.DOCUMENTS
        assert wizard.submit_documents(documents={"masterIngredientList": True}) == Step.CATEGORY
        assert wizard.submit_category(category="kosher", chalav_yisrael=True) == Step.PHOTOS
        assert wizard.submit_photos(inspector="Rabbi Cohen") == Step.PHOTOS

        payload = wizard.draft.to_payload()
        assert payload["factoryName"] == "Renamed"
        assert payload["employeeCount"] == 12
        assert payload["documents"]["masterIngredientList"] is True
        assert payload["category"] == "kosher"
        assert payload["chalavYisrael"] is True
        assert payload["inspector"] == "Rabbi Cohen"
        assert payload["contactName"] == "Dana Levi"

    def test_step_ignores_keys_it_does_not_own(self, gateway):
        wizard = make_wizard(gateway)
        wizard.go_to(Step.CATEGORY)
        wizard.submit_category(category="g6", factory_name="Sneaky")
        assert wizard.draft.basic.factory_name is None

    def test_non_numeric_input_rejected(self, gateway):
        wizard = make_wizard(gateway, factory_id=3)

        with pytest.raises(WizardInputError) as exc:
            wizard.submit_basic_info(employee_count="many")

        assert exc.value.fields == ["employee_count"]
        assert wizard.step == Step.BASIC_INFO
        assert wizard.draft.basic.employee_count == 85


class TestHebrewDate:

    def test_every_gregorian_change_recomputes(self, gateway):
        wizard = make_wizard(gateway)
        with patch("kashrut_reports.application.wizard.to_hebrew_date", side_effect=["H1", "H2"]):
            wizard.set_gregorian_date("2026-10-26")
            assert wizard.draft.basic.hebrew_date == "H1"

            wizard.submit_basic_info(hebrew_date="typed by hand")
            wizard.set_gregorian_date("2026-10-27")
            assert wizard.draft.basic.hebrew_date == "H2"

    def test_real_conversion(self, gateway):
        wizard = make_wizard(gateway)
        wizard.set_gregorian_date("2026-10-26")
        assert wizard.draft.basic.hebrew_date == "15 Cheshvan 5787"

    def test_failed_conversion_leaves_value(self, gateway):
        wizard = make_wizard(gateway)
        wizard.submit_basic_info(hebrew_date="1 Tishrei 5787")
        wizard.go_to(Step.BASIC_INFO)

        wizard.submit_basic_info(gregorian_date="not a date")

        assert wizard.draft.basic.hebrew_date == "1 Tishrei 5787"
        assert wizard.draft.basic.gregorian_date == "not a date"


class TestFileLists:

    def test_photos(self, gateway):
        wizard = make_wizard(gateway)
        wizard.add_photos(["/uploads/a.png", "/uploads/b.png"])
        wizard.add_photos(["/uploads/c.png"])
        wizard.remove_photo("/uploads/b.png")
        assert wizard.draft.photos.photos == ["/uploads/a.png", "/uploads/c.png"]

    def test_document_files(self, gateway):
        wizard = make_wizard(gateway)
        wizard.add_document_files("flowchart", ["/uploads/f1.pdf", "/uploads/f2.pdf"])
        wizard.remove_document_file("flowchart", "/uploads/f1.pdf")
        wizard.remove_document_file("blueprint", "/uploads/none.pdf")
        assert wizard.draft.documents.document_files == {"flowchart": ["/uploads/f2.pdf"]}

    def test_unknown_document_key(self, gateway):
        with pytest.raises(WizardInputError):
            make_wizard(gateway).add_document_files("recipes", ["/uploads/x.pdf"])


class TestSaving:

    def test_draft_with_empty_fields_gets_placeholders(self, gateway):
        wizard = make_wizard(gateway)
        wizard.go_to(Step.CATEGORY)

        result = wizard.save_draft()

        payload = gateway.create_inspection.call_args[0][0]
        assert payload["factoryName"] == "Draft Factory"
        assert payload["inspector"] == "Inspector"
        assert payload["factoryAddress"] == "Address"
        assert payload["gregorianDate"] == "2026-10-19"
        assert payload["status"] == "draft"
        assert result.success is True
        assert wizard.inspection_id == 101
        assert wizard.is_editing
        assert wizard.step == Step.CATEGORY

    def test_second_save_updates(self, gateway):
        wizard = make_wizard(gateway)
        wizard.save_draft()
        wizard.save_draft()

        gateway.create_inspection.assert_called_once()
        assert gateway.update_inspection.call_args[0][0] == 101

    def test_complete_redirects_to_reports(self, gateway):
        wizard = make_wizard(gateway, factory_id=3)
        wizard.submit_basic_info(gregorian_date="2026-10-19")
        wizard.go_to(Step.PHOTOS)
        wizard.submit_photos(inspector="Rabbi Cohen")

        result = wizard.complete()

        assert result.success is True
        assert result.redirect == "/reports"
        assert gateway.create_inspection.call_args[0][0]["status"] == "completed"

    def test_validation_failure_message(self, gateway):
        gateway.create_inspection.side_effect = GatewayError(400, {
            "message": "Invalid inspection data - missing required fields: inspector",
            "errors": [{"field": "inspector", "message": "Field required"}],
        })
        wizard = make_wizard(gateway, factory_id=3)
        wizard.go_to(Step.PHOTOS)

        result = wizard.complete()

        assert result.success is False
        assert result.message == "missing required fields: inspector"
        assert result.redirect is None
        assert wizard.step == Step.PHOTOS
        assert wizard.draft.basic.factory_name == "Golden Grain"

    def test_other_failure_message(self, gateway):
        gateway.create_inspection.side_effect = GatewayError(500, {"message": "Internal server error"})
        result = make_wizard(gateway).save_draft()
        assert result.success is False
        assert result.message == SAVE_FAILED_MESSAGE


class TestWizardAgainstStore:

    def test_draft_persisted_with_placeholders(self, db_session):
        gateway = ServiceGateway(UnitOfWork(db_session))
        wizard = InspectionWizard(gateway, today=lambda: TODAY)

        result = wizard.save_draft()

        stored = gateway.get_inspection(wizard.inspection_id)
        assert result.success
        assert stored["factoryName"] == "Draft Factory"
        assert stored["gregorianDate"] == "2026-10-19"
        assert stored["status"] == "draft"

    def test_complete_without_required_fields(self, db_session):
        wizard = InspectionWizard(ServiceGateway(UnitOfWork(db_session)), today=lambda: TODAY)

        result = wizard.complete()

        assert result.success is False
        assert result.message.startswith("missing required fields:")
        assert "factoryName" in result.message

    def test_full_flow_with_factory(self, db_session, factory_profile_factory):
        factory = factory_profile_factory.create(db_session, name="Sunrise Dairy", address="4 Valley Street",
                                                 employee_count=140)
        gateway = ServiceGateway(UnitOfWork(db_session))

        wizard = InspectionWizard(gateway, factory_id=factory.id, today=lambda: TODAY)
        wizard.submit_basic_info(gregorian_date="2026-10-19")
        wizard.submit_documents(documents={"blueprint": True})
        wizard.submit_category(category="issur", chalav_yisrael=True)
        wizard.submit_photos(inspector="Rabbi Cohen", photos=["/uploads/x_a.png"])
        result = wizard.complete()

        stored = gateway.get_inspection(result.inspection["id"])
        assert stored["factoryName"] == "Sunrise Dairy"
        assert stored["employeeCount"] == 140
        assert stored["documents"]["blueprint"] is True
        assert stored["chalavYisrael"] is True
        assert stored["photos"] == ["/uploads/x_a.png"]
        assert stored["status"] == "completed"
        assert stored["hebrewDate"]
