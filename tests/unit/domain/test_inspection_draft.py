"""Unit tests for the wizard's InspectionDraft and per-step merges."""

import pytest

from kashrut_reports.domain.entities import (
    BasicInfoFields,
    CategoryFields,
    DocumentsFields,
    InspectionDraft,
    PhotosFields,
    factory_values,
    merge_basic_info,
    merge_category,
    merge_documents,
    merge_photos,
)
from kashrut_reports.domain.exceptions import WizardInputError


class TestStepMerges:

    def test_basic_info_merges_only_owned_keys(self):
        group = merge_basic_info(BasicInfoFields(), {"factory_name": "Acme", "category": "treif"})
        assert group.factory_name == "Acme"
        assert not hasattr(group, "category")

    def test_later_write_wins(self):
        group = merge_basic_info(BasicInfoFields(factory_name="Old", contact_name="Dana"), {"factory_name": "New"})
        assert group.factory_name == "New"
        assert group.contact_name == "Dana"

    def test_numeric_input_parsed(self):
        group = merge_basic_info(BasicInfoFields(), {"employee_count": "40", "working_days": ""})
        assert group.employee_count == 40
        assert group.working_days is None

    def test_non_numeric_input_rejected_without_partial_merge(self):
        original = BasicInfoFields(factory_name="Acme")
        with pytest.raises(WizardInputError) as exc:
            merge_basic_info(original, {"factory_name": "Other", "shifts_per_day": "two"})
        assert exc.value.fields == ["shifts_per_day"]
        assert original.factory_name == "Acme"

    def test_documents_checklist_merged_per_key(self):
        group = merge_documents(DocumentsFields(), {"documents": {"blueprint": True}})
        assert group.documents == {
            "masterIngredientList": False,
            "blueprint": True,
            "flowchart": False,
            "boilerBlueprint": False,
        }

    def test_unknown_checklist_key_rejected(self):
        with pytest.raises(WizardInputError):
            merge_documents(DocumentsFields(), {"documents": {"recipe": True}})

    def test_category_and_photos(self):
        category = merge_category(CategoryFields(), {"category": "g6", "kavush": True})
        assert category.category == "g6"
        assert category.kavush is True

        photos = merge_photos(PhotosFields(), {"inspector": "Rabbi Levi", "photos": ("/uploads/a.png",)})
        assert photos.inspector == "Rabbi Levi"
        assert photos.photos == ["/uploads/a.png"]


class TestInspectionDraft:

    def test_payload_is_camel_case(self):
        draft = InspectionDraft()
        draft.basic.factory_name = "Acme"
        draft.category.hafrashat_challa = True
        payload = draft.to_payload()

        assert payload["factoryName"] == "Acme"
        assert payload["hafrashatChalla"] is True
        assert payload["documents"]["masterIngredientList"] is False
        assert payload["status"] == "draft"
        assert "factory_name" not in payload

    def test_from_record_round_trip(self):
        record = {
            "id": 9,
            "factoryName": "Acme",
            "inspector": "Rabbi Levi",
            "factoryAddress": "1 Main St",
            "gregorianDate": "2026-10-19",
            "employeeCount": "30",
            "documents": {"flowchart": True},
            "documentFiles": {"flowchart": ["/uploads/f.pdf"]},
            "chalavYisrael": True,
            "photos": ["/uploads/p.png"],
            "status": "pending",
        }
        draft = InspectionDraft.from_record(record)

        assert draft.basic.factory_name == "Acme"
        assert draft.basic.employee_count == 30
        assert draft.documents.documents["flowchart"] is True
        assert draft.documents.documents["blueprint"] is False
        assert draft.category.chalav_yisrael is True
        assert draft.photos.inspector == "Rabbi Levi"
        assert draft.status == "pending"

    def test_factory_values_normalises_numbers(self):
        values = factory_values({
            "name": "Acme",
            "address": "1 Main St",
            "employeeCount": "about fifty",
            "shiftsPerDay": 2,
        })
        assert values["factory_name"] == "Acme"
        assert values["factory_address"] == "1 Main St"
        assert values["employee_count"] is None
        assert values["shifts_per_day"] == 2
