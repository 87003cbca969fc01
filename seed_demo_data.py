"""
Seed script to add demo factories and inspections.
Run:    python seed_demo_data.py
Delete: python seed_demo_data.py --delete
"""
import sys
from datetime import date, timedelta

from kashrut_reports.app import create_app
from kashrut_reports.database import get_db
from kashrut_reports.models_db import Factory, Inspection, InspectionStatus, empty_documents
from kashrut_reports.services.hebrew_calendar import to_hebrew_date

DEMO_TAG = "DEMO"

FACTORIES = [
    {
        "name": "Golden Grain Bakery",
        "address": "12 Mill Road, Haifa",
        "map_link": "https://maps.google.com/?q=12+Mill+Road+Haifa",
        "contact_name": "Dana Levi",
        "contact_position": "Plant Manager",
        "contact_email": "dana.levi@goldengrain.example",
        "contact_phone": "+972-4-555-0101",
        "current_products": "Breads, rolls, frozen dough",
        "employee_count": 85,
        "shifts_per_day": 2,
        "working_days": 5,
        "kashrut": "previous",
    },
    {
        "name": "Sunrise Dairy Cooperative",
        "address": "4 Valley Street, Afula",
        "contact_name": "Yossi Cohen",
        "contact_position": "Quality Assurance",
        "contact_email": "yossi@sunrisedairy.example",
        "current_products": "Yogurt, soft cheese, cream",
        "employee_count": 140,
        "shifts_per_day": 3,
        "working_days": 6,
        "kashrut": "yes",
    },
    {
        "name": "Blue Coast Pickles",
        "address": "77 Harbor Way, Ashdod",
        "contact_name": "Miriam Katz",
        "contact_position": "Owner",
        "contact_phone": "+972-8-555-0177",
        "current_products": "Pickled cucumbers, olives, peppers",
        "employee_count": 30,
        "shifts_per_day": 1,
        "working_days": 5,
        "kashrut": "no",
    },
]

# (factory index, days ago, status, category, extra fields)
INSPECTION_SCENARIOS = [
    (0, 2, InspectionStatus.COMPLETED, "kosher", {
        "afiyat_yisrael": True, "hafrashat_challa": True,
        "ingredients": "Flour, water, yeast, salt, vegetable oil.",
        "summary": "Clean plant, single line, no dairy.",
        "recommendations": "Request supplier certificates for yeast and oil.",
    }),
    (1, 10, InspectionStatus.PENDING, "issur", {
        "chalav_yisrael": True, "bishul_yisrael": True,
        "boiler_details": "Shared boiler with the neighbouring cheese plant.",
    }),
    (2, 40, InspectionStatus.DRAFT, "g6", {
        "kavush": True,
        "cleaning_protocols": "Daily caustic wash at 80C.",
    }),
]


def seed():
    """Create demo factories and one inspection per factory."""
    app = create_app()
    with app.app_context():
        session = next(get_db())

        print(f"Seeding demo data (tag: [{DEMO_TAG}])...")

        factories = []
        for data in FACTORIES:
            factory = Factory(**{**data, "name": f"{data['name']} [{DEMO_TAG}]"})
            session.add(factory)
            factories.append(factory)
        session.flush()
        print(f"  Created {len(factories)} factories")

        for factory_idx, days_ago, status, category, extra in INSPECTION_SCENARIOS:
            factory = factories[factory_idx]
            visit = date.today() - timedelta(days=days_ago)
            documents = empty_documents()
            documents["masterIngredientList"] = status == InspectionStatus.COMPLETED
            session.add(Inspection(
                factory_name=factory.name,
                factory_address=factory.address,
                map_link=factory.map_link,
                inspector="Rabbi Demo Inspector",
                gregorian_date=visit,
                hebrew_date=to_hebrew_date(visit),
                contact_name=factory.contact_name,
                contact_position=factory.contact_position,
                contact_email=factory.contact_email,
                contact_phone=factory.contact_phone,
                current_products=factory.current_products,
                employee_count=factory.employee_count,
                shifts_per_day=factory.shifts_per_day,
                working_days=factory.working_days,
                kashrut=factory.kashrut,
                documents=documents,
                category=category,
                status=status.value,
                **extra,
            ))

        session.commit()

        print("\nDone! Demo data seeded successfully.")
        print(f"  Factories: {len(factories)}")
        print(f"  Inspections: {len(INSPECTION_SCENARIOS)}")
        print("  Delete with: python seed_demo_data.py --delete")


def delete():
    """Remove all demo data tagged with DEMO_TAG."""
    app = create_app()
    with app.app_context():
        session = next(get_db())

        print(f"Removing demo data (tag: [{DEMO_TAG}])...")

        inspections = session.query(Inspection).filter(Inspection.factory_name.contains(f"[{DEMO_TAG}]")).all()
        for insp in inspections:
            session.delete(insp)
        print(f"  Deleted {len(inspections)} inspections")

        factories = session.query(Factory).filter(Factory.name.contains(f"[{DEMO_TAG}]")).all()
        for factory in factories:
            session.delete(factory)
        print(f"  Deleted {len(factories)} factories")

        session.commit()
        print("\nDone! All demo data removed.")


if __name__ == "__main__":
    if "--delete" in sys.argv:
        delete()
    else:
        seed()
