from datetime import date, datetime, timezone
from enum import Enum
from typing import Optional, List

from sqlalchemy import String, Boolean, Integer, Text, Date, TIMESTAMP, JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# JSONB on Postgres, plain JSON elsewhere (SQLite in tests/dev)
JsonType = JSON().with_variant(JSONB(), "postgresql")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# 1. Declarative base
class Base(DeclarativeBase):
    pass


# 2. Enumerations
class InspectionStatus(str, Enum):
    DRAFT = "draft"
    PENDING = "pending"
    COMPLETED = "completed"


class FactoryCategory(str, Enum):
    TREIF = "treif"
    ISSUR = "issur"
    G6 = "g6"
    KOSHER = "kosher"


# Checklist keys, in report order
DOCUMENT_KEYS = ("masterIngredientList", "blueprint", "flowchart", "boilerBlueprint")

# Special-requirement flags: (api key, column attribute), canonical order
SPECIAL_REQUIREMENT_FIELDS = (
    ("bishulYisrael", "bishul_yisrael"),
    ("afiyatYisrael", "afiyat_yisrael"),
    ("chalavYisrael", "chalav_yisrael"),
    ("linatLaila", "linat_laila"),
    ("kavush", "kavush"),
    ("chadash", "chadash"),
    ("hafrashatChalla", "hafrashat_challa"),
    ("kashrutPesach", "kashrut_pesach"),
)


def empty_documents() -> dict:
    return {key: False for key in DOCUMENT_KEYS}


# 3. Tables
class Factory(Base):
    __tablename__ = "factories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String, nullable=False, index=True)
    address: Mapped[str] = mapped_column(String, nullable=False)
    map_link: Mapped[Optional[str]] = mapped_column(String)

    # Contact person
    contact_name: Mapped[Optional[str]] = mapped_column(String)
    contact_position: Mapped[Optional[str]] = mapped_column(String)
    contact_email: Mapped[Optional[str]] = mapped_column(String)
    contact_phone: Mapped[Optional[str]] = mapped_column(String)

    # Production background
    current_products: Mapped[Optional[str]] = mapped_column(Text)
    employee_count: Mapped[Optional[int]] = mapped_column(Integer)
    shifts_per_day: Mapped[Optional[int]] = mapped_column(Integer)
    working_days: Mapped[Optional[int]] = mapped_column(Integer)
    kashrut: Mapped[Optional[str]] = mapped_column(String)  # yes, no, previous

    created_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), default=utcnow, onupdate=utcnow)


class Inspection(Base):
    """
    Inspection record. Factory fields are copied in when the inspection is
    created; there is deliberately no foreign key to `factories`.
    """
    __tablename__ = "inspections"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    factory_name: Mapped[str] = mapped_column(String, nullable=False)
    inspector: Mapped[str] = mapped_column(String, nullable=False)
    factory_address: Mapped[str] = mapped_column(String, nullable=False)
    map_link: Mapped[Optional[str]] = mapped_column(String)
    hebrew_date: Mapped[Optional[str]] = mapped_column(String)
    gregorian_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)

    # Contact person
    contact_name: Mapped[Optional[str]] = mapped_column(String)
    contact_position: Mapped[Optional[str]] = mapped_column(String)
    contact_email: Mapped[Optional[str]] = mapped_column(String)
    contact_phone: Mapped[Optional[str]] = mapped_column(String)

    # General background
    current_products: Mapped[Optional[str]] = mapped_column(Text)
    employee_count: Mapped[Optional[int]] = mapped_column(Integer)
    shifts_per_day: Mapped[Optional[int]] = mapped_column(Integer)
    working_days: Mapped[Optional[int]] = mapped_column(Integer)
    kashrut: Mapped[Optional[str]] = mapped_column(String)

    # Document checklist + uploaded files per checklist key
    documents: Mapped[dict] = mapped_column(JsonType, default=empty_documents)
    document_files: Mapped[dict] = mapped_column(JsonType, default=dict)

    category: Mapped[Optional[str]] = mapped_column(String)  # FactoryCategory value

    # Narrative
    ingredients: Mapped[Optional[str]] = mapped_column(Text)
    boiler_details: Mapped[Optional[str]] = mapped_column(Text)
    cleaning_protocols: Mapped[Optional[str]] = mapped_column(Text)

    # Special requirements
    bishul_yisrael: Mapped[bool] = mapped_column(Boolean, default=False)
    afiyat_yisrael: Mapped[bool] = mapped_column(Boolean, default=False)
    chalav_yisrael: Mapped[bool] = mapped_column(Boolean, default=False)
    linat_laila: Mapped[bool] = mapped_column(Boolean, default=False)
    kavush: Mapped[bool] = mapped_column(Boolean, default=False)
    chadash: Mapped[bool] = mapped_column(Boolean, default=False)
    hafrashat_challa: Mapped[bool] = mapped_column(Boolean, default=False)
    kashrut_pesach: Mapped[bool] = mapped_column(Boolean, default=False)

    # Photos and attachments (ordered references)
    photos: Mapped[List[str]] = mapped_column(JsonType, default=list)
    attachments: Mapped[List[str]] = mapped_column(JsonType, default=list)

    # Summary
    summary: Mapped[Optional[str]] = mapped_column(Text)
    recommendations: Mapped[Optional[str]] = mapped_column(Text)
    inspector_opinion: Mapped[Optional[str]] = mapped_column(Text)

    # Any value may be written; no transition graph is enforced
    status: Mapped[str] = mapped_column(String, nullable=False, default=InspectionStatus.DRAFT.value, index=True)
    created_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), default=utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), default=utcnow, onupdate=utcnow)
