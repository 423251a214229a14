"""ORM Models for the Glasify catalog — SQLAlchemy 2.0"""
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlalchemy import (
    JSON, Boolean, DateTime, ForeignKey, Integer, Numeric, String, Text,
    UniqueConstraint, Uuid,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func
from glasify.db import Base


def gen_uuid():
    return str(uuid.uuid4())


JSONType = JSON().with_variant(JSONB(), "postgresql")


# ── TENANT ────────────────────────────────────────────────────────────────────
class TenantConfig(Base):
    """Singleton row, fixed id "1"."""
    __tablename__ = "tenant_config"
    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    business_name: Mapped[str] = mapped_column(String(100), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="COP")
    locale: Mapped[str] = mapped_column(String(5), nullable=False, default="es-CO")
    timezone: Mapped[str] = mapped_column(String(64), nullable=False, default="America/Bogota")
    quote_validity_days: Mapped[int] = mapped_column(Integer, nullable=False, default=15)
    contact_email: Mapped[Optional[str]] = mapped_column(String(255))
    contact_phone: Mapped[Optional[str]] = mapped_column(String(30))
    business_address: Mapped[Optional[str]] = mapped_column(String(200))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


# ── SUPPLIERS ─────────────────────────────────────────────────────────────────
class ProfileSupplier(Base):
    __tablename__ = "profile_suppliers"
    id: Mapped[str] = mapped_column(Uuid(as_uuid=False), primary_key=True, default=gen_uuid)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    material_type: Mapped[str] = mapped_column(String(20), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    notes: Mapped[Optional[str]] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    models: Mapped[list["Model"]] = relationship("Model", back_populates="profile_supplier")


# ── GLASS CATALOG ─────────────────────────────────────────────────────────────
class GlassSupplier(Base):
    __tablename__ = "glass_suppliers"
    id: Mapped[str] = mapped_column(Uuid(as_uuid=False), primary_key=True, default=gen_uuid)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    code: Mapped[Optional[str]] = mapped_column(String(10))
    country: Mapped[Optional[str]] = mapped_column(String(100))
    website: Mapped[Optional[str]] = mapped_column(String(255))
    contact_email: Mapped[Optional[str]] = mapped_column(String(255))
    contact_phone: Mapped[Optional[str]] = mapped_column(String(50))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    notes: Mapped[Optional[str]] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    glass_types: Mapped[list["GlassType"]] = relationship("GlassType", back_populates="glass_supplier")


class GlassType(Base):
    __tablename__ = "glass_types"
    id: Mapped[str] = mapped_column(Uuid(as_uuid=False), primary_key=True, default=gen_uuid)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    code: Mapped[Optional[str]] = mapped_column(String(50))
    glass_supplier_id: Mapped[Optional[str]] = mapped_column(Uuid(as_uuid=False), ForeignKey("glass_suppliers.id"))
    thickness_mm: Mapped[int] = mapped_column(Integer, nullable=False)
    price_per_sqm: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    purpose: Mapped[str] = mapped_column(String(20), nullable=False, default="general")
    is_tempered: Mapped[bool] = mapped_column(Boolean, default=False)
    is_laminated: Mapped[bool] = mapped_column(Boolean, default=False)
    is_low_e: Mapped[bool] = mapped_column(Boolean, default=False)
    is_triple_glazed: Mapped[bool] = mapped_column(Boolean, default=False)
    u_value: Mapped[Optional[Decimal]] = mapped_column(Numeric(5, 2))
    solar_factor: Mapped[Optional[Decimal]] = mapped_column(Numeric(4, 3))
    light_transmission: Mapped[Optional[Decimal]] = mapped_column(Numeric(4, 3))
    manufacturer: Mapped[Optional[str]] = mapped_column(String(100))
    series: Mapped[Optional[str]] = mapped_column(String(100))
    description: Mapped[Optional[str]] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    solutions: Mapped[list["GlassTypeSolution"]] = relationship("GlassTypeSolution", back_populates="glass_type")
    glass_supplier: Mapped[Optional["GlassSupplier"]] = relationship("GlassSupplier", back_populates="glass_types")


class GlassSolution(Base):
    __tablename__ = "glass_solutions"
    id: Mapped[str] = mapped_column(Uuid(as_uuid=False), primary_key=True, default=gen_uuid)
    key: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    name_es: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    icon: Mapped[Optional[str]] = mapped_column(String(50))
    sort_order: Mapped[int] = mapped_column(Integer, default=0)
    slug: Mapped[str] = mapped_column(String(60), unique=True, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    glass_types: Mapped[list["GlassTypeSolution"]] = relationship("GlassTypeSolution", back_populates="solution")


class GlassTypeSolution(Base):
    __tablename__ = "glass_type_solutions"
    __table_args__ = (UniqueConstraint("glass_type_id", "solution_id", name="uq_glass_type_solution"),)
    id: Mapped[str] = mapped_column(Uuid(as_uuid=False), primary_key=True, default=gen_uuid)
    glass_type_id: Mapped[str] = mapped_column(Uuid(as_uuid=False), ForeignKey("glass_types.id"), nullable=False)
    solution_id: Mapped[str] = mapped_column(Uuid(as_uuid=False), ForeignKey("glass_solutions.id"), nullable=False)
    performance_rating: Mapped[str] = mapped_column(String(20), nullable=False)
    is_primary: Mapped[bool] = mapped_column(Boolean, default=False)
    notes: Mapped[Optional[str]] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    glass_type: Mapped["GlassType"] = relationship("GlassType", back_populates="solutions")
    solution: Mapped["GlassSolution"] = relationship("GlassSolution", back_populates="glass_types")


# ── PRODUCTS ──────────────────────────────────────────────────────────────────
class Model(Base):
    __tablename__ = "models"
    id: Mapped[str] = mapped_column(Uuid(as_uuid=False), primary_key=True, default=gen_uuid)
    name: Mapped[str] = mapped_column(String(150), unique=True, nullable=False)
    profile_supplier_id: Mapped[str] = mapped_column(Uuid(as_uuid=False), ForeignKey("profile_suppliers.id"), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="published")
    min_width_mm: Mapped[int] = mapped_column(Integer, nullable=False)
    max_width_mm: Mapped[int] = mapped_column(Integer, nullable=False)
    min_height_mm: Mapped[int] = mapped_column(Integer, nullable=False)
    max_height_mm: Mapped[int] = mapped_column(Integer, nullable=False)
    base_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    cost_per_mm_width: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    cost_per_mm_height: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    accessory_price: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2))
    glass_discount_width_mm: Mapped[int] = mapped_column(Integer, default=0)
    glass_discount_height_mm: Mapped[int] = mapped_column(Integer, default=0)
    profit_margin_percentage: Mapped[Optional[Decimal]] = mapped_column(Numeric(5, 2))
    cost_notes: Mapped[Optional[str]] = mapped_column(Text)
    compatible_glass_type_ids: Mapped[list] = mapped_column(JSONType, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    profile_supplier: Mapped["ProfileSupplier"] = relationship("ProfileSupplier", back_populates="models")


class Service(Base):
    """Billable extra. name is not unique at the store level."""
    __tablename__ = "services"
    id: Mapped[str] = mapped_column(Uuid(as_uuid=False), primary_key=True, default=gen_uuid)
    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    unit: Mapped[str] = mapped_column(String(10), nullable=False)
    rate: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    minimum_billing_unit: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
