"""SQLAlchemy models for companies, branding and stored quote layouts. Use Alembic for migrations."""
from __future__ import annotations

from datetime import datetime
from sqlalchemy import JSON, Boolean, Column, String, DateTime, ForeignKey, Integer, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship

from .session import Base

JSONType = JSON().with_variant(JSONB(), "postgresql")


class Company(Base):
    __tablename__ = "companies"

    id = Column(String, primary_key=True)
    tenant_id = Column("tenant_id", String, nullable=True, index=True)
    name = Column(String, nullable=False)
    brand_code = Column("brand_code", String, nullable=True)
    created_at = Column("created_at", DateTime, default=datetime.utcnow)
    updated_at = Column("updated_at", DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    branding = relationship("BrandingSettings", back_populates="company", uselist=False)
    custom_layout = relationship("CustomLayout", back_populates="company", uselist=False)


class LayoutTemplate(Base):
    """Shared layout assignable to many companies through branding_settings.layout_template_id."""
    __tablename__ = "layout_templates"

    id = Column(String, primary_key=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)
    layout_config = Column("layout_config", Text, nullable=False)  # JSON text
    version = Column(Integer, nullable=False)
    is_active = Column("is_active", Boolean, nullable=False, default=True)
    is_default = Column("is_default", Boolean, nullable=False, default=False)
    created_by = Column("created_by", String, nullable=True)
    created_at = Column("created_at", DateTime, default=datetime.utcnow)
    updated_at = Column("updated_at", DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Every UPDATE bumps version by one and fails on a stale row.
    __mapper_args__ = {"version_id_col": version}


class CustomLayout(Base):
    """Company-specific layout; at most one per company."""
    __tablename__ = "custom_layouts"

    id = Column(String, primary_key=True)
    company_id = Column(
        "company_id",
        String,
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    layout_config = Column("layout_config", Text, nullable=False)  # JSON text
    description = Column(Text, nullable=True)
    version = Column(Integer, nullable=False)
    is_active = Column("is_active", Boolean, nullable=False, default=True)
    created_by = Column("created_by", String, nullable=True)
    created_at = Column("created_at", DateTime, default=datetime.utcnow)
    updated_at = Column("updated_at", DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    company = relationship("Company", back_populates="custom_layout")

    __mapper_args__ = {"version_id_col": version}


class BrandingSettings(Base):
    __tablename__ = "branding_settings"

    id = Column(String, primary_key=True)
    company_id = Column(
        "company_id",
        String,
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    font_family = Column("font_family", String, nullable=True)
    hero_banner_url = Column("hero_banner_url", String(2000), nullable=True)
    footer_image_url = Column("footer_image_url", String(2000), nullable=True)
    logo_url = Column("logo_url", String(2000), nullable=True)
    primary_color = Column("primary_color", String, nullable=True)
    secondary_color = Column("secondary_color", String, nullable=True)
    layout_template_id = Column(
        "layout_template_id",
        String,
        ForeignKey("layout_templates.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    static_fallback_ref = Column("static_fallback_ref", String, nullable=True)
    created_at = Column("created_at", DateTime, default=datetime.utcnow)
    updated_at = Column("updated_at", DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    company = relationship("Company", back_populates="branding")


class AuditLog(Base):
    __tablename__ = "audit_log"

    id = Column(String, primary_key=True)
    actor_id = Column("actor_id", String, nullable=False)
    action = Column(String, nullable=False)
    resource_type = Column("resource_type", String, nullable=False)
    resource_id = Column("resource_id", String, nullable=True)
    details = Column(JSONType, nullable=True)
    created_at = Column("created_at", DateTime, default=datetime.utcnow)
