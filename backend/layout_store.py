"""
Read/write access to companies, branding and stored layouts.

The selector only ever talks to ``LayoutStore``; ``SqlLayoutStore`` is the
SQLAlchemy-backed implementation used by the API. Writes go through the ORM so
``version`` is bumped by the mapper on every UPDATE.
"""
from __future__ import annotations

import json
import logging
import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from audit import log as audit_log
from db.models import BrandingSettings, Company, CustomLayout, LayoutTemplate
from models import CompanyRecord, LayoutConfig, StoredLayout
from models_branding import BrandingOverrides

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """The persistence layer failed (connection, query or stale-write error)."""


class LayoutStore(ABC):
    """Narrow read interface consumed by identifier resolution and layout selection."""

    @abstractmethod
    def get_company_by_internal_id(self, internal_id: str) -> Optional[CompanyRecord]:
        ...

    @abstractmethod
    def get_company_by_tenant_id(self, tenant_id: str) -> Optional[CompanyRecord]:
        ...

    @abstractmethod
    def get_active_template(self, template_id: str) -> Optional[StoredLayout]:
        """Template by id, only if it exists and is active."""
        ...

    @abstractmethod
    def get_active_custom_layout(self, company_internal_id: str) -> Optional[StoredLayout]:
        ...

    @abstractmethod
    def get_default_template(self) -> Optional[StoredLayout]:
        """The active template flagged as global default, if any."""
        ...

    @abstractmethod
    def get_branding_overrides(self, company_internal_id: str) -> Optional[BrandingOverrides]:
        ...


def _company_record(row: Company) -> CompanyRecord:
    return CompanyRecord(
        internal_id=row.id,
        external_tenant_id=row.tenant_id,
        name=row.name or "",
        brand_code=row.brand_code,
    )


def _stored_layout(row: LayoutTemplate | CustomLayout, name: Optional[str]) -> StoredLayout:
    return StoredLayout(
        id=row.id,
        name=name,
        layout_config=row.layout_config,
        version=row.version,
        is_active=bool(row.is_active),
    )


def _config_text(config: LayoutConfig | dict[str, Any] | str) -> str:
    if isinstance(config, LayoutConfig):
        return json.dumps(config.model_dump(mode="json", by_alias=True, exclude_none=True))
    if isinstance(config, str):
        return config
    return json.dumps(config)


class SqlLayoutStore(LayoutStore):
    def __init__(self, db: Session, actor_id: Optional[str] = None):
        self.db = db
        self.actor_id = actor_id

    # --- reads ---

    def get_company_by_internal_id(self, internal_id: str) -> Optional[CompanyRecord]:
        try:
            row = self.db.query(Company).filter(Company.id == internal_id).first()
        except SQLAlchemyError as e:
            raise StoreError(f"company lookup failed: {e}") from e
        return _company_record(row) if row else None

    def get_company_by_tenant_id(self, tenant_id: str) -> Optional[CompanyRecord]:
        try:
            row = (
                self.db.query(Company)
                .filter(Company.tenant_id == tenant_id)
                .order_by(Company.id)
                .first()
            )
        except SQLAlchemyError as e:
            raise StoreError(f"company lookup failed: {e}") from e
        return _company_record(row) if row else None

    def get_active_template(self, template_id: str) -> Optional[StoredLayout]:
        try:
            row = (
                self.db.query(LayoutTemplate)
                .filter(LayoutTemplate.id == template_id, LayoutTemplate.is_active.is_(True))
                .first()
            )
        except SQLAlchemyError as e:
            raise StoreError(f"template lookup failed: {e}") from e
        return _stored_layout(row, row.name) if row else None

    def get_active_custom_layout(self, company_internal_id: str) -> Optional[StoredLayout]:
        try:
            row = (
                self.db.query(CustomLayout)
                .filter(CustomLayout.company_id == company_internal_id, CustomLayout.is_active.is_(True))
                .first()
            )
        except SQLAlchemyError as e:
            raise StoreError(f"custom layout lookup failed: {e}") from e
        return _stored_layout(row, row.description) if row else None

    def get_default_template(self) -> Optional[StoredLayout]:
        try:
            row = (
                self.db.query(LayoutTemplate)
                .filter(LayoutTemplate.is_default.is_(True), LayoutTemplate.is_active.is_(True))
                .order_by(LayoutTemplate.updated_at.desc())
                .first()
            )
        except SQLAlchemyError as e:
            raise StoreError(f"default template lookup failed: {e}") from e
        return _stored_layout(row, row.name) if row else None

    def get_branding_overrides(self, company_internal_id: str) -> Optional[BrandingOverrides]:
        try:
            row = (
                self.db.query(BrandingSettings)
                .filter(BrandingSettings.company_id == company_internal_id)
                .first()
            )
        except SQLAlchemyError as e:
            raise StoreError(f"branding lookup failed: {e}") from e
        if row is None:
            return None
        return BrandingOverrides(
            font_family=row.font_family,
            hero_banner_url=row.hero_banner_url,
            footer_image_url=row.footer_image_url,
            logo_url=row.logo_url,
            primary_color=row.primary_color,
            secondary_color=row.secondary_color,
            assigned_template_id=row.layout_template_id,
            static_fallback_ref=row.static_fallback_ref,
        )

    def list_companies(self) -> list[CompanyRecord]:
        try:
            rows = self.db.query(Company).order_by(Company.id).all()
        except SQLAlchemyError as e:
            raise StoreError(f"company listing failed: {e}") from e
        return [_company_record(r) for r in rows]

    # --- writes ---

    def _commit(self, row: Any = None) -> None:
        try:
            self.db.commit()
            if row is not None:
                self.db.refresh(row)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreError(f"write failed: {e}") from e

    def _audit(self, action: str, resource_type: str, resource_id: str, details: dict[str, Any]) -> None:
        try:
            audit_log(self.db, action, resource_type, resource_id, details, actor_id=self.actor_id)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreError(f"audit write failed: {e}") from e

    def _branding_row(self, company_id: str) -> BrandingSettings:
        try:
            row = (
                self.db.query(BrandingSettings)
                .filter(BrandingSettings.company_id == company_id)
                .first()
            )
        except SQLAlchemyError as e:
            raise StoreError(f"branding lookup failed: {e}") from e
        if row is None:
            row = BrandingSettings(id=str(uuid.uuid4()), company_id=company_id)
            self.db.add(row)
        return row

    def save_template(
        self,
        config: LayoutConfig | dict[str, Any] | str,
        name: str,
        template_id: Optional[str] = None,
        description: Optional[str] = None,
        is_active: bool = True,
        is_default: bool = False,
    ) -> LayoutTemplate:
        """Create or update a shared template. Updates bump ``version`` by one."""
        try:
            row = self.db.get(LayoutTemplate, template_id) if template_id else None
        except SQLAlchemyError as e:
            raise StoreError(f"template lookup failed: {e}") from e
        action = "update" if row is not None else "create"
        if row is None:
            row = LayoutTemplate(
                id=template_id or str(uuid.uuid4()),
                created_by=self.actor_id,
            )
            self.db.add(row)
        row.name = name
        row.description = description
        row.layout_config = _config_text(config)
        row.is_active = is_active
        row.is_default = is_default
        # Always dirty, so the mapper issues an UPDATE (and a version bump) on every save.
        row.updated_at = datetime.utcnow()
        self._commit(row)
        self._audit(
            action,
            "layout_template",
            row.id,
            {"name": name, "version": row.version, "is_active": is_active, "is_default": is_default},
        )
        return row

    def save_custom_layout(
        self,
        company_id: str,
        config: LayoutConfig | dict[str, Any] | str,
        description: Optional[str] = None,
        is_active: bool = True,
    ) -> CustomLayout:
        """Create or update the single custom layout of a company."""
        try:
            row = self.db.query(CustomLayout).filter(CustomLayout.company_id == company_id).first()
        except SQLAlchemyError as e:
            raise StoreError(f"custom layout lookup failed: {e}") from e
        action = "update" if row is not None else "create"
        if row is None:
            row = CustomLayout(id=str(uuid.uuid4()), company_id=company_id, created_by=self.actor_id)
            self.db.add(row)
        row.layout_config = _config_text(config)
        row.description = description
        row.is_active = is_active
        row.updated_at = datetime.utcnow()
        self._commit(row)
        self._audit(
            action,
            "custom_layout",
            row.id,
            {"company_id": company_id, "version": row.version, "is_active": is_active},
        )
        return row

    def assign_template(self, company_id: str, template_id: str) -> None:
        row = self._branding_row(company_id)
        row.layout_template_id = template_id
        self._commit(row)
        self._audit(
            "assign",
            "branding_settings",
            row.id,
            {"company_id": company_id, "layout_template_id": template_id},
        )

    def unassign_template(self, company_id: str) -> None:
        row = self._branding_row(company_id)
        previous = row.layout_template_id
        row.layout_template_id = None
        self._commit(row)
        self._audit(
            "unassign",
            "branding_settings",
            row.id,
            {"company_id": company_id, "previous_layout_template_id": previous},
        )

    def set_static_fallback_ref(self, company_id: str, family: Optional[str]) -> None:
        row = self._branding_row(company_id)
        row.static_fallback_ref = family
        self._commit(row)
        self._audit(
            "update",
            "branding_settings",
            row.id,
            {"company_id": company_id, "static_fallback_ref": family},
        )
        logger.info("static_fallback_ref company_id=%s family=%s", company_id, family)
