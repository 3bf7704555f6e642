"""Add backend to path so 'from models import' resolves when run from project root; shared store fixtures."""
import os
import sys

_backend_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if _backend_dir not in sys.path:
    sys.path.insert(0, _backend_dir)

# Never touch a real database from tests.
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from db.session import Base
import db.models  # noqa: F401
from layout_store import LayoutStore, StoreError


class FakeLayoutStore(LayoutStore):
    """In-memory store; name a method in ``failing`` to make it raise StoreError."""

    def __init__(self):
        self.companies = {}
        self.templates = {}
        self.custom_layouts = {}
        self.branding = {}
        self.default_template = None
        self.failing = set()
        self.calls = []

    def _call(self, name):
        self.calls.append(name)
        if name in self.failing:
            raise StoreError(f"{name} unavailable")

    def get_company_by_internal_id(self, internal_id):
        self._call("get_company_by_internal_id")
        return self.companies.get(internal_id)

    def get_company_by_tenant_id(self, tenant_id):
        self._call("get_company_by_tenant_id")
        for company in self.companies.values():
            if company.external_tenant_id == tenant_id:
                return company
        return None

    def get_active_template(self, template_id):
        self._call("get_active_template")
        tmpl = self.templates.get(template_id)
        return tmpl if tmpl is not None and tmpl.is_active else None

    def get_active_custom_layout(self, company_internal_id):
        self._call("get_active_custom_layout")
        layout = self.custom_layouts.get(company_internal_id)
        return layout if layout is not None and layout.is_active else None

    def get_default_template(self):
        self._call("get_default_template")
        tmpl = self.default_template
        return tmpl if tmpl is not None and tmpl.is_active else None

    def get_branding_overrides(self, company_internal_id):
        self._call("get_branding_overrides")
        return self.branding.get(company_internal_id)


@pytest.fixture
def fake_store():
    return FakeLayoutStore()


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()
