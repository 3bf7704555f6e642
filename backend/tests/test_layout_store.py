"""SQLAlchemy-backed store: reads, version tracking, audit rows and resolution end to end."""
import json

import pytest
from sqlalchemy.exc import OperationalError

from db.models import AuditLog, BrandingSettings, Company
from engine.selector import resolve_layout
from fallback_layouts import backfill_static_fallback_refs
from layout_store import SqlLayoutStore, StoreError
from models import LayoutConfig, LayoutSource


def _config(primary="#111", marker="s1") -> dict:
    return {
        "version": 1,
        "globalStyles": {"primaryColor": primary},
        "sections": [{"id": marker, "label": "S", "type": "custom_html", "visible": True, "html": "<p>x</p>"}],
    }


@pytest.fixture
def store(db_session):
    db_session.add_all([
        Company(id="C1", tenant_id="9001", name="Crown Relocations", brand_code="CRN"),
        Company(id="C2", tenant_id="555", name="Harbour Movers", brand_code="HBR"),
        Company(id="C3", tenant_id="77", name="Grace Removals Cairns", brand_code="gracenz"),
    ])
    db_session.commit()
    return SqlLayoutStore(db_session, actor_id="tester")


def test_company_lookups(store):
    by_id = store.get_company_by_internal_id("C1")
    by_tenant = store.get_company_by_tenant_id("9001")
    assert by_id == by_tenant
    assert by_id.internal_id == "C1"
    assert by_id.external_tenant_id == "9001"
    assert store.get_company_by_internal_id("9001") is None


def test_template_version_increments_on_every_save(store):
    row = store.save_template(_config(), name="Shared", template_id="T1")
    assert row.version == 1
    row = store.save_template(_config("#222"), name="Shared", template_id="T1")
    assert row.version == 2
    # Same content still counts as a write.
    row = store.save_template(_config("#222"), name="Shared", template_id="T1")
    assert row.version == 3
    row = store.save_template(_config("#222"), name="Shared", template_id="T1", is_active=False)
    assert row.version == 4
    assert row.is_active is False


def test_custom_layout_version_increments(store):
    assert store.save_custom_layout("C1", _config()).version == 1
    assert store.save_custom_layout("C1", _config("#999")).version == 2
    stored = store.get_active_custom_layout("C1")
    assert stored.version == 2
    assert json.loads(stored.layout_config)["globalStyles"]["primaryColor"] == "#999"


def test_layout_config_models_are_stored_as_camel_case_json(store):
    store.save_template(LayoutConfig.model_validate(_config()), name="From model", template_id="T9")
    stored = store.get_active_template("T9")
    assert json.loads(stored.layout_config)["globalStyles"] == {"primaryColor": "#111"}


def test_inactive_layouts_are_not_returned(store):
    store.save_template(_config(), name="Old", template_id="T1", is_active=False)
    store.save_custom_layout("C1", _config(), is_active=False)
    assert store.get_active_template("T1") is None
    assert store.get_active_custom_layout("C1") is None


def test_default_template_lookup(store):
    assert store.get_default_template() is None
    store.save_template(_config(), name="House", template_id="D1", is_default=True)
    assert store.get_default_template().id == "D1"
    store.save_template(_config(), name="House", template_id="D1", is_default=True, is_active=False)
    assert store.get_default_template() is None


def test_branding_overrides_mapping(store, db_session):
    store.save_template(_config(), name="Shared", template_id="T1")
    store.assign_template("C1", "T1")
    row = db_session.query(BrandingSettings).filter(BrandingSettings.company_id == "C1").one()
    row.font_family = "Roboto"
    row.logo_url = "/logo.png"
    db_session.commit()
    overrides = store.get_branding_overrides("C1")
    assert overrides.assigned_template_id == "T1"
    assert overrides.style_overrides() == {"fontFamily": "Roboto", "logoUrl": "/logo.png"}
    assert store.get_branding_overrides("C2") is None


def test_writes_are_audited(store, db_session):
    store.save_template(_config(), name="Shared", template_id="T1")
    store.assign_template("C1", "T1")
    store.unassign_template("C1")
    store.set_static_fallback_ref("C2", "grace")
    actions = [
        (a.action, a.resource_type)
        for a in db_session.query(AuditLog).order_by(AuditLog.created_at).all()
    ]
    assert ("create", "layout_template") in actions
    assert ("assign", "branding_settings") in actions
    assert ("unassign", "branding_settings") in actions
    assert ("update", "branding_settings") in actions
    assert all(a.actor_id == "tester" for a in db_session.query(AuditLog).all())


def test_resolution_end_to_end(store):
    store.save_template(_config("#111", "tmpl"), name="Shared", template_id="T1")
    store.save_custom_layout("C1", _config("#222", "custom"))
    store.assign_template("C1", "T1")
    assert resolve_layout(store, "9001").source == LayoutSource.LAYOUT_TEMPLATE
    store.unassign_template("C1")
    result = resolve_layout(store, "C1")
    assert result.source == LayoutSource.CUSTOM_LAYOUT
    assert result.config.sections[0].id == "custom"


def test_tenant_555_without_layouts_uses_static_fallback(store):
    result = resolve_layout(store, "555")
    assert result.source == LayoutSource.STATIC_FALLBACK
    assert result.company_internal_id == "C2"


def test_query_failures_become_store_errors(store, db_session, monkeypatch):
    def broken_query(*args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("database is down"))

    monkeypatch.setattr(db_session, "query", broken_query)
    with pytest.raises(StoreError):
        store.get_company_by_internal_id("C1")
    with pytest.raises(StoreError):
        store.get_active_template("T1")


def test_backfill_static_fallback_refs(store):
    assert backfill_static_fallback_refs(store, dry_run=True) == [("C2", "grace"), ("C3", "grace")]
    assert store.get_branding_overrides("C2") is None

    assert backfill_static_fallback_refs(store) == [("C2", "grace"), ("C3", "grace")]
    assert store.get_branding_overrides("C2").static_fallback_ref == "grace"
    assert store.get_branding_overrides("C1") is None
    # Already seeded companies are skipped.
    assert backfill_static_fallback_refs(store) == []


def test_branding_row_lookup_failure_becomes_store_error(store, db_session, monkeypatch):
    def broken_query(*args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("database is down"))

    monkeypatch.setattr(db_session, "query", broken_query)
    with pytest.raises(StoreError):
        store.assign_template("C1", "T1")
    with pytest.raises(StoreError):
        store.set_static_fallback_ref("C2", "grace")


def test_audit_write_failure_becomes_store_error(store, monkeypatch):
    import layout_store

    def broken_audit(*args, **kwargs):
        raise OperationalError("INSERT INTO audit_log", {}, Exception("disk full"))

    monkeypatch.setattr(layout_store, "audit_log", broken_audit)
    with pytest.raises(StoreError):
        store.save_template(_config(), name="Shared", template_id="T1")
    with pytest.raises(StoreError):
        store.save_custom_layout("C1", _config())
    with pytest.raises(StoreError):
        store.unassign_template("C1")
