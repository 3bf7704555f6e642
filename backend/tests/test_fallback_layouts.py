"""Built-in fallback registry and the legacy eligibility rules."""
import pytest

from fallback_layouts import (
    FALLBACK_LAYOUTS,
    get_fallback_layout,
    list_fallback_layouts,
    match_legacy_family,
)
from models import CompanyRecord, LayoutConfig, SectionType


def test_registered_layouts_are_valid():
    assert set(FALLBACK_LAYOUTS) == {"grace", "default"}
    for config in FALLBACK_LAYOUTS.values():
        assert isinstance(config, LayoutConfig)
        assert config.sections


def test_grace_section_order():
    ids = [s.id for s in FALLBACK_LAYOUTS["grace"].sections]
    assert ids == [
        "grace-header",
        "grace-hero",
        "grace-intro",
        "grace-locations",
        "grace-insurance",
        "grace-pricing",
        "grace-acceptance",
        "grace-inventory",
        "grace-footer-image",
        "grace-footer",
    ]
    acceptance = FALLBACK_LAYOUTS["grace"].sections[6]
    assert acceptance.type == SectionType.BUILT_IN
    assert acceptance.component == "AcceptanceForm"


def test_grace_global_styles():
    assert FALLBACK_LAYOUTS["grace"].global_styles == {
        "fontFamily": "Arial, Helvetica, sans-serif",
        "backgroundColor": "#e9e9e9",
        "maxWidth": "980px",
    }


def test_default_layout_is_built_in_only():
    assert all(s.type == SectionType.BUILT_IN for s in FALLBACK_LAYOUTS["default"].sections)


@pytest.mark.parametrize("family", ["grace", "GRACE", " Grace "])
def test_lookup_is_case_insensitive(family):
    assert get_fallback_layout(family) is FALLBACK_LAYOUTS["grace"]


@pytest.mark.parametrize("family", [None, "", "unknown"])
def test_unknown_family(family):
    assert get_fallback_layout(family) is None


def test_listing_shape():
    listing = list_fallback_layouts()
    grace = next(item for item in listing if item["family"] == "grace")
    assert grace["layoutConfig"]["globalStyles"]["maxWidth"] == "980px"
    assert grace["layoutConfig"]["sections"][0]["id"] == "grace-header"


@pytest.mark.parametrize(
    "company",
    [
        CompanyRecord(internal_id="a", external_tenant_id="555", name="Harbour Movers"),
        CompanyRecord(internal_id="b", external_tenant_id="1", name="Harbour Movers", brand_code="GRACE-AU"),
        CompanyRecord(internal_id="c", external_tenant_id="2", name="Grace Removals Brisbane"),
    ],
)
def test_legacy_rules_match(company):
    assert match_legacy_family(company) == "grace"


def test_legacy_rules_do_not_match_other_companies():
    company = CompanyRecord(internal_id="d", external_tenant_id="5550", name="Crown Relocations", brand_code="CRN")
    assert match_legacy_family(company) is None
    assert match_legacy_family(None, "") is None


def test_raw_identifier_matches_tenant_list():
    assert match_legacy_family(None, " 555 ") == "grace"
    assert match_legacy_family(None, "grace") is None
