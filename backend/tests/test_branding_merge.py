"""Branding overrides layered onto layout globalStyles."""
import copy

from engine.branding import merge_branding
from models import LayoutConfig, MalformedConfig
from models_branding import BrandingOverrides


def _config() -> LayoutConfig:
    return LayoutConfig.model_validate({
        "version": 3,
        "globalStyles": {
            "fontFamily": "Arial",
            "primaryColor": "#111",
            "backgroundColor": "#e9e9e9",
            "heroBannerUrl": "/img/template-hero.png",
        },
        "sections": [
            {"id": "intro", "label": "Intro", "type": "custom_html", "html": "<p>{{customerName}}</p>"},
            {"id": "accept", "label": "Accept", "type": "built_in", "component": "AcceptanceForm"},
        ],
    })


def test_single_override_changes_only_that_key():
    config = _config()
    merged = merge_branding(config, BrandingOverrides(font_family="Roboto"))
    assert merged.global_styles["fontFamily"] == "Roboto"
    rest = {k: v for k, v in merged.global_styles.items() if k != "fontFamily"}
    assert rest == {k: v for k, v in config.global_styles.items() if k != "fontFamily"}
    assert merged.sections == config.sections
    assert merged.version == 3


def test_none_overrides_return_the_input_unchanged():
    config = _config()
    merged = merge_branding(config, None)
    assert merged is config
    assert merged == _config()


def test_absent_and_blank_overrides_keep_template_values():
    merged = merge_branding(_config(), BrandingOverrides(primary_color="", hero_banner_url="   "))
    assert merged.global_styles["primaryColor"] == "#111"
    assert merged.global_styles["heroBannerUrl"] == "/img/template-hero.png"


def test_overrides_can_add_keys_the_template_lacks():
    merged = merge_branding(_config(), BrandingOverrides(logo_url="/logos/acme.png", secondary_color="#fff"))
    assert merged.global_styles["logoUrl"] == "/logos/acme.png"
    assert merged.global_styles["secondaryColor"] == "#fff"


def test_input_config_is_never_mutated():
    config = _config()
    before = copy.deepcopy(config.model_dump())
    merged = merge_branding(
        config,
        BrandingOverrides(font_family="Roboto", primary_color="#f00", footer_image_url="/f.png"),
    )
    merged.sections[0].html = "changed"
    assert config.model_dump() == before
    assert merged.sections[0] is not config.sections[0]


def test_override_values_are_not_validated():
    merged = merge_branding(_config(), BrandingOverrides(primary_color="not-a-colour"))
    assert merged.global_styles["primaryColor"] == "not-a-colour"


def test_assignment_fields_are_not_written_into_styles():
    merged = merge_branding(_config(), BrandingOverrides(assigned_template_id="T1", static_fallback_ref="grace"))
    assert "assignedTemplateId" not in merged.global_styles
    assert "staticFallbackRef" not in merged.global_styles
    assert merged.global_styles == _config().global_styles


def test_malformed_config_passes_through():
    malformed = MalformedConfig(raw="{broken", error="invalid JSON")
    assert merge_branding(malformed, BrandingOverrides(font_family="Roboto")) is malformed


def test_branding_overrides_accept_camel_case_keys():
    overrides = BrandingOverrides.model_validate({"fontFamily": "Roboto", "heroBannerUrl": "/h.png", "unknown": 1})
    assert overrides.style_overrides() == {"fontFamily": "Roboto", "heroBannerUrl": "/h.png"}
