"""Per-company branding overrides layered onto shared quote layouts."""
from __future__ import annotations

from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

# Override field -> globalStyles key written by the branding merge.
STYLE_OVERRIDE_KEYS: dict[str, str] = {
    "font_family": "fontFamily",
    "hero_banner_url": "heroBannerUrl",
    "footer_image_url": "footerImageUrl",
    "logo_url": "logoUrl",
    "primary_color": "primaryColor",
    "secondary_color": "secondaryColor",
}


class BrandingOverrides(BaseModel):
    """
    Company-specific style values plus layout assignment.

    Values are stored exactly as the settings pages wrote them; format checks
    belong to the writer, not to readers of this model.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    font_family: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("font_family", "fontFamily"),
        serialization_alias="fontFamily",
    )
    hero_banner_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("hero_banner_url", "heroBannerUrl"),
        serialization_alias="heroBannerUrl",
    )
    footer_image_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("footer_image_url", "footerImageUrl"),
        serialization_alias="footerImageUrl",
    )
    logo_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("logo_url", "logoUrl"),
        serialization_alias="logoUrl",
    )
    primary_color: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("primary_color", "primaryColor"),
        serialization_alias="primaryColor",
    )
    secondary_color: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("secondary_color", "secondaryColor"),
        serialization_alias="secondaryColor",
    )
    assigned_template_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("assigned_template_id", "assignedTemplateId"),
        serialization_alias="assignedTemplateId",
    )
    # Brand family of the built-in fallback layout this company is entitled to.
    static_fallback_ref: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("static_fallback_ref", "staticFallbackRef"),
        serialization_alias="staticFallbackRef",
    )

    def style_overrides(self) -> dict[str, str]:
        """Non-empty style values keyed by their globalStyles name."""
        out: dict[str, str] = {}
        for field_name, style_key in STYLE_OVERRIDE_KEYS.items():
            value = getattr(self, field_name)
            if value is None:
                continue
            if isinstance(value, str) and not value.strip():
                continue
            out[style_key] = value
        return out
