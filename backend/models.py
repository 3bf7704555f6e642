from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

from models_branding import BrandingOverrides


class SectionType(str, Enum):
    CUSTOM_HTML = "custom_html"
    BUILT_IN = "built_in"


class LayoutSource(str, Enum):
    LAYOUT_TEMPLATE = "layout_template"
    CUSTOM_LAYOUT = "custom_layout"
    STATIC_FALLBACK = "static_fallback"
    DEFAULT_TEMPLATE = "default_template"


class Section(BaseModel):
    """
    One ordered block of a quote layout.

    custom_html sections carry a template string in ``html`` (and optional raw ``css``);
    built_in sections name a host component in ``component``. Either kind may carry a
    free-form ``config`` map.
    """
    model_config = ConfigDict(extra="ignore")

    id: str = Field(min_length=1)
    label: str = ""
    type: SectionType
    visible: bool = True
    html: Optional[str] = None
    css: Optional[str] = None
    component: Optional[str] = None
    config: Optional[Dict[str, Any]] = None

    @model_validator(mode="after")
    def _check_body_matches_type(self) -> "Section":
        if self.type == SectionType.CUSTOM_HTML:
            if self.html is None:
                raise ValueError(f"custom_html section {self.id!r} requires html")
            if self.component is not None:
                raise ValueError(f"custom_html section {self.id!r} must not set component")
        else:
            if not self.component:
                raise ValueError(f"built_in section {self.id!r} requires component")
            if self.html is not None:
                raise ValueError(f"built_in section {self.id!r} must not set html")
        return self


class LayoutConfig(BaseModel):
    """Storable description of a quote page. ``sections`` order is rendering order."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    version: int = Field(default=1, ge=1)
    global_styles: Dict[str, Any] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("global_styles", "globalStyles"),
        serialization_alias="globalStyles",
    )
    sections: List[Section] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_section_ids(self) -> "LayoutConfig":
        seen: set[str] = set()
        for section in self.sections:
            if section.id in seen:
                raise ValueError(f"duplicate section id: {section.id}")
            seen.add(section.id)
        return self


class MalformedConfig(BaseModel):
    """Stored layout value that failed parsing; carried through untouched."""
    malformed: Literal[True] = True
    raw: Any = None
    error: str = ""


class CompanyRecord(BaseModel):
    """Canonical company identity, whichever alias was used to find it."""
    model_config = ConfigDict(populate_by_name=True)

    internal_id: str = Field(
        validation_alias=AliasChoices("internal_id", "internalId", "id"),
        serialization_alias="internalId",
    )
    external_tenant_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("external_tenant_id", "externalTenantId", "tenant_id", "tenantId"),
        serialization_alias="externalTenantId",
    )
    name: str = ""
    brand_code: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("brand_code", "brandCode"),
        serialization_alias="brandCode",
    )


class StoredLayout(BaseModel):
    """A persisted template or custom layout as handed over by the store."""
    id: str
    name: Optional[str] = None
    layout_config: Any = None  # JSON text as stored, or an already-decoded mapping
    version: int = 1
    is_active: bool = True


class ResolvedLayout(BaseModel):
    """Outcome of layout selection for one company identifier."""
    model_config = ConfigDict(populate_by_name=True)

    source: LayoutSource
    config: Union[MalformedConfig, LayoutConfig]
    company_internal_id: Optional[str] = Field(default=None, serialization_alias="companyInternalId")
    template_id: Optional[str] = Field(default=None, serialization_alias="templateId")
    template_name: Optional[str] = Field(default=None, serialization_alias="templateName")
    version: Optional[int] = None
    branding: Optional[BrandingOverrides] = None

    @property
    def is_malformed(self) -> bool:
        return isinstance(self.config, MalformedConfig)


class LayoutNotFound(BaseModel):
    """No template, custom layout, fallback or default matched the identifier."""
    identifier: str
    reason: Literal["no_layout", "store_error"] = "no_layout"
    detail: str = "No layout found for this company"


class RenderedSection(BaseModel):
    id: str
    label: str = ""
    type: SectionType
    html: Optional[str] = None
    css: Optional[str] = None
    component: Optional[str] = None
    props: Optional[Dict[str, Any]] = None


class RenderedLayout(BaseModel):
    """Final per-section output; nothing downstream templates it again."""
    model_config = ConfigDict(populate_by_name=True)

    global_styles: Dict[str, Any] = Field(default_factory=dict, serialization_alias="globalStyles")
    sections: List[RenderedSection] = Field(default_factory=list)


# --- Quote data feeding the render context ---

class QuoteData(BaseModel):
    """Raw job, inventory and costing data for one quote (field names as the job system sends them)."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    job: Dict[str, Any] = Field(default_factory=dict)
    inventory: List[Dict[str, Any]] = Field(default_factory=list)
    costings: List[Dict[str, Any]] = Field(default_factory=list)
    company_name: Optional[str] = Field(default=None, validation_alias=AliasChoices("company_name", "companyName"))
    move_manager: Optional[str] = Field(default=None, validation_alias=AliasChoices("move_manager", "moveManager"))


# --- Request bodies ---

class RenderRequest(BaseModel):
    """Body for POST /api/v1/layouts/{identifier}/render. ``context`` wins over ``quote``."""
    model_config = ConfigDict(populate_by_name=True)

    context: Optional[Dict[str, Any]] = None
    quote: Optional[QuoteData] = None
    inventory_page: int = Field(default=1, ge=1, validation_alias=AliasChoices("inventory_page", "inventoryPage"))


class PreviewRequest(BaseModel):
    """Body for POST /api/v1/layouts/preview."""
    model_config = ConfigDict(populate_by_name=True)

    layout_config: LayoutConfig = Field(validation_alias=AliasChoices("layout_config", "layoutConfig"))
    branding: Optional[BrandingOverrides] = None
    context: Optional[Dict[str, Any]] = None
    quote: Optional[QuoteData] = None
    inventory_page: int = Field(default=1, ge=1, validation_alias=AliasChoices("inventory_page", "inventoryPage"))
