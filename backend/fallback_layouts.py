"""In-repo registry of built-in fallback quote layouts, keyed by brand family."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from layouts.default_static import DEFAULT_STATIC_LAYOUT
from layouts.grace_static import GRACE_STATIC_LAYOUT
from models import CompanyRecord, LayoutConfig

if TYPE_CHECKING:
    from layout_store import SqlLayoutStore

FALLBACK_LAYOUTS: dict[str, LayoutConfig] = {
    "grace": LayoutConfig.model_validate(GRACE_STATIC_LAYOUT),
    "default": LayoutConfig.model_validate(DEFAULT_STATIC_LAYOUT),
}


@dataclass(frozen=True)
class LegacyFallbackRule:
    """Hard-coded eligibility heuristic kept to seed ``static_fallback_ref``."""
    family: str
    tenant_ids: tuple[str, ...] = ()
    brand_code_substrings: tuple[str, ...] = ()
    name_substrings: tuple[str, ...] = ()

    def matches(self, company: Optional[CompanyRecord], raw_identifier: str = "") -> bool:
        raw = (raw_identifier or "").strip()
        if raw and raw in self.tenant_ids:
            return True
        if company is None:
            return False
        if company.external_tenant_id and company.external_tenant_id in self.tenant_ids:
            return True
        brand_code = (company.brand_code or "").lower()
        if brand_code and any(s in brand_code for s in self.brand_code_substrings):
            return True
        name = (company.name or "").lower()
        return bool(name) and any(s in name for s in self.name_substrings)


LEGACY_FALLBACK_RULES: list[LegacyFallbackRule] = [
    LegacyFallbackRule(
        family="grace",
        tenant_ids=("555",),
        brand_code_substrings=("grace",),
        name_substrings=("grace",),
    ),
]


def legacy_matching_enabled() -> bool:
    return (os.environ.get("LEGACY_FALLBACK_MATCHING", "1") or "").strip().lower() not in ("0", "false", "no", "off")


def get_fallback_layout(family: str | None) -> LayoutConfig | None:
    if not family:
        return None
    return FALLBACK_LAYOUTS.get(family.strip().lower())


def list_fallback_layouts() -> list[dict]:
    return [
        {"family": family, "layoutConfig": config.model_dump(mode="json", by_alias=True, exclude_none=True)}
        for family, config in FALLBACK_LAYOUTS.items()
    ]


def match_legacy_family(company: Optional[CompanyRecord], raw_identifier: str = "") -> str | None:
    """First brand family whose legacy rule matches the company or the unresolved identifier."""
    for rule in LEGACY_FALLBACK_RULES:
        if rule.matches(company, raw_identifier):
            return rule.family
    return None


def backfill_static_fallback_refs(store: SqlLayoutStore, dry_run: bool = False) -> list[tuple[str, str]]:
    """
    Write ``static_fallback_ref`` for every company the legacy rules match and that has no
    ref yet. Returns (company_id, family) pairs; nothing is written when ``dry_run``.
    """
    updated: list[tuple[str, str]] = []
    for company in store.list_companies():
        branding = store.get_branding_overrides(company.internal_id)
        if branding is not None and (branding.static_fallback_ref or "").strip():
            continue
        family = match_legacy_family(company)
        if family is None:
            continue
        if not dry_run:
            store.set_static_fallback_ref(company.internal_id, family)
        updated.append((company.internal_id, family))
    return updated
