"""
Layout selection for a company identifier.

Precedence, first match wins:
  1. active template assigned through branding settings   -> layout_template
  2. active company custom layout                          -> custom_layout
  3. built-in fallback for an eligible brand family        -> static_fallback
  4. active global default template                        -> default_template
Store errors on any step are logged and treated as "absent".
"""
from __future__ import annotations

import json
import logging
from typing import Any, Optional, Union

from pydantic import ValidationError

from engine.identifier import normalize_identifier, resolve_company
from fallback_layouts import get_fallback_layout, legacy_matching_enabled, match_legacy_family
from layout_store import LayoutStore, StoreError
from models import (
    CompanyRecord,
    LayoutConfig,
    LayoutNotFound,
    LayoutSource,
    MalformedConfig,
    ResolvedLayout,
    StoredLayout,
)
from models_branding import BrandingOverrides

logger = logging.getLogger(__name__)


def parse_layout_config(raw: Any) -> Union[LayoutConfig, MalformedConfig]:
    """Decode a stored layout value. Anything that does not validate comes back as MalformedConfig."""
    if isinstance(raw, LayoutConfig):
        return raw
    data = raw
    if isinstance(raw, (str, bytes)):
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return MalformedConfig(raw=raw, error=f"invalid JSON: {e}")
    if not isinstance(data, dict):
        return MalformedConfig(raw=raw, error=f"expected an object, got {type(data).__name__}")
    try:
        return LayoutConfig.model_validate(data)
    except ValidationError as e:
        return MalformedConfig(raw=raw, error=str(e))


def _resolved(
    source: LayoutSource,
    stored: StoredLayout,
    company: Optional[CompanyRecord],
    branding: Optional[BrandingOverrides],
) -> ResolvedLayout:
    config = parse_layout_config(stored.layout_config)
    if isinstance(config, MalformedConfig):
        logger.warning(
            "malformed_layout source=%s id=%s company=%s err=%s",
            source.value,
            stored.id,
            company.internal_id if company else None,
            config.error[:300],
        )
    is_template = source in (LayoutSource.LAYOUT_TEMPLATE, LayoutSource.DEFAULT_TEMPLATE)
    return ResolvedLayout(
        source=source,
        config=config,
        company_internal_id=company.internal_id if company else None,
        template_id=stored.id if is_template else None,
        template_name=stored.name if is_template else None,
        version=stored.version,
        branding=branding,
    )


def fallback_family(
    company: Optional[CompanyRecord],
    branding: Optional[BrandingOverrides],
    raw_identifier: str,
) -> Optional[str]:
    """
    Brand family of the built-in layout this company may fall back to.

    The branding record's ``static_fallback_ref`` is authoritative. The legacy
    tenant/brand-code/name rules apply only while LEGACY_FALLBACK_MATCHING is on;
    the raw identifier is consulted only when no company was resolved.
    """
    ref = (branding.static_fallback_ref or "").strip() if branding else ""
    if ref:
        if get_fallback_layout(ref) is not None:
            return ref.lower()
        logger.warning(
            "unknown_fallback_ref ref=%s company=%s",
            ref,
            company.internal_id if company else None,
        )
    if not legacy_matching_enabled():
        return None
    return match_legacy_family(company, "" if company is not None else raw_identifier)


def resolve_layout(store: LayoutStore, identifier: object) -> Union[ResolvedLayout, LayoutNotFound]:
    key = normalize_identifier(identifier)
    if not key:
        return LayoutNotFound(identifier="", detail="Company ID is required")

    store_failed = False

    try:
        company = resolve_company(store, key)
    except StoreError as e:
        logger.warning("store_error step=company identifier=%s err=%s", key, e)
        company = None
        store_failed = True

    # One branding read per call; every later decision uses this snapshot.
    branding: Optional[BrandingOverrides] = None
    if company is not None:
        try:
            branding = store.get_branding_overrides(company.internal_id)
        except StoreError as e:
            logger.warning("store_error step=branding company=%s err=%s", company.internal_id, e)
            store_failed = True

        if branding is not None and branding.assigned_template_id:
            try:
                template = store.get_active_template(branding.assigned_template_id)
            except StoreError as e:
                logger.warning(
                    "store_error step=template company=%s template=%s err=%s",
                    company.internal_id,
                    branding.assigned_template_id,
                    e,
                )
                template = None
                store_failed = True
            if template is not None:
                return _resolved(LayoutSource.LAYOUT_TEMPLATE, template, company, branding)

        try:
            custom = store.get_active_custom_layout(company.internal_id)
        except StoreError as e:
            logger.warning("store_error step=custom_layout company=%s err=%s", company.internal_id, e)
            custom = None
            store_failed = True
        if custom is not None:
            return _resolved(LayoutSource.CUSTOM_LAYOUT, custom, company, branding)

    family = fallback_family(company, branding, key)
    if family is not None:
        config = get_fallback_layout(family)
        if config is not None:
            return ResolvedLayout(
                source=LayoutSource.STATIC_FALLBACK,
                config=config.model_copy(deep=True),
                company_internal_id=company.internal_id if company else None,
                template_name=family,
                version=config.version,
                branding=branding,
            )

    try:
        default = store.get_default_template()
    except StoreError as e:
        logger.warning("store_error step=default_template identifier=%s err=%s", key, e)
        default = None
        store_failed = True
    if default is not None:
        return _resolved(LayoutSource.DEFAULT_TEMPLATE, default, company, branding)

    if store_failed:
        return LayoutNotFound(
            identifier=key,
            reason="store_error",
            detail="No layout could be loaded for this company",
        )
    return LayoutNotFound(identifier=key)
