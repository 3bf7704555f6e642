"""
Layout API: resolve, render and preview quote layouts; promote a company layout to a shared template.
"""
from __future__ import annotations

import logging
from typing import Any, Optional, Union

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from db.session import get_db
from engine.branding import merge_branding
from engine.identifier import resolve_company
from engine.renderer import render_layout
from engine.selector import fallback_family, parse_layout_config, resolve_layout
from fallback_layouts import get_fallback_layout
from layout_store import LayoutStore, SqlLayoutStore, StoreError
from models import (
    LayoutConfig,
    LayoutNotFound,
    MalformedConfig,
    PreviewRequest,
    QuoteData,
    RenderRequest,
    RenderedLayout,
    ResolvedLayout,
)
from reporting.quote_context import SAMPLE_QUOTE, build_quote_context

router = APIRouter(prefix="/api/v1", tags=["layouts"])

_LOG = logging.getLogger("uvicorn.error")


def get_layout_store(db: Session = Depends(get_db)) -> LayoutStore:
    return SqlLayoutStore(db)


class PromoteRequest(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None


def _resolve_or_404(store: LayoutStore, identifier: str) -> ResolvedLayout:
    result = resolve_layout(store, identifier)
    if isinstance(result, LayoutNotFound):
        status = 400 if not result.identifier else 404
        raise HTTPException(status_code=status, detail=result.detail)
    return result


def _config_payload(config: Union[LayoutConfig, MalformedConfig]) -> Any:
    if isinstance(config, MalformedConfig):
        return config.raw
    return config.model_dump(mode="json", by_alias=True, exclude_none=True)


def _rendered_payload(rendered: RenderedLayout) -> dict[str, Any]:
    return rendered.model_dump(mode="json", by_alias=True, exclude_none=True)


@router.get("/layouts/{identifier}")
def get_layout(identifier: str, store: LayoutStore = Depends(get_layout_store)):
    """Layout governing this company's quote page, with its branding merged in."""
    resolved = _resolve_or_404(store, identifier)
    merged = merge_branding(resolved.config, resolved.branding)
    return {
        "companyId": resolved.company_internal_id,
        "source": resolved.source.value,
        "templateId": resolved.template_id,
        "templateName": resolved.template_name,
        "version": resolved.version,
        "malformed": resolved.is_malformed,
        "layoutConfig": _config_payload(merged),
    }


@router.post("/layouts/preview")
def preview_layout(req: PreviewRequest):
    """Render an unsaved layout against the given context, or the sample quote."""
    merged = merge_branding(req.layout_config, req.branding)
    if req.context is not None:
        context = req.context
    else:
        context = build_quote_context(
            req.quote or SAMPLE_QUOTE,
            req.branding,
            inventory_page=req.inventory_page,
            styles=merged.global_styles,
        )
    return _rendered_payload(render_layout(merged, context))


@router.post("/layouts/{identifier}/render")
def render_company_layout(
    identifier: str,
    req: Optional[RenderRequest] = None,
    store: LayoutStore = Depends(get_layout_store),
):
    req = req or RenderRequest()
    resolved = _resolve_or_404(store, identifier)
    merged = merge_branding(resolved.config, resolved.branding)
    if isinstance(merged, MalformedConfig):
        _LOG.warning(
            "LAYOUT_RENDER_ERR identifier=%s source=%s malformed=true",
            identifier,
            resolved.source.value,
        )
        raise HTTPException(status_code=422, detail=f"Stored layout is malformed: {merged.error[:300]}")
    if req.context is not None:
        context = req.context
    else:
        context = build_quote_context(
            req.quote or QuoteData(),
            resolved.branding,
            inventory_page=req.inventory_page,
            styles=merged.global_styles,
        )
    payload = _rendered_payload(render_layout(merged, context))
    payload.update({
        "companyId": resolved.company_internal_id,
        "source": resolved.source.value,
        "version": resolved.version,
    })
    return payload


@router.post("/layouts/{identifier}/promote")
def promote_layout(
    identifier: str,
    req: PromoteRequest,
    store: LayoutStore = Depends(get_layout_store),
):
    """Copy the company's custom layout (or its built-in fallback) into a new shared template."""
    if not isinstance(store, SqlLayoutStore):
        raise HTTPException(status_code=501, detail="Layout store is read-only")
    try:
        company = resolve_company(store, identifier)
        if company is None:
            raise HTTPException(status_code=404, detail="Company not found")
        custom = store.get_active_custom_layout(company.internal_id)
        if custom is not None:
            source_config: Any = parse_layout_config(custom.layout_config)
        else:
            branding = store.get_branding_overrides(company.internal_id)
            source_config = get_fallback_layout(fallback_family(company, branding, identifier))
        if source_config is None:
            raise HTTPException(status_code=404, detail="No layout found for this company to promote")
        if isinstance(source_config, MalformedConfig):
            raise HTTPException(status_code=422, detail=f"Stored layout is malformed: {source_config.error[:300]}")
        row = store.save_template(source_config, name=req.name.strip(), description=req.description)
    except StoreError as e:
        _LOG.warning("LAYOUT_PROMOTE_ERR identifier=%s err=%s", identifier, e)
        raise HTTPException(status_code=503, detail="Layout store unavailable") from e
    return {
        "id": row.id,
        "name": row.name,
        "description": row.description,
        "version": row.version,
        "isActive": row.is_active,
        "isDefault": row.is_default,
        "layoutConfig": source_config.model_dump(mode="json", by_alias=True, exclude_none=True),
    }
