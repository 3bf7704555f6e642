"""Company lookup by internal id or external tenant id."""
from __future__ import annotations

from typing import Optional

from layout_store import LayoutStore
from models import CompanyRecord


def normalize_identifier(identifier: object) -> str:
    if identifier is None:
        return ""
    return str(identifier).strip()


def resolve_company(store: LayoutStore, identifier: object) -> Optional[CompanyRecord]:
    """
    Internal id first (primary-key lookup), then external tenant id.
    Both paths return the same CompanyRecord shape. Store errors propagate.
    """
    key = normalize_identifier(identifier)
    if not key:
        return None
    company = store.get_company_by_internal_id(key)
    if company is not None:
        return company
    return store.get_company_by_tenant_id(key)
