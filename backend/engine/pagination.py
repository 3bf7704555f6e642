from __future__ import annotations

import os
from dataclasses import asdict, dataclass
from typing import Any, Sequence

DEFAULT_PAGE_SIZE = int(os.environ.get("INVENTORY_PAGE_SIZE", "10") or 10)
SHOW_ALL = -1


@dataclass(frozen=True)
class PageState:
    """Derived view of one page of a list; 1-based item and page numbers."""
    from_item: int
    to_item: int
    total: int
    current_page: int
    total_pages: int
    page_size: int
    has_previous: bool
    has_next: bool

    @property
    def start_index(self) -> int:
        return max(self.from_item - 1, 0)

    def slice(self, items: Sequence[Any]) -> list[Any]:
        if self.total == 0:
            return []
        return list(items[self.start_index:self.to_item])

    def as_props(self) -> dict[str, Any]:
        d = asdict(self)
        return {
            "from": d["from_item"],
            "to": d["to_item"],
            "total": d["total"],
            "currentPage": d["current_page"],
            "totalPages": d["total_pages"],
            "pageSize": d["page_size"],
            "hasPrevious": d["has_previous"],
            "hasNext": d["has_next"],
        }


def paginate(total_items: int, page: int = 1, page_size: int | None = None) -> PageState:
    """
    Page state for ``total_items`` items. ``page_size`` of -1 shows everything on one
    page; ``page`` is clamped into [1, total_pages]. No items gives page 1 of 1, 0-0 of 0.
    """
    total = max(int(total_items or 0), 0)
    try:
        size = DEFAULT_PAGE_SIZE if page_size is None else int(page_size)
    except (TypeError, ValueError, OverflowError):
        size = DEFAULT_PAGE_SIZE
    if size == SHOW_ALL or size <= 0:
        size = max(total, 1)
    total_pages = max((total + size - 1) // size, 1)
    try:
        current = int(page)
    except (TypeError, ValueError, OverflowError):
        current = 1
    current = min(max(current, 1), total_pages)
    if total == 0:
        return PageState(0, 0, 0, 1, 1, size, False, False)
    from_item = (current - 1) * size + 1
    to_item = min(current * size, total)
    return PageState(
        from_item=from_item,
        to_item=to_item,
        total=total,
        current_page=current,
        total_pages=total_pages,
        page_size=size,
        has_previous=current > 1,
        has_next=current < total_pages,
    )
