"""Consistent formatting for quote amounts, volumes and dates. Never render raw floats."""
from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

_DATE_FORMATS = ("%Y-%m-%d", "%d/%m/%Y", "%d.%m.%Y", "%Y/%m/%d", "%d-%m-%Y")


def to_number(value: Any, default: float = 0.0) -> float:
    if value is None or isinstance(value, bool):
        return default
    try:
        return float(str(value).replace(",", "").strip() or default)
    except (TypeError, ValueError):
        return default


def format_amount(value: Any, precision: int = 2) -> str:
    """Fixed decimals, no grouping: 2675 -> "2675.00"."""
    return f"{to_number(value):.{precision}f}"


def format_quantity(value: Any) -> str:
    qty = to_number(value, 0.0)
    if qty <= 0:
        qty = 1
    return str(int(qty)) if float(qty).is_integer() else f"{qty:g}"


def parse_date(d: Any) -> Optional[date]:
    if d is None:
        return None
    if isinstance(d, datetime):
        return d.date()
    if isinstance(d, date):
        return d
    text = str(d).strip()
    if not text:
        return None
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text[:10], fmt).date()
        except ValueError:
            continue
    return None


def format_date(d: Any) -> str:
    """DD/MM/YYYY; unparseable text is returned as given."""
    parsed = parse_date(d)
    if parsed is None:
        return "" if d is None else str(d).strip()
    return parsed.strftime("%d/%m/%Y")


def format_date_long(d: date) -> str:
    """Wednesday, February 18, 2026"""
    return f"{d:%A}, {d:%B} {d.day}, {d.year}"


def format_date_full(d: date) -> str:
    """Wednesday, 18 February 2026"""
    return f"{d:%A}, {d.day} {d:%B} {d.year}"


def format_date_medium(d: date) -> str:
    """18 Feb 2026"""
    return f"{d.day} {d:%b} {d.year}"
