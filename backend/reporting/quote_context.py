"""
Build the render context for a quote page from raw job, inventory and costing data.

Keys produced here are the placeholders the shipped layouts use ({{customerName}},
{{job.upliftCity}}, {{#each costings}} ...). Free-text values are left as given;
escaping is the renderer's job.
"""
from __future__ import annotations

import os
from datetime import date, timedelta
from typing import Any, Mapping, Optional

from engine.pagination import paginate
from models import QuoteData
from models_branding import BrandingOverrides
from reporting.format_utils import (
    format_amount,
    format_date,
    format_date_full,
    format_date_long,
    format_date_medium,
    format_quantity,
    to_number,
)

QUOTE_EXPIRY_DAYS = int(os.environ.get("QUOTE_EXPIRY_DAYS", "30") or 30)
DEFAULT_PRIMARY_COLOR = "#dc2626"


def customer_name(job: dict[str, Any]) -> str:
    parts = (job.get("titleName"), job.get("firstName"), job.get("lastName"))
    return " ".join(str(p).strip() for p in parts if p is not None and str(p).strip())


def inventory_rows(items: list[dict[str, Any]]) -> list[dict[str, Any]]:
    rows = []
    for item in items:
        rows.append({
            **item,
            "description": item.get("description") or "",
            "room": item.get("room") or "",
            "quantity": format_quantity(item.get("quantity")),
            "cube": format_amount(item.get("cube")),
            "typeCode": item.get("typeCode") or "N/A",
        })
    return rows


def costing_rows(items: list[dict[str, Any]]) -> list[dict[str, Any]]:
    rows = []
    for item in items:
        net_total = item.get("netTotal")
        rows.append({
            **item,
            "id": item.get("id") or "",
            "name": item.get("name") or "",
            "description": item.get("description") or "",
            "quantity": format_quantity(item.get("quantity")),
            "rate": format_amount(item.get("rate")),
            "netTotal": format_amount(net_total) if net_total not in (None, "") else "N/A",
            "totalPrice": format_amount(item.get("totalPrice")),
        })
    return rows


def total_cube(job: dict[str, Any], items: list[dict[str, Any]]) -> float:
    """Gross volume from the job when present, else the sum of line volumes."""
    gross = job.get("measuresVolumeGrossM3")
    if gross not in (None, ""):
        return to_number(gross)
    return sum(to_number(i.get("cube")) for i in items)


def _branding_block(
    quote: QuoteData,
    branding: Optional[BrandingOverrides],
    styles: Optional[Mapping[str, Any]] = None,
) -> dict[str, Any]:
    """Overrides first, then the job's own branding, then the layout's globalStyles."""
    job_branding = quote.job.get("branding") if isinstance(quote.job.get("branding"), dict) else {}
    overrides = branding.style_overrides() if branding else {}
    styles = styles or {}

    def pick(key: str, default: str = "") -> Any:
        return overrides.get(key) or job_branding.get(key) or styles.get(key) or default

    company_name = quote.company_name or job_branding.get("companyName") or ""
    return {
        "companyName": company_name,
        "logoUrl": pick("logoUrl"),
        "heroBannerUrl": pick("heroBannerUrl"),
        "footerImageUrl": pick("footerImageUrl"),
        "primaryColor": pick("primaryColor", DEFAULT_PRIMARY_COLOR),
        "secondaryColor": pick("secondaryColor"),
        "fontFamily": pick("fontFamily"),
    }


def build_quote_context(
    quote: QuoteData,
    branding: Optional[BrandingOverrides] = None,
    today: Optional[date] = None,
    inventory_page: int = 1,
    page_size: Optional[int] = None,
    styles: Optional[Mapping[str, Any]] = None,
) -> dict[str, Any]:
    """``styles`` is the resolved layout's globalStyles, used where no branding value is set."""
    quote_day = today or date.today()
    expiry_day = quote_day + timedelta(days=QUOTE_EXPIRY_DAYS)
    job = dict(quote.job)
    inventory = inventory_rows(quote.inventory)
    costings = costing_rows(quote.costings)
    page = paginate(len(inventory), inventory_page, page_size)
    brand = _branding_block(quote, branding, styles)

    if job.get("jobValue") not in (None, ""):
        job["jobValue"] = format_amount(job["jobValue"])
    if job.get("measuresVolumeGrossM3") not in (None, ""):
        job["measuresVolumeGrossM3"] = format_amount(job["measuresVolumeGrossM3"])
    if job.get("estimatedDeliveryDetails"):
        job["estimatedDeliveryDetails"] = format_date(job["estimatedDeliveryDetails"])

    return {
        "job": job,
        "branding": brand,
        "customerName": customer_name(job),
        "companyName": brand["companyName"],
        "moveManager": quote.move_manager or job.get("moveManager") or "",
        "primaryColor": brand["primaryColor"],
        "quoteDate": format_date(quote_day),
        "quoteDateLong": format_date_long(quote_day),
        "quoteDateFull": format_date_full(quote_day),
        "quoteDateMedium": format_date_medium(quote_day),
        "expiryDate": format_date(expiry_day),
        "expiryDateLong": format_date_long(expiry_day),
        "expiryDateFull": format_date_full(expiry_day),
        "expiryDateMedium": format_date_medium(expiry_day),
        "copyrightYear": quote_day.year,
        "totalCube": format_amount(total_cube(quote.job, quote.inventory)),
        "inventory": inventory,
        "costings": costings,
        "inventoryPage": page.slice(inventory),
        "inventoryFrom": page.from_item,
        "inventoryTo": page.to_item,
        "inventoryTotal": page.total,
        "inventoryCurrentPage": page.current_page,
        "inventoryTotalPages": page.total_pages,
        "inventoryPreviousPage": page.current_page - 1 if page.has_previous else page.current_page,
        "inventoryNextPage": page.current_page + 1 if page.has_next else page.current_page,
    }


SAMPLE_QUOTE = QuoteData(
    job={
        "id": "111505",
        "titleName": "Mr",
        "firstName": "Leigh",
        "lastName": "Morrow",
        "estimatedDeliveryDetails": "27/02/2026",
        "jobValue": 2675.0,
        "brandCode": "gracenz",
        "branchCode": "AKL",
        "upliftLine1": "3 Spring Water Crescent",
        "upliftLine2": "",
        "upliftCity": "Cranbourne",
        "upliftState": "VIC",
        "upliftPostcode": "3977",
        "upliftCountry": "Australia",
        "deliveryLine1": "12 Cato Street",
        "deliveryLine2": "",
        "deliveryCity": "Hawthorn East",
        "deliveryState": "VIC",
        "deliveryPostcode": "3123",
        "deliveryCountry": "Australia",
        "measuresVolumeGrossM3": 11.85,
        "measuresWeightGrossKg": 70,
    },
    company_name="Crown Worldwide Group",
    move_manager="Sarah Johnson",
    inventory=[
        {"description": "Bed, King", "room": "Master Bedroom", "quantity": 1, "cube": 2.14, "typeCode": "FUR"},
        {"description": "Bed, Single", "room": "Bedroom 2", "quantity": 1, "cube": 0.71, "typeCode": "FUR"},
        {"description": "Bedside Table", "room": "Master Bedroom", "quantity": 2, "cube": 0.14, "typeCode": "FUR"},
        {"description": "Bench", "room": "Outdoor", "quantity": 1, "cube": 0.85, "typeCode": "FUR"},
        {"description": "Bookcase, Large", "room": "Study", "quantity": 1, "cube": 1.14, "typeCode": "FUR"},
        {"description": "Cabinet", "room": "Living Room", "quantity": 1, "cube": 1.0, "typeCode": "FUR"},
        {"description": "Carton Bike", "room": "Garage", "quantity": 1, "cube": 0.3, "typeCode": "CTN"},
        {"description": "Chair, Dining", "room": "Dining Room", "quantity": 4, "cube": 0.14, "typeCode": "FUR"},
        {"description": "Chair, Kitchen", "room": "Kitchen", "quantity": 2, "cube": 0.14, "typeCode": "FUR"},
        {"description": "Chest of Drawers", "room": "Bedroom 2", "quantity": 1, "cube": 0.71, "typeCode": "FUR"},
        {"description": "Coffee Table", "room": "Living Room", "quantity": 1, "cube": 0.42, "typeCode": "FUR"},
        {"description": "Desk", "room": "Study", "quantity": 1, "cube": 0.85, "typeCode": "FUR"},
        {"description": "Dining Table", "room": "Dining Room", "quantity": 1, "cube": 1.42, "typeCode": "FUR"},
        {"description": "Fridge/Freezer", "room": "Kitchen", "quantity": 1, "cube": 1.7, "typeCode": "APP"},
        {"description": "Microwave", "room": "Kitchen", "quantity": 1, "cube": 0.14, "typeCode": "APP"},
    ],
    costings=[
        {
            "id": "MOVE001",
            "name": "Standard Domestic Move",
            "description": (
                "Full-service domestic move from Cranbourne to Hawthorn East. Includes professional "
                "packing, loading, transport, unloading, and placement at your new home."
            ),
            "quantity": 1,
            "rate": 2675.0,
            "netTotal": 2436.36,
            "totalPrice": 2675.0,
            "taxIncluded": True,
        },
    ],
)
