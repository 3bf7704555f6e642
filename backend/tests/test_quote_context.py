"""Render context built from raw job, inventory and costing data."""
from datetime import date

from engine.renderer import render_layout
from fallback_layouts import FALLBACK_LAYOUTS
from models import QuoteData
from models_branding import BrandingOverrides
from reporting.format_utils import format_amount, format_date, parse_date
from reporting.quote_context import SAMPLE_QUOTE, build_quote_context

QUOTE_DAY = date(2026, 2, 18)


def _quote(**overrides) -> QuoteData:
    data = {
        "job": {"id": "9001", "titleName": "Ms", "firstName": "Ana", "lastName": "Lopez", "upliftCity": "Cairns"},
        "inventory": [
            {"description": "Sofa", "room": "Lounge", "quantity": 1, "cube": 1.5},
            {"description": "<b>Piano</b>", "room": "", "quantity": 0, "cube": 2.25, "typeCode": "PNO"},
        ],
        "costings": [{"id": "OPT1", "name": "Option 1", "rate": 2675, "totalPrice": "2675", "quantity": None}],
        "companyName": "Harbour Movers",
        "moveManager": "Sarah Johnson",
    }
    data.update(overrides)
    return QuoteData.model_validate(data)


def test_customer_and_company_fields():
    ctx = build_quote_context(_quote(), today=QUOTE_DAY)
    assert ctx["customerName"] == "Ms Ana Lopez"
    assert ctx["companyName"] == "Harbour Movers"
    assert ctx["branding"]["companyName"] == "Harbour Movers"
    assert ctx["moveManager"] == "Sarah Johnson"


def test_customer_name_skips_blank_parts():
    ctx = build_quote_context(_quote(job={"firstName": "Ana", "titleName": " "}), today=QUOTE_DAY)
    assert ctx["customerName"] == "Ana"


def test_quote_and_expiry_dates():
    ctx = build_quote_context(_quote(), today=QUOTE_DAY)
    assert ctx["quoteDate"] == "18/02/2026"
    assert ctx["quoteDateLong"] == "Wednesday, February 18, 2026"
    assert ctx["quoteDateFull"] == "Wednesday, 18 February 2026"
    assert ctx["quoteDateMedium"] == "18 Feb 2026"
    assert ctx["expiryDate"] == "20/03/2026"
    assert ctx["expiryDateLong"] == "Friday, March 20, 2026"
    assert ctx["copyrightYear"] == 2026


def test_inventory_rows_are_formatted():
    rows = build_quote_context(_quote(), today=QUOTE_DAY)["inventory"]
    assert rows[0]["cube"] == "1.50"
    assert rows[0]["quantity"] == "1"
    assert rows[0]["typeCode"] == "N/A"
    assert rows[1]["quantity"] == "1"
    assert rows[1]["typeCode"] == "PNO"
    # Free text stays raw; the renderer escapes it.
    assert rows[1]["description"] == "<b>Piano</b>"


def test_costing_rows_are_formatted():
    row = build_quote_context(_quote(), today=QUOTE_DAY)["costings"][0]
    assert row["rate"] == "2675.00"
    assert row["totalPrice"] == "2675.00"
    assert row["netTotal"] == "N/A"
    assert row["quantity"] == "1"
    assert row["description"] == ""


def test_total_cube_prefers_job_gross_volume():
    assert build_quote_context(_quote(), today=QUOTE_DAY)["totalCube"] == "3.75"
    job = {"id": "1", "measuresVolumeGrossM3": 11.85}
    assert build_quote_context(_quote(job=job), today=QUOTE_DAY)["totalCube"] == "11.85"


def test_inventory_pagination_fields():
    inventory = [{"description": f"Item {i}", "cube": 0.1} for i in range(15)]
    ctx = build_quote_context(_quote(inventory=inventory), today=QUOTE_DAY, inventory_page=2, page_size=10)
    assert (ctx["inventoryFrom"], ctx["inventoryTo"], ctx["inventoryTotal"]) == (11, 15, 15)
    assert (ctx["inventoryCurrentPage"], ctx["inventoryTotalPages"]) == (2, 2)
    assert ctx["inventoryPreviousPage"] == 1
    assert ctx["inventoryNextPage"] == 2
    assert [r["description"] for r in ctx["inventoryPage"]] == [f"Item {i}" for i in range(10, 15)]
    assert len(ctx["inventory"]) == 15


def test_branding_overrides_feed_the_branding_block():
    overrides = BrandingOverrides(logo_url="/logos/h.png", primary_color="#0a0", hero_banner_url="")
    ctx = build_quote_context(_quote(), overrides, today=QUOTE_DAY)
    assert ctx["branding"]["logoUrl"] == "/logos/h.png"
    assert ctx["branding"]["primaryColor"] == "#0a0"
    assert ctx["primaryColor"] == "#0a0"
    assert ctx["branding"]["heroBannerUrl"] == ""


def test_layout_styles_fill_branding_gaps():
    styles = {"heroBannerUrl": "/banners/default.png", "primaryColor": "#123456", "logoUrl": "/logos/t.png"}
    overrides = BrandingOverrides(logo_url="/logos/own.png")
    ctx = build_quote_context(_quote(), overrides, today=QUOTE_DAY, styles=styles)
    assert ctx["branding"]["heroBannerUrl"] == "/banners/default.png"
    assert ctx["branding"]["primaryColor"] == "#123456"
    assert ctx["branding"]["logoUrl"] == "/logos/own.png"
    assert ctx["branding"]["footerImageUrl"] == ""


def test_job_values_are_formatted():
    job = {"jobValue": 2675, "estimatedDeliveryDetails": "2026-02-27"}
    ctx = build_quote_context(_quote(job=job), today=QUOTE_DAY)
    assert ctx["job"]["jobValue"] == "2675.00"
    assert ctx["job"]["estimatedDeliveryDetails"] == "27/02/2026"


def test_format_helpers():
    assert format_amount(None) == "0.00"
    assert format_amount("1,234.5") == "1234.50"
    assert format_date("27/02/2026") == "27/02/2026"
    assert format_date("next week") == "next week"
    assert parse_date("") is None


def test_grace_layout_renders_the_sample_quote():
    ctx = build_quote_context(SAMPLE_QUOTE, today=QUOTE_DAY)
    sections = {s.id: s for s in render_layout(FALLBACK_LAYOUTS["grace"], ctx).sections}
    assert "Hi Mr Leigh Morrow" in sections["grace-header"].html
    assert "18/02/2026" in sections["grace-header"].html
    assert "Standard Domestic Move" in sections["grace-pricing"].html
    assert "$2675.00" in sections["grace-pricing"].html
    assert sections["grace-inventory"].html.count("<td style=\"padding:12px 16px;\">Bed, King</td>") == 1
    assert "Showing 1–10 of 15 items" in sections["grace-inventory"].html
    assert "11.85 m³" in sections["grace-inventory"].html
    assert "max-height: 500px" in sections["grace-hero"].html
    assert sections["grace-acceptance"].component == "AcceptanceForm"
