"""Quote layout built only from host components; mirrors the page shown when nothing else is configured."""
from __future__ import annotations

DEFAULT_STATIC_LAYOUT: dict = {
    "version": 1,
    "globalStyles": {
        "fontFamily": "Inter, sans-serif",
        "backgroundColor": "#f9fafb",
        "maxWidth": "1152px",
    },
    "sections": [
        {"id": "default-header", "label": "Header", "type": "built_in", "visible": True, "component": "HeaderSection"},
        {"id": "default-intro", "label": "Introduction", "type": "built_in", "visible": True, "component": "IntroSection"},
        {"id": "default-locations", "label": "Moving Locations", "type": "built_in", "visible": True, "component": "LocationInfo"},
        {"id": "default-pricing", "label": "Pricing Options", "type": "built_in", "visible": True, "component": "EstimateCard"},
        {
            "id": "default-inventory",
            "label": "Included Items",
            "type": "built_in",
            "visible": True,
            "component": "InventoryTable",
            "config": {"title": "Included items", "totalCube": "{{totalCube}}"},
        },
        {"id": "default-acceptance", "label": "Accept Quote", "type": "built_in", "visible": True, "component": "AcceptanceForm"},
        {"id": "default-terms", "label": "Terms & Conditions", "type": "built_in", "visible": True, "component": "TermsSection"},
    ],
}
