"""
Hand-authored quote layout for the Grace brand family.

Every block is plain section data; placeholders such as {{customerName}} or
{{job.upliftCity}} are filled by the template renderer at render time.
"""
from __future__ import annotations

_FULL_BLEED = "width:100vw;position:relative;left:50%;right:50%;margin-left:-50vw;margin-right:-50vw;"
_CARD_WRAP = "max-width:980px;margin:0 auto;padding:0 32px;"
_CARD = "background:#ffffff;border:1px solid #e9e9e9;border-radius:20px;"
_HEADING = "font-size:22px;font-weight:700;margin:0;padding-bottom:16px;border-bottom:1px solid #e0e0e0;"
_BANNER_CONFIG = {"desktopMaxHeight": 500, "tabletMaxHeight": 350, "mobileMaxHeight": 250}


def _banner_html(css_class: str, url_path: str, alt_suffix: str, fallback_src: str) -> str:
    return f"""<style>
  .{css_class} {{ width: 100%; height: auto; display: block; max-height: {{{{config.desktopMaxHeight}}}}px; object-fit: cover; object-position: center; }}
  @media (max-width: 1024px) {{ .{css_class} {{ max-height: {{{{config.tabletMaxHeight}}}}px; }} }}
  @media (max-width: 640px) {{ .{css_class} {{ max-height: {{{{config.mobileMaxHeight}}}}px; }} }}
</style>
<div style="{_FULL_BLEED}overflow:hidden;">
  <img src="{{{{{url_path}}}}}" alt="{{{{branding.companyName}}}} {alt_suffix}" class="{css_class}" onerror="this.src='{fallback_src}'" />
</div>"""


_HEADER_HTML = f"""<div style="{_FULL_BLEED}background:#ffffff;border-bottom:1px solid #e5e7eb;">
  <div style="max-width:980px;margin:0 auto;padding:16px 24px;display:flex;align-items:center;justify-content:space-between;">
    <img src="{{{{branding.logoUrl}}}}" alt="{{{{branding.companyName}}}}" style="height:40px;width:auto;display:block;" onerror="this.src='/grace-assets/logo.png'" />
    <div style="background:{{{{branding.primaryColor}}}};color:#ffffff;padding:8px 20px;border-radius:8px;font-size:16px;font-weight:600;">Hi {{{{customerName}}}}</div>
  </div>
</div>
<div style="{_FULL_BLEED}background:{{{{branding.primaryColor}}}};color:#ffffff;">
  <div style="max-width:980px;margin:0 auto;padding:12px 24px;display:flex;align-items:center;justify-content:space-between;">
    <span style="font-size:20px;font-weight:700;">Moving Proposal</span>
    <span style="font-size:14px;font-weight:400;">{{{{quoteDate}}}}</span>
  </div>
</div>"""

_INTRO_HTML = f"""<div style="{_CARD_WRAP}">
  <div style="{_CARD}padding:24px;margin-top:-80px;position:relative;z-index:1;margin-bottom:50px;box-shadow:0 2px 8px rgba(0,0,0,0.08);">
    <h2 style="{_HEADING}color:{{{{branding.primaryColor}}}};margin-bottom:16px;">Thank you for considering {{{{branding.companyName}}}}</h2>
    <div style="display:grid;grid-template-columns:1fr 2fr;gap:32px;">
      <div style="display:flex;flex-direction:column;gap:14px;font-size:14px;">
        <div>
          <div style="font-weight:700;color:#111;margin-bottom:3px;">Prepared for</div>
          <div style="color:#666;">{{{{customerName}}}}</div>
        </div>
        <div>
          <div style="font-weight:700;color:#111;margin-bottom:3px;">Proposal number</div>
          <div style="color:#666;">#{{{{job.id}}}}</div>
        </div>
        <div style="margin-top:auto;padding-top:20px;">
          <div style="display:inline-block;background:#f3f3f3;padding:10px 18px;border-radius:6px;">
            <span style="font-weight:700;color:{{{{branding.primaryColor}}}};font-size:14px;">{{{{moveManager}}}}</span>
          </div>
        </div>
      </div>
      <div style="font-size:14px;line-height:1.7;color:#555;">
        <p style="margin:0 0 14px 0;color:#333;">Dear {{{{customerName}}}},</p>
        <p style="margin:0 0 14px 0;">Thank you for your inquiry. Here is our proposal for your consideration.</p>
        <p style="margin:0 0 14px 0;">With over 100 years of experience, {{{{branding.companyName}}}} has established itself as a trusted leader in household removals, with more than 30 branches across Australia.</p>
        <p style="margin:0 0 14px 0;">Every move is unique, so our services are tailored to your needs. Our team is dedicated to making your relocation as seamless as possible.</p>
        <p style="margin:0 0 14px 0;">To accept, please review the service options, acknowledge the terms and conditions, and click the Acceptance button. If you have any questions, please contact me directly.</p>
        <p style="margin:0 0 14px 0;">We look forward to taking care of your move.</p>
        <p style="margin:0;color:#555;">{{{{moveManager}}}}</p>
      </div>
    </div>
  </div>
</div>"""

_LOCATIONS_HTML = f"""<div style="{_CARD_WRAP}">
  <div style="{_CARD}padding:28px 24px;margin-bottom:50px;">
    <h3 style="{_HEADING}color:{{{{branding.primaryColor}}}};">Moving locations</h3>
    <div style="display:grid;grid-template-columns:repeat(3,1fr);gap:24px;margin-top:20px;">
      <div style="font-size:14px;color:#555;">
        <div style="font-weight:700;color:#111;margin-bottom:10px;">Moving from</div>
        <div>{{{{job.upliftLine1}}}}</div>
        <div>{{{{job.upliftCity}}}} {{{{job.upliftState}}}}</div>
        <div>{{{{job.upliftCountry}}}}</div>
        <div>{{{{job.upliftPostcode}}}}</div>
      </div>
      <div style="font-size:14px;color:#555;">
        <div style="font-weight:700;color:#111;margin-bottom:10px;">Moving to</div>
        <div>{{{{job.deliveryLine1}}}}</div>
        <div>{{{{job.deliveryCity}}}} {{{{job.deliveryState}}}}</div>
        <div>{{{{job.deliveryCountry}}}}</div>
        <div>{{{{job.deliveryPostcode}}}}</div>
      </div>
      <div style="font-size:14px;color:#555;">
        <div style="font-weight:700;color:#111;margin-bottom:10px;">Moving dates</div>
        <div>Packing: {{{{job.estimatedDeliveryDetails}}}}</div>
        <div>Uplift:</div>
        <div>Delivery:</div>
      </div>
    </div>
  </div>
</div>"""

_INSURANCE_HTML = f"""<div style="{_CARD_WRAP}">
  <div style="{_CARD}padding:28px 24px;margin-bottom:50px;">
    <h3 style="{_HEADING}font-style:italic;color:{{{{branding.primaryColor}}}};">GraceCover</h3>
    <div style="font-size:14px;color:#555;line-height:1.7;margin-top:20px;">
      <p style="margin:0 0 14px 0;">While {{{{branding.companyName}}}} enjoys one of the lowest claim rates in the industry, we encourage the use of transit protection for your peace of mind.</p>
      <p style="margin:0 0 14px 0;">GraceCover Transit Protection is underwritten and administered by Grace Removals, with additional coverage underwritten by AXA Corporate Solutions Marine.</p>
      <p style="margin:0 0 14px 0;">You can either complete a Valued Inventory listing the full replacement value of your effects, or take the Lump Sum option, where each cubic meter is valued at USD$2750 and specific items over USD$1500 are added on top.</p>
      <p style="margin:0;">Additional covers for both options include mould and mildew, electrical and mechanical derangement, and pairs and sets.</p>
    </div>
  </div>
</div>"""

_PRICING_HTML = f"""<div style="{_CARD_WRAP}">
  {{{{#each costings}}}}
  <div style="margin-bottom:50px;border:1px solid #e9e9e9;border-radius:20px;overflow:hidden;">
    <div style="background:{{{{branding.primaryColor}}}};color:#ffffff;padding:14px 20px;display:flex;align-items:center;justify-content:space-between;">
      <span style="font-size:16px;font-weight:700;">{{{{this.name}}}}</span>
      <div style="text-align:right;">
        <div style="font-size:16px;font-weight:700;">${{{{this.totalPrice}}}}</div>
        <div style="font-size:11px;opacity:0.85;">Tax Included where applicable</div>
      </div>
    </div>
    <table style="width:100%;border-collapse:collapse;font-size:13px;background:#ffffff;">
      <thead>
        <tr style="background:#f5f5f5;border-bottom:1px solid #e9e9e9;">
          <th style="text-align:left;padding:12px 16px;font-weight:400;color:#888;">Moving Services</th>
          <th style="text-align:center;padding:12px 16px;font-weight:400;color:#888;width:110px;">Quantity</th>
          <th style="text-align:right;padding:12px 16px;font-weight:400;color:#888;width:120px;">Rate</th>
          <th style="text-align:right;padding:12px 16px;font-weight:700;color:#333;width:120px;">${{{{this.totalPrice}}}}</th>
        </tr>
      </thead>
      <tbody>
        <tr style="border-bottom:1px solid #f0f0f0;">
          <td style="padding:14px 16px;font-weight:700;color:#222;">{{{{this.description}}}}</td>
          <td style="padding:14px 16px;text-align:center;color:#444;">{{{{this.quantity}}}}</td>
          <td style="padding:14px 16px;text-align:right;color:#444;">${{{{this.rate}}}}</td>
          <td style="padding:14px 16px;text-align:right;font-weight:600;color:{{{{branding.primaryColor}}}};">${{{{this.totalPrice}}}}</td>
        </tr>
      </tbody>
    </table>
    <div style="padding:20px;background:#ffffff;border-top:1px solid #e9e9e9;">
      <div style="display:flex;flex-direction:column;align-items:flex-end;gap:4px;font-size:14px;padding-bottom:16px;border-bottom:1px solid #e0e0e0;margin-bottom:16px;">
        <div style="display:flex;gap:40px;"><span style="color:#888;">Ex Tax</span><span style="color:#333;min-width:90px;text-align:right;">${{{{this.rate}}}}</span></div>
        <div style="display:flex;gap:40px;"><span style="color:#888;">Tax</span><span style="color:#333;min-width:90px;text-align:right;">$0.00</span></div>
        <div style="display:flex;gap:40px;font-weight:700;font-size:15px;"><span style="color:#333;">Total</span><span style="color:{{{{branding.primaryColor}}}};min-width:90px;text-align:right;">${{{{this.totalPrice}}}}</span></div>
      </div>
      <div style="display:flex;justify-content:flex-end;">
        <button style="background:{{{{branding.primaryColor}}}};color:#fff;border:none;padding:12px 32px;font-size:14px;font-weight:700;border-radius:6px;cursor:pointer;">Select Option</button>
      </div>
    </div>
  </div>
  {{{{/each}}}}
</div>"""

# Pagination controls are plain links; the page slice and counters come from the context.
_INVENTORY_HTML = f"""<div style="{_CARD_WRAP}">
  <div style="{_CARD}margin-bottom:50px;padding:24px;">
    <h3 style="{_HEADING}color:{{{{branding.primaryColor}}}};margin-bottom:16px;">Included items</h3>
    <table style="width:100%;border-collapse:collapse;font-size:13px;background:#fff;">
      <thead>
        <tr style="background:#f3f4f6;">
          <th style="text-align:left;padding:12px 16px;font-weight:700;border-bottom:2px solid #d1d5db;">Description</th>
          <th style="text-align:left;padding:12px 16px;font-weight:700;border-bottom:2px solid #d1d5db;width:150px;">Room</th>
          <th style="text-align:center;padding:12px 16px;font-weight:700;border-bottom:2px solid #d1d5db;width:100px;">Quantity</th>
          <th style="text-align:right;padding:12px 16px;font-weight:700;border-bottom:2px solid #d1d5db;width:120px;">Volume</th>
        </tr>
      </thead>
      <tbody>
        {{{{#each inventoryPage}}}}
        <tr style="border-bottom:1px solid #ececec;">
          <td style="padding:12px 16px;">{{{{this.description}}}}</td>
          <td style="padding:12px 16px;">{{{{this.room}}}}</td>
          <td style="padding:12px 16px;text-align:center;">{{{{this.quantity}}}}</td>
          <td style="padding:12px 16px;text-align:right;">{{{{this.cube}}}} m³</td>
        </tr>
        {{{{/each}}}}
      </tbody>
    </table>
    <div style="display:flex;justify-content:space-between;align-items:center;padding-top:12px;border-top:1px solid #e9e9e9;margin-top:4px;">
      <span style="font-size:13px;color:#666;">Total volume</span>
      <span style="font-size:13px;font-weight:700;color:#333;">{{{{totalCube}}}} m³</span>
    </div>
    <div style="display:flex;justify-content:space-between;align-items:center;padding-top:12px;border-top:1px solid #e9e9e9;margin-top:12px;">
      <span style="font-size:12px;color:#666;">Showing {{{{inventoryFrom}}}}–{{{{inventoryTo}}}} of {{{{inventoryTotal}}}} items</span>
      <div style="display:flex;gap:6px;align-items:center;font-size:12px;">
        <a href="?inventoryPage={{{{inventoryPreviousPage}}}}" style="padding:5px 12px;border:1px solid #d1d5db;border-radius:4px;color:#333;text-decoration:none;">Previous</a>
        <span style="color:#666;padding:0 6px;">{{{{inventoryCurrentPage}}}} / {{{{inventoryTotalPages}}}}</span>
        <a href="?inventoryPage={{{{inventoryNextPage}}}}" style="padding:5px 12px;border:1px solid #d1d5db;border-radius:4px;color:#333;text-decoration:none;">Next</a>
      </div>
    </div>
  </div>
</div>"""

_FOOTER_HTML = f"""<div style="{_FULL_BLEED}background:#2e3642;color:#ffffff;">
  <div style="max-width:980px;margin:0 auto;padding:24px;display:flex;align-items:flex-start;justify-content:space-between;gap:24px;">
    <div style="display:flex;flex-direction:column;gap:10px;">
      <img src="{{{{branding.logoUrl}}}}" alt="{{{{branding.companyName}}}}" style="height:36px;max-width:180px;width:auto;object-fit:contain;display:block;" onerror="this.style.display='none'" />
      <div style="font-size:11px;color:#aab0bb;line-height:1.6;">
        <div>&copy;{{{{copyrightYear}}}}, {{{{branding.companyName}}}}, All rights reserved.</div>
        <div>Powered by <a href="https://moveconnect.com" target="_blank" style="color:{{{{branding.primaryColor}}}};text-decoration:none;">Moveware</a></div>
      </div>
    </div>
    <div style="text-align:right;font-size:11px;color:#aab0bb;line-height:1.8;">
      <div>11 Toohey Street</div>
      <div>Portsmith Qld</div>
      <div>+61 7 4035 1796</div>
      <div><a href="mailto:ops-cairns@grace.com.au" style="color:{{{{branding.primaryColor}}}};text-decoration:none;">ops-cairns@grace.com.au</a></div>
      <div>ABN: 35 083 330 223</div>
      <div style="color:{{{{branding.primaryColor}}}};">{{{{branding.companyName}}}}</div>
    </div>
  </div>
</div>"""


GRACE_STATIC_LAYOUT: dict = {
    "version": 1,
    "globalStyles": {
        "fontFamily": "Arial, Helvetica, sans-serif",
        "backgroundColor": "#e9e9e9",
        "maxWidth": "980px",
    },
    "sections": [
        {"id": "grace-header", "label": "Header", "type": "custom_html", "visible": True, "html": _HEADER_HTML},
        {
            "id": "grace-hero",
            "label": "Hero Banner",
            "type": "custom_html",
            "visible": True,
            "config": dict(_BANNER_CONFIG),
            "html": _banner_html("grace-hero-img", "branding.heroBannerUrl", "Banner", "/grace-assets/banner_1.png"),
        },
        {"id": "grace-intro", "label": "Intro / Thank You", "type": "custom_html", "visible": True, "html": _INTRO_HTML},
        {"id": "grace-locations", "label": "Moving Locations", "type": "custom_html", "visible": True, "html": _LOCATIONS_HTML},
        {"id": "grace-insurance", "label": "GraceCover Insurance", "type": "custom_html", "visible": True, "html": _INSURANCE_HTML},
        {"id": "grace-pricing", "label": "Pricing Options", "type": "custom_html", "visible": True, "html": _PRICING_HTML},
        {"id": "grace-acceptance", "label": "Accept Quote", "type": "built_in", "visible": True, "component": "AcceptanceForm"},
        {"id": "grace-inventory", "label": "Included Items", "type": "custom_html", "visible": True, "html": _INVENTORY_HTML},
        {
            "id": "grace-footer-image",
            "label": "Footer Image",
            "type": "custom_html",
            "visible": True,
            "config": dict(_BANNER_CONFIG),
            "html": _banner_html("grace-footer-img", "branding.footerImageUrl", "Footer", "/grace-assets/banner_3.png"),
        },
        {"id": "grace-footer", "label": "Footer Bar", "type": "custom_html", "visible": True, "html": _FOOTER_HTML},
    ],
}
