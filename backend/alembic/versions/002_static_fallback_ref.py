"""Add branding_settings.static_fallback_ref and seed it from the legacy Grace matching rules.

Companies without a branding_settings row are back-filled by scripts/seed_static_fallback_refs.py.

Revision ID: 002
Revises: 001
Create Date: 2026-03-09 00:00:00
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.add_column("branding_settings", sa.Column("static_fallback_ref", sa.String(), nullable=True))
    op.execute(
        """
        UPDATE branding_settings
        SET static_fallback_ref = 'grace'
        WHERE static_fallback_ref IS NULL
          AND company_id IN (
            SELECT id FROM companies
            WHERE tenant_id = '555'
               OR lower(coalesce(brand_code, '')) LIKE '%grace%'
               OR lower(coalesce(name, '')) LIKE '%grace%'
          )
        """
    )


def downgrade() -> None:
    op.drop_column("branding_settings", "static_fallback_ref")
