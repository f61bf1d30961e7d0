"""initial schema

Revision ID: 0001_initial
Revises: 
Create Date: 2026-10-19 00:00:00

"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # product_prices
    product_prices = op.create_table(
        "product_prices",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("product_type", sa.String(length=50), nullable=False, unique=True),
        sa.Column("price_per_sqm", sa.String(length=40), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
    )

    # quotations
    op.create_table(
        "quotations",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("quotation_number", sa.String(length=50), nullable=False, unique=True),
        sa.Column("customer_name", sa.String(length=255), nullable=False),
        sa.Column("customer_email", sa.String(length=320), nullable=True),
        sa.Column("customer_phone", sa.String(length=50), nullable=True),
        sa.Column("customer_address", sa.Text(), nullable=True),
        sa.Column("product_type", sa.String(length=50), nullable=False),
        sa.Column("width", sa.String(length=40), nullable=False),
        sa.Column("height", sa.String(length=40), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("area", sa.String(length=40), nullable=False),
        sa.Column("price_per_sqm", sa.String(length=40), nullable=False),
        sa.Column("net_price", sa.String(length=40), nullable=False),
        sa.Column("vat_percentage", sa.String(length=40), nullable=False),
        sa.Column("vat_amount", sa.String(length=40), nullable=False),
        sa.Column("gross_price", sa.String(length=40), nullable=False),
        sa.Column("discount_type", sa.String(length=20), nullable=False, server_default="none"),
        sa.Column("discount_value", sa.String(length=40), nullable=False, server_default="0"),
        sa.Column("discount_amount", sa.String(length=40), nullable=False, server_default="0"),
        sa.Column("additional_costs", sa.JSON(), nullable=False),
        sa.Column("additional_costs_total", sa.String(length=40), nullable=False, server_default="0"),
        sa.Column("final_total", sa.String(length=40), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_by", sa.String(length=64), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
    )
    op.create_index("ix_quotations_created_at", "quotations", ["created_at"])

    # default catalog
    op.bulk_insert(
        product_prices,
        [
            {"product_type": "plastic", "price_per_sqm": "45.00", "description": "PVC roller shutter"},
            {"product_type": "aluminium", "price_per_sqm": "85.00", "description": "Aluminium roller shutter"},
        ],
    )


def downgrade() -> None:
    op.drop_index("ix_quotations_created_at", table_name="quotations")
    op.drop_table("quotations")
    op.drop_table("product_prices")
