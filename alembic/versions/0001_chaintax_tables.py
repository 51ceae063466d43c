"""price_quotes, cost_lots and tax_reports

Revision ID: chaintax_001
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "chaintax_001"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "price_quotes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("token", sa.String(length=64), nullable=False),
        sa.Column("timestamp", sa.Integer(), nullable=False),
        sa.Column("price_usd", sa.Numeric(precision=38, scale=18), nullable=False),
        sa.Column("source", sa.String(length=20), nullable=False),
        sa.Column("symbol", sa.String(length=50), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_price_quotes")),
        sa.UniqueConstraint("token", "timestamp", name="uq_price_quotes_token_timestamp"),
    )

    op.create_table(
        "cost_lots",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("address", sa.String(length=64), nullable=False),
        sa.Column("token", sa.String(length=64), nullable=False),
        sa.Column("symbol", sa.String(length=50), nullable=True),
        sa.Column("decimals", sa.Integer(), nullable=False),
        sa.Column("acquired_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("acquired_tx_hash", sa.String(length=100), nullable=False),
        sa.Column("original_amount", sa.String(length=80), nullable=False),
        sa.Column("remaining_amount", sa.String(length=80), nullable=False),
        sa.Column("cost_basis_usd", sa.Numeric(precision=38, scale=18), nullable=False),
        sa.Column("disposed", sa.Boolean(), nullable=False),
        sa.Column("disposed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("disposed_tx_hash", sa.String(length=100), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_cost_lots")),
    )
    op.create_index("ix_cost_lots_address_token", "cost_lots", ["address", "token"])

    op.create_table(
        "tax_reports",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("address", sa.String(length=64), nullable=False),
        sa.Column("network", sa.String(length=20), nullable=False),
        sa.Column("period_year", sa.Integer(), nullable=False),
        sa.Column("period_month", sa.Integer(), nullable=True),
        sa.Column("stage", sa.String(length=20), nullable=False),
        sa.Column("progress", sa.Integer(), nullable=False),
        sa.Column("summary", sa.JSON(), nullable=True),
        sa.Column("error_message", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_tax_reports")),
    )
    op.create_index(op.f("ix_tax_reports_address"), "tax_reports", ["address"])


def downgrade() -> None:
    op.drop_index(op.f("ix_tax_reports_address"), table_name="tax_reports")
    op.drop_table("tax_reports")
    op.drop_index("ix_cost_lots_address_token", table_name="cost_lots")
    op.drop_table("cost_lots")
    op.drop_table("price_quotes")
