"""initial schema

Revision ID: 3f9c1a2b7d10
Revises:
Create Date: 2026-10-12
"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

revision: str = "3f9c1a2b7d10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _tax_columns() -> list[sa.Column]:
    return [
        sa.Column("tax_enabled", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("tax_rate", sa.String(16), nullable=False, server_default="8.25"),
        sa.Column("jurisdiction_exemption", sa.Boolean, nullable=False, server_default=sa.true()),
    ]


def upgrade() -> None:
    op.create_table(
        "clients",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("uuid", sa.String(26), nullable=False, unique=True),
        sa.Column("client_name", sa.Text, nullable=False),
        sa.Column("contact_person", sa.Text, nullable=False, server_default=""),
        sa.Column("email", sa.Text, nullable=False, server_default=""),
        sa.Column("phone", sa.Text, nullable=False, server_default=""),
        sa.Column("billing_address", sa.Text, nullable=False, server_default=""),
        sa.Column("notes", sa.Text, nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime, nullable=False, server_default=sa.func.current_timestamp()),
        sa.Column("updated_at", sa.DateTime, nullable=False, server_default=sa.func.current_timestamp()),
    )

    op.create_table(
        "catalog_items",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("uuid", sa.String(26), nullable=False, unique=True),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("description", sa.Text, nullable=False, server_default=""),
        sa.Column("unit_price", sa.Integer, nullable=False, server_default="0"),
        sa.Column("billing_type", sa.String(16), nullable=False, server_default="one-time"),
        sa.Column("category", sa.String(255), nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime, nullable=False, server_default=sa.func.current_timestamp()),
    )

    op.create_table(
        "quotes",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("uuid", sa.String(26), nullable=False, unique=True),
        sa.Column("quote_number", sa.String(32), nullable=False),
        sa.Column("client_uuid", sa.String(26), nullable=False),
        sa.Column("one_time_items", sa.Text, nullable=False, server_default="[]"),
        sa.Column("recurring_items", sa.Text, nullable=False, server_default="[]"),
        *_tax_columns(),
        sa.Column("one_time_subtotal", sa.Integer, nullable=False, server_default="0"),
        sa.Column("monthly_subtotal", sa.Integer, nullable=False, server_default="0"),
        sa.Column("tax_amount", sa.Integer, nullable=False, server_default="0"),
        sa.Column("grand_total", sa.Integer, nullable=False, server_default="0"),
        sa.Column("contract_terms", sa.Text, nullable=False, server_default=""),
        sa.Column("expiry_date", sa.String(10), nullable=False),
        sa.Column("status", sa.String(16), nullable=False, server_default="Draft"),
        sa.Column("created_at", sa.DateTime, nullable=False, server_default=sa.func.current_timestamp()),
        sa.Column("updated_at", sa.DateTime, nullable=False, server_default=sa.func.current_timestamp()),
        sa.Column("sent_at", sa.DateTime, nullable=True),
    )
    op.create_index("ix_quotes_quote_number", "quotes", ["quote_number"])

    op.create_table(
        "invoices",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("uuid", sa.String(26), nullable=False, unique=True),
        sa.Column("invoice_number", sa.String(32), nullable=False),
        sa.Column("client_uuid", sa.String(26), nullable=False),
        sa.Column("related_quote_uuid", sa.String(26), nullable=True),
        sa.Column("line_items", sa.Text, nullable=False, server_default="[]"),
        *_tax_columns(),
        sa.Column("subtotal", sa.Integer, nullable=False, server_default="0"),
        sa.Column("tax_amount", sa.Integer, nullable=False, server_default="0"),
        sa.Column("total", sa.Integer, nullable=False, server_default="0"),
        sa.Column("issue_date", sa.String(10), nullable=False),
        sa.Column("due_date", sa.String(10), nullable=False),
        sa.Column("status", sa.String(16), nullable=False, server_default="Draft"),
        sa.Column("notes", sa.Text, nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime, nullable=False, server_default=sa.func.current_timestamp()),
        sa.Column("updated_at", sa.DateTime, nullable=False, server_default=sa.func.current_timestamp()),
        sa.Column("sent_at", sa.DateTime, nullable=True),
        sa.Column("paid_at", sa.DateTime, nullable=True),
    )
    op.create_index("ix_invoices_invoice_number", "invoices", ["invoice_number"])

    op.create_table(
        "content_documents",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("uuid", sa.String(26), nullable=False, unique=True),
        sa.Column("doc_type", sa.String(32), nullable=False),
        sa.Column("payload", sa.Text, nullable=False, server_default="{}"),
        sa.Column("created_at", sa.DateTime, nullable=False, server_default=sa.func.current_timestamp()),
        sa.Column("updated_at", sa.DateTime, nullable=False, server_default=sa.func.current_timestamp()),
    )
    op.create_index("ix_content_documents_doc_type", "content_documents", ["doc_type"])

    op.create_table(
        "number_counters",
        sa.Column("name", sa.String(32), primary_key=True),
        sa.Column("value", sa.Integer, nullable=False, server_default="0"),
    )


def downgrade() -> None:
    op.drop_table("number_counters")
    op.drop_index("ix_content_documents_doc_type", table_name="content_documents")
    op.drop_table("content_documents")
    op.drop_index("ix_invoices_invoice_number", table_name="invoices")
    op.drop_table("invoices")
    op.drop_index("ix_quotes_quote_number", table_name="quotes")
    op.drop_table("quotes")
    op.drop_table("catalog_items")
    op.drop_table("clients")
