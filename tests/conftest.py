"""Root conftest: in-memory SQLite engine and fixtures for the full schema."""

from __future__ import annotations

from decimal import Decimal

import pytest
from sqlalchemy import Connection, create_engine, event, text
from sqlalchemy.engine import Engine

from daflash.models.invoice import Invoice
from daflash.models.line_item import LineItem
from daflash.models.quote import Quote

# Matches Alembic head: 3f9c1a2b7d10 (initial schema)
SCHEMA_DDL = """
CREATE TABLE clients (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    uuid VARCHAR(26) NOT NULL UNIQUE,
    client_name TEXT NOT NULL,
    contact_person TEXT NOT NULL DEFAULT '',
    email TEXT NOT NULL DEFAULT '',
    phone TEXT NOT NULL DEFAULT '',
    billing_address TEXT NOT NULL DEFAULT '',
    notes TEXT NOT NULL DEFAULT '',
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL
);

CREATE TABLE catalog_items (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    uuid VARCHAR(26) NOT NULL UNIQUE,
    name TEXT NOT NULL,
    description TEXT NOT NULL DEFAULT '',
    unit_price INTEGER NOT NULL DEFAULT 0,
    billing_type VARCHAR(16) NOT NULL DEFAULT 'one-time',
    category VARCHAR(255) NOT NULL DEFAULT '',
    created_at DATETIME NOT NULL
);

CREATE TABLE quotes (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    uuid VARCHAR(26) NOT NULL UNIQUE,
    quote_number VARCHAR(32) NOT NULL,
    client_uuid VARCHAR(26) NOT NULL,
    one_time_items TEXT NOT NULL DEFAULT '[]',
    recurring_items TEXT NOT NULL DEFAULT '[]',
    tax_enabled BOOLEAN NOT NULL DEFAULT 1,
    tax_rate VARCHAR(16) NOT NULL DEFAULT '8.25',
    jurisdiction_exemption BOOLEAN NOT NULL DEFAULT 1,
    one_time_subtotal INTEGER NOT NULL DEFAULT 0,
    monthly_subtotal INTEGER NOT NULL DEFAULT 0,
    tax_amount INTEGER NOT NULL DEFAULT 0,
    grand_total INTEGER NOT NULL DEFAULT 0,
    contract_terms TEXT NOT NULL DEFAULT '',
    expiry_date VARCHAR(10) NOT NULL,
    status VARCHAR(16) NOT NULL DEFAULT 'Draft',
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL,
    sent_at DATETIME
);

CREATE TABLE invoices (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    uuid VARCHAR(26) NOT NULL UNIQUE,
    invoice_number VARCHAR(32) NOT NULL,
    client_uuid VARCHAR(26) NOT NULL,
    related_quote_uuid VARCHAR(26),
    line_items TEXT NOT NULL DEFAULT '[]',
    tax_enabled BOOLEAN NOT NULL DEFAULT 1,
    tax_rate VARCHAR(16) NOT NULL DEFAULT '8.25',
    jurisdiction_exemption BOOLEAN NOT NULL DEFAULT 1,
    subtotal INTEGER NOT NULL DEFAULT 0,
    tax_amount INTEGER NOT NULL DEFAULT 0,
    total INTEGER NOT NULL DEFAULT 0,
    issue_date VARCHAR(10) NOT NULL,
    due_date VARCHAR(10) NOT NULL,
    status VARCHAR(16) NOT NULL DEFAULT 'Draft',
    notes TEXT NOT NULL DEFAULT '',
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL,
    sent_at DATETIME,
    paid_at DATETIME
);

CREATE TABLE content_documents (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    uuid VARCHAR(26) NOT NULL UNIQUE,
    doc_type VARCHAR(32) NOT NULL,
    payload TEXT NOT NULL DEFAULT '{}',
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL
);

CREATE TABLE number_counters (
    name VARCHAR(32) PRIMARY KEY,
    value INTEGER NOT NULL DEFAULT 0
);
"""


@pytest.fixture()
def db_engine() -> Engine:
    engine = create_engine("sqlite:///:memory:")

    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.close()

    return engine


@pytest.fixture()
def db_connection(db_engine: Engine) -> Connection:
    conn = db_engine.connect()
    for statement in SCHEMA_DDL.strip().split(";"):
        stmt = statement.strip()
        if stmt:
            conn.execute(text(stmt))
    conn.commit()
    yield conn
    conn.close()


def _sample_item(**overrides) -> LineItem:
    defaults = dict(
        name="Website Build",
        description="Five-page marketing site",
        quantity=2,
        unit_price=Decimal("100.00"),
        discount_percent=Decimal("10"),
    )
    defaults.update(overrides)
    return LineItem(**defaults)


def _sample_quote(**overrides) -> Quote:
    defaults = dict(
        quote_number="Q-001",
        client_uuid="01JCLIENT0000000000000000A",
        one_time_items=[_sample_item()],
        recurring_items=[_sample_item(name="Hosting", quantity=1, unit_price=Decimal("29.99"), discount_percent=0)],
        one_time_subtotal=Decimal("180.00"),
        monthly_subtotal=Decimal("29.99"),
        tax_amount=Decimal("13.86"),
        grand_total=Decimal("191.88"),
        contract_terms="50% upfront",
        expiry_date="2026-11-18",
    )
    defaults.update(overrides)
    return Quote(**defaults)


def _sample_invoice(**overrides) -> Invoice:
    defaults = dict(
        invoice_number="INV-001",
        client_uuid="01JCLIENT0000000000000000A",
        line_items=[_sample_item()],
        subtotal=Decimal("180.00"),
        tax_amount=Decimal("11.88"),
        total=Decimal("191.88"),
        issue_date="2026-10-19",
        due_date="2026-11-18",
        notes="Thanks!",
    )
    defaults.update(overrides)
    return Invoice(**defaults)


@pytest.fixture()
def sample_item():
    return _sample_item


@pytest.fixture()
def sample_quote():
    return _sample_quote


@pytest.fixture()
def sample_invoice():
    return _sample_invoice
