from __future__ import annotations

import json
from datetime import datetime
from decimal import Decimal

from sqlalchemy import Connection, text
from sqlalchemy.engine import RowMapping
from sqlalchemy.exc import IntegrityError
from ulid import ULID

from daflash.clock import now as _now
from daflash.constants import DocumentKind
from daflash.models.catalog import BillingType, CatalogItem
from daflash.models.client import Client
from daflash.models.invoice import Invoice, InvoiceStatus
from daflash.models.line_item import LineItem
from daflash.models.quote import Quote, QuoteStatus
from daflash.models.tax import TaxConfiguration
from daflash.money import from_cents, to_cents
from daflash.repositories.base import (
    CatalogRepository,
    ClientRepository,
    ContentRepository,
    InvoiceRepository,
    NumberCounterRepository,
    QuoteRepository,
    StoredContent,
)


def _dump_items(items: list[LineItem]) -> str:
    return json.dumps([item.model_dump(mode="json") for item in items])


def _load_items(raw: str | None) -> list[LineItem]:
    if not raw:
        return []
    return [LineItem.model_validate(entry) for entry in json.loads(raw)]


def _tax_params(tax: TaxConfiguration) -> dict:
    return {
        "tax_enabled": tax.tax_enabled,
        "tax_rate": str(tax.tax_rate_percent),
        "jurisdiction_exemption": tax.jurisdiction_exemption_enabled,
    }


def _load_tax(row: RowMapping) -> TaxConfiguration:
    return TaxConfiguration(
        tax_enabled=bool(row["tax_enabled"]),
        tax_rate_percent=Decimal(str(row["tax_rate"])),
        jurisdiction_exemption_enabled=bool(row["jurisdiction_exemption"]),
    )


class SQLAlchemyClientRepository(ClientRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    def create(self, client: Client) -> Client:
        client_uuid = str(ULID())
        now = _now()
        self.conn.execute(
            text(
                "INSERT INTO clients (uuid, client_name, contact_person, email, phone, billing_address, "
                "notes, created_at, updated_at) VALUES (:uuid, :client_name, :contact_person, :email, "
                ":phone, :billing_address, :notes, :created_at, :updated_at)"
            ),
            {**self._params(client), "uuid": client_uuid, "created_at": now, "updated_at": now},
        )
        self.conn.commit()
        result = self.get_by_uuid(client_uuid)
        if result is None:
            raise RuntimeError(f"Failed to retrieve client after create (uuid={client_uuid})")
        return result

    @staticmethod
    def _params(client: Client) -> dict:
        return {
            "client_name": client.client_name,
            "contact_person": client.contact_person,
            "email": client.email or "",
            "phone": client.phone,
            "billing_address": client.billing_address,
            "notes": client.notes,
        }

    @staticmethod
    def _row_to_client(row: RowMapping) -> Client:
        return Client(
            id=row["id"],
            uuid=row["uuid"],
            client_name=row["client_name"],
            contact_person=row["contact_person"],
            email=row["email"] or None,
            phone=row["phone"],
            billing_address=row["billing_address"],
            notes=row["notes"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def get_by_uuid(self, uuid: str) -> Client | None:
        row = (
            self.conn.execute(text("SELECT * FROM clients WHERE uuid = :uuid"), {"uuid": uuid})
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_client(row)

    def list_all(self) -> list[Client]:
        rows = self.conn.execute(text("SELECT * FROM clients ORDER BY client_name")).mappings().fetchall()
        return [self._row_to_client(row) for row in rows]

    def update(self, client: Client) -> Client:
        self.conn.execute(
            text(
                "UPDATE clients SET client_name = :client_name, contact_person = :contact_person, "
                "email = :email, phone = :phone, billing_address = :billing_address, notes = :notes, "
                "updated_at = :updated_at WHERE uuid = :uuid"
            ),
            {**self._params(client), "uuid": client.uuid, "updated_at": _now()},
        )
        self.conn.commit()
        result = self.get_by_uuid(client.uuid)
        if result is None:
            raise RuntimeError(f"Failed to retrieve client after update (uuid={client.uuid})")
        return result

    def delete(self, uuid: str) -> None:
        self.conn.execute(text("DELETE FROM clients WHERE uuid = :uuid"), {"uuid": uuid})
        self.conn.commit()


class SQLAlchemyCatalogRepository(CatalogRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    def create(self, item: CatalogItem) -> CatalogItem:
        item_uuid = str(ULID())
        self.conn.execute(
            text(
                "INSERT INTO catalog_items (uuid, name, description, unit_price, billing_type, category, "
                "created_at) VALUES (:uuid, :name, :description, :unit_price, :billing_type, :category, "
                ":created_at)"
            ),
            {**self._params(item), "uuid": item_uuid, "created_at": _now()},
        )
        self.conn.commit()
        result = self.get_by_uuid(item_uuid)
        if result is None:
            raise RuntimeError(f"Failed to retrieve catalog item after create (uuid={item_uuid})")
        return result

    @staticmethod
    def _params(item: CatalogItem) -> dict:
        return {
            "name": item.name,
            "description": item.description,
            "unit_price": to_cents(item.unit_price),
            "billing_type": item.billing_type.value,
            "category": item.category,
        }

    @staticmethod
    def _row_to_item(row: RowMapping) -> CatalogItem:
        return CatalogItem(
            id=row["id"],
            uuid=row["uuid"],
            name=row["name"],
            description=row["description"],
            unit_price=from_cents(row["unit_price"]),
            billing_type=BillingType(row["billing_type"]),
            category=row["category"],
            created_at=row["created_at"],
        )

    def get_by_uuid(self, uuid: str) -> CatalogItem | None:
        row = (
            self.conn.execute(text("SELECT * FROM catalog_items WHERE uuid = :uuid"), {"uuid": uuid})
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_item(row)

    def list_all(self) -> list[CatalogItem]:
        rows = (
            self.conn.execute(text("SELECT * FROM catalog_items ORDER BY category, name"))
            .mappings()
            .fetchall()
        )
        return [self._row_to_item(row) for row in rows]

    def update(self, item: CatalogItem) -> CatalogItem:
        self.conn.execute(
            text(
                "UPDATE catalog_items SET name = :name, description = :description, "
                "unit_price = :unit_price, billing_type = :billing_type, category = :category "
                "WHERE uuid = :uuid"
            ),
            {**self._params(item), "uuid": item.uuid},
        )
        self.conn.commit()
        result = self.get_by_uuid(item.uuid)
        if result is None:
            raise RuntimeError(f"Failed to retrieve catalog item after update (uuid={item.uuid})")
        return result

    def delete(self, uuid: str) -> None:
        self.conn.execute(text("DELETE FROM catalog_items WHERE uuid = :uuid"), {"uuid": uuid})
        self.conn.commit()


def _latest_number(conn: Connection, table: str, column: str) -> str | None:
    # Longer numbers first so Q-1000 outranks Q-999.
    row = conn.execute(
        text(
            f"SELECT {column} FROM {table} WHERE {column} <> '' "
            f"ORDER BY LENGTH({column}) DESC, {column} DESC LIMIT 1"
        )
    ).fetchone()
    return row[0] if row else None


class SQLAlchemyQuoteRepository(QuoteRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    def latest_number(self, kind: DocumentKind = DocumentKind.QUOTE) -> str | None:
        return _latest_number(self.conn, "quotes", "quote_number")

    @staticmethod
    def _params(quote: Quote) -> dict:
        return {
            "client_uuid": quote.client_uuid,
            "one_time_items": _dump_items(quote.one_time_items),
            "recurring_items": _dump_items(quote.recurring_items),
            **_tax_params(quote.tax),
            "one_time_subtotal": to_cents(quote.one_time_subtotal),
            "monthly_subtotal": to_cents(quote.monthly_subtotal),
            "tax_amount": to_cents(quote.tax_amount),
            "grand_total": to_cents(quote.grand_total),
            "contract_terms": quote.contract_terms,
            "expiry_date": quote.expiry_date.isoformat(),
        }

    def create(self, quote: Quote) -> Quote:
        quote_uuid = str(ULID())
        now = _now()
        self.conn.execute(
            text(
                "INSERT INTO quotes (uuid, quote_number, client_uuid, one_time_items, recurring_items, "
                "tax_enabled, tax_rate, jurisdiction_exemption, one_time_subtotal, monthly_subtotal, "
                "tax_amount, grand_total, contract_terms, expiry_date, status, created_at, updated_at, sent_at) "
                "VALUES (:uuid, :quote_number, :client_uuid, :one_time_items, :recurring_items, "
                ":tax_enabled, :tax_rate, :jurisdiction_exemption, :one_time_subtotal, :monthly_subtotal, "
                ":tax_amount, :grand_total, :contract_terms, :expiry_date, :status, :created_at, "
                ":updated_at, :sent_at)"
            ),
            {
                **self._params(quote),
                "uuid": quote_uuid,
                "quote_number": quote.quote_number,
                "status": quote.status.value,
                "created_at": now,
                "updated_at": now,
                "sent_at": quote.sent_at,
            },
        )
        self.conn.commit()
        result = self.get_by_uuid(quote_uuid)
        if result is None:
            raise RuntimeError(f"Failed to retrieve quote after create (uuid={quote_uuid})")
        return result

    @staticmethod
    def _row_to_quote(row: RowMapping) -> Quote:
        return Quote(
            id=row["id"],
            uuid=row["uuid"],
            quote_number=row["quote_number"],
            client_uuid=row["client_uuid"],
            one_time_items=_load_items(row["one_time_items"]),
            recurring_items=_load_items(row["recurring_items"]),
            tax=_load_tax(row),
            one_time_subtotal=from_cents(row["one_time_subtotal"]),
            monthly_subtotal=from_cents(row["monthly_subtotal"]),
            tax_amount=from_cents(row["tax_amount"]),
            grand_total=from_cents(row["grand_total"]),
            contract_terms=row["contract_terms"],
            expiry_date=row["expiry_date"],
            status=QuoteStatus(row["status"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
            sent_at=row["sent_at"],
        )

    def get_by_uuid(self, uuid: str) -> Quote | None:
        row = (
            self.conn.execute(text("SELECT * FROM quotes WHERE uuid = :uuid"), {"uuid": uuid})
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_quote(row)

    def list_all(self) -> list[Quote]:
        rows = (
            self.conn.execute(text("SELECT * FROM quotes ORDER BY created_at DESC, id DESC"))
            .mappings()
            .fetchall()
        )
        return [self._row_to_quote(row) for row in rows]

    def update(self, quote: Quote) -> Quote:
        # quote_number, status and sent_at are not editable here.
        self.conn.execute(
            text(
                "UPDATE quotes SET client_uuid = :client_uuid, one_time_items = :one_time_items, "
                "recurring_items = :recurring_items, tax_enabled = :tax_enabled, tax_rate = :tax_rate, "
                "jurisdiction_exemption = :jurisdiction_exemption, one_time_subtotal = :one_time_subtotal, "
                "monthly_subtotal = :monthly_subtotal, tax_amount = :tax_amount, grand_total = :grand_total, "
                "contract_terms = :contract_terms, expiry_date = :expiry_date, updated_at = :updated_at "
                "WHERE uuid = :uuid"
            ),
            {**self._params(quote), "uuid": quote.uuid, "updated_at": _now()},
        )
        self.conn.commit()
        result = self.get_by_uuid(quote.uuid)
        if result is None:
            raise RuntimeError(f"Failed to retrieve quote after update (uuid={quote.uuid})")
        return result

    def update_status(self, uuid: str, status: QuoteStatus, sent_at: datetime | None = None) -> None:
        if sent_at is not None:
            self.conn.execute(
                text("UPDATE quotes SET status = :status, sent_at = :sent_at, updated_at = :now WHERE uuid = :uuid"),
                {"status": status.value, "sent_at": sent_at, "now": _now(), "uuid": uuid},
            )
        else:
            self.conn.execute(
                text("UPDATE quotes SET status = :status, updated_at = :now WHERE uuid = :uuid"),
                {"status": status.value, "now": _now(), "uuid": uuid},
            )
        self.conn.commit()

    def delete(self, uuid: str) -> None:
        self.conn.execute(text("DELETE FROM quotes WHERE uuid = :uuid"), {"uuid": uuid})
        self.conn.commit()


class SQLAlchemyInvoiceRepository(InvoiceRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    def latest_number(self, kind: DocumentKind = DocumentKind.INVOICE) -> str | None:
        return _latest_number(self.conn, "invoices", "invoice_number")

    @staticmethod
    def _params(invoice: Invoice) -> dict:
        return {
            "client_uuid": invoice.client_uuid,
            "line_items": _dump_items(invoice.line_items),
            **_tax_params(invoice.tax),
            "subtotal": to_cents(invoice.subtotal),
            "tax_amount": to_cents(invoice.tax_amount),
            "total": to_cents(invoice.total),
            "issue_date": invoice.issue_date.isoformat(),
            "due_date": invoice.due_date.isoformat(),
            "notes": invoice.notes,
        }

    def create(self, invoice: Invoice) -> Invoice:
        invoice_uuid = str(ULID())
        now = _now()
        self.conn.execute(
            text(
                "INSERT INTO invoices (uuid, invoice_number, client_uuid, related_quote_uuid, line_items, "
                "tax_enabled, tax_rate, jurisdiction_exemption, subtotal, tax_amount, total, issue_date, "
                "due_date, status, notes, created_at, updated_at, sent_at, paid_at) "
                "VALUES (:uuid, :invoice_number, :client_uuid, :related_quote_uuid, :line_items, "
                ":tax_enabled, :tax_rate, :jurisdiction_exemption, :subtotal, :tax_amount, :total, "
                ":issue_date, :due_date, :status, :notes, :created_at, :updated_at, :sent_at, :paid_at)"
            ),
            {
                **self._params(invoice),
                "uuid": invoice_uuid,
                "invoice_number": invoice.invoice_number,
                "related_quote_uuid": invoice.related_quote_uuid,
                "status": invoice.status.value,
                "created_at": now,
                "updated_at": now,
                "sent_at": invoice.sent_at,
                "paid_at": invoice.paid_at,
            },
        )
        self.conn.commit()
        result = self.get_by_uuid(invoice_uuid)
        if result is None:
            raise RuntimeError(f"Failed to retrieve invoice after create (uuid={invoice_uuid})")
        return result

    @staticmethod
    def _row_to_invoice(row: RowMapping) -> Invoice:
        return Invoice(
            id=row["id"],
            uuid=row["uuid"],
            invoice_number=row["invoice_number"],
            client_uuid=row["client_uuid"],
            related_quote_uuid=row["related_quote_uuid"],
            line_items=_load_items(row["line_items"]),
            tax=_load_tax(row),
            subtotal=from_cents(row["subtotal"]),
            tax_amount=from_cents(row["tax_amount"]),
            total=from_cents(row["total"]),
            issue_date=row["issue_date"],
            due_date=row["due_date"],
            status=InvoiceStatus(row["status"]),
            notes=row["notes"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
            sent_at=row["sent_at"],
            paid_at=row["paid_at"],
        )

    def get_by_uuid(self, uuid: str) -> Invoice | None:
        row = (
            self.conn.execute(text("SELECT * FROM invoices WHERE uuid = :uuid"), {"uuid": uuid})
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_invoice(row)

    def list_all(self) -> list[Invoice]:
        rows = (
            self.conn.execute(text("SELECT * FROM invoices ORDER BY issue_date DESC, id DESC"))
            .mappings()
            .fetchall()
        )
        return [self._row_to_invoice(row) for row in rows]

    def update(self, invoice: Invoice) -> Invoice:
        # invoice_number, related_quote_uuid and status are not editable here.
        self.conn.execute(
            text(
                "UPDATE invoices SET client_uuid = :client_uuid, line_items = :line_items, "
                "tax_enabled = :tax_enabled, tax_rate = :tax_rate, "
                "jurisdiction_exemption = :jurisdiction_exemption, subtotal = :subtotal, "
                "tax_amount = :tax_amount, total = :total, issue_date = :issue_date, due_date = :due_date, "
                "notes = :notes, updated_at = :updated_at WHERE uuid = :uuid"
            ),
            {**self._params(invoice), "uuid": invoice.uuid, "updated_at": _now()},
        )
        self.conn.commit()
        result = self.get_by_uuid(invoice.uuid)
        if result is None:
            raise RuntimeError(f"Failed to retrieve invoice after update (uuid={invoice.uuid})")
        return result

    def update_status(
        self,
        uuid: str,
        status: InvoiceStatus,
        sent_at: datetime | None = None,
        paid_at: datetime | None = None,
    ) -> None:
        assignments = ["status = :status", "updated_at = :now"]
        params: dict = {"status": status.value, "now": _now(), "uuid": uuid}
        if sent_at is not None:
            assignments.append("sent_at = :sent_at")
            params["sent_at"] = sent_at
        if paid_at is not None:
            assignments.append("paid_at = :paid_at")
            params["paid_at"] = paid_at
        self.conn.execute(text(f"UPDATE invoices SET {', '.join(assignments)} WHERE uuid = :uuid"), params)
        self.conn.commit()

    def delete(self, uuid: str) -> None:
        self.conn.execute(text("DELETE FROM invoices WHERE uuid = :uuid"), {"uuid": uuid})
        self.conn.commit()


class SQLAlchemyContentRepository(ContentRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    @staticmethod
    def _row_to_content(row: RowMapping) -> StoredContent:
        return StoredContent(
            uuid=row["uuid"],
            doc_type=row["doc_type"],
            payload=json.loads(row["payload"]),
            updated_at=row["updated_at"],
        )

    def create(self, doc_type: str, payload: dict) -> StoredContent:
        doc_uuid = str(ULID())
        now = _now()
        self.conn.execute(
            text(
                "INSERT INTO content_documents (uuid, doc_type, payload, created_at, updated_at) "
                "VALUES (:uuid, :doc_type, :payload, :created_at, :updated_at)"
            ),
            {
                "uuid": doc_uuid,
                "doc_type": doc_type,
                "payload": json.dumps(payload),
                "created_at": now,
                "updated_at": now,
            },
        )
        self.conn.commit()
        result = self.get_by_uuid(doc_type, doc_uuid)
        if result is None:
            raise RuntimeError(f"Failed to retrieve {doc_type} after create (uuid={doc_uuid})")
        return result

    def get_by_uuid(self, doc_type: str, uuid: str) -> StoredContent | None:
        row = (
            self.conn.execute(
                text("SELECT * FROM content_documents WHERE doc_type = :doc_type AND uuid = :uuid"),
                {"doc_type": doc_type, "uuid": uuid},
            )
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_content(row)

    def list_by_type(self, doc_type: str) -> list[StoredContent]:
        rows = (
            self.conn.execute(
                text("SELECT * FROM content_documents WHERE doc_type = :doc_type ORDER BY id"),
                {"doc_type": doc_type},
            )
            .mappings()
            .fetchall()
        )
        return [self._row_to_content(row) for row in rows]

    def update(self, doc_type: str, uuid: str, payload: dict) -> StoredContent | None:
        self.conn.execute(
            text(
                "UPDATE content_documents SET payload = :payload, updated_at = :updated_at "
                "WHERE doc_type = :doc_type AND uuid = :uuid"
            ),
            {"payload": json.dumps(payload), "updated_at": _now(), "doc_type": doc_type, "uuid": uuid},
        )
        self.conn.commit()
        return self.get_by_uuid(doc_type, uuid)

    def delete(self, doc_type: str, uuid: str) -> None:
        self.conn.execute(
            text("DELETE FROM content_documents WHERE doc_type = :doc_type AND uuid = :uuid"),
            {"doc_type": doc_type, "uuid": uuid},
        )
        self.conn.commit()


class SQLAlchemyNumberCounterRepository(NumberCounterRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    def increment(self, name: str) -> int | None:
        result = self.conn.execute(
            text("UPDATE number_counters SET value = value + 1 WHERE name = :name"),
            {"name": name},
        )
        if result.rowcount == 0:
            self.conn.rollback()
            return None
        value = self.conn.execute(
            text("SELECT value FROM number_counters WHERE name = :name"),
            {"name": name},
        ).scalar_one()
        self.conn.commit()
        return int(value)

    def ensure(self, name: str, value: int) -> None:
        try:
            self.conn.execute(
                text("INSERT INTO number_counters (name, value) VALUES (:name, :value)"),
                {"name": name, "value": value},
            )
            self.conn.commit()
        except IntegrityError:
            # Another request created it first; its value wins.
            self.conn.rollback()
