from abc import ABC, abstractmethod
from datetime import datetime

from daflash.constants import DocumentKind
from daflash.models.catalog import CatalogItem
from daflash.models.client import Client
from daflash.models.invoice import Invoice, InvoiceStatus
from daflash.models.quote import Quote, QuoteStatus


class NumberSource(ABC):
    @abstractmethod
    def latest_number(self, kind: DocumentKind) -> str | None: ...


class NumberCounterRepository(ABC):
    @abstractmethod
    def increment(self, name: str) -> int | None:
        """Atomically bump the counter and return its new value; None if it doesn't exist."""

    @abstractmethod
    def ensure(self, name: str, value: int) -> None:
        """Create the counter at ``value`` unless it already exists."""


class ClientRepository(ABC):
    @abstractmethod
    def create(self, client: Client) -> Client: ...

    @abstractmethod
    def get_by_uuid(self, uuid: str) -> Client | None: ...

    @abstractmethod
    def list_all(self) -> list[Client]: ...

    @abstractmethod
    def update(self, client: Client) -> Client: ...

    @abstractmethod
    def delete(self, uuid: str) -> None: ...


class CatalogRepository(ABC):
    @abstractmethod
    def create(self, item: CatalogItem) -> CatalogItem: ...

    @abstractmethod
    def get_by_uuid(self, uuid: str) -> CatalogItem | None: ...

    @abstractmethod
    def list_all(self) -> list[CatalogItem]: ...

    @abstractmethod
    def update(self, item: CatalogItem) -> CatalogItem: ...

    @abstractmethod
    def delete(self, uuid: str) -> None: ...


class QuoteRepository(NumberSource):
    @abstractmethod
    def create(self, quote: Quote) -> Quote: ...

    @abstractmethod
    def get_by_uuid(self, uuid: str) -> Quote | None: ...

    @abstractmethod
    def list_all(self) -> list[Quote]: ...

    @abstractmethod
    def update(self, quote: Quote) -> Quote: ...

    @abstractmethod
    def update_status(self, uuid: str, status: QuoteStatus, sent_at: datetime | None = None) -> None: ...

    @abstractmethod
    def delete(self, uuid: str) -> None: ...


class InvoiceRepository(NumberSource):
    @abstractmethod
    def create(self, invoice: Invoice) -> Invoice: ...

    @abstractmethod
    def get_by_uuid(self, uuid: str) -> Invoice | None: ...

    @abstractmethod
    def list_all(self) -> list[Invoice]: ...

    @abstractmethod
    def update(self, invoice: Invoice) -> Invoice: ...

    @abstractmethod
    def update_status(
        self,
        uuid: str,
        status: InvoiceStatus,
        sent_at: datetime | None = None,
        paid_at: datetime | None = None,
    ) -> None: ...

    @abstractmethod
    def delete(self, uuid: str) -> None: ...


class StoredContent:
    """Raw content row: the store only knows ``doc_type`` and an opaque payload."""

    __slots__ = ("uuid", "doc_type", "payload", "updated_at")

    def __init__(self, uuid: str, doc_type: str, payload: dict, updated_at: datetime | None = None) -> None:
        self.uuid = uuid
        self.doc_type = doc_type
        self.payload = payload
        self.updated_at = updated_at


class ContentRepository(ABC):
    @abstractmethod
    def create(self, doc_type: str, payload: dict) -> StoredContent: ...

    @abstractmethod
    def get_by_uuid(self, doc_type: str, uuid: str) -> StoredContent | None: ...

    @abstractmethod
    def list_by_type(self, doc_type: str) -> list[StoredContent]: ...

    @abstractmethod
    def update(self, doc_type: str, uuid: str, payload: dict) -> StoredContent | None: ...

    @abstractmethod
    def delete(self, doc_type: str, uuid: str) -> None: ...
