from daflash.numbering import NumberAllocator
from daflash.repositories.base import (
    CatalogRepository,
    ClientRepository,
    ContentRepository,
    InvoiceRepository,
    NumberCounterRepository,
    QuoteRepository,
)


def get_client_repository() -> ClientRepository:
    from daflash.db import get_connection
    from daflash.repositories.sqlalchemy import SQLAlchemyClientRepository

    return SQLAlchemyClientRepository(get_connection())


def get_catalog_repository() -> CatalogRepository:
    from daflash.db import get_connection
    from daflash.repositories.sqlalchemy import SQLAlchemyCatalogRepository

    return SQLAlchemyCatalogRepository(get_connection())


def get_quote_repository() -> QuoteRepository:
    from daflash.db import get_connection
    from daflash.repositories.sqlalchemy import SQLAlchemyQuoteRepository

    return SQLAlchemyQuoteRepository(get_connection())


def get_invoice_repository() -> InvoiceRepository:
    from daflash.db import get_connection
    from daflash.repositories.sqlalchemy import SQLAlchemyInvoiceRepository

    return SQLAlchemyInvoiceRepository(get_connection())


def get_content_repository() -> ContentRepository:
    from daflash.db import get_connection
    from daflash.repositories.sqlalchemy import SQLAlchemyContentRepository

    return SQLAlchemyContentRepository(get_connection())


def get_number_counter_repository() -> NumberCounterRepository:
    from daflash.db import get_connection
    from daflash.repositories.sqlalchemy import SQLAlchemyNumberCounterRepository

    return SQLAlchemyNumberCounterRepository(get_connection())


def get_number_allocator(source) -> NumberAllocator:
    from daflash.settings import settings

    counters = get_number_counter_repository() if settings.numbering_mode == "counter" else None
    return NumberAllocator(source, counters, settings.numbering_mode)
