import pytest
from sqlalchemy import Connection

from daflash.repositories.sqlalchemy import (
    SQLAlchemyCatalogRepository,
    SQLAlchemyClientRepository,
    SQLAlchemyContentRepository,
    SQLAlchemyInvoiceRepository,
    SQLAlchemyNumberCounterRepository,
    SQLAlchemyQuoteRepository,
)


@pytest.fixture()
def client_repo(db_connection: Connection) -> SQLAlchemyClientRepository:
    return SQLAlchemyClientRepository(db_connection)


@pytest.fixture()
def catalog_repo(db_connection: Connection) -> SQLAlchemyCatalogRepository:
    return SQLAlchemyCatalogRepository(db_connection)


@pytest.fixture()
def quote_repo(db_connection: Connection) -> SQLAlchemyQuoteRepository:
    return SQLAlchemyQuoteRepository(db_connection)


@pytest.fixture()
def invoice_repo(db_connection: Connection) -> SQLAlchemyInvoiceRepository:
    return SQLAlchemyInvoiceRepository(db_connection)


@pytest.fixture()
def content_repo(db_connection: Connection) -> SQLAlchemyContentRepository:
    return SQLAlchemyContentRepository(db_connection)


@pytest.fixture()
def counter_repo(db_connection: Connection) -> SQLAlchemyNumberCounterRepository:
    return SQLAlchemyNumberCounterRepository(db_connection)
